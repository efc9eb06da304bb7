"""S3 bucket ACL resource kind."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Sequence

from ..constants import BUCKET_ACL_SEPARATOR, BUCKET_CANNED_ACLS, KIND_BUCKET_ACL
from ..exceptions import ConfigurationError, InvalidIdentifierPartError
from ..identifiers import encode
from ..models import (
    GRANTEE_CANONICAL_USER,
    GRANTEE_EMAIL,
    GRANTEE_GROUP,
    AccessControlPolicy,
    BucketAclConfig,
    Grant,
)
from .base import ResourceKind

# Legacy bucket names may contain upper case letters and underscores
BUCKET_NAME_PATTERN = re.compile(r"^[0-9A-Za-z._-]+$")
ACCOUNT_ID_PATTERN = re.compile(r"^\d{12}$")

GRANT_PERMISSIONS = frozenset({"FULL_CONTROL", "WRITE", "WRITE_ACP", "READ", "READ_ACP"})
GRANTEE_TYPES = frozenset({GRANTEE_CANONICAL_USER, GRANTEE_EMAIL, GRANTEE_GROUP})


def is_account_id(value: str) -> bool:
    return bool(ACCOUNT_ID_PATTERN.match(value))


def _grant_key(grant: Grant) -> tuple[str, ...]:
    grantee = grant.grantee
    return (grant.permission, grantee.type, grantee.id, grantee.uri, grantee.email_address)


class BucketAcl(ResourceKind[BucketAclConfig]):
    """Bucket ACL identified as ``BUCKET[,EXPECTED_BUCKET_OWNER][,ACL]``.

    Identifiers written before the owner qualifier existed carry only the
    bucket and optionally the ACL, so one, two and three parts are all
    accepted. A two-part identifier is disambiguated by whether its second
    part is an account ID or a canned ACL.
    """

    name = KIND_BUCKET_ACL
    separator = BUCKET_ACL_SEPARATOR
    accepted_arities = frozenset({1, 2, 3})

    def validate(self, config: BucketAclConfig) -> None:
        if not BUCKET_NAME_PATTERN.match(config.bucket):
            raise ConfigurationError(f"invalid bucket name: {config.bucket!r}")
        if config.expected_bucket_owner and not is_account_id(config.expected_bucket_owner):
            raise ConfigurationError(
                f"expected_bucket_owner must be a 12-digit account ID, got {config.expected_bucket_owner!r}"
            )
        if bool(config.acl) == (config.access_control_policy is not None):
            raise ConfigurationError("exactly one of acl or access_control_policy must be set")
        if config.acl and config.acl not in BUCKET_CANNED_ACLS:
            raise ConfigurationError(f"unsupported canned ACL: {config.acl!r}")
        if config.access_control_policy is not None:
            for grant in config.access_control_policy.grants:
                if grant.permission not in GRANT_PERMISSIONS:
                    raise ConfigurationError(f"unsupported grant permission: {grant.permission!r}")
                if grant.grantee.type not in GRANTEE_TYPES:
                    raise ConfigurationError(f"unsupported grantee type: {grant.grantee.type!r}")

    def key_parts(self, config: BucketAclConfig) -> tuple[str, ...]:
        return (config.bucket, config.expected_bucket_owner, config.acl)

    def format_identifier(self, parts: Sequence[str]) -> str:
        bucket, expected_bucket_owner, acl = parts[0], parts[1], parts[2]
        return encode([part for part in (bucket, expected_bucket_owner, acl) if part], self.separator)

    def parse_identifier(self, identifier: object) -> tuple[str, ...]:
        bucket, second, third = super().parse_identifier(identifier)

        if not BUCKET_NAME_PATTERN.match(bucket):
            raise InvalidIdentifierPartError(identifier, f"unexpected format for ID ({identifier!r}): invalid bucket name")

        if not third and second and not is_account_id(second):
            # BUCKET,ACL
            if second not in BUCKET_CANNED_ACLS:
                raise InvalidIdentifierPartError(
                    identifier,
                    f"unexpected format for ID ({identifier!r}), expected BUCKET or BUCKET,EXPECTED_BUCKET_OWNER "
                    "or BUCKET,ACL or BUCKET,EXPECTED_BUCKET_OWNER,ACL",
                )
            return (bucket, "", second)

        if second and not is_account_id(second):
            raise InvalidIdentifierPartError(
                identifier, f"unexpected format for ID ({identifier!r}): {second!r} is not an account ID"
            )
        if third and third not in BUCKET_CANNED_ACLS:
            raise InvalidIdentifierPartError(
                identifier, f"unexpected format for ID ({identifier!r}): {third!r} is not a canned ACL"
            )
        return (bucket, second, third)

    def normalize(self, state: BucketAclConfig) -> BucketAclConfig:
        policy = state.access_control_policy
        if policy is None:
            return state
        return replace(
            state,
            access_control_policy=AccessControlPolicy(
                owner=policy.owner,
                grants=tuple(sorted(set(policy.grants), key=_grant_key)),
            ),
        )

    def equivalent(self, remote: BucketAclConfig, desired: BucketAclConfig) -> bool:
        if desired.acl:
            # A canned ACL is not readable back; it is carried by the identifier.
            return remote.acl == desired.acl
        if remote.access_control_policy is None or desired.access_control_policy is None:
            return False
        if remote.access_control_policy.owner.id != desired.access_control_policy.owner.id:
            return False
        remote_grants = {_grant_key(grant) for grant in remote.access_control_policy.grants}
        desired_grants = {_grant_key(grant) for grant in desired.access_control_policy.grants}
        return remote_grants == desired_grants
