"""S3 bucket ACL remote client."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from ...constants import KIND_BUCKET_ACL
from ...exceptions import RemoteNotFound
from ...models import (
    GRANTEE_CANONICAL_USER,
    GRANTEE_EMAIL,
    GRANTEE_GROUP,
    AccessControlPolicy,
    BucketAclConfig,
    FetchResult,
    Grant,
    Grantee,
    Owner,
)
from .client import AWSServiceClient

logger = logging.getLogger(__name__)


def _grantee_to_aws(grantee: Grantee) -> dict[str, Any]:
    aws_grantee: dict[str, Any] = {"Type": grantee.type}
    if grantee.type == GRANTEE_CANONICAL_USER:
        aws_grantee["ID"] = grantee.id
    elif grantee.type == GRANTEE_EMAIL:
        aws_grantee["EmailAddress"] = grantee.email_address
    elif grantee.type == GRANTEE_GROUP:
        aws_grantee["URI"] = grantee.uri
    return aws_grantee


def _policy_to_aws(policy: AccessControlPolicy) -> dict[str, Any]:
    owner: dict[str, Any] = {"ID": policy.owner.id}
    if policy.owner.display_name:
        owner["DisplayName"] = policy.owner.display_name
    return {
        "Owner": owner,
        "Grants": [
            {"Grantee": _grantee_to_aws(grant.grantee), "Permission": grant.permission}
            for grant in policy.grants
        ],
    }


def _policy_from_aws(response: dict[str, Any]) -> AccessControlPolicy:
    owner = response.get("Owner", {})
    grants = []
    for grant in response.get("Grants", []):
        grantee = grant.get("Grantee", {})
        grants.append(
            Grant(
                grantee=Grantee(
                    type=grantee.get("Type", ""),
                    id=grantee.get("ID", ""),
                    uri=grantee.get("URI", ""),
                    email_address=grantee.get("EmailAddress", ""),
                    display_name=grantee.get("DisplayName", ""),
                ),
                permission=grant.get("Permission", ""),
            )
        )
    return AccessControlPolicy(
        owner=Owner(id=owner.get("ID", ""), display_name=owner.get("DisplayName", "")),
        grants=tuple(grants),
    )


class BucketAclClient(AWSServiceClient):
    """Applies and reads bucket ACLs.

    Key parts are ``(bucket, expected_bucket_owner, acl)``.
    """

    service = "s3"
    kind = KIND_BUCKET_ACL

    def create(self, config: BucketAclConfig) -> tuple[str, ...]:
        parts = (config.bucket, config.expected_bucket_owner, config.acl)
        self._put(parts, config)
        return parts

    def update(self, parts: Sequence[str], config: BucketAclConfig) -> None:
        self._put(parts, config)

    def _put(self, parts: Sequence[str], config: BucketAclConfig) -> None:
        bucket, expected_bucket_owner = parts[0], parts[1]
        params: dict[str, Any] = {"Bucket": bucket}
        if expected_bucket_owner:
            params["ExpectedBucketOwner"] = expected_bucket_owner
        if config.acl:
            params["ACL"] = config.acl
        elif config.access_control_policy is not None:
            params["AccessControlPolicy"] = _policy_to_aws(config.access_control_policy)

        self._call("put_bucket_acl", identifier=bucket, **params)
        logger.info(f"Applied ACL to bucket {bucket}")

    def fetch(self, parts: Sequence[str]) -> FetchResult[BucketAclConfig]:
        bucket, expected_bucket_owner, acl = parts[0], parts[1], parts[2]
        params: dict[str, Any] = {"Bucket": bucket}
        if expected_bucket_owner:
            params["ExpectedBucketOwner"] = expected_bucket_owner

        try:
            response = self._call("get_bucket_acl", identifier=bucket, **params)
        except RemoteNotFound:
            return FetchResult.missing()

        return FetchResult(
            state=BucketAclConfig(
                bucket=bucket,
                expected_bucket_owner=expected_bucket_owner,
                acl=acl,
                access_control_policy=_policy_from_aws(response),
            ),
            found=True,
        )

    def delete(self, parts: Sequence[str]) -> bool:
        # A bucket ACL cannot be removed, only replaced; deleting only stops tracking it.
        logger.info(f"Bucket ACL for {parts[0]} cannot be deleted remotely, dropping it from tracked state")
        return True
