"""Typed configuration models for each resource kind.

The same model describes both desired state and normalized remote state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

# S3 bucket ACL

GRANTEE_CANONICAL_USER = "CanonicalUser"
GRANTEE_EMAIL = "AmazonCustomerByEmail"
GRANTEE_GROUP = "Group"


@dataclass(frozen=True)
class Grantee:
    """Grantee of an ACL grant."""

    type: str
    id: str = ""
    uri: str = ""
    email_address: str = ""
    display_name: str = ""


@dataclass(frozen=True)
class Grant:
    """Single ACL grant."""

    grantee: Grantee
    permission: str


@dataclass(frozen=True)
class Owner:
    """Bucket owner."""

    id: str
    display_name: str = ""


@dataclass(frozen=True)
class AccessControlPolicy:
    """Explicit grant list with its owner."""

    owner: Owner
    grants: tuple[Grant, ...] = ()


@dataclass(frozen=True)
class BucketAclConfig:
    """Bucket ACL, either a canned ACL or an explicit access control policy."""

    bucket: str
    expected_bucket_owner: str = ""
    acl: str = ""
    access_control_policy: AccessControlPolicy | None = None


# SES identity policy


@dataclass(frozen=True)
class IdentityPolicyConfig:
    """Sending authorization policy attached to an SES identity."""

    identity: str
    name: str
    policy: str


# Image Builder distribution configuration


@dataclass(frozen=True)
class LaunchPermission:
    user_ids: tuple[str, ...] = ()
    user_groups: tuple[str, ...] = ()
    organization_arns: tuple[str, ...] = ()
    organizational_unit_arns: tuple[str, ...] = ()


@dataclass(frozen=True)
class AmiDistributionConfiguration:
    name: str = ""
    description: str = ""
    kms_key_id: str = ""
    ami_tags: dict[str, str] = field(default_factory=dict)
    target_account_ids: tuple[str, ...] = ()
    launch_permission: LaunchPermission | None = None


@dataclass(frozen=True)
class TargetRepository:
    repository_name: str
    service: str = "ECR"


@dataclass(frozen=True)
class ContainerDistributionConfiguration:
    target_repository: TargetRepository
    description: str = ""
    container_tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class LaunchTemplateConfiguration:
    launch_template_id: str
    account_id: str = ""
    default: bool = True


@dataclass(frozen=True)
class Distribution:
    """Per-region distribution settings."""

    region: str
    ami_distribution_configuration: AmiDistributionConfiguration | None = None
    container_distribution_configuration: ContainerDistributionConfiguration | None = None
    license_configuration_arns: tuple[str, ...] = ()
    launch_template_configurations: tuple[LaunchTemplateConfiguration, ...] = ()


@dataclass(frozen=True)
class DistributionConfigurationConfig:
    """Image Builder distribution configuration.

    ``arn``, ``date_created`` and ``date_updated`` are computed by the remote
    API and only populated on read.
    """

    name: str
    distributions: tuple[Distribution, ...]
    description: str = ""
    tags: dict[str, str] = field(default_factory=dict)
    arn: str = ""
    date_created: str = ""
    date_updated: str = ""


ConfigT = TypeVar("ConfigT")


@dataclass(frozen=True)
class FetchResult(Generic[ConfigT]):
    """Outcome of a remote fetch: the state when found, nothing otherwise."""

    state: ConfigT | None
    found: bool

    @classmethod
    def missing(cls) -> FetchResult[ConfigT]:
        return cls(state=None, found=False)
