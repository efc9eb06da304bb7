"""Builders turning custom resource specs into typed configurations."""

from __future__ import annotations

import json
from typing import Any

from ..exceptions import ConfigurationError
from ..models import (
    AccessControlPolicy,
    AmiDistributionConfiguration,
    BucketAclConfig,
    ContainerDistributionConfiguration,
    Distribution,
    DistributionConfigurationConfig,
    Grant,
    Grantee,
    IdentityPolicyConfig,
    LaunchPermission,
    LaunchTemplateConfiguration,
    Owner,
    TargetRepository,
)


def bucket_acl_config_from_spec(spec: dict[str, Any]) -> BucketAclConfig:
    """Create a bucket ACL configuration from a BucketAcl spec.

    Args:
        spec: BucketAcl spec

    Returns:
        Typed bucket ACL configuration
    """
    policy_spec = spec.get("accessControlPolicy")
    access_control_policy = None
    if policy_spec:
        owner = policy_spec.get("owner", {})
        grants = tuple(
            Grant(
                grantee=Grantee(
                    type=grant.get("grantee", {}).get("type", ""),
                    id=grant.get("grantee", {}).get("id", ""),
                    uri=grant.get("grantee", {}).get("uri", ""),
                    email_address=grant.get("grantee", {}).get("emailAddress", ""),
                ),
                permission=grant.get("permission", ""),
            )
            for grant in policy_spec.get("grants", [])
        )
        access_control_policy = AccessControlPolicy(
            owner=Owner(id=owner.get("id", ""), display_name=owner.get("displayName", "")),
            grants=grants,
        )

    return BucketAclConfig(
        bucket=spec.get("bucket", ""),
        expected_bucket_owner=spec.get("expectedBucketOwner", ""),
        acl=spec.get("acl", ""),
        access_control_policy=access_control_policy,
    )


def identity_policy_config_from_spec(spec: dict[str, Any]) -> IdentityPolicyConfig:
    """Create an identity policy configuration from an IdentityPolicy spec.

    The policy may be given either as a JSON string or as an object.
    """
    policy = spec.get("policy", "")
    if isinstance(policy, dict):
        policy = json.dumps(policy)
    elif not isinstance(policy, str):
        raise ConfigurationError("policy must be a JSON string or an object")

    return IdentityPolicyConfig(
        identity=spec.get("identity", ""),
        name=spec.get("name", ""),
        policy=policy,
    )


def _launch_permission(spec: dict[str, Any] | None) -> LaunchPermission | None:
    if not spec:
        return None
    return LaunchPermission(
        user_ids=tuple(spec.get("userIds", [])),
        user_groups=tuple(spec.get("userGroups", [])),
        organization_arns=tuple(spec.get("organizationArns", [])),
        organizational_unit_arns=tuple(spec.get("organizationalUnitArns", [])),
    )


def _distribution(spec: dict[str, Any]) -> Distribution:
    ami_spec = spec.get("amiDistributionConfiguration")
    container_spec = spec.get("containerDistributionConfiguration")

    ami = None
    if ami_spec is not None:
        ami = AmiDistributionConfiguration(
            name=ami_spec.get("name", ""),
            description=ami_spec.get("description", ""),
            kms_key_id=ami_spec.get("kmsKeyId", ""),
            ami_tags=dict(ami_spec.get("amiTags", {})),
            target_account_ids=tuple(ami_spec.get("targetAccountIds", [])),
            launch_permission=_launch_permission(ami_spec.get("launchPermission")),
        )

    container = None
    if container_spec is not None:
        repository = container_spec.get("targetRepository", {})
        container = ContainerDistributionConfiguration(
            target_repository=TargetRepository(
                repository_name=repository.get("repositoryName", ""),
                service=repository.get("service", "ECR"),
            ),
            description=container_spec.get("description", ""),
            container_tags=tuple(container_spec.get("containerTags", [])),
        )

    return Distribution(
        region=spec.get("region", ""),
        ami_distribution_configuration=ami,
        container_distribution_configuration=container,
        license_configuration_arns=tuple(spec.get("licenseConfigurationArns", [])),
        launch_template_configurations=tuple(
            LaunchTemplateConfiguration(
                launch_template_id=template.get("launchTemplateId", ""),
                account_id=template.get("accountId", ""),
                default=template.get("default", True),
            )
            for template in spec.get("launchTemplateConfigurations", [])
        ),
    )


def distribution_configuration_config_from_spec(spec: dict[str, Any]) -> DistributionConfigurationConfig:
    """Create a distribution configuration from a DistributionConfiguration spec."""
    return DistributionConfigurationConfig(
        name=spec.get("name", ""),
        description=spec.get("description", ""),
        distributions=tuple(_distribution(item) for item in spec.get("distributions", [])),
        tags=dict(spec.get("tags", {})),
    )
