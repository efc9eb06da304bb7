"""Image Builder distribution configuration remote client."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Sequence

from ...constants import KIND_DISTRIBUTION_CONFIGURATION
from ...exceptions import RemoteNotFound
from ...models import (
    AmiDistributionConfiguration,
    ContainerDistributionConfiguration,
    Distribution,
    DistributionConfigurationConfig,
    FetchResult,
    LaunchPermission,
    LaunchTemplateConfiguration,
    TargetRepository,
)
from ...utils.tags import without_aws_tags
from .client import AWSServiceClient

logger = logging.getLogger(__name__)


def _launch_permission_to_aws(permission: LaunchPermission) -> dict[str, Any]:
    aws_permission: dict[str, Any] = {}
    if permission.user_ids:
        aws_permission["userIds"] = list(permission.user_ids)
    if permission.user_groups:
        aws_permission["userGroups"] = list(permission.user_groups)
    if permission.organization_arns:
        aws_permission["organizationArns"] = list(permission.organization_arns)
    if permission.organizational_unit_arns:
        aws_permission["organizationalUnitArns"] = list(permission.organizational_unit_arns)
    return aws_permission


def _ami_to_aws(ami: AmiDistributionConfiguration) -> dict[str, Any]:
    aws_ami: dict[str, Any] = {}
    if ami.name:
        aws_ami["name"] = ami.name
    if ami.description:
        aws_ami["description"] = ami.description
    if ami.kms_key_id:
        aws_ami["kmsKeyId"] = ami.kms_key_id
    if ami.ami_tags:
        aws_ami["amiTags"] = dict(ami.ami_tags)
    if ami.target_account_ids:
        aws_ami["targetAccountIds"] = list(ami.target_account_ids)
    if ami.launch_permission is not None:
        aws_ami["launchPermission"] = _launch_permission_to_aws(ami.launch_permission)
    return aws_ami


def _container_to_aws(container: ContainerDistributionConfiguration) -> dict[str, Any]:
    aws_container: dict[str, Any] = {
        "targetRepository": {
            "repositoryName": container.target_repository.repository_name,
            "service": container.target_repository.service,
        }
    }
    if container.description:
        aws_container["description"] = container.description
    if container.container_tags:
        aws_container["containerTags"] = list(container.container_tags)
    return aws_container


def distributions_to_aws(distributions: Sequence[Distribution]) -> list[dict[str, Any]]:
    """Marshal distributions into the Image Builder API shape."""
    aws_distributions = []
    for distribution in distributions:
        aws_distribution: dict[str, Any] = {"region": distribution.region}
        if distribution.ami_distribution_configuration is not None:
            aws_distribution["amiDistributionConfiguration"] = _ami_to_aws(
                distribution.ami_distribution_configuration
            )
        if distribution.container_distribution_configuration is not None:
            aws_distribution["containerDistributionConfiguration"] = _container_to_aws(
                distribution.container_distribution_configuration
            )
        if distribution.license_configuration_arns:
            aws_distribution["licenseConfigurationArns"] = list(distribution.license_configuration_arns)
        if distribution.launch_template_configurations:
            aws_distribution["launchTemplateConfigurations"] = [
                {
                    "launchTemplateId": template.launch_template_id,
                    **({"accountId": template.account_id} if template.account_id else {}),
                    "setDefaultVersion": template.default,
                }
                for template in distribution.launch_template_configurations
            ]
        aws_distributions.append(aws_distribution)
    return aws_distributions


def _launch_permission_from_aws(data: dict[str, Any]) -> LaunchPermission:
    return LaunchPermission(
        user_ids=tuple(data.get("userIds", [])),
        user_groups=tuple(data.get("userGroups", [])),
        organization_arns=tuple(data.get("organizationArns", [])),
        organizational_unit_arns=tuple(data.get("organizationalUnitArns", [])),
    )


def _ami_from_aws(data: dict[str, Any]) -> AmiDistributionConfiguration:
    launch_permission = data.get("launchPermission")
    return AmiDistributionConfiguration(
        name=data.get("name", ""),
        description=data.get("description", ""),
        kms_key_id=data.get("kmsKeyId", ""),
        ami_tags=dict(data.get("amiTags", {})),
        target_account_ids=tuple(data.get("targetAccountIds", [])),
        launch_permission=_launch_permission_from_aws(launch_permission) if launch_permission else None,
    )


def _container_from_aws(data: dict[str, Any]) -> ContainerDistributionConfiguration:
    repository = data.get("targetRepository", {})
    return ContainerDistributionConfiguration(
        target_repository=TargetRepository(
            repository_name=repository.get("repositoryName", ""),
            service=repository.get("service", "ECR"),
        ),
        description=data.get("description", ""),
        container_tags=tuple(data.get("containerTags", [])),
    )


def distributions_from_aws(data: Sequence[dict[str, Any]]) -> tuple[Distribution, ...]:
    """Unmarshal distributions from the Image Builder API shape."""
    distributions = []
    for item in data:
        ami = item.get("amiDistributionConfiguration")
        container = item.get("containerDistributionConfiguration")
        distributions.append(
            Distribution(
                region=item.get("region", ""),
                ami_distribution_configuration=_ami_from_aws(ami) if ami else None,
                container_distribution_configuration=_container_from_aws(container) if container else None,
                license_configuration_arns=tuple(item.get("licenseConfigurationArns", [])),
                launch_template_configurations=tuple(
                    LaunchTemplateConfiguration(
                        launch_template_id=template.get("launchTemplateId", ""),
                        account_id=template.get("accountId", ""),
                        default=template.get("setDefaultVersion", True),
                    )
                    for template in item.get("launchTemplateConfigurations", [])
                ),
            )
        )
    return tuple(distributions)


class DistributionConfigurationClient(AWSServiceClient):
    """Manages Image Builder distribution configurations.

    The single key part is the distribution configuration ARN.
    """

    service = "imagebuilder"
    kind = KIND_DISTRIBUTION_CONFIGURATION

    def create(self, config: DistributionConfigurationConfig) -> tuple[str, ...]:
        params: dict[str, Any] = {
            "name": config.name,
            "distributions": distributions_to_aws(config.distributions),
            "clientToken": str(uuid.uuid4()),
        }
        if config.description:
            params["description"] = config.description
        if config.tags:
            params["tags"] = dict(config.tags)

        response = self._call("create_distribution_configuration", identifier=config.name, **params)
        arn = response["distributionConfigurationArn"]
        logger.info(f"Created distribution configuration {arn}")
        return (arn,)

    def update(self, parts: Sequence[str], config: DistributionConfigurationConfig) -> None:
        arn = parts[0]
        params: dict[str, Any] = {
            "distributionConfigurationArn": arn,
            "distributions": distributions_to_aws(config.distributions),
            "clientToken": str(uuid.uuid4()),
        }
        # The API rejects an empty description, so clearing it is not supported
        if config.description:
            params["description"] = config.description

        self._call("update_distribution_configuration", identifier=arn, **params)
        self._sync_tags(arn, config.tags)
        logger.info(f"Updated distribution configuration {arn}")

    def _sync_tags(self, arn: str, tags: dict[str, str]) -> None:
        response = self._call("list_tags_for_resource", identifier=arn, resourceArn=arn)
        current = without_aws_tags(response.get("tags", {}))
        removed = sorted(set(current) - set(tags))
        if removed:
            self._call("untag_resource", identifier=arn, resourceArn=arn, tagKeys=removed)
        if tags and tags != current:
            self._call("tag_resource", identifier=arn, resourceArn=arn, tags=dict(tags))

    def fetch(self, parts: Sequence[str]) -> FetchResult[DistributionConfigurationConfig]:
        arn = parts[0]
        try:
            response = self._call(
                "get_distribution_configuration",
                identifier=arn,
                distributionConfigurationArn=arn,
            )
        except RemoteNotFound:
            return FetchResult.missing()

        data = response.get("distributionConfiguration")
        if not data:
            return FetchResult.missing()

        return FetchResult(
            state=DistributionConfigurationConfig(
                name=data.get("name", ""),
                description=data.get("description", ""),
                distributions=distributions_from_aws(data.get("distributions", [])),
                tags=dict(data.get("tags", {})),
                arn=data.get("arn", arn),
                date_created=data.get("dateCreated", ""),
                date_updated=data.get("dateUpdated", ""),
            ),
            found=True,
        )

    def delete(self, parts: Sequence[str]) -> bool:
        arn = parts[0]
        try:
            self._call(
                "delete_distribution_configuration",
                identifier=arn,
                distributionConfigurationArn=arn,
            )
        except RemoteNotFound:
            return False
        logger.info(f"Deleted distribution configuration {arn}")
        return True
