"""Image Builder distribution configuration resource kind."""

from __future__ import annotations

from dataclasses import replace

from ..constants import (
    AWS_RESERVED_TAG_PREFIX,
    DISTRIBUTION_CONFIGURATION_SEPARATOR,
    KIND_DISTRIBUTION_CONFIGURATION,
)
from ..exceptions import ConfigurationError, InvalidIdentifierPartError
from ..models import (
    AmiDistributionConfiguration,
    ContainerDistributionConfiguration,
    Distribution,
    DistributionConfigurationConfig,
    LaunchPermission,
)
from ..utils.tags import is_aws_tag, without_aws_tags
from .base import ResourceKind


def _normalize_ami(ami: AmiDistributionConfiguration) -> AmiDistributionConfiguration:
    permission = ami.launch_permission
    if permission is not None:
        permission = LaunchPermission(
            user_ids=tuple(sorted(set(permission.user_ids))),
            user_groups=tuple(sorted(set(permission.user_groups))),
            organization_arns=tuple(sorted(set(permission.organization_arns))),
            organizational_unit_arns=tuple(sorted(set(permission.organizational_unit_arns))),
        )
        if permission == LaunchPermission():
            permission = None
    return replace(
        ami,
        target_account_ids=tuple(sorted(set(ami.target_account_ids))),
        launch_permission=permission,
    )


def _normalize_container(container: ContainerDistributionConfiguration) -> ContainerDistributionConfiguration:
    return replace(container, container_tags=tuple(sorted(set(container.container_tags))))


def _normalize_distribution(distribution: Distribution) -> Distribution:
    ami = distribution.ami_distribution_configuration
    container = distribution.container_distribution_configuration
    return replace(
        distribution,
        ami_distribution_configuration=_normalize_ami(ami) if ami is not None else None,
        container_distribution_configuration=_normalize_container(container) if container is not None else None,
        license_configuration_arns=tuple(sorted(set(distribution.license_configuration_arns))),
        launch_template_configurations=tuple(
            sorted(
                set(distribution.launch_template_configurations),
                key=lambda template: (template.launch_template_id, template.account_id),
            )
        ),
    )


class DistributionConfiguration(ResourceKind[DistributionConfigurationConfig]):
    """Distribution configuration identified by its ARN.

    The ARN is assigned on creation, so replacement is detected from the
    remote name instead of from the identifier.
    An empty desired description leaves the remote description unmanaged,
    since the API cannot clear it.
    """

    name = KIND_DISTRIBUTION_CONFIGURATION
    separator = DISTRIBUTION_CONFIGURATION_SEPARATOR
    accepted_arities = frozenset({1})

    def validate(self, config: DistributionConfigurationConfig) -> None:
        if not config.name:
            raise ConfigurationError("name is required")
        if not config.distributions:
            raise ConfigurationError("at least one distribution is required")
        regions = [distribution.region for distribution in config.distributions]
        if any(not region for region in regions):
            raise ConfigurationError("every distribution requires a region")
        if len(set(regions)) != len(regions):
            raise ConfigurationError("distribution regions must be unique")
        if any(is_aws_tag(key) for key in config.tags):
            raise ConfigurationError(f"tag keys must not start with {AWS_RESERVED_TAG_PREFIX!r}")

    def key_parts(self, config: DistributionConfigurationConfig) -> None:
        return None

    def parse_identifier(self, identifier: object) -> tuple[str, ...]:
        parts = super().parse_identifier(identifier)
        if not parts[0].startswith("arn:"):
            raise InvalidIdentifierPartError(identifier, f"unexpected format for ID ({identifier!r}): expected an ARN")
        return parts

    def requires_replacement(
        self, remote: DistributionConfigurationConfig, desired: DistributionConfigurationConfig
    ) -> bool:
        return remote.name != desired.name

    def normalize(self, state: DistributionConfigurationConfig) -> DistributionConfigurationConfig:
        return replace(
            state,
            tags=without_aws_tags(state.tags),
            distributions=tuple(
                sorted(
                    (_normalize_distribution(distribution) for distribution in state.distributions),
                    key=lambda distribution: distribution.region,
                )
            ),
        )

    def equivalent(
        self, remote: DistributionConfigurationConfig, desired: DistributionConfigurationConfig
    ) -> bool:
        desired = self.normalize(desired)
        return (
            (not desired.description or remote.description == desired.description)
            and remote.distributions == desired.distributions
            and remote.tags == desired.tags
        )
