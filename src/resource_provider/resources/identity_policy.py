"""SES identity policy resource kind."""

from __future__ import annotations

import json
import re
from dataclasses import replace

from ..constants import IDENTITY_POLICY_SEPARATOR, KIND_IDENTITY_POLICY
from ..equivalence import policies_equivalent
from ..exceptions import ConfigurationError
from ..models import IdentityPolicyConfig
from .base import ResourceKind

POLICY_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{1,64}$")


class IdentityPolicy(ResourceKind[IdentityPolicyConfig]):
    """Identity policy identified as ``IDENTITY|POLICY_NAME``."""

    name = KIND_IDENTITY_POLICY
    separator = IDENTITY_POLICY_SEPARATOR
    accepted_arities = frozenset({2})

    def validate(self, config: IdentityPolicyConfig) -> None:
        if not config.identity:
            raise ConfigurationError("identity is required")
        if self.separator in config.identity:
            raise ConfigurationError(f"identity must not contain {self.separator!r}")
        if not POLICY_NAME_PATTERN.match(config.name):
            raise ConfigurationError(
                f"policy name {config.name!r} must be 1-64 alphanumeric, dash or underscore characters"
            )
        try:
            json.loads(config.policy)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"policy is not valid JSON: {e}") from e

    def key_parts(self, config: IdentityPolicyConfig) -> tuple[str, ...]:
        return (config.identity, config.name)

    def normalize(self, state: IdentityPolicyConfig) -> IdentityPolicyConfig:
        try:
            policy = json.dumps(json.loads(state.policy), sort_keys=True)
        except (TypeError, ValueError):
            return state
        return replace(state, policy=policy)

    def equivalent(self, remote: IdentityPolicyConfig, desired: IdentityPolicyConfig) -> bool:
        return policies_equivalent(remote.policy, desired.policy)
