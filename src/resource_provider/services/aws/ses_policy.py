"""SES identity policy remote client."""

from __future__ import annotations

import logging
from typing import Sequence

from ...constants import IDENTITY_POLICY_SEPARATOR, KIND_IDENTITY_POLICY
from ...exceptions import RemoteNotFound
from ...models import FetchResult, IdentityPolicyConfig
from .client import AWSServiceClient

logger = logging.getLogger(__name__)


def _identifier(identity: str, name: str) -> str:
    return f"{identity}{IDENTITY_POLICY_SEPARATOR}{name}"


class IdentityPolicyClient(AWSServiceClient):
    """Manages sending authorization policies on SES identities.

    Key parts are ``(identity, policy_name)``.
    """

    service = "ses"
    kind = KIND_IDENTITY_POLICY

    def create(self, config: IdentityPolicyConfig) -> tuple[str, ...]:
        parts = (config.identity, config.name)
        self.update(parts, config)
        return parts

    def update(self, parts: Sequence[str], config: IdentityPolicyConfig) -> None:
        identity, name = parts[0], parts[1]
        self._call(
            "put_identity_policy",
            identifier=_identifier(identity, name),
            Identity=identity,
            PolicyName=name,
            Policy=config.policy,
        )
        logger.info(f"Put policy {name} on SES identity {identity}")

    def fetch(self, parts: Sequence[str]) -> FetchResult[IdentityPolicyConfig]:
        identity, name = parts[0], parts[1]
        try:
            response = self._call(
                "get_identity_policies",
                identifier=_identifier(identity, name),
                Identity=identity,
                PolicyNames=[name],
            )
        except RemoteNotFound:
            return FetchResult.missing()

        policy = response.get("Policies", {}).get(name)
        if policy is None:
            return FetchResult.missing()

        return FetchResult(
            state=IdentityPolicyConfig(identity=identity, name=name, policy=policy),
            found=True,
        )

    def delete(self, parts: Sequence[str]) -> bool:
        identity, name = parts[0], parts[1]
        try:
            self._call(
                "delete_identity_policy",
                identifier=_identifier(identity, name),
                Identity=identity,
                PolicyName=name,
            )
        except RemoteNotFound:
            return False
        logger.info(f"Deleted policy {name} from SES identity {identity}")
        return True
