"""Builder for reconcilers bound to a boto3-backed remote client."""

from __future__ import annotations

from typing import Any

from ..config import Settings
from ..constants import KIND_BUCKET_ACL, KIND_DISTRIBUTION_CONFIGURATION, KIND_IDENTITY_POLICY
from ..reconciler import Reconciler
from ..resources import BucketAcl, DistributionConfiguration, IdentityPolicy
from ..services.aws import BucketAclClient, DistributionConfigurationClient, IdentityPolicyClient
from ..services.aws.session import create_boto3_client
from ..utils.rate_limit import RateLimiter

_KINDS: dict[str, tuple[type, type]] = {
    KIND_BUCKET_ACL: (BucketAcl, BucketAclClient),
    KIND_IDENTITY_POLICY: (IdentityPolicy, IdentityPolicyClient),
    KIND_DISTRIBUTION_CONFIGURATION: (DistributionConfiguration, DistributionConfigurationClient),
}


def create_reconciler(
    kind: str,
    settings: Settings,
    rate_limiter: RateLimiter | None = None,
) -> Reconciler[Any]:
    """Create a reconciler for a resource kind.

    Args:
        kind: Resource kind (e.g., "BucketAcl")
        settings: Provider settings
        rate_limiter: Optional limiter shared across reconcilers

    Returns:
        Reconciler with its remote client injected

    Raises:
        ValueError: If the kind is not supported
    """
    if kind not in _KINDS:
        raise ValueError(f"Unsupported resource kind: {kind}")

    kind_cls, client_cls = _KINDS[kind]
    client = client_cls(create_boto3_client(client_cls.service, settings), rate_limiter=rate_limiter)
    return Reconciler(kind_cls(), client)


def create_reconcilers(settings: Settings, rate_limiter: RateLimiter | None = None) -> dict[str, Reconciler[Any]]:
    """Create one reconciler per supported kind, sharing the rate limiter."""
    return {kind: create_reconciler(kind, settings, rate_limiter=rate_limiter) for kind in _KINDS}
