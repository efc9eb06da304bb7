"""Builders for typed configurations and reconcilers."""

from .configs import (
    bucket_acl_config_from_spec,
    distribution_configuration_config_from_spec,
    identity_policy_config_from_spec,
)
from .reconciler import create_reconciler, create_reconcilers

__all__ = [
    "bucket_acl_config_from_spec",
    "distribution_configuration_config_from_spec",
    "identity_policy_config_from_spec",
    "create_reconciler",
    "create_reconcilers",
]
