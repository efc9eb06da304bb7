"""Handler for DistributionConfiguration custom resources."""

from __future__ import annotations

import os
from typing import Any

import kopf

from ..builders.configs import distribution_configuration_config_from_spec
from ..constants import API_GROUP_VERSION, KIND_DISTRIBUTION_CONFIGURATION
from .base import ResourceHandler

_handler = ResourceHandler(KIND_DISTRIBUTION_CONFIGURATION, distribution_configuration_config_from_spec)


@kopf.on.create(API_GROUP_VERSION, KIND_DISTRIBUTION_CONFIGURATION)
@kopf.on.update(API_GROUP_VERSION, KIND_DISTRIBUTION_CONFIGURATION)
@kopf.on.resume(API_GROUP_VERSION, KIND_DISTRIBUTION_CONFIGURATION)
@kopf.timer(API_GROUP_VERSION, KIND_DISTRIBUTION_CONFIGURATION, interval=int(os.getenv("DRIFT_CHECK_INTERVAL_SECONDS", "300")))
def handle_distribution_configuration(
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    body: Any,
    memo: Any,
    **kwargs: Any,
) -> None:
    """Handle DistributionConfiguration reconciliation and drift checks."""
    _handler.reconcile(spec, meta, status, patch, body, memo)


@kopf.on.delete(API_GROUP_VERSION, KIND_DISTRIBUTION_CONFIGURATION)
def handle_distribution_configuration_delete(
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    body: Any,
    memo: Any,
    **kwargs: Any,
) -> None:
    """Handle DistributionConfiguration deletion."""
    _handler.delete(spec, meta, status, body, memo)
