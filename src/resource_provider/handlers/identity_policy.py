"""Handler for IdentityPolicy custom resources."""

from __future__ import annotations

import os
from typing import Any

import kopf

from ..builders.configs import identity_policy_config_from_spec
from ..constants import API_GROUP_VERSION, KIND_IDENTITY_POLICY
from .base import ResourceHandler

_handler = ResourceHandler(KIND_IDENTITY_POLICY, identity_policy_config_from_spec)


@kopf.on.create(API_GROUP_VERSION, KIND_IDENTITY_POLICY)
@kopf.on.update(API_GROUP_VERSION, KIND_IDENTITY_POLICY)
@kopf.on.resume(API_GROUP_VERSION, KIND_IDENTITY_POLICY)
@kopf.timer(API_GROUP_VERSION, KIND_IDENTITY_POLICY, interval=int(os.getenv("DRIFT_CHECK_INTERVAL_SECONDS", "300")))
def handle_identity_policy(
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    body: Any,
    memo: Any,
    **kwargs: Any,
) -> None:
    """Handle IdentityPolicy reconciliation and drift checks."""
    _handler.reconcile(spec, meta, status, patch, body, memo)


@kopf.on.delete(API_GROUP_VERSION, KIND_IDENTITY_POLICY)
def handle_identity_policy_delete(
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    body: Any,
    memo: Any,
    **kwargs: Any,
) -> None:
    """Handle IdentityPolicy deletion."""
    _handler.delete(spec, meta, status, body, memo)
