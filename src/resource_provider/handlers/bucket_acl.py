"""Handler for BucketAcl custom resources."""

from __future__ import annotations

import os
from typing import Any

import kopf

from ..builders.configs import bucket_acl_config_from_spec
from ..constants import API_GROUP_VERSION, KIND_BUCKET_ACL
from .base import ResourceHandler

_handler = ResourceHandler(KIND_BUCKET_ACL, bucket_acl_config_from_spec)


@kopf.on.create(API_GROUP_VERSION, KIND_BUCKET_ACL)
@kopf.on.update(API_GROUP_VERSION, KIND_BUCKET_ACL)
@kopf.on.resume(API_GROUP_VERSION, KIND_BUCKET_ACL)
@kopf.timer(API_GROUP_VERSION, KIND_BUCKET_ACL, interval=int(os.getenv("DRIFT_CHECK_INTERVAL_SECONDS", "300")))
def handle_bucket_acl(
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    body: Any,
    memo: Any,
    **kwargs: Any,
) -> None:
    """Handle BucketAcl reconciliation and drift checks."""
    _handler.reconcile(spec, meta, status, patch, body, memo)


@kopf.on.delete(API_GROUP_VERSION, KIND_BUCKET_ACL)
def handle_bucket_acl_delete(
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    body: Any,
    memo: Any,
    **kwargs: Any,
) -> None:
    """Handle BucketAcl deletion."""
    _handler.delete(spec, meta, status, body, memo)
