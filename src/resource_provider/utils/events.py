"""Utilities for emitting Kubernetes events."""

from __future__ import annotations

from typing import Any

import kopf

from ..constants import (
    EVENT_REASON_INVALID_IDENTIFIER,
    EVENT_REASON_RECONCILE_FAILED,
    EVENT_REASON_RECONCILE_STARTED,
    EVENT_REASON_RESOURCE_APPLIED,
    EVENT_REASON_RESOURCE_DESTROYED,
    EVENT_REASON_RESOURCE_MISSING,
    EVENT_REASON_RESOURCE_OBSERVED,
)


def emit_event(
    body: Any,
    reason: str,
    message: str,
    type_: str = "Normal",
) -> None:
    """Emit a Kubernetes event.

    Args:
        body: Resource body the event refers to
        reason: Event reason
        message: Event message
        type_: Event type (Normal or Warning)
    """
    kopf.event(body, reason=reason, message=message, type=type_)


def emit_reconcile_started(body: Any) -> None:
    """Emit reconcile started event."""
    emit_event(body, EVENT_REASON_RECONCILE_STARTED, "Reconciliation started")


def emit_reconcile_failed(body: Any, message: str) -> None:
    """Emit reconcile failed event."""
    emit_event(body, EVENT_REASON_RECONCILE_FAILED, message, type_="Warning")


def emit_resource_applied(body: Any, identifier: str) -> None:
    """Emit resource applied event."""
    emit_event(body, EVENT_REASON_RESOURCE_APPLIED, f"Resource {identifier} applied")


def emit_resource_destroyed(body: Any, identifier: str) -> None:
    """Emit resource destroyed event."""
    emit_event(body, EVENT_REASON_RESOURCE_DESTROYED, f"Resource {identifier} destroyed")


def emit_invalid_identifier(body: Any, message: str) -> None:
    """Emit invalid identifier event."""
    emit_event(body, EVENT_REASON_INVALID_IDENTIFIER, message, type_="Warning")


def emit_resource_observed(body: Any, identifier: str) -> None:
    """Emit resource observed event."""
    emit_event(body, EVENT_REASON_RESOURCE_OBSERVED, f"Resource {identifier} observed")


def emit_resource_missing(body: Any, identifier: str) -> None:
    """Emit resource missing warning for an observed resource."""
    emit_event(body, EVENT_REASON_RESOURCE_MISSING, f"Resource {identifier} does not exist", type_="Warning")
