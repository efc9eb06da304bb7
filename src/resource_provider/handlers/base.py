"""Base handler hosting the reconciler for custom resources."""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Callable

import kopf

from ..constants import STATUS_IDENTIFIER, STATUS_OBSERVED_IDENTIFIER
from ..exceptions import ConfigurationError, DecodeError, ProviderError
from ..logging import log_resource_event
from ..reconciler import Absent, Failed, Present, Reconciler
from ..utils.errors import sanitize_dict, sanitize_exception
from ..utils.events import (
    emit_invalid_identifier,
    emit_reconcile_failed,
    emit_reconcile_started,
    emit_resource_applied,
    emit_resource_destroyed,
    emit_resource_missing,
    emit_resource_observed,
)

# Delay before kopf retries a handler after a remote failure
RETRY_DELAY_SECONDS = 60


class ResourceHandler:
    """Drives the reconciler from kopf create/update/resume/timer/delete events.

    The remote identifier is kept in ``status.identifier``. A resource can be
    adopted by setting ``spec.importIdentifier`` before the first apply.
    Setting ``spec.observeIdentifier`` instead only looks the resource up:
    its state is mirrored into ``status.remoteState`` and it is never
    applied or destroyed.
    """

    def __init__(self, kind: str, config_builder: Callable[[dict[str, Any]], Any]):
        """Initialize handler.

        Args:
            kind: Resource kind (e.g., "BucketAcl")
            config_builder: Turns a resource spec into a typed configuration
        """
        self.kind = kind
        self.config_builder = config_builder
        self.logger = logging.getLogger(__name__)

    def log_info(self, meta: dict[str, Any], identifier: str | None, message: str, reason: str = "Info", **kwargs: Any) -> None:
        """Log an info-level structured log message."""
        log_resource_event(
            self.logger,
            resource_kind=self.kind,
            identifier=identifier,
            event="info",
            reason=reason,
            message=message,
            name=meta.get("name", "unknown"),
            namespace=meta.get("namespace", "default"),
            **kwargs,
        )

    def log_error(
        self,
        meta: dict[str, Any],
        identifier: str | None,
        message: str,
        error: Exception | None = None,
        reason: str = "Error",
        **kwargs: Any,
    ) -> None:
        """Log an error-level structured log message with a sanitized error."""
        log_data = sanitize_dict(kwargs)
        if error is not None:
            log_data["error"] = sanitize_exception(error)
            log_data["error_type"] = type(error).__name__

        log_resource_event(
            self.logger,
            resource_kind=self.kind,
            identifier=identifier,
            event="error",
            reason=reason,
            message=message,
            level=logging.ERROR,
            name=meta.get("name", "unknown"),
            namespace=meta.get("namespace", "default"),
            **log_data,
        )

    def reconciler(self, memo: Any) -> Reconciler[Any]:
        """Return the reconciler built for this kind at startup."""
        return memo.reconcilers[self.kind]

    def raise_for_failure(self, meta: dict[str, Any], body: Any, identifier: str | None, error: ProviderError) -> None:
        """Turn a failure into the kopf error that decides whether to retry.

        Raises:
            kopf.PermanentError: For invalid identifiers and configurations
            kopf.TemporaryError: For remote failures
        """
        message = sanitize_exception(error)
        self.log_error(meta, identifier, "Reconciliation failed", error=error, reason="ReconciliationFailed")
        if isinstance(error, DecodeError):
            emit_invalid_identifier(body, message)
            raise kopf.PermanentError(message) from error
        emit_reconcile_failed(body, f"Reconciliation failed: {message}")
        if isinstance(error, ConfigurationError):
            raise kopf.PermanentError(message) from error
        raise kopf.TemporaryError(message, delay=RETRY_DELAY_SECONDS) from error

    def reconcile(
        self,
        spec: dict[str, Any],
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
        body: Any,
        memo: Any,
    ) -> None:
        """Apply the desired state and record the outcome in status."""
        emit_reconcile_started(body)
        if spec.get("observeIdentifier"):
            self.observe(meta, patch, body, memo, spec["observeIdentifier"])
            return

        identifier = status.get(STATUS_IDENTIFIER)

        try:
            config = self.config_builder(spec)
        except ConfigurationError as e:
            self.raise_for_failure(meta, body, identifier, e)
            return

        reconciler = self.reconciler(memo)

        if identifier is None and spec.get("importIdentifier"):
            identifier = self.import_resource(meta, body, reconciler, spec["importIdentifier"])

        identifier, result = reconciler.apply(config, identifier)
        if isinstance(result, Failed):
            self.raise_for_failure(meta, body, identifier, result.error)
            return

        emit_resource_applied(body, identifier)
        self.log_info(meta, identifier, f"{self.kind} {identifier} is up to date", reason="Applied")
        self.update_resource_status(
            patch,
            meta,
            ready=True,
            status_data={
                STATUS_IDENTIFIER: identifier,
                "remoteState": asdict(result.state),
                "lastSyncTime": datetime.now(timezone.utc).isoformat(),
            },
        )

    def import_resource(self, meta: dict[str, Any], body: Any, reconciler: Reconciler[Any], identifier: str) -> str:
        """Adopt an existing remote resource by identifier.

        Raises:
            kopf.PermanentError: If the identifier is invalid or the resource does not exist
            kopf.TemporaryError: If the remote read fails
        """
        result = reconciler.read(identifier)
        if isinstance(result, Failed):
            self.raise_for_failure(meta, body, identifier, result.error)
        if isinstance(result, Absent):
            message = f"Cannot import {self.kind} {identifier}: resource does not exist"
            self.log_error(meta, identifier, message, reason="ImportFailed")
            raise kopf.PermanentError(message)
        self.log_info(meta, identifier, f"Imported {self.kind} {identifier}", reason="Imported")
        return identifier

    def observe(self, meta: dict[str, Any], patch: kopf.Patch, body: Any, memo: Any, identifier: str) -> None:
        """Look up a remote resource without managing it.

        Raises:
            kopf.PermanentError: If the identifier is invalid
            kopf.TemporaryError: If the remote read fails
        """
        result = self.reconciler(memo).read(identifier)
        if isinstance(result, Failed):
            self.raise_for_failure(meta, body, identifier, result.error)
            return

        status_data: dict[str, Any] = {
            STATUS_OBSERVED_IDENTIFIER: identifier,
            "lastSyncTime": datetime.now(timezone.utc).isoformat(),
        }
        if isinstance(result, Present):
            emit_resource_observed(body, identifier)
            self.log_info(meta, identifier, f"Observed {self.kind} {identifier}", reason="Observed")
            self.update_resource_status(patch, meta, ready=True, status_data={**status_data, "remoteState": asdict(result.state)})
            return

        emit_resource_missing(body, identifier)
        self.log_info(meta, identifier, f"{self.kind} {identifier} does not exist", reason="Missing")
        self.update_resource_status(patch, meta, ready=False, status_data={**status_data, "remoteState": None})

    def delete(
        self,
        spec: dict[str, Any],
        meta: dict[str, Any],
        status: dict[str, Any],
        body: Any,
        memo: Any,
    ) -> None:
        """Destroy the remote resource; an already absent resource is fine."""
        if spec.get("observeIdentifier"):
            self.log_info(meta, spec["observeIdentifier"], f"{self.kind} is only observed, leaving it in place", reason="Deletion")
            return

        identifier = status.get(STATUS_IDENTIFIER)
        if identifier is None:
            self.log_info(meta, None, f"{self.kind} was never applied, nothing to delete", reason="Deletion")
            return

        result = self.reconciler(memo).destroy(identifier)
        if isinstance(result, Failed):
            self.raise_for_failure(meta, body, identifier, result.error)
            return

        emit_resource_destroyed(body, identifier)
        self.log_info(meta, identifier, f"{self.kind} {identifier} destroyed", reason="Deleted")

    def update_resource_status(
        self,
        patch: kopf.Patch,
        meta: dict[str, Any],
        ready: bool,
        status_data: dict[str, Any] | None = None,
    ) -> None:
        """Update resource status with common fields.

        Args:
            patch: Kopf patch object
            meta: Kubernetes resource metadata
            ready: Whether the resource is ready
            status_data: Additional status data to include
        """
        patch.status.update({
            "observedGeneration": meta.get("generation", 0),
            "ready": ready,
            **(status_data or {}),
        })
