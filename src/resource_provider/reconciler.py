"""Idempotent state reconciliation against a remote resource API."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Generic, Sequence, TypeVar, Union

from . import metrics
from .equivalence import policies_equivalent
from .exceptions import DecodeError, NewResourceNotFoundError, ProviderError, RemoteNotFound
from .logging import log_resource_event
from .resources.base import ResourceKind
from .services.base import RemoteClient
from .tracing import set_span_status, trace_span
from .utils.errors import sanitize_exception

logger = logging.getLogger(__name__)

ConfigT = TypeVar("ConfigT")


@dataclass(frozen=True)
class Absent:
    """The resource does not exist remotely."""


@dataclass(frozen=True)
class Present(Generic[ConfigT]):
    """The resource exists; ``state`` is its normalized remote state."""

    state: ConfigT


@dataclass(frozen=True)
class Failed:
    """The call failed; ``error`` says why."""

    error: ProviderError


ReconciliationResult = Union[Absent, Present[Any], Failed]


class Reconciler(Generic[ConfigT]):
    """Reconciles desired state of one resource kind against a remote API.

    The remote client is injected. The reconciler keeps no state between
    calls, so calls for different identifiers can run concurrently. It never
    retries: remote calls are assumed to have exhausted their own retries.
    """

    def __init__(self, kind: ResourceKind[ConfigT], client: RemoteClient[ConfigT]) -> None:
        self.kind = kind
        self.client = client

    def apply(
        self, desired: ConfigT, existing_identifier: str | None = None
    ) -> tuple[str | None, ReconciliationResult]:
        """Create or update the resource, then read it back.

        Args:
            desired: Desired configuration
            existing_identifier: Identifier of the tracked resource, if any

        Returns:
            The (possibly new) identifier and the outcome. On failure the
            identifier is the one passed in.
        """
        start_time = time.time()
        with trace_span("apply", kind=self.kind.name, attributes={"resource.identifier": existing_identifier or ""}):
            try:
                identifier, state = self._apply(desired, existing_identifier)
                result: ReconciliationResult = Present(state)
            except ProviderError as e:
                identifier, result = existing_identifier, self._failed("apply", existing_identifier, e)
        self._observe("apply", result, start_time)
        return identifier, result

    def read(self, identifier: str) -> ReconciliationResult:
        """Read the normalized remote state of a resource.

        A resource that no longer exists is ``Absent``; any other remote error
        is ``Failed``, never ``Absent``.
        """
        start_time = time.time()
        with trace_span("read", kind=self.kind.name, attributes={"resource.identifier": str(identifier)}):
            try:
                parts = self.kind.parse_identifier(identifier)
                state = self._fetch(identifier, parts)
                result: ReconciliationResult = Absent() if state is None else Present(state)
            except ProviderError as e:
                result = self._failed("read", identifier, e)
        self._observe("read", result, start_time)
        return result

    def destroy(self, identifier: str) -> ReconciliationResult:
        """Delete a resource.

        Returns ``Absent`` on success, including when the resource was already
        gone, and ``Failed`` otherwise.
        """
        start_time = time.time()
        with trace_span("destroy", kind=self.kind.name, attributes={"resource.identifier": str(identifier)}):
            try:
                parts = self.kind.parse_identifier(identifier)
                self._delete(identifier, parts)
                result: ReconciliationResult = Absent()
            except ProviderError as e:
                result = self._failed("destroy", identifier, e)
        self._observe("destroy", result, start_time)
        return result

    @staticmethod
    def equivalent(a: Any, b: Any) -> bool:
        """Compare structured documents by canonical structural equality."""
        return policies_equivalent(a, b)

    def _apply(self, desired: ConfigT, identifier: str | None) -> tuple[str, ConfigT]:
        self.kind.validate(desired)

        if identifier is None:
            return self._create(desired)

        parts = self.kind.parse_identifier(identifier)

        desired_parts = self.kind.key_parts(desired)
        if desired_parts is not None and tuple(desired_parts) != tuple(parts):
            self._log(identifier, "replace", "ReplacementRequired", "Identifier parts changed, recreating resource")
            return self._replace(identifier, parts, desired)

        current = self._fetch(identifier, parts)
        if current is None:
            metrics.drift_detected_total.labels(kind=self.kind.name, drift_type="absent").inc()
            self._log(identifier, "drift", "DriftDetected", "Resource no longer exists remotely, recreating")
            return self._create(desired)

        if self.kind.requires_replacement(current, desired):
            self._log(identifier, "replace", "ReplacementRequired", "Immutable attribute changed, recreating resource")
            return self._replace(identifier, parts, desired)

        if self.kind.equivalent(current, desired):
            self._log(identifier, "noop", "Unchanged", "Remote state is up to date, skipping update")
            return identifier, current

        metrics.drift_detected_total.labels(kind=self.kind.name, drift_type="changed").inc()
        self._log(identifier, "update", "DriftDetected", "Remote state differs from desired state, updating")
        self.client.update(parts, desired)

        state = self._fetch(identifier, parts)
        if state is None:
            raise NewResourceNotFoundError(
                self.kind.name, "update", "resource not found after update", identifier=identifier
            )
        return identifier, state

    def _create(self, desired: ConfigT) -> tuple[str, ConfigT]:
        parts = self.client.create(desired)
        identifier = self.kind.format_identifier(parts)
        self._log(identifier, "create", "Created", "Resource created")

        state = self._fetch(identifier, parts)
        if state is None:
            raise NewResourceNotFoundError(
                self.kind.name, "create", "resource not found after creation", identifier=identifier
            )
        return identifier, state

    def _replace(self, identifier: str, parts: Sequence[str], desired: ConfigT) -> tuple[str, ConfigT]:
        self._delete(identifier, parts)
        return self._create(desired)

    def _fetch(self, identifier: str, parts: Sequence[str]) -> ConfigT | None:
        try:
            result = self.client.fetch(parts)
        except RemoteNotFound:
            return None
        if not result.found or result.state is None:
            return None
        return self.kind.normalize(result.state)

    def _delete(self, identifier: str, parts: Sequence[str]) -> None:
        try:
            deleted = self.client.delete(parts)
        except RemoteNotFound:
            deleted = False
        if deleted:
            self._log(identifier, "delete", "Deleted", "Resource deleted")
        else:
            self._log(identifier, "delete", "AlreadyAbsent", "Resource already absent")

    def _failed(self, operation: str, identifier: object, error: ProviderError) -> Failed:
        reason = "InvalidIdentifier" if isinstance(error, DecodeError) else "Failed"
        set_span_status(False, sanitize_exception(error))
        metrics.error_total.labels(kind=self.kind.name, error_type=type(error).__name__).inc()
        log_resource_event(
            logger,
            resource_kind=self.kind.name,
            identifier=None if identifier is None else str(identifier),
            event=operation,
            reason=reason,
            message=f"{operation} failed",
            level=logging.ERROR,
            error=sanitize_exception(error),
            error_type=type(error).__name__,
        )
        return Failed(error)

    def _observe(self, operation: str, result: ReconciliationResult, start_time: float) -> None:
        outcome = type(result).__name__.lower()
        metrics.reconcile_total.labels(kind=self.kind.name, operation=operation, result=outcome).inc()
        metrics.reconcile_duration_seconds.labels(kind=self.kind.name, operation=operation).observe(
            time.time() - start_time
        )

    def _log(self, identifier: str | None, event: str, reason: str, message: str) -> None:
        log_resource_event(
            logger,
            resource_kind=self.kind.name,
            identifier=identifier,
            event=event,
            reason=reason,
            message=message,
        )
