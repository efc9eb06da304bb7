"""Exception taxonomy for identifier decoding and remote reconciliation."""

from __future__ import annotations


class ProviderError(Exception):
    """Base class for all provider errors."""


class DecodeError(ProviderError, ValueError):
    """A resource identifier could not be decoded.

    Always recoverable by supplying a correct identifier; never retried.
    """

    def __init__(self, identifier: object, message: str) -> None:
        super().__init__(message)
        self.identifier = identifier


class WrongArityError(DecodeError):
    """The identifier has a part count outside the accepted arity set."""

    def __init__(self, identifier: object, part_count: int, accepted_arities: frozenset[int]) -> None:
        expected = ", ".join(str(arity) for arity in sorted(accepted_arities))
        super().__init__(
            identifier,
            f"unexpected format for ID ({identifier!r}): got {part_count} part(s), expected one of {{{expected}}}",
        )
        self.part_count = part_count
        self.accepted_arities = accepted_arities


class EmptyPrimaryKeyError(DecodeError):
    """The first part of the identifier is empty."""

    def __init__(self, identifier: object) -> None:
        super().__init__(identifier, f"unexpected format for ID ({identifier!r}): primary key is empty")


class InvalidIdentifierPartError(DecodeError):
    """A part of the identifier is syntactically invalid for its resource kind."""


class ConfigurationError(ProviderError, ValueError):
    """The desired configuration is invalid."""


class RemoteFailure(ProviderError):
    """A remote API call failed for a reason other than "not found".

    Carries enough context (kind, identifier, operation, error code) to
    diagnose the failure. The underlying botocore error is chained as
    ``__cause__``.
    """

    def __init__(
        self,
        kind: str,
        operation: str,
        message: str,
        identifier: str | None = None,
        code: str | None = None,
    ) -> None:
        target = f" ({identifier})" if identifier else ""
        super().__init__(f"{kind}{target}: {operation} failed: {message}")
        self.kind = kind
        self.operation = operation
        self.identifier = identifier
        self.code = code
        self.detail = message


class RemoteNotFound(RemoteFailure):
    """The remote resource does not exist.

    Not a true error: read paths turn it into ``Absent`` and delete paths into
    success.
    """


class NewResourceNotFoundError(RemoteFailure):
    """A resource that was just created could not be read back."""
