"""Remote client capability consumed by the reconciler."""

from __future__ import annotations

from typing import Protocol, Sequence, TypeVar

from ..models import FetchResult

ConfigT = TypeVar("ConfigT")


class RemoteClient(Protocol[ConfigT]):
    """Protocol defining the remote operations for one resource kind.

    "Not found" is never raised: ``fetch`` reports it as ``found=False`` and
    ``delete`` returns False. Other failures raise ``RemoteFailure``.
    """

    def create(self, config: ConfigT) -> tuple[str, ...]:
        """Create the resource and return its identifier key parts."""
        ...

    def update(self, parts: Sequence[str], config: ConfigT) -> None:
        """Replace the remote attributes of an existing resource."""
        ...

    def fetch(self, parts: Sequence[str]) -> FetchResult[ConfigT]:
        """Read the current remote state."""
        ...

    def delete(self, parts: Sequence[str]) -> bool:
        """Delete the resource. Returns False if it was already absent."""
        ...
