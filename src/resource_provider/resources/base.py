"""Base class for resource kind definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Sequence, TypeVar

from ..identifiers import decode, encode

ConfigT = TypeVar("ConfigT")


class ResourceKind(ABC, Generic[ConfigT]):
    """Describes how one kind of resource is identified and compared.

    Subclasses hold no per-call state, so a single instance can serve
    concurrent reconciliations.
    """

    name: str = ""
    separator: str = ","
    accepted_arities: frozenset[int] = frozenset({1})

    def validate(self, config: ConfigT) -> None:
        """Validate a desired configuration.

        Raises:
            ConfigurationError: If the configuration is invalid
        """

    @abstractmethod
    def key_parts(self, config: ConfigT) -> tuple[str, ...] | None:
        """Return the identifier parts implied by a configuration.

        Returns None when the key is assigned by the remote API on creation.
        """

    def format_identifier(self, parts: Sequence[str]) -> str:
        """Encode key parts into an identifier."""
        return encode(list(parts), self.separator)

    def parse_identifier(self, identifier: object) -> tuple[str, ...]:
        """Decode an identifier into key parts.

        Raises:
            DecodeError: If the identifier is malformed
        """
        return decode(identifier, self.separator, self.accepted_arities)

    def requires_replacement(self, remote: ConfigT, desired: ConfigT) -> bool:
        """Whether an immutable attribute differs between remote and desired."""
        return False

    def normalize(self, state: ConfigT) -> ConfigT:
        """Put remote state into a canonical form."""
        return state

    @abstractmethod
    def equivalent(self, remote: ConfigT, desired: ConfigT) -> bool:
        """Whether remote state already satisfies the desired configuration."""
