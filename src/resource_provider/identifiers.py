"""Composite identifier codec.

Resource identifiers are delimiter-joined strings so that they stay
human-inspectable in state and import commands. Parts are never escaped:
callers must make sure no part contains the separator.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from .exceptions import EmptyPrimaryKeyError, WrongArityError


def encode(parts: Sequence[str], separator: str) -> str:
    """Join identifier parts with the separator.

    Empty optional parts are emitted positionally so that decode stays
    symmetric for fixed-arity identifiers.

    Args:
        parts: Ordered identifier parts, primary key first
        separator: Reserved separator

    Returns:
        Encoded identifier

    Raises:
        ValueError: If no parts are given or a part contains the separator
    """
    if not parts:
        raise ValueError("at least one identifier part is required")
    for part in parts:
        if separator in part:
            raise ValueError(f"identifier part {part!r} contains reserved separator {separator!r}")
    return separator.join(parts)


def decode(identifier: object, separator: str, accepted_arities: Iterable[int]) -> tuple[str, ...]:
    """Split an identifier into its parts.

    Never raises anything other than a ``DecodeError`` subclass, whatever the
    input.

    Args:
        identifier: Encoded identifier
        separator: Reserved separator
        accepted_arities: Part counts accepted for the resource kind

    Returns:
        Parts padded with empty strings up to the largest accepted arity

    Raises:
        WrongArityError: If the part count is not accepted (including "")
        EmptyPrimaryKeyError: If the first part is empty
    """
    arities = frozenset(accepted_arities)
    if not isinstance(identifier, str) or identifier == "":
        raise WrongArityError(identifier, 0, arities)

    parts = identifier.split(separator)
    if len(parts) not in arities:
        raise WrongArityError(identifier, len(parts), arities)
    if parts[0] == "":
        raise EmptyPrimaryKeyError(identifier)

    width = max(arities)
    return tuple(parts) + ("",) * (width - len(parts))

