"""Canonical structural equality for policy-like JSON documents."""

from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


class EquivalenceCheckFailure(ValueError):
    """A document could not be parsed for structural comparison."""


def _load(document: Any) -> Any:
    if isinstance(document, (str, bytes)):
        try:
            return json.loads(document)
        except (TypeError, ValueError) as e:
            raise EquivalenceCheckFailure(f"document is not valid JSON: {e}") from e
    return document


def canonicalize(value: Any) -> Any:
    """Return a canonical form of a parsed JSON value.

    Object keys are sorted, arrays are treated as unordered, and a
    single-element array collapses to its element.
    """
    if isinstance(value, dict):
        return {key: canonicalize(value[key]) for key in sorted(value)}
    if isinstance(value, (list, tuple)):
        items = [canonicalize(item) for item in value]
        if len(items) == 1:
            return items[0]
        return sorted(items, key=lambda item: json.dumps(item, sort_keys=True))
    return value


def canonical_json(document: Any) -> str:
    """Serialize a document in its canonical form.

    Raises:
        EquivalenceCheckFailure: If a string document is not valid JSON
    """
    return json.dumps(canonicalize(_load(document)), sort_keys=True, separators=(",", ":"))


def policies_equivalent(a: Any, b: Any) -> bool:
    """Compare two policy documents by canonical structural equality.

    Either side may be a JSON string or an already parsed object. If either
    side cannot be parsed the comparison falls back to exact string equality,
    so a malformed document shows up as different instead of failing.
    """
    try:
        return canonical_json(a) == canonical_json(b)
    except EquivalenceCheckFailure as e:
        logger.debug(f"Falling back to string comparison of policy documents: {e}")
        return _as_text(a) == _as_text(b)


def _as_text(document: Any) -> str:
    if isinstance(document, bytes):
        return document.decode("utf-8", errors="replace")
    if isinstance(document, str):
        return document
    return json.dumps(document, sort_keys=True)
