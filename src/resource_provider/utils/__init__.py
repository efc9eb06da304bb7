"""Utility functions for the resource provider."""

from .errors import sanitize_dict, sanitize_error_message, sanitize_exception
from .events import emit_event
from .rate_limit import RateLimiter

__all__ = [
    "sanitize_error_message",
    "sanitize_exception",
    "sanitize_dict",
    "emit_event",
    "RateLimiter",
]
