"""Cloud resource provider: composite identifiers and idempotent reconciliation."""

__version__ = "0.1.0"
