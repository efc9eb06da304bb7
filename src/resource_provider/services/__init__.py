"""Remote client implementations."""
