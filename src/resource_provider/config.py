"""Runtime configuration for the resource provider."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    return value if value else None


@dataclass(frozen=True)
class Settings:
    """Provider settings, read from ``PROVIDER_*`` environment variables."""

    region: str = "us-east-1"
    endpoint_url: str | None = None
    profile: str | None = None
    max_retry_attempts: int = 5
    retry_mode: str = "standard"
    rate_limit_per_second: float = 5.0
    metrics_port: int = 8080
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from the environment.

        Environment Variables:
            PROVIDER_REGION: Default region (default: AWS_REGION or us-east-1)
            PROVIDER_ENDPOINT_URL: Override endpoint for all services
            PROVIDER_PROFILE: Named credentials profile
            PROVIDER_MAX_RETRY_ATTEMPTS: botocore retry attempts (default: 5)
            PROVIDER_RETRY_MODE: botocore retry mode (default: standard)
            PROVIDER_RATE_LIMIT_PER_SECOND: Remote calls per second (default: 5.0)
            METRICS_PORT: Prometheus metrics port (default: 8080)
            LOG_LEVEL: Logging level (default: INFO)

        Raises:
            ValueError: If a numeric variable cannot be parsed or is out of range
        """
        settings = cls(
            region=os.getenv("PROVIDER_REGION") or os.getenv("AWS_REGION") or "us-east-1",
            endpoint_url=_env_str("PROVIDER_ENDPOINT_URL"),
            profile=_env_str("PROVIDER_PROFILE"),
            max_retry_attempts=int(os.getenv("PROVIDER_MAX_RETRY_ATTEMPTS", "5")),
            retry_mode=os.getenv("PROVIDER_RETRY_MODE", "standard"),
            rate_limit_per_second=float(os.getenv("PROVIDER_RATE_LIMIT_PER_SECOND", "5.0")),
            metrics_port=int(os.getenv("METRICS_PORT", "8080")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        """Validate setting ranges."""
        if self.max_retry_attempts < 1:
            raise ValueError("PROVIDER_MAX_RETRY_ATTEMPTS must be at least 1")
        if self.retry_mode not in ("legacy", "standard", "adaptive"):
            raise ValueError(f"Unsupported PROVIDER_RETRY_MODE: {self.retry_mode}")
        if self.rate_limit_per_second <= 0:
            raise ValueError("PROVIDER_RATE_LIMIT_PER_SECOND must be positive")
