"""Main entry point for the resource provider operator."""

from __future__ import annotations

import logging
from typing import Any

import kopf
from prometheus_client import start_http_server

from . import handlers  # noqa: F401
from .builders.reconciler import create_reconcilers
from .config import Settings
from .logging import setup_structured_logging
from .tracing import initialize_tracing
from .utils.rate_limit import RateLimiter

logger = logging.getLogger(__name__)


@kopf.on.startup()
def configure(settings: kopf.OperatorSettings, memo: kopf.Memo, **kwargs: Any) -> None:
    """Configure logging, tracing, metrics and shared state on startup."""
    provider_settings = Settings.from_env()

    setup_structured_logging(provider_settings.log_level)
    initialize_tracing()

    start_http_server(provider_settings.metrics_port)
    logger.info(f"Metrics server listening on port {provider_settings.metrics_port}")

    # Kubernetes events are emitted explicitly by the handlers
    settings.posting.level = logging.WARNING

    rate_limiter = RateLimiter(provider_settings.rate_limit_per_second)
    memo.settings = provider_settings
    memo.rate_limiter = rate_limiter
    # boto3 clients are thread safe, so one reconciler per kind serves every handler
    memo.reconcilers = create_reconcilers(provider_settings, rate_limiter=rate_limiter)


def run() -> None:
    """Run the operator until interrupted."""
    kopf.run(clusterwide=True)
