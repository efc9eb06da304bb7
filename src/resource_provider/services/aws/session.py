"""boto3 client construction from provider settings."""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.config import Config

from ...config import Settings

logger = logging.getLogger(__name__)


def create_boto3_client(service: str, settings: Settings) -> Any:
    """Create a boto3 client for a service.

    Retries for throttling and transient errors are handled by botocore
    according to the configured retry mode.

    Args:
        service: boto3 service name (e.g., "s3", "ses")
        settings: Provider settings

    Returns:
        boto3 client
    """
    session = boto3.session.Session(profile_name=settings.profile, region_name=settings.region)
    config = Config(
        retries={
            "max_attempts": settings.max_retry_attempts,
            "mode": settings.retry_mode,
        },
    )
    logger.debug(f"Creating {service} client in region {settings.region}")
    return session.client(service, endpoint_url=settings.endpoint_url, config=config)
