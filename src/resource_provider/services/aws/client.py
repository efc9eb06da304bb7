"""Shared call handling for boto3-backed remote clients."""

from __future__ import annotations

import logging
import time
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from ... import metrics
from ...constants import NOT_FOUND_ERROR_CODES
from ...exceptions import RemoteFailure, RemoteNotFound
from ...utils.errors import sanitize_exception
from ...utils.rate_limit import RateLimiter

logger = logging.getLogger(__name__)


class AWSServiceClient:
    """Base class wrapping a boto3 client for one resource kind.

    Every remote call goes through ``_call`` which rate limits, records
    metrics and translates botocore errors into ``RemoteNotFound`` or
    ``RemoteFailure``.
    """

    service = ""
    kind = ""
    not_found_codes: frozenset[str] = NOT_FOUND_ERROR_CODES

    def __init__(self, client: Any, rate_limiter: RateLimiter | None = None) -> None:
        self.client = client
        self.rate_limiter = rate_limiter

    def _call(self, operation: str, identifier: str | None = None, **params: Any) -> dict[str, Any]:
        if self.rate_limiter is not None:
            self.rate_limiter.wait()

        start_time = time.time()
        try:
            response = getattr(self.client, operation)(**params)
            metrics.api_call_total.labels(service=self.service, operation=operation, result="success").inc()
            return response
        except ClientError as e:
            error = e.response.get("Error", {})
            code = str(error.get("Code", ""))
            message = error.get("Message") or str(e)
            if code in self.not_found_codes:
                metrics.api_call_total.labels(service=self.service, operation=operation, result="not_found").inc()
                logger.debug(f"{self.kind} {identifier}: {operation} reported {code}")
                raise RemoteNotFound(self.kind, operation, message, identifier=identifier, code=code) from e
            metrics.api_call_total.labels(service=self.service, operation=operation, result="error").inc()
            logger.error(f"Failed to {operation} for {self.kind} {identifier}: {sanitize_exception(e)}")
            raise RemoteFailure(self.kind, operation, message, identifier=identifier, code=code) from e
        except BotoCoreError as e:
            metrics.api_call_total.labels(service=self.service, operation=operation, result="error").inc()
            logger.error(f"Failed to {operation} for {self.kind} {identifier}: {sanitize_exception(e)}")
            raise RemoteFailure(self.kind, operation, str(e), identifier=identifier) from e
        finally:
            duration = time.time() - start_time
            metrics.api_call_duration_seconds.labels(service=self.service, operation=operation).observe(duration)
