"""Retry policy for completion provider calls."""

from __future__ import annotations

import logging
from typing import Callable

import anthropic
import openai
from tenacity import (
    after_log,
    before_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

RETRYABLE_STATUS_CODES = {408, 409, 425, 429, 500, 502, 503, 504}

# SDK errors raised when the request never got a response
TRANSPORT_ERRORS = (
    TimeoutError,
    openai.APIConnectionError,
    anthropic.APIConnectionError,
)


def _has_retryable_status(exception: BaseException) -> bool:
    """Return True when an exception exposes an HTTP status worth retrying."""
    status_code = getattr(exception, "status_code", None)
    if status_code and (status_code >= 500 or status_code in RETRYABLE_STATUS_CODES):
        return True

    response = getattr(exception, "response", None)
    if response is not None:
        code = getattr(response, "status_code", None)
        if code and (code >= 500 or code in RETRYABLE_STATUS_CODES):
            return True

    return False


def _should_retry(exception: BaseException) -> bool:
    """Determine whether a given exception warrants a retry."""
    if isinstance(exception, TRANSPORT_ERRORS):
        return True
    return _has_retryable_status(exception)


def llm_retry(attempts: int = 3) -> Callable:
    """Retry decorator for completion API calls."""
    retry_logger = logging.getLogger(f"{__name__}.llm")
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception(_should_retry),
        before=before_log(retry_logger, logging.DEBUG),
        after=after_log(retry_logger, logging.WARNING),
    )
