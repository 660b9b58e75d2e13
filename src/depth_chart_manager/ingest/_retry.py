"""Retry policy for depth chart page requests."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx
from tenacity import RetryCallState, retry, retry_if_exception, stop_after_attempt, wait_exponential_jitter

logger = logging.getLogger(__name__)

# Rate limiting and server-side failures; any other status is final.
RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


@dataclass(frozen=True)
class RetryPolicy:
    """How hard to retry a page request before giving up.

    Attributes:
        attempts: Total tries, the first request included.
        initial_wait_seconds: Base of the exponential backoff.
        max_wait_seconds: Cap on any single wait, jitter included.
    """

    attempts: int = 3
    initial_wait_seconds: float = 1.0
    max_wait_seconds: float = 10.0


def is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in RETRYABLE_STATUS_CODES
    return isinstance(exc, httpx.TransportError)


def page_retry(label: str, policy: RetryPolicy | None = None) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Return a tenacity decorator applying *policy* to a page request.

    Transport failures (timeouts included) and the status codes in
    ``RETRYABLE_STATUS_CODES`` are retried. A 403 or 404 fails at once: ESPN
    answers those the same way on every try. After the last attempt the httpx
    error is re-raised unchanged.
    """
    policy = policy or RetryPolicy()

    def _log_retry(retry_state: RetryCallState) -> None:
        url = retry_state.args[0] if retry_state.args else "?"
        logger.warning(
            "Retrying %s for %s (attempt %d of %d): %s",
            label,
            url,
            retry_state.attempt_number,
            policy.attempts,
            retry_state.outcome.exception() if retry_state.outcome else None,
        )

    return retry(
        stop=stop_after_attempt(policy.attempts),
        wait=wait_exponential_jitter(initial=policy.initial_wait_seconds, max=policy.max_wait_seconds),
        retry=retry_if_exception(is_retryable),
        before_sleep=_log_retry,
        reraise=True,
    )
