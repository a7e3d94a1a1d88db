"""Tenacity-backed retry policy for byte fetchers.

Retrying is a collaborator concern: the content resolver never retries on
its own, so callers that want resilience wrap their fetcher instead.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .config import RetryConfig
from .interface import ByteFetcher

logger = structlog.get_logger()


def _log_retry(state: RetryCallState) -> None:
    exc = state.outcome.exception() if state.outcome else None
    logger.warning(
        "fetch_retry",
        attempt=state.attempt_number,
        error=str(exc) if exc else None,
    )


def with_retry(
    config: RetryConfig,
    *,
    retryable_exceptions: tuple[type[BaseException], ...] = (Exception,),
) -> Callable:
    """Return a tenacity retry decorator configured from *config*.

    Usage::

        @with_retry(config.retry, retryable_exceptions=(OSError,))
        def fetch(number: int, section: str) -> bytes: ...
    """
    return retry(
        stop=stop_after_attempt(config.max_attempts),
        wait=wait_exponential(
            multiplier=config.multiplier,
            min=config.initial_wait_seconds,
            max=config.max_wait_seconds,
        ),
        retry=retry_if_exception_type(retryable_exceptions),
        before_sleep=_log_retry,
        reraise=True,
    )


class RetryingByteFetcher(ByteFetcher):
    """Wrap another :class:`ByteFetcher` with exponential backoff."""

    def __init__(
        self,
        fetcher: ByteFetcher,
        config: RetryConfig,
        *,
        retryable_exceptions: tuple[type[BaseException], ...] = (OSError,),
    ) -> None:
        self._fetcher = fetcher
        self._fetch = with_retry(config, retryable_exceptions=retryable_exceptions)(
            fetcher.fetch_bytes
        )

    def fetch_bytes(self, message_number: int, body_identifier: str) -> bytes | None:
        return self._fetch(message_number, body_identifier)
