"""Shared retry loop for calls to rate-limited AI providers."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

import httpx
import openai

from fridge_planner.errors import UpstreamRateLimitError, UpstreamTransportError

RATE_LIMIT_STATUS = 429

_logger = logging.getLogger(__name__)

T = TypeVar("T")

UPSTREAM_FAILURES: tuple[type[Exception], ...] = (
    openai.APIConnectionError,
    openai.APIStatusError,
    httpx.TransportError,
    httpx.HTTPStatusError,
)


def status_code_from_exception(exc: BaseException) -> int | None:
    """Extract an HTTP status code from an exception, if available."""
    status_code = getattr(exc, "status_code", None)
    if isinstance(status_code, int):
        return status_code
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return status_code
    return None


def is_rate_limited(exc: BaseException) -> bool:
    """Return True when the exception carries a 429 status."""
    return status_code_from_exception(exc) == RATE_LIMIT_STATUS


def is_upstream_failure(exc: BaseException) -> bool:
    """Return True when the provider was unreachable or answered with an error."""
    return isinstance(exc, UPSTREAM_FAILURES)


async def call_with_retry(  # noqa: PLR0913
    operation: Callable[[], Awaitable[T]],
    *,
    action: str,
    attempts: int = 3,
    backoff_seconds: float = 5.0,
    timeout_seconds: float | None = None,
    rate_limited: Callable[[BaseException], bool] = is_rate_limited,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run an async operation, retrying only while it is rate limited.

    The delay before retry ``n`` is ``n * backoff_seconds``. A rate limit on
    the last attempt raises UpstreamRateLimitError, a timeout raises
    UpstreamTransportError, as does a connection failure or an error status
    from the provider. Any other failure propagates untouched.
    Cancellation is never retried.
    """
    for attempt in range(1, attempts + 1):
        try:
            if timeout_seconds is None:
                return await operation()
            async with asyncio.timeout(timeout_seconds):
                return await operation()
        except TimeoutError as exc:
            _logger.warning("%s timed out after %ss", action, timeout_seconds)
            raise UpstreamTransportError() from exc
        except Exception as exc:
            if not rate_limited(exc):
                if is_upstream_failure(exc):
                    _logger.warning(
                        "%s failed upstream: %s (status=%s)",
                        action,
                        exc.__class__.__name__,
                        status_code_from_exception(exc),
                    )
                    raise UpstreamTransportError() from exc
                raise
            _logger.warning(
                "%s rate limited (attempt %s/%s, status=%s)",
                action,
                attempt,
                attempts,
                status_code_from_exception(exc),
            )
            if attempt >= attempts:
                raise UpstreamRateLimitError() from exc
            await sleep(attempt * backoff_seconds)
    raise UpstreamRateLimitError()
