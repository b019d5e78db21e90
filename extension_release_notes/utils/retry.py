"""Retry decorator for GitHub API rate limits.

GraphQL and search requests are throttled aggressively by GitHub. Requests
that fail with a rate limit are retried after the delay GitHub asks for, or
with exponential backoff when it does not say. Every other error propagates
unchanged.
"""

import asyncio
import functools
import inspect
import time
from typing import Any, Callable, TypeVar

import structlog
from githubkit.exception import PrimaryRateLimitExceeded, RequestFailed, SecondaryRateLimitExceeded

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _is_rate_limit_response(exc: RequestFailed) -> bool:
    """Whether a failed request was rejected because of a rate limit."""
    status_code = exc.response.status_code
    if status_code == 429:
        return True
    return status_code == 403 and "rate limit" in str(exc).lower()


def _wait_time_from_headers(exc: RequestFailed, fallback: float) -> float:
    """Read the wait time from retry-after or x-ratelimit-reset headers."""
    headers = exc.response.headers
    retry_after = headers.get("retry-after")
    if retry_after:
        try:
            return float(retry_after)
        except ValueError:
            logger.warning("Invalid retry-after header value", retry_after=retry_after)
            return fallback

    rate_limit_reset = headers.get("x-ratelimit-reset")
    if rate_limit_reset:
        try:
            reset_timestamp = int(rate_limit_reset)
        except ValueError:
            logger.warning("Invalid x-ratelimit-reset header value", rate_limit_reset=rate_limit_reset)
            return fallback
        now = int(time.time())
        if reset_timestamp > now:
            return reset_timestamp - now + 1
    return fallback


def retry_on_rate_limit(
    max_retries: int = 10,
    initial_delay: float = 10.0,
    max_delay: float = 300.0,
    exponential_base: float = 2.0,
) -> Callable[[F], F]:
    """Decorator retrying an async GitHub call when it hits a rate limit.

    Args:
        max_retries: Maximum number of retry attempts
        initial_delay: Delay in seconds before the first retry when GitHub gives no hint
        max_delay: Upper bound of any single wait
        exponential_base: Growth factor of the fallback delay between attempts

    Returns:
        Decorated function with retry logic

    Example:
        @retry_on_rate_limit()
        async def search(query: str) -> dict[str, Any]:
            return await client.async_graphql(SEARCH_QUERY, {"query": query})
    """

    def decorator(func: F) -> F:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"Function {func.__name__} decorated with @retry_on_rate_limit must be async.")

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay
            attempt = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except (PrimaryRateLimitExceeded, SecondaryRateLimitExceeded) as exc:
                    if attempt >= max_retries:
                        logger.error("Max retries reached for GitHub rate limit", function=func.__name__, attempts=attempt + 1)
                        raise
                    retry_after = getattr(exc, "retry_after", None)
                    wait_time = retry_after.total_seconds() if retry_after else delay
                    rate_limit_type = "primary" if isinstance(exc, PrimaryRateLimitExceeded) else "secondary"
                except RequestFailed as exc:
                    if not _is_rate_limit_response(exc):
                        raise
                    if attempt >= max_retries:
                        logger.error(
                            "Max retries reached for GitHub rate limit",
                            function=func.__name__,
                            attempts=attempt + 1,
                            status_code=exc.response.status_code,
                        )
                        raise
                    wait_time = _wait_time_from_headers(exc, delay)
                    rate_limit_type = "response"

                wait_time = min(wait_time, max_delay)
                attempt += 1
                logger.warning(
                    f"GitHub rate limit exceeded, waiting {wait_time} seconds",
                    function=func.__name__,
                    rate_limit_type=rate_limit_type,
                    attempt=attempt,
                    max_retries=max_retries,
                )
                await asyncio.sleep(wait_time)
                delay = min(delay * exponential_base, max_delay)

        return wrapper  # type: ignore

    return decorator
