"""Unified error handling for site AJAX requests."""

from typing import Tuple, Callable, Awaitable, Union
from enum import Enum
import asyncio
import inspect
import logging

logger = logging.getLogger(__name__)


class ErrorCategory(Enum):
    """Categorize errors for selective retry logic."""
    RETRYABLE = "retryable"        # 429, 5xx, network - should retry
    NOT_FOUND = "not_found"        # 404 - don't retry
    NON_RETRYABLE = "non_retryable"  # 400 - don't retry
    FATAL = "fatal"                # 403, 410 - halt execution


class APIError(Exception):
    """Base exception for API errors."""
    pass


class FatalAPIError(APIError):
    """Fatal API error requiring immediate stop."""
    pass


class RetryableAPIError(APIError):
    """Retryable API error (rate limits, transient failures)."""
    pass


class SkippableAPIError(APIError):
    """Non-fatal error, skip item and continue."""
    pass


# HTTP status code mapping
HTTP_STATUS_MESSAGES = {
    200: "Success",
    400: "Malformed request (check vrf token)",
    403: "Blocked by site protection",
    404: "Not found",
    410: "Site moved (check site.host)",
    429: "Rate limited",
    500: "Site error",
    502: "Bad gateway",
    503: "Site unavailable",
    504: "Gateway timeout",
}


def get_error_message(status_code: int) -> str:
    """
    Get user-friendly error message for HTTP status code.

    Args:
        status_code: HTTP status code

    Returns:
        Error message string
    """
    return HTTP_STATUS_MESSAGES.get(
        status_code,
        f"Unknown error (HTTP {status_code})"
    )


def handle_http_status(status_code: int, context: str = "") -> None:
    """
    Handle HTTP status code and raise appropriate exception.

    Args:
        status_code: HTTP status code from the site
        context: Additional context for error message

    Raises:
        FatalAPIError: For fatal errors (403, 410)
        RetryableAPIError: For retryable errors (429, 5xx)
        SkippableAPIError: For skippable errors (400, 404)
        APIError: For any other non-200 status
    """
    msg = get_error_message(status_code)
    if context:
        msg = f"{msg} ({context})"

    if status_code in [403, 410]:
        raise FatalAPIError(msg)
    elif status_code == 429 or 500 <= status_code < 600:
        raise RetryableAPIError(msg)
    elif status_code in [400, 404]:
        raise SkippableAPIError(msg)
    elif status_code != 200:
        raise APIError(msg)


def categorize_error(exception: Exception) -> Tuple[Exception, ErrorCategory]:
    """
    Categorize an error for selective retry logic.

    Args:
        exception: Exception to categorize

    Returns:
        Tuple of (exception, ErrorCategory)
    """
    if isinstance(exception, FatalAPIError):
        return (exception, ErrorCategory.FATAL)

    error_str = str(exception).lower()
    if isinstance(exception, SkippableAPIError) and ('not found' in error_str or '404' in error_str):
        return (exception, ErrorCategory.NOT_FOUND)

    if isinstance(exception, SkippableAPIError):
        return (exception, ErrorCategory.NON_RETRYABLE)

    if isinstance(exception, RetryableAPIError):
        return (exception, ErrorCategory.RETRYABLE)

    # Network-related exceptions raised by the client
    retryable_keywords = ['timeout', 'connection', 'network', 'temporary', 'unavailable']
    if any(keyword in error_str for keyword in retryable_keywords):
        return (exception, ErrorCategory.RETRYABLE)

    return (exception, ErrorCategory.NON_RETRYABLE)


async def retry_with_backoff(
    func: Union[Callable, Callable[[], Awaitable]],
    max_attempts: int = 3,
    initial_delay: float = 5.0,
    backoff_factor: float = 2.0,
    context: str = ""
):
    """
    Retry a function with exponential backoff using selective retry logic.

    Args:
        func: Function to retry (sync or async)
        max_attempts: Maximum number of attempts
        initial_delay: Initial delay in seconds
        backoff_factor: Multiplier for each retry
        context: Context string for log messages

    Returns:
        Function result if successful

    Raises:
        Last exception if all retries fail or if error is not retryable
    """
    delay = initial_delay
    last_exception = None
    is_async = inspect.iscoroutinefunction(func)

    for attempt in range(1, max_attempts + 1):
        try:
            if is_async:
                return await func()
            else:
                return func()
        except Exception as e:
            exception, category = categorize_error(e)
            last_exception = exception

            if category != ErrorCategory.RETRYABLE:
                raise exception

            if attempt < max_attempts:
                logger.warning(f"{context}: {exception}")
                logger.info(f"Retrying in {delay:.1f}s (attempt {attempt}/{max_attempts})")
                await asyncio.sleep(delay)
                delay *= backoff_factor
            else:
                logger.error(f"{context}: Failed after {max_attempts} attempts")

    if last_exception:
        raise last_exception
    else:
        raise APIError(f"Failed after {max_attempts} attempts")
