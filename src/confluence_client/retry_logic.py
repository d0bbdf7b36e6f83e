"""Rate-limit handling for Confluence REST calls.

Confluence Cloud answers bursts of label writes with HTTP 429. Such calls are
repeated after 1s, 2s and 4s, or after the server's Retry-After value when it
sends one. Other failures are re-raised untouched.
"""

import logging
import time
from collections.abc import Mapping
from typing import Callable, Optional, Tuple, TypeVar

from .errors import APIAccessError

logger = logging.getLogger(__name__)

T = TypeVar('T')

BACKOFF_SECONDS: Tuple[int, ...] = (1, 2, 4)
MAX_RETRIES = len(BACKOFF_SECONDS)
MAX_RETRY_AFTER_SECONDS = 60

_RATE_LIMIT_MARKERS = ('429', 'too many requests', 'rate limit exceeded', 'rate limited')


def retry_on_rate_limit(func: Callable[..., T], *args, **kwargs) -> T:
    """Call `func(*args, **kwargs)`, retrying while it is rate limited.

    Raises:
        APIAccessError: If the call is still rate limited after the last retry
    """
    attempt = 0
    while True:
        try:
            return func(*args, **kwargs)
        except Exception as e:
            if not _is_rate_limit_error(e):
                raise
            if attempt == MAX_RETRIES:
                logger.error(f"Still rate limited after {MAX_RETRIES} retries")
                raise APIAccessError(f"Confluence API failure (after {MAX_RETRIES} retries)") from e

            delay = _retry_after(e) or BACKOFF_SECONDS[attempt]
            attempt += 1
            logger.info(f"Rate limited, waiting {delay}s (retry {attempt}/{MAX_RETRIES})")
            time.sleep(delay)


def _is_rate_limit_error(exception: Exception) -> bool:
    """Tell whether an exception from the client stands for an HTTP 429."""
    if getattr(exception, 'status_code', None) == 429:
        return True

    response = getattr(exception, 'response', None)
    if response is not None and getattr(response, 'status_code', None) == 429:
        return True

    message = str(exception).lower()
    return any(marker in message for marker in _RATE_LIMIT_MARKERS)


def _retry_after(exception: Exception) -> Optional[int]:
    """Seconds requested by a Retry-After header, capped; None if absent."""
    response = getattr(exception, 'response', None)
    headers = getattr(response, 'headers', None)
    if not isinstance(headers, Mapping):
        return None

    value = headers.get('Retry-After')
    try:
        seconds = int(value)
    except (TypeError, ValueError):
        # HTTP-date form is not worth parsing; fall back to the schedule
        return None

    if seconds <= 0:
        return None
    return min(seconds, MAX_RETRY_AFTER_SECONDS)
