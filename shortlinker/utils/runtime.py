"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if lambda is running in local SAM, False otherwise.
    storage_timeout(context) -> float:
        Deadline (seconds) for a single storage call in the current invocation.
    duration_ms(started) -> float:
        Milliseconds elapsed since a time.perf_counter() reading.

Example:
    >>> from shortlinker.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
"""

import os
import time

from shortlinker.constants import ENV, Timeout
from shortlinker.types import LambdaContext


def running_locally() -> bool:
    """Return True if running in SAM local invoke/api, False otherwise."""
    env = os.getenv(ENV.App.APP_ENV, '').lower()
    return env == 'local' or os.getenv(ENV.App.AWS_SAM_LOCAL) == 'true'


def storage_timeout(context: LambdaContext) -> float:
    """Derive the storage call deadline from the invocation's remaining time

    The remaining time reported by the Lambda runtime minus a margin for
    building the response, capped at Timeout.DEFAULT_STORAGE and floored at
    Timeout.MIN_STORAGE. Contexts without `get_remaining_time_in_millis()`
    (tests, local scripts) get the default.

    Example:
        >>> class Context:
        ...     def get_remaining_time_in_millis(self):
        ...         return 1000
        >>> storage_timeout(Context())
        0.75
    """
    remaining_ms = getattr(context, 'get_remaining_time_in_millis', None)
    if not callable(remaining_ms):
        return Timeout.DEFAULT_STORAGE

    remaining = remaining_ms() / 1000 - Timeout.RESPONSE_MARGIN
    return max(Timeout.MIN_STORAGE, min(Timeout.DEFAULT_STORAGE, remaining))


def duration_ms(started: float) -> float:
    """Milliseconds elapsed since `started`, a time.perf_counter() reading"""
    return round((time.perf_counter() - started) * 1000, 3)
