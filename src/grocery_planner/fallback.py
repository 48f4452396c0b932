"""Fall back to a default value when an operation fails.

The extraction pipeline degrades instead of failing in three places:
decoding a structured-data block, running the list-item fallback, and
calling the ingredient normalizer. All three go through the helpers in
this module so the catch/log/substitute logic lives in one place.

Example:
    >>> import json
    >>> from grocery_planner.fallback import try_or_default
    >>> try_or_default(lambda: json.loads("{"), None, errors=(ValueError,))
    >>> try_or_default(lambda: json.loads("[1]"), None)
    [1]
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
D = TypeVar("D")


def try_or_default(
    operation: Callable[[], T],
    default: D,
    *,
    errors: tuple[type[Exception], ...] = (Exception,),
    label: str | None = None,
    log_level: int = logging.DEBUG,
) -> T | D:
    """Run ``operation`` and return ``default`` if it raises one of ``errors``.

    Args:
        operation: Zero-argument callable to run
        default: Value returned when the operation fails
        errors: Exception types that trigger the fallback
        label: Name used in the log message (defaults to the callable's name)
        log_level: Level at which the absorbed failure is logged

    Returns:
        The operation's result, or ``default`` on failure

    Note:
        Exceptions not listed in ``errors`` propagate unchanged.
    """
    try:
        return operation()
    except errors as e:
        name = label or getattr(operation, "__name__", "operation")
        logger.log(log_level, f"{name} failed, using fallback: {e}")
        return default


async def try_or_default_async(
    operation: Callable[[], Awaitable[T]],
    default: D,
    *,
    errors: tuple[type[Exception], ...] = (Exception,),
    label: str | None = None,
    log_level: int = logging.WARNING,
) -> T | D:
    """Await ``operation()`` and return ``default`` if it raises one of ``errors``.

    Async counterpart of :func:`try_or_default`. The operation is awaited
    exactly once; there is no retry and no timeout added here.
    """
    try:
        return await operation()
    except errors as e:
        name = label or getattr(operation, "__name__", "operation")
        logger.log(log_level, f"{name} failed, using fallback: {e}")
        return default
