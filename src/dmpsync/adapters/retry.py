"""Bounded retry for flaky collaborator calls that do not go through ``ResilientClient``."""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

log = logging.getLogger(__name__)


def bounded_retry[**P, T](
    *,
    attempts: int = 3,
    delay: float = 0.5,
    backoff: float = 2.0,
    retry_on: tuple[type[Exception], ...] = (Exception,),
    sleep: Callable[[float], None] = time.sleep,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Retry the decorated call up to ``attempts`` times, multiplying the pause by ``backoff``.

    Only exceptions listed in ``retry_on`` are retried; the last one is re-raised
    once the budget is spent.
    """

    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            pause = delay
            for attempt in range(1, attempts + 1):
                try:
                    return func(*args, **kwargs)
                except retry_on as exc:
                    if attempt == attempts:
                        raise
                    log.warning(
                        "%s failed (attempt %d/%d): %s; retrying in %.2fs",
                        getattr(func, "__qualname__", func),
                        attempt,
                        attempts,
                        exc,
                        pause,
                    )
                    sleep(pause)
                    pause *= backoff
            raise AssertionError("unreachable")

        return wrapper

    return decorator
