"""Argument and result forwarding around :meth:`RetryPolicy.execute`."""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

from .policy import RetryPolicy

T = TypeVar("T")


def retry_call(policy: RetryPolicy, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Call ``func(*args, **kwargs)`` under ``policy`` and return its result."""
    return policy.execute(lambda: func(*args, **kwargs))


def retrying(policy: RetryPolicy) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator running every call of the wrapped function under ``policy``."""

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            return retry_call(policy, func, *args, **kwargs)

        return wrapper

    return decorator
