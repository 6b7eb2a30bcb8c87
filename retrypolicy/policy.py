"""Retry policy with exponential backoff and full jitter."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, TypeVar

from .errors import InvalidPolicyError, MaxAttemptExceededError

T = TypeVar("T")


def backoff_bounds(initial_delay_ms: int, max_delay_ms: int) -> Iterator[int]:
    """Yield the successive upper bounds (ms) of the sleep between attempts."""
    delay = initial_delay_ms
    while True:
        yield delay
        delay = delay * 2
        if delay > max_delay_ms:
            delay = max_delay_ms


@dataclass(frozen=True)
class RetryPolicy:
    """Re-invoke a fallible operation while ``should_retry`` accepts its error.

    ``max_attempts`` counts every invocation, the first one included.
    Delays are in milliseconds; the sleep before each retry is drawn
    uniformly from ``[0, bound)`` where the bound doubles after every retried
    attempt and is clamped to ``max_delay_ms``.
    """

    should_retry: Callable[[BaseException], bool]
    max_attempts: int
    initial_delay_ms: int
    max_delay_ms: int

    def execute(self, operation: Callable[[], T]) -> T:
        """Run ``operation`` until it returns, fails terminally or the budget is spent.

        A terminal error is re-raised unchanged. Exhausting the budget raises
        :class:`MaxAttemptExceededError` chained from the last error.
        """
        if self.max_attempts <= 0:
            raise InvalidPolicyError(f"max_attempts must be greater than 0, got {self.max_attempts}")

        bounds = backoff_bounds(self.initial_delay_ms, self.max_delay_ms)
        last_error: Optional[Exception] = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                return operation()
            except InvalidPolicyError:
                raise
            except Exception as exc:
                last_error = exc
                if not self.should_retry(exc):
                    raise
            if attempt == self.max_attempts:
                break
            real_delay = int(next(bounds) * random.random())
            time.sleep(real_delay / 1000)

        raise MaxAttemptExceededError(last_error) from last_error
