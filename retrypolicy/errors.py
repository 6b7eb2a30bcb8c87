"""Exception types raised by retry policies and cause-chain helpers."""

from __future__ import annotations

from typing import Optional, Type, Union


class InvalidPolicyError(RuntimeError):
    """A retry policy was configured with a non-positive attempt budget."""


class MaxAttemptExceededError(Exception):
    """Raised when every attempt failed with a retryable error.

    The last observed error is kept on ``err`` and as ``__cause__`` so that
    both :func:`unwrap` and ordinary traceback chaining reach it.
    """

    def __init__(self, err: BaseException) -> None:
        super().__init__(f"exceed max retry attempts. Original error: {err}")
        self.err = err
        self.__cause__ = err

    def unwrap(self) -> BaseException:
        return self.err


def unwrap(exc: BaseException) -> Optional[BaseException]:
    """Return the error wrapped by ``exc``, or None."""
    if isinstance(exc, MaxAttemptExceededError):
        return exc.err
    return exc.__cause__


def error_is(
    exc: Optional[BaseException],
    target: Union[BaseException, Type[BaseException]],
) -> bool:
    """Report whether ``target`` appears anywhere in the unwrap chain of ``exc``.

    ``target`` may be an exception instance (matched by identity, for
    sentinel errors) or an exception class (matched with ``isinstance``).
    """
    seen = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        if isinstance(target, type):
            if isinstance(exc, target):
                return True
        elif exc is target:
            return True
        exc = unwrap(exc)
    return False
