"""Common ``should_retry`` predicates."""

from __future__ import annotations

from typing import Callable, Type


def retry_on(*exc_types: Type[BaseException]) -> Callable[[BaseException], bool]:
    """Retry errors that are instances of any of ``exc_types``."""

    def predicate(exc: BaseException) -> bool:
        return isinstance(exc, exc_types)

    return predicate


def retry_on_errors(*sentinels: BaseException) -> Callable[[BaseException], bool]:
    """Retry only the given sentinel error objects."""

    def predicate(exc: BaseException) -> bool:
        return any(exc is sentinel for sentinel in sentinels)

    return predicate


def always_retry(exc: BaseException) -> bool:
    return True


def never_retry(exc: BaseException) -> bool:
    return False
