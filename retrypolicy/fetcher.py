"""HTTP fetching with retries on transient failures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from curl_cffi import requests
from curl_cffi.requests import RequestsError

from .config import Settings, settings
from .policy import RetryPolicy
from .predicates import retry_on


class HTTPStatusError(Exception):
    """Non-success response that should not be retried."""

    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(f"HTTP {status_code} for {url}")
        self.url = url
        self.status_code = status_code


class RetryableStatusError(HTTPStatusError):
    """Response status signalling a transient server condition (429, 5xx)."""


@dataclass
class FetchResult:
    """A successfully fetched response."""

    url: str
    status_code: int
    text: str
    attempts: int = 1


RETRYABLE_ERRORS = (RetryableStatusError, RequestsError)


def default_policy(defaults: Optional[Settings] = None) -> RetryPolicy:
    """Retry transient failures with the environment-aware defaults."""
    defaults = defaults or Settings.from_env()
    return RetryPolicy(
        retry_on(*RETRYABLE_ERRORS),
        defaults.max_attempts,
        defaults.initial_delay_ms,
        defaults.max_delay_ms,
    )


class Fetcher:
    """Fetch URLs, retrying connection errors and retryable statuses."""

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        timeout: Optional[int] = None,
        retry_status_codes: Optional[Sequence[int]] = None,
    ) -> None:
        defaults = Settings.from_env()
        self.policy = policy or default_policy(defaults)
        self.timeout = timeout if timeout is not None else defaults.timeout
        self.retry_status_codes = tuple(
            retry_status_codes if retry_status_codes is not None else defaults.retry_status_codes
        )

    def fetch(self, url: str) -> FetchResult:
        attempts = 0

        def attempt() -> FetchResult:
            nonlocal attempts
            attempts += 1
            response = self._request(url)
            status = response.status_code
            final_url = response.url or url
            if status in self.retry_status_codes:
                print(f"[Fetcher] {status} for {url} (attempt {attempts})")
                raise RetryableStatusError(final_url, status)
            if status >= 400:
                raise HTTPStatusError(final_url, status)
            return FetchResult(url=final_url, status_code=status, text=response.text, attempts=attempts)

        return self.policy.execute(attempt)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #
    def _request(self, url: str) -> Any:
        headers = {"User-Agent": settings.user_agent}
        return requests.get(
            url,
            headers=headers,
            timeout=self.timeout,
            impersonate="chrome120",
            allow_redirects=True,
        )
