"""Tests for retrying HTTP fetches on transient failures."""

from __future__ import annotations

from dataclasses import dataclass

import pytest
from curl_cffi.requests import RequestsError

from retrypolicy import MaxAttemptExceededError, RetryPolicy, retry_on
from retrypolicy.fetcher import RETRYABLE_ERRORS, Fetcher, HTTPStatusError, RetryableStatusError


@dataclass
class FakeResponse:
    status_code: int
    text: str = ""
    url: str = ""


class StubFetcher(Fetcher):
    def __init__(self, responses, max_attempts: int = 3):
        super().__init__(policy=RetryPolicy(retry_on(*RETRYABLE_ERRORS), max_attempts, 0, 0))
        self._responses = list(responses)
        self.requests = 0

    def _request(self, url: str):
        self.requests += 1
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def test_fetch_retries_retryable_status_then_succeeds():
    fetcher = StubFetcher([FakeResponse(503), FakeResponse(200, "<html>ok</html>", "http://example.com/final")])
    result = fetcher.fetch("http://example.com")

    assert result.text == "<html>ok</html>"
    assert result.url == "http://example.com/final"
    assert result.status_code == 200
    assert result.attempts == 2
    assert fetcher.requests == 2


def test_fetch_retries_transport_errors():
    fetcher = StubFetcher([RequestsError("connection reset"), FakeResponse(200, "body")])
    result = fetcher.fetch("http://example.com")
    assert result.text == "body"
    assert result.url == "http://example.com"
    assert fetcher.requests == 2


def test_fetch_gives_up_after_budget():
    fetcher = StubFetcher([FakeResponse(429)] * 3)
    with pytest.raises(MaxAttemptExceededError) as excinfo:
        fetcher.fetch("http://example.com")
    assert isinstance(excinfo.value.err, RetryableStatusError)
    assert excinfo.value.err.status_code == 429
    assert fetcher.requests == 3


def test_client_errors_are_terminal():
    fetcher = StubFetcher([FakeResponse(404), FakeResponse(200)])
    with pytest.raises(HTTPStatusError) as excinfo:
        fetcher.fetch("http://example.com/missing")
    assert not isinstance(excinfo.value, RetryableStatusError)
    assert excinfo.value.status_code == 404
    assert fetcher.requests == 1


def test_default_policy_honours_environment(monkeypatch):
    monkeypatch.setenv("RETRYPOLICY_MAX_ATTEMPTS", "2")
    monkeypatch.setenv("RETRYPOLICY_TIMEOUT", "3")
    fetcher = Fetcher()
    assert fetcher.policy.max_attempts == 2
    assert fetcher.timeout == 3
