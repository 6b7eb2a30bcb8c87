"""Basic smoke test for package imports and flow."""

from retrypolicy import (
    MaxAttemptExceededError,
    RetryPolicy,
    error_is,
    retry_call,
    retry_on_errors,
)


def test_smoke_flow():
    busy = ConnectionError("busy")
    policy = RetryPolicy(retry_on_errors(busy), 3, 0, 0)
    answers = iter([busy, "ready"])

    def probe(name):
        answer = next(answers)
        if isinstance(answer, Exception):
            raise answer
        return f"{name}: {answer}"

    assert retry_call(policy, probe, "db") == "db: ready"

    def always_busy():
        raise busy

    try:
        policy.execute(always_busy)
    except MaxAttemptExceededError as exc:
        assert error_is(exc, busy)
    else:
        raise AssertionError("expected exhaustion")
