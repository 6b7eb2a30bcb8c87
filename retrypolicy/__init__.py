"""retrypolicy package exports."""

from .errors import InvalidPolicyError, MaxAttemptExceededError, error_is, unwrap
from .forwarding import retry_call, retrying
from .policy import RetryPolicy, backoff_bounds
from .predicates import always_retry, never_retry, retry_on, retry_on_errors

__all__ = [
    "RetryPolicy",
    "backoff_bounds",
    "InvalidPolicyError",
    "MaxAttemptExceededError",
    "error_is",
    "unwrap",
    "retry_call",
    "retrying",
    "retry_on",
    "retry_on_errors",
    "always_retry",
    "never_retry",
]
