"""Utility functions."""

from .classifier import (
    Transience,
    classify_error,
    classify_response,
    is_transient_error,
    raise_for_transient_response,
)
from .retry import DEFAULT_RETRY_POLICY, NO_RETRY_POLICY, RetryPolicy, retry_async

__all__ = [
    "DEFAULT_RETRY_POLICY",
    "NO_RETRY_POLICY",
    "RetryPolicy",
    "Transience",
    "classify_error",
    "classify_response",
    "is_transient_error",
    "raise_for_transient_response",
    "retry_async",
]
