from __future__ import annotations

from .backoff import PolicyWait, compute_delay
from .conditions import build_retry_condition
from .errors import RetryExhaustedError, RetryLogicError
from .fail_log import FailureLogger, format_fail_log
from .retry import (
    Retry,
    retry,
    retry_async,
    retry_if,
    retry_if_async,
    retry_if_exception,
    retry_if_exception_async,
    retrying,
)

__all__ = [
    "FailureLogger",
    "PolicyWait",
    "Retry",
    "RetryExhaustedError",
    "RetryLogicError",
    "build_retry_condition",
    "compute_delay",
    "format_fail_log",
    "retry",
    "retry_async",
    "retry_if",
    "retry_if_async",
    "retry_if_exception",
    "retry_if_exception_async",
    "retrying",
]
