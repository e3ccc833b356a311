"""Declarative retry policies for blocking and asyncio call sites."""

from __future__ import annotations

from .config import DEFAULT_RETRY_POLICY, RetryPolicy, RetrySettings
from .core import BackoffStrategy, RetryMode
from .resilience import (
    Retry,
    RetryExhaustedError,
    compute_delay,
    format_fail_log,
    retry,
    retry_async,
    retry_if,
    retry_if_async,
    retry_if_exception,
    retry_if_exception_async,
    retrying,
)

__all__ = [
    "DEFAULT_RETRY_POLICY",
    "BackoffStrategy",
    "Retry",
    "RetryExhaustedError",
    "RetryMode",
    "RetryPolicy",
    "RetrySettings",
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
