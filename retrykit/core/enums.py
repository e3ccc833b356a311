from __future__ import annotations

from enum import StrEnum


class BackoffStrategy(StrEnum):
    FIXED = "fixed"
    EXPONENTIAL = "exponential"


class RetryMode(StrEnum):
    """Which outcome of an attempt triggers another attempt."""

    ANY_EXCEPTION = "any_exception"
    RESULT = "result"
    EXCEPTION_TYPES = "exception_types"
