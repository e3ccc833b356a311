"""Core module exports."""

from __future__ import annotations

from .enums import BackoffStrategy, RetryMode
from .types import LogLevel, LogSink, RandomSource

__all__ = [
    "BackoffStrategy",
    "LogLevel",
    "LogSink",
    "RandomSource",
    "RetryMode",
]
