from __future__ import annotations

from .retry import DEFAULT_RETRY_POLICY, RetryPolicy, RetrySettings

__all__ = [
    "DEFAULT_RETRY_POLICY",
    "RetryPolicy",
    "RetrySettings",
]
