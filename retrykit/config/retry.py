from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.enums import BackoffStrategy
from ..core.types import LogLevel


class RetryPolicy(BaseModel):
    """Immutable policy governing one retry sequence.

    Durations are integer milliseconds. ``max_retries`` counts retries after the
    first attempt, so a sequence makes at most ``max_retries + 1`` attempts.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Delay schedule
    delay_ms: int = Field(
        default=100, ge=0, description="Base wait after the first failure (ms)"
    )
    max_delay_ms: int = Field(
        default=1000, ge=0, description="Upper clamp on any computed wait (ms)"
    )
    jitter: bool = Field(
        default=False, description="Scale the base delay by a uniform factor in [0, 1)"
    )
    backoff: BackoffStrategy = Field(
        default=BackoffStrategy.FIXED, description="Fixed or exponential growth"
    )
    exponent: int = Field(
        default=2, ge=1, description="Exponential base (ignored for fixed backoff)"
    )

    # Budget
    max_retries: int = Field(
        default=3, ge=0, description="Retries after the first attempt"
    )

    # Diagnostics
    log_level: LogLevel = Field(
        default="INFO", description="Severity of the failure log"
    )
    fail_log: bool = Field(default=True, description="Log before each wait")
    custom_fail_log: str = Field(
        default="",
        description=(
            "Template with $1 (attempt), $2 (max retries), $3 (delay ms); "
            "empty = built-in message"
        ),
    )

    @property
    def total_attempts(self) -> int:
        return self.max_retries + 1


DEFAULT_RETRY_POLICY = RetryPolicy()


class RetrySettings(BaseSettings):
    """Retry policy loaded from the environment.

    Example: ``RETRY_POLICY__MAX_RETRIES=5 RETRY_POLICY__BACKOFF=exponential``.
    """

    model_config = SettingsConfigDict(
        env_prefix="RETRY_",
        env_nested_delimiter="__",
        extra="ignore",
        frozen=True,
    )

    policy: RetryPolicy = Field(default_factory=lambda: DEFAULT_RETRY_POLICY)
