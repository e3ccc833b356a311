from __future__ import annotations

import pytest

from retrykit.config.retry import RetryPolicy
from retrykit.core.enums import BackoffStrategy


@pytest.fixture
def fast_policy() -> RetryPolicy:
    return RetryPolicy(delay_ms=1, max_delay_ms=10, max_retries=3, fail_log=False)


@pytest.fixture
def exponential_policy() -> RetryPolicy:
    return RetryPolicy(
        delay_ms=100,
        max_delay_ms=1000,
        backoff=BackoffStrategy.EXPONENTIAL,
        exponent=2,
        max_retries=3,
        fail_log=False,
    )


class SleepRecorder:
    """Stands in for the scheduler timer and records requested waits (seconds)."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)

    async def asleep(self, seconds: float) -> None:
        self.calls.append(seconds)

    @property
    def milliseconds(self) -> list[int]:
        return [round(seconds * 1000) for seconds in self.calls]


class FixedRandom:
    def __init__(self, value: float) -> None:
        self.value = value
        self.draws = 0

    def random(self) -> float:
        self.draws += 1
        return self.value


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def fixed_random() -> type[FixedRandom]:
    return FixedRandom
