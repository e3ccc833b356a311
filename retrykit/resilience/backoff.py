from __future__ import annotations

import random
from typing import TYPE_CHECKING

from tenacity.wait import wait_base

from ..core.enums import BackoffStrategy

if TYPE_CHECKING:
    from tenacity import RetryCallState

    from ..config.retry import RetryPolicy
    from ..core.types import RandomSource

# Shared by every sequence that does not inject its own source.
_default_rng = random.Random()


def compute_delay(
    policy: RetryPolicy, attempt_index: int, rng: RandomSource | None = None
) -> int:
    """Compute the wait in milliseconds after attempt ``attempt_index`` failed.

    Parameters
    ----------
    policy : RetryPolicy
        Policy supplying the base delay, backoff rule and clamp.
    attempt_index : int
        0-based index of the attempt that just failed. The first failure uses
        ``exponent ** 0``, i.e. the un-amplified base delay.
    rng : RandomSource | None
        Jitter source, drawn once per call. Defaults to a process-wide
        ``random.Random``.

    Returns
    -------
    int
        Delay clamped to ``[0, policy.max_delay_ms]``.
    """
    if attempt_index < 0:
        raise ValueError(f"attempt_index must be >= 0, got {attempt_index}")

    delay = policy.delay_ms
    if policy.jitter:
        delay = int(delay * (rng or _default_rng).random())

    if policy.backoff is BackoffStrategy.EXPONENTIAL:
        delay *= policy.exponent**attempt_index

    return max(0, min(delay, policy.max_delay_ms))


class PolicyWait(wait_base):
    """tenacity wait strategy backed by :func:`compute_delay`."""

    def __init__(self, policy: RetryPolicy, rng: RandomSource | None = None) -> None:
        self._policy = policy
        self._rng = rng

    def __call__(self, retry_state: RetryCallState) -> float:
        # No wait follows the final attempt, so no jitter is drawn for it.
        if retry_state.attempt_number >= self._policy.total_attempts:
            return 0.0
        attempt_index = retry_state.attempt_number - 1
        return compute_delay(self._policy, attempt_index, self._rng) / 1000
