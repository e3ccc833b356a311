from __future__ import annotations

from tenacity import Future, RetryError


class RetryExhaustedError(RetryError):
    """Raised when a result predicate never accepted a value.

    The rejected value of the last attempt stays on ``last_attempt`` and is
    never returned to the caller.
    """

    def __init__(self, last_attempt: Future) -> None:
        super().__init__(last_attempt)
        self.attempts = last_attempt.attempt_number

    def __str__(self) -> str:
        return f"Maximum attempts reached ({self.attempts} attempts)"


class RetryLogicError(RuntimeError): ...
