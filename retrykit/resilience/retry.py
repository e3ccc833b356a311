from __future__ import annotations

import inspect
from collections.abc import Callable, Coroutine
from functools import partial, wraps
from typing import TYPE_CHECKING, Any, cast

from tenacity import AsyncRetrying, Retrying, stop_after_attempt

from ..config.retry import DEFAULT_RETRY_POLICY, RetryPolicy
from ..core.enums import RetryMode
from ..core.types import P, R
from .backoff import PolicyWait
from .conditions import build_retry_condition
from .errors import RetryExhaustedError, RetryLogicError
from .fail_log import FailureLogger

if TYPE_CHECKING:
    from tenacity import AttemptManager, RetryCallState
    from tenacity.retry import retry_base

    from ..core.types import LogSink, RandomSource
    from .types import AsyncOperation, AsyncSleep, Condition, Operation, Sleep


_MISSING: Any = object()


def _succeeded(attempt: AttemptManager) -> bool:
    outcome = attempt.retry_state.outcome
    return outcome is not None and not outcome.failed


class Retry:
    """Runs operations under one :class:`RetryPolicy`.

    Attempt ``i`` (0-based) that fails with a retryable outcome is followed by
    a wait of ``compute_delay(policy, i)`` milliseconds, unless it was the last
    of the ``max_retries + 1`` attempts. On the last attempt a raised exception
    propagates unchanged; a rejected result raises :class:`RetryExhaustedError`.

    Instances are also decorators: ``@Retry(policy)`` retries the wrapped
    function on any ``Exception``, awaiting between attempts when the function
    is a coroutine function.
    """

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        *,
        rng: RandomSource | None = None,
        log_sink: LogSink | None = None,
        sleep: Sleep | None = None,
        async_sleep: AsyncSleep | None = None,
    ) -> None:
        self._policy = policy if policy is not None else DEFAULT_RETRY_POLICY
        self._sleep = sleep
        self._async_sleep = async_sleep
        self._stop = stop_after_attempt(self._policy.total_attempts)
        self._wait = PolicyWait(self._policy, rng)
        self._fail_logger = FailureLogger(self._policy, log_sink)

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    def _before_sleep(self, retry_state: RetryCallState) -> None:
        self._fail_logger.emit(
            retry_state.attempt_number - 1,
            self._policy.max_retries,
            round(retry_state.upcoming_sleep * 1000),
        )

    def _retrying_kwargs(self, condition: retry_base) -> dict[str, Any]:
        return {
            "stop": self._stop,
            "wait": self._wait,
            "retry": condition,
            "before_sleep": self._before_sleep,
            "reraise": True,
            "retry_error_cls": RetryExhaustedError,
        }

    def _execute(self, operation: Operation[R], condition: retry_base) -> R:
        kwargs = self._retrying_kwargs(condition)
        if self._sleep is not None:
            kwargs["sleep"] = self._sleep

        result: Any = _MISSING
        for attempt in Retrying(**kwargs):
            with attempt:
                result = operation()
            # AttemptManager records None on success; result predicates need the value.
            if _succeeded(attempt):
                attempt.retry_state.set_result(result)

        if result is _MISSING:
            raise RetryLogicError(
                "Sync retry loop completed without success or failure"
            )
        return result

    async def _aexecute(self, operation: AsyncOperation[R], condition: retry_base) -> R:
        kwargs = self._retrying_kwargs(condition)
        if self._async_sleep is not None:
            kwargs["sleep"] = self._async_sleep

        result: Any = _MISSING
        async for attempt in AsyncRetrying(**kwargs):
            with attempt:
                result = await operation()
            # AttemptManager records None on success; result predicates need the value.
            if _succeeded(attempt):
                attempt.retry_state.set_result(result)

        if result is _MISSING:
            raise RetryLogicError(
                "Async retry loop completed without success or failure"
            )
        return result

    def run(self, operation: Operation[R]) -> R:
        """Retry ``operation`` on any ``Exception``."""
        return self._execute(operation, build_retry_condition(RetryMode.ANY_EXCEPTION))

    def run_if(self, operation: Operation[R], condition: Condition[R]) -> R:
        """Retry while ``condition(result)`` is true.

        Exceptions raised by ``operation`` are not retried on any attempt.
        """
        return self._execute(
            operation, build_retry_condition(RetryMode.RESULT, condition=condition)
        )

    def run_if_exception(
        self, operation: Operation[R], *exceptions: type[Exception]
    ) -> R:
        """Retry only when ``operation`` raises one of ``exceptions``."""
        return self._execute(
            operation,
            build_retry_condition(RetryMode.EXCEPTION_TYPES, exceptions=exceptions),
        )

    async def arun(self, operation: AsyncOperation[R]) -> R:
        return await self._aexecute(
            operation, build_retry_condition(RetryMode.ANY_EXCEPTION)
        )

    async def arun_if(self, operation: AsyncOperation[R], condition: Condition[R]) -> R:
        return await self._aexecute(
            operation, build_retry_condition(RetryMode.RESULT, condition=condition)
        )

    async def arun_if_exception(
        self, operation: AsyncOperation[R], *exceptions: type[Exception]
    ) -> R:
        return await self._aexecute(
            operation,
            build_retry_condition(RetryMode.EXCEPTION_TYPES, exceptions=exceptions),
        )

    def __call__(self, func: Callable[P, R]) -> Callable[P, R]:
        if inspect.iscoroutinefunction(func):
            return cast(Callable[P, R], self._wrap_async(func))
        return self._wrap_sync(func)

    def _wrap_async(
        self, func: Callable[P, Coroutine[object, object, R]]
    ) -> Callable[P, Coroutine[object, object, R]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            return await self.arun(partial(func, *args, **kwargs))

        return wrapper

    def _wrap_sync(self, func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            return self.run(partial(func, *args, **kwargs))

        return wrapper


def retrying(
    policy: RetryPolicy | None = None,
    *,
    rng: RandomSource | None = None,
    log_sink: LogSink | None = None,
    sleep: Sleep | None = None,
    async_sleep: AsyncSleep | None = None,
) -> Retry:
    return Retry(
        policy, rng=rng, log_sink=log_sink, sleep=sleep, async_sleep=async_sleep
    )


def retry(operation: Operation[R], policy: RetryPolicy | None = None) -> R:
    """Call ``operation`` until it returns without raising.

    Makes at most ``policy.max_retries + 1`` attempts; the exception of the
    final attempt propagates to the caller unchanged.
    """
    return Retry(policy).run(operation)


def retry_if(
    operation: Operation[R],
    condition: Condition[R],
    policy: RetryPolicy | None = None,
) -> R:
    """Call ``operation`` until ``condition(result)`` is false and return that result.

    Raises
    ------
    RetryExhaustedError
        If every attempt produced a result the condition rejected.
    """
    return Retry(policy).run_if(operation, condition)


def retry_if_exception(
    operation: Operation[R],
    *exceptions: type[Exception],
    policy: RetryPolicy | None = None,
) -> R:
    """Like :func:`retry`, but only exceptions of the given types are retried."""
    return Retry(policy).run_if_exception(operation, *exceptions)


async def retry_async(
    operation: AsyncOperation[R], policy: RetryPolicy | None = None
) -> R:
    return await Retry(policy).arun(operation)


async def retry_if_async(
    operation: AsyncOperation[R],
    condition: Condition[R],
    policy: RetryPolicy | None = None,
) -> R:
    return await Retry(policy).arun_if(operation, condition)


async def retry_if_exception_async(
    operation: AsyncOperation[R],
    *exceptions: type[Exception],
    policy: RetryPolicy | None = None,
) -> R:
    return await Retry(policy).arun_if_exception(operation, *exceptions)
