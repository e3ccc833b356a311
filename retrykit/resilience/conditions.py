from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from tenacity import retry_if_exception_type, retry_if_result
from tenacity.retry import retry_base

from ..core.enums import RetryMode


def _validate_exception_types(
    exceptions: Sequence[type[BaseException]],
) -> tuple[type[Exception], ...]:
    if not exceptions:
        raise ValueError("At least one exception type is required")

    for exc_type in exceptions:
        if not (isinstance(exc_type, type) and issubclass(exc_type, Exception)):
            raise TypeError(
                f"Only Exception subclasses can be retried, got {exc_type!r}"
            )

    return tuple(exceptions)  # type: ignore[arg-type]


def build_retry_condition(
    mode: RetryMode,
    *,
    condition: Callable[[Any], bool] | None = None,
    exceptions: Sequence[type[BaseException]] = (),
) -> retry_base:
    """Select the tenacity predicate deciding whether an attempt is retried.

    Parameters
    ----------
    mode : RetryMode
        ``ANY_EXCEPTION`` retries every ``Exception``; ``RESULT`` retries while
        ``condition(result)`` is true and lets raised exceptions through;
        ``EXCEPTION_TYPES`` retries only instances of ``exceptions``.
    condition : Callable[[Any], bool] | None
        Required for ``RESULT``.
    exceptions : Sequence[type[BaseException]]
        Required for ``EXCEPTION_TYPES``; each must subclass ``Exception``.

    Raises
    ------
    ValueError
        If the argument a mode needs is missing.
    TypeError
        If an exception type is not an ``Exception`` subclass.
    """
    if mode is RetryMode.ANY_EXCEPTION:
        return retry_if_exception_type(Exception)

    if mode is RetryMode.RESULT:
        if condition is None:
            raise ValueError("RESULT mode requires a condition")
        return retry_if_result(condition)

    if mode is RetryMode.EXCEPTION_TYPES:
        return retry_if_exception_type(_validate_exception_types(exceptions))

    raise ValueError(f"Unknown retry mode: {mode!r}")
