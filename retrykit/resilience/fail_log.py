from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from ..logger import get_logger

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

    from ..config.retry import RetryPolicy
    from ..core.types import LogSink

logger: BoundLogger = get_logger(__name__)

_PLACEHOLDER = re.compile(r"\$(\$|\d+)")


def format_fail_log(
    template: str, attempt_index: int, max_retries: int, delay_ms: int
) -> str:
    """Substitute ``$1`` (attempt), ``$2`` (max retries) and ``$3`` (delay).

    Placeholders outside ``$1``-``$3`` are left as written and ``$$`` renders a
    literal ``$``.
    """
    values = (str(attempt_index), str(max_retries), str(delay_ms))

    def _substitute(match: re.Match[str]) -> str:
        token = match.group(1)
        if token == "$":
            return "$"
        position = int(token) - 1
        if 0 <= position < len(values):
            return values[position]
        return match.group(0)

    return _PLACEHOLDER.sub(_substitute, template)


class FailureLogger:
    """Emits the diagnostic logged before each inter-attempt wait."""

    def __init__(self, policy: RetryPolicy, sink: LogSink | None = None) -> None:
        self._policy = policy
        self._sink = sink
        self._level = logging.getLevelNamesMapping()[policy.log_level]

    def build_message(self, attempt_index: int, max_retries: int, delay_ms: int) -> str:
        if self._policy.custom_fail_log:
            return format_fail_log(
                self._policy.custom_fail_log, attempt_index, max_retries, delay_ms
            )
        return f"Attempt: {attempt_index}/{max_retries}, retrying in {delay_ms}ms"

    def emit(self, attempt_index: int, max_retries: int, delay_ms: int) -> None:
        if not self._policy.fail_log:
            return

        try:
            message = self.build_message(attempt_index, max_retries, delay_ms)
            if self._sink is not None:
                self._sink.log(self._level, message)
            else:
                logger.log(
                    self._level,
                    message,
                    attempt=attempt_index,
                    max_retries=max_retries,
                    delay_ms=delay_ms,
                )
        except Exception:  # noqa: BLE001
            # A broken sink must not replace the failure being retried.
            return
