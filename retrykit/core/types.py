from __future__ import annotations

from typing import Any, Literal, ParamSpec, Protocol, TypeAlias, TypeVar

P = ParamSpec("P")
R = TypeVar("R")

LogLevel: TypeAlias = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"]


class RandomSource(Protocol):
    """Uniform float generator in ``[0, 1)``, e.g. ``random.Random``."""

    def random(self) -> float: ...


class LogSink(Protocol):
    """Accepts ``(severity, message)``, e.g. a stdlib ``logging.Logger``."""

    def log(self, level: int, msg: str, /) -> Any: ...
