from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeAlias, TypeVar

T = TypeVar("T")

Operation: TypeAlias = Callable[[], T]
AsyncOperation: TypeAlias = Callable[[], Awaitable[T]]
Condition: TypeAlias = Callable[[T], bool]
Sleep: TypeAlias = Callable[[float], None]
AsyncSleep: TypeAlias = Callable[[float], Awaitable[None]]
