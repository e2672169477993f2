"""Ok/Err wrapper for calls to external collaborators.

Every network or storage call made while handling a chat message goes
through :func:`capture`, so the dispatcher decides explicitly what a
failure turns into instead of relying on a blanket ``try``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: Exception

    def describe(self) -> str:
        """Short ``Type: message`` string for log lines."""
        return f"{type(self.error).__name__}: {self.error}"


async def capture(awaitable: Awaitable[Any]) -> Ok[Any] | Err:
    """Await *awaitable* and wrap its result.

    Only ``Exception`` is caught; cancellation propagates.
    """
    try:
        return Ok(await awaitable)
    except Exception as exc:
        return Err(exc)


def attempt(func: Callable[..., T], *args: Any) -> Ok[T] | Err:
    """Synchronous counterpart of :func:`capture`."""
    try:
        return Ok(func(*args))
    except Exception as exc:
        return Err(exc)
