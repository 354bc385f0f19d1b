"""Reentrancy guard for zap entry points.

External calls (router, tokens) can hand control to arbitrary code. The
guard makes any attempt to re-enter a guarded entry point while one is in
flight fail immediately instead of observing intermediate state.
"""

from __future__ import annotations

import functools
import threading
from collections.abc import Callable
from typing import Any, TypeVar

from zapper.errors import ReentrancyViolation

F = TypeVar("F", bound=Callable[..., Any])


class ReentrancyLock:
    """Non-blocking mutual exclusion, released on every exit path.

    Each Zapper owns one lock, created with the rest of its fixed state, so
    the guard covers every entry point of that instance across all threads.
    A separate Zapper instance has its own lock and is not blocked by a zap
    in flight on another one.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    def __enter__(self) -> ReentrancyLock:
        if not self._lock.acquire(blocking=False):
            raise ReentrancyViolation("Reentrant call while another zap is in progress")
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._lock.release()


def nonreentrant(method: F) -> F:
    """Run a method under its instance's ``_reentrancy_lock``."""

    @functools.wraps(method)
    def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        with self._reentrancy_lock:
            return method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]
