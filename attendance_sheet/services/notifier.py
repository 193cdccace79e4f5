"""Transient user-facing notices that clear themselves after a delay."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

SUCCESS = "success"
ERROR = "error"


@dataclass(frozen=True)
class Notice:
    type: str
    text: str
    expires_at: float


class Notifier:
    """Holds at most one notice; a newer notice replaces the current one."""

    def __init__(self, ttl: float = 3.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl
        self._clock = clock
        self._notice: Notice | None = None

    def _show(self, kind: str, text: str, ttl: float | None) -> Notice:
        self._notice = Notice(kind, text, self._clock() + (self.ttl if ttl is None else ttl))
        return self._notice

    def success(self, text: str, ttl: float | None = None) -> Notice:
        return self._show(SUCCESS, text, ttl)

    def error(self, text: str, ttl: float | None = None) -> Notice:
        return self._show(ERROR, text, ttl)

    @property
    def current(self) -> Notice | None:
        if self._notice is not None and self._clock() >= self._notice.expires_at:
            self._notice = None
        return self._notice

    def clear(self) -> None:
        self._notice = None
