"""Rest timer: countdown between sets.

States: idle -> running <-> paused -> completed, and reset() back to idle from
anywhere. The countdown is driven by one-shot ticks from a ``TickSource``; at most
one tick is pending at a time and it is cancelled on pause, reset and close. Calls
that make no sense in the current state (pause while idle, start once completed)
are silently ignored.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any, Protocol

from loguru import logger

from app.core.enums import NotificationKind, TimerState

DEFAULT_REST_SECONDS = 90


class TickHandle(Protocol):
    def cancel(self) -> None: ...


class TickSource(Protocol):
    def schedule(self, delay: float, callback: Callable[[], None]) -> TickHandle: ...


class NotificationSink(Protocol):
    def notify(self, event_kind: str, payload: dict[str, Any]) -> None: ...


class AsyncioTickSource:
    """Schedules ticks on an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def schedule(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class LoggingNotificationSink:
    """Sink that only writes the event to the log."""

    def notify(self, event_kind: str, payload: dict[str, Any]) -> None:
        logger.info("Notification {}: {}", event_kind, payload)


def format_time(seconds: int) -> str:
    """M:SS, e.g. 90 -> "1:30"."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes}:{secs:02d}"


class RestTimer:
    def __init__(
        self,
        default_seconds: int = DEFAULT_REST_SECONDS,
        *,
        tick_source: TickSource,
        sink: NotificationSink,
        tick_interval: float = 1.0,
        on_complete: Callable[[], None] | None = None,
    ) -> None:
        if default_seconds < 0:
            raise ValueError("default_seconds must be >= 0")
        self.default_seconds = int(default_seconds)
        self.remaining = self.default_seconds
        self.state = TimerState.IDLE
        self._tick_source = tick_source
        self._sink = sink
        self._tick_interval = tick_interval
        self._on_complete = on_complete
        self._handle: TickHandle | None = None
        self._countdown_from = self.remaining

    def __enter__(self) -> RestTimer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def is_running(self) -> bool:
        return self.state is TimerState.RUNNING

    @property
    def is_completed(self) -> bool:
        return self.state is TimerState.COMPLETED

    @property
    def display(self) -> str:
        return format_time(self.remaining)

    def start(self) -> None:
        if self.state not in (TimerState.IDLE, TimerState.PAUSED):
            return
        if self.state is TimerState.IDLE:
            self._countdown_from = self.remaining
        if self.remaining <= 0:
            self._complete()
            return
        self.state = TimerState.RUNNING
        self._schedule_tick()

    def pause(self) -> None:
        if self.state is not TimerState.RUNNING:
            return
        self._cancel_tick()
        self.state = TimerState.PAUSED

    def reset(self, seconds: int | None = None, *, autostart: bool = False) -> None:
        """Back to idle with ``seconds`` (or the default) on the clock."""
        if seconds is not None and seconds < 0:
            raise ValueError("seconds must be >= 0")
        self._cancel_tick()
        self.state = TimerState.IDLE
        self.remaining = self.default_seconds if seconds is None else int(seconds)
        if autostart:
            self.start()

    def adjust_time(self, delta_seconds: int) -> None:
        if self.state is TimerState.COMPLETED:
            return
        self.remaining = max(0, self.remaining + int(delta_seconds))
        if self.remaining == 0 and self.state is TimerState.RUNNING:
            self._cancel_tick()
            self._complete()

    def set_preset(self, seconds: int) -> None:
        """Put ``seconds`` on the clock; a completed timer goes back to idle."""
        if seconds < 0:
            raise ValueError("seconds must be >= 0")
        self.remaining = int(seconds)
        if self.state is TimerState.COMPLETED:
            self.state = TimerState.IDLE

    def close(self) -> None:
        self._cancel_tick()

    def snapshot(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "remaining": self.remaining,
            "display": self.display,
            "default_seconds": self.default_seconds,
        }

    def _schedule_tick(self) -> None:
        self._cancel_tick()
        self._handle = self._tick_source.schedule(self._tick_interval, self._tick)

    def _cancel_tick(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _tick(self) -> None:
        self._handle = None
        # a tick that outlived pause/reset must not touch the new state
        if self.state is not TimerState.RUNNING:
            return
        self.remaining = max(0, self.remaining - 1)
        if self.remaining == 0:
            self._complete()
        else:
            self._schedule_tick()

    def _complete(self) -> None:
        self.remaining = 0
        self.state = TimerState.COMPLETED
        logger.info("Rest timer completed after {}s", self._countdown_from)
        self._sink.notify(
            NotificationKind.REST_COMPLETE.value,
            {"duration_seconds": self._countdown_from},
        )
        if self._on_complete is not None:
            self._on_complete()
