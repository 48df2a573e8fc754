"""Transient animation flags driven by state-machine events.

Each flag owns one cancelable timer. Setting a flag that is already active
cancels its timer and schedules a fresh one, so pulses restart rather than
stack. Entry reveal is the exception to auto-clearing: it turns on once,
after a short delay, and stays on for the session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Callable, Iterable

from goalbar.models import AnimationFlags, Completed, EntryReady, Event, Incremented, Reset
from goalbar.scheduling import Scheduler, TimerHandle

if TYPE_CHECKING:
    from goalbar.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnimationDurations:
    """Timer lengths in seconds."""

    entry_delay: float = 0.2
    add_pulse: float = 0.6
    complete_pulse: float = 1.1
    reset_shake: float = 0.5

    def __post_init__(self) -> None:
        for name in ("entry_delay", "add_pulse", "complete_pulse", "reset_shake"):
            if getattr(self, name) < 0:
                raise ValueError(f"Animation duration {name} must not be negative")

    @classmethod
    def from_settings(cls, settings: Settings) -> AnimationDurations:
        return cls(
            entry_delay=settings.entry_delay_ms / 1000,
            add_pulse=settings.add_pulse_ms / 1000,
            complete_pulse=settings.complete_pulse_ms / 1000,
            reset_shake=settings.reset_shake_ms / 1000,
        )


class AnimationController:
    def __init__(
        self,
        scheduler: Scheduler,
        durations: AnimationDurations | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._durations = durations or AnimationDurations()
        self._on_change = on_change
        self._flags = AnimationFlags()
        self._handles: dict[str, TimerHandle] = {}
        self._generation: dict[str, int] = {}
        self._closed = False

    @property
    def flags(self) -> AnimationFlags:
        return self._flags

    @property
    def closed(self) -> bool:
        return self._closed

    def active_timers(self) -> int:
        return len(self._handles)

    def apply(self, events: Iterable[Event]) -> None:
        """Feed the events of one mutation.

        A reset in the batch drops any completion from the same batch.
        """
        events = list(events)
        has_reset = any(isinstance(e, Reset) for e in events)
        for event in events:
            if has_reset and isinstance(event, Completed):
                continue
            self.handle(event)

    def handle(self, event: Event) -> None:
        if self._closed:
            return
        if isinstance(event, EntryReady):
            if not self._flags.entry_revealed:
                self._schedule("entry_revealed", self._durations.entry_delay, True)
        elif isinstance(event, Incremented):
            self._pulse("add_pulse_active", self._durations.add_pulse)
        elif isinstance(event, Completed):
            self._pulse("complete_pulse_active", self._durations.complete_pulse)
        elif isinstance(event, Reset):
            self._pulse("reset_shake_active", self._durations.reset_shake)

    def close(self) -> None:
        """Cancel every pending timer; later events are ignored."""
        for handle in self._handles.values():
            handle.cancel()
        if self._handles:
            logger.debug("Canceled %d animation timer(s)", len(self._handles))
        self._handles.clear()
        self._closed = True

    # ── Internals ─────────────────────────────────────────────

    def _pulse(self, name: str, duration: float) -> None:
        self._flags = replace(self._flags, **{name: True})
        self._schedule(name, duration, False)

    def _schedule(self, name: str, delay: float, value: bool) -> None:
        old = self._handles.pop(name, None)
        if old is not None:
            old.cancel()
        generation = self._generation.get(name, 0) + 1
        self._generation[name] = generation
        self._handles[name] = self._scheduler.call_later(
            delay, lambda: self._fire(name, value, generation)
        )

    def _fire(self, name: str, value: bool, generation: int) -> None:
        # a stale timer that slipped past cancel() must not touch the flag
        if self._closed or self._generation.get(name) != generation:
            return
        self._handles.pop(name, None)
        self._flags = replace(self._flags, **{name: value})
        if self._on_change is not None:
            self._on_change()
