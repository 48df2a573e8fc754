"""The single command surface and state owner for GoalBar.

Commands run to completion synchronously:

    1. pure transition functions compute the next SessionState + events
    2. completion is derived (false -> true fires Completed, never on reset)
    3. the state is swapped in one assignment
    4. animation flags are updated from the events
    5. listeners are notified once with the finished snapshot

So no observer ever sees a half-applied command.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable

from goalbar import progress, reset, staging
from goalbar.animation import AnimationController, AnimationDurations
from goalbar.formatting import progress_label
from goalbar.i18n import normalize_locale, translate
from goalbar.models import (
    Completed,
    EntryReady,
    Event,
    GoalType,
    PendingIncrement,
    ProgressModel,
    Reset,
    SessionState,
    Snapshot,
)
from goalbar.scheduling import ManualScheduler, Scheduler
from goalbar.settings import Settings

logger = logging.getLogger(__name__)

Listener = Callable[[Snapshot], None]


class AppController:
    def __init__(
        self,
        settings: Settings | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.settings = settings or Settings()
        goal_type = self.settings.default_type
        self._state = SessionState(
            progress=ProgressModel(
                goal=progress.normalize_goal(self.settings.default_goal, goal_type),
                current=0.0,
                type=goal_type,
            ),
        )
        self._locale = normalize_locale(self.settings.locale)
        self._animation = AnimationController(
            scheduler if scheduler is not None else ManualScheduler(),
            AnimationDurations.from_settings(self.settings),
            on_change=self._notify,
        )
        self._listeners: list[Listener] = []
        self._started = False

    # ── Read side ─────────────────────────────────────────────

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def locale(self) -> str:
        return self._locale

    @property
    def snapshot(self) -> Snapshot:
        model = self._state.progress
        return Snapshot(
            goal=model.goal,
            current=model.current,
            type=model.type,
            percent=progress.percent_complete(model),
            pending_amount=self._state.pending.amount,
            reset_flow_state=self._state.reset_flow,
            animation_flags=self._animation.flags,
            complete=progress.is_complete(model),
            locale=self._locale,
            max_pending=progress.remaining(model),
            min_unit=model.type.min_unit,
        )

    def is_complete(self) -> bool:
        return progress.is_complete(self._state.progress)

    def label(self) -> str:
        model = self._state.progress
        return progress_label(model.current, model.goal, model.type, self._locale)

    def translate(self, key: str) -> str:
        return translate(key, self._locale)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with a snapshot after every change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── Lifecycle ─────────────────────────────────────────────

    def start(self) -> list[Event]:
        """Fire EntryReady once per session."""
        if self._started:
            return []
        self._started = True
        return self._commit(self._state, [EntryReady()])

    def close(self) -> None:
        """Cancel pending animation timers and drop listeners."""
        self._animation.close()
        self._listeners.clear()

    # ── Commands ──────────────────────────────────────────────

    def set_goal(self, value: Any) -> list[Event]:
        model = progress.set_goal(self._state.progress, value)
        return self._commit(replace(self._state, progress=model), [])

    def set_type(self, value: Any) -> list[Event]:
        model = progress.set_type(self._state.progress, value)
        return self._commit(
            replace(self._state, progress=model, pending=PendingIncrement()), []
        )

    def set_pending_amount(self, value: Any) -> list[Event]:
        pending = staging.set_pending_amount(value, self._state.progress.type)
        return self._commit(replace(self._state, pending=pending), [])

    def commit_increment(self) -> list[Event]:
        model, pending, events = staging.commit(self._state.progress, self._state.pending)
        return self._commit(replace(self._state, progress=model, pending=pending), events)

    def request_reset(self) -> list[Event]:
        flow, events = reset.request_reset(self._state.reset_flow)
        return self._commit(replace(self._state, reset_flow=flow), events)

    def confirm_reset(self) -> list[Event]:
        flow, model, events = reset.confirm_reset(self._state.reset_flow, self._state.progress)
        return self._commit(replace(self._state, progress=model, reset_flow=flow), events)

    def cancel_reset(self) -> list[Event]:
        flow, events = reset.cancel_reset(self._state.reset_flow)
        return self._commit(replace(self._state, reset_flow=flow), events)

    def set_locale(self, locale: str | None) -> list[Event]:
        code = normalize_locale(locale)
        if code == self._locale:
            return []
        self._locale = code
        self._notify()
        return []

    # ── Internals ─────────────────────────────────────────────

    def _commit(self, new_state: SessionState, events: list[Event]) -> list[Event]:
        old_state = self._state
        events = list(events)

        was_complete = progress.is_complete(old_state.progress)
        now_complete = progress.is_complete(new_state.progress)
        has_reset = any(isinstance(e, Reset) for e in events)
        if now_complete and not was_complete and not has_reset:
            model = new_state.progress
            events.append(Completed(current=model.current, goal=model.goal))
            logger.info("Goal reached: %s / %s", model.current, model.goal)
        if has_reset:
            logger.info("Progress reset from %s", old_state.progress.current)

        if new_state == old_state and not events:
            return events

        self._state = new_state
        self._animation.apply(events)
        logger.debug("State now %s; events %s", new_state, [e.kind for e in events])
        self._notify()
        return events

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot
        for listener in list(self._listeners):
            listener(snap)


def goal_type_choices(locale: str | None = None) -> list[tuple[str, GoalType]]:
    """(label, value) pairs for a goal type selector."""
    return [(translate(f"type_{t.value}", locale), t) for t in GoalType]
