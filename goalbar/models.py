"""Typed dataclasses for the GoalBar state machine.

State types are frozen: transitions build new instances instead of mutating.
to_dict() uses camelCase keys, the shape renderers and the JSON API consume.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar


# ── Enumerations ──────────────────────────────────────────────


class GoalType(str, Enum):
    CURRENCY = "currency"
    ELEMENTS = "elements"

    @property
    def min_unit(self) -> float:
        """Smallest meaningful increment for this goal type."""
        return 0.01 if self is GoalType.CURRENCY else 1.0

    @classmethod
    def parse(cls, value: Any) -> GoalType:
        """Accept a member or its string value; unknown values mean CURRENCY."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.CURRENCY


class ResetFlowState(str, Enum):
    IDLE = "idle"
    AWAITING_CONFIRMATION = "awaiting_confirmation"


# ── Core state ────────────────────────────────────────────────


@dataclass(frozen=True)
class ProgressModel:
    goal: float = 100.0
    current: float = 0.0
    type: GoalType = GoalType.CURRENCY

    def to_dict(self) -> dict[str, Any]:
        return {"goal": self.goal, "current": self.current, "type": self.type.value}


@dataclass(frozen=True)
class PendingIncrement:
    amount: float = 0.0


@dataclass(frozen=True)
class AnimationFlags:
    entry_revealed: bool = False
    add_pulse_active: bool = False
    complete_pulse_active: bool = False
    reset_shake_active: bool = False

    def to_dict(self) -> dict[str, bool]:
        return {
            "entryRevealed": self.entry_revealed,
            "addPulseActive": self.add_pulse_active,
            "completePulseActive": self.complete_pulse_active,
            "resetShakeActive": self.reset_shake_active,
        }


@dataclass(frozen=True)
class SessionState:
    """Everything a command may change, swapped as one value."""

    progress: ProgressModel = field(default_factory=ProgressModel)
    pending: PendingIncrement = field(default_factory=PendingIncrement)
    reset_flow: ResetFlowState = ResetFlowState.IDLE


# ── Events ────────────────────────────────────────────────────


@dataclass(frozen=True)
class Event:
    kind: ClassVar[str] = "event"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind}


@dataclass(frozen=True)
class EntryReady(Event):
    kind: ClassVar[str] = "entryReady"


@dataclass(frozen=True)
class Incremented(Event):
    kind: ClassVar[str] = "incremented"

    requested: float = 0.0
    applied: float = 0.0
    clamped: bool = False  # the goal cut the increment short

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "requested": self.requested,
            "applied": self.applied,
            "clamped": self.clamped,
        }


@dataclass(frozen=True)
class Completed(Event):
    kind: ClassVar[str] = "completed"

    current: float = 0.0
    goal: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "current": self.current, "goal": self.goal}


@dataclass(frozen=True)
class ResetRequested(Event):
    kind: ClassVar[str] = "resetRequested"


@dataclass(frozen=True)
class ResetCancelled(Event):
    kind: ClassVar[str] = "resetCancelled"


@dataclass(frozen=True)
class Reset(Event):
    kind: ClassVar[str] = "reset"

    previous: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "previous": self.previous}


# ── Snapshot ──────────────────────────────────────────────────


@dataclass(frozen=True)
class Snapshot:
    """Read-only view handed to renderers after every command."""

    goal: float
    current: float
    type: GoalType
    percent: int
    pending_amount: float
    reset_flow_state: ResetFlowState
    animation_flags: AnimationFlags
    complete: bool = False
    locale: str = "en"
    # advisory input bounds; the commit-time clamp is what actually holds
    max_pending: float = 0.0
    min_unit: float = 0.01

    def to_dict(self) -> dict[str, Any]:
        return {
            "goal": self.goal,
            "current": self.current,
            "type": self.type.value,
            "percent": self.percent,
            "pendingAmount": self.pending_amount,
            "resetFlowState": self.reset_flow_state.value,
            "animationFlags": self.animation_flags.to_dict(),
            "complete": self.complete,
            "locale": self.locale,
            "maxPending": self.max_pending,
            "minUnit": self.min_unit,
        }
