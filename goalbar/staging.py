"""Pending increment staging and commit for GoalBar."""

from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Any

from goalbar.models import Event, GoalType, Incremented, PendingIncrement, ProgressModel
from goalbar.progress import coerce_number, round_to_unit

logger = logging.getLogger(__name__)


def normalize_amount(raw: Any, goal_type: GoalType) -> float:
    """Clean a raw pending amount; anything unusable becomes 0.

    Elements are whole units. Currency keeps what was typed so the
    two-decimal rounding is applied once, to the committed sum.
    """
    value = coerce_number(raw)
    if value is None or value <= 0:
        return 0.0
    if goal_type is GoalType.ELEMENTS:
        return round_to_unit(value, goal_type)
    return value


def set_pending_amount(raw: Any, goal_type: GoalType) -> PendingIncrement:
    return PendingIncrement(amount=normalize_amount(raw, goal_type))


def commit(
    model: ProgressModel,
    pending: PendingIncrement,
) -> tuple[ProgressModel, PendingIncrement, list[Event]]:
    """Apply the pending amount to `current`, clamped at the goal.

    Returns (model, pending, events). A zero amount changes nothing and
    emits nothing. The emitted Incremented carries the delta actually
    applied. It differs from the request when rounding or the goal
    changed the outcome; `clamped` is set only when the goal capped it.
    """
    amount = pending.amount
    if amount <= 0:
        logger.debug("Commit with empty pending amount ignored")
        return model, pending, []

    before = model.current
    target = round_to_unit(before + amount, model.type)
    after = max(before, min(model.goal, target))  # commit never lowers progress
    applied = _delta(before, after)
    clamped = after < target

    if clamped:
        logger.debug("Increment of %s clamped to %s by goal %s", amount, applied, model.goal)

    event = Incremented(requested=amount, applied=applied, clamped=clamped)
    return replace(model, current=after), PendingIncrement(), [event]


def _delta(before: float, after: float) -> float:
    # exact on the decimal representations, so 10.005 -> 10.01 is 0.005
    return float(Decimal(repr(after)) - Decimal(repr(before)))
