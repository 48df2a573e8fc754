"""Goal/current arithmetic for GoalBar.

Pure functions over ProgressModel. Every function returns a new model and
accepts any raw input, normalizing instead of raising.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from goalbar.models import GoalType, ProgressModel

logger = logging.getLogger(__name__)

MIN_GOAL = 1.0

_QUANTUM = {
    GoalType.CURRENCY: Decimal("0.01"),
    GoalType.ELEMENTS: Decimal("1"),
}


def coerce_number(raw: Any) -> float | None:
    """Return *raw* as a finite float, or None if it isn't one.

    Numeric strings are accepted since form fields arrive as text.
    """
    if isinstance(raw, bool) or raw is None:
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


def round_to_unit(value: float, goal_type: GoalType) -> float:
    """Half-up rounding to two decimals (currency) or whole units (elements)."""
    quantized = Decimal(repr(float(value))).quantize(_QUANTUM[goal_type], rounding=ROUND_HALF_UP)
    return float(quantized)


def normalize_goal(raw: Any, goal_type: GoalType) -> float:
    value = coerce_number(raw)
    if value is None or value <= 0:
        logger.debug("Goal %r is not a positive number; using %s", raw, MIN_GOAL)
        return MIN_GOAL
    return max(MIN_GOAL, round_to_unit(value, goal_type))


def set_goal(model: ProgressModel, raw: Any) -> ProgressModel:
    """Replace the goal. `current` is left alone even if it now exceeds it."""
    return replace(model, goal=normalize_goal(raw, model.type))


def set_type(model: ProgressModel, next_type: Any) -> ProgressModel:
    """Switch goal type without rescaling goal or current."""
    return replace(model, type=GoalType.parse(next_type))


def percent_complete(model: ProgressModel) -> int:
    if model.goal <= 0:
        return 0
    ratio = min(100.0, 100.0 * model.current / model.goal)
    return max(0, min(100, math.floor(ratio + 0.5)))


def is_complete(model: ProgressModel) -> bool:
    return model.goal > 0 and model.current >= model.goal


def remaining(model: ProgressModel) -> float:
    """Capacity left before the goal is reached (never negative)."""
    return max(0.0, round_to_unit(model.goal - model.current, model.type))
