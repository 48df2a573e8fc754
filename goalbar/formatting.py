"""Display formatting for goal values.

Only renderers use these strings; comparisons always run on raw numbers.
"""

from __future__ import annotations

from goalbar.i18n import normalize_locale
from goalbar.models import GoalType

# locale -> (group separator, decimal separator, minimum integer digits before grouping)
_NUMBER_STYLE = {
    "en": (",", ".", 4),
    "es": (".", ",", 5),
}

CURRENCY_SYMBOL = "$"


def _localize(text: str, locale: str) -> str:
    """Turn a Python ',' / '.' formatted number into the locale's style."""
    group, decimal, min_digits = _NUMBER_STYLE.get(locale, _NUMBER_STYLE["en"])
    sign = ""
    if text.startswith("-"):
        sign, text = "-", text[1:]
    integer, _, fraction = text.partition(".")
    if len(integer.replace(",", "")) < min_digits:
        integer = integer.replace(",", "")
    integer = integer.replace(",", group)
    return sign + integer + (decimal + fraction if fraction else "")


def format_value(value: float, goal_type: GoalType, locale: str | None = None) -> str:
    """Currency always shows two decimals; elements show whole numbers
    (and at most two decimals if a fractional value slipped in)."""
    locale = normalize_locale(locale)
    if goal_type is GoalType.CURRENCY:
        return _localize(f"{value:,.2f}", locale)
    if float(value).is_integer():
        return _localize(f"{int(value):,}", locale)
    return _localize(f"{value:,.2f}".rstrip("0").rstrip("."), locale)


def progress_label(current: float, goal: float, goal_type: GoalType, locale: str | None = None) -> str:
    prefix = CURRENCY_SYMBOL if goal_type is GoalType.CURRENCY else ""
    return (
        f"{prefix}{format_value(current, goal_type, locale)}"
        f" / {prefix}{format_value(goal, goal_type, locale)}"
    )
