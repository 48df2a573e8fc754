"""Session settings for GoalBar.

Read from <GOALBAR_ROOT>/settings.yaml. Settings only seed a new session
(starting goal, type, language, animation timings); progress itself is never
written back.
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from goalbar.fileio import read_yaml
from goalbar.i18n import normalize_locale
from goalbar.models import GoalType
from goalbar.workspace import settings_path

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _number(d: dict[str, Any], key: str, default: float, minimum: float = 0) -> float:
    try:
        value = float(d.get(key, default))
    except (TypeError, ValueError):
        return default
    return value if value >= minimum else default


def _log_level(value: Any, default: str = "INFO") -> str:
    level = str(value or default).strip().upper()
    return level if level in LOG_LEVELS else default


@dataclass
class Settings:
    default_goal: float = 100.0
    default_type: GoalType = GoalType.CURRENCY
    locale: str = "en"
    log_level: str = "INFO"
    log_file: str = ""
    entry_delay_ms: int = 200
    add_pulse_ms: int = 600
    complete_pulse_ms: int = 1100
    reset_shake_ms: int = 500

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Settings:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            default_goal=_number(d, "default_goal", 100.0, minimum=1),
            default_type=GoalType.parse(d.get("default_type", "currency")),
            locale=normalize_locale(d.get("locale")),
            log_level=_log_level(d.get("log_level")),
            log_file=str(d.get("log_file") or ""),
            entry_delay_ms=int(_number(d, "entry_delay_ms", 200)),
            add_pulse_ms=int(_number(d, "add_pulse_ms", 600)),
            complete_pulse_ms=int(_number(d, "complete_pulse_ms", 1100)),
            reset_shake_ms=int(_number(d, "reset_shake_ms", 500)),
        )

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["default_type"] = self.default_type.value
        return d


def load_settings(root: Path | None = None) -> Settings:
    """Load settings.yaml, then apply GOALBAR_LOCALE / GOALBAR_LOG_LEVEL."""
    settings = Settings.from_dict(read_yaml(settings_path(root)))
    if os.environ.get("GOALBAR_LOCALE"):
        settings.locale = normalize_locale(os.environ["GOALBAR_LOCALE"])
    if os.environ.get("GOALBAR_LOG_LEVEL"):
        settings.log_level = _log_level(os.environ["GOALBAR_LOG_LEVEL"], settings.log_level)
    return settings


def configure_logging(level: str = "INFO", filename: str | None = None) -> None:
    """Entry points call this once; the library itself never adds handlers."""
    logging.basicConfig(
        level=getattr(logging, _log_level(level)),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        filename=filename or None,
    )
