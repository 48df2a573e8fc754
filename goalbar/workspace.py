"""Config root and path helpers for GoalBar."""

from __future__ import annotations

import os
from pathlib import Path


def config_root() -> Path:
    """Get the config root directory (contains settings.yaml)."""
    return Path(
        os.environ.get("GOALBAR_ROOT", str(Path.home() / ".goalbar"))
    ).expanduser().resolve()


def settings_path(root: Path | None = None) -> Path:
    if root is None:
        root = config_root()
    return root / "settings.yaml"


def locales_dir() -> Path:
    """Directory holding the bundled translation files."""
    return Path(__file__).parent / "locales"
