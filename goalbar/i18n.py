"""Text lookup for GoalBar.

Translations live in goalbar/locales/<code>.yaml as flat key: text maps.
Lookups fall back to English, then to the key itself.
"""

from __future__ import annotations

from functools import lru_cache

from goalbar.fileio import read_yaml
from goalbar.workspace import locales_dir

DEFAULT_LOCALE = "en"


@lru_cache(maxsize=None)
def available_locales() -> tuple[str, ...]:
    return tuple(sorted(p.stem for p in locales_dir().glob("*.yaml")))


def normalize_locale(locale: str | None) -> str:
    """Map 'es-MX', 'es_ES', 'ES' to 'es'; unknown locales to the default."""
    if not locale:
        return DEFAULT_LOCALE
    code = str(locale).strip().replace("_", "-").split("-")[0].lower()
    return code if code in available_locales() else DEFAULT_LOCALE


@lru_cache(maxsize=None)
def _resources(locale: str) -> dict[str, str]:
    data = read_yaml(locales_dir() / f"{locale}.yaml")
    return {str(k): str(v) for k, v in data.items()}


def translate(key: str, locale: str | None = None) -> str:
    code = normalize_locale(locale)
    text = _resources(code).get(key)
    if text is None and code != DEFAULT_LOCALE:
        text = _resources(DEFAULT_LOCALE).get(key)
    return text if text is not None else key


def language_choices() -> list[tuple[str, str]]:
    """(display name, code) pairs for a language selector."""
    return [(translate("language_name", code), code) for code in available_locales()]


def resources(locale: str | None = None) -> dict[str, str]:
    """Full key -> text map for one locale (English keys fill any gaps)."""
    code = normalize_locale(locale)
    merged = dict(_resources(DEFAULT_LOCALE))
    merged.update(_resources(code))
    return merged
