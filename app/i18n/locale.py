# app/i18n/locale.py
from __future__ import annotations

from typing import Any, Iterable, Literal, Mapping, Optional

Locale = Literal["vi", "en"]

SUPPORTED_LOCALES: tuple[Locale, ...] = ("vi", "en")
DEFAULT_LOCALE: Locale = "vi"


def normalize_locale(value: Optional[str]) -> Locale:
    """
    Map a raw hint (``?locale=`` value or an Accept-Language header) onto a
    supported locale. Prefix match only, first match wins, no q-weighting:
    ``en-US`` -> en, ``VI`` -> vi, ``fr`` -> vi.
    """
    if not value:
        return DEFAULT_LOCALE
    v = value.strip().lower()
    if v.startswith("en"):
        return "en"
    if v.startswith("vi"):
        return "vi"
    return DEFAULT_LOCALE


def locale_priority(locale: Optional[str]) -> list[str]:
    """Candidate order used for SEO/meta fields: requested, en, default, vi."""
    out: list[str] = []
    for loc in (locale, "en", DEFAULT_LOCALE, "vi"):
        if isinstance(loc, str) and loc.strip() and loc not in out:
            out.append(loc)
    return out


def pick_localized(value: Any, locales: Iterable[str]) -> Optional[str]:
    if not value:
        return None
    if isinstance(value, str):
        return value
    if not isinstance(value, Mapping):
        return None
    for loc in locales:
        v = value.get(loc)
        if isinstance(v, str) and v.strip():
            return v
    return None
