# app/i18n/localize.py
from __future__ import annotations

from typing import Any, Iterable, Mapping

from app.i18n.locale import DEFAULT_LOCALE


def _first_filled(i18n: Any, *locales: str):
    if not isinstance(i18n, Mapping):
        return None
    for loc in locales:
        v = i18n.get(loc)
        if v:
            return v
    return None


def localize_doc(
    doc: Mapping[str, Any],
    locale: str,
    fields: Iterable[str],
    include_slug_i18n: bool = False,
) -> dict:
    """
    Flatten ``<field>_i18n`` maps into a single ``<field>`` value.

    Fallback per field: requested locale -> default locale -> existing bare
    value -> "". The ``_i18n`` maps are passed through untouched so clients
    still see every locale. With ``include_slug_i18n`` the ``slug_i18n`` map
    is collapsed into ``slug`` the same way.
    """
    out = dict(doc)

    for f in fields:
        value = _first_filled(doc.get(f"{f}_i18n"), locale, DEFAULT_LOCALE)
        if value is None:
            value = doc.get(f)
        out[f] = value if value is not None else ""

    if include_slug_i18n and doc.get("slug_i18n"):
        out["slug"] = _first_filled(doc["slug_i18n"], locale, DEFAULT_LOCALE) or doc.get("slug")

    return out


def localize_list(
    docs: Iterable[Mapping[str, Any]],
    locale: str,
    fields: Iterable[str],
    include_slug_i18n: bool = False,
) -> list[dict]:
    fields = list(fields)
    return [localize_doc(d, locale, fields, include_slug_i18n) for d in docs]
