# app/schemas/common.py
"""
Shared request-model plumbing.

Wire names are camelCase, except locale maps which keep an ``_i18n`` suffix:
``alt_text_i18n`` <-> ``altText_i18n``, ``image_url`` <-> ``imageUrl``.
Models accept either spelling.
"""
from __future__ import annotations

import datetime as dt
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

I18N_SUFFIX = "_i18n"


def to_wire(name: str) -> str:
    if name.endswith(I18N_SUFFIX):
        return to_camel(name[: -len(I18N_SUFFIX)]) + I18N_SUFFIX
    return to_camel(name)


def wire_keys(value: Any) -> Any:
    """Rename the keys of stored sub-documents (variants, cover images...) for output."""
    if isinstance(value, dict):
        return {to_wire(k): wire_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [wire_keys(v) for v in value]
    return value


def _to_utc(value: dt.datetime) -> dt.datetime:
    # naive input is taken as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


UtcDatetime = Annotated[dt.datetime, AfterValidator(_to_utc)]


class WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_wire,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    def to_data(self, exclude_none: bool = True) -> dict:
        """Top-level fields the client sent, in storage (snake_case) names; nested models keep their defaults."""
        return self.model_dump(include=set(self.model_fields_set), exclude_none=exclude_none)


class LocalizedText(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    vi: Optional[str] = None
    en: Optional[str] = None

    def has_any(self) -> bool:
        return bool(self.vi or self.en)


def require_any_locale(value: Optional[LocalizedText]) -> Optional[LocalizedText]:
    if value is not None and not value.has_any():
        raise ValueError("at least one of vi/en is required")
    return value


RequiredText = Annotated[LocalizedText, AfterValidator(require_any_locale)]
