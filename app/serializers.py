# app/serializers.py
"""ORM rows -> wire dicts (camelCase keys, ``_i18n`` locale maps kept as-is)."""
from __future__ import annotations

import datetime as dt
from typing import Any, Iterable, Optional

import sqlalchemy as sa

from app.i18n import DEFAULT_LOCALE, localize_doc, locale_priority, pick_localized
from app.models.blog import Blog
from app.models.product import Product
from app.models.user import User
from app.schemas.common import to_wire, wire_keys
from app.utils.blog_content import normalize_whitespace

META_DESCRIPTION_MAX = 160

BLOG_FIELDS = ("title", "excerpt", "seoTitle", "seoDescription")
PRODUCT_FIELDS = ("name", "description", "imageAlt")
CATEGORY_FIELDS = ("name", "description")
IMAGE_FIELDS = ("altText",)
SLIDE_FIELDS = ("tag", "text")


def iso(value: Any) -> Any:
    if isinstance(value, dt.datetime):
        # sqlite hands datetimes back naive; they were stored as UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=dt.timezone.utc)
        return value.astimezone(dt.timezone.utc).isoformat().replace("+00:00", "Z")
    if isinstance(value, dt.date):
        return value.isoformat()
    return value


def row_to_wire(obj: Any, skip: Iterable[str] = ()) -> dict:
    skip = set(skip)
    out = {}
    for attr in sa.inspect(obj).mapper.column_attrs:
        if attr.key in skip:
            continue
        out[to_wire(attr.key)] = iso(getattr(obj, attr.key))
    return out


# ---------------- Simple collections ----------------
def serialize_row(obj: Any, locale: Optional[str] = None, fields: Iterable[str] = ()) -> dict:
    out = row_to_wire(obj)
    if locale:
        out = localize_doc(out, locale, fields)
    return out


# ---------------- Products ----------------
def _first_text(i18n: Any, *locales: str) -> str:
    if not isinstance(i18n, dict):
        return ""
    for loc in locales:
        if i18n.get(loc):
            return i18n[loc]
    return ""


def serialize_product(obj: Product, locale: Optional[str] = None) -> dict:
    out = row_to_wire(obj)
    out["variants"] = wire_keys(obj.variants or [])
    if locale:
        out = localize_doc(out, locale, PRODUCT_FIELDS)
        for v in out["variants"]:
            v["label"] = _first_text(v.get("label_i18n"), locale, "vi", "en")
            v["note"] = _first_text(v.get("note_i18n"), locale, "vi", "en")
    return out


# ---------------- Users ----------------
def serialize_user(user: User) -> dict:
    return row_to_wire(user, skip=("password_hash",))


# ---------------- Blogs ----------------
def serialize_blog(blog: Blog) -> dict:
    out = row_to_wire(blog, skip=("slug_vi", "slug_en", "view_count"))
    out["slug_i18n"] = blog.slug_i18n
    out["coverImage"] = wire_keys(blog.cover_image)
    out["gallery"] = wire_keys(blog.gallery or [])
    out["stats"] = {"viewCount": blog.view_count or 0}
    return out


def _meta_description(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    text = text.strip()
    return text[:META_DESCRIPTION_MAX] if text else None


def attach_meta(doc: dict, locale: str) -> dict:
    locales = locale_priority(locale)
    doc["metaTitle"] = pick_localized(doc.get("seoTitle_i18n"), locales) or pick_localized(
        doc.get("title_i18n"), locales
    )
    doc["metaDescription"] = _meta_description(
        pick_localized(doc.get("seoDescription_i18n"), locales)
        or pick_localized(doc.get("excerpt_i18n"), locales)
        or pick_localized(doc.get("plainText_i18n"), locales)
    )
    doc["ogImage"] = doc.get("ogImageUrl") or (doc.get("coverImage") or {}).get("url")
    return doc


def admin_blog(blog: Blog, locale: Optional[str]) -> dict:
    """Raw multi-locale record plus meta; flattened only when a locale was asked for."""
    doc = attach_meta(serialize_blog(blog), locale or DEFAULT_LOCALE)
    if locale:
        doc = localize_doc(doc, locale, BLOG_FIELDS)
    return doc


def _pick_pair(i18n: Any, locale: str, empty: Any):
    if not isinstance(i18n, dict):
        return empty
    return i18n.get(locale) or i18n.get(DEFAULT_LOCALE) or empty


def public_blog(blog: Blog, locale: str, include_content: bool) -> dict:
    doc = attach_meta(serialize_blog(blog), locale)
    doc = localize_doc(doc, locale, BLOG_FIELDS)
    if include_content:
        doc["content"] = _pick_pair(doc.get("content_i18n"), locale, None)
        doc["toc"] = _pick_pair(doc.get("toc_i18n"), locale, [])
        doc["plainText"] = normalize_whitespace(_pick_pair(doc.get("plainText_i18n"), locale, ""))
    for key in ("content_i18n", "toc_i18n", "plainText_i18n", "createdBy", "updatedBy", "deletedAt"):
        doc.pop(key, None)
    return doc


def page_payload(page, items: list) -> dict:
    return {"items": items, "total": page.total, "page": page.page, "limit": page.limit}
