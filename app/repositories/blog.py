# app/repositories/blog.py
from __future__ import annotations

import datetime as dt
from typing import Any, Optional

from sqlalchemy import or_, update

from app.db.base import _now_utc
from app.models.blog import Blog
from app.repositories.base import Page, Repository, clamp_page, json_list_contains, text_search
from app.utils.blog_content import build_derived_fields
from app.utils.slug import slugify

MAX_BLOG_PAGE_SIZE = 50

# wire sort key -> column
SORT_COLUMNS = {
    "updatedAt": Blog.updated_at,
    "publishedAt": Blog.published_at,
    "sortOrder": Blog.sort_order,
}
ADMIN_SORTS = {"updatedAt", "-updatedAt", "publishedAt", "-publishedAt", "sortOrder", "-sortOrder"}
PUBLIC_SORTS = {"publishedAt", "-publishedAt", "sortOrder", "-sortOrder"}


class ScheduledAtRequiredError(ValueError):
    code = "BLOG_SCHEDULED_AT_REQUIRED"

    def __init__(self):
        super().__init__("scheduledAt is required for scheduled status")


def resolve_status(data: dict[str, Any], existing: Optional[Blog] = None, now: Optional[dt.datetime] = None) -> dict:
    """
    Apply the status rules to an incoming create/update payload.

    ``data`` only holds the keys the client actually sent, so an explicit
    ``scheduled_at=None`` differs from an absent one. Returns the final
    ``status``, ``scheduled_at`` and ``published_at``.
    """
    now = now or _now_utc()
    status = (
        data.get("status")
        or ("scheduled" if data.get("scheduled_at") else None)
        or (existing.status if existing is not None else None)
        or "draft"
    )

    scheduled_at = data["scheduled_at"] if "scheduled_at" in data else getattr(existing, "scheduled_at", None)
    published_at = data["published_at"] if "published_at" in data else getattr(existing, "published_at", None)

    if status == "published":
        return {"status": status, "scheduled_at": None, "published_at": published_at or now}
    if status == "scheduled":
        if not scheduled_at:
            raise ScheduledAtRequiredError()
        return {"status": status, "scheduled_at": scheduled_at, "published_at": None}
    if status == "draft":
        return {"status": status, "scheduled_at": None, "published_at": None}
    # archived
    return {"status": status, "scheduled_at": None, "published_at": published_at}


def _order_by(sort: Optional[str], allowed: set[str], fallback: str):
    sort = sort if sort in allowed else fallback
    column = SORT_COLUMNS[sort.lstrip("-")]
    return column.desc() if sort.startswith("-") else column.asc()


def _apply_slugs(data: dict[str, Any], existing: Optional[Blog] = None) -> None:
    slug_i18n = data.pop("slug_i18n", None)
    if slug_i18n:
        data["slug_vi"] = slugify(slug_i18n.get("vi"))
        data["slug_en"] = slugify(slug_i18n.get("en"))
    if data.get("slug"):
        data["slug"] = slugify(data["slug"])
    elif existing is None:
        data["slug"] = data.get("slug_vi") or data.get("slug_en")
    else:
        data.pop("slug", None)


class BlogRepository(Repository[Blog]):
    model = Blog

    def visible(self):
        return self.query().filter(Blog.deleted_at.is_(None))

    def published(self, now: Optional[dt.datetime] = None):
        now = now or _now_utc()
        return self.visible().filter(Blog.status == "published", Blog.published_at <= now)

    def create(self, data: dict[str, Any]) -> Blog:
        data = dict(data)
        _apply_slugs(data)
        data.update(build_derived_fields(data.get("content_i18n")))
        data.update(resolve_status(data))
        return super().create(data)

    def update(self, obj: Blog, data: dict[str, Any]) -> Blog:
        data = dict(data)
        _apply_slugs(data, existing=obj)

        content = data.pop("content_i18n", None)
        if content:
            current = obj.content_i18n or {}
            merged = {
                "vi": content.get("vi") if content.get("vi") is not None else current.get("vi"),
                "en": content.get("en") if content.get("en") is not None else current.get("en"),
            }
            data["content_i18n"] = merged
            data.update(build_derived_fields(merged))

        data.update(resolve_status(data, existing=obj))
        return super().update(obj, data)

    def soft_delete(self, obj: Blog, updated_by: Optional[int] = None) -> Blog:
        return super().update(obj, {"deleted_at": _now_utc(), "updated_by": updated_by})

    def get_by_id(self, item_id: int) -> Optional[Blog]:
        return self.visible().filter(Blog.id == item_id).first()

    def get_public_by_slug(self, slug: str, locale: str, now: Optional[dt.datetime] = None) -> Optional[Blog]:
        slug_column = Blog.slug_en if locale == "en" else Blog.slug_vi
        return self.published(now).filter(or_(Blog.slug == slug, slug_column == slug)).first()

    def list_admin(
        self,
        page: int = 1,
        limit: int = 20,
        q: Optional[str] = None,
        status: Optional[str] = None,
        tag: Optional[str] = None,
        sort: Optional[str] = None,
        with_count: bool = True,
    ) -> Page[Blog]:
        page, limit = clamp_page(page, limit, max_limit=MAX_BLOG_PAGE_SIZE)
        query = self.visible()
        if status:
            query = query.filter(Blog.status == status)
        if tag:
            query = query.filter(json_list_contains(Blog.tags, tag))
        search = text_search([Blog.title_i18n, Blog.excerpt_i18n, Blog.plain_text_i18n], q)
        if search is not None:
            query = query.filter(search)
        query = query.order_by(_order_by(sort, ADMIN_SORTS, "-updatedAt"), Blog.id.desc())
        return self.paginate(query, page, limit, with_count=with_count)

    def list_public(
        self,
        page: int = 1,
        limit: int = 20,
        tag: Optional[str] = None,
        sort: Optional[str] = None,
        now: Optional[dt.datetime] = None,
    ) -> Page[Blog]:
        page, limit = clamp_page(page, limit, max_limit=MAX_BLOG_PAGE_SIZE)
        query = self.published(now)
        if tag:
            query = query.filter(json_list_contains(Blog.tags, tag))
        query = query.order_by(_order_by(sort, PUBLIC_SORTS, "-publishedAt"), Blog.id.desc())
        return self.paginate(query, page, limit)

    def increment_view_count(self, item_id: int) -> Optional[int]:
        now = _now_utc()
        result = self.db.execute(
            update(Blog)
            .where(
                Blog.id == item_id,
                Blog.deleted_at.is_(None),
                Blog.status == "published",
                Blog.published_at <= now,
            )
            .values(view_count=Blog.view_count + 1)
            .execution_options(synchronize_session=False)
        )
        self.commit()
        if not result.rowcount:
            return None
        return self.db.query(Blog.view_count).filter(Blog.id == item_id).scalar()

    def publish_scheduled(self, now: Optional[dt.datetime] = None) -> int:
        """Promote every due scheduled post. Returns the number of rows changed."""
        now = now or _now_utc()
        result = self.db.execute(
            update(Blog)
            .where(Blog.status == "scheduled", Blog.deleted_at.is_(None), Blog.scheduled_at <= now)
            .values(status="published", published_at=now, scheduled_at=None)
            .execution_options(synchronize_session=False)
        )
        self.commit()
        return result.rowcount
