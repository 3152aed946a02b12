from __future__ import annotations

import datetime as dt
from typing import Any, Optional

import sqlalchemy as sa
from sqlalchemy import orm

from app import config
from app.db.base import Base, TimestampMixin

BLOG_STATUSES = ("draft", "published", "scheduled", "archived")


def _default_robots() -> dict:
    return {"index": True, "follow": True}


def _empty_pair(value: Any):
    return lambda: {"vi": value, "en": value}


class Blog(TimestampMixin, Base):
    """
    A bilingual blog post.

    ``content_i18n`` holds one editor document per locale; ``toc_i18n``,
    ``plain_text_i18n`` and ``reading_time_minutes`` are derived from it on
    every content write and never edited directly.
    """

    __tablename__ = "blogs"

    id: orm.Mapped[int] = orm.mapped_column(sa.Integer, primary_key=True, autoincrement=True)

    # canonical slug + one per locale, all unique
    slug: orm.Mapped[str] = orm.mapped_column(sa.String(200), nullable=False)
    slug_vi: orm.Mapped[str] = orm.mapped_column(sa.String(200), nullable=False)
    slug_en: orm.Mapped[str] = orm.mapped_column(sa.String(200), nullable=False)

    title_i18n: orm.Mapped[dict] = orm.mapped_column(sa.JSON, nullable=False)
    excerpt_i18n: orm.Mapped[Optional[dict]] = orm.mapped_column(sa.JSON, nullable=True)
    content_i18n: orm.Mapped[dict] = orm.mapped_column(sa.JSON, nullable=False)

    cover_image: orm.Mapped[Optional[dict]] = orm.mapped_column(sa.JSON, nullable=True)
    gallery: orm.Mapped[list] = orm.mapped_column(sa.JSON, nullable=False, default=list)
    tags: orm.Mapped[list] = orm.mapped_column(sa.JSON, nullable=False, default=list)

    status: orm.Mapped[str] = orm.mapped_column(sa.String(20), nullable=False, default="draft")
    published_at: orm.Mapped[Optional[dt.datetime]] = orm.mapped_column(sa.DateTime(timezone=True), nullable=True)
    scheduled_at: orm.Mapped[Optional[dt.datetime]] = orm.mapped_column(sa.DateTime(timezone=True), nullable=True)
    is_featured: orm.Mapped[bool] = orm.mapped_column(sa.Boolean, nullable=False, default=False)
    sort_order: orm.Mapped[int] = orm.mapped_column(sa.Integer, nullable=False, default=0)

    seo_title_i18n: orm.Mapped[Optional[dict]] = orm.mapped_column(sa.JSON, nullable=True)
    seo_description_i18n: orm.Mapped[Optional[dict]] = orm.mapped_column(sa.JSON, nullable=True)
    canonical_url: orm.Mapped[Optional[str]] = orm.mapped_column(sa.String(1024), nullable=True)
    og_image_url: orm.Mapped[Optional[str]] = orm.mapped_column(sa.String(1024), nullable=True)
    robots: orm.Mapped[dict] = orm.mapped_column(sa.JSON, nullable=False, default=_default_robots)

    toc_i18n: orm.Mapped[dict] = orm.mapped_column(sa.JSON, nullable=False, default=_empty_pair([]))
    plain_text_i18n: orm.Mapped[dict] = orm.mapped_column(sa.JSON, nullable=False, default=_empty_pair(""))
    reading_time_minutes: orm.Mapped[int] = orm.mapped_column(sa.Integer, nullable=False, default=0)
    view_count: orm.Mapped[int] = orm.mapped_column(sa.Integer, nullable=False, default=0)

    author_name: orm.Mapped[str] = orm.mapped_column(
        sa.String(160), nullable=False, default=lambda: config.BLOG_DEFAULT_AUTHOR
    )
    created_by: orm.Mapped[Optional[int]] = orm.mapped_column(
        sa.Integer, sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    updated_by: orm.Mapped[Optional[int]] = orm.mapped_column(
        sa.Integer, sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    deleted_at: orm.Mapped[Optional[dt.datetime]] = orm.mapped_column(
        sa.DateTime(timezone=True), nullable=True, index=True
    )

    __table_args__ = (
        sa.UniqueConstraint("slug", name="uq_blogs_slug"),
        sa.UniqueConstraint("slug_vi", name="uq_blogs_slug_vi"),
        sa.UniqueConstraint("slug_en", name="uq_blogs_slug_en"),
        sa.Index("ix_blogs_status_published", "status", "published_at", "is_featured"),
        sa.Index("ix_blogs_status_deleted_published", "status", "deleted_at", "published_at"),
    )

    @property
    def slug_i18n(self) -> dict:
        return {"vi": self.slug_vi, "en": self.slug_en}

    def __repr__(self) -> str:
        return f"<Blog id={self.id} slug={self.slug!r} status={self.status}>"
