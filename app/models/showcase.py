# app/models/showcase.py
"""Ordered image collections shown on the landing page."""
import sqlalchemy as sa
from sqlalchemy import Boolean, Column, Integer, String, JSON

from app.db.base import Base, TimestampMixin


class LandingMenuImage(TimestampMixin, Base):
    __tablename__ = "landing_menu_images"

    id = Column(Integer, primary_key=True)
    image_url = Column(String(1024), nullable=False)
    alt_text_i18n = Column(JSON, nullable=True)
    order_index = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    __table_args__ = (
        sa.UniqueConstraint("order_index", name="uq_landing_menu_images_order_index"),
        sa.CheckConstraint("order_index >= 0", name="ck_landing_menu_images_order_index"),
    )


class MarqueeImage(TimestampMixin, Base):
    __tablename__ = "marquee_images"

    id = Column(Integer, primary_key=True)
    image_url = Column(String(1024), nullable=False)
    alt_text_i18n = Column(JSON, nullable=True)
    order_index = Column(Integer, nullable=False)
    is_pinned = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    __table_args__ = (
        sa.UniqueConstraint("order_index", name="uq_marquee_images_order_index"),
        sa.CheckConstraint("order_index >= 0", name="ck_marquee_images_order_index"),
        # at most one pinned row
        sa.Index(
            "uq_marquee_images_pinned",
            "is_pinned",
            unique=True,
            postgresql_where=sa.text("is_pinned = true"),
            sqlite_where=sa.text("is_pinned = 1"),
        ),
    )


class MarqueeSlide(TimestampMixin, Base):
    __tablename__ = "marquee_slides"

    id = Column(Integer, primary_key=True)
    order_index = Column(Integer, nullable=False)
    tag_i18n = Column(JSON, nullable=True)
    text_i18n = Column(JSON, nullable=True)
    image_url = Column(String(1024), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    __table_args__ = (
        sa.UniqueConstraint("order_index", name="uq_marquee_slides_order_index"),
        sa.CheckConstraint("order_index >= 0", name="ck_marquee_slides_order_index"),
    )
