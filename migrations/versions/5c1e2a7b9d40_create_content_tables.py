"""create content tables

Revision ID: 5c1e2a7b9d40
Revises:
Create Date: 2026-10-18 09:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1e2a7b9d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=True),
        sa.Column("email", sa.String(length=160), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=True),
        sa.Column("provider", sa.String(length=20), nullable=False, server_default="local"),
        sa.Column("google_id", sa.String(length=255), nullable=True),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="super_admin"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.create_index("ix_users_email", "users", ["email"])
    op.create_index("ix_users_google_id", "users", ["google_id"])

    op.create_table(
        "landing_menu_images",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("image_url", sa.String(length=1024), nullable=False),
        sa.Column("alt_text_i18n", sa.JSON(), nullable=True),
        sa.Column("order_index", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.UniqueConstraint("order_index", name="uq_landing_menu_images_order_index"),
        sa.CheckConstraint("order_index >= 0", name="ck_landing_menu_images_order_index"),
    )
    op.create_index("ix_landing_menu_images_is_active", "landing_menu_images", ["is_active"])

    op.create_table(
        "marquee_images",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("image_url", sa.String(length=1024), nullable=False),
        sa.Column("alt_text_i18n", sa.JSON(), nullable=True),
        sa.Column("order_index", sa.Integer(), nullable=False),
        sa.Column("is_pinned", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.UniqueConstraint("order_index", name="uq_marquee_images_order_index"),
        sa.CheckConstraint("order_index >= 0", name="ck_marquee_images_order_index"),
    )
    op.create_index("ix_marquee_images_is_active", "marquee_images", ["is_active"])
    op.create_index(
        "uq_marquee_images_pinned",
        "marquee_images",
        ["is_pinned"],
        unique=True,
        postgresql_where=sa.text("is_pinned = true"),
        sqlite_where=sa.text("is_pinned = 1"),
    )

    op.create_table(
        "marquee_slides",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("order_index", sa.Integer(), nullable=False),
        sa.Column("tag_i18n", sa.JSON(), nullable=True),
        sa.Column("text_i18n", sa.JSON(), nullable=True),
        sa.Column("image_url", sa.String(length=1024), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.UniqueConstraint("order_index", name="uq_marquee_slides_order_index"),
        sa.CheckConstraint("order_index >= 0", name="ck_marquee_slides_order_index"),
    )
    op.create_index("ix_marquee_slides_is_active", "marquee_slides", ["is_active"])

    op.create_table(
        "product_categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("key", sa.String(length=120), nullable=False),
        sa.Column("name_i18n", sa.JSON(), nullable=False),
        sa.Column("description_i18n", sa.JSON(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("key", name="uq_product_categories_key"),
        sa.CheckConstraint("sort_order >= 0", name="ck_product_categories_sort_order"),
    )
    op.create_index("ix_product_categories_sort_order", "product_categories", ["sort_order"])

    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "category_id",
            sa.Integer(),
            sa.ForeignKey("product_categories.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("slug", sa.String(length=160), nullable=False),
        sa.Column("name_i18n", sa.JSON(), nullable=False),
        sa.Column("description_i18n", sa.JSON(), nullable=True),
        sa.Column("image_url", sa.String(length=1024), nullable=True),
        sa.Column("image_alt_i18n", sa.JSON(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("variants", sa.JSON(), nullable=False),
        sa.Column("is_favourite", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_must_try", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_vegetarian", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("spiciness_level", sa.Integer(), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("slug", name="uq_products_slug"),
        sa.CheckConstraint("sort_order >= 0", name="ck_products_sort_order"),
    )
    op.create_index("ix_products_category_sort", "products", ["category_id", "sort_order"])
    op.create_index(
        "ix_products_available_category_sort", "products", ["is_available", "category_id", "sort_order"]
    )

    op.create_table(
        "reservation_requests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("full_name", sa.String(length=160), nullable=False),
        sa.Column("phone_number", sa.String(length=40), nullable=False),
        sa.Column("email", sa.String(length=160), nullable=True),
        sa.Column("guest_count", sa.Integer(), nullable=False),
        sa.Column("reservation_date", sa.Date(), nullable=False),
        sa.Column("reservation_time", sa.String(length=20), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("source", sa.String(length=20), nullable=False, server_default="website"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="new"),
        sa.Column("emailed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("guest_count BETWEEN 1 AND 100", name="ck_reservation_requests_guest_count"),
    )
    op.create_index("ix_reservation_requests_reservation_date", "reservation_requests", ["reservation_date"])
    op.create_index("ix_reservation_requests_status", "reservation_requests", ["status"])

    op.create_table(
        "blogs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("slug", sa.String(length=200), nullable=False),
        sa.Column("slug_vi", sa.String(length=200), nullable=False),
        sa.Column("slug_en", sa.String(length=200), nullable=False),
        sa.Column("title_i18n", sa.JSON(), nullable=False),
        sa.Column("excerpt_i18n", sa.JSON(), nullable=True),
        sa.Column("content_i18n", sa.JSON(), nullable=False),
        sa.Column("cover_image", sa.JSON(), nullable=True),
        sa.Column("gallery", sa.JSON(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="draft"),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("scheduled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("seo_title_i18n", sa.JSON(), nullable=True),
        sa.Column("seo_description_i18n", sa.JSON(), nullable=True),
        sa.Column("canonical_url", sa.String(length=1024), nullable=True),
        sa.Column("og_image_url", sa.String(length=1024), nullable=True),
        sa.Column("robots", sa.JSON(), nullable=False),
        sa.Column("toc_i18n", sa.JSON(), nullable=False),
        sa.Column("plain_text_i18n", sa.JSON(), nullable=False),
        sa.Column("reading_time_minutes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("author_name", sa.String(length=160), nullable=False),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("updated_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("slug", name="uq_blogs_slug"),
        sa.UniqueConstraint("slug_vi", name="uq_blogs_slug_vi"),
        sa.UniqueConstraint("slug_en", name="uq_blogs_slug_en"),
    )
    op.create_index("ix_blogs_deleted_at", "blogs", ["deleted_at"])
    op.create_index("ix_blogs_status_published", "blogs", ["status", "published_at", "is_featured"])
    op.create_index("ix_blogs_status_deleted_published", "blogs", ["status", "deleted_at", "published_at"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("blogs")
    op.drop_table("reservation_requests")
    op.drop_table("products")
    op.drop_table("product_categories")
    op.drop_table("marquee_slides")
    op.drop_table("marquee_images")
    op.drop_table("landing_menu_images")
    op.drop_table("users")
