from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.db.base import Base, TimestampMixin


class ProductCategory(TimestampMixin, Base):
    __tablename__ = "product_categories"

    id = Column(Integer, primary_key=True)
    key = Column(String(120), nullable=False)
    name_i18n = Column(JSON, nullable=False)
    description_i18n = Column(JSON, nullable=True)
    sort_order = Column(Integer, nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("key", name="uq_product_categories_key"),
        CheckConstraint("sort_order >= 0", name="ck_product_categories_sort_order"),
    )


class Product(TimestampMixin, Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    category_id = Column(Integer, ForeignKey("product_categories.id", ondelete="SET NULL"), nullable=True)
    slug = Column(String(160), nullable=False)
    name_i18n = Column(JSON, nullable=False)
    description_i18n = Column(JSON, nullable=True)
    image_url = Column(String(1024), nullable=True)
    image_alt_i18n = Column(JSON, nullable=True)
    sort_order = Column(Integer, nullable=False)
    is_available = Column(Boolean, nullable=False, default=True)

    # [{variant_id, label_i18n, price, currency, note_i18n, is_default}]
    variants = Column(JSON, nullable=False, default=list)

    is_favourite = Column(Boolean, nullable=False, default=False)
    is_must_try = Column(Boolean, nullable=False, default=False)
    is_vegetarian = Column(Boolean, nullable=False, default=False)
    spiciness_level = Column(Integer, nullable=True)
    tags = Column(JSON, nullable=False, default=list)

    category = relationship("ProductCategory")

    __table_args__ = (
        UniqueConstraint("slug", name="uq_products_slug"),
        CheckConstraint("sort_order >= 0", name="ck_products_sort_order"),
        Index("ix_products_category_sort", "category_id", "sort_order"),
        Index("ix_products_available_category_sort", "is_available", "category_id", "sort_order"),
    )
