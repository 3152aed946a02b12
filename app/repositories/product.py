# app/repositories/product.py
from __future__ import annotations

from typing import Any, Optional

from app.i18n import DEFAULT_LOCALE
from app.models.product import Product, ProductCategory
from app.repositories.base import Page, Repository, clamp_page, text_search
from app.utils.slug import slugify

FALLBACK_PRODUCT_SLUG = "product"


class ProductCategoryRepository(Repository[ProductCategory]):
    model = ProductCategory

    def get_by_key(self, key: str) -> Optional[ProductCategory]:
        return self.query().filter(ProductCategory.key == key.strip().lower()).first()

    def list(self, page: int = 1, limit: int = 20) -> Page[ProductCategory]:
        page, limit = clamp_page(page, limit)
        q = self.query().order_by(ProductCategory.sort_order.asc(), ProductCategory.created_at.asc())
        return self.paginate(q, page, limit)


def base_slug_for(slug: Optional[str], name_i18n: Optional[dict]) -> str:
    """Explicit slug, else English name, else default-locale name, else vi."""
    name_i18n = name_i18n or {}
    source = (
        slug
        or name_i18n.get("en")
        or name_i18n.get(DEFAULT_LOCALE)
        or name_i18n.get("vi")
        or FALLBACK_PRODUCT_SLUG
    )
    return slugify(source) or FALLBACK_PRODUCT_SLUG


class ProductRepository(Repository[Product]):
    model = Product

    def unique_slug(self, base: str, exclude_id: Optional[int] = None) -> str:
        candidate = base
        i = 2
        while self.exists(Product.slug == candidate, exclude_id=exclude_id):
            candidate = f"{base}-{i}"
            i += 1
        return candidate

    def create(self, data: dict[str, Any]) -> Product:
        data = dict(data)
        data["slug"] = self.unique_slug(base_slug_for(data.get("slug"), data.get("name_i18n")))
        return super().create(data)

    def update(self, obj: Product, data: dict[str, Any]) -> Product:
        data = dict(data)
        if data.get("slug"):
            data["slug"] = self.unique_slug(base_slug_for(data["slug"], None), exclude_id=obj.id)
        else:
            data.pop("slug", None)
        return super().update(obj, data)

    def list(
        self,
        page: int = 1,
        limit: int = 20,
        category_id: Optional[int] = None,
        is_available: Optional[bool] = None,
        q: Optional[str] = None,
    ) -> Page[Product]:
        page, limit = clamp_page(page, limit)
        query = self.query()
        if category_id is not None:
            query = query.filter(Product.category_id == category_id)
        if is_available is not None:
            query = query.filter(Product.is_available.is_(is_available))
        search = text_search(
            [Product.name_i18n, Product.description_i18n, Product.image_alt_i18n, Product.tags], q
        )
        if search is not None:
            query = query.filter(search)
        query = query.order_by(Product.sort_order.asc(), Product.created_at.asc())
        return self.paginate(query, page, limit)
