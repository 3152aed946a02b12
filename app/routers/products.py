# app/routers/products.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.repositories import ProductCategoryRepository, ProductRepository
from app.routers.deps import (
    category_repo,
    get_or_404,
    product_repo,
    request_locale,
    vary_accept_language,
)
from app.schemas.product import (
    ProductCategoryCreate,
    ProductCategoryUpdate,
    ProductCreate,
    ProductUpdate,
)
from app.serializers import CATEGORY_FIELDS, page_payload, serialize_product, serialize_row
from app.utils.authz import require_admin

categories_router = APIRouter(prefix="/product-categories", tags=["product-categories"])
products_router = APIRouter(prefix="/products", tags=["products"])

KEY_TAKEN = "key already exists"


# ========= categories =========
@categories_router.get("", dependencies=[Depends(vary_accept_language)])
def list_categories(
    page: int = Query(1),
    limit: int = Query(20),
    locale: str = Depends(request_locale),
    repo: ProductCategoryRepository = Depends(category_repo),
):
    result = repo.list(page=page, limit=limit)
    return page_payload(result, [serialize_row(c, locale, CATEGORY_FIELDS) for c in result.items])


@categories_router.get("/{item_id}", dependencies=[Depends(vary_accept_language)])
def get_category(
    item_id: int,
    locale: str = Depends(request_locale),
    repo: ProductCategoryRepository = Depends(category_repo),
):
    return serialize_row(get_or_404(repo, item_id), locale, CATEGORY_FIELDS)


@categories_router.post("", status_code=201, dependencies=[Depends(require_admin)])
def create_category(
    payload: ProductCategoryCreate,
    locale: str = Depends(request_locale),
    repo: ProductCategoryRepository = Depends(category_repo),
):
    data = payload.to_data()
    if repo.get_by_key(data["key"]):
        raise HTTPException(status_code=400, detail=KEY_TAKEN)
    return serialize_row(repo.create(data), locale, CATEGORY_FIELDS)


@categories_router.put("/{item_id}", dependencies=[Depends(require_admin)])
def update_category(
    item_id: int,
    payload: ProductCategoryUpdate,
    locale: str = Depends(request_locale),
    repo: ProductCategoryRepository = Depends(category_repo),
):
    obj = get_or_404(repo, item_id)
    data = payload.to_data()
    if data.get("key"):
        other = repo.get_by_key(data["key"])
        if other is not None and other.id != obj.id:
            raise HTTPException(status_code=400, detail=KEY_TAKEN)
    return serialize_row(repo.update(obj, data), locale, CATEGORY_FIELDS)


@categories_router.delete("/{item_id}", dependencies=[Depends(require_admin)])
def delete_category(item_id: int, repo: ProductCategoryRepository = Depends(category_repo)):
    repo.delete(get_or_404(repo, item_id))
    return {"message": "Deleted"}


# ========= products =========
def _check_category(repo: ProductCategoryRepository, category_id: Optional[int]) -> None:
    if category_id is not None and repo.get_by_id(category_id) is None:
        raise HTTPException(status_code=400, detail="Invalid categoryId")


@products_router.get("", dependencies=[Depends(vary_accept_language)])
def list_products(
    page: int = Query(1),
    limit: int = Query(20),
    category_id: Optional[int] = Query(None, alias="categoryId"),
    is_available: Optional[bool] = Query(None, alias="isAvailable"),
    q: Optional[str] = Query(None),
    locale: str = Depends(request_locale),
    repo: ProductRepository = Depends(product_repo),
):
    result = repo.list(page=page, limit=limit, category_id=category_id, is_available=is_available, q=q)
    return page_payload(result, [serialize_product(p, locale) for p in result.items])


@products_router.get("/{item_id}", dependencies=[Depends(vary_accept_language)])
def get_product(
    item_id: int,
    locale: str = Depends(request_locale),
    repo: ProductRepository = Depends(product_repo),
):
    return serialize_product(get_or_404(repo, item_id), locale)


@products_router.post("", status_code=201, dependencies=[Depends(require_admin)])
def create_product(
    payload: ProductCreate,
    locale: str = Depends(request_locale),
    repo: ProductRepository = Depends(product_repo),
    categories: ProductCategoryRepository = Depends(category_repo),
):
    data = payload.to_data()
    _check_category(categories, data.get("category_id"))
    return serialize_product(repo.create(data), locale)


@products_router.put("/{item_id}", dependencies=[Depends(require_admin)])
def update_product(
    item_id: int,
    payload: ProductUpdate,
    locale: str = Depends(request_locale),
    repo: ProductRepository = Depends(product_repo),
    categories: ProductCategoryRepository = Depends(category_repo),
):
    obj = get_or_404(repo, item_id)
    data = payload.to_data()
    _check_category(categories, data.get("category_id"))
    return serialize_product(repo.update(obj, data), locale)


@products_router.delete("/{item_id}", dependencies=[Depends(require_admin)])
def delete_product(item_id: int, repo: ProductRepository = Depends(product_repo)):
    repo.delete(get_or_404(repo, item_id))
    return {"message": "Deleted"}
