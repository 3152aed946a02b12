# app/routers/showcase.py
"""
Landing menu images, marquee images and marquee slides.

The three collections share one route layout, built by ``_collection_router``:
public list / get, admin list, admin create / update / delete.
"""
from typing import Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.repositories.showcase import MarqueeImageRepository, OrderedCollectionRepository
from app.routers.deps import (
    get_or_404,
    landing_menu_repo,
    marquee_image_repo,
    marquee_slide_repo,
    request_locale,
    vary_accept_language,
)
from app.schemas.showcase import (
    LandingMenuImageCreate,
    LandingMenuImageUpdate,
    MarqueeImageCreate,
    MarqueeImageUpdate,
    MarqueeSlideCreate,
    MarqueeSlideUpdate,
)
from app.serializers import IMAGE_FIELDS, SLIDE_FIELDS, page_payload, serialize_row
from app.utils.authz import require_admin

ORDER_INDEX_TAKEN = "orderIndex already exists, choose another"
PIN_TAKEN = "There is already a pinned image"


def _check_unique(repo: OrderedCollectionRepository, data: dict, exclude_id: Optional[int] = None) -> None:
    if "order_index" in data and repo.exists_with_order_index(data["order_index"], exclude_id=exclude_id):
        raise HTTPException(status_code=400, detail=ORDER_INDEX_TAKEN)
    if (
        isinstance(repo, MarqueeImageRepository)
        and data.get("is_pinned") is True
        and repo.exists_pinned(exclude_id=exclude_id)
    ):
        raise HTTPException(status_code=400, detail=PIN_TAKEN)


def _collection_router(
    prefix: str,
    tag: str,
    get_repo: Callable,
    create_schema,
    update_schema,
    fields: tuple,
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])

    def _out(obj, locale):
        return serialize_row(obj, locale, fields)

    @router.get("", dependencies=[Depends(vary_accept_language)])
    def list_items(
        include_inactive: bool = Query(False, alias="includeInactive"),
        page: int = Query(1),
        limit: int = Query(20),
        locale: str = Depends(request_locale),
        repo: OrderedCollectionRepository = Depends(get_repo),
    ):
        result = repo.list(include_inactive=include_inactive, page=page, limit=limit)
        return page_payload(result, [_out(o, locale) for o in result.items])

    @router.get("/admin", dependencies=[Depends(require_admin), Depends(vary_accept_language)])
    def admin_list_items(
        is_active: Optional[bool] = Query(None, alias="isActive"),
        page: int = Query(1),
        limit: int = Query(20),
        locale: str = Depends(request_locale),
        repo: OrderedCollectionRepository = Depends(get_repo),
    ):
        result = repo.list(include_inactive=True, is_active=is_active, page=page, limit=limit)
        return page_payload(result, [_out(o, locale) for o in result.items])

    @router.get("/{item_id}", dependencies=[Depends(vary_accept_language)])
    def get_item(
        item_id: int,
        locale: str = Depends(request_locale),
        repo: OrderedCollectionRepository = Depends(get_repo),
    ):
        return _out(get_or_404(repo, item_id), locale)

    @router.post("", status_code=201, dependencies=[Depends(require_admin)])
    def create_item(
        payload: create_schema,
        locale: str = Depends(request_locale),
        repo: OrderedCollectionRepository = Depends(get_repo),
    ):
        data = payload.model_dump(exclude_none=True)
        _check_unique(repo, data)
        return _out(repo.create(data), locale)

    @router.put("/{item_id}", dependencies=[Depends(require_admin)])
    def update_item(
        item_id: int,
        payload: update_schema,
        locale: str = Depends(request_locale),
        repo: OrderedCollectionRepository = Depends(get_repo),
    ):
        obj = get_or_404(repo, item_id)
        data = payload.to_data()
        _check_unique(repo, data, exclude_id=obj.id)
        return _out(repo.update(obj, data), locale)

    @router.delete("/{item_id}", dependencies=[Depends(require_admin)])
    def delete_item(item_id: int, repo: OrderedCollectionRepository = Depends(get_repo)):
        repo.delete(get_or_404(repo, item_id))
        return {"message": "Deleted"}

    return router


landing_menu_router = _collection_router(
    "/landing-menu",
    "landing-menu",
    landing_menu_repo,
    LandingMenuImageCreate,
    LandingMenuImageUpdate,
    IMAGE_FIELDS,
)
marquee_images_router = _collection_router(
    "/marquee-images",
    "marquee-images",
    marquee_image_repo,
    MarqueeImageCreate,
    MarqueeImageUpdate,
    IMAGE_FIELDS,
)
marquee_slides_router = _collection_router(
    "/marquee-slides",
    "marquee-slides",
    marquee_slide_repo,
    MarqueeSlideCreate,
    MarqueeSlideUpdate,
    SLIDE_FIELDS,
)
