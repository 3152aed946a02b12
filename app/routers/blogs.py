# app/routers/blogs.py
"""
Blog management (admin) and the published-blog API (public).

Admin responses stay multi-locale unless the client asks for a locale, via
``?locale=`` or an Accept-Language header.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.models.blog import BLOG_STATUSES
from app.models.user import User
from app.repositories import BlogRepository, DuplicateError
from app.repositories.blog import ScheduledAtRequiredError
from app.routers.deps import (
    blog_repo,
    explicit_locale,
    get_or_404,
    request_locale,
    vary_accept_language,
)
from app.schemas.blog import BlogCreate, BlogSchedule, BlogUpdate
from app.serializers import admin_blog, page_payload, public_blog
from app.utils.authz import require_admin
from app.utils.blog_content import ContentTooLargeError, check_content_size

router = APIRouter(prefix="/blogs", tags=["blogs"], dependencies=[Depends(require_admin)])
public_router = APIRouter(prefix="/public/blogs", tags=["public-blogs"])


def _save(fn, *args):
    """Run a repository write, translating its domain errors."""
    try:
        return fn(*args)
    except ScheduledAtRequiredError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ContentTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except DuplicateError:
        raise HTTPException(status_code=409, detail="Slug already exists")


# ========= admin =========
@router.get("", dependencies=[Depends(vary_accept_language)])
def list_blogs(
    page: int = Query(1),
    limit: int = Query(20),
    q: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    tag: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    with_count: bool = Query(True, alias="withCount"),
    locale: Optional[str] = Depends(explicit_locale),
    repo: BlogRepository = Depends(blog_repo),
):
    status_filter = None
    if status and status != "all":
        if status not in BLOG_STATUSES:
            raise HTTPException(status_code=400, detail="Invalid status")
        status_filter = status
    result = repo.list_admin(
        page=page, limit=limit, q=q, status=status_filter, tag=tag, sort=sort, with_count=with_count
    )
    items = []
    for blog in result.items:
        doc = admin_blog(blog, locale)
        for key in ("content_i18n", "toc_i18n", "plainText_i18n"):
            doc.pop(key, None)
        items.append(doc)
    return page_payload(result, items)


@router.get("/{item_id}", dependencies=[Depends(vary_accept_language)])
def get_blog(
    item_id: int,
    locale: Optional[str] = Depends(explicit_locale),
    repo: BlogRepository = Depends(blog_repo),
):
    return admin_blog(get_or_404(repo, item_id), locale)


def _create(repo: BlogRepository, data: dict):
    check_content_size(data.get("content_i18n"))
    return repo.create(data)


def _update(repo: BlogRepository, blog, data: dict):
    check_content_size(data.get("content_i18n"))
    return repo.update(blog, data)


@router.post("", status_code=201)
def create_blog(
    payload: BlogCreate,
    user: User = Depends(require_admin),
    locale: Optional[str] = Depends(explicit_locale),
    repo: BlogRepository = Depends(blog_repo),
):
    data = payload.to_data()
    data["created_by"] = user.id
    data["updated_by"] = user.id
    return admin_blog(_save(_create, repo, data), locale)


def _update_route(item_id: int, payload: BlogUpdate, user: User, locale: Optional[str], repo: BlogRepository):
    blog = get_or_404(repo, item_id)
    data = payload.to_data()
    data["updated_by"] = user.id
    return admin_blog(_save(_update, repo, blog, data), locale)


@router.put("/{item_id}")
def replace_blog(
    item_id: int,
    payload: BlogUpdate,
    user: User = Depends(require_admin),
    locale: Optional[str] = Depends(explicit_locale),
    repo: BlogRepository = Depends(blog_repo),
):
    return _update_route(item_id, payload, user, locale, repo)


@router.patch("/{item_id}")
def update_blog(
    item_id: int,
    payload: BlogUpdate,
    user: User = Depends(require_admin),
    locale: Optional[str] = Depends(explicit_locale),
    repo: BlogRepository = Depends(blog_repo),
):
    return _update_route(item_id, payload, user, locale, repo)


@router.delete("/{item_id}")
def delete_blog(item_id: int, user: User = Depends(require_admin), repo: BlogRepository = Depends(blog_repo)):
    repo.soft_delete(get_or_404(repo, item_id), updated_by=user.id)
    return {"message": "Deleted successfully"}


@router.patch("/{item_id}/publish")
def publish_blog(
    item_id: int,
    user: User = Depends(require_admin),
    locale: Optional[str] = Depends(explicit_locale),
    repo: BlogRepository = Depends(blog_repo),
):
    blog = get_or_404(repo, item_id)
    data = {"status": "published", "published_at": None, "scheduled_at": None, "updated_by": user.id}
    return admin_blog(_save(repo.update, blog, data), locale)


@router.patch("/{item_id}/archive")
def archive_blog(
    item_id: int,
    user: User = Depends(require_admin),
    locale: Optional[str] = Depends(explicit_locale),
    repo: BlogRepository = Depends(blog_repo),
):
    blog = get_or_404(repo, item_id)
    return admin_blog(_save(repo.update, blog, {"status": "archived", "updated_by": user.id}), locale)


@router.patch("/{item_id}/schedule")
def schedule_blog(
    item_id: int,
    payload: BlogSchedule,
    user: User = Depends(require_admin),
    locale: Optional[str] = Depends(explicit_locale),
    repo: BlogRepository = Depends(blog_repo),
):
    blog = get_or_404(repo, item_id)
    data = {"status": "scheduled", "scheduled_at": payload.scheduled_at, "updated_by": user.id}
    return admin_blog(_save(repo.update, blog, data), locale)


# ========= public =========
@public_router.get("", dependencies=[Depends(vary_accept_language)])
def list_public_blogs(
    page: int = Query(1),
    limit: int = Query(20),
    tag: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    locale: str = Depends(request_locale),
    repo: BlogRepository = Depends(blog_repo),
):
    result = repo.list_public(page=page, limit=limit, tag=tag, sort=sort)
    return page_payload(result, [public_blog(b, locale, include_content=False) for b in result.items])


@public_router.get("/{slug}", dependencies=[Depends(vary_accept_language)])
def get_public_blog(
    slug: str,
    locale: str = Depends(request_locale),
    repo: BlogRepository = Depends(blog_repo),
):
    blog = repo.get_public_by_slug(slug, locale)
    if blog is None:
        raise HTTPException(status_code=404, detail="Not found")
    return public_blog(blog, locale, include_content=True)


@public_router.post("/{item_id}/view")
def increment_view(item_id: int, repo: BlogRepository = Depends(blog_repo)):
    count = repo.increment_view_count(item_id)
    if count is None:
        raise HTTPException(status_code=404, detail="Not found")
    return {"viewCount": count}
