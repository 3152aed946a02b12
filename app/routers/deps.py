# app/routers/deps.py
from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.i18n import Locale, normalize_locale
from app.repositories import (
    BlogRepository,
    LandingMenuRepository,
    MarqueeImageRepository,
    MarqueeSlideRepository,
    ProductCategoryRepository,
    ProductRepository,
    ReservationRequestRepository,
    UserRepository,
)


# ========= locale =========
def request_locale(request: Request, locale: Optional[str] = Query(None)) -> Locale:
    """?locale= wins over Accept-Language."""
    return normalize_locale(locale or request.headers.get("accept-language"))


def explicit_locale(request: Request, locale: Optional[str] = Query(None)) -> Optional[Locale]:
    """Like request_locale, but None when the client asked for no locale at all."""
    hint = (locale or "").strip() or (request.headers.get("accept-language") or "").strip()
    return normalize_locale(hint) if hint else None


def vary_accept_language(response: Response) -> None:
    response.headers["Vary"] = "Accept-Language"


# ========= repositories =========
def blog_repo(db: Session = Depends(get_db)) -> BlogRepository:
    return BlogRepository(db)


def category_repo(db: Session = Depends(get_db)) -> ProductCategoryRepository:
    return ProductCategoryRepository(db)


def product_repo(db: Session = Depends(get_db)) -> ProductRepository:
    return ProductRepository(db)


def landing_menu_repo(db: Session = Depends(get_db)) -> LandingMenuRepository:
    return LandingMenuRepository(db)


def marquee_image_repo(db: Session = Depends(get_db)) -> MarqueeImageRepository:
    return MarqueeImageRepository(db)


def marquee_slide_repo(db: Session = Depends(get_db)) -> MarqueeSlideRepository:
    return MarqueeSlideRepository(db)


def reservation_repo(db: Session = Depends(get_db)) -> ReservationRequestRepository:
    return ReservationRequestRepository(db)


def user_repo(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


# ========= helpers =========
def get_or_404(repo, item_id: int):
    obj = repo.get_by_id(item_id)
    if obj is None:
        raise HTTPException(status_code=404, detail="Not found")
    return obj
