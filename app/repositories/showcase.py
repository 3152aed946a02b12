# app/repositories/showcase.py
from __future__ import annotations

from typing import Optional

from app.models.showcase import LandingMenuImage, MarqueeImage, MarqueeSlide
from app.repositories.base import Page, Repository, clamp_page


class OrderedCollectionRepository(Repository):
    """Image/slide collections sorted by a unique ``order_index``."""

    def exists_with_order_index(self, order_index: int, exclude_id: Optional[int] = None) -> bool:
        return self.exists(self.model.order_index == order_index, exclude_id=exclude_id)

    def list(
        self,
        include_inactive: bool = False,
        is_active: Optional[bool] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Page:
        page, limit = clamp_page(page, limit)
        q = self.query()
        if is_active is not None:
            q = q.filter(self.model.is_active.is_(is_active))
        elif not include_inactive:
            q = q.filter(self.model.is_active.is_(True))
        q = q.order_by(self.model.order_index.asc(), self.model.created_at.asc())
        return self.paginate(q, page, limit)


class LandingMenuRepository(OrderedCollectionRepository):
    model = LandingMenuImage


class MarqueeImageRepository(OrderedCollectionRepository):
    model = MarqueeImage

    def exists_pinned(self, exclude_id: Optional[int] = None) -> bool:
        return self.exists(MarqueeImage.is_pinned.is_(True), exclude_id=exclude_id)


class MarqueeSlideRepository(OrderedCollectionRepository):
    model = MarqueeSlide
