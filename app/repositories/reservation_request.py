from __future__ import annotations

import datetime as dt
from typing import Optional

from app.models.reservation_request import ReservationRequest
from app.repositories.base import Page, Repository, clamp_page, text_search


class ReservationRequestRepository(Repository[ReservationRequest]):
    model = ReservationRequest

    def list(
        self,
        page: int = 1,
        limit: int = 20,
        q: Optional[str] = None,
        status: Optional[str] = None,
        date_from: Optional[dt.date] = None,
        date_to: Optional[dt.date] = None,
    ) -> Page[ReservationRequest]:
        page, limit = clamp_page(page, limit)
        query = self.query()
        if status:
            query = query.filter(ReservationRequest.status == status)
        search = text_search(
            [
                ReservationRequest.full_name,
                ReservationRequest.phone_number,
                ReservationRequest.email,
                ReservationRequest.note,
                ReservationRequest.source,
            ],
            q,
        )
        if search is not None:
            query = query.filter(search)
        if date_from:
            query = query.filter(ReservationRequest.reservation_date >= date_from)
        if date_to:
            query = query.filter(ReservationRequest.reservation_date <= date_to)
        query = query.order_by(
            ReservationRequest.reservation_date.asc(),
            ReservationRequest.reservation_time.asc(),
            ReservationRequest.created_at.desc(),
        )
        return self.paginate(query, page, limit)

    def mark_emailed(self, item_id: int, when: Optional[dt.datetime] = None) -> Optional[ReservationRequest]:
        obj = self.get_by_id(item_id)
        if obj is None:
            return None
        return self.update(obj, {"status": "emailed", "emailed_at": when or dt.datetime.now(dt.timezone.utc)})
