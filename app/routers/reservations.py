# app/routers/reservations.py
import datetime as dt
import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request

from app import config
from app.repositories import ReservationRequestRepository
from app.routers.deps import get_or_404, reservation_repo
from app.schemas.reservation import ReservationCreate, ReservationStatus, ReservationStatusUpdate
from app.serializers import page_payload, row_to_wire
from app.services import reservation_notify
from app.utils.authz import require_admin
from app.utils.ratelimit import reservation_limiter

log = logging.getLogger(__name__)

router = APIRouter(prefix="/reservation-requests", tags=["reservation-requests"])


class HoneypotTripped(Exception):
    """Raised for bot submissions; answered with a bare 202."""


async def reject_honeypot(request: Request) -> None:
    # checked on the raw body, ahead of model validation
    try:
        raw = await request.json()
    except ValueError:
        return
    website = raw.get("website") if isinstance(raw, dict) else None
    if isinstance(website, str) and website.strip():
        raise HoneypotTripped()


@router.post("", status_code=201, dependencies=[Depends(reservation_limiter), Depends(reject_honeypot)])
def create_reservation(
    payload: ReservationCreate,
    background: BackgroundTasks,
    repo: ReservationRequestRepository = Depends(reservation_repo),
):
    data = payload.model_dump(exclude={"website"}, exclude_none=True)
    obj = repo.create(data)

    if config.ENFORCE_MAIL_DELIVERY:
        try:
            reservation_notify.deliver(repo, obj.id)
        except Exception:
            log.exception("reservation %s: notification email failed", obj.id)
            raise HTTPException(status_code=500, detail="Failed to send reservation email")
        obj = repo.get_by_id(obj.id)
    else:
        background.add_task(reservation_notify.deliver_in_background, obj.id)

    return {"message": "Submitted", "id": obj.id, "status": obj.status}


@router.get("", dependencies=[Depends(require_admin)])
def list_reservations(
    page: int = Query(1),
    limit: int = Query(20),
    q: Optional[str] = Query(None),
    status: Optional[ReservationStatus] = Query(None),
    date_from: Optional[dt.date] = Query(None, alias="dateFrom"),
    date_to: Optional[dt.date] = Query(None, alias="dateTo"),
    repo: ReservationRequestRepository = Depends(reservation_repo),
):
    result = repo.list(page=page, limit=limit, q=q, status=status, date_from=date_from, date_to=date_to)
    return page_payload(result, [row_to_wire(r) for r in result.items])


@router.get("/{item_id}", dependencies=[Depends(require_admin)])
def get_reservation(item_id: int, repo: ReservationRequestRepository = Depends(reservation_repo)):
    return row_to_wire(get_or_404(repo, item_id))


@router.patch("/{item_id}/status", dependencies=[Depends(require_admin)])
def update_reservation_status(
    item_id: int,
    payload: ReservationStatusUpdate,
    repo: ReservationRequestRepository = Depends(reservation_repo),
):
    obj = get_or_404(repo, item_id)
    return row_to_wire(repo.update(obj, {"status": payload.status}))
