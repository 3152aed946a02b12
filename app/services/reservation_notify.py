# app/services/reservation_notify.py
"""Reservation notification email plus the status bump that follows a successful send."""
from __future__ import annotations

import logging

from app.db import session as db_session
from app.repositories.reservation_request import ReservationRequestRepository
from app.serializers import row_to_wire
from app.utils.mailer import send_reservation_email

log = logging.getLogger(__name__)


def deliver(repo: ReservationRequestRepository, reservation_id: int) -> None:
    """Send now and mark the row emailed. Mail errors propagate."""
    obj = repo.get_by_id(reservation_id)
    if obj is None:
        return
    send_reservation_email(row_to_wire(obj))
    repo.mark_emailed(reservation_id)


def deliver_in_background(reservation_id: int) -> None:
    """BackgroundTasks entry point: own session, failures only logged."""
    db = db_session.SessionLocal()
    try:
        deliver(ReservationRequestRepository(db), reservation_id)
    except Exception:
        log.exception("reservation %s: notification email failed", reservation_id)
    finally:
        db.close()
