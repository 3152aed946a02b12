from sqlalchemy import Column, Date, DateTime, Integer, String, Text, CheckConstraint

from app.db.base import Base, TimestampMixin

RESERVATION_SOURCES = ("website", "phone", "walk_in", "other")
RESERVATION_STATUSES = ("new", "emailed", "confirmed", "cancelled")


class ReservationRequest(TimestampMixin, Base):
    __tablename__ = "reservation_requests"

    id = Column(Integer, primary_key=True)
    full_name = Column(String(160), nullable=False)
    phone_number = Column(String(40), nullable=False)
    email = Column(String(160), nullable=True)
    guest_count = Column(Integer, nullable=False)
    reservation_date = Column(Date, nullable=False, index=True)
    reservation_time = Column(String(20), nullable=False)
    note = Column(Text, nullable=True)
    source = Column(String(20), nullable=False, default="website")
    status = Column(String(20), nullable=False, default="new", index=True)
    emailed_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint("guest_count BETWEEN 1 AND 100", name="ck_reservation_requests_guest_count"),
    )
