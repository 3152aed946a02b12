import datetime as dt
from typing import Literal, Optional

from pydantic import EmailStr, Field, field_validator

from app.schemas.common import WireModel

ReservationSource = Literal["website", "phone", "walk_in", "other"]
ReservationStatus = Literal["new", "emailed", "confirmed", "cancelled"]


class ReservationCreate(WireModel):
    full_name: str = Field(..., min_length=1, max_length=160)
    phone_number: str = Field(..., min_length=1, max_length=40)
    email: Optional[EmailStr] = None
    guest_count: int = Field(..., ge=1, le=100)
    reservation_date: dt.date
    reservation_time: str = Field(..., min_length=1, max_length=20)
    note: Optional[str] = Field(None, max_length=1000)
    source: ReservationSource = "website"
    # honeypot, never stored
    website: Optional[str] = None

    @field_validator("full_name", mode="before")
    @classmethod
    def _single_line_name(cls, v):
        # ends up in the mail Subject header
        if isinstance(v, str):
            return " ".join(v.split())
        return v

    @field_validator("email", mode="before")
    @classmethod
    def _blank_email(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v


class ReservationStatusUpdate(WireModel):
    status: ReservationStatus
