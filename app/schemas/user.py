from typing import Literal, Optional

from pydantic import EmailStr, Field, field_validator

from app.schemas.common import WireModel

Role = Literal["super_admin", "editor"]


class LoginIn(WireModel):
    email: str = ""
    password: str = ""


class RefreshIn(WireModel):
    refresh_token: Optional[str] = None


class UserCreate(WireModel):
    name: Optional[str] = Field(None, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    role: Role = "editor"
    is_active: bool = True

    @field_validator("email", mode="before")
    @classmethod
    def _lower_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class UserUpdate(WireModel):
    name: Optional[str] = Field(None, max_length=100)
    password: Optional[str] = Field(None, min_length=8, max_length=128)
    role: Optional[Role] = None
    is_active: Optional[bool] = None
