from sqlalchemy import Boolean, Column, DateTime, Integer, String, UniqueConstraint

from app.db.base import Base, TimestampMixin

ROLES = ("super_admin", "editor")
PROVIDERS = ("local", "google")


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=True)
    email = Column(String(160), nullable=False, index=True)
    password_hash = Column(String(255), nullable=True)
    provider = Column(String(20), nullable=False, default="local")
    google_id = Column(String(255), nullable=True, index=True)
    role = Column(String(20), nullable=False, default="super_admin")
    is_active = Column(Boolean, nullable=False, default=True)
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)
