from __future__ import annotations

from typing import Optional

from sqlalchemy import or_

from app.models.user import User
from app.repositories.base import Page, Repository, clamp_page


class UserRepository(Repository[User]):
    model = User

    def get_by_email(self, email: str) -> Optional[User]:
        return self.query().filter(User.email == (email or "").strip().lower()).first()

    def list(
        self,
        page: int = 1,
        limit: int = 20,
        q: Optional[str] = None,
        include_inactive: bool = False,
        role: Optional[str] = None,
    ) -> Page[User]:
        page, limit = clamp_page(page, limit)
        query = self.query()
        if not include_inactive:
            query = query.filter(User.is_active.is_(True))
        if role:
            query = query.filter(User.role == role)
        term = (q or "").strip()
        if term:
            query = query.filter(or_(User.email.ilike(f"%{term}%"), User.name.ilike(f"%{term}%")))
        query = query.order_by(User.created_at.desc(), User.id.desc())
        return self.paginate(query, page, limit)
