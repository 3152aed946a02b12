# app/utils/authz.py
from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.user import User
from app.utils.tokens import ACCESS_COOKIE, verify_access_token


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("authorization") or ""
    if header.startswith("Bearer "):
        return header[7:].strip() or None
    return None


def require_admin(request: Request, db: Session = Depends(get_db)) -> User:
    """
    - No token (bearer header or access_token cookie): 401
    - Invalid/expired token: 401
    - Unknown or inactive user: 401
    Otherwise the user is attached to request.state.admin_user and returned.
    """
    token = _bearer_token(request) or request.cookies.get(ACCESS_COOKIE)
    if not token:
        raise HTTPException(status_code=401, detail="Unauthorized")

    payload = verify_access_token(token)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid token")

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token")

    user = db.get(User, user_id)
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="User not found or inactive")

    request.state.admin_user = user
    return user


def require_super_admin(user: User = Depends(require_admin)) -> User:
    if user.role != "super_admin":
        raise HTTPException(status_code=403, detail="Forbidden")
    return user
