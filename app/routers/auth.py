# app/routers/auth.py
from __future__ import annotations

import datetime as dt
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response

from app.models.user import User
from app.repositories import UserRepository
from app.routers.deps import user_repo
from app.schemas.user import LoginIn, RefreshIn
from app.utils.authz import require_admin
from app.utils.security import verify_password
from app.utils.tokens import (
    REFRESH_COOKIE,
    clear_auth_cookies,
    set_auth_cookies,
    sign_access_token,
    sign_refresh_token,
    verify_refresh_token,
)

router = APIRouter(prefix="/auth", tags=["auth"])


def _profile(user: User) -> dict:
    return {"id": user.id, "email": user.email, "name": user.name, "role": user.role}


def _issue(response: Response, user: User) -> str:
    access = sign_access_token(str(user.id), user.role)
    refresh = sign_refresh_token(str(user.id), user.role)
    set_auth_cookies(response, access, refresh)
    return access


# ========= login =========
@router.post("/login")
def login(payload: LoginIn, response: Response, repo: UserRepository = Depends(user_repo)):
    """
    - 400: email or password missing
    - 401: unknown email, non-local provider, wrong password
    - 403: account deactivated
    """
    if not payload.email or not payload.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    user = repo.get_by_email(payload.email)
    if not user or user.provider != "local":
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="Account is inactive. Please contact admin.")

    _issue(response, user)
    repo.update(user, {"last_login_at": dt.datetime.now(dt.timezone.utc)})
    return _profile(user)


# ========= session =========
@router.get("/me")
def me(user: User = Depends(require_admin)):
    return _profile(user)


@router.post("/logout")
def logout(response: Response):
    clear_auth_cookies(response)
    return {"message": "Logged out"}


@router.post("/refresh")
def refresh(
    request: Request,
    response: Response,
    payload: Optional[RefreshIn] = Body(None),
    repo: UserRepository = Depends(user_repo),
):
    """Refresh token from the cookie, else from the body; rotates both cookies."""
    token = request.cookies.get(REFRESH_COOKIE) or (payload.refresh_token if payload else None)
    if not token:
        raise HTTPException(status_code=401, detail="No refresh token")

    claims = verify_refresh_token(token)
    if not claims:
        raise HTTPException(status_code=401, detail="Invalid refresh token")

    try:
        user = repo.get_by_id(int(claims["sub"]))
    except (TypeError, ValueError):
        user = None
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="User not found or inactive")

    return {"accessToken": _issue(response, user)}
