# app/utils/tokens.py
from __future__ import annotations

import datetime as dt
from typing import Optional

import jwt
from fastapi import Response

from app import config

ACCESS_COOKIE = "access_token"
REFRESH_COOKIE = "refresh_token"
ALGORITHM = "HS256"


def _sign(sub: str, role: Optional[str], secret: str, ttl_seconds: int) -> str:
    now = dt.datetime.now(dt.timezone.utc)
    payload = {"sub": str(sub), "iat": now, "exp": now + dt.timedelta(seconds=ttl_seconds)}
    if role:
        payload["role"] = role
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def _verify(token: str, secret: str) -> Optional[dict]:
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except jwt.PyJWTError:
        return None
    if not payload.get("sub"):
        return None
    return payload


def sign_access_token(sub: str, role: Optional[str] = None) -> str:
    return _sign(sub, role, config.JWT_ACCESS_SECRET, config.ACCESS_TOKEN_TTL)


def sign_refresh_token(sub: str, role: Optional[str] = None) -> str:
    return _sign(sub, role, config.JWT_REFRESH_SECRET, config.REFRESH_TOKEN_TTL)


def verify_access_token(token: str) -> Optional[dict]:
    return _verify(token, config.JWT_ACCESS_SECRET)


def verify_refresh_token(token: str) -> Optional[dict]:
    return _verify(token, config.JWT_REFRESH_SECRET)


def _cookie_options() -> dict:
    return {
        "httponly": True,
        "samesite": "none" if config.IS_PROD else "lax",
        "secure": config.COOKIE_SECURE,
        "domain": config.COOKIE_DOMAIN,
        "path": "/",
    }


def set_auth_cookies(response: Response, access_token: str, refresh_token: str) -> None:
    opts = _cookie_options()
    response.set_cookie(ACCESS_COOKIE, access_token, max_age=config.ACCESS_TOKEN_TTL, **opts)
    response.set_cookie(REFRESH_COOKIE, refresh_token, max_age=config.REFRESH_TOKEN_TTL, **opts)


def clear_auth_cookies(response: Response) -> None:
    opts = _cookie_options()
    response.delete_cookie(ACCESS_COOKIE, **opts)
    response.delete_cookie(REFRESH_COOKIE, **opts)
