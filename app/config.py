# app/config.py
import os
import re

from dotenv import load_dotenv

# ---- Load env (.env) ----
load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return (os.getenv(name, default) or "").strip().lower() in ("1", "true", "yes", "on")


_DURATION_RE = re.compile(r"^(\d+)([smhd])$")
_UNIT_SECONDS = {"s": 1, "m": 60, "h": 60 * 60, "d": 24 * 60 * 60}


def duration_to_seconds(value: str | None, fallback: int) -> int:
    """Parse '15m', '7d', '1h', '30s' into seconds."""
    match = _DURATION_RE.match((value or "").strip())
    if not match:
        return fallback
    return int(match.group(1)) * _UNIT_SECONDS[match.group(2)]


APP_ENV = os.getenv("APP_ENV", "development")
IS_PROD = APP_ENV == "production"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
SITE_NAME = os.getenv("SITE_NAME", "Salathai")

API_BASE = (os.getenv("API_BASE") or "").strip() or "/api/v1"
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./restaurant.db")

# ---- Auth ----
JWT_ACCESS_SECRET = os.getenv("JWT_ACCESS_SECRET", "access_secret_dev")
JWT_REFRESH_SECRET = os.getenv("JWT_REFRESH_SECRET", "refresh_secret_dev")
ACCESS_TOKEN_TTL = duration_to_seconds(os.getenv("JWT_EXPIRES", "15m"), 15 * 60)
REFRESH_TOKEN_TTL = duration_to_seconds(os.getenv("REFRESH_EXPIRES", "7d"), 7 * 24 * 60 * 60)
COOKIE_DOMAIN = os.getenv("COOKIE_DOMAIN") or None
COOKIE_SECURE = _flag("COOKIE_SECURE")
BCRYPT_SALT_ROUNDS = int(os.getenv("BCRYPT_SALT_ROUNDS", "10"))

# ---- Mail ----
SMTP_HOST = os.getenv("SMTP_HOST")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
# implicit TLS on 465 unless told otherwise
SMTP_SECURE = _flag("SMTP_SECURE", "true" if SMTP_PORT == 465 else "false")
SMTP_USER = os.getenv("SMTP_USER")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD")
SMTP_TIMEOUT = 10
MAIL_FROM_NAME = os.getenv("MAIL_FROM_NAME", f"{SITE_NAME} Website")
MAIL_FROM_ADDR = os.getenv("MAIL_FROM_ADDR") or SMTP_USER or "no-reply@localhost"
MAIL_TO_ADDR = os.getenv("MAIL_TO_ADDR") or SMTP_USER or "reservations@localhost"
ENFORCE_MAIL_DELIVERY = _flag("ENFORCE_MAIL_DELIVERY")

# ---- Object storage (S3 compatible) ----
S3_BUCKET = os.getenv("S3_BUCKET", "")
S3_REGION = os.getenv("S3_REGION", "")
S3_ENDPOINT = os.getenv("S3_ENDPOINT", "")  # e.g. https://us-southeast-1.linodeobjects.com
S3_ACCESS_KEY = os.getenv("S3_ACCESS_KEY", "")
S3_SECRET_KEY = os.getenv("S3_SECRET_KEY", "")
ASSETS_BASE_URL = (os.getenv("ASSETS_BASE_URL") or "").rstrip("/")
UPLOAD_ROOT_FOLDER = (os.getenv("UPLOAD_ROOT_FOLDER") or "").strip() or "dropincafe"

# ---- Content ----
BLOG_DEFAULT_AUTHOR = os.getenv("BLOG_DEFAULT_AUTHOR", "DropInCafe")
