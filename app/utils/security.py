# app/utils/security.py
import bcrypt

from app import config


def hash_password(plain: str) -> str:
    salt = bcrypt.gensalt(rounds=config.BCRYPT_SALT_ROUNDS)
    return bcrypt.hashpw(plain.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain: str, password_hash: str | None) -> bool:
    if not plain or not password_hash:
        return False
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # malformed stored hash
        return False
