import os

# must be set before anything imports app.config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_SALT_ROUNDS"] = "4"
os.environ["SMTP_HOST"] = ""
os.environ["ENFORCE_MAIL_DELIVERY"] = "false"
os.environ["APP_ENV"] = "test"
os.environ["API_BASE"] = "/api/v1"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.bootstrap import create_super_admin  # noqa: E402
from app.db import session as db_session  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.main import app  # noqa: E402
from app.models.user import User  # noqa: E402
from app.utils.ratelimit import reservation_limiter  # noqa: E402
from app.utils.security import hash_password  # noqa: E402
from app.utils.storage import S3Storage, get_storage  # noqa: E402
from app.utils.tokens import sign_access_token  # noqa: E402

API = "/api/v1"
ADMIN_PASSWORD = "correct-horse-battery"


class FakeStorage(S3Storage):
    """Keeps uploaded objects in memory."""

    def __init__(self):
        super().__init__()
        self.objects = {}

    def public_url(self, key):
        return f"https://res.example.com/{key.lstrip('/')}"

    def put(self, key, body, content_type):
        self.objects[key] = (body, content_type)


@pytest.fixture(autouse=True)
def db():
    Base.metadata.create_all(db_session.engine)
    reservation_limiter.reset()
    session = db_session.SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(db_session.engine)


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def client(storage):
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin(db):
    return create_super_admin(db, "owner@example.com", ADMIN_PASSWORD, "Owner")


def login_as(client, user):
    client.cookies.set("access_token", sign_access_token(str(user.id), user.role))
    return client


@pytest.fixture
def admin_client(client, admin):
    return login_as(client, admin)


@pytest.fixture
def make_user(db):
    def _make(email, role="editor", password=ADMIN_PASSWORD, is_active=True, provider="local"):
        user = User(
            email=email,
            name=email.split("@")[0],
            password_hash=hash_password(password),
            role=role,
            is_active=is_active,
            provider=provider,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make
