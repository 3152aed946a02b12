# migrations/env.py
from __future__ import annotations

from logging.config import fileConfig

from alembic import context

import app.models  # noqa: F401  (registers every table on Base.metadata)
from app import config as app_config
from app.db import session as db_session
from app.db.base import Base

alembic_cfg = context.config
# DATABASE_URL (.env) wins over alembic.ini
alembic_cfg.set_main_option("sqlalchemy.url", app_config.DATABASE_URL)

if alembic_cfg.config_file_name is not None:
    fileConfig(alembic_cfg.config_file_name)


def _options() -> dict:
    return {
        "target_metadata": Base.metadata,
        "compare_type": True,
        # sqlite cannot ALTER most things in place
        "render_as_batch": app_config.DATABASE_URL.startswith("sqlite"),
    }


def run_offline() -> None:
    """Emit SQL to stdout (``alembic upgrade head --sql``)."""
    context.configure(
        url=app_config.DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_options(),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    with db_session.engine.connect() as connection:
        context.configure(connection=connection, **_options())
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
