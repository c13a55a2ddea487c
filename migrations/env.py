"""Alembic environment for the IdeaHub schema.

The target URL comes from ``ALEMBIC_URL`` when set, else from the ini file
(``scripts/migrate.py`` injects it), else from ``settings.database_url_sync``.
"""
from __future__ import annotations

import os
import sys
from logging.config import fileConfig
from pathlib import Path

from alembic import context
from sqlalchemy import engine_from_config, pool

# Running ``alembic -c migrations/alembic.ini`` from a checkout needs src/ on the path.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from ideahub_stage.core.settings import settings  # noqa: E402
from ideahub_stage.db.session import Base  # noqa: E402

config = context.config

if config.config_file_name is not None:
    # Keep the application's loggers alive when migrating in-process.
    fileConfig(config.config_file_name, disable_existing_loggers=False)


def _database_url() -> str:
    override = os.getenv("ALEMBIC_URL")
    if override:
        return override
    return config.get_main_option("sqlalchemy.url") or settings.database_url_sync


config.set_main_option("sqlalchemy.url", _database_url())

# idea, comment, user_account and the two vote ledgers
target_metadata = Base.metadata


def include_object(obj, name, type_, reflected, compare_to):
    """Leave Alembic's own version table out of autogenerate diffs."""
    return not (type_ == "table" and name == "alembic_version")


def _configure(**kwargs) -> None:
    url = config.get_main_option("sqlalchemy.url") or ""
    context.configure(
        target_metadata=target_metadata,
        include_object=include_object,
        compare_type=True,
        # SQLite cannot ALTER most constraints in place.
        render_as_batch=url.startswith("sqlite"),
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit the IdeaHub DDL as SQL without connecting."""
    _configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply the IdeaHub revisions against a live database."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
