"""Alembic migration environment.

The database URL comes from the ``sqlalchemy.url`` option when the migration
is driven programmatically (``gifvote.infra.migrate.run_migrations`` sets it).
When run from the Alembic CLI the URL is built from DATABASE_PATH instead.

Intentionally does NOT import gifvote.config.constants - that module requires
GIPHY_API_KEY at import time, which migrations have no use for.
"""

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from gifvote.infra.db import metadata

# Import tables module so Table() constructors execute and register against
# metadata. Without this import, metadata is empty at autogenerate time.
import gifvote.infra.tables  # noqa: F401, E402

alembic_config = context.config

if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)

DATABASE_SYNC_URL: str = alembic_config.get_main_option("sqlalchemy.url") or (
    f"sqlite:///{os.environ.get('DATABASE_PATH', 'db.sqlite')}"
)

# MetaData is shared with all SQLAlchemy Table definitions so that
# autogenerate can detect schema changes automatically.
target_metadata = metadata


def run_migrations_offline() -> None:
    """Run migrations without a live DB connection (generates SQL script)."""
    context.configure(
        url=DATABASE_SYNC_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations against a live DB connection."""
    connectable = engine_from_config(
        {"sqlalchemy.url": DATABASE_SYNC_URL},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            # SQLite cannot ALTER most constraints in place.
            render_as_batch=True,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
