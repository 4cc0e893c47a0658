"""Schema migration runner.

Drives Alembic programmatically so the API process can bring its database to
a known schema before it starts accepting connections. The migration scripts
ship inside the package (``gifvote/migrations``), so no ``alembic.ini`` is
needed at runtime.

Alembic's command API is synchronous; async callers run it in a worker
thread (``asyncio.to_thread``).
"""

from __future__ import annotations

from pathlib import Path

from alembic import command
from alembic.config import Config

MIGRATIONS_DIR: Path = Path(__file__).resolve().parent.parent / "migrations"


def alembic_config(database_sync_url: str) -> Config:
    """Build an in-memory Alembic Config pointing at the packaged scripts."""
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    config.set_main_option("sqlalchemy.url", database_sync_url)
    return config


def run_migrations(database_sync_url: str, reset: bool = False) -> None:
    """Upgrade the database at ``database_sync_url`` to the latest revision.

    Args:
        database_sync_url: Synchronous SQLAlchemy URL (``sqlite:///...``).
        reset:             Drop everything back to base before upgrading,
                           leaving only the seeded fixtures. Never set in
                           production.
    """
    config = alembic_config(database_sync_url)

    # Upgrade first so a brand-new file has a revision to downgrade from.
    command.upgrade(config, "head")

    if reset:
        command.downgrade(config, "base")
        command.upgrade(config, "head")
