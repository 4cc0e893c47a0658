"""Global pytest configuration.

Sets required environment variables at module level so that
``gifvote.config.constants`` can be imported without raising ``KeyError``.

``gifvote.config.constants`` reads ``os.environ["GIPHY_API_KEY"]`` (not
``.get``) at import time. ``conftest.py`` files are loaded by pytest *before*
test modules are collected or imported, which makes this the only reliable
injection point for mandatory env vars.

Rules:
- Do NOT import from ``gifvote.*`` at module level here - constants must not
  be imported until after the env vars below have been applied. Fixtures
  import lazily.
- Use ``setdefault`` so that real env vars set by CI/CD or the developer's
  shell are not clobbered.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import AsyncGenerator

import pytest_asyncio

# ---------------------------------------------------------------------------
# Environment variables consumed by gifvote.config.constants
# ---------------------------------------------------------------------------

_TEST_ENV: dict[str, str] = {
    # Giphy
    "GIPHY_API_KEY": "test-giphy-key",
    "GIPHY_BASE_URL": "https://giphy.test",
    "GIPHY_TIMEOUT_SECONDS": "5",
    # Environment
    "APP_ENV": "test",
    "DATABASE_PATH": "/tmp/gifvote-test.sqlite",
    "PUBLIC_DIR": "public",
    # Observability
    "SERVICE_NAME": "gifvote-test",
    "LOG_LEVEL": "ERROR",
}

for _key, _value in _TEST_ENV.items():
    os.environ.setdefault(_key, _value)


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture()
async def engine(tmp_path: Path) -> AsyncGenerator:
    """Async engine on a fresh SQLite file with all tables created (no topics)."""
    import gifvote.infra.tables  # noqa: F401  registers tables on metadata
    from gifvote.infra.db import create_engine, metadata

    eng = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite'}")
    async with eng.begin() as conn:
        await conn.run_sync(metadata.create_all)

    yield eng

    await eng.dispose()


@pytest_asyncio.fixture()
async def repository(engine):  # type: ignore[no-untyped-def]
    from gifvote.infra.repositories import GifRepository

    return GifRepository(engine)
