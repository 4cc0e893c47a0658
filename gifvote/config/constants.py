"""Constants module.

All configuration values are sourced exclusively from environment variables.
This module is the single gateway between the environment and the codebase:

    .env file (optional) ──► Environment variables
                                    │
                                    ▼
                        gifvote.config.constants     ← os.environ["KEY"]
                                    │
                                    ▼
                        All other modules            ← import from here

Rules:
- No module outside this file may call os.environ directly.
- os.environ["KEY"] is used for GIPHY_API_KEY (not .get) so that a missing
  key raises KeyError at import time, causing a hard startup failure rather
  than a 500 on the first /gifs request.
- A ``.env`` file in the working directory is loaded first. Variables already
  set in the real environment win over the file.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

APP_ENV: str = os.environ.get("APP_ENV", "development")

# Production never resets the schema at startup; every other environment is
# reset to the fixture state on each boot.
IS_PRODUCTION: bool = APP_ENV.lower() == "production"

# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

DATABASE_PATH: str = os.environ.get("DATABASE_PATH", "db.sqlite")

# Async SQLAlchemy URL (aiosqlite driver) - used by the application at runtime.
DATABASE_URL: str = f"sqlite+aiosqlite:///{DATABASE_PATH}"

# Synchronous SQLAlchemy URL (stdlib sqlite3 driver) - used by Alembic only.
DATABASE_SYNC_URL: str = f"sqlite:///{DATABASE_PATH}"

# ---------------------------------------------------------------------------
# Giphy
# ---------------------------------------------------------------------------

GIPHY_API_KEY: str = os.environ["GIPHY_API_KEY"]
GIPHY_BASE_URL: str = os.environ.get("GIPHY_BASE_URL", "https://api.giphy.com")

# Seconds before an outbound Giphy request is abandoned.
GIPHY_TIMEOUT_SECONDS: float = float(os.environ.get("GIPHY_TIMEOUT_SECONDS", "10"))

# ---------------------------------------------------------------------------
# HTTP server
# ---------------------------------------------------------------------------

HOST: str = os.environ.get("HOST", "0.0.0.0")
PORT: int = int(os.environ.get("PORT", "3000"))

# Prebuilt front-end bundle served at "/".
PUBLIC_DIR: Path = Path(os.environ.get("PUBLIC_DIR", "public"))

# Maximum number of rows returned by GET /gifs/top.
TOP_GIFS_LIMIT: int = 20

# ---------------------------------------------------------------------------
# Observability
# ---------------------------------------------------------------------------

SERVICE_NAME: str = os.environ.get("SERVICE_NAME", "gifvote")
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")
