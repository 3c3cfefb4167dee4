# contactbook/core/db.py
"""
Database configuration and initialization module.
Handles Tortoise ORM setup and the embedded SQLite store used by default.
"""
import logging
from pathlib import Path
from tortoise import Tortoise

from contactbook.config import settings

logger = logging.getLogger("uvicorn.error")

# Database connection URL (SQLite file by default)
# Format: sqlite://relative/or/absolute/path.db, or sqlite://:memory:
DB_URL = settings.database_url

# Tortoise ORM configuration dictionary
TORTOISE_ORM = {
    "connections": {"default": DB_URL},
    "apps": {
        "models": {
            "models": [
                "contactbook.models.user",      # User model
                "contactbook.models.contact",   # Contact model
            ],
            "default_connection": "default",
        },
    },
}


def _ensure_sqlite_parent(db_url: str) -> None:
    """Create the directory holding a SQLite database file if it doesn't exist yet."""
    if not db_url.startswith("sqlite://"):
        return
    location = db_url[len("sqlite://"):].split("?", 1)[0]
    if not location or location == ":memory:":
        return
    parent = Path(location).parent
    if not parent.exists():
        parent.mkdir(parents=True, exist_ok=True)
        logger.info("[db] created database directory %s", parent)


async def init_db():
    """
    Initialize Tortoise ORM database connection.

    Called during application startup. The store is embedded, so the schema
    is generated in place (safe=True leaves existing tables untouched).
    """
    db_url = TORTOISE_ORM["connections"]["default"]
    _ensure_sqlite_parent(db_url)
    await Tortoise.init(config=TORTOISE_ORM)
    await Tortoise.generate_schemas(safe=True)


async def close_db():
    """
    Close all database connections.
    """
    await Tortoise.close_connections()
