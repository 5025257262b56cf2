import os
import logging


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Connection string for the async DB engine
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    "postgresql+asyncpg://postgres:postgres@db:5432/pokemon_review",
)

SQL_ECHO = _flag("SQL_ECHO", "0")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Startup schema bootstrap
RUN_SCHEMA_BOOTSTRAP = _flag("RUN_SCHEMA_BOOTSTRAP", "1")
DB_CONNECT_RETRIES = int(os.getenv("DB_CONNECT_RETRIES", "10"))
DB_CONNECT_RETRY_DELAY = float(os.getenv("DB_CONNECT_RETRY_DELAY", "2"))

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))


def configure_logging() -> None:
    """Set up the root logger once for the whole service."""
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
