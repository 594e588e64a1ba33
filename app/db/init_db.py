"""Database initialization."""
import logging
import os
from sqlalchemy.engine import make_url
from app.db.database import engine, Base
from app.db import models  # noqa: F401  registers tables on Base.metadata

logger = logging.getLogger(__name__)


def ensure_sqlite_directory(url) -> None:
    """Create the parent directory of a file-based SQLite database."""
    url = make_url(url)
    if not url.drivername.startswith("sqlite"):
        return

    database = url.database
    if not database or database == ":memory:":
        return

    directory = os.path.dirname(database)
    if directory and not os.path.isdir(directory):
        logger.info(f"Creating database directory {directory}")
        os.makedirs(directory, exist_ok=True)


def init_db() -> None:
    """
    Initialize database: create any missing tables.

    Safe to call multiple times - create_all skips existing tables.
    """
    logger.info("Initializing database...")

    ensure_sqlite_directory(engine.url)

    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Error during database initialization: {e}")
        raise

    logger.info(f"Tables created/verified: {', '.join(sorted(Base.metadata.tables))}")


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    init_db()
    print("Database initialization complete.")
