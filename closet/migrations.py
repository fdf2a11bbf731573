"""
Idempotent migration: ensure outfits.color exists.
Works on SQLite and Postgres using SQLAlchemy Inspector.

Databases created before outfit colors were persisted get the column added
with NULL values; those outfits are colored at read time instead.
"""
import logging
from sqlalchemy import inspect, text
from closet.database import engine, Base
from closet import models  # noqa: F401 - ensure models are registered

logger = logging.getLogger(__name__)


def migrate(bind=None) -> bool:
    """Ensure the outfits.color column exists. Returns True when it was added."""
    bind = bind or engine
    # Ensure tables exist (no-op if already created)
    Base.metadata.create_all(bind=bind)

    with bind.begin() as conn:
        cols = [c["name"] for c in inspect(conn).get_columns("outfits")]
        if "color" in cols:
            logger.info("outfits.color column already present; no changes needed")
            return False
        conn.execute(text("ALTER TABLE outfits ADD COLUMN color VARCHAR(7)"))
        logger.info("Added color column to outfits")
        return True


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    migrate()
