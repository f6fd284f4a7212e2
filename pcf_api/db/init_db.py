"""
Catalog database setup: database creation, table creation and reset.
"""
import logging
from contextlib import contextmanager
from pathlib import Path
from sqlalchemy import create_engine, text
from pcf_api.db.models import Base
from pcf_api.db.database import make_engine
from pcf_api.config import get_db_components

logger = logging.getLogger(__name__)


def _ensure_sqlite_directory(db_name: str) -> None:
    if db_name and db_name != ":memory:":
        Path(db_name).parent.mkdir(parents=True, exist_ok=True)


def _ensure_postgres_database(db_name: str, maintenance_url: str) -> None:
    engine = create_engine(maintenance_url, isolation_level="AUTOCOMMIT")
    try:
        with engine.connect() as conn:
            exists = conn.execute(
                text("SELECT 1 FROM pg_database WHERE datname = :db_name"),
                {"db_name": db_name},
            ).fetchone()
            if exists:
                logger.info(f"Catalog database {db_name} already exists")
                return
            # Identifiers cannot be bound; db_name was validated by get_db_components()
            conn.execute(text(f'CREATE DATABASE "{db_name}"'))
            logger.info(f"Created catalog database {db_name}")
    finally:
        engine.dispose()


def create_database_if_not_exists():
    """Make sure the catalog database can be connected to."""
    db_components = get_db_components()
    if db_components["dialect"] == "sqlite":
        _ensure_sqlite_directory(db_components["db_name"])
    else:
        _ensure_postgres_database(db_components["db_name"], db_components["db_url_without_name"])


@contextmanager
def _catalog_engine(engine=None):
    # Engines created here are disposed again; passed-in engines stay open
    if engine is not None:
        yield engine
        return
    own = make_engine(get_db_components()["db_url"])
    try:
        yield own
    finally:
        own.dispose()


def create_tables(engine=None):
    """Create the methods and datasets tables if missing."""
    with _catalog_engine(engine) as bind:
        Base.metadata.create_all(bind=bind)
    logger.info(f"Catalog tables ready: {', '.join(sorted(Base.metadata.tables))}")


def drop_all_tables(engine=None):
    """Drop the catalog tables, losing every dataset and method."""
    with _catalog_engine(engine) as bind:
        Base.metadata.drop_all(bind=bind)
    logger.warning("Catalog tables dropped")


def reset_database():
    """Drop and recreate the catalog tables."""
    drop_all_tables()
    create_tables()
    logger.info("Catalog reset complete")


def init_database():
    """Create the catalog database and tables; safe to run on every start."""
    create_database_if_not_exists()
    create_tables()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_database()
