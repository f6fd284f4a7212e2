from pydantic_settings import BaseSettings
from pathlib import Path
from urllib.parse import urlparse
import logging

# Get the repository root directory (parent of pcf_api directory)
REPO_ROOT = Path(__file__).parent.parent.absolute()

class Settings(BaseSettings):
    """Application settings."""

    # API settings
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8080
    API_RELOAD: bool = True

    # Version and environment
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Dataset catalog (any SQLAlchemy URL; PostgreSQL databases are created on init)
    DATABASE_URL: str = f"sqlite:///{REPO_ROOT / 'storage' / 'pcf.db'}"

    # Project and graph snapshot storage
    GRAPH_STORAGE_DIR: str = str(REPO_ROOT / "storage" / "graphs")

    # Results
    EDGE_HOTSPOT_LIMIT: int = 10
    EDGE_TOTAL_DECIMALS: int = 4
    RESULTS_TOP_PROCESSES: int = 5

    class Config:
        env_file = ".env"

settings = Settings()


def get_db_components(database_url: str | None = None) -> dict:
    """
    Split the database URL into the pieces needed to create the database.

    Returns:
        Dict with db_url, db_name, db_url_without_name and dialect
    """
    db_url = str(database_url or settings.DATABASE_URL)
    parsed = urlparse(db_url)
    dialect = parsed.scheme.split("+")[0]

    if dialect == "sqlite":
        # sqlite:///relative.db, sqlite:////absolute.db, sqlite:// (in memory)
        db_name = db_url.split(":///", 1)[1] if ":///" in db_url else ":memory:"
        return {
            "db_url": db_url,
            "db_name": db_name or ":memory:",
            "db_url_without_name": db_url,
            "dialect": dialect,
        }

    db_name = parsed.path.lstrip("/")
    if not db_name.replace("_", "").replace("-", "").isalnum():
        raise ValueError(f"Invalid database name in DATABASE_URL: {db_name!r}")

    # Maintenance database used to check for and create the target database
    db_url_without_name = parsed._replace(path="/postgres").geturl()
    return {
        "db_url": db_url,
        "db_name": db_name,
        "db_url_without_name": db_url_without_name,
        "dialect": dialect,
    }


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the API process."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
