from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from pcf_api.config import settings, get_db_components

# Get database components
db_components = get_db_components()

def make_engine(db_url: str):
    """Create an engine; SQLite connections are shared across FastAPI's threadpool."""
    connect_args = {}
    if db_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(db_url, connect_args=connect_args)

# Create SQLAlchemy engine
engine = make_engine(db_components["db_url"])

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create a database session dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
