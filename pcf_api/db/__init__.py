from pcf_api.db.models import Base
from pcf_api.db.database import engine, get_db
from pcf_api.db.init_db import init_database

__all__ = ['Base', 'engine', 'get_db', 'init_database']
