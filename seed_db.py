import logging
from pcf_api.db.database import SessionLocal
from pcf_api.db.init_db import init_database
from pcf_api.db.seed import seed_datasets

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_database()
    db = SessionLocal()
    try:
        count = seed_datasets(db)
        print(f"Seeded {count} datasets.")
    finally:
        db.close()
