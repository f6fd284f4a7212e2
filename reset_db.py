import logging
from pcf_api.config import get_db_components
from pcf_api.db.init_db import create_database_if_not_exists, reset_database

def reset_catalog():
    """Drop and recreate the dataset catalog tables."""
    db_components = get_db_components()
    print(f"Resetting catalog database '{db_components['db_name']}' ({db_components['dialect']})...")
    create_database_if_not_exists()
    reset_database()
    print("Catalog has been reset successfully!")
    print("Run 'python seed_db.py' to load the default datasets.")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    confirm = input("This will DELETE ALL DATASETS in the catalog. Are you sure? (y/n): ")
    if confirm.lower() == 'y':
        reset_catalog()
    else:
        print("Operation cancelled.")
