"""
Database initialization script.

Creates the session tables directly from the models.  Use Alembic
(``alembic upgrade head``) for managed databases.

Usage:
    python scripts/init_db.py
"""

import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from sqlalchemy.exc import SQLAlchemyError

from app.db.init_db import init_db

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        init_db()
    except SQLAlchemyError as e:
        logging.error("Database initialization failed: %s", e)
        sys.exit(1)

    logging.info("Database initialized")
