#!/usr/bin/env python3
"""
Create the schools table in the configured database.

Reads the same settings as the API (.env.local / environment). Safe to run
repeatedly; existing tables are left untouched. Deployments that manage the
schema with Alembic can run ``alembic upgrade head`` instead.
"""

import sys
import logging

from school_registry.config.settings import settings
from school_registry.database import create_db_engine, describe_database_url, init_db

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def main():
    logger.info(f"Initialising database at {describe_database_url(settings)}")
    engine = create_db_engine(settings)
    try:
        init_db(engine)
    except Exception as e:
        logger.error(f"Database initialisation failed: {e}")
        sys.exit(1)
    finally:
        engine.dispose()
    logger.info("Database ready.")


if __name__ == "__main__":
    main()
