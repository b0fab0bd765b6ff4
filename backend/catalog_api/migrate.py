"""
Create the relational catalog schema

Usage:
    python -m catalog_api.migrate
"""

import sys

from .config import get_settings
from .utils.database import init_db
from .utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def main() -> int:
    settings = get_settings()
    setup_logging(log_level=settings.LOG_LEVEL)

    try:
        init_db(settings=settings)
    except Exception:
        logger.exception("Migration failed", database_url=settings.DATABASE_URL)
        return 1

    logger.info("Migration completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
