#!/usr/bin/env python3
"""
Image Path Migration Script
Rewrites backslash image paths stored on products into forward-slash server paths.
Safe to run multiple times (idempotent).
"""

import argparse
import logging
import sys

from pcrex.database import Database
from pcrex.image_paths import normalize_product_images
from pcrex.settings import DB_URL

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Normalize stored product image paths.")
    parser.add_argument("--dry-run", action="store_true", help="Report changes without writing them")
    args = parser.parse_args()

    try:
        db = Database(db_url=DB_URL)
    except Exception as e:
        logger.error(f"Could not connect to database: {e}")
        sys.exit(1)

    try:
        changed = normalize_product_images(db, dry_run=args.dry_run)
    except Exception as e:
        logger.error(f"Image path migration failed: {e}")
        sys.exit(1)
    finally:
        db.close()

    logger.info(f"Image path migration completed ({changed} products)")


if __name__ == "__main__":
    main()
