#!/usr/bin/env python3
"""
Upload the bundled JSON catalog to the Realtime Database

Overwrites catalog/sections with the sections of liquido/data/catalog.json
(or the file given with --file).

Usage:
    python scripts/seed_catalog.py [--file path/to/catalog.json]
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from liquido.connectors.firebase_connector import FirebaseConnector, FirebaseError
from liquido.core.config import get_settings
from liquido.domain.catalog import parse_sections
from liquido.repositories.catalog_repository import CatalogRepository

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


async def seed(path: str) -> int:
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    sections = parse_sections((data.get('catalog') or {}).get('sections'))
    logger.info(f"Loaded {len(sections)} sections from {path}")

    try:
        repository = CatalogRepository(FirebaseConnector())
        await repository.save_all(sections)
    except (ValueError, FirebaseError) as e:
        logger.error(f"❌ Error initializing Firebase data: {e}")
        return 1

    logger.info("✅ Firebase catalog initialized successfully!")
    return 0


def main() -> int:
    load_dotenv(Path(__file__).resolve().parent.parent / ".env")
    parser = argparse.ArgumentParser(description="Upload the JSON catalog to Firebase")
    parser.add_argument('--file', default=get_settings().CATALOG_FALLBACK_PATH)
    args = parser.parse_args()
    return asyncio.run(seed(args.file))


if __name__ == '__main__':
    sys.exit(main())
