#!/usr/bin/env python3
"""
Create backend/.env from a template

Every setting the backend reads is written with its default (or empty)
value. An existing .env is never overwritten unless --force is given.

Usage:
    python scripts/init_env.py [--force]
"""
import argparse
import logging
import sys
from pathlib import Path

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)

ENV_PATH = Path(__file__).resolve().parent.parent / '.env'

TEMPLATE = """# LIQUIDO backend configuration
# This file contains sensitive data - DO NOT commit to git

PORT=3000
LOG_LEVEL=INFO
ALLOWED_ORIGINS=http://localhost:3000,http://127.0.0.1:3000

# Firebase (Realtime Database + Authentication)
FIREBASE_API_KEY=
FIREBASE_PROJECT_ID=
FIREBASE_DATABASE_URL=
FIREBASE_DATABASE_SECRET=

# Cloudinary (unsigned upload preset)
CLOUDINARY_CLOUD_NAME=
CLOUDINARY_UPLOAD_PRESET=

# SumUp
SUMUP_BASE_URL=https://api.sumup.com
SUMUP_BEARER_TOKEN=
SUMUP_MERCHANT_CODE=

# Storefront
WHATSAPP_NUMBER=393444414036
ADMIN_EMAILS=
SITE_BASE_URL=https://liquido.vapeshop
"""


def main() -> int:
    parser = argparse.ArgumentParser(description="Create backend/.env from a template")
    parser.add_argument('--force', action='store_true', help="overwrite an existing .env")
    args = parser.parse_args()

    if ENV_PATH.exists() and not args.force:
        logger.error(f"❌ {ENV_PATH} already exists (use --force to overwrite)")
        return 1

    ENV_PATH.write_text(TEMPLATE, encoding='utf-8')
    logger.info(f"✅ Wrote {ENV_PATH}")
    logger.info("Fill in the Firebase, Cloudinary and SumUp values before starting the server.")
    return 0


if __name__ == '__main__':
    sys.exit(main())
