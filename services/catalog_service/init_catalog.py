"""Initialise the local catalog store and print what it holds.

Creates the schema and seeds the owner account and business info on first
run; later runs only report.

Usage:
    cd vkm-catalog
    python -m services.catalog_service.init_catalog
    ENV_FILE=.env.shop python -m services.catalog_service.init_catalog --category Furniture
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# MUST be done before get_settings() is first called
project_root = Path(__file__).resolve().parents[2]
load_dotenv(project_root / os.environ.get("ENV_FILE", ".env"), override=True)

from libs.common.config import get_settings  # noqa: E402
from libs.common.logging import configure_logging, get_logger  # noqa: E402
from services.catalog_service.errors import StoreUnavailableError  # noqa: E402
from services.catalog_service.store import LocalCatalogStore  # noqa: E402

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--category",
        default=None,
        help="Only count products in this category",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Override LOG_LEVEL for this run",
    )
    return parser.parse_args(argv)


async def init_catalog(category: str | None = None) -> int:
    settings = get_settings()
    try:
        async with LocalCatalogStore(settings) as store:
            business = await store.get_business_info()
            products = await store.list_products(category=category)
            logo_url = await store.get_logo_url()
            if logo_url:
                store.revoke_media_url(logo_url)
    except StoreUnavailableError as exc:
        logger.error("Catalog store unavailable: %s", exc)
        return 1

    print(f"Catalog database: {settings.CATALOG_DATABASE_URL}")
    if business is not None:
        print(f"Business: {business.name} ({business.owner})")
        print(f"Address: {business.address}")
    scope = f"in {category}" if category else "total"
    print(f"Products {scope}: {len(products)}")
    print(f"Logo set: {'yes' if logo_url else 'no'}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)
    return asyncio.run(init_catalog(args.category))


if __name__ == "__main__":
    sys.exit(main())
