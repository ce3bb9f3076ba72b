"""Program 1: Image Generation.

Generates the hero, product, collection and blog images for each CSV row into
``output/<domain-slug>/images/``. Existing images are kept. Requires
``GEMINI_API_KEY`` in the environment or in ``.env`` at the project root.

Usage::

    python -m storefront.program1_generate_images
    python -m storefront.program1_generate_images --domain woodendollhousekits.shop
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

from storefront.config import DEFAULT_CSV_PATH, LOG_FILENAME_GENERATE_IMAGES, OUTPUT_DIR
from storefront.console import print_image_summary
from storefront.exceptions import AppError
from storefront.logging_config import configure_logging, file_logging_enabled
from storefront.pipeline.image_generator import ImageGenConfig, SiteImageProcessor
from storefront.pipeline.site_generator.data_loader import (
    filter_rows_by_domain,
    load_site_rows_from_csv,
)

logger = logging.getLogger(__name__)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the image generator."""
    parser = argparse.ArgumentParser(
        description="Generate product and hero images for each site in the CSV."
    )
    parser.add_argument("--csv", type=Path, default=DEFAULT_CSV_PATH)
    parser.add_argument(
        "--domain", type=str, default=None, help="Only generate images for this domain"
    )
    parser.add_argument("--output", type=Path, default=OUTPUT_DIR)
    parser.add_argument(
        "--log-level", type=str, default=os.environ.get("LOG_LEVEL", "INFO")
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for image generation.

    Returns
    -------
    int
        ``0`` when the run completed (individual images may have failed),
        ``1`` on configuration or input errors.
    """
    args = parse_arguments(argv)
    configure_logging(
        LOG_FILENAME_GENERATE_IMAGES, args.log_level, enable_file=file_logging_enabled()
    )
    try:
        config = ImageGenConfig()
        rows = filter_rows_by_domain(load_site_rows_from_csv(args.csv), args.domain)
    except AppError as exc:
        logger.error("%s", exc)
        return 1
    logger.info(f"Generating images for {len(rows)} site(s)...")
    processor = SiteImageProcessor(config, args.output)
    stats = asyncio.run(processor.process_rows(rows))
    print_image_summary(stats)
    return 0


def entry_point() -> None:
    """Console-script wrapper that exits with ``main``'s status."""
    sys.exit(main())


if __name__ == "__main__":
    entry_point()
