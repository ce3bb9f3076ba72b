"""Program 2: Site Generation.

Reads the site CSV and writes one static site per row into the output
directory. Intended to run after Program 1 (image generation) so local image
files are picked up, although every page renders without them.

Usage::

    python -m storefront.program2_generate_sites --csv input/sites.csv
    python -m storefront.program2_generate_sites --domain woodendollhousekits.shop
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import date
from pathlib import Path

from storefront.config import (
    DEFAULT_CSV_PATH,
    LOG_FILENAME_GENERATE_SITES,
    OUTPUT_DIR,
    TEMPLATES_DIR,
)
from storefront.console import print_site_summary
from storefront.exceptions import AppError
from storefront.logging_config import configure_logging, file_logging_enabled
from storefront.pipeline.site_generator.runner import run_from_config

logger = logging.getLogger(__name__)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the site generator."""
    parser = argparse.ArgumentParser(
        description="Generate one static e-commerce site per CSV row."
    )
    parser.add_argument("--csv", type=Path, default=DEFAULT_CSV_PATH)
    parser.add_argument(
        "--domain", type=str, default=None, help="Only generate the row with this exact domain"
    )
    parser.add_argument("--templates", type=Path, default=TEMPLATES_DIR)
    parser.add_argument("--output", type=Path, default=OUTPUT_DIR)
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Run date (YYYY-MM-DD) stamped into pages and sitemaps; defaults to today",
    )
    parser.add_argument(
        "--log-level", type=str, default=os.environ.get("LOG_LEVEL", "INFO")
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for site generation.

    Returns
    -------
    int
        ``0`` when the batch ran (even if some rows failed), ``1`` on a fatal
        input error raised before any site was generated.
    """
    args = parse_arguments(argv)
    configure_logging(
        LOG_FILENAME_GENERATE_SITES, args.log_level, enable_file=file_logging_enabled()
    )
    try:
        report = run_from_config(
            csv_path=args.csv,
            domain=args.domain,
            templates_dir=args.templates,
            output_dir=args.output,
            run_date=args.date,
        )
    except AppError as exc:
        logger.error("%s", exc)
        print(
            "Usage: python -m storefront.program2_generate_sites "
            "[--csv path/to/sites.csv] [--domain example.com]",
            file=sys.stderr,
        )
        return 1
    print_site_summary(report)
    return 0


def entry_point() -> None:
    """Console-script wrapper that exits with ``main``'s status."""
    sys.exit(main())


if __name__ == "__main__":
    entry_point()
