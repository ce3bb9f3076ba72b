"""Program 3: Site Deployment.

Publishes every generated site under the output directory to its own git
branch of the project repository and pushes it. Run from a clean working
tree; the repository is returned to the starting branch afterwards.

Usage::

    python -m storefront.program3_deploy_sites
    python -m storefront.program3_deploy_sites --branch-map branches.json --dry-run
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from storefront.config import (
    DEFAULT_GIT_REMOTE,
    LOG_FILENAME_DEPLOY_SITES,
    OUTPUT_DIR,
    PROJECT_ROOT,
)
from storefront.console import print_deploy_summary
from storefront.exceptions import AppError, UserInputError
from storefront.logging_config import configure_logging, file_logging_enabled
from storefront.pipeline.publisher import SiteDeployer

logger = logging.getLogger(__name__)


def load_branch_map(path: Path | None) -> dict[str, str]:
    """Read a JSON object mapping site directory names to branch names.

    Raises
    ------
    UserInputError
        If the file cannot be read or is not a JSON object of strings.
    """
    if path is None:
        return {}
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise UserInputError(f"Cannot read branch map {path}: {exc}") from exc
    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise UserInputError(f"Branch map {path} must be a JSON object of strings")
    return data


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the deployer."""
    parser = argparse.ArgumentParser(
        description="Publish each generated site to its own git branch."
    )
    parser.add_argument("--output", type=Path, default=OUTPUT_DIR)
    parser.add_argument("--repo", type=Path, default=PROJECT_ROOT)
    parser.add_argument("--remote", type=str, default=DEFAULT_GIT_REMOTE)
    parser.add_argument(
        "--branch-map",
        type=Path,
        default=None,
        help="JSON file mapping site directory names to branch names",
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Commit locally without pushing"
    )
    parser.add_argument(
        "--log-level", type=str, default=os.environ.get("LOG_LEVEL", "INFO")
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for deployment.

    Returns
    -------
    int
        ``0`` when every site was published, ``1`` on a fatal error or when
        any site failed.
    """
    args = parse_arguments(argv)
    configure_logging(
        LOG_FILENAME_DEPLOY_SITES, args.log_level, enable_file=file_logging_enabled()
    )
    try:
        deployer = SiteDeployer(
            repo_dir=args.repo,
            output_dir=args.output,
            remote=args.remote,
            branch_overrides=load_branch_map(args.branch_map),
            dry_run=args.dry_run,
        )
        results = deployer.deploy_all()
    except AppError as exc:
        logger.error("%s", exc)
        return 1
    print_deploy_summary(results)
    return 0 if all(r.ok for r in results) else 1


def entry_point() -> None:
    """Console-script wrapper that exits with ``main``'s status."""
    sys.exit(main())


if __name__ == "__main__":
    entry_point()
