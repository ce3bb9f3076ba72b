"""Site Generator Runner Module.

Programmatic entrypoints for the site generation stage. ``run_batch`` drives the assembler over already parsed rows and
``run_from_config`` adds CSV loading and domain filtering with defaults taken
from ``storefront.config``.

Failure policy
--------------
- Fatal input errors (missing CSV, CSV without data rows, a domain filter
  matching nothing) are raised before any output directory is created.
- Everything that goes wrong while generating a single row, including an
  unreadable template set, is logged and recorded in the ``BatchReport``;
  sibling rows are still generated.

Examples
--------
>>> from storefront.pipeline.site_generator.runner import run_from_config
>>> report = run_from_config(domain="woodendollhousekits.shop")
>>> [r.domain for r in report.succeeded]
['woodendollhousekits.shop']
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from storefront.config import (
    DEFAULT_CSV_PATH,
    DOMAIN_COLUMN,
    OUTPUT_DIR,
    TEMPLATES_DIR,
)

from .assembler import SiteResult, generate_site
from .data_loader import filter_rows_by_domain, load_site_rows_from_csv
from .templating import TemplateSet, domain_to_slug, load_template_set

logger = logging.getLogger(__name__)


@dataclass
class BatchReport:
    """Per-row outcomes of one batch run, in processing order."""

    output_dir: Path
    run_date: date
    results: list[SiteResult] = field(default_factory=list)

    @property
    def succeeded(self) -> list[SiteResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> list[SiteResult]:
        return [r for r in self.results if not r.ok]


def run_batch(
    rows: list[dict[str, str]],
    templates_dir: Path,
    output_dir: Path,
    run_date: date | None = None,
) -> BatchReport:
    """Generate one site per row and collect the outcomes.

    Parameters
    ----------
    rows : list[dict[str, str]]
        Parsed (and already filtered) rows.
    templates_dir : Path
        Directory holding the template resources; loaded once per run.
    output_dir : Path
        Root directory for generated sites.
    run_date : date | None, optional
        Date stamped into every site; defaults to today.

    Returns
    -------
    BatchReport
        One ``SiteResult`` per row. Never raises for per-row problems.
    """
    run_date = run_date or date.today()
    report = BatchReport(output_dir=Path(output_dir), run_date=run_date)
    templates: TemplateSet | None = None
    template_error: str | None = None
    try:
        templates = load_template_set(templates_dir)
    except (OSError, UnicodeDecodeError) as exc:
        template_error = f"Cannot load templates: {exc}"
        logger.error(template_error)

    claimed: dict[str, str] = {}
    for row in rows:
        domain = row.get(DOMAIN_COLUMN, "") or "unknown"
        if templates is None:
            report.results.append(SiteResult(domain=domain, error=template_error))
            continue
        slug = domain_to_slug(domain)
        owner = claimed.setdefault(slug, domain)
        if owner != domain:
            message = f"Output directory {slug}/ already used by {owner}"
            logger.error("%s: %s", domain, message)
            report.results.append(SiteResult(domain=domain, domain_slug=slug, error=message))
            continue
        try:
            result = generate_site(row, templates, report.output_dir, run_date)
        except Exception as exc:
            logger.exception("Failed to generate site for %s", domain)
            report.results.append(SiteResult(domain=domain, error=str(exc)))
            continue
        logger.info("%s -> %s (%d pages)", result.domain, result.site_dir, result.pages)
        report.results.append(result)

    logger.info(
        "Generated %d site(s), %d failed, in %s",
        len(report.succeeded),
        len(report.failed),
        report.output_dir,
    )
    return report


def run_from_config(
    csv_path: Path | None = None,
    domain: str | None = None,
    templates_dir: Path | None = None,
    output_dir: Path | None = None,
    run_date: date | None = None,
) -> BatchReport:
    """Load the CSV, apply the domain filter and run the batch.

    Any argument left as ``None`` falls back to the defaults in
    ``storefront.config``.

    Raises
    ------
    storefront.exceptions.UserInputError
        If the CSV is missing or ``domain`` matches no row.
    storefront.exceptions.DataValidationError
        If the CSV holds no data rows.
    """
    csv_path = Path(csv_path) if csv_path is not None else DEFAULT_CSV_PATH
    templates_dir = Path(templates_dir) if templates_dir is not None else TEMPLATES_DIR
    output_dir = Path(output_dir) if output_dir is not None else OUTPUT_DIR
    logger.info("Reading CSV: %s", csv_path)
    rows = filter_rows_by_domain(load_site_rows_from_csv(csv_path), domain)
    logger.info("Generating %d site(s)...", len(rows))
    return run_batch(rows, templates_dir, output_dir, run_date)


__all__ = [
    "BatchReport",
    "run_batch",
    "run_from_config",
]
