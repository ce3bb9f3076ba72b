"""Rich console helpers for end-of-run summaries.

All terminal tables are built here so the pipeline modules stay free of
presentation code. Each ``print_*`` function accepts an optional ``Console``
which tests use to capture output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from storefront.pipeline.publisher.deployer import DeployResult
    from storefront.pipeline.site_generator.runner import BatchReport

_CONSOLE = Console()


def build_site_summary_table(report: BatchReport) -> Table:
    """Return a table with one line per attempted site."""
    table = Table(title=f"Site generation ({report.run_date.isoformat()})")
    table.add_column("Domain", style="bold")
    table.add_column("Status")
    table.add_column("Pages", justify="right")
    table.add_column("Output")
    for result in report.results:
        if result.ok:
            table.add_row(
                result.domain, "[green]ok[/green]", str(result.pages), f"{result.domain_slug}/"
            )
        else:
            table.add_row(result.domain, "[red]failed[/red]", "-", escape(result.error or ""))
    return table


def print_site_summary(report: BatchReport, console: Console | None = None) -> None:
    """Print the site generation summary table and a one-line total."""
    console = console or _CONSOLE
    console.print(build_site_summary_table(report))
    console.print(
        f"Generated {len(report.succeeded)} site(s) in {report.output_dir}"
        + (f", {len(report.failed)} failed" if report.failed else "")
    )


def print_image_summary(stats: dict[str, int], console: Console | None = None) -> None:
    """Print image generation counts."""
    console = console or _CONSOLE
    table = Table(title="Image generation")
    table.add_column("Generated", justify="right")
    table.add_column("Skipped", justify="right")
    table.add_column("Failed", justify="right")
    table.add_row(
        str(stats.get("generated", 0)),
        str(stats.get("skipped", 0)),
        str(stats.get("failed", 0)),
    )
    console.print(table)


def print_deploy_summary(
    results: list[DeployResult], console: Console | None = None
) -> None:
    """Print one line per published site."""
    console = console or _CONSOLE
    table = Table(title="Deployment")
    table.add_column("Site", style="bold")
    table.add_column("Branch")
    table.add_column("Status")
    for result in results:
        status = "[green]success[/green]" if result.ok else f"[red]error[/red] {escape(result.error or '')}"
        table.add_row(result.site, result.branch, status)
    console.print(table)
