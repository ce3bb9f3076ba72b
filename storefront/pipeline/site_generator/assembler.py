"""Site assembler: turn one CSV row into a complete static site.

This module is the per-row core of the site generation stage. Given a parsed
row, the shared template set, an output root and the run date, it derives the
computed fields, renders the shared header and footer, renders every page
variant, and writes the sitemap, robots file and deployment boilerplate into
``<output_dir>/<domain-slug>/``.

Design Principles
-----------------
- The input row is never mutated; all work happens on a derived copy.
- The run date is passed in explicitly; nothing here reads the clock.
- Failures (missing output permissions, bad rows) propagate to the caller,
  which records them per row. Missing images and unmatched placeholders are
  not failures.

Usage
-----
>>> from datetime import date
>>> from pathlib import Path
>>> from storefront.pipeline.site_generator.templating import load_template_set
>>> templates = load_template_set(Path("templates"))
>>> result = generate_site(row, templates, Path("output"), date(2025, 1, 31))
>>> result.pages
6
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from storefront.config import (
    BLOG_FALLBACK_TITLE_FORMAT,
    BLOG_SLOTS,
    DEFAULT_BRAND_INITIAL,
    DEFAULT_PRIMARY_COLOR,
    DEPLOY_PACKAGE_FILENAME,
    DEPLOY_SERVER_FILENAME,
    DOMAIN_COLUMN,
    FALLBACK_IMAGE_EXTENSION,
    IMAGE_ROLES,
    IMAGES_SUBDIR,
    ROBOTS_FILENAME,
    SITEMAP_FILENAME,
)
from storefront.exceptions import DataValidationError

from .data_loader import get_value_from_row
from .fragments import (
    BlogEntry,
    render_features_list,
    render_related_articles,
    render_sale_badge,
)
from .schema import (
    generate_article_schema,
    generate_breadcrumb_schema,
    generate_collection_schema,
    generate_organization_schema,
    generate_product_schema,
)
from .seo import generate_package_json, generate_robots_txt, generate_sitemap
from .templating import (
    TemplateSet,
    domain_to_slug,
    extract_placeholders_from_template,
    render_template,
    slugify,
)

logger = logging.getLogger(__name__)


@dataclass
class SiteResult:
    """Outcome of generating one site.

    Attributes
    ----------
    domain : str
        Domain of the row (``"unknown"`` when the row had none).
    domain_slug : str
        Output directory name.
    pages : int
        Number of pages written (home, collection, product, blogs).
    site_dir : Path | None
        Output directory, or None if generation failed before it was chosen.
    error : str | None
        Failure description; None on success.
    """

    domain: str
    domain_slug: str = ""
    pages: int = 0
    site_dir: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True when the site was generated without error."""
        return self.error is None


def resolve_image_paths(site_dir: Path) -> dict[str, str]:
    """Map every image role to a site-relative image URL.

    For each role, ``<site_dir>/images`` is searched for a file whose stem equals
    the role's canonical name; the first match (sorted by filename) wins and
    its real extension is used. Roles without a file fall back to
    ``/images/<name>.jpg``, which need not exist.
    """
    images_dir = Path(site_dir) / IMAGES_SUBDIR
    available = (
        sorted(p.name for p in images_dir.iterdir() if p.is_file())
        if images_dir.is_dir()
        else []
    )
    paths: dict[str, str] = {}
    for key, name in IMAGE_ROLES.items():
        match = next((f for f in available if Path(f).stem == name), None)
        filename = match or f"{name}{FALLBACK_IMAGE_EXTENSION}"
        paths[key] = f"/{IMAGES_SUBDIR}/{filename}"
    return paths


def build_blog_entries(data: Mapping[str, str]) -> list[BlogEntry]:
    """Return all blog slots of ``data`` in input order, materialized or not."""
    return [
        BlogEntry(
            slug=data.get(f"blog{index}_slug", ""),
            title=data.get(f"blog{index}_title", ""),
            meta_description=data.get(f"blog{index}_meta_description", ""),
            content=data.get(f"blog{index}_content", ""),
        )
        for index in range(1, BLOG_SLOTS + 1)
    ]


def build_derived_data(row: Mapping[str, str], run_date: date) -> dict[str, str]:
    """Return a copy of ``row`` augmented with every site-wide computed field.

    Parameters
    ----------
    row : Mapping[str, str]
        Parsed CSV row; left untouched.
    run_date : date
        Date stamped into ``blog_date`` and structured data.

    Returns
    -------
    dict[str, str]
        Derived data: defaults (colour, slugs, brand initial), the sale and
        feature fragments, and the homepage/collection/product JSON-LD blocks.
    """
    data = dict(row)
    keyword = get_value_from_row(data, "primary_keyword")
    data["primary_color"] = get_value_from_row(data, "primary_color", DEFAULT_PRIMARY_COLOR)
    data["collection_slug"] = slugify(get_value_from_row(data, "collection_title", keyword))
    data["product_slug"] = slugify(get_value_from_row(data, "product_name", keyword))
    for index in range(1, BLOG_SLOTS + 1):
        data[f"blog{index}_slug"] = slugify(
            get_value_from_row(
                data,
                f"blog{index}_title",
                BLOG_FALLBACK_TITLE_FORMAT.format(index=index),
            )
        )
    brand = get_value_from_row(data, "brand_name", DEFAULT_BRAND_INITIAL)
    data["brand_initial"] = brand[0].upper()
    data["blog_date"] = run_date.isoformat()

    data["product_original_price_html"] = render_sale_badge(
        data.get("product_original_price", "")
    )
    data["product_features_html"] = render_features_list(
        data.get("product_features", "")
    )

    domain = data.get(DOMAIN_COLUMN, "")
    collection_path = f"/collections/{data['collection_slug']}.html"
    data["homepage_schema"] = generate_organization_schema(data)
    data["collection_schema"] = generate_collection_schema(data)
    data["product_schema"] = generate_product_schema(data)
    data["collection_breadcrumb_schema"] = generate_breadcrumb_schema(
        [
            {"name": "Home", "url": "/"},
            {"name": data.get("collection_title", "")},
        ],
        domain,
    )
    data["product_breadcrumb_schema"] = generate_breadcrumb_schema(
        [
            {"name": "Home", "url": "/"},
            {"name": data.get("collection_title", ""), "url": collection_path},
            {"name": data.get("product_name", "")},
        ],
        domain,
    )
    return data


def build_blog_page_data(
    data: Mapping[str, str],
    entry: BlogEntry,
    entries: list[BlogEntry],
    run_date: date,
) -> dict[str, str]:
    """Return page-level data for one materialized blog entry."""
    blog_data = dict(data)
    blog_data["blog_title"] = entry.title
    blog_data["blog_slug"] = entry.slug
    blog_data["blog_meta_description"] = entry.meta_description
    blog_data["blog_content"] = entry.content
    blog_data["blog_schema"] = generate_article_schema(
        data, entry.title, entry.slug, entry.meta_description, run_date
    )
    blog_data["blog_breadcrumb_schema"] = generate_breadcrumb_schema(
        [{"name": "Home", "url": "/"}, {"name": entry.title}],
        data.get(DOMAIN_COLUMN, ""),
    )
    blog_data["sidebar_related_articles"] = render_related_articles(
        entries, entry.slug, data.get("image_blog_hero", "")
    )
    return blog_data


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _render_page(template: str, data: Mapping[str, str], label: str) -> str:
    unfilled = [
        name for name in extract_placeholders_from_template(template) if name not in data
    ]
    if unfilled:
        logger.debug("%s: leaving unfilled placeholders %s", label, ", ".join(unfilled))
    return render_template(template, data)


def generate_site(
    row: Mapping[str, str],
    templates: TemplateSet,
    output_dir: Path,
    run_date: date,
) -> SiteResult:
    """Generate the full static site for ``row`` under ``output_dir``.

    Parameters
    ----------
    row : Mapping[str, str]
        Parsed CSV row for one site.
    templates : TemplateSet
        Shared, already loaded templates.
    output_dir : Path
        Root under which ``<domain-slug>/`` is created.
    run_date : date
        Date used for ``blog_date``, article dates and sitemap ``lastmod``.

    Returns
    -------
    SiteResult
        Successful outcome with the page count and site directory.

    Raises
    ------
    DataValidationError
        If the row has no domain.
    OSError
        If output files cannot be written.
    """
    domain = row.get(DOMAIN_COLUMN, "")
    if not domain:
        raise DataValidationError("Row has no domain value", context=dict(row))

    data = build_derived_data(row, run_date)
    data["HEADER"] = _render_page(templates.header, data, f"{domain} header")
    data["FOOTER"] = _render_page(templates.footer, data, f"{domain} footer")

    domain_slug = domain_to_slug(domain)
    site_dir = Path(output_dir) / domain_slug
    for subdir in ("collections", "products", "blog"):
        (site_dir / subdir).mkdir(parents=True, exist_ok=True)

    data.update(resolve_image_paths(site_dir))

    collection_path = f"/collections/{data['collection_slug']}.html"
    product_path = f"/products/{data['product_slug']}.html"
    _write(site_dir / "index.html", _render_page(templates.homepage, data, f"{domain} /"))
    _write(
        site_dir / collection_path.lstrip("/"),
        _render_page(templates.collection, data, f"{domain} {collection_path}"),
    )
    _write(
        site_dir / product_path.lstrip("/"),
        _render_page(templates.product, data, f"{domain} {product_path}"),
    )

    pages = ["/", collection_path, product_path]
    entries = build_blog_entries(data)
    for entry in entries:
        if not entry.is_materialized:
            continue
        blog_path = f"/blog/{entry.slug}.html"
        blog_data = build_blog_page_data(data, entry, entries, run_date)
        _write(
            site_dir / blog_path.lstrip("/"),
            _render_page(templates.blog, blog_data, f"{domain} {blog_path}"),
        )
        pages.append(blog_path)

    _write(site_dir / SITEMAP_FILENAME, generate_sitemap(domain, pages, run_date))
    _write(site_dir / ROBOTS_FILENAME, generate_robots_txt(domain))
    _write(site_dir / DEPLOY_PACKAGE_FILENAME, generate_package_json(domain_slug))
    if templates.server_entrypoint is not None:
        _write(site_dir / DEPLOY_SERVER_FILENAME, templates.server_entrypoint)

    logger.debug("Wrote %d pages for %s to %s", len(pages), domain, site_dir)
    return SiteResult(
        domain=domain, domain_slug=domain_slug, pages=len(pages), site_dir=site_dir
    )
