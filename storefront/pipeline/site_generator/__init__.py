"""Site generator pipeline package.

Public API of the site generation stage: CSV parsing, slug and template
helpers, structured-data generators, the per-row assembler and the batch
runner. Consumers (CLI entrypoints, tests) import from this package rather
than reaching into submodules.

Examples
--------
>>> from storefront.pipeline.site_generator import parse_csv_rows, render_template
>>> rows = parse_csv_rows("domain,brand_name\\nexample.shop,Example\\n")
>>> render_template("{{brand_name}} at {{domain}}", rows[0])
'Example at example.shop'
"""

from .assembler import (
    SiteResult,
    build_blog_entries,
    build_derived_data,
    generate_site,
    resolve_image_paths,
)
from .data_loader import (
    filter_rows_by_domain,
    get_value_from_row,
    load_site_rows_from_csv,
    parse_csv_records,
    parse_csv_rows,
)
from .fragments import (
    BlogEntry,
    render_features_list,
    render_related_articles,
    render_sale_badge,
)
from .runner import BatchReport, run_batch, run_from_config
from .schema import (
    absolute_url,
    generate_article_schema,
    generate_breadcrumb_schema,
    generate_collection_schema,
    generate_organization_schema,
    generate_product_schema,
    normalize_price,
)
from .seo import generate_package_json, generate_robots_txt, generate_sitemap
from .templating import (
    TemplateSet,
    domain_to_slug,
    extract_placeholders_from_template,
    load_template,
    load_template_set,
    render_template,
    slugify,
)

__all__ = [
    "BatchReport",
    "BlogEntry",
    "SiteResult",
    "TemplateSet",
    "absolute_url",
    "build_blog_entries",
    "build_derived_data",
    "domain_to_slug",
    "extract_placeholders_from_template",
    "filter_rows_by_domain",
    "generate_article_schema",
    "generate_breadcrumb_schema",
    "generate_collection_schema",
    "generate_organization_schema",
    "generate_package_json",
    "generate_product_schema",
    "generate_robots_txt",
    "generate_site",
    "generate_sitemap",
    "get_value_from_row",
    "load_site_rows_from_csv",
    "load_template",
    "load_template_set",
    "normalize_price",
    "parse_csv_records",
    "parse_csv_rows",
    "render_features_list",
    "render_related_articles",
    "render_sale_badge",
    "render_template",
    "resolve_image_paths",
    "run_batch",
    "run_from_config",
    "slugify",
]
