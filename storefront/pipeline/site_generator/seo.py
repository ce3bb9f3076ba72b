"""Auxiliary per-site outputs: sitemap, robots directives, deploy boilerplate."""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import date
from xml.sax.saxutils import escape

from storefront.config import (
    DEPLOY_EXPRESS_VERSION,
    SITEMAP_CHANGEFREQ,
    SITEMAP_FILENAME,
    SITEMAP_PRIORITY_DEFAULT,
    SITEMAP_PRIORITY_HOME,
    SITEMAP_PRIORITY_PRODUCT,
)

from .schema import absolute_url


def sitemap_priority(page_path: str) -> str:
    """Return the priority tier for a site-relative page path.

    Examples
    --------
    >>> sitemap_priority("/"), sitemap_priority("/products/x.html")
    ('1.0', '0.9')
    >>> sitemap_priority("/blog/x.html")
    '0.8'
    """
    if page_path == "/":
        return SITEMAP_PRIORITY_HOME
    if "/products/" in page_path:
        return SITEMAP_PRIORITY_PRODUCT
    return SITEMAP_PRIORITY_DEFAULT


def generate_sitemap(domain: str, pages: Sequence[str], run_date: date) -> str:
    """Return a sitemaps.org URL set with one ``<url>`` per page path."""
    lastmod = run_date.isoformat()
    urls = [
        "  <url>\n"
        f"    <loc>{escape(absolute_url(domain, page))}</loc>\n"
        f"    <lastmod>{lastmod}</lastmod>\n"
        f"    <changefreq>{SITEMAP_CHANGEFREQ}</changefreq>\n"
        f"    <priority>{sitemap_priority(page)}</priority>\n"
        "  </url>"
        for page in pages
    ]
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        + "\n".join(urls)
        + "\n</urlset>"
    )


def generate_robots_txt(domain: str) -> str:
    """Return a robots file allowing everything and pointing at the sitemap."""
    return (
        "User-agent: *\n"
        "Allow: /\n"
        "\n"
        f"Sitemap: {absolute_url(domain, '/' + SITEMAP_FILENAME)}"
    )


def generate_package_json(domain_slug: str) -> str:
    """Return the deployment descriptor naming the site's static server."""
    return json.dumps(
        {
            "name": domain_slug,
            "version": "1.0.0",
            "scripts": {"start": "node server.js"},
            "dependencies": {"express": DEPLOY_EXPRESS_VERSION},
        },
        indent=2,
    )
