"""Structured-data (schema.org JSON-LD) generators.

Each generator is a pure function from derived site data to a serialized
JSON-LD document that the page templates embed in a ``<script>`` block.
Generators never mutate their input and never touch the filesystem.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any

from storefront.config import (
    AGGREGATE_RATING_VALUE,
    AGGREGATE_REVIEW_COUNT,
    PRICE_CURRENCY,
    SITE_SCHEME,
)

SCHEMA_CONTEXT = "https://schema.org"
_NON_PRICE_CHARS = re.compile(r"[^0-9.]")


def _dump(document: dict[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def normalize_price(value: str) -> str:
    """Strip every character that is not a digit or a decimal point.

    Examples
    --------
    >>> normalize_price("$1,299.00 USD")
    '1299.00'
    """
    return _NON_PRICE_CHARS.sub("", value or "")


def absolute_url(domain: str, path: str = "") -> str:
    """Join the fixed scheme, ``domain`` and ``path`` without normalization."""
    return f"{SITE_SCHEME}{domain}{path}"


def _organization(name: str) -> dict[str, str]:
    return {"@type": "Organization", "name": name}


def generate_organization_schema(data: Mapping[str, str]) -> str:
    """Return the Organization document used on the homepage."""
    domain = data.get("domain", "")
    return _dump(
        {
            "@context": SCHEMA_CONTEXT,
            "@type": "Organization",
            "name": data.get("brand_name", ""),
            "url": absolute_url(domain),
            "logo": absolute_url(domain, "/logo.png"),
            "sameAs": [],
        }
    )


def generate_breadcrumb_schema(
    items: Sequence[Mapping[str, str]], domain: str
) -> str:
    """Return a BreadcrumbList document.

    Parameters
    ----------
    items : Sequence[Mapping[str, str]]
        Crumbs in display order, each with a ``name`` and an optional
        site-relative ``url``.
    domain : str
        Site domain used to absolutize crumb urls.

    Notes
    -----
    Crumbs without a url are serialized without an ``item`` key.
    """
    elements = []
    for position, item in enumerate(items, start=1):
        element: dict[str, Any] = {
            "@type": "ListItem",
            "position": position,
            "name": item.get("name", ""),
        }
        if item.get("url"):
            element["item"] = absolute_url(domain, item["url"])
        elements.append(element)
    return _dump(
        {
            "@context": SCHEMA_CONTEXT,
            "@type": "BreadcrumbList",
            "itemListElement": elements,
        }
    )


def generate_product_schema(data: Mapping[str, str]) -> str:
    """Return the Product document with a single USD offer."""
    domain = data.get("domain", "")
    brand_name = data.get("brand_name", "")
    return _dump(
        {
            "@context": SCHEMA_CONTEXT,
            "@type": "Product",
            "name": data.get("product_name", ""),
            "description": data.get("product_description", ""),
            "brand": {"@type": "Brand", "name": brand_name},
            "offers": {
                "@type": "Offer",
                "url": absolute_url(
                    domain, f"/products/{data.get('product_slug', '')}.html"
                ),
                "priceCurrency": PRICE_CURRENCY,
                "price": normalize_price(data.get("product_price", "")),
                "availability": "https://schema.org/InStock",
                "seller": _organization(brand_name),
            },
            "aggregateRating": {
                "@type": "AggregateRating",
                "ratingValue": AGGREGATE_RATING_VALUE,
                "reviewCount": AGGREGATE_REVIEW_COUNT,
            },
        }
    )


def generate_article_schema(
    data: Mapping[str, str],
    headline: str,
    slug: str,
    description: str,
    run_date: date,
) -> str:
    """Return the Article document for one blog entry.

    Parameters
    ----------
    data : Mapping[str, str]
        Derived site data (``domain`` and ``brand_name`` are used).
    headline, slug, description : str
        The blog entry being rendered.
    run_date : date
        Publication and modification date.
    """
    domain = data.get("domain", "")
    brand_name = data.get("brand_name", "")
    published = run_date.isoformat()
    return _dump(
        {
            "@context": SCHEMA_CONTEXT,
            "@type": "Article",
            "headline": headline,
            "description": description,
            "author": _organization(brand_name),
            "publisher": {
                **_organization(brand_name),
                "logo": {
                    "@type": "ImageObject",
                    "url": absolute_url(domain, "/logo.png"),
                },
            },
            "datePublished": published,
            "dateModified": published,
            "mainEntityOfPage": {
                "@type": "WebPage",
                "@id": absolute_url(domain, f"/blog/{slug}.html"),
            },
        }
    )


def generate_collection_schema(data: Mapping[str, str]) -> str:
    """Return the CollectionPage document for the collection page."""
    domain = data.get("domain", "")
    return _dump(
        {
            "@context": SCHEMA_CONTEXT,
            "@type": "CollectionPage",
            "name": data.get("collection_title", ""),
            "description": data.get("collection_description")
            or data.get("collection_meta_description", ""),
            "url": absolute_url(
                domain, f"/collections/{data.get('collection_slug', '')}.html"
            ),
            "isPartOf": {
                "@type": "WebSite",
                "name": data.get("brand_name", ""),
                "url": absolute_url(domain),
            },
        }
    )
