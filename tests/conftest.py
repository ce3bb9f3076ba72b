"""Pytest configuration for test environment setup.

- Forces ``DISABLE_FILE_LOGS=1`` to avoid writing log files during tests.
- Ensures the project root is available on ``sys.path`` for imports.
- Provides small shared fixtures: a fixed run date, the real template set and
  a minimal row.
"""

import os
import sys

os.environ.setdefault("DISABLE_FILE_LOGS", "1")  # Avoid creating log files during tests
from datetime import date
from pathlib import Path

import pytest

# Ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from storefront.config import TEMPLATES_DIR  # noqa: E402
from storefront.pipeline.site_generator.templating import (  # noqa: E402
    TemplateSet,
    load_template_set,
)


@pytest.fixture
def run_date() -> date:
    return date(2025, 3, 14)


@pytest.fixture
def project_templates() -> TemplateSet:
    """The template set shipped in ``templates/``."""
    return load_template_set(TEMPLATES_DIR)


@pytest.fixture
def tiny_templates() -> TemplateSet:
    """Minimal templates that expose the interesting placeholders verbatim."""
    return TemplateSet(
        header="<header>{{brand_name}}|{{brand_initial}}</header>",
        footer="<footer>{{brand_name}} {{unknown_key}}</footer>",
        homepage="{{HEADER}}<main>{{hero_headline}} {{image_hero}}</main>{{FOOTER}}",
        collection="{{HEADER}}<h1>{{collection_title}}</h1>{{collection_breadcrumb_schema}}{{FOOTER}}",
        product="{{HEADER}}{{product_name}}{{product_original_price_html}}{{product_features_html}}{{FOOTER}}",
        blog="{{HEADER}}<h1>{{blog_title}}</h1>{{blog_date}}<aside>{{sidebar_related_articles}}</aside>{{FOOTER}}",
        server_entrypoint="// server",
    )


@pytest.fixture
def site_row() -> dict[str, str]:
    return {
        "domain": "example.shop",
        "primary_keyword": "desk lamp",
        "brand_name": "lumen",
        "primary_color": "",
        "hero_headline": "Light up",
        "collection_title": "Desk Lamps",
        "product_name": "Arc Lamp Pro",
        "product_price": "$49.00",
        "product_original_price": "",
        "product_features": "",
        "blog1_title": "Choosing a Lamp",
        "blog1_meta_description": "How to choose.",
        "blog1_content": "<p>Pick one.</p>",
        "blog2_title": "",
        "blog3_title": "Lamp Care",
        "blog3_content": "<p>Dust it.</p>",
    }
