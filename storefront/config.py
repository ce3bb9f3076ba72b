"""Global configuration constants for the project.

Defines paths, filenames and defaults used across the site generation,
image generation and publishing stages.
"""

from __future__ import annotations

from pathlib import Path

# Project directories
PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
LOG_DIR: Path = PROJECT_ROOT / "logs"
INPUT_DIR: Path = PROJECT_ROOT / "input"
OUTPUT_DIR: Path = PROJECT_ROOT / "output"
TEMPLATES_DIR: Path = PROJECT_ROOT / "templates"

# Input defaults
DEFAULT_CSV_PATH: Path = INPUT_DIR / "sites.csv"
DOMAIN_COLUMN: str = "domain"

# Template resources (relative to TEMPLATES_DIR)
HEADER_TEMPLATE_NAME: str = "_header.html"
FOOTER_TEMPLATE_NAME: str = "_footer.html"
HOMEPAGE_TEMPLATE_NAME: str = "homepage.html"
COLLECTION_TEMPLATE_NAME: str = "collection.html"
PRODUCT_TEMPLATE_NAME: str = "product.html"
BLOG_TEMPLATE_NAME: str = "blog.html"
SERVER_ENTRYPOINT_TEMPLATE: str = "deploy/server.js"

# Site generation defaults
DEFAULT_PRIMARY_COLOR: str = "#137fec"
DEFAULT_BRAND_INITIAL: str = "S"
BLOG_SLOTS: int = 3
BLOG_FALLBACK_TITLE_FORMAT: str = "blog-post-{index}"
FEATURES_SEPARATOR: str = "|"
SITE_SCHEME: str = "https://"
PRICE_CURRENCY: str = "USD"
AGGREGATE_RATING_VALUE: str = "4.5"
AGGREGATE_REVIEW_COUNT: str = "128"
RELATED_ARTICLE_READ_TIME: str = "5 min read"

# Image roles: derived-data key -> canonical file stem under <site>/images
IMAGE_ROLES: dict[str, str] = {
    "image_hero": "hero",
    "image_product_main": "product-main",
    "image_product_2": "product-2",
    "image_product_3": "product-3",
    "image_product_4": "product-4",
    "image_product_5": "product-5",
    "image_collection_1": "collection-1",
    "image_collection_2": "collection-2",
    "image_blog_hero": "blog-hero",
}
IMAGES_SUBDIR: str = "images"
FALLBACK_IMAGE_EXTENSION: str = ".jpg"

# Sitemap
SITEMAP_FILENAME: str = "sitemap.xml"
ROBOTS_FILENAME: str = "robots.txt"
SITEMAP_CHANGEFREQ: str = "weekly"
SITEMAP_PRIORITY_HOME: str = "1.0"
SITEMAP_PRIORITY_PRODUCT: str = "0.9"
SITEMAP_PRIORITY_DEFAULT: str = "0.8"

# Deployment boilerplate written into every site
DEPLOY_PACKAGE_FILENAME: str = "package.json"
DEPLOY_SERVER_FILENAME: str = "server.js"
DEPLOY_EXPRESS_VERSION: str = "^4.18.0"

# Image generation defaults
DEFAULT_IMAGE_MODEL: str = "nano-banana-pro-preview"
DEFAULT_IMAGE_API_BASE: str = "https://generativelanguage.googleapis.com/v1beta"

# Publishing defaults
DEFAULT_GIT_REMOTE: str = "origin"
FALLBACK_BRANCH: str = "main"
DEPLOY_PROTECTED_NAMES: tuple[str, ...] = (".git", "output", "node_modules", ".DS_Store")
DEPLOY_GITIGNORE: str = "output/\nnode_modules/\n.DS_Store\n"

# Logging
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILENAME_GENERATE_SITES: str = "generate_sites.log"
LOG_FILENAME_GENERATE_IMAGES: str = "generate_images.log"
LOG_FILENAME_DEPLOY_SITES: str = "deploy_sites.log"
