"""Templating utilities for placeholder-driven site generation.

Templates are plain text resources containing ``{{identifier}}`` tokens. This
module loads them, lists their placeholders and renders them against a flat
mapping. It also holds the slug helpers used to derive URL- and file-safe
identifiers from free text.

Boundaries
----------
- Only template file reads; no writes and no rendering of HTML semantics.
- Rendering is single-pass: substituted values are never re-scanned.
- Unknown placeholders are left in place, so a template may be rendered in
  stages (header and footer first, then injected into a page).
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from storefront.config import (
    BLOG_TEMPLATE_NAME,
    COLLECTION_TEMPLATE_NAME,
    FOOTER_TEMPLATE_NAME,
    HEADER_TEMPLATE_NAME,
    HOMEPAGE_TEMPLATE_NAME,
    PRODUCT_TEMPLATE_NAME,
    SERVER_ENTRYPOINT_TEMPLATE,
)

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")
_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Return a lowercase, hyphen-delimited identifier for ``text``.

    Every maximal run of characters outside ``[a-z0-9]`` (after lowercasing)
    becomes a single hyphen; leading and trailing hyphens are removed.

    Examples
    --------
    >>> slugify("Wood3n Doll House Kits!!")
    'wood3n-doll-house-kits'
    >>> slugify("")
    ''
    """
    return _NON_SLUG_CHARS.sub("-", text.lower()).strip("-")


def domain_to_slug(domain: str) -> str:
    """Return the output directory key for ``domain`` (dots become hyphens)."""
    return domain.replace(".", "-")


def load_template(path: Path) -> str:
    """Read the contents of a template file as a string.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    """
    with Path(path).open("r", encoding="utf-8") as fh:
        return fh.read()


def extract_placeholders_from_template(content: str) -> list[str]:
    """Return a sorted list of unique placeholder names found in ``content``."""
    return sorted(set(PLACEHOLDER_PATTERN.findall(content)))


def render_template(template_content: str, context: Mapping[str, object]) -> str:
    """Render ``template_content`` by substituting ``{{key}}`` tokens.

    Parameters
    ----------
    template_content : str
        Template text containing ``{{identifier}}`` tokens.
    context : Mapping[str, object]
        Values to substitute; each is converted with ``str``.

    Returns
    -------
    str
        Rendered text. Tokens whose key is absent (or maps to ``None``) are
        emitted unchanged.

    Examples
    --------
    >>> render_template("{{a}} and {{b}}", {"a": "X"})
    'X and {{b}}'
    >>> render_template("{{a}}", {"a": "{{b}}", "b": "never"})
    '{{b}}'
    """

    def replace_func(match: re.Match[str]) -> str:
        value = context.get(match.group(1))
        if value is None:
            return match.group(0)
        return str(value)

    return PLACEHOLDER_PATTERN.sub(replace_func, template_content)


@dataclass(frozen=True)
class TemplateSet:
    """The template resources shared by every site in a batch run.

    The six page templates are required. ``server_entrypoint`` is the static
    file server copied verbatim into each site; it is optional and the site is
    written without it when the resource is absent.
    """

    header: str
    footer: str
    homepage: str
    collection: str
    product: str
    blog: str
    server_entrypoint: str | None = None


def load_template_set(templates_dir: Path) -> TemplateSet:
    """Load all required templates from ``templates_dir``.

    Raises
    ------
    FileNotFoundError
        If any of the six page templates is missing.
    """
    templates_dir = Path(templates_dir)
    server_path = templates_dir / SERVER_ENTRYPOINT_TEMPLATE
    return TemplateSet(
        header=load_template(templates_dir / HEADER_TEMPLATE_NAME),
        footer=load_template(templates_dir / FOOTER_TEMPLATE_NAME),
        homepage=load_template(templates_dir / HOMEPAGE_TEMPLATE_NAME),
        collection=load_template(templates_dir / COLLECTION_TEMPLATE_NAME),
        product=load_template(templates_dir / PRODUCT_TEMPLATE_NAME),
        blog=load_template(templates_dir / BLOG_TEMPLATE_NAME),
        server_entrypoint=load_template(server_path) if server_path.is_file() else None,
    )
