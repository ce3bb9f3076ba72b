"""Conditional HTML fragments injected into page templates.

Fragments are computed once per site (sale badge, feature list) or once per
blog page (related articles) and stored as ordinary derived-data values so the
templates only ever see flat ``{{key}}`` substitutions.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from storefront.config import FEATURES_SEPARATOR, RELATED_ARTICLE_READ_TIME


@dataclass(frozen=True)
class BlogEntry:
    """One of the (up to three) blog slots of a site row."""

    slug: str
    title: str
    meta_description: str
    content: str

    @property
    def is_materialized(self) -> bool:
        """True when the entry has a title and therefore gets its own page."""
        return bool(self.title)


def render_sale_badge(original_price: str) -> str:
    """Return the struck-through original price plus a SALE badge.

    An empty ``original_price`` yields an empty fragment.
    """
    if not original_price:
        return ""
    return (
        f'<p class="text-lg text-slate-400 line-through">{original_price}</p>\n'
        '<span class="bg-primary/10 text-primary text-xs font-bold px-2 py-1 rounded">SALE</span>'
    )


def split_features(features: str) -> list[str]:
    """Split a pipe-delimited feature string, dropping blank entries."""
    if not features:
        return []
    return [f.strip() for f in features.split(FEATURES_SEPARATOR) if f.strip()]


def render_features_list(features: str) -> str:
    """Return a ``<ul>`` for the pipe-delimited ``features`` or ``""``."""
    items = split_features(features)
    if not items:
        return ""
    lines = "\n".join(f"  <li>{item}</li>" for item in items)
    return f'<ul class="list-disc pl-4 space-y-1">\n{lines}\n</ul>'


def render_related_articles(
    entries: Sequence[BlogEntry], current_slug: str, image_path: str
) -> str:
    """Return article cards for every materialized entry except the current one.

    Parameters
    ----------
    entries : Sequence[BlogEntry]
        All blog slots of the site in input order.
    current_slug : str
        Slug of the page being rendered; it is never listed.
    image_path : str
        Thumbnail used for every card (the blog hero image).
    """
    cards = []
    for entry in entries:
        if not entry.is_materialized or entry.slug == current_slug:
            continue
        cards.append(
            '<article class="group">\n'
            f'<a class="block" href="/blog/{entry.slug}.html">\n'
            '<div class="aspect-video rounded-lg overflow-hidden mb-3">\n'
            f'<img alt="{entry.title}" class="w-full h-full object-cover '
            'group-hover:scale-105 transition-transform duration-500" '
            f'src="{image_path}"/>\n'
            "</div>\n"
            '<h5 class="font-bold text-slate-900 dark:text-white '
            'group-hover:text-primary transition-colors leading-snug">'
            f"{entry.title}</h5>\n"
            f'<p class="text-xs text-slate-400 mt-2">{RELATED_ARTICLE_READ_TIME}</p>\n'
            "</a>\n"
            "</article>"
        )
    return "\n".join(cards)
