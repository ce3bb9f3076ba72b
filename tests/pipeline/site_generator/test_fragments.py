"""Tests for the sale badge, feature list and related-article fragments."""

from storefront.pipeline.site_generator.fragments import (
    BlogEntry,
    render_features_list,
    render_related_articles,
    render_sale_badge,
    split_features,
)


def test_sale_badge_empty_when_no_original_price():
    assert render_sale_badge("") == ""


def test_sale_badge_shows_original_price():
    html = render_sale_badge("$129.99")
    assert "line-through" in html and "$129.99" in html and "SALE" in html


def test_features_list_drops_blank_entries():
    assert split_features("A| |B||") == ["A", "B"]
    html = render_features_list("A| |B")
    assert html.startswith('<ul class="list-disc pl-4 space-y-1">')
    assert html.count("<li>") == 2


def test_features_list_empty():
    assert render_features_list("") == ""
    assert render_features_list(" | ") == ""


def test_related_articles_exclude_current_and_unmaterialized():
    entries = [
        BlogEntry("first", "First", "", ""),
        BlogEntry("blog-post-2", "", "", ""),
        BlogEntry("third", "Third", "", ""),
    ]
    html = render_related_articles(entries, "first", "/images/blog-hero.png")
    assert "/blog/third.html" in html
    assert "/blog/first.html" not in html
    assert "blog-post-2" not in html
    assert html.count("<article") == 1
    assert 'src="/images/blog-hero.png"' in html


def test_related_articles_single_entry_is_empty():
    assert render_related_articles([BlogEntry("only", "Only", "", "")], "only", "x") == ""
