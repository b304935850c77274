from __future__ import annotations

from typing import Sequence

from .content import Article
from .render import TemplateRenderer

INDEX_PAGE = "index.html"
ARTICLE_RAW_FIELDS = ("contents",)


def build_index_page(
    renderer: TemplateRenderer,
    index_template: str,
    site_title: str,
    articles: Sequence[Article],
) -> str:
    # contents stays escaped here; templates opt in with |safe
    template = renderer.compile(index_template, INDEX_PAGE)
    context = {
        "title": site_title,
        "articles": [article.to_context() for article in articles],
    }
    return renderer.render(template, context)


def build_article_pages(
    renderer: TemplateRenderer,
    article_template: str,
    articles: Sequence[Article],
) -> dict[str, str]:
    template = renderer.compile(article_template, "article.html")
    pages = {}
    for article in articles:
        pages[article.filename] = renderer.render(
            template,
            article.to_context(),
            raw_fields=ARTICLE_RAW_FIELDS,
        )
    return pages


def build_pages(
    renderer: TemplateRenderer,
    index_template: str,
    article_template: str,
    site_title: str,
    articles: Sequence[Article],
) -> dict[str, str]:
    """Render every page of the site, keyed by output filename.

    The index comes first, followed by the articles in the order given.
    """
    pages = {INDEX_PAGE: build_index_page(renderer, index_template, site_title, articles)}
    pages.update(build_article_pages(renderer, article_template, articles))
    return pages
