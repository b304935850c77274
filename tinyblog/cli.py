from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Optional, Sequence

from .config import SiteConfig, load_config
from .content import DEFAULT_PATTERNS, Patterns, scan_posts, sort_articles
from .errors import BuildError, TitleMissingError
from .pages import build_pages
from .render import (
    JinjaTemplateRenderer,
    MarkdownRenderer,
    PythonMarkdownRenderer,
    TemplateRenderer,
    read_template,
)
from .utils import clean_output_dir, copy_static, write_pages

EXIT_FAILURE = 1
EXIT_TITLE_MISSING = 2


def report_copy(src: Path, dest: Path) -> None:
    print(f"{src} => {dest}")


def build_site(
    config: SiteConfig,
    project_root: Path,
    markdown_renderer: Optional[MarkdownRenderer] = None,
    template_renderer: Optional[TemplateRenderer] = None,
    patterns: Patterns = DEFAULT_PATTERNS,
) -> int:
    """Run one full build and return the number of articles published.

    All pages are rendered before the output directory is cleaned, so a bad
    post or template leaves the previous output in place.
    """
    if markdown_renderer is None:
        markdown_renderer = PythonMarkdownRenderer()
    if template_renderer is None:
        template_renderer = JinjaTemplateRenderer()

    if not config.posts_dir.is_dir():
        raise BuildError(f"Posts directory not found: {config.posts_dir}")
    if not config.templates_dir.is_dir():
        raise BuildError(f"Templates directory not found: {config.templates_dir}")

    articles = sort_articles(scan_posts(config.posts_dir, markdown_renderer, patterns))

    pages = build_pages(
        template_renderer,
        read_template(config.index_template),
        read_template(config.article_template),
        config.site_title,
        articles,
    )

    output_dir = config.output_dir
    clean_output_dir(output_dir, project_root)
    output_dir.mkdir(parents=True, exist_ok=True)
    write_pages(output_dir, pages)
    copy_static(config.templates_dir, output_dir, on_copy=report_copy)
    return len(articles)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Build a static blog from date-named Markdown posts.")
    parser.add_argument(
        "--config",
        default="site.toml",
        help="Optional site config file (TOML/YAML/JSON); fixed defaults apply when absent.",
    )
    args = parser.parse_args(argv)
    config = SiteConfig.from_mapping(load_config(Path(args.config)))

    start = time.perf_counter()
    try:
        count = build_site(config, Path.cwd())
    except TitleMissingError as exc:
        print(f"Failed to get title for {exc.path}", file=sys.stderr)
        sys.exit(EXIT_TITLE_MISSING)
    except (BuildError, OSError) as exc:
        print(f"Build failed: {exc}", file=sys.stderr)
        sys.exit(EXIT_FAILURE)
    elapsed = time.perf_counter() - start
    print(f"Built {count} posts in {elapsed:.2f}s.")
    print(f"Site generated in: {config.output_dir}")
