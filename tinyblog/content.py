from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from .errors import PostDateError, TitleMissingError
from .render import MarkdownRenderer, read_source

DATE_FMT = "%Y-%m-%d"
FILENAME_DATE_FMT = "%Y%m%d"


@dataclass(frozen=True)
class Patterns:
    post_filename: re.Pattern = field(
        default_factory=lambda: re.compile(r"(?P<stem>(?P<date>[0-9]{8}).*)\.md")
    )
    title: re.Pattern = field(
        default_factory=lambda: re.compile(r"^#[ \t]+(?P<title>\S.*?)\r?$", re.MULTILINE)
    )


DEFAULT_PATTERNS = Patterns()


@dataclass(frozen=True)
class Article:
    title: str
    date: dt.date
    contents: str
    filename: str
    source: Optional[Path] = field(default=None, compare=False)

    def to_context(self) -> dict:
        return {
            "title": self.title,
            "date": self.date.strftime(DATE_FMT),
            "contents": self.contents,
            "filename": self.filename,
        }


def match_post_filename(name: str, patterns: Patterns = DEFAULT_PATTERNS) -> Optional[re.Match]:
    return patterns.post_filename.fullmatch(name)


def output_filename(match: re.Match) -> str:
    return f"{match.group('stem')}.html"


def parse_post_date(value: str, path: Path) -> dt.date:
    try:
        return dt.datetime.strptime(value, FILENAME_DATE_FMT).date()
    except ValueError as exc:
        raise PostDateError(path, value) from exc


def extract_title(text: str, path: Path, patterns: Patterns = DEFAULT_PATTERNS) -> str:
    match = patterns.title.search(text)
    if match is None:
        raise TitleMissingError(path)
    return match.group("title")


def load_article(
    path: Path,
    match: re.Match,
    markdown_renderer: MarkdownRenderer,
    patterns: Patterns = DEFAULT_PATTERNS,
) -> Article:
    date = parse_post_date(match.group("date"), path)
    raw_text = read_source(path)
    title = extract_title(raw_text, path, patterns)
    return Article(
        title=title,
        date=date,
        contents=markdown_renderer.render(raw_text),
        filename=output_filename(match),
        source=path,
    )


def scan_posts(
    posts_dir: Path,
    markdown_renderer: MarkdownRenderer,
    patterns: Patterns = DEFAULT_PATTERNS,
) -> list[Article]:
    """Build an Article for every ``YYYYMMDD*.md`` file directly in ``posts_dir``.

    Other files, symlinks and subdirectories are ignored. A bad date prefix raises
    PostDateError, a post without a ``# heading`` line raises TitleMissingError.
    """
    articles = []
    for path in sorted(posts_dir.iterdir(), key=lambda p: p.name):
        if path.is_symlink() or not path.is_file():
            continue
        match = match_post_filename(path.name, patterns)
        if match is None:
            continue
        articles.append(load_article(path, match, markdown_renderer, patterns))
    return articles


def sort_articles(articles: Iterable[Article]) -> list[Article]:
    return sorted(articles, key=lambda article: article.filename)
