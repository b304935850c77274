from __future__ import annotations

import json
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

import yaml

DEFAULT_POSTS_DIR = "posts"
DEFAULT_TEMPLATES_DIR = "template"
DEFAULT_OUTPUT_DIR = "public"
DEFAULT_SITE_TITLE = "A tech blog"
INDEX_TEMPLATE = "index.html"
ARTICLE_TEMPLATE = "article.html"


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            print(f"Invalid TOML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
    elif suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            print(f"Invalid YAML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if data is None:
            return {}
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            print(f"Invalid JSON in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
    if not isinstance(data, dict):
        print(f"Config file must contain a mapping: {path}", file=sys.stderr)
        sys.exit(1)
    return data


@dataclass(frozen=True)
class SiteConfig:
    posts_dir: Path = Path(DEFAULT_POSTS_DIR)
    templates_dir: Path = Path(DEFAULT_TEMPLATES_DIR)
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    site_title: str = DEFAULT_SITE_TITLE

    @property
    def index_template(self) -> Path:
        return self.templates_dir / INDEX_TEMPLATE

    @property
    def article_template(self) -> Path:
        return self.templates_dir / ARTICLE_TEMPLATE

    @classmethod
    def from_mapping(cls, config: Mapping[str, object], base_dir: Path = Path(".")) -> "SiteConfig":
        """Overlay ``posts``, ``templates``, ``output`` and ``site_title`` on the defaults.

        Relative directories are taken relative to ``base_dir``.
        """

        def cfg_path(key: str, default: str) -> Path:
            value = config.get(key)
            path = Path(default if value is None else str(value))
            return path if path.is_absolute() else base_dir / path

        site_title = config.get("site_title")
        return cls(
            posts_dir=cfg_path("posts", DEFAULT_POSTS_DIR),
            templates_dir=cfg_path("templates", DEFAULT_TEMPLATES_DIR),
            output_dir=cfg_path("output", DEFAULT_OUTPUT_DIR),
            site_title=DEFAULT_SITE_TITLE if site_title is None else str(site_title),
        )
