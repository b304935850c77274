from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping, Protocol

import markdown
from jinja2 import Environment, Template, TemplateError, select_autoescape
from markupsafe import Markup

from .errors import BuildError, RenderError

MARKDOWN_EXTENSIONS = ["tables", "pymdownx.tilde"]
MARKDOWN_EXTENSION_CONFIGS = {"pymdownx.tilde": {"subscript": False}}


class MarkdownRenderer(Protocol):
    def render(self, text: str) -> str: ...


class TemplateRenderer(Protocol):
    def compile(self, source: str, name: str) -> object: ...

    def render(
        self,
        template: object,
        context: Mapping[str, object],
        raw_fields: Iterable[str] = (),
    ) -> str: ...


class PythonMarkdownRenderer:
    """Markdown to HTML with tables and ``~~strikethrough~~``.

    Raw HTML in the source is passed through untouched.
    """

    def __init__(self) -> None:
        self._md = markdown.Markdown(
            extensions=MARKDOWN_EXTENSIONS,
            extension_configs=MARKDOWN_EXTENSION_CONFIGS,
        )

    def render(self, text: str) -> str:
        html_content = self._md.convert(text)
        self._md.reset()
        return html_content


class JinjaTemplateRenderer:
    """Jinja2 templates with HTML autoescaping on every field.

    Fields listed in ``raw_fields`` are marked safe and substituted verbatim.
    """

    def __init__(self) -> None:
        self.env = Environment(
            autoescape=select_autoescape(["html", "xml"], default_for_string=True),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def compile(self, source: str, name: str) -> Template:
        try:
            template = self.env.from_string(source)
        except TemplateError as exc:
            raise RenderError(name, str(exc)) from exc
        template.name = name
        return template

    def render(
        self,
        template: Template,
        context: Mapping[str, object],
        raw_fields: Iterable[str] = (),
    ) -> str:
        values = dict(context)
        for key in raw_fields:
            if key in values:
                values[key] = Markup(values[key])
        try:
            return template.render(**values)
        except (TemplateError, TypeError, ValueError) as exc:
            raise RenderError(template.name or "<string>", str(exc)) from exc


def read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise BuildError(f"Invalid UTF-8 in {path}: {exc.reason}") from exc


def read_template(path: Path) -> str:
    return read_source(path)


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
