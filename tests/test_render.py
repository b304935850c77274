import pytest

from tinyblog.errors import BuildError, RenderError
from tinyblog.render import JinjaTemplateRenderer, PythonMarkdownRenderer, read_template, write_text


@pytest.fixture
def md():
    return PythonMarkdownRenderer()


@pytest.fixture
def templates():
    return JinjaTemplateRenderer()


def test_markdown_basic(md):
    html_text = md.render("# Hello World\n\nBody *text*.\n")
    assert "<h1>Hello World</h1>" in html_text
    assert "<p>Body <em>text</em>.</p>" in html_text


def test_markdown_strikethrough(md):
    assert md.render("this is ~~gone~~ now") == "<p>this is <del>gone</del> now</p>"


def test_markdown_single_tilde_is_literal(md):
    assert "<sub>" not in md.render("H~2~O")


def test_markdown_tables(md):
    html_text = md.render("| a | b |\n|---|---|\n| 1 | 2 |\n")
    assert "<table>" in html_text
    assert "<th>a</th>" in html_text
    assert "<td>2</td>" in html_text


def test_markdown_passes_raw_html_through(md):
    raw = '<div class="note"><script>alert(1)</script></div>'
    assert raw in md.render(f"# T\n\n{raw}\n\ntext\n")


def test_markdown_renderer_is_reusable(md):
    first = md.render("# One\n")
    md.render("[ref]: http://example.com\n\n# Two\n")
    assert md.render("# One\n") == first


def test_template_escapes_by_default(templates):
    template = templates.compile("{{ title }}|{{ contents }}", "page.html")
    out = templates.render(template, {"title": "<b>A & B</b>", "contents": "<p>x</p>"})
    assert out == "&lt;b&gt;A &amp; B&lt;/b&gt;|&lt;p&gt;x&lt;/p&gt;"


def test_template_raw_fields_are_not_escaped(templates):
    template = templates.compile("{{ title }}|{{ contents }}", "page.html")
    out = templates.render(
        template,
        {"title": "<b>", "contents": "<p>x</p>"},
        raw_fields=("contents",),
    )
    assert out == "&lt;b&gt;|<p>x</p>"


def test_template_keeps_trailing_newline(templates):
    template = templates.compile("{{ title }}\n", "page.html")
    assert templates.render(template, {"title": "x"}) == "x\n"


def test_template_syntax_error(templates):
    with pytest.raises(RenderError) as excinfo:
        templates.compile("{% for x in %}", "broken.html")
    assert "broken.html" in str(excinfo.value)


def test_template_render_error(templates):
    template = templates.compile("{{ title.upper() }}{{ missing.attr.deeper }}", "article.html")
    with pytest.raises(RenderError) as excinfo:
        templates.render(template, {"title": "x"})
    assert "article.html" in str(excinfo.value)


def test_write_text_creates_parents(tmp_path):
    path = tmp_path / "a" / "b" / "page.html"
    write_text(path, "<p>hé</p>\n")
    assert read_template(path) == "<p>hé</p>\n"


def test_template_type_error_is_render_error(templates):
    template = templates.compile("{{ title + 1 }}", "index.html")
    with pytest.raises(RenderError) as excinfo:
        templates.render(template, {"title": "x"})
    assert "index.html" in str(excinfo.value)


def test_read_template_rejects_invalid_utf8(tmp_path):
    path = tmp_path / "index.html"
    path.write_bytes(b"<p>\xff\xfe</p>")
    with pytest.raises(BuildError) as excinfo:
        read_template(path)
    assert str(path) in str(excinfo.value)
