"""Unit tests for the HTML renderer."""

import io

import pytest

from bbcode2html.ast import Document, Raw, Tag, Text
from bbcode2html.exceptions import InvalidOptionsError, RenderingError
from bbcode2html.options import BBCodeParserOptions, HtmlRendererOptions
from bbcode2html.renderer import BaseRenderer, HtmlRenderer, escape_html


def render(doc: Document, **options) -> str:
    return HtmlRenderer(HtmlRendererOptions(**options)).render_to_string(doc)


@pytest.mark.unit
class TestEscapeHtml:
    """Tests for the escaping helper."""

    def test_escapes_markup_characters(self) -> None:
        """Test all five special characters are replaced."""
        assert escape_html("<>&\"'") == "&lt;&gt;&amp;&quot;&#x27;"

    def test_plain_text_unchanged(self) -> None:
        """Test ordinary text passes through."""
        assert escape_html("hello [b]") == "hello [b]"


@pytest.mark.unit
class TestHtmlRendererBasic:
    """Tests for rendering individual node types."""

    def test_text_is_escaped(self) -> None:
        """Test text content is entity-escaped."""
        doc = Document(children=[Text("<script>alert('x')</script>")])
        assert render(doc) == "&lt;script&gt;alert(&#x27;x&#x27;)&lt;/script&gt;"

    def test_newline_br_mode(self) -> None:
        """Test newlines become line break tags by default."""
        assert render(Document(children=[Text("a\nb")])) == "a<br>b"

    def test_custom_line_break_tag(self) -> None:
        """Test the line break markup is configurable."""
        assert render(Document(children=[Text("a\nb")]), line_break_tag="<br />") == "a<br />b"

    def test_newline_preserve_mode(self) -> None:
        """Test preserve mode keeps newline characters."""
        assert render(Document(children=[Text("a\nb")]), newline_mode="preserve") == "a\nb"

    def test_raw_keeps_newlines(self) -> None:
        """Test raw content is escaped without newline conversion."""
        doc = Document(children=[Tag("code", None, [Raw("if a < b:\n    pass")])])
        assert render(doc) == "<pre><code>if a &lt; b:\n    pass</code></pre>"

    def test_formatting_tags(self) -> None:
        """Test the simple formatting tags map to their HTML elements."""
        for name in ("b", "i", "u", "s", "sup", "sub"):
            doc = Document(children=[Tag(name, None, [Text("x")])])
            assert render(doc) == f"<{name}>x</{name}>"

    def test_color(self) -> None:
        """Test colour renders as an inline style."""
        doc = Document(children=[Tag("color", "#ff0000", [Text("x")])])
        assert render(doc) == '<span style="color:#ff0000">x</span>'

    def test_size(self) -> None:
        """Test size renders as a percentage font size."""
        doc = Document(children=[Tag("size", "150", [Text("x")])])
        assert render(doc) == '<span style="font-size:150%">x</span>'

    def test_alignment(self) -> None:
        """Test alignment tags render as styled divs."""
        doc = Document(children=[Tag("center", None, [Text("x")])])
        assert render(doc) == '<div style="text-align:center">x</div>'

    def test_link_with_rel(self) -> None:
        """Test links carry the configured rel attribute."""
        doc = Document(children=[Tag("url", "https://example.com", [Text("site")])])
        assert render(doc) == '<a href="https://example.com" rel="nofollow">site</a>'

    def test_link_without_rel(self) -> None:
        """Test rel can be turned off."""
        doc = Document(children=[Tag("url", "https://example.com", [Text("site")])])
        assert render(doc, link_rel=None) == '<a href="https://example.com">site</a>'

    def test_bare_link(self) -> None:
        """Test a bare link shows its target as text."""
        url = "https://example.com/?a=1&b=2"
        doc = Document(children=[Tag("url", url, [Raw(url)], metadata={"bare": True})])
        expected = '<a href="https://example.com/?a=1&amp;b=2" rel="nofollow">https://example.com/?a=1&amp;b=2</a>'
        assert render(doc) == expected

    def test_email(self) -> None:
        """Test email links use a mailto target."""
        doc = Document(children=[Tag("email", "a@b.org", [Raw("a@b.org")], metadata={"bare": True})])
        assert render(doc) == '<a href="mailto:a@b.org">a@b.org</a>'

    def test_image_is_void(self) -> None:
        """Test images render as a single element without content."""
        src = "https://example.com/a.png"
        doc = Document(children=[Tag("img", src, [Raw(src)], metadata={"bare": True})])
        assert render(doc) == '<img src="https://example.com/a.png" alt="">'

    def test_quote_with_attribution(self) -> None:
        """Test a quote argument becomes an escaped citation."""
        doc = Document(children=[Tag("quote", "A&B", [Text("hi")])])
        assert render(doc) == "<blockquote><cite>A&amp;B wrote:</cite>hi</blockquote>"

    def test_quote_without_attribution(self) -> None:
        """Test a plain quote."""
        doc = Document(children=[Tag("quote", None, [Text("hi")])])
        assert render(doc) == "<blockquote>hi</blockquote>"

    def test_code_language_class(self) -> None:
        """Test a code language becomes a class name."""
        doc = Document(children=[Tag("code", "python", [Raw("x")])])
        assert render(doc) == '<pre><code class="language-python">x</code></pre>'

    def test_ordered_list(self) -> None:
        """Test an ordered list keeps its marker type."""
        doc = Document(children=[Tag("list", "a", [Tag("*", None, [Text("x")])])])
        assert render(doc) == '<ol type="a"><li>x</li></ol>'

    def test_whitespace_directly_in_list_is_dropped(self) -> None:
        """Test whitespace between list items does not leak into the list."""
        doc = Document(children=[Tag("list", None, [Text("\n"), Tag("*", None, [Text("x")]), Text("  ")])])
        assert render(doc) == "<ul><li>x</li></ul>"

    def test_spoiler(self) -> None:
        """Test spoilers use details and summary."""
        doc = Document(children=[Tag("spoiler", None, [Text("x")])])
        assert render(doc) == "<details><summary>Spoiler</summary>x</details>"

    def test_spoiler_with_summary(self) -> None:
        """Test a spoiler argument replaces the summary text."""
        doc = Document(children=[Tag("spoiler", "Ending", [Text("x")])])
        assert render(doc) == "<details><summary>Ending</summary>x</details>"

    def test_noparse_has_no_markup(self) -> None:
        """Test noparse renders only its escaped content."""
        doc = Document(children=[Tag("noparse", None, [Raw("[b]<x>[/b]")])])
        assert render(doc) == "[b]&lt;x&gt;[/b]"

    def test_argument_on_plain_tag_ignored(self) -> None:
        """Test an argument on a hand-built plain tag is not rendered."""
        doc = Document(children=[Tag("b", "ignored", [Text("x")])])
        assert render(doc) == "<b>x</b>"


@pytest.mark.unit
class TestHtmlRendererDocument:
    """Tests for standalone output, errors and output targets."""

    def test_standalone(self) -> None:
        """Test standalone mode produces a complete HTML page."""
        doc = Document(children=[Text("x")])
        result = render(doc, standalone=True, title="A <b> title", language="de")
        assert result.startswith("<!DOCTYPE html>\n")
        assert '<html lang="de">' in result
        assert "<title>A &lt;b&gt; title</title>" in result
        assert "<body>\nx\n</body>" in result
        assert result.endswith("</html>")

    def test_standalone_title_from_metadata(self) -> None:
        """Test a title in document metadata wins over the option."""
        doc = Document(children=[], metadata={"title": "From metadata"})
        assert "<title>From metadata</title>" in render(doc, standalone=True)

    def test_unknown_tag_raises(self) -> None:
        """Test a hand-built unknown tag is a rendering error."""
        doc = Document(children=[Tag("blink", None, [Text("x")])])
        with pytest.raises(RenderingError) as exc_info:
            render(doc)
        assert exc_info.value.rendering_stage == "tag"

    def test_wrong_options_type(self) -> None:
        """Test parser options are refused by the renderer."""
        with pytest.raises(InvalidOptionsError):
            HtmlRenderer(BBCodeParserOptions())  # type: ignore[arg-type]

    def test_renderer_is_reusable(self) -> None:
        """Test output does not accumulate across calls."""
        renderer = HtmlRenderer()
        doc = Document(children=[Tag("b", None, [Text("x")])])
        assert renderer.render_to_string(doc) == "<b>x</b>"
        assert renderer.render_to_string(doc) == "<b>x</b>"

    def test_render_to_path(self, tmp_path) -> None:
        """Test rendering to a file path writes UTF-8."""
        target = tmp_path / "out.html"
        HtmlRenderer().render(Document(children=[Text("café")]), target)
        assert target.read_text(encoding="utf-8") == "café"

    def test_render_to_text_stream(self) -> None:
        """Test rendering into a text stream."""
        buffer = io.StringIO()
        HtmlRenderer().render(Document(children=[Text("x")]), buffer)
        assert buffer.getvalue() == "x"

    def test_render_to_binary_stream(self) -> None:
        """Test rendering into a binary stream encodes UTF-8."""
        buffer = io.BytesIO()
        HtmlRenderer().render(Document(children=[Text("é")]), buffer)
        assert buffer.getvalue() == "é".encode("utf-8")

    def test_write_text_output_rejects_unknown_target(self) -> None:
        """Test non-writable targets are refused."""
        with pytest.raises(TypeError):
            BaseRenderer.write_text_output("x", 42)  # type: ignore[arg-type]
