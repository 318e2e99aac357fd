"""Unit tests for the public translate, parse and render functions."""

import pytest

import bbcode2html
from bbcode2html import (
    BBCodeParserOptions,
    Document,
    HtmlRendererOptions,
    InputTooLargeError,
    InvalidOptionsError,
    Tag,
    Text,
    parse,
    render,
    translate,
)


@pytest.mark.unit
class TestTranslate:
    """Tests for the one-call translate function."""

    def test_basic(self) -> None:
        """Test a simple translation."""
        assert translate("[b]x[/b]") == "<b>x</b>"

    def test_parser_kwargs(self) -> None:
        """Test parser options can be passed as keywords."""
        assert translate("x[/b]", stray_closing_tag_mode="literal") == "x[/b]"

    def test_renderer_kwargs(self) -> None:
        """Test renderer options can be passed as keywords."""
        assert translate("a\nb", newline_mode="preserve") == "a\nb"

    def test_mixed_kwargs(self) -> None:
        """Test keywords are routed to both stages."""
        result = translate("[b][i]x", max_depth=1, link_rel=None)
        assert result == "<b>[i]x</b>"

    def test_options_objects(self) -> None:
        """Test explicit option objects."""
        result = translate(
            "[url=http://x.org]y[/url]",
            parser_options=BBCodeParserOptions(),
            renderer_options=HtmlRendererOptions(link_rel="nofollow noopener"),
        )
        assert result == '<a href="http://x.org" rel="nofollow noopener">y</a>'

    def test_kwargs_override_options_objects(self) -> None:
        """Test keywords are applied on top of option objects."""
        result = translate("a\nb", renderer_options=HtmlRendererOptions(newline_mode="br"), newline_mode="preserve")
        assert result == "a\nb"

    def test_unknown_kwargs_ignored(self) -> None:
        """Test unrelated keywords do not raise."""
        assert translate("[b]x[/b]", no_such_option=True) == "<b>x</b>"

    def test_swapped_options_rejected(self) -> None:
        """Test passing renderer options as parser options fails."""
        with pytest.raises(InvalidOptionsError):
            translate("x", parser_options=HtmlRendererOptions())  # type: ignore[arg-type]

    def test_invalid_kwarg_value(self) -> None:
        """Test keyword values are validated."""
        with pytest.raises(ValueError):
            translate("x", max_depth=0)

    def test_reject_mode(self) -> None:
        """Test oversized input can raise."""
        with pytest.raises(InputTooLargeError):
            translate("abcdef", max_input_size=3, oversize_mode="reject")

    def test_bytes_input(self) -> None:
        """Test UTF-8 bytes are accepted."""
        assert translate(b"[i]\xc3\xa9[/i]") == "<i>é</i>"


@pytest.mark.unit
class TestParseAndRender:
    """Tests for the two-stage interface."""

    def test_parse(self) -> None:
        """Test parse returns a tree."""
        doc = parse("[b]x[/b]")
        assert isinstance(doc, Document)
        assert doc.children == [Tag("b", None, [Text("x")])]

    def test_parse_kwargs(self) -> None:
        """Test parse accepts option keywords."""
        doc = parse("[b][i]x", max_depth=1)
        assert doc.children == [Tag("b", None, [Text("[i]x")])]

    def test_render(self) -> None:
        """Test render accepts a hand-built tree."""
        doc = Document(children=[Tag("quote", "Alice", [Text("Hi")])])
        assert render(doc) == "<blockquote><cite>Alice wrote:</cite>Hi</blockquote>"

    def test_render_kwargs(self) -> None:
        """Test render accepts option keywords."""
        html = render(Document(children=[Text("x")]), standalone=True, title="T")
        assert "<title>T</title>" in html

    def test_tree_can_be_transformed_between_stages(self) -> None:
        """Test callers may edit the tree before rendering."""
        doc = parse("[b]x[/b]")
        doc.children[0].name = "i"
        assert render(doc) == "<i>x</i>"


@pytest.mark.unit
def test_version() -> None:
    """Test the package exposes a version string."""
    assert isinstance(bbcode2html.__version__, str)
    assert bbcode2html.__version__.count(".") == 2
