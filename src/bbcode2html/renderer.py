#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2html/renderer.py
"""HTML rendering from the parse tree.

This module provides the HtmlRenderer class, which walks a parsed tree with
the visitor pattern and emits HTML. Escaping happens in one place,
``escape_html``: every Text node, every Raw node and every interpolated tag
argument passes through it.
"""

from __future__ import annotations

import html
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Mapping, Union

from bbcode2html.ast import Document, NodeVisitor, Raw, Tag, Text
from bbcode2html.constants import ROOT_CONTAINER
from bbcode2html.exceptions import InvalidOptionsError, RenderingError
from bbcode2html.options.base import BaseRendererOptions
from bbcode2html.options.html import HtmlRendererOptions
from bbcode2html.tags import DEFAULT_TAG_TABLE, TagSpec

logger = logging.getLogger(__name__)


def escape_html(text: str) -> str:
    """Escape ``& < > " '`` as HTML entities.

    Examples
    --------
    >>> escape_html('<a href="x">&\\'')
    '&lt;a href=&quot;x&quot;&gt;&amp;&#x27;'

    """
    return html.escape(text, quote=True)


class BaseRenderer(ABC):
    """Abstract base class for tree renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render_to_string(self, doc: Document) -> str:
        """Render the tree to a string."""
        pass

    def render(self, doc: Document, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render the tree and write it to a file path or stream.

        Parameters
        ----------
        doc : Document
            Tree to render
        output : str, Path, IO[bytes] or IO[str]
            Output destination. Binary streams receive UTF-8.

        """
        self.write_text_output(self.render_to_string(doc), output)

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Raise InvalidOptionsError if ``options`` is not an ``expected_type``."""
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write text to a path, a text stream or a binary stream.

        Examples
        --------
        >>> from io import StringIO
        >>> buffer = StringIO()
        >>> BaseRenderer.write_text_output("<b>x</b>", buffer)
        >>> buffer.getvalue()
        '<b>x</b>'

        """
        if isinstance(output, (str, Path)):
            Path(output).write_text(text, encoding="utf-8")
            return

        if not hasattr(output, "write"):
            raise TypeError(f"Unsupported output type: {type(output).__name__}")

        # Binary streams either expose .mode with "b" or reject str writes
        mode = getattr(output, "mode", "")
        if isinstance(mode, str) and "b" in mode:
            output.write(text.encode("utf-8"))  # type: ignore[arg-type]
            return
        try:
            output.write(text)  # type: ignore[arg-type]
        except TypeError:
            output.write(text.encode("utf-8"))  # type: ignore[arg-type]


class HtmlRenderer(NodeVisitor, BaseRenderer):
    """Render a parsed BBCode tree to HTML.

    Parameters
    ----------
    options : HtmlRendererOptions or None, default = None
        HTML formatting options
    tag_table : Mapping[str, TagSpec] or None, default = None
        Tag table used for templates, defaults to the built-in table

    Examples
    --------
        >>> from bbcode2html.parser import BBCodeParser
        >>> doc = BBCodeParser().parse("[b]x[/b]")
        >>> HtmlRenderer().render_to_string(doc)
        '<b>x</b>'

    """

    def __init__(
        self,
        options: HtmlRendererOptions | None = None,
        tag_table: Mapping[str, TagSpec] | None = None,
    ):
        """Initialize the HTML renderer with options."""
        BaseRenderer._validate_options_type(options, HtmlRendererOptions, "html renderer")
        options = options or HtmlRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: HtmlRendererOptions = options
        self.tag_table: Mapping[str, TagSpec] = tag_table if tag_table is not None else DEFAULT_TAG_TABLE
        self._output: list[str] = []
        self._parents: list[str] = [ROOT_CONTAINER]

    def render_to_string(self, document: Document) -> str:
        """Render a document tree to an HTML string.

        Parameters
        ----------
        document : Document
            The document node to render

        Returns
        -------
        str
            HTML fragment, or a complete document when ``standalone`` is set

        Raises
        ------
        RenderingError
            If the tree holds a tag that is not in the tag table, or is too
            deep to render (only possible for hand-built trees)

        """
        self._output = []
        self._parents = [ROOT_CONTAINER]

        try:
            document.accept(self)
        except RecursionError as e:
            raise RenderingError(
                "Tree is nested too deeply to render", rendering_stage="traversal", original_error=e
            ) from e

        content = "".join(self._output)
        self._output = []

        if self.options.standalone:
            return self._wrap_in_document(document, content)
        return content

    def _wrap_in_document(self, doc: Document, content: str) -> str:
        """Wrap content in a complete HTML document."""
        title = doc.metadata.get("title", self.options.title)
        language = doc.metadata.get("language", self.options.language)

        parts = [
            "<!DOCTYPE html>",
            f'<html lang="{escape_html(str(language))}">',
            "<head>",
            '<meta charset="UTF-8">',
            '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
            f"<title>{escape_html(str(title))}</title>",
            "</head>",
            "<body>",
            content,
            "</body>",
            "</html>",
        ]
        return "\n".join(parts)

    def _rel_attribute(self) -> str:
        if not self.options.link_rel:
            return ""
        return f' rel="{escape_html(self.options.link_rel)}"'

    def visit_document(self, node: Document) -> None:
        """Render every top-level node."""
        for child in node.children:
            child.accept(self)

    def visit_text(self, node: Text) -> None:
        """Render escaped text, converting newlines in "br" mode."""
        # Whitespace between [list] and its first [*] would be stray text inside <ul>
        if self._parents[-1] == "list" and not node.content.strip():
            return

        escaped = escape_html(node.content)
        if self.options.newline_mode == "br":
            escaped = escaped.replace("\n", self.options.line_break_tag)
        self._output.append(escaped)

    def visit_raw(self, node: Raw) -> None:
        """Render verbatim content; entities only, newlines kept."""
        self._output.append(escape_html(node.content))

    def visit_tag(self, node: Tag) -> None:
        """Render a tag from its template and then its children."""
        spec = self.tag_table.get(node.name)
        if spec is None:
            raise RenderingError(f"No tag specification for [{node.name}]", rendering_stage="tag")

        argument = node.argument
        if spec.argument == "none" and not node.metadata.get("bare", False):
            argument = None
        has_argument = argument is not None

        values = {"argument": escape_html(argument) if has_argument else "", "rel": self._rel_attribute()}
        self._output.append(spec.template.prefix(has_argument).format(**values))
        if spec.void:
            return

        self._parents.append(spec.name)
        try:
            for child in node.children:
                child.accept(self)
        finally:
            self._parents.pop()

        self._output.append(spec.template.suffix(has_argument).format(**values))


__all__ = ["BaseRenderer", "HtmlRenderer", "escape_html"]
