#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for HTML rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from bbcode2html.constants import (
    DEFAULT_DOCUMENT_LANGUAGE,
    DEFAULT_DOCUMENT_TITLE,
    DEFAULT_LINE_BREAK_TAG,
    DEFAULT_LINK_REL,
    DEFAULT_NEWLINE_MODE,
    DEFAULT_STANDALONE,
    NewlineMode,
)
from bbcode2html.options.base import BaseRendererOptions


# src/bbcode2html/options/html.py
@dataclass(frozen=True)
class HtmlRendererOptions(BaseRendererOptions):
    """Configuration options for rendering a parsed tree to HTML.

    Escaping of text, raw content and tag arguments is not configurable: it
    is always on.

    Parameters
    ----------
    newline_mode : {"br", "preserve"}, default "br"
        How newlines in ordinary text are emitted:
        - "br": Replace each newline with ``line_break_tag``
        - "preserve": Keep newlines as they are
        Newlines inside raw content (``[code]``) are always preserved.
    line_break_tag : str, default "<br>"
        Markup emitted for a newline in "br" mode. Use "<br />" for XHTML.
    link_rel : str or None, default "nofollow"
        Value of the ``rel`` attribute on generated links. None omits it.
    standalone : bool, default False
        Wrap the output in a complete HTML document.
    title : str, default "Document"
        Document title used in standalone mode.
    language : str, default "en"
        Value of ``<html lang>`` in standalone mode.

    """

    newline_mode: NewlineMode = field(
        default=DEFAULT_NEWLINE_MODE,
        metadata={
            "help": "How newlines in text are emitted: br or preserve",
            "choices": ["br", "preserve"],
            "importance": "core",
        },
    )
    line_break_tag: str = field(
        default=DEFAULT_LINE_BREAK_TAG,
        metadata={"help": "Markup emitted for a newline in br mode", "importance": "advanced"},
    )
    link_rel: str | None = field(
        default=DEFAULT_LINK_REL,
        metadata={"help": "rel attribute for generated links (empty to omit)", "importance": "security"},
    )
    standalone: bool = field(
        default=DEFAULT_STANDALONE,
        metadata={"help": "Wrap output in a complete HTML document", "importance": "core"},
    )
    title: str = field(
        default=DEFAULT_DOCUMENT_TITLE,
        metadata={"help": "Document title for standalone output", "importance": "core"},
    )
    language: str = field(
        default=DEFAULT_DOCUMENT_LANGUAGE,
        metadata={"help": "Document language for standalone output", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate mode values.

        Raises
        ------
        ValueError
            If ``newline_mode`` is not a known mode.

        """
        super().__post_init__()
        if self.newline_mode not in ("br", "preserve"):
            raise ValueError(f"newline_mode must be 'br' or 'preserve', got {self.newline_mode!r}")
