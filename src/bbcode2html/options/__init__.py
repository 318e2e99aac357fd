#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the BBCode parser and HTML renderer.

Options are frozen dataclasses: build a modified copy with
``create_updated`` instead of mutating an instance.
"""

from __future__ import annotations

from bbcode2html.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from bbcode2html.options.bbcode import BBCodeParserOptions
from bbcode2html.options.html import HtmlRendererOptions

__all__ = [
    "CloneFrozenMixin",
    "BaseParserOptions",
    "BaseRendererOptions",
    "BBCodeParserOptions",
    "HtmlRendererOptions",
]
