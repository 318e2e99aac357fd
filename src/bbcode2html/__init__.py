"""bbcode2html - Translate forum BBCode into safe HTML.

bbcode2html converts bracket-tag markup such as ``[b]bold[/b]`` and
``[url=https://example.com]link[/url]`` into HTML. Input is treated as
untrusted: malformed or hostile markup degrades to escaped literal text,
link targets with script-bearing schemes are refused, and nesting depth and
input size are bounded.

Key Features
------------
- A single ``translate`` call for BBCode to HTML
- A separate parse tree (``parse``/``render``) for inspection or transforms
- Deterministic recovery from unclosed, stray and overlapping tags
- Verbatim ``[code]`` and ``[noparse]`` regions that are never tag-parsed
- A ``bbcode2html`` command line tool with configuration file support

Examples
--------
    >>> from bbcode2html import translate
    >>> translate("[b]Hello[/b] [i]world[/i]")
    '<b>Hello</b> <i>world</i>'

Parse and render separately:

    >>> from bbcode2html import parse, render
    >>> doc = parse("[quote=Alice]Hi[/quote]")
    >>> render(doc)
    '<blockquote><cite>Alice wrote:</cite>Hi</blockquote>'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "bbcode2html requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from bbcode2html.api import parse, render, translate  # noqa: E402
from bbcode2html.ast import Document, Node, Raw, Tag, Text  # noqa: E402
from bbcode2html.exceptions import (  # noqa: E402
    Bbcode2HtmlError,
    DependencyError,
    EncodingError,
    InputTooLargeError,
    InvalidOptionsError,
    RenderingError,
    ResourceLimitError,
    ValidationError,
)
from bbcode2html.options import BBCodeParserOptions, HtmlRendererOptions  # noqa: E402
from bbcode2html.parser import BBCodeParser  # noqa: E402
from bbcode2html.renderer import HtmlRenderer  # noqa: E402
from bbcode2html.tags import DEFAULT_TAG_TABLE, TagSpec, TagTemplate  # noqa: E402

__all__ = [
    "__version__",
    # API
    "translate",
    "parse",
    "render",
    # Components
    "BBCodeParser",
    "HtmlRenderer",
    "BBCodeParserOptions",
    "HtmlRendererOptions",
    "TagSpec",
    "TagTemplate",
    "DEFAULT_TAG_TABLE",
    # Tree
    "Document",
    "Node",
    "Tag",
    "Text",
    "Raw",
    # Exceptions
    "Bbcode2HtmlError",
    "ValidationError",
    "InvalidOptionsError",
    "EncodingError",
    "ResourceLimitError",
    "InputTooLargeError",
    "RenderingError",
    "DependencyError",
]
