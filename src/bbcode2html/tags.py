#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2html/tags.py
"""The BBCode tag table and argument validation.

Each supported tag has one ``TagSpec`` describing how its head is accepted
by the parser and how it is rendered:

- Formatting: [b], [i], [u], [s] (alias [strike]), [sup], [sub]
- Styling: [color=...], [size=...]
- Alignment: [center], [left], [right]
- Links: [url], [url=...], [email], [email=...]
- Images: [img]
- Blocks: [quote], [quote=author], [code], [code=language], [spoiler]
- Lists: [list], [list=1|a|A|i|I], [*]
- Escaping: [noparse]

The table is built once at import and exposed as a read-only mapping, so it
can be shared between threads without locking.

Argument normalizers take the argument text with any surrounding quotes
already removed and return the normalized value, or None to reject it. A
rejected argument makes the whole opening tag literal text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from bbcode2html.constants import (
    BLOCK_CONTAINERS,
    CSS_NAMED_COLORS,
    DEFAULT_QUOTE_ATTRIBUTION_SUFFIX,
    DEFAULT_SPOILER_SUMMARY,
    MAX_FONT_SIZE_PERCENT,
    MAX_TAG_ARGUMENT_LENGTH,
    MIN_FONT_SIZE_PERCENT,
    ORDERED_LIST_TYPES,
    ArgumentPolicy,
    ContentModel,
)
from bbcode2html.utils.security import sanitize_image_url, sanitize_url

ArgumentNormalizer = Callable[[str], Optional[str]]

_HEX_COLOR = re.compile(r"#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})")
_SIZE = re.compile(r"([0-9]{1,4})%?")
_EMAIL = re.compile(r"[^@\s<>\"'\[\]]+@[^@\s<>\"'\[\]]+\.[^@\s<>\"'\[\]]+")
_LANGUAGE = re.compile(r"[A-Za-z0-9][A-Za-z0-9_+#.-]{0,31}")


# =============================================================================
# Argument normalizers
# =============================================================================


def strip_argument_quotes(value: str) -> str:
    """Remove one pair of matching surrounding quotes and outer whitespace.

    Examples
    --------
    >>> strip_argument_quotes('"http://example.com"')
    'http://example.com'
    >>> strip_argument_quotes("'Alice'")
    'Alice'

    """
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1].strip()
    return value


def normalize_color(value: str) -> str | None:
    """Accept ``#rgb``, ``#rrggbb`` or a CSS named colour.

    Hex colours are expanded to lowercase ``#rrggbb``; names are lowercased.

    Examples
    --------
    >>> normalize_color("#F0a")
    '#ff00aa'
    >>> normalize_color("DarkRed")
    'darkred'
    >>> normalize_color("red;background:url(x)") is None
    True

    """
    match = _HEX_COLOR.fullmatch(value)
    if match:
        digits = match.group(1).lower()
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        return f"#{digits}"

    name = value.lower()
    if name in CSS_NAMED_COLORS:
        return name
    return None


def normalize_size(value: str) -> str | None:
    """Accept an integer percentage and clamp it to the allowed range.

    Examples
    --------
    >>> normalize_size("150")
    '150'
    >>> normalize_size("999%")
    '200'
    >>> normalize_size("large") is None
    True

    """
    match = _SIZE.fullmatch(value)
    if not match:
        return None
    percent = min(max(int(match.group(1)), MIN_FONT_SIZE_PERCENT), MAX_FONT_SIZE_PERCENT)
    return str(percent)


def normalize_url(value: str) -> str | None:
    """Accept a link target with a safe scheme."""
    return sanitize_url(value)


def normalize_image_url(value: str) -> str | None:
    """Accept an http, https or relative image source."""
    return sanitize_image_url(value)


def normalize_email(value: str) -> str | None:
    """Accept a plain ``user@host.tld`` address.

    Examples
    --------
    >>> normalize_email(" someone@example.com ")
    'someone@example.com'
    >>> normalize_email("not an address") is None
    True

    """
    value = value.strip()
    if _EMAIL.fullmatch(value):
        return value
    return None


def normalize_list_type(value: str) -> str | None:
    """Accept one of the ordered list markers ``1 a A i I``."""
    if value in ORDERED_LIST_TYPES:
        return value
    return None


def normalize_language(value: str) -> str | None:
    """Accept a short code language identifier such as ``python`` or ``c++``."""
    if _LANGUAGE.fullmatch(value):
        return value.lower()
    return None


def normalize_text(value: str) -> str | None:
    """Accept any single-line text, used for attributions and summaries."""
    if "\n" in value:
        return None
    return value


# =============================================================================
# Tag specifications
# =============================================================================


@dataclass(frozen=True)
class TagTemplate:
    """HTML emitted around a tag's rendered content.

    ``{argument}`` is replaced by the HTML-escaped argument and ``{rel}`` by
    the link ``rel`` attribute (with its leading space) when present.

    Parameters
    ----------
    open : str
        Prefix used when the tag has no argument
    close : str
        Suffix used when the tag has no argument
    open_with_argument : str or None
        Prefix used when the tag has an argument; defaults to ``open``
    close_with_argument : str or None
        Suffix used when the tag has an argument; defaults to ``close``

    """

    open: str
    close: str = ""
    open_with_argument: Optional[str] = None
    close_with_argument: Optional[str] = None

    def prefix(self, has_argument: bool) -> str:
        """Return the opening markup template."""
        if has_argument and self.open_with_argument is not None:
            return self.open_with_argument
        return self.open

    def suffix(self, has_argument: bool) -> str:
        """Return the closing markup template."""
        if has_argument and self.close_with_argument is not None:
            return self.close_with_argument
        return self.close


@dataclass(frozen=True)
class TagSpec:
    """Static description of one supported tag.

    Parameters
    ----------
    name : str
        Canonical lowercase tag name
    template : TagTemplate
        Rendering template
    argument : {"none", "optional", "required"}, default "none"
        Whether the opening tag takes ``=argument``
    content : {"parsed", "raw", "raw-if-bare"}, default "parsed"
        How content is treated. "raw-if-bare" means content is parsed when
        the tag has an argument; without one the content is copied verbatim
        and also becomes the argument (``[url]http://x[/url]``).
    parents : frozenset of str or None, default None
        Tags this tag may open directly inside ("" is the document root).
        None permits any parent.
    forbidden_ancestors : frozenset of str, default empty
        Tags that must not be open anywhere above this one
    normalizer : callable or None, default None
        Validates and normalizes the argument
    closes_open_sibling : bool, default False
        Opening this tag first closes an open tag of the same name inside the
        same parent container (``[*]`` list items)
    container : str or None, default None
        Name of the tag that delimits sibling search for ``closes_open_sibling``
    void : bool, default False
        Render only the prefix; content is carried in the argument
    aliases : tuple of str, default ()
        Other names accepted for this tag

    """

    name: str
    template: TagTemplate
    argument: ArgumentPolicy = "none"
    content: ContentModel = "parsed"
    parents: Optional[frozenset[str]] = None
    forbidden_ancestors: frozenset[str] = field(default_factory=frozenset)
    normalizer: Optional[ArgumentNormalizer] = None
    closes_open_sibling: bool = False
    container: Optional[str] = None
    void: bool = False
    aliases: tuple[str, ...] = ()

    def allowed_in(self, parent: str) -> bool:
        """Return True if this tag may open directly inside ``parent``."""
        return self.parents is None or parent in self.parents

    def is_raw_for(self, bare: bool) -> bool:
        """Return True if content is copied verbatim for this use of the tag."""
        return self.content == "raw" or (self.content == "raw-if-bare" and bare)

    def normalize_argument(self, value: str) -> str | None:
        """Strip quotes, apply length limit and normalizer.

        Returns None when the argument is rejected.
        """
        if len(value) > MAX_TAG_ARGUMENT_LENGTH:
            return None
        value = strip_argument_quotes(value)
        if not value:
            return None
        if self.normalizer is None:
            return value
        return self.normalizer(value)


_LINKS = frozenset({"url", "email"})


def _build_tag_table() -> Mapping[str, TagSpec]:
    specs = [
        TagSpec("b", TagTemplate("<b>", "</b>")),
        TagSpec("i", TagTemplate("<i>", "</i>")),
        TagSpec("u", TagTemplate("<u>", "</u>")),
        TagSpec("s", TagTemplate("<s>", "</s>"), aliases=("strike",)),
        TagSpec("sup", TagTemplate("<sup>", "</sup>")),
        TagSpec("sub", TagTemplate("<sub>", "</sub>")),
        TagSpec(
            "color",
            TagTemplate("<span>", "</span>", open_with_argument='<span style="color:{argument}">'),
            argument="required",
            normalizer=normalize_color,
        ),
        TagSpec(
            "size",
            TagTemplate("<span>", "</span>", open_with_argument='<span style="font-size:{argument}%">'),
            argument="required",
            normalizer=normalize_size,
        ),
        TagSpec(
            "center",
            TagTemplate('<div style="text-align:center">', "</div>"),
            parents=BLOCK_CONTAINERS,
        ),
        TagSpec(
            "left",
            TagTemplate('<div style="text-align:left">', "</div>"),
            parents=BLOCK_CONTAINERS,
        ),
        TagSpec(
            "right",
            TagTemplate('<div style="text-align:right">', "</div>"),
            parents=BLOCK_CONTAINERS,
        ),
        TagSpec(
            "url",
            TagTemplate("<a{rel}>", "</a>", open_with_argument='<a href="{argument}"{rel}>'),
            argument="optional",
            content="raw-if-bare",
            forbidden_ancestors=_LINKS,
            normalizer=normalize_url,
        ),
        TagSpec(
            "email",
            TagTemplate("<a>", "</a>", open_with_argument='<a href="mailto:{argument}">'),
            argument="optional",
            content="raw-if-bare",
            forbidden_ancestors=_LINKS,
            normalizer=normalize_email,
        ),
        TagSpec(
            "img",
            TagTemplate('<img alt="">', open_with_argument='<img src="{argument}" alt="">'),
            argument="none",
            content="raw-if-bare",
            normalizer=normalize_image_url,
            void=True,
        ),
        TagSpec(
            "quote",
            TagTemplate(
                "<blockquote>",
                "</blockquote>",
                open_with_argument=f"<blockquote><cite>{{argument}}{DEFAULT_QUOTE_ATTRIBUTION_SUFFIX}</cite>",
            ),
            argument="optional",
            parents=BLOCK_CONTAINERS,
            normalizer=normalize_text,
        ),
        TagSpec(
            "code",
            TagTemplate(
                "<pre><code>",
                "</code></pre>",
                open_with_argument='<pre><code class="language-{argument}">',
            ),
            argument="optional",
            content="raw",
            parents=BLOCK_CONTAINERS,
            normalizer=normalize_language,
        ),
        TagSpec("noparse", TagTemplate(""), content="raw"),
        TagSpec(
            "list",
            TagTemplate("<ul>", "</ul>", open_with_argument='<ol type="{argument}">', close_with_argument="</ol>"),
            argument="optional",
            parents=BLOCK_CONTAINERS,
            normalizer=normalize_list_type,
        ),
        TagSpec(
            "*",
            TagTemplate("<li>", "</li>"),
            parents=frozenset({"list"}),
            closes_open_sibling=True,
            container="list",
        ),
        TagSpec(
            "spoiler",
            TagTemplate(
                f"<details><summary>{DEFAULT_SPOILER_SUMMARY}</summary>",
                "</details>",
                open_with_argument="<details><summary>{argument}</summary>",
            ),
            argument="optional",
            parents=BLOCK_CONTAINERS,
            normalizer=normalize_text,
        ),
    ]

    table: dict[str, TagSpec] = {}
    for spec in specs:
        table[spec.name] = spec
    return MappingProxyType(table)


DEFAULT_TAG_TABLE: Mapping[str, TagSpec] = _build_tag_table()

# Alternate spellings accepted in tag heads, mapped to canonical names
TAG_ALIASES: Mapping[str, str] = MappingProxyType(
    {alias: spec.name for spec in DEFAULT_TAG_TABLE.values() for alias in spec.aliases}
)


def lookup_tag(name: str, tag_table: Mapping[str, TagSpec] = DEFAULT_TAG_TABLE) -> TagSpec | None:
    """Return the spec for a tag name as written, or None if unknown.

    Matching is ASCII case-insensitive and resolves aliases.

    Examples
    --------
    >>> lookup_tag("STRIKE").name
    's'
    >>> lookup_tag("blink") is None
    True

    """
    canonical = name.lower()
    canonical = TAG_ALIASES.get(canonical, canonical)
    return tag_table.get(canonical)


__all__ = [
    "ArgumentNormalizer",
    "TagTemplate",
    "TagSpec",
    "DEFAULT_TAG_TABLE",
    "TAG_ALIASES",
    "lookup_tag",
    "strip_argument_quotes",
    "normalize_color",
    "normalize_size",
    "normalize_url",
    "normalize_image_url",
    "normalize_email",
    "normalize_list_type",
    "normalize_language",
    "normalize_text",
]
