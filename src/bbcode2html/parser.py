#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2html/parser.py
"""BBCode to tree parser.

The parser makes one left-to-right pass over the input with an explicit stack
of open tags. Malformed markup is never an error: anything that cannot be
read as a valid tag stays in the tree as literal text.

Recovery rules
--------------
- A ``[`` that does not start a valid tag head is literal text, and scanning
  resumes right after it.
- A closing tag closes the nearest open tag of the same name. Tags opened
  after it are closed first, innermost first.
- A closing tag that matches no open tag is dropped (or kept as text with
  ``stray_closing_tag_mode="literal"``).
- An opening tag that may not appear inside the current tag, or that would
  exceed ``max_depth``, is literal text.
- Tags still open at the end of input are closed there.

Each ``[`` costs bounded work, so parsing is linear in the input length:

- A tag head never reads past the next ``[``, and names and arguments have
  length limits.
- A bare ``[url]``, ``[email]`` or ``[img]`` whose closing tag is further
  away than the argument length limit is literal without reading its content.
- Stack searches are bounded by ``max_depth``.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Mapping, Optional, Union

from bbcode2html.ast import Document, Node, Raw, Tag, Text
from bbcode2html.constants import MAX_TAG_ARGUMENT_LENGTH, ROOT_CONTAINER
from bbcode2html.exceptions import InvalidOptionsError
from bbcode2html.options.bbcode import BBCodeParserOptions
from bbcode2html.tags import DEFAULT_TAG_TABLE, TagSpec, lookup_tag, strip_argument_quotes
from bbcode2html.utils.inputs import decode_input, enforce_input_size, normalize_line_endings

logger = logging.getLogger(__name__)

_ARG = MAX_TAG_ARGUMENT_LENGTH

# Anchored at a "[" with .match(); quoted arguments may contain "]". No argument
# may contain "[", so a failed head stops at the next one.
TAG_HEAD_PATTERN = re.compile(
    r"\[(?P<slash>/?)(?P<name>\*|[A-Za-z][A-Za-z0-9]{0,15})"
    rf"(?:=(?P<argument>\"[^\"\[\n]{{0,{_ARG}}}\"|'[^'\[\n]{{0,{_ARG}}}'|[^\[\]\n]{{0,{_ARG}}}))?\]"
)


@lru_cache(maxsize=None)
def _closing_tag_pattern(name: str) -> re.Pattern[str]:
    return re.compile(rf"\[/{re.escape(name)}\]", re.IGNORECASE)


class _ParseState:
    """Mutable state for a single parse call."""

    def __init__(self, text: str, options: BBCodeParserOptions, tag_table: Mapping[str, TagSpec]):
        self.text = text
        self.options = options
        self.tag_table = tag_table
        self.document = Document()
        self.stack: list[Tag] = []
        self.pending_text: list[str] = []
        self.raw_close_cache: dict[str, tuple[int, Optional[re.Match[str]]]] = {}
        self.recoveries = {
            "literal_heads": 0,
            "auto_closed": 0,
            "stray_closing": 0,
            "illegal_nesting": 0,
            "depth_guard": 0,
        }

    # -- containers --------------------------------------------------------

    @property
    def container(self) -> Union[Document, Tag]:
        return self.stack[-1] if self.stack else self.document

    @property
    def parent_name(self) -> str:
        return self.stack[-1].name if self.stack else ROOT_CONTAINER

    def append_text(self, content: str) -> None:
        if content:
            self.pending_text.append(content)

    def flush_text(self) -> None:
        """Attach buffered text to the current container, merging adjacent runs."""
        if not self.pending_text:
            return
        content = "".join(self.pending_text)
        self.pending_text = []
        children = self.container.children
        if children and isinstance(children[-1], Text):
            children[-1].content += content
        else:
            children.append(Text(content=content))

    def append_node(self, node: Node) -> None:
        self.flush_text()
        self.container.children.append(node)

    def close_to(self, index: int) -> None:
        """Close the tag at ``index`` and every tag above it."""
        self.flush_text()
        self.recoveries["auto_closed"] += len(self.stack) - index - 1
        del self.stack[index:]

    # -- main loop ---------------------------------------------------------

    def run(self) -> Document:
        text = self.text
        pos = 0
        while True:
            bracket = text.find("[", pos)
            if bracket == -1:
                self.append_text(text[pos:])
                break
            self.append_text(text[pos:bracket])
            pos = self.handle_bracket(bracket)

        self.flush_text()
        if self.stack:
            logger.debug("Closing %d tag(s) left open at end of input", len(self.stack))
            self.stack.clear()
        return self.document

    def literal(self, start: int) -> int:
        """Keep the ``[`` at ``start`` as text and resume after it."""
        self.recoveries["literal_heads"] += 1
        self.append_text("[")
        return start + 1

    def handle_bracket(self, start: int) -> int:
        match = TAG_HEAD_PATTERN.match(self.text, start)
        if match is None:
            return self.literal(start)

        spec = lookup_tag(match.group("name"), self.tag_table)
        if spec is None:
            return self.literal(start)

        if match.group("slash"):
            if match.group("argument") is not None:
                return self.literal(start)
            return self.handle_closing(spec, match)
        return self.handle_opening(spec, match)

    # -- closing tags ------------------------------------------------------

    def handle_closing(self, spec: TagSpec, match: re.Match[str]) -> int:
        for index in range(len(self.stack) - 1, -1, -1):
            if self.stack[index].name == spec.name:
                self.close_to(index)
                return match.end()

        self.recoveries["stray_closing"] += 1
        if self.options.stray_closing_tag_mode == "literal":
            self.append_text(match.group(0))
        return match.end()

    # -- opening tags ------------------------------------------------------

    def resolve_argument(self, spec: TagSpec, raw_argument: Optional[str]) -> tuple[bool, Optional[str]]:
        """Return ``(accepted, argument)`` for an opening tag head."""
        if raw_argument is None or not strip_argument_quotes(raw_argument):
            return spec.argument != "required", None

        if spec.argument == "none":
            logger.debug("Ignoring argument on [%s]", spec.name)
            return True, None

        argument = spec.normalize_argument(raw_argument)
        return argument is not None, argument

    def close_open_sibling(self, spec: TagSpec) -> None:
        """Close an open ``spec`` tag sitting directly on the nearest container."""
        for index in range(len(self.stack) - 1, -1, -1):
            name = self.stack[index].name
            if name == spec.container:
                sibling = index + 1
                if sibling < len(self.stack) and self.stack[sibling].name == spec.name:
                    self.close_to(sibling)
                return

    def may_open(self, spec: TagSpec) -> bool:
        if len(self.stack) >= self.options.max_depth:
            self.recoveries["depth_guard"] += 1
            return False
        if not spec.allowed_in(self.parent_name):
            self.recoveries["illegal_nesting"] += 1
            return False
        if spec.forbidden_ancestors and any(tag.name in spec.forbidden_ancestors for tag in self.stack):
            self.recoveries["illegal_nesting"] += 1
            return False
        return True

    def find_raw_close(self, name: str, start: int) -> Optional[re.Match[str]]:
        """Find the first closing tag for ``name`` at or after ``start``.

        Results are remembered per tag name, so repeated failing searches for
        the same tag (e.g. many unclosed ``[url]``) stay linear overall.
        """
        cached = self.raw_close_cache.get(name)
        if cached is not None:
            searched_from, found = cached
            if searched_from <= start and (found is None or start <= found.start()):
                return found
        found = _closing_tag_pattern(name).search(self.text, start)
        self.raw_close_cache[name] = (start, found)
        return found

    def handle_opening(self, spec: TagSpec, match: re.Match[str]) -> int:
        start = match.start()
        accepted, argument = self.resolve_argument(spec, match.group("argument"))
        if not accepted:
            return self.literal(start)

        if spec.closes_open_sibling:
            self.close_open_sibling(spec)
        if not self.may_open(spec):
            return self.literal(start)

        bare = spec.content == "raw-if-bare" and argument is None
        if spec.is_raw_for(bare):
            return self.open_raw(spec, match, argument, bare)

        tag = Tag(name=spec.name, argument=argument)
        self.append_node(tag)
        self.stack.append(tag)
        return match.end()

    def open_raw(self, spec: TagSpec, match: re.Match[str], argument: Optional[str], bare: bool) -> int:
        content_start = match.end()
        close = self.find_raw_close(spec.name, content_start)
        if close is None:
            if bare:
                return self.literal(match.start())
            content, end = self.text[content_start:], len(self.text)
        elif bare and close.start() - content_start > MAX_TAG_ARGUMENT_LENGTH:
            # Too long to be an argument; skip the copy
            return self.literal(match.start())
        else:
            content, end = self.text[content_start : close.start()], close.end()

        metadata = {}
        if bare:
            argument = spec.normalize_argument(content)
            if argument is None:
                return self.literal(match.start())
            metadata["bare"] = True

        self.append_node(Tag(name=spec.name, argument=argument, children=[Raw(content=content)], metadata=metadata))
        return end


class BBCodeParser:
    """Convert BBCode markup to a tree of nodes.

    Parsing never fails on malformed markup. The only errors are for input
    that is not valid text, or that exceeds ``max_input_size`` in reject mode.

    Parameters
    ----------
    options : BBCodeParserOptions or None, default = None
        Parser configuration options
    tag_table : Mapping[str, TagSpec] or None, default = None
        Tag table to parse against, defaults to the built-in table

    Examples
    --------
    Basic parsing:

        >>> parser = BBCodeParser()
        >>> doc = parser.parse("[b]Bold[/b] and [i]italic[/i] text")

    With options:

        >>> parser = BBCodeParser(BBCodeParserOptions(max_depth=8))
        >>> doc = parser.parse(untrusted_text)

    """

    def __init__(
        self,
        options: BBCodeParserOptions | None = None,
        tag_table: Mapping[str, TagSpec] | None = None,
    ):
        """Initialize the BBCode parser with options."""
        if options is not None and not isinstance(options, BBCodeParserOptions):
            raise InvalidOptionsError(
                component_name="bbcode parser",
                expected_type=BBCodeParserOptions,
                received_type=type(options),
            )
        self.options: BBCodeParserOptions = options or BBCodeParserOptions()
        self.tag_table: Mapping[str, TagSpec] = tag_table if tag_table is not None else DEFAULT_TAG_TABLE

    def parse(self, input_data: Union[str, bytes]) -> Document:
        """Parse BBCode input into a Document.

        Parameters
        ----------
        input_data : str or bytes
            BBCode source. Bytes must be UTF-8.

        Returns
        -------
        Document
            Parsed tree. ``metadata`` holds ``input_length`` (characters
            before truncation) and ``truncated``.

        Raises
        ------
        EncodingError
            If the input is not valid UTF-8 text
        InputTooLargeError
            If the input exceeds ``max_input_size`` and ``oversize_mode`` is "reject"

        """
        text = decode_input(input_data)
        input_length = len(text)
        text, truncated = enforce_input_size(text, self.options.max_input_size, self.options.oversize_mode)
        if self.options.normalize_newlines:
            text = normalize_line_endings(text)

        state = _ParseState(text, self.options, self.tag_table)
        doc = state.run()
        doc.metadata.update({"input_length": input_length, "truncated": truncated})

        recovered = {key: count for key, count in state.recoveries.items() if count}
        if recovered:
            logger.debug("Recovered from malformed markup: %s", recovered)
        return doc


__all__ = ["BBCodeParser", "TAG_HEAD_PATTERN"]
