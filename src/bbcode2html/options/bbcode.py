#  Copyright (c) 2025 Tom Villani, Ph.D.

# bbcode2html/options/bbcode.py
"""Configuration options for BBCode parsing.

The parser accepts untrusted text, so most of these options are resource
bounds. None of them can make the parser fail on malformed markup; they only
decide how it degrades.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bbcode2html.constants import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_INPUT_SIZE,
    DEFAULT_NORMALIZE_NEWLINES,
    DEFAULT_OVERSIZE_MODE,
    DEFAULT_STRAY_CLOSING_TAG_MODE,
    MAX_ALLOWED_DEPTH,
    OversizeMode,
    StrayClosingTagMode,
)
from bbcode2html.options.base import BaseParserOptions


@dataclass(frozen=True)
class BBCodeParserOptions(BaseParserOptions):
    """Configuration options for BBCode-to-tree parsing.

    Parameters
    ----------
    max_depth : int, default 32
        Maximum number of simultaneously open tags. An opening tag that would
        exceed it is kept as literal text. Must be between 1 and 256.
    max_input_size : int or None, default 1_000_000
        Maximum input length in characters. None disables the check.
    oversize_mode : {"truncate", "reject"}, default "truncate"
        What to do with input longer than ``max_input_size``:
        - "truncate": Parse only the first ``max_input_size`` characters
        - "reject": Raise ``InputTooLargeError``
    stray_closing_tag_mode : {"drop", "literal"}, default "drop"
        How to handle a closing tag of a known name that matches no open tag:
        - "drop": Consume it silently
        - "literal": Keep its text in the output
    normalize_newlines : bool, default True
        Convert ``\\r\\n`` and lone ``\\r`` to ``\\n`` before parsing.

    Examples
    --------
    Tighter limits for a comment box:
        >>> options = BBCodeParserOptions(max_depth=8, max_input_size=10_000)
        >>> parser = BBCodeParser(options)

    """

    max_depth: int = field(
        default=DEFAULT_MAX_DEPTH,
        metadata={"help": "Maximum nesting depth of open tags", "type": int, "importance": "security"},
    )
    max_input_size: int | None = field(
        default=DEFAULT_MAX_INPUT_SIZE,
        metadata={"help": "Maximum input length in characters", "type": int, "importance": "security"},
    )
    oversize_mode: OversizeMode = field(
        default=DEFAULT_OVERSIZE_MODE,
        metadata={
            "help": "How to handle oversized input: truncate or reject",
            "choices": ["truncate", "reject"],
            "importance": "security",
        },
    )
    stray_closing_tag_mode: StrayClosingTagMode = field(
        default=DEFAULT_STRAY_CLOSING_TAG_MODE,
        metadata={
            "help": "How to handle closing tags that match no open tag: drop or literal",
            "choices": ["drop", "literal"],
            "importance": "core",
        },
    )
    normalize_newlines: bool = field(
        default=DEFAULT_NORMALIZE_NEWLINES,
        metadata={"help": "Normalize CRLF and CR line endings to LF", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges and mode values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        super().__post_init__()
        if not 1 <= self.max_depth <= MAX_ALLOWED_DEPTH:
            raise ValueError(f"max_depth must be between 1 and {MAX_ALLOWED_DEPTH}, got {self.max_depth}")
        if self.max_input_size is not None and self.max_input_size <= 0:
            raise ValueError(f"max_input_size must be positive, got {self.max_input_size}")
        if self.oversize_mode not in ("truncate", "reject"):
            raise ValueError(f"oversize_mode must be 'truncate' or 'reject', got {self.oversize_mode!r}")
        if self.stray_closing_tag_mode not in ("drop", "literal"):
            raise ValueError(
                f"stray_closing_tag_mode must be 'drop' or 'literal', got {self.stray_closing_tag_mode!r}"
            )
