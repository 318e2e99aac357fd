#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2html/utils/inputs.py
"""Uniform input handling for the parser and the public API.

The parser works on decoded text only. These helpers turn ``str`` or
``bytes`` input into checked text and apply the input-size policy.

Functions
---------
- decode_input: Validate and decode str or bytes input
- normalize_line_endings: Convert CRLF and CR to LF
- enforce_input_size: Apply max_input_size with truncate or reject mode
"""

from __future__ import annotations

import logging
import re
from typing import Union

from bbcode2html.constants import OversizeMode
from bbcode2html.exceptions import EncodingError, InputTooLargeError

logger = logging.getLogger(__name__)

InputType = Union[str, bytes, bytearray, memoryview]

_LINE_ENDINGS = re.compile(r"\r\n?")


def decode_input(data: InputType) -> str:
    """Return ``data`` as validated text.

    Parameters
    ----------
    data : str, bytes, bytearray or memoryview
        BBCode source. Binary input must be UTF-8.

    Returns
    -------
    str
        Decoded text

    Raises
    ------
    EncodingError
        If binary input is not valid UTF-8, or text contains lone surrogates
        that cannot be represented in UTF-8 output
    TypeError
        If ``data`` is of an unsupported type

    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        try:
            return bytes(data).decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncodingError(
                f"Input is not valid UTF-8: {e.reason} at byte {e.start}",
                position=e.start,
                original_error=e,
            ) from e

    if not isinstance(data, str):
        raise TypeError(f"BBCode input must be str or bytes, got {type(data).__name__}")

    try:
        data.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingError(
            f"Input contains characters that cannot be encoded as UTF-8 at index {e.start}",
            position=e.start,
            original_error=e,
        ) from e
    return data


def normalize_line_endings(text: str) -> str:
    """Convert Windows (CRLF) and old Mac (CR) line endings to LF."""
    if "\r" not in text:
        return text
    return _LINE_ENDINGS.sub("\n", text)


def enforce_input_size(text: str, max_input_size: int | None, oversize_mode: OversizeMode) -> tuple[str, bool]:
    """Apply the input-size limit.

    Parameters
    ----------
    text : str
        Decoded input
    max_input_size : int or None
        Limit in characters; None disables the check
    oversize_mode : {"truncate", "reject"}
        Policy for input over the limit

    Returns
    -------
    tuple[str, bool]
        The (possibly truncated) text and whether truncation happened

    Raises
    ------
    InputTooLargeError
        If the input is over the limit and ``oversize_mode`` is "reject"

    """
    if max_input_size is None or len(text) <= max_input_size:
        return text, False

    if oversize_mode == "reject":
        raise InputTooLargeError(limit=max_input_size, actual=len(text))

    logger.warning(
        "Input of %d characters exceeds max_input_size=%d; truncating",
        len(text),
        max_input_size,
    )
    return text[:max_input_size], True
