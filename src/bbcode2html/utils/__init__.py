#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Utility helpers shared by the parser, tag table and public API."""

from bbcode2html.utils.inputs import decode_input, enforce_input_size, normalize_line_endings
from bbcode2html.utils.security import is_url_safe, is_url_scheme_dangerous, sanitize_image_url, sanitize_url

__all__ = [
    "decode_input",
    "enforce_input_size",
    "normalize_line_endings",
    "is_url_safe",
    "is_url_scheme_dangerous",
    "sanitize_image_url",
    "sanitize_url",
]
