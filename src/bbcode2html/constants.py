#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for bbcode2html.

This module centralizes the hardcoded values, limits, and default
configuration constants used across bbcode2html.

Constants are organized by category:
1. Type Definitions - All Literal types and type aliases
2. Resource Limits - Depth and size guards against adversarial input
3. Rendering Defaults - HTML output settings
4. Security Constants - URL scheme filtering
5. Tag Argument Constants - Colour names, size range, list styles
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

# How an input longer than max_input_size is handled
OversizeMode = Literal["truncate", "reject"]

# What happens to a closing tag that matches no open tag
StrayClosingTagMode = Literal["drop", "literal"]

# Whether newlines in text become <br> elements
NewlineMode = Literal["br", "preserve"]

# Whether a tag takes an "=argument"
ArgumentPolicy = Literal["none", "optional", "required"]

# How the content between a tag pair is treated
ContentModel = Literal["parsed", "raw", "raw-if-bare"]

# =============================================================================
# Resource Limits
# =============================================================================

DEFAULT_MAX_DEPTH = 32
# Hard ceiling for max_depth so rendering stays well inside the interpreter recursion limit
MAX_ALLOWED_DEPTH = 256

DEFAULT_MAX_INPUT_SIZE = 1_000_000
DEFAULT_OVERSIZE_MODE: OversizeMode = "truncate"
DEFAULT_STRAY_CLOSING_TAG_MODE: StrayClosingTagMode = "drop"
DEFAULT_NORMALIZE_NEWLINES = True

# Longest "=argument" accepted in a tag head
MAX_TAG_ARGUMENT_LENGTH = 2048

# =============================================================================
# Rendering Defaults
# =============================================================================

DEFAULT_NEWLINE_MODE: NewlineMode = "br"
DEFAULT_LINE_BREAK_TAG = "<br>"
DEFAULT_STANDALONE = False
DEFAULT_DOCUMENT_TITLE = "Document"
DEFAULT_DOCUMENT_LANGUAGE = "en"
DEFAULT_LINK_REL: str | None = "nofollow"
DEFAULT_QUOTE_ATTRIBUTION_SUFFIX = " wrote:"
DEFAULT_SPOILER_SUMMARY = "Spoiler"

# =============================================================================
# Security Constants
# =============================================================================

DANGEROUS_SCHEMES = {
    "javascript:",
    "vbscript:",
    "data:text/html",
    "data:text/javascript",
    "data:application/javascript",
    "data:application/x-javascript",
}
SAFE_LINK_SCHEMES = frozenset({"http", "https", "mailto", "ftp", "ftps", "tel", "sms", ""})
SAFE_IMAGE_SCHEMES = frozenset({"http", "https", ""})

# =============================================================================
# Tag Argument Constants
# =============================================================================

# [size=N] is a percentage, clamped to this range
MIN_FONT_SIZE_PERCENT = 30
MAX_FONT_SIZE_PERCENT = 200

# [list=X] values and the <ol type> they map to
ORDERED_LIST_TYPES = frozenset({"1", "a", "A", "i", "I"})

# Tags allowed to hold block-level tags, "" stands for the document root
ROOT_CONTAINER = ""
BLOCK_CONTAINERS = frozenset({ROOT_CONTAINER, "quote", "center", "left", "right", "spoiler", "*"})

# CSS Color Module Level 4 named colours accepted by [color=name]
CSS_NAMED_COLORS = frozenset(
    {
        "aliceblue", "antiquewhite", "aqua", "aquamarine", "azure", "beige", "bisque", "black",
        "blanchedalmond", "blue", "blueviolet", "brown", "burlywood", "cadetblue", "chartreuse",
        "chocolate", "coral", "cornflowerblue", "cornsilk", "crimson", "cyan", "darkblue", "darkcyan",
        "darkgoldenrod", "darkgray", "darkgreen", "darkgrey", "darkkhaki", "darkmagenta",
        "darkolivegreen", "darkorange", "darkorchid", "darkred", "darksalmon", "darkseagreen",
        "darkslateblue", "darkslategray", "darkslategrey", "darkturquoise", "darkviolet", "deeppink",
        "deepskyblue", "dimgray", "dimgrey", "dodgerblue", "firebrick", "floralwhite", "forestgreen",
        "fuchsia", "gainsboro", "ghostwhite", "gold", "goldenrod", "gray", "green", "greenyellow",
        "grey", "honeydew", "hotpink", "indianred", "indigo", "ivory", "khaki", "lavender",
        "lavenderblush", "lawngreen", "lemonchiffon", "lightblue", "lightcoral", "lightcyan",
        "lightgoldenrodyellow", "lightgray", "lightgreen", "lightgrey", "lightpink", "lightsalmon",
        "lightseagreen", "lightskyblue", "lightslategray", "lightslategrey", "lightsteelblue",
        "lightyellow", "lime", "limegreen", "linen", "magenta", "maroon", "mediumaquamarine",
        "mediumblue", "mediumorchid", "mediumpurple", "mediumseagreen", "mediumslateblue",
        "mediumspringgreen", "mediumturquoise", "mediumvioletred", "midnightblue", "mintcream",
        "mistyrose", "moccasin", "navajowhite", "navy", "oldlace", "olive", "olivedrab", "orange",
        "orangered", "orchid", "palegoldenrod", "palegreen", "paleturquoise", "palevioletred",
        "papayawhip", "peachpuff", "peru", "pink", "plum", "powderblue", "purple", "rebeccapurple",
        "red", "rosybrown", "royalblue", "saddlebrown", "salmon", "sandybrown", "seagreen", "seashell",
        "sienna", "silver", "skyblue", "slateblue", "slategray", "slategrey", "snow", "springgreen",
        "steelblue", "tan", "teal", "thistle", "tomato", "turquoise", "violet", "wheat", "white",
        "whitesmoke", "yellow", "yellowgreen",
    }
)

# =============================================================================
# CLI
# =============================================================================

CONFIG_ENV_VAR = "BBCODE2HTML_CONFIG"
