"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/bbcode2html/cli/output.py
import argparse
import sys
from typing import TextIO

from bbcode2html.exceptions import DependencyError


def check_rich_available() -> bool:
    """Check if Rich library is available.

    Returns
    -------
    bool
        True if Rich is available, False otherwise

    """
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def should_use_rich_output(args: argparse.Namespace, stream: TextIO | None = None) -> bool:
    """Determine if Rich output should be used based on TTY and args.

    Rich output is used when ``--rich`` is set and the target stream is a
    terminal. Redirected output stays plain HTML.

    Raises
    ------
    DependencyError
        If ``--rich`` is set but the rich package is not installed

    """
    if not getattr(args, "rich", False):
        return False

    if not check_rich_available():
        raise DependencyError(
            feature_name="rich-output",
            missing_packages=[("rich", "")],
            message="Rich output requires the optional 'rich' dependency. Install with: pip install bbcode2html[rich]",
        )

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    return bool(callable(isatty) and isatty())


def print_highlighted(text: str, language: str, stream: TextIO | None = None) -> None:
    """Print ``text`` with syntax highlighting through rich.

    Parameters
    ----------
    text : str
        HTML or JSON to show
    language : str
        Lexer name, "html" or "json"
    stream : TextIO, optional
        Destination, defaults to stdout

    """
    from rich.console import Console
    from rich.syntax import Syntax

    console = Console(file=stream or sys.stdout)
    console.print(Syntax(text, language, word_wrap=True))
