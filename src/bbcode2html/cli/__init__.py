"""Command-line interface for bbcode2html.

Reads BBCode from a file or standard input and writes HTML to standard
output or a file.

Examples
--------
Translate a file::

    $ bbcode2html post.txt

Read from a pipe::

    $ echo "[b]hi[/b]" | bbcode2html

Write a complete HTML page::

    $ bbcode2html post.txt --standalone --title "My post" -o post.html

Inspect how an input was parsed::

    $ bbcode2html post.txt --dump-ast

Configuration
-------------
Option defaults can come from a configuration file (see
``bbcode2html.cli.config``). Command line flags always win over the file.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

from bbcode2html.constants import CONFIG_ENV_VAR
from bbcode2html.exceptions import (
    Bbcode2HtmlError,
    DependencyError,
    EncodingError,
    ResourceLimitError,
    ValidationError,
)

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_FILE_ERROR = 3
EXIT_INPUT_ERROR = 4
EXIT_DEPENDENCY_ERROR = 5


def get_exit_code_for_exception(exception: BaseException) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : BaseException
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR
    if isinstance(exception, (ValidationError, ValueError, argparse.ArgumentTypeError)):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, OSError):
        return EXIT_FILE_ERROR
    if isinstance(exception, (EncodingError, ResourceLimitError)):
        return EXIT_INPUT_ERROR
    return EXIT_ERROR


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the bbcode2html command."""
    from bbcode2html import __version__

    parser = argparse.ArgumentParser(
        prog="bbcode2html",
        description="Translate BBCode markup into safe HTML.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"Configuration files are read from --config, ${CONFIG_ENV_VAR}, or discovered automatically.",
    )
    parser.add_argument("input", nargs="?", default="-", help="Input file (default: read standard input)")
    parser.add_argument("-o", "--out", dest="output", help="Output file (default: standard output)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    parsing = parser.add_argument_group("parsing options")
    parsing.add_argument("--max-depth", type=int, help="Maximum nesting depth of open tags (1-256, default 32)")
    parsing.add_argument("--max-input-size", type=int, help="Maximum input length in characters (default 1000000)")
    parsing.add_argument(
        "--oversize-mode", choices=["truncate", "reject"], help="How to handle oversized input (default truncate)"
    )
    parsing.add_argument(
        "--stray-closing-tag-mode",
        choices=["drop", "literal"],
        help="How to handle closing tags that match no open tag (default drop)",
    )
    parsing.add_argument(
        "--no-normalize-newlines",
        dest="normalize_newlines",
        action="store_const",
        const=False,
        help="Keep CRLF and CR line endings as they are",
    )

    rendering = parser.add_argument_group("rendering options")
    rendering.add_argument("--newline-mode", choices=["br", "preserve"], help="How newlines are emitted (default br)")
    rendering.add_argument("--line-break-tag", help='Markup for a newline in br mode (default "<br>")')
    rendering.add_argument("--link-rel", help='rel attribute for links (default "nofollow"; "" to omit)')
    rendering.add_argument(
        "--standalone", action="store_const", const=True, help="Wrap the output in a complete HTML document"
    )
    rendering.add_argument("--title", help="Document title for --standalone")
    rendering.add_argument("--language", help="Document language for --standalone")

    output = parser.add_argument_group("output options")
    output.add_argument("--dump-ast", action="store_true", help="Print the parse tree as JSON instead of HTML")
    output.add_argument("--rich", action="store_true", help="Syntax-highlight output on a terminal (needs rich)")

    config = parser.add_argument_group("configuration and logging")
    config.add_argument("--config", help="Path to a configuration file (.toml, .yaml, .json)")
    config.add_argument("--no-config", action="store_true", help="Ignore configuration files")
    config.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default WARNING)",
    )
    config.add_argument("--log-file", help="Also write log messages to this file")
    config.add_argument("-v", "--verbose", action="store_true", help="Shortcut for --log-level DEBUG")
    config.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    return parser


def _load_config(parsed_args: argparse.Namespace) -> Dict[str, Any]:
    from bbcode2html.cli.config import load_config_with_priority

    if parsed_args.no_config:
        return {}
    return load_config_with_priority(
        explicit_path=parsed_args.config,
        env_var_path=os.environ.get(CONFIG_ENV_VAR),
    )


def build_options(parsed_args: argparse.Namespace, config: Dict[str, Any]) -> tuple[Any, Any]:
    """Build parser and renderer options from config values and CLI flags.

    CLI flags left unset do not override configuration values.

    Raises
    ------
    ValueError
        If a value is out of range for its option
    TypeError
        If a configuration value has the wrong type

    """
    from bbcode2html.options import BBCodeParserOptions, HtmlRendererOptions

    values = dict(config)
    for name in BBCodeParserOptions.field_names() | HtmlRendererOptions.field_names():
        flag_value = getattr(parsed_args, name, None)
        if flag_value is not None:
            values[name] = flag_value

    if values.get("link_rel") == "":
        values["link_rel"] = None

    known = BBCodeParserOptions.field_names() | HtmlRendererOptions.field_names()
    unknown = sorted(set(values) - known)
    if unknown:
        logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))

    return BBCodeParserOptions.from_mapping(values), HtmlRendererOptions.from_mapping(values)


def _read_input(source: str) -> Union[str, bytes]:
    if source == "-":
        # Read bytes where possible so decoding errors are reported, not replaced
        buffer = getattr(sys.stdin, "buffer", None)
        return buffer.read() if buffer is not None else sys.stdin.read()
    return Path(source).read_bytes()


def _write_output(text: str, parsed_args: argparse.Namespace, language: str) -> None:
    from bbcode2html.cli.output import print_highlighted, should_use_rich_output

    if parsed_args.output:
        Path(parsed_args.output).write_text(text, encoding="utf-8")
        logger.info("Wrote %d characters to %s", len(text), parsed_args.output)
        return

    if should_use_rich_output(parsed_args):
        print_highlighted(text, language)
        return

    sys.stdout.write(text)
    if not text.endswith("\n"):
        sys.stdout.write("\n")
    sys.stdout.flush()


def main(args: Optional[list[str]] = None) -> int:
    """Run the bbcode2html command and return its exit code."""
    from bbcode2html.logging_utils import configure_logging, resolve_log_level

    parser = create_parser()
    parsed_args = parser.parse_args(args)

    log_level = resolve_log_level(parsed_args.log_level, verbose=parsed_args.verbose, trace=parsed_args.trace)
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    try:
        config = _load_config(parsed_args)
        parser_options, renderer_options = build_options(parsed_args, config)
    except (argparse.ArgumentTypeError, ValueError, TypeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    from bbcode2html.ast import ast_to_json
    from bbcode2html.parser import BBCodeParser
    from bbcode2html.renderer import HtmlRenderer

    try:
        data = _read_input(parsed_args.input)
        doc = BBCodeParser(parser_options).parse(data)
        if parsed_args.dump_ast:
            _write_output(ast_to_json(doc, indent=2), parsed_args, "json")
        else:
            _write_output(HtmlRenderer(renderer_options).render_to_string(doc), parsed_args, "html")
    except (Bbcode2HtmlError, OSError) as e:
        logger.debug("Translation failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    return EXIT_SUCCESS


__all__ = ["main", "create_parser", "build_options", "get_exit_code_for_exception"]


if __name__ == "__main__":
    sys.exit(main())
