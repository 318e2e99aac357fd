#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2html/api.py
"""Public entry points: translate, parse and render.

``translate`` is the one-call interface: BBCode in, HTML out. ``parse`` and
``render`` expose the two stages separately for callers that want to inspect
or transform the tree in between.

Keyword arguments are routed to the parser or renderer options by field
name, so ``translate(text, max_depth=8, newline_mode="preserve")`` works
without building option objects by hand.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, TypeVar, Union

from bbcode2html.ast import Document
from bbcode2html.exceptions import InvalidOptionsError
from bbcode2html.options.base import CloneFrozenMixin
from bbcode2html.options.bbcode import BBCodeParserOptions
from bbcode2html.options.html import HtmlRendererOptions
from bbcode2html.parser import BBCodeParser
from bbcode2html.renderer import HtmlRenderer

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", bound=CloneFrozenMixin)


def _split_kwargs_for_parser_and_renderer(kwargs: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split kwargs between parser and renderer based on their field names.

    Returns
    -------
    tuple[dict, dict]
        (parser_kwargs, renderer_kwargs)

    """
    parser_fields = BBCodeParserOptions.field_names()
    renderer_fields = HtmlRendererOptions.field_names()

    parser_kwargs: dict[str, Any] = {}
    renderer_kwargs: dict[str, Any] = {}
    unmatched = []

    for key, value in kwargs.items():
        if key in parser_fields:
            parser_kwargs[key] = value
        elif key in renderer_fields:
            renderer_kwargs[key] = value
        else:
            unmatched.append(key)

    if unmatched:
        logger.debug("Kwargs don't match parser or renderer fields: %s", unmatched)

    return parser_kwargs, renderer_kwargs


def _merge_options(
    options: Optional[OptionsT],
    options_class: type[OptionsT],
    component_name: str,
    overrides: dict[str, Any],
) -> OptionsT:
    """Apply keyword overrides on top of an options object (or the defaults)."""
    if options is not None and not isinstance(options, options_class):
        raise InvalidOptionsError(
            component_name=component_name,
            expected_type=options_class,
            received_type=type(options),
        )
    if options is None:
        return options_class(**overrides)
    if overrides:
        return options.create_updated(**overrides)
    return options


def parse(
    bbcode: Union[str, bytes],
    options: Optional[BBCodeParserOptions] = None,
    **kwargs: Any,
) -> Document:
    """Parse BBCode into a tree.

    Parameters
    ----------
    bbcode : str or bytes
        BBCode source; bytes must be UTF-8
    options : BBCodeParserOptions, optional
        Parser options
    **kwargs
        Individual parser option overrides (e.g. ``max_depth=8``)

    Returns
    -------
    Document
        Parsed tree

    Raises
    ------
    EncodingError
        If the input is not valid UTF-8 text
    InputTooLargeError
        If the input is over ``max_input_size`` in reject mode
    InvalidOptionsError
        If ``options`` is not a BBCodeParserOptions

    Examples
    --------
        >>> doc = parse("[b]x[/b]")
        >>> doc.children[0].name
        'b'

    """
    parser_kwargs, _ = _split_kwargs_for_parser_and_renderer(kwargs)
    parser_options = _merge_options(options, BBCodeParserOptions, "bbcode parser", parser_kwargs)
    return BBCodeParser(parser_options).parse(bbcode)


def render(
    doc: Document,
    options: Optional[HtmlRendererOptions] = None,
    **kwargs: Any,
) -> str:
    """Render a parsed tree to HTML.

    Parameters
    ----------
    doc : Document
        Tree produced by ``parse`` (or built by hand)
    options : HtmlRendererOptions, optional
        Renderer options
    **kwargs
        Individual renderer option overrides (e.g. ``standalone=True``)

    Returns
    -------
    str
        HTML text

    """
    _, renderer_kwargs = _split_kwargs_for_parser_and_renderer(kwargs)
    renderer_options = _merge_options(options, HtmlRendererOptions, "html renderer", renderer_kwargs)
    return HtmlRenderer(renderer_options).render_to_string(doc)


def translate(
    bbcode: Union[str, bytes],
    parser_options: Optional[BBCodeParserOptions] = None,
    renderer_options: Optional[HtmlRendererOptions] = None,
    **kwargs: Any,
) -> str:
    """Translate BBCode to HTML.

    Malformed markup never raises: unknown or broken tags come out as
    escaped literal text. Only undecodable input, or oversized input in
    reject mode, raises.

    Parameters
    ----------
    bbcode : str or bytes
        BBCode source; bytes must be UTF-8
    parser_options : BBCodeParserOptions, optional
        Parser options
    renderer_options : HtmlRendererOptions, optional
        Renderer options
    **kwargs
        Option overrides, routed to the parser or renderer by field name

    Returns
    -------
    str
        HTML text

    Examples
    --------
        >>> translate("[b]x[/b]")
        '<b>x</b>'
        >>> translate("[b]x")
        '<b>x</b>'
        >>> translate("x[/b]")
        'x'
        >>> translate("[code][b]x[/b][/code]")
        '<pre><code>[b]x[/b]</code></pre>'

    """
    parser_kwargs, renderer_kwargs = _split_kwargs_for_parser_and_renderer(kwargs)
    parser_options = _merge_options(parser_options, BBCodeParserOptions, "bbcode parser", parser_kwargs)
    renderer_options = _merge_options(renderer_options, HtmlRendererOptions, "html renderer", renderer_kwargs)

    doc = BBCodeParser(parser_options).parse(bbcode)
    return HtmlRenderer(renderer_options).render_to_string(doc)


__all__ = ["translate", "parse", "render"]
