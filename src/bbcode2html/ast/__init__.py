#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2html/ast/__init__.py
"""Parse tree representation for BBCode documents.

The parser builds a tree of ``Document``, ``Tag``, ``Text`` and ``Raw``
nodes; renderers walk it with a ``NodeVisitor``. Keeping the tree separate
from rendering makes each stage testable on its own.

The module consists of:

- nodes: the node classes
- visitors: visitor base class and structural validation
- serialization: JSON conversion for inspection and tests

Examples
--------
    >>> from bbcode2html.ast import Document, Tag, Text
    >>> from bbcode2html.renderer import HtmlRenderer
    >>> doc = Document(children=[Tag(name="b", children=[Text(content="x")])])
    >>> HtmlRenderer().render_to_string(doc)
    '<b>x</b>'

"""

from bbcode2html.ast.nodes import Document, Node, Raw, Tag, Text, get_node_children, iter_nodes, tree_depth
from bbcode2html.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast
from bbcode2html.ast.visitors import NodeVisitor, ValidationVisitor

__all__ = [
    "Node",
    "Document",
    "Text",
    "Tag",
    "Raw",
    "get_node_children",
    "iter_nodes",
    "tree_depth",
    "NodeVisitor",
    "ValidationVisitor",
    "ast_to_dict",
    "ast_to_json",
    "dict_to_ast",
    "json_to_ast",
]
