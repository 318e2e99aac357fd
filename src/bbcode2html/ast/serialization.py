#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2html/ast/serialization.py
"""JSON serialization and deserialization for parse trees.

Used by ``bbcode2html --dump-ast`` to show how an input was parsed, and handy
in tests for comparing trees.

Examples
--------
    >>> from bbcode2html.ast import Document, Tag, Text
    >>> doc = Document(children=[Tag(name="b", children=[Text(content="x")])])
    >>> ast_to_json(doc)
    '{"schema_version": 1, "node_type": "Document", "children": [...], "metadata": {}}'

"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from bbcode2html.ast.nodes import Document, Node, Raw, Tag, Text

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def _serialize_document(node: Document) -> dict[str, Any]:
    return {
        "node_type": "Document",
        "children": [ast_to_dict(child) for child in node.children],
        "metadata": node.metadata,
    }


def _serialize_tag(node: Tag) -> dict[str, Any]:
    return {
        "node_type": "Tag",
        "name": node.name,
        "argument": node.argument,
        "children": [ast_to_dict(child) for child in node.children],
        "metadata": node.metadata,
    }


def _serialize_leaf(node: Text | Raw) -> dict[str, Any]:
    return {"node_type": type(node).__name__, "content": node.content, "metadata": node.metadata}


_SERIALIZATION_DISPATCH: dict[type, Callable[[Any], dict[str, Any]]] = {
    Document: _serialize_document,
    Tag: _serialize_tag,
    Text: _serialize_leaf,
    Raw: _serialize_leaf,
}


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert a tree node to a dictionary representation.

    Parameters
    ----------
    node : Node
        The node to convert

    Returns
    -------
    dict
        Dictionary representation of the node

    Raises
    ------
    ValueError
        If the node type is not one of the known node classes

    Examples
    --------
    >>> ast_to_dict(Text(content="Hello"))
    {'node_type': 'Text', 'content': 'Hello', 'metadata': {}}

    """
    serializer = _SERIALIZATION_DISPATCH.get(type(node))
    if serializer is None:
        raise ValueError(f"Unknown node type for serialization: {type(node).__name__}")
    return serializer(node)


def dict_to_ast(data: dict[str, Any]) -> Node:
    """Rebuild a tree node from the output of ``ast_to_dict``.

    Parameters
    ----------
    data : dict
        Dictionary with a ``node_type`` key

    Returns
    -------
    Node
        Reconstructed node

    Raises
    ------
    ValueError
        If ``node_type`` is missing or unknown

    """
    node_type = data.get("node_type")
    metadata = dict(data.get("metadata") or {})

    if node_type == "Document":
        return Document(children=[dict_to_ast(child) for child in data.get("children", [])], metadata=metadata)
    if node_type == "Tag":
        if "name" not in data:
            raise ValueError("Tag node requires a 'name'")
        return Tag(
            name=data["name"],
            argument=data.get("argument"),
            children=[dict_to_ast(child) for child in data.get("children", [])],
            metadata=metadata,
        )
    if node_type == "Text":
        return Text(content=data.get("content", ""), metadata=metadata)
    if node_type == "Raw":
        return Raw(content=data.get("content", ""), metadata=metadata)

    raise ValueError(f"Unknown node type for deserialization: {node_type!r}")


def ast_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize a node to a JSON string with a schema version.

    Parameters
    ----------
    node : Node
        The node to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        JSON string; non-ASCII characters are kept as-is

    """
    versioned_dict = {"schema_version": SCHEMA_VERSION, **ast_to_dict(node)}
    return json.dumps(versioned_dict, indent=indent, ensure_ascii=False)


def json_to_ast(json_str: str, validate_schema: bool = True) -> Node:
    """Deserialize a JSON string produced by ``ast_to_json``.

    Parameters
    ----------
    json_str : str
        JSON string representation
    validate_schema : bool, default True
        Raise on a schema version other than the current one. When False a
        mismatch is only logged.

    Returns
    -------
    Node
        Reconstructed node

    Raises
    ------
    ValueError
        If the JSON describes unknown node types or an unsupported schema
    json.JSONDecodeError
        If the JSON string is malformed

    """
    data = json.loads(json_str)
    if not isinstance(data, dict):
        raise ValueError("Serialized tree must be a JSON object")

    version = data.pop("schema_version", SCHEMA_VERSION)
    if version != SCHEMA_VERSION:
        if validate_schema:
            raise ValueError(f"Unsupported schema version: {version}")
        logger.warning("Loading tree with schema version %s (expected %s)", version, SCHEMA_VERSION)

    return dict_to_ast(data)
