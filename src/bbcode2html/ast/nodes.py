#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2html/ast/nodes.py
"""Tree node classes produced by the BBCode parser.

A parsed BBCode document has only four kinds of node:

    - Document: the root container
    - Text: literal content, escaped when rendered
    - Tag: a recognized tag pair and everything between its delimiters
    - Raw: verbatim content of a raw-content tag such as ``[code]``

Every node supports the visitor pattern through ``accept``. Nodes are created
fresh for each parse and are never shared between documents.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional


class Node(ABC):
    """Base class for all tree nodes.

    Parameters
    ----------
    metadata : dict, default = empty dict
        Arbitrary metadata associated with this node

    """

    metadata: dict[str, Any]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


@dataclass
class Document(Node):
    """Root node holding the top-level content of a BBCode document.

    Parameters
    ----------
    children : list of Node, default = empty list
        Top-level nodes in document order
    metadata : dict, default = empty dict
        Document-level metadata (input size, truncation flag)

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_document``."""
        return visitor.visit_document(self)


@dataclass
class Text(Node):
    """Literal text, never interpreted as markup.

    Parameters
    ----------
    content : str
        Text content, including any tag syntax that was kept literal
    metadata : dict, default = empty dict
        Text metadata

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_text``."""
        return visitor.visit_text(self)


@dataclass
class Tag(Node):
    """A recognized tag and its content.

    Parameters
    ----------
    name : str
        Canonical lowercase tag name (aliases such as ``strike`` are
        resolved to ``s``)
    argument : str or None, default = None
        Normalized argument value, or None when the tag carries none
    children : list of Node, default = empty list
        Content between the opening and closing tag. A raw-content tag
        always holds exactly one ``Raw`` child.
    metadata : dict, default = empty dict
        Tag metadata

    """

    name: str
    argument: Optional[str] = None
    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_tag``."""
        return visitor.visit_tag(self)


@dataclass
class Raw(Node):
    """Verbatim content of a raw-content tag.

    The parser only creates Raw nodes as the single child of a tag whose
    content model is raw, so bracket syntax inside is never parsed.

    Parameters
    ----------
    content : str
        The characters exactly as the author wrote them
    metadata : dict, default = empty dict
        Raw metadata

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_raw``."""
        return visitor.visit_raw(self)


def get_node_children(node: Node) -> list[Node]:
    """Return the child list of a container node, or an empty list for leaves."""
    if isinstance(node, (Document, Tag)):
        return node.children
    return []


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in document order.

    Uses an explicit stack so arbitrarily deep trees built by hand do not
    hit the interpreter recursion limit.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(get_node_children(current)))


def tree_depth(node: Node) -> int:
    """Return the maximum number of nested ``Tag`` nodes below ``node``."""
    deepest = 0
    stack: list[tuple[Node, int]] = [(node, 0)]
    while stack:
        current, depth = stack.pop()
        if isinstance(current, Tag):
            depth += 1
            deepest = max(deepest, depth)
        for child in get_node_children(current):
            stack.append((child, depth))
    return deepest
