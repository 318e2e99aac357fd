#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2html/ast/visitors.py
"""Visitor pattern implementation for tree traversal.

This module provides the visitor base class used by the HTML renderer and a
``ValidationVisitor`` that checks the structural guarantees the parser gives
for every tree it builds.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from bbcode2html.ast.nodes import Document, Raw, Tag, Text
from bbcode2html.constants import DEFAULT_MAX_DEPTH, ROOT_CONTAINER
from bbcode2html.tags import DEFAULT_TAG_TABLE, TagSpec


class NodeVisitor(ABC):
    """Abstract base class for tree node visitors.

    Subclasses implement one ``visit_*`` method per node type.

    Examples
    --------
    Count the tags in a tree:
        >>> class TagCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...     def visit_document(self, node):
        ...         for child in node.children:
        ...             child.accept(self)
        ...     def visit_tag(self, node):
        ...         self.count += 1
        ...         for child in node.children:
        ...             child.accept(self)
        ...     def visit_text(self, node):
        ...         pass
        ...     def visit_raw(self, node):
        ...         pass

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit the root Document node.

        Parameters
        ----------
        node : Document
            The document to visit

        Returns
        -------
        Any
            Result of processing

        """
        pass

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node.

        Parameters
        ----------
        node : Text
            The text to visit

        Returns
        -------
        Any
            Result of processing

        """
        pass

    @abstractmethod
    def visit_tag(self, node: Tag) -> Any:
        """Visit a Tag node.

        Parameters
        ----------
        node : Tag
            The tag to visit

        Returns
        -------
        Any
            Result of processing

        """
        pass

    @abstractmethod
    def visit_raw(self, node: Raw) -> Any:
        """Visit a Raw node.

        Parameters
        ----------
        node : Raw
            The raw content to visit

        Returns
        -------
        Any
            Result of processing

        """
        pass


class ValidationVisitor(NodeVisitor):
    """Visitor that checks a tree against the tag table.

    The following are reported:
    - Tags whose name is not in the tag table
    - Raw-content tags (including bare ``[url]`` forms) without exactly one Raw child
    - Raw nodes outside a raw-content tag
    - Tags nested inside a parent their spec does not permit
    - Arguments on tags that accept none, or missing required arguments
    - Nesting deeper than ``max_depth``

    Parameters
    ----------
    strict : bool, default = True
        Raise ``ValueError`` on the first problem instead of collecting it
    max_depth : int, default = 32
        Maximum number of nested tags allowed
    tag_table : Mapping[str, TagSpec], optional
        Tag table to validate against, defaults to the built-in table

    Examples
    --------
        >>> validator = ValidationVisitor(strict=False)
        >>> doc.accept(validator)
        >>> validator.errors
        []

    """

    def __init__(
        self,
        strict: bool = True,
        max_depth: int = DEFAULT_MAX_DEPTH,
        tag_table: Optional[Mapping[str, TagSpec]] = None,
    ) -> None:
        self.strict = strict
        self.max_depth = max_depth
        self.tag_table = tag_table if tag_table is not None else DEFAULT_TAG_TABLE
        self.errors: list[str] = []
        self._parents: list[str] = [ROOT_CONTAINER]

    def _report(self, message: str) -> None:
        if self.strict:
            raise ValueError(message)
        self.errors.append(message)

    def visit_document(self, node: Document) -> None:
        """Validate every top-level node."""
        for child in node.children:
            child.accept(self)

    def visit_text(self, node: Text) -> None:
        """Validate a Text node."""
        if not isinstance(node.content, str):
            self._report("Text content must be a string")

    def visit_raw(self, node: Raw) -> None:
        """Validate that a Raw node sits inside a raw-content tag."""
        parent = self._parents[-1]
        spec = self.tag_table.get(parent)
        if spec is None or spec.content == "parsed":
            self._report(f"Raw node outside a raw-content tag (parent {parent!r})")

    def visit_tag(self, node: Tag) -> None:
        """Validate a Tag node and its children."""
        spec = self.tag_table.get(node.name)
        if spec is None:
            self._report(f"Unknown tag: {node.name!r}")
            return

        parent = self._parents[-1]
        if not spec.allowed_in(parent):
            self._report(f"Tag [{node.name}] is not permitted inside {parent or 'the document root'!r}")

        bare = bool(node.metadata.get("bare", False))
        if spec.argument == "none" and node.argument is not None and not bare:
            self._report(f"Tag [{node.name}] does not accept an argument")
        if spec.argument == "required" and node.argument is None:
            self._report(f"Tag [{node.name}] requires an argument")

        if spec.is_raw_for(bare):
            raw_children = [child for child in node.children if isinstance(child, Raw)]
            if len(node.children) != 1 or len(raw_children) != 1:
                self._report(f"Raw-content tag [{node.name}] must have exactly one Raw child")

        # _parents starts with the root marker
        if len(self._parents) > self.max_depth:
            self._report(f"Nesting depth exceeds maximum of {self.max_depth}")
            return

        self._parents.append(node.name)
        try:
            for child in node.children:
                child.accept(self)
        finally:
            self._parents.pop()
