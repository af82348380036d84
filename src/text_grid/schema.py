"""
Column schema.

The schema is a tree of ``ColumnNode`` built up from the rows pushed into a
grid. Siblings keep the order in which their keys were first seen; nodes are
only ever appended. Text written directly at a node (without a key) lives in
an anonymous child whose key is ``None``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from .cell import Cell, ColumnKey, RawCell, shape_of, shapes_conflict
from .exceptions import ColumnShapeConflict

logger = logging.getLogger(__name__)


@dataclass
class ColumnNode:
    """
    A node of the column tree.

    Attributes:
        key: Column key; ``None`` for the root and for anonymous content slots
        header: Header override recorded from the first declaration that gave one
        children: Child nodes in first-seen order
        stretch: Some declaration marked the column as taking extra width first
    """

    key: ColumnKey | None
    header: RawCell | None = None
    children: list[ColumnNode] = field(default_factory=list)
    stretch: bool = False
    _index: dict[ColumnKey | None, ColumnNode] = field(default_factory=dict, repr=False)

    @property
    def has_content(self) -> bool:
        return None in self._index

    @property
    def keyed_children(self) -> list[ColumnNode]:
        return [c for c in self.children if c.key is not None]

    @property
    def shape(self) -> str | None:
        return shape_of(self.has_content, any(c.key is not None for c in self.children))

    def child(self, key: ColumnKey | None) -> ColumnNode | None:
        return self._index.get(key)

    def append(self, key: ColumnKey | None, header: RawCell | None = None) -> ColumnNode:
        node = ColumnNode(key, header)
        self.children.append(node)
        self._index[key] = node
        return node


class ColumnSchema:
    """
    Append-only column tree shared by all rows of one grid.

    Rows are merged in two steps: the whole row is validated against the
    tree first, then merged. A row that conflicts leaves the tree untouched.
    """

    def __init__(self) -> None:
        self.root = ColumnNode(None)

    def merge(self, row: Cell) -> None:
        """
        Merge a captured row into the schema.

        Raises:
            ColumnShapeConflict: If the row writes a column with a shape
                incompatible with the one already established
        """
        self._validate(self.root, row, ())
        self._merge(self.root, row, ())

    def validate(self, row: Cell) -> None:
        """Check that ``row`` could be merged, without changing the schema."""
        self._validate(self.root, row, ())

    def _validate(self, node: ColumnNode | None, row: Cell, path: tuple[ColumnKey, ...]) -> None:
        if node is not None and shapes_conflict(node.shape, row.shape):
            raise ColumnShapeConflict(
                path[:-1],
                path[-1] if path else None,
                node.shape or "",
                row.shape or "",
            )
        for key, child in row.children.items():
            self._validate(node.child(key) if node is not None else None, child, (*path, key))

    def _merge(self, node: ColumnNode, row: Cell, path: tuple[ColumnKey, ...]) -> None:
        items: list[tuple[ColumnKey | None, Cell | None]] = list(row.children.items())
        if row.fragments:
            items.insert(row.content_index or 0, (None, None))

        for key, child in items:
            existing = node.child(key)
            if existing is None:
                header = child.header if child is not None else None
                existing = node.append(key, header)
                logger.debug("Appended column %s", "/".join(str(k) for k in (*path, key)))
            elif existing.header is None and child is not None:
                existing.header = child.header
            if child is not None and child.stretch:
                existing.stretch = True
            if key is not None and child is not None:
                self._merge(existing, child, (*path, key))

    def walk(self) -> Iterator[tuple[tuple[ColumnKey, ...], ColumnNode]]:
        """Yield ``(path, node)`` for every keyed node, depth first."""

        def visit(
            node: ColumnNode, path: tuple[ColumnKey, ...]
        ) -> Iterator[tuple[tuple[ColumnKey, ...], ColumnNode]]:
            for child in node.keyed_children:
                child_path = (*path, child.key)  # type: ignore[arg-type]
                yield child_path, child
                yield from visit(child, child_path)

        return visit(self.root, ())

    def leaf_paths(self) -> list[tuple[ColumnKey, ...]]:
        """Return the lookup path of every rendered column, left to right."""
        result: list[tuple[ColumnKey, ...]] = []

        def visit(node: ColumnNode, path: tuple[ColumnKey, ...]) -> None:
            if not node.keyed_children:
                result.append(path)
                return
            for child in node.children:
                if child.key is None:
                    result.append(path)
                else:
                    visit(child, (*path, child.key))

        if self.root.children:
            visit(self.root, ())
        return result
