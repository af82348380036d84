"""
Finalized grid layout.

Turns the column schema and the captured rows into the column tree that the
renderer draws: header cells, leaf lookup paths and widths.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .cell import Align, Cell, ColumnKey, RawCell, display_width, header_cell
from .schema import ColumnNode, ColumnSchema

SEPARATOR_WIDTH = 3
"""Width of ``" | "`` between two columns."""

_BLANK_HEADER = RawCell("", Align.CENTER)


@dataclass
class LayoutColumn:
    """
    A column as it is drawn.

    Attributes:
        header: Header cell
        path: Keys used to look the column's text up in a row (leaves only)
        depth: Header line the column's header is drawn on (0 is the top)
        children: Sub-columns; empty for leaf columns
        width: Text width of a leaf, or the span of a group
        last: Index of the rightmost leaf covered by the column
        stretch: The column, or one under it, takes extra width first
        baseline: Widths of the parts before and from the anchor of anchored
            cells (leaves only)
    """

    header: RawCell
    path: tuple[ColumnKey, ...]
    depth: int
    children: list[LayoutColumn] = field(default_factory=list)
    width: int = 0
    last: int = 0
    stretch: bool = False
    baseline: tuple[int, int] = (0, 0)

    @property
    def is_group(self) -> bool:
        return bool(self.children)

    @property
    def height(self) -> int:
        """Number of header lines the column needs."""
        if not self.children:
            return 1
        return 1 + max(c.height for c in self.children)

    def leaves(self) -> list[LayoutColumn]:
        if not self.children:
            return [self]
        return [leaf for c in self.children for leaf in c.leaves()]


@dataclass(frozen=True)
class HeaderEntry:
    """One cell of a header line, spanning ``width`` display columns."""

    header: RawCell
    width: int
    last: int


@dataclass(frozen=True)
class GridLayout:
    """
    Layout of a finalized grid.

    Attributes:
        columns: Top-level columns, left to right
        leaves: All leaf columns, left to right
        header_lines: Header cells per header line, top line first
        ambiguous_width: Width used for ambiguous characters
    """

    columns: tuple[LayoutColumn, ...]
    leaves: tuple[LayoutColumn, ...]
    header_lines: tuple[tuple[HeaderEntry, ...], ...]
    ambiguous_width: int = 1

    @property
    def widths(self) -> list[int]:
        return [leaf.width for leaf in self.leaves]

    @property
    def line_width(self) -> int:
        """Length in display columns of every rendered line."""
        return sum(self.widths) + SEPARATOR_WIDTH * len(self.leaves)

    def boundaries(self, line: int) -> frozenset[int]:
        """Leaf indexes followed by a ``|`` on header line ``line``."""
        return frozenset(entry.last for entry in self.header_lines[line])

    @classmethod
    def build(
        cls,
        schema: ColumnSchema,
        rows: Sequence[Cell],
        ambiguous_width: int = 1,
    ) -> GridLayout:
        """
        Compute the layout of ``rows`` under ``schema``.

        Each leaf is as wide as its widest header or non-blank cell, where
        anchored cells count as the widest part before the anchor plus the
        widest part from it. A group spans its children plus one separator
        between each pair; a group header wider than that span widens the
        narrowest children, stretched children first.
        """
        columns = [_build_column(node, (), 0) for node in schema.root.children]
        has_headers = any(node.key is not None for node in schema.root.children)

        leaves = [leaf for column in columns for leaf in column.leaves()]
        for index, leaf in enumerate(leaves):
            width = display_width(leaf.header.text, ambiguous_width)
            before = after = 0
            for row in rows:
                found = row.lookup(leaf.path)
                if found is None or not found.fragments:
                    continue
                parts = found.baseline_parts
                if parts is None:
                    width = max(width, display_width(found.text, ambiguous_width))
                else:
                    before = max(before, display_width(parts[0], ambiguous_width))
                    after = max(after, display_width(parts[1], ambiguous_width))
            leaf.baseline = (before, after)
            leaf.width = max(width, before + after)
            leaf.last = index

        for column in columns:
            _fit(column, ambiguous_width)

        header_lines: list[tuple[HeaderEntry, ...]] = []
        if has_headers:
            depth = max(column.height for column in columns)
            for line in range(depth):
                entries: list[HeaderEntry] = []
                for column in columns:
                    _collect_headers(column, line, entries)
                header_lines.append(tuple(entries))

        return cls(
            columns=tuple(columns),
            leaves=tuple(leaves),
            header_lines=tuple(header_lines),
            ambiguous_width=ambiguous_width,
        )


def _build_column(node: ColumnNode, parent_path: tuple[ColumnKey, ...], depth: int) -> LayoutColumn:
    if node.key is None:
        return LayoutColumn(_BLANK_HEADER, parent_path, depth, stretch=node.stretch)

    path = (*parent_path, node.key)
    header = node.header if node.header is not None else header_cell(str(node.key))
    if not node.keyed_children:
        return LayoutColumn(header, path, depth, stretch=node.stretch)
    children = [_build_column(child, path, depth + 1) for child in node.children]
    stretch = node.stretch or any(c.stretch for c in children)
    return LayoutColumn(header, path, depth, children, stretch=stretch)


def _fit(column: LayoutColumn, ambiguous_width: int) -> None:
    if not column.children:
        return
    for child in column.children:
        _fit(child, ambiguous_width)
    column.last = column.children[-1].last
    _refresh_span(column)
    missing = display_width(column.header.text, ambiguous_width) - column.width
    while missing > 0:
        _widen(column, 1)
        missing -= 1


def _refresh_span(column: LayoutColumn) -> None:
    column.width = sum(c.width for c in column.children) + SEPARATOR_WIDTH * (
        len(column.children) - 1
    )


def _widen(column: LayoutColumn, amount: int) -> None:
    if not column.children:
        column.width += amount
        return
    candidates = [c for c in column.children if c.stretch] or column.children
    narrowest = min(candidates, key=lambda c: c.width)
    _widen(narrowest, amount)
    _refresh_span(column)


def _collect_headers(column: LayoutColumn, line: int, entries: list[HeaderEntry]) -> None:
    if column.depth == line:
        entries.append(HeaderEntry(column.header, column.width, column.last))
    elif column.children:
        for child in column.children:
            _collect_headers(child, line, entries)
    else:
        entries.append(HeaderEntry(_BLANK_HEADER, column.width, column.last))
