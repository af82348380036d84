"""
Bordered text table renderer.

This module provides a TableRenderer class for drawing a finalized grid
layout as aligned plain text.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Sequence

from ..cell import Align, Cell, pad
from ..layout import GridLayout


class TableRenderer:
    """Render a grid layout as a bordered text table.

    Example output:
          a  |    b     |
        -----|----------|
             | 1  |  2  |
        -----|----|-----|
         300 | 10 |  20 |
           2 |  1 | 500 |
    """

    def __init__(self, layout: GridLayout) -> None:
        """Initialize the table renderer.

        Args:
            layout: Finalized layout of the grid to draw
        """
        self._layout = layout

    def render(self, rows: Sequence[Cell], separators: Collection[int] = ()) -> str:
        """Render header lines and rows.

        Args:
            rows: Captured rows, in push order
            separators: Indexes of rows followed by a separator line

        Returns:
            Table text; every line ends with a newline. Empty if the grid has
            no columns.
        """
        layout = self._layout
        if not layout.leaves:
            return ""

        every_boundary = frozenset(range(len(layout.leaves)))
        lines: list[str] = []

        for index, entries in enumerate(layout.header_lines):
            lines.append(
                self._line(
                    pad(e.header.text, e.width, e.header.align, layout.ambiguous_width)
                    for e in entries
                )
            )
            below = (
                layout.boundaries(index + 1)
                if index + 1 < len(layout.header_lines)
                else every_boundary
            )
            lines.append(self._separator(layout.boundaries(index) & below))

        for index, row in enumerate(rows):
            lines.append(self._row(row))
            if index in separators:
                lines.append(self._separator(every_boundary))

        return "".join(line + "\n" for line in lines)

    def _row(self, row: Cell) -> str:
        ambiguous_width = self._layout.ambiguous_width
        cells = []
        for leaf in self._layout.leaves:
            found = row.lookup(leaf.path)
            if found is None or not found.fragments:
                cells.append(" " * leaf.width)
                continue
            parts = found.baseline_parts
            if parts is None:
                cells.append(pad(found.text, leaf.width, found.align, ambiguous_width))
                continue
            before, after = leaf.baseline
            text = pad(parts[0], before, Align.RIGHT, ambiguous_width)
            text += pad(parts[1], after, Align.LEFT, ambiguous_width)
            cells.append(pad(text, leaf.width, Align.RIGHT, ambiguous_width))
        return self._line(cells)

    def _separator(self, boundaries: frozenset[int]) -> str:
        last = len(self._layout.leaves) - 1
        parts = []
        for index, leaf in enumerate(self._layout.leaves):
            parts.append("-" * (leaf.width + 2))
            parts.append("|" if index == last or index in boundaries else "-")
        return "".join(parts)

    @staticmethod
    def _line(cells: Iterable[str]) -> str:
        return " " + " | ".join(cells) + " |"
