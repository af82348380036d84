"""
Grid: rows plus the column schema discovered from them.

Example:
    from text_grid import Grid

    grid = Grid()
    grid.push({"a": 300, "b": 1})
    grid.push({"a": 2, "b": 200})
    print(grid, end="")

Output:
      a  |  b  |
    -----|-----|
     300 |   1 |
       2 | 200 |
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, TextIO

from .cell import Cell
from .config import GridOptions
from .exceptions import ColumnShapeConflict, GridFinalizedError
from .formatter import CellsFormatter, capture
from .layout import GridLayout
from .rendering.formatters import TableFormatter
from .schema import ColumnSchema

logger = logging.getLogger(__name__)

CellsSchema = Callable[[CellsFormatter[Any]], Any]
"""Column declarations applied to every row instead of the row's own."""


class Grid:
    """
    A table built from rows of possibly differing shapes.

    Rows are pushed one at a time. Each push captures the row's cells and
    merges its columns into the grid's schema: known keys are reused, new
    keys are appended after their siblings. Once finalized (explicitly or by
    the first render) the schema and rows are frozen and rendering is a pure
    read.

    Not thread-safe: concurrent pushes must be serialized by the caller.
    """

    def __init__(
        self,
        schema: CellsSchema | None = None,
        options: GridOptions | None = None,
    ) -> None:
        """
        Initialize an empty grid.

        Args:
            schema: Column declarations used for every row. Defaults to each
                row describing itself (``fmt_cells``, mappings, lists, tuples
                or plain values).
            options: Layout options; defaults to ``GridOptions()``
        """
        self._describe = schema
        self._options = options or GridOptions()
        self._schema = ColumnSchema()
        self._rows: list[Cell] = []
        self._separators: set[int] = set()
        self._layout: GridLayout | None = None

    @property
    def schema(self) -> ColumnSchema:
        return self._schema

    @property
    def rows(self) -> tuple[Cell, ...]:
        return tuple(self._rows)

    @property
    def separators(self) -> frozenset[int]:
        """Indexes of the rows followed by a separator line."""
        return frozenset(self._separators)

    @property
    def options(self) -> GridOptions:
        return self._options

    @property
    def is_finalized(self) -> bool:
        return self._layout is not None

    def push(self, row: Any) -> None:
        """
        Append a row to the bottom of the grid.

        Raises:
            ColumnShapeConflict: If the row writes a column with a shape
                incompatible with earlier rows (or with itself). The grid is
                left unchanged.
            GridFinalizedError: If the grid was already finalized
        """
        if self._layout is not None:
            raise GridFinalizedError(len(self._rows))
        try:
            captured = capture(row, self._describe)
            self._schema.merge(captured)
        except ColumnShapeConflict as e:
            logger.warning("Rejected row %d: %s", len(self._rows), e)
            raise
        self._rows.append(captured)

    def extend(self, rows: Iterable[Any]) -> None:
        """Push each of ``rows`` in order."""
        for row in rows:
            self.push(row)

    def push_separator(self) -> None:
        """Draw a separator line below the last pushed row."""
        if self._layout is not None:
            raise GridFinalizedError(len(self._rows))
        if self._rows:
            self._separators.add(len(self._rows) - 1)

    def finalize(self) -> GridLayout:
        """
        Freeze the grid and compute its layout. Idempotent.

        Returns:
            The finalized layout
        """
        if self._layout is None:
            self._layout = GridLayout.build(
                self._schema,
                self._rows,
                ambiguous_width=self._options.ambiguous_width,
            )
            logger.debug(
                "Finalized grid: %d row(s), %d column(s), %d header line(s)",
                len(self._rows),
                len(self._layout.leaves),
                len(self._layout.header_lines),
            )
        return self._layout

    def render(self) -> str:
        """Render the grid as a bordered text table, finalizing it first."""
        return TableFormatter().format(self)

    def write(self, sink: TextIO) -> None:
        """Write the rendered table to a text sink."""
        sink.write(self.render())

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        state = "finalized" if self.is_finalized else "open"
        return f"<Grid rows={len(self._rows)} {state}>"


def to_grid(rows: Iterable[Any], schema: CellsSchema | None = None) -> Grid:
    """
    Build a grid from ``rows``.

    Args:
        rows: Row values
        schema: Column declarations to use instead of each row's own

    Returns:
        A grid holding all rows, not yet finalized
    """
    grid = Grid(schema)
    grid.extend(rows)
    return grid
