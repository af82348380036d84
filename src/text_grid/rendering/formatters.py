"""
Grid formatters.

This module provides formatters for rendering a finalized Grid
in different formats (bordered text table, CSV).
"""

from __future__ import annotations

import csv
import io
from typing import TYPE_CHECKING, Protocol

from .table import TableRenderer

if TYPE_CHECKING:
    from ..grid import Grid
    from ..layout import LayoutColumn


class BaseFormatter(Protocol):
    """Protocol for grid formatters."""

    def format(self, grid: Grid) -> str:
        """
        Format a grid into an output string.

        Args:
            grid: Grid to format; finalized if it is not already

        Returns:
            Formatted string representation
        """
        ...


class TableFormatter:
    """Format a grid as a bordered text table."""

    def format(self, grid: Grid) -> str:
        """
        Generate the bordered table: header lines, separators, one line per row.

        Args:
            grid: Grid to format; finalized if it is not already

        Returns:
            Table text; empty if the grid has no columns
        """
        layout = grid.finalize()
        if not layout.leaves:
            return ""
        return TableRenderer(layout).render(grid.rows, grid.separators)


class CsvFormatter:
    """Format a grid as CSV: one header record, then one record per row."""

    def __init__(self, header_separator: str = ".") -> None:
        """
        Initialize the CSV formatter.

        Args:
            header_separator: Joins the headers of a nested column and its
                enclosing groups into one CSV header, e.g. ``b.1``
        """
        self._header_separator = header_separator

    def _header_names(self, columns: tuple[LayoutColumn, ...] | list[LayoutColumn]) -> list[str]:
        names: list[str] = []

        def visit(column: LayoutColumn, prefix: list[str]) -> None:
            parts = [*prefix, column.header.text] if column.header.text else prefix
            if not column.children:
                names.append(self._header_separator.join(parts))
                return
            for child in column.children:
                visit(child, parts)

        for column in columns:
            visit(column, [])
        return names

    def format(self, grid: Grid) -> str:
        """
        Generate CSV text.

        The header record is omitted when no column has a header (rows made
        only of flattened content).

        Args:
            grid: Grid to format

        Returns:
            CSV text with ``\\r\\n`` line endings
        """
        layout = grid.finalize()
        if not layout.leaves:
            return ""

        buffer = io.StringIO()
        writer = csv.writer(buffer)
        if layout.header_lines:
            writer.writerow(self._header_names(layout.columns))
        for row in grid.rows:
            record = []
            for leaf in layout.leaves:
                found = row.lookup(leaf.path)
                record.append(found.text if found is not None else "")
            writer.writerow(record)
        return buffer.getvalue()
