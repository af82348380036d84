"""Tests for the rendering module."""

from __future__ import annotations

from typing import Any

import pytest

from text_grid import Grid, OutputFormat, format_grid, to_grid
from text_grid.rendering.factory import get_formatter
from text_grid.rendering.formatters import CsvFormatter, TableFormatter


class TestTableFormatter:
    """Tests for TableFormatter."""

    def test_format_matches_render(self, nested_rows: list[dict[str, Any]]) -> None:
        """The table formatter draws the grid's own table."""
        grid = to_grid(nested_rows)
        assert TableFormatter().format(grid) == grid.render()

    def test_format_empty(self) -> None:
        """An empty grid formats to an empty string."""
        assert TableFormatter().format(Grid()) == ""

    def test_format_draws_separators(self, flat_rows: list[dict[str, int]]) -> None:
        """Row separators pushed into the grid are drawn by the formatter."""
        grid = Grid()
        grid.push(flat_rows[0])
        grid.push_separator()
        grid.push(flat_rows[1])
        assert format_grid(grid, OutputFormat.TABLE).splitlines()[3] == "-----|-----|"


class TestCsvFormatter:
    """Tests for CsvFormatter."""

    def test_flat(self, flat_rows: list[dict[str, int]]) -> None:
        """One header record, then one record per row."""
        assert CsvFormatter().format(to_grid(flat_rows)) == "a,b\r\n300,1\r\n2,200\r\n"

    def test_nested_headers_joined(self, nested_rows: list[dict[str, Any]]) -> None:
        """Nested headers are joined with the separator."""
        result = CsvFormatter().format(to_grid(nested_rows))
        assert result.splitlines()[0] == "a,b.1,b.2"

    def test_custom_separator(self, nested_rows: list[dict[str, Any]]) -> None:
        """The header separator is configurable."""
        result = CsvFormatter(header_separator="/").format(to_grid(nested_rows))
        assert result.splitlines()[0] == "a,b/1,b/2"

    def test_missing_cells_empty(self) -> None:
        """Cells a row never wrote are empty fields."""
        result = CsvFormatter().format(to_grid([{"a": 1}, {"b": 2}]))
        assert result == "a,b\r\n1,\r\n,2\r\n"

    def test_quoting(self) -> None:
        """Values containing commas are quoted."""
        result = CsvFormatter().format(to_grid([{"name": "Doe, Jane"}]))
        assert result == 'name\r\n"Doe, Jane"\r\n'

    def test_no_headers(self) -> None:
        """Rows without keyed columns have no header record."""
        assert CsvFormatter().format(to_grid([("Apple", 100)])) == "Apple 100\r\n"

    def test_empty(self) -> None:
        """An empty grid formats to an empty string."""
        assert CsvFormatter().format(Grid()) == ""

    def test_finalizes_grid(self, flat_rows: list[dict[str, int]]) -> None:
        """Formatting finalizes the grid."""
        grid = to_grid(flat_rows)
        CsvFormatter().format(grid)
        assert grid.is_finalized


class TestFactory:
    """Tests for get_formatter and format_grid."""

    def test_table(self) -> None:
        """TABLE gives a TableFormatter."""
        assert isinstance(get_formatter(OutputFormat.TABLE), TableFormatter)

    def test_csv(self) -> None:
        """CSV gives a CsvFormatter."""
        assert isinstance(get_formatter(OutputFormat.CSV), CsvFormatter)

    def test_unknown(self) -> None:
        """Unknown formats are rejected."""
        with pytest.raises(ValueError, match="Unknown formatter type"):
            get_formatter("html")  # type: ignore[arg-type]

    def test_format_grid_default(self, flat_rows: list[dict[str, int]]) -> None:
        """format_grid defaults to the table."""
        grid = to_grid(flat_rows)
        assert format_grid(grid) == grid.render()

    def test_format_grid_csv_options(self, nested_rows: list[dict[str, Any]]) -> None:
        """Options are passed to the formatter."""
        result = format_grid(to_grid(nested_rows), OutputFormat.CSV, header_separator=":")
        assert result.startswith("a,b:1,b:2\r\n")
