"""
Rendering module for finalized grids.

Provides formatters for displaying a grid in various formats:
- TABLE: Bordered plain-text table (default)
- CSV: Comma-separated values, nested headers joined with "."

Example:
    from text_grid import to_grid
    from text_grid.rendering import OutputFormat, format_grid

    grid = to_grid([{"a": 300, "b": 1}, {"a": 2, "b": 200}])
    print(format_grid(grid, formatter=OutputFormat.CSV))
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..grid import Grid


class OutputFormat(Enum):
    """Output format for grids."""

    TABLE = "table"
    CSV = "csv"


def format_grid(
    grid: Grid,
    formatter: OutputFormat = OutputFormat.TABLE,
    **options: Any,
) -> str:
    """
    Format a grid for display.

    Args:
        grid: Grid to format; finalized on the way if it is not already
        formatter: Output format type (TABLE or CSV)
        **options: Formatter-specific options:
            - header_separator (str): Joins nested headers (CSV only, default: ".")

    Returns:
        Formatted string ready for printing

    Example:
        from text_grid import to_grid
        from text_grid.rendering import OutputFormat, format_grid

        grid = to_grid([{"name": "Apple", "price": 100}])
        print(format_grid(grid, formatter=OutputFormat.CSV))
    """
    from .factory import get_formatter

    formatter_instance = get_formatter(formatter, **options)
    return formatter_instance.format(grid)


__all__ = ["OutputFormat", "format_grid"]
