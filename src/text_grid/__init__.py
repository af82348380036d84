"""
text-grid: plain-text tables from heterogeneous rows.

This library renders rows of records, tuples and variant-like data as
aligned, bordered text tables with:
- Column schema discovered incrementally from the rows pushed
- Rows of differing shapes merged into one column structure by key
- Nested column groups with multi-line headers
- Display widths that account for wide and zero-width characters

Example:
    from text_grid import CellsFormatter, Grid

    class Fruit:
        def __init__(self, name: str, price: int) -> None:
            self.name = name
            self.price = price

        def fmt_cells(self, f: CellsFormatter) -> None:
            f.column("name", lambda s: s.name)
            f.column("price", lambda s: s.price)

    grid = Grid()
    grid.push(Fruit("Apple", 100))
    grid.push(Fruit("Banana", 80))
    print(grid, end="")

Output:
      name  | price |
    --------|-------|
     Apple  |   100 |
     Banana |    80 |
"""

from importlib import metadata

from .cell import Align, Cell, ColumnKey, RawCell, cell, display_width
from .config import GridOptions
from .derive import ColumnOptions, cells, cells_field, column_options
from .exceptions import (
    ColumnShapeConflict,
    GridFinalizedError,
    SchemaError,
    TextGridError,
    ValidationError,
)
from .formatter import Cells, CellsFormatter
from .grid import CellsSchema, Grid, to_grid
from .layout import GridLayout
from .rendering import OutputFormat, format_grid
from .schema import ColumnNode, ColumnSchema

try:
    __version__ = metadata.version("text-grid")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0+unknown"

__all__ = [
    # Version
    "__version__",
    # Main classes
    "Grid",
    "CellsFormatter",
    "Cells",
    "CellsSchema",
    "to_grid",
    # Cells
    "Align",
    "RawCell",
    "Cell",
    "ColumnKey",
    "cell",
    "display_width",
    # Schema and layout
    "ColumnNode",
    "ColumnSchema",
    "GridLayout",
    # Derive
    "cells",
    "cells_field",
    "column_options",
    "ColumnOptions",
    # Output
    "OutputFormat",
    "format_grid",
    # Options
    "GridOptions",
    # Exceptions - Base
    "TextGridError",
    # Exceptions - Categories
    "SchemaError",
    # Exceptions - Schema
    "ColumnShapeConflict",
    "GridFinalizedError",
    # Exceptions - Validation
    "ValidationError",
]
