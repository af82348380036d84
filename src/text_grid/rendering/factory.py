"""
Formatter factory for grid output.

Provides factory function to create appropriate formatter instances
based on the requested format type.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from . import OutputFormat
from .formatters import CsvFormatter, TableFormatter

if TYPE_CHECKING:
    from .formatters import BaseFormatter


def get_formatter(
    formatter_type: OutputFormat,
    **options: Any,
) -> BaseFormatter:
    """
    Get formatter instance for the requested type.

    Args:
        formatter_type: Desired formatter (TABLE or CSV)
        **options: Formatter-specific options:
            - header_separator (str): Joins nested headers for CSV (default: ".")

    Returns:
        Formatter instance matching the requested type

    Raises:
        ValueError: If unknown formatter type requested
    """
    if formatter_type == OutputFormat.TABLE:
        return TableFormatter()

    if formatter_type == OutputFormat.CSV:
        header_separator = options.get("header_separator", ".")
        if not isinstance(header_separator, str):
            header_separator = "."
        return CsvFormatter(header_separator=header_separator)

    raise ValueError(f"Unknown formatter type: {formatter_type}")
