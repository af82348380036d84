"""Exceptions for text-grid."""

from typing import Any

# ---------------------------------------------------------------------------
# Base Exception
# ---------------------------------------------------------------------------


class TextGridError(Exception):
    """
    Base exception for all text-grid errors.

    All exceptions raised by this library inherit from this class,
    allowing callers to catch all library-specific errors with a single
    except clause.
    """

    pass


# ---------------------------------------------------------------------------
# Category Exceptions
# ---------------------------------------------------------------------------


class SchemaError(TextGridError):
    """
    Base exception for column schema errors.

    These signal a defect in row-producing code (the way a row describes
    its columns), never bad row data.
    """

    pass


# ---------------------------------------------------------------------------
# Schema Exceptions
# ---------------------------------------------------------------------------


class ColumnShapeConflict(SchemaError):  # noqa: N818
    """
    Raised when a column is written with a shape incompatible with the
    shape already established for it.

    A column holding raw text (``leaf``) can not later be written as a group
    of sub-columns (``group``) and vice versa. The push that introduces the
    conflict is rejected as a whole; the grid is left unchanged.

    Attributes:
        path: Keys from the top level down to the parent of the column
        key: Key of the conflicting column (``None`` for the anonymous slot)
        established: Shape already recorded in the schema
        written: Shape the rejected row tried to write
    """

    def __init__(
        self,
        path: tuple[Any, ...],
        key: Any,
        established: str,
        written: str,
    ) -> None:
        self.path = path
        self.key = key
        self.established = established
        self.written = written
        super().__init__(self._format_message())

    @property
    def full_path(self) -> tuple[Any, ...]:
        """Keys from the top level down to and including the column."""
        return (*self.path, self.key)

    def _format_message(self) -> str:
        location = "/".join(str(k) for k in self.full_path if k is not None) or "<root>"
        return (
            f"Column shape conflict at '{location}': "
            f"{self.written} written where {self.established} is established"
        )


class GridFinalizedError(TextGridError):
    """Raised when a row is pushed into a grid that has already been finalized."""

    def __init__(self, row_count: int) -> None:
        self.row_count = row_count
        super().__init__(
            f"Grid is finalized after {row_count} row(s); no further rows can be pushed"
        )


# ---------------------------------------------------------------------------
# Validation Exceptions
# ---------------------------------------------------------------------------


class ValidationError(TextGridError):
    """
    Raised when an option value is invalid.

    Attributes:
        field: Name of the invalid field
        value: The rejected value
        reason: Human-readable explanation
    """

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}={value!r}: {reason}")
