"""
Row capture.

Row-producing code describes its columns against a ``CellsFormatter``. One
formatting pass captures one row into a ``Cell`` tree; the grid then merges
that tree into its column schema.

Example:
    from text_grid import CellsFormatter, to_grid

    class Fruit:
        def __init__(self, name: str, price: int) -> None:
            self.name = name
            self.price = price

        def fmt_cells(self, f: CellsFormatter) -> None:
            f.column("name", lambda s: s.name)
            f.column("price", lambda s: s.price)

    print(to_grid([Fruit("Apple", 100), Fruit("Banana", 80)]))
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from .cell import Cell, ColumnKey, RawCell, cell, header_cell

T = TypeVar("T")
U = TypeVar("U")

_SPACE = RawCell(" ")


@runtime_checkable
class Cells(Protocol):
    """
    Protocol for values that describe their own columns.

    Implementations declare columns with ``f.column(...)`` /
    ``f.column_with(...)`` and write flattened content with ``f.content(...)``.
    Value functions receive the formatted value (``f.source``) and must not
    have side effects: the same declarations are replayed for every row.
    """

    def fmt_cells(self, f: CellsFormatter[Any]) -> None: ...


def check_key(key: Any) -> None:
    """Reject column keys that are neither names nor positions."""
    if isinstance(key, bool) or not isinstance(key, (str, int)):
        raise TypeError(f"column key must be str or int, not {type(key).__name__}")


class CellsFormatter(Generic[T]):
    """
    Used to declare columns for one row.

    - Use ``column`` to declare a column.
    - Use ``column_with`` to declare a group of sub-columns (multi-line header).
    - Use ``content`` to write into the current column without a header of
      its own (flattened tuples, variant names).
    """

    def __init__(
        self,
        target: Cell,
        source: T,
        *,
        path: tuple[ColumnKey, ...] = (),
        present: bool = True,
        stretch: bool = False,
    ) -> None:
        self._target = target
        self._source = source
        self._path = path
        self._present = present
        self._stretch = stretch

    @property
    def source(self) -> T:
        """The value being formatted."""
        return self._source

    @property
    def path(self) -> tuple[ColumnKey, ...]:
        """Keys of the enclosing columns, outermost first."""
        return self._path

    def column(
        self,
        key: ColumnKey,
        value_fn: Callable[[T], Any],
        header: Any = None,
    ) -> None:
        """
        Declare a column.

        Args:
            key: Column name (``str``) or position (``int``); columns with the
                same key in different rows share one column
            value_fn: Returns the column's value for the source
            header: Header text; defaults to ``str(key)``. Centered unless
                given as a ``RawCell`` with another alignment.
        """
        self.column_with(key, lambda f: f.content(value_fn), header=header)

    def column_with(
        self,
        key: ColumnKey,
        group_fn: Callable[[CellsFormatter[T]], Any],
        header: Any = None,
    ) -> None:
        """
        Declare a column group.

        ``group_fn`` receives a formatter bound to the group and declares
        the sub-columns.

        Raises:
            ColumnShapeConflict: If ``key`` was already declared in this row
                with an incompatible shape
        """
        check_key(key)
        child = Cell(
            header=None if header is None else header_cell(header),
            stretch=self._stretch,
        )
        group_fn(self._derive(child, self._source, (*self._path, key), self._present))
        self._target.absorb(key, child, self._path)

    def content(self, value_fn: Callable[[T], Any]) -> None:
        """Write the value returned by ``value_fn`` at the current column."""
        if not self._present:
            return
        write_value(self, value_fn(self._source))

    def map(self, fn: Callable[[T], U]) -> CellsFormatter[U]:
        """Return a formatter for the same columns whose source is ``fn(source)``."""
        source = fn(self._source) if self._present else None
        return self._derive(self._target, source, self._path, self._present)

    def filter(self, predicate: Callable[[T], bool]) -> CellsFormatter[T]:
        """
        Return a formatter that still declares columns but writes no content
        when ``predicate(source)`` is false.
        """
        present = self._present and bool(predicate(self._source))
        return self._derive(self._target, self._source, self._path, present)

    def stretch(self) -> CellsFormatter[T]:
        """
        Return a formatter whose columns take extra width first.

        When a header or group header is wider than the columns under it, the
        extra width goes to stretched columns only, if any are among them.
        """
        return CellsFormatter(
            self._target, self._source, path=self._path, present=self._present, stretch=True
        )

    def write(self, raw: RawCell) -> None:
        """Append a raw fragment at the current column."""
        if self._present:
            self._target.write(raw)

    def _derive(
        self, target: Cell, source: Any, path: tuple[ColumnKey, ...], present: bool
    ) -> CellsFormatter[Any]:
        return CellsFormatter(target, source, path=path, present=present, stretch=self._stretch)


def _mapping_key(key: Any) -> ColumnKey:
    if isinstance(key, bool) or not isinstance(key, (str, int)):
        return str(key)
    return key


def write_value(f: CellsFormatter[Any], value: Any) -> None:
    """
    Capture ``value`` at the formatter's current column.

    - ``None``: an empty cell
    - ``RawCell``: written as is
    - objects with ``fmt_cells``: described by themselves
    - ``Enum`` members: their name
    - floats: right-aligned on the decimal point
    - mappings: one column per key; keys other than ``str``/``int`` are
      converted with ``str()``
    - lists: one column per position
    - named tuples: one column per field
    - other tuples: elements flattened into one cell, space separated
    - anything else: ``cell(value)``
    """
    if value is None:
        f.write(RawCell(""))
    elif isinstance(value, RawCell):
        f.write(value)
    elif isinstance(value, Cells):
        value.fmt_cells(f.map(lambda _: value))
    elif isinstance(value, Enum):
        f.write(cell(value.name))
    elif isinstance(value, float):
        f.write(cell(value).baseline("."))
    elif isinstance(value, Mapping):
        for key, item in value.items():
            f.column(_mapping_key(key), lambda _, item=item: item)
    elif isinstance(value, list):
        for index, item in enumerate(value):
            f.column(index, lambda _, item=item: item)
    elif isinstance(value, tuple) and hasattr(value, "_fields"):
        for name in value._fields:
            f.column(name, lambda _, item=getattr(value, name): item)
    elif isinstance(value, tuple):
        for index, item in enumerate(value):
            if index:
                f.write(_SPACE)
            f.content(lambda _, item=item: item)
    else:
        f.write(cell(value))


def capture(
    source: Any,
    describe: Callable[[CellsFormatter[Any]], Any] | None = None,
) -> Cell:
    """
    Run one formatting pass over ``source`` and return the captured row.

    Args:
        source: The row value
        describe: Column declarations to use instead of the row's own
            (``fmt_cells`` or the built-in handling of ``write_value``)

    Raises:
        ColumnShapeConflict: If the row declares one key twice with
            incompatible shapes
    """
    root = Cell()
    f: CellsFormatter[Any] = CellsFormatter(root, source)
    if describe is not None:
        describe(f)
    else:
        write_value(f, source)
    return root
