"""
Column declarations derived from class definitions.

The ``@cells`` decorator gives a dataclass or ``NamedTuple`` a ``fmt_cells``
method that declares one column per field, in declaration order:

    from dataclasses import dataclass
    from text_grid import cells, cells_field, to_grid

    @cells
    @dataclass
    class Person:
        name: str = cells_field(header="Full Name")
        age: int = 0
        password: str = cells_field(default="", skip=True)

Variant families (one class per variant) pass ``variant=True``: the class
name is written first, without a header, and each variant's fields get their
own columns, blank in rows of other variants.

    @cells(variant=True)
    @dataclass
    class Circle:
        radius: float

    @cells(variant=True, tuple_style=True)
    @dataclass
    class Point:
        x: int
        y: int

NamedTuples can not carry field metadata; they list options in a
``__cells_fields__`` class attribute instead:

    @cells
    class Pair(NamedTuple):
        __cells_fields__ = {"left": column_options(header="L")}

        left: int
        right: int
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar, overload

from .cell import RawCell
from .formatter import CellsFormatter

METADATA_KEY = "text_grid"
"""Key of the ``dataclasses.field`` metadata entry holding ``ColumnOptions``."""

CLASS_OPTIONS_ATTR = "__cells_fields__"
"""Class attribute mapping field names to ``ColumnOptions`` (NamedTuples)."""

_SPACE = RawCell(" ")

C = TypeVar("C", bound=type)


@dataclass(frozen=True)
class ColumnOptions:
    """
    Per-field column options.

    Attributes:
        header: Header text (or ``RawCell``) instead of the field name
        body: Called with the row to produce the cell instead of the field value
        skip: Do not declare a column for the field
    """

    header: Any = None
    body: Callable[[Any], Any] | None = None
    skip: bool = False


def column_options(
    header: Any = None,
    body: Callable[[Any], Any] | None = None,
    skip: bool = False,
) -> ColumnOptions:
    """Build ``ColumnOptions``; used with ``@cells(fields=...)``."""
    return ColumnOptions(header=header, body=body, skip=skip)


def cells_field(
    *,
    header: Any = None,
    body: Callable[[Any], Any] | None = None,
    skip: bool = False,
    **kwargs: Any,
) -> Any:
    """
    ``dataclasses.field`` carrying column options.

    Args:
        header: Header text instead of the field name
        body: Called with the row to produce the cell
        skip: Leave the field out of the table
        **kwargs: Passed through to ``dataclasses.field``
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[METADATA_KEY] = ColumnOptions(header=header, body=body, skip=skip)
    return dataclasses.field(metadata=metadata, **kwargs)


def _field_options(
    cls: type, fields: Mapping[str, ColumnOptions]
) -> list[tuple[str, ColumnOptions]]:
    if dataclasses.is_dataclass(cls):
        return [
            (f.name, fields.get(f.name) or f.metadata.get(METADATA_KEY) or ColumnOptions())
            for f in dataclasses.fields(cls)
        ]
    names = getattr(cls, "_fields", None)
    if isinstance(names, tuple):
        declared = getattr(cls, CLASS_OPTIONS_ATTR, None) or {}
        return [(name, fields.get(name) or declared.get(name) or ColumnOptions()) for name in names]
    raise TypeError(f"@cells requires a dataclass or NamedTuple, got {cls.__name__}")


def _build_fmt_cells(
    cls: type,
    variant: bool | str,
    tuple_style: bool,
    fields: Mapping[str, ColumnOptions],
) -> Callable[[Any, CellsFormatter[Any]], None]:
    unknown = set(fields) - {name for name, _ in _field_options(cls, {})}
    if unknown:
        raise TypeError(
            f"@cells(fields=...) names unknown field(s) of {cls.__name__}: {sorted(unknown)}"
        )

    declared = [
        (index, name, options)
        for index, (name, options) in enumerate(_field_options(cls, fields))
        if not options.skip
    ]
    variant_name = variant if isinstance(variant, str) else cls.__name__

    def fmt_cells(self: Any, f: CellsFormatter[Any]) -> None:
        if variant:
            f.write(RawCell(variant_name))
        for position, (index, name, options) in enumerate(declared):
            value_fn = options.body or (lambda s, name=name: getattr(s, name))
            if tuple_style and not variant:
                if position:
                    f.write(_SPACE)
                f.content(value_fn)
            else:
                f.column(index if tuple_style else name, value_fn, header=options.header)

    fmt_cells.__qualname__ = f"{cls.__qualname__}.fmt_cells"
    return fmt_cells


@overload
def cells(cls: C) -> C: ...


@overload
def cells(
    *,
    variant: bool | str = False,
    tuple_style: bool = False,
    fields: Mapping[str, ColumnOptions] | None = None,
) -> Callable[[C], C]: ...


def cells(
    cls: C | None = None,
    *,
    variant: bool | str = False,
    tuple_style: bool = False,
    fields: Mapping[str, ColumnOptions] | None = None,
) -> C | Callable[[C], C]:
    """
    Class decorator adding a ``fmt_cells`` method derived from the fields.

    Args:
        cls: Dataclass or ``NamedTuple`` class (when used without arguments)
        variant: Write the variant name (the class name, or this string)
            before the fields
        tuple_style: Fields are positional. Alone, they are flattened into
            one space-separated cell; with ``variant`` they are keyed by
            position (``0``, ``1``, ...)
        fields: Column options by field name, overriding field metadata

    Raises:
        TypeError: If the class is neither a dataclass nor a NamedTuple, or
            ``fields`` names a field the class does not have
    """

    def wrap(target: C) -> C:
        fmt_cells = _build_fmt_cells(target, variant, tuple_style, fields or {})
        target.fmt_cells = fmt_cells  # type: ignore[attr-defined]
        return target

    if cls is None:
        return wrap
    return wrap(cls)
