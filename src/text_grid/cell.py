"""
Cell primitives.

A ``RawCell`` is one piece of text with an alignment. A ``Cell`` is what one
formatting pass captured at one position of the column tree: raw fragments
written directly at that position and/or keyed sub-cells.
"""

from __future__ import annotations

import numbers
import unicodedata
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Union

from .exceptions import ColumnShapeConflict

ColumnKey = Union[str, int]
"""Column identifier: a field name or a position."""

LEAF = "leaf"
GROUP = "group"
MIXED = "mixed"

_CONFLICTING_SHAPES = {(LEAF, GROUP), (GROUP, LEAF)}

# Zero width joiner/non-joiner and variation selectors are category Cf/Mn,
# the BOM and word joiner are Cf; all are caught by the category check.
_ZERO_WIDTH_CATEGORIES = {"Mn", "Me", "Cc", "Cf"}


class Align(Enum):
    """Horizontal alignment of a cell's text within its column."""

    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


def char_width(char: str, ambiguous_width: int = 1) -> int:
    """Return the display width of a single character (0, 1 or 2)."""
    if unicodedata.combining(char) or unicodedata.category(char) in _ZERO_WIDTH_CATEGORIES:
        return 0
    east_asian = unicodedata.east_asian_width(char)
    if east_asian in ("W", "F"):
        return 2
    if east_asian == "A":
        return ambiguous_width
    return 1


def display_width(text: str, ambiguous_width: int = 1) -> int:
    """
    Calculate the display width of a string in terminal columns.

    Wide and fullwidth characters count 2, combining marks and control or
    format characters count 0, everything else counts 1.

    Args:
        text: String to measure
        ambiguous_width: Width of East Asian ambiguous characters (1 or 2)

    Returns:
        Display width in terminal columns
    """
    return sum(char_width(c, ambiguous_width) for c in text)


def pad(text: str, width: int, align: Align, ambiguous_width: int = 1) -> str:
    """Pad ``text`` with spaces to ``width`` display columns."""
    padding = width - display_width(text, ambiguous_width)
    if padding <= 0:
        return text
    if align is Align.RIGHT:
        return " " * padding + text
    if align is Align.CENTER:
        left = padding // 2
        return " " * left + text + " " * (padding - left)
    return text + " " * padding


def is_numeric(value: Any) -> bool:
    """Return True for numbers that should right-align (bool is not one)."""
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


@dataclass(frozen=True)
class RawCell:
    """
    A single textual fragment.

    Attributes:
        text: Text content, without padding
        align: Horizontal alignment within the column
        anchor: Separator the column aligns on (see ``baseline``), if any
    """

    text: str
    align: Align = Align.LEFT
    anchor: str | None = None

    def left(self) -> RawCell:
        """Return the cell with its alignment set to the left."""
        return replace(self, align=Align.LEFT)

    def right(self) -> RawCell:
        """Return the cell with its alignment set to the right."""
        return replace(self, align=Align.RIGHT)

    def center(self) -> RawCell:
        """Return the cell with its alignment set to the center."""
        return replace(self, align=Align.CENTER)

    def baseline(self, anchor: str = ".") -> RawCell:
        """
        Return the cell aligned on the first occurrence of ``anchor``.

        Cells of one column sharing an anchor line up on it: the part before
        the anchor is right-aligned, the rest left-aligned. Text without the
        anchor aligns as if it ended just before it.

        Example:
            >>> RawCell("1.5").baseline().split()
            ('1', '.5')
        """
        return replace(self, anchor=anchor)

    def split(self) -> tuple[str, str]:
        """Split the text before the anchor; the whole text is the left part if absent."""
        if self.anchor is None:
            return self.text, ""
        offset = self.text.find(self.anchor)
        if offset < 0:
            return self.text, ""
        return self.text[:offset], self.text[offset:]

    def width(self, ambiguous_width: int = 1) -> int:
        return display_width(self.text, ambiguous_width)


def cell(value: Any, align: Align | None = None) -> RawCell:
    """
    Create a ``RawCell`` from any value.

    Numbers right-align and everything else left-aligns unless ``align`` is
    given. ``None`` becomes an empty cell.

    Example:
        >>> cell(42)
        RawCell(text='42', align=<Align.RIGHT: 'right'>, anchor=None)
        >>> cell("abc").right().align
        <Align.RIGHT: 'right'>
    """
    if isinstance(value, RawCell):
        return value if align is None else replace(value, align=align)
    if align is None:
        align = Align.RIGHT if is_numeric(value) else Align.LEFT
    text = "" if value is None else str(value)
    return RawCell(text, align)


def header_cell(value: Any) -> RawCell:
    """Create a header cell; headers are centered unless given as a ``RawCell``."""
    if isinstance(value, RawCell):
        return value
    return cell(value, Align.CENTER)


def shape_of(has_content: bool, has_keys: bool) -> str | None:
    """Classify a column position; ``None`` means nothing was written."""
    if has_content and has_keys:
        return MIXED
    if has_content:
        return LEAF
    if has_keys:
        return GROUP
    return None


def shapes_conflict(established: str | None, written: str | None) -> bool:
    """
    Return True if ``written`` can not be merged into ``established``.

    Pure text and pure sub-columns exclude each other. A mixed write (text
    plus sub-columns) is compatible with either, since the text lands in the
    anonymous slot next to the sub-columns.
    """
    return (established, written) in _CONFLICTING_SHAPES


@dataclass
class Cell:
    """
    Content captured at one column position for one row.

    Attributes:
        fragments: Raw fragments written directly at this position; rendered
            concatenated as one string
        children: Sub-cells by column key, in declaration order
        content_index: Number of keyed children declared before the first
            fragment, i.e. where the anonymous slot sits among them
        header: Header override supplied by the declaration, if any
        stretch: Declared through a stretching formatter; takes extra width first
    """

    fragments: list[RawCell] = field(default_factory=list)
    children: dict[ColumnKey, Cell] = field(default_factory=dict)
    content_index: int | None = None
    header: RawCell | None = None
    stretch: bool = False

    @property
    def shape(self) -> str | None:
        return shape_of(bool(self.fragments), bool(self.children))

    @property
    def text(self) -> str:
        return "".join(f.text for f in self.fragments)

    @property
    def align(self) -> Align:
        aligns = {f.align for f in self.fragments}
        if len(aligns) == 1:
            return aligns.pop()
        return Align.LEFT

    @property
    def baseline_parts(self) -> tuple[str, str] | None:
        """Text before and from the anchor, for a single anchored fragment."""
        if len(self.fragments) != 1 or self.fragments[0].anchor is None:
            return None
        return self.fragments[0].split()

    def write(self, raw: RawCell) -> None:
        """Append a raw fragment at this position."""
        if self.content_index is None:
            self.content_index = len(self.children)
        self.fragments.append(raw)

    def absorb(self, key: ColumnKey, other: Cell, path: tuple[Any, ...]) -> None:
        """
        Merge ``other``, a fresh declaration of column ``key``, into the sub-cell
        already declared for ``key`` in this pass.

        Raises:
            ColumnShapeConflict: If the two declarations have incompatible shapes
        """
        existing = self.children.get(key)
        if existing is None:
            self.children[key] = other
            return
        if shapes_conflict(existing.shape, other.shape):
            raise ColumnShapeConflict(path, key, existing.shape or "", other.shape or "")
        if existing.header is None:
            existing.header = other.header
        existing.stretch = existing.stretch or other.stretch
        for raw in other.fragments:
            existing.write(raw)
        for child_key, child in other.children.items():
            existing.absorb(child_key, child, (*path, key))

    def lookup(self, path: tuple[ColumnKey, ...]) -> Cell | None:
        """Return the sub-cell at ``path``, or None if this row never wrote it."""
        node: Cell | None = self
        for key in path:
            if node is None:
                return None
            node = node.children.get(key)
        return node
