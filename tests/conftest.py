"""Shared fixtures for text-grid tests."""

from __future__ import annotations

from typing import Any

import pytest

from text_grid import CellsFormatter


class Fruit:
    """Row type describing its own columns."""

    def __init__(self, name: str, price: int) -> None:
        self.name = name
        self.price = price

    def fmt_cells(self, f: CellsFormatter[Any]) -> None:
        f.column("name", lambda s: s.name)
        f.column("price", lambda s: s.price)


@pytest.fixture
def flat_rows() -> list[dict[str, int]]:
    """Two rows with the same flat keys."""
    return [{"a": 300, "b": 1}, {"a": 2, "b": 200}]


@pytest.fixture
def nested_rows() -> list[dict[str, Any]]:
    """Two rows with a top-level column and a two-column group."""
    return [
        {"a": 300, "b": {"1": 10, "2": 20}},
        {"a": 2, "b": {"1": 1, "2": 500}},
    ]


@pytest.fixture
def fruits() -> list[Fruit]:
    """Rows implementing fmt_cells."""
    return [Fruit("Apple", 100), Fruit("Banana", 80)]
