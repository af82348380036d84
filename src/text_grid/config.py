"""Grid options.

Options are read from keyword arguments or, through ``GridOptions.from_env()``,
from environment variables:
- ``TEXT_GRID_AMBIGUOUS_WIDTH``: display width (1 or 2) of East Asian
  ambiguous-width characters
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .exceptions import ValidationError

AMBIGUOUS_WIDTH_ENV_VAR = "TEXT_GRID_AMBIGUOUS_WIDTH"
"""Environment variable for overriding the ambiguous character width."""

LOG_LEVEL_ENV_VAR = "TEXT_GRID_LOG_LEVEL"
"""Environment variable read by the CLI for its logging level."""

DEFAULT_AMBIGUOUS_WIDTH = 1


@dataclass(frozen=True)
class GridOptions:
    """
    Options that affect layout of a grid.

    Attributes:
        ambiguous_width: Width counted for characters whose East Asian width
            is ambiguous (``A``). 1 matches most western terminals, 2 matches
            CJK locales.
    """

    ambiguous_width: int = DEFAULT_AMBIGUOUS_WIDTH

    def __post_init__(self) -> None:
        if isinstance(self.ambiguous_width, bool) or self.ambiguous_width not in (1, 2):
            raise ValidationError(
                "ambiguous_width",
                self.ambiguous_width,
                "must be 1 or 2",
            )

    @classmethod
    def from_env(cls) -> GridOptions:
        """Build options from ``TEXT_GRID_*`` environment variables."""
        raw = os.environ.get(AMBIGUOUS_WIDTH_ENV_VAR)
        if raw is None or raw.strip() == "":
            return cls()
        try:
            width = int(raw)
        except ValueError:
            raise ValidationError(
                "ambiguous_width",
                raw,
                f"{AMBIGUOUS_WIDTH_ENV_VAR} must be an integer",
            ) from None
        return cls(ambiguous_width=width)
