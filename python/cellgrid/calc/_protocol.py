"""Host-facing engine protocol and write result dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Union, runtime_checkable

from cellgrid.calc._errors import CellError

CellValue = Union[int, str, CellError]


@dataclass(frozen=True)
class CellDelta:
    """A single cell's computed-value change caused by one write."""

    address: str
    old_value: CellValue
    new_value: CellValue
    formula: str | None = None  # raw formula text when the cell holds one


@runtime_checkable
class GridEngine(Protocol):
    """What a grid UI or persistence layer needs from the engine."""

    def set(self, address: str, value: Any) -> tuple[CellDelta, ...]:
        """Assign raw text to a cell and propagate to its dependents."""
        ...

    def get(self, address: str) -> CellValue:
        """Computed value for display."""
        ...

    def get_raw(self, address: str) -> str:
        """Raw text as last written, for editing."""
        ...

    def export_grid(self) -> list[list[CellValue]]:
        """Rows x columns of computed values."""
        ...
