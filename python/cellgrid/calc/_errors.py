"""Cell error values and the construction-time dimension error."""

from __future__ import annotations

from typing import Any


class CellError:
    """Error state held as a cell's computed value.

    Use ``CellError.of(code)`` to get the cached singleton for a code.
    Errors compare equal to their string code (``CellError.SYNTAX == "!SYNTAX"``).
    """

    __slots__ = ("code",)
    _cache: dict[str, CellError] = {}

    SYNTAX: CellError
    CIRCULAR: CellError

    def __init__(self, code: str) -> None:
        self.code = code

    @classmethod
    def of(cls, code: str) -> CellError:
        if code not in cls._cache:
            cls._cache[code] = cls(code)
        return cls._cache[code]

    def __repr__(self) -> str:
        return self.code

    def __str__(self) -> str:
        return self.code

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CellError):
            return self.code == other.code
        if isinstance(other, str):
            return self.code == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.code)


CellError.SYNTAX = CellError.of("!SYNTAX")
CellError.CIRCULAR = CellError.of("CIRCULAR")


def first_error(*values: Any) -> CellError | None:
    """Return the first CellError found in *values*, or None."""
    for v in values:
        if isinstance(v, CellError):
            return v
    return None


class DimensionError(ValueError):
    """Grid bounds rejected at construction."""
