"""A1 addressing helpers and grid bounds."""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Any

MAX_ROWS = 999
MAX_COLS = 26

# One letter, then a row number without a leading zero (1-999).
_ADDRESS_RE = re.compile(r"([A-Z])([1-9][0-9]{0,2})")


def column_letter(index: int) -> str:
    """1-based column index -> letter (1 -> "A", 26 -> "Z")."""
    if not 1 <= index <= MAX_COLS:
        raise ValueError(f"Column index out of range: {index}")
    return chr(ord("A") + index - 1)


def column_index(letter: str) -> int:
    """Column letter -> 1-based index ("A" -> 1)."""
    if len(letter) != 1 or not "A" <= letter <= "Z":
        raise ValueError(f"Invalid column letter: {letter!r}")
    return ord(letter) - ord("A") + 1


def rowcol_to_a1(row: int, col: int) -> str:
    """Convert (3, 2) to "B3"."""
    if row < 1:
        raise ValueError(f"Row out of range: {row}")
    return f"{column_letter(col)}{row}"


def is_valid_address(text: Any, max_rows: int, max_cols: int) -> bool:
    """True when *text* is an exact A1 address inside the grid bounds.

    No case folding or trimming: ``"a1"`` and ``" A1"`` are invalid.
    """
    if not isinstance(text, str):
        return False
    m = _ADDRESS_RE.fullmatch(text)
    if not m:
        return False
    return column_index(m.group(1)) <= max_cols and int(m.group(2)) <= max_rows


def iter_addresses(max_rows: int, max_cols: int) -> Iterator[tuple[int, int, str]]:
    """Yield ``(row, col, address)`` for every cell, row-major, 1-based."""
    for row in range(1, max_rows + 1):
        for col in range(1, max_cols + 1):
            yield row, col, rowcol_to_a1(row, col)
