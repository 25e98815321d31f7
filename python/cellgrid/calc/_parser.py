"""Formula parser for the ``=term + term ...`` grammar."""

from __future__ import annotations

import re

from cellgrid._utils import MAX_COLS, MAX_ROWS, is_valid_address

# ASCII digits only; str.isdigit() would accept other Unicode digits.
_INTEGER_RE = re.compile(r"[0-9]+")


def is_integer_literal(text: str) -> bool:
    """True for a non-empty, unsigned, all-digit string."""
    return _INTEGER_RE.fullmatch(text) is not None


def parse_integer(text: str) -> int | None:
    """Value of an integer literal, or None if *text* is not one.

    Also None for literals longer than the interpreter's int conversion
    limit (``sys.set_int_max_str_digits``).
    """
    if not is_integer_literal(text):
        return None
    try:
        return int(text)
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Term parsing
# ---------------------------------------------------------------------------


def parse_formula(
    formula: str,
    max_rows: int = MAX_ROWS,
    max_cols: int = MAX_COLS,
) -> list[str] | None:
    """Split a formula into its stripped terms.

    Every term must be an integer literal or an in-bounds cell address.
    Returns None when *formula* does not start with ``=`` or any term is
    rejected (empty, unsupported operator, out-of-range reference).
    """
    if not formula.startswith("="):
        return None

    terms = [part.strip() for part in formula[1:].split("+")]
    for term in terms:
        if not is_integer_literal(term) and not is_valid_address(term, max_rows, max_cols):
            return None
    return terms


def formula_references(terms: list[str]) -> list[str]:
    """Cell-address terms of a parsed formula, deduplicated, in order."""
    refs: list[str] = []
    seen: set[str] = set()
    for term in terms:
        if is_integer_literal(term) or term in seen:
            continue
        refs.append(term)
        seen.add(term)
    return refs


class FormulaParser:
    """Formula parser bound to one grid's bounds."""

    __slots__ = ("max_rows", "max_cols")

    def __init__(self, max_rows: int = MAX_ROWS, max_cols: int = MAX_COLS) -> None:
        self.max_rows = max_rows
        self.max_cols = max_cols

    def parse(self, formula: str) -> list[str] | None:
        return parse_formula(formula, self.max_rows, self.max_cols)
