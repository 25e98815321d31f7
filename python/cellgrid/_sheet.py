"""Sheet: a bounded grid of cells with incremental formula recalculation.

Every write runs to completion (store, parse, cycle check, evaluate,
propagate) before returning. Problems with user data never raise; they
become ``CellError.SYNTAX`` or ``CellError.CIRCULAR`` cell values. Only
bad grid dimensions are rejected, with ``DimensionError``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from cellgrid._utils import MAX_COLS, MAX_ROWS, is_valid_address, iter_addresses, rowcol_to_a1
from cellgrid.calc._errors import CellError, DimensionError
from cellgrid.calc._evaluator import evaluate_terms
from cellgrid.calc._graph import DependencyGraph
from cellgrid.calc._parser import (
    FormulaParser,
    formula_references,
    is_integer_literal,
    parse_integer,
)
from cellgrid.calc._protocol import CellDelta, CellValue

logger = logging.getLogger(__name__)

_UNSET = ""


def _same_value(a: CellValue, b: CellValue) -> bool:
    # CellError == str compares codes, so the text "!SYNTAX" would match SYNTAX
    return type(a) is type(b) and a == b


def _render(value: Any) -> str:
    """Text form of a rejected non-text value or address."""
    try:
        return str(value)
    except Exception as e:
        # e.g. ints past the str conversion digit limit
        logger.debug("Cannot render %s value: %s", type(value).__name__, e)
        return f"<{type(value).__name__}>"


class Sheet:
    """Grid of ``max_rows`` x ``max_cols`` cells addressed ``A1`` .. ``Z999``.

    Usage::

        sheet = Sheet(5, 10)
        sheet.set("A1", "10")
        sheet.set("B1", "=A1 + 5")
        sheet.get("B1")      # 15
        sheet.set("A1", "20")
        sheet.get("B1")      # 25
    """

    __slots__ = (
        "_max_rows", "_max_cols", "_raw", "_computed", "_formulas",
        "_rejected", "_graph", "_parser", "_lock",
    )

    def __init__(self, max_rows: int = 5, max_cols: int = 10) -> None:
        if max_cols > MAX_COLS:
            raise DimensionError(f"Maximum {MAX_COLS} columns (A-Z) allowed")
        if max_rows > MAX_ROWS:
            raise DimensionError(f"Maximum {MAX_ROWS} rows allowed")
        if max_rows < 1 or max_cols < 1:
            raise DimensionError("Dimensions must be positive")

        self._max_rows = max_rows
        self._max_cols = max_cols
        self._raw: dict[str, str] = {}
        self._computed: dict[str, CellValue] = {}
        # cell -> parsed terms, for cells currently holding a valid formula
        self._formulas: dict[str, list[str]] = {}
        # writes to addresses outside the grid: address -> raw text
        self._rejected: dict[str, str] = {}
        self._graph = DependencyGraph()
        self._parser = FormulaParser(max_rows, max_cols)
        self._lock = threading.RLock()

    @classmethod
    def from_raw_grid(
        cls,
        rows: Iterable[Iterable[Any]],
        max_rows: int = 5,
        max_cols: int = 10,
    ) -> Sheet:
        """Build a sheet by replaying a saved raw grid."""
        sheet = cls(max_rows, max_cols)
        sheet.load_raw_grid(rows)
        return sheet

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_rows(self) -> int:
        return self._max_rows

    @property
    def max_cols(self) -> int:
        return self._max_cols

    @property
    def dimensions(self) -> tuple[int, int]:
        return self._max_rows, self._max_cols

    @property
    def graph(self) -> DependencyGraph:
        """The live dependency graph. Treat as read-only."""
        return self._graph

    @property
    def rejected(self) -> Mapping[str, str]:
        """Raw text of writes refused because the address was invalid."""
        return MappingProxyType(self._rejected)

    def is_valid_address(self, address: Any) -> bool:
        return is_valid_address(address, self._max_rows, self._max_cols)

    # ------------------------------------------------------------------
    # Write path
    # ------------------------------------------------------------------

    def set(self, address: str, value: Any) -> tuple[CellDelta, ...]:
        """Assign raw text to a cell and recompute everything downstream.

        Returns the computed-value changes the write caused, the written
        cell first. Non-text values and invalid addresses degrade to a
        SYNTAX cell instead of raising.
        """
        with self._lock:
            changes: dict[str, CellValue] = {}
            self._write(address, value, changes)
            return self._deltas(changes)

    def __setitem__(self, address: str, value: Any) -> None:
        self.set(address, value)

    def _write(self, address: Any, value: Any, changes: dict[str, CellValue]) -> None:
        valid = self.is_valid_address(address)

        if not isinstance(value, str):
            logger.debug("Non-text value %r written to %r", value, address)
            self._reject(address, _render(value), valid, changes)
            return

        if not valid:
            logger.debug("Invalid cell address %r", address)
            self._reject(address, value, valid, changes)
            return

        self._clear_formula(address)
        self._raw[address] = value
        self._store(address, self._literal(address, value), changes)

        if value.startswith("="):
            terms = self._parser.parse(value)
            if terms is None:
                logger.debug("Cannot parse formula %r in %s", value, address)
                self._store(address, CellError.SYNTAX, changes)
                return

            self._formulas[address] = terms
            self._graph.add_formula(address, formula_references(terms))

            if self._graph.find_cycle(address):
                self._mark_circular(address, changes)
                return

            self._store(address, self._evaluate(address), changes)

        self._propagate(address, changes)

    def _literal(self, address: str, value: str) -> CellValue:
        if not is_integer_literal(value):
            return value
        number = parse_integer(value)
        if number is None:
            logger.debug("Integer literal too long in %s: %d digits", address, len(value))
            return CellError.SYNTAX
        return number

    def _reject(
        self,
        address: Any,
        raw: str,
        valid: bool,
        changes: dict[str, CellValue],
    ) -> None:
        if valid:
            self._clear_formula(address)
            self._raw[address] = raw
            self._store(address, CellError.SYNTAX, changes)
        else:
            key = address if isinstance(address, str) else _render(address)
            self._rejected[key] = raw

    def _clear_formula(self, address: str) -> None:
        self._formulas.pop(address, None)
        self._graph.remove_formula(address)

    def _store(self, address: str, value: CellValue, changes: dict[str, CellValue]) -> None:
        if address not in changes:
            changes[address] = self._computed.get(address, _UNSET)
        self._computed[address] = value

    def _deltas(self, changes: dict[str, CellValue]) -> tuple[CellDelta, ...]:
        deltas: list[CellDelta] = []
        for address, old in changes.items():
            new = self._computed.get(address, _UNSET)
            if _same_value(old, new):
                continue
            deltas.append(CellDelta(
                address=address,
                old_value=old,
                new_value=new,
                formula=self._raw[address] if address in self._formulas else None,
            ))
        return tuple(deltas)

    # ------------------------------------------------------------------
    # Evaluation, cycles, propagation
    # ------------------------------------------------------------------

    def _evaluate(self, address: str) -> int | CellError:
        return evaluate_terms(
            self._formulas[address],
            lambda ref: self._computed.get(ref, _UNSET),
        )

    def _mark_circular(self, address: str, changes: dict[str, CellValue]) -> None:
        closure = self._graph.circular_closure(address)
        logger.debug("Circular reference at %s marks %d cell(s)", address, len(closure))
        for cell in closure:
            self._store(cell, CellError.CIRCULAR, changes)

    def _propagate(self, address: str, changes: dict[str, CellValue]) -> None:
        """Recompute formula cells downstream of *address*, dependencies first."""
        marked: set[str] = set()
        for cell in self._graph.affected_cells({address}):
            if cell in marked:
                continue
            if self._graph.find_cycle(cell):
                closure = self._graph.circular_closure(cell)
                for c in closure:
                    self._store(c, CellError.CIRCULAR, changes)
                marked.update(closure)
                logger.debug("Circular reference at %s during propagation", cell)
                continue
            self._store(cell, self._evaluate(cell), changes)

    # ------------------------------------------------------------------
    # Read path
    # ------------------------------------------------------------------

    def get(self, address: str) -> CellValue:
        """Computed value; SYNTAX for an invalid address, "" for an unset cell."""
        if not self.is_valid_address(address):
            return CellError.SYNTAX
        with self._lock:
            return self._computed.get(address, _UNSET)

    def __getitem__(self, address: str) -> CellValue:
        return self.get(address)

    def get_raw(self, address: str) -> str:
        """Raw text as written; "" for an invalid address or an unset cell."""
        if not self.is_valid_address(address):
            return _UNSET
        with self._lock:
            return self._raw.get(address, _UNSET)

    # ------------------------------------------------------------------
    # Bulk export / import
    # ------------------------------------------------------------------

    def export_grid(self) -> list[list[CellValue]]:
        """Rows x columns of computed values, same as calling ``get`` per cell."""
        with self._lock:
            return [
                [
                    self._computed.get(rowcol_to_a1(r, c), _UNSET)
                    for c in range(1, self._max_cols + 1)
                ]
                for r in range(1, self._max_rows + 1)
            ]

    def export_raw_grid(self) -> list[list[str]]:
        """Rows x columns of raw texts; the layout a host persists."""
        with self._lock:
            return [
                [
                    self._raw.get(rowcol_to_a1(r, c), _UNSET)
                    for c in range(1, self._max_cols + 1)
                ]
                for r in range(1, self._max_rows + 1)
            ]

    def load_raw_grid(self, rows: Iterable[Iterable[Any]]) -> None:
        """Replay a raw grid through ``set``, row by row, left to right.

        Empty entries are skipped. Rows and columns past the grid bounds
        are ignored.
        """
        if isinstance(rows, (str, bytes)) or not isinstance(rows, Iterable):
            raise TypeError(f"Raw grid must be a list of rows, got {type(rows).__name__}")

        with self._lock:
            for r, row in enumerate(rows, start=1):
                if r > self._max_rows:
                    break
                if isinstance(row, (str, bytes)) or not isinstance(row, Iterable):
                    raise TypeError(f"Raw grid row {r} must be a list, got {type(row).__name__}")
                for c, value in enumerate(row, start=1):
                    if c > self._max_cols:
                        break
                    if value == _UNSET:
                        continue
                    self.set(rowcol_to_a1(r, c), value)

    def iter_cells(self) -> Iterable[tuple[str, str, CellValue]]:
        """Yield ``(address, raw, computed)`` for every written cell, row-major."""
        with self._lock:
            snapshot = [
                (address, self._raw[address], self._computed.get(address, _UNSET))
                for _, _, address in iter_addresses(self._max_rows, self._max_cols)
                if address in self._raw
            ]
        yield from snapshot

    def __repr__(self) -> str:
        return f"<Sheet {self._max_rows}x{self._max_cols} cells={len(self._raw)}>"
