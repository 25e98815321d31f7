"""cellgrid.calc - Formula parsing, dependency tracking and evaluation."""

from cellgrid.calc._errors import CellError, DimensionError, first_error
from cellgrid.calc._evaluator import evaluate_terms
from cellgrid.calc._graph import DependencyGraph
from cellgrid.calc._parser import (
    FormulaParser,
    formula_references,
    is_integer_literal,
    parse_formula,
    parse_integer,
)
from cellgrid.calc._protocol import CellDelta, CellValue, GridEngine

__all__ = [
    "CellDelta",
    "CellError",
    "CellValue",
    "DependencyGraph",
    "DimensionError",
    "FormulaParser",
    "GridEngine",
    "evaluate_terms",
    "first_error",
    "formula_references",
    "is_integer_literal",
    "parse_formula",
    "parse_integer",
]
