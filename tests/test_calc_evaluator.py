"""Tests for cellgrid.calc term evaluation and error values."""

from __future__ import annotations

from cellgrid.calc._errors import CellError, first_error
from cellgrid.calc._evaluator import evaluate_terms


def _lookup(values: dict[str, object]):
    return lambda ref: values.get(ref, "")


class TestCellError:
    def test_singletons(self) -> None:
        assert CellError.of("!SYNTAX") is CellError.SYNTAX
        assert CellError.of("CIRCULAR") is CellError.CIRCULAR

    def test_compares_to_code(self) -> None:
        assert CellError.SYNTAX == "!SYNTAX"
        assert CellError.CIRCULAR == "CIRCULAR"
        assert CellError.SYNTAX != CellError.CIRCULAR
        assert str(CellError.CIRCULAR) == "CIRCULAR"

    def test_not_equal_to_numbers(self) -> None:
        assert CellError.SYNTAX != 0

    def test_first_error(self) -> None:
        assert first_error(1, "x", CellError.CIRCULAR, CellError.SYNTAX) is CellError.CIRCULAR
        assert first_error(1, "x") is None


class TestEvaluateTerms:
    def test_literal_sum(self) -> None:
        assert evaluate_terms(["5", "10"], _lookup({})) == 15

    def test_leading_zero_literal(self) -> None:
        assert evaluate_terms(["007"], _lookup({})) == 7

    def test_reference_sum(self) -> None:
        assert evaluate_terms(["A1", "5", "B1"], _lookup({"A1": 10, "B1": 2})) == 17

    def test_error_propagates(self) -> None:
        values = {"A1": CellError.CIRCULAR, "B1": CellError.SYNTAX}
        assert evaluate_terms(["A1", "B1"], _lookup(values)) is CellError.CIRCULAR
        assert evaluate_terms(["B1", "A1"], _lookup(values)) is CellError.SYNTAX

    def test_text_is_syntax(self) -> None:
        assert evaluate_terms(["A1", "1"], _lookup({"A1": "hello"})) is CellError.SYNTAX

    def test_unset_is_syntax(self) -> None:
        assert evaluate_terms(["A1"], _lookup({})) is CellError.SYNTAX

    def test_text_before_error_is_syntax(self) -> None:
        values = {"A1": "x", "B1": CellError.CIRCULAR}
        assert evaluate_terms(["A1", "B1"], _lookup(values)) is CellError.SYNTAX

    def test_bool_is_syntax(self) -> None:
        assert evaluate_terms(["A1"], _lookup({"A1": True})) is CellError.SYNTAX

    def test_oversized_literal_is_syntax(self) -> None:
        assert evaluate_terms(["1", "9" * 5000], _lookup({})) is CellError.SYNTAX
