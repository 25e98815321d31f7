"""Flat-sum evaluation of parsed formula terms."""

from __future__ import annotations

import logging
from collections.abc import Callable

from cellgrid.calc._errors import CellError, first_error
from cellgrid.calc._parser import is_integer_literal, parse_integer

logger = logging.getLogger(__name__)


def evaluate_terms(
    terms: list[str],
    lookup: Callable[[str], int | str | CellError],
) -> int | CellError:
    """Sum *terms* left to right.

    Literals add their integer value; references add ``lookup(ref)``.
    A referenced error is returned as-is on first sight, and any other
    non-integer reference (text, an unset cell) yields SYNTAX.
    """
    total = 0
    for term in terms:
        if is_integer_literal(term):
            number = parse_integer(term)
            if number is None:
                logger.debug("Integer literal too long: %d digits", len(term))
                return CellError.SYNTAX
            total += number
            continue

        value = lookup(term)
        err = first_error(value)
        if err is not None:
            return err
        # bool is an int subclass but never a cell value
        if not isinstance(value, int) or isinstance(value, bool):
            logger.debug("Non-numeric operand %s = %r", term, value)
            return CellError.SYNTAX
        total += value

    return total
