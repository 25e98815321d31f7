"""JSON persistence of a sheet's raw grid.

Only raw texts are stored, row-major. Loading replays them through
``Sheet.set`` so dependencies and computed values are rebuilt exactly.
"""

from __future__ import annotations

import json
import logging
import os

from cellgrid._sheet import Sheet

logger = logging.getLogger(__name__)


def dumps(sheet: Sheet) -> str:
    """Serialize *sheet*'s raw grid to a JSON array of rows."""
    return json.dumps(sheet.export_raw_grid())


def loads(
    text: str,
    max_rows: int | None = None,
    max_cols: int | None = None,
) -> Sheet:
    """Rebuild a sheet from ``dumps`` output.

    Dimensions left as None are taken from the payload: its row count and
    its longest row. Raises ValueError for malformed JSON, a payload that
    is not a list of rows, or one larger than the grid limits.
    """
    try:
        rows = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid sheet data: {e}") from e
    if not isinstance(rows, list) or not all(isinstance(row, list) for row in rows):
        raise ValueError("Invalid sheet data: expected a JSON array of rows")
    if max_rows is None:
        max_rows = max(len(rows), 1)
    if max_cols is None:
        max_cols = max((len(row) for row in rows), default=1) or 1
    return Sheet.from_raw_grid(rows, max_rows, max_cols)


def save(sheet: Sheet, path: str | os.PathLike[str]) -> None:
    """Write *sheet*'s raw grid to *path*."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(dumps(sheet))
    logger.debug("Saved %r to %s", sheet, os.fspath(path))


def load_sheet(
    path: str | os.PathLike[str],
    max_rows: int | None = None,
    max_cols: int | None = None,
) -> Sheet:
    """Read a sheet saved with ``save``, sized like the saved grid by default."""
    with open(path, encoding="utf-8") as f:
        sheet = loads(f.read(), max_rows, max_cols)
    logger.debug("Loaded %r from %s", sheet, os.fspath(path))
    return sheet
