"""cellgrid — a small reactive grid of cells with ``=A1 + B2 + 3`` formulas.

Usage::

    from cellgrid import CellError, Sheet, load_sheet, save

    sheet = Sheet(5, 10)
    sheet["A1"] = "10"
    sheet["B1"] = "=A1 + 5"
    print(sheet["B1"])              # 15

    sheet["A1"] = "=B1"
    sheet["B1"] == CellError.CIRCULAR   # True

    save(sheet, "sheet.json")
    sheet = load_sheet("sheet.json")
"""

from cellgrid._persist import dumps, load_sheet, loads, save
from cellgrid._sheet import Sheet
from cellgrid._utils import MAX_COLS, MAX_ROWS
from cellgrid.calc import CellDelta, CellError, CellValue, DimensionError, GridEngine

__version__ = "0.1.0"

SYNTAX = CellError.SYNTAX
CIRCULAR = CellError.CIRCULAR

__all__ = [
    "__version__",
    "CIRCULAR",
    "CellDelta",
    "CellError",
    "CellValue",
    "DimensionError",
    "GridEngine",
    "MAX_COLS",
    "MAX_ROWS",
    "SYNTAX",
    "Sheet",
    "dumps",
    "load_sheet",
    "loads",
    "save",
]
