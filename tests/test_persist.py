"""Tests for cellgrid JSON persistence of the raw grid."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cellgrid import CIRCULAR, Sheet, dumps, load_sheet, loads, save


def _build_mixed() -> Sheet:
    """Literals, text, formulas, a syntax error and a cycle."""
    sheet = Sheet(5, 10)
    sheet["A1"] = "10"
    sheet["B1"] = "label"
    sheet["A2"] = "=A1 + 5"
    sheet["B2"] = "=A1 * 2"
    sheet["C3"] = "=D3"
    sheet["D3"] = "=C3"
    sheet["E5"] = "=A2 + A1 + 1"
    return sheet


class TestDumps:
    def test_raw_layout(self) -> None:
        rows = json.loads(dumps(_build_mixed()))
        assert len(rows) == 5
        assert all(len(row) == 10 for row in rows)
        assert rows[0][:2] == ["10", "label"]
        assert rows[1][:2] == ["=A1 + 5", "=A1 * 2"]
        assert rows[4][4] == "=A2 + A1 + 1"


class TestLoads:
    def test_roundtrip_rebuilds_values(self) -> None:
        original = _build_mixed()
        restored = loads(dumps(original))
        assert restored.export_grid() == original.export_grid()
        assert restored.get("E5") == 26
        assert restored.get("C3") is CIRCULAR

    def test_rejects_bad_json(self) -> None:
        with pytest.raises(ValueError, match="Invalid sheet data"):
            loads("{not json")

    def test_rejects_non_grid(self) -> None:
        with pytest.raises(ValueError, match="expected a JSON array"):
            loads('{"A1": "1"}')
        with pytest.raises(ValueError, match="expected a JSON array"):
            loads('["1", "2"]')

    def test_non_text_entries_degrade(self) -> None:
        sheet = loads("[[1, null]]")
        assert sheet.get("A1") == "!SYNTAX"
        assert sheet.get_raw("A1") == "1"
        assert sheet.get_raw("B1") == "None"

    def test_roundtrip_keeps_dimensions(self) -> None:
        original = Sheet(20, 26)
        original["Z20"] = "7"
        original["A20"] = "=Z20 + 1"
        restored = loads(dumps(original))
        assert restored.dimensions == (20, 26)
        assert restored.get("Z20") == 7
        assert restored.get("A20") == 8
        assert restored.export_grid() == original.export_grid()

    def test_explicit_dimensions_override_payload(self) -> None:
        restored = loads(dumps(_build_mixed()), 2, 2)
        assert restored.dimensions == (2, 2)
        assert restored.export_grid() == [[10, "label"], [15, "!SYNTAX"]]

    def test_empty_payload(self) -> None:
        assert loads("[]").dimensions == (1, 1)

    def test_payload_past_grid_limits(self) -> None:
        with pytest.raises(ValueError, match="Maximum 999 rows allowed"):
            loads(json.dumps([[""]] * 1000))


class TestFiles:
    def test_save_and_load(self, tmp_path: Path) -> None:
        path = tmp_path / "sheet.json"
        original = _build_mixed()
        save(original, path)
        restored = load_sheet(path)
        assert restored.export_raw_grid() == original.export_raw_grid()
        assert restored.export_grid() == original.export_grid()

    def test_save_and_load_large_sheet(self, tmp_path: Path) -> None:
        path = tmp_path / "large.json"
        original = Sheet(999, 26)
        original["A1"] = "1"
        original["Z999"] = "=A1 + 2"
        save(original, path)
        restored = load_sheet(path)
        assert restored.dimensions == (999, 26)
        assert restored.get("Z999") == 3

    def test_load_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_sheet(tmp_path / "missing.json")
