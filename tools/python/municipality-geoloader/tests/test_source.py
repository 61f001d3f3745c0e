"""
Tests — Spreadsheet Source
===========================
Workbooks and CSV files are written to ``tmp_path`` with pandas.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from municipality_geoloader.config import SheetLayout
from municipality_geoloader.source import SpreadsheetSource
from shared.python.exceptions import InputValidationError


class TestSpreadsheetSource:
    def test_reads_xlsx_as_text(self, dtb_xlsx: Path) -> None:
        records = SpreadsheetSource(dtb_xlsx, SheetLayout()).records()
        assert len(records) == 2
        first = records[0]
        assert first["UF"] == "35"
        assert first["Código Município Completo"] == "3550308"
        assert first["Nome_Município"] == "São Paulo"

    def test_reads_csv(self, dtb_csv: Path) -> None:
        records = SpreadsheetSource(dtb_csv, SheetLayout()).records()
        assert [r["Nome_Município"] for r in records] == ["São Paulo", "Campinas"]

    def test_header_row_discarded(self, dtb_csv: Path) -> None:
        records = SpreadsheetSource(dtb_csv, SheetLayout()).records()
        assert all(r["UF"] != "UF" for r in records)

    def test_incomplete_rows_discarded(self, tmp_path: Path, dtb_rows: list[list]) -> None:
        rows = dtb_rows + [
            ["Fonte: IBGE", None, None, None, None, None],
            [35, "São Paulo", 3503, "Campinas", None, "Valinhos"],
        ]
        path = tmp_path / "partial.xlsx"
        pd.DataFrame(rows).to_excel(path, header=False, index=False)
        records = SpreadsheetSource(path, SheetLayout()).records()
        assert [r["Nome_Município"] for r in records] == ["São Paulo", "Campinas"]

    @pytest.mark.parametrize("suffix", [".xlsx", ".csv"])
    def test_na_like_names_kept_as_text(
        self, tmp_path: Path, dtb_rows: list[list], suffix: str
    ) -> None:
        rows = dtb_rows + [[35, "São Paulo", 3503, "None", 3599999, "NA"]]
        path = tmp_path / f"na_names{suffix}"
        frame = pd.DataFrame(rows)
        if suffix == ".xlsx":
            frame.to_excel(path, header=False, index=False)
        else:
            frame.to_csv(path, header=False, index=False)
        records = SpreadsheetSource(path, SheetLayout()).records()
        assert len(records) == 3
        assert records[2]["Nome_Município"] == "NA"
        assert records[2]["Nome Região Geográfica Intermediária"] == "None"

    def test_xls_not_supported(self, tmp_path: Path) -> None:
        path = tmp_path / "DTB_SP.xls"
        path.write_bytes(b"\xd0\xcf\x11\xe0")
        with pytest.raises(InputValidationError, match="Unsupported"):
            SpreadsheetSource(path, SheetLayout()).records()

    def test_records_are_read_only(self, dtb_csv: Path) -> None:
        record = SpreadsheetSource(dtb_csv, SheetLayout()).records()[0]
        with pytest.raises(TypeError):
            record["UF"] = "41"  # type: ignore[index]

    def test_extra_columns_ignored(self, tmp_path: Path, dtb_rows: list[list]) -> None:
        path = tmp_path / "wide.csv"
        pd.DataFrame([row + ["extra"] for row in dtb_rows]).to_csv(path, header=False, index=False)
        records = SpreadsheetSource(path, SheetLayout()).records()
        assert len(records) == 2
        assert "extra" not in records[0].values()

    def test_too_few_columns_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "narrow.csv"
        path.write_text("35,São Paulo\n", encoding="utf-8")
        with pytest.raises(InputValidationError, match="expected at least 6"):
            SpreadsheetSource(path, SheetLayout()).records()

    def test_unsupported_extension_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "cities.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(InputValidationError):
            SpreadsheetSource(path, SheetLayout()).records()
