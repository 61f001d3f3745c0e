"""
Municipality Geo Loader — Spreadsheet Source
=============================================
Read municipality rows from an ``.xlsx`` workbook (first sheet) or a CSV file.

The file is read without a header row: the first ``len(header)`` columns
are mapped by position onto the configured header names and every cell is
kept as text, so names such as ``NA`` are never read as missing.  Rows
missing any of those cells, and rows that repeat the header labels
themselves, are dropped.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping

import pandas as pd

from municipality_geoloader.config import SheetLayout
from shared.python.exceptions import InputValidationError

logger = logging.getLogger("geoloader.source")

EXCEL_EXTENSIONS = (".xlsx",)
SUPPORTED_EXTENSIONS = (*EXCEL_EXTENSIONS, ".csv")

RawRecord = Mapping[str, str]


class SpreadsheetSource:
    """Iterable of read-only raw records matching *layout*.

    Args:
        path: Workbook or CSV file.
        layout: Expected header.
    """

    def __init__(self, path: Path, layout: SheetLayout) -> None:
        self.path = Path(path)
        self.layout = layout

    def read_frame(self) -> pd.DataFrame:
        """Load the file as text, one column per header name."""
        width = len(self.layout.header)
        suffix = self.path.suffix.lower()
        if suffix in EXCEL_EXTENSIONS:
            frame = pd.read_excel(
                self.path, sheet_name=0, header=None, dtype=str,
                keep_default_na=False, na_values=[],
            )
        elif suffix == ".csv":
            frame = pd.read_csv(
                self.path, header=None, dtype=str,
                keep_default_na=False, na_values=[],
            )
        else:
            raise InputValidationError(f"Unsupported spreadsheet type: '{self.path.name}'")

        if frame.shape[1] < width:
            raise InputValidationError(
                f"'{self.path.name}' has {frame.shape[1]} column(s); "
                f"expected at least {width}: {', '.join(self.layout.header)}"
            )
        frame = frame.iloc[:, :width]
        frame.columns = list(self.layout.header)
        return frame

    def __iter__(self) -> Iterator[RawRecord]:
        frame = self.read_frame()
        header = self.layout.header
        kept = 0
        for values in frame.itertuples(index=False, name=None):
            cells = [_clean(value) for value in values]
            if any(cell is None for cell in cells):
                continue
            if tuple(cells) == header:
                continue
            kept += 1
            yield MappingProxyType(dict(zip(header, cells)))
        logger.debug(
            "Read %d matching row(s) of %d from %s", kept, len(frame), self.path.name
        )

    def records(self) -> list[RawRecord]:
        return list(self)


def _clean(value: object) -> str | None:
    """Strip a cell; blank and missing cells become ``None``."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    text = str(value).strip()
    return text or None
