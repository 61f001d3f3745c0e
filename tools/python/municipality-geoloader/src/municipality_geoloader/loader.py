"""
Municipality Geo Loader — Core Module
======================================
Geocode every municipality in a spreadsheet and write one SQL ``INSERT``
statement that loads the enriched rows.

Architecture:
    ``SpreadsheetSource`` yields raw rows, ``NominatimClient`` resolves each
    name (paced, strictly one request at a time), ``RowEnricher`` adds the
    coordinates and a new identifier, and ``SqlInsertBuilder`` renders the
    statement.  All components receive the same frozen ``LoaderConfig``.

Usage::

    from pathlib import Path
    from municipality_geoloader.loader import MunicipalityGeoLoader

    MunicipalityGeoLoader(
        input_path=Path("DTB_SP.xlsx"),
        output_path=Path("insert.sql"),
    ).run()
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from municipality_geoloader.config import LoaderConfig
from municipality_geoloader.enricher import EnrichedRecord, RowEnricher, new_record_id
from municipality_geoloader.lookup import NominatimClient
from municipality_geoloader.source import SUPPORTED_EXTENSIONS, RawRecord, SpreadsheetSource
from municipality_geoloader.sql import SqlInsertBuilder
from shared.python.base_tool import LoaderTool
from shared.python.exceptions import NoRowsError, OutputWriteError, SqlValueError
from shared.python.validators import Validators

logger = logging.getLogger("geoloader.loader")


class MunicipalityGeoLoader(LoaderTool):
    """Enrich spreadsheet rows with coordinates and write an ``INSERT`` file.

    Failed lookups never stop the run: the row is kept with ``NULL``
    coordinates.  Rows with a non-numeric value in a numeric column are
    skipped before any lookup.

    Args:
        input_path: Spreadsheet (``.xlsx`` or ``.csv``).
        output_path: SQL file to write.
        config: Loader configuration; validated when constructed.
        client: Lookup client to use.  Built from *config* when omitted, in
            which case the loader closes it once the lookups are done.
        id_factory: Identifier generator for the ``id`` column.
        verbose: Enable DEBUG-level logging.
    """

    def __init__(
        self,
        input_path: Path,
        output_path: Path,
        config: LoaderConfig | None = None,
        *,
        client: NominatimClient | None = None,
        id_factory: Callable[[], Any] = new_record_id,
        verbose: bool = False,
    ) -> None:
        super().__init__(input_path, output_path, verbose=verbose)
        self.config = config or LoaderConfig()
        self._owns_client = client is None
        self.client = client or NominatimClient(self.config.search, self.config.validation)
        self.enricher = RowEnricher(self.config.table, id_factory=id_factory)
        self.builder = SqlInsertBuilder(self.config.table)

        self._records: list[EnrichedRecord] = []
        self._skipped = 0

    # ------------------------------------------------------------------
    # LoaderTool abstract method implementations
    # ------------------------------------------------------------------

    def validate_inputs(self) -> None:
        """Check the input file and prepare the output directory.

        Raises:
            InputValidationError: If the file is missing or not a spreadsheet.
            OutputWriteError: If the output directory cannot be created.
        """
        Validators.assert_file_exists(self.input_path)
        Validators.assert_supported_extension(self.input_path, SUPPORTED_EXTENSIONS)
        Validators.assert_output_dir_writable(self.output_path)
        logger.debug("Inputs validated successfully.")

    def process(self) -> None:
        """Look up every row in order and write the statement.

        Rows whose carried numeric cells cannot be rendered are skipped with
        a warning before any lookup is made.

        Raises:
            NoRowsError: If the spreadsheet has no usable rows.
            OutputWriteError: If the SQL file cannot be written.
        """
        rows = self._usable_rows(
            SpreadsheetSource(self.input_path, self.config.sheet).records()
        )
        if not rows:
            raise NoRowsError(str(self.input_path))

        search_column = self.config.sheet.search_column
        total = len(rows)
        logger.info("Starting lookup of %d municipalities...", total)

        records: list[EnrichedRecord] = []
        found = 0
        try:
            for i, row in enumerate(rows, start=1):
                query = row[search_column]
                logger.info("[%d/%d] processing entry=%s", i, total, query)
                coordinates = self.client.lookup(query)
                records.append(self.enricher.enrich(row, coordinates))

                if coordinates.found:
                    found += 1
                    logger.debug("  ✓ %s → (%.5f, %.5f)", query, coordinates.latitude, coordinates.longitude)
                else:
                    logger.warning("  ✗ No coordinates for %s", query)
        finally:
            if self._owns_client:
                self.client.close()

        self._records = records
        self._write_sql(self.builder.build(records))

        logger.info(
            "Lookup complete: %d/%d found, %d without coordinates, %d rows skipped.",
            found, total, total - found, self._skipped,
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _usable_rows(self, rows: list[RawRecord]) -> list[RawRecord]:
        search_column = self.config.sheet.search_column
        usable: list[RawRecord] = []
        for row in rows:
            try:
                self.builder.check_carried(row)
            except SqlValueError as exc:
                logger.warning("Skipping row %s: %s", row[search_column], exc.message)
                continue
            usable.append(row)
        self._skipped = len(rows) - len(usable)
        return usable

    def _write_sql(self, statement: str) -> None:
        try:
            self.output_path.write_text(statement, encoding="utf-8")
        except OSError as exc:
            logger.error("There was an error while writing %s: %s", self.output_path, exc)
            raise OutputWriteError(str(self.output_path), str(exc)) from exc
        logger.info("INSERT statement written to %s", self.output_path)

    @property
    def records(self) -> list[EnrichedRecord]:
        """Records produced by the last run, or ``[]``."""
        return self._records

    @property
    def skipped(self) -> int:
        """Rows the last run dropped for invalid numeric cells."""
        return self._skipped
