"""
Municipality Geo Loader — Row Enrichment
=========================================
Merge a raw spreadsheet row with its lookup coordinates and a freshly
generated identifier into one output record.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping

from municipality_geoloader.config import TableConfig
from municipality_geoloader.lookup import Coordinates
from municipality_geoloader.source import RawRecord
from shared.python.exceptions import ConfigurationError


def new_record_id() -> str:
    """Random UUID4 string."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class EnrichedRecord:
    """One output row, keyed by table column."""

    values: Mapping[str, Any]

    def __getitem__(self, column: str) -> Any:
        return self.values[column]


class RowEnricher:
    """Build :class:`EnrichedRecord` objects for a given table layout.

    Derived columns are filled by a per-column rule:

    * ``lat`` / ``lon`` — from the lookup :class:`Coordinates`.
    * ``id`` — from *id_factory*, called once per record whatever the
      lookup outcome.

    Args:
        table: Column layout; every derived column must have a rule.
        id_factory: Unique identifier generator.

    Raises:
        ConfigurationError: If a derived column has no rule.
    """

    def __init__(
        self,
        table: TableConfig,
        id_factory: Callable[[], Any] = new_record_id,
    ) -> None:
        self.table = table
        self._rules: dict[str, Callable[[Coordinates], Any]] = {
            "lat": lambda coords: coords.latitude,
            "lon": lambda coords: coords.longitude,
            "id": lambda _coords: id_factory(),
        }
        unknown = [c for c in table.derived_columns if c not in self._rules]
        if unknown:
            raise ConfigurationError(
                f"No enrichment rule for derived columns: {unknown}. "
                f"Known: {sorted(self._rules)}"
            )

    def enrich(self, raw: RawRecord, coordinates: Coordinates) -> EnrichedRecord:
        values: dict[str, Any] = {
            column: raw[header] for column, header in self.table.carried_columns
        }
        for column in self.table.derived_columns:
            values[column] = self._rules[column](coordinates)
        return EnrichedRecord(MappingProxyType(values))
