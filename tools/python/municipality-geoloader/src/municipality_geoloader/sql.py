"""
Municipality Geo Loader — SQL INSERT Builder
=============================================
Serialise enriched records into one multi-row ``INSERT`` statement::

    INSERT INTO
    cities (UF, cityName, lat)
    VALUES
    (35, 'Campinas', -22.9),
    	(35, 'Sumaré', NULL);

Quoting is limited to doubling single quotes.  That keeps ordinary names
like ``D'Oeste`` valid but is not a defence against hostile input.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Sequence

from municipality_geoloader.config import ColumnKind, TableConfig
from municipality_geoloader.enricher import EnrichedRecord
from shared.python.exceptions import NoRowsError, SqlValueError

NULL = "NULL"


def is_null(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def quote_text(value: Any) -> str:
    """Single-quote *value*, doubling every embedded quote."""
    return "'" + str(value).replace("'", "''") + "'"


def render_value(column: str, kind: ColumnKind, value: Any) -> str:
    """Render one value as a SQL literal of the given column *kind*.

    Raises:
        SqlValueError: If a numeric column holds non-numeric text.
    """
    if is_null(value):
        return NULL
    if kind is ColumnKind.TEXT:
        return quote_text(value)
    try:
        if kind is ColumnKind.FLOAT:
            number = float(value)
            if math.isnan(number) or math.isinf(number):
                return NULL
            return repr(number)
        return str(_to_int(value))
    except (TypeError, ValueError) as exc:
        raise SqlValueError(column, value, kind.name) from exc


def _to_int(value: Any) -> int:
    if isinstance(value, int):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        number = float(text)
        if not number.is_integer():
            raise
        return int(number)


class SqlInsertBuilder:
    """Build the ``INSERT`` statement for *table*.

    Column kinds are resolved once, at construction.
    """

    def __init__(self, table: TableConfig) -> None:
        self.table = table
        self._columns = table.columns
        self._kinds = tuple(table.kind_of(column) for column in self._columns)

    def check_carried(self, row: Mapping[str, Any]) -> None:
        """Render the carried columns of a raw sheet *row* and discard the result.

        Raises:
            SqlValueError: On the first value that does not fit its column kind.
        """
        for column, header in self.table.carried_columns:
            render_value(column, self.table.kind_of(column), row.get(header))

    def values_tuple(self, record: EnrichedRecord) -> str:
        literals = [
            render_value(column, kind, record.values.get(column))
            for column, kind in zip(self._columns, self._kinds)
        ]
        return f"({', '.join(literals)})"

    def build(self, records: Sequence[EnrichedRecord]) -> str:
        """Return one statement with a value tuple per record, in order.

        Raises:
            NoRowsError: If *records* is empty.
            SqlValueError: If a value does not fit its column kind.
        """
        if not records:
            raise NoRowsError("the record list passed to the SQL builder")
        rows = ",\n\t".join(self.values_tuple(record) for record in records)
        return (
            f"INSERT INTO\n{self.table.table_name} ({', '.join(self._columns)})\n"
            f"VALUES\n{rows};"
        )
