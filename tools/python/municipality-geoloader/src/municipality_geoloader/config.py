"""
Municipality Geo Loader — Configuration
========================================
Immutable configuration objects built once at startup and handed to each
component explicitly.

Classes:
    ColumnKind        How a column's values are rendered as SQL literals.
    SheetLayout       Fixed spreadsheet header and the column searched on.
    SearchOptions     Nominatim request settings and pacing.
    ValidationRules   Advisory acceptance rules for the top search result.
    TableConfig       Target table, column list and numeric column sets.
    LoaderConfig      Bundle of the above, cross-validated.

The defaults load the IBGE "DTB" municipality sheet for the state of
São Paulo.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from shared.python.exceptions import ConfigurationError
from shared.python.validators import Validators

NOMINATIM_SEARCH_URL = "https://nominatim.openstreetmap.org/search"
DEFAULT_USER_AGENT = "citylookup/v1.0"
DEFAULT_DELAY_SECONDS = 1.001

DEFAULT_HEADER = (
    "UF",
    "Nome_UF",
    "Região Geográfica Intermediária",
    "Nome Região Geográfica Intermediária",
    "Código Município Completo",
    "Nome_Município",
)


class ColumnKind(enum.Enum):
    """SQL rendering kind of an output column."""

    TEXT = "text"
    FLOAT = "float"
    INTEGER = "integer"


@dataclass(frozen=True)
class SheetLayout:
    """Header every input row must match, and the column holding the place name."""

    header: tuple[str, ...] = DEFAULT_HEADER
    search_column: str = "Nome_Município"

    def __post_init__(self) -> None:
        Validators.assert_unique(self.header, "header columns")
        Validators.assert_subset(
            [self.search_column], self.header, "search column", "sheet header"
        )


@dataclass(frozen=True)
class SearchOptions:
    """Settings for the Nominatim ``/search`` endpoint.

    Attributes:
        base_url: Search endpoint; point it at a self-hosted instance if needed.
        output_format: Value of the ``format`` parameter.
        feature_type: Result granularity (``country``, ``state``, ``city``,
            ``settlement``).
        result_limit: Value of the ``limit`` parameter.
        region: Administrative qualifier prepended to every query (e.g. a
            state abbreviation).  Empty to search without one.
        country_codes: Comma-separated ISO 3166-1 alpha-2 codes, or empty.
        user_agent: Identifies the application, required by Nominatim.
        timeout: HTTP timeout in seconds.
        delay_seconds: Minimum spacing between two requests.
    """

    base_url: str = NOMINATIM_SEARCH_URL
    output_format: str = "json"
    feature_type: str = "city"
    result_limit: int = 1
    region: str = "SP"
    country_codes: str = "br"
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 10.0
    delay_seconds: float = DEFAULT_DELAY_SECONDS

    def __post_init__(self) -> None:
        if self.result_limit < 1:
            raise ConfigurationError(f"result_limit must be >= 1, got {self.result_limit}")
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        if self.delay_seconds < 0:
            raise ConfigurationError(f"delay_seconds must be >= 0, got {self.delay_seconds}")
        if not self.user_agent.strip():
            raise ConfigurationError("user_agent must not be blank")


@dataclass(frozen=True)
class ValidationRules:
    """Acceptance rules checked against each search response.

    Failing a rule is logged.  It only changes the output when
    ``reject_unverified`` is set, in which case the row gets null
    coordinates instead of the unverified match.
    """

    address_types: frozenset[str] = frozenset({"municipality"})
    types: frozenset[str] = frozenset({"administrative"})
    classes: frozenset[str] = frozenset({"boundary"})
    keywords: tuple[str, ...] = ("Brasil", "São Paulo")
    reject_unverified: bool = False


@dataclass(frozen=True)
class TableConfig:
    """Target table layout.

    Attributes:
        table_name: Table named in the ``INSERT INTO`` clause.
        carried_columns: ``(column, sheet header)`` pairs copied verbatim
            from each input row, in output order.
        derived_columns: Columns filled by the enrichment step.
        float_columns: Columns rendered as float literals.
        integer_columns: Columns rendered as integer literals.

    Every other column is rendered as quoted text.
    """

    table_name: str = "YOUR_TABLE_NAME"
    carried_columns: tuple[tuple[str, str], ...] = (
        ("UF", "UF"),
        ("StateName", "Nome_UF"),
        ("intermediateGeographicalRegionCode", "Região Geográfica Intermediária"),
        ("intermediateGeographicalRegionName", "Nome Região Geográfica Intermediária"),
        ("fullMunicipalityCode", "Código Município Completo"),
        ("cityName", "Nome_Município"),
    )
    derived_columns: tuple[str, ...] = ("lon", "lat", "id")
    float_columns: tuple[str, ...] = ("lon", "lat")
    integer_columns: tuple[str, ...] = (
        "UF",
        "intermediateGeographicalRegionCode",
        "fullMunicipalityCode",
    )

    def __post_init__(self) -> None:
        if not self.table_name.strip():
            raise ConfigurationError("table_name must not be blank")
        columns = self.columns
        Validators.assert_unique(columns, "table columns")
        Validators.assert_subset(self.float_columns, columns, "float columns")
        Validators.assert_subset(self.integer_columns, columns, "integer columns")
        overlap = sorted(set(self.float_columns) & set(self.integer_columns))
        if overlap:
            raise ConfigurationError(
                f"columns declared both float and integer: {overlap}"
            )

    @property
    def columns(self) -> tuple[str, ...]:
        """Full output column list, carried columns first."""
        return tuple(name for name, _ in self.carried_columns) + self.derived_columns

    def kind_of(self, column: str) -> ColumnKind:
        """Return the single :class:`ColumnKind` of *column*."""
        if column in self.float_columns:
            return ColumnKind.FLOAT
        if column in self.integer_columns:
            return ColumnKind.INTEGER
        return ColumnKind.TEXT


@dataclass(frozen=True)
class LoaderConfig:
    """Everything the loader needs, checked for consistency on creation."""

    sheet: SheetLayout = field(default_factory=SheetLayout)
    search: SearchOptions = field(default_factory=SearchOptions)
    validation: ValidationRules = field(default_factory=ValidationRules)
    table: TableConfig = field(default_factory=TableConfig)

    def __post_init__(self) -> None:
        headers = [header for _, header in self.table.carried_columns]
        Validators.assert_subset(
            headers, self.sheet.header, "carried column headers", "sheet header"
        )
