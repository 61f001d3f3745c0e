"""
Municipality Geo Loader
========================
Enrich a municipality spreadsheet with Nominatim coordinates and emit a
batch SQL ``INSERT`` statement.

Public API::

    from municipality_geoloader import MunicipalityGeoLoader, LoaderConfig
"""

from municipality_geoloader.config import (
    ColumnKind,
    LoaderConfig,
    SearchOptions,
    SheetLayout,
    TableConfig,
    ValidationRules,
)
from municipality_geoloader.enricher import EnrichedRecord, RowEnricher
from municipality_geoloader.loader import MunicipalityGeoLoader
from municipality_geoloader.lookup import (
    Coordinates,
    GeoCandidate,
    NominatimClient,
    ResultValidator,
    extract_coordinates,
)
from municipality_geoloader.pacer import Pacer
from municipality_geoloader.source import SpreadsheetSource
from municipality_geoloader.sql import SqlInsertBuilder

__all__ = [
    "MunicipalityGeoLoader",
    "LoaderConfig",
    "SheetLayout",
    "SearchOptions",
    "ValidationRules",
    "TableConfig",
    "ColumnKind",
    "SpreadsheetSource",
    "NominatimClient",
    "ResultValidator",
    "GeoCandidate",
    "Coordinates",
    "extract_coordinates",
    "Pacer",
    "RowEnricher",
    "EnrichedRecord",
    "SqlInsertBuilder",
]
__version__ = "1.0.0"
