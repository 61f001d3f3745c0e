"""
Tests — Loader Configuration
=============================
Startup checks on :mod:`municipality_geoloader.config`.
"""

from __future__ import annotations

import dataclasses

import pytest

from municipality_geoloader.config import (
    ColumnKind,
    LoaderConfig,
    SearchOptions,
    SheetLayout,
    TableConfig,
)
from shared.python.exceptions import ConfigurationError


class TestTableConfig:
    def test_default_columns_order(self) -> None:
        assert TableConfig().columns == (
            "UF",
            "StateName",
            "intermediateGeographicalRegionCode",
            "intermediateGeographicalRegionName",
            "fullMunicipalityCode",
            "cityName",
            "lon",
            "lat",
            "id",
        )

    def test_kinds_resolved(self) -> None:
        table = TableConfig()
        assert table.kind_of("lat") is ColumnKind.FLOAT
        assert table.kind_of("UF") is ColumnKind.INTEGER
        assert table.kind_of("cityName") is ColumnKind.TEXT
        assert table.kind_of("id") is ColumnKind.TEXT

    def test_unknown_integer_column_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="integer columns"):
            TableConfig(integer_columns=("UF", "population"))

    def test_unknown_float_column_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="float columns"):
            TableConfig(float_columns=("lat", "altitude"))

    def test_column_in_both_numeric_sets_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="both float and integer"):
            TableConfig(float_columns=("lat", "lon", "UF"))

    def test_duplicate_columns_raise(self) -> None:
        with pytest.raises(ConfigurationError, match="Duplicate"):
            TableConfig(derived_columns=("lon", "lat", "id", "lat"))

    def test_blank_table_name_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            TableConfig(table_name="  ")

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            TableConfig().table_name = "other"  # type: ignore[misc]


class TestSheetAndSearch:
    def test_search_column_must_be_in_header(self) -> None:
        with pytest.raises(ConfigurationError, match="sheet header"):
            SheetLayout(search_column="Município")

    def test_carried_headers_must_be_in_sheet(self) -> None:
        table = TableConfig(carried_columns=(("cityName", "Cidade"),), integer_columns=())
        with pytest.raises(ConfigurationError, match="carried column headers"):
            LoaderConfig(table=table)

    @pytest.mark.parametrize(
        "kwargs",
        [{"result_limit": 0}, {"timeout": 0}, {"delay_seconds": -1}, {"user_agent": " "}],
    )
    def test_invalid_search_options(self, kwargs: dict) -> None:
        with pytest.raises(ConfigurationError):
            SearchOptions(**kwargs)
