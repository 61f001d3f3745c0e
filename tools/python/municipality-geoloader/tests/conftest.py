"""Shared fixtures for the municipality geo loader tests."""

from __future__ import annotations

import itertools
import logging
from pathlib import Path
from typing import Callable

import pandas as pd
import pytest

from municipality_geoloader.config import (
    DEFAULT_HEADER,
    LoaderConfig,
    SearchOptions,
    ValidationRules,
)

SEARCH_URL = "https://nominatim.openstreetmap.org/search"


def nominatim_hit(
    lat: str,
    lon: str,
    display: str,
    *,
    type_: str = "administrative",
    addresstype: str = "municipality",
    osm_class: str = "boundary",
) -> dict:
    """Build one Nominatim JSON result object."""
    return {
        "display_name": display,
        "lat": lat,
        "lon": lon,
        "type": type_,
        "addresstype": addresstype,
        "class": osm_class,
        "importance": 0.7,
    }


@pytest.fixture(autouse=True)
def _reset_geoloader_logger():
    """Drop console handlers the loader attaches so each test starts clean."""
    yield
    logger = logging.getLogger("geoloader")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture()
def fast_search() -> SearchOptions:
    """Search options with pacing disabled."""
    return SearchOptions(delay_seconds=0)


@pytest.fixture()
def fast_config(fast_search: SearchOptions) -> LoaderConfig:
    return LoaderConfig(search=fast_search, validation=ValidationRules())


@pytest.fixture()
def sequential_ids() -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture()
def dtb_rows() -> list[list]:
    """Header row followed by two São Paulo municipalities."""
    return [
        list(DEFAULT_HEADER),
        [35, "São Paulo", 3515, "São Paulo", 3550308, "São Paulo"],
        [35, "São Paulo", 3503, "Campinas", 3509502, "Campinas"],
    ]


@pytest.fixture()
def dtb_xlsx(tmp_path: Path, dtb_rows: list[list]) -> Path:
    path = tmp_path / "DTB_SP.xlsx"
    pd.DataFrame(dtb_rows).to_excel(path, header=False, index=False)
    return path


@pytest.fixture()
def dtb_csv(tmp_path: Path, dtb_rows: list[list]) -> Path:
    path = tmp_path / "DTB_SP.csv"
    pd.DataFrame(dtb_rows).to_csv(path, header=False, index=False)
    return path
