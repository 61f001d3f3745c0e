"""
Municipality Geo Loader — CLI Entry Point
==========================================
Installed as the ``geo-muni-sql`` command via ``pyproject.toml``.

Usage:
    geo-muni-sql --input DTB_SP.xlsx --output insert.sql --table cities \\
                 --region SP --user-agent "my-app/1.0"
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from municipality_geoloader.config import (
    DEFAULT_DELAY_SECONDS,
    DEFAULT_USER_AGENT,
    NOMINATIM_SEARCH_URL,
    LoaderConfig,
    SearchOptions,
    TableConfig,
    ValidationRules,
)
from municipality_geoloader.loader import MunicipalityGeoLoader
from shared.python.exceptions import GeoLoaderError


@click.command(
    name="geo-muni-sql",
    help="Geocode a municipality spreadsheet and write a SQL INSERT statement.",
)
@click.option(
    "--input", "-i", "input_path",
    required=True,
    type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
    help="Spreadsheet to read (.xlsx or .csv).",
)
@click.option(
    "--output", "-o", "output_path",
    default="insert.sql",
    show_default=True,
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
    help="Path for the generated SQL file.",
)
@click.option(
    "--table",
    default="YOUR_TABLE_NAME",
    show_default=True,
    help="Table named in the INSERT statement.",
)
@click.option(
    "--region",
    default="SP",
    show_default=True,
    help="Region qualifier prepended to every search (empty to disable).",
)
@click.option(
    "--country-codes",
    default="br",
    show_default=True,
    help="Comma-separated ISO country codes to restrict results to.",
)
@click.option(
    "--feature-type",
    type=click.Choice(["country", "state", "city", "settlement"], case_sensitive=False),
    default="city",
    show_default=True,
    help="Granularity of accepted search results.",
)
@click.option(
    "--keyword", "keywords",
    multiple=True,
    default=("Brasil", "São Paulo"),
    show_default=True,
    help="Expected display-name keyword (repeatable).",
)
@click.option(
    "--user-agent",
    default=DEFAULT_USER_AGENT,
    envvar="NOMINATIM_USER_AGENT",
    show_default=True,
    help="User-Agent sent to Nominatim. Can also be set via NOMINATIM_USER_AGENT.",
)
@click.option(
    "--base-url",
    default=NOMINATIM_SEARCH_URL,
    envvar="NOMINATIM_URL",
    show_default=True,
    help="Search endpoint. Can also be set via NOMINATIM_URL.",
)
@click.option(
    "--delay",
    default=DEFAULT_DELAY_SECONDS,
    show_default=True,
    type=float,
    help="Minimum seconds between two requests.",
)
@click.option(
    "--timeout",
    default=10.0,
    show_default=True,
    type=float,
    help="HTTP timeout in seconds.",
)
@click.option(
    "--reject-unverified",
    is_flag=True,
    default=False,
    help="Use NULL coordinates when the top result fails the keyword or type checks.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def main(
    input_path: Path,
    output_path: Path,
    table: str,
    region: str,
    country_codes: str,
    feature_type: str,
    keywords: tuple[str, ...],
    user_agent: str,
    base_url: str,
    delay: float,
    timeout: float,
    reject_unverified: bool,
    verbose: bool,
) -> None:
    """CLI entry point — wires Click options into MunicipalityGeoLoader."""
    try:
        config = LoaderConfig(
            search=SearchOptions(
                base_url=base_url,
                feature_type=feature_type.lower(),
                region=region,
                country_codes=country_codes,
                user_agent=user_agent,
                timeout=timeout,
                delay_seconds=delay,
            ),
            validation=ValidationRules(
                keywords=tuple(keywords),
                reject_unverified=reject_unverified,
            ),
            table=TableConfig(table_name=table),
        )
        tool = MunicipalityGeoLoader(input_path, output_path, config, verbose=verbose)
        tool.run()
    except GeoLoaderError as exc:
        click.echo(f"Error: {exc.message}", err=True)
        sys.exit(1)

    found = sum(1 for r in tool.records if r.values.get("lat") is not None)
    click.echo(f"\nSQL written to: {output_path}")
    click.echo(f"Geocoded: {found}/{len(tool.records)} municipalities.")


if __name__ == "__main__":
    main()
