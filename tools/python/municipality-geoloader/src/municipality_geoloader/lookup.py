"""
Municipality Geo Loader — Geocoding Lookup
===========================================
Resolve a place name to a latitude/longitude pair through the Nominatim
``/search`` endpoint.

A lookup never raises for a single bad row: transport errors, HTTP errors,
malformed payloads and empty result sets all come back as the
null-coordinate sentinel, :meth:`Coordinates.missing`, so one bad row never
stops a batch.

Classes:
    Coordinates         Latitude/longitude pair, possibly null.
    GeoCandidate        One search result, as returned by Nominatim.
    ResultValidator     Advisory keyword and type/class checks.
    NominatimClient     Paced, single-request-per-call search client.

Functions:
    extract_coordinates Parse the numeric pair out of a candidate.

Reference:
    https://nominatim.org/release-docs/develop/api/Search/
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from types import TracebackType
from typing import Any, Sequence

import requests

from municipality_geoloader.config import SearchOptions, ValidationRules
from municipality_geoloader.pacer import Pacer
from shared.python.exceptions import LookupFailure

logger = logging.getLogger("geoloader.lookup")


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Coordinates:
    """WGS84 coordinates of a place, or a null pair when none was found."""

    latitude: float | None
    longitude: float | None

    @classmethod
    def missing(cls) -> Coordinates:
        """The null-coordinate sentinel: no match, not an error."""
        return cls(latitude=None, longitude=None)

    @property
    def found(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass(frozen=True)
class GeoCandidate:
    """A single Nominatim search result.

    Attributes:
        display_name: Full formatted name, e.g. ``"Campinas, São Paulo, Brasil"``.
        lat: Latitude as returned by the service (text).
        lon: Longitude as returned by the service (text).
        type: OSM feature type, e.g. ``"administrative"``.
        addresstype: Address rank label, e.g. ``"municipality"``.
        osm_class: OSM class (``class`` in the JSON), e.g. ``"boundary"``.
    """

    display_name: str
    lat: str
    lon: str
    type: str = ""
    addresstype: str = ""
    osm_class: str = ""

    @classmethod
    def from_json(cls, item: dict[str, Any]) -> GeoCandidate:
        """Build a candidate from one JSON result object.

        Raises:
            KeyError: If ``display_name``, ``lat`` or ``lon`` is absent.
        """
        return cls(
            display_name=str(item["display_name"]),
            lat=str(item["lat"]),
            lon=str(item["lon"]),
            type=str(item.get("type", "")),
            addresstype=str(item.get("addresstype", "")),
            osm_class=str(item.get("class", "")),
        )


def extract_coordinates(candidate: GeoCandidate) -> Coordinates:
    """Parse the latitude/longitude text of *candidate* into floats.

    Raises:
        ValueError: If either field is not numeric text.
    """
    return Coordinates(latitude=float(candidate.lat), longitude=float(candidate.lon))


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class ResultValidator:
    """Check whether a search response looks like the place that was asked for.

    The verdict is advisory: failures are logged, and the caller decides
    whether to act on the return value.

    Args:
        rules: Accepted types/classes and expected display-name keywords.
    """

    def __init__(self, rules: ValidationRules) -> None:
        self.rules = rules
        self._keywords = [word.lower() for word in rules.keywords]

    def keywords_match(self, candidates: Sequence[GeoCandidate]) -> bool:
        """True if any keyword appears (case-insensitively) in any display name."""
        return any(
            word in candidate.display_name.lower()
            for candidate in candidates
            for word in self._keywords
        )

    def restrictions_match(self, candidates: Sequence[GeoCandidate]) -> bool:
        """True if the top candidate's type, address type and class are all accepted."""
        top = candidates[0]
        type_ok = top.type in self.rules.types
        address_type_ok = top.addresstype in self.rules.address_types
        class_ok = top.osm_class in self.rules.classes
        logger.debug(
            "type valid: %s | addresstype valid: %s | class valid: %s",
            type_ok, address_type_ok, class_ok,
        )
        return type_ok and address_type_ok and class_ok

    def check(
        self,
        query: str,
        candidates: Sequence[GeoCandidate],
        raw: Any = None,
    ) -> bool:
        """Run both checks, log every failure, and return whether both passed.

        Args:
            query: The search text, used in log messages.
            candidates: Non-empty parsed response.
            raw: Original JSON payload, dumped at DEBUG level on failure.
        """
        keywords_ok = self.keywords_match(candidates)
        if not keywords_ok:
            logger.warning("Keywords not found for the search: %s", query)
        restrictions_ok = self.restrictions_match(candidates)
        if not restrictions_ok:
            logger.warning("No results match the type/class restrictions for %s", query)
        if not (keywords_ok and restrictions_ok) and raw is not None:
            logger.debug("Response: %s", json.dumps(raw, indent=2, ensure_ascii=False))
        return keywords_ok and restrictions_ok


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class NominatimClient:
    """Look up place coordinates on a Nominatim server, one paced request per call.

    Must comply with the Nominatim Usage Policy: a descriptive User-Agent
    and no more than one request per second.

    Args:
        options: Endpoint, query parameters, timeout and pacing.
        rules: Acceptance rules for :class:`ResultValidator`.
        pacer: Spacing between requests.  Built from
               ``options.delay_seconds`` when omitted.
        session: HTTP session to reuse.  A new one is created when omitted.
    """

    def __init__(
        self,
        options: SearchOptions,
        rules: ValidationRules,
        *,
        pacer: Pacer | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.options = options
        self.rules = rules
        self.validator = ResultValidator(rules)
        self.pacer = pacer or Pacer(options.delay_seconds)
        self._session = session or requests.Session()
        self._session.headers["User-Agent"] = options.user_agent

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def lookup(self, query: Any, region: str | None = None) -> Coordinates:
        """Return the coordinates of *query*, or the null sentinel.

        Args:
            query: Free-text place name.  Blank or non-string values are
                   rejected without any network call.
            region: Administrative qualifier prepended to the query.
                    Defaults to ``options.region``.
        """
        if not isinstance(query, str) or not query.strip():
            logger.warning("Invalid query string: %r", query)
            return Coordinates.missing()

        search_text = self.build_search_text(
            query, self.options.region if region is None else region
        )
        try:
            payload = self._fetch(search_text)
            candidates = self._parse_candidates(query, payload)
            if not candidates:
                logger.info("Query %s returned no results.", query)
                return Coordinates.missing()

            verified = self.validator.check(search_text, candidates, raw=payload)
            if not verified and self.rules.reject_unverified:
                logger.warning("Discarding unverified match for %s", query)
                return Coordinates.missing()

            return extract_coordinates(candidates[0])
        except (requests.RequestException, ValueError, LookupFailure):
            logger.exception("There was an error searching for %s", query)
            return Coordinates.missing()

    @staticmethod
    def build_search_text(query: str, region: str) -> str:
        """Replace commas with spaces and prepend *region* when given.

        ``requests`` encodes the spaces as ``+`` in the query string.
        """
        parts = [part.strip() for part in query.split(",") if part.strip()]
        if region.strip():
            parts.insert(0, region.strip())
        return " ".join(parts)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> NominatimClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _params(self, search_text: str) -> dict[str, Any]:
        params: dict[str, Any] = {
            "format": self.options.output_format,
            "limit": self.options.result_limit,
            "featureType": self.options.feature_type,
            "q": search_text,
        }
        if self.options.country_codes:
            params["countrycodes"] = self.options.country_codes
        return params

    def _fetch(self, search_text: str) -> Any:
        self.pacer.wait()
        response = self._session.get(
            self.options.base_url,
            params=self._params(search_text),
            timeout=self.options.timeout,
        )
        response.raise_for_status()
        return response.json()

    @staticmethod
    def _parse_candidates(query: str, payload: Any) -> list[GeoCandidate]:
        if not payload:
            return []
        if not isinstance(payload, list):
            raise LookupFailure(query, f"expected a JSON array, got {type(payload).__name__}")
        try:
            return [GeoCandidate.from_json(item) for item in payload]
        except (KeyError, TypeError, AttributeError) as exc:
            raise LookupFailure(query, f"malformed result object: {exc!r}") from exc
