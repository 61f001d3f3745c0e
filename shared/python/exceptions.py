"""
Geo Loader — Custom Exception Hierarchy
========================================
Every geo loader module raises exceptions from this module so callers can
catch them at the right level of granularity.

Hierarchy::

    GeoLoaderError                       ← catch-all base
    ├── ConfigurationError               ← static column / search config is wrong
    ├── InputValidationError             ← bad files, missing columns, etc.
    │   └── NoRowsError                  ← input holds no usable rows
    ├── LookupFailure                    ← one geocoding call failed (recovered)
    ├── SqlValueError                    ← value cannot be coerced to its column kind
    └── OutputWriteError                 ← cannot write to output path

Usage::

    from shared.python.exceptions import ConfigurationError

    raise ConfigurationError("integer columns not in table columns: ['UF']")
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


class GeoLoaderError(Exception):
    """Base exception for all geo loader errors.

    Catch this to handle any loader-specific error without caring about
    the exact subtype.

    Args:
        message: Human-readable description of the error.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message: str = message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigurationError(GeoLoaderError):
    """Raised at startup when the static configuration is inconsistent.

    Always fatal: it is raised before any input row is read.
    """


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------


class InputValidationError(GeoLoaderError):
    """Raised when a tool's inputs fail pre-processing validation.

    This is the parent class for more specific input problems.
    """


class NoRowsError(InputValidationError):
    """Raised when there is nothing to load.

    Args:
        source: Where the rows were expected to come from.
    """

    def __init__(self, source: str) -> None:
        super().__init__(f"No usable rows found in {source}.")
        self.source: str = source


# ---------------------------------------------------------------------------
# Geocoding
# ---------------------------------------------------------------------------


class LookupFailure(GeoLoaderError):
    """Raised when a single geocoding request fails.

    The lookup client catches it itself and falls back to null
    coordinates, so it never escapes a batch run.

    Args:
        query: The place name that was being looked up.
        reason: Short explanation of what went wrong.
    """

    def __init__(self, query: str, reason: str) -> None:
        super().__init__(f"Lookup for '{query}' failed: {reason}")
        self.query: str = query
        self.reason: str = reason


# ---------------------------------------------------------------------------
# SQL generation
# ---------------------------------------------------------------------------


class SqlValueError(GeoLoaderError):
    """Raised when a value cannot be rendered as its column's SQL literal.

    Args:
        column: Output column being rendered.
        value: The offending value.
        kind: Name of the expected column kind (e.g. ``"INTEGER"``).
    """

    def __init__(self, column: str, value: object, kind: str) -> None:
        super().__init__(
            f"Value {value!r} in column '{column}' is not a valid {kind} literal."
        )
        self.column: str = column
        self.value: object = value
        self.kind: str = kind


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class OutputWriteError(GeoLoaderError):
    """Raised when the tool cannot write its output to disk.

    Args:
        output_path: String representation of the path that failed.
        reason: Underlying OS or library error message.
    """

    def __init__(self, output_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to write output to '{output_path}': {reason}"
        )
        self.output_path: str = output_path
        self.reason: str = reason
