"""
Geo Loader — Shared Python Package
===================================
Re-exports the shared base class, exception hierarchy, and validator
utilities so tools can import from a single location::

    from shared.python import LoaderTool, Validators
    from shared.python.exceptions import ConfigurationError
"""

from shared.python.base_tool import LoaderTool
from shared.python.exceptions import (
    ConfigurationError,
    GeoLoaderError,
    InputValidationError,
    LookupFailure,
    NoRowsError,
    OutputWriteError,
    SqlValueError,
)
from shared.python.validators import Validators

__all__ = [
    "LoaderTool",
    "Validators",
    "GeoLoaderError",
    "ConfigurationError",
    "InputValidationError",
    "NoRowsError",
    "LookupFailure",
    "SqlValueError",
    "OutputWriteError",
]
