"""
Geo Loader — Loader Tool Base
==============================
``LoaderTool`` fixes the order of a loader run: check the input file and
output location, do the work, then log how long the run took and where the
result went.  ``MunicipalityGeoLoader`` is the concrete loader; the CLI only
ever calls :meth:`LoaderTool.run`.

Console logging for the whole ``geoloader`` logger tree is set up here, the
first time any tool is built.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path

# Modules log through children of this logger: "geoloader.<module>".
logger = logging.getLogger("geoloader")

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s — %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


class LoaderTool(ABC):
    """Read one input file and write one output file.

    Attributes:
        input_path: Spreadsheet to load.
        output_path: File the result is written to.
        verbose: Log at DEBUG instead of INFO.
        elapsed: Seconds taken by the last successful :meth:`run`, or ``None``.
    """

    def __init__(
        self,
        input_path: Path,
        output_path: Path,
        *,
        verbose: bool = False,
    ) -> None:
        self.input_path: Path = Path(input_path)
        self.output_path: Path = Path(output_path)
        self.verbose: bool = verbose
        self.elapsed: float | None = None

        self._configure_logging()

    @abstractmethod
    def validate_inputs(self) -> None:
        """Fail fast, before any row is read.

        Raises:
            InputValidationError: If the input file is missing or unreadable.
            OutputWriteError: If the output directory cannot be prepared.
        """

    @abstractmethod
    def process(self) -> None:
        """Load the rows and write the output."""

    def run(self) -> None:
        """Validate, process, then log the elapsed time.

        Errors from either step propagate unchanged and nothing is reported.
        """
        logger.info("Starting %s", self.__class__.__name__)
        start = time.perf_counter()

        self.validate_inputs()
        self.process()

        self.elapsed = time.perf_counter() - start
        logger.info(
            "%s completed in %.2fs → %s",
            self.__class__.__name__,
            self.elapsed,
            self.output_path,
        )

    def _configure_logging(self) -> None:
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
            logger.addHandler(handler)

        logger.setLevel(logging.DEBUG if self.verbose else logging.INFO)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"input_path={self.input_path!r}, "
            f"output_path={self.output_path!r})"
        )
