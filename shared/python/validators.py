"""
Geo Loader — Shared Validators
===============================
Static precondition checks used by the loader and its configuration.

Each check raises an exception from :mod:`shared.python.exceptions`
instead of returning a boolean::

    Validators.assert_file_exists(Path("DTB_SP.xlsx"))
    Validators.assert_subset(["lat"], ("lat", "lon"), "float columns")
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from shared.python.exceptions import (
    ConfigurationError,
    InputValidationError,
    OutputWriteError,
)


class Validators:
    """Collection of static precondition checks.

    All methods are ``@staticmethod`` — this class is never instantiated.
    It exists purely as a logical namespace.
    """

    # ------------------------------------------------------------------
    # File-system checks
    # ------------------------------------------------------------------

    @staticmethod
    def assert_file_exists(path: Path) -> None:
        """Assert that *path* points to an existing regular file.

        Raises:
            InputValidationError: If *path* does not exist or is a
                directory rather than a file.
        """
        path = Path(path)
        if not path.exists():
            raise InputValidationError(
                f"Input file not found: '{path}'. "
                "Check that the path is correct and the file exists."
            )
        if path.is_dir():
            raise InputValidationError(
                f"Expected a file but got a directory: '{path}'."
            )

    @staticmethod
    def assert_output_dir_writable(output_path: Path) -> None:
        """Assert that the parent directory of *output_path* is writable.

        Creates the parent directory (and any missing parents) if it does
        not yet exist.

        Raises:
            OutputWriteError: If the parent directory cannot be created.
        """
        parent = Path(output_path).parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputWriteError(str(output_path), str(exc)) from exc

    @staticmethod
    def assert_supported_extension(path: Path, extensions: Sequence[str]) -> None:
        """Assert that *path* has one of the allowed file extensions.

        Args:
            path: File path to check.
            extensions: Allowed extensions, each starting with a dot
                        (e.g. ``[".xlsx", ".csv"]``).

        Raises:
            InputValidationError: If the file extension is not in
                *extensions*.
        """
        path = Path(path)
        suffix = path.suffix.lower()
        allowed = [ext.lower() for ext in extensions]
        if suffix not in allowed:
            raise InputValidationError(
                f"Unsupported file extension '{suffix}' for '{path.name}'. "
                f"Accepted extensions: {', '.join(allowed)}"
            )

    # ------------------------------------------------------------------
    # Configuration checks
    # ------------------------------------------------------------------

    @staticmethod
    def assert_subset(
        subset: Sequence[str],
        superset: Sequence[str],
        label: str,
        superset_label: str = "table columns",
    ) -> None:
        """Assert that every name in *subset* also appears in *superset*.

        Args:
            subset: Names that must all be declared.
            superset: The full list of declared names.
            label: What *subset* describes, used in the error message
                   (e.g. ``"integer columns"``).
            superset_label: What *superset* describes.

        Raises:
            ConfigurationError: Listing every name missing from *superset*.

        Example::

            Validators.assert_subset(["lat", "lon"], table_columns, "float columns")
        """
        missing = [name for name in subset if name not in superset]
        if missing:
            raise ConfigurationError(
                f"{label} not present in {superset_label}: {missing}"
            )

    @staticmethod
    def assert_unique(names: Sequence[str], label: str) -> None:
        """Assert that *names* holds no duplicates.

        Raises:
            ConfigurationError: Listing the duplicated names.
        """
        seen: set[str] = set()
        dupes: list[str] = []
        for name in names:
            if name in seen and name not in dupes:
                dupes.append(name)
            seen.add(name)
        if dupes:
            raise ConfigurationError(f"Duplicate {label}: {dupes}")
