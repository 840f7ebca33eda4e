"""Absorber library — on-demand loading and caching of absorber data resources.

Data files are treated as immutable for the lifetime of a library, so a
record is parsed at most once per absorber name.
"""

import logging
import os
import pathlib

from shieldcalc.constants import DATA_DIR_ENV_VAR, DATA_FILE_SUFFIX, DEFAULT_DATA_DIR
from shieldcalc.core.coefficient_table import load_absorber
from shieldcalc.core.errors import MissingFieldError
from shieldcalc.models.absorber import AbsorberRecord

logger = logging.getLogger(__name__)


def resolve_data_dir(data_dir: str | pathlib.Path | None = None) -> pathlib.Path:
    """Data directory: explicit argument, then ``$SHIELDCALC_DATA_DIR``, then ``Data``."""
    if data_dir is None:
        data_dir = os.environ.get(DATA_DIR_ENV_VAR) or DEFAULT_DATA_DIR
    return pathlib.Path(data_dir)


class AbsorberLibrary:
    """Service for absorber record lookup.

    Args:
        data_dir: Directory holding ``<Name>Data.txt`` resources.  If *None*,
                  taken from ``$SHIELDCALC_DATA_DIR`` or ``Data`` relative
                  to the working directory.
        cache: Keep parsed records for reuse across lookups.
    """

    def __init__(
        self,
        data_dir: str | pathlib.Path | None = None,
        cache: bool = True,
    ) -> None:
        self._data_dir = resolve_data_dir(data_dir)
        self._cache_enabled = cache
        self._records: dict[str, AbsorberRecord] = {}

    @property
    def data_dir(self) -> pathlib.Path:
        return self._data_dir

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_record(self, absorber: str) -> AbsorberRecord:
        """Return the record for *absorber*, loading it if needed.

        Raises:
            ResourceNotFoundError: If the data resource cannot be opened.
            DataFormatError: If the resource is malformed.
        """
        record = self._records.get(absorber)
        if record is not None:
            return record

        record = load_absorber(absorber, self._data_dir)
        if self._cache_enabled:
            self._records[absorber] = record
        return record

    def get_density(self, absorber: str) -> float:
        """Density [g/cm³] of *absorber*.

        Raises:
            MissingFieldError: If the resource has no density line.
        """
        record = self.get_record(absorber)
        if record.density is None:
            raise MissingFieldError(f"No density found in data file for {absorber!r}")
        return record.density

    def available_absorbers(self) -> list[str]:
        """Names of all absorbers with a data resource in the data directory."""
        if not self._data_dir.is_dir():
            logger.warning("Data directory not found: %s", self._data_dir)
            return []
        return sorted(
            p.name[: -len(DATA_FILE_SUFFIX)]
            for p in self._data_dir.glob(f"*{DATA_FILE_SUFFIX}")
            if p.is_file() and len(p.name) > len(DATA_FILE_SUFFIX)
        )

    def clear_cache(self) -> None:
        self._records.clear()
