"""Coefficient table — parses per-absorber data resources and finds nearest energies.

Data resources are plain text, one tagged record per line::

    Density(g/cm^3): 11.35
    MAC(MeV,cm^2/g,cm^2/g): 1.000E+00 7.102E-02 3.654E-02

Energies in the table are in MeV. Lookups use the nearest tabulated
energy; there is no interpolation between points.
"""

from __future__ import annotations

import logging
import math
import pathlib
from collections.abc import Iterable

import numpy as np

from shieldcalc.constants import (
    DATA_FILE_SUFFIX,
    DEFAULT_DATA_DIR,
    DENSITY_TAG,
    MAC_FIELD_COUNT,
    MAC_TAG,
)
from shieldcalc.core.errors import (
    DataFormatError,
    MissingFieldError,
    ResourceNotFoundError,
)
from shieldcalc.models.absorber import AbsorberRecord, CoefficientPoint
from shieldcalc.models.results import NearestEnergyMatch

logger = logging.getLogger(__name__)


def data_file_path(
    absorber: str,
    data_dir: str | pathlib.Path = DEFAULT_DATA_DIR,
) -> pathlib.Path:
    """Path of the data resource for *absorber* (``<data_dir>/<absorber>Data.txt``)."""
    return pathlib.Path(data_dir) / f"{absorber}{DATA_FILE_SUFFIX}"


def split_tagged_line(line: str) -> tuple[str, str] | None:
    """Split ``"<Tag> <argument>"`` at the first space.

    Returns:
        ``(tag, argument)``, or *None* if the line has no space.
    """
    tag, sep, arg = line.partition(" ")
    if not sep:
        return None
    return tag, arg.strip()


def parse_absorber_lines(
    name: str,
    lines: Iterable[str],
    source: str = "<data>",
) -> AbsorberRecord:
    """Build an AbsorberRecord from data resource lines.

    The first density line wins. Coefficient points are sorted by energy
    (stable, so duplicate energies keep file order).

    Args:
        name: Absorber identifier.
        lines: Raw lines of the resource.
        source: Resource name used in error messages.

    Raises:
        DataFormatError: A non-blank line has no tag delimiter, or a
            density/MAC record has unparseable or out-of-range values.
    """
    density: float | None = None
    points: list[CoefficientPoint] = []

    for line_no, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        parts = split_tagged_line(line)
        if parts is None:
            raise DataFormatError(
                f"{source}:{line_no}: unexpected data file format: {line!r}"
            )
        tag, arg = parts

        if tag == DENSITY_TAG:
            try:
                value = float(arg)
            except ValueError:
                raise DataFormatError(
                    f"{source}:{line_no}: invalid density {arg!r}"
                ) from None
            if not math.isfinite(value) or value <= 0:
                raise DataFormatError(
                    f"{source}:{line_no}: density must be positive, got {arg!r}"
                )
            if density is None:
                density = value
            else:
                logger.debug(
                    "%s:%d: ignoring repeated density %g (keeping %g)",
                    source, line_no, value, density,
                )

        elif tag == MAC_TAG:
            fields = arg.split()
            if len(fields) != MAC_FIELD_COUNT:
                raise DataFormatError(
                    f"{source}:{line_no}: expected {MAC_FIELD_COUNT} values "
                    f"(energy, mu/rho, mu_en/rho), got {len(fields)}"
                )
            try:
                energy, mu_rho, mu_en_rho = (float(f) for f in fields)
            except ValueError:
                raise DataFormatError(
                    f"{source}:{line_no}: invalid coefficient record {arg!r}"
                ) from None
            if not all(math.isfinite(v) and v >= 0 for v in (energy, mu_rho, mu_en_rho)):
                raise DataFormatError(
                    f"{source}:{line_no}: coefficient values must be finite and non-negative: {arg!r}"
                )
            points.append(CoefficientPoint(
                energy_MeV=energy,
                mass_attenuation=mu_rho,
                mass_energy_absorption=mu_en_rho,
            ))

    points.sort(key=lambda p: p.energy_MeV)
    return AbsorberRecord(name=name, density=density, coefficients=points)


def load_absorber(
    absorber: str,
    data_dir: str | pathlib.Path = DEFAULT_DATA_DIR,
) -> AbsorberRecord:
    """Load a single absorber's data resource.

    Density is not required here; it is checked by the density lookup.

    Raises:
        ValueError: If *absorber* is empty.
        ResourceNotFoundError: If the resource cannot be opened.
        DataFormatError: If a line is malformed.
    """
    if not absorber:
        raise ValueError("Absorber name must not be empty")

    path = data_file_path(absorber, data_dir)
    try:
        with open(path, encoding="utf-8") as f:
            record = parse_absorber_lines(absorber, f, source=str(path))
    except UnicodeDecodeError as exc:
        raise DataFormatError(f"{path}: not a UTF-8 text file ({exc.reason})") from exc
    except OSError as exc:
        raise ResourceNotFoundError(
            f"Cannot open data file for {absorber!r}: {path} ({exc.strerror or exc})"
        ) from exc

    logger.debug(
        "Loaded %s from %s: density=%s, %d coefficient points",
        absorber, path, record.density, len(record.coefficients),
    )
    return record


def nearest_energy_index(energies: np.ndarray | list[float], energy_MeV: float) -> int:
    """Index of the tabulated energy closest to *energy_MeV*.

    See :func:`find_nearest_energy` for the candidate and tie-break rules.
    """
    return find_nearest_energy(energies, energy_MeV).index


def find_nearest_energy(
    energies: np.ndarray | list[float],
    energy_MeV: float,
) -> NearestEnergyMatch:
    """Nearest-neighbour lookup on an ascending energy axis (binary search).

    Two candidates are considered: the last entry strictly below the
    query and the first entry not less than it. Out-of-range queries clamp
    to the first/last entry. Ties go to the upper candidate, so an exact
    match always selects that entry (its first occurrence).

    Args:
        energies: Tabulated energies, sorted ascending [MeV].
        energy_MeV: Query energy [MeV].

    Raises:
        MissingFieldError: If *energies* is empty.
    """
    axis = np.asarray(energies, dtype=float)
    n = len(axis)
    if n == 0:
        raise MissingFieldError("No tabulated energies to search")

    pos = int(np.searchsorted(axis, energy_MeV, side="left"))
    upper = min(pos, n - 1)
    lower = max(pos - 1, 0)

    if abs(axis[upper] - energy_MeV) > abs(axis[lower] - energy_MeV):
        index = lower
    else:
        index = upper

    return NearestEnergyMatch(
        index=index,
        energy_MeV=float(axis[index]),
        lower_MeV=float(axis[lower]),
        upper_MeV=float(axis[upper]),
    )
