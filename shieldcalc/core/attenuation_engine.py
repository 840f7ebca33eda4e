"""Attenuation engine — Beer-Lambert transmission through a single absorber layer.

All internal calculations in core units (cm, keV for the beam, MeV on the
tabulated energy axis).

    T = exp(-(μ/ρ) × ρ × x)
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from shieldcalc.core.coefficient_table import find_nearest_energy
from shieldcalc.core.errors import MissingFieldError
from shieldcalc.core.units import (
    keV_to_MeV,
    linear_attenuation,
    thickness_to_mfp,
    transmission_to_dB,
)
from shieldcalc.models.results import HvlTvlResult, LayerAttenuation, NearestEnergyMatch

if TYPE_CHECKING:
    from shieldcalc.core.absorber_library import AbsorberLibrary

logger = logging.getLogger(__name__)


class AttenuationEngine:
    """Analytical photon attenuation engine.

    Args:
        library: Absorber library for density and μ/ρ lookups.
        log: Logger receiving the lookup diagnostics.  Defaults to this
             module's logger.
    """

    def __init__(
        self,
        library: AbsorberLibrary,
        log: logging.Logger | None = None,
    ) -> None:
        self._library = library
        self._log = log or logger

    def density(self, absorber: str) -> float:
        """Density of *absorber* [g/cm³].

        Raises:
            MissingFieldError: If the data resource has no density.
        """
        return self._library.get_density(absorber)

    def match_energy(self, absorber: str, energy_keV: float) -> NearestEnergyMatch:
        """Nearest tabulated point of *absorber* for a beam energy in keV.

        Raises:
            MissingFieldError: If the absorber has no coefficient data.
        """
        record = self._library.get_record(absorber)
        if not record.coefficients:
            raise MissingFieldError(
                f"No attenuation data in data file for {absorber!r}"
            )
        energy_MeV = keV_to_MeV(energy_keV)
        match = find_nearest_energy(record.energies, energy_MeV)
        self._log.info(
            "  Closest energies in data for %g: %g %g",
            energy_MeV, match.lower_MeV, match.upper_MeV,
        )
        return match

    def mass_attenuation_coefficient(self, absorber: str, energy_keV: float) -> float:
        """μ/ρ [cm²/g] at the tabulated energy nearest to *energy_keV*.

        Args:
            absorber: Absorber identifier.
            energy_keV: Photon energy [keV].
        """
        return self._lookup_mu_rho(absorber, energy_keV)[1]

    def transmit(self, absorber: str, thickness_cm: float, energy_keV: float) -> float:
        """Transmitted fraction of a single layer.

        Args:
            absorber: Absorber identifier.
            thickness_cm: Layer thickness [cm].
            energy_keV: Photon energy [keV].

        Returns:
            Transmission in (0, 1]; exactly 1.0 for zero thickness.
        """
        return self.layer_attenuation(absorber, thickness_cm, energy_keV).transmission

    def layer_attenuation(
        self,
        absorber: str,
        thickness_cm: float,
        energy_keV: float,
    ) -> LayerAttenuation:
        """Single-layer Beer-Lambert attenuation with full breakdown.

        ``intensity`` of the returned record is the transmission itself
        (incident intensity 1.0); the script runner overwrites it with the
        running value.

        Raises:
            ValueError: If *thickness_cm* is negative or not finite.
        """
        if not math.isfinite(thickness_cm) or thickness_cm < 0:
            raise ValueError(f"Thickness must be finite and non-negative, got {thickness_cm}")

        rho = self.density(absorber)
        match, mu_rho = self._lookup_mu_rho(absorber, energy_keV)
        mu = linear_attenuation(mu_rho, rho)
        mfp = float(thickness_to_mfp(thickness_cm, mu))
        transmission = math.exp(-mfp)

        return LayerAttenuation(
            absorber=absorber,
            thickness_cm=thickness_cm,
            energy_keV=energy_keV,
            matched_energy_MeV=match.energy_MeV,
            mass_attenuation=mu_rho,
            density=rho,
            mu_per_cm=mu,
            mfp=mfp,
            transmission=transmission,
            attenuation_dB=transmission_to_dB(transmission),
            intensity=transmission,
        )

    def calculate_hvl_tvl(self, absorber: str, energy_keV: float) -> HvlTvlResult:
        """Half-value layer, tenth-value layer, and mean free path.

        HVL = ln(2) / μ [cm]
        TVL = ln(10) / μ [cm]
        MFP = 1 / μ [cm]
        """
        _, mu_rho = self._lookup_mu_rho(absorber, energy_keV)
        mu = linear_attenuation(mu_rho, self.density(absorber))
        if mu <= 0:
            return HvlTvlResult()

        return HvlTvlResult(
            hvl_cm=math.log(2) / mu,
            tvl_cm=math.log(10) / mu,
            mfp_cm=1.0 / mu,
            mu_per_cm=mu,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _lookup_mu_rho(
        self,
        absorber: str,
        energy_keV: float,
    ) -> tuple[NearestEnergyMatch, float]:
        record = self._library.get_record(absorber)
        match = self.match_energy(absorber, energy_keV)
        mu_rho = record.coefficients[match.index].mass_attenuation
        self._log.info(
            "  Energy and MassAttenCoeff used for %s %g: %g %g",
            absorber, energy_keV, match.energy_MeV, mu_rho,
        )
        return match, mu_rho
