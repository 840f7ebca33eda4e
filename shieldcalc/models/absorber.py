"""Absorber data models.

Defines a shielding material's density and tabulated coefficient data.
"""

from dataclasses import dataclass, field

import numpy as np


@dataclass
class CoefficientPoint:
    """Single tabulated energy point.

    Attributes:
        energy_MeV: Photon energy [MeV].
        mass_attenuation: Total μ/ρ [cm²/g].
        mass_energy_absorption: μ_en/ρ [cm²/g] (stored, not used by the engine).
    """
    energy_MeV: float
    mass_attenuation: float
    mass_energy_absorption: float


@dataclass
class AbsorberRecord:
    """Shielding material loaded from its data resource.

    Attributes:
        name: Absorber identifier ("Lead", "Aluminum", ...).
        density: Density [g/cm³], or None if the resource has no density line.
        coefficients: Tabulated points, sorted ascending by energy.
    """
    name: str
    density: float | None = None
    coefficients: list[CoefficientPoint] = field(default_factory=list)

    @property
    def energies(self) -> np.ndarray:
        """Tabulated energies [MeV]."""
        return np.array([p.energy_MeV for p in self.coefficients], dtype=float)
