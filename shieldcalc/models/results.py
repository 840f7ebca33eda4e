"""Attenuation result data models.

Dataclasses returned by the coefficient table, AttenuationEngine and
ScriptRunner.
"""

from dataclasses import dataclass, field

from shieldcalc.core.units import transmission_to_dB


@dataclass
class NearestEnergyMatch:
    """Outcome of a nearest-energy lookup.

    Attributes:
        index: Index of the selected tabulated point.
        energy_MeV: Selected tabulated energy [MeV].
        lower_MeV: Candidate below the query (clamped to the first point).
        upper_MeV: Candidate at or above the query (clamped to the last point).
    """
    index: int = 0
    energy_MeV: float = 0.0
    lower_MeV: float = 0.0
    upper_MeV: float = 0.0


@dataclass
class LayerAttenuation:
    """Per-layer Beer-Lambert breakdown.

    Attributes:
        absorber: Absorber identifier.
        thickness_cm: Layer thickness [cm].
        energy_keV: Beam energy [keV].
        matched_energy_MeV: Tabulated energy actually used [MeV].
        mass_attenuation: μ/ρ [cm²/g].
        density: ρ [g/cm³].
        mu_per_cm: Linear attenuation coefficient [cm⁻¹].
        mfp: Optical thickness μ×x [dimensionless].
        transmission: Transmitted fraction of this layer [0–1].
        attenuation_dB: Attenuation of this layer in dB (positive).
        intensity: Running intensity after this layer, relative to I₀.
    """
    absorber: str = ""
    thickness_cm: float = 0.0
    energy_keV: float = 0.0
    matched_energy_MeV: float = 0.0
    mass_attenuation: float = 0.0
    density: float = 0.0
    mu_per_cm: float = 0.0
    mfp: float = 0.0
    transmission: float = 1.0
    attenuation_dB: float = 0.0
    intensity: float = 1.0


@dataclass
class RunResult:
    """Result of running an instruction script.

    Attributes:
        initial_intensity: I₀.
        intensity: Final intensity relative to I₀.
        energy_keV: Beam energy at the end of the script [keV].
        layers: Per-layer breakdown in script order.
    """
    initial_intensity: float = 1.0
    intensity: float = 1.0
    energy_keV: float = 0.0
    layers: list[LayerAttenuation] = field(default_factory=list)

    @property
    def transmission(self) -> float:
        """Overall I/I₀."""
        return self.intensity / self.initial_intensity

    @property
    def attenuation_dB(self) -> float:
        return transmission_to_dB(self.transmission)


@dataclass
class HvlTvlResult:
    """Half-value / tenth-value layer result.

    All lengths in cm (core units).

    Attributes:
        hvl_cm: Half-value layer [cm].
        tvl_cm: Tenth-value layer [cm].
        mfp_cm: Mean free path [cm].
        mu_per_cm: Linear attenuation coefficient [cm⁻¹].
    """
    hvl_cm: float = 0.0
    tvl_cm: float = 0.0
    mfp_cm: float = 0.0
    mu_per_cm: float = 0.0
