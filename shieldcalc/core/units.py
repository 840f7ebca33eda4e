"""Unit conversion module — single conversion point for energies and optical thickness.

CRITICAL: All unit conversions MUST go through this module.

Internal (core) units:
    Length   : cm
    Energy   : keV (beam), MeV (tabulated data)
    Density  : g/cm³
    μ/ρ      : cm²/g
    μ        : cm⁻¹
    Thickness: mfp (dimensionless)
"""

import math
from typing import NewType

# Type aliases — zero runtime cost, visible in IDE for unit-error detection
MeV = NewType('MeV', float)
Mfp = NewType('Mfp', float)

KEV_PER_MEV = 1000.0


# ---------------------------------------------------------------------------
# Energy conversions
# ---------------------------------------------------------------------------

def keV_to_MeV(kev: float) -> MeV:
    """keV → MeV (tabulated data axis)."""
    return MeV(kev / KEV_PER_MEV)


# ---------------------------------------------------------------------------
# Attenuation coefficients
# ---------------------------------------------------------------------------

def linear_attenuation(mu_rho: float, density: float) -> float:
    """μ [cm⁻¹] = (μ/ρ) [cm²/g] × ρ [g/cm³]."""
    return mu_rho * density


def thickness_to_mfp(thickness_cm: float, mu_per_cm: float) -> Mfp:
    """Physical thickness [cm] × linear attenuation [cm⁻¹] → optical thickness [mfp].

    Args:
        thickness_cm: Material thickness [cm].
        mu_per_cm: Linear attenuation coefficient [cm⁻¹].

    Returns:
        Optical thickness [mfp, dimensionless].
    """
    return Mfp(mu_per_cm * thickness_cm)


# ---------------------------------------------------------------------------
# Attenuation conversions
# ---------------------------------------------------------------------------

def transmission_to_dB(transmission: float) -> float:
    """Transmission ratio (0–1) → attenuation in dB.

    Args:
        transmission: Transmission ratio [dimensionless, 0–1].

    Returns:
        Attenuation [dB, positive value].
    """
    return -10.0 * math.log10(max(transmission, 1e-30))
