"""Instruction script models."""

from dataclasses import dataclass

from shieldcalc.constants import DEFAULT_ENERGY_KEV, DEFAULT_INITIAL_INTENSITY


@dataclass
class GammaInstruction:
    """Set the beam energy.

    Attributes:
        energy_keV: Photon energy [keV].
        line_no: Script line number (1-based).
    """
    energy_keV: float
    line_no: int = 0


@dataclass
class ShieldInstruction:
    """Pass the beam through one absorber layer.

    Attributes:
        absorber: Absorber identifier.
        thickness_cm: Layer thickness [cm].
        line_no: Script line number (1-based).
    """
    absorber: str
    thickness_cm: float
    line_no: int = 0


Instruction = GammaInstruction | ShieldInstruction


@dataclass
class BeamState:
    """Running beam state for one script.

    Attributes:
        intensity: Intensity relative to the initial intensity.
        energy_keV: Current photon energy [keV]; persists until changed.
        energy_set: Whether a gamma instruction has been applied.
    """
    intensity: float = DEFAULT_INITIAL_INTENSITY
    energy_keV: float = DEFAULT_ENERGY_KEV
    energy_set: bool = False
