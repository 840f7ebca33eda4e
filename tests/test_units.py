"""Unit conversion chain validation."""

import math

import pytest

from shieldcalc.core.units import (
    keV_to_MeV,
    linear_attenuation,
    thickness_to_mfp,
    transmission_to_dB,
)


class TestEnergyConversion:
    def test_keV_to_MeV(self):
        assert keV_to_MeV(1000.0) == 1.0
        assert keV_to_MeV(662.0) == pytest.approx(0.662)
        assert keV_to_MeV(1250.0) == pytest.approx(1.25)
        assert keV_to_MeV(0.0) == 0.0


class TestOpticalThickness:
    def test_linear_attenuation(self):
        # Pb @ 1 MeV: 0.07102 cm²/g × 11.35 g/cm³
        assert linear_attenuation(0.07102, 11.35) == pytest.approx(0.806077)

    def test_thickness_to_mfp(self):
        assert thickness_to_mfp(2.0, 0.5) == pytest.approx(1.0)
        assert thickness_to_mfp(0.0, 0.5) == 0.0


class TestAttenuationConversion:
    def test_transmission_to_dB(self):
        assert transmission_to_dB(0.1) == pytest.approx(10.0)
        assert transmission_to_dB(0.5) == pytest.approx(3.0103, rel=1e-4)
        assert transmission_to_dB(1.0) == pytest.approx(0.0)

    def test_zero_transmission_is_finite(self):
        assert math.isfinite(transmission_to_dB(0.0))
