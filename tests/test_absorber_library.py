"""Absorber library tests: data directory resolution, caching, density lookup."""

import pathlib

import pytest

from shieldcalc.core.absorber_library import AbsorberLibrary, resolve_data_dir
from shieldcalc.core.errors import MissingFieldError, ResourceNotFoundError

BUNDLED_DATA = pathlib.Path(__file__).resolve().parents[1] / "Data"


def _write(directory, name: str, text: str):
    (directory / f"{name}Data.txt").write_text(text, encoding="utf-8")


@pytest.fixture
def data_dir(tmp_path):
    _write(tmp_path, "Lead", "Density(g/cm^3): 11.35\nMAC(MeV,cm^2/g,cm^2/g): 1.0 0.07 0.04\n")
    _write(tmp_path, "Bare", "MAC(MeV,cm^2/g,cm^2/g): 1.0 0.07 0.04\n")
    return tmp_path


class TestDataDirResolution:
    def test_explicit_argument(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SHIELDCALC_DATA_DIR", "/elsewhere")
        assert resolve_data_dir(tmp_path) == tmp_path

    def test_environment_variable(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SHIELDCALC_DATA_DIR", str(tmp_path))
        assert resolve_data_dir() == tmp_path

    def test_default(self, monkeypatch):
        monkeypatch.delenv("SHIELDCALC_DATA_DIR", raising=False)
        assert resolve_data_dir() == pathlib.Path("Data")


class TestRecords:
    def test_get_record(self, data_dir):
        lib = AbsorberLibrary(data_dir)
        rec = lib.get_record("Lead")
        assert rec.name == "Lead"
        assert rec.density == pytest.approx(11.35)

    def test_cache_returns_same_record(self, data_dir):
        lib = AbsorberLibrary(data_dir)
        assert lib.get_record("Lead") is lib.get_record("Lead")

    def test_cache_survives_file_removal(self, data_dir):
        lib = AbsorberLibrary(data_dir)
        lib.get_record("Lead")
        (data_dir / "LeadData.txt").unlink()
        assert lib.get_density("Lead") == pytest.approx(11.35)

    def test_no_cache_rereads(self, data_dir):
        lib = AbsorberLibrary(data_dir, cache=False)
        first = lib.get_record("Lead")
        second = lib.get_record("Lead")
        assert first is not second
        assert first == second

    def test_clear_cache(self, data_dir):
        lib = AbsorberLibrary(data_dir)
        lib.get_record("Lead")
        lib.clear_cache()
        (data_dir / "LeadData.txt").unlink()
        with pytest.raises(ResourceNotFoundError):
            lib.get_record("Lead")

    def test_unknown_absorber(self, data_dir):
        with pytest.raises(ResourceNotFoundError):
            AbsorberLibrary(data_dir).get_record("Unobtanium")


class TestDensity:
    def test_density(self, data_dir):
        assert AbsorberLibrary(data_dir).get_density("Lead") == pytest.approx(11.35)

    def test_missing_density_raises(self, data_dir):
        with pytest.raises(MissingFieldError, match="No density"):
            AbsorberLibrary(data_dir).get_density("Bare")


class TestAvailableAbsorbers:
    def test_lists_data_files(self, data_dir):
        (data_dir / "notes.txt").write_text("ignored")
        assert AbsorberLibrary(data_dir).available_absorbers() == ["Bare", "Lead"]

    def test_missing_directory(self, tmp_path):
        assert AbsorberLibrary(tmp_path / "nope").available_absorbers() == []

    def test_bundled_data(self):
        names = AbsorberLibrary(BUNDLED_DATA).available_absorbers()
        assert {"Lead", "Aluminum", "Water"} <= set(names)
