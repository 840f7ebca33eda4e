"""Gamma-ray Attenuation Calculator — Entry Point."""
from shieldcalc.application import main


if __name__ == "__main__":
    main()
