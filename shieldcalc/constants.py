"""Application-wide constants.

Tags and file naming follow the plain-text data and macro formats.
"""

APP_NAME = "shieldcalc"
APP_VERSION = "0.1.0"

# Data resources
DEFAULT_DATA_DIR = "Data"
DATA_DIR_ENV_VAR = "SHIELDCALC_DATA_DIR"
DATA_FILE_SUFFIX = "Data.txt"

# Data file tags
DENSITY_TAG = "Density(g/cm^3):"
MAC_TAG = "MAC(MeV,cm^2/g,cm^2/g):"
MAC_FIELD_COUNT = 3

# Instruction script tags
GAMMA_TAG = "Gamma(keV):"
SHIELD_TAG = "Shield(type,cm):"

# Beam defaults
DEFAULT_INITIAL_INTENSITY = 1.0
DEFAULT_ENERGY_KEV = 0.0
