"""Exception taxonomy.

Every failure is fatal for a run; library code raises and only the
command-line entry point turns an error into an exit status.
"""


class ShieldCalcError(Exception):
    """Base class for all shieldcalc errors."""


class UsageError(ShieldCalcError):
    """Command-line arguments missing or invalid."""


class DataFormatError(ShieldCalcError, ValueError):
    """A data line could not be parsed."""


class ScriptFormatError(DataFormatError):
    """An instruction script line could not be parsed."""


class ResourceNotFoundError(ShieldCalcError, FileNotFoundError):
    """A data resource or script could not be opened."""


class MissingFieldError(ShieldCalcError, LookupError):
    """A required field (density, coefficient table) is absent."""
