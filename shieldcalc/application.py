"""Command-line entry point: argument parsing, logging setup, exit statuses.

Library code raises ShieldCalcError subclasses; this module is the only
place that turns them into messages and exit codes.
"""

import argparse
import logging
import sys

from shieldcalc.constants import APP_NAME, APP_VERSION
from shieldcalc.core.absorber_library import AbsorberLibrary
from shieldcalc.core.attenuation_engine import AttenuationEngine
from shieldcalc.core.errors import ShieldCalcError, UsageError
from shieldcalc.core.script_runner import ScriptRunner

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(
        prog=APP_NAME,
        description="Gamma-ray attenuation through layers of shielding material.",
    )
    p.add_argument("script", nargs="?", help="Path to the macro (instruction script)")
    p.add_argument(
        "--data-dir",
        default=None,
        help="Directory holding <Absorber>Data.txt files (default: $SHIELDCALC_DATA_DIR or ./Data)",
    )
    p.add_argument(
        "--list", action="store_true", dest="list_absorbers",
        help="List the absorbers available in the data directory and exit",
    )
    verbosity = p.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only warnings and errors")
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    return p


def configure_logging(level: int = logging.INFO) -> None:
    """Send log records to stdout; plain messages unless debugging."""
    handler = logging.StreamHandler(sys.stdout)
    if level <= logging.DEBUG:
        fmt = "%(levelname)s %(name)s: %(message)s"
    else:
        fmt = "%(message)s"
    handler.setFormatter(logging.Formatter(fmt))

    log = logging.getLogger(APP_NAME)
    log.handlers[:] = [handler]
    log.setLevel(level)


def run(argv: list[str] | None = None) -> int:
    """Run the calculator and return the process exit status."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        if args.script is None and not args.list_absorbers:
            raise UsageError("the following arguments are required: script")
    except UsageError as exc:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    if args.verbose:
        configure_logging(logging.DEBUG)
    elif args.quiet:
        configure_logging(logging.WARNING)
    else:
        configure_logging(logging.INFO)

    library = AbsorberLibrary(args.data_dir)
    if args.list_absorbers:
        for name in library.available_absorbers():
            print(name)
        return EXIT_OK

    log = logging.getLogger(APP_NAME)
    engine = AttenuationEngine(library, log)
    runner = ScriptRunner(engine, log)
    try:
        result = runner.run_file(args.script)
    except ShieldCalcError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    log.debug(
        "Final I/I_init = %g (%.2f dB) after %d layer(s)",
        result.transmission, result.attenuation_dB, len(result.layers),
    )
    return EXIT_OK


def main() -> None:
    sys.exit(run())
