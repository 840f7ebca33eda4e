"""Script runner — applies the instructions of a macro file to a beam.

Macro format, one instruction per line::

    Gamma(keV): 662
    Shield(type,cm): Lead,1.0

Instructions are parsed lazily: a malformed line aborts the run when it
is reached, after the output of all earlier instructions.
"""

from __future__ import annotations

import logging
import math
import pathlib
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from shieldcalc.constants import DEFAULT_INITIAL_INTENSITY, GAMMA_TAG, SHIELD_TAG
from shieldcalc.core.coefficient_table import split_tagged_line
from shieldcalc.core.errors import ResourceNotFoundError, ScriptFormatError
from shieldcalc.models.results import RunResult
from shieldcalc.models.script import (
    BeamState,
    GammaInstruction,
    Instruction,
    ShieldInstruction,
)

if TYPE_CHECKING:
    from shieldcalc.core.attenuation_engine import AttenuationEngine

logger = logging.getLogger(__name__)


def _parse_float(text: str, what: str, line_no: int) -> float:
    try:
        value = float(text)
    except ValueError:
        raise ScriptFormatError(f"line {line_no}: invalid {what} {text!r}") from None
    if not math.isfinite(value) or value < 0:
        raise ScriptFormatError(
            f"line {line_no}: {what} must be finite and non-negative, got {text!r}"
        )
    return value


def parse_instruction(line: str, line_no: int = 0) -> Instruction | None:
    """Parse one macro line.

    Returns:
        The instruction, or *None* for blank lines and unknown tags.

    Raises:
        ScriptFormatError: If the line has no space after its tag or its
            arguments are invalid.
    """
    line = line.rstrip("\r\n")
    if not line.strip():
        return None

    parts = split_tagged_line(line)
    if parts is None:
        raise ScriptFormatError(f"line {line_no}: unexpected macro format: {line!r}")
    tag, arg = parts

    if tag == GAMMA_TAG:
        return GammaInstruction(
            energy_keV=_parse_float(arg, "gamma energy", line_no),
            line_no=line_no,
        )

    if tag == SHIELD_TAG:
        absorber, sep, thickness = arg.partition(",")
        absorber = absorber.strip()
        if not sep:
            raise ScriptFormatError(
                f"line {line_no}: expected '<absorber>,<thickness>', got {arg!r}"
            )
        if not absorber:
            raise ScriptFormatError(f"line {line_no}: missing absorber name")
        return ShieldInstruction(
            absorber=absorber,
            thickness_cm=_parse_float(thickness.strip(), "thickness", line_no),
            line_no=line_no,
        )

    logger.warning("line %d: ignoring unknown instruction %r", line_no, tag)
    return None


def iter_instructions(lines: Iterable[str]) -> Iterator[Instruction]:
    """Yield instructions one at a time, skipping blank and unknown lines."""
    for line_no, line in enumerate(lines, start=1):
        instruction = parse_instruction(line, line_no)
        if instruction is not None:
            yield instruction


class ScriptRunner:
    """Sequentially applies energy and shielding instructions.

    Args:
        engine: Attenuation engine used for each shielding layer.
        log: Logger receiving the per-step report.  Defaults to this
             module's logger.
        initial_intensity: I₀.
    """

    def __init__(
        self,
        engine: AttenuationEngine,
        log: logging.Logger | None = None,
        initial_intensity: float = DEFAULT_INITIAL_INTENSITY,
    ) -> None:
        self._engine = engine
        self._log = log or logger
        self._initial_intensity = initial_intensity

    def run(self, lines: Iterable[str]) -> RunResult:
        """Run the macro given as lines of text."""
        state = BeamState(intensity=self._initial_intensity)
        result = RunResult(
            initial_intensity=self._initial_intensity,
            intensity=state.intensity,
        )

        for instruction in iter_instructions(lines):
            if isinstance(instruction, GammaInstruction):
                self._log.info(
                    "Setting gamma-ray energy to %g keV", instruction.energy_keV,
                )
                state.energy_keV = instruction.energy_keV
                state.energy_set = True
            else:
                self._apply_shield(instruction, state, result)

        result.intensity = state.intensity
        result.energy_keV = state.energy_keV
        return result

    def run_file(self, path: str | pathlib.Path) -> RunResult:
        """Run a macro file.

        Raises:
            ResourceNotFoundError: If the file cannot be opened.
            ScriptFormatError: If a line is malformed or the file is not UTF-8.
        """
        path = pathlib.Path(path)
        try:
            f = open(path, encoding="utf-8")
        except OSError as exc:
            raise ResourceNotFoundError(
                f"Cannot open macro file {path} ({exc.strerror or exc})"
            ) from exc
        with f:
            try:
                return self.run(f)
            except UnicodeDecodeError as exc:
                raise ScriptFormatError(
                    f"{path}: not a UTF-8 text file ({exc.reason})"
                ) from exc

    def _apply_shield(
        self,
        instruction: ShieldInstruction,
        state: BeamState,
        result: RunResult,
    ) -> None:
        if not state.energy_set:
            self._log.warning(
                "line %d: no gamma energy set; using %g keV",
                instruction.line_no, state.energy_keV,
            )
        self._log.info(
            "Calculating intensity following %g cm of %s",
            instruction.thickness_cm, instruction.absorber,
        )
        layer = self._engine.layer_attenuation(
            instruction.absorber, instruction.thickness_cm, state.energy_keV,
        )
        state.intensity *= layer.transmission
        layer.intensity = state.intensity
        result.layers.append(layer)

        self._log.info("  Transmit frac, this layer: %g", layer.transmission)
        self._log.info(
            "  Remaining I = %g, I_init = %g",
            state.intensity, self._initial_intensity,
        )
