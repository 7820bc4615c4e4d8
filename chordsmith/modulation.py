"""Modulation suggestions.

Given the current key, scale and chord, `get_modulation_options` lists the
closely related keys (relative, dominant, subdominant, parallel) and two
chromatic mediants, each with a short chord path from the current chord into
the new key.
"""

import dataclasses
import logging
import typing

import chordsmith.chords
import chordsmith.intervals


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ModulationOption:

	"""A target key and a chord path that reaches it."""

	target_key: str
	target_scale: str
	chords: typing.List[str]
	description: str


def _tonic_quality (scale: str) -> str:

	return "m7" if scale == "minor" else "maj7"


def get_modulation_options (key: str, chord: str, scale: str = "major") -> typing.List[ModulationOption]:

	"""List modulation targets reachable from ``chord`` in ``key``.

	Parameters:
		key: Current key root (e.g. ``"C"``).
		chord: The chord the modulation starts from; it opens every path.
		scale: Current scale. Any minor scale is treated as minor.

	Returns:
		Options in order: relative, dominant, subdominant, parallel,
		chromatic mediant, flat mediant.

	Raises:
		ValueError: If ``key`` or ``scale`` is unknown.

	Example:
		```python
		options = get_modulation_options("C", "Cmaj7")
		options[1].target_key  # → "G"
		options[1].chords      # → ["Cmaj7", "D7", "Gmaj7"]
		```
	"""

	key_pc = chordsmith.chords.note_to_pc(key)
	chordsmith.intervals.get_scale_intervals(scale)

	minor = chordsmith.intervals.is_minor_scale(scale)
	current = "minor" if minor else "major"
	flats = chordsmith.chords.prefers_flats(key) or (minor and key in chordsmith.intervals.FLAT_MINOR_ROOTS)

	def note (semitones: int, prefer_flats: bool = flats) -> str:
		return chordsmith.chords.pc_to_note(key_pc + semitones, prefer_flats)

	options: typing.List[ModulationOption] = []

	if minor:
		relative = note(3, True)
		options.append(ModulationOption(relative, "major", [chord, f"{relative}maj7"], "Relative major modulation"))

	else:
		relative = note(9)
		options.append(ModulationOption(relative, "minor", [chord, f"{relative}m7"], "Relative minor modulation"))

	# The new key's own dominant seventh acts as the pivot.
	dominant = note(7)
	options.append(ModulationOption(
		target_key = dominant,
		target_scale = current,
		chords = [chord, f"{note(14)}7", f"{dominant}{_tonic_quality(current)}"],
		description = "Modulation to the dominant"
	))

	subdominant = note(5)
	options.append(ModulationOption(
		target_key = subdominant,
		target_scale = current,
		chords = [chord, f"{note(0)}7", f"{subdominant}{_tonic_quality(current)}"],
		description = "Modulation to the subdominant"
	))

	parallel = "major" if minor else "minor"
	options.append(ModulationOption(
		target_key = key,
		target_scale = parallel,
		chords = [chord, f"{key}{_tonic_quality(parallel)}"],
		description = f"Parallel {parallel} modulation"
	))

	mediant = note(4)
	options.append(ModulationOption(mediant, "major", [chord, f"{mediant}maj7"], "Chromatic mediant modulation"))

	flat_mediant = note(3, True)
	options.append(ModulationOption(flat_mediant, "major", [chord, f"{flat_mediant}maj7"], "Flat mediant modulation"))

	logger.debug(f"{len(options)} modulation options from {chord} in {key} {scale}")

	return options
