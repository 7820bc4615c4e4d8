"""Chord progression generation.

Expands a style into a concrete chord sequence by drawing scale-degree
patterns from the pattern tables, realising them in a key and, optionally,
recolouring chords with secondary dominants or tritone substitutions.

Generation is randomised for variety. Pass a seeded ``random.Random`` as
``rng`` for repeatable output. Selecting a cadence without substitutions
makes the result fully deterministic.

Example:
	```python
	import random
	import chordsmith.progression

	progression = chordsmith.progression.generate_progression(
		"jazz", 8, key="Bb", use_secondary_dominants=True, rng=random.Random(7)
	)
	progression.chords          # 8 chord symbols
	progression.roman_numerals  # matching degree labels
	progression.functions()     # tonic / subdominant / dominant / secondary
	```
"""

import dataclasses
import logging
import random
import typing

import chordsmith.chords
import chordsmith.config
import chordsmith.degrees
import chordsmith.functions
import chordsmith.intervals
import chordsmith.patterns
import chordsmith.voicings


logger = logging.getLogger(__name__)


VOICING_STYLES: typing.Tuple[str, ...] = ("close", "spread", "drop2", "quartal")


@dataclasses.dataclass
class Progression:

	"""A generated progression: chords paired 1:1 with numerals and voicings."""

	chords: typing.List[str]
	roman_numerals: typing.List[str]
	voicings: typing.List[typing.List[str]]
	style: str
	key: str = "C"
	scale: str = "major"
	cadence: typing.Optional[str] = None
	warnings: typing.List[str] = dataclasses.field(default_factory=list)


	def __len__ (self) -> int:

		return len(self.chords)


	def functions (self) -> typing.List[str]:

		"""
		Classify each chord against the progression's key.
		"""

		return chordsmith.functions.classify_progression(self.chords, self.key, self.roman_numerals)


def secondary_dominant (chord: str) -> typing.Optional[str]:

	"""Return the dominant seventh a fifth above the chord's root.

	Example:
		```python
		secondary_dominant("Dm7")  # → "A7"
		```
	"""

	root = chordsmith.chords.chord_root(chord)

	if root is None:
		return None

	return f"{chordsmith.chords.transpose(root, 7)}7"


def tritone_substitution (chord: str) -> typing.Optional[str]:

	"""Return the dominant seventh a tritone away, for dominant-seventh chords only.

	Example:
		```python
		tritone_substitution("G7")    # → "C#7"
		tritone_substitution("Cmaj7") # → None
		```
	"""

	parsed = chordsmith.chords.try_parse_chord(chord)

	if parsed is None or not parsed.is_dominant_seventh():
		return None

	return f"{chordsmith.chords.transpose(parsed.root, 6)}7"


def _choose (rng: random.Random, patterns: typing.Sequence[typing.List[str]]) -> typing.List[str]:

	return list(rng.choice(patterns))


def _initial_pattern (style: str, length: int, cadence: typing.Optional[typing.List[str]], rng: random.Random) -> typing.List[str]:

	if cadence is not None:
		return list(cadence)

	if style == "smart":
		pattern = _choose(rng, chordsmith.patterns.SMART_PATTERNS["tension"])

		if length > 4:
			pattern += _choose(rng, chordsmith.patterns.SMART_PATTERNS["resolution"])

		if length > 8:
			pattern += _choose(rng, chordsmith.patterns.SMART_PATTERNS["modal"])

		return pattern

	return _choose(rng, chordsmith.patterns.pattern_pool(style))


def _next_pattern (style: str, cadence: typing.Optional[typing.List[str]], rng: random.Random) -> typing.List[str]:

	if cadence is not None:
		return list(cadence)

	if style == "smart":
		return _choose(rng, chordsmith.patterns.SMART_PATTERNS["resolution"])

	return _choose(rng, chordsmith.patterns.pattern_pool(style))


def generate_progression (
	style: str,
	length: int,
	key: str = "C",
	scale: str = "major",
	selected_cadence: typing.Optional[str] = None,
	use_extended_voicings: bool = False,
	use_secondary_dominants: bool = False,
	use_tritone_substitutions: bool = False,
	voicing_style: str = "close",
	smooth_voice_leading: bool = True,
	rng: typing.Optional[random.Random] = None,
	settings: typing.Optional[chordsmith.config.Settings] = None
) -> Progression:

	"""Generate a chord progression.

	Parameters:
		style: One of ``"classical"``, ``"jazz"``, ``"blues"``, ``"modal"``,
			``"contemporary"``, ``"smart"``.
		length: Number of chords: 4, 8, 12 or 16.
		key: Key root note name (e.g. ``"C"``, ``"Eb"``).
		scale: Scale used for plain scale degrees (default ``"major"``).
		selected_cadence: Name of a cadence in ``CADENCE_PATTERNS[style]``.
			When known, its pattern is repeated to fill the progression.
		use_extended_voicings: Attach an octave-qualified voicing to each chord.
		use_secondary_dominants: Allow chords to be replaced by their
			secondary dominant.
		use_tritone_substitutions: Allow dominant sevenths to be replaced by
			their tritone substitute.
		voicing_style: ``"close"``, ``"spread"``, ``"drop2"`` or ``"quartal"``.
		smooth_voice_leading: Voice each chord as close as possible to the
			previous one.
		rng: Random source; a fresh ``random.Random()`` when omitted.
		settings: Substitution probabilities and voicing defaults.

	Returns:
		A `Progression` whose chords, numerals and voicings all have
		exactly ``length`` entries.

	Raises:
		ValueError: For an unknown style, length, key, scale or voicing style.
	"""

	chordsmith.patterns.validate_style(style)

	if length not in chordsmith.patterns.LENGTHS:
		raise ValueError(f"Length must be one of {chordsmith.patterns.LENGTHS}, got {length}")

	if voicing_style not in VOICING_STYLES:
		raise ValueError(f"Unknown voicing style: {voicing_style!r}")

	chordsmith.chords.note_to_pc(key)
	chordsmith.intervals.get_scale_intervals(scale)

	rng = rng or random.Random()
	settings = settings or chordsmith.config.DEFAULT_SETTINGS

	cadence = chordsmith.patterns.find_cadence(style, selected_cadence)
	pattern = _initial_pattern(style, length, cadence, rng)
	logger.debug(f"Starting {style} progression in {key} with pattern {pattern}")

	secondary_probability = settings.secondary_probability_for(style)
	tritone_probability = settings.tritone_probability_for(style)

	chords: typing.List[str] = []
	numerals: typing.List[str] = []
	voicings: typing.List[typing.List[str]] = []
	warnings: typing.List[str] = []
	previous_voicing: typing.Optional[typing.List[str]] = None

	while len(chords) < length:

		for token in pattern:

			if len(chords) >= length:
				break

			chord = chordsmith.degrees.realize_degree(token, key, scale, style)
			numeral = token

			# At most one substitution per chord; the secondary dominant is tried first.
			if use_secondary_dominants and rng.random() < secondary_probability:
				substitute = secondary_dominant(chord)

				if substitute is not None:
					chord = substitute
					numeral = f"V7/{token}"

			elif use_tritone_substitutions and rng.random() < tritone_probability:
				substitute = tritone_substitution(chord)

				if substitute is not None:
					chord = substitute
					numeral = f"bII7/{token}"

			voicing: typing.List[str] = []

			if use_extended_voicings:
				try:
					voicing = chordsmith.voicings.create_voicing(
						chord,
						voicing_style,
						previous_voicing if smooth_voice_leading else None,
						settings.base_octave
					)
					previous_voicing = voicing

				except chordsmith.chords.InvalidChord as exc:
					logger.warning(f"Could not voice {chord}: {exc}")
					warnings.append(str(exc))

			chords.append(chord)
			numerals.append(numeral)
			voicings.append(voicing)

		pattern = _next_pattern(style, cadence, rng)

	return Progression(
		chords = chords,
		roman_numerals = numerals,
		voicings = voicings,
		style = style,
		key = key,
		scale = scale,
		cadence = selected_cadence if cadence is not None else None,
		warnings = warnings
	)
