"""Whole-progression reharmonisation.

`generate_progression_variations` applies every technique below to a chord
list and returns one `Variation` per result. Techniques that recolour chords
keep the progression's length. Rhythmic doubling and chromatic approach
chords lengthen it.

A chord that cannot be parsed is carried through every technique unchanged.
"""

import dataclasses
import logging
import typing

import chordsmith.chords
import chordsmith.patterns


logger = logging.getLogger(__name__)


INTERCHANGE_MODES: typing.Tuple[str, ...] = ("dorian", "phrygian", "lydian", "mixolydian", "aeolian", "locrian")


@dataclasses.dataclass(frozen=True)
class Variation:

	"""A reharmonised version of a progression.

	``complexity`` runs from 1 (gentle) to 5 (advanced). ``style`` is a
	descriptive label for the sound, not a generator style.
	"""

	chords: typing.List[str]
	description: str
	complexity: int
	style: str
	technique: str


Recolour = typing.Callable[[chordsmith.chords.Chord], str]


def _recolour (chords: typing.Sequence[str], parsed: typing.Sequence[typing.Optional[chordsmith.chords.Chord]], fn: Recolour) -> typing.List[str]:

	return [fn(chord) if chord is not None else symbol for symbol, chord in zip(chords, parsed)]


def _harmonic_substitutions (chords, parsed) -> typing.List[Variation]:

	def relative (chord: chordsmith.chords.Chord) -> str:
		if chord.is_minor():
			return chordsmith.chords.transpose(chord.root, 3)
		return f"{chordsmith.chords.transpose(chord.root, -3)}m"

	def mediant (chord: chordsmith.chords.Chord) -> str:
		return f"{chordsmith.chords.transpose(chord.root, 4)}{chord.quality}"

	return [
		Variation(_recolour(chords, parsed, relative), "Relative minor/major substitutions", 2, "Jazz", "Harmonic Substitution"),
		Variation(_recolour(chords, parsed, mediant), "Mediant relationships", 3, "Contemporary", "Harmonic Substitution"),
	]


def _modal_interchanges (chords, parsed) -> typing.List[Variation]:

	variations: typing.List[Variation] = []

	for mode in INTERCHANGE_MODES:
		quality = chordsmith.patterns.MODE_CHARACTERISTIC_QUALITY[mode]

		variations.append(Variation(
			chords = _recolour(chords, parsed, lambda chord: f"{chord.root}{quality}"),
			description = f"Modal interchange using {mode} mode",
			complexity = 3,
			style = "Modal",
			technique = "Modal Interchange"
		))

	return variations


def _secondary_dominants (chords, parsed) -> typing.List[Variation]:

	"""Every chord but the last becomes the dominant of its successor."""

	result = list(chords)

	for i in range(len(chords) - 1):
		following = parsed[i + 1]

		if following is not None:
			result[i] = f"{chordsmith.chords.transpose(following.root, 7)}7"

	return [Variation(result, "Secondary dominant chain", 3, "Classical/Jazz", "Secondary Dominants")]


def _extensions (chords, parsed, style: str) -> typing.List[Variation]:

	if style == "blues":
		ninths, upper = ("m9", "9"), ("m11", "13")
		label = "Blues"

	else:
		ninths, upper = ("m9", "maj9"), ("m11", "maj13")
		label = "Jazz"

	def extend (qualities: typing.Tuple[str, str]) -> Recolour:
		return lambda chord: f"{chord.root}{qualities[0] if chord.is_minor() else qualities[1]}"

	return [
		Variation(_recolour(chords, parsed, extend(ninths)), "Extended chord voicings with 9ths", 2, label, "Extension"),
		Variation(_recolour(chords, parsed, extend(upper)), "Extended chord voicings with 11ths/13ths", 3, f"Modern {label}", "Extension"),
	]


def _tritone_substitutions (chords, parsed) -> typing.List[Variation]:

	def substitute (chord: chordsmith.chords.Chord) -> str:
		if chord.is_dominant_seventh():
			return f"{chordsmith.chords.transpose(chord.root, 6)}7"
		return chord.symbol

	return [Variation(_recolour(chords, parsed, substitute), "Tritone substitutions for dominant chords", 4, "Jazz", "Tritone Substitution")]


def _chord_scale_variations (chords, parsed) -> typing.List[Variation]:

	return [
		Variation(
			_recolour(chords, parsed, lambda chord: f"{chord.root}{'mM7' if chord.is_minor() else 'maj7#11'}"),
			"Melodic minor harmony", 4, "Modern Jazz", "Scale-Based Harmony"
		),
		Variation(
			_recolour(chords, parsed, lambda chord: f"{chord.root}7alt"),
			"Altered scale harmony", 5, "Advanced Jazz", "Scale-Based Harmony"
		),
	]


def _rhythmic_variations (chords, parsed) -> typing.List[Variation]:

	doubled = [symbol for symbol in chords for _ in range(2)]

	return [Variation(doubled, "Double-time harmonic rhythm", 2, "Rhythmic", "Rhythmic Variation")]


def _chromatic_approaches (chords, parsed) -> typing.List[Variation]:

	result: typing.List[str] = []

	for symbol, chord in zip(chords, parsed):

		if chord is not None:
			result.append(f"{chordsmith.chords.transpose(chord.root, -1)}7")

		result.append(symbol)

	return [Variation(result, "Chromatic approach chords", 3, "Bebop", "Chromatic Approach")]


def _polytonal_variations (chords, parsed) -> typing.List[Variation]:

	def stack (chord: chordsmith.chords.Chord) -> str:
		return f"{chord.root}{chord.quality}/{chordsmith.chords.transpose(chord.root, 7)}"

	return [Variation(_recolour(chords, parsed, stack), "Polytonal harmony with slash chords", 4, "Contemporary", "Polytonality")]


def _symmetric_variations (chords, parsed) -> typing.List[Variation]:

	return [Variation(
		_recolour(chords, parsed, lambda chord: f"{chord.root}{'ø7' if chord.is_minor() else 'aug7'}"),
		"Symmetric harmony", 4, "Modern", "Symmetric Harmony"
	)]


def generate_progression_variations (chords: typing.Sequence[str], style: str = "jazz") -> typing.List[Variation]:

	"""Reharmonise a progression with every available technique.

	Parameters:
		chords: The progression as chord symbols.
		style: Generator style of the progression. Blues extends chords
			with dominant 9ths and 13ths instead of major ones.

	Returns:
		Variations in a fixed order: harmonic substitution, modal
		interchange (one per mode), secondary dominants, extensions, tritone
		substitution, chord-scale harmony, rhythmic doubling, chromatic
		approach, polytonality, symmetric harmony.

	Raises:
		ValueError: If ``style`` is not a known generator style.

	Example:
		```python
		variations = generate_progression_variations(["Dm7", "G7", "Cmaj7"], "jazz")
		tritone = next(v for v in variations if v.technique == "Tritone Substitution")
		tritone.chords  # → ["Dm7", "C#7", "Cmaj7"]
		```
	"""

	chordsmith.patterns.validate_style(style)

	chords = list(chords)

	if not chords:
		return []

	parsed = [chordsmith.chords.try_parse_chord(symbol) for symbol in chords]

	variations: typing.List[Variation] = []
	variations += _harmonic_substitutions(chords, parsed)
	variations += _modal_interchanges(chords, parsed)
	variations += _secondary_dominants(chords, parsed)
	variations += _extensions(chords, parsed, style)
	variations += _tritone_substitutions(chords, parsed)
	variations += _chord_scale_variations(chords, parsed)
	variations += _rhythmic_variations(chords, parsed)
	variations += _chromatic_approaches(chords, parsed)
	variations += _polytonal_variations(chords, parsed)
	variations += _symmetric_variations(chords, parsed)

	logger.debug(f"Generated {len(variations)} variations of {chords}")

	return variations
