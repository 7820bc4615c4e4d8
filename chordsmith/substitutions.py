"""Single-chord substitutions, secondary-dominant chains and modal interchange.

All functions here are total: a chord that cannot be parsed produces an empty
result (with a logged warning) rather than an exception.
"""

import dataclasses
import logging
import typing

import chordsmith.chords
import chordsmith.functions
import chordsmith.intervals
import chordsmith.patterns


logger = logging.getLogger(__name__)


EXTENDED_CHAIN_LENGTH = 4


@dataclasses.dataclass(frozen=True)
class ModalSuggestion:

	"""A chord borrowed from a parallel mode."""

	chord: str
	mode: str
	explanation: str


def _unique (symbols: typing.Iterable[str]) -> typing.List[str]:

	"""Drop repeats while keeping first-seen order."""

	return list(dict.fromkeys(symbols))


def get_chord_substitutions (chord: str, roman_numeral: str = "", function: str = chordsmith.functions.TONIC) -> typing.List[str]:

	"""Suggest replacements for a chord based on its harmonic function.

	Each function has its own candidate family (extended tonics, the altered
	dominant family, minor-ninth subdominants, altered secondaries). Upper
	structure slash chords are offered for every function.

	Parameters:
		chord: The chord to replace (e.g. ``"G7"``).
		roman_numeral: Its degree label. Kept for callers that classify by
			numeral; the candidates depend on ``function`` alone.
		function: One of ``"tonic"``, ``"subdominant"``, ``"dominant"``,
			``"secondary"``.

	Returns:
		Unique chord symbols in suggestion order, or ``[]`` when the chord
		cannot be parsed.

	Example:
		```python
		get_chord_substitutions("G7", "V7", "dominant")
		# → ["G7b9", "G7#9", "G7#11", "G7alt", "G13b9", "C#7b5", ...]
		```
	"""

	parsed = chordsmith.chords.try_parse_chord(chord)

	if parsed is None:
		return []

	root = parsed.root

	def up (semitones: int) -> str:
		return chordsmith.chords.transpose(root, semitones)

	tritone = up(6)
	mediant = up(4)
	candidates: typing.List[str] = []

	if function == chordsmith.functions.TONIC:
		relative = up(3) if parsed.is_minor() else up(-3)
		candidates += [f"{root}maj9", f"{root}6/9", f"{relative}m11", f"{mediant}m7", f"{up(8)}m7"]

		if not parsed.is_minor():
			candidates += [f"{root}maj13#11", f"{root}maj7#5", f"{mediant}m7b5"]

	elif function == chordsmith.functions.DOMINANT:
		candidates += [
			f"{root}7b9",
			f"{root}7#9",
			f"{root}7#11",
			f"{root}7alt",
			f"{root}13b9",
			f"{tritone}7b5",
			f"{tritone}7#9",
			f"{mediant}7sus4",
			f"{up(9)}7b13",
		]

	elif function == chordsmith.functions.SUBDOMINANT:
		candidates += [
			f"{root}m9",
			f"{root}m11",
			f"{mediant}m7b5",
			f"{up(5)}m7",
			f"{root}sus4",
			f"{root}6/9",
			f"{up(10)}m7b5",
		]

	elif function == chordsmith.functions.SECONDARY:
		candidates += [f"{root}7b9", f"{root}7#5", f"{tritone}7", f"{up(9)}m7b5"]

	else:
		logger.debug(f"No function-specific substitutions for {function!r}")

	# Upper structures over the original root.
	candidates += [f"{root}7sus4", f"{up(2)}/{root}", f"{up(4)}/{root}", f"{up(6)}m/{root}"]

	return _unique(candidates)


def _extended_chain (target_root: str) -> typing.List[str]:

	"""ii-V pairs stepping backward by fifths from the target, last four chords."""

	chain: typing.List[str] = []
	current = target_root

	for _ in range(2):
		dominant = chordsmith.chords.transpose(current, 7)
		supertonic = chordsmith.chords.transpose(dominant, 7)
		chain = [f"{supertonic}m7", f"{dominant}7"] + chain
		current = supertonic

	return chain[-EXTENDED_CHAIN_LENGTH:]


def _chromatic_chain (target_root: str) -> typing.List[str]:

	return [f"{chordsmith.chords.transpose(target_root, -step)}7" for step in (3, 2, 1)]


def _modal_chain (key_root: str) -> typing.List[str]:

	key_pc = chordsmith.chords.note_to_pc(key_root)
	flat_sixth = chordsmith.chords.pc_to_note(key_pc + 8, prefer_flats=True)
	flat_seventh = chordsmith.chords.pc_to_note(key_pc + 10, prefer_flats=True)

	return [f"{flat_sixth}maj7", f"{flat_seventh}7"]


def generate_secondary_dominant_chains (target_chord: str, key: str = "C") -> typing.List[typing.List[str]]:

	"""Build approach chains that lead into ``target_chord``.

	Three chains are returned, each ending on the target:

	- **extended** - ii-V pairs walking back around the circle of fifths.
	- **chromatic** - dominant sevenths descending by semitone onto the target.
	- **modal** - bVI maj7 and bVII7 borrowed from the parallel minor of ``key``.

	Example:
		```python
		generate_secondary_dominant_chains("C", "C")
		# → [["Em7", "A7", "Dm7", "G7", "C"],
		#    ["A7", "A#7", "B7", "C"],
		#    ["Abmaj7", "Bb7", "C"]]
		```
	"""

	target_root = chordsmith.chords.chord_root(target_chord)
	key_root = chordsmith.chords.chord_root(key)

	if target_root is None or target_root not in chordsmith.chords.NOTE_NAME_TO_PC:
		logger.warning(f"No root in target chord {target_chord!r}; no chains generated")
		return []

	chains = [
		_extended_chain(target_root) + [target_chord],
		_chromatic_chain(target_root) + [target_chord],
	]

	if key_root is not None and key_root in chordsmith.chords.NOTE_NAME_TO_PC:
		chains.append(_modal_chain(key_root) + [target_chord])

	else:
		logger.warning(f"Unknown key {key!r}; skipping the modal chain")

	return chains


def get_modal_interchange_chords (chord: str, scale_context: str = "major") -> typing.List[ModalSuggestion]:

	"""Offer the characteristic chord of each parallel mode on the chord's root.

	Major contexts draw from the seven church modes; any context naming
	``"minor"`` draws from the minor family (aeolian, dorian, phrygian,
	harmonic and melodic minor). Suggestions sounding the same pitch classes
	as ``chord``, however it is spelled, are skipped.

	Example:
		```python
		[s.chord for s in get_modal_interchange_chords("Cmaj7", "major")]
		# → ["Cm7", "Cm7b9", "Cmaj7#11", "C7", "Cm7", "Cm7b5"]
		```
	"""

	root = chordsmith.chords.chord_root(chord)

	if root is None or root not in chordsmith.chords.NOTE_NAME_TO_PC:
		logger.warning(f"No root in chord {chord!r}; no modal interchange suggestions")
		return []

	modes = chordsmith.intervals.MINOR_MODES if "minor" in scale_context.lower() else chordsmith.intervals.MAJOR_MODES
	current = chordsmith.chords.try_parse_chord(chord)
	current_pcs = frozenset(current.pitch_classes()) if current is not None else None
	suggestions: typing.List[ModalSuggestion] = []

	for mode in modes:
		borrowed = f"{root}{chordsmith.patterns.MODE_CHARACTERISTIC_QUALITY[mode]}"

		# Same notes under another spelling ("CM7", "CΔ7") count as the input chord.
		if borrowed == chord or frozenset(chordsmith.chords.parse_chord(borrowed).pitch_classes()) == current_pcs:
			continue

		suggestions.append(ModalSuggestion(
			chord = borrowed,
			mode = mode,
			explanation = chordsmith.patterns.MODE_EXPLANATIONS[mode]
		))

	return suggestions
