import logging
import typing

import chordsmith.chords


logger = logging.getLogger(__name__)


TONIC = "tonic"
SUBDOMINANT = "subdominant"
DOMINANT = "dominant"
SECONDARY = "secondary"

HARMONIC_FUNCTIONS: typing.Tuple[str, ...] = (TONIC, SUBDOMINANT, DOMINANT, SECONDARY)


def classify_function (chord: str, key: str, roman_numeral: str = "") -> str:

	"""Classify a chord's harmonic function relative to a key.

	Rules, in order:

	1. A roman numeral with a ``/`` (e.g. ``"V7/ii"``) is secondary.
	2. A root a fifth above the key is dominant, a root on the key is tonic,
	   a fourth or a whole tone above is subdominant.
	3. Anything else is dominant if the numeral contains a ``v``, otherwise
	   subdominant.

	A chord or key without a recognisable root is treated as tonic.

	Example:
		```python
		classify_function("G7", "C", "V7")     # → "dominant"
		classify_function("F", "C", "IV")      # → "subdominant"
		classify_function("Dm7", "C", "V7/ii") # → "secondary"
		```
	"""

	if "/" in roman_numeral:
		return SECONDARY

	chord_root = chordsmith.chords.chord_root(chord)
	key_root = chordsmith.chords.chord_root(key)

	if chord_root is None or key_root is None:
		logger.debug(f"No root in chord {chord!r} or key {key!r}; treating as tonic")
		return TONIC

	interval = (chordsmith.chords.NOTE_NAME_TO_PC[chord_root] - chordsmith.chords.NOTE_NAME_TO_PC[key_root]) % 12

	if interval == 0:
		return TONIC

	if interval == 7:
		return DOMINANT

	if interval in (5, 2):
		return SUBDOMINANT

	return DOMINANT if "v" in roman_numeral.lower() else SUBDOMINANT


def classify_progression (chords: typing.Sequence[str], key: str, roman_numerals: typing.Optional[typing.Sequence[str]] = None) -> typing.List[str]:

	"""
	Classify every chord of a progression; numerals are optional.
	"""

	if roman_numerals is None:
		roman_numerals = [""] * len(chords)

	if len(roman_numerals) != len(chords):
		raise ValueError("Chords and roman numerals must have the same length")

	return [classify_function(chord, key, numeral) for chord, numeral in zip(chords, roman_numerals)]
