import typing

import chordsmith.chords


SCALE_INTERVALS: typing.Dict[str, typing.List[int]] = {
	"major": [0, 2, 4, 5, 7, 9, 11],
	"ionian": [0, 2, 4, 5, 7, 9, 11],
	"minor": [0, 2, 3, 5, 7, 8, 10],
	"aeolian": [0, 2, 3, 5, 7, 8, 10],
	"dorian": [0, 2, 3, 5, 7, 9, 10],
	"phrygian": [0, 1, 3, 5, 7, 8, 10],
	"lydian": [0, 2, 4, 6, 7, 9, 11],
	"mixolydian": [0, 2, 4, 5, 7, 9, 10],
	"locrian": [0, 1, 3, 5, 6, 8, 10],
	"harmonic_minor": [0, 2, 3, 5, 7, 8, 11],
	"melodic_minor": [0, 2, 3, 5, 7, 9, 11],
	"major_pentatonic": [0, 2, 4, 7, 9],
	"minor_pentatonic": [0, 3, 5, 7, 10],
	"blues": [0, 3, 5, 6, 7, 10],
	"whole_tone": [0, 2, 4, 6, 8, 10],
	"altered": [0, 1, 3, 4, 6, 8, 10],
	"lydian_dominant": [0, 2, 4, 6, 7, 9, 10],
	"lydian_augmented": [0, 2, 4, 6, 8, 9, 11],
	"phrygian_dominant": [0, 1, 4, 5, 7, 8, 10],
	"locrian_natural2": [0, 2, 3, 5, 6, 8, 10],
	"harmonic_major": [0, 2, 4, 5, 7, 8, 11],
	"half_whole_diminished": [0, 1, 3, 4, 6, 7, 9, 10],
	"whole_half_diminished": [0, 2, 3, 5, 6, 8, 9, 11],
	"bebop_dominant": [0, 2, 4, 5, 7, 9, 10, 11],
	"hungarian_minor": [0, 2, 3, 6, 7, 8, 11],
	"ukrainian_dorian": [0, 2, 3, 6, 7, 9, 10],
	"persian": [0, 1, 4, 5, 6, 8, 11],
	"double_harmonic": [0, 1, 4, 5, 7, 8, 11],
	"japanese": [0, 1, 5, 7, 8],
}

# Other common names for the scales above.
SCALE_ALIASES: typing.Dict[str, str] = {
	"natural_minor": "minor",
	"super_locrian": "altered",
	"diminished_whole_tone": "altered",
	"lydian_b7": "lydian_dominant",
	"overtone": "lydian_dominant",
	"locrian_#2": "locrian_natural2",
	"diminished": "half_whole_diminished",
	"byzantine": "double_harmonic",
	"double_harmonic_major": "double_harmonic",
	"pentatonic_major": "major_pentatonic",
	"pentatonic_minor": "minor_pentatonic",
}

# Scales whose third is minor; used to pick the relative key and defaults.
MINOR_SCALES: typing.FrozenSet[str] = frozenset({
	"minor", "aeolian", "dorian", "phrygian", "locrian", "harmonic_minor", "melodic_minor", "minor_pentatonic", "blues",
	"locrian_natural2", "hungarian_minor", "ukrainian_dorian"
})

# Minor keys with natural roots whose signatures use flats (C minor = 3 flats).
FLAT_MINOR_ROOTS: typing.FrozenSet[str] = frozenset({"C", "D", "F", "G"})

MAJOR_MODES: typing.List[str] = ["ionian", "dorian", "phrygian", "lydian", "mixolydian", "aeolian", "locrian"]

MINOR_MODES: typing.List[str] = ["aeolian", "dorian", "phrygian", "harmonic_minor", "melodic_minor"]


def normalize_scale_name (scale_name: str) -> str:

	"""Accept ``"harmonic minor"`` and ``"Harmonic-Minor"`` as ``"harmonic_minor"``.

	Known aliases resolve to their table name (``"super locrian"`` → ``"altered"``).
	"""

	name = scale_name.strip().lower().replace(" ", "_").replace("-", "_")

	return SCALE_ALIASES.get(name, name)


def get_scale_intervals (scale_name: str) -> typing.List[int]:

	"""
	Return the semitone offsets of a named scale.
	"""

	name = normalize_scale_name(scale_name)

	if name not in SCALE_INTERVALS:
		raise ValueError(f"Unknown scale '{scale_name}'. Available: {sorted(SCALE_INTERVALS)}")

	return list(SCALE_INTERVALS[name])


def is_minor_scale (scale_name: str) -> bool:

	return normalize_scale_name(scale_name) in MINOR_SCALES


def scale_pitch_classes (key_pc: int, scale_name: str = "major") -> typing.List[int]:

	"""
	Return the pitch classes (0–11) that belong to a key and scale.

	Parameters:
		key_pc: Root pitch class (0 = C, 1 = C#/Db, …, 11 = B).
		scale_name: Any key of ``SCALE_INTERVALS``.

	Returns:
		Pitch classes in scale order starting from the root.

	Example:
		```python
		scale_pitch_classes(9, "minor")  # → [9, 11, 0, 2, 4, 5, 7]
		```
	"""

	return [(key_pc + i) % 12 for i in get_scale_intervals(scale_name)]


def scale_notes (root: str, scale_name: str = "major") -> typing.List[str]:

	"""Return the note names of a scale, starting from ``root``.

	Spelling follows the root: flat keys (and F) are spelled with flats.

	Parameters:
		root: Note name (e.g. ``"C"``, ``"Eb"``).
		scale_name: Scale name, e.g. ``"major"``, ``"dorian"``, ``"harmonic minor"``.

	Raises:
		ValueError: If the root or scale is not recognised.

	Example:
		```python
		scale_notes("C", "major")   # → ["C", "D", "E", "F", "G", "A", "B"]
		scale_notes("F", "major")   # → ["F", "G", "A", "Bb", "C", "D", "E"]
		```
	"""

	key_pc = chordsmith.chords.note_to_pc(root)
	flats = chordsmith.chords.prefers_flats(root)

	if is_minor_scale(scale_name) and root in FLAT_MINOR_ROOTS:
		flats = True

	return [root] + [chordsmith.chords.pc_to_note(pc, flats) for pc in scale_pitch_classes(key_pc, scale_name)[1:]]


SCALE_CHARACTERISTICS: typing.Dict[str, str] = {
	"major": "Bright and stable",
	"ionian": "Bright and stable",
	"lydian": "Bright and mystical (#4)",
	"mixolydian": "Dominant, bluesy (b7)",
	"minor": "Natural minor, melancholic",
	"aeolian": "Natural minor, melancholic",
	"dorian": "Minor with bright 6th",
	"phrygian": "Dark, Spanish flavor (b2)",
	"locrian": "Diminished, very unstable",
	"melodic_minor": "Jazz minor, fluid sound",
	"harmonic_minor": "Exotic, Middle Eastern",
	"altered": "Very tense, altered dominant",
	"whole_tone": "Symmetrical, dreamlike",
	"half_whole_diminished": "Symmetrical, unstable",
	"whole_half_diminished": "Symmetrical, diminished seventh colour",
	"lydian_dominant": "Fusion sound (#4, b7)",
	"lydian_augmented": "Modern jazz sound (#4, #5)",
	"phrygian_dominant": "Dominant with b9 and b13",
	"locrian_natural2": "Half-diminished sound",
	"harmonic_major": "Major with a dark b6",
	"hungarian_minor": "Eastern European flavor",
	"ukrainian_dorian": "Folk music character",
	"persian": "Middle Eastern sound",
	"double_harmonic": "Very exotic, Arabic sound",
	"japanese": "Pentatonic-based, Asian",
	"major_pentatonic": "Five-note, no tension",
	"minor_pentatonic": "Blues-based, soulful",
	"blues": "Blues scale, soulful",
	"bebop_dominant": "Jazz bebop sound",
}

DEFAULT_CHARACTERISTIC = "Unique scale character"

# Idiomatic scale choices per chord family, most usual first.
_FAMILY_SCALES: typing.Dict[str, typing.List[str]] = {
	"major": ["major", "lydian", "mixolydian", "harmonic_major", "major_pentatonic"],
	"major_seventh": ["major", "lydian", "harmonic_major", "lydian_augmented"],
	"dominant": [
		"mixolydian", "bebop_dominant", "lydian_dominant", "phrygian_dominant",
		"altered", "half_whole_diminished", "whole_tone", "blues"
	],
	"dominant_flat_nine": ["half_whole_diminished", "phrygian_dominant", "altered", "harmonic_minor"],
	"dominant_sharp_eleven": ["lydian_dominant", "whole_tone", "altered"],
	"altered": ["altered"],
	"suspended": ["mixolydian", "dorian", "major_pentatonic"],
	"minor": ["minor", "dorian", "phrygian", "harmonic_minor", "melodic_minor", "minor_pentatonic"],
	"minor_seventh": ["dorian", "minor", "phrygian", "minor_pentatonic", "blues"],
	"half_diminished": ["locrian", "locrian_natural2"],
	"diminished": ["whole_half_diminished", "locrian"],
	"augmented": ["whole_tone", "lydian_augmented"],
}


def scale_characteristics (scale_name: str) -> str:

	"""A short description of a scale's sound.

	Example:
		```python
		scale_characteristics("lydian")         # → "Bright and mystical (#4)"
		scale_characteristics("super locrian")  # → "Very tense, altered dominant"
		```
	"""

	return SCALE_CHARACTERISTICS.get(normalize_scale_name(scale_name), DEFAULT_CHARACTERISTIC)


def chord_family (chord: chordsmith.chords.Chord) -> str:

	"""
	Classify a chord by the intervals that decide its scale choices.
	"""

	if chord.quality == "7alt":
		return "altered"

	if chord.is_dominant_seventh():
		if chord.has_interval("9m") or chord.has_interval("9A"):
			return "dominant_flat_nine"
		if chord.has_interval("11A"):
			return "dominant_sharp_eleven"
		return "dominant"

	if chord.has_interval("5d") and chord.has_interval("3m"):
		return "half_diminished" if chord.has_interval("7m") else "diminished"

	if chord.is_minor():
		return "minor_seventh" if chord.has_interval("7m") else "minor"

	if not chord.has_interval("3M"):
		return "suspended"

	if chord.has_interval("5A"):
		return "augmented"

	if chord.has_interval("7M"):
		return "major_seventh"

	return "major"


def get_compatible_scales (chord: typing.Union[str, chordsmith.chords.Chord]) -> typing.List[str]:

	"""List the scales on a chord's root that contain every chord tone.

	The usual choices for the chord's family come first, in order of
	preference, followed by any other scale from ``SCALE_INTERVALS`` that
	fits. Scales with identical steps (``major``/``ionian``) appear once.

	Parameters:
		chord: A chord symbol or parsed `Chord`.

	Returns:
		Scale names. Empty if the symbol cannot be parsed.

	Example:
		```python
		get_compatible_scales("G7")
		# → ["mixolydian", "bebop_dominant", "lydian_dominant",
		#    "phrygian_dominant", "half_whole_diminished"]
		```
	"""

	parsed = chordsmith.chords.try_parse_chord(chord) if isinstance(chord, str) else chord

	if parsed is None:
		return []

	tones = {(pc - parsed.root_pc) % 12 for pc in parsed.pitch_classes()}
	candidates = _FAMILY_SCALES[chord_family(parsed)] + list(SCALE_INTERVALS)

	compatible: typing.List[str] = []
	seen: typing.Set[typing.Tuple[int, ...]] = set()

	for name in candidates:
		steps = tuple(SCALE_INTERVALS[name])

		if steps in seen or not tones.issubset(steps):
			continue

		seen.add(steps)
		compatible.append(name)

	return compatible
