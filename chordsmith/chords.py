"""Chord symbols and pitch class utilities.

This module turns chord symbols (e.g. ``"Dm7"``, ``"G7alt"``, ``"D/G"``) into
`Chord` objects and provides the note-name helpers that the rest of the
package builds on.

Module-level constants:
- `NOTE_NAME_TO_PC`: Maps note names (e.g., `"C"`, `"F#"`, `"Bb"`) to pitch classes (0-11)
- `SHARP_NAMES` / `FLAT_NAMES`: Pitch class to note name, in each spelling
- `INTERVAL_SEMITONES`: Maps interval labels (`"3M"`, `"7m"`, `"9A"`) to semitones
- `CHORD_QUALITIES`: Maps chord suffixes to interval label lists

Parsing is strict: `parse_chord()` raises `InvalidChord` for anything it does
not recognise. `try_parse_chord()` is the explicit degraded path, logging a
warning and returning ``None`` so that callers can pick their own fallback.
"""

import dataclasses
import logging
import re
import typing


logger = logging.getLogger(__name__)


NOTE_NAME_TO_PC: typing.Dict[str, int] = {
	"C": 0,
	"B#": 0,
	"C#": 1,
	"Db": 1,
	"D": 2,
	"D#": 3,
	"Eb": 3,
	"E": 4,
	"Fb": 4,
	"F": 5,
	"E#": 5,
	"F#": 6,
	"Gb": 6,
	"G": 7,
	"G#": 8,
	"Ab": 8,
	"A": 9,
	"A#": 10,
	"Bb": 10,
	"B": 11,
	"Cb": 11,
}

SHARP_NAMES: typing.List[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

FLAT_NAMES: typing.List[str] = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]


INTERVAL_SEMITONES: typing.Dict[str, int] = {
	"1P": 0,
	"2m": 1,
	"2M": 2,
	"3m": 3,
	"3M": 4,
	"4P": 5,
	"4A": 6,
	"5d": 6,
	"5P": 7,
	"5A": 8,
	"6m": 8,
	"6M": 9,
	"7d": 9,
	"7m": 10,
	"7M": 11,
	"8P": 12,
	"9m": 13,
	"9M": 14,
	"9A": 15,
	"11P": 17,
	"11A": 18,
	"13m": 20,
	"13M": 21,
}

# One canonical name per semitone distance inside an octave.
CANONICAL_INTERVAL_NAMES: typing.List[str] = ["1P", "2m", "2M", "3m", "3M", "4P", "4A", "5P", "6m", "6M", "7m", "7M"]


_MAJOR = ["1P", "3M", "5P"]
_MINOR = ["1P", "3m", "5P"]
_DIMINISHED = ["1P", "3m", "5d"]
_AUGMENTED = ["1P", "3M", "5A"]
_DOMINANT_7TH = ["1P", "3M", "5P", "7m"]
_MAJOR_7TH = ["1P", "3M", "5P", "7M"]
_MINOR_7TH = ["1P", "3m", "5P", "7m"]
_HALF_DIMINISHED = ["1P", "3m", "5d", "7m"]
_DIMINISHED_7TH = ["1P", "3m", "5d", "7d"]
_MINOR_MAJOR_7TH = ["1P", "3m", "5P", "7M"]
_AUGMENTED_7TH = ["1P", "3M", "5A", "7m"]
_SUS4 = ["1P", "4P", "5P"]
_SIX_NINE = ["1P", "3M", "5P", "6M", "9M"]

CHORD_QUALITIES: typing.Dict[str, typing.List[str]] = {
	"": _MAJOR,
	"M": _MAJOR,
	"maj": _MAJOR,
	"m": _MINOR,
	"min": _MINOR,
	"-": _MINOR,
	"dim": _DIMINISHED,
	"°": _DIMINISHED,
	"aug": _AUGMENTED,
	"+": _AUGMENTED,
	"5": ["1P", "5P"],
	"6": ["1P", "3M", "5P", "6M"],
	"m6": ["1P", "3m", "5P", "6M"],
	"7": _DOMINANT_7TH,
	"maj7": _MAJOR_7TH,
	"M7": _MAJOR_7TH,
	"Δ7": _MAJOR_7TH,
	"Δ": _MAJOR_7TH,
	"m7": _MINOR_7TH,
	"min7": _MINOR_7TH,
	"-7": _MINOR_7TH,
	"m7b5": _HALF_DIMINISHED,
	"ø7": _HALF_DIMINISHED,
	"ø": _HALF_DIMINISHED,
	"dim7": _DIMINISHED_7TH,
	"°7": _DIMINISHED_7TH,
	"mM7": _MINOR_MAJOR_7TH,
	"mMaj7": _MINOR_MAJOR_7TH,
	"m(maj7)": _MINOR_MAJOR_7TH,
	"9": ["1P", "3M", "5P", "7m", "9M"],
	"maj9": ["1P", "3M", "5P", "7M", "9M"],
	"m9": ["1P", "3m", "5P", "7m", "9M"],
	"11": ["1P", "5P", "7m", "9M", "11P"],
	"m11": ["1P", "3m", "5P", "7m", "9M", "11P"],
	"maj11": ["1P", "3M", "5P", "7M", "9M", "11P"],
	"13": ["1P", "3M", "5P", "7m", "9M", "13M"],
	"maj13": ["1P", "3M", "5P", "7M", "9M", "13M"],
	"m13": ["1P", "3m", "5P", "7m", "9M", "13M"],
	"7b9": ["1P", "3M", "5P", "7m", "9m"],
	"7#9": ["1P", "3M", "5P", "7m", "9A"],
	"7#11": ["1P", "3M", "5P", "7m", "11A"],
	"7b13": ["1P", "3M", "5P", "7m", "13m"],
	"7alt": ["1P", "3M", "7m", "9m", "9A", "11A", "13m"],
	"7b5": ["1P", "3M", "5d", "7m"],
	"7#5": _AUGMENTED_7TH,
	"aug7": _AUGMENTED_7TH,
	"+7": _AUGMENTED_7TH,
	"13b9": ["1P", "3M", "5P", "7m", "9m", "13M"],
	"m7b9": ["1P", "3m", "5P", "7m", "9m"],
	"maj7#11": ["1P", "3M", "5P", "7M", "11A"],
	"maj7#5": ["1P", "3M", "5A", "7M"],
	"maj13#11": ["1P", "3M", "5P", "7M", "9M", "11A", "13M"],
	"sus2": ["1P", "2M", "5P"],
	"sus4": _SUS4,
	"sus": _SUS4,
	"7sus4": ["1P", "4P", "5P", "7m"],
	"9sus4": ["1P", "4P", "5P", "7m", "9M"],
	"add9": ["1P", "3M", "5P", "9M"],
	"6/9": _SIX_NINE,
	"69": _SIX_NINE,
}


_ROOT_PATTERN = re.compile(r"^([A-G][#b]?)(.*)$")
_NOTE_WITH_OCTAVE_PATTERN = re.compile(r"^([A-G][#b]?)(-?\d+)$")


class InvalidChord (ValueError):

	"""Raised when a chord symbol cannot be parsed into a root and notes."""

	def __init__ (self, symbol: str, reason: str) -> None:

		super().__init__(f"Invalid chord symbol {symbol!r}: {reason}")
		self.symbol = symbol
		self.reason = reason


def note_to_pc (name: str) -> int:

	"""Return the pitch class (0-11) of a note name.

	Raises:
		ValueError: If the note name is not recognised.
	"""

	if name not in NOTE_NAME_TO_PC:
		raise ValueError(f"Unknown note name: {name!r}. Expected e.g. 'C', 'F#', 'Bb'.")

	return NOTE_NAME_TO_PC[name]


def prefers_flats (name: str) -> bool:

	"""Return True when notes derived from ``name`` should be spelled with flats."""

	return "b" in name or name == "F"


def pc_to_note (pc: int, prefer_flats: bool = False) -> str:

	"""Return a note name for a pitch class in the requested spelling."""

	names = FLAT_NAMES if prefer_flats else SHARP_NAMES

	return names[pc % 12]


def chord_root (symbol: str) -> typing.Optional[str]:

	"""Return the written root of a chord symbol, or ``None`` if it has none.

	This only looks at the leading note name, so ``chord_root("Gfoo")`` is
	``"G"`` even though the symbol as a whole does not parse.
	"""

	match = _ROOT_PATTERN.match(symbol.strip()) if symbol else None

	if match is None:
		return None

	return match.group(1)


def transpose (note: str, interval: typing.Union[int, str]) -> str:

	"""Transpose a note name by semitones or by an interval label.

	Parameters:
		note: Note name without octave (e.g. ``"G"``, ``"Bb"``).
		interval: Semitone count (may be negative) or a label such as
			``"5P"``, ``"3M"`` or ``"-3m"``.

	Returns:
		The transposed note name, spelled like ``note`` (flats stay flats).

	Example:
		```python
		transpose("C", 7)      # → "G"
		transpose("G", "4P")   # → "C"
		transpose("C", "-3m")  # → "A"
		transpose("Bb", 2)     # → "C"
		```
	"""

	if isinstance(interval, str):
		sign = -1 if interval.startswith("-") else 1
		label = interval.lstrip("-")

		if label not in INTERVAL_SEMITONES:
			raise ValueError(f"Unknown interval: {interval!r}")

		semitones = sign * INTERVAL_SEMITONES[label]

	else:
		semitones = interval

	return pc_to_note(note_to_pc(note) + semitones, prefers_flats(note))


def interval_between (a: str, b: str) -> typing.Tuple[int, str]:

	"""Return the upward distance from ``a`` to ``b`` as ``(semitones, name)``.

	Semitones fall in 0-11 and the name is canonical (``"5P"``, ``"4A"``...).

	Example:
		```python
		interval_between("C", "G")  # → (7, "5P")
		interval_between("G", "C")  # → (5, "4P")
		```
	"""

	semitones = (note_to_pc(b) - note_to_pc(a)) % 12

	return semitones, CANONICAL_INTERVAL_NAMES[semitones]


def pc_distance (a: int, b: int) -> int:

	"""Shortest distance between two pitch classes (0-6)."""

	diff = (b - a) % 12

	return min(diff, 12 - diff)


def note_to_midi (name: str) -> int:

	"""Convert an octave-qualified note (``"C4"``) to a MIDI number (C4 = 60)."""

	match = _NOTE_WITH_OCTAVE_PATTERN.match(name)

	if match is None:
		raise ValueError(f"Expected a note with octave (e.g. 'C4'), got {name!r}")

	pitch, octave = match.groups()

	return (int(octave) + 1) * 12 + note_to_pc(pitch)


def midi_to_note (midi: int, name: typing.Optional[str] = None) -> str:

	"""Convert a MIDI number to an octave-qualified note.

	When ``name`` is given it is used as the spelling (it must share the
	pitch class of ``midi``), which keeps flats and sharps from the chord
	symbol intact. The octave follows the pitch class, so ``B#`` and ``Cb``
	use the octave of the sounding pitch.
	"""

	if name is None:
		name = SHARP_NAMES[midi % 12]

	elif note_to_pc(name) != midi % 12:
		raise ValueError(f"Note {name!r} does not match MIDI pitch {midi}")

	return f"{name}{midi // 12 - 1}"


@dataclasses.dataclass(frozen=True)
class Chord:

	"""
	A parsed chord symbol: written root, quality suffix, notes and interval labels.
	"""

	symbol: str
	root: str
	quality: str
	notes: typing.Tuple[str, ...]
	intervals: typing.Tuple[str, ...]
	bass: typing.Optional[str] = None


	@property
	def root_pc (self) -> int:

		return NOTE_NAME_TO_PC[self.root]


	def pitch_classes (self) -> typing.List[int]:

		"""
		Return the pitch class of every chord note, root first.
		"""

		return [NOTE_NAME_TO_PC[note] for note in self.notes]


	def semitones (self) -> typing.List[int]:

		"""
		Return each interval as semitones above the root (may exceed 12).
		"""

		return [INTERVAL_SEMITONES[label] for label in self.intervals]


	def has_interval (self, label: str) -> bool:

		return label in self.intervals


	def is_minor (self) -> bool:

		"""
		True for chords built on a minor third without a major third.
		"""

		return "3m" in self.intervals and "3M" not in self.intervals


	def is_dominant_seventh (self) -> bool:

		"""
		True for a major third plus minor seventh (dominant family, altered or not).
		"""

		return "3M" in self.intervals and "7m" in self.intervals


	def is_extended (self) -> bool:

		"""
		True when the chord carries a 9th, 11th or 13th.
		"""

		return any(int(label[:-1]) >= 9 for label in self.intervals)


def parse_chord (symbol: str) -> Chord:

	"""Parse a chord symbol into a `Chord`.

	Parameters:
		symbol: A chord symbol such as ``"C"``, ``"Dm7"``, ``"G7alt"``,
			``"Bbmaj9"``, ``"F#ø7"``, ``"C6/9"`` or a slash chord ``"D/G"``.

	Returns:
		The parsed chord. ``notes[0]`` is always the written root.

	Raises:
		InvalidChord: If the root or quality is not recognised.

	Example:
		```python
		chord = parse_chord("Dm7")
		chord.notes      # → ("D", "F", "A", "C")
		chord.intervals  # → ("1P", "3m", "5P", "7m")
		```
	"""

	match = _ROOT_PATTERN.match(symbol.strip()) if symbol else None

	if match is None:
		raise InvalidChord(symbol, "no root note")

	root, suffix = match.groups()
	bass: typing.Optional[str] = None

	if suffix not in CHORD_QUALITIES and "/" in suffix:
		quality, _, bass = suffix.rpartition("/")

		if bass not in NOTE_NAME_TO_PC:
			raise InvalidChord(symbol, f"unknown bass note {bass!r}")

		suffix = quality

	if suffix not in CHORD_QUALITIES:
		raise InvalidChord(symbol, f"unknown quality {suffix!r}")

	labels = CHORD_QUALITIES[suffix]
	root_pc = NOTE_NAME_TO_PC[root]
	flats = prefers_flats(root)

	notes = [root] + [pc_to_note(root_pc + INTERVAL_SEMITONES[label], flats) for label in labels[1:]]

	return Chord(
		symbol = symbol,
		root = root,
		quality = suffix,
		notes = tuple(notes),
		intervals = tuple(labels),
		bass = bass
	)


def try_parse_chord (symbol: str) -> typing.Optional[Chord]:

	"""Parse a chord symbol, logging and returning ``None`` on failure."""

	try:
		return parse_chord(symbol)

	except InvalidChord as exc:
		logger.warning(f"{exc}; continuing without it")
		return None
