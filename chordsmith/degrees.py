"""Scale-degree tokens.

A token is an optional accidental, a roman numeral, an optional chord-quality
suffix and an optional ``/<degree>`` secondary marker::

	"ii7"     supertonic minor seventh
	"bVII7"   flattened seventh degree, dominant seventh
	"V7/ii"   dominant seventh of the supertonic
	"iiø7"    half-diminished supertonic

Numeral case carries the triad quality (upper = major, lower = minor). It
picks the default suffix when the token has none, and turns a bare numeric
suffix into a minor one (``"ii7"`` is ``Dm7`` in C, ``"V7"`` is ``G7``).
"""

import dataclasses
import re
import typing

import chordsmith.chords
import chordsmith.intervals


ROMAN_STEPS: typing.Dict[str, int] = {"i": 1, "ii": 2, "iii": 3, "iv": 4, "v": 5, "vi": 6, "vii": 7}

ACCIDENTAL_OFFSETS: typing.Dict[str, int] = {"": 0, "b": -1, "#": 1}

# Longest numerals first so "iv" is not read as "i" + "v".
_DEGREE_PATTERN = re.compile(r"^([b#]?)(VII|III|IV|VI|II|V|I)(.*)$", re.IGNORECASE)


@dataclasses.dataclass(frozen=True)
class Degree:

	"""A parsed scale-degree token."""

	token: str
	accidental: str
	numeral: str
	quality: str
	target: typing.Optional["Degree"] = None

	@property
	def step (self) -> int:

		return ROMAN_STEPS[self.numeral.lower()]

	@property
	def is_minor (self) -> bool:

		return self.numeral.islower()

	@property
	def is_secondary (self) -> bool:

		return self.target is not None


def parse_degree (token: str) -> Degree:

	"""Parse a scale-degree token.

	Raises:
		ValueError: If the token has no roman numeral or mixes numeral case.
	"""

	body, _, target_token = token.partition("/")
	match = _DEGREE_PATTERN.match(body)

	if match is None:
		raise ValueError(f"Not a scale-degree token: {token!r}")

	accidental, numeral, quality = match.groups()

	if not (numeral.isupper() or numeral.islower()):
		raise ValueError(f"Mixed-case roman numeral in {token!r}")

	target = parse_degree(target_token) if target_token else None

	return Degree(token=token, accidental=accidental, numeral=numeral, quality=quality, target=target)


def default_quality (style: str, is_minor: bool) -> str:

	"""Chord suffix used for a token without an explicit quality."""

	if style in ("jazz", "smart"):
		return "m7" if is_minor else "maj7"

	if style == "contemporary":
		return "m9" if is_minor else "maj9"

	return "m" if is_minor else ""


def degree_root_pc (degree: Degree, key_pc: int, scale: str = "major") -> int:

	"""Return the root pitch class of a degree in a key.

	Plain degrees use the steps of ``scale``. Degrees with an accidental are
	measured from the major scale (``bVII`` is a whole tone below the tonic in
	any mode). Secondary degrees are built on their target's root as if it
	were a major tonic.
	"""

	major = chordsmith.intervals.SCALE_INTERVALS["major"]
	offset = ACCIDENTAL_OFFSETS[degree.accidental]

	if degree.target is not None:
		target_pc = degree_root_pc(degree.target, key_pc, scale)
		return (target_pc + major[degree.step - 1] + offset) % 12

	scale_steps = chordsmith.intervals.get_scale_intervals(scale)

	if degree.accidental or len(scale_steps) != 7:
		scale_steps = major

	return (key_pc + scale_steps[degree.step - 1] + offset) % 12


def realize_degree (token: str, key: str = "C", scale: str = "major", style: str = "classical") -> str:

	"""Turn a scale-degree token into a chord symbol in a key.

	Example:
		```python
		realize_degree("ii7", "C")              # → "Dm7"
		realize_degree("bVII7", "C")            # → "Bb7"
		realize_degree("V7/ii", "C")            # → "A7"
		realize_degree("vi", "C", style="jazz")  # → "Am7"
		```
	"""

	degree = parse_degree(token)
	key_pc = chordsmith.chords.note_to_pc(key)
	root_pc = degree_root_pc(degree, key_pc, scale)

	flats = chordsmith.chords.prefers_flats(key) or degree.accidental == "b"

	if chordsmith.intervals.is_minor_scale(scale) and key in chordsmith.intervals.FLAT_MINOR_ROOTS:
		flats = True

	quality = degree.quality or default_quality(style, degree.is_minor)

	# "ii7" and "i9" mean minor chords with a seventh or ninth.
	if degree.quality[:1].isdigit() and degree.is_minor:
		quality = f"m{quality}"

	return f"{chordsmith.chords.pc_to_note(root_pc, flats)}{quality}"
