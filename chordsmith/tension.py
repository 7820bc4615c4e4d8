"""Harmonic tension analysis.

Scores a chord on a 0-100 scale from three independent components:

1. **Harmonic** - dissonant intervals inside the chord, extensions and
   alterations.
2. **Functional** - the pull of the chord's harmonic function, plus a bonus
   for roots far from the key centre.
3. **Voice leading** - parallel perfect intervals and large leaps into the
   next chord.

Every rule that contributes also records a `TensionSource` describing why,
so the breakdown always sums to the (unclamped) total.
"""

import dataclasses
import logging
import typing

import chordsmith.chords
import chordsmith.functions
import chordsmith.intervals


logger = logging.getLogger(__name__)


HARMONIC = "harmonic"
FUNCTIONAL = "functional"
VOICE_LEADING = "voiceLeading"

DISSONANT_INTERVALS: typing.FrozenSet[str] = frozenset({
	"2m", "2M", "4A", "5d", "7m", "7M", "9m", "9M", "11A", "13m"
})

ALTERATION_MARKERS: typing.Tuple[str, ...] = ("alt", "b5", "#5")

DISSONANCE_WEIGHT = 15
EXTENSION_WEIGHT = 20
ALTERATION_WEIGHT = 25

FUNCTION_WEIGHTS: typing.Dict[str, int] = {
	chordsmith.functions.DOMINANT: 60,
	chordsmith.functions.SUBDOMINANT: 30,
	chordsmith.functions.SECONDARY: 45,
	chordsmith.functions.TONIC: 0,
}

FUNCTION_DESCRIPTIONS: typing.Dict[str, typing.Tuple[str, str]] = {
	chordsmith.functions.DOMINANT: ("Dominant function creates strong pull to tonic", "Resolve to tonic or deceptively to submediant"),
	chordsmith.functions.SUBDOMINANT: ("Subdominant function creates moderate tension", "Move to dominant or tonic"),
	chordsmith.functions.SECONDARY: ("Secondary function creates temporary tonal shift", "Resolve to local tonic or continue secondary progression"),
}

REMOTE_ROOT_WEIGHT = 20
PARALLEL_WEIGHT = 25
LEAP_THRESHOLD = 2
MAX_LEAP_TENSION = 40

MAX_TENSION = 100


@dataclasses.dataclass(frozen=True)
class TensionSource:

	"""One contribution to a chord's tension."""

	category: str
	description: str
	severity: int
	resolution_hint: typing.Optional[str] = None


@dataclasses.dataclass(frozen=True)
class TensionAnalysis:

	"""Result of `analyze_tension`."""

	total_tension: int
	sources: typing.Tuple[TensionSource, ...]
	resolution_paths: typing.Tuple[str, ...]
	voice_leading_suggestions: typing.Tuple[str, ...]


def harmonic_tension (chord: chordsmith.chords.Chord) -> typing.List[TensionSource]:

	"""
	Tension from the chord's own structure.
	"""

	sources: typing.List[TensionSource] = []
	dissonant = [label for label in chord.intervals if label in DISSONANT_INTERVALS]

	if dissonant:
		sources.append(TensionSource(
			category = HARMONIC,
			description = f"Contains dissonant intervals: {', '.join(dissonant)}",
			severity = len(dissonant) * DISSONANCE_WEIGHT,
			resolution_hint = "Consider resolving dissonant intervals by step"
		))

	if chord.is_extended():
		sources.append(TensionSource(
			category = HARMONIC,
			description = "Extended harmony increases complexity",
			severity = EXTENSION_WEIGHT,
			resolution_hint = "Extended harmonies typically resolve to simpler structures"
		))

	if any(marker in chord.symbol for marker in ALTERATION_MARKERS):
		sources.append(TensionSource(
			category = HARMONIC,
			description = "Altered chord tones create instability",
			severity = ALTERATION_WEIGHT,
			resolution_hint = "Altered tones typically resolve by half-step"
		))

	return sources


def functional_tension (chord: chordsmith.chords.Chord, function: str, key_pc: int) -> typing.List[TensionSource]:

	"""
	Tension from the chord's role and its distance from the key centre.
	"""

	sources: typing.List[TensionSource] = []

	if FUNCTION_WEIGHTS.get(function, 0) > 0:
		description, hint = FUNCTION_DESCRIPTIONS[function]
		sources.append(TensionSource(FUNCTIONAL, description, FUNCTION_WEIGHTS[function], hint))

	# Measured upward from the key root: anything past the tritone counts as remote.
	if (chord.root_pc - key_pc) % 12 > 6:
		sources.append(TensionSource(
			category = FUNCTIONAL,
			description = "Remote from key center",
			severity = REMOTE_ROOT_WEIGHT,
			resolution_hint = "Consider smoother modulation path"
		))

	return sources


def has_parallel_perfects (current: typing.Sequence[int], following: typing.Sequence[int]) -> bool:

	"""True if any two voices move in parallel fifths or octaves.

	Voices are matched by index. A pair counts when both chords place them a
	perfect fifth (or unison/octave) apart and both voices actually move.
	"""

	voices = min(len(current), len(following))

	for i in range(voices - 1):
		for j in range(i + 1, voices):

			if current[i] == following[i] or current[j] == following[j]:
				continue

			before = (current[j] - current[i]) % 12
			after = (following[j] - following[i]) % 12

			if before == after and before in (0, 7):
				return True

	return False


def total_leap (current: typing.Sequence[int], following: typing.Sequence[int]) -> int:

	"""Sum of each voice's movement beyond a whole tone, in semitones."""

	return sum(
		max(0, chordsmith.chords.pc_distance(a, b) - LEAP_THRESHOLD)
		for a, b in zip(current, following)
	)


def voice_leading_tension (chord: chordsmith.chords.Chord, following: chordsmith.chords.Chord) -> typing.List[TensionSource]:

	"""
	Tension from the motion into the next chord.
	"""

	sources: typing.List[TensionSource] = []
	current_pcs = chord.pitch_classes()
	next_pcs = following.pitch_classes()

	if has_parallel_perfects(current_pcs, next_pcs):
		sources.append(TensionSource(
			category = VOICE_LEADING,
			description = "Contains parallel perfect intervals",
			severity = PARALLEL_WEIGHT,
			resolution_hint = "Use contrary or oblique motion"
		))

	leap = total_leap(current_pcs, next_pcs)

	if leap > 0:
		sources.append(TensionSource(
			category = VOICE_LEADING,
			description = "Large voice leading distances",
			severity = min(MAX_LEAP_TENSION, leap * 2),
			resolution_hint = "Consider smoother voice leading or voice exchange"
		))

	return sources


def resolution_paths (chord: chordsmith.chords.Chord, function: str, key: str, is_resolution: bool = False) -> typing.List[str]:

	"""
	Suggested continuations for a chord given its function.
	"""

	scale = chordsmith.intervals.scale_notes(key, "major")
	paths: typing.List[str] = []

	if is_resolution:
		paths.append(f"Cadence point: let {chord.symbol} ring as the arrival")

	if function == chordsmith.functions.DOMINANT:
		paths.append(f"Resolve to {key}maj7 (authentic cadence)")
		paths.append(f"Resolve to {scale[5]}m7 (deceptive cadence)")
		paths.append(f"Extend tension with {chord.root}7alt")

	elif function == chordsmith.functions.SUBDOMINANT:
		paths.append(f"Move to {scale[4]}7 (pre-dominant)")
		paths.append(f"Move to {key}maj7 (plagal cadence)")

	elif function == chordsmith.functions.SECONDARY:
		paths.append(f"Resolve to {chordsmith.chords.transpose(chord.root, '4P')} (secondary resolution)")
		paths.append(f"Return to {key} (abandon secondary)")

	else:
		paths.append(f"Move to {scale[4]}7 (to dominant)")
		paths.append(f"Move to {scale[3]}m7 (to subdominant)")

	return paths


def voice_leading_suggestions (
	chord: chordsmith.chords.Chord,
	following: typing.Optional[chordsmith.chords.Chord],
	key: str
) -> typing.List[str]:

	"""
	Practical voice-leading advice for the move into the next chord.
	"""

	if following is None:
		return ["Maintain common tones when possible", "Prepare voice leading for next chord"]

	suggestions: typing.List[str] = []
	next_pcs = set(following.pitch_classes())
	common = [note for note in chord.notes if chordsmith.chords.note_to_pc(note) in next_pcs]

	if common:
		suggestions.append(f"Keep common tones: {', '.join(common)}")

	leading_tone = chordsmith.intervals.scale_notes(key, "major")[6]

	if chordsmith.chords.note_to_pc(leading_tone) in chord.pitch_classes():
		suggestions.append(f"Resolve leading tone {leading_tone} to {key}")

	if has_parallel_perfects(chord.pitch_classes(), following.pitch_classes()):
		suggestions.append("Use contrary motion to avoid parallel fifths/octaves")

	return suggestions


def analyze_tension (
	chord: str,
	next_chord: typing.Optional[str] = None,
	function: str = chordsmith.functions.TONIC,
	key: str = "C",
	is_resolution: bool = False
) -> TensionAnalysis:

	"""Analyse the tension of a chord in context.

	Parameters:
		chord: Chord symbol to analyse.
		next_chord: Following chord, for the voice-leading component.
		function: Harmonic function of the chord (see `chordsmith.functions`).
		key: Key root name (default ``"C"``).
		is_resolution: Marks the final chord of a phrase. The next chord is
			then ignored and a cadence-arrival path is added.

	Returns:
		A `TensionAnalysis`; ``total_tension`` is clamped to 0-100. A chord
		that cannot be parsed yields zero tension and a single source saying so.

	Example:
		```python
		analysis = analyze_tension("G7", "Cmaj7", "dominant", key="C")
		analysis.total_tension   # harmonic + functional + voice leading, max 100
		for source in analysis.sources:
			print(source.category, source.severity, source.description)
		```
	"""

	parsed = chordsmith.chords.try_parse_chord(chord)
	key_root = chordsmith.chords.chord_root(key) or "C"

	if parsed is None:
		return TensionAnalysis(
			total_tension = 0,
			sources = (TensionSource(HARMONIC, f"Could not parse chord {chord!r}", 0),),
			resolution_paths = (),
			voice_leading_suggestions = ()
		)

	following = None

	if next_chord and not is_resolution:
		following = chordsmith.chords.try_parse_chord(next_chord)

	sources = harmonic_tension(parsed)
	sources += functional_tension(parsed, function, chordsmith.chords.note_to_pc(key_root))

	if following is not None:
		sources += voice_leading_tension(parsed, following)

	total = sum(source.severity for source in sources)

	return TensionAnalysis(
		total_tension = max(0, min(MAX_TENSION, total)),
		sources = tuple(sources),
		resolution_paths = tuple(resolution_paths(parsed, function, key_root, is_resolution)),
		voice_leading_suggestions = tuple(voice_leading_suggestions(parsed, following, key_root))
	)
