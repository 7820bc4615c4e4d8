"""Chord voicings and voice leading.

Turns a chord symbol into concrete, octave-qualified note arrangements
(close, drop, spread, quartal, shell, cluster) and scores how smoothly a
voicing moves into the next chord. Notes keep the spelling of the chord
symbol, so ``Bb7`` voices as ``Bb3 D4 F4 Ab4`` rather than ``A#3 ...``.

Example:
	```python
	import chordsmith.voicings

	# Every voicing of Cmaj7 across its inversions
	for voicing in chordsmith.voicings.generate_voicings("Cmaj7"):
		print(voicing.name, voicing.notes)

	# Voicings of Dm7 ranked by how smoothly they lead into G7
	options = chordsmith.voicings.optimize_voice_leading("Dm7", "G7")
	best = options[0]
	```
"""

import dataclasses
import logging
import typing

import chordsmith.chords
import chordsmith.config


logger = logging.getLogger(__name__)


VOICING_TYPES: typing.Tuple[str, ...] = (
	"close", "drop2", "drop3", "drop2_3", "drop2_4", "spread", "quartal", "shell", "cluster"
)

DEFAULT_OPTIMIZER_TYPES: typing.Tuple[str, ...] = ("close", "drop2", "drop3")

# Full piano keyboard, used when generating voicings without a narrower range.
PIANO_RANGE: typing.Tuple[int, int] = (21, 108)

VOICING_DESCRIPTIONS: typing.Dict[str, str] = {
	"close": "Traditional close position voicing",
	"drop2": "Drop 2 voicing - warmer sound with more spread",
	"drop3": "Drop 3 voicing - open sound with good voice separation",
	"drop2_3": "Drop 2+3 voicing - wide, open texture",
	"drop2_4": "Drop 2+4 voicing - wide, open texture",
	"spread": "Spread voicing across octaves",
	"quartal": "Chord tones stacked around the circle of fourths",
	"shell": "Minimal shell voicing (root, 3rd, 7th)",
	"cluster": "Dense cluster voicing",
}

# A voice is a (MIDI number, spelled note name) pair.
Voice = typing.Tuple[int, str]


@dataclasses.dataclass(frozen=True)
class VoicingResult:

	"""One realisation of a chord, lowest voice first."""

	notes: typing.Tuple[str, ...]
	midi_notes: typing.Tuple[int, ...]
	voicing_type: str
	name: str
	description: str
	category: str
	complexity: int
	bass_note: str
	range: str


@dataclasses.dataclass(frozen=True)
class VoicingOption:

	"""A candidate voicing for the current chord, scored against the next chord."""

	chord: str
	notes: typing.Tuple[str, ...]
	midi_notes: typing.Tuple[int, ...]
	smoothness: int
	description: str
	voicing_type: str


@dataclasses.dataclass(frozen=True)
class VoicingPreset:

	"""A named set of voicing rules, created by the user and read here only.

	Parameters:
		name: Display name.
		voicing_type: The voicing type this preset prefers.
		preferred_octaves: Octaves allowed for the lowest voice.
		max_spread: Largest allowed distance in semitones between lowest and highest voice.
		force_top_note: Note name the top voice must sound, if any.
		force_bass_pedal: Keep only voicings whose bass note also belongs to the next chord.
	"""

	name: str
	voicing_type: str
	preferred_octaves: typing.Tuple[int, ...] = (3, 4)
	max_spread: int = 24
	force_top_note: typing.Optional[str] = None
	force_bass_pedal: bool = False


DEFAULT_PRESETS: typing.List[VoicingPreset] = [
	VoicingPreset(name="Close Position", voicing_type="close", preferred_octaves=(4,), max_spread=12),
	VoicingPreset(name="Drop 2", voicing_type="drop2", preferred_octaves=(3, 4), max_spread=16),
	VoicingPreset(name="Spread Voicing", voicing_type="spread", preferred_octaves=(3, 4, 5), max_spread=24),
	VoicingPreset(name="Quartal", voicing_type="quartal", preferred_octaves=(3, 4), max_spread=20),
]


def invert_notes (notes: typing.Sequence[str], inversion: int) -> typing.List[str]:

	"""Rotate chord notes to produce an inversion.

	Inversion 0 is root position. Inversion 1 moves the bottom note to the
	top (first inversion). Wraps around for inversions >= the number of notes.

	Example:
		```python
		invert_notes(["C", "E", "G"], 1)  # ["E", "G", "C"]
		invert_notes(["C", "E", "G"], 3)  # ["C", "E", "G"]
		```
	"""

	n = len(notes)

	if n == 0:
		return []

	inversion = inversion % n

	return list(notes[inversion:]) + list(notes[:inversion])


def stack_upward (notes: typing.Sequence[str], base_midi: int) -> typing.List[Voice]:

	"""Place each note on the first pitch above the previous one.

	The first note sits at or just above ``base_midi``, so the result is a
	close-position voicing in the order given.
	"""

	voices: typing.List[Voice] = []
	floor = base_midi

	for name in notes:
		pitch = floor + (chordsmith.chords.note_to_pc(name) - floor) % 12
		voices.append((pitch, name))
		floor = pitch + 1

	return voices


def drop_voices (voices: typing.Sequence[Voice], positions: typing.Sequence[int]) -> typing.List[Voice]:

	"""Lower the voices at the given positions, counted from the top, by an octave.

	Example:
		```python
		# Drop 2 of a close Cmaj7: G drops below C
		drop_voices(stack_upward(["C", "E", "G", "B"], 48), [2])
		# → [(43, "G"), (48, "C"), (52, "E"), (59, "B")]
		```
	"""

	ordered = sorted(voices)
	result = list(ordered)

	for position in positions:
		if position > len(ordered):
			continue
		index = len(ordered) - position
		pitch, name = ordered[index]
		result[index] = (pitch - 12, name)

	return sorted(result)


def range_tag (midi_notes: typing.Sequence[int]) -> str:

	"""Coarse register tag: ``"wide"``, ``"low"``, ``"high"`` or ``"medium"``."""

	if max(midi_notes) - min(midi_notes) >= 24:
		return "wide"

	if min(midi_notes) < 48:
		return "low"

	if max(midi_notes) > 72:
		return "high"

	return "medium"


def _inversion_label (index: int) -> str:

	if index == 0:
		return "Root"

	suffix = {1: "st", 2: "nd", 3: "rd"}.get(index, "th")

	return f"{index}{suffix} Inversion"


def _in_range (voices: typing.Sequence[Voice], voice_range: typing.Tuple[int, int]) -> bool:

	low, high = voice_range

	return all(low <= pitch <= high for pitch, _ in voices)


def _result (
	voices: typing.Sequence[Voice],
	voicing_type: str,
	name: str,
	description: str,
	category: str,
	complexity: int
) -> VoicingResult:

	ordered = sorted(voices)

	return VoicingResult(
		notes = tuple(chordsmith.chords.midi_to_note(pitch, note) for pitch, note in ordered),
		midi_notes = tuple(pitch for pitch, _ in ordered),
		voicing_type = voicing_type,
		name = name,
		description = description,
		category = category,
		complexity = complexity,
		bass_note = ordered[0][1],
		range = range_tag([pitch for pitch, _ in ordered])
	)


_DROP_SHAPES: typing.List[typing.Tuple[str, typing.List[int], str, str, int]] = [
	("drop2", [2], "Drop 2", "Second note from top dropped an octave", 2),
	("drop3", [3], "Drop 3", "Third note from top dropped an octave", 2),
	("drop2_3", [2, 3], "Drop 2+3", "Second and third notes from top dropped an octave", 3),
	("drop2_4", [2, 4], "Drop 2+4", "Second and fourth notes from top dropped an octave", 3),
]


def _inversion_voicings (notes: typing.Sequence[str], base_midi: int) -> typing.List[VoicingResult]:

	"""
	Close, doubled-root, drop and spread voicings for every inversion.
	"""

	results: typing.List[VoicingResult] = []
	root = notes[0]

	for index in range(len(notes)):
		inversion = invert_notes(notes, index)
		label = _inversion_label(index)
		close = stack_upward(inversion, base_midi)

		results.append(_result(close, "close", f"Close Position ({label})", "Compact voicing with minimal spacing", "Traditional", 1))

		if len(notes) <= 4:
			top = max(pitch for pitch, _ in close)
			doubled = close + stack_upward([root], top + 1)
			results.append(_result(doubled, "close", f"Close Position Doubled Root ({label})", "Close position with doubled root", "Traditional", 1))

		if len(notes) >= 4:
			for voicing_type, positions, title, description, complexity in _DROP_SHAPES:
				results.append(_result(drop_voices(close, positions), voicing_type, f"{title} ({label})", description, "Jazz", complexity))

		# Every other voice up an octave.
		spread = [(pitch + 12 * (i % 2), name) for i, (pitch, name) in enumerate(close)]
		results.append(_result(spread, "spread", f"Spread ({label})", "Notes spread across multiple octaves", "Modern", 2))

	return results


def fourths_order (notes: typing.Sequence[str]) -> typing.List[str]:

	"""Order chord tones around the circle of fourths, starting after its widest gap.

	Neighbouring tones on the circle stack a perfect fourth apart, so the
	result keeps every chord tone while putting as many fourths as the chord
	allows between adjacent voices.

	Example:
		```python
		fourths_order(["C", "E", "G", "B"])  # ["B", "E", "G", "C"]
		```
	"""

	unique = list(dict.fromkeys(notes))

	if len(unique) < 2:
		return unique

	# Steps of a fourth from C; 5 is its own inverse mod 12.
	ordered = sorted(unique, key=lambda name: (chordsmith.chords.note_to_pc(name) * 5) % 12)
	steps = [(chordsmith.chords.note_to_pc(name) * 5) % 12 for name in ordered]

	gaps = [(steps[(i + 1) % len(steps)] - steps[i]) % 12 for i in range(len(steps))]
	start = (gaps.index(max(gaps)) + 1) % len(ordered)

	return ordered[start:] + ordered[:start]


def _quartal (notes: typing.Sequence[str], base_midi: int) -> typing.List[Voice]:

	return stack_upward(fourths_order(notes), base_midi)


def _shell (notes: typing.Sequence[str], base_midi: int) -> typing.List[Voice]:

	voices = stack_upward(notes[:2], base_midi)

	if len(notes) >= 4:
		pitch, name = stack_upward([notes[3]], voices[-1][0] + 1)[0]
		voices.append((pitch + 12, name))

	return voices


def _cluster (notes: typing.Sequence[str], base_midi: int) -> typing.List[Voice]:

	# Fold every chord tone into the octave above the root.
	root_pc = chordsmith.chords.note_to_pc(notes[0])
	folded = sorted(dict.fromkeys(notes), key=lambda name: (chordsmith.chords.note_to_pc(name) - root_pc) % 12)

	return stack_upward(folded, base_midi)


def generate_voicings (
	chord: typing.Union[str, chordsmith.chords.Chord],
	base_octave: int = chordsmith.config.DEFAULT_SETTINGS.base_octave,
	voice_range: typing.Tuple[int, int] = PIANO_RANGE
) -> typing.List[VoicingResult]:

	"""Return every voicing of a chord.

	For each inversion: a close voicing (plus a doubled-root variant for
	chords of up to four notes), drop 2 / drop 3 / drop 2+3 / drop 2+4 for
	chords of four or more notes, and a spread voicing. Quartal, shell and
	cluster voicings are built once from root position. Voicings with any
	note outside ``voice_range`` are left out.

	Parameters:
		chord: A chord symbol or parsed `Chord`.
		base_octave: Octave of the lowest close-position voice (default 3).
		voice_range: Inclusive MIDI range; defaults to the piano keyboard.

	Returns:
		Voicings in generation order. Empty if the symbol cannot be parsed.
	"""

	parsed = chordsmith.chords.try_parse_chord(chord) if isinstance(chord, str) else chord

	if parsed is None:
		return []

	notes = list(parsed.notes)
	base_midi = (base_octave + 1) * 12

	results = _inversion_voicings(notes, base_midi)

	if len(notes) >= 3:
		results.append(_result(_quartal(notes, base_midi), "quartal", "Quartal", "Chord tones stacked in fourths where the chord allows", "Modern", 3))
		results.append(_result(_shell(notes, base_midi), "shell", "Shell", "Minimal voicing with root, third, and seventh", "Jazz", 1))
		results.append(_result(_cluster(notes, base_midi), "cluster", "Cluster", "Notes packed closely together", "Modern", 2))

	low, high = voice_range
	in_range = [result for result in results if all(low <= pitch <= high for pitch in result.midi_notes)]

	if len(in_range) < len(results):
		logger.debug(f"Dropped {len(results) - len(in_range)} voicings of {parsed.symbol} outside MIDI range {voice_range}")

	return in_range


def voice_lead (candidates: typing.Sequence[typing.Sequence[int]], previous_voicing: typing.Optional[typing.Sequence[int]]) -> int:

	"""Return the index of the candidate closest to a previous voicing.

	Compares the sorted voices one by one and picks the smallest total
	semitone movement. Candidates whose size differs from ``previous_voicing``
	are only used when no candidate matches in size. With no previous
	voicing, the first candidate wins.

	Parameters:
		candidates: MIDI note lists to choose from (must not be empty)
		previous_voicing: MIDI note numbers of the previous chord, or ``None``

	Returns:
		Index into ``candidates``
	"""

	if not candidates:
		raise ValueError("Candidates cannot be empty")

	if previous_voicing is None:
		return 0

	previous = sorted(previous_voicing)
	same_size = [i for i, candidate in enumerate(candidates) if len(candidate) == len(previous)]
	pool = same_size or list(range(len(candidates)))

	best_index = pool[0]
	best_cost = float("inf")

	for i in pool:
		candidate = sorted(candidates[i])
		cost = sum(abs(a - b) for a, b in zip(candidate, previous))

		if cost < best_cost:
			best_cost = cost
			best_index = i

	return best_index


def create_voicing (
	chord: str,
	style: str = "close",
	previous: typing.Optional[typing.Sequence[str]] = None,
	base_octave: int = chordsmith.config.DEFAULT_SETTINGS.base_octave
) -> typing.List[str]:

	"""Pick one voicing of ``style`` for a chord, led smoothly from ``previous``.

	Falls back to close position when the chord has no voicing of the
	requested style (e.g. drop 2 of a triad).

	Raises:
		InvalidChord: If the chord symbol cannot be parsed.
	"""

	parsed = chordsmith.chords.parse_chord(chord)
	voicings = generate_voicings(parsed, base_octave)
	candidates = [v for v in voicings if v.voicing_type == style]

	if not candidates:
		logger.debug(f"No {style} voicing for {chord}; using close position")
		candidates = [v for v in voicings if v.voicing_type == "close"]

	previous_midi = [chordsmith.chords.note_to_midi(note) for note in previous] if previous else None
	best = voice_lead([v.midi_notes for v in candidates], previous_midi)

	return list(candidates[best].notes)


def smoothness (voicing: typing.Sequence[int], target: typing.Sequence[int], max_distance: int = 4) -> int:

	"""Score the motion from ``voicing`` to ``target`` on a 0-100 scale.

	``100 - (total distance / (voices * max_distance)) * 100``, minus 20 if
	any single voice moves further than ``max_distance``, clamped at 0.
	Voices are compared by position; extra voices on either side are ignored.
	"""

	voices = min(len(voicing), len(target))

	if voices == 0:
		return 0

	distances = [abs(a - b) for a, b in zip(voicing, target)]
	penalty = 20 if max(distances) > max_distance else 0
	score = 100 - (sum(distances) / (voices * max_distance)) * 100 - penalty

	return max(0, round(score))


def _nearest_pitch (pitch: int, pc: int) -> int:

	"""The MIDI note of pitch class ``pc`` closest to ``pitch`` (ties go up)."""

	up = (pc - pitch) % 12

	return pitch + up if up <= 6 else pitch + up - 12


def nearest_target (pitch: int, pitch_classes: typing.Sequence[int]) -> int:

	"""The closest MIDI note to ``pitch`` among any of ``pitch_classes``.

	Ties go to the pitch class listed first.
	"""

	return min((_nearest_pitch(pitch, pc) for pc in pitch_classes), key=lambda target: abs(target - pitch))


def _optimizer_candidates (notes: typing.Sequence[str]) -> typing.List[typing.Tuple[str, typing.List[Voice]]]:

	candidates: typing.List[typing.Tuple[str, typing.List[Voice]]] = []

	for octave in (3, 4, 5):
		candidates.append(("close", stack_upward(notes, (octave + 1) * 12)))

	if len(notes) >= 4:
		for octave in (3, 4):
			close = stack_upward(notes, (octave + 1) * 12)
			candidates.append(("drop2", drop_voices(close, [2])))
			candidates.append(("drop3", drop_voices(close, [3])))

	if len(notes) >= 3:
		for octave in (3, 4):
			candidates.append(("quartal", _quartal(notes, (octave + 1) * 12)))

		close = stack_upward(notes, 48)
		candidates.append(("spread", [(pitch + 12 * (i % 2), name) for i, (pitch, name) in enumerate(close)]))
		candidates.append(("shell", _shell(notes, 48)))

	return candidates


def optimize_voice_leading (
	current_chord: str,
	next_chord: str,
	preferred_voicing_types: typing.Optional[typing.Sequence[str]] = None,
	max_distance: typing.Optional[int] = None,
	force_top_note: typing.Optional[str] = None,
	force_bass_pedal: bool = False,
	voice_range: typing.Optional[typing.Tuple[int, int]] = None,
	preset: typing.Optional[VoicingPreset] = None,
	settings: typing.Optional[chordsmith.config.Settings] = None
) -> typing.List[VoicingOption]:

	"""Rank voicings of ``current_chord`` by how smoothly they lead into ``next_chord``.

	Each candidate voice moves to the nearest pitch of any tone of the next
	chord, so common tones hold and the other voices step by the smallest
	available interval. Two voices may land on the same next-chord tone.

	Parameters:
		current_chord: Chord to voice.
		next_chord: Chord that follows.
		preferred_voicing_types: Voicing types to keep (default close, drop2, drop3).
		max_distance: Per-voice movement before the smoothness penalty
			(default from settings, 4 semitones).
		force_top_note: Keep only voicings whose top note has this pitch class.
		force_bass_pedal: Keep only voicings whose bass note is also in the next chord.
		voice_range: Inclusive MIDI range (default from settings, C3-C6).
		preset: Optional `VoicingPreset`; its type, octaves, spread and forced
			notes apply wherever the explicit arguments are not given.
		settings: Optional `Settings` for the defaults.

	Returns:
		Options sorted by descending smoothness. Empty if either chord
		cannot be parsed.
	"""

	settings = settings or chordsmith.config.DEFAULT_SETTINGS

	current = chordsmith.chords.try_parse_chord(current_chord)
	following = chordsmith.chords.try_parse_chord(next_chord)

	if current is None or following is None:
		return []

	if max_distance is None:
		max_distance = settings.max_voice_leading_distance

	if voice_range is None:
		voice_range = settings.voice_range

	if preset is not None:
		if preferred_voicing_types is None:
			preferred_voicing_types = [preset.voicing_type]
		force_top_note = force_top_note or preset.force_top_note
		force_bass_pedal = force_bass_pedal or preset.force_bass_pedal

	if preferred_voicing_types is None:
		preferred_voicing_types = DEFAULT_OPTIMIZER_TYPES

	next_pcs = following.pitch_classes()
	options: typing.List[VoicingOption] = []

	for voicing_type, voices in _optimizer_candidates(current.notes):

		if voicing_type not in preferred_voicing_types:
			continue

		if not _in_range(voices, voice_range):
			continue

		ordered = sorted(voices)
		midi_notes = [pitch for pitch, _ in ordered]

		if force_top_note and chordsmith.chords.note_to_pc(ordered[-1][1]) != chordsmith.chords.note_to_pc(force_top_note):
			continue

		if force_bass_pedal and midi_notes[0] % 12 not in next_pcs:
			continue

		if preset is not None:
			if (midi_notes[0] // 12 - 1) not in preset.preferred_octaves:
				continue
			if midi_notes[-1] - midi_notes[0] > preset.max_spread:
				continue

		target = [nearest_target(pitch, next_pcs) for pitch in midi_notes]
		score = smoothness(midi_notes, target, max_distance)

		options.append(VoicingOption(
			chord = f"{current.symbol} ({voicing_type})",
			notes = tuple(chordsmith.chords.midi_to_note(pitch, name) for pitch, name in ordered),
			midi_notes = tuple(midi_notes),
			smoothness = score,
			description = f"{VOICING_DESCRIPTIONS[voicing_type]} - Smoothness: {score}%",
			voicing_type = voicing_type
		))

	options.sort(key=lambda option: option.smoothness, reverse=True)

	return options
