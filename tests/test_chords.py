import pytest

import chordsmith.chords


# ---------------------------------------------------------------------------
# parse_chord() tests
# ---------------------------------------------------------------------------

def test_parse_minor_seventh () -> None:

	"""Dm7 should spell D F A C with minor-seventh intervals."""

	chord = chordsmith.chords.parse_chord("Dm7")

	assert chord.root == "D"
	assert chord.quality == "m7"
	assert chord.notes == ("D", "F", "A", "C")
	assert chord.intervals == ("1P", "3m", "5P", "7m")


def test_parse_keeps_flat_spelling () -> None:

	"""A flat root should spell its chord tones with flats."""

	assert chordsmith.chords.parse_chord("Bb7").notes == ("Bb", "D", "F", "Ab")


def test_parse_slash_chord () -> None:

	"""A slash chord keeps the upper chord's notes and records the bass."""

	chord = chordsmith.chords.parse_chord("D/G")

	assert chord.notes == ("D", "F#", "A")
	assert chord.bass == "G"


def test_six_nine_is_a_quality_not_a_slash () -> None:

	"""'6/9' is a chord quality, not a slash chord over 9."""

	chord = chordsmith.chords.parse_chord("C6/9")

	assert chord.quality == "6/9"
	assert chord.bass is None
	assert chord.notes == ("C", "E", "G", "A", "D")


def test_every_quality_parses_with_root_first () -> None:

	"""Every known quality should give a non-empty note list led by the root."""

	for quality in chordsmith.chords.CHORD_QUALITIES:
		chord = chordsmith.chords.parse_chord(f"C{quality}")

		assert chord.notes, f"C{quality} has no notes"
		assert chord.notes[0] == "C"
		assert len(chord.notes) == len(chord.intervals)


def test_unknown_quality_raises () -> None:

	"""An unrecognised suffix should raise InvalidChord."""

	with pytest.raises(chordsmith.chords.InvalidChord, match="unknown quality"):
		chordsmith.chords.parse_chord("Cfoo")


def test_missing_root_raises_value_error () -> None:

	"""InvalidChord is a ValueError so callers can catch either."""

	with pytest.raises(ValueError):
		chordsmith.chords.parse_chord("H7")

	with pytest.raises(chordsmith.chords.InvalidChord):
		chordsmith.chords.parse_chord("")


def test_try_parse_returns_none () -> None:

	"""The lenient parser should return None instead of raising."""

	assert chordsmith.chords.try_parse_chord("Xq") is None
	assert chordsmith.chords.try_parse_chord("G7").root == "G"


# ---------------------------------------------------------------------------
# Chord predicates
# ---------------------------------------------------------------------------

def test_is_minor_ignores_maj () -> None:

	"""'maj7' contains an 'm' but is not a minor chord."""

	assert not chordsmith.chords.parse_chord("Cmaj7").is_minor()
	assert chordsmith.chords.parse_chord("Cm7").is_minor()
	assert chordsmith.chords.parse_chord("Cm7b5").is_minor()


def test_is_dominant_seventh () -> None:

	"""Plain and altered dominants count; major sevenths do not."""

	assert chordsmith.chords.parse_chord("G7").is_dominant_seventh()
	assert chordsmith.chords.parse_chord("G7alt").is_dominant_seventh()
	assert chordsmith.chords.parse_chord("G13").is_dominant_seventh()
	assert not chordsmith.chords.parse_chord("Gmaj7").is_dominant_seventh()


def test_is_extended () -> None:

	"""Ninths and above are extended, sevenths are not."""

	assert chordsmith.chords.parse_chord("Cmaj9").is_extended()
	assert not chordsmith.chords.parse_chord("Cmaj7").is_extended()


# ---------------------------------------------------------------------------
# Note helpers
# ---------------------------------------------------------------------------

def test_transpose_by_semitones_and_labels () -> None:

	"""Transposition should accept semitones or interval labels, either direction."""

	assert chordsmith.chords.transpose("C", 7) == "G"
	assert chordsmith.chords.transpose("G", "4P") == "C"
	assert chordsmith.chords.transpose("C", "-3m") == "A"
	assert chordsmith.chords.transpose("Bb", 2) == "C"
	assert chordsmith.chords.transpose("Eb", 6) == "A"


def test_transpose_unknown_interval () -> None:

	"""An unknown interval label should raise ValueError."""

	with pytest.raises(ValueError, match="Unknown interval"):
		chordsmith.chords.transpose("C", "4X")


def test_interval_between () -> None:

	"""Intervals are measured upward with canonical names."""

	assert chordsmith.chords.interval_between("C", "G") == (7, "5P")
	assert chordsmith.chords.interval_between("G", "C") == (5, "4P")
	assert chordsmith.chords.interval_between("F", "B") == (6, "4A")


def test_pc_distance_is_shortest_way_round () -> None:

	"""B to C is one semitone, not eleven."""

	assert chordsmith.chords.pc_distance(11, 0) == 1
	assert chordsmith.chords.pc_distance(0, 6) == 6
	assert chordsmith.chords.pc_distance(7, 0) == 5


def test_midi_round_trip_keeps_spelling () -> None:

	"""MIDI conversion should use C4 = 60 and keep a requested spelling."""

	assert chordsmith.chords.note_to_midi("C4") == 60
	assert chordsmith.chords.note_to_midi("A4") == 69
	assert chordsmith.chords.midi_to_note(61) == "C#4"
	assert chordsmith.chords.midi_to_note(58, "Bb") == "Bb3"


def test_midi_to_note_rejects_wrong_spelling () -> None:

	"""A spelling that does not match the pitch is an error."""

	with pytest.raises(ValueError):
		chordsmith.chords.midi_to_note(60, "D")


def test_note_to_midi_requires_octave () -> None:

	"""A bare note name has no MIDI number."""

	with pytest.raises(ValueError, match="octave"):
		chordsmith.chords.note_to_midi("C")
