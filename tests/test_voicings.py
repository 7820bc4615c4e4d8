import random

import pytest

import chordsmith.chords
import chordsmith.progression
import chordsmith.voicings


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------

def test_invert_notes () -> None:

	"""Inversions rotate the bottom note to the top and wrap around."""

	assert chordsmith.voicings.invert_notes(["C", "E", "G"], 0) == ["C", "E", "G"]
	assert chordsmith.voicings.invert_notes(["C", "E", "G"], 1) == ["E", "G", "C"]
	assert chordsmith.voicings.invert_notes(["C", "E", "G"], 4) == ["E", "G", "C"]
	assert chordsmith.voicings.invert_notes([], 1) == []


def test_stack_upward_is_close_position () -> None:

	"""Each note lands on the first pitch above the previous one."""

	voices = chordsmith.voicings.stack_upward(["E", "G", "C"], 48)

	assert voices == [(52, "E"), (55, "G"), (60, "C")]


def test_drop_voices () -> None:

	"""Drop 2 lowers the second voice from the top by an octave."""

	close = chordsmith.voicings.stack_upward(["C", "E", "G", "B"], 48)

	assert chordsmith.voicings.drop_voices(close, [2]) == [(43, "G"), (48, "C"), (52, "E"), (59, "B")]
	assert chordsmith.voicings.drop_voices(close, [3]) == [(40, "E"), (48, "C"), (55, "G"), (59, "B")]


def test_range_tags () -> None:

	"""Range tags follow span first, then register."""

	assert chordsmith.voicings.range_tag([48, 52, 55, 59]) == "medium"
	assert chordsmith.voicings.range_tag([43, 48, 52]) == "low"
	assert chordsmith.voicings.range_tag([70, 74, 77]) == "high"
	assert chordsmith.voicings.range_tag([48, 72]) == "wide"


# ---------------------------------------------------------------------------
# generate_voicings() tests
# ---------------------------------------------------------------------------

def test_cmaj7_voicings () -> None:

	"""Cmaj7 has a close voicing of C E G B and drop voicings."""

	voicings = chordsmith.voicings.generate_voicings("Cmaj7")

	close = voicings[0]

	assert close.voicing_type == "close"
	assert close.notes == ("C3", "E3", "G3", "B3")
	assert close.midi_notes == (48, 52, 55, 59)
	assert close.bass_note == "C"
	assert close.range == "medium"
	assert {midi % 12 for midi in close.midi_notes} == {0, 4, 7, 11}

	drop2 = next(v for v in voicings if v.voicing_type == "drop2")

	assert drop2.notes == ("G2", "C3", "E3", "B3")
	assert drop2.name == "Drop 2 (Root)"


def test_voicing_count_for_seventh_chord () -> None:

	"""Four inversions of seven shapes, plus quartal, shell and cluster."""

	assert len(chordsmith.voicings.generate_voicings("Cmaj7")) == 4 * 7 + 3


def test_triads_have_no_drop_voicings () -> None:

	"""Drop voicings need at least four notes."""

	voicings = chordsmith.voicings.generate_voicings("C")
	types = {v.voicing_type for v in voicings}

	assert "drop2" not in types
	assert types == {"close", "spread", "quartal", "shell", "cluster"}
	assert len(voicings) == 3 * 3 + 3


def test_doubled_root () -> None:

	"""Triads and sevenths get a doubled-root close voicing."""

	voicings = chordsmith.voicings.generate_voicings("C")
	doubled = [v for v in voicings if "Doubled Root" in v.name]

	assert doubled[0].notes == ("C3", "E3", "G3", "C4")


def test_special_voicings () -> None:

	"""Quartal, shell and cluster shapes for Cmaj7."""

	voicings = {v.voicing_type: v for v in chordsmith.voicings.generate_voicings("Cmaj7")}

	assert voicings["quartal"].notes == ("B3", "E4", "G4", "C5")
	assert voicings["shell"].notes == ("C3", "E3", "B4")
	assert voicings["cluster"].notes == ("C3", "E3", "G3", "B3")


def test_voicings_keep_flat_spelling () -> None:

	"""Bb7 voices with flats."""

	assert chordsmith.voicings.generate_voicings("Bb7")[0].notes == ("Bb3", "D4", "F4", "Ab4")


def test_fourths_order () -> None:

	"""Tones follow the circle of fourths from just after its widest gap."""

	assert chordsmith.voicings.fourths_order(["C", "E", "G", "B"]) == ["B", "E", "G", "C"]
	assert chordsmith.voicings.fourths_order(["C", "D", "E", "G", "B"]) == ["B", "E", "D", "G", "C"]
	assert chordsmith.voicings.fourths_order(["C"]) == ["C"]


def test_quartal_keeps_extensions () -> None:

	"""A ninth chord's quartal voicing still sounds the ninth."""

	quartal = next(v for v in chordsmith.voicings.generate_voicings("Cmaj9") if v.voicing_type == "quartal")

	assert quartal.notes == ("B3", "E4", "D5", "G5", "C6")
	assert {midi % 12 for midi in quartal.midi_notes} == {0, 2, 4, 7, 11}


@pytest.mark.parametrize("root", ["C", "Bb", "F#"])
def test_voicings_cover_every_chord_tone (root: str) -> None:

	"""Apart from shells, every voicing sounds exactly the chord's pitch classes."""

	for quality in chordsmith.chords.CHORD_QUALITIES:
		chord = chordsmith.chords.parse_chord(root + quality)
		expected = set(chord.pitch_classes())

		for voicing in chordsmith.voicings.generate_voicings(chord):
			if voicing.voicing_type == "shell":
				continue
			assert {midi % 12 for midi in voicing.midi_notes} == expected, f"{chord.symbol} {voicing.name}"


@pytest.mark.parametrize("voicing_style", ["close", "spread", "drop2", "quartal"])
def test_progression_voicings_cover_every_chord_tone (voicing_style: str) -> None:

	"""Voicings attached by the generator sound every tone of their chord."""

	for seed in range(20):
		progression = chordsmith.progression.generate_progression(
			"contemporary",
			8,
			use_extended_voicings=True,
			use_secondary_dominants=True,
			use_tritone_substitutions=True,
			voicing_style=voicing_style,
			rng=random.Random(seed)
		)

		for chord, voicing in zip(progression.chords, progression.voicings):
			expected = set(chordsmith.chords.parse_chord(chord).pitch_classes())
			assert {chordsmith.chords.note_to_midi(note) % 12 for note in voicing} == expected, chord


def test_modal_cadence_quartal_voicings () -> None:

	"""The contemporary modal cadence keeps the ninths of Fmaj9 and Cmaj9."""

	progression = chordsmith.progression.generate_progression(
		"contemporary", 4, selected_cadence="Modal", use_extended_voicings=True, voicing_style="quartal"
	)

	assert progression.chords == ["Fmaj9", "Cmaj9", "Fmaj9", "Cmaj9"]
	assert progression.voicings[0] == ["E3", "A3", "G4", "C5", "F5"]
	assert progression.voicings[1] == ["B3", "E4", "D5", "G5", "C6"]


def test_out_of_range_voicings_are_filtered () -> None:

	"""Voicings outside the MIDI range are dropped, not reported."""

	voicings = chordsmith.voicings.generate_voicings("Cmaj7", voice_range=(48, 60))

	assert voicings
	assert all(48 <= midi <= 60 for v in voicings for midi in v.midi_notes)


def test_unparseable_chord_has_no_voicings () -> None:

	"""An unknown chord gives an empty list."""

	assert chordsmith.voicings.generate_voicings("Xq") == []


# ---------------------------------------------------------------------------
# create_voicing() and voice_lead() tests
# ---------------------------------------------------------------------------

def test_voice_lead_picks_nearest () -> None:

	"""The candidate with least total movement wins."""

	assert chordsmith.voicings.voice_lead([[60, 64, 67], [48, 52, 55]], [50, 53, 57]) == 1
	assert chordsmith.voicings.voice_lead([[60, 64, 67], [48, 52, 55]], None) == 0

	with pytest.raises(ValueError):
		chordsmith.voicings.voice_lead([], None)


def test_create_voicing_styles () -> None:

	"""Requested styles are used when available, close otherwise."""

	assert chordsmith.voicings.create_voicing("Dm7", "drop2") == ["A2", "D3", "F3", "C4"]
	assert chordsmith.voicings.create_voicing("C", "drop2") == ["C3", "E3", "G3"]


def test_create_voicing_leads_from_previous () -> None:

	"""With a previous voicing, the nearest inversion is chosen."""

	voicing = chordsmith.voicings.create_voicing("G7", "close", ["C4", "E4", "G4", "B4"])

	assert voicing == ["B3", "D4", "F4", "G4"]


def test_create_voicing_rejects_bad_chord () -> None:

	"""The generator surfaces unparseable chords."""

	with pytest.raises(chordsmith.chords.InvalidChord):
		chordsmith.voicings.create_voicing("Xq")


# ---------------------------------------------------------------------------
# Smoothness and optimize_voice_leading() tests
# ---------------------------------------------------------------------------

def test_smoothness_formula () -> None:

	"""Static voices score 100; movement lowers the score; big leaps are penalised."""

	assert chordsmith.voicings.smoothness([60, 64, 67], [60, 64, 67]) == 100
	assert chordsmith.voicings.smoothness([60, 64, 67], [61, 65, 68]) == 75
	assert chordsmith.voicings.smoothness([60, 64], [60, 69]) == 18
	assert chordsmith.voicings.smoothness([60], [72]) == 0


def test_stepwise_motion_beats_a_leap () -> None:

	"""Moving every voice two semitones or less outscores a seventh leap in one voice."""

	cmaj7 = [48, 52, 55, 59]

	stepwise = chordsmith.voicings.smoothness(cmaj7, [48, 52, 53, 57])
	leap = chordsmith.voicings.smoothness(cmaj7, [48, 52, 53, 52])

	assert stepwise == 75
	assert leap == 24
	assert stepwise > leap


def test_nearest_target () -> None:

	"""Each voice moves to the closest tone of the next chord, whatever its position."""

	fmaj7 = [5, 9, 0, 4]

	assert chordsmith.voicings.nearest_target(48, fmaj7) == 48
	assert chordsmith.voicings.nearest_target(59, fmaj7) == 60
	assert chordsmith.voicings.nearest_target(43, fmaj7) == 41


def test_optimize_fourth_apart_chords () -> None:

	"""Cmaj7 to Fmaj7 holds common tones, so every option scores well and shells lead."""

	options = chordsmith.voicings.optimize_voice_leading(
		"Cmaj7", "Fmaj7", preferred_voicing_types=chordsmith.voicings.VOICING_TYPES
	)

	assert options
	assert all(o.smoothness >= 75 for o in options)

	best = options[0]

	assert best.voicing_type == "shell"
	assert best.notes == ("C3", "E3", "B4")
	assert best.smoothness == 92

	close = next(o for o in options if o.voicing_type == "close" and o.notes == ("C3", "E3", "G3", "B3"))

	assert close.smoothness == 81


def test_optimize_sorted_by_smoothness () -> None:

	"""Options are ranked best first and stay inside the range."""

	options = chordsmith.voicings.optimize_voice_leading("Dm7", "G7")

	assert options
	assert [o.smoothness for o in options] == sorted((o.smoothness for o in options), reverse=True)
	assert all(48 <= midi <= 84 for o in options for midi in o.midi_notes)
	assert {o.voicing_type for o in options} <= {"close", "drop2", "drop3"}
	assert all(0 <= o.smoothness <= 100 for o in options)


def test_optimize_preferred_types () -> None:

	"""Only the preferred voicing types are returned."""

	options = chordsmith.voicings.optimize_voice_leading("Dm7", "G7", preferred_voicing_types=["quartal", "shell"])

	assert options
	assert {o.voicing_type for o in options} <= {"quartal", "shell"}


def test_optimize_forced_top_note () -> None:

	"""A forced top note keeps only voicings with that note on top."""

	options = chordsmith.voicings.optimize_voice_leading("Dm7", "G7", force_top_note="C")

	assert options
	assert all(o.midi_notes[-1] % 12 == 0 for o in options)
	assert chordsmith.voicings.optimize_voice_leading("Dm7", "G7", force_top_note="E") == []


def test_optimize_bass_pedal () -> None:

	"""A bass pedal keeps voicings whose bass belongs to the next chord."""

	options = chordsmith.voicings.optimize_voice_leading("Dm7", "G7", force_bass_pedal=True)

	assert options
	assert all(o.midi_notes[0] % 12 in (7, 11, 2, 5) for o in options)


def test_optimize_with_preset () -> None:

	"""A preset narrows type, octave and spread."""

	preset = chordsmith.voicings.DEFAULT_PRESETS[1]
	options = chordsmith.voicings.optimize_voice_leading("Dm7", "G7", preset=preset)

	assert len(options) == 1
	assert options[0].voicing_type == "drop2"
	assert options[0].notes == ("A3", "D4", "F4", "C5")


def test_optimize_unparseable () -> None:

	"""Either chord failing to parse gives no options."""

	assert chordsmith.voicings.optimize_voice_leading("Xq", "G7") == []
	assert chordsmith.voicings.optimize_voice_leading("Dm7", "Xq") == []
