import pytest

import chordsmith.functions


def test_dominant_by_root () -> None:

	"""A root a fifth above the key is dominant."""

	assert chordsmith.functions.classify_function("G7", "C", "V7") == "dominant"
	assert chordsmith.functions.classify_function("D7", "G") == "dominant"


def test_tonic_by_root () -> None:

	"""A root on the key is tonic, whatever the quality."""

	assert chordsmith.functions.classify_function("Cmaj7", "C", "Imaj7") == "tonic"
	assert chordsmith.functions.classify_function("Cm7", "C", "i7") == "tonic"


def test_subdominant_by_root () -> None:

	"""Roots a fourth or a whole tone above the key are subdominant."""

	assert chordsmith.functions.classify_function("F", "C", "IV") == "subdominant"
	assert chordsmith.functions.classify_function("Dm7", "C", "ii7") == "subdominant"


def test_slash_numeral_is_secondary () -> None:

	"""A secondary numeral wins over the root rules."""

	assert chordsmith.functions.classify_function("A7", "C", "V7/ii") == "secondary"
	assert chordsmith.functions.classify_function("G7", "C", "V7/V") == "secondary"


def test_numeral_decides_remaining_roots () -> None:

	"""Other roots are dominant when the numeral names a 'v', else subdominant."""

	assert chordsmith.functions.classify_function("Bdim", "C", "viidim") == "dominant"
	assert chordsmith.functions.classify_function("Em7", "C", "iii7") == "subdominant"
	assert chordsmith.functions.classify_function("Am", "C") == "subdominant"


def test_enharmonic_roots () -> None:

	"""Flat and sharp spellings of the same root classify alike."""

	assert chordsmith.functions.classify_function("Bb7", "Eb") == "dominant"
	assert chordsmith.functions.classify_function("A#7", "Eb") == "dominant"


def test_rootless_input_is_tonic () -> None:

	"""Classification never raises; a missing root falls back to tonic."""

	assert chordsmith.functions.classify_function("???", "C") == "tonic"
	assert chordsmith.functions.classify_function("G7", "") == "tonic"


def test_classify_progression () -> None:

	"""A ii-V-I classifies as subdominant, dominant, tonic."""

	result = chordsmith.functions.classify_progression(["Dm7", "G7", "Cmaj7"], "C", ["ii7", "V7", "Imaj7"])

	assert result == ["subdominant", "dominant", "tonic"]


def test_classify_progression_length_mismatch () -> None:

	"""Numerals must pair one-to-one with chords."""

	with pytest.raises(ValueError, match="same length"):
		chordsmith.functions.classify_progression(["Dm7", "G7"], "C", ["ii7"])
