import chordsmith.tension


def _by_category (analysis: chordsmith.tension.TensionAnalysis, category: str) -> int:

	return sum(source.severity for source in analysis.sources if source.category == category)


def test_plain_tonic_triad_has_no_tension () -> None:

	"""A major triad on the tonic scores zero with no sources."""

	analysis = chordsmith.tension.analyze_tension("C", function="tonic", key="C")

	assert analysis.total_tension == 0
	assert analysis.sources == ()


def test_major_seventh_counts_one_dissonance () -> None:

	"""Cmaj7 carries a single dissonant interval (the major seventh)."""

	analysis = chordsmith.tension.analyze_tension("Cmaj7", function="tonic", key="C")

	assert analysis.total_tension == 15
	assert analysis.sources[0].category == "harmonic"
	assert "7M" in analysis.sources[0].description


def test_subdominant_adds_functional_weight () -> None:

	"""Dm7 as subdominant: one dissonance plus the subdominant pull."""

	analysis = chordsmith.tension.analyze_tension("Dm7", function="subdominant", key="C")

	assert _by_category(analysis, "harmonic") == 15
	assert _by_category(analysis, "functional") == 30
	assert analysis.total_tension == 45


def test_extended_and_altered_chords () -> None:

	"""Extensions and alteration markers add their flat bonuses."""

	ninth = chordsmith.tension.analyze_tension("Cmaj9", function="tonic", key="C")
	altered = chordsmith.tension.analyze_tension("C7b5", function="tonic", key="C")

	# 7M and 9M, plus the extension bonus.
	assert ninth.total_tension == 15 * 2 + 20

	# 5d and 7m, plus the alteration bonus.
	assert altered.total_tension == 15 * 2 + 25


def test_remote_root_adds_tension () -> None:

	"""A root more than a tritone above the key root is remote."""

	near = chordsmith.tension.analyze_tension("F", function="tonic", key="C")
	far = chordsmith.tension.analyze_tension("Ab", function="tonic", key="C")

	assert near.total_tension == 0
	assert far.total_tension == 20
	assert far.sources[0].description == "Remote from key center"


def test_dominant_into_tonic_is_clamped () -> None:

	"""G7 to Cmaj7 sums past 100 and is clamped."""

	analysis = chordsmith.tension.analyze_tension("G7", "Cmaj7", "dominant", key="C")

	assert sum(source.severity for source in analysis.sources) > 100
	assert analysis.total_tension == 100
	assert _by_category(analysis, "voiceLeading") > 0


def test_parallel_fifths_detected () -> None:

	"""Root and fifth moving together by step is a parallel fifth."""

	assert chordsmith.tension.has_parallel_perfects([0, 4, 7], [2, 5, 9])
	assert not chordsmith.tension.has_parallel_perfects([0, 4, 7], [0, 5, 9])


def test_leap_tension_is_capped () -> None:

	"""Leap tension is twice the excess movement, at most 40."""

	assert chordsmith.tension.total_leap([0, 4, 7], [1, 4, 7]) == 0
	assert chordsmith.tension.total_leap([0], [6]) == 4

	analysis = chordsmith.tension.analyze_tension("C", "F#", function="tonic", key="C")

	assert _by_category(analysis, "voiceLeading") <= 25 + 40


def test_resolution_ignores_next_chord () -> None:

	"""A cadence point adds an arrival path and no voice-leading tension."""

	analysis = chordsmith.tension.analyze_tension("C", "F#7", function="tonic", key="C", is_resolution=True)

	assert _by_category(analysis, "voiceLeading") == 0
	assert analysis.resolution_paths[0].startswith("Cadence point")


def test_dominant_resolution_paths () -> None:

	"""Dominants suggest authentic and deceptive cadences."""

	analysis = chordsmith.tension.analyze_tension("G7", function="dominant", key="C")

	assert "Resolve to Cmaj7 (authentic cadence)" in analysis.resolution_paths
	assert "Resolve to Am7 (deceptive cadence)" in analysis.resolution_paths


def test_secondary_resolves_up_a_fourth () -> None:

	"""A secondary dominant resolves to the root a fourth above."""

	analysis = chordsmith.tension.analyze_tension("A7", function="secondary", key="C")

	assert analysis.resolution_paths[0] == "Resolve to D (secondary resolution)"


def test_voice_leading_suggestions () -> None:

	"""Common tones and the leading tone are called out."""

	analysis = chordsmith.tension.analyze_tension("G7", "Cmaj7", "dominant", key="C")

	assert "Keep common tones: G, B" in analysis.voice_leading_suggestions
	assert "Resolve leading tone B to C" in analysis.voice_leading_suggestions


def test_unparseable_chord_scores_zero () -> None:

	"""An unknown chord degrades to an empty analysis instead of raising."""

	analysis = chordsmith.tension.analyze_tension("Xq7", "C")

	assert analysis.total_tension == 0
	assert len(analysis.sources) == 1
	assert analysis.resolution_paths == ()


def test_analysis_is_repeatable () -> None:

	"""The same input always gives the same analysis."""

	first = chordsmith.tension.analyze_tension("Db7alt", "Cmaj9", "dominant", key="C")
	second = chordsmith.tension.analyze_tension("Db7alt", "Cmaj9", "dominant", key="C")

	assert first == second
	assert 0 <= first.total_tension <= 100
