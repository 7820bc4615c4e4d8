"""Next-chord likelihoods learned from the pattern tables.

Each style's pattern pool is read as a corpus of scale-degree sequences. The
transitions out of a degree, counted across that corpus, give the probability
of each possible next degree.

Example:
	```python
	import chordsmith.probability

	for suggestion in chordsmith.probability.get_probable_next_chords("ii7", "jazz", key="F"):
		print(suggestion.degree, suggestion.chord, round(suggestion.probability, 2))
	# V7 C7 1.0
	# ii7 Gm7 0.1
	# iiø7 Gø7 0.1
	# V7alt C7alt 0.1
	```
"""

import dataclasses
import functools
import logging
import random
import typing

import chordsmith.config
import chordsmith.degrees
import chordsmith.patterns
import chordsmith.weighted_graph


logger = logging.getLogger(__name__)


MAX_SUGGESTIONS = 5
MIN_SUGGESTIONS = 3


@dataclasses.dataclass(frozen=True)
class ChordProbability:

	"""A candidate next degree, its probability and the chord it realises to."""

	degree: str
	probability: float
	chord: str


def transition_graph (style: str) -> chordsmith.weighted_graph.WeightedGraph[str]:

	"""Degree transition counts for a style's pattern pool.

	Built fresh on each call, so a caller may extend its graph without
	affecting anyone else.
	"""

	chordsmith.patterns.validate_style(style)

	return chordsmith.weighted_graph.WeightedGraph.from_sequences(chordsmith.patterns.pattern_pool(style))


@functools.lru_cache(maxsize=None)
def _ranked_transitions (style: str, degree: str) -> typing.Tuple[typing.Tuple[str, float], ...]:

	return tuple(transition_graph(style).probabilities(degree))


def get_probable_next_chords (
	current_degree: str,
	style: str,
	key: str = "C",
	settings: typing.Optional[chordsmith.config.Settings] = None
) -> typing.List[ChordProbability]:

	"""Rank the degrees most likely to follow ``current_degree`` in a style.

	Parameters:
		current_degree: A scale-degree token as written in the pattern tables
			(e.g. ``"ii7"``, ``"V"``).
		style: Generator style whose patterns form the corpus.
		key: Key used to realise each degree as a chord symbol.
		settings: Supplies the probability given to fallback suggestions.

	Returns:
		At most five observed transitions, most likely first, with
		probabilities summing to 1. When fewer than three were observed the
		list is padded with the style's stock substitutions at a nominal
		probability, skipping degrees already present.

	Raises:
		ValueError: If the style or key is unknown.
	"""

	settings = settings or chordsmith.config.DEFAULT_SETTINGS

	ranked = _ranked_transitions(style, current_degree)[:MAX_SUGGESTIONS]
	suggestions = [(degree, probability) for degree, probability in ranked]

	if len(suggestions) < MIN_SUGGESTIONS:
		seen = {degree for degree, _ in suggestions}

		for degree in chordsmith.patterns.FALLBACK_SUBSTITUTIONS.get(style, []):
			if degree not in seen:
				suggestions.append((degree, settings.fallback_probability))
				seen.add(degree)

	logger.debug(f"{len(ranked)} observed transitions from {current_degree!r} in {style}")

	return [
		ChordProbability(
			degree = degree,
			probability = probability,
			chord = chordsmith.degrees.realize_degree(degree, key, style=style)
		)
		for degree, probability in suggestions
	]


def choose_next_degree (current_degree: str, style: str, rng: typing.Optional[random.Random] = None) -> str:

	"""Sample a follow-up degree in proportion to the observed transitions.

	A degree with no observed transitions is returned unchanged.
	"""

	rng = rng or random.Random()

	return transition_graph(style).choose_next(current_degree, rng)
