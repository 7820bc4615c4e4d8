"""Tunable constants for generation and voicing.

The substitution probabilities and voicing defaults are musical judgement
calls rather than fixed rules, so they live in a `Settings` object that can
be loaded from YAML::

	# chordsmith.yaml
	secondary_dominant_probability:
	  smart: 0.4
	  default: 0.3
	tritone_probability:
	  smart: 0.3
	  default: 0.2
	voice_range: [48, 84]
	max_voice_leading_distance: 4
"""

import dataclasses
import logging
import os
import typing

import yaml


logger = logging.getLogger(__name__)


def _default_secondary () -> typing.Dict[str, float]:

	return {"smart": 0.4, "default": 0.3}


def _default_tritone () -> typing.Dict[str, float]:

	return {"smart": 0.3, "default": 0.2}


@dataclasses.dataclass
class Settings:

	"""Generation and voicing settings.

	Parameters:
		secondary_dominant_probability: Chance, per chord, of replacing it with
			its secondary dominant. Keyed by style, with a ``"default"`` entry.
		tritone_probability: Chance, per chord, of a tritone substitution.
		fallback_probability: Probability given to padded fallback suggestions
			in the chord-probability model.
		voice_range: Inclusive MIDI range ``(low, high)`` for optimised voicings.
		max_voice_leading_distance: Semitones a voice may move before the
			smoothness score is penalised.
		base_octave: Octave of the lowest voice in generated voicings.
	"""

	secondary_dominant_probability: typing.Dict[str, float] = dataclasses.field(default_factory=_default_secondary)
	tritone_probability: typing.Dict[str, float] = dataclasses.field(default_factory=_default_tritone)
	fallback_probability: float = 0.1
	voice_range: typing.Tuple[int, int] = (48, 84)
	max_voice_leading_distance: int = 4
	base_octave: int = 3


	def __post_init__ (self) -> None:

		for name in ("secondary_dominant_probability", "tritone_probability"):
			table = getattr(self, name)

			if "default" not in table:
				raise ValueError(f"{name} needs a 'default' entry")

			for style, value in table.items():
				if value < 0 or value > 1:
					raise ValueError(f"{name}[{style!r}] must be between 0 and 1")

		if self.fallback_probability < 0 or self.fallback_probability > 1:
			raise ValueError("Fallback probability must be between 0 and 1")

		low, high = self.voice_range

		if low < 0 or high > 127 or low >= high:
			raise ValueError(f"Voice range must be inside 0-127 with low < high, got {self.voice_range}")

		self.voice_range = (int(low), int(high))

		if self.max_voice_leading_distance <= 0:
			raise ValueError("Max voice leading distance must be positive")


	def secondary_probability_for (self, style: str) -> float:

		return self.secondary_dominant_probability.get(style, self.secondary_dominant_probability["default"])


	def tritone_probability_for (self, style: str) -> float:

		return self.tritone_probability.get(style, self.tritone_probability["default"])


DEFAULT_SETTINGS = Settings()


def load_settings (config_path: str = "chordsmith.yaml") -> Settings:

	"""
	Load settings from a YAML file, falling back to defaults when it is missing.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return Settings()

	with open(config_path, "r") as f:
		data = yaml.safe_load(f) or {}

	if not isinstance(data, dict):
		raise ValueError(f"Config file {config_path} must contain a mapping")

	known = {field.name for field in dataclasses.fields(Settings)}
	unknown = sorted(set(data) - known)

	if unknown:
		raise ValueError(f"Unknown settings in {config_path}: {', '.join(unknown)}")

	if "voice_range" in data:
		data["voice_range"] = tuple(data["voice_range"])

	# Partial probability tables keep the defaults for unlisted styles.
	for name, factory in (("secondary_dominant_probability", _default_secondary), ("tritone_probability", _default_tritone)):
		if name in data:
			merged = factory()
			merged.update(data[name])
			data[name] = merged

	settings = Settings(**data)
	logger.info(f"Loaded settings from {config_path}")

	return settings
