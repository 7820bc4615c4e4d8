"""Static harmonic pattern tables.

Progressions are written as scale-degree tokens (``"ii7"``, ``"bVII7"``,
``"V7/ii"``) relative to the key, so every table here works in any key.
Nothing in this module has behaviour beyond table lookup.
"""

import logging
import typing


logger = logging.getLogger(__name__)


STYLES: typing.Tuple[str, ...] = ("classical", "jazz", "blues", "modal", "contemporary", "smart")

LENGTHS: typing.Tuple[int, ...] = (4, 8, 12, 16)

DEFAULT_STYLE = "classical"


PROGRESSION_PATTERNS: typing.Dict[str, typing.List[typing.List[str]]] = {
	"classical": [
		["I", "IV", "V", "I"],
		["I", "vi", "IV", "V"],
		["I", "V", "vi", "IV"],
		["ii", "V", "I", "vi"],
	],
	"jazz": [
		["ii7", "V7", "Imaj7"],
		["iiø7", "V7b9", "i"],
		["ii7", "V7", "iii7", "vi7"],
		["Imaj7", "vi7", "ii7", "V7"],
	],
	"blues": [
		["I7", "IV7", "I7", "V7"],
		["I7", "IV7", "V7", "IV7"],
		["i7", "iv7", "i7", "V7"],
		["I7", "IV7", "ii7", "V7"],
	],
	"modal": [
		["i7", "IV7", "i7", "IV7"],
		["Imaj7", "IVmaj7", "v7", "i7"],
		["i7", "bVII7", "bVI7", "v7"],
		["Imaj7", "bVIImaj7", "bVImaj7", "bVmaj7"],
	],
	"contemporary": [
		["Imaj9", "IVmaj9", "vi9", "V9"],
		["i9", "bVI9", "bVII9", "i9"],
		["Imaj9", "iii9", "vi9", "IV9"],
		["i9", "iv9", "bVII9", "bVI9"],
	],
}


# Smart mode stitches one pattern from each pool: build tension, resolve, colour.
SMART_PATTERNS: typing.Dict[str, typing.List[typing.List[str]]] = {
	"tension": [
		["I", "vi", "IV", "V7"],
		["I", "iii", "vi", "V7"],
		["Imaj7", "vi7", "ii7", "V7"],
	],
	"resolution": [
		["ii7", "V7", "Imaj7"],
		["iiø7", "V7b9", "i"],
		["iv7", "bVII7", "Imaj7"],
	],
	"modal": [
		["i7", "IV7", "i7", "bVII7"],
		["Imaj7", "IVmaj7", "bVIImaj7"],
		["i7", "bVI7", "bVII7", "i7"],
	],
}


CADENCE_PATTERNS: typing.Dict[str, typing.Dict[str, typing.List[str]]] = {
	"classical": {
		"Perfect Authentic": ["V7", "I"],
		"Extended Perfect": ["ii", "V7", "I"],
		"Plagal": ["IV", "I"],
		"Double Plagal": ["bVII", "IV", "I"],
		"Deceptive": ["V7", "vi"],
		"Half": ["I", "V"],
	},
	"jazz": {
		"ii-V-I": ["ii7", "V7", "Imaj7"],
		"Extended ii-V-I": ["ii7", "V7b9", "Imaj9"],
		"Minor ii-V-i": ["iiø7", "V7b9", "i"],
		"Bird Changes": ["ii7", "V7alt", "Imaj7"],
		"Backdoor": ["bVII7", "I"],
		"Tritone Sub": ["bII7", "I"],
	},
	"contemporary": {
		"Modal": ["IV", "I"],
		"Slash Chord": ["IV/V", "I"],
		"Sus Resolution": ["V7sus4", "I"],
		"Quartal": ["vsus4", "I"],
		"Chromatic Mediant": ["bIII", "I"],
		"Altered Dominant": ["V7alt", "I"],
	},
	"blues": {
		"Blues Turnaround": ["I7", "IV7", "I7", "V7"],
		"Jazz Blues": ["I7", "IV9", "I7", "V7alt"],
		"Quick Change": ["I7", "IV7", "I7", "I7"],
		"Gospel Turnaround": ["I7", "VI7", "II7", "V7"],
		"Minor Blues": ["i7", "iv7", "i7", "V7"],
	},
	"modal": {
		"Dorian vamp": ["i7", "IV7"],
		"Phrygian": ["i", "bII"],
		"Mixolydian": ["I7", "bVII7"],
		"Aeolian": ["i", "bVI"],
		"Lydian": ["Imaj7", "II7"],
	},
	"smart": {
		"Tension Builder": ["I", "vi", "IV", "V7"],
		"Resolution Chain": ["iii", "vi", "ii", "V7", "I"],
		"Modal Interchange": ["I", "bVI", "bVII", "I"],
		"Extended Tension": ["Imaj7", "vi7", "ii7", "V7b9"],
		"Chromatic Approach": ["I", "bIII7", "bVI7", "V7"],
	},
}


# Characteristic chord quality of each mode, built on the mode's own root.
MODE_CHARACTERISTIC_QUALITY: typing.Dict[str, str] = {
	"ionian": "maj7",
	"dorian": "m7",
	"phrygian": "m7b9",
	"lydian": "maj7#11",
	"mixolydian": "7",
	"aeolian": "m7",
	"locrian": "m7b5",
	"harmonic_minor": "mM7",
	"melodic_minor": "m6",
}

MODE_EXPLANATIONS: typing.Dict[str, str] = {
	"ionian": "Bright, stable major sound",
	"dorian": "Minor with raised 6th",
	"phrygian": "Dark, Spanish flavor",
	"lydian": "Bright, raised 4th",
	"mixolydian": "Dominant, bluesy sound",
	"aeolian": "Natural minor sound",
	"locrian": "Diminished, unstable sound",
	"harmonic_minor": "Exotic, raised 7th",
	"melodic_minor": "Jazz minor sound",
}


# Degree tokens offered when the pattern pool has little to say about a chord.
FALLBACK_SUBSTITUTIONS: typing.Dict[str, typing.List[str]] = {
	"jazz": ["ii7", "V7", "iiø7", "V7alt"],
	"classical": ["V", "IV", "vi"],
	"contemporary": ["IV", "vi", "V"],
}


def validate_style (style: str) -> str:

	"""Return ``style`` unchanged or raise ValueError if it is not a known style."""

	if style not in STYLES:
		raise ValueError(f"Unknown style: {style!r}. Available: {', '.join(STYLES)}")

	return style


def pattern_pool (style: str) -> typing.List[typing.List[str]]:

	"""Return the scale-degree patterns for a style.

	The smart style pools every smart sub-pattern together. A style with no
	patterns falls back to the default (classical) pool so that callers never
	receive an empty pool.
	"""

	if style == "smart":
		pool = [pattern for patterns in SMART_PATTERNS.values() for pattern in patterns]

	else:
		pool = PROGRESSION_PATTERNS.get(style, [])

	if not pool:
		logger.warning(f"No progression patterns for style {style!r}; using the {DEFAULT_STYLE} pool")
		return PROGRESSION_PATTERNS[DEFAULT_STYLE]

	return pool


def find_cadence (style: str, name: typing.Optional[str]) -> typing.Optional[typing.List[str]]:

	"""Return the fixed pattern of a named cadence for a style, or ``None``."""

	if not name:
		return None

	pattern = CADENCE_PATTERNS.get(style, {}).get(name)

	if pattern is None:
		logger.warning(f"Cadence {name!r} is not defined for style {style!r}; drawing a random pattern")

	return pattern
