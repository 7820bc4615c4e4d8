"""
Chordsmith - harmonic generation and analysis for Python.

Chordsmith writes chord progressions in a chosen style and key, then tells
you what they are doing: the function of each chord, how much tension it
carries and why, what could replace it, and how to voice it so that it
leads smoothly into the next one. Everything is symbolic (chord symbols and
note names with octaves). There is no audio or MIDI output.

What it covers:

- **Progressions.** Classical, jazz, blues, modal, contemporary and a
  "smart" style that stitches tension, resolution and modal colour
  patterns together. Named cadences, secondary dominants and tritone
  substitutions on request. Pass ``rng=random.Random(seed)`` to make every
  choice repeatable.
- **Analysis.** Tonic / subdominant / dominant / secondary classification
  and a 0-100 tension score broken down into harmonic, functional and
  voice-leading sources, with resolution paths.
- **Reharmonisation.** Function-aware single-chord substitutions,
  secondary-dominant approach chains, modal interchange, ten
  whole-progression variation techniques and modulation paths.
- **Next-chord model.** Transition probabilities learned from each style's
  pattern tables.
- **Voicings.** Close, drop-2/3, spread, quartal, shell and cluster
  voicings for every inversion, plus a voice-leading optimiser that ranks
  voicings by how little each voice moves.

Minimal example:

    ```python
    import random
    import chordsmith

    progression = chordsmith.generate_progression(
        "jazz", 8, key="Eb", use_extended_voicings=True, rng=random.Random(1)
    )

    for chord, function in zip(progression.chords, progression.functions()):
        analysis = chordsmith.analyze_tension(chord, function=function, key="Eb")
        print(chord, function, analysis.total_tension)
    ```

Tunable probabilities and voicing defaults live in ``chordsmith.config``
and can be loaded from YAML with ``chordsmith.load_settings()``.

Package-level exports: ``generate_progression``, ``analyze_tension``,
``classify_function``, ``parse_chord``, ``InvalidChord``, ``load_settings``.
"""

import chordsmith.chords
import chordsmith.config
import chordsmith.functions
import chordsmith.progression
import chordsmith.tension


generate_progression = chordsmith.progression.generate_progression
analyze_tension = chordsmith.tension.analyze_tension
classify_function = chordsmith.functions.classify_function
parse_chord = chordsmith.chords.parse_chord
InvalidChord = chordsmith.chords.InvalidChord
load_settings = chordsmith.config.load_settings
