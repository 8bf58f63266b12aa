"""Text-to-tone mapping library.

This package converts arbitrary text into a short, fixed-length piece of music.
Letters, digit runs, symbols and (optionally) spoken phonemes are mapped onto
notes, chords and rests in a minor key, and the result is scaled so that the
whole phrase lasts a fixed number of seconds.

The main processing pipeline consists of:
1. Tokenization of the input into letters, digit runs, symbols and phonemes
2. Truncation of over-long input at a token boundary
3. Rule-based mapping of tokens to weighted musical events
4. Timing normalization to the target duration
5. Optional timeline and MIDI file export

Example:
    Basic usage through the pipeline API:

    >>> from text_to_tone.pipeline import map_text
    >>> from text_to_tone.models import MappingConfig
    >>>
    >>> result = map_text("Call 555-0100", MappingConfig(target_seconds=6.0))
    >>> sum(e.duration_seconds for e in result.events)  # doctest: +SKIP
    6.0
"""
