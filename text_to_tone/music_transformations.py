"""
Musical helpers for building scales and spelling pitches.

This module turns scale degrees into concrete pitch names for a configured
tonic and scale mode, and places chord tones inside the tonic register.
Scales are built with music21 so that any tonic gets correct spelling.
"""

import logging
from functools import lru_cache

import music21

from text_to_tone.models import ScaleMode, pitch_to_midi

logger = logging.getLogger(__name__)

SCALE_CLASSES = {
    ScaleMode.MINOR: music21.scale.MinorScale,
    ScaleMode.MAJOR: music21.scale.MajorScale,
}


def _to_music21_name(name: str) -> str:
    """Convert our flat spelling ("Bb") to music21's ("B-")."""
    return name[0] + name[1:].replace("b", "-")


def _from_music21_name(name: str) -> str:
    """Convert music21's flat spelling ("B-") to ours ("Bb")."""
    return name.replace("-", "b")


@lru_cache(maxsize=None)
def scale_pitch_names(
    tonic: str = "A", scale_mode: ScaleMode = ScaleMode.MINOR
) -> tuple[str, ...]:
    """Get the seven pitch names of a scale, starting on the tonic.

    Args:
        tonic: Tonic name such as "A", "F#" or "Bb".
        scale_mode: Natural minor or major.

    Returns:
        Tuple of seven octave-less pitch names, e.g. ("A", "B", "C", ...).
    """
    scale_obj = SCALE_CLASSES[scale_mode](_to_music21_name(tonic))
    names = tuple(_from_music21_name(p.name) for p in scale_obj.getPitches()[:7])
    logger.debug(f"{tonic} {scale_mode.value} scale: {names}")
    return names


def degree_name(
    degree: int, tonic: str = "A", scale_mode: ScaleMode = ScaleMode.MINOR
) -> str:
    """Get the octave-less pitch name of a 1-based scale degree.

    Degrees outside 1-7 wrap around the octave.
    """
    return scale_pitch_names(tonic, scale_mode)[(degree - 1) % 7]


def with_octave(name: str, octave: int) -> str:
    """Attach an octave number to an octave-less pitch name."""
    return f"{name}{octave}"


def place_in_register(name: str, floor_pitch: str) -> str:
    """Place a pitch class in the lowest octave at or above ``floor_pitch``.

    Args:
        name: Octave-less pitch name, e.g. "C".
        floor_pitch: Lowest allowed pitch, e.g. "A3".

    Returns:
        Pitch name with octave inside ``[floor_pitch, floor_pitch + octave)``.
    """
    floor_midi = pitch_to_midi(floor_pitch)
    p = music21.pitch.Pitch(_to_music21_name(name))
    p.octave = floor_midi // 12 - 1
    # ps is unbounded; midi folds values outside 0-127 back into range
    while p.ps < floor_midi:
        p.octave += 1
    while p.ps >= floor_midi + 12:
        p.octave -= 1
    return with_octave(_from_music21_name(p.name), p.octave)


def voice_chord(
    degrees: tuple[int, ...],
    tonic: str = "A",
    low_octave: int = 3,
) -> tuple[str, ...]:
    """Voice natural-minor scale degrees inside the tonic's octave.

    Every chord tone is placed in the octave starting at the tonic in
    ``low_octave`` (A3 to G#4 for the default key). Duplicates are removed
    and the result is ordered from low to high.

    Args:
        degrees: 1-based scale degrees of the chord tones.
        tonic: Tonic name of the key.
        low_octave: Octave of the tonic.

    Returns:
        Tuple of pitch names sorted by MIDI number.
    """
    floor_pitch = with_octave(tonic, low_octave)
    placed = {
        place_in_register(degree_name(d, tonic, ScaleMode.MINOR), floor_pitch)
        for d in degrees
    }
    return tuple(sorted(placed, key=pitch_to_midi))
