"""Core domain models for text-to-tone mapping."""

import re
from enum import Enum

from pydantic import BaseModel, Field, model_validator

PITCH_PATTERN = re.compile(r"^([A-G])([#b]*)(-?\d+)$")

# Lowest pitch written on the treble staff (C4, MIDI 60)
TREBLE_FLOOR_MIDI = 60

_STEP_SEMITONES = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}


class TokenKind(str, Enum):
    """Classification of one unit of input text."""

    LETTER = "letter"
    DIGIT_RUN = "digit_run"
    SYMBOL = "symbol"
    PHONEME_VOWEL = "phoneme_vowel"
    PHONEME_DIPHTHONG = "phoneme_diphthong"
    PHONEME_CONSONANT = "phoneme_consonant"
    SPACE = "space"
    UNSUPPORTED = "unsupported"


class Stress(str, Enum):
    """Lexical stress carried by vowel phonemes from the pronunciation table."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    UNSTRESSED = "unstressed"


class EventType(str, Enum):
    """Kind of musical event."""

    NOTE = "NOTE"
    CHORD = "CHORD"
    REST = "REST"


class Token(BaseModel):
    """One classified unit of input text.

    Tokens are produced in source order and their ranges tile the input:
    the end of one token is the start of the next.

    Attributes:
        kind: Token classification.
        text: The original substring covered by the token.
        start: Inclusive start offset into the original input.
        end: Exclusive end offset into the original input.
        phoneme: IPA symbol for phoneme tokens, None otherwise.
        stress: Stress of a vowel phoneme, if known.
        word_index: Index of the word the token belongs to.
    """

    kind: TokenKind
    text: str
    start: int = Field(..., ge=0, description="Inclusive source offset")
    end: int = Field(..., ge=0, description="Exclusive source offset")
    phoneme: str | None = Field(None, description="IPA symbol for phoneme tokens")
    stress: Stress | None = Field(None, description="Vowel stress, if known")
    word_index: int = Field(0, ge=0, description="Index of the enclosing word")

    class Config:
        frozen = True

    @model_validator(mode="after")
    def _check_range(self) -> "Token":
        if self.end < self.start:
            raise ValueError(f"token range [{self.start}, {self.end}) is inverted")
        return self

    @property
    def source_range(self) -> tuple[int, int]:
        """The ``[start, end)`` offsets of the token in the original input."""
        return self.start, self.end

    @property
    def length(self) -> int:
        return self.end - self.start


def pitch_to_midi(pitch: str) -> int:
    """Convert a pitch name such as ``"F#4"`` or ``"Bb3"`` to a MIDI number.

    Args:
        pitch: Letter name, optional ``#``/``b`` accidentals and an octave.

    Returns:
        MIDI note number (C4 = 60).

    Raises:
        ValueError: If the name cannot be parsed.
    """
    match = PITCH_PATTERN.match(pitch)
    if match is None:
        raise ValueError(f"Invalid pitch name: {pitch!r}")
    step, accidentals, octave = match.groups()
    offset = accidentals.count("#") - accidentals.count("b")
    return (int(octave) + 1) * 12 + _STEP_SEMITONES[step] + offset


class MusicEvent(BaseModel):
    """One playable and drawable unit derived from one or more tokens.

    Before normalization ``duration_seconds`` holds a relative weight;
    after normalization it holds absolute seconds.

    Attributes:
        type: NOTE, CHORD or REST.
        pitches: Pitch names ordered low to high, empty for rests.
        duration_seconds: Positive duration (weight or seconds).
        label: Human-readable provenance, usually the source token text.
        source_start: Start offset of the originating token.
        source_end: End offset of the originating token.
    """

    type: EventType
    pitches: tuple[str, ...] = Field(default_factory=tuple)
    duration_seconds: float = Field(..., gt=0, description="Weight or seconds")
    label: str | None = Field(None, description="Originating token text")
    source_start: int | None = Field(None, ge=0)
    source_end: int | None = Field(None, ge=0)

    class Config:
        frozen = True

    @model_validator(mode="after")
    def _check_pitch_count(self) -> "MusicEvent":
        count = len(self.pitches)
        if self.type is EventType.REST and count != 0:
            raise ValueError("REST events carry no pitches")
        if self.type is EventType.NOTE and count != 1:
            raise ValueError("NOTE events carry exactly one pitch")
        if self.type is EventType.CHORD and count < 2:
            raise ValueError("CHORD events carry at least two pitches")
        for pitch in self.pitches:
            if PITCH_PATTERN.match(pitch) is None:
                raise ValueError(f"Invalid pitch name: {pitch!r}")
        return self

    @property
    def midi_notes(self) -> list[int]:
        """MIDI note numbers of the event's pitches."""
        return [pitch_to_midi(p) for p in self.pitches]

    @property
    def clef(self) -> str | None:
        """Staff the event belongs on: "bass" if any pitch sits below C4."""
        if not self.pitches:
            return None
        return "bass" if min(self.midi_notes) < TREBLE_FLOOR_MIDI else "treble"
