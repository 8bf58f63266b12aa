"""Parameter models for pipeline configuration.

This module defines the Pydantic model that encapsulates every configurable
parameter of the text-to-tone engine. The model validates its fields on
construction so that a malformed configuration fails before any input is
tokenized.
"""

from enum import Enum

import music21
from pydantic import BaseModel, Field, field_validator, model_validator

# A character yields at most two events (a one-letter diphthong word such as
# "I"), so 80 characters stay within 8 seconds at the 0.05 s floor.
DEFAULT_MAX_INPUT_LENGTH = 80


class Mode(str, Enum):
    """Which classification rules the tokenizer applies."""

    LETTERS_ONLY = "letters_only"
    LETTERS_AND_DIGITS = "letters_and_digits"
    PHONEMES = "phonemes"


class ScaleMode(str, Enum):
    """Scale used for letter mapping."""

    MINOR = "minor"
    MAJOR = "major"

    @property
    def opposite(self) -> "ScaleMode":
        return ScaleMode.MAJOR if self is ScaleMode.MINOR else ScaleMode.MINOR


class MappingConfig(BaseModel):
    """Complete configuration for one mapping invocation.

    Instances are immutable and hashable, so they can key a cache.

    Attributes:
        mode: Tokenizer mode (default letters and digits).
        tonic: Tonic pitch name of the key, e.g. "A", "F#", "Bb" (default "A").
        scale_mode: Scale for letter mapping (default natural minor).
        alternate_mode: Alternate minor/major on every other letter.
        target_seconds: Total duration of the output in seconds (default 8.0).
        consonant_ticks: Render consonant phonemes as low ticks instead of rests.
        max_input_length: Maximum number of input characters mapped
            (default 80).
        min_event_seconds: Floor applied to every normalized duration.
        low_octave: Octave of the tonic register (default 3).
        high_octave: Octave of all other letters (default 4).
    """

    mode: Mode = Field(Mode.LETTERS_AND_DIGITS, description="Tokenizer mode")
    tonic: str = Field("A", description="Tonic pitch name")
    scale_mode: ScaleMode = Field(ScaleMode.MINOR, description="Letter scale")
    alternate_mode: bool = Field(
        False, description="Alternate minor/major for every other letter"
    )
    target_seconds: float = Field(8.0, gt=0, description="Total output duration")
    consonant_ticks: bool = Field(True, description="Tick on consonant phonemes")
    max_input_length: int = Field(
        DEFAULT_MAX_INPUT_LENGTH,
        ge=1,
        description="Maximum number of input characters mapped",
    )
    min_event_seconds: float = Field(
        0.05, ge=0.0, description="Minimum duration of any normalized event"
    )
    low_octave: int = Field(3, ge=0, le=8, description="Octave of the tonic")
    high_octave: int = Field(4, ge=0, le=8, description="Octave of other letters")

    class Config:
        frozen = True

    @field_validator("tonic")
    @classmethod
    def _check_tonic(cls, value: str) -> str:
        name = value.strip()
        if not name or name[0].upper() not in "ABCDEFG":
            raise ValueError(f"Unknown tonic {value!r}")
        accidental = name[1:]
        if accidental not in ("", "#", "b"):
            raise ValueError(f"Unsupported accidental in tonic {value!r}")
        canonical = name[0].upper() + accidental
        # music21 spells flats with "-"
        music21.pitch.Pitch(canonical.replace("b", "-"))
        return canonical

    @model_validator(mode="after")
    def _check_octaves(self) -> "MappingConfig":
        if self.high_octave <= self.low_octave:
            raise ValueError("high_octave must be above low_octave")
        return self
