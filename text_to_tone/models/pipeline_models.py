"""Models for representing pipeline processing stages.

This module contains Pydantic models that encapsulate the results of each
stage in the text-to-tone pipeline: tokenization, timing normalization and
the final mapping result. Diagnostics travel alongside each result so that
non-fatal problems can be surfaced by a user interface without interrupting
the mapping.
"""

from enum import Enum

from pydantic import BaseModel, Field

from text_to_tone.models.core_models import MusicEvent, Token


class DiagnosticCode(str, Enum):
    """Categories of non-fatal problems reported by the pipeline."""

    UNSUPPORTED_CHARACTER = "unsupported_character"
    TRUNCATED = "truncated"
    EMPTY_INPUT = "empty_input"
    DEGENERATE_TIMING = "degenerate_timing"


class Diagnostic(BaseModel):
    """An informational record about something the pipeline skipped or adjusted.

    Attributes:
        code: Category of the diagnostic.
        message: Human-readable description.
        start: Start offset of the affected input span, if any.
        end: End offset of the affected input span, if any.
    """

    code: DiagnosticCode
    message: str
    start: int | None = Field(None, ge=0, description="Affected span start")
    end: int | None = Field(None, ge=0, description="Affected span end")

    class Config:
        frozen = True


class TokenizeResult(BaseModel):
    """Result of the tokenization stage.

    Attributes:
        tokens: Tokens in source order, covering the whole input.
        diagnostics: Records for unsupported characters.
    """

    tokens: tuple[Token, ...] = Field(
        default_factory=tuple, description="Tokens in source order"
    )
    diagnostics: tuple[Diagnostic, ...] = Field(
        default_factory=tuple, description="Tokenizer diagnostics"
    )

    class Config:
        frozen = True


class NormalizationResult(BaseModel):
    """Result of the timing normalization stage.

    Attributes:
        durations: Absolute durations in seconds, one per input weight.
        degenerate: True when every duration was clamped to the floor, in
            which case the durations no longer sum to the target.
    """

    durations: tuple[float, ...] = Field(
        default_factory=tuple, description="Absolute durations in seconds"
    )
    degenerate: bool = Field(False, description="All durations hit the floor")

    class Config:
        frozen = True

    @property
    def total_seconds(self) -> float:
        return float(sum(self.durations))


class MappingResult(BaseModel):
    """Complete output of one mapping invocation.

    Attributes:
        events: Normalized musical events whose durations sum to the target.
        tokens: Tokens the events were derived from (after truncation).
        diagnostics: All non-fatal diagnostics raised along the way.
        target_seconds: Target total duration the events were scaled to.
        truncated: Whether the input was cut at the configured length cap.
    """

    events: tuple[MusicEvent, ...] = Field(
        default_factory=tuple, description="Normalized musical events"
    )
    tokens: tuple[Token, ...] = Field(
        default_factory=tuple, description="Tokens used for mapping"
    )
    diagnostics: tuple[Diagnostic, ...] = Field(
        default_factory=tuple, description="Non-fatal diagnostics"
    )
    target_seconds: float = Field(8.0, gt=0, description="Target total duration")
    truncated: bool = Field(False, description="Input exceeded the length cap")

    class Config:
        frozen = True

    @property
    def total_seconds(self) -> float:
        """Sum of all event durations."""
        return float(sum(e.duration_seconds for e in self.events))
