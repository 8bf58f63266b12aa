"""Domain models for the text-to-tone engine.

This module provides a centralized location for all data models used throughout
the text-to-tone mapping pipeline. It includes:

- Core domain models (Token, MusicEvent) and their enums
- Pipeline stage results (TokenizeResult, NormalizationResult, MappingResult)
- Diagnostics for non-fatal problems
- The MappingConfig configuration model

All models are built using Pydantic for data validation and are frozen, so a
mapping result can be shared safely between callers.
"""

# Re-export core models
from text_to_tone.models.core_models import (
    EventType,
    MusicEvent,
    Stress,
    Token,
    TokenKind,
    pitch_to_midi,
)

# Re-export pipeline models
from text_to_tone.models.pipeline_models import (
    Diagnostic,
    DiagnosticCode,
    MappingResult,
    NormalizationResult,
    TokenizeResult,
)

# Re-export setting models
from text_to_tone.models.settings_models import MappingConfig, Mode, ScaleMode
