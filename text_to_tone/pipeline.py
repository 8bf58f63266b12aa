"""
Pipeline processing functions for text-to-tone mapping.

This module contains the public entry points of the engine. A mapping runs
four stages in order: tokenize, truncate, map, normalize. Only a malformed
configuration raises; every problem with the input text is reported as a
diagnostic on the result.
"""

import logging
from collections.abc import Mapping

from pydantic import ValidationError

from text_to_tone.mapping_rules import map_tokens
from text_to_tone.models import (
    Diagnostic,
    DiagnosticCode,
    EventType,
    MappingConfig,
    MappingResult,
    MusicEvent,
)
from text_to_tone.timing import normalize_events
from text_to_tone.tokenizer import tokenize, truncate_tokens

logger = logging.getLogger(__name__)


# Custom exceptions
class PipelineError(Exception):
    """Base exception for pipeline processing errors."""

    pass


class ConfigurationError(PipelineError):
    """Exception raised when the mapping configuration is invalid."""

    pass


def resolve_config(config: MappingConfig | Mapping | None = None) -> MappingConfig:
    """Validate a configuration before any input is processed.

    Args:
        config: A MappingConfig, a mapping of its fields, or None for defaults.

    Returns:
        A validated MappingConfig.

    Raises:
        ConfigurationError: If the configuration is malformed.
    """
    if config is None:
        return MappingConfig()
    if isinstance(config, MappingConfig):
        return config
    if not isinstance(config, Mapping):
        raise ConfigurationError(
            f"Expected MappingConfig or mapping, got {type(config).__name__}"
        )
    try:
        return MappingConfig.model_validate(dict(config))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid mapping configuration: {e}") from e


def _silence(config: MappingConfig) -> MusicEvent:
    return MusicEvent(
        type=EventType.REST, duration_seconds=config.target_seconds, label="silence"
    )


def map_text(
    text: str, config: MappingConfig | Mapping | None = None
) -> MappingResult:
    """Map text to a time-normalized sequence of musical events.

    Args:
        text: Raw input text; any string is accepted.
        config: Mapping configuration (defaults apply when None).

    Returns:
        MappingResult with events whose durations sum to
        ``config.target_seconds`` (except in the degenerate timing case),
        the tokens used and all diagnostics. Input that yields no events
        produces a single rest spanning the whole target.

    Raises:
        ConfigurationError: If the configuration is malformed.
    """
    cfg = resolve_config(config)
    diagnostics: list[Diagnostic] = []

    # Step 1: Tokenize up to the length cap
    tokenized = tokenize(text, cfg.mode, cfg.max_input_length)
    diagnostics.extend(tokenized.diagnostics)

    # Step 2: Drop the token straddling the cap
    tokens, _ = truncate_tokens(tokenized.tokens, cfg.max_input_length)
    truncated = len(text) > cfg.max_input_length
    if truncated:
        kept = tokens[-1].end if tokens else 0
        logger.warning(
            f"Input of {len(text)} characters truncated to {kept} "
            f"(cap {cfg.max_input_length})"
        )
        diagnostics.append(
            Diagnostic(
                code=DiagnosticCode.TRUNCATED,
                message=f"Input truncated after {kept} of {len(text)} characters",
                start=kept,
                end=len(text),
            )
        )

    # Step 3: Map tokens to weighted events
    weighted = map_tokens(tokens, cfg)
    if not weighted:
        logger.debug("No mappable input; emitting a single rest")
        diagnostics.append(
            Diagnostic(
                code=DiagnosticCode.EMPTY_INPUT,
                message="Nothing to play; output is a single rest",
            )
        )
        return MappingResult(
            events=(_silence(cfg),),
            tokens=tokens,
            diagnostics=tuple(diagnostics),
            target_seconds=cfg.target_seconds,
            truncated=truncated,
        )

    # Step 4: Normalize timing
    events, degenerate = normalize_events(
        weighted, cfg.target_seconds, cfg.min_event_seconds
    )
    if degenerate:
        diagnostics.append(
            Diagnostic(
                code=DiagnosticCode.DEGENERATE_TIMING,
                message=(
                    f"{len(events)} events at the {cfg.min_event_seconds}s floor "
                    f"exceed the {cfg.target_seconds}s target"
                ),
            )
        )

    return MappingResult(
        events=tuple(events),
        tokens=tokens,
        diagnostics=tuple(diagnostics),
        target_seconds=cfg.target_seconds,
        truncated=truncated,
    )


def map_text_to_events(
    text: str, config: MappingConfig | Mapping | None = None
) -> list[MusicEvent]:
    """Map text to musical events; see ``map_text`` for details.

    Args:
        text: Raw input text.
        config: Mapping configuration (defaults apply when None).

    Returns:
        List of normalized MusicEvent objects.

    Raises:
        ConfigurationError: If the configuration is malformed.
    """
    return list(map_text(text, config).events)
