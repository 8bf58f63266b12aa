import logging

import pytest

from text_to_tone.models import (
    DiagnosticCode,
    EventType,
    MappingConfig,
    MappingResult,
    Mode,
)
from text_to_tone.pipeline import (
    ConfigurationError,
    PipelineError,
    map_text,
    map_text_to_events,
    resolve_config,
)


def codes(result):
    return [d.code for d in result.diagnostics]


@pytest.mark.parametrize(
    "text, mode",
    [
        ("Hello, world!", Mode.LETTERS_ONLY),
        ("Call 555-0100 at 9:30", Mode.LETTERS_AND_DIGITS),
        ("happy birthday to you", Mode.PHONEMES),
    ],
)
def test_durations_sum_to_target(text, mode):
    result = map_text(text, MappingConfig(mode=mode, target_seconds=6.0))
    assert isinstance(result, MappingResult)
    assert result.total_seconds == pytest.approx(6.0, abs=1e-6)
    assert all(e.duration_seconds >= 0.05 * (1 - 1e-9) for e in result.events)


def test_deterministic():
    config = MappingConfig(mode=Mode.PHONEMES)
    assert map_text("the piano plays", config) == map_text("the piano plays", config)


def test_map_text_to_events_matches_result():
    events = map_text_to_events("abc 123")
    assert events == list(map_text("abc 123").events)


def test_empty_input_is_single_rest():
    result = map_text("")
    assert len(result.events) == 1
    assert result.events[0].type is EventType.REST
    assert result.events[0].duration_seconds == pytest.approx(8.0)
    assert codes(result) == [DiagnosticCode.EMPTY_INPUT]


def test_unmappable_input_is_single_rest():
    result = map_text("~~")
    assert [e.type for e in result.events] == [EventType.REST]
    assert codes(result) == [
        DiagnosticCode.UNSUPPORTED_CHARACTER,
        DiagnosticCode.UNSUPPORTED_CHARACTER,
        DiagnosticCode.EMPTY_INPUT,
    ]


def test_unsupported_characters_reported():
    result = map_text("a€b")
    assert len(result.events) == 2
    assert codes(result) == [DiagnosticCode.UNSUPPORTED_CHARACTER]
    assert result.diagnostics[0].start == 1


def test_truncation():
    result = map_text("abc 123", {"max_input_length": 5})
    assert result.truncated is True
    assert [t.text for t in result.tokens] == ["a", "b", "c", " "]
    assert codes(result) == [DiagnosticCode.TRUNCATED]
    assert result.diagnostics[0].start == 4
    assert result.total_seconds == pytest.approx(8.0)


def test_default_length_cap():
    result = map_text("a" * 600)
    assert result.truncated is True
    assert len(result.events) == 80
    assert result.total_seconds == pytest.approx(8.0)


def test_no_diagnostics_past_cap(caplog):
    with caplog.at_level(logging.WARNING, logger="text_to_tone"):
        result = map_text("ab" + "~" * 2000, {"max_input_length": 2})
    assert codes(result) == [DiagnosticCode.TRUNCATED]
    assert result.diagnostics[0].start == 2
    warnings = [r for r in caplog.records if r.name.startswith("text_to_tone")]
    assert len(warnings) == 1


def test_unsupported_before_cap_still_reported():
    result = map_text("a~b~~~~", {"max_input_length": 3})
    assert codes(result) == [
        DiagnosticCode.UNSUPPORTED_CHARACTER,
        DiagnosticCode.TRUNCATED,
    ]


@pytest.mark.parametrize(
    "text, mode",
    [
        (
            "The quick brown fox jumps over the lazy dog while five boxing "
            "wizards jump quickly, and a mad boxer shot a quick, gloved jab "
            "to the jaw of his dizzy opponent.",
            Mode.LETTERS_AND_DIGITS,
        ),
        ("i " * 40, Mode.PHONEMES),
        ("100 " * 20, Mode.LETTERS_AND_DIGITS),
    ],
)
def test_default_config_meets_target(text, mode):
    result = map_text(text, {"mode": mode})
    assert DiagnosticCode.DEGENERATE_TIMING not in codes(result)
    assert result.total_seconds == pytest.approx(8.0, abs=1e-6)


def test_degenerate_timing():
    result = map_text("a" * 200, {"target_seconds": 1.0})
    assert DiagnosticCode.DEGENERATE_TIMING in codes(result)
    assert result.total_seconds == pytest.approx(4.0)  # 80 events at the floor


def test_dict_config_accepted():
    result = map_text("a1", {"mode": "letters_only"})
    assert len(result.events) == 1


@pytest.mark.parametrize(
    "config",
    [
        {"target_seconds": -1},
        {"tonic": "H"},
        {"low_octave": 5, "high_octave": 4},
        {"mode": "words"},
        "letters_only",
    ],
)
def test_invalid_config_raises(config):
    with pytest.raises(ConfigurationError):
        map_text("abc", config)


def test_configuration_error_hierarchy():
    with pytest.raises(PipelineError) as excinfo:
        resolve_config({"max_input_length": 0})
    assert excinfo.value.__cause__ is not None


def test_resolve_config_passthrough():
    config = MappingConfig(tonic="C")
    assert resolve_config(config) is config
    assert resolve_config(None) == MappingConfig()
