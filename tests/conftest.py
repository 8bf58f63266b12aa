import pytest

from text_to_tone.models import EventType, MappingConfig, Mode, MusicEvent


@pytest.fixture
def default_config():
    return MappingConfig()


@pytest.fixture
def letters_only_config():
    return MappingConfig(mode=Mode.LETTERS_ONLY)


@pytest.fixture
def phoneme_config():
    return MappingConfig(mode=Mode.PHONEMES)


@pytest.fixture
def sample_events():
    # Note, chord, rest, note: durations sum to 4.0
    return [
        MusicEvent(type=EventType.NOTE, pitches=("A3",), duration_seconds=1.0),
        MusicEvent(
            type=EventType.CHORD, pitches=("A3", "C4", "E4"), duration_seconds=1.5
        ),
        MusicEvent(type=EventType.REST, duration_seconds=0.5),
        MusicEvent(type=EventType.NOTE, pitches=("B4",), duration_seconds=1.0),
    ]
