import pytest
from text_to_tone.models import EventType, MusicEvent, Token, TokenKind


@pytest.fixture
def valid_token():
    return Token(kind=TokenKind.DIGIT_RUN, text="123", start=4, end=7)


@pytest.fixture
def valid_note():
    return MusicEvent(type=EventType.NOTE, pitches=("A3",), duration_seconds=0.5)
