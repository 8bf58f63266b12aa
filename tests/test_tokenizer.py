import pytest

from text_to_tone.models import DiagnosticCode, Mode, Stress, TokenKind
from text_to_tone.tokenizer import tokenize, truncate_tokens


def assert_covers(text, tokens):
    # Tokens are contiguous, ordered and reproduce the input exactly
    position = 0
    for token in tokens:
        assert token.start == position
        assert text[token.start : token.end] == token.text
        position = token.end
    assert position == len(text)


@pytest.mark.parametrize("mode", list(Mode))
@pytest.mark.parametrize(
    "text",
    ["", "Hello, world!", "Call 555-0100 now", "  a\t\nb  ", "naïve café ☃", "text"],
)
def test_tokens_cover_input(text, mode):
    result = tokenize(text, mode)
    assert_covers(text, result.tokens)


def test_basic_classification():
    result = tokenize("ab 12!")
    kinds = [t.kind for t in result.tokens]
    assert kinds == [
        TokenKind.LETTER,
        TokenKind.LETTER,
        TokenKind.SPACE,
        TokenKind.DIGIT_RUN,
        TokenKind.UNSUPPORTED,
    ]
    assert result.tokens[3].text == "12"


def test_digit_runs_grouped_greedily():
    result = tokenize("123")
    assert len(result.tokens) == 1
    assert result.tokens[0].kind is TokenKind.DIGIT_RUN
    assert result.tokens[0].source_range == (0, 3)


def test_whitespace_run_is_one_token():
    result = tokenize("a  \t b")
    assert [t.text for t in result.tokens] == ["a", "  \t ", "b"]


def test_symbols_are_single_tokens():
    result = tokenize("//@")
    assert [t.text for t in result.tokens] == ["/", "/", "@"]
    assert all(t.kind is TokenKind.SYMBOL for t in result.tokens)


def test_unsupported_character_diagnostic():
    result = tokenize("a~é")
    assert [t.kind for t in result.tokens][1:] == [TokenKind.UNSUPPORTED] * 2
    assert len(result.diagnostics) == 2
    diagnostic = result.diagnostics[0]
    assert diagnostic.code is DiagnosticCode.UNSUPPORTED_CHARACTER
    assert (diagnostic.start, diagnostic.end) == (1, 2)


def test_letters_only_rejects_digits():
    result = tokenize("a1", Mode.LETTERS_ONLY)
    assert result.tokens[1].kind is TokenKind.UNSUPPORTED
    assert result.diagnostics[0].start == 1


def test_phonemes_dictionary_word():
    result = tokenize("hello", Mode.PHONEMES)
    tokens = result.tokens
    assert [t.phoneme for t in tokens] == ["h", "ʌ", "l", "oʊ"]
    assert [t.text for t in tokens] == ["h", "e", "l", "lo"]
    assert tokens[1].stress is Stress.UNSTRESSED
    assert tokens[3].stress is Stress.PRIMARY
    assert tokens[3].kind is TokenKind.PHONEME_DIPHTHONG
    assert tokens[0].stress is None


def test_phonemes_fallback_word():
    result = tokenize("oyster", Mode.PHONEMES)
    tokens = result.tokens
    assert tokens[0].kind is TokenKind.PHONEME_DIPHTHONG
    assert tokens[0].text == "oy"
    assert [t.phoneme for t in tokens] == ["ɔɪ", "s", "t", "e", "r"]
    assert all(t.stress is None for t in tokens)


def test_phonemes_more_sounds_than_letters():
    # "text" has five phonemes over four letters; one slice is empty
    result = tokenize("text", Mode.PHONEMES)
    assert len(result.tokens) == 5
    assert_covers("text", result.tokens)


def test_phonemes_word_index():
    result = tokenize("hi there", Mode.PHONEMES)
    phonemes = [t for t in result.tokens if t.phoneme is not None]
    assert {t.word_index for t in phonemes if t.start < 2} == {0}
    assert {t.word_index for t in phonemes if t.start >= 3} == {1}


def test_phonemes_mode_keeps_digits():
    result = tokenize("go 42", Mode.PHONEMES)
    assert result.tokens[-1].kind is TokenKind.DIGIT_RUN


def test_truncate_tokens_at_boundary():
    tokens = tokenize("abc 123").tokens
    kept, truncated = truncate_tokens(tokens, 5)
    assert truncated is True
    # "123" straddles the cap and is dropped whole
    assert [t.text for t in kept] == ["a", "b", "c", " "]


def test_truncate_tokens_noop():
    tokens = tokenize("abc").tokens
    kept, truncated = truncate_tokens(tokens, 3)
    assert kept == tokens
    assert truncated is False


def test_tokenize_stops_at_max_length():
    result = tokenize("ab~~~~", max_length=2)
    assert [t.text for t in result.tokens] == ["a", "b"]
    assert result.diagnostics == ()


def test_tokenize_finishes_straddling_run():
    # The run crossing the limit is scanned whole, as in the full text
    full = tokenize("ab 12345 cd")
    limited = tokenize("ab 12345 cd", max_length=5)
    assert limited.tokens == full.tokens[:4]
    assert limited.tokens[-1].source_range == (3, 8)
