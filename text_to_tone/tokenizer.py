"""Tokenizer that splits raw text into classified tokens.

The tokenizer is total: every character of the input ends up in exactly one
token, and characters it cannot classify become ``unsupported`` tokens with a
diagnostic rather than an error.
"""

import logging

from text_to_tone.models import (
    Diagnostic,
    DiagnosticCode,
    Mode,
    Token,
    TokenizeResult,
    TokenKind,
)
from text_to_tone.pronunciation import word_to_phonemes

logger = logging.getLogger(__name__)

SYMBOL_CHARACTERS = frozenset("/%+=#@$.,-:'")


def _is_letter(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def _is_digit(ch: str) -> bool:
    return ch.isascii() and ch.isdigit()


def _scan_run(text: str, start: int, predicate) -> int:
    """Return the end offset of the maximal run starting at ``start``."""
    end = start
    while end < len(text) and predicate(text[end]):
        end += 1
    return end


def _plain_token(
    kind: TokenKind, text: str, start: int, end: int, word_index: int
) -> Token:
    return Token(
        kind=kind, text=text[start:end], start=start, end=end, word_index=word_index
    )


def _phoneme_tokens(word: str, offset: int, word_index: int) -> list[Token]:
    return [
        Token(
            kind=span.kind,
            text=word[span.start : span.end],
            start=offset + span.start,
            end=offset + span.end,
            phoneme=span.ipa,
            stress=span.stress,
            word_index=word_index,
        )
        for span in word_to_phonemes(word)
    ]


def tokenize(
    text: str,
    mode: Mode = Mode.LETTERS_AND_DIGITS,
    max_length: int | None = None,
) -> TokenizeResult:
    """Split text into an ordered token stream covering every character.

    Args:
        text: Raw input text.
        mode: Which classification rules to apply. Digit runs are only
            recognised in LETTERS_AND_DIGITS and PHONEMES modes; PHONEMES
            mode turns letter runs into phoneme tokens.
        max_length: Stop starting new tokens at this offset. The token that
            straddles it is still scanned to its natural end, so the tokens
            are identical to those of the full text up to that point and
            cover a prefix of the input.

    Returns:
        TokenizeResult with tokens in source order and one diagnostic per
        unsupported character scanned.
    """
    tokens: list[Token] = []
    diagnostics: list[Diagnostic] = []
    digits_enabled = mode is not Mode.LETTERS_ONLY
    word_index = 0

    limit = len(text) if max_length is None else min(len(text), max_length)
    i = 0
    while i < limit:
        ch = text[i]

        if ch.isspace():
            end = _scan_run(text, i, str.isspace)
            tokens.append(_plain_token(TokenKind.SPACE, text, i, end, word_index))
            i = end
            continue

        if digits_enabled and _is_digit(ch):
            end = _scan_run(text, i, _is_digit)
            tokens.append(_plain_token(TokenKind.DIGIT_RUN, text, i, end, word_index))
            i = end
            continue

        if ch in SYMBOL_CHARACTERS:
            tokens.append(_plain_token(TokenKind.SYMBOL, text, i, i + 1, word_index))
            i += 1
            continue

        if _is_letter(ch):
            if mode is Mode.PHONEMES:
                end = _scan_run(text, i, _is_letter)
                tokens.extend(_phoneme_tokens(text[i:end], i, word_index))
                word_index += 1
                i = end
            else:
                letter = _plain_token(TokenKind.LETTER, text, i, i + 1, word_index)
                tokens.append(letter)
                i += 1
            continue

        logger.warning(f"Dropping unsupported character {ch!r} at offset {i}")
        tokens.append(_plain_token(TokenKind.UNSUPPORTED, text, i, i + 1, word_index))
        diagnostics.append(
            Diagnostic(
                code=DiagnosticCode.UNSUPPORTED_CHARACTER,
                message=f"Unsupported character {ch!r} contributes no event",
                start=i,
                end=i + 1,
            )
        )
        i += 1

    logger.debug(f"Tokenized {len(text)} characters into {len(tokens)} tokens")
    return TokenizeResult(tokens=tuple(tokens), diagnostics=tuple(diagnostics))


def truncate_tokens(
    tokens: tuple[Token, ...], max_length: int
) -> tuple[tuple[Token, ...], bool]:
    """Keep only the tokens that end within the first ``max_length`` characters.

    A token straddling the cap is dropped whole, so truncation always happens
    at a token boundary.

    Args:
        tokens: Tokens in source order.
        max_length: Maximum number of input characters to keep.

    Returns:
        Tuple of (kept tokens, whether anything was dropped).
    """
    kept = tuple(t for t in tokens if t.end <= max_length)
    return kept, len(kept) < len(tokens)
