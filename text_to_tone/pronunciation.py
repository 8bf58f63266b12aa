"""Word pronunciation lookup for the phoneme tokenizer.

Words are first looked up in a small ARPABET pronunciation table (CMU style,
with stress digits on vowels) and converted to IPA. Words missing from the
table go through a letter-by-letter heuristic so that every word yields
phonemes. The heuristic is an approximation for driving melody, not a
phonetic transcription.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType

from text_to_tone.models import Stress, TokenKind

logger = logging.getLogger(__name__)

# ARPABET (CMU) -> IPA
ARPA_TO_IPA = MappingProxyType(
    {
        # Vowels (monophthongs)
        "AA": "ɑ",
        "AE": "æ",
        "AH": "ʌ",
        "AO": "ɔ",
        "AX": "ə",
        "AXR": "ɚ",
        "EH": "ɛ",
        "ER": "ɝ",
        "IH": "ɪ",
        "IY": "i",
        "UH": "ʊ",
        "UW": "u",
        # Diphthongs
        "AW": "aʊ",
        "AY": "aɪ",
        "EY": "eɪ",
        "OW": "oʊ",
        "OY": "ɔɪ",
        # Consonants
        "P": "p",
        "B": "b",
        "T": "t",
        "D": "d",
        "K": "k",
        "G": "g",
        "CH": "tʃ",
        "JH": "dʒ",
        "F": "f",
        "V": "v",
        "TH": "θ",
        "DH": "ð",
        "S": "s",
        "Z": "z",
        "SH": "ʃ",
        "ZH": "ʒ",
        "HH": "h",
        "M": "m",
        "N": "n",
        "NG": "ŋ",
        "L": "l",
        "R": "ɹ",
        "Y": "j",
        "W": "w",
    }
)

VOWEL_IPA = frozenset(
    ["a", "e", "i", "o", "u", "ɑ", "æ", "ɪ", "ɛ", "ɔ", "ʊ", "ʌ", "ə", "ɚ", "ɝ", "ɜ"]
)
DIPHTHONG_IPA = frozenset(["aɪ", "aʊ", "ɔɪ", "eɪ", "oʊ"])

# word -> ARPABET with stress digits (1 primary, 2 secondary, 0 unstressed)
PRONUNCIATIONS = MappingProxyType(
    {
        "a": ("AH0",),
        "birthday": ("B", "ER1", "TH", "D", "EY2"),
        "boy": ("B", "OY1"),
        "day": ("D", "EY1"),
        "go": ("G", "OW1"),
        "happy": ("HH", "AE1", "P", "IY0"),
        "hello": ("HH", "AH0", "L", "OW1"),
        "home": ("HH", "OW1", "M"),
        "i": ("AY1",),
        "joy": ("JH", "OY1"),
        "love": ("L", "AH1", "V"),
        "music": ("M", "Y", "UW1", "Z", "IH0", "K"),
        "my": ("M", "AY1"),
        "name": ("N", "EY1", "M"),
        "night": ("N", "AY1", "T"),
        "note": ("N", "OW1", "T"),
        "notes": ("N", "OW1", "T", "S"),
        "now": ("N", "AW1"),
        "piano": ("P", "IY0", "AE1", "N", "OW0"),
        "play": ("P", "L", "EY1"),
        "song": ("S", "AO1", "NG"),
        "sound": ("S", "AW1", "N", "D"),
        "text": ("T", "EH1", "K", "S", "T"),
        "the": ("DH", "AH0"),
        "through": ("TH", "R", "UW1"),
        "time": ("T", "AY1", "M"),
        "tone": ("T", "OW1", "N"),
        "toy": ("T", "OY1"),
        "where": ("W", "EH1", "R"),
        "world": ("W", "ER1", "L", "D"),
        "you": ("Y", "UW1"),
    }
)

# Letter fallback: two-letter digraphs are matched before single letters
DIGRAPH_IPA = MappingProxyType({"oy": "ɔɪ", "ea": "eɪ"})
LETTER_IPA = MappingProxyType(
    {"a": "a", "e": "e", "i": "ɪ", "o": "o", "u": "u", "y": "j"}
)

_STRESS_DIGITS = {"0": Stress.UNSTRESSED, "1": Stress.PRIMARY, "2": Stress.SECONDARY}


@dataclass(frozen=True)
class PhonemeSpan:
    """One phoneme of a word with its character span inside that word.

    Attributes:
        ipa: IPA symbol(s) of the phoneme.
        kind: Vowel, diphthong or consonant token kind.
        start: Inclusive offset inside the word.
        end: Exclusive offset inside the word.
        stress: Stress for dictionary vowels, None otherwise.
    """

    ipa: str
    kind: TokenKind
    start: int
    end: int
    stress: Stress | None = None


def classify_ipa(ipa: str) -> TokenKind:
    """Return the phoneme token kind for an IPA symbol."""
    if ipa in DIPHTHONG_IPA:
        return TokenKind.PHONEME_DIPHTHONG
    if ipa in VOWEL_IPA:
        return TokenKind.PHONEME_VOWEL
    return TokenKind.PHONEME_CONSONANT


def arpa_to_ipa(arpa: str) -> tuple[str, Stress | None]:
    """Convert one ARPABET symbol (with optional stress digit) to IPA.

    Args:
        arpa: ARPABET symbol such as "OY1" or "T".

    Returns:
        Tuple of (IPA symbol, stress or None). Unknown symbols are lower-cased.
    """
    stress = None
    if arpa and arpa[-1] in _STRESS_DIGITS:
        stress = _STRESS_DIGITS[arpa[-1]]
        arpa = arpa[:-1]
    return ARPA_TO_IPA.get(arpa, arpa.lower()), stress


def _proportional_spans(length: int, count: int) -> list[tuple[int, int]]:
    """Split ``length`` characters into ``count`` contiguous slices.

    Slices can be empty when there are more phonemes than characters.
    """
    return [(i * length // count, (i + 1) * length // count) for i in range(count)]


def lookup_word(word: str) -> list[PhonemeSpan] | None:
    """Look a word up in the pronunciation table.

    Each phoneme receives a proportional slice of the word's characters so
    that the spans of one word still tile it exactly.

    Args:
        word: Word made of letters (case-insensitive).

    Returns:
        Phoneme spans, or None if the word is not in the table.
    """
    arpa_seq = PRONUNCIATIONS.get(word.lower())
    if arpa_seq is None:
        return None

    spans = []
    slices = _proportional_spans(len(word), len(arpa_seq))
    for arpa, (start, end) in zip(arpa_seq, slices):
        ipa, stress = arpa_to_ipa(arpa)
        kind = classify_ipa(ipa)
        spans.append(
            PhonemeSpan(
                ipa=ipa,
                kind=kind,
                start=start,
                end=end,
                stress=stress if kind is not TokenKind.PHONEME_CONSONANT else None,
            )
        )
    return spans


def letters_to_phonemes(word: str) -> list[PhonemeSpan]:
    """Approximate the phonemes of a word letter by letter.

    Digraphs ("oy", "ea") become diphthongs; the vowel letters a, e, i, o, u
    become vowels; "y" becomes the glide "j"; any other letter becomes a
    consonant named after itself.

    Args:
        word: Word made of letters.

    Returns:
        Phoneme spans tiling the word.
    """
    spans = []
    j = 0
    while j < len(word):
        pair = word[j : j + 2].lower()
        if pair in DIGRAPH_IPA:
            ipa = DIGRAPH_IPA[pair]
            spans.append(
                PhonemeSpan(ipa=ipa, kind=classify_ipa(ipa), start=j, end=j + 2)
            )
            j += 2
            continue

        lower = word[j].lower()
        ipa = LETTER_IPA.get(lower, lower)
        spans.append(PhonemeSpan(ipa=ipa, kind=classify_ipa(ipa), start=j, end=j + 1))
        j += 1
    return spans


def word_to_phonemes(word: str) -> list[PhonemeSpan]:
    """Return the phonemes of a word, preferring the pronunciation table."""
    spans = lookup_word(word)
    if spans is not None:
        return spans
    logger.debug(f"No pronunciation for {word!r}; using letter heuristic")
    return letters_to_phonemes(word)
