"""Lookup tables that drive the mapping rules.

All tables are plain immutable data keyed by input symbol. Pitches are stored
as 1-based scale degrees of the configured key (1 = tonic), so the same tables
serve every tonic. In the default key of A minor the degrees 1..7 are the
letters A B C D E F G.
"""

from dataclasses import dataclass
from types import MappingProxyType

# ── Relative weights ──────────────────────────────────────────────────────────
WEIGHT_SINGLE = 1.0
WEIGHT_TEEN = 1.25
WEIGHT_TENS = 1.25
WEIGHT_HUNDRED = 1.0
WEIGHT_BREATH = 0.125
WEIGHT_TICK = 0.5
WEIGHT_SPACE = 0.5
WEIGHT_SYMBOL = 0.5
WEIGHT_LETTER = 1.0

# ── Digit chords ──────────────────────────────────────────────────────────────
SINGLE_CHORDS = MappingProxyType(
    {
        1: (1, 3, 5),
        2: (2, 4, 6),
        3: (3, 5, 7),
        4: (4, 6, 1),
        5: (5, 7, 2),
        6: (6, 1, 3),
        7: (7, 2, 4),
        8: (1, 3, 5, 7),
        9: (3, 5, 7, 2),
    }
)

TEEN_CHORDS = MappingProxyType(
    {
        10: (1, 3, 5, 2),
        11: (2, 4, 6, 1),
        12: (3, 5, 7, 1),
        13: (4, 6, 1, 5),
        14: (5, 7, 2, 4),
        15: (6, 1, 3, 5),
        16: (7, 2, 4, 5),
        17: (1, 3, 5, 2),
        18: (3, 5, 7, 6),
        19: (5, 7, 2, 6),
    }
)

TENS_CHORDS = MappingProxyType(
    {
        20: (3, 5, 1, 4),
        30: (5, 1, 3),
        40: (6, 1, 4),
        50: (7, 2, 5),
        60: (3, 6, 1),
        70: (4, 7, 2),
        80: (7, 3, 5),
        90: (2, 5, 7),
    }
)

# Rotated round-robin each time 100 is emitted within one invocation
CADENCES = ((5, 7, 2), (3, 5, 1))


# ── Symbols ───────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class SymbolRule:
    """Articulation emitted for one symbol character.

    Attributes:
        kind: "rest", "tick" (low tonic), "accent" (high tonic) or "chord".
        degrees: Chord degrees when ``kind`` is "chord".
    """

    kind: str
    degrees: tuple[int, ...] = ()


SYMBOL_RULES = MappingProxyType(
    {
        ".": SymbolRule("tick"),
        ":": SymbolRule("tick"),
        ",": SymbolRule("rest"),
        "'": SymbolRule("rest"),
        "-": SymbolRule("rest"),
        "/": SymbolRule("chord", (5, 7, 2)),
        "%": SymbolRule("chord", (5, 7, 2)),
        "+": SymbolRule("chord", (4, 6, 1)),
        "=": SymbolRule("chord", (3, 5, 1)),
        "#": SymbolRule("chord", (7, 2, 4)),
        "$": SymbolRule("chord", (6, 1, 3, 5)),
        "@": SymbolRule("accent"),
    }
)

# ── Phonemes ──────────────────────────────────────────────────────────────────
# Vowel IPA -> candidate degrees, in order of preference
VOWEL_DEGREES = MappingProxyType(
    {
        # open, tonic colored
        "a": (1, 5),
        "ɑ": (1, 5),
        "æ": (1, 5),
        # open-mid
        "ɔ": (3, 5),
        "ʌ": (4, 6),
        # mid/central
        "ə": (3, 6),
        "ɜ": (3, 6),
        # close-mid
        "e": (3, 5, 7),
        "o": (5, 7),
        # close
        "i": (7, 2, 5),
        "ɪ": (7, 5),
        "u": (7, 5),
        "ʊ": (7, 5),
        # r-colored
        "ɚ": (4, 5),
        "ɝ": (4, 5),
    }
)
FALLBACK_VOWEL = "ə"

# Diphthong IPA -> (first target candidates, second target candidates)
DIPHTHONG_DEGREES = MappingProxyType(
    {
        "aɪ": ((1,), (3,)),
        "aʊ": ((1,), (5,)),
        "ɔɪ": ((3,), (7,)),
        "eɪ": ((3,), (5,)),
        "oʊ": ((5,), (7,)),
    }
)

STRESS_SCALE = MappingProxyType({"primary": 1.3, "secondary": 1.15, "unstressed": 1.0})

BASE_VOWEL_WEIGHT = 1.0
MIN_VOWEL_WEIGHT = 0.46
BASE_CONSONANT_WEIGHT = 0.42
MIN_CONSONANT_WEIGHT = 0.27
MIN_GLIDE_FIRST_WEIGHT = 0.35
MIN_GLIDE_SECOND_WEIGHT = 0.31


@dataclass(frozen=True)
class WordRhythm:
    """Relative duration recipe applied to the phonemes of one word.

    Attributes:
        onset: Multiplier for consonants before the first vowel.
        vowel: Multiplier for monophthong vowels.
        coda: Multiplier for consonants after the first vowel.
        glide_total: Total diphthong length relative to a vowel.
        glide_split: Share of the diphthong given to each target.
    """

    onset: float
    vowel: float
    coda: float
    glide_total: float
    glide_split: tuple[float, float]


WORD_RHYTHMS = MappingProxyType(
    {
        "even": WordRhythm(0.40, 1.00, 0.40, 1.60, (0.60, 0.40)),
        "swing": WordRhythm(0.30, 1.20, 0.50, 1.60, (0.65, 0.35)),
        "legato": WordRhythm(0.50, 1.30, 0.60, 1.70, (0.60, 0.40)),
        "stomp": WordRhythm(0.20, 1.40, 0.30, 1.70, (0.70, 0.30)),
        "glide": WordRhythm(0.45, 1.25, 0.55, 1.70, (0.55, 0.45)),
    }
)

# Consonant/vowel signature of a word -> rhythm name
SIGNATURE_RHYTHMS = MappingProxyType(
    {"CV": "swing", "CVC": "legato", "V": "glide", "VC": "even"}
)
DEFAULT_RHYTHM = "even"
