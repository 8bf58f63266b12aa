"""Rules that turn tokens into musical events with relative weights.

Mapping is a single left-to-right fold over the token stream. The only state
carried between tokens is a ``MappingState`` accumulator: the previous melodic
pitch (for repeat avoidance), the cadence rotation index and the count of
letters seen so far (for the alternating-mode variant). Each rule returns its
events together with the next state and never mutates anything.

Durations on the returned events are relative weights; the timing normalizer
turns them into seconds.
"""

import logging
from dataclasses import dataclass, replace

from text_to_tone.mapping_tables import (
    BASE_CONSONANT_WEIGHT,
    BASE_VOWEL_WEIGHT,
    CADENCES,
    DEFAULT_RHYTHM,
    DIPHTHONG_DEGREES,
    FALLBACK_VOWEL,
    MIN_CONSONANT_WEIGHT,
    MIN_GLIDE_FIRST_WEIGHT,
    MIN_GLIDE_SECOND_WEIGHT,
    MIN_VOWEL_WEIGHT,
    SIGNATURE_RHYTHMS,
    SINGLE_CHORDS,
    STRESS_SCALE,
    SYMBOL_RULES,
    TEEN_CHORDS,
    TENS_CHORDS,
    VOWEL_DEGREES,
    WEIGHT_BREATH,
    WEIGHT_HUNDRED,
    WEIGHT_LETTER,
    WEIGHT_SINGLE,
    WEIGHT_SPACE,
    WEIGHT_SYMBOL,
    WEIGHT_TEEN,
    WEIGHT_TENS,
    WEIGHT_TICK,
    WORD_RHYTHMS,
    WordRhythm,
)
from text_to_tone.models import (
    EventType,
    MappingConfig,
    MusicEvent,
    ScaleMode,
    Token,
    TokenKind,
)
from text_to_tone.music_transformations import degree_name, voice_chord, with_octave

logger = logging.getLogger(__name__)

# Digit units that are not chord-table keys
TICK = 0
CADENCE = 100
BREATH = -1

_VOWEL_KINDS = (TokenKind.PHONEME_VOWEL, TokenKind.PHONEME_DIPHTHONG)


@dataclass(frozen=True)
class MappingState:
    """Accumulator threaded through the token fold.

    Attributes:
        previous_pitch: Octave-less name of the last melodic pitch, if any.
        cadence_index: Number of cadences emitted so far.
        letter_position: Number of letter tokens mapped so far.
    """

    previous_pitch: str | None = None
    cadence_index: int = 0
    letter_position: int = 0


@dataclass(frozen=True)
class PhonemeRole:
    """Rhythm context of one phoneme token within its word."""

    rhythm: WordRhythm
    onset: bool


def _event(
    token: Token,
    event_type: EventType,
    pitches: tuple[str, ...],
    weight: float,
    label: str | None = None,
) -> MusicEvent:
    return MusicEvent(
        type=event_type,
        pitches=pitches,
        duration_seconds=weight,
        label=token.text if label is None else label,
        source_start=token.start,
        source_end=token.end,
    )


def _register_pitch(
    degree: int, config: MappingConfig, scale_mode: ScaleMode = ScaleMode.MINOR
) -> str:
    """Place a degree in the tonic register (degree 1) or the upper register."""
    octave = config.low_octave if degree == 1 else config.high_octave
    return with_octave(degree_name(degree, config.tonic, scale_mode), octave)


def tick_pitch(config: MappingConfig) -> str:
    """Pitch of the low tonic tick used for zeros, dots and consonants."""
    return with_octave(config.tonic, config.low_octave)


def pick_degree(
    candidates: tuple[int, ...], previous_pitch: str | None, tonic: str = "A"
) -> int:
    """Choose a candidate degree that avoids repeating the previous pitch.

    Args:
        candidates: Candidate scale degrees in order of preference.
        previous_pitch: Octave-less name of the previous melodic pitch.
        tonic: Tonic of the key, used to name the candidates.

    Returns:
        The first candidate whose pitch name differs from ``previous_pitch``,
        or the first candidate if every candidate repeats it.
    """
    if previous_pitch is not None:
        for degree in candidates:
            if degree_name(degree, tonic) != previous_pitch:
                return degree
    return candidates[0]


# ── Letters ───────────────────────────────────────────────────────────────────


def letter_degree(letter: str) -> int:
    """Scale degree of a letter: A..G are degrees 1..7, later letters wrap."""
    return (ord(letter.upper()) - ord("A")) % 7 + 1


def map_letter(
    token: Token, state: MappingState, config: MappingConfig
) -> tuple[list[MusicEvent], MappingState]:
    scale_mode = config.scale_mode
    if config.alternate_mode and state.letter_position % 2 == 1:
        scale_mode = scale_mode.opposite

    degree = letter_degree(token.text)
    pitch = _register_pitch(degree, config, scale_mode)
    event = _event(token, EventType.NOTE, (pitch,), WEIGHT_LETTER)
    return [event], replace(
        state,
        previous_pitch=degree_name(degree, config.tonic, scale_mode),
        letter_position=state.letter_position + 1,
    )


# ── Digits ────────────────────────────────────────────────────────────────────


def _below_hundred(n: int) -> list[int]:
    if n < 20 or n % 10 == 0:
        return [n]
    return [n // 10 * 10, n % 10]


def decompose_digits(run: str) -> list[int]:
    """Split a digit run into chord-table units.

    Runs longer than three digits are read digit by digit. Shorter runs turn
    leading zeros into ticks, then read the rest as a number: a hundreds digit
    other than 1 emits its own unit before the cadence, and the last two
    digits follow as a teen, a ten, or a ten plus a single digit. A cadence
    with nothing after it is followed by a breath.

    Args:
        run: String of ASCII digits.

    Returns:
        List of units: ``TICK`` (0), 1-19, multiples of ten up to 90,
        ``CADENCE`` (100) and ``BREATH`` (-1).

    Example:
        >>> decompose_digits("123")
        [100, 20, 3]
        >>> decompose_digits("2000")
        [2, 0, 0, 0]
    """
    if len(run) > 3:
        return [int(d) for d in run]

    stripped = run.lstrip("0")
    units = [TICK] * (len(run) - len(stripped))
    if not stripped:
        return units

    if len(stripped) == 3:
        hundreds, rest = int(stripped[0]), int(stripped[1:])
        if hundreds != 1:
            units.append(hundreds)
        units.append(CADENCE)
        units.extend(_below_hundred(rest) if rest else [BREATH])
        return units

    units.extend(_below_hundred(int(stripped)))
    return units


def map_digit_run(
    token: Token, state: MappingState, config: MappingConfig
) -> tuple[list[MusicEvent], MappingState]:
    events = []
    cadence_index = state.cadence_index

    for unit in decompose_digits(token.text):
        if unit == TICK:
            tick = (tick_pitch(config),)
            events.append(_event(token, EventType.NOTE, tick, WEIGHT_TICK, "0"))
        elif unit == BREATH:
            events.append(_event(token, EventType.REST, (), WEIGHT_BREATH, "breath"))
        elif unit == CADENCE:
            degrees = CADENCES[cadence_index % len(CADENCES)]
            cadence_index += 1
            pitches = voice_chord(degrees, config.tonic, config.low_octave)
            events.append(
                _event(token, EventType.CHORD, pitches, WEIGHT_HUNDRED, "100")
            )
        else:
            if unit < 10:
                degrees, weight = SINGLE_CHORDS[unit], WEIGHT_SINGLE
            elif unit < 20:
                degrees, weight = TEEN_CHORDS[unit], WEIGHT_TEEN
            else:
                degrees, weight = TENS_CHORDS[unit], WEIGHT_TENS
            pitches = voice_chord(degrees, config.tonic, config.low_octave)
            events.append(_event(token, EventType.CHORD, pitches, weight, str(unit)))

    return events, replace(state, previous_pitch=None, cadence_index=cadence_index)


# ── Symbols and spaces ────────────────────────────────────────────────────────


def map_symbol(
    token: Token, state: MappingState, config: MappingConfig
) -> tuple[list[MusicEvent], MappingState]:
    rule = SYMBOL_RULES[token.text]
    if rule.kind == "rest":
        event = _event(token, EventType.REST, (), WEIGHT_SYMBOL)
    elif rule.kind == "tick":
        event = _event(token, EventType.NOTE, (tick_pitch(config),), WEIGHT_SYMBOL)
    elif rule.kind == "accent":
        accent = with_octave(config.tonic, config.high_octave)
        event = _event(token, EventType.NOTE, (accent,), WEIGHT_SYMBOL)
    else:
        pitches = voice_chord(rule.degrees, config.tonic, config.low_octave)
        event = _event(token, EventType.CHORD, pitches, WEIGHT_SYMBOL)
    return [event], replace(state, previous_pitch=None)


def map_space(
    token: Token, state: MappingState, config: MappingConfig
) -> tuple[list[MusicEvent], MappingState]:
    return [_event(token, EventType.REST, (), WEIGHT_SPACE, "space")], state


# ── Phonemes ──────────────────────────────────────────────────────────────────


def word_rhythm_name(kinds: list[TokenKind]) -> str:
    """Choose a rhythm for a word from its consonant/vowel signature."""
    signature = "".join("V" if k in _VOWEL_KINDS else "C" for k in kinds)
    if signature.startswith("CC") and "V" in signature:
        return "stomp"
    return SIGNATURE_RHYTHMS.get(signature, DEFAULT_RHYTHM)


def phoneme_roles(tokens: tuple[Token, ...]) -> dict[int, PhonemeRole]:
    """Assign each phoneme token its word rhythm and onset/coda role.

    Args:
        tokens: Full token stream.

    Returns:
        Mapping from token position to its PhonemeRole. Consonants before the
        first vowel of their word are onsets; all others are codas.
    """
    words: dict[int, list[int]] = {}
    for position, token in enumerate(tokens):
        if token.phoneme is not None:
            words.setdefault(token.word_index, []).append(position)

    roles = {}
    for positions in words.values():
        kinds = [tokens[p].kind for p in positions]
        rhythm = WORD_RHYTHMS[word_rhythm_name(kinds)]
        first_vowel = next(
            (p for p, kind in zip(positions, kinds) if kind in _VOWEL_KINDS), None
        )
        for p in positions:
            onset = first_vowel is not None and p < first_vowel
            roles[p] = PhonemeRole(rhythm=rhythm, onset=onset)
    return roles


def _stress_scale(token: Token) -> float:
    return STRESS_SCALE[token.stress.value] if token.stress is not None else 1.0


def map_vowel(
    token: Token, state: MappingState, config: MappingConfig, role: PhonemeRole
) -> tuple[list[MusicEvent], MappingState]:
    candidates = VOWEL_DEGREES.get(token.phoneme, VOWEL_DEGREES[FALLBACK_VOWEL])
    degree = pick_degree(candidates, state.previous_pitch, config.tonic)
    weight = max(
        MIN_VOWEL_WEIGHT, BASE_VOWEL_WEIGHT * role.rhythm.vowel * _stress_scale(token)
    )
    event = _event(token, EventType.NOTE, (_register_pitch(degree, config),), weight)
    return [event], replace(state, previous_pitch=degree_name(degree, config.tonic))


def map_diphthong(
    token: Token, state: MappingState, config: MappingConfig, role: PhonemeRole
) -> tuple[list[MusicEvent], MappingState]:
    targets = DIPHTHONG_DEGREES.get(token.phoneme)
    if targets is None:
        logger.debug(f"Unknown diphthong {token.phoneme!r}; using its first vowel")
        first_vowel = token.model_copy(update={"phoneme": token.phoneme[:1]})
        return map_vowel(first_vowel, state, config, role)

    total = BASE_VOWEL_WEIGHT * role.rhythm.glide_total * _stress_scale(token)
    first_share, second_share = role.rhythm.glide_split
    first = pick_degree(targets[0], state.previous_pitch, config.tonic)
    second = pick_degree(targets[1], degree_name(first, config.tonic), config.tonic)

    events = [
        _event(
            token,
            EventType.NOTE,
            (_register_pitch(first, config),),
            max(MIN_GLIDE_FIRST_WEIGHT, total * first_share),
        ),
        _event(
            token,
            EventType.NOTE,
            (_register_pitch(second, config),),
            max(MIN_GLIDE_SECOND_WEIGHT, total * second_share),
        ),
    ]
    return events, replace(state, previous_pitch=degree_name(second, config.tonic))


def map_consonant(
    token: Token, state: MappingState, config: MappingConfig, role: PhonemeRole
) -> tuple[list[MusicEvent], MappingState]:
    multiplier = role.rhythm.onset if role.onset else role.rhythm.coda
    weight = max(MIN_CONSONANT_WEIGHT, BASE_CONSONANT_WEIGHT * multiplier)
    if config.consonant_ticks:
        event = _event(token, EventType.NOTE, (tick_pitch(config),), weight)
    else:
        event = _event(token, EventType.REST, (), weight)
    return [event], state


# ── Fold ──────────────────────────────────────────────────────────────────────

_SIMPLE_RULES = {
    TokenKind.LETTER: map_letter,
    TokenKind.DIGIT_RUN: map_digit_run,
    TokenKind.SYMBOL: map_symbol,
    TokenKind.SPACE: map_space,
}

_PHONEME_RULES = {
    TokenKind.PHONEME_VOWEL: map_vowel,
    TokenKind.PHONEME_DIPHTHONG: map_diphthong,
    TokenKind.PHONEME_CONSONANT: map_consonant,
}


def map_tokens(tokens: tuple[Token, ...], config: MappingConfig) -> list[MusicEvent]:
    """Map a token stream to weighted events in one left-to-right pass.

    Args:
        tokens: Tokens in source order.
        config: Validated mapping configuration.

    Returns:
        Events in order, with relative weights as durations. Unsupported
        tokens contribute nothing.
    """
    roles = phoneme_roles(tokens)
    default_role = PhonemeRole(rhythm=WORD_RHYTHMS[DEFAULT_RHYTHM], onset=False)
    state = MappingState()
    events: list[MusicEvent] = []

    for position, token in enumerate(tokens):
        if token.kind in _SIMPLE_RULES:
            new_events, state = _SIMPLE_RULES[token.kind](token, state, config)
        elif token.kind in _PHONEME_RULES:
            role = roles.get(position, default_role)
            new_events, state = _PHONEME_RULES[token.kind](token, state, config, role)
        else:
            continue
        events.extend(new_events)

    logger.debug(f"Mapped {len(tokens)} tokens to {len(events)} events")
    return events
