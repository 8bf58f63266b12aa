"""Timing normalization for weighted event sequences.

Events come out of the mapping rules with relative weights. This module scales
them so that their durations add up to a fixed total, while keeping every
event at or above a minimum audible length.
"""

import logging

import numpy as np

from text_to_tone.models import MusicEvent, NormalizationResult

logger = logging.getLogger(__name__)

# Relative tolerance when comparing a duration against the floor
FLOOR_TOLERANCE = 1e-9


def normalize_durations(
    weights: list[float] | tuple[float, ...],
    target_seconds: float,
    min_seconds: float = 0.0,
) -> NormalizationResult:
    """Scale positive weights to durations that sum to ``target_seconds``.

    Each weight is multiplied by ``target / sum(weights)``. Durations that
    fall below ``min_seconds`` are clamped to it and the shortfall is taken
    proportionally from the remaining events; this repeats until no free
    event is below the floor. Proportions between unclamped events are
    preserved.

    Args:
        weights: Positive relative weights, one per event.
        target_seconds: Desired total duration in seconds (positive).
        min_seconds: Minimum duration of any event (default 0.0).

    Returns:
        NormalizationResult with one duration per weight. ``degenerate`` is
        True when every event ended up on the floor, in which case the sum
        exceeds the target.

    Raises:
        ValueError: If the target is not positive or a weight is not positive.
    """
    if target_seconds <= 0:
        raise ValueError(f"target_seconds must be positive, got {target_seconds}")
    if len(weights) == 0:
        return NormalizationResult()

    w = np.asarray(weights, dtype=float)
    if np.any(w <= 0):
        raise ValueError("all weights must be positive")

    floored = np.zeros(w.shape, dtype=bool)
    durations = np.empty_like(w)

    while True:
        free = ~floored
        remaining = target_seconds - min_seconds * np.count_nonzero(floored)
        if not free.any() or remaining <= 0:
            floored[:] = True
            durations[:] = min_seconds
            break

        durations[floored] = min_seconds
        durations[free] = w[free] * (remaining / w[free].sum())

        below = free & (durations < min_seconds * (1 - FLOOR_TOLERANCE))
        if not below.any():
            break
        floored |= below

    degenerate = bool(floored.all()) and min_seconds * len(w) > target_seconds
    if degenerate:
        logger.warning(
            f"All {len(w)} events hit the {min_seconds}s floor; "
            f"total {min_seconds * len(w):.3f}s exceeds target {target_seconds}s"
        )

    return NormalizationResult(
        durations=tuple(float(d) for d in durations), degenerate=degenerate
    )


def normalize_events(
    events: list[MusicEvent], target_seconds: float, min_seconds: float = 0.0
) -> tuple[list[MusicEvent], bool]:
    """Replace event weights with normalized durations.

    Args:
        events: Events whose ``duration_seconds`` hold relative weights.
        target_seconds: Desired total duration in seconds.
        min_seconds: Minimum duration of any event.

    Returns:
        Tuple of (new events with absolute durations, degenerate flag).
    """
    result = normalize_durations(
        [e.duration_seconds for e in events], target_seconds, min_seconds
    )
    normalized = [
        event.model_copy(update={"duration_seconds": duration})
        for event, duration in zip(events, result.durations)
    ]
    return normalized, result.degenerate
