import pytest

from text_to_tone.timing import normalize_durations, normalize_events


def test_scales_to_target():
    result = normalize_durations([1, 1, 2], 8.0)
    assert result.durations == pytest.approx((2.0, 2.0, 4.0))
    assert result.degenerate is False


@pytest.mark.parametrize("target", [0.5, 8.0, 30.0])
def test_sum_matches_target(target):
    weights = [1.0, 1.25, 0.125, 0.5, 0.5, 1.0, 0.27]
    result = normalize_durations(weights, target, min_seconds=0.05)
    assert result.total_seconds == pytest.approx(target, abs=1e-6)


def test_floor_redistributes():
    result = normalize_durations([100, 1], 1.0, min_seconds=0.05)
    assert result.durations == pytest.approx((0.95, 0.05))
    assert result.degenerate is False


def test_floor_preserves_free_proportions():
    result = normalize_durations([10, 20, 0.01], 3.0, min_seconds=0.1)
    first, second, floored = result.durations
    assert floored == pytest.approx(0.1)
    assert second / first == pytest.approx(2.0)
    assert result.total_seconds == pytest.approx(3.0)


def test_degenerate_when_floor_exceeds_target():
    result = normalize_durations([1, 1, 1], 0.1, min_seconds=0.05)
    assert result.durations == pytest.approx((0.05, 0.05, 0.05))
    assert result.degenerate is True


def test_idempotent():
    first = normalize_durations([3, 1, 0.01, 2], 2.0, min_seconds=0.05)
    second = normalize_durations(first.durations, 2.0, min_seconds=0.05)
    assert second.durations == pytest.approx(first.durations)


def test_empty_weights():
    result = normalize_durations([], 8.0)
    assert result.durations == ()


@pytest.mark.parametrize(
    "weights, target", [([1.0], 0.0), ([1.0], -2.0), ([1.0, 0.0], 8.0)]
)
def test_invalid_input(weights, target):
    with pytest.raises(ValueError):
        normalize_durations(weights, target)


def test_normalize_events(sample_events):
    events, degenerate = normalize_events(sample_events, 8.0)
    assert degenerate is False
    assert [e.duration_seconds for e in events] == pytest.approx([2.0, 3.0, 1.0, 2.0])
    # Everything but the duration is preserved
    assert [e.pitches for e in events] == [e.pitches for e in sample_events]
