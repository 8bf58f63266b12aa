import pytest

from text_to_tone.cache import cache_info, cached_map_text, clear_all_caches
from text_to_tone.models import MappingConfig, Mode
from text_to_tone.pipeline import ConfigurationError, map_text


@pytest.fixture(autouse=True)
def empty_cache():
    clear_all_caches()
    yield
    clear_all_caches()


def test_cached_result_is_reused():
    first = cached_map_text("play 123")
    second = cached_map_text("play 123", MappingConfig())
    assert first is second
    assert cache_info().hits == 1


def test_cached_matches_uncached():
    config = MappingConfig(mode=Mode.PHONEMES, target_seconds=4.0)
    assert cached_map_text("hello", config) == map_text("hello", config)


def test_config_is_part_of_key():
    minor = cached_map_text("c")
    major = cached_map_text("c", MappingConfig(scale_mode="major"))
    assert minor.events[0].pitches == ("C4",)
    assert major.events[0].pitches == ("C#4",)
    assert cache_info().misses == 2


def test_clear_all_caches():
    cached_map_text("abc")
    clear_all_caches()
    assert cache_info().currsize == 0


def test_dict_config_shares_entry():
    from_dict = cached_map_text("abc", {"mode": "letters_only"})
    from_model = cached_map_text("abc", MappingConfig(mode=Mode.LETTERS_ONLY))
    assert from_dict is from_model
    assert cache_info().misses == 1


def test_invalid_dict_config_raises():
    with pytest.raises(ConfigurationError):
        cached_map_text("abc", {"target_seconds": 0})
