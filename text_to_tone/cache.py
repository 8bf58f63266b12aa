"""Caching for the text-to-tone pipeline.

Mapping is a pure function of the text and the configuration, so results can
be memoized. A player re-renders the same phrase whenever the user replays it
or toggles an option back, and those calls are served from the cache.

Both the configuration and the result are frozen models, so a cached result
can be shared between callers safely.
"""

import logging
from collections.abc import Mapping
from functools import lru_cache

from text_to_tone.models import MappingConfig, MappingResult
from text_to_tone.pipeline import map_text, resolve_config

logger = logging.getLogger(__name__)

MAPPING_CACHE_SIZE = 128


@lru_cache(maxsize=MAPPING_CACHE_SIZE)
def _cached_map_text(text: str, config: MappingConfig) -> MappingResult:
    logger.debug(f"Cache miss for {len(text)} characters in {config.mode.value}")
    return map_text(text, config)


def cached_map_text(
    text: str, config: MappingConfig | Mapping | None = None
) -> MappingResult:
    """Cached version of ``map_text``.

    Args:
        text: Raw input text.
        config: A MappingConfig, a mapping of its fields, or None for defaults.
            Mappings are validated first so that equal settings share an entry.

    Returns:
        MappingResult, identical to ``map_text(text, config)``.

    Raises:
        ConfigurationError: If the configuration is malformed.
    """
    return _cached_map_text(text, resolve_config(config))


def cache_info():
    """Return the hit/miss statistics of the mapping cache."""
    return _cached_map_text.cache_info()


def clear_all_caches() -> None:
    """Clear the mapping cache.

    Useful when memory usage becomes a concern or to force recomputation.
    """
    _cached_map_text.cache_clear()
