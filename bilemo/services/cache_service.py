"""
In-process, tag-aware cache used to serve list pages.

Entries are computed on first access through a callback which can attach
tags to the entry.  Invalidating a tag drops every entry carrying it, which
is how a write to an entity discards all of that entity's cached pages.
"""

from typing import Any, Callable, Dict, Iterable, List, Set

from bilemo.config import config
from bilemo.utils.verbosity_logger import get_logger, sanitize_log

logger = get_logger("bilemo.services.cache")


class CacheItem:
    """
    Handle passed to the compute callback of TagAwareCache.get().
    """

    def __init__(self, key: str):
        self.key = key
        self.tags: Set[str] = set()

    def tag(self, *tags: str) -> "CacheItem":
        """Attach one or more tags to the entry being computed."""
        self.tags.update(tags)
        return self


class TagAwareCache:
    """
    Key/value cache with bulk invalidation by tag.
    """

    def __init__(self):
        self._values: Dict[str, Any] = {}
        self._tags_by_key: Dict[str, Set[str]] = {}
        self._keys_by_tag: Dict[str, Set[str]] = {}

    def get(self, key: str, compute: Callable[[CacheItem], Any]) -> Any:
        """
        Return the cached value for key, computing and storing it on a miss.

        When the cache is disabled in the configuration the value is always
        computed and never stored.
        """
        if not config.is_cache_enabled():
            return compute(CacheItem(key))

        if key in self._values:
            logger.debug("Cache hit for %s", sanitize_log(key))
            return self._values[key]

        logger.debug("Cache miss for %s", sanitize_log(key))
        item = CacheItem(key)
        value = compute(item)
        self._store(key, value, item.tags)
        return value

    def _store(self, key: str, value: Any, tags: Set[str]):
        self._values[key] = value
        self._tags_by_key[key] = set(tags)
        for tag in tags:
            self._keys_by_tag.setdefault(tag, set()).add(key)

    def delete(self, key: str):
        """Drop a single entry."""
        self._values.pop(key, None)
        for tag in self._tags_by_key.pop(key, set()):
            keys = self._keys_by_tag.get(tag)
            if keys is not None:
                keys.discard(key)
                if not keys:
                    del self._keys_by_tag[tag]

    def invalidate_tags(self, tags: Iterable[str]) -> int:
        """
        Drop every entry carrying any of the tags.  Returns the number of
        entries removed.
        """
        removed = 0
        for tag in tags:
            for key in list(self._keys_by_tag.get(tag, set())):
                self.delete(key)
                removed += 1
            self._keys_by_tag.pop(tag, None)
            logger.debug("Invalidated cache tag %s", sanitize_log(tag))
        return removed

    def clear(self):
        """Drop everything."""
        self._values.clear()
        self._tags_by_key.clear()
        self._keys_by_tag.clear()

    def keys(self) -> List[str]:
        """Return the keys currently cached."""
        return list(self._values.keys())

    def __contains__(self, key: str) -> bool:
        return key in self._values


# Shared cache instance for the whole process
tag_aware_cache = TagAwareCache()
