"""
In-memory cache for resolved breed image URLs.
"""

import time
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from loguru import logger


class BreedImageCache:
    """
    Bounded, expiring mapping from ``species_breed`` keys to image URLs.

    Entries are evicted least-recently-used first once ``max_size`` is reached
    and are treated as absent after ``ttl`` seconds. Concurrent lookups for the
    same missing key are not merged; each caller may hit the network.
    """

    def __init__(
        self,
        max_size: int = 256,
        ttl: float = 3600,
        timer: Callable[[], float] = time.monotonic,
    ):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self.ttl = ttl
        self._timer = timer
        self._entries: "OrderedDict[str, Tuple[str, float]]" = OrderedDict()

    @staticmethod
    def make_key(species: str, breed: str) -> str:
        """Cache key for a species and breed, e.g. ``dog_Golden Retriever``."""
        return f"{str(species).lower()}_{breed}"

    def lookup(self, key: str) -> Optional[str]:
        """
        Get a cached image URL.

        Args:
            key: Cache key from ``make_key``

        Returns:
            Image URL, or None if missing or expired
        """
        entry = self._entries.get(key)
        if entry is None:
            logger.debug(f"Breed image cache MISS for key: {key}")
            return None

        url, stored_at = entry
        if self.ttl and self._timer() - stored_at >= self.ttl:
            logger.debug(f"Breed image cache entry expired for key: {key}")
            del self._entries[key]
            return None

        self._entries.move_to_end(key)
        logger.debug(f"Breed image cache HIT for key: {key}")
        return url

    def store(self, key: str, url: str) -> None:
        """
        Cache an image URL, replacing any previous value for the key.

        Args:
            key: Cache key from ``make_key``
            url: Resolved image URL
        """
        self._entries[key] = (url, self._timer())
        self._entries.move_to_end(key)

        while len(self._entries) > self.max_size:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Breed image cache evicted key: {evicted}")

    def clear(self) -> None:
        self._entries.clear()
        logger.info("Breed image cache cleared")

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.lookup(key) is not None
