from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Awaitable, Callable, Iterable, List, Optional

from .fetcher import fetch_feed
from .models import NewsItem
from .sources import DEFAULT_REGISTRY, SourceRegistry

logger = logging.getLogger(__name__)

# fetch(url, source_name, category, *, executor) -> items
FeedFetch = Callable[..., Awaitable[List[NewsItem]]]


class NewsAggregator:
    """
    High-level API: fan out one feed fetch per (source, category) pair and
    merge the results into a single newest-first list.

    Pipeline: resolve pairs → fetch all concurrently → flatten → sort (newest first) → limit
    """

    def __init__(
        self,
        registry: Optional[SourceRegistry] = None,
        fetch: Optional[FeedFetch] = None,
    ) -> None:
        self.registry = registry if registry is not None else DEFAULT_REGISTRY
        self._fetch = fetch or fetch_feed

    def resolve(self, source_keys: Iterable[str], category_keys: Iterable[str]) -> List[tuple]:
        """
        Return (url, source_name, category) for every pair the registry knows.
        Unknown source or category keys are skipped.
        """
        categories = list(category_keys)
        pairs = []
        for source_key in source_keys:
            source = self.registry.lookup(source_key)
            if source is None:
                continue
            for category in categories:
                url = source.feed_url(category)
                if url:
                    pairs.append((url, source.name, category))
        return pairs

    async def aggregate(
        self,
        source_keys: Iterable[str],
        category_keys: Iterable[str],
        limit: int,
    ) -> List[NewsItem]:
        """
        Fetch every valid pair, wait for all of them, and return at most
        `limit` items sorted by publish time, most recent first.

        `limit` is trusted as given; callers clamp it.
        """
        pairs = self.resolve(source_keys, category_keys)
        logger.debug("Aggregating %d feeds", len(pairs))
        if not pairs:
            return []

        # One worker per feed so no fetch queues behind another's timeout
        with ThreadPoolExecutor(max_workers=len(pairs), thread_name_prefix="feed") as pool:
            # Each fetch swallows its own failure, so the join always completes
            results = await asyncio.gather(
                *(
                    self._fetch(url, name, category, executor=pool)
                    for url, name, category in pairs
                )
            )
        items = [item for batch in results for item in batch]

        # Stable sort: equal timestamps keep merge order
        items.sort(key=lambda x: x.timestamp(), reverse=True)
        return items[:limit]

