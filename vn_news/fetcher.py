from __future__ import annotations

import asyncio
import functools
import logging
from concurrent.futures import Executor
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import feedparser
import requests

from .exceptions import FeedFetchError
from .models import NewsItem
from .normalizer import to_news_item
from .parser import parse_entry

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (compatible; MCP-RSS-Bot/1.0)"
FETCH_TIMEOUT = 10
MAX_ITEMS_PER_FEED = 10


def fetch_feed_entries(
    url: str,
    *,
    timeout: float = FETCH_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> List[Dict[str, Any]]:
    """
    Fetch a single feed URL and return its entries in feed order.

    Raises FeedFetchError on network/HTTP errors, timeouts, or when the
    document is malformed (bozo) and yields no entries.
    """
    http = session or requests
    try:
        response = http.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        raise FeedFetchError(f"Timed out after {timeout}s fetching feed: {url}") from e
    except requests.exceptions.RequestException as e:
        raise FeedFetchError(f"Failed to fetch feed: {url} ({e})") from e

    feed = feedparser.parse(response.content)
    entries = getattr(feed, "entries", None)

    if getattr(feed, "bozo", 0):
        exc = getattr(feed, "bozo_exception", None)
        if not entries:
            msg = f"Invalid RSS/Atom feed: {url}"
            if exc:
                msg += f" ({exc})"
            raise FeedFetchError(msg)
        logger.debug("Feed parsing warning for %s: %s", url, exc)

    if not isinstance(entries, list):
        raise FeedFetchError(f"Feed has no entries: {url}")
    return entries


async def fetch_feed(
    url: str,
    source_name: str,
    category: str,
    *,
    limit: int = MAX_ITEMS_PER_FEED,
    session: Optional[requests.Session] = None,
    executor: Optional[Executor] = None,
) -> List[NewsItem]:
    """
    Fetch one feed and normalize its first `limit` entries.

    The blocking download and parse run on `executor` (the loop default when
    None). Never raises: any failure is logged and the feed contributes
    nothing, so one broken outlet cannot abort an aggregation.
    """
    try:
        loop = asyncio.get_running_loop()
        entries = await loop.run_in_executor(
            executor, functools.partial(fetch_feed_entries, url, session=session)
        )
        fetched_at = datetime.now(timezone.utc)
        return [
            to_news_item(
                parse_entry(entry),
                source_name=source_name,
                category=category,
                fetched_at=fetched_at,
            )
            for entry in entries[:limit]
        ]
    except Exception as e:
        logger.error("Error fetching %s %s: %s", source_name, category, e)
        return []
