from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .models import NewsItem


def to_news_item(
    entry: Dict[str, Any],
    *,
    source_name: str,
    category: str,
    fetched_at: Optional[datetime] = None,
) -> NewsItem:
    """
    Convert a parsed entry dict into a NewsItem.

    Entries without a date are stamped with `fetched_at` (now, if not given).
    """
    published_at = entry.get("published_at")
    if not published_at:
        when = fetched_at or datetime.now(timezone.utc)
        published_at = when.isoformat()

    return NewsItem(
        title=entry.get("title") or "",
        link=entry.get("link") or "",
        published_at=published_at,
        source_name=source_name,
        category=category,
        summary=entry.get("summary") or "",
    )
