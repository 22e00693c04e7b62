from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 (or RFC 822, as found in raw RSS dates) string into an
    aware UTC datetime. Naive values are taken as UTC; anything unparsable
    yields None.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        try:
            dt = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except OverflowError:
        # e.g. 0001-01-01T00:00:00+01:00 falls before datetime.min in UTC
        return None


@dataclass(frozen=True)
class NewsItem:
    """
    A normalized headline taken from one (source, category) feed.

    `source_name` is the outlet's display name, not its registry key.
    """
    title: str
    link: str
    published_at: str
    source_name: str
    category: str
    summary: str = ""

    def published_datetime(self) -> Optional[datetime]:
        return parse_timestamp(self.published_at)

    def timestamp(self) -> datetime:
        """Sort key: unparsable dates count as the Unix epoch (oldest)."""
        return self.published_datetime() or EPOCH
