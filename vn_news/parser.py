from __future__ import annotations

import calendar
import html
import re
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

DEFAULT_TITLE = "No title"

_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")


def strip_html(text: str) -> str:
    """Reduce an HTML fragment to a single line of plain text."""
    if not text:
        return ""
    clean = _TAG_RE.sub(" ", text)
    clean = html.unescape(clean)
    return _WS_RE.sub(" ", clean).strip()


def _to_iso(entry: Dict[str, Any]) -> Optional[str]:
    """
    Convert feed entry date fields to an ISO-8601 UTC string.
    Priority: published_parsed -> updated_parsed -> created_parsed -> raw string -> None.
    """
    for key in ("published_parsed", "updated_parsed", "created_parsed"):
        val = entry.get(key)
        if isinstance(val, time.struct_time):
            try:
                # feedparser normalizes *_parsed to UTC
                ts = calendar.timegm(val)
                return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()
            except (OverflowError, ValueError):
                continue
    # feedparser could not parse the date; keep the raw text so it still shows up
    for key in ("published", "updated", "created"):
        raw = entry.get(key)
        if isinstance(raw, str) and raw.strip():
            return raw.strip()
    return None


def _get_summary(entry: Dict[str, Any]) -> str:
    for key in ("summary", "description"):
        val = entry.get(key)
        if isinstance(val, str) and val.strip():
            return strip_html(val)
    content = entry.get("content")
    if isinstance(content, list) and content:
        first = content[0]
        if isinstance(first, dict):
            return strip_html(first.get("value") or "")
    return ""


def parse_entry(entry: Dict[str, Any]) -> Dict[str, Any]:
    """
    Map a raw feed entry (from feedparser) to a dict with explicit defaults.

    Fields:
    - title: stripped text, "No title" when missing or blank
    - link: stripped text, "" when missing
    - published_at: ISO-8601 string, raw date text, or None when the entry has no date
    - summary: plain-text snippet, "" when unavailable
    """
    title = entry.get("title")
    title = title.strip() if isinstance(title, str) else ""
    link = entry.get("link")
    link = link.strip() if isinstance(link, str) else ""

    return {
        "title": title or DEFAULT_TITLE,
        "link": link,
        "published_at": _to_iso(entry),
        "summary": _get_summary(entry),
    }
