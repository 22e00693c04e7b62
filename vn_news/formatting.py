"""Render aggregated news and the source catalog as plain-text tool output."""
from __future__ import annotations

import json
from typing import List, Sequence
from zoneinfo import ZoneInfo

from .models import NewsItem
from .sources import SourceRegistry

DISPLAY_TZ = ZoneInfo("Asia/Ho_Chi_Minh")
SUMMARY_MAX_CHARS = 150
EMPTY_RESULT_MESSAGE = "⚠️ Không lấy được tin tức. Vui lòng thử lại sau."
ITEM_DIVIDER = "---\n\n"


def format_local_time(item: NewsItem) -> str:
    """Vietnamese-locale date/time, e.g. "14:05:09 7/3/2026", in Vietnam time."""
    dt = item.published_datetime()
    if dt is None:
        return "Invalid Date"
    try:
        local = dt.astimezone(DISPLAY_TZ)
    except OverflowError:
        return "Invalid Date"
    return f"{local:%H:%M:%S} {local.day}/{local.month}/{local.year}"


def format_item(index: int, item: NewsItem) -> str:
    lines = [
        f"{index}. **{item.title}**",
        f"   📰 {item.source_name} | 📂 {item.category}",
        f"   🕐 {format_local_time(item)}",
        f"   🔗 {item.link}",
    ]
    if item.summary:
        lines.append(f"   📝 {item.summary[:SUMMARY_MAX_CHARS]}...")
    return "\n".join(lines) + "\n\n"


def format_digest(items: Sequence[NewsItem]) -> str:
    """Numbered digest with a header; returns the warning text when empty."""
    if not items:
        return EMPTY_RESULT_MESSAGE
    blocks = [format_item(i, item) for i, item in enumerate(items, start=1)]
    return f"# 📰 Tin tức Việt Nam ({len(items)} tin)\n\n" + ITEM_DIVIDER.join(blocks)


def source_listing(registry: SourceRegistry) -> List[dict]:
    return [
        {"id": src.key, "name": src.name, "categories": src.categories}
        for src in registry.list_all()
    ]


def format_sources(registry: SourceRegistry) -> str:
    return json.dumps(source_listing(registry), ensure_ascii=False, indent=2)
