from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from vn_news.models import NewsItem  # noqa: E402
from vn_news.sources import SourceDescriptor, SourceRegistry  # noqa: E402


def make_item(published_at: str, *, title: str = "Tin", source_name: str = "A", category: str = "home") -> NewsItem:
    return NewsItem(
        title=title,
        link=f"https://example.com/{title}",
        published_at=published_at,
        source_name=source_name,
        category=category,
    )


@pytest.fixture
def small_registry() -> SourceRegistry:
    return SourceRegistry(
        [
            SourceDescriptor(key="A", name="Source A", feeds={"home": "https://a.test/home.rss"}),
            SourceDescriptor(key="B", name="Source B", feeds={"home": "https://b.test/home.rss"}),
        ]
    )
