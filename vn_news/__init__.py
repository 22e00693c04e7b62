"""
vn_news

An MCP tool server that aggregates the latest headlines from Vietnamese news
outlets' RSS feeds.

Core ideas:
- Input: source keys (vnexpress, tuoitre, ...) and category keys (home, tech, ...)
- Process: resolve feeds → fetch concurrently → normalize → sort (newest first) → limit
- Output: List[NewsItem], rendered as a text digest for MCP clients

Example
-------
import asyncio
from vn_news import NewsAggregator

aggregator = NewsAggregator()
news = asyncio.run(aggregator.aggregate(["vnexpress", "tuoitre"], ["tech"], limit=5))

for item in news:
    print(item.published_at, item.source_name, item.title)
"""
from .models import NewsItem
from .core import NewsAggregator
from .sources import DEFAULT_REGISTRY, SourceDescriptor, SourceRegistry

__all__ = [
    "NewsItem",
    "NewsAggregator",
    "DEFAULT_REGISTRY",
    "SourceDescriptor",
    "SourceRegistry",
]
