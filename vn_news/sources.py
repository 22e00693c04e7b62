"""
RSS feed catalog for Vietnamese news outlets.

Each source key maps to a display name and its per-category feed URLs.
The catalog is built once at import time and never mutated.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class SourceDescriptor:
    key: str
    name: str
    feeds: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Freeze the feed mapping so descriptors stay read-only after construction
        object.__setattr__(self, "feeds", MappingProxyType(dict(self.feeds)))

    @property
    def categories(self) -> List[str]:
        return list(self.feeds)

    def feed_url(self, category: str) -> Optional[str]:
        return self.feeds.get(category)


class SourceRegistry:
    """Read-only, insertion-ordered lookup of SourceDescriptor by key."""

    def __init__(self, sources: Iterable[SourceDescriptor]) -> None:
        by_key = {}
        for src in sources:
            if src.key in by_key:
                raise ValueError(f"Duplicate source key: {src.key}")
            by_key[src.key] = src
        self._sources = MappingProxyType(by_key)

    def lookup(self, key: str) -> Optional[SourceDescriptor]:
        if not isinstance(key, str):
            return None
        return self._sources.get(key)

    def list_all(self) -> Tuple[SourceDescriptor, ...]:
        return tuple(self._sources.values())

    def keys(self) -> List[str]:
        return list(self._sources)

    def category_keys(self) -> List[str]:
        seen: List[str] = []
        for src in self._sources.values():
            for cat in src.feeds:
                if cat not in seen:
                    seen.append(cat)
        return seen


VIETNAMESE_NEWS_SOURCES = [
    SourceDescriptor(
        key="vnexpress",
        name="VnExpress",
        feeds={
            "home": "https://vnexpress.net/rss/tin-moi-nhat.rss",
            "news": "https://vnexpress.net/rss/thoi-su.rss",
            "world": "https://vnexpress.net/rss/the-gioi.rss",
            "business": "https://vnexpress.net/rss/kinh-doanh.rss",
            "tech": "https://vnexpress.net/rss/so-hoa.rss",
            "sports": "https://vnexpress.net/rss/the-thao.rss",
        },
    ),
    SourceDescriptor(
        key="tuoitre",
        name="Tuổi Trẻ",
        feeds={
            "home": "https://tuoitre.vn/rss/tin-moi-nhat.rss",
            "news": "https://tuoitre.vn/rss/thoi-su.rss",
            "world": "https://tuoitre.vn/rss/the-gioi.rss",
            "business": "https://tuoitre.vn/rss/kinh-doanh.rss",
            "tech": "https://tuoitre.vn/rss/nhip-song-so.rss",
        },
    ),
    SourceDescriptor(
        key="thanhnien",
        name="Thanh Niên",
        feeds={
            "home": "https://thanhnien.vn/rss/home.rss",
            "news": "https://thanhnien.vn/rss/thoi-su.rss",
            "world": "https://thanhnien.vn/rss/the-gioi.rss",
            "business": "https://thanhnien.vn/rss/tai-chinh-kinh-doanh.rss",
            "tech": "https://thanhnien.vn/rss/cong-nghe.rss",
        },
    ),
    SourceDescriptor(
        key="dantri",
        name="Dân Trí",
        feeds={
            "home": "https://dantri.com.vn/rss/trang-chinh.rss",
            "news": "https://dantri.com.vn/rss/xa-hoi.rss",
            "world": "https://dantri.com.vn/rss/the-gioi.rss",
            "business": "https://dantri.com.vn/rss/kinh-doanh.rss",
            "tech": "https://dantri.com.vn/rss/suc-manh-so.rss",
        },
    ),
    SourceDescriptor(
        key="zingnews",
        name="Zing News",
        feeds={
            "home": "https://zingnews.vn/rss",
            "news": "https://zingnews.vn/tin-tuc.rss",
            "tech": "https://zingnews.vn/cong-nghe.rss",
            "business": "https://zingnews.vn/kinh-doanh-tai-chinh.rss",
        },
    ),
]

DEFAULT_REGISTRY = SourceRegistry(VIETNAMESE_NEWS_SOURCES)

SOURCE_KEYS = tuple(DEFAULT_REGISTRY.keys())
ALL_CATEGORIES = ("home", "news", "world", "business", "tech", "sports")
