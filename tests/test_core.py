"""Tests for the concurrent aggregation pipeline."""
import asyncio
import threading
import time

from conftest import make_item
from vn_news import fetcher
from vn_news.core import NewsAggregator
from vn_news.models import EPOCH
from vn_news.sources import ALL_CATEGORIES, SOURCE_KEYS, SourceDescriptor, SourceRegistry


class RecordingFetch:
    """Stands in for fetch_feed: returns canned items per URL and records calls."""

    def __init__(self, by_url=None, fail_urls=()):
        self.by_url = by_url or {}
        self.fail_urls = set(fail_urls)
        self.calls = []

    async def __call__(self, url, source_name, category, executor=None):
        self.calls.append((url, source_name, category))
        await asyncio.sleep(0)
        if url in self.fail_urls:
            return []
        return [
            make_item(ts, title=f"{source_name}-{ts}", source_name=source_name, category=category)
            for ts in self.by_url.get(url, [])
        ]


T0 = "2026-10-17T00:00:00+00:00"
T1 = "2026-10-17T01:00:00+00:00"
T2 = "2026-10-17T02:00:00+00:00"
T3 = "2026-10-17T03:00:00+00:00"
T4 = "2026-10-17T04:00:00+00:00"


def test_merges_two_sources_by_recency(small_registry):
    fetch = RecordingFetch(
        {
            "https://a.test/home.rss": [T3, T2, T1],
            "https://b.test/home.rss": [T4, T0],
        }
    )
    agg = NewsAggregator(small_registry, fetch)
    items = asyncio.run(agg.aggregate(["A", "B"], ["home"], 5))

    assert [it.published_at for it in items] == [T4, T3, T2, T1, T0]
    assert len(fetch.calls) == 2


def test_items_carry_display_name_and_category(small_registry):
    fetch = RecordingFetch({"https://a.test/home.rss": [T1]})
    items = asyncio.run(NewsAggregator(small_registry, fetch).aggregate(["A"], ["home"], 10))
    assert items[0].source_name == "Source A"
    assert items[0].category == "home"


def test_limit_truncates_after_sort(small_registry):
    fetch = RecordingFetch(
        {
            "https://a.test/home.rss": [T1, T0],
            "https://b.test/home.rss": [T4, T3, T2],
        }
    )
    items = asyncio.run(NewsAggregator(small_registry, fetch).aggregate(["A", "B"], ["home"], 2))
    assert [it.published_at for it in items] == [T4, T3]


def test_unknown_keys_issue_no_fetches(small_registry):
    fetch = RecordingFetch({"https://a.test/home.rss": [T1]})
    agg = NewsAggregator(small_registry, fetch)
    items = asyncio.run(agg.aggregate(["A", "nope"], ["home", "sports"], 10))

    assert fetch.calls == [("https://a.test/home.rss", "Source A", "home")]
    assert len(items) == 1


def test_one_fetch_per_valid_pair():
    registry = SourceRegistry(
        [
            SourceDescriptor("x", "X", {"home": "u1", "tech": "u2"}),
            SourceDescriptor("y", "Y", {"home": "u3"}),
        ]
    )
    fetch = RecordingFetch()
    asyncio.run(NewsAggregator(registry, fetch).aggregate(["x", "y"], ["home", "tech"], 20))
    assert sorted(c[0] for c in fetch.calls) == ["u1", "u2", "u3"]


def test_failed_feed_contributes_nothing(small_registry):
    fetch = RecordingFetch(
        {"https://a.test/home.rss": [T1], "https://b.test/home.rss": [T2]},
        fail_urls={"https://b.test/home.rss"},
    )
    items = asyncio.run(NewsAggregator(small_registry, fetch).aggregate(["A", "B"], ["home"], 10))
    assert [it.source_name for it in items] == ["Source A"]


def test_unparsable_dates_sort_last_and_ties_are_stable(small_registry):
    fetch = RecordingFetch(
        {
            "https://a.test/home.rss": ["garbage", T1, T1],
            "https://b.test/home.rss": [T2],
        }
    )
    items = asyncio.run(NewsAggregator(small_registry, fetch).aggregate(["A", "B"], ["home"], 10))
    assert [it.published_at for it in items] == [T2, T1, T1, "garbage"]


def test_fetches_run_concurrently(small_registry):
    started = []
    async def scenario():
        gate = asyncio.Event()

        async def fetch(url, source_name, category, executor=None):
            started.append(url)
            if len(started) == 2:
                gate.set()
            # Deadlocks (and times out) if fetches were awaited one at a time
            await asyncio.wait_for(gate.wait(), timeout=1)
            return [make_item(T1, source_name=source_name, category=category)]

        return await NewsAggregator(small_registry, fetch).aggregate(["A", "B"], ["home"], 10)

    items = asyncio.run(scenario())
    assert len(items) == 2


def test_empty_when_no_valid_pairs(small_registry):
    fetch = RecordingFetch()
    assert asyncio.run(NewsAggregator(small_registry, fetch).aggregate([], ["home"], 10)) == []
    assert fetch.calls == []


def test_every_feed_of_the_full_catalog_runs_at_once(monkeypatch):
    pairs = NewsAggregator().resolve(SOURCE_KEYS, ALL_CATEGORIES)
    assert len(pairs) == 27
    barrier = threading.Barrier(len(pairs), timeout=5)

    def blocking_entries(url, **kwargs):
        # Returns only once every feed's worker is blocked here at the same time
        barrier.wait()
        return [{"title": url, "link": url}]

    monkeypatch.setattr(fetcher, "fetch_feed_entries", blocking_entries)
    items = asyncio.run(NewsAggregator().aggregate(SOURCE_KEYS, ALL_CATEGORIES, 100))

    assert len(items) == 27
    assert {it.link for it in items} == {url for url, _, _ in pairs}


def test_slow_feeds_overlap_instead_of_queueing(monkeypatch):
    def slow_entries(url, **kwargs):
        time.sleep(0.5)
        return []

    monkeypatch.setattr(fetcher, "fetch_feed_entries", slow_entries)
    start = time.monotonic()
    asyncio.run(NewsAggregator().aggregate(SOURCE_KEYS, ALL_CATEGORIES, 20))
    elapsed = time.monotonic() - start

    assert elapsed < 1.5


def test_out_of_range_date_does_not_abort_aggregation(monkeypatch):
    def entries(url, **kwargs):
        return [
            {"title": "cổ", "link": "https://a.test/old", "published": "0001-01-01T00:00:00+01:00"},
            {"title": "mới", "link": "https://a.test/new", "published": "2026-10-17T04:00:00+00:00"},
        ]

    monkeypatch.setattr(fetcher, "fetch_feed_entries", entries)
    registry = SourceRegistry([SourceDescriptor("A", "Source A", {"home": "https://a.test/home.rss"})])
    items = asyncio.run(NewsAggregator(registry).aggregate(["A"], ["home"], 10))

    assert [it.title for it in items] == ["mới", "cổ"]
    assert items[1].timestamp() == EPOCH
