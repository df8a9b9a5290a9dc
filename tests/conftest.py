from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import pytest

from ytviewer.aggregator import FeedAggregator
from ytviewer.errors import PersistenceError, TransientAPIError
from ytviewer.shared.storage.storage_manager import WatchedStore


def uploads_id(channel_id: str) -> str:
    return "UU" + channel_id[2:]


def feed_item(video_id: str, published_at: str, title: Optional[str] = None) -> Dict:
    return {
        "snippet": {
            "title": title or f"Video {video_id}",
            "publishedAt": published_at,
            "resourceId": {"kind": "youtube#video", "videoId": video_id},
            "thumbnails": {"medium": {"url": f"https://i.ytimg.com/vi/{video_id}/mqdefault.jpg"}},
        }
    }


class FakeYouTubeClient:
    """In-memory stand-in for YouTubeClient that records every call."""

    def __init__(self):
        self.channels: Dict[str, Dict] = {}
        self.feeds: Dict[str, List[Dict]] = {}
        self.calls: List[tuple] = []
        self.failing_feeds: set = set()
        # parts value -> number of calls with those parts that succeed before failing
        self.fail_channels_after: Dict[str, int] = {}

    def add_channel(self, channel_id: str, title: str, videos=(), subscribers: int = 0, video_count: int = 0):
        self.channels[channel_id] = {
            "id": channel_id,
            "snippet": {
                "title": title,
                "description": f"About {title}",
                "thumbnails": {"default": {"url": f"https://yt3.ggpht.com/{channel_id}"}},
            },
            "contentDetails": {"relatedPlaylists": {"uploads": uploads_id(channel_id)}},
            "statistics": {"subscriberCount": str(subscribers), "videoCount": str(video_count)},
        }
        self.feeds[uploads_id(channel_id)] = [feed_item(vid, ts) for vid, ts in videos]

    def calls_for(self, name: str, parts: Optional[str] = None) -> List[tuple]:
        return [c for c in self.calls if c[0] == name and (parts is None or c[2] == parts)]

    def list_channels(self, channel_ids, parts):
        self.calls.append(("channels", list(channel_ids), parts))

        remaining = self.fail_channels_after.get(parts)
        if remaining is not None:
            if remaining <= 0:
                raise TransientAPIError(f"channels.list({parts}) failed")
            self.fail_channels_after[parts] = remaining - 1

        return [self.channels[cid] for cid in channel_ids if cid in self.channels]

    def list_feed_items(self, feed_id, max_results):
        self.calls.append(("feed", feed_id, max_results))
        if feed_id in self.failing_feeds:
            raise TransientAPIError(f"playlistItems.list({feed_id}) failed")
        return self.feeds.get(feed_id, [])[:max_results]


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingPersist:
    def __init__(self):
        self.saved: List[List[str]] = []
        self.fail = False

    def __call__(self, channel_ids: List[str]) -> None:
        if self.fail:
            raise PersistenceError("disk full")
        self.saved.append(list(channel_ids))


class FakePlayer:
    def __init__(self):
        self.played: List[str] = []
        self.error: Optional[Exception] = None

    def play(self, video_id: str) -> None:
        if self.error is not None:
            raise self.error
        self.played.append(video_id)


@pytest.fixture
def client() -> FakeYouTubeClient:
    return FakeYouTubeClient()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def persist() -> RecordingPersist:
    return RecordingPersist()


@pytest.fixture
def watched_store(tmp_path: Path) -> WatchedStore:
    return WatchedStore(tmp_path / "watched.json")


@pytest.fixture
def player() -> FakePlayer:
    return FakePlayer()


@pytest.fixture
def make_aggregator(client, clock, persist, watched_store, player):
    def _make(subscriptions, max_per_channel: int = 2, ttl_seconds: float = 600, mark_on_play: bool = True):
        return FeedAggregator(
            youtube_client=client,
            subscriptions=subscriptions,
            persist_subscriptions=persist,
            watched_store=watched_store,
            player=player,
            max_per_channel=max_per_channel,
            ttl_seconds=ttl_seconds,
            mark_on_play=mark_on_play,
            clock=clock,
        )
    return _make
