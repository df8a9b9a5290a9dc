"""
Feed Aggregator
The single long-lived object that owns every cache and collaborator.
"""

import logging
import time
from typing import Callable, List, Tuple

from .core.config import AppConfig, ConfigLoader
from .core.player import VideoPlayer
from .core.subscriptions import SubscriptionInfoCache, SubscriptionRegistry
from .core.watched import WatchedTracker
from .core.youtube import (
    ChannelNameResolver,
    Subscription,
    Video,
    VideoBatchFetcher,
    VideoCache,
    YouTubeClient,
)
from .shared.storage.storage_manager import WatchedStore

logger = logging.getLogger(__name__)


class FeedAggregator:
    """
    Entry point for the UI layer.

    Build one instance per process with from_config() and pass it to
    whatever needs it. All caches live on this instance; nothing is shared
    through module state.
    """

    def __init__(
        self,
        youtube_client,
        subscriptions: List[str],
        persist_subscriptions: Callable[[List[str]], None],
        watched_store,
        player: VideoPlayer,
        max_per_channel: int = 5,
        ttl_seconds: float = 30 * 60,
        mark_on_play: bool = True,
        clock: Callable[[], float] = time.time
    ):
        self._names = ChannelNameResolver(youtube_client)
        self._registry = SubscriptionRegistry(
            youtube_client, self._names, persist_subscriptions, subscriptions
        )
        self._subscription_info = SubscriptionInfoCache(youtube_client, self._registry, self._names)
        self._registry.on_change(self._subscription_info.invalidate)

        fetcher = VideoBatchFetcher(youtube_client, self._names)
        self._videos = VideoCache(fetcher, self._registry, ttl_seconds, max_per_channel, clock=clock)

        self._watched = WatchedTracker(watched_store)
        self._player = player
        self._mark_on_play = mark_on_play

    @classmethod
    def from_config(cls, config: AppConfig, loader: ConfigLoader, watched_store: WatchedStore) -> "FeedAggregator":
        """Wires the real API client, player and stores from a validated config."""
        return cls(
            youtube_client=YouTubeClient(config.api_key),
            subscriptions=config.subscriptions,
            persist_subscriptions=loader.save_subscriptions,
            watched_store=watched_store,
            player=VideoPlayer(max_resolution=config.mpv_options.max_resolution),
            max_per_channel=config.max_videos,
            ttl_seconds=config.cache_ttl_seconds,
            mark_on_play=config.mpv_options.mark_as_watched
        )

    # Videos

    def get_latest_videos(self) -> List[Video]:
        return self._videos.get_latest()

    def get_latest_with_watched(self) -> List[Tuple[Video, bool]]:
        return self._watched.annotate(self._videos.get_latest())

    def clear_video_cache(self) -> None:
        self._videos.clear()

    # Subscriptions

    def subscriptions(self) -> List[str]:
        return self._registry.list()

    def get_subscription_info(self) -> List[Subscription]:
        return self._subscription_info.get()

    def add_subscription(self, channel_id: str) -> None:
        self._registry.add(channel_id)

    def remove_subscription(self, channel_id: str) -> None:
        self._registry.remove(channel_id)

    # Watched state and playback

    def is_watched(self, video_id: str) -> bool:
        return self._watched.is_watched(video_id)

    def mark_watched(self, video_id: str) -> None:
        self._watched.mark_watched(video_id)

    def play_video(self, video_id: str) -> None:
        """
        Starts the external player; when enabled, the video is marked as
        watched once the player process has been launched.

        Raises:
            PlaybackError: If the player could not be started.
            PersistenceError: If the watched store could not be written.
        """
        self._player.play(video_id)
        if self._mark_on_play:
            self._watched.mark_watched(video_id)
