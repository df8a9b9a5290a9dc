"""
Video Cache
TTL-gated aggregate of the latest videos across all subscriptions.
"""

import logging
import time
from typing import Callable, Dict, List

from .batch_fetcher import VideoBatchFetcher
from .video import Video
from .youtube_client import MAX_IDS_PER_CALL

logger = logging.getLogger(__name__)


class VideoCache:
    """
    Holds the most recent videos per channel and rebuilds them when stale.

    ``last_fetch`` is either 0.0 (never populated or cleared) or the
    wall-clock time of the last rebuild in which every batch succeeded.
    Channel entries are never expired individually.
    """

    def __init__(
        self,
        fetcher: VideoBatchFetcher,
        registry,
        ttl_seconds: float,
        max_per_channel: int,
        clock: Callable[[], float] = time.time
    ):
        self._fetcher = fetcher
        self._registry = registry
        self._ttl = ttl_seconds
        self._max_per_channel = max_per_channel
        self._clock = clock
        self._entries: Dict[str, List[Video]] = {}
        self._last_fetch = 0.0

    @property
    def last_fetch(self) -> float:
        return self._last_fetch

    def is_fresh(self) -> bool:
        if not self._last_fetch:
            return False
        return self._clock() - self._last_fetch < self._ttl

    def get_latest(self) -> List[Video]:
        """
        Returns every cached video, newest first.

        Serves from memory while fresh. Otherwise rebuilds from the full
        subscription list; if any batch fails the exception propagates and
        the previous entries and timestamp are kept.
        """
        if self.is_fresh():
            logger.debug("Serving latest videos from cache")
            return self._merged(self._entries)

        channel_ids = self._registry.list()
        staged: Dict[str, List[Video]] = {}

        total_batches = (len(channel_ids) + MAX_IDS_PER_CALL - 1) // MAX_IDS_PER_CALL
        for i in range(0, len(channel_ids), MAX_IDS_PER_CALL):
            batch = channel_ids[i:i + MAX_IDS_PER_CALL]
            logger.info(f"Fetching batch {i // MAX_IDS_PER_CALL + 1}/{total_batches}: {len(batch)} channels")

            for video in self._fetcher.fetch_batch(batch, self._max_per_channel):
                staged.setdefault(video.channel_id, []).append(video)

        # Promote only after every batch succeeded
        self._entries = {cid: staged[cid] for cid in channel_ids if cid in staged}
        self._last_fetch = self._clock()

        merged = self._merged(self._entries)
        logger.info(f"Video cache rebuilt: {len(merged)} videos from {len(self._entries)} channels")
        return merged

    def clear(self) -> None:
        """Drops every entry so the next get_latest() fetches remotely."""
        self._entries = {}
        self._last_fetch = 0.0
        logger.info("Video cache cleared")

    @staticmethod
    def _merged(entries: Dict[str, List[Video]]) -> List[Video]:
        videos = [video for channel_videos in entries.values() for video in channel_videos]
        # Stable: equal timestamps keep subscription/feed order
        return sorted(videos, key=lambda v: v.published_at, reverse=True)
