"""
Video Batch Fetcher
Pulls the most recent uploads for a batch of up to 50 channels.
"""

import logging
from typing import Dict, List, Sequence

from .channel_names import ChannelNameResolver
from .video import Video, parse_published_at, pick_thumbnail
from .youtube_client import MAX_IDS_PER_CALL
from ...errors import TransientAPIError, TransientLookupError

logger = logging.getLogger(__name__)


class VideoBatchFetcher:
    """
    Service responsible for fetching the latest uploads of a channel batch.

    Responsibilities:
    - Resolve every channel's uploads playlist with a single channels.list call.
    - Fetch the newest items of each uploads playlist, skipping channels that fail.
    - Backfill channel display names through the ChannelNameResolver.
    """

    def __init__(self, youtube_client, name_resolver: ChannelNameResolver):
        self._client = youtube_client
        self._names = name_resolver

    def fetch_batch(self, channel_ids: Sequence[str], max_per_channel: int) -> List[Video]:
        """
        Fetches up to ``max_per_channel`` recent videos for each channel.

        Returns:
            List[Video]: Videos grouped by channel in response order.

        Raises:
            TransientAPIError: If the uploads-playlist lookup for the batch fails.
        """
        if len(channel_ids) > MAX_IDS_PER_CALL:
            raise ValueError(f"Batch too large: {len(channel_ids)} channels (max {MAX_IDS_PER_CALL})")
        if not channel_ids:
            return []

        # 1. Uploads playlist for every channel in one call
        channels = self._client.list_channels(list(channel_ids), parts="contentDetails")

        videos: List[Video] = []
        for channel in channels:
            channel_id = channel.get("id")
            if not channel_id:
                logger.warning("Channel item without an id, skipping")
                continue
            uploads_id = channel.get("contentDetails", {}).get("relatedPlaylists", {}).get("uploads")
            if not uploads_id:
                logger.warning(f"Channel {channel_id} has no public uploads playlist, skipping")
                continue

            # 2. Per-channel failures never abort the batch
            try:
                items = self._client.list_feed_items(uploads_id, max_per_channel)
            except TransientAPIError as e:
                logger.warning(f"Error fetching videos for channel {channel_id}: {e}")
                continue

            videos.extend(self._build_videos(channel_id, items))

        # 3. Replace placeholder names
        self._backfill_names(videos)

        logger.info(f"Fetched {len(videos)} videos from {len(channels)}/{len(channel_ids)} channels")
        return videos

    def _build_videos(self, channel_id: str, items: List[Dict]) -> List[Video]:
        cached = self._names.cached_name(channel_id)
        videos = []

        for item in items:
            snippet = item.get("snippet", {})
            video_id = snippet.get("resourceId", {}).get("videoId")
            if not video_id:
                continue

            videos.append(Video(
                video_id=video_id,
                title=snippet.get("title", "Untitled"),
                channel_id=channel_id,
                channel_name=cached if cached is not None else channel_id,
                published_at=parse_published_at(snippet.get("publishedAt")),
                thumbnail=pick_thumbnail(snippet.get("thumbnails")),
                name_resolved=cached is not None
            ))
        return videos

    def _backfill_names(self, videos: List[Video]) -> None:
        """
        Resolves every still-unresolved channel in one lookup and patches the
        affected Video objects in place. Lookup failures are logged only.
        """
        unresolved = list(dict.fromkeys(v.channel_id for v in videos if not v.name_resolved))
        if not unresolved:
            return

        try:
            self._names.resolve(unresolved)
        except TransientLookupError as e:
            logger.warning(f"Error fetching channel names, keeping channel IDs: {e}")

        # Names cached by a partially failed lookup are applied as well
        for video in videos:
            if not video.name_resolved:
                name = self._names.cached_name(video.channel_id)
                if name is not None:
                    video.apply_channel_name(name)
