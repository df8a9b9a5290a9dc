"""
YouTube API integration module
"""

from .batch_fetcher import VideoBatchFetcher
from .channel_names import ChannelNameResolver
from .subscription import Subscription
from .video import Video
from .video_cache import VideoCache
from .youtube_client import YouTubeClient

__all__ = [
    "ChannelNameResolver",
    "Subscription",
    "Video",
    "VideoBatchFetcher",
    "VideoCache",
    "YouTubeClient",
]
