"""
Application Configuration Model
Represents a validated configuration state
"""

from typing import List, Optional


class MpvOptions:
    """Player settings from the ``mpv_options`` section."""

    def __init__(
        self,
        max_resolution: str = "1080",
        mark_as_watched: bool = True
    ):
        self.max_resolution = max_resolution
        self.mark_as_watched = mark_as_watched

    def __repr__(self) -> str:
        return (
            f"MpvOptions(max_resolution={self.max_resolution!r}, "
            f"mark_as_watched={self.mark_as_watched})"
        )


class AppConfig:
    """
    Immutable configuration object for ytviewer.

    Represents a VALID configuration state only.
    All validation must be performed before instantiation.
    """

    def __init__(
        self,
        api_key: str,
        subscriptions: List[str],
        max_videos: int = 5,
        cache_duration: int = 30,
        mpv_options: Optional[MpvOptions] = None
    ):
        """
        Initialize AppConfig with validated values.

        Args:
            api_key: YouTube API key (non-empty)
            subscriptions: Subscribed channel IDs, in display order
            max_videos: Videos fetched per channel (1 - 50)
            cache_duration: Video cache lifetime in minutes (>= 0)
            mpv_options: Player settings
        """
        self._api_key = api_key
        self._subscriptions = list(subscriptions)
        self._max_videos = max_videos
        self._cache_duration = cache_duration
        self._mpv_options = mpv_options or MpvOptions()

    @property
    def api_key(self) -> str:
        """YouTube API key."""
        return self._api_key

    @property
    def subscriptions(self) -> List[str]:
        """Subscribed channel IDs at load time."""
        return list(self._subscriptions)

    @property
    def max_videos(self) -> int:
        """Maximum number of videos fetched per channel."""
        return self._max_videos

    @property
    def cache_duration(self) -> int:
        """Video cache lifetime in minutes."""
        return self._cache_duration

    @property
    def cache_ttl_seconds(self) -> int:
        return self._cache_duration * 60

    @property
    def mpv_options(self) -> MpvOptions:
        return self._mpv_options

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"AppConfig(subscriptions={len(self._subscriptions)}, "
            f"max_videos={self.max_videos}, "
            f"cache_duration={self.cache_duration}, "
            f"mpv_options={self.mpv_options!r})"
        )
