"""
Subscription Domain Model
Enriched metadata for one subscribed channel.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .video import pick_thumbnail


@dataclass(frozen=True)
class Subscription:
    """
    Domain model representing a subscribed channel with its statistics.
    Represents a channel the API confirmed to exist.
    """
    channel_id: str
    title: str
    description: str = ""
    subscriber_count: int = 0
    video_count: int = 0
    thumbnail: str = ""

    @classmethod
    def from_api_item(cls, channel_id: str, item: Dict[str, Any]) -> "Subscription":
        """Builds a Subscription from a channels.list item (snippet,statistics)."""
        snippet = item.get("snippet", {})
        statistics = item.get("statistics", {})
        return cls(
            channel_id=channel_id,
            title=snippet.get("title", "Unknown"),
            description=snippet.get("description", ""),
            subscriber_count=int(statistics.get("subscriberCount", 0)),
            video_count=int(statistics.get("videoCount", 0)),
            thumbnail=pick_thumbnail(snippet.get("thumbnails")),
        )

    def __repr__(self) -> str:
        return f"Subscription(title={self.title!r}, id={self.channel_id!r})"
