"""
Video Domain Model
One upload from a subscribed channel's uploads feed.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


@dataclass
class Video:
    """
    Domain model representing a single video in the aggregated feed.

    Mutable on purpose: ``channel_name`` starts out as the raw channel ID
    (``name_resolved=False``) and is corrected in place once the channel's
    display name is known.
    """
    video_id: str
    title: str
    channel_id: str
    channel_name: str
    published_at: datetime
    thumbnail: str = ""
    name_resolved: bool = False

    def apply_channel_name(self, name: str) -> None:
        """Replace the placeholder channel name with the resolved one."""
        self.channel_name = name
        self.name_resolved = True


# date, time, optional fraction, optional offset; "t"/"z" may be lowercase
RFC3339 = re.compile(
    r"^(\d{4}-\d{2}-\d{2})[Tt ](\d{2}:\d{2}:\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})?$"
)


def parse_published_at(value: Optional[str]) -> datetime:
    """
    Parses an RFC3339 timestamp as returned by the API.
    Falls back to the current time when the value is missing or malformed.
    """
    match = RFC3339.match(value.strip()) if value else None
    if match:
        date, clock, fraction, offset = match.groups()
        # fromisoformat before 3.11 only takes 3 or 6 fractional digits
        micros = (fraction or "")[:6].ljust(6, "0")
        if not offset or offset in ("Z", "z"):
            offset = "+00:00"
        try:
            return datetime.fromisoformat(f"{date}T{clock}.{micros}{offset}")
        except ValueError:
            pass
    return datetime.now(timezone.utc)


def pick_thumbnail(thumbnails: Optional[Dict[str, Any]]) -> str:
    """Medium thumbnail when available, default otherwise."""
    thumbnails = thumbnails or {}
    for size in ("medium", "default"):
        url = thumbnails.get(size, {}).get("url")
        if url:
            return url
    return ""
