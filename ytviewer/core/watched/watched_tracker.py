"""
Watched Tracker
Persisted set of video IDs the user has already played.
"""

import logging
from typing import Dict, Iterable, List, Tuple

from ..youtube.video import Video

logger = logging.getLogger(__name__)


class WatchedTracker:
    """
    Read side is used to annotate video listings, write side runs once per
    successful playback. The store is written before the in-memory set, so
    a video only shows as watched once that fact is on disk.
    """

    def __init__(self, store):
        self._store = store
        self._watched: Dict[str, bool] = store.load()
        logger.debug(f"Loaded {len(self._watched)} watched videos")

    def is_watched(self, video_id: str) -> bool:
        return self._watched.get(video_id, False)

    def mark_watched(self, video_id: str) -> None:
        """
        Raises:
            PersistenceError: If the store could not be written.
        """
        if self.is_watched(video_id):
            return

        updated = dict(self._watched)
        updated[video_id] = True
        self._store.save(updated)
        self._watched = updated
        logger.info(f"Marked {video_id} as watched")

    def annotate(self, videos: Iterable[Video]) -> List[Tuple[Video, bool]]:
        return [(video, self.is_watched(video.video_id)) for video in videos]
