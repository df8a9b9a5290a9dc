"""
Video Player
Launches mpv for a video without waiting for it to exit.
"""

import logging
import subprocess
from typing import List

from ..youtube.video import WATCH_URL
from ...errors import PlaybackError

logger = logging.getLogger(__name__)


class VideoPlayer:
    """
    Fire-and-forget wrapper around the mpv command line player.
    mpv resolves the watch URL itself through its ytdl hook.
    """

    def __init__(self, executable: str = "mpv", max_resolution: str = "1080"):
        self._executable = executable
        self._max_resolution = max_resolution

    def build_args(self, video_id: str) -> List[str]:
        height = self._max_resolution
        return [
            self._executable,
            f"--ytdl-format=bestvideo[height<={height}]+bestaudio/best[height<={height}]",
            # The video URL must be the last argument
            WATCH_URL.format(video_id=video_id),
        ]

    def play(self, video_id: str) -> None:
        """
        Raises:
            PlaybackError: If the player process could not be started.
        """
        args = self.build_args(video_id)
        logger.info(f"Executing: {' '.join(args)}")

        try:
            subprocess.Popen(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True
            )
        except OSError as e:
            logger.error(f"Error starting {self._executable}: {e}")
            raise PlaybackError(f"Could not start {self._executable}: {e}") from e
