"""
External media player integration
"""

from .video_player import VideoPlayer

__all__ = ["VideoPlayer"]
