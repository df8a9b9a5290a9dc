"""
Watched video tracking
"""

from .watched_tracker import WatchedTracker

__all__ = ["WatchedTracker"]
