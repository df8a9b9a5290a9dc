"""
ytviewer - latest videos from your subscribed YouTube channels
"""

from .aggregator import FeedAggregator

__all__ = ["FeedAggregator"]
