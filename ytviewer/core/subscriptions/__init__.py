"""
Subscription management module
"""

from .info_cache import SubscriptionInfoCache
from .registry import SubscriptionRegistry

__all__ = ["SubscriptionInfoCache", "SubscriptionRegistry"]
