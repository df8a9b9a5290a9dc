"""
Subscription Info Cache
Alphabetically sorted channel metadata for the subscription list.
"""

import logging
from typing import List, Optional

from ..youtube.subscription import Subscription
from ...errors import ValidationError

logger = logging.getLogger(__name__)


class SubscriptionInfoCache:
    """
    Lazily built list of Subscription objects.

    There is no TTL: the list is only dropped by invalidate(), which the
    registry triggers on every add/remove. Unlike the video fetcher, a
    single failed channel lookup aborts the whole rebuild.
    """

    def __init__(self, youtube_client, registry, name_resolver):
        self._client = youtube_client
        self._registry = registry
        self._names = name_resolver
        self._subscriptions: Optional[List[Subscription]] = None

    def invalidate(self) -> None:
        self._subscriptions = None

    def get(self) -> List[Subscription]:
        if self._subscriptions is not None:
            return list(self._subscriptions)

        channel_ids = self._registry.list()
        if not channel_ids:
            raise ValidationError("no subscriptions", "No subscriptions found")

        subscriptions = []
        for channel_id in channel_ids:
            # One call per channel, each under its own timeout
            items = self._client.list_channels([channel_id], parts="snippet,statistics")
            if not items:
                logger.warning(f"Channel {channel_id} not returned by the API, skipping")
                continue

            subscription = Subscription.from_api_item(channel_id, items[0])
            self._names.remember(channel_id, subscription.title)
            subscriptions.append(subscription)

        subscriptions.sort(key=lambda s: s.title.lower())
        self._subscriptions = subscriptions
        logger.info(f"Loaded info for {len(subscriptions)} subscriptions")
        return list(subscriptions)
