"""
Subscription Registry
Ordered set of subscribed channel IDs with validated add/remove.
"""

import logging
from typing import Callable, Iterable, List

from ...errors import NotFoundError, PersistenceError, ValidationError

logger = logging.getLogger(__name__)


class SubscriptionRegistry:
    """
    Owns the in-memory subscription list.

    Every mutation is persisted before it is applied: when ``persist``
    fails, PersistenceError is raised and ``list()`` is left unchanged.
    Listeners registered with ``on_change`` run after each applied mutation.
    """

    def __init__(
        self,
        youtube_client,
        name_resolver,
        persist: Callable[[List[str]], None],
        channel_ids: Iterable[str] = ()
    ):
        self._client = youtube_client
        self._names = name_resolver
        self._persist = persist
        self._channel_ids: List[str] = list(dict.fromkeys(channel_ids))
        self._listeners: List[Callable[[], None]] = []

    def list(self) -> List[str]:
        return list(self._channel_ids)

    def on_change(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def add(self, channel_id: str) -> None:
        """
        Subscribes to a channel after checking it exists.

        Raises:
            ValidationError: "empty", "not found" or "duplicate".
            TransientAPIError: If the existence check fails.
            PersistenceError: If the updated list could not be saved.
        """
        channel_id = (channel_id or "").strip()
        if not channel_id:
            raise ValidationError("empty", "Channel ID cannot be empty")

        items = self._client.list_channels([channel_id], parts="snippet")
        match = next((item for item in items if item.get("id") == channel_id), None)
        if match is None:
            raise ValidationError("not found", f"Channel not found: {channel_id}")

        if channel_id in self._channel_ids:
            raise ValidationError("duplicate", f"Already subscribed to {channel_id}")

        self._commit(self._channel_ids + [channel_id])
        self._names.remember(channel_id, match.get("snippet", {}).get("title", ""))
        logger.info(f"Subscribed to {channel_id}")

    def remove(self, channel_id: str) -> None:
        """
        Unsubscribes from a channel.

        Raises:
            NotFoundError: If the channel is not subscribed.
            PersistenceError: If the updated list could not be saved.
        """
        if channel_id not in self._channel_ids:
            raise NotFoundError(f"Channel not found in subscriptions: {channel_id}")

        self._commit([cid for cid in self._channel_ids if cid != channel_id])
        logger.info(f"Unsubscribed from {channel_id}")

    def _commit(self, updated: List[str]) -> None:
        try:
            self._persist(updated)
        except PersistenceError:
            logger.error("Subscription list could not be saved, keeping previous list")
            raise

        self._channel_ids = updated
        for callback in self._listeners:
            callback()
