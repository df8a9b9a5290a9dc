"""
Channel Name Resolver
Caches channel ID -> display name and resolves misses in batches.
"""

import logging
from typing import Dict, Iterable, List, Optional

from .youtube_client import MAX_IDS_PER_CALL
from ...errors import TransientAPIError, TransientLookupError

logger = logging.getLogger(__name__)


class ChannelNameResolver:
    """
    Process-lifetime cache of channel display names.

    Responsibilities:
    - Answer cache hits without touching the network.
    - Resolve misses with channels.list in batches of at most 50 IDs.
    - Keep every resolved name, even when a later batch fails.
    """

    def __init__(self, youtube_client):
        self._client = youtube_client
        self._names: Dict[str, str] = {}

    def cached_name(self, channel_id: str) -> Optional[str]:
        return self._names.get(channel_id)

    def remember(self, channel_id: str, name: str) -> None:
        """Records a name learned outside of resolve() (e.g. subscription info)."""
        if name:
            self._names[channel_id] = name

    def resolve(self, channel_ids: Iterable[str]) -> Dict[str, str]:
        """
        Returns names for the requested channels.

        Channels the API reports as non-existent are left out of the result.

        Raises:
            TransientLookupError: If any batch request fails. Names from
                batches that completed before the failure stay cached.
        """
        result: Dict[str, str] = {}
        missing: List[str] = []

        for channel_id in dict.fromkeys(channel_ids):
            name = self._names.get(channel_id)
            if name is not None:
                result[channel_id] = name
            else:
                missing.append(channel_id)

        if not missing:
            return result

        logger.debug(f"Resolving {len(missing)} channel names ({len(result)} cached)")

        for i in range(0, len(missing), MAX_IDS_PER_CALL):
            batch = missing[i:i + MAX_IDS_PER_CALL]
            try:
                items = self._client.list_channels(batch, parts="snippet")
            except TransientAPIError as e:
                raise TransientLookupError(f"Error fetching channel names: {e}") from e

            for item in items:
                channel_id = item.get("id")
                title = item.get("snippet", {}).get("title")
                if channel_id and title:
                    self._names[channel_id] = title
                    result[channel_id] = title

        return result

    def __len__(self) -> int:
        return len(self._names)
