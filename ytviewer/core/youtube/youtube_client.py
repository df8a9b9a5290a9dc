"""
YouTube API Client
Thin wrapper over the YouTube Data API v3 used by the feed aggregator.
"""

import logging
from typing import Any, Dict, List, Sequence

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ...errors import TransientAPIError

logger = logging.getLogger(__name__)

# channels.list accepts at most 50 comma-separated IDs
MAX_IDS_PER_CALL = 50
REQUEST_TIMEOUT = 10


class YouTubeClient:
    """
    YouTube Data API client restricted to the two read calls the
    aggregator needs.

    Every request is a single attempt bounded by REQUEST_TIMEOUT seconds.
    Any API, transport or timeout failure is raised as TransientAPIError.
    """

    def __init__(self, api_key: str, timeout: int = REQUEST_TIMEOUT):
        """
        Initialize the YouTube API service.

        Raises:
            TransientAPIError: If the service could not be built.
        """
        # the bundled discovery document keeps start-up offline
        try:
            self._service = build(
                'youtube', 'v3',
                developerKey=api_key,
                static_discovery=True,
                http=httplib2.Http(timeout=timeout)
            )
        except HttpError as e:
            raise TransientAPIError(f"API error while building the YouTube service: {e}") from e
        except (httplib2.HttpLib2Error, OSError) as e:
            raise TransientAPIError(f"Network error while building the YouTube service: {e}") from e

    def list_channels(self, channel_ids: Sequence[str], parts: str) -> List[Dict[str, Any]]:
        """
        Low-level API call to channels.list for up to 50 channels.

        Channels the API does not know are simply absent from the result.
        """
        if len(channel_ids) > MAX_IDS_PER_CALL:
            raise ValueError(
                f"channels.list accepts at most {MAX_IDS_PER_CALL} IDs, got {len(channel_ids)}"
            )
        if not channel_ids:
            return []

        request = self._service.channels().list(
            part=parts,
            id=",".join(channel_ids)
        )
        response = self._execute(request, f"channels.list({len(channel_ids)} ids, part={parts})")
        return response.get("items", [])

    def list_feed_items(self, feed_id: str, max_results: int) -> List[Dict[str, Any]]:
        """Low-level API call to playlistItems.list for an uploads playlist."""
        request = self._service.playlistItems().list(
            part="snippet",
            playlistId=feed_id,
            maxResults=max_results
        )
        response = self._execute(request, f"playlistItems.list({feed_id})")
        return response.get("items", [])

    def _execute(self, request, description: str) -> Dict[str, Any]:
        try:
            return request.execute(num_retries=0)
        except HttpError as e:
            raise TransientAPIError(f"API error during {description}: {e}") from e
        except (httplib2.HttpLib2Error, OSError) as e:
            # socket timeouts surface as OSError subclasses
            raise TransientAPIError(f"Network error during {description}: {e}") from e
