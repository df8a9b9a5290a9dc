import socket
from unittest import mock

import httplib2
import pytest
from googleapiclient.errors import HttpError

from ytviewer.core.youtube.youtube_client import YouTubeClient
from ytviewer.errors import TransientAPIError


@pytest.fixture
def service():
    with mock.patch("ytviewer.core.youtube.youtube_client.build") as build:
        yield build.return_value, build


def test_builds_service_with_api_key_and_timeout(service):
    _, build = service

    YouTubeClient("secret")

    args, kwargs = build.call_args
    assert args == ("youtube", "v3")
    assert kwargs["developerKey"] == "secret"
    assert kwargs["http"].timeout == 10


def test_list_channels_joins_ids(service):
    svc, _ = service
    svc.channels.return_value.list.return_value.execute.return_value = {"items": [{"id": "UC1"}]}

    items = YouTubeClient("secret").list_channels(["UC1", "UC2"], parts="snippet")

    assert items == [{"id": "UC1"}]
    svc.channels.return_value.list.assert_called_once_with(part="snippet", id="UC1,UC2")
    svc.channels.return_value.list.return_value.execute.assert_called_once_with(num_retries=0)


def test_list_channels_rejects_more_than_fifty(service):
    with pytest.raises(ValueError):
        YouTubeClient("secret").list_channels([f"UC{i}" for i in range(51)], parts="snippet")


def test_list_channels_with_no_ids_skips_request(service):
    svc, _ = service
    assert YouTubeClient("secret").list_channels([], parts="snippet") == []
    svc.channels.assert_not_called()


def test_list_feed_items(service):
    svc, _ = service
    svc.playlistItems.return_value.list.return_value.execute.return_value = {"items": [{"snippet": {}}]}

    items = YouTubeClient("secret").list_feed_items("UU1", 3)

    assert items == [{"snippet": {}}]
    svc.playlistItems.return_value.list.assert_called_once_with(part="snippet", playlistId="UU1", maxResults=3)


@pytest.mark.parametrize("error", [
    HttpError(httplib2.Response({"status": "403"}), b"quotaExceeded"),
    socket.timeout("timed out"),
    httplib2.ServerNotFoundError("no dns"),
])
def test_failures_become_transient_api_errors(service, error):
    svc, _ = service
    svc.playlistItems.return_value.list.return_value.execute.side_effect = error

    with pytest.raises(TransientAPIError):
        YouTubeClient("secret").list_feed_items("UU1", 3)


def test_builds_from_bundled_discovery_document(service):
    _, build = service

    YouTubeClient("secret")

    assert build.call_args.kwargs["static_discovery"] is True


@pytest.mark.parametrize("error", [
    httplib2.ServerNotFoundError("Unable to find the server at www.googleapis.com"),
    socket.timeout("timed out"),
    HttpError(httplib2.Response({"status": "503"}), b"unavailable"),
])
def test_build_failures_become_transient_api_errors(error):
    with mock.patch("ytviewer.core.youtube.youtube_client.build", side_effect=error):
        with pytest.raises(TransientAPIError):
            YouTubeClient("secret")
