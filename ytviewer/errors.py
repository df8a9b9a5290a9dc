"""
Error taxonomy shared by every ytviewer component.
"""


class YTViewerError(Exception):
    """Base class for all ytviewer errors."""
    pass


class TransientAPIError(YTViewerError):
    """Network, timeout or remote failure while talking to the YouTube API."""
    pass


class TransientLookupError(TransientAPIError):
    """A batched channel-name lookup failed."""
    pass


class NotFoundError(YTViewerError):
    """The requested subscription does not exist."""
    pass


class ValidationError(YTViewerError):
    """
    Input rejected before any state was changed.

    The ``reason`` attribute is one of "empty", "not found", "duplicate"
    or "no subscriptions".
    """

    def __init__(self, reason: str, message: str = ""):
        super().__init__(message or reason)
        self.reason = reason


class PersistenceError(YTViewerError):
    """Writing the configuration or the watched store failed."""
    pass


class PlaybackError(YTViewerError):
    """The external player process could not be started."""
    pass
