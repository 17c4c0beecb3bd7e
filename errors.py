"""Error types raised along the ingestion path.

Per-image errors (``FetchError``, ``TranscodeError``) are recovered inside the
pipeline. ``StorageError`` is logged where it happens. ``NotFoundError`` is the
only one that reaches an HTTP client, as a 404.
"""


class IngestionError(Exception):
    """Base class for every error raised by the ingestion service."""


class FetchError(IngestionError):
    """Raised when a remote image cannot be downloaded."""

    def __init__(self, url, reason):
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class TranscodeError(IngestionError):
    """Raised when an image cannot be read or re-encoded."""

    def __init__(self, path, reason):
        super().__init__(f"Failed to transcode {path}: {reason}")
        self.path = path
        self.reason = reason


class StorageError(IngestionError):
    """Raised when the database rejects a read or write."""


class NotFoundError(IngestionError):
    """Raised when a batch id has no status record."""

    def __init__(self, request_id):
        super().__init__(f"Request ID {request_id} not found")
        self.request_id = request_id


class InputFileError(IngestionError):
    """Raised when the input CSV cannot be read or lacks a required column."""
