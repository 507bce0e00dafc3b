"""Error taxonomy for BlogBliss.

Every error raised by services and the asset manager derives from
:class:`BlogError`, which carries the HTTP status it is reported with.
``blogbliss.main`` registers a single handler that renders them as
``{"error": message, "detail": null}``.
"""

from __future__ import annotations


class BlogError(Exception):
    """Base class for errors reported to the client."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(BlogError):
    """Missing or malformed fields."""

    status_code = 422


class SizeExceededError(ValidationError):
    """Uploaded asset is larger than the allowed maximum."""


class AuthError(BlogError):
    """Missing, invalid or expired credentials."""

    status_code = 401


class ForbiddenError(BlogError):
    """Authenticated requester does not own the entity."""

    status_code = 403


class NotFoundError(BlogError):
    """Entity does not exist."""

    status_code = 404


class UpstreamError(BlogError):
    """Blob store or database I/O failed."""

    status_code = 500


class UploadFailedError(UpstreamError):
    """The object store rejected or failed an upload."""
