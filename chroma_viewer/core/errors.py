"""
Error kinds raised at the edges of the viewer.
The presentation pipeline never raises; everything here comes from
request validation or from talking to a ChromaDB endpoint.
"""

from __future__ import annotations

CLIENT_ERROR_PREFIX = "ChromaDB client error: "


class ChromaViewerError(Exception):
    """Base class for viewer errors. str(err) is the user-facing message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class MissingFieldError(ChromaViewerError, ValueError):
    """A required request field was missing or empty."""


class ChromaConnectionError(ChromaViewerError, ConnectionError):
    """
    Any failure reaching or querying the remote endpoint: network failure,
    unknown collection, or a response that does not fit the Item model.
    """

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ChromaConnectionError":
        if isinstance(exc, ChromaConnectionError):
            return exc
        cause = str(exc) or exc.__class__.__name__
        err = cls(f"{CLIENT_ERROR_PREFIX}{cause}")
        err.__cause__ = exc
        return err
