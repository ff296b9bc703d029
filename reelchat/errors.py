"""
ReelChat — Error taxonomy for the recommendation webhook client.

Every failure of a search attempt is one of the ``ClientError`` kinds below.
The user only ever sees a generic apology; the kind (and HTTP status) is kept
on the session for diagnostics.
"""

from __future__ import annotations

from typing import Optional


class ClientError(Exception):
    """Base class for failures talking to the recommendation webhook."""

    kind = "client"

    def to_dict(self) -> dict:
        return {"kind": self.kind, "status": None, "detail": str(self)}


class NetworkError(ClientError):
    """The webhook could not be reached (DNS, refused, timeout, …)."""

    kind = "network"


class HttpError(ClientError):
    """The webhook answered with a non-2xx status."""

    kind = "http"

    def __init__(self, status: int, detail: Optional[str] = None) -> None:
        self.status = status
        super().__init__(detail or f"HTTP error: {status}")

    def to_dict(self) -> dict:
        return {"kind": self.kind, "status": self.status, "detail": str(self)}


class InvalidPayloadError(ClientError):
    """The webhook answered 2xx but the body is not JSON."""

    kind = "invalid_payload"


class EmptyQueryError(ValueError):
    """Raised when a blank query is submitted."""
