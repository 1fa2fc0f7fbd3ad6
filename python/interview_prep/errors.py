"""Failures raised by endpoint clients and translated by the screens."""

from __future__ import annotations

from typing import Optional


__all__ = [
    "EndpointClientError",
    "EndpointError",
    "TransportError",
]


class EndpointClientError(Exception):
    """Base class for failures talking to a remote endpoint."""


class EndpointError(EndpointClientError):
    """The endpoint answered but reported a failure (non-2xx or ``ok: false``)."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class TransportError(EndpointClientError):
    """The request could not be completed or the reply could not be decoded."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)
