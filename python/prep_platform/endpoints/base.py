"""Endpoint client interfaces and shared JSON transport."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from interview_prep.errors import EndpointClientError, EndpointError, TransportError


__all__ = [
    "EndpointClientError",
    "EndpointError",
    "TransportError",
    "JsonReply",
    "JsonEndpoint",
]


logger = logging.getLogger(__name__)


JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class JsonReply:
    """Decoded reply of one JSON POST."""

    status_code: int
    body: Any

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def field(self, name: str) -> Any:
        """Top-level body field, or None when the body is not an object."""
        if isinstance(self.body, dict):
            return self.body.get(name)
        return None

    def message(self) -> Optional[str]:
        value = self.field("message")
        if isinstance(value, str) and value.strip():
            return value
        return None


class JsonEndpoint:
    """
    One remote JSON endpoint reached with a single POST per call.

    An ``httpx.Client`` may be injected (connection reuse, tests with
    ``httpx.MockTransport``); otherwise each call opens a short-lived client
    with the configured timeout. There are no retries.
    """

    endpoint_name = "endpoint"

    def __init__(
        self,
        url: str,
        timeout_seconds: float = 30.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds
        self._client = client

    def _post_json(self, payload: dict[str, Any]) -> JsonReply:
        """
        POST ``payload`` and decode the JSON reply.

        Raises:
            TransportError: On network errors, timeouts, or a body that is
                not valid JSON.
        """
        try:
            if self._client is not None:
                response = self._client.post(self.url, headers=JSON_HEADERS, json=payload)
            else:
                with httpx.Client(timeout=self.timeout_seconds) as client:
                    response = client.post(self.url, headers=JSON_HEADERS, json=payload)
        except httpx.TimeoutException as e:
            logger.error("%s request timed out: %s", self.endpoint_name, e)
            raise TransportError("Request timed out", e) from e
        except httpx.RequestError as e:
            logger.error("%s request failed: %s", self.endpoint_name, e)
            raise TransportError(f"Cannot reach {self.endpoint_name}", e) from e

        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(
                "%s returned non-JSON body (HTTP %d): %s",
                self.endpoint_name,
                response.status_code,
                response.text[:160],
            )
            raise TransportError("Invalid JSON in response", e) from e

        logger.debug("%s replied HTTP %d", self.endpoint_name, response.status_code)
        return JsonReply(status_code=response.status_code, body=body)
