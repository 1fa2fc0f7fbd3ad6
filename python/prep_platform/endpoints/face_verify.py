"""Face verification endpoint client."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from interview_prep.models import VerificationRequest, VerificationResponse
from prep_platform.endpoints.base import EndpointError, JsonEndpoint, TransportError


logger = logging.getLogger(__name__)


VERIFICATION_FAILED_MESSAGE = "Verification failed"


class FaceVerificationEndpoint(JsonEndpoint):
    """Send a user id plus selfie and read back the match outcome."""

    endpoint_name = "face-verification"

    def verify(self, request: VerificationRequest) -> VerificationResponse:
        """
        Submit one verification request.

        Args:
            request: User id and base64 image.

        Returns:
            The parsed VerificationResponse.

        Raises:
            EndpointError: Non-2xx status or a body with ``ok: false``;
                carries the server ``message`` when present.
            TransportError: Network/timeout failure or an undecodable body.
        """
        logger.info("Submitting face verification for user '%s'", request.user_id)
        reply = self._post_json(request.model_dump(by_alias=True))

        if not reply.is_success or reply.field("ok") is False:
            message = reply.message() or VERIFICATION_FAILED_MESSAGE
            logger.warning(
                "Face verification rejected (HTTP %d): %s", reply.status_code, message
            )
            raise EndpointError(message, reply.status_code)

        if not isinstance(reply.body, dict):
            raise TransportError("Unexpected verification response shape")

        try:
            response = VerificationResponse.model_validate(reply.body)
        except ValidationError as e:
            raise TransportError("Unexpected verification response shape", e) from e

        logger.info(
            "Face verification for '%s': match=%s similarity=%s",
            request.user_id,
            response.match,
            response.similarity,
        )
        return response
