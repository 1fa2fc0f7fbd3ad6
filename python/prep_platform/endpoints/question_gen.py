"""Interview question generation endpoint client."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from interview_prep.models import InterviewRequest, InterviewResponse, InterviewResult
from prep_platform.endpoints.base import EndpointError, JsonEndpoint, TransportError


logger = logging.getLogger(__name__)


GENERATION_FAILED_MESSAGE = "Failed to generate questions. Please try again."


class QuestionGenerationEndpoint(JsonEndpoint):
    """Request a tailored list of interview questions."""

    endpoint_name = "question-generation"

    def generate(self, request: InterviewRequest) -> InterviewResult:
        """
        Submit one generation request.

        Success is decided by the ``ok`` flag of the envelope only. The
        ``data`` payload is parsed leniently and never fails the call.

        Raises:
            EndpointError: ``ok`` is not true.
            TransportError: Network/timeout failure or an undecodable body.
        """
        logger.info(
            "Requesting %d questions for '%s' at '%s'",
            request.count,
            request.role,
            request.company,
        )
        reply = self._post_json(request.model_dump())

        if not isinstance(reply.body, dict):
            raise TransportError("Unexpected generation response shape")

        try:
            envelope = InterviewResponse.model_validate(reply.body)
        except ValidationError as e:
            raise TransportError("Unexpected generation response shape", e) from e

        if not envelope.ok:
            message = envelope.message or GENERATION_FAILED_MESSAGE
            logger.warning(
                "Question generation failed (HTTP %d): %s", reply.status_code, message
            )
            raise EndpointError(message, reply.status_code)

        result = InterviewResult.from_payload(envelope.data)
        logger.info(
            "Received %s questions (renderable=%s)",
            len(result.questions) if result.questions is not None else "no",
            result.is_renderable,
        )
        return result
