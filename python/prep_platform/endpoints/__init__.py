"""Remote endpoint clients package."""

from prep_platform.endpoints.base import (
    EndpointClientError,
    EndpointError,
    JsonEndpoint,
    JsonReply,
    TransportError,
)
from prep_platform.endpoints.face_verify import (
    VERIFICATION_FAILED_MESSAGE,
    FaceVerificationEndpoint,
)
from prep_platform.endpoints.factory import EndpointSet, build_endpoints
from prep_platform.endpoints.question_gen import (
    GENERATION_FAILED_MESSAGE,
    QuestionGenerationEndpoint,
)

__all__ = [
    "EndpointClientError",
    "EndpointError",
    "JsonEndpoint",
    "JsonReply",
    "TransportError",
    "VERIFICATION_FAILED_MESSAGE",
    "FaceVerificationEndpoint",
    "EndpointSet",
    "build_endpoints",
    "GENERATION_FAILED_MESSAGE",
    "QuestionGenerationEndpoint",
]
