"""Build endpoint clients from runtime configuration."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from prep_platform.endpoints.face_verify import FaceVerificationEndpoint
from prep_platform.endpoints.question_gen import QuestionGenerationEndpoint
from prep_platform.settings import RuntimeConfig


@dataclass(frozen=True)
class EndpointSet:
    """The two remote endpoints used by the app."""

    face_verification: FaceVerificationEndpoint
    question_generation: QuestionGenerationEndpoint


def build_endpoints(
    config: RuntimeConfig,
    client: httpx.Client | None = None,
) -> EndpointSet:
    """Create endpoint clients from a validated runtime config."""
    return EndpointSet(
        face_verification=FaceVerificationEndpoint(
            url=config.verify_url,
            timeout_seconds=config.http_timeout_seconds,
            client=client,
        ),
        question_generation=QuestionGenerationEndpoint(
            url=config.interview_url,
            timeout_seconds=config.http_timeout_seconds,
            client=client,
        ),
    )
