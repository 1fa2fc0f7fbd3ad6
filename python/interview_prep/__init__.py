"""
Interview Prep Gateway Package.

Client-side state and contracts for a two-screen flow: verify a user's face
against a remote endpoint, then generate tailored interview questions from a
second endpoint.

Components:
    - VerificationScreen: Form/outcome state machine for face verification
    - QuestionBoard: home/loading/results state machine for question generation
    - Presentation helpers: difficulty badges, outcome labels, palettes
    - Models: Pydantic models for both endpoint contracts

Example:
    >>> from interview_prep import QuestionBoard
    >>> from prep_platform import load_runtime_config
    >>> from prep_platform.endpoints import build_endpoints
    >>>
    >>> endpoints = build_endpoints(load_runtime_config())
    >>> board = QuestionBoard()
    >>> board.update_form(company="Google", role="SDE Intern", count=3)
    >>> board.submit(endpoints.question_generation)

Last Grunted: 10/19/2026
"""

from .models import (
    Difficulty,
    VerificationRequest,
    VerificationResponse,
    InterviewRequest,
    InterviewMetadata,
    Question,
    InterviewResult,
    InterviewResponse,
)

from .errors import EndpointClientError, EndpointError, TransportError

from .imaging import ImageUpload, encode_base64, to_data_url

from .presentation import (
    BadgeStyle,
    ThemePalette,
    difficulty_style,
    format_similarity,
    outcome_title,
    theme_palette,
)

from .verification import (
    VerificationScreen,
    VerificationStatus,
    VerificationTicket,
)

from .question_board import (
    Phase,
    QuestionBoard,
    QuestionTicket,
    RevealTimer,
)


__all__ = [
    # Models
    "Difficulty",
    "VerificationRequest",
    "VerificationResponse",
    "InterviewRequest",
    "InterviewMetadata",
    "Question",
    "InterviewResult",
    "InterviewResponse",
    # Errors
    "EndpointClientError",
    "EndpointError",
    "TransportError",
    # Imaging
    "ImageUpload",
    "encode_base64",
    "to_data_url",
    # Presentation
    "BadgeStyle",
    "ThemePalette",
    "difficulty_style",
    "format_similarity",
    "outcome_title",
    "theme_palette",
    # Verification
    "VerificationScreen",
    "VerificationStatus",
    "VerificationTicket",
    # Question board
    "Phase",
    "QuestionBoard",
    "QuestionTicket",
    "RevealTimer",
]

__version__ = "0.1.0"
