"""
Pydantic models for the Interview Prep Gateway.

Defines the request/response contracts of the two remote endpoints:
face verification and interview question generation.

Response models are lenient: the endpoints are opaque and
malformed fields become None instead of failing validation.

Last Grunted: 10/19/2026
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)


__all__ = [
    "Difficulty",
    "VerificationRequest",
    "VerificationResponse",
    "InterviewRequest",
    "InterviewMetadata",
    "Question",
    "InterviewResult",
    "InterviewResponse",
    "MIN_QUESTION_COUNT",
    "MAX_QUESTION_COUNT",
    "DEFAULT_QUESTION_COUNT",
]


logger = logging.getLogger(__name__)


MIN_QUESTION_COUNT = 1
MAX_QUESTION_COUNT = 20
DEFAULT_QUESTION_COUNT = 5


class Difficulty(str, Enum):
    """Difficulty tag attached to a generated question."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    OTHER = "other"

    @classmethod
    def parse(cls, value: object) -> "Difficulty":
        """Map a raw label to a known level; anything unrecognized is OTHER."""
        if not isinstance(value, str):
            return cls.OTHER
        try:
            level = cls(value.strip().lower())
        except ValueError:
            return cls.OTHER
        return level


# =============================================================================
# Face Verification
# =============================================================================

class VerificationRequest(BaseModel):
    """
    Body of a face verification request.

    Serialize with ``model_dump(by_alias=True)`` to get the wire shape
    ``{"userId": ..., "image": ...}``.

    Example:
        >>> req = VerificationRequest(user_id="alice", image="iVBORw0KGgo...")
        >>> req.model_dump(by_alias=True)
        {'userId': 'alice', 'image': 'iVBORw0KGgo...'}
    """

    user_id: str = Field(..., alias="userId", min_length=1)
    image: str = Field(..., min_length=1, description="Base64 payload without data-URL prefix")

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class VerificationResponse(BaseModel):
    """
    Outcome returned by the verification endpoint.

    Both fields may be absent; extra fields are kept for logging/debugging.
    """

    match: Optional[bool] = None
    similarity: Optional[float] = None
    message: Optional[str] = None

    model_config = ConfigDict(extra="allow")

    @field_validator("match", mode="before")
    @classmethod
    def _coerce_match(cls, value: Any) -> Any:
        return value if isinstance(value, bool) else None

    @field_validator("similarity", mode="before")
    @classmethod
    def _coerce_similarity(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return value
        if isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                return None
        return None

    @field_validator("message", mode="before")
    @classmethod
    def _coerce_message(cls, value: Any) -> Any:
        return value if isinstance(value, str) else None

    @property
    def is_match(self) -> bool:
        """True only for an explicit positive match."""
        return self.match is True


# =============================================================================
# Interview Question Generation
# =============================================================================

class InterviewRequest(BaseModel):
    """Body of an interview question generation request."""

    company: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    count: int = Field(
        default=DEFAULT_QUESTION_COUNT,
        ge=MIN_QUESTION_COUNT,
        le=MAX_QUESTION_COUNT,
    )

    model_config = ConfigDict(str_strip_whitespace=True)


class InterviewMetadata(BaseModel):
    """Echo of the request the questions were generated for."""

    company: Optional[str] = None
    role: Optional[str] = None
    count: Optional[int] = None

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    @field_validator("count", mode="before")
    @classmethod
    def _coerce_count(cls, value: Any) -> Any:
        try:
            return int(value)
        except (TypeError, ValueError):
            return None


class Question(BaseModel):
    """
    One generated interview question plus its answer material.

    ``difficulty`` keeps the raw label from the endpoint so unknown tags can
    still be displayed; ``level`` is the normalized value used for styling.
    """

    id: Optional[int | str] = None
    difficulty: Optional[str] = None
    text: str = ""
    ideal_answer: str = ""
    explanation: str = ""
    follow_ups: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    @field_validator("difficulty", "text", "ideal_answer", "explanation", mode="before")
    @classmethod
    def _none_to_blank(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return None if info.field_name == "difficulty" else ""
        return value

    @field_validator("follow_ups", mode="before")
    @classmethod
    def _clean_follow_ups(cls, value: Any) -> list[str]:
        if not isinstance(value, (list, tuple)):
            return []
        return [item for item in value if isinstance(item, str) and item.strip()]

    @property
    def level(self) -> Difficulty:
        return Difficulty.parse(self.difficulty)

    @property
    def badge(self) -> str:
        """Upper-cased difficulty label for display."""
        label = (self.difficulty or "").strip()
        return label.upper() if label else "UNKNOWN"


class InterviewResult(BaseModel):
    """
    The ``data`` payload of a successful generation response.

    Either part may be missing; the results view renders an explicit empty
    state in that case instead of failing.
    """

    metadata: Optional[InterviewMetadata] = None
    questions: Optional[list[Question]] = None

    model_config = ConfigDict(extra="ignore")

    @property
    def is_renderable(self) -> bool:
        return self.metadata is not None and self.questions is not None

    @classmethod
    def from_payload(cls, payload: object) -> "InterviewResult":
        """
        Build a result from an untrusted ``data`` payload.

        Never raises: unusable parts become ``None`` and malformed question
        entries are skipped. Question ids are made unique so expansion state
        can be keyed by id.

        Args:
            payload: The decoded ``data`` member of the response.

        Returns:
            An InterviewResult, possibly with metadata/questions set to None.
        """
        if not isinstance(payload, dict):
            logger.warning("Generation payload is not an object: %s", type(payload).__name__)
            return cls()

        metadata: Optional[InterviewMetadata] = None
        raw_metadata = payload.get("metadata")
        if isinstance(raw_metadata, dict):
            metadata = InterviewMetadata.model_validate(raw_metadata)

        questions: Optional[list[Question]] = None
        raw_questions = payload.get("questions")
        if isinstance(raw_questions, list):
            questions = []
            for position, raw in enumerate(raw_questions, start=1):
                if not isinstance(raw, dict):
                    logger.warning("Skipping question #%d: not an object", position)
                    continue
                try:
                    questions.append(Question.model_validate(raw))
                except ValidationError as e:
                    logger.warning("Skipping question #%d: %s", position, e)
            questions = _ensure_unique_ids(questions)

        return cls(metadata=metadata, questions=questions)


def _ensure_unique_ids(questions: list[Question]) -> list[Question]:
    """
    Fill missing ids with the position; renumber everything on duplicates.

    Ids are compared by their text form since they end up in widget keys,
    so ``1`` and ``"1"`` collide.
    """
    filled = [
        q if q.id is not None else q.model_copy(update={"id": position})
        for position, q in enumerate(questions, start=1)
    ]
    ids = [q.id for q in filled]
    if len(ids) == len({str(question_id) for question_id in ids}):
        return filled

    logger.warning("Duplicate question ids %s; renumbering by position", ids)
    return [
        q.model_copy(update={"id": position})
        for position, q in enumerate(filled, start=1)
    ]


class InterviewResponse(BaseModel):
    """Envelope returned by the generation endpoint."""

    ok: bool = False
    data: Any = None
    message: Optional[str] = None

    model_config = ConfigDict(extra="allow")

    @field_validator("ok", mode="before")
    @classmethod
    def _strict_ok(cls, value: Any) -> bool:
        return value is True

    @field_validator("message", mode="before")
    @classmethod
    def _coerce_message(cls, value: Any) -> Any:
        return value if isinstance(value, str) and value.strip() else None
