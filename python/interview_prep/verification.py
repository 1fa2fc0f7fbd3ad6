"""
Face Verification Screen State.

Owns the form and outcome state of the verification screen: user id,
selected image and preview, loading flag, result and error. Rendering is
left to the Streamlit layer; every transition lives here so it can be
tested without a browser.

Stale responses:
    Each submission and each reset bumps a generation counter. A response
    is only applied when its ticket carries the current generation, so a
    reply arriving after a reset (or after a newer submission) is dropped.

Last Grunted: 10/19/2026
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from .errors import EndpointError, TransportError
from .imaging import ImageEncodingError, ImageUpload, strip_data_url_prefix, to_data_url
from .models import VerificationRequest, VerificationResponse


__all__ = [
    "VerificationStatus",
    "VerificationTicket",
    "VerificationScreen",
    "VerificationClient",
    "MISSING_USER_ID_MESSAGE",
    "MISSING_IMAGE_MESSAGE",
    "NOT_AN_IMAGE_MESSAGE",
    "GENERIC_VERIFICATION_ERROR",
    "INTERVIEW_PAGE",
]


logger = logging.getLogger(__name__)


MISSING_USER_ID_MESSAGE = "Please enter a User ID"
MISSING_IMAGE_MESSAGE = "Please select an image"
NOT_AN_IMAGE_MESSAGE = "Please select an image file"
GENERIC_VERIFICATION_ERROR = "An error occurred during verification"

INTERVIEW_PAGE = "interview"


class VerificationStatus(str, Enum):
    """Verification screen state enumeration"""
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class VerificationClient(Protocol):
    """Anything that can run one verification request."""

    def verify(self, request: VerificationRequest) -> VerificationResponse:
        ...


@dataclass(frozen=True)
class VerificationTicket:
    """Handle for one in-flight submission."""
    generation: int
    request: VerificationRequest


class VerificationScreen:
    """
    State machine for the face verification screen.

    Transitions:
        idle/succeeded/failed --begin_submit--> loading
        loading --apply_result--> succeeded
        loading --apply_error--> failed
        any --reset--> idle

    Example:
        >>> screen = VerificationScreen()
        >>> screen.set_user_id("alice")
        >>> screen.select_image(ImageUpload("me.png", "image/png", png_bytes))
        >>> screen.submit(endpoint)
        True
        >>> screen.can_continue
        True
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._generation = 0
        self._clear()

    def _clear(self) -> None:
        self.user_id = ""
        self.image: Optional[ImageUpload] = None
        self.preview: Optional[str] = None
        self.status = VerificationStatus.IDLE
        self.result: Optional[VerificationResponse] = None
        self.error: Optional[str] = None

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def is_loading(self) -> bool:
        return self.status == VerificationStatus.LOADING

    @property
    def can_continue(self) -> bool:
        """Whether the "continue" control is available (settled match only)."""
        return (
            self.status == VerificationStatus.SUCCEEDED
            and self.result is not None
            and self.result.is_match
        )

    @property
    def generation(self) -> int:
        return self._generation

    def continue_target(self) -> Optional[str]:
        """Page to hand control to, or None when there is no match."""
        return INTERVIEW_PAGE if self.can_continue else None

    # -------------------------------------------------------------------------
    # Form events
    # -------------------------------------------------------------------------

    def set_user_id(self, value: str) -> None:
        self.user_id = value or ""

    def select_image(self, upload: Optional[ImageUpload]) -> bool:
        """
        Select a new image and build its preview.

        Clears any previous error and result. Non-image files are refused
        with a local error and the previous selection is kept.

        Returns:
            True if the image was accepted.
        """
        if upload is None:
            return False

        with self._lock:
            if not upload.is_image:
                logger.info("Rejected non-image upload '%s' (%s)", upload.name, upload.mime_type)
                self.error = NOT_AN_IMAGE_MESSAGE
                self.result = None
                self.status = VerificationStatus.FAILED
                return False

            try:
                preview = to_data_url(upload)
            except ImageEncodingError as e:
                self.error = str(e)
                self.result = None
                self.status = VerificationStatus.FAILED
                return False

            self.image = upload
            self.preview = preview
            self.error = None
            self.result = None
            if self.status != VerificationStatus.LOADING:
                self.status = VerificationStatus.IDLE
            logger.debug("Selected image '%s' (%d bytes)", upload.name, upload.size_bytes)
            return True

    def clear_image(self) -> None:
        """Drop the selected image and its preview (the picker was emptied)."""
        with self._lock:
            self.image = None
            self.preview = None

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    def begin_submit(self) -> Optional[VerificationTicket]:
        """
        Validate the form and move to loading.

        Returns:
            A ticket for the request, or None when validation failed (the
            error is set) or a request is already in flight.
        """
        with self._lock:
            if self.status == VerificationStatus.LOADING:
                logger.debug("Verification already in flight; ignoring submit")
                return None

            user_id = self.user_id.strip()
            if not user_id:
                self._fail_locally(MISSING_USER_ID_MESSAGE)
                return None
            if self.image is None:
                self._fail_locally(MISSING_IMAGE_MESSAGE)
                return None

            try:
                payload = strip_data_url_prefix(self.preview or to_data_url(self.image))
            except ImageEncodingError as e:
                self._fail_locally(str(e))
                return None

            self._generation += 1
            self.status = VerificationStatus.LOADING
            self.error = None
            self.result = None
            logger.debug("Verification generation %d started", self._generation)
            return VerificationTicket(
                generation=self._generation,
                request=VerificationRequest(user_id=user_id, image=payload),
            )

    def _fail_locally(self, message: str) -> None:
        self.error = message
        self.result = None
        self.status = VerificationStatus.FAILED

    def apply_result(self, ticket: VerificationTicket, response: VerificationResponse) -> bool:
        """Settle a ticket with a response. Stale tickets are ignored."""
        with self._lock:
            if not self._is_current(ticket):
                return False
            self.result = response
            self.error = None
            self.status = VerificationStatus.SUCCEEDED
            return True

    def apply_error(self, ticket: VerificationTicket, message: str) -> bool:
        """Settle a ticket with an error message. Stale tickets are ignored."""
        with self._lock:
            if not self._is_current(ticket):
                return False
            self.error = message or GENERIC_VERIFICATION_ERROR
            self.result = None
            self.status = VerificationStatus.FAILED
            return True

    def _is_current(self, ticket: VerificationTicket) -> bool:
        if ticket.generation != self._generation or self.status != VerificationStatus.LOADING:
            logger.info(
                "Dropping stale verification response (generation %d, current %d)",
                ticket.generation,
                self._generation,
            )
            return False
        return True

    def submit(self, client: VerificationClient) -> bool:
        """
        Validate, call the endpoint once, and settle.

        Args:
            client: Endpoint client used for the single POST.

        Returns:
            True if a request was sent and its outcome applied.
        """
        ticket = self.begin_submit()
        if ticket is None:
            return False
        return self.resolve(ticket, client)

    def resolve(self, ticket: VerificationTicket, client: VerificationClient) -> bool:
        """Run the request behind ``ticket`` and settle it."""
        try:
            response = client.verify(ticket.request)
        except EndpointError as e:
            return self.apply_error(ticket, e.message)
        except TransportError as e:
            logger.warning("Verification transport failure: %s", e)
            return self.apply_error(ticket, GENERIC_VERIFICATION_ERROR)

        return self.apply_result(ticket, response)

    def reset(self) -> None:
        """Clear every field and discard any in-flight response."""
        with self._lock:
            self._generation += 1
            self._clear()
        logger.debug("Verification screen reset (generation %d)", self._generation)
