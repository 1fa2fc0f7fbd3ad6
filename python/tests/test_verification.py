"""
Tests for the face verification screen state machine.

Covers local validation, the error-xor-result invariant, reset
idempotence, stale response handling and the continue affordance.

Last Grunted: 10/19/2026
"""

from __future__ import annotations

import base64

import pytest

from interview_prep.models import VerificationResponse
from interview_prep.presentation import format_similarity, outcome_title
from interview_prep.verification import (
    GENERIC_VERIFICATION_ERROR,
    INTERVIEW_PAGE,
    MISSING_IMAGE_MESSAGE,
    MISSING_USER_ID_MESSAGE,
    NOT_AN_IMAGE_MESSAGE,
    VerificationScreen,
    VerificationStatus,
)
from prep_platform.endpoints import EndpointError, FaceVerificationEndpoint, TransportError
from tests.mock_data import (
    PNG_BYTES,
    VERIFY_URL,
    FakeVerifier,
    client_for,
    failing_transport,
    generate_image_upload,
    generate_verification_payload,
    json_transport,
)


def _ready_screen(user_id: str = "alice") -> VerificationScreen:
    screen = VerificationScreen()
    screen.set_user_id(user_id)
    screen.select_image(generate_image_upload())
    return screen


def _assert_settled(screen: VerificationScreen) -> None:
    assert (screen.result is None) != (screen.error is None)


# =============================================================================
# Local Validation
# =============================================================================

class TestLocalValidation:
    """Submissions that must never reach the network."""

    @pytest.mark.parametrize("user_id", ["", "   ", "\t\n"])
    def test_blank_user_id_blocks_submit(self, user_id):
        screen = _ready_screen(user_id)
        verifier = FakeVerifier(VerificationResponse(match=True, similarity=99.0))

        assert screen.submit(verifier) is False
        assert verifier.calls == []
        assert screen.error == MISSING_USER_ID_MESSAGE
        assert screen.result is None

    def test_missing_image_blocks_submit(self):
        screen = VerificationScreen()
        screen.set_user_id("alice")
        verifier = FakeVerifier(VerificationResponse(match=True, similarity=99.0))

        assert screen.submit(verifier) is False
        assert verifier.calls == []
        assert screen.error == MISSING_IMAGE_MESSAGE

    def test_non_image_upload_rejected(self):
        screen = VerificationScreen()
        accepted = screen.select_image(
            generate_image_upload(name="notes.txt", mime_type="text/plain")
        )

        assert accepted is False
        assert screen.image is None
        assert screen.error == NOT_AN_IMAGE_MESSAGE

    def test_selecting_image_clears_error_and_result(self):
        screen = VerificationScreen()
        screen.set_user_id("alice")
        screen.submit(FakeVerifier())
        assert screen.error == MISSING_IMAGE_MESSAGE

        screen.select_image(generate_image_upload())

        assert screen.error is None
        assert screen.result is None
        assert screen.preview.startswith("data:image/png;base64,")

    def test_cleared_picker_drops_selection(self):
        screen = _ready_screen()
        verifier = FakeVerifier(VerificationResponse(match=True, similarity=99.0))

        screen.clear_image()

        assert screen.image is None
        assert screen.preview is None
        assert screen.submit(verifier) is False
        assert verifier.calls == []
        assert screen.error == MISSING_IMAGE_MESSAGE


# =============================================================================
# Submission
# =============================================================================

class TestSubmission:
    """Valid submissions and their outcomes."""

    def test_request_carries_trimmed_id_and_bare_base64(self):
        screen = _ready_screen("  alice  ")
        verifier = FakeVerifier(VerificationResponse(match=False, similarity=1.0))
        screen.submit(verifier)

        request = verifier.calls[0]
        assert request.user_id == "alice"
        assert not request.image.startswith("data:")
        assert base64.b64decode(request.image) == PNG_BYTES
        assert screen.preview.endswith(request.image)

    def test_match_scenario(self):
        """Match with 97.3 renders 'Match Found!', '97.30%' and a continue control."""
        transport = json_transport(generate_verification_payload(True, 97.3))
        endpoint = FaceVerificationEndpoint(url=VERIFY_URL, client=client_for(transport))
        screen = _ready_screen()

        assert screen.submit(endpoint) is True

        _assert_settled(screen)
        assert screen.status == VerificationStatus.SUCCEEDED
        assert outcome_title(screen.result) == "Match Found!"
        assert format_similarity(screen.result.similarity) == "97.30%"
        assert screen.can_continue
        assert screen.continue_target() == INTERVIEW_PAGE

    def test_no_match_scenario(self):
        """No match shows 'No Match' and no continue control."""
        transport = json_transport(generate_verification_payload(False, 12.0))
        endpoint = FaceVerificationEndpoint(url=VERIFY_URL, client=client_for(transport))
        screen = _ready_screen()

        screen.submit(endpoint)

        _assert_settled(screen)
        assert outcome_title(screen.result) == "No Match"
        assert format_similarity(screen.result.similarity) == "12.00%"
        assert not screen.can_continue
        assert screen.continue_target() is None

    def test_endpoint_error_message_surfaces(self):
        screen = _ready_screen()
        screen.submit(FakeVerifier(error=EndpointError("User not enrolled", 404)))

        _assert_settled(screen)
        assert screen.error == "User not enrolled"
        assert screen.status == VerificationStatus.FAILED
        assert not screen.can_continue

    def test_transport_error_uses_generic_message(self):
        transport = failing_transport()
        endpoint = FaceVerificationEndpoint(url=VERIFY_URL, client=client_for(transport))
        screen = _ready_screen()

        screen.submit(endpoint)

        _assert_settled(screen)
        assert screen.error == GENERIC_VERIFICATION_ERROR
        assert len(transport.requests) == 1

    def test_direct_transport_error_uses_generic_message(self):
        screen = _ready_screen()
        screen.submit(FakeVerifier(error=TransportError("boom")))
        assert screen.error == GENERIC_VERIFICATION_ERROR

    def test_second_begin_while_loading_is_ignored(self):
        screen = _ready_screen()
        first = screen.begin_submit()

        assert first is not None
        assert screen.is_loading
        assert screen.begin_submit() is None

    def test_resubmit_after_failure_allowed(self):
        screen = _ready_screen()
        screen.submit(FakeVerifier(error=EndpointError("Try later")))
        screen.submit(FakeVerifier(VerificationResponse(match=True, similarity=91.0)))

        _assert_settled(screen)
        assert screen.can_continue


# =============================================================================
# Reset and Stale Responses
# =============================================================================

class TestResetAndStaleness:
    """Reset idempotence and generation guards."""

    def test_reset_restores_initial_state(self):
        screen = _ready_screen()
        screen.submit(FakeVerifier(VerificationResponse(match=True, similarity=99.0)))

        screen.reset()

        assert screen.user_id == ""
        assert screen.image is None
        assert screen.preview is None
        assert screen.result is None
        assert screen.error is None
        assert screen.status == VerificationStatus.IDLE

    def test_reset_is_idempotent(self):
        screen = VerificationScreen()
        screen.reset()
        snapshot = (screen.user_id, screen.image, screen.preview, screen.result, screen.error)
        screen.reset()

        assert (screen.user_id, screen.image, screen.preview, screen.result, screen.error) == snapshot

    def test_response_after_reset_is_dropped(self):
        screen = _ready_screen()
        ticket = screen.begin_submit()
        screen.reset()

        applied = screen.apply_result(ticket, VerificationResponse(match=True, similarity=99.0))

        assert applied is False
        assert screen.result is None
        assert screen.status == VerificationStatus.IDLE

    def test_superseded_ticket_is_dropped(self):
        screen = _ready_screen()
        old = screen.begin_submit()
        screen.apply_error(old, "first attempt failed")
        new = screen.begin_submit()

        assert screen.apply_result(old, VerificationResponse(match=True)) is False
        assert screen.apply_result(new, VerificationResponse(match=False)) is True
        assert screen.result.match is False

    def test_error_after_reset_is_dropped(self):
        screen = _ready_screen()
        ticket = screen.begin_submit()
        screen.reset()

        assert screen.apply_error(ticket, "late failure") is False
        assert screen.error is None
