"""
Tests for the interview question board state machine.

Covers the home/loading/results phases, the deferred reveal timer,
exclusive question expansion and new-search reset.

Last Grunted: 10/19/2026
"""

from __future__ import annotations

import pytest

from interview_prep.models import DEFAULT_QUESTION_COUNT, InterviewResult
from interview_prep.question_board import (
    CONNECTION_ERROR_MESSAGE,
    INVALID_FORM_MESSAGE,
    Phase,
    QuestionBoard,
)
from prep_platform.endpoints import (
    GENERATION_FAILED_MESSAGE,
    EndpointError,
    QuestionGenerationEndpoint,
)
from tests.mock_data import (
    INTERVIEW_URL,
    FakeClock,
    FakeGenerator,
    client_for,
    failing_transport,
    generate_interview_payload,
    generate_question_dict,
    json_transport,
)


REVEAL_DELAY = 1.5


def _board(clock: FakeClock | None = None) -> QuestionBoard:
    board = QuestionBoard(reveal_delay=REVEAL_DELAY, clock=clock or FakeClock())
    board.update_form(company="Google", role="SDE Intern", count=3)
    return board


def _result(count: int = 3) -> InterviewResult:
    return InterviewResult.from_payload(generate_interview_payload(count=count)["data"])


# =============================================================================
# Form Validation
# =============================================================================

class TestFormValidation:
    """Submit control availability and re-validation at submit time."""

    @pytest.mark.parametrize("count", [1, 20])
    def test_boundaries_inclusive(self, count):
        board = _board()
        board.update_form(count=count)
        assert board.can_submit

    @pytest.mark.parametrize("count", [0, 21])
    def test_out_of_range_count_disables_submit(self, count):
        board = _board()
        board.update_form(count=count)
        generator = FakeGenerator(_result())

        assert not board.can_submit
        assert board.submit(generator) is False
        assert generator.calls == []
        assert board.phase == Phase.HOME
        assert board.error == INVALID_FORM_MESSAGE

    @pytest.mark.parametrize("field", ["company", "role"])
    def test_blank_text_field_disables_submit(self, field):
        board = _board()
        board.update_form(**{field: "   "})
        assert not board.can_submit

    def test_cannot_submit_while_loading(self):
        board = _board()
        assert board.begin_submit() is not None

        assert not board.can_submit
        assert board.begin_submit() is None


# =============================================================================
# Phase Transitions
# =============================================================================

class TestPhaseTransitions:
    """home -> loading -> results and loading -> home."""

    def test_success_scenario_after_reveal_delay(self):
        """One easy question: results view after the delay, collapsed, badge EASY."""
        payload = {
            "ok": True,
            "data": {
                "metadata": {"company": "Google", "role": "SDE Intern", "count": 3},
                "questions": [generate_question_dict(1, "easy", [])],
            },
        }
        endpoint = QuestionGenerationEndpoint(
            url=INTERVIEW_URL, client=client_for(json_transport(payload))
        )
        clock = FakeClock()
        board = _board(clock)

        assert board.submit(endpoint) is True
        assert board.phase == Phase.LOADING
        assert board.result is not None
        assert board.error is None

        clock.advance(REVEAL_DELAY - 0.5)
        assert board.poll() is False
        assert board.phase == Phase.LOADING

        clock.advance(0.5)
        assert board.poll() is True
        assert board.phase == Phase.RESULTS

        questions = board.questions
        assert len(questions) == 1
        assert questions[0].badge == "EASY"
        assert not board.is_expanded(questions[0].id)

    def test_ok_false_reverts_home_without_reveal(self):
        endpoint = QuestionGenerationEndpoint(
            url=INTERVIEW_URL, client=client_for(json_transport({"ok": False}))
        )
        clock = FakeClock()
        board = _board(clock)

        board.submit(endpoint)

        assert board.phase == Phase.HOME
        assert board.error == GENERATION_FAILED_MESSAGE
        assert board.result is None
        assert board.reveal_remaining() is None
        clock.advance(10)
        assert board.poll() is False
        assert board.phase == Phase.HOME

    def test_network_failure_reverts_home(self):
        endpoint = QuestionGenerationEndpoint(
            url=INTERVIEW_URL, client=client_for(failing_transport())
        )
        board = _board()

        board.submit(endpoint)

        assert board.phase == Phase.HOME
        assert board.error == CONNECTION_ERROR_MESSAGE

    def test_server_message_shown_on_failure(self):
        board = _board()
        board.submit(FakeGenerator(error=EndpointError("Quota exceeded", 429)))
        assert board.error == "Quota exceeded"

    def test_exactly_one_of_result_error_after_settle(self):
        ok_board = _board()
        ok_board.submit(FakeGenerator(_result()))
        failed_board = _board()
        failed_board.submit(FakeGenerator(error=EndpointError("nope")))

        for board in (ok_board, failed_board):
            assert (board.result is None) != (board.error is None)

    def test_reveal_remaining_counts_down(self):
        clock = FakeClock()
        board = _board(clock)
        board.submit(FakeGenerator(_result()))

        assert board.reveal_remaining() == pytest.approx(REVEAL_DELAY)
        clock.advance(1.0)
        assert board.reveal_remaining() == pytest.approx(0.5)

    def test_zero_delay_reveals_on_first_poll(self):
        board = QuestionBoard(reveal_delay=0, clock=FakeClock())
        board.update_form(company="Acme", role="SRE", count=1)
        board.submit(FakeGenerator(_result(1)))

        assert board.poll() is True
        assert board.phase == Phase.RESULTS

    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError):
            QuestionBoard(reveal_delay=-1)


# =============================================================================
# Stale Requests and Timers
# =============================================================================

class TestStaleness:
    """Reset or resubmission supersedes in-flight work."""

    def test_new_search_during_delay_cancels_reveal(self):
        clock = FakeClock()
        board = _board(clock)
        board.submit(FakeGenerator(_result()))

        board.new_search()
        clock.advance(REVEAL_DELAY * 2)

        assert board.poll() is False
        assert board.phase == Phase.HOME
        assert board.result is None

    def test_response_after_new_search_is_dropped(self):
        board = _board()
        ticket = board.begin_submit()
        board.new_search()

        assert board.apply_result(ticket, _result()) is False
        assert board.phase == Phase.HOME
        assert board.result is None

    def test_duplicate_settlement_is_dropped(self):
        board = _board()
        ticket = board.begin_submit()

        assert board.apply_result(ticket, _result()) is True
        assert board.apply_error(ticket, "late failure") is False
        assert board.error is None

    def test_old_timer_does_not_reveal_newer_request(self):
        clock = FakeClock()
        board = _board(clock)
        first = board.begin_submit()
        board.apply_result(first, _result())
        board.new_search()
        board.update_form(company="Acme", role="SRE", count=2)
        second = board.begin_submit()

        clock.advance(REVEAL_DELAY)
        assert board.poll() is False
        assert board.phase == Phase.LOADING

        board.apply_result(second, _result(2))
        clock.advance(REVEAL_DELAY)
        assert board.poll() is True
        assert len(board.questions) == 2


# =============================================================================
# Expansion
# =============================================================================

class TestExpansion:
    """At most one question expanded at a time."""

    def _results_board(self) -> QuestionBoard:
        board = QuestionBoard(reveal_delay=0, clock=FakeClock())
        board.update_form(company="Google", role="SDE Intern", count=3)
        board.submit(FakeGenerator(_result(3)))
        board.poll()
        return board

    def test_all_collapsed_initially(self):
        board = self._results_board()
        assert all(not board.is_expanded(q.id) for q in board.questions)

    def test_toggle_twice_is_involution(self):
        board = self._results_board()
        before = board.expanded_id

        board.toggle_question(2)
        assert board.is_expanded(2)
        board.toggle_question(2)

        assert board.expanded_id == before

    def test_expanding_other_collapses_current(self):
        board = self._results_board()
        board.toggle_question(1)
        board.toggle_question(3)

        assert board.is_expanded(3)
        assert not board.is_expanded(1)
        assert sum(board.is_expanded(q.id) for q in board.questions) == 1

    def test_new_search_clears_everything(self):
        board = self._results_board()
        board.toggle_question(1)
        board.toggle_theme()

        board.new_search()

        assert board.phase == Phase.HOME
        assert board.company == ""
        assert board.role == ""
        assert board.count == DEFAULT_QUESTION_COUNT
        assert board.result is None
        assert board.error is None
        assert board.expanded_id is None
        assert board.dark_mode is False

    def test_empty_result_has_no_questions(self):
        board = QuestionBoard(reveal_delay=0, clock=FakeClock())
        board.update_form(company="Google", role="SDE Intern", count=3)
        board.submit(FakeGenerator(InterviewResult.from_payload(None)))
        board.poll()

        assert board.phase == Phase.RESULTS
        assert not board.result.is_renderable
        assert board.questions == []
