"""
Interview Question Board State.

Three-phase display state for the question generator screen:

    home --begin_submit--> loading --(result + reveal delay)--> results
                           loading --apply_error--> home
    any --new_search--> home

The success transition is deferred by a fixed reveal delay. The delay is a
cancellable RevealTimer tied to the request generation: a reset or a newer
submission supersedes it, so a stale timer never flips the phase.

Thread Safety:
    Transitions are guarded by an internal lock so a worker thread may
    settle a ticket while the UI thread polls.

Last Grunted: 10/19/2026
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol

from pydantic import ValidationError

from .models import (
    DEFAULT_QUESTION_COUNT,
    MAX_QUESTION_COUNT,
    MIN_QUESTION_COUNT,
    InterviewRequest,
    InterviewResult,
    Question,
)
from .errors import EndpointError, TransportError


__all__ = [
    "Phase",
    "QuestionTicket",
    "RevealTimer",
    "QuestionBoard",
    "QuestionClient",
    "DEFAULT_REVEAL_DELAY_SECONDS",
    "CONNECTION_ERROR_MESSAGE",
    "INVALID_FORM_MESSAGE",
]


logger = logging.getLogger(__name__)


DEFAULT_REVEAL_DELAY_SECONDS = 1.5

CONNECTION_ERROR_MESSAGE = "An error occurred. Please check your connection and try again."
INVALID_FORM_MESSAGE = (
    f"Please enter a company, a role and a question count between "
    f"{MIN_QUESTION_COUNT} and {MAX_QUESTION_COUNT}."
)


class Phase(str, Enum):
    """Display phase of the question board."""

    HOME = "home"
    LOADING = "loading"
    RESULTS = "results"


class QuestionClient(Protocol):
    """Anything that can run one generation request."""

    def generate(self, request: InterviewRequest) -> InterviewResult:
        ...


@dataclass(frozen=True)
class QuestionTicket:
    """Handle for one in-flight generation request."""

    generation: int
    request: InterviewRequest


@dataclass
class RevealTimer:
    """Deferred loading -> results transition for one generation."""

    generation: int
    due_at: float
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    def remaining(self, now: float) -> float:
        return max(0.0, self.due_at - now)

    def is_due(self, now: float) -> bool:
        return not self.cancelled and now >= self.due_at


class QuestionBoard:
    """
    State machine for the interview question generator screen.

    Responsibilities:
        - Hold the company/role/count form and validate it
        - Track the home/loading/results phase
        - Defer the results reveal by a fixed delay
        - Keep at most one question expanded at a time

    Example:
        >>> board = QuestionBoard(reveal_delay=0)
        >>> board.update_form(company="Google", role="SDE Intern", count=3)
        >>> board.submit(endpoint)
        True
        >>> board.poll()
        True
        >>> board.phase
        <Phase.RESULTS: 'results'>
    """

    def __init__(
        self,
        reveal_delay: float = DEFAULT_REVEAL_DELAY_SECONDS,
        dark_mode: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if reveal_delay < 0:
            raise ValueError("reveal_delay must be >= 0")

        self.reveal_delay = reveal_delay
        self.dark_mode = dark_mode
        self._clock = clock
        self._lock = threading.Lock()
        self._generation = 0
        self._timer: Optional[RevealTimer] = None
        self._clear()

    def _clear(self) -> None:
        self.phase = Phase.HOME
        self.company = ""
        self.role = ""
        self.count: int = DEFAULT_QUESTION_COUNT
        self.result: Optional[InterviewResult] = None
        self.error: Optional[str] = None
        self.expanded_id: Optional[int | str] = None

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def can_submit(self) -> bool:
        """Whether the submit control may be triggered."""
        return (
            self.phase != Phase.LOADING
            and bool(self.company.strip())
            and bool(self.role.strip())
            and isinstance(self.count, int)
            and MIN_QUESTION_COUNT <= self.count <= MAX_QUESTION_COUNT
        )

    @property
    def questions(self) -> list[Question]:
        if self.result is None or self.result.questions is None:
            return []
        return list(self.result.questions)

    def reveal_remaining(self) -> Optional[float]:
        """Seconds until the pending results reveal, or None if none is armed."""
        with self._lock:
            if self._timer is None or self._timer.cancelled:
                return None
            return self._timer.remaining(self._clock())

    # -------------------------------------------------------------------------
    # Form events
    # -------------------------------------------------------------------------

    def update_form(
        self,
        company: Optional[str] = None,
        role: Optional[str] = None,
        count: Optional[int] = None,
    ) -> None:
        if company is not None:
            self.company = company
        if role is not None:
            self.role = role
        if count is not None:
            self.count = count

    def toggle_theme(self) -> bool:
        self.dark_mode = not self.dark_mode
        return self.dark_mode

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    def begin_submit(self) -> Optional[QuestionTicket]:
        """
        Validate the form and move to loading.

        An invalid form sets a local error and stays on home; no request is
        built. Ignored while a request is already loading.
        """
        with self._lock:
            if self.phase == Phase.LOADING:
                logger.debug("Generation already in flight; ignoring submit")
                return None

            try:
                request = InterviewRequest(
                    company=self.company,
                    role=self.role,
                    count=self.count,
                )
            except ValidationError as e:
                logger.info("Rejected question form: %s", e.errors(include_url=False))
                self.error = INVALID_FORM_MESSAGE
                self.result = None
                self.phase = Phase.HOME
                return None

            self._cancel_timer()
            self._generation += 1
            self.phase = Phase.LOADING
            self.error = None
            self.result = None
            self.expanded_id = None
            logger.debug("Question generation %d started", self._generation)
            return QuestionTicket(generation=self._generation, request=request)

    def apply_result(self, ticket: QuestionTicket, result: InterviewResult) -> bool:
        """Store the result and arm the reveal timer. Stale tickets are ignored."""
        with self._lock:
            if not self._is_current(ticket):
                return False
            self.result = result
            self.error = None
            self._timer = RevealTimer(
                generation=ticket.generation,
                due_at=self._clock() + self.reveal_delay,
            )
            return True

    def apply_error(self, ticket: QuestionTicket, message: str) -> bool:
        """Revert to home with an error. Stale tickets are ignored."""
        with self._lock:
            if not self._is_current(ticket):
                return False
            self._cancel_timer()
            self.result = None
            self.error = message or CONNECTION_ERROR_MESSAGE
            self.phase = Phase.HOME
            return True

    def _is_current(self, ticket: QuestionTicket) -> bool:
        if (
            ticket.generation != self._generation
            or self.phase != Phase.LOADING
            or self._timer is not None
        ):
            logger.info(
                "Dropping stale generation response (generation %d, current %d)",
                ticket.generation,
                self._generation,
            )
            return False
        return True

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def poll(self) -> bool:
        """
        Fire the reveal timer when it is due.

        Returns:
            True if the phase moved from loading to results.
        """
        with self._lock:
            timer = self._timer
            if timer is None or not timer.is_due(self._clock()):
                return False

            self._timer = None
            if timer.generation != self._generation or self.phase != Phase.LOADING:
                logger.debug("Discarding stale reveal timer (generation %d)", timer.generation)
                return False

            self.phase = Phase.RESULTS
            return True

    def submit(self, client: QuestionClient) -> bool:
        """
        Validate, call the endpoint once, and settle.

        On success the board stays in loading until ``poll`` fires the
        reveal timer.

        Returns:
            True if a request was sent and its outcome applied.
        """
        ticket = self.begin_submit()
        if ticket is None:
            return False
        return self.resolve(ticket, client)

    def resolve(self, ticket: QuestionTicket, client: QuestionClient) -> bool:
        """Run the request behind ``ticket`` and settle it."""
        try:
            result = client.generate(ticket.request)
        except EndpointError as e:
            return self.apply_error(ticket, e.message)
        except TransportError as e:
            logger.warning("Question generation transport failure: %s", e)
            return self.apply_error(ticket, CONNECTION_ERROR_MESSAGE)

        return self.apply_result(ticket, result)

    # -------------------------------------------------------------------------
    # Results view
    # -------------------------------------------------------------------------

    def toggle_question(self, question_id: int | str) -> None:
        """Expand ``question_id`` exclusively, or collapse it if already open."""
        with self._lock:
            if self.expanded_id == question_id:
                self.expanded_id = None
            else:
                self.expanded_id = question_id

    def is_expanded(self, question_id: int | str) -> bool:
        return self.expanded_id == question_id

    def new_search(self) -> None:
        """Return to home with all fields, results and expansion cleared."""
        with self._lock:
            self._cancel_timer()
            self._generation += 1
            self._clear()
        logger.debug("Question board reset (generation %d)", self._generation)
