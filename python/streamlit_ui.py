#!/usr/bin/env python3
"""
Streamlit UI for the Interview Prep Gateway.

Two screens, selected by the ``page`` query parameter:
- verify (default): user id + selfie -> face verification endpoint
- interview: company/role/count -> interview question generation endpoint

All state transitions live in ``interview_prep``; this module only renders
widgets and forwards events.

Usage:
    uv run streamlit run streamlit_ui.py --server.port 8501
    uv run python run_ui.py --port 8501 --verify-url ... --interview-url ...
"""

from __future__ import annotations

import hashlib
import html
import logging
import time
from typing import Final

import streamlit as st

from interview_prep import (
    ImageUpload,
    Phase,
    Question,
    QuestionBoard,
    VerificationScreen,
    difficulty_style,
    format_similarity,
    outcome_title,
    theme_palette,
)
from interview_prep.models import MAX_QUESTION_COUNT, MIN_QUESTION_COUNT
from prep_platform import PLATFORM_NAME, load_runtime_config
from prep_platform.endpoints import build_endpoints

# =============================================================================
# Configuration
# =============================================================================

CONFIG = load_runtime_config()
ENDPOINTS = build_endpoints(CONFIG)

# =============================================================================
# Logging Configuration
# =============================================================================

logging.basicConfig(
    level=CONFIG.log_level_value,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger: logging.Logger = logging.getLogger(__name__)

VERIFY_PAGE: Final[str] = "verify"
INTERVIEW_PAGE: Final[str] = "interview"
PAGES: Final[tuple[str, ...]] = (VERIFY_PAGE, INTERVIEW_PAGE)

IMAGE_TYPES: Final[list[str]] = ["png", "jpg", "jpeg", "webp", "gif", "bmp"]
PREVIEW_WIDTH_PX: Final[int] = 128

# Upper bound on one sleep while waiting for the results reveal
REVEAL_POLL_SECONDS: Final[float] = 0.25


# =============================================================================
# Page Configuration
# =============================================================================

st.set_page_config(
    page_title=PLATFORM_NAME,
    page_icon="🎯",
    layout="centered",
    initial_sidebar_state="collapsed",
)


st.markdown("""
<style>
#MainMenu {visibility: hidden;}
footer {visibility: hidden;}
.stDeployButton {display: none;}

.question-chip {
    display: inline-block;
    font-weight: 700;
    font-size: 0.8rem;
    padding: 0.3rem 0.9rem;
    border-radius: 999px;
    margin-right: 0.5rem;
    background: rgba(99, 102, 241, 0.15);
    color: #6366F1;
}

.difficulty-badge {
    display: inline-block;
    font-weight: 600;
    font-size: 0.7rem;
    padding: 0.3rem 0.9rem;
    border-radius: 999px;
}

.follow-up {
    padding: 0.6rem 0.9rem;
    border-radius: 10px;
    margin-bottom: 0.4rem;
    background: rgba(148, 163, 184, 0.12);
}
</style>
""", unsafe_allow_html=True)


# =============================================================================
# State Management
# =============================================================================

def init_state() -> None:
    """
    Initialize Streamlit session state for both screens.

    Only initializes state on first run; subsequent calls are no-ops.
    """
    if "init" not in st.session_state:
        st.session_state.init = True
        st.session_state.verification = VerificationScreen()
        st.session_state.board = QuestionBoard(
            reveal_delay=CONFIG.reveal_delay_seconds,
            dark_mode=CONFIG.dark_mode,
        )
        st.session_state.verify_form_key = 0
        st.session_state.interview_form_key = 0
        st.session_state.last_image_sig = None
        st.session_state.pending_question_ticket = None


def current_page() -> str:
    page = st.query_params.get("page", VERIFY_PAGE)
    return page if page in PAGES else VERIFY_PAGE


def go_to(page: str) -> None:
    st.query_params["page"] = page
    st.rerun()


# =============================================================================
# Helper Functions
# =============================================================================

def to_upload(uploaded_file: object) -> ImageUpload | None:
    """Convert a Streamlit UploadedFile (uploader or camera) to an ImageUpload."""
    if uploaded_file is None:
        return None
    return ImageUpload(
        name=getattr(uploaded_file, "name", "capture.jpg"),
        mime_type=getattr(uploaded_file, "type", "") or "",
        content=uploaded_file.getvalue(),
    )


def image_signature(upload: ImageUpload) -> str:
    return hashlib.sha1(upload.content).hexdigest()


def esc(value: object) -> str:
    return html.escape(str(value)) if value is not None else ""


# =============================================================================
# Verification Screen
# =============================================================================

def reset_verification() -> None:
    st.session_state.verification.reset()
    st.session_state.verify_form_key += 1
    st.session_state.last_image_sig = None


def render_verification() -> None:
    """
    Render the face verification screen.

    Layout:
    - User ID input and selfie source (upload or camera)
    - Preview, submit button, error panel
    - Outcome panel with Continue (match) or Try Again (no match)
    """
    screen: VerificationScreen = st.session_state.verification
    form_key = st.session_state.verify_form_key

    st.markdown("## 📷 Face Verification")
    st.caption("Verify your identity securely")

    with st.container(border=True):
        user_id = st.text_input(
            "User ID",
            value=screen.user_id,
            placeholder="Enter your user ID",
            disabled=screen.is_loading,
            key=f"user_id_{form_key}",
        )
        screen.set_user_id(user_id)

        source = st.radio(
            "Selfie source",
            ("Upload file", "Use camera"),
            horizontal=True,
            key=f"image_source_{form_key}",
        )
        if source == "Upload file":
            picked = st.file_uploader(
                "Upload Selfie",
                type=IMAGE_TYPES,
                disabled=screen.is_loading,
                key=f"image_file_{form_key}",
            )
        else:
            picked = st.camera_input(
                "Take a selfie",
                disabled=screen.is_loading,
                key=f"camera_{form_key}",
            )

        upload = to_upload(picked)
        if upload is not None:
            sig = image_signature(upload)
            if sig != st.session_state.last_image_sig:
                st.session_state.last_image_sig = sig
                screen.select_image(upload)
        elif st.session_state.last_image_sig is not None:
            # Picker was emptied (or the source switched)
            st.session_state.last_image_sig = None
            screen.clear_image()

        if screen.image is not None and screen.preview:
            st.caption(f"Selected: {screen.image.name}")
            st.image(screen.image.content, caption="Preview", width=PREVIEW_WIDTH_PX)

        if st.button(
            "Verify Identity",
            type="primary",
            disabled=screen.is_loading,
            use_container_width=True,
        ):
            with st.spinner("Verifying..."):
                screen.submit(ENDPOINTS.face_verification)
            st.rerun()

    if screen.error:
        st.error(f"**Verification Failed**\n\n{screen.error}")

    if screen.result is not None:
        title = outcome_title(screen.result)
        score = format_similarity(screen.result.similarity)
        body = f"**{title}**\n\nSimilarity Score: {score}"
        if screen.result.is_match:
            st.success(body, icon="✅")
        else:
            st.warning(body, icon="⚠️")

        if screen.can_continue:
            if st.button("Continue to Interview", type="primary", use_container_width=True):
                target = screen.continue_target()
                if target:
                    go_to(target)
        elif st.button("Try Again", use_container_width=True):
            reset_verification()
            st.rerun()

    st.info(f"**Note:** verification requests are sent to `{CONFIG.verify_url}`")


# =============================================================================
# Interview Question Screen
# =============================================================================

def apply_theme(dark_mode: bool) -> None:
    palette = theme_palette(dark_mode)
    st.markdown(
        f"""
        <style>
        .stApp {{ background: {palette.page_background}; }}
        .stApp, .stApp p, .stApp label, .stApp h1, .stApp h2, .stApp h3 {{ color: {palette.text}; }}
        .muted {{ color: {palette.muted_text}; }}
        .board-error {{
            background: {palette.error_background};
            color: {palette.error_text};
            padding: 0.9rem 1rem;
            border-radius: 12px;
            margin-bottom: 1rem;
        }}
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_home(board: QuestionBoard) -> None:
    form_key = st.session_state.interview_form_key

    st.markdown("# 🔍 Interview Prep AI")
    st.markdown(
        "<p class='muted'>Generate tailored interview questions powered by AI</p>",
        unsafe_allow_html=True,
    )

    with st.container(border=True):
        company = st.text_input(
            "🏢 Target Company",
            value=board.company,
            placeholder="e.g., Google, Microsoft, Amazon",
            key=f"company_{form_key}",
        )
        role = st.text_input(
            "💼 Job Role",
            value=board.role,
            placeholder="e.g., SDE Intern, Full Stack Developer",
            key=f"role_{form_key}",
        )
        count = st.number_input(
            "🔢 Number of Questions",
            min_value=MIN_QUESTION_COUNT,
            max_value=MAX_QUESTION_COUNT,
            value=board.count,
            step=1,
            key=f"count_{form_key}",
        )
        board.update_form(company=company, role=role, count=int(count))

        if board.error:
            st.markdown(
                f"<div class='board-error'>⚠️ {esc(board.error)}</div>",
                unsafe_allow_html=True,
            )

        if st.button(
            "Generate Questions →",
            type="primary",
            disabled=not board.can_submit,
            use_container_width=True,
        ):
            ticket = board.begin_submit()
            if ticket is not None:
                st.session_state.pending_question_ticket = ticket
            st.rerun()


def render_loading(board: QuestionBoard) -> None:
    """Show the loading view; run the pending request or wait for the reveal."""
    st.markdown("## Generating Questions...")
    st.markdown(
        "<p class='muted'>AI is crafting personalized questions for you</p>",
        unsafe_allow_html=True,
    )
    st.progress(0.5)

    ticket = st.session_state.pending_question_ticket
    if ticket is not None:
        st.session_state.pending_question_ticket = None
        board.resolve(ticket, ENDPOINTS.question_generation)
        st.rerun()

    remaining = board.reveal_remaining()
    if remaining is None:
        # Ticket was lost (e.g. page refresh mid-flight); start over.
        logger.warning("Loading phase without a pending request; returning home")
        board.new_search()
        st.rerun()

    time.sleep(min(remaining, REVEAL_POLL_SECONDS))
    board.poll()
    st.rerun()


def render_question(board: QuestionBoard, question: Question) -> None:
    badge = difficulty_style(question.difficulty, board.dark_mode)
    expanded = board.is_expanded(question.id)

    with st.container(border=True):
        st.markdown(
            f"<span class='question-chip'>Question {esc(question.id)}</span>"
            f"<span class='difficulty-badge' style='{badge.css()}'>{esc(question.badge)}</span>",
            unsafe_allow_html=True,
        )
        st.markdown(f"### {question.text}")

        label = "▲ Hide details" if expanded else "▼ Show details"
        if st.button(label, key=f"toggle_{question.id}"):
            board.toggle_question(question.id)
            st.rerun()

        if expanded:
            st.markdown("**✓ IDEAL ANSWER**")
            st.markdown(question.ideal_answer)
            st.markdown("**📖 EXPLANATION**")
            st.markdown(question.explanation)
            if question.follow_ups:
                st.markdown("**💡 FOLLOW-UP QUESTIONS**")
                for follow_up in question.follow_ups:
                    st.markdown(
                        f"<div class='follow-up'>→ {esc(follow_up)}</div>",
                        unsafe_allow_html=True,
                    )


def render_results(board: QuestionBoard) -> None:
    if st.button("🏠 New Search"):
        board.new_search()
        st.session_state.interview_form_key += 1
        st.session_state.pending_question_ticket = None
        st.rerun()

    result = board.result
    if result is None or not result.is_renderable:
        st.markdown("### No results to display")
        return

    metadata = result.metadata
    with st.container(border=True):
        st.markdown("## ✅ Questions Generated!")
        col_company, col_role, col_count = st.columns(3)
        col_company.metric("Company", metadata.company or "N/A")
        col_role.metric("Role", metadata.role or "N/A")
        col_count.metric("Questions", metadata.count if metadata.count is not None else "N/A")

    questions = board.questions
    if not questions:
        st.info("No questions available")
        return

    for question in questions:
        render_question(board, question)


def render_interview() -> None:
    """
    Render the interview question generator screen.

    Phases:
    - home: form with company, role, count
    - loading: request in flight, then the reveal delay
    - results: metadata header and collapsible question cards
    """
    board: QuestionBoard = st.session_state.board

    _, col_theme = st.columns([4, 1])
    with col_theme:
        dark_mode = st.toggle("🌙 Dark", value=board.dark_mode)
        if dark_mode != board.dark_mode:
            board.toggle_theme()
    apply_theme(board.dark_mode)

    if board.phase == Phase.HOME:
        render_home(board)
    elif board.phase == Phase.LOADING:
        render_loading(board)
    else:
        render_results(board)


# =============================================================================
# Main Application
# =============================================================================

def main() -> None:
    """Main Streamlit application entry point."""
    init_state()

    if current_page() == INTERVIEW_PAGE:
        render_interview()
    else:
        render_verification()


if __name__ == "__main__":
    main()
