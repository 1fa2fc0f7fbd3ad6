"""
Presentation mapping for both screens.

Pure functions only: difficulty badges per theme, verification outcome
labels, similarity formatting and the page palettes used by the UI.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .models import Difficulty, VerificationResponse


__all__ = [
    "BadgeStyle",
    "ThemePalette",
    "difficulty_style",
    "theme_palette",
    "outcome_title",
    "format_similarity",
    "MATCH_TITLE",
    "NO_MATCH_TITLE",
]


MATCH_TITLE = "Match Found!"
NO_MATCH_TITLE = "No Match"
MISSING_VALUE = "N/A"


@dataclass(frozen=True)
class BadgeStyle:
    """Fixed colour set for one difficulty badge."""

    level: Difficulty
    background: str
    foreground: str
    border: str

    def css(self) -> str:
        return (
            f"background:{self.background};color:{self.foreground};"
            f"border:1px solid {self.border};"
        )


@dataclass(frozen=True)
class ThemePalette:
    """Page-level colours for one theme."""

    page_background: str
    card_background: str
    card_border: str
    text: str
    muted_text: str
    accent: str
    error_background: str
    error_text: str


_DARK_BADGES: dict[Difficulty, BadgeStyle] = {
    Difficulty.EASY: BadgeStyle(Difficulty.EASY, "rgba(20, 83, 45, 0.5)", "#86EFAC", "#15803D"),
    Difficulty.MEDIUM: BadgeStyle(Difficulty.MEDIUM, "rgba(113, 63, 18, 0.5)", "#FDE047", "#A16207"),
    Difficulty.HARD: BadgeStyle(Difficulty.HARD, "rgba(127, 29, 29, 0.5)", "#FCA5A5", "#B91C1C"),
    Difficulty.OTHER: BadgeStyle(Difficulty.OTHER, "#1F2937", "#D1D5DB", "#374151"),
}

_LIGHT_BADGES: dict[Difficulty, BadgeStyle] = {
    Difficulty.EASY: BadgeStyle(Difficulty.EASY, "#DCFCE7", "#166534", "#BBF7D0"),
    Difficulty.MEDIUM: BadgeStyle(Difficulty.MEDIUM, "#FEF9C3", "#854D0E", "#FEF08A"),
    Difficulty.HARD: BadgeStyle(Difficulty.HARD, "#FEE2E2", "#991B1B", "#FECACA"),
    Difficulty.OTHER: BadgeStyle(Difficulty.OTHER, "#F3F4F6", "#1F2937", "#E5E7EB"),
}

_DARK_PALETTE = ThemePalette(
    page_background="linear-gradient(135deg, #111827 0%, #1E1B4B 50%, #3B0764 100%)",
    card_background="rgba(17, 24, 39, 0.5)",
    card_border="#1F2937",
    text="#FFFFFF",
    muted_text="#9CA3AF",
    accent="#818CF8",
    error_background="rgba(127, 29, 29, 0.3)",
    error_text="#FCA5A5",
)

_LIGHT_PALETTE = ThemePalette(
    page_background="linear-gradient(135deg, #EEF2FF 0%, #FFFFFF 50%, #FAF5FF 100%)",
    card_background="#FFFFFF",
    card_border="#E5E7EB",
    text="#1F2937",
    muted_text="#4B5563",
    accent="#4F46E5",
    error_background="#FEF2F2",
    error_text="#991B1B",
)


def difficulty_style(difficulty: Optional[str | Difficulty], dark_mode: bool) -> BadgeStyle:
    """
    Map a difficulty tag and theme to a badge style.

    Args:
        difficulty: Raw label ("easy", "Medium", ...) or a Difficulty.
            Unknown or missing values fall back to the neutral style.
        dark_mode: Which theme the badge is drawn on.

    Returns:
        The fixed BadgeStyle for that combination.
    """
    level = difficulty if isinstance(difficulty, Difficulty) else Difficulty.parse(difficulty)
    table = _DARK_BADGES if dark_mode else _LIGHT_BADGES
    return table[level]


def theme_palette(dark_mode: bool) -> ThemePalette:
    return _DARK_PALETTE if dark_mode else _LIGHT_PALETTE


def outcome_title(response: VerificationResponse) -> str:
    return MATCH_TITLE if response.is_match else NO_MATCH_TITLE


def format_similarity(value: Optional[float]) -> str:
    """Format a similarity percentage with two decimals, e.g. ``97.30%``."""
    if value is None:
        return MISSING_VALUE
    return f"{value:.2f}%"
