"""Load and validate runtime configuration for the Interview Prep Gateway."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

from dotenv import load_dotenv


PLATFORM_NAME = "Interview Prep Gateway"

DEFAULT_VERIFY_URL = "http://127.0.0.1:8000/dev/verify"
DEFAULT_INTERVIEW_URL = "http://127.0.0.1:8000/dev/interview"
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0
DEFAULT_REVEAL_DELAY_SECONDS = 1.5

ENV_PATH = Path(__file__).parent.parent / ".env"

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class RuntimeConfig:
    """Runtime config shared by the Streamlit app and its launcher."""

    verify_url: str
    interview_url: str
    http_timeout_seconds: float
    reveal_delay_seconds: float
    dark_mode: bool
    log_level: str

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


def _read(name: str, default: str) -> str:
    return (os.environ.get(name, default) or "").strip()


def _require_url(name: str, default: str) -> str:
    raw = _read(name, default)
    if not raw:
        raise RuntimeError(f"{name} resolved to empty value.")
    parsed = urlparse(raw)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise RuntimeError(f"{name} must be an http(s) URL. Got: {raw}")
    return raw


def _require_float(name: str, default: float, *, allow_zero: bool) -> float:
    raw = _read(name, str(default))
    try:
        value = float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number. Got: {raw}") from exc

    if not math.isfinite(value):
        raise RuntimeError(f"{name} must be a finite number. Got: {raw}")
    if value < 0 or (value == 0 and not allow_zero):
        bound = ">= 0" if allow_zero else "> 0"
        raise RuntimeError(f"{name} must be {bound}. Got: {value}.")
    return value


def _require_bool(name: str, default: bool) -> bool:
    raw = _read(name, "true" if default else "false").lower()
    if raw in _TRUE_WORDS:
        return True
    if raw in _FALSE_WORDS:
        return False
    raise RuntimeError(f"{name} must be a boolean (true/false). Got: {raw}")


def load_runtime_config(env_file: Path | None = ENV_PATH) -> RuntimeConfig:
    """
    Load runtime config from the environment with strict validation.

    Values from ``env_file`` are applied first without overriding variables
    already present in the process environment.

    Raises:
        RuntimeError: When any variable is malformed.
    """
    if env_file is not None and env_file.exists():
        load_dotenv(env_file)

    log_level = _read("LOG_LEVEL", "INFO").upper()
    if log_level not in _LOG_LEVELS:
        supported = ", ".join(sorted(_LOG_LEVELS))
        raise RuntimeError(f"LOG_LEVEL must be one of {supported}. Got: {log_level}")

    return RuntimeConfig(
        verify_url=_require_url("FACE_VERIFY_URL", DEFAULT_VERIFY_URL),
        interview_url=_require_url("QUESTION_GEN_URL", DEFAULT_INTERVIEW_URL),
        http_timeout_seconds=_require_float(
            "HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS, allow_zero=False
        ),
        reveal_delay_seconds=_require_float(
            "REVEAL_DELAY_SECONDS", DEFAULT_REVEAL_DELAY_SECONDS, allow_zero=True
        ),
        dark_mode=_require_bool("DARK_MODE", True),
        log_level=log_level,
    )
