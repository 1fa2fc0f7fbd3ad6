#!/usr/bin/env python3
"""
Launch the Interview Prep Gateway Streamlit UI against a pair of endpoints.
"""

from __future__ import annotations

import argparse
import os
import subprocess
from pathlib import Path


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the Interview Prep Gateway Streamlit UI.",
    )
    parser.add_argument("--port", type=int, default=8501, help="Streamlit port.")
    parser.add_argument("--host", default="127.0.0.1", help="Streamlit bind host.")
    parser.add_argument(
        "--verify-url",
        default=None,
        help="Face verification endpoint URL (overrides FACE_VERIFY_URL).",
    )
    parser.add_argument(
        "--interview-url",
        default=None,
        help="Question generation endpoint URL (overrides QUESTION_GEN_URL).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="HTTP timeout in seconds (overrides HTTP_TIMEOUT_SECONDS).",
    )
    parser.add_argument(
        "--light",
        action="store_true",
        help="Start the question screen in light mode.",
    )
    return parser.parse_args(argv)


def build_env(args: argparse.Namespace, base: dict[str, str] | None = None) -> dict[str, str]:
    """Copy the environment and apply command-line overrides."""
    env = dict(os.environ if base is None else base)
    if args.verify_url:
        env["FACE_VERIFY_URL"] = args.verify_url
    if args.interview_url:
        env["QUESTION_GEN_URL"] = args.interview_url
    if args.timeout is not None:
        env["HTTP_TIMEOUT_SECONDS"] = str(args.timeout)
    if args.light:
        env["DARK_MODE"] = "false"
    return env


def main() -> None:
    args = parse_args()
    env = build_env(args)

    cmd = [
        "streamlit",
        "run",
        "streamlit_ui.py",
        "--server.port",
        str(args.port),
        "--server.address",
        args.host,
    ]
    print(
        f"Starting Interview Prep UI bind=http://{args.host}:{args.port} "
        f"verify={env.get('FACE_VERIFY_URL', '<default>')} "
        f"interview={env.get('QUESTION_GEN_URL', '<default>')}"
    )
    subprocess.run(cmd, check=True, cwd=Path(__file__).parent, env=env)


if __name__ == "__main__":
    main()
