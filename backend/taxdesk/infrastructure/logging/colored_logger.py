"""Colored session logger — ANSI-colored console logging for load and save steps.

Provides a SessionLogger with color-coded output per session stage,
making it easy to follow a load or an edit round-trip in the terminal.

Color scheme:
    Blue    — Initial load / retry
    Cyan    — Remote record store calls
    Magenta — Edit transaction
    Green   — Completed steps
    Red     — Errors
    Gray    — Timing
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"


# ── Session Stage Definitions ────────────────────────────────────────

class SessionStage:
    """Predefined session stages with colors and icons."""

    LOAD = ("LOAD", _Colors.BLUE, "📥")
    STORE = ("STORE", _Colors.CYAN, "🌐")
    EDIT = ("EDIT", _Colors.MAGENTA, "✏️")
    SAVE = ("SAVE", _Colors.MAGENTA, "💾")
    RECONCILE = ("RECONCILE", _Colors.GREEN, "🔁")


# ── SessionLogger ────────────────────────────────────────────────────

class SessionLogger:
    """Color-coded logger for session steps.

    Usage:
        log = SessionLogger("taxdesk.session")
        with log.timed_step(SessionStage.LOAD, "Loading records and countries"):
            await session.load()
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log the start of a step with its stage color."""
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        formatted += _format_details(kwargs)
        self._logger.info(formatted)

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log the successful completion of a step."""
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        formatted += _format_details(kwargs)
        self._logger.info(formatted)

    def step_error(self, stage: tuple[str, str, str], message: str, error: BaseException | None = None) -> None:
        """Log a step error in red."""
        label, _, _ = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Context manager that logs start/end with elapsed time.

        Exceptions are logged and re-raised unchanged.
        """
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} — failed after {elapsed:.2f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} — {elapsed:.2f}s", **kwargs)


def _format_details(kwargs: dict[str, Any]) -> str:
    if not kwargs:
        return ""
    details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
    return f" {_Colors.GRAY}({details}){_Colors.RESET}"
