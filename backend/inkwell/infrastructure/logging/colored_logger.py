"""Colored lifecycle logger — ANSI-colored console logging for article lifecycle steps.

Provides a LifecycleLogger with color-coded output per deletion stage,
so a fallback from hard delete to soft delete is easy to spot in the
terminal.

Color scheme:
    🔵 Blue    — Precheck
    🟢 Green   — Hard delete / completion
    🟡 Yellow  — Verification
    🟣 Magenta — Soft delete
    🟠 Cyan    — Minimal marker
    🔴 Red     — Errors
    ⚪ Gray    — Details
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
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"


# ── Lifecycle Stage Definitions ──────────────────────────────────────

class LifecycleStage:
    """Predefined lifecycle stages with colors and icons."""

    PRECHECK = ("PRECHECK", _Colors.BLUE, "🔎")
    HARD_DELETE = ("HARD_DELETE", _Colors.GREEN, "🗑️")
    VERIFY = ("VERIFY", _Colors.YELLOW, "🔁")
    SOFT_DELETE = ("SOFT_DELETE", _Colors.MAGENTA, "🙈")
    MINIMAL_MARK = ("MINIMAL_MARK", _Colors.CYAN, "🏷️")
    COMPLETE = ("COMPLETE", _Colors.GREEN, "✅")


# ── LifecycleLogger ──────────────────────────────────────────────────

class LifecycleLogger:
    """Color-coded logger for article lifecycle operations.

    Usage:
        log = LifecycleLogger("ArticleLifecycle")
        log.step_start(LifecycleStage.HARD_DELETE, "Deleting article", article_id=article_id)
        log.detail("Removed 3 comments")
        log.step_complete(LifecycleStage.HARD_DELETE, "Row removed")
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)
        self._component = component_name

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log the start of a lifecycle step with its stage color."""
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        if kwargs:
            details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
            formatted += f" {_Colors.GRAY}({details}){_Colors.RESET}"
        self._logger.info(formatted)

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log the successful completion of a lifecycle step."""
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        if kwargs:
            details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
            formatted += f" {_Colors.GRAY}({details}){_Colors.RESET}"
        self._logger.info(formatted)

    def step_warning(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        """Log a recovered failure — the lifecycle falls through to the next stage."""
        label, _, icon = stage
        formatted = f"{_Colors.YELLOW}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} {_Colors.YELLOW}{message}{_Colors.RESET}"
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.warning(formatted)

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        """Log a lifecycle step error in red."""
        label, _, icon = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        """Log additional detail (gray/dimmed)."""
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        if kwargs:
            details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
            formatted += f" {_Colors.DIM}({details}){_Colors.RESET}"
        self._logger.info(formatted)

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Context manager that logs start/end with elapsed time.

        Usage:
            with log.timed_step(LifecycleStage.VERIFY, "Re-reading article"):
                article = await repository.get_by_id(article_id)
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
