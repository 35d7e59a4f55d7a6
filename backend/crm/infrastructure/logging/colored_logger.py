"""Colored pipeline logger for customer imports.

One colored line per import stage, a dimmed line per rejected row, and
elapsed time when a stage finishes, so a large spreadsheet import can be
followed in the terminal.

Color scheme:
    Yellow  - reading the source file
    Blue    - validating and inserting rows
    Green   - saving and completion
    Red     - failures and rejected rows
"""

import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator, NamedTuple

_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_RED = "\033[91m"
_GREEN = "\033[92m"
_YELLOW = "\033[93m"
_BLUE = "\033[94m"
_GRAY = "\033[90m"


class Stage(NamedTuple):
    label: str
    color: str
    icon: str

    @property
    def tag(self) -> str:
        return f"{self.icon} [{self.label}]"


class PipelineStage:
    """The stages of one import run."""

    READ = Stage("READ", _YELLOW, "📄")
    IMPORT = Stage("IMPORT", _BLUE, "👥")
    PERSIST = Stage("PERSIST", _GREEN, "💾")
    ERROR = Stage("ERROR", _RED, "❌")
    COMPLETE = Stage("COMPLETE", _GREEN, "✅")


def _details(fields: dict[str, Any]) -> str:
    if not fields:
        return ""
    joined = ", ".join(f"{key}={value}" for key, value in fields.items())
    return f" {_GRAY}[{joined}]{_RESET}"


class PipelineLogger:
    """Wraps a named stdlib logger with stage-aware, colored messages.

    Usage:
        log = PipelineLogger("CustomerImport")
        with log.timed_step(PipelineStage.READ, "Reading customers.csv"):
            candidates = source.read()
        log.rejection(3, "Số điện thoại không hợp lệ")
    """

    def __init__(self, name: str):
        self._logger = logging.getLogger(name)

    def step_start(self, stage: Stage, message: str, **fields: Any) -> None:
        self._logger.info(f"{stage.color}{_BOLD}{stage.tag}{_RESET} {stage.color}{message}{_RESET}{_details(fields)}")

    def step_complete(self, stage: Stage, message: str, **fields: Any) -> None:
        self._logger.info(f"{stage.color}{stage.tag}{_RESET} {_GREEN}✓ {message}{_RESET}{_details(fields)}")

    def step_error(self, stage: Stage, message: str, error: BaseException | None = None) -> None:
        err = PipelineStage.ERROR
        line = f"{err.color}{_BOLD}{err.icon} [{stage.label}]{_RESET} {err.color}{message}{_RESET}"
        if error is not None:
            line += f" {_DIM}({type(error).__name__}: {error}){_RESET}"
        self._logger.error(line)

    def warning(self, stage: Stage, message: str) -> None:
        self._logger.warning(f"{_YELLOW}{stage.tag} ⚠ {message}{_RESET}")

    def rejection(self, source_ref: int | str, reason: str) -> None:
        """One rejected row, dimmed so a long list stays readable."""
        self._logger.info(f"   {_GRAY}├─ {_RED}row {source_ref}{_GRAY}: {reason}{_RESET}")

    @contextmanager
    def timed_step(self, stage: Stage, message: str, **fields: Any) -> Iterator[None]:
        """Log a stage's start and finish with its duration; failures are logged and re-raised."""
        self.step_start(stage, message, **fields)
        started = time.perf_counter()
        try:
            yield
        except Exception as exc:
            self.step_error(stage, f"{message} failed after {time.perf_counter() - started:.2f}s", error=exc)
            raise
        self.step_complete(stage, f"{message} in {time.perf_counter() - started:.2f}s")
