"""Check outcomes and report sinks."""

import logging
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, TextIO

logger = logging.getLogger(__name__)


class CheckStatus(Enum):
    """Status of a check or numbered sub-check."""
    PASS = "pass"
    FAIL = "fail"
    SKIPPED = "skipped"
    DIAGNOSTIC = "diagnostic"
    ERROR = "error"

    @property
    def token(self) -> str:
        """Report token. Diagnostic-only results never render as PASS."""
        return {
            CheckStatus.PASS: "PASS",
            CheckStatus.FAIL: "FAIL",
            CheckStatus.SKIPPED: "SKIPPED",
            CheckStatus.DIAGNOSTIC: "SKIPPED",
            CheckStatus.ERROR: "FAIL",
        }[self]

    @property
    def is_failure(self) -> bool:
        return self in (CheckStatus.FAIL, CheckStatus.ERROR)


@dataclass
class SubCheckResult:
    """Result of one numbered sub-check."""
    number: int
    name: str
    status: CheckStatus
    observed: Optional[float] = None
    expected: Optional[float] = None
    message: str = ""

    def describe(self) -> str:
        """One-line human-readable description."""
        text = f"Test {self.number} ({self.name}): {self.status.token}"
        if self.status is CheckStatus.SKIPPED:
            text += " [inconclusive]"
        if self.observed is not None:
            text += f", observed {self.observed:.6e}"
        if self.expected is not None:
            text += f", expected {self.expected:.6e}"
        if self.message:
            text += f" - {self.message}"
        return text


@dataclass
class CheckOutcome:
    """Result of a single check."""
    name: str
    status: CheckStatus
    subchecks: List[SubCheckResult] = field(default_factory=list)
    values: Dict[str, float] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        """True unless the check failed or errored."""
        return not self.status.is_failure

    @property
    def failed_subchecks(self) -> List[SubCheckResult]:
        return [s for s in self.subchecks if s.status.is_failure]

    def subcheck(self, name: str) -> Optional[SubCheckResult]:
        """Look up a sub-check by name."""
        for result in self.subchecks:
            if result.name == name:
                return result
        return None

    def summary_line(self) -> str:
        """Summary line used by the aggregate report."""
        line = f"{self.name}: {self.status.token}"
        if self.status is CheckStatus.DIAGNOSTIC:
            line += " (no automatic verdict, inspect written output)"
        elif self.status is CheckStatus.ERROR and self.error:
            line += f" ({self.error})"
        elif self.status is CheckStatus.SKIPPED and self.error:
            line += f" ({self.error})"
        elif self.failed_subchecks:
            numbers = ", ".join(str(s.number) for s in self.failed_subchecks)
            line += f" (failed sub-checks: {numbers})"
        return line


class ReportSink:
    """Append-only text channel for diagnostic lines."""

    def write(self, line: str) -> None:
        raise NotImplementedError

    def __call__(self, line: str) -> None:
        self.write(line)


class StreamSink(ReportSink):
    """Write lines to a text stream such as stdout or an open file."""

    def __init__(self, stream: Optional[TextIO] = None, flush: bool = True):
        self.stream = stream if stream is not None else sys.stdout
        self.flush = flush

    def write(self, line: str) -> None:
        self.stream.write(line + "\n")
        if self.flush:
            self.stream.flush()


class LoggerSink(ReportSink):
    """Forward lines to a logger."""

    def __init__(self, logger_: Optional[logging.Logger] = None, level: int = logging.INFO):
        self.logger = logger_ if logger_ is not None else logging.getLogger("pintcheck.report")
        self.level = level

    def write(self, line: str) -> None:
        self.logger.log(self.level, line)


class MemorySink(ReportSink):
    """Collect lines in memory."""

    def __init__(self):
        self.lines: List[str] = []

    def write(self, line: str) -> None:
        self.lines.append(line)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def clear(self) -> None:
        self.lines.clear()


class RankFilteredSink(ReportSink):
    """
    Emit only on the root process of a spatial group.

    Every process runs the harness identically; this keeps the report from
    being duplicated once per process. The caller supplies its own rank.
    """

    def __init__(self, inner: ReportSink, rank: int, root: int = 0):
        self.inner = inner
        self.rank = rank
        self.root = root

    def write(self, line: str) -> None:
        if self.rank == self.root:
            self.inner.write(line)


def as_sink(target: Any) -> ReportSink:
    """
    Coerce ``target`` into a ReportSink.

    Accepts a sink, None (stdout), a text stream, a logger, or any callable
    taking one string.
    """
    if isinstance(target, ReportSink):
        return target
    if target is None:
        return StreamSink(sys.stdout)
    if isinstance(target, logging.Logger):
        return LoggerSink(target)
    if hasattr(target, "write") and callable(target.write):
        return StreamSink(target)
    if callable(target):
        return _CallableSink(target)
    raise TypeError(f"Cannot use {type(target).__name__} as a report sink")


class _CallableSink(ReportSink):

    def __init__(self, func):
        self.func = func

    def write(self, line: str) -> None:
        self.func(line)
