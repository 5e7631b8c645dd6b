"""Unit tests for outcomes and report sinks."""

import io
import logging
import pytest
import sys
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from pintcheck.core.report import (
    CheckStatus, SubCheckResult, CheckOutcome,
    StreamSink, LoggerSink, MemorySink, RankFilteredSink, ReportSink, as_sink
)


class TestCheckStatus:
    """Test cases for status tokens."""

    def test_tokens(self):
        assert CheckStatus.PASS.token == "PASS"
        assert CheckStatus.FAIL.token == "FAIL"
        assert CheckStatus.SKIPPED.token == "SKIPPED"
        assert CheckStatus.ERROR.token == "FAIL"

    def test_diagnostic_never_reports_pass(self):
        """Diagnostic-only outcomes are not upgraded to PASS."""
        assert CheckStatus.DIAGNOSTIC.token == "SKIPPED"
        assert not CheckStatus.DIAGNOSTIC.is_failure

    def test_failures(self):
        assert CheckStatus.FAIL.is_failure
        assert CheckStatus.ERROR.is_failure
        assert not CheckStatus.SKIPPED.is_failure


class TestCheckOutcome:
    """Test cases for CheckOutcome."""

    def test_failed_subchecks(self):
        outcome = CheckOutcome("Dot", CheckStatus.FAIL, subchecks=[
            SubCheckResult(1, "nonnegative", CheckStatus.PASS, 1.0, 0.0),
            SubCheckResult(2, "scaling", CheckStatus.FAIL, 3.0, 4.0),
            SubCheckResult(3, "ratio", CheckStatus.SKIPPED, message="negligible"),
        ])

        assert not outcome.passed
        assert [s.number for s in outcome.failed_subchecks] == [2]
        assert outcome.subcheck("ratio").status is CheckStatus.SKIPPED
        assert outcome.subcheck("missing") is None
        assert outcome.summary_line() == "Dot: FAIL (failed sub-checks: 2)"

    def test_summary_lines(self):
        assert CheckOutcome("Dot", CheckStatus.PASS).summary_line() == "Dot: PASS"

        diagnostic = CheckOutcome("Sum", CheckStatus.DIAGNOSTIC).summary_line()
        assert diagnostic.startswith("Sum: SKIPPED")
        assert "no automatic verdict" in diagnostic

        error = CheckOutcome("Buffer", CheckStatus.ERROR, error="capability 'bufpack' failed")
        assert error.summary_line() == "Buffer: FAIL (capability 'bufpack' failed)"

        skipped = CheckOutcome("CoarsenRefine", CheckStatus.SKIPPED, error="absent")
        assert skipped.summary_line() == "CoarsenRefine: SKIPPED (absent)"

    def test_subcheck_description(self):
        result = SubCheckResult(2, "scaling", CheckStatus.FAIL, 3.0, 4.0, "must match")
        text = result.describe()
        assert text.startswith("Test 2 (scaling): FAIL")
        assert "observed 3.000000e+00" in text
        assert "expected 4.000000e+00" in text
        assert text.endswith("must match")

        inconclusive = SubCheckResult(3, "ratio", CheckStatus.SKIPPED).describe()
        assert "SKIPPED [inconclusive]" in inconclusive


class TestSinks:
    """Test cases for report sinks."""

    def test_stream_sink(self):
        stream = io.StringIO()
        sink = StreamSink(stream)
        sink.write("Starting Dot")
        sink("Finished Dot: PASS")
        assert stream.getvalue() == "Starting Dot\nFinished Dot: PASS\n"

    def test_memory_sink(self):
        sink = MemorySink()
        sink.write("a")
        sink.write("b")
        assert sink.lines == ["a", "b"]
        assert sink.text == "a\nb"
        sink.clear()
        assert sink.lines == []

    def test_logger_sink(self, caplog):
        logger = logging.getLogger("pintcheck.test_sink")
        sink = LoggerSink(logger, logging.WARNING)
        with caplog.at_level(logging.WARNING, logger="pintcheck.test_sink"):
            sink.write("Dot: FAIL")
        assert "Dot: FAIL" in caplog.text

    def test_rank_filtered_sink(self):
        """Only the root rank emits."""
        inner = MemorySink()
        RankFilteredSink(inner, rank=1).write("hidden")
        RankFilteredSink(inner, rank=0).write("shown")
        RankFilteredSink(inner, rank=2, root=2).write("also shown")
        assert inner.lines == ["shown", "also shown"]

    def test_as_sink(self):
        memory = MemorySink()
        assert as_sink(memory) is memory
        assert isinstance(as_sink(None), StreamSink)
        assert isinstance(as_sink(io.StringIO()), StreamSink)
        assert isinstance(as_sink(logging.getLogger("x")), LoggerSink)

        collected = []
        sink = as_sink(collected.append)
        assert isinstance(sink, ReportSink)
        sink.write("line")
        assert collected == ["line"]

        with pytest.raises(TypeError, match="report sink"):
            as_sink(42)
