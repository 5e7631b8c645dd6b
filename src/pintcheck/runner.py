"""Aggregate runner for the full check suite."""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TYPE_CHECKING
import logging

from .checks import (
    BaseCheck, InitWriteCheck, CloneCheck, SumCheck, DotCheck, BufferCheck, CoarsenRefineCheck
)
from .core.capabilities import (
    BUFFER_CAPABILITIES, MANDATORY_CAPABILITIES, SPATIAL_CAPABILITIES, VectorOps
)
from .core.errors import CallbackFailure
from .core.report import CheckOutcome, CheckStatus, ReportSink, as_sink
from .core.tolerance import TolerancePolicy

if TYPE_CHECKING:
    from .config.settings import HarnessConfig

logger = logging.getLogger(__name__)


@dataclass
class SuiteReport:
    """Outcomes of one full run."""
    outcomes: List[CheckOutcome] = field(default_factory=list)
    passed: bool = True
    scope: Any = None
    elapsed: float = 0.0

    def __getitem__(self, name: str) -> CheckOutcome:
        for outcome in self.outcomes:
            if outcome.name == name:
                return outcome
        raise KeyError(name)

    def statuses(self) -> Dict[str, CheckStatus]:
        return {outcome.name: outcome.status for outcome in self.outcomes}


class HarnessRunner:
    """
    Run every check in sequence against one vector implementation.

    The verdict is the AND of the Dot and Buffer checks, the coarsen/refine
    check (when present), and the absence of callback failures. Diagnostic
    checks contribute only through callback failures.
    """

    def __init__(
        self,
        ops: VectorOps,
        app: Any,
        scope: Any,
        sink: Any,
        t: float,
        fdt: float,
        cdt: float,
        tolerance: Optional[TolerancePolicy] = None
    ):
        """
        Initialize runner.

        Args:
            ops: Vector implementation under test
            app: User context shared by all checks
            scope: Execution scope handle, passed through untouched
            sink: Report sink (ReportSink, stream, logger or callable)
            t: Probe time
            fdt: Fine time step for the coarsen/refine check
            cdt: Coarse time step for the coarsen/refine check
            tolerance: Tolerance policy (default: TolerancePolicy())
        """
        self.ops = ops
        self.app = app
        self.scope = scope
        self.sink: ReportSink = as_sink(sink)
        self.t = t
        self.fdt = fdt
        self.cdt = cdt
        self.tolerance = tolerance if tolerance is not None else TolerancePolicy()

    def build_checks(self) -> List[BaseCheck]:
        """Instantiate the checks in execution order."""
        common = (self.ops, self.app, self.scope, self.sink, self.t)
        return [
            InitWriteCheck(*common, self.tolerance),
            CloneCheck(*common, self.tolerance),
            SumCheck(*common, self.tolerance),
            DotCheck(*common, self.tolerance),
            BufferCheck(*common, self.tolerance),
            CoarsenRefineCheck(*common, self.fdt, self.cdt, self.tolerance),
        ]

    def run(self) -> SuiteReport:
        """
        Run the suite.

        Returns:
            SuiteReport with one outcome per check

        Raises:
            ConfigurationError: A mandatory or buffer capability is missing, or
                a step size or tolerance is invalid. Raised before any callback runs.
        """
        self.ops.require(MANDATORY_CAPABILITIES | BUFFER_CAPABILITIES, "the check suite")
        checks = self.build_checks()

        report = SuiteReport(scope=self.scope)
        start_time = time.time()
        self.sink.write(f"Starting check suite at t={self.t} (fdt={self.fdt}, cdt={self.cdt}, "
                        f"eps={self.tolerance.epsilon:.3e})")

        for check in checks:
            outcome = self._run_one(check)
            report.outcomes.append(outcome)
            if outcome.status.is_failure:
                report.passed = False

        report.elapsed = time.time() - start_time

        self.sink.write("Check suite summary:")
        for outcome in report.outcomes:
            self.sink.write(f"  {outcome.summary_line()}")

        if report.passed:
            self.sink.write("Check suite: all tests passed")
            logger.info(f"Check suite passed in {report.elapsed:.3f}s")
        else:
            self.sink.write("Check suite: some tests failed")
            logger.warning(f"Check suite failed in {report.elapsed:.3f}s")

        return report

    def _run_one(self, check: BaseCheck) -> CheckOutcome:
        if isinstance(check, CoarsenRefineCheck) and self.ops.missing(SPATIAL_CAPABILITIES):
            self.sink.write(f"Skipping {check.name}: coarsen or refine capability absent")
            return CheckOutcome(check.name, CheckStatus.SKIPPED,
                                error="coarsen or refine capability absent")

        try:
            return check.run()
        except CallbackFailure as failure:
            logger.error(f"{check.name} aborted: {failure}")
            return CheckOutcome(check.name, CheckStatus.ERROR, error=str(failure))


def run_all(
    ops: VectorOps,
    app: Any,
    scope: Any,
    sink: Any,
    t: float,
    fdt: float,
    cdt: float,
    tolerance: Optional[TolerancePolicy] = None
) -> bool:
    """
    Run every check and return the combined verdict.

    See :class:`HarnessRunner` for the arguments.
    """
    return HarnessRunner(ops, app, scope, sink, t, fdt, cdt, tolerance).run().passed


def run_from_config(
    ops: VectorOps,
    app: Any,
    scope: Any,
    config: 'HarnessConfig',
    sink: Any = None
) -> SuiteReport:
    """
    Run the suite with probe values and tolerance taken from a configuration.

    Args:
        ops: Vector implementation under test
        app: User context
        scope: Execution scope handle
        config: Harness configuration
        sink: Report sink (default: stdout)
    """
    config.validate()
    runner = HarnessRunner(
        ops, app, scope, sink,
        t=config.probe.t,
        fdt=config.probe.fdt,
        cdt=config.probe.cdt,
        tolerance=config.tolerance_policy()
    )
    return runner.run()
