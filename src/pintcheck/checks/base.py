"""Base class for individual checks and scoped vector ownership."""

from abc import ABC, abstractmethod
import math
import numbers
from typing import Any, FrozenSet, List, Optional
import logging

from ..core.capabilities import Capability, VectorOps
from ..core.errors import CallbackFailure, ConfigurationError
from ..core.report import CheckOutcome, CheckStatus, ReportSink, SubCheckResult, as_sink
from ..core.tolerance import TolerancePolicy, polarization_residual

logger = logging.getLogger(__name__)


def invoke(ops: VectorOps, capability: Capability, app: Any, *args) -> Any:
    """
    Call one capability and convert any error it raises into CallbackFailure.

    Args:
        ops: Vector implementation
        capability: Capability to call
        app: User context, passed as first argument
        *args: Remaining capability arguments

    Returns:
        Whatever the capability returns
    """
    method = getattr(ops, capability.value)
    logger.debug(f"Calling {capability.value}")
    try:
        return method(app, *args)
    except CallbackFailure:
        raise
    except Exception as exc:
        logger.error(f"Capability '{capability.value}' raised {type(exc).__name__}: {exc}")
        raise CallbackFailure(capability.value, exc) from exc


class VectorPool:
    """
    Owns every vector a check creates.

    On exit all vectors still held are freed in reverse order of acquisition,
    whether the block finished normally or raised.
    """

    def __init__(self, ops: VectorOps, app: Any, owner: str = "check"):
        self.ops = ops
        self.app = app
        self.owner = owner
        self._live: List[Any] = []
        self.freed = 0

    def __len__(self) -> int:
        return len(self._live)

    def adopt(self, vector: Any, source: str) -> Any:
        """Take ownership of a vector returned by a capability."""
        if vector is None:
            raise CallbackFailure(source, message=f"capability '{source}' returned no vector")
        self._live.append(vector)
        return vector

    def init(self, t: float) -> Any:
        return self.adopt(invoke(self.ops, Capability.INIT, self.app, t), "init")

    def clone(self, vector: Any) -> Any:
        return self.adopt(invoke(self.ops, Capability.CLONE, self.app, vector), "clone")

    def unpack(self, buffer: bytearray) -> Any:
        return self.adopt(invoke(self.ops, Capability.BUFUNPACK, self.app, buffer), "bufunpack")

    def coarsen(self, tstart: float, f_tstop: float, c_tstop: float, vector: Any) -> Any:
        return self.adopt(
            invoke(self.ops, Capability.COARSEN, self.app, tstart, f_tstop, c_tstop, vector),
            "coarsen")

    def refine(self, tstart: float, f_tstop: float, c_tstop: float, vector: Any) -> Any:
        return self.adopt(
            invoke(self.ops, Capability.REFINE, self.app, tstart, f_tstop, c_tstop, vector),
            "refine")

    def release(self, vector: Any) -> None:
        """Free one vector early."""
        for index, held in enumerate(self._live):
            if held is vector:
                del self._live[index]
                invoke(self.ops, Capability.FREE, self.app, vector)
                self.freed += 1
                return
        raise ValueError(f"{self.owner} does not own this vector")

    def release_all(self, suppress_errors: bool = False) -> None:
        """
        Free every vector still held.

        Args:
            suppress_errors: Log free failures instead of raising; used while
                another exception is already propagating
        """
        first_failure = None
        while self._live:
            vector = self._live.pop()
            try:
                invoke(self.ops, Capability.FREE, self.app, vector)
                self.freed += 1
            except CallbackFailure as failure:
                logger.error(f"{self.owner}: failed to free vector: {failure}")
                if first_failure is None:
                    first_failure = failure

        if first_failure is not None and not suppress_errors:
            raise first_failure

    def __enter__(self) -> 'VectorPool':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release_all(suppress_errors=exc_type is not None)


class BaseCheck(ABC):
    """
    Abstract base class for one check over a vector implementation.

    Subclasses set ``name`` and ``required`` and implement :meth:`execute`.
    A check keeps no state between calls to :meth:`run`.
    """

    name = "BaseCheck"
    required: FrozenSet[Capability] = frozenset()

    def __init__(
        self,
        ops: VectorOps,
        app: Any,
        scope: Any,
        sink: Any,
        t: float,
        tolerance: Optional[TolerancePolicy] = None
    ):
        """
        Initialize check.

        Args:
            ops: Vector implementation under test
            app: User context passed to every capability
            scope: Execution scope handle, passed through untouched
            sink: Report sink (ReportSink, stream, logger or callable)
            t: Probe time used to create vectors
            tolerance: Tolerance policy (default: TolerancePolicy())
        """
        if tolerance is None:
            tolerance = TolerancePolicy()
        elif not isinstance(tolerance, TolerancePolicy):
            raise ConfigurationError(f"Expected TolerancePolicy, got {type(tolerance).__name__}")

        self.ops = ops
        self.app = app
        self.scope = scope
        self.sink: ReportSink = as_sink(sink)
        self.t = t
        self.tolerance = tolerance
        self._subchecks: List[SubCheckResult] = []
        self._values = {}
        self._write_notice_given = False

    def run(self) -> CheckOutcome:
        """
        Execute the check.

        Returns:
            CheckOutcome for this check

        Raises:
            ConfigurationError: A required capability is missing
            CallbackFailure: A capability raised; all vectors are freed first
        """
        self.ops.require(self.required, self.name)
        self._subchecks = []
        self._values = {}
        self._write_notice_given = False

        self.emit(f"Starting {self.name}")
        logger.info(f"Running {self.name} at t={self.t}")

        try:
            with VectorPool(self.ops, self.app, self.name) as pool:
                status = self.execute(pool)
        except CallbackFailure as failure:
            self.emit(f"Finished {self.name}: FAIL (callback failure in '{failure.capability}')")
            raise

        outcome = CheckOutcome(
            name=self.name,
            status=status,
            subchecks=list(self._subchecks),
            values=dict(self._values),
        )
        self.emit(f"Finished {self.name}: {status.token}")
        logger.info(f"{self.name} finished with status {status.value}")
        return outcome

    @abstractmethod
    def execute(self, pool: VectorPool) -> CheckStatus:
        """Run the check body, allocating vectors from ``pool``."""
        pass

    def emit(self, line: str) -> None:
        """Write a line to the report sink."""
        self.sink.write(line)

    def verdict(self) -> CheckStatus:
        """FAIL if any sub-check failed, PASS otherwise."""
        if any(s.status.is_failure for s in self._subchecks):
            return CheckStatus.FAIL
        return CheckStatus.PASS

    def record(
        self,
        number: int,
        name: str,
        ok: bool,
        observed: Optional[float] = None,
        expected: Optional[float] = None,
        message: str = ""
    ) -> SubCheckResult:
        """Record a pass/fail sub-check result."""
        status = CheckStatus.PASS if ok else CheckStatus.FAIL
        result = SubCheckResult(number, name, status, observed, expected, message)
        self._subchecks.append(result)
        self.emit(f"  {self.name} {result.describe()}")
        if not ok:
            logger.warning(f"{self.name} sub-check {number} ({name}) failed: "
                           f"observed={observed}, expected={expected}")
        return result

    def record_inconclusive(self, number: int, name: str, reason: str,
                            observed: Optional[float] = None) -> SubCheckResult:
        """Record a sub-check that could not be evaluated safely."""
        result = SubCheckResult(number, name, CheckStatus.SKIPPED, observed, None, reason)
        self._subchecks.append(result)
        self.emit(f"  {self.name} {result.describe()}")
        logger.warning(f"{self.name} sub-check {number} ({name}) inconclusive: {reason}")
        return result

    def record_diagnostic(self, number: int, name: str, message: str,
                          observed: Optional[float] = None) -> SubCheckResult:
        """Record a step that produces output but no verdict."""
        result = SubCheckResult(number, name, CheckStatus.DIAGNOSTIC, observed, None, message)
        self._subchecks.append(result)
        self.emit(f"  {self.name} Test {number} ({name}): {message}")
        return result

    def store(self, key: str, value: float) -> float:
        """Keep a computed value on the outcome."""
        self._values[key] = value
        return value

    def write(self, t: float, vector: Any, label: str) -> None:
        """Write a vector if the write capability is present."""
        if not self.ops.has(Capability.WRITE):
            if not self._write_notice_given:
                self.emit(f"  {self.name}: write capability absent, skipping output")
                self._write_notice_given = True
            return
        self.emit(f"  {self.name}: writing {label}")
        invoke(self.ops, Capability.WRITE, self.app, t, vector)

    def sum(self, alpha: float, x: Any, beta: float, y: Any) -> None:
        invoke(self.ops, Capability.SUM, self.app, alpha, x, beta, y)

    def dot(self, x: Any, y: Any) -> float:
        """Inner product as a Python float."""
        value = invoke(self.ops, Capability.DOT, self.app, x, y)
        if isinstance(value, numbers.Complex) and not isinstance(value, numbers.Real):
            raise CallbackFailure(
                "dot", message=f"capability 'dot' returned a non-real value: {value!r}")
        try:
            return float(value)
        except (TypeError, ValueError, OverflowError) as exc:
            raise CallbackFailure(
                "dot", exc, f"capability 'dot' returned a non-real value: {value!r}") from exc

    def residual(self, v: Any, w: Any) -> float:
        """Polarization estimate of ``||v - w||^2`` using dot only."""
        vv = self.dot(v, v)
        ww = self.dot(w, w)
        vw = self.dot(v, w)
        return polarization_residual(vv, ww, vw)

    @staticmethod
    def finite(value: float) -> bool:
        return math.isfinite(value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(t={self.t}, tolerance={self.tolerance!r})"
