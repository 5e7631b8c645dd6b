"""Spatial coarsen/refine check."""

import logging
import math
from typing import Any, Optional

from .base import BaseCheck, VectorPool
from ..core.capabilities import Capability
from ..core.errors import ConfigurationError
from ..core.report import CheckOutcome, CheckStatus
from ..core.tolerance import TolerancePolicy

logger = logging.getLogger(__name__)


class CoarsenRefineCheck(BaseCheck):
    """
    Coarsen a fine vector, refine it back and measure what was lost.

    Coarsening is lossy, so ``refine(coarsen(u))`` is not expected to equal
    ``u``. The polarization residual is reported as a diagnostic value; it
    must always be finite. When the tolerance policy carries a
    ``coarsen_refine_bound`` the relative residual is also gated against it.

    The whole check is skipped when coarsen or refine is absent.
    """

    name = "CoarsenRefine"
    required = frozenset({
        Capability.INIT, Capability.FREE, Capability.CLONE, Capability.SUM, Capability.DOT
    })

    def __init__(
        self,
        ops,
        app: Any,
        scope: Any,
        sink: Any,
        t: float,
        fdt: float,
        cdt: float,
        tolerance: Optional[TolerancePolicy] = None
    ):
        """
        Initialize coarsen/refine check.

        Args:
            fdt: Fine time step the vector lives on
            cdt: Coarse time step to coarsen to

        See :class:`BaseCheck` for the remaining arguments.
        """
        super().__init__(ops, app, scope, sink, t, tolerance)
        for label, step in (("fdt", fdt), ("cdt", cdt)):
            if not isinstance(step, (int, float)) or not math.isfinite(step) or step <= 0:
                raise ConfigurationError(f"{label} must be a positive finite number, got {step!r}")
        self.fdt = float(fdt)
        self.cdt = float(cdt)

    def run(self) -> CheckOutcome:
        if not (self.ops.has(Capability.COARSEN) and self.ops.has(Capability.REFINE)):
            self.emit(f"Skipping {self.name}: coarsen or refine capability absent")
            logger.info(f"{self.name} skipped, spatial capabilities absent")
            return CheckOutcome(self.name, CheckStatus.SKIPPED,
                                error="coarsen or refine capability absent")
        return super().run()

    def execute(self, pool: VectorPool) -> CheckStatus:
        tol = self.tolerance
        tstart = self.t
        f_tstop = self.t + self.fdt
        c_tstop = self.t + self.cdt

        u = pool.init(self.t)
        uu = self.store("dot_uu", self.dot(u, u))
        self.write(self.t, u, "fine vector u")

        self.emit(f"  {self.name}: coarsen u from dt={self.fdt} to dt={self.cdt}")
        uc = pool.coarsen(tstart, f_tstop, c_tstop, u)
        self.write(self.t, uc, "coarse vector uc = coarsen(u)")
        self.record_diagnostic(1, "coarsen", "coarse vector computed")

        ucuc = self.store("dot_coarse", self.dot(uc, uc))
        self.record(2, "coarse_norm", tol.is_nonnegative(ucuc), ucuc, None,
                    "<uc, uc> must be finite and non-negative")

        uf = pool.refine(tstart, f_tstop, c_tstop, uc)
        self.write(self.t, uf, "refined vector uf = refine(coarsen(u))")
        self.record_diagnostic(3, "refine", "refined vector computed")

        residual = self.store("residual", self.residual(u, uf))
        self.record(4, "finite_residual", self.finite(residual), residual, None,
                    "||u - refine(coarsen(u))||^2 must be finite")

        relative = self.store("relative_residual", tol.relative_residual(residual, uu))
        self.emit(f"  {self.name}: ||u - refine(coarsen(u))||^2 = {residual:.6e} "
                  f"(relative {relative:.6e})")

        bound = tol.coarsen_refine_bound
        if bound is None:
            if self.verdict() is CheckStatus.FAIL:
                return CheckStatus.FAIL
            return CheckStatus.DIAGNOSTIC

        self.record(5, "residual_bound", self.finite(relative) and abs(relative) <= bound,
                    relative, bound, "relative residual must not exceed the configured bound")
        return self.verdict()


def check_coarsen_refine(ops, app, scope, sink, t, fdt, cdt, tolerance=None):
    """Run :class:`CoarsenRefineCheck` and return its outcome."""
    return CoarsenRefineCheck(ops, app, scope, sink, t, fdt, cdt, tolerance).run()
