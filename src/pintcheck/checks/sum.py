"""Linear-combination (sum) check."""

from .base import BaseCheck, VectorPool
from ..core.capabilities import Capability
from ..core.report import CheckStatus


class SumCheck(BaseCheck):
    """
    Drive the sum capability through known combinations and write the results.

    Each combination has a known answer written next to it in the report.
    The check is diagnostic only; the same identities are verified with the
    inner product by :class:`~pintcheck.checks.dot.DotCheck`.
    """

    name = "Sum"
    required = frozenset({Capability.INIT, Capability.FREE, Capability.CLONE, Capability.SUM})

    def execute(self, pool: VectorPool) -> CheckStatus:
        u = pool.init(self.t)
        self.write(self.t, u, "u")

        # w = 1*u + 0*w
        w = pool.clone(u)
        self.sum(1.0, u, 0.0, w)
        self.write(self.t, w, "w = 1*u + 0*w, should equal u")
        self.record_diagnostic(1, "identity", "w = 1*u + 0*w computed, should equal u")

        # z = u - z, with z a clone of u
        z = pool.clone(u)
        self.sum(1.0, u, -1.0, z)
        self.write(self.t, z, "z = u - clone(u), should be zero")
        self.record_diagnostic(2, "additive_inverse", "z = u - clone(u) computed, should be zero")

        s = pool.clone(u)
        self.sum(2.0, u, 0.0, s)
        self.write(self.t, s, "s = 2*u + 0*s, should equal 2u")
        self.record_diagnostic(3, "scaling", "s = 2*u computed, should equal 2u")

        self.sum(1.0, u, 1.0, s)
        self.write(self.t, s, "s = u + s, should equal 3u")
        self.record_diagnostic(4, "accumulate", "s = u + 2u computed, should equal 3u")

        return CheckStatus.DIAGNOSTIC


def check_sum(ops, app, scope, sink, t, tolerance=None):
    """Run :class:`SumCheck` and return its outcome."""
    return SumCheck(ops, app, scope, sink, t, tolerance).run()
