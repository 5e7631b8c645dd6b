"""Clone check."""

from .base import BaseCheck, VectorPool
from ..core.capabilities import Capability
from ..core.report import CheckStatus


class CloneCheck(BaseCheck):
    """
    Create a vector, clone it and write both.

    The two written representations should be identical. Clone fidelity is
    verified automatically by :class:`~pintcheck.checks.dot.DotCheck`.
    """

    name = "Clone"
    required = frozenset({Capability.INIT, Capability.FREE, Capability.CLONE})

    def execute(self, pool: VectorPool) -> CheckStatus:
        self.emit(f"  {self.name}: init vector u at t={self.t}")
        u = pool.init(self.t)

        self.emit(f"  {self.name}: clone u into v")
        v = pool.clone(u)

        self.write(self.t, u, "u")
        self.write(self.t, v, "v = clone(u), should equal u")

        self.record_diagnostic(1, "clone", "u and v = clone(u) computed, they should be identical")
        return CheckStatus.DIAGNOSTIC


def check_clone(ops, app, scope, sink, t, tolerance=None):
    """Run :class:`CloneCheck` and return its outcome."""
    return CloneCheck(ops, app, scope, sink, t, tolerance).run()
