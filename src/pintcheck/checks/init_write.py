"""Init/write/free check."""

from .base import BaseCheck, VectorPool
from ..core.capabilities import Capability
from ..core.report import CheckStatus


class InitWriteCheck(BaseCheck):
    """
    Create a vector at the probe time, write it and free it.

    There is nothing to compare a fresh vector against, so the result is
    diagnostic only.
    """

    name = "InitWrite"
    required = frozenset({Capability.INIT, Capability.FREE})

    def execute(self, pool: VectorPool) -> CheckStatus:
        self.emit(f"  {self.name}: init vector u at t={self.t}")
        u = pool.init(self.t)
        self.write(self.t, u, "u")
        self.record_diagnostic(1, "init_write", "vector created")
        return CheckStatus.DIAGNOSTIC


def check_init_write(ops, app, scope, sink, t, tolerance=None):
    """Run :class:`InitWriteCheck` and return its outcome."""
    return InitWriteCheck(ops, app, scope, sink, t, tolerance).run()
