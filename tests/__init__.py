"""
Test Suite for pintcheck

Test Categories:
    - Unit tests: capability detection, tolerance policy, reports, each check
    - Integration tests: full suite runs against the reference vectors
"""

import sys
from pathlib import Path

# Add src directory to path for imports
test_dir = Path(__file__).parent
src_dir = test_dir.parent / 'src'
sys.path.insert(0, str(src_dir))

from pintcheck.core.capabilities import Capability, VectorOps
from pintcheck.reference.scalar import ScalarOps, ScalarVector

# Test configuration
TEST_CONFIG = {
    'probe_time': 1.0,
    'fdt': 0.1,
    'cdt': 0.2,
    'epsilon': 1e-10,
}


def failing_ops(capability: str, after: int = 0, coarsen_mode="identity") -> ScalarOps:
    """
    ScalarOps whose ``capability`` raises after ``after`` successful calls.
    """
    original = getattr(ScalarOps, capability)
    state = {"calls": 0}

    def wrapper(self, *args):
        state["calls"] += 1
        if state["calls"] > after:
            raise RuntimeError(f"injected {capability} failure")
        return original(self, *args)

    failing_class = type(f"Failing{capability.title()}Ops", (ScalarOps,), {capability: wrapper})
    return failing_class(coarsen_mode=coarsen_mode)


class MinimalOps(VectorOps):
    """Only the four abstract capabilities, over plain float lists."""

    def __init__(self):
        self.live = 0

    def init(self, app, t):
        self.live += 1
        return [float(t)]

    def free(self, app, vector):
        self.live -= 1

    def clone(self, app, vector):
        self.live += 1
        return list(vector)

    def sum(self, app, alpha, x, beta, y):
        y[0] = alpha * x[0] + beta * y[0]


class NoBufferOps(MinimalOps):
    """Minimal capabilities plus an inner product."""

    def dot(self, app, x, y):
        return x[0] * y[0]


class NegativeDotOps(ScalarOps):
    """Inner product with the wrong sign."""

    def dot(self, app, x, y):
        return -x.value * y.value


class IgnoreBetaOps(ScalarOps):
    """Sum that drops the ``beta * y`` term."""

    def sum(self, app, alpha, x, beta, y):
        y.value = alpha * x.value


class LossyBufferOps(ScalarOps):
    """Unpack perturbs the value by a relative 1e-3."""

    def bufunpack(self, app, buffer):
        vector = super().bufunpack(app, buffer)
        vector.value *= 1.001
        return vector


class NanCoarsenOps(ScalarOps):
    """Coarsen produces NaN."""

    def coarsen(self, app, tstart, f_tstop, c_tstop, vector):
        return self._new(float("nan"))


__all__ = [
    'TEST_CONFIG',
    'failing_ops',
    'MinimalOps',
    'NoBufferOps',
    'NegativeDotOps',
    'IgnoreBetaOps',
    'LossyBufferOps',
    'NanCoarsenOps',
    'Capability',
    'ScalarOps',
    'ScalarVector',
]
