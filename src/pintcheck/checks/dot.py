"""Inner-product check."""

import logging

from .base import BaseCheck, VectorPool
from ..core.capabilities import Capability
from ..core.report import CheckStatus

logger = logging.getLogger(__name__)


class DotCheck(BaseCheck):
    """
    Verify the inner product against identities with known answers.

    Uses only clone, sum and dot:

    1. ``<u, u> >= -eps``
    2. ``<2u, 2u> = 4 <u, u>``
    3. ``<3u, u> / <u, u> = 3`` (inconclusive when ``<u, u>`` is negligible)
    4. ``<3u, u> = <u, 3u>``
    5. ``||u - clone(u)||^2 = 0``
    6. ``||u - (1*u + 0*w)||^2 = 0``
    7. ``<u - clone(u), u - clone(u)> = 0``

    Every sub-check runs even after an earlier one fails.
    """

    name = "Dot"
    required = frozenset({
        Capability.INIT, Capability.FREE, Capability.CLONE, Capability.SUM, Capability.DOT
    })

    def execute(self, pool: VectorPool) -> CheckStatus:
        tol = self.tolerance
        u = pool.init(self.t)

        uu = self.store("dot_uu", self.dot(u, u))
        self.record(1, "nonnegative", tol.is_nonnegative(uu), uu, 0.0,
                    "<u, u> must not be negative")

        # Test 2: w = 2u
        w = pool.clone(u)
        self.sum(2.0, u, 0.0, w)
        ww = self.store("dot_2u_2u", self.dot(w, w))
        self.record(2, "scaling", tol.is_close(ww, 4.0 * uu), ww, 4.0 * uu,
                    "<2u, 2u> must equal 4 <u, u>")
        pool.release(w)

        # Test 3: w = 3u
        w = pool.clone(u)
        self.sum(3.0, u, 0.0, w)
        wu = self.store("dot_3u_u", self.dot(w, u))
        if self.finite(uu) and abs(uu) > tol.epsilon:
            ratio = self.store("ratio_3u_u", wu / uu)
            self.record(3, "ratio", tol.is_close(ratio, 3.0), ratio, 3.0,
                        "<3u, u> / <u, u> must equal 3")
        else:
            self.record_inconclusive(3, "ratio", "<u, u> is too close to zero to divide by", uu)

        uw = self.store("dot_u_3u", self.dot(u, w))
        self.record(4, "symmetry", tol.is_close(uw, wu), uw, wu,
                    "<u, 3u> must equal <3u, u>")
        pool.release(w)

        v = pool.clone(u)
        clone_residual = self.store("clone_residual", self.residual(u, v))
        self.record(5, "clone", tol.residual_ok(clone_residual, uu), clone_residual, 0.0,
                    "||u - clone(u)||^2 must vanish")

        self.sum(1.0, u, 0.0, v)
        identity_residual = self.store("identity_residual", self.residual(u, v))
        self.record(6, "identity", tol.residual_ok(identity_residual, uu), identity_residual, 0.0,
                    "1*u + 0*v must reproduce u")
        pool.release(v)

        z = pool.clone(u)
        self.sum(1.0, u, -1.0, z)
        zz = self.store("dot_zero", self.dot(z, z))
        self.record(7, "additive_inverse", tol.residual_ok(zz, uu), zz, 0.0,
                    "u - clone(u) must be the zero vector")

        logger.debug(f"{self.name} values: {self._values}")
        return self.verdict()


def check_dot(ops, app, scope, sink, t, tolerance=None):
    """Run :class:`DotCheck` and return its outcome."""
    return DotCheck(ops, app, scope, sink, t, tolerance).run()
