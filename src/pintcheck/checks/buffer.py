"""Serialization round-trip check."""

import logging
import numbers

from .base import BaseCheck, VectorPool, invoke
from ..core.capabilities import Capability
from ..core.errors import CallbackFailure
from ..core.report import CheckStatus

logger = logging.getLogger(__name__)


class BufferCheck(BaseCheck):
    """
    Pack a vector into a byte buffer, unpack it, and compare.

    The comparison uses the polarization identity
    ``||u - v||^2 = <u, u> + <v, v> - 2 <u, v>`` so only the inner product
    is needed; a second comparison forms ``v - u`` with sum.
    """

    name = "Buffer"
    required = frozenset({
        Capability.INIT, Capability.FREE, Capability.CLONE, Capability.SUM, Capability.DOT,
        Capability.BUFSIZE, Capability.BUFPACK, Capability.BUFUNPACK
    })

    def execute(self, pool: VectorPool) -> CheckStatus:
        tol = self.tolerance
        u = pool.init(self.t)
        uu = self.store("dot_uu", self.dot(u, u))

        size = invoke(self.ops, Capability.BUFSIZE, self.app)
        if isinstance(size, bool) or not isinstance(size, numbers.Integral) or size < 0:
            raise CallbackFailure(
                "bufsize", message=f"capability 'bufsize' returned an invalid size: {size!r}")
        size = int(size)
        self.store("bufsize", float(size))
        self.emit(f"  {self.name}: bufsize reports {size} bytes")

        buffer = bytearray(size)
        try:
            written = invoke(self.ops, Capability.BUFPACK, self.app, u, buffer)
            if written is None:
                written = size
            if isinstance(written, bool) or not isinstance(written, numbers.Integral):
                raise CallbackFailure(
                    "bufpack", message=f"capability 'bufpack' returned an invalid byte count: {written!r}")
            self.store("bytes_written", float(written))
            fits = 0 <= written <= size and len(buffer) == size
            self.record(1, "pack_size", fits, float(written), float(size),
                        "bufpack must write no more than bufsize bytes")

            v = pool.unpack(buffer)
        finally:
            del buffer

        vv = self.store("dot_vv", self.dot(v, v))
        uv = self.store("dot_uv", self.dot(u, v))
        residual = self.store("residual", uu + vv - 2.0 * uv)
        self.record(2, "roundtrip", tol.residual_ok(residual, uu), residual, 0.0,
                    "unpack(pack(u)) must equal u")

        d = pool.clone(v)
        self.sum(-1.0, u, 1.0, d)
        dd = self.store("dot_difference", self.dot(d, d))
        self.record(3, "difference", tol.residual_ok(dd, uu), dd, 0.0,
                    "unpack(pack(u)) - u must be the zero vector")

        logger.debug(f"{self.name} values: {self._values}")
        return self.verdict()


def check_buffer(ops, app, scope, sink, t, tolerance=None):
    """Run :class:`BufferCheck` and return its outcome."""
    return BufferCheck(ops, app, scope, sink, t, tolerance).run()
