"""One-dimensional toy vector: a single real number equal to its creation time."""

import numpy as np
from dataclasses import dataclass
from typing import Any, FrozenSet, List, Optional, Tuple
import logging

from ..core.capabilities import Capability, VectorOps

logger = logging.getLogger(__name__)


@dataclass
class ScalarVector:
    """State holding one real value."""
    value: float
    freed: bool = False


class ScalarOps(VectorOps):
    """
    Capabilities over :class:`ScalarVector` using ordinary real arithmetic.

    Coarsening modes:

    - ``"identity"``: coarsen and refine copy the value
    - ``"round"``: coarsen rounds to one decimal place, refine copies
    - ``None``: coarsen and refine are absent
    """

    COARSEN_MODES = ("identity", "round", None)

    def __init__(self, coarsen_mode: Optional[str] = "identity"):
        if coarsen_mode not in self.COARSEN_MODES:
            raise ValueError(f"Unknown coarsen mode: {coarsen_mode}")
        self.coarsen_mode = coarsen_mode
        self.live = 0
        self.created = 0
        self.written: List[Tuple[float, float]] = []

    def capabilities(self) -> FrozenSet[Capability]:
        present = super().capabilities()
        if self.coarsen_mode is None:
            present = present - {Capability.COARSEN, Capability.REFINE}
        return present

    def _new(self, value: float) -> ScalarVector:
        self.live += 1
        self.created += 1
        return ScalarVector(float(value))

    def _check(self, *vectors: ScalarVector) -> None:
        for vector in vectors:
            if vector.freed:
                raise RuntimeError("use of a freed vector")

    def init(self, app: Any, t: float) -> ScalarVector:
        return self._new(t)

    def free(self, app: Any, vector: ScalarVector) -> None:
        if vector.freed:
            raise RuntimeError("vector freed twice")
        vector.freed = True
        self.live -= 1

    def clone(self, app: Any, vector: ScalarVector) -> ScalarVector:
        self._check(vector)
        return self._new(vector.value)

    def sum(self, app: Any, alpha: float, x: ScalarVector, beta: float, y: ScalarVector) -> None:
        self._check(x, y)
        y.value = alpha * x.value + beta * y.value

    def write(self, app: Any, t: float, vector: ScalarVector) -> None:
        self._check(vector)
        self.written.append((t, vector.value))
        logger.info(f"t={t}: value={vector.value!r}")

    def dot(self, app: Any, x: ScalarVector, y: ScalarVector) -> float:
        self._check(x, y)
        return x.value * y.value

    def bufsize(self, app: Any) -> int:
        return np.dtype(np.float64).itemsize

    def bufpack(self, app: Any, vector: ScalarVector, buffer: bytearray) -> int:
        self._check(vector)
        data = np.float64(vector.value).tobytes()
        buffer[:len(data)] = data
        return len(data)

    def bufunpack(self, app: Any, buffer: bytearray) -> ScalarVector:
        value = np.frombuffer(bytes(buffer), dtype=np.float64, count=1)[0]
        return self._new(float(value))

    def coarsen(self, app: Any, tstart: float, f_tstop: float, c_tstop: float,
                vector: ScalarVector) -> ScalarVector:
        self._check(vector)
        if self.coarsen_mode == "round":
            return self._new(round(vector.value, 1))
        return self._new(vector.value)

    def refine(self, app: Any, tstart: float, f_tstop: float, c_tstop: float,
               vector: ScalarVector) -> ScalarVector:
        self._check(vector)
        return self._new(vector.value)
