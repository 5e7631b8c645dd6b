"""Capability set for user-supplied vector implementations."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, FrozenSet, Iterable, Optional
import logging

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class Capability(Enum):
    """Named operations a vector implementation can provide."""
    INIT = "init"
    WRITE = "write"
    FREE = "free"
    CLONE = "clone"
    SUM = "sum"
    DOT = "dot"
    BUFSIZE = "bufsize"
    BUFPACK = "bufpack"
    BUFUNPACK = "bufunpack"
    COARSEN = "coarsen"
    REFINE = "refine"


MANDATORY_CAPABILITIES = frozenset({
    Capability.INIT,
    Capability.FREE,
    Capability.CLONE,
    Capability.SUM,
    Capability.DOT,
})

BUFFER_CAPABILITIES = frozenset({
    Capability.BUFSIZE,
    Capability.BUFPACK,
    Capability.BUFUNPACK,
})

SPATIAL_CAPABILITIES = frozenset({
    Capability.COARSEN,
    Capability.REFINE,
})


class VectorOps(ABC):
    """
    Bound strategy implementing the vector capabilities.

    Subclasses must implement ``init``, ``free``, ``clone`` and ``sum``.
    The remaining operations are optional; a capability counts as present
    when the subclass overrides the method. Subclasses that wrap another
    object can instead list what they provide in the ``provides`` class
    attribute.

    Every method receives the user context ``app`` as first argument. A
    capability signals failure by raising.
    """

    provides: Optional[Iterable[Capability]] = None

    @abstractmethod
    def init(self, app: Any, t: float) -> Any:
        """Create a vector at time ``t``."""
        pass

    @abstractmethod
    def free(self, app: Any, vector: Any) -> None:
        """Release a vector."""
        pass

    @abstractmethod
    def clone(self, app: Any, vector: Any) -> Any:
        """Return an independent copy of ``vector``."""
        pass

    @abstractmethod
    def sum(self, app: Any, alpha: float, x: Any, beta: float, y: Any) -> None:
        """Overwrite ``y`` with ``alpha * x + beta * y``."""
        pass

    def write(self, app: Any, t: float, vector: Any) -> None:
        """Emit a representation of ``vector`` for inspection."""
        raise NotImplementedError

    def dot(self, app: Any, x: Any, y: Any) -> float:
        """Inner product of ``x`` and ``y``."""
        raise NotImplementedError

    def bufsize(self, app: Any) -> int:
        """Upper bound in bytes of one serialized vector."""
        raise NotImplementedError

    def bufpack(self, app: Any, vector: Any, buffer: bytearray) -> Optional[int]:
        """Serialize ``vector`` into ``buffer``; return the bytes written."""
        raise NotImplementedError

    def bufunpack(self, app: Any, buffer: bytearray) -> Any:
        """Create a vector from the contents of ``buffer``."""
        raise NotImplementedError

    def coarsen(self, app: Any, tstart: float, f_tstop: float, c_tstop: float, vector: Any) -> Any:
        """Spatially coarsen a fine vector to the resolution of the coarse step."""
        raise NotImplementedError

    def refine(self, app: Any, tstart: float, f_tstop: float, c_tstop: float, vector: Any) -> Any:
        """Spatially refine a coarse vector back to the fine resolution."""
        raise NotImplementedError

    def capabilities(self) -> FrozenSet[Capability]:
        """Return the set of capabilities this implementation provides."""
        if self.provides is not None:
            return frozenset(self.provides)

        present = set()
        for capability in Capability:
            method = getattr(type(self), capability.value, None)
            if method is None:
                continue
            if method is not getattr(VectorOps, capability.value):
                present.add(capability)
        return frozenset(present)

    def has(self, capability: Capability) -> bool:
        """Check whether a capability is present."""
        return capability in self.capabilities()

    def missing(self, required: Iterable[Capability]) -> FrozenSet[Capability]:
        """Return the subset of ``required`` this implementation lacks."""
        return frozenset(required) - self.capabilities()

    def require(self, required: Iterable[Capability], purpose: str = "") -> None:
        """
        Raise ConfigurationError if any capability in ``required`` is absent.

        Args:
            required: Capabilities needed by the caller
            purpose: Name of the dependent check, used in the message
        """
        missing = self.missing(required)
        if missing:
            names = ", ".join(sorted(c.value for c in missing))
            where = f" for {purpose}" if purpose else ""
            logger.error(f"{type(self).__name__} is missing capabilities{where}: {names}")
            raise ConfigurationError(f"Missing capabilities{where}: {names}")

    def __repr__(self) -> str:
        names = ", ".join(sorted(c.value for c in self.capabilities()))
        return f"{self.__class__.__name__}(capabilities=[{names}])"
