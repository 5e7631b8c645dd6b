"""Tolerance policy shared by all numeric checks."""

import math
import numpy as np
from typing import Optional, Union
import logging

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class TolerancePolicy:
    """
    Numeric slack applied uniformly to every floating-point comparison.

    A single epsilon is used both as relative and absolute tolerance:
    two values agree when ``|a - b| <= eps * max(|a|, |b|)`` or
    ``|a - b| <= eps``.
    """

    DEFAULT_EPSILON = 1e-10

    def __init__(
        self,
        epsilon: float = DEFAULT_EPSILON,
        coarsen_refine_bound: Optional[float] = None
    ):
        """
        Initialize tolerance policy.

        Args:
            epsilon: Relative/absolute tolerance, must be finite and >= 0
            coarsen_refine_bound: Optional upper bound on the relative
                coarsen/refine residual. None leaves that check diagnostic.
        """
        if not _is_real(epsilon):
            raise ConfigurationError(f"Tolerance must be a real number, got {type(epsilon).__name__}")
        if not math.isfinite(epsilon) or epsilon < 0:
            raise ConfigurationError(f"Tolerance must be finite and non-negative, got {epsilon}")

        if coarsen_refine_bound is not None:
            if not _is_real(coarsen_refine_bound):
                raise ConfigurationError(f"Coarsen/refine bound must be a real number, "
                                         f"got {type(coarsen_refine_bound).__name__}")
            if not math.isfinite(coarsen_refine_bound) or coarsen_refine_bound < 0:
                raise ConfigurationError(
                    f"Coarsen/refine bound must be finite and non-negative, got {coarsen_refine_bound}")

        self.epsilon = float(epsilon)
        self.coarsen_refine_bound = (None if coarsen_refine_bound is None
                                     else float(coarsen_refine_bound))

        logger.debug(f"Initialized TolerancePolicy: eps={self.epsilon:.3e}, "
                     f"coarsen_refine_bound={self.coarsen_refine_bound}")

    @classmethod
    def for_precision(
        cls,
        precision: Union[str, np.dtype, type] = "double",
        coarsen_refine_bound: Optional[float] = None
    ) -> 'TolerancePolicy':
        """
        Derive epsilon from a floating-point precision.

        Uses the square root of machine epsilon, which leaves room for the
        accumulated rounding of a distributed inner product.

        Args:
            precision: 'single', 'double', 'float32', 'float64' or a numpy dtype
            coarsen_refine_bound: Passed through to the policy
        """
        if isinstance(precision, str):
            precision_map = {
                "single": np.float32,
                "double": np.float64,
                "float32": np.float32,
                "float64": np.float64,
            }
            if precision.lower() not in precision_map:
                raise ConfigurationError(f"Unknown precision level: {precision}")
            dtype = precision_map[precision.lower()]
        else:
            dtype = precision

        try:
            machine_eps = float(np.finfo(dtype).eps)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Not a floating-point precision: {precision!r}") from exc

        return cls(math.sqrt(machine_eps), coarsen_refine_bound)

    def is_close(self, observed: float, expected: float) -> bool:
        """Check ``observed ≈ expected``; NaN never compares close."""
        if not (math.isfinite(observed) and math.isfinite(expected)):
            return False
        return math.isclose(observed, expected, rel_tol=self.epsilon, abs_tol=self.epsilon)

    def is_nonnegative(self, value: float) -> bool:
        """Check ``value >= -eps``."""
        return math.isfinite(value) and value >= -self.epsilon

    def is_negligible(self, value: float) -> bool:
        """Check whether ``value`` is within eps of zero."""
        return math.isfinite(value) and abs(value) <= self.epsilon

    def residual_bound(self, reference: float) -> float:
        """
        Allowed magnitude of a squared-distance residual.

        Relative to ``reference`` (normally ``<v, v>``) unless the reference
        itself is negligible, in which case the bound is absolute.
        """
        if math.isfinite(reference) and abs(reference) > self.epsilon:
            return self.epsilon * abs(reference)
        return self.epsilon

    def residual_ok(self, residual: float, reference: float) -> bool:
        """Check a polarization residual against :meth:`residual_bound`."""
        if not math.isfinite(residual):
            return False
        return abs(residual) <= self.residual_bound(reference)

    def relative_residual(self, residual: float, reference: float) -> float:
        """Scale a residual by ``reference`` when the reference is not negligible."""
        if math.isfinite(reference) and abs(reference) > self.epsilon:
            return residual / abs(reference)
        return residual

    def __repr__(self) -> str:
        return (f"TolerancePolicy(epsilon={self.epsilon!r}, "
                f"coarsen_refine_bound={self.coarsen_refine_bound!r})")


def _is_real(value) -> bool:
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, bool)


def polarization_residual(vv: float, ww: float, vw: float) -> float:
    """Squared distance ``||v - w||^2`` from inner products only."""
    return vv + ww - 2.0 * vw
