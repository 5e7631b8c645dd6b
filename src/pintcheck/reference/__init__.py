"""Reference vector implementations used as examples and in tests."""

from .scope import SerialScope
from .scalar import ScalarOps, ScalarVector
from .grid import Grid
from .transfer import RestrictionOperator, ProlongationOperator
from .heat import HeatApp, HeatGridOps, GridVector

__all__ = [
    "SerialScope",
    "ScalarOps",
    "ScalarVector",
    "Grid",
    "RestrictionOperator",
    "ProlongationOperator",
    "HeatApp",
    "HeatGridOps",
    "GridVector",
]
