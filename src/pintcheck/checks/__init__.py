"""Individual checks over a vector implementation."""

from .base import BaseCheck, VectorPool, invoke
from .init_write import InitWriteCheck, check_init_write
from .clone import CloneCheck, check_clone
from .sum import SumCheck, check_sum
from .dot import DotCheck, check_dot
from .buffer import BufferCheck, check_buffer
from .coarsen_refine import CoarsenRefineCheck, check_coarsen_refine

__all__ = [
    "BaseCheck",
    "VectorPool",
    "invoke",
    "InitWriteCheck",
    "CloneCheck",
    "SumCheck",
    "DotCheck",
    "BufferCheck",
    "CoarsenRefineCheck",
    "check_init_write",
    "check_clone",
    "check_sum",
    "check_dot",
    "check_buffer",
    "check_coarsen_refine",
]
