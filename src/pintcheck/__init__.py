"""
pintcheck: sanity checks for parallel-in-time vector implementations

Runs a battery of numerical checks (vector-space identities, inner-product
consistency, serialization round-trips, spatial coarsen/refine consistency)
against a user-supplied set of vector capabilities before they are trusted
inside a multigrid-in-time solver.
"""

from ._version import __version__

from .core import (
    Capability, VectorOps, TolerancePolicy,
    ConfigurationError, CallbackFailure,
    CheckStatus, SubCheckResult, CheckOutcome,
    ReportSink, StreamSink, LoggerSink, MemorySink, RankFilteredSink
)
from .checks import (
    InitWriteCheck, CloneCheck, SumCheck, DotCheck, BufferCheck, CoarsenRefineCheck,
    check_init_write, check_clone, check_sum, check_dot, check_buffer, check_coarsen_refine
)
from .runner import HarnessRunner, SuiteReport, run_all, run_from_config
from .config import HarnessConfig

__all__ = [
    "__version__",
    "Capability",
    "VectorOps",
    "TolerancePolicy",
    "ConfigurationError",
    "CallbackFailure",
    "CheckStatus",
    "SubCheckResult",
    "CheckOutcome",
    "ReportSink",
    "StreamSink",
    "LoggerSink",
    "MemorySink",
    "RankFilteredSink",
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
    "HarnessRunner",
    "SuiteReport",
    "run_all",
    "run_from_config",
    "HarnessConfig",
]
