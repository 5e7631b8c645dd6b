"""Core abstractions: capability set, tolerance policy, errors and reports."""

from .capabilities import (
    Capability, VectorOps, MANDATORY_CAPABILITIES, BUFFER_CAPABILITIES, SPATIAL_CAPABILITIES
)
from .errors import ConfigurationError, CallbackFailure
from .report import (
    CheckStatus, SubCheckResult, CheckOutcome,
    ReportSink, StreamSink, LoggerSink, MemorySink, RankFilteredSink, as_sink
)
from .tolerance import TolerancePolicy, polarization_residual

__all__ = [
    "Capability",
    "VectorOps",
    "MANDATORY_CAPABILITIES",
    "BUFFER_CAPABILITIES",
    "SPATIAL_CAPABILITIES",
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
    "as_sink",
    "TolerancePolicy",
    "polarization_residual",
]
