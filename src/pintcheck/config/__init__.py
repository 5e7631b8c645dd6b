"""Configuration management for the check harness."""

from .settings import (
    HarnessConfig, ToleranceConfig, ProbeConfig, LoggingConfig,
    create_default_config, create_strict_config
)

__all__ = [
    "HarnessConfig",
    "ToleranceConfig",
    "ProbeConfig",
    "LoggingConfig",
    "create_default_config",
    "create_strict_config",
]
