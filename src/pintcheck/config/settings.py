"""Configuration classes for harness settings."""

import json
import math
import yaml
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional, Union
from pathlib import Path
import logging

from ..core.errors import ConfigurationError
from ..core.tolerance import TolerancePolicy
from ..utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)


def _is_real(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class ToleranceConfig:
    """Configuration for numeric comparisons."""
    epsilon: float = TolerancePolicy.DEFAULT_EPSILON
    precision: Optional[str] = None
    coarsen_refine_bound: Optional[float] = None

    def validate(self) -> None:
        """Validate tolerance configuration."""
        if self.precision is not None:
            if self.precision not in ["single", "double", "float32", "float64"]:
                raise ConfigurationError(f"Invalid precision: {self.precision}")
        elif not _is_real(self.epsilon) or not math.isfinite(self.epsilon) or self.epsilon < 0:
            raise ConfigurationError(f"Tolerance must be finite and non-negative, got {self.epsilon}")

        bound = self.coarsen_refine_bound
        if bound is not None and (not _is_real(bound) or not math.isfinite(bound) or bound < 0):
            raise ConfigurationError(f"Coarsen/refine bound must be finite and non-negative, got {bound!r}")


@dataclass
class ProbeConfig:
    """Time values used to create test vectors."""
    t: float = 0.0
    fdt: float = 0.1
    cdt: float = 0.2

    def validate(self) -> None:
        """Validate probe configuration."""
        if not math.isfinite(self.t):
            raise ConfigurationError("Probe time must be finite")

        if not (math.isfinite(self.fdt) and self.fdt > 0):
            raise ConfigurationError("Fine time step must be positive")

        if not (math.isfinite(self.cdt) and self.cdt > 0):
            raise ConfigurationError("Coarse time step must be positive")

        if self.cdt < self.fdt:
            logger.warning(f"Coarse step {self.cdt} is smaller than fine step {self.fdt}")


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_output: Optional[str] = None
    console_output: bool = True
    colored_console: bool = False

    def validate(self) -> None:
        """Validate logging configuration."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.level not in valid_levels:
            raise ConfigurationError(f"Invalid logging level: {self.level}")


@dataclass
class HarnessConfig:
    """Complete configuration for a check suite run."""
    tolerance: ToleranceConfig = None
    probe: ProbeConfig = None
    logging: LoggingConfig = None

    def __post_init__(self):
        """Initialize default configurations if not provided."""
        if self.tolerance is None:
            self.tolerance = ToleranceConfig()
        if self.probe is None:
            self.probe = ProbeConfig()
        if self.logging is None:
            self.logging = LoggingConfig()

    def validate(self) -> None:
        """Validate all configuration sections."""
        self.tolerance.validate()
        self.probe.validate()
        self.logging.validate()

    def tolerance_policy(self) -> TolerancePolicy:
        """Build the tolerance policy described by this configuration."""
        if self.tolerance.precision is not None:
            return TolerancePolicy.for_precision(self.tolerance.precision,
                                                 self.tolerance.coarsen_refine_bound)
        return TolerancePolicy(self.tolerance.epsilon, self.tolerance.coarsen_refine_bound)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'HarnessConfig':
        """Create configuration from dictionary."""
        config = cls()

        try:
            if 'tolerance' in config_dict:
                config.tolerance = ToleranceConfig(**config_dict['tolerance'])

            if 'probe' in config_dict:
                config.probe = ProbeConfig(**config_dict['probe'])

            if 'logging' in config_dict:
                config.logging = LoggingConfig(**config_dict['logging'])
        except TypeError as exc:
            raise ConfigurationError(f"Invalid configuration section: {exc}") from exc

        unknown = set(config_dict) - {'tolerance', 'probe', 'logging'}
        if unknown:
            logger.warning(f"Ignoring unknown configuration sections: {sorted(unknown)}")

        return config

    @classmethod
    def from_json(cls, json_path: Union[str, Path]) -> 'HarnessConfig':
        """Load configuration from JSON file."""
        json_path = Path(json_path)

        if not json_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {json_path}")

        with open(json_path, 'r') as f:
            config_dict = json.load(f)

        config = cls.from_dict(config_dict)
        config.validate()

        logger.info(f"Loaded configuration from {json_path}")
        return config

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> 'HarnessConfig':
        """Load configuration from YAML file."""
        yaml_path = Path(yaml_path)

        if not yaml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

        with open(yaml_path, 'r') as f:
            config_dict = yaml.safe_load(f) or {}

        config = cls.from_dict(config_dict)
        config.validate()

        logger.info(f"Loaded configuration from {yaml_path}")
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'tolerance': asdict(self.tolerance),
            'probe': asdict(self.probe),
            'logging': asdict(self.logging)
        }

    def to_json(self, json_path: Union[str, Path], indent: int = 2) -> None:
        """Save configuration to JSON file."""
        json_path = Path(json_path)
        json_path.parent.mkdir(parents=True, exist_ok=True)

        with open(json_path, 'w') as f:
            json.dump(self.to_dict(), f, indent=indent)

        logger.info(f"Saved configuration to {json_path}")

    def to_yaml(self, yaml_path: Union[str, Path]) -> None:
        """Save configuration to YAML file."""
        yaml_path = Path(yaml_path)
        yaml_path.parent.mkdir(parents=True, exist_ok=True)

        with open(yaml_path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, indent=2)

        logger.info(f"Saved configuration to {yaml_path}")

    def setup_logging(self) -> None:
        """Setup logging based on configuration."""
        numeric_level = getattr(logging, self.logging.level.upper(), None)
        if not isinstance(numeric_level, int):
            raise ConfigurationError(f'Invalid log level: {self.logging.level}')

        setup_logging(
            level=numeric_level,
            format_string=self.logging.format,
            log_file=self.logging.file_output,
            console_output=self.logging.console_output,
            colored_console=self.logging.colored_console
        )

    def __str__(self) -> str:
        """String representation of configuration."""
        return (f"HarnessConfig(t={self.probe.t}, fdt={self.probe.fdt}, cdt={self.probe.cdt}, "
                f"eps={self.tolerance.epsilon})")


def create_default_config() -> HarnessConfig:
    """Create default configuration."""
    return HarnessConfig()


def create_strict_config() -> HarnessConfig:
    """Create configuration that also gates the coarsen/refine residual."""
    config = HarnessConfig()
    config.tolerance.epsilon = 1e-12
    config.tolerance.coarsen_refine_bound = 1e-12
    return config
