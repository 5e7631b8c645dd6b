"""Unit tests for harness configuration."""

import json
import math
import numpy as np
import pytest
import sys
import yaml
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from pintcheck.config.settings import (
    HarnessConfig, ToleranceConfig, ProbeConfig, LoggingConfig,
    create_default_config, create_strict_config
)
from pintcheck.core.errors import ConfigurationError
from pintcheck.core.tolerance import TolerancePolicy


class TestHarnessConfig:
    """Test cases for HarnessConfig."""

    def test_defaults(self):
        config = create_default_config()
        assert isinstance(config.tolerance, ToleranceConfig)
        assert isinstance(config.probe, ProbeConfig)
        assert isinstance(config.logging, LoggingConfig)
        assert config.tolerance.epsilon == TolerancePolicy.DEFAULT_EPSILON
        assert config.probe.fdt == 0.1
        assert config.probe.cdt == 0.2
        config.validate()

    def test_tolerance_policy(self):
        policy = HarnessConfig().tolerance_policy()
        assert policy.epsilon == TolerancePolicy.DEFAULT_EPSILON
        assert policy.coarsen_refine_bound is None

        strict = create_strict_config().tolerance_policy()
        assert strict.epsilon == 1e-12
        assert strict.coarsen_refine_bound == 1e-12

    def test_precision_overrides_epsilon(self):
        config = HarnessConfig(tolerance=ToleranceConfig(precision="single"))
        policy = config.tolerance_policy()
        assert policy.epsilon == pytest.approx(math.sqrt(np.finfo(np.float32).eps))

    def test_validation_errors(self):
        config = HarnessConfig()
        config.tolerance.epsilon = -1.0
        with pytest.raises(ConfigurationError, match="non-negative"):
            config.validate()

        config = HarnessConfig()
        config.tolerance.precision = "half"
        with pytest.raises(ConfigurationError, match="Invalid precision"):
            config.validate()

        config = HarnessConfig()
        config.probe.cdt = 0.0
        with pytest.raises(ConfigurationError, match="Coarse time step"):
            config.validate()

        config = HarnessConfig()
        config.probe.t = float("inf")
        with pytest.raises(ConfigurationError, match="Probe time"):
            config.validate()

        config = HarnessConfig()
        config.logging.level = "VERBOSE"
        with pytest.raises(ConfigurationError, match="logging level"):
            config.validate()

    def test_small_coarse_step_warns(self, caplog):
        config = HarnessConfig(probe=ProbeConfig(t=0.0, fdt=0.2, cdt=0.1))
        config.validate()
        assert "smaller than fine step" in caplog.text

    def test_from_dict(self):
        config = HarnessConfig.from_dict({
            'tolerance': {'epsilon': 1e-8},
            'probe': {'t': 2.0},
        })
        assert config.tolerance.epsilon == 1e-8
        assert config.probe.t == 2.0
        assert config.probe.fdt == 0.1
        assert config.logging.level == "INFO"

    def test_from_dict_unknown_field(self):
        with pytest.raises(ConfigurationError, match="Invalid configuration section"):
            HarnessConfig.from_dict({'probe': {'dt': 0.1}})

    def test_from_dict_unknown_section_ignored(self, caplog):
        config = HarnessConfig.from_dict({'solver': {'max_iterations': 10}})
        assert config.probe.t == 0.0
        assert "solver" in caplog.text

    def test_yaml_round_trip(self, tmp_path):
        config = create_strict_config()
        config.probe.t = 0.5
        path = tmp_path / "configs" / "harness.yaml"

        config.to_yaml(path)
        with open(path) as f:
            raw = yaml.safe_load(f)
        assert raw['tolerance']['coarsen_refine_bound'] == 1e-12

        loaded = HarnessConfig.from_yaml(path)
        assert loaded.to_dict() == config.to_dict()

    def test_json_round_trip(self, tmp_path):
        config = HarnessConfig()
        config.logging.level = "DEBUG"
        path = tmp_path / "harness.json"

        config.to_json(path)
        with open(path) as f:
            assert json.load(f)['logging']['level'] == "DEBUG"

        assert HarnessConfig.from_json(path).logging.level == "DEBUG"

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert HarnessConfig.from_yaml(path).to_dict() == HarnessConfig().to_dict()

    def test_invalid_file_is_rejected(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("probe:\n  fdt: -0.5\n")
        with pytest.raises(ConfigurationError):
            HarnessConfig.from_yaml(path)

    def test_quoted_bound_is_rejected(self, tmp_path):
        """A quoted number in YAML is a string, not a bound."""
        path = tmp_path / "quoted.yaml"
        path.write_text("tolerance:\n  coarsen_refine_bound: '0.1'\n")
        with pytest.raises(ConfigurationError, match="bound"):
            HarnessConfig.from_yaml(path)

        config = HarnessConfig()
        config.tolerance.epsilon = "1e-8"
        with pytest.raises(ConfigurationError, match="non-negative"):
            config.validate()

    def test_missing_files(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            HarnessConfig.from_yaml(tmp_path / "missing.yaml")
        with pytest.raises(FileNotFoundError):
            HarnessConfig.from_json(tmp_path / "missing.json")

    def test_str(self):
        text = str(HarnessConfig())
        assert "fdt=0.1" in text
        assert "cdt=0.2" in text
