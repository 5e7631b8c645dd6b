"""Unit tests for capability detection."""

import pytest
import sys
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from pintcheck.core.capabilities import (
    Capability, VectorOps, MANDATORY_CAPABILITIES, BUFFER_CAPABILITIES, SPATIAL_CAPABILITIES
)
from pintcheck.core.errors import ConfigurationError
from pintcheck.reference.scalar import ScalarOps
from tests import MinimalOps, NoBufferOps


class TestCapabilityDetection:
    """Test cases for VectorOps capability presence."""

    def test_abstract_base_cannot_be_instantiated(self):
        """VectorOps requires init, free, clone and sum."""
        with pytest.raises(TypeError):
            VectorOps()

    def test_full_implementation(self):
        """ScalarOps provides every capability."""
        ops = ScalarOps()
        assert ops.capabilities() == frozenset(Capability)
        assert ops.has(Capability.COARSEN)
        assert ops.missing(MANDATORY_CAPABILITIES) == frozenset()

    def test_minimal_implementation(self):
        """Only overridden methods count as present."""
        ops = MinimalOps()
        assert ops.capabilities() == frozenset({
            Capability.INIT, Capability.FREE, Capability.CLONE, Capability.SUM
        })
        assert not ops.has(Capability.WRITE)
        assert not ops.has(Capability.DOT)

    def test_inherited_optional_capability(self):
        """A capability defined on an intermediate subclass is present."""
        ops = NoBufferOps()
        assert ops.has(Capability.DOT)
        assert ops.missing(BUFFER_CAPABILITIES) == BUFFER_CAPABILITIES

    def test_spatial_capabilities_can_be_disabled(self):
        """ScalarOps without a coarsen mode drops coarsen and refine."""
        ops = ScalarOps(coarsen_mode=None)
        assert ops.missing(SPATIAL_CAPABILITIES) == SPATIAL_CAPABILITIES
        assert ops.has(Capability.BUFPACK)

    def test_explicit_provides(self):
        """The provides attribute overrides method detection."""

        class Declared(ScalarOps):
            provides = [Capability.INIT, Capability.FREE, Capability.CLONE, Capability.SUM]

        ops = Declared()
        assert not ops.has(Capability.DOT)
        assert ops.has(Capability.SUM)

    def test_require_reports_missing_names(self):
        """require names every missing capability."""
        ops = MinimalOps()

        with pytest.raises(ConfigurationError, match="bufpack, bufsize, bufunpack"):
            ops.require(BUFFER_CAPABILITIES, "Buffer")

        # Present capabilities do not raise
        ops.require({Capability.INIT, Capability.SUM})

    def test_configuration_error_is_value_error(self):
        """ConfigurationError can be caught as ValueError."""
        with pytest.raises(ValueError):
            MinimalOps().require({Capability.DOT})

    def test_repr_lists_capabilities(self):
        text = repr(MinimalOps())
        assert "MinimalOps" in text
        assert "init" in text
        assert "dot" not in text

    def test_unknown_coarsen_mode(self):
        with pytest.raises(ValueError, match="Unknown coarsen mode"):
            ScalarOps(coarsen_mode="cubic")
