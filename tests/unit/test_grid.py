"""Unit tests for Grid class."""

import numpy as np
import pytest
import sys
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from pintcheck.reference.grid import Grid


class TestGrid:
    """Test cases for Grid class."""

    def test_grid_initialization(self):
        """Test basic grid initialization."""
        grid = Grid(nx=5, ny=7, domain=(0, 1, 0, 2))

        assert grid.nx == 5
        assert grid.ny == 7
        assert grid.domain == (0, 1, 0, 2)
        assert grid.shape == (5, 7)
        assert grid.size == 35

        # Check grid spacing
        assert abs(grid.hx - 1.0 / 4) < 1e-12
        assert abs(grid.hy - 2.0 / 6) < 1e-12
        assert abs(grid.cell_area - grid.hx * grid.hy) < 1e-15

    def test_grid_coordinates(self):
        """Test grid coordinate generation."""
        grid = Grid(nx=3, ny=3, domain=(0, 2, 1, 3))

        np.testing.assert_allclose(grid.x, [0, 1, 2])
        np.testing.assert_allclose(grid.y, [1, 2, 3])
        assert grid.X.shape == (3, 3)
        assert grid.Y.shape == (3, 3)

    def test_grid_validation(self):
        """Test grid parameter validation."""
        with pytest.raises(ValueError, match="at least 3 points"):
            Grid(nx=2, ny=3)

        with pytest.raises(ValueError, match="Invalid domain bounds"):
            Grid(nx=3, ny=3, domain=(1, 0, 0, 1))

    def test_grid_coarsening(self):
        """Test grid coarsening."""
        grid = Grid(nx=9, ny=9)

        coarse_grid = grid.coarsen()

        assert coarse_grid.shape == (5, 5)
        assert coarse_grid.domain == grid.domain
        assert abs(coarse_grid.hx - 2 * grid.hx) < 1e-12

    def test_grid_coarsening_invalid(self):
        """Even interior counts and 3x3 grids cannot coarsen."""
        with pytest.raises(ValueError, match="Cannot coarsen grid"):
            Grid(nx=6, ny=6).coarsen()

        assert not Grid(nx=3, ny=3).can_coarsen()
        assert Grid(nx=5, ny=5).can_coarsen()

    def test_grid_refinement(self):
        """Test grid refinement."""
        fine_grid = Grid(nx=5, ny=5).refine()
        assert fine_grid.shape == (9, 9)
        assert fine_grid.refine().coarsen() == fine_grid

    def test_inner_product(self):
        """Inner product is scaled by the cell area."""
        grid = Grid(nx=5, ny=5)
        ones = np.ones(grid.shape)

        assert grid.inner(ones, ones) == pytest.approx(25 / 16)
        assert grid.l2_norm(2 * ones) == pytest.approx(np.sqrt(4 * 25 / 16))
        assert grid.max_norm(-3 * ones) == 3.0

        with pytest.raises(ValueError, match="don't match grid"):
            grid.inner(ones, np.ones((3, 3)))

    def test_equality(self):
        """Grids compare by shape and domain."""
        assert Grid(5, 5) == Grid(5, 5)
        assert Grid(5, 5) != Grid(5, 5, domain=(0, 2, 0, 1))
        assert Grid(5, 5) != Grid(9, 9)
        assert len({Grid(5, 5), Grid(5, 5)}) == 1
        assert "nx=5" in repr(Grid(5, 5))
