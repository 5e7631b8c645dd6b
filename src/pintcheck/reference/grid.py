"""Spatial grid hierarchy used by the reference heat-equation vectors."""

import numpy as np
from typing import Tuple, Optional
import logging

logger = logging.getLogger(__name__)


class Grid:
    """
    Uniform two-dimensional finite-difference grid, boundaries included.

    Grids of size ``2^k + 1`` coarsen by dropping every other point; the
    coarse grid keeps the domain and doubles the spacing.
    """

    def __init__(
        self,
        nx: int,
        ny: int,
        domain: Tuple[float, float, float, float] = (0.0, 1.0, 0.0, 1.0),
        dtype: np.dtype = np.float64
    ):
        """
        Initialize a computational grid.

        Args:
            nx: Number of grid points in x-direction
            ny: Number of grid points in y-direction
            domain: Domain boundaries (x_min, x_max, y_min, y_max)
            dtype: Data type for grid values
        """
        if nx < 3 or ny < 3:
            raise ValueError("Grid must have at least 3 points in each direction")

        if domain[1] <= domain[0] or domain[3] <= domain[2]:
            raise ValueError("Invalid domain bounds")

        self.nx = nx
        self.ny = ny
        self.domain = tuple(domain)
        self.dtype = dtype

        self.hx = (domain[1] - domain[0]) / (nx - 1)
        self.hy = (domain[3] - domain[2]) / (ny - 1)

        self.x = np.linspace(domain[0], domain[1], nx, dtype=dtype)
        self.y = np.linspace(domain[2], domain[3], ny, dtype=dtype)
        self.X, self.Y = np.meshgrid(self.x, self.y, indexing='ij')

        logger.debug(f"Created grid: {nx}x{ny}, h=({self.hx:.6f}, {self.hy:.6f})")

    @property
    def shape(self) -> Tuple[int, int]:
        """Return grid shape (nx, ny)."""
        return (self.nx, self.ny)

    @property
    def size(self) -> int:
        """Return total number of grid points."""
        return self.nx * self.ny

    @property
    def cell_area(self) -> float:
        return self.hx * self.hy

    def can_coarsen(self) -> bool:
        """Check whether the grid has a coarser counterpart of at least 3x3 points."""
        return ((self.nx - 1) % 2 == 0 and (self.ny - 1) % 2 == 0
                and (self.nx - 1) // 2 + 1 >= 3 and (self.ny - 1) // 2 + 1 >= 3)

    def coarsen(self) -> 'Grid':
        """
        Create a coarser grid with half the resolution.

        Returns:
            Coarsened grid with (nx-1)//2 + 1 points in each direction
        """
        if not self.can_coarsen():
            raise ValueError(f"Cannot coarsen grid of shape {self.shape}")

        coarse_grid = Grid((self.nx - 1) // 2 + 1, (self.ny - 1) // 2 + 1, self.domain, self.dtype)
        logger.debug(f"Coarsened grid: {self.shape} -> {coarse_grid.shape}")
        return coarse_grid

    def refine(self) -> 'Grid':
        """
        Create a finer grid with double the resolution.

        Returns:
            Refined grid with 2*(nx-1)+1 points in each direction
        """
        fine_grid = Grid(2 * (self.nx - 1) + 1, 2 * (self.ny - 1) + 1, self.domain, self.dtype)
        logger.debug(f"Refined grid: {self.shape} -> {fine_grid.shape}")
        return fine_grid

    def inner(self, a: np.ndarray, b: np.ndarray) -> float:
        """Discrete L2 inner product scaled by the cell area."""
        if a.shape != self.shape or b.shape != self.shape:
            raise ValueError(f"Field shapes {a.shape}, {b.shape} don't match grid {self.shape}")
        return float(self.cell_area * np.sum(a * b))

    def l2_norm(self, field: np.ndarray) -> float:
        """L2 norm scaled by grid spacing."""
        return float(np.sqrt(self.inner(field, field)))

    def max_norm(self, field: Optional[np.ndarray]) -> float:
        """Maximum absolute value of a field."""
        return float(np.max(np.abs(field)))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and self.domain == other.domain

    def __hash__(self) -> int:
        return hash((self.shape, self.domain))

    def __repr__(self) -> str:
        return f"Grid(nx={self.nx}, ny={self.ny}, domain={self.domain})"
