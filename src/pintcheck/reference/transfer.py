"""Grid transfer operators for spatial coarsening and refinement."""

import numpy as np
import logging

from .grid import Grid

logger = logging.getLogger(__name__)


class RestrictionOperator:
    """
    Restriction: fine grid to coarse grid.

    Boundary points are injected; interior points use injection or the
    9-point full-weighting stencil.
    """

    def __init__(self, method: str = "full_weighting"):
        """
        Initialize restriction operator.

        Args:
            method: Restriction method ('injection', 'full_weighting')
        """
        if method not in ['injection', 'full_weighting']:
            raise ValueError(f"Unknown restriction method: {method}")
        self.method = method
        self.name = f"Restriction({method})"

    def can_apply(self, fine_grid: Grid, coarse_grid: Grid) -> bool:
        """Check that the coarse grid has half the resolution of the fine grid."""
        return (coarse_grid.nx == (fine_grid.nx - 1) // 2 + 1 and
                coarse_grid.ny == (fine_grid.ny - 1) // 2 + 1 and
                fine_grid.can_coarsen())

    def apply(self, fine_grid: Grid, field: np.ndarray, coarse_grid: Grid) -> np.ndarray:
        """
        Apply restriction operator.

        Args:
            fine_grid: Source grid
            field: Field on fine grid
            coarse_grid: Target grid

        Returns:
            Restricted field on coarse grid
        """
        if not self.can_apply(fine_grid, coarse_grid):
            raise ValueError(f"Cannot restrict from {fine_grid.shape} to {coarse_grid.shape}")

        if field.shape != fine_grid.shape:
            raise ValueError(f"Field shape {field.shape} doesn't match fine grid {fine_grid.shape}")

        coarse_field = field[::2, ::2].astype(coarse_grid.dtype, copy=True)

        if self.method == "full_weighting":
            # Interior points: 9-point stencil with weights 1/4, 1/8, 1/16
            center = field[2:-2:2, 2:-2:2]
            edges = (field[1:-3:2, 2:-2:2] + field[3:-1:2, 2:-2:2] +
                     field[2:-2:2, 1:-3:2] + field[2:-2:2, 3:-1:2])
            corners = (field[1:-3:2, 1:-3:2] + field[1:-3:2, 3:-1:2] +
                       field[3:-1:2, 1:-3:2] + field[3:-1:2, 3:-1:2])
            coarse_field[1:-1, 1:-1] = 0.25 * center + 0.125 * edges + 0.0625 * corners

        logger.debug(f"Applied {self.method} restriction: {fine_grid.shape} -> {coarse_grid.shape}")
        return coarse_field


class ProlongationOperator:
    """
    Prolongation: coarse grid to fine grid by injection or bilinear interpolation.
    """

    def __init__(self, method: str = "bilinear"):
        """
        Initialize prolongation operator.

        Args:
            method: Prolongation method ('injection', 'bilinear')
        """
        if method not in ['injection', 'bilinear']:
            raise ValueError(f"Unknown prolongation method: {method}")
        self.method = method
        self.name = f"Prolongation({method})"

    def can_apply(self, coarse_grid: Grid, fine_grid: Grid) -> bool:
        """Check that the fine grid has double the resolution of the coarse grid."""
        return (fine_grid.nx == 2 * (coarse_grid.nx - 1) + 1 and
                fine_grid.ny == 2 * (coarse_grid.ny - 1) + 1)

    def apply(self, coarse_grid: Grid, field: np.ndarray, fine_grid: Grid) -> np.ndarray:
        """
        Apply prolongation operator.

        Args:
            coarse_grid: Source grid
            field: Field on coarse grid
            fine_grid: Target grid

        Returns:
            Prolongated field on fine grid
        """
        if not self.can_apply(coarse_grid, fine_grid):
            raise ValueError(f"Cannot prolongate from {coarse_grid.shape} to {fine_grid.shape}")

        if field.shape != coarse_grid.shape:
            raise ValueError(f"Field shape {field.shape} doesn't match coarse grid {coarse_grid.shape}")

        fine_field = np.zeros(fine_grid.shape, dtype=fine_grid.dtype)
        fine_field[::2, ::2] = field

        if self.method == "bilinear":
            # odd rows, even columns
            fine_field[1::2, ::2] = 0.5 * (field[:-1, :] + field[1:, :])
            # even rows, odd columns
            fine_field[::2, 1::2] = 0.5 * (field[:, :-1] + field[:, 1:])
            # odd rows, odd columns
            fine_field[1::2, 1::2] = 0.25 * (field[:-1, :-1] + field[:-1, 1:] +
                                             field[1:, :-1] + field[1:, 1:])

        logger.debug(f"Applied {self.method} prolongation: {coarse_grid.shape} -> {fine_grid.shape}")
        return fine_field
