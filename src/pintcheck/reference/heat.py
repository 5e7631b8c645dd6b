"""Reference vectors for the two-dimensional heat equation."""

import numpy as np
import matplotlib.pyplot as plt
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union
import logging

from ..core.capabilities import VectorOps
from .grid import Grid
from .scope import SerialScope
from .transfer import ProlongationOperator, RestrictionOperator

logger = logging.getLogger(__name__)

HEADER_DTYPE = np.int64
VALUE_DTYPE = np.float64


@dataclass
class GridVector:
    """Field values on one grid of the hierarchy."""
    values: np.ndarray
    grid: Grid


@dataclass
class HeatApp:
    """
    User context for the heat equation ``u_t = k (u_xx + u_yy)``.

    Holds the fine grid, the diffusivity and the spatial communicator.
    The coarse grid is used whenever the coarse time step is at least
    ``coarsen_ratio`` times the fine one.
    """
    nx: int = 17
    ny: int = 17
    domain: Tuple[float, float, float, float] = (0.0, 1.0, 0.0, 1.0)
    diffusivity: float = 1.0
    coarsen_ratio: float = 2.0
    scope: Any = None
    fine_grid: Grid = field(init=False)

    def __post_init__(self):
        if self.diffusivity <= 0:
            raise ValueError("Diffusivity must be positive")
        if self.coarsen_ratio <= 0:
            raise ValueError("Coarsen ratio must be positive")
        if self.scope is None:
            self.scope = SerialScope()
        self.fine_grid = Grid(self.nx, self.ny, self.domain)

    def exact_solution(self, grid: Grid, t: float) -> np.ndarray:
        """``sin(pi x) sin(pi y) exp(-2 pi^2 k t)`` on the unit square."""
        x0, x1, y0, y1 = grid.domain
        lx, ly = x1 - x0, y1 - y0
        decay = np.exp(-self.diffusivity * np.pi**2 * (1.0 / lx**2 + 1.0 / ly**2) * t)
        return (np.sin(np.pi * (grid.X - x0) / lx) *
                np.sin(np.pi * (grid.Y - y0) / ly) * decay)

    def grid_for_shape(self, nx: int, ny: int) -> Grid:
        """Return the hierarchy grid with the given shape."""
        grid = self.fine_grid
        while grid.shape != (nx, ny):
            if not grid.can_coarsen():
                raise ValueError(f"No grid of shape {(nx, ny)} in the hierarchy of {self.fine_grid}")
            grid = grid.coarsen()
        return grid


class HeatGridOps(VectorOps):
    """
    Capabilities for :class:`GridVector` fields on a :class:`HeatApp`.

    Spatial coarsening uses full-weighting restriction and refinement uses
    bilinear prolongation, so ``refine(coarsen(u))`` loses the high
    frequencies of ``u``. The inner product is reduced over ``app.scope``.
    """

    def __init__(
        self,
        plot_dir: Optional[Union[str, Path]] = None,
        restriction: str = "full_weighting",
        prolongation: str = "bilinear"
    ):
        """
        Initialize heat-equation capabilities.

        Args:
            plot_dir: Directory for contour snapshots written by ``write``
                (None disables plotting)
            restriction: Restriction method used by ``coarsen``
            prolongation: Prolongation method used by ``refine``
        """
        self.plot_dir = Path(plot_dir) if plot_dir is not None else None
        self.restriction = RestrictionOperator(restriction)
        self.prolongation = ProlongationOperator(prolongation)
        self.live = 0
        self.written: List[Dict[str, Any]] = []

    def _new(self, values: np.ndarray, grid: Grid) -> GridVector:
        self.live += 1
        return GridVector(values, grid)

    def init(self, app: HeatApp, t: float) -> GridVector:
        return self._new(app.exact_solution(app.fine_grid, t), app.fine_grid)

    def free(self, app: HeatApp, vector: GridVector) -> None:
        if vector.values is None:
            raise RuntimeError("vector freed twice")
        vector.values = None
        self.live -= 1

    def clone(self, app: HeatApp, vector: GridVector) -> GridVector:
        return self._new(vector.values.copy(), vector.grid)

    def sum(self, app: HeatApp, alpha: float, x: GridVector, beta: float, y: GridVector) -> None:
        if x.grid != y.grid:
            raise ValueError(f"Cannot sum fields on {x.grid} and {y.grid}")
        y.values = alpha * x.values + beta * y.values

    def dot(self, app: HeatApp, x: GridVector, y: GridVector) -> float:
        if x.grid != y.grid:
            raise ValueError(f"Cannot take inner product of fields on {x.grid} and {y.grid}")
        return app.scope.allreduce(x.grid.inner(x.values, y.values))

    def write(self, app: HeatApp, t: float, vector: GridVector) -> None:
        grid = vector.grid
        entry = {
            "t": t,
            "shape": grid.shape,
            "l2_norm": grid.l2_norm(vector.values),
            "max_norm": grid.max_norm(vector.values),
        }
        self.written.append(entry)
        logger.info(f"t={t}: grid {grid.nx}x{grid.ny}, ||u||_2={entry['l2_norm']:.6e}, "
                    f"||u||_inf={entry['max_norm']:.6e}")

        if self.plot_dir is not None:
            entry["path"] = self.save_snapshot(vector, t, len(self.written))

    def save_snapshot(self, vector: GridVector, t: float, index: int) -> Path:
        """Save a contour plot of ``vector``."""
        self.plot_dir.mkdir(parents=True, exist_ok=True)
        path = self.plot_dir / f"snapshot_{index:03d}.png"

        fig, ax = plt.subplots(figsize=(5, 4))
        contour = ax.contourf(vector.grid.X, vector.grid.Y, vector.values, levels=20, cmap='RdBu_r')
        fig.colorbar(contour, ax=ax)
        ax.set_title(f"t = {t:.4f}, grid {vector.grid.nx}x{vector.grid.ny}")
        ax.set_xlabel("x")
        ax.set_ylabel("y")
        fig.savefig(path, dpi=80)
        plt.close(fig)

        logger.debug(f"Saved snapshot to {path}")
        return path

    def bufsize(self, app: HeatApp) -> int:
        header = 2 * np.dtype(HEADER_DTYPE).itemsize
        return header + app.fine_grid.size * np.dtype(VALUE_DTYPE).itemsize

    def bufpack(self, app: HeatApp, vector: GridVector, buffer: bytearray) -> int:
        header = np.array(vector.grid.shape, dtype=HEADER_DTYPE).tobytes()
        data = np.ascontiguousarray(vector.values, dtype=VALUE_DTYPE).tobytes()
        size = len(header) + len(data)
        buffer[:size] = header + data
        return size

    def bufunpack(self, app: HeatApp, buffer: bytearray) -> GridVector:
        nx, ny = (int(n) for n in np.frombuffer(buffer, dtype=HEADER_DTYPE, count=2))
        offset = 2 * np.dtype(HEADER_DTYPE).itemsize
        values = np.frombuffer(buffer, dtype=VALUE_DTYPE, count=nx * ny, offset=offset)
        grid = app.grid_for_shape(nx, ny)
        return self._new(values.reshape(grid.shape).copy(), grid)

    def coarsen(self, app: HeatApp, tstart: float, f_tstop: float, c_tstop: float,
                vector: GridVector) -> GridVector:
        fdt = f_tstop - tstart
        cdt = c_tstop - tstart
        grid = vector.grid
        # relative slack absorbs rounding in the stop times
        if cdt < app.coarsen_ratio * fdt * (1.0 - 1e-8) or not grid.can_coarsen():
            logger.debug(f"No spatial coarsening for fdt={fdt}, cdt={cdt} on {grid}")
            return self.clone(app, vector)

        coarse_grid = grid.coarsen()
        values = self.restriction.apply(grid, vector.values, coarse_grid)
        return self._new(values, coarse_grid)

    def refine(self, app: HeatApp, tstart: float, f_tstop: float, c_tstop: float,
               vector: GridVector) -> GridVector:
        grid = vector.grid
        if grid == app.fine_grid:
            return self.clone(app, vector)

        fine_grid = grid.refine()
        values = self.prolongation.apply(grid, vector.values, fine_grid)
        return self._new(values, fine_grid)
