"""
Example: check the heat-equation grid vectors before handing them to a
parallel-in-time solver.

Fine vectors live on a 33x33 grid; a coarse time step at least twice the
fine one coarsens them to 17x17 with full weighting and refines them back
with bilinear interpolation.

Run with ``mpirun -n 2 python examples/heat_check.py`` to reduce inner
products over MPI.COMM_WORLD (requires the ``mpi`` extra).
"""

import sys
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pintcheck import HarnessConfig, RankFilteredSink, StreamSink, run_from_config
from pintcheck.reference import HeatApp, HeatGridOps, SerialScope


def get_scope():
    """MPI.COMM_WORLD when mpi4py is installed, a serial scope otherwise."""
    try:
        from mpi4py import MPI
    except ImportError:
        return SerialScope()
    return MPI.COMM_WORLD


def main():
    """Run the check suite on the heat-equation vectors."""
    config_path = Path(__file__).parent / "harness.yaml"
    config = HarnessConfig.from_yaml(config_path)
    config.setup_logging()

    scope = get_scope()
    app = HeatApp(nx=33, ny=33, scope=scope)
    ops = HeatGridOps(plot_dir=Path("heat_check_output") if scope.Get_rank() == 0 else None)

    sink = RankFilteredSink(StreamSink(), scope.Get_rank())
    report = run_from_config(ops, app, scope, config, sink)

    if scope.Get_rank() == 0:
        coarsen_refine = report["CoarsenRefine"]
        print(f"\nRelative coarsen/refine residual: "
              f"{coarsen_refine.values.get('relative_residual', float('nan')):.3e}")
        print(f"Suite {'passed' if report.passed else 'failed'} in {report.elapsed:.3f}s")

    return 0 if report.passed else 1


if __name__ == "__main__":
    sys.exit(main())
