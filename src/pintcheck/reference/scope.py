"""Single-process execution scope."""

from typing import Any, Callable, Optional


class SerialScope:
    """
    Execution scope for one process.

    Provides the subset of the mpi4py communicator interface the reference
    vectors use (``Get_rank``, ``Get_size``, ``allreduce``, ``Barrier``), so
    an ``mpi4py.MPI.Comm`` can be used in its place unchanged.
    """

    def __init__(self, name: str = "serial"):
        self.name = name
        self.reductions = 0

    def Get_rank(self) -> int:
        return 0

    def Get_size(self) -> int:
        return 1

    def allreduce(self, sendobj: Any, op: Optional[Callable] = None) -> Any:
        """Reduce over one process: the value itself."""
        self.reductions += 1
        return sendobj

    def Barrier(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"SerialScope(name={self.name!r})"
