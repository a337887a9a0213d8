"""World communicator, with a single-process stand-in without mpi4py"""

try:
    from mpi4py import MPI
    comm = MPI.COMM_WORLD
except ImportError:
    from unittest.mock import Mock
    MPI = Mock()
    MPI.COMM_NULL = None
    from pincoupling.dummy_comm import DummyCommunicator
    comm = DummyCommunicator()


def is_active(intracomm):
    """Whether this process takes part in the group of a communicator

    Parameters
    ----------
    intracomm : mpi4py.MPI.Intracomm or None
        Communicator of a solver. ``None`` and ``MPI.COMM_NULL`` mean the
        process is not part of the solver's group.

    Returns
    -------
    bool
        Whether the process takes part

    """
    return intracomm is not None and intracomm != MPI.COMM_NULL
