"""abc module.

This module contains Abstract Base Classes describing the two solvers that
take part in a coupled calculation: a transport driver, which owns the
geometric cell instances and produces a heat source, and a heat driver, which
owns the structured (pin, axial, ring) grid and produces temperatures.
"""

from abc import ABC, abstractmethod

from pincoupling.mpi import is_active


__all__ = ["CellInstance", "TransportDriver", "HeatDriver"]


class CellInstance(ABC):
    """A cell instance resolved by a transport solver at a point in space.

    Two cell instances compare equal when the transport solver resolved them
    to the same underlying cell and instance, regardless of the coordinates
    that were used to find them. Subclasses define this identity through
    :attr:`key`.

    """

    @property
    @abstractmethod
    def key(self):
        """Hashable identity of the resolved cell and instance"""

    @property
    @abstractmethod
    def material_index(self):
        """One-based index of the material filling this cell instance"""

    @abstractmethod
    def set_temperature(self, T):
        """Set the temperature of this cell instance

        Parameters
        ----------
        T : float
            Temperature in [K]

        """

    def __eq__(self, other):
        if not isinstance(other, CellInstance):
            return NotImplemented
        return self.key == other.key

    def __hash__(self):
        return hash(self.key)

    def __repr__(self):
        return f'{type(self).__name__}(key={self.key!r})'


class TransportDriver(ABC):
    """Abstract Base Class for a neutron transport solver.

    Parameters
    ----------
    comm : mpi4py.MPI.Intracomm or None
        Communicator of the processes running the transport solve. ``None``
        or ``MPI.COMM_NULL`` indicates that this process does not take part.

    Attributes
    ----------
    comm : mpi4py.MPI.Intracomm or None
        Communicator of the transport solve
    cells : list of CellInstance
        Registry of distinct cell instances. Entries are only ever appended,
        and the position of an instance in this list is its cell-instance
        index.

    """

    def __init__(self, comm=None):
        self.comm = comm
        self.cells = []

    @property
    def active(self):
        """Whether this process participates in the transport solve"""
        return is_active(self.comm)

    @abstractmethod
    def locate(self, xyz):
        """Find the cell instance containing a point

        Parameters
        ----------
        xyz : iterable of float
            Cartesian coordinates of the point

        Returns
        -------
        CellInstance
            Cell instance containing the point

        """

    @abstractmethod
    def create_tallies(self, material_indices):
        """Create energy deposition tallies over a list of materials

        Parameters
        ----------
        material_indices : list of int
            Zero-based material indices, one per registered cell instance

        """

    @abstractmethod
    def init_step(self):
        """Prepare for a transport solve"""

    @abstractmethod
    def solve_step(self, i):
        """Run a transport solve

        Parameters
        ----------
        i : int
            Iteration index, used to label solver output

        """

    @abstractmethod
    def finalize_step(self):
        """Finish a transport solve"""

    @abstractmethod
    def heat_source(self, power):
        """Return the heat generation rate in each cell instance

        Parameters
        ----------
        power : float
            Total power in [W]

        Returns
        -------
        numpy.ndarray
            Heat generation rate indexed by cell-instance index

        """

    def finalize(self):
        """Release resources held by the solver"""


class HeatDriver(ABC):
    """Abstract Base Class for a heat conduction solver on a pin grid.

    The solver's fields are indexed as ``(pin, axial, ring)`` where the
    radial ring index runs over the fuel rings followed by the cladding rings.
    Flattening a field in C order yields the ring index used by
    :class:`pincoupling.RingMapping`.

    Parameters
    ----------
    comm : mpi4py.MPI.Intracomm or None
        Communicator of the processes running the heat solve. ``None`` or
        ``MPI.COMM_NULL`` indicates that this process does not take part.

    Attributes
    ----------
    comm : mpi4py.MPI.Intracomm or None
        Communicator of the heat solve
    r_grid_fuel : numpy.ndarray
        Radial boundaries of the fuel rings in [cm]
    r_grid_clad : numpy.ndarray
        Radial boundaries of the cladding rings in [cm]
    z : numpy.ndarray
        Axial boundaries in [cm]
    pin_centers : numpy.ndarray
        (x, y) coordinates of each pin center in [cm]
    source : numpy.ndarray
        Heat source in [W/cm^3]
    temperature : numpy.ndarray
        Temperature in [K]

    """

    def __init__(self, comm=None):
        self.comm = comm

    @property
    def active(self):
        """Whether this process participates in the heat solve"""
        return is_active(self.comm)

    @property
    def n_pins(self):
        return len(self.pin_centers)

    @property
    def n_axial(self):
        return len(self.z) - 1

    @property
    def n_fuel_rings(self):
        return len(self.r_grid_fuel) - 1

    @property
    def n_clad_rings(self):
        return len(self.r_grid_clad) - 1

    @property
    def n_rings(self):
        return self.n_fuel_rings + self.n_clad_rings

    @property
    def shape(self):
        return (self.n_pins, self.n_axial, self.n_rings)

    @abstractmethod
    def solve_step(self):
        """Solve for the temperature given the current heat source"""
