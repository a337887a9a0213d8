"""Transport driver built on the OpenMC shared library.

The driver keeps OpenMC in memory for the whole coupled calculation, using
:mod:`openmc.lib` to locate cells, create tallies, run batches, and update
cell temperatures without going through the filesystem.

"""

import numpy as np
import openmc.lib
from openmc.data import JOULE_PER_EV

from pincoupling.abc import CellInstance, TransportDriver
from pincoupling.exceptions import SetupError


__all__ = ["OpenMCCellInstance", "OpenMCDriver"]


class OpenMCCellInstance(CellInstance):
    """One instance of a cell stored in the OpenMC library.

    Parameters
    ----------
    cell : openmc.lib.Cell
        Cell stored in the OpenMC library
    instance : int
        Which instance of the cell

    Attributes
    ----------
    cell : openmc.lib.Cell
        Cell stored in the OpenMC library
    instance : int
        Which instance of the cell
    material : openmc.lib.Material
        Material filling this instance of the cell

    """

    def __init__(self, cell, instance):
        self.cell = cell
        self.instance = instance

        fill = cell.fill
        if isinstance(fill, list):
            # Distributed material, one entry per instance
            fill = fill[instance]
        if fill is None:
            raise SetupError(f'Cell {cell.id} instance {instance} is not '
                             'filled with a material.')
        self.material = fill

    @classmethod
    def from_position(cls, xyz):
        """Find the cell instance containing a point

        Parameters
        ----------
        xyz : iterable of float
            Cartesian coordinates of the point

        Returns
        -------
        OpenMCCellInstance
            Cell instance containing the point

        """
        cell, instance = openmc.lib.find_cell(xyz)
        return cls(cell, instance)

    @property
    def key(self):
        return (self.cell.id, self.instance)

    @property
    def material_index(self):
        return self.material._index + 1

    @property
    def volume(self):
        return self.material.volume

    def set_temperature(self, T):
        self.cell.set_temperature(T, self.instance)


class OpenMCDriver(TransportDriver):
    """Neutron transport with OpenMC in memory.

    Parameters
    ----------
    comm : mpi4py.MPI.Intracomm or None
        Communicator of the processes running OpenMC
    args : list of str, optional
        Command-line arguments passed to :func:`openmc.lib.init`
    output : bool, optional
        Whether to show OpenMC output
    write_statepoints : bool, optional
        Whether to write a statepoint file after each transport solve

    Attributes
    ----------
    comm : mpi4py.MPI.Intracomm or None
        Communicator of the processes running OpenMC
    cells : list of OpenMCCellInstance
        Registry of distinct cell instances
    tally : openmc.lib.Tally or None
        Tally of recoverable fission energy in the material of each cell
        instance
    write_statepoints : bool
        Whether to write a statepoint file after each transport solve

    """

    score = 'kappa-fission'

    def __init__(self, comm, args=None, output=True, write_statepoints=False):
        super().__init__(comm)
        self.write_statepoints = write_statepoints
        self.tally = None
        if self.active:
            openmc.lib.init(args=args, intracomm=comm, output=output)

    def locate(self, xyz):
        return OpenMCCellInstance.from_position(xyz)

    def create_tallies(self, material_indices):
        materials = [openmc.lib.Material(index=i) for i in material_indices]
        self.tally = openmc.lib.Tally()
        self.tally.filters = [openmc.lib.MaterialFilter(materials)]
        self.tally.scores = [self.score]
        self.tally.active = True

    def init_step(self):
        openmc.lib.simulation_init()

    def solve_step(self, i):
        for _ in openmc.lib.iter_batches():
            pass
        if self.write_statepoints:
            openmc.lib.statepoint_write(f'statepoint.iter{i}.h5')

    def finalize_step(self):
        openmc.lib.simulation_finalize()

    def heat_source(self, power):
        """Heat generation rate in each cell instance.

        Tallied energy deposition is normalized so that the total over all
        cell instances equals ``power`` and then divided by the volume of the
        material in each cell instance. The result is computed on rank 0 of
        the OpenMC communicator and broadcast to its other ranks, so every
        process that runs a heat solve must also run OpenMC.

        Parameters
        ----------
        power : float
            Total power in [W]

        Returns
        -------
        numpy.ndarray
            Heat generation rate in [W/cm^3] indexed by cell-instance index.
            Processes that do not run OpenMC get zeros.

        """
        if not self.active:
            return np.zeros(len(self.cells))
        if self.tally is None:
            raise SetupError('Tallies must be created before a heat source '
                             'can be computed.')

        # Volumes are checked on every rank ahead of the broadcast
        volumes = np.empty(len(self.cells))
        for i, c in enumerate(self.cells):
            if c.volume is None:
                raise SetupError(
                    f'Material {c.material.id} in cell {c.cell.id} '
                    'has no volume assigned.')
            volumes[i] = c.volume

        q = None
        if self.comm.rank == 0:
            # Energy deposited per source particle in [J/source]
            heat = JOULE_PER_EV * self.tally.mean[:, 0]
            total_heat = heat.sum()
            q = power * heat / (total_heat * volumes)

        return self.comm.bcast(q)

    def finalize(self):
        if self.active:
            openmc.lib.finalize()
