"""Picard iteration between a transport driver and a heat driver"""

from numbers import Integral, Real

import pincoupling.checkvalue as cv
from pincoupling.abc import HeatDriver, TransportDriver
from pincoupling.mapping import N_AZIMUTHAL, RingMapping
from pincoupling.mpi import comm as world_comm
from pincoupling.projection import update_heat_source, update_temperature
from pincoupling.results import CouplingResults
from pincoupling.tallies import init_tallies


__all__ = ["CoupledDriver"]


class CoupledDriver:
    """Driver for a coupled neutron transport and heat conduction calculation.

    On construction the ring/cell-instance mapping is built and the transport
    driver is asked to create heat deposition tallies. :meth:`solve` then
    runs a fixed number of Picard iterations for each of a fixed number of
    timesteps.

    Parameters
    ----------
    transport : pincoupling.abc.TransportDriver
        Transport driver
    heat : pincoupling.abc.HeatDriver
        Heat driver
    power : float
        Total power in [W]
    max_timesteps : int
        Number of timesteps
    max_picard_iter : int
        Number of Picard iterations per timestep
    comm : mpi4py.MPI.Intracomm, optional
        Communicator spanning every process of either solver. Barriers
        between the solvers are taken on this communicator.
    output : bool, optional
        Whether to display information about progress
    results : str or pathlib.Path, optional
        Path of an HDF5 file to write the fields of each iteration to

    Attributes
    ----------
    transport : pincoupling.abc.TransportDriver
        Transport driver
    heat : pincoupling.abc.HeatDriver
        Heat driver
    power : float
        Total power in [W]
    max_timesteps : int
        Number of timesteps
    max_picard_iter : int
        Number of Picard iterations per timestep
    comm : mpi4py.MPI.Intracomm
        Communicator used for barriers
    mapping : pincoupling.RingMapping
        Mapping between heat rings and transport cell instances
    cell_temperatures : numpy.ndarray or None
        Temperature last assigned to each cell instance in [K]
    output : bool
        Whether to display information about progress
    results : str or pathlib.Path or None
        Path of the HDF5 results file

    """

    def __init__(self, transport, heat, power, max_timesteps=1,
                 max_picard_iter=1, comm=None, output=True, results=None):
        cv.check_type('transport driver', transport, TransportDriver)
        cv.check_type('heat driver', heat, HeatDriver)
        cv.check_type('power', power, Real)
        cv.check_type('maximum number of timesteps', max_timesteps, Integral)
        cv.check_type('maximum number of Picard iterations', max_picard_iter,
                      Integral)
        cv.check_greater_than('maximum number of timesteps', max_timesteps, 0)
        cv.check_greater_than('maximum number of Picard iterations',
                              max_picard_iter, 0)

        self.transport = transport
        self.heat = heat
        self.power = power
        self.max_timesteps = max_timesteps
        self.max_picard_iter = max_picard_iter
        self.comm = world_comm if comm is None else comm
        self.output = output
        self.results = results
        self.cell_temperatures = None

        # Create mappings for fuel pins and setup tallies
        self.init_mappings()
        self.init_tallies()

    @classmethod
    def from_settings(cls, transport, heat, settings, comm=None):
        """Create a driver from coupling settings

        Parameters
        ----------
        transport : pincoupling.abc.TransportDriver
            Transport driver
        heat : pincoupling.abc.HeatDriver
            Heat driver
        settings : pincoupling.CouplingSettings
            Coupling parameters
        comm : mpi4py.MPI.Intracomm, optional
            Communicator used for barriers

        Returns
        -------
        CoupledDriver
            Coupled driver

        """
        return cls(transport, heat, settings.power,
                   max_timesteps=settings.max_timesteps,
                   max_picard_iter=settings.max_picard_iter, comm=comm,
                   output=settings.output, results=settings.results)

    def init_mappings(self):
        """Build the mapping between heat rings and transport cell instances"""
        self.mapping = RingMapping.from_drivers(
            self.transport, self.heat, N_AZIMUTHAL)

    def init_tallies(self):
        """Create tallies in the materials of every mapped cell instance"""
        init_tallies(self.transport)

    def update_heat_source(self):
        """Project the transport heat source onto the heat rings"""
        q = self.transport.heat_source(self.power)
        update_heat_source(self.heat, self.mapping, q)

    def update_temperature(self):
        """Project ring temperatures onto the transport cell instances"""
        self.cell_temperatures = update_temperature(
            self.transport, self.heat, self.mapping)

    def solve(self):
        """Run every Picard iteration of every timestep"""
        index = 0
        for i_timestep in range(self.max_timesteps):
            for i_picard in range(self.max_picard_iter):
                self.picard_iteration(i_timestep, i_picard)

                if self.output and self.comm.rank == 0:
                    print(f"[pincoupling] timestep={i_timestep}, "
                          f"picard={i_picard}, "
                          f"T_max={self.cell_temperatures.max():.2f} K")

                if self.results is not None and self.comm.rank == 0:
                    CouplingResults.save(self, i_timestep, i_picard, index,
                                         self.results)
                index += 1

    def picard_iteration(self, i_timestep, i_picard):
        """Run one transport solve and one heat solve and exchange fields

        Parameters
        ----------
        i_timestep : int
            Timestep index
        i_picard : int
            Picard iteration index within the timestep

        """
        # Solve neutron transport
        if self.transport.active:
            self.transport.init_step()
            i = i_timestep*self.max_timesteps + i_picard
            self.transport.solve_step(i)
            self.transport.finalize_step()
        self.comm.barrier()

        # Update heat source
        self.update_heat_source()

        # Solve heat equation
        if self.heat.active:
            self.heat.solve_step()
        self.comm.barrier()

        # Update temperature in transport solver
        self.update_temperature()
