"""Surrogate heat conduction solver for cylindrical fuel pins.

Each (pin, axial layer) column is treated independently as a steady,
one-dimensional radial conduction problem: a pellet, a gap represented by a
conductance, and a cladding cooled by a fluid at fixed temperature. The radial
rings are the finite volumes; the resulting tridiagonal system is the same for
every column, so it is assembled once and solved for all columns together.

"""

from math import log, pi

import numpy as np
from scipy.sparse import diags
from scipy.sparse.linalg import spsolve

from pincoupling.abc import HeatDriver
from pincoupling.checkvalue import check_type
from pincoupling.settings import HeatSurrogateSettings


__all__ = ["SurrogateHeatDriver"]


class SurrogateHeatDriver(HeatDriver):
    """Steady radial heat conduction in a lattice of fuel pins.

    Parameters
    ----------
    comm : mpi4py.MPI.Intracomm or None
        Communicator of the processes running the heat solve
    settings : pincoupling.HeatSurrogateSettings
        Geometry and material properties

    Attributes
    ----------
    settings : pincoupling.HeatSurrogateSettings
        Geometry and material properties
    r_grid_fuel : numpy.ndarray
        Radial boundaries of the fuel rings in [cm]
    r_grid_clad : numpy.ndarray
        Radial boundaries of the cladding rings in [cm]
    z : numpy.ndarray
        Axial boundaries in [cm]
    pin_centers : numpy.ndarray
        (x, y) coordinates of each pin center in [cm]
    source : numpy.ndarray
        Heat source in [W/cm^3] indexed by (pin, axial, ring)
    temperature : numpy.ndarray
        Temperature in [K] indexed by (pin, axial, ring)

    """

    def __init__(self, comm, settings):
        super().__init__(comm)
        check_type('heat surrogate settings', settings, HeatSurrogateSettings)
        settings.check_geometry()
        self.settings = settings

        self.r_grid_fuel = np.linspace(
            0.0, settings.pellet_radius, settings.n_fuel_rings + 1)
        self.r_grid_clad = np.linspace(
            settings.clad_inner_radius, settings.clad_outer_radius,
            settings.n_clad_rings + 1)
        self.z = settings.z.copy()
        self.pin_centers = settings.pin_centers.copy()

        self.source = np.zeros(self.shape)
        self.temperature = np.full(self.shape, settings.initial_temperature)

        self._matrix, self._g_fluid = self._build_matrix()

    @property
    def ring_areas(self):
        """Cross-sectional area of each radial ring in [cm^2]"""
        return pi*np.concatenate((np.diff(self.r_grid_fuel**2),
                                  np.diff(self.r_grid_clad**2)))

    def _build_matrix(self):
        """Assemble the conduction matrix per unit length.

        Unknowns are ring temperatures located at the ring mid-radii. The
        conductance between neighbouring nodes uses the exact cylindrical
        resistance, with the gap conductance in series between the last fuel
        node and the first cladding node.

        Returns
        -------
        scipy.sparse.csc_matrix
            Conduction matrix in [W/cm-K]
        float
            Conductance from the outermost node to the fluid in [W/cm-K]

        """
        s = self.settings
        nf = self.n_fuel_rings
        r_mid = np.concatenate((
            0.5*(self.r_grid_fuel[:-1] + self.r_grid_fuel[1:]),
            0.5*(self.r_grid_clad[:-1] + self.r_grid_clad[1:])))

        # Thermal resistance per unit length between adjacent nodes
        resistance = np.empty(self.n_rings - 1)
        for k in range(self.n_rings - 1):
            r1, r2 = r_mid[k], r_mid[k + 1]
            if k < nf - 1:
                resistance[k] = log(r2/r1) / (2*pi*s.fuel_conductivity)
            elif k == nf - 1:
                resistance[k] = (
                    log(s.pellet_radius/r1) / (2*pi*s.fuel_conductivity)
                    + 1.0 / (2*pi*s.pellet_radius*s.gap_conductance)
                    + log(r2/s.clad_inner_radius) / (2*pi*s.clad_conductivity))
            else:
                resistance[k] = log(r2/r1) / (2*pi*s.clad_conductivity)
        g = 1.0 / resistance

        r_out = s.clad_outer_radius
        g_fluid = 1.0 / (log(r_out/r_mid[-1]) / (2*pi*s.clad_conductivity)
                         + 1.0 / (2*pi*r_out*s.heat_transfer_coefficient))

        diagonal = np.zeros(self.n_rings)
        diagonal[:-1] += g
        diagonal[1:] += g
        diagonal[-1] += g_fluid

        matrix = diags([-g, diagonal, -g], [-1, 0, 1], format='csc')
        return matrix, g_fluid

    def solve_step(self):
        """Solve for the temperature of every ring given the current source"""
        n = self.n_rings

        # Power per unit length deposited in each ring, one column per
        # (pin, axial) pair
        rhs = (self.source.reshape(-1, n) * self.ring_areas).T
        rhs[-1, :] += self._g_fluid * self.settings.fluid_temperature

        T = np.asarray(spsolve(self._matrix, rhs)).reshape(n, -1)
        self.temperature[...] = T.T.reshape(self.shape)

    def linear_power(self):
        """Power per unit length generated in each (pin, axial) column

        Returns
        -------
        numpy.ndarray
            Linear power in [W/cm] with shape (n_pins, n_axial)

        """
        return (self.source * self.ring_areas).sum(axis=-1)

    def surface_heat_flow(self):
        """Power per unit length convected to the fluid from each column

        Returns
        -------
        numpy.ndarray
            Linear power in [W/cm] with shape (n_pins, n_axial)

        """
        return self._g_fluid * (self.temperature[..., -1]
                                - self.settings.fluid_temperature)
