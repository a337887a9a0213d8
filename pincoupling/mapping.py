"""Correspondence between heat-conduction rings and transport cell instances.

The heat driver discretizes each pin into axial layers and radial rings while
the transport driver has its own, usually coarser, cell partition. The mapping
is found by sampling a few azimuthally spaced points at the mid-radius and
mid-height of every ring and asking the transport driver which cell instance
contains each point.

"""

from math import cos, pi, sin

from pincoupling.checkvalue import check_type, check_greater_than
from pincoupling.exceptions import GeometryError


__all__ = ["N_AZIMUTHAL", "AZIMUTHAL_BIAS", "RingMapping"]

#: Number of azimuthal sample points per ring
N_AZIMUTHAL = 4

#: Angular offset of the sample points in [rad], keeps points off planes of
#: symmetry where cell boundaries tend to lie
AZIMUTHAL_BIAS = 0.01


class RingMapping:
    """Many-to-many mapping between rings and cell instances.

    Instances are normally created with :meth:`from_drivers` and are not
    modified afterwards.

    Parameters
    ----------
    ring_to_cell_inst : iterable of iterable of int
        Cell-instance indices for each ring index
    cell_inst_to_ring : iterable of iterable of int
        Ring indices for each cell-instance index

    Attributes
    ----------
    ring_to_cell_inst : tuple of tuple of int
        Distinct cell-instance indices hit by the samples of each ring, in the
        order they were first found
    cell_inst_to_ring : tuple of tuple of int
        Distinct ring indices, in increasing order, that resolved to each cell
        instance
    n_rings : int
        Total number of rings across all pins and axial layers
    n_cells : int
        Number of distinct cell instances

    """

    def __init__(self, ring_to_cell_inst, cell_inst_to_ring):
        self._ring_to_cell_inst = tuple(tuple(x) for x in ring_to_cell_inst)
        self._cell_inst_to_ring = tuple(tuple(x) for x in cell_inst_to_ring)

    def __repr__(self):
        return (f'{type(self).__name__}(n_rings={self.n_rings}, '
                f'n_cells={self.n_cells})')

    @property
    def ring_to_cell_inst(self):
        return self._ring_to_cell_inst

    @property
    def cell_inst_to_ring(self):
        return self._cell_inst_to_ring

    @property
    def n_rings(self):
        return len(self._ring_to_cell_inst)

    @property
    def n_cells(self):
        return len(self._cell_inst_to_ring)

    def cells(self, ring_index):
        """Return the cell-instance indices overlapping a ring"""
        return self._ring_to_cell_inst[ring_index]

    def rings(self, cell_index):
        """Return the ring indices overlapping a cell instance"""
        return self._cell_inst_to_ring[cell_index]

    @classmethod
    def from_drivers(cls, transport, heat, n_azimuthal=N_AZIMUTHAL):
        """Build the mapping by sampling points in every ring.

        Cell instances that have not been seen before are appended to
        ``transport.cells``; their position in that list becomes their
        cell-instance index. Any error raised while locating a point (for
        example a point outside of the transport geometry) is propagated.

        Parameters
        ----------
        transport : pincoupling.abc.TransportDriver
            Transport driver used to locate sample points
        heat : pincoupling.abc.HeatDriver
            Heat driver providing the ring grid
        n_azimuthal : int
            Number of azimuthal sample points per ring

        Returns
        -------
        RingMapping
            Mapping between ring indices and cell-instance indices

        """
        check_type('number of azimuthal samples', n_azimuthal, int)
        check_greater_than('number of azimuthal samples', n_azimuthal, 0)

        r_fuel = heat.r_grid_fuel
        r_clad = heat.r_grid_clad
        z = heat.z
        n_fuel_rings = heat.n_fuel_rings

        tracked = {c: i for i, c in enumerate(transport.cells)}
        ring_to_cell_inst = []
        cell_inst_to_ring = [[] for _ in transport.cells]

        ring_index = 0
        for x_c, y_c in heat.pin_centers:
            for j in range(heat.n_axial):
                zavg = 0.5*(z[j] + z[j + 1])

                for k in range(heat.n_rings):
                    if k < n_fuel_rings:
                        ravg = 0.5*(r_fuel[k] + r_fuel[k + 1])
                    else:
                        m = k - n_fuel_rings
                        ravg = 0.5*(r_clad[m] + r_clad[m + 1])

                    hits = []
                    for m in range(n_azimuthal):
                        theta = 2.0*m*pi/n_azimuthal + AZIMUTHAL_BIAS
                        xyz = (x_c + ravg*cos(theta), y_c + ravg*sin(theta),
                               zavg)

                        c = transport.locate(xyz)
                        if c not in tracked:
                            transport.cells.append(c)
                            tracked[c] = len(transport.cells) - 1
                            cell_inst_to_ring.append([])

                        index = tracked[c]
                        if index not in hits:
                            hits.append(index)
                            cell_inst_to_ring[index].append(ring_index)

                    ring_to_cell_inst.append(hits)
                    ring_index += 1

        return cls(ring_to_cell_inst, cell_inst_to_ring)

    def validate(self):
        """Check that the forward and reverse tables are consistent.

        Raises
        ------
        pincoupling.exceptions.GeometryError
            If a ring has no cell instance, a cell instance has no ring, or
            the two tables disagree

        """
        for ring, cells in enumerate(self._ring_to_cell_inst):
            if not cells:
                raise GeometryError(f'Ring {ring} is not mapped to any cell '
                                    'instance.')
            for c in cells:
                if not 0 <= c < self.n_cells or ring not in self.rings(c):
                    raise GeometryError(
                        f'Cell instance {c} is mapped from ring {ring} but '
                        'not back to it.')

        for c, rings in enumerate(self._cell_inst_to_ring):
            if not rings:
                raise GeometryError(f'Cell instance {c} is not mapped to any '
                                    'ring.')
            for ring in rings:
                if not 0 <= ring < self.n_rings or c not in self.cells(ring):
                    raise GeometryError(
                        f'Ring {ring} is mapped from cell instance {c} but '
                        'not back to it.')
