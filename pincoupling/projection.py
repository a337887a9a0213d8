"""Transfer of fields between transport cell instances and heat rings.

:func:`update_heat_source` averages the heat generation of the cell instances
overlapping each fuel ring. :func:`update_temperature` goes the other way,
averaging ring temperatures over each cell instance with weights proportional
to the area of each ring's radial band.

"""

import numpy as np

from pincoupling.exceptions import AveragingError


__all__ = ["ring_weights", "update_heat_source", "update_temperature"]


def ring_weights(heat):
    """Relative volume of each radial ring of a pin.

    The difference of squared radii is used as a proxy for the ring volume.
    Only ratios between rings are meaningful.

    Parameters
    ----------
    heat : pincoupling.abc.HeatDriver
        Heat driver providing the radial grids

    Returns
    -------
    numpy.ndarray
        Weight of each radial ring, fuel rings first

    """
    r_fuel = np.asarray(heat.r_grid_fuel, dtype=float)
    r_clad = np.asarray(heat.r_grid_clad, dtype=float)
    return np.concatenate((np.diff(r_fuel**2), np.diff(r_clad**2)))


def update_heat_source(heat, mapping, q):
    """Set the heat source in every fuel ring from transport results.

    The whole source field is zeroed first, so cladding rings end up with no
    source. Each fuel ring receives the arithmetic mean of the heat
    generation of the cell instances it overlaps.

    Parameters
    ----------
    heat : pincoupling.abc.HeatDriver
        Heat driver whose ``source`` field is updated in place
    mapping : pincoupling.RingMapping
        Ring/cell-instance mapping
    q : numpy.ndarray
        Heat generation rate indexed by cell-instance index

    Raises
    ------
    pincoupling.exceptions.AveragingError
        If a fuel ring is not mapped to any cell instance

    """
    q = np.asarray(q, dtype=float)
    heat.source[...] = 0.0

    ring_index = 0
    for i in range(heat.n_pins):
        for j in range(heat.n_axial):
            for k in range(heat.n_rings):
                # Only fuel rings carry a source
                if k < heat.n_fuel_rings:
                    cell_instances = mapping.cells(ring_index)
                    if not cell_instances:
                        raise AveragingError(
                            f'Fuel ring {ring_index} (pin {i}, axial {j}, '
                            f'ring {k}) has no cell instances to average.')
                    heat.source[i, j, k] = q[list(cell_instances)].mean()
                ring_index += 1


def update_temperature(transport, heat, mapping):
    """Set the temperature of every cell instance from ring temperatures.

    Parameters
    ----------
    transport : pincoupling.abc.TransportDriver
        Transport driver owning the cell instances
    heat : pincoupling.abc.HeatDriver
        Heat driver providing the temperature field
    mapping : pincoupling.RingMapping
        Ring/cell-instance mapping

    Returns
    -------
    numpy.ndarray
        Temperature written to each cell instance in [K]

    Raises
    ------
    pincoupling.exceptions.AveragingError
        If the rings of a cell instance have zero total weight

    """
    # The mapping uses flattened ring indices
    temperature = np.ravel(heat.temperature)
    weights = ring_weights(heat)
    n_rings = heat.n_rings

    cell_temperatures = np.empty(len(transport.cells))
    for i, c in enumerate(transport.cells):
        rings = np.asarray(mapping.rings(i), dtype=int)
        vol = weights[rings % n_rings]
        total_vol = vol.sum()
        if total_vol == 0.0:
            raise AveragingError(f'Rings mapped to cell instance {i} have '
                                 'zero total volume.')

        average_temp = np.dot(temperature[rings], vol) / total_vol
        c.set_temperature(average_temp)
        cell_temperatures[i] = average_temp

    return cell_temperatures
