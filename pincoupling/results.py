"""HDF5 record of the fields exchanged during a coupled calculation"""

from pathlib import Path
import warnings

import h5py
import numpy as np

from pincoupling.mapping import RingMapping


__all__ = ["CouplingResults"]

_FILETYPE = 'coupling results'
_VERSION = (1, 0)


def _write_ragged(group, name, table):
    sub = group.create_group(name)
    lengths = [len(x) for x in table]
    sub.create_dataset('offsets', data=np.concatenate(([0], np.cumsum(lengths))))
    flat = [i for x in table for i in x]
    sub.create_dataset('indices', data=np.asarray(flat, dtype=int))


def _read_ragged(group, name):
    offsets = group[name]['offsets'][()]
    indices = group[name]['indices'][()]
    return [tuple(int(i) for i in indices[a:b])
            for a, b in zip(offsets[:-1], offsets[1:])]


class CouplingResults:
    """Reading and writing of per-iteration coupling results.

    Each Picard iteration is stored in a group ``iteration_{n}`` holding the
    heat source and temperature fields of the heat driver and the temperature
    assigned to each cell instance. The ring mapping is stored once at the
    root of the file.

    """

    @staticmethod
    def save(driver, i_timestep, i_picard, index, path='coupling_results.h5'):
        """Write the current state of a coupled driver

        Parameters
        ----------
        driver : pincoupling.CoupledDriver
            Driver whose fields are written
        i_timestep : int
            Timestep index
        i_picard : int
            Picard iteration index within the timestep
        index : int
            Sequential iteration index. A new file is created when this is 0.
        path : str or pathlib.Path
            Path to file to write

        """
        path = Path(path)
        if index == 0:
            if path.exists():
                warnings.warn(f"Overwriting existing results file '{path}'.")
            mode = 'w'
        else:
            mode = 'a'

        heat = driver.heat
        with h5py.File(path, mode) as f:
            if index == 0:
                f.attrs['filetype'] = np.bytes_(_FILETYPE)
                f.attrs['version'] = _VERSION
                f.attrs['power'] = driver.power
                f.attrs['n_pins'] = heat.n_pins
                f.attrs['n_axial'] = heat.n_axial
                f.attrs['n_rings'] = heat.n_rings
                f.attrs['n_fuel_rings'] = heat.n_fuel_rings
                f.attrs['n_cells'] = driver.mapping.n_cells
                f.create_dataset('r_grid_fuel', data=heat.r_grid_fuel)
                f.create_dataset('r_grid_clad', data=heat.r_grid_clad)
                f.create_dataset('z', data=heat.z)
                f.create_dataset('pin_centers', data=heat.pin_centers)
                mapping = f.create_group('mapping')
                _write_ragged(mapping, 'ring_to_cell_inst',
                              driver.mapping.ring_to_cell_inst)
                _write_ragged(mapping, 'cell_inst_to_ring',
                              driver.mapping.cell_inst_to_ring)

            group = f.create_group(f'iteration_{index}')
            group.attrs['timestep'] = i_timestep
            group.attrs['picard'] = i_picard
            group.create_dataset('heat_source', data=heat.source)
            group.create_dataset('temperature', data=heat.temperature)
            group.create_dataset('cell_temperature',
                                 data=driver.cell_temperatures)

    @staticmethod
    def load(path='coupling_results.h5'):
        """Read all iterations from a results file

        Parameters
        ----------
        path : str or pathlib.Path
            Path to file to read

        Returns
        -------
        list of dict
            One dictionary per iteration, in order, with keys 'timestep',
            'picard', 'heat_source', 'temperature', and 'cell_temperature'

        """
        results = []
        with h5py.File(path, 'r') as f:
            filetype = f.attrs['filetype'].decode()
            if filetype != _FILETYPE:
                raise IOError(f"'{path}' is not a coupling results file.")

            n = sum(1 for name in f if name.startswith('iteration_'))
            for i in range(n):
                group = f[f'iteration_{i}']
                results.append({
                    'timestep': int(group.attrs['timestep']),
                    'picard': int(group.attrs['picard']),
                    'heat_source': group['heat_source'][()],
                    'temperature': group['temperature'][()],
                    'cell_temperature': group['cell_temperature'][()],
                })
        return results

    @staticmethod
    def load_mapping(path='coupling_results.h5'):
        """Read the ring mapping from a results file

        Parameters
        ----------
        path : str or pathlib.Path
            Path to file to read

        Returns
        -------
        pincoupling.RingMapping
            Mapping stored in the file

        """
        with h5py.File(path, 'r') as f:
            group = f['mapping']
            return RingMapping(_read_ragged(group, 'ring_to_cell_inst'),
                               _read_ragged(group, 'cell_inst_to_ring'))
