"""Tests for writing and reading coupling results"""

import h5py
import numpy as np
from numpy.testing import assert_allclose, assert_array_equal
import pytest

from pincoupling import CoupledDriver, CouplingResults


@pytest.fixture
def driver(lattice):
    transport, heat = lattice
    return CoupledDriver(transport, heat, 1000.0, max_timesteps=2,
                         max_picard_iter=2, output=False)


def test_save_load(run_in_tmpdir, driver):
    heat = driver.heat
    driver.update_heat_source()
    heat.temperature[...] = np.linspace(500.0, 900.0, heat.temperature.size
                                        ).reshape(heat.shape)
    driver.update_temperature()
    CouplingResults.save(driver, 0, 0, 0, 'results.h5')

    heat.temperature += 10.0
    driver.update_temperature()
    CouplingResults.save(driver, 0, 1, 1, 'results.h5')

    results = CouplingResults.load('results.h5')
    assert len(results) == 2
    assert results[1]['timestep'] == 0
    assert results[1]['picard'] == 1
    assert_allclose(results[0]['heat_source'], heat.source)
    assert_allclose(results[1]['temperature'], heat.temperature)
    assert_allclose(results[0]['cell_temperature'] + 10.0,
                    results[1]['cell_temperature'])

    with h5py.File('results.h5', 'r') as f:
        assert f.attrs['power'] == 1000.0
        assert f.attrs['n_pins'] == 2
        assert f.attrs['n_axial'] == 3
        assert f.attrs['n_rings'] == 5
        assert f.attrs['n_cells'] == 8
        assert_array_equal(f['r_grid_fuel'][()], heat.r_grid_fuel)
        assert_array_equal(f['pin_centers'][()], heat.pin_centers)


def test_load_mapping(run_in_tmpdir, driver):
    driver.update_temperature()
    CouplingResults.save(driver, 0, 0, 0, 'results.h5')
    mapping = CouplingResults.load_mapping('results.h5')
    assert mapping.ring_to_cell_inst == driver.mapping.ring_to_cell_inst
    assert mapping.cell_inst_to_ring == driver.mapping.cell_inst_to_ring
    mapping.validate()


def test_overwrite(run_in_tmpdir, driver):
    driver.results = 'coupling_results.h5'
    driver.solve()
    assert len(CouplingResults.load()) == 4
    with pytest.warns(UserWarning, match='Overwriting'):
        CouplingResults.save(driver, 0, 0, 0, 'coupling_results.h5')
    assert len(CouplingResults.load()) == 1


def test_solve_writes_every_iteration(run_in_tmpdir, driver):
    driver.results = 'coupling_results.h5'
    driver.solve()
    results = CouplingResults.load()
    assert [(r['timestep'], r['picard']) for r in results] == [
        (0, 0), (0, 1), (1, 0), (1, 1)]


def test_wrong_filetype(run_in_tmpdir):
    with h5py.File('other.h5', 'w') as f:
        f.attrs['filetype'] = np.bytes_('statepoint')
    with pytest.raises(IOError):
        CouplingResults.load('other.h5')
