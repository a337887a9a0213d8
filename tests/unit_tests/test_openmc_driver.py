"""Tests for the OpenMC transport driver that do not need a model"""

from unittest.mock import Mock

import numpy as np
from numpy.testing import assert_allclose
import pytest

from pincoupling.dummy_comm import DummyCommunicator
from pincoupling.exceptions import SetupError

try:
    from pincoupling.openmc_driver import OpenMCCellInstance, OpenMCDriver
except (ImportError, OSError, RuntimeError):
    pytest.skip('OpenMC shared library is not available',
                allow_module_level=True)


def _cell(cell_id, fill):
    cell = Mock()
    cell.id = cell_id
    cell.fill = fill
    return cell


def _material(index, volume):
    mat = Mock()
    mat.id = index + 10
    mat._index = index
    mat.volume = volume
    return mat


def test_cell_instance():
    mat = _material(4, 2.0)
    cell = _cell(7, mat)
    a = OpenMCCellInstance(cell, 3)
    b = OpenMCCellInstance(cell, 3)
    c = OpenMCCellInstance(cell, 1)

    assert a.key == (7, 3)
    assert a.material_index == 5
    assert a.volume == 2.0
    assert a == b
    assert a != c
    assert len({a, b, c}) == 2

    a.set_temperature(900.0)
    cell.set_temperature.assert_called_once_with(900.0, 3)


def test_distributed_material():
    mats = [_material(i, 1.0) for i in range(3)]
    inst = OpenMCCellInstance(_cell(2, mats), 2)
    assert inst.material is mats[2]
    assert inst.material_index == 3


def test_void_cell():
    with pytest.raises(SetupError):
        OpenMCCellInstance(_cell(2, None), 0)
    with pytest.raises(SetupError):
        OpenMCCellInstance(_cell(2, [_material(0, 1.0), None]), 1)


class _Tally:
    """Tally whose results have the (bin, score, sum/sum_sq) layout"""

    def __init__(self, sums, num_realizations=4):
        self.num_realizations = num_realizations
        self.results = np.zeros((len(sums), 1, 3))
        self.results[:, 0, 1] = sums

    @property
    def mean(self):
        return self.results[:, :, 1] / self.num_realizations


def _driver(volumes, comm=None):
    driver = OpenMCDriver(None)
    assert not driver.active
    driver.comm = DummyCommunicator() if comm is None else comm
    driver.cells = [OpenMCCellInstance(_cell(i, _material(i, v)), 0)
                    for i, v in enumerate(volumes)]
    return driver


def test_heat_source():
    driver = _driver([2.0, 1.0])
    driver.tally = _Tally([4.0, 12.0])
    assert driver.tally.mean.shape == (2, 1)

    q = driver.heat_source(100.0)
    assert q.shape == (2,)
    assert_allclose(q, [12.5, 75.0])

    # Total power is recovered by integrating over volume
    assert (q * [2.0, 1.0]).sum() == pytest.approx(100.0)


def test_heat_source_errors():
    driver = _driver([2.0, None])
    with pytest.raises(SetupError, match='Tallies'):
        driver.heat_source(100.0)

    driver.tally = _Tally([1.0, 1.0])
    with pytest.raises(SetupError, match='no volume'):
        driver.heat_source(100.0)


def test_missing_volume_on_every_rank():
    comm = Mock()
    comm.rank = 1
    driver = _driver([2.0, None], comm=comm)
    driver.tally = _Tally([1.0, 1.0])
    with pytest.raises(SetupError, match='no volume'):
        driver.heat_source(100.0)
    comm.bcast.assert_not_called()


def test_heat_source_broadcast():
    comm = Mock()
    comm.rank = 1
    comm.bcast.return_value = np.array([3.0, 4.0])
    driver = _driver([2.0, 1.0], comm=comm)
    driver.tally = _Tally([1.0, 1.0])

    assert_allclose(driver.heat_source(100.0), [3.0, 4.0])
    comm.bcast.assert_called_once_with(None)


def test_heat_source_inactive():
    driver = _driver([1.0, 1.0, 1.0])
    driver.comm = None
    assert_allclose(driver.heat_source(100.0), np.zeros(3))
