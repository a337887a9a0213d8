"""Tests for coupling settings and their XML representation"""

from pathlib import Path

import lxml.etree as ET
import numpy as np
from numpy.testing import assert_allclose
import pytest

from pincoupling import CouplingSettings, HeatSurrogateSettings
from pincoupling.exceptions import SetupError


def _surrogate():
    s = HeatSurrogateSettings(
        pellet_radius=0.406, clad_inner_radius=0.414, clad_outer_radius=0.475,
        n_fuel_rings=10, n_clad_rings=3,
        pin_centers=[0.0, 0.0, 1.26, 0.0, 0.0, 1.26], z=[0.0, 10.0, 20.0])
    s.fluid_temperature = 580.0
    s.gap_conductance = 0.8
    return s


def test_export_to_xml(run_in_tmpdir):
    s = CouplingSettings(1.5e4, max_timesteps=2, max_picard_iter=5)
    s.output = False
    s.results = 'out.h5'
    s.heat_surrogate = _surrogate()
    s.export_to_xml()

    s = CouplingSettings.from_xml('coupling.xml')
    assert s.power == 1.5e4
    assert s.max_timesteps == 2
    assert s.max_picard_iter == 5
    assert not s.output
    assert s.results == Path('out.h5')

    h = s.heat_surrogate
    assert h.pellet_radius == 0.406
    assert h.clad_inner_radius == 0.414
    assert h.clad_outer_radius == 0.475
    assert h.n_fuel_rings == 10
    assert h.n_clad_rings == 3
    assert h.pin_centers.shape == (3, 2)
    assert_allclose(h.pin_centers[2], [0.0, 1.26])
    assert_allclose(h.z, [0.0, 10.0, 20.0])
    assert h.fluid_temperature == 580.0
    assert h.gap_conductance == 0.8
    assert h.clad_conductivity == 0.16


def test_export_to_directory(run_in_tmpdir):
    Path('inputs').mkdir()
    CouplingSettings(100.0).export_to_xml('inputs')
    assert Path('inputs/coupling.xml').is_file()


def test_defaults_from_xml():
    elem = ET.fromstring(
        '<coupling><power>200.0</power><max_timesteps>1</max_timesteps>'
        '<max_picard_iter>3</max_picard_iter></coupling>')
    s = CouplingSettings.from_xml_element(elem)
    assert s.power == 200.0
    assert s.max_picard_iter == 3
    assert s.output
    assert s.results is None
    assert s.heat_surrogate is None


def test_missing_element():
    elem = ET.fromstring('<coupling><power>200.0</power></coupling>')
    with pytest.raises(SetupError, match='max_timesteps'):
        CouplingSettings.from_xml_element(elem)

    elem = _surrogate().to_xml_element()
    elem.remove(elem.find('z'))
    with pytest.raises(SetupError, match='<z>'):
        HeatSurrogateSettings.from_xml_element(elem)

    elem = _surrogate().to_xml_element()
    elem.remove(elem.find('n_clad_rings'))
    with pytest.raises(SetupError, match='n_clad_rings'):
        HeatSurrogateSettings.from_xml_element(elem)


def test_invalid_values():
    with pytest.raises(TypeError):
        CouplingSettings('100')
    with pytest.raises(ValueError):
        CouplingSettings(-1.0)
    with pytest.raises(ValueError):
        CouplingSettings(100.0, max_timesteps=0)
    with pytest.raises(ValueError):
        CouplingSettings(100.0, max_picard_iter=0)
    with pytest.raises(TypeError):
        CouplingSettings(100.0, max_picard_iter=1.5)

    s = CouplingSettings(100.0)
    with pytest.raises(TypeError):
        s.output = 'yes'
    with pytest.raises(TypeError):
        s.heat_surrogate = {}


def test_surrogate_validation():
    s = _surrogate()
    with pytest.raises(ValueError):
        s.pin_centers = [0.0, 0.0, 1.0]
    with pytest.raises(ValueError):
        s.pin_centers = np.zeros((2, 3))
    with pytest.raises(ValueError):
        s.z = [0.0]
    with pytest.raises(ValueError):
        s.z = [0.0, 10.0, 5.0]
    with pytest.raises(ValueError):
        s.n_fuel_rings = 0
    with pytest.raises(TypeError):
        s.n_clad_rings = 2.0

    s.check_geometry()
    s.clad_outer_radius = 0.41
    with pytest.raises(SetupError):
        s.check_geometry()


def test_invalid_geometry_from_xml():
    s = _surrogate()
    s.pellet_radius = 0.5
    with pytest.raises(SetupError):
        HeatSurrogateSettings.from_xml_element(s.to_xml_element())
