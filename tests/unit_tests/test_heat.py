"""Tests for the surrogate heat conduction solver"""

from math import log, pi

import numpy as np
from numpy.testing import assert_allclose
import pytest

from pincoupling import HeatSurrogateSettings, SurrogateHeatDriver
from pincoupling.dummy_comm import DummyCommunicator
from pincoupling.exceptions import SetupError


@pytest.fixture
def settings():
    return HeatSurrogateSettings(
        pellet_radius=0.406, clad_inner_radius=0.414, clad_outer_radius=0.475,
        n_fuel_rings=5, n_clad_rings=2,
        pin_centers=[(0.0, 0.0), (1.26, 0.0)], z=[0.0, 50.0, 100.0])


@pytest.fixture
def heat(settings):
    return SurrogateHeatDriver(DummyCommunicator(), settings)


def test_grids(heat, settings):
    assert heat.shape == (2, 2, 7)
    assert heat.n_fuel_rings == 5
    assert heat.n_clad_rings == 2
    assert heat.r_grid_fuel[0] == 0.0
    assert heat.r_grid_fuel[-1] == pytest.approx(settings.pellet_radius)
    assert heat.r_grid_clad[0] == pytest.approx(settings.clad_inner_radius)
    assert heat.r_grid_clad[-1] == pytest.approx(settings.clad_outer_radius)
    assert np.all(heat.source == 0.0)
    assert np.all(heat.temperature == settings.initial_temperature)
    assert heat.ring_areas.sum() == pytest.approx(
        pi*(settings.pellet_radius**2 + settings.clad_outer_radius**2
            - settings.clad_inner_radius**2))


def test_zero_source(heat, settings):
    heat.temperature[...] = 1000.0
    heat.solve_step()
    assert_allclose(heat.temperature, settings.fluid_temperature)


def test_energy_balance(heat):
    heat.source[..., :heat.n_fuel_rings] = 150.0
    heat.source[1, 0, :heat.n_fuel_rings] = 300.0
    heat.solve_step()
    assert_allclose(heat.surface_heat_flow(), heat.linear_power(), rtol=1e-10)


def test_temperature_profile(heat, settings):
    heat.source[..., :heat.n_fuel_rings] = 150.0
    heat.solve_step()

    # Heat flows outward so the temperature drops monotonically
    for column in heat.temperature.reshape(-1, heat.n_rings):
        assert np.all(np.diff(column) < 0.0)
        assert column[-1] > settings.fluid_temperature


def test_columns_independent(heat):
    heat.source[0, 1, :heat.n_fuel_rings] = 200.0
    heat.solve_step()
    T_hot = heat.temperature.copy()

    heat.source[1, 0, :heat.n_fuel_rings] = 50.0
    heat.solve_step()
    assert_allclose(heat.temperature[0], T_hot[0])
    assert np.all(heat.temperature[1, 0] > T_hot[1, 0])
    assert_allclose(heat.temperature[1, 1], T_hot[1, 1])


def test_two_ring_solution():
    s = HeatSurrogateSettings(
        pellet_radius=0.4, clad_inner_radius=0.42, clad_outer_radius=0.48,
        n_fuel_rings=1, n_clad_rings=1, pin_centers=[0.0, 0.0], z=[0.0, 1.0])
    heat = SurrogateHeatDriver(DummyCommunicator(), s)
    q = 100.0
    heat.source[0, 0, 0] = q
    heat.solve_step()

    r0, r1 = 0.2, 0.45
    q_lin = q*pi*0.4**2
    R_fuel_clad = (log(0.4/r0)/(2*pi*s.fuel_conductivity)
                   + 1.0/(2*pi*0.4*s.gap_conductance)
                   + log(r1/0.42)/(2*pi*s.clad_conductivity))
    R_fluid = (log(0.48/r1)/(2*pi*s.clad_conductivity)
               + 1.0/(2*pi*0.48*s.heat_transfer_coefficient))

    T_clad = s.fluid_temperature + q_lin*R_fluid
    T_fuel = T_clad + q_lin*R_fuel_clad
    assert heat.temperature[0, 0, 1] == pytest.approx(T_clad)
    assert heat.temperature[0, 0, 0] == pytest.approx(T_fuel)


def test_invalid_geometry(settings):
    settings.clad_inner_radius = 0.3
    with pytest.raises(SetupError):
        SurrogateHeatDriver(DummyCommunicator(), settings)
    with pytest.raises(TypeError):
        SurrogateHeatDriver(DummyCommunicator(), None)
