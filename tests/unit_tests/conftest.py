import pytest

from tests.dummy_drivers import DummyHeatDriver, PinTransportDriver


@pytest.fixture
def single_pin():
    """One pin, one axial layer, two fuel rings and one clad ring.

    The transport geometry has a fuel zone and a clad zone, each split into
    four azimuthal sectors.
    """
    heat = DummyHeatDriver(r_grid_fuel=[0.0, 0.2, 0.4],
                           r_grid_clad=[0.42, 0.48])
    transport = PinTransportDriver(pin_centers=[(0.0, 0.0)],
                                   radii=[0.41, 0.5], n_sectors=4)
    return transport, heat


@pytest.fixture
def lattice():
    """Two pins, three axial layers, three fuel rings and two clad rings.

    Transport cells are coarser than the rings: one fuel zone and one clad
    zone per pin and per transport layer, with two transport layers covering
    the three heat layers.
    """
    centers = [(0.0, 0.0), (1.26, 0.0)]
    heat = DummyHeatDriver(r_grid_fuel=[0.0, 0.15, 0.3, 0.4],
                           r_grid_clad=[0.42, 0.45, 0.48],
                           z=[0.0, 10.0, 20.0, 30.0],
                           pin_centers=centers)
    transport = PinTransportDriver(pin_centers=centers, radii=[0.41, 0.5],
                                   z=[15.0])
    return transport, heat
