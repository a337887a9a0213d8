from numbers import Integral, Real
from pathlib import Path

import lxml.etree as ET
import numpy as np

import pincoupling.checkvalue as cv
from pincoupling._xml import clean_indentation, get_elem_list, get_text
from pincoupling.exceptions import SetupError


__all__ = ["CouplingSettings", "HeatSurrogateSettings"]


def _required_text(elem, name):
    text = get_text(elem, name)
    if text is None:
        raise SetupError(f'<{elem.tag}> is missing required element <{name}>.')
    return text


def _format_list(values):
    return ' '.join(str(x) for x in values)


class HeatSurrogateSettings:
    """Geometry and properties for the surrogate heat conduction solver.

    Parameters
    ----------
    pellet_radius : float
        Outer radius of the fuel pellet in [cm]
    clad_inner_radius : float
        Inner radius of the cladding in [cm]
    clad_outer_radius : float
        Outer radius of the cladding in [cm]
    n_fuel_rings : int
        Number of equal-thickness radial rings in the pellet
    n_clad_rings : int
        Number of equal-thickness radial rings in the cladding
    pin_centers : iterable of float
        (x, y) coordinates of each pin center in [cm]
    z : iterable of float
        Axial boundaries in [cm]

    Attributes
    ----------
    pellet_radius : float
        Outer radius of the fuel pellet in [cm]
    clad_inner_radius : float
        Inner radius of the cladding in [cm]
    clad_outer_radius : float
        Outer radius of the cladding in [cm]
    n_fuel_rings : int
        Number of radial rings in the pellet
    n_clad_rings : int
        Number of radial rings in the cladding
    pin_centers : numpy.ndarray
        (x, y) coordinates of each pin center in [cm], shape (n_pins, 2)
    z : numpy.ndarray
        Axial boundaries in [cm]
    fluid_temperature : float
        Bulk coolant temperature in [K]
    heat_transfer_coefficient : float
        Clad-to-coolant heat transfer coefficient in [W/cm^2-K]
    fuel_conductivity : float
        Thermal conductivity of the fuel in [W/cm-K]
    clad_conductivity : float
        Thermal conductivity of the cladding in [W/cm-K]
    gap_conductance : float
        Pellet-clad gap conductance in [W/cm^2-K]
    initial_temperature : float
        Temperature everywhere before the first solve in [K]

    """

    def __init__(self, pellet_radius, clad_inner_radius, clad_outer_radius,
                 n_fuel_rings, n_clad_rings, pin_centers, z):
        self.pellet_radius = pellet_radius
        self.clad_inner_radius = clad_inner_radius
        self.clad_outer_radius = clad_outer_radius
        self.n_fuel_rings = n_fuel_rings
        self.n_clad_rings = n_clad_rings
        self.pin_centers = pin_centers
        self.z = z
        self.fluid_temperature = 565.0
        self.heat_transfer_coefficient = 3.0
        self.fuel_conductivity = 0.03
        self.clad_conductivity = 0.16
        self.gap_conductance = 0.5
        self.initial_temperature = 565.0

    def __repr__(self):
        string = 'HeatSurrogateSettings\n'
        for name in ('pellet_radius', 'clad_inner_radius',
                     'clad_outer_radius', 'n_fuel_rings', 'n_clad_rings',
                     'fluid_temperature', 'heat_transfer_coefficient',
                     'fuel_conductivity', 'clad_conductivity',
                     'gap_conductance', 'initial_temperature'):
            string += '{0: <28}{1}{2}\n'.format(
                '\t' + name, '=\t', getattr(self, name))
        string += '{0: <28}{1}{2}\n'.format('\tn_pins', '=\t',
                                            len(self.pin_centers))
        string += '{0: <28}{1}{2}\n'.format('\tn_axial', '=\t',
                                            len(self.z) - 1)
        return string

    @property
    def pellet_radius(self):
        return self._pellet_radius

    @pellet_radius.setter
    def pellet_radius(self, radius):
        cv.check_type('pellet radius', radius, Real)
        cv.check_greater_than('pellet radius', radius, 0.0)
        self._pellet_radius = float(radius)

    @property
    def clad_inner_radius(self):
        return self._clad_inner_radius

    @clad_inner_radius.setter
    def clad_inner_radius(self, radius):
        cv.check_type('clad inner radius', radius, Real)
        cv.check_greater_than('clad inner radius', radius, 0.0)
        self._clad_inner_radius = float(radius)

    @property
    def clad_outer_radius(self):
        return self._clad_outer_radius

    @clad_outer_radius.setter
    def clad_outer_radius(self, radius):
        cv.check_type('clad outer radius', radius, Real)
        cv.check_greater_than('clad outer radius', radius, 0.0)
        self._clad_outer_radius = float(radius)

    @property
    def n_fuel_rings(self):
        return self._n_fuel_rings

    @n_fuel_rings.setter
    def n_fuel_rings(self, n):
        cv.check_type('number of fuel rings', n, Integral)
        cv.check_greater_than('number of fuel rings', n, 0)
        self._n_fuel_rings = int(n)

    @property
    def n_clad_rings(self):
        return self._n_clad_rings

    @n_clad_rings.setter
    def n_clad_rings(self, n):
        cv.check_type('number of clad rings', n, Integral)
        cv.check_greater_than('number of clad rings', n, 0)
        self._n_clad_rings = int(n)

    @property
    def pin_centers(self):
        return self._pin_centers

    @pin_centers.setter
    def pin_centers(self, centers):
        centers = np.asarray(centers, dtype=float)
        if centers.ndim == 1:
            if centers.size % 2 != 0:
                raise ValueError('Pin centers must be given as (x, y) pairs.')
            centers = centers.reshape(-1, 2)
        if centers.ndim != 2 or centers.shape[1] != 2:
            raise ValueError('Pin centers must have shape (n_pins, 2).')
        cv.check_length('pin centers', centers, 1)
        self._pin_centers = centers

    @property
    def z(self):
        return self._z

    @z.setter
    def z(self, z):
        z = np.asarray(z, dtype=float)
        cv.check_length('axial boundaries', z, 2)
        cv.check_increasing('axial boundaries', z)
        self._z = z

    @property
    def fluid_temperature(self):
        return self._fluid_temperature

    @fluid_temperature.setter
    def fluid_temperature(self, T):
        cv.check_type('fluid temperature', T, Real)
        cv.check_greater_than('fluid temperature', T, 0.0)
        self._fluid_temperature = float(T)

    @property
    def heat_transfer_coefficient(self):
        return self._heat_transfer_coefficient

    @heat_transfer_coefficient.setter
    def heat_transfer_coefficient(self, h):
        cv.check_type('heat transfer coefficient', h, Real)
        cv.check_greater_than('heat transfer coefficient', h, 0.0)
        self._heat_transfer_coefficient = float(h)

    @property
    def fuel_conductivity(self):
        return self._fuel_conductivity

    @fuel_conductivity.setter
    def fuel_conductivity(self, k):
        cv.check_type('fuel conductivity', k, Real)
        cv.check_greater_than('fuel conductivity', k, 0.0)
        self._fuel_conductivity = float(k)

    @property
    def clad_conductivity(self):
        return self._clad_conductivity

    @clad_conductivity.setter
    def clad_conductivity(self, k):
        cv.check_type('clad conductivity', k, Real)
        cv.check_greater_than('clad conductivity', k, 0.0)
        self._clad_conductivity = float(k)

    @property
    def gap_conductance(self):
        return self._gap_conductance

    @gap_conductance.setter
    def gap_conductance(self, h):
        cv.check_type('gap conductance', h, Real)
        cv.check_greater_than('gap conductance', h, 0.0)
        self._gap_conductance = float(h)

    @property
    def initial_temperature(self):
        return self._initial_temperature

    @initial_temperature.setter
    def initial_temperature(self, T):
        cv.check_type('initial temperature', T, Real)
        cv.check_greater_than('initial temperature', T, 0.0)
        self._initial_temperature = float(T)

    def check_geometry(self):
        """Check that the pellet, gap and cladding radii are ordered.

        Raises
        ------
        pincoupling.exceptions.SetupError
            If the radii do not satisfy pellet <= clad inner < clad outer

        """
        if not (self.pellet_radius <= self.clad_inner_radius
                < self.clad_outer_radius):
            raise SetupError(
                'Radii must satisfy pellet_radius <= clad_inner_radius < '
                f'clad_outer_radius, got {self.pellet_radius}, '
                f'{self.clad_inner_radius}, {self.clad_outer_radius}.')

    def to_xml_element(self):
        """Create a 'heat_surrogate' element to be written to an XML file.

        Returns
        -------
        element : lxml.etree._Element
            XML element containing surrogate heat solver settings

        """
        element = ET.Element("heat_surrogate")
        for name in ('pellet_radius', 'clad_inner_radius',
                     'clad_outer_radius', 'n_fuel_rings', 'n_clad_rings'):
            ET.SubElement(element, name).text = str(getattr(self, name))
        ET.SubElement(element, "pin_centers").text = _format_list(
            self.pin_centers.ravel())
        ET.SubElement(element, "z").text = _format_list(self.z)
        for name in ('fluid_temperature', 'heat_transfer_coefficient',
                     'fuel_conductivity', 'clad_conductivity',
                     'gap_conductance', 'initial_temperature'):
            ET.SubElement(element, name).text = str(getattr(self, name))
        return element

    @classmethod
    def from_xml_element(cls, elem):
        """Generate surrogate heat solver settings from an XML element

        Parameters
        ----------
        elem : lxml.etree._Element
            'heat_surrogate' XML element

        Returns
        -------
        HeatSurrogateSettings
            Surrogate heat solver settings

        """
        centers = get_elem_list(elem, 'pin_centers')
        z = get_elem_list(elem, 'z')
        if centers is None:
            raise SetupError('<heat_surrogate> is missing required element '
                             '<pin_centers>.')
        if z is None:
            raise SetupError('<heat_surrogate> is missing required element '
                             '<z>.')

        settings = cls(
            pellet_radius=float(_required_text(elem, 'pellet_radius')),
            clad_inner_radius=float(_required_text(elem, 'clad_inner_radius')),
            clad_outer_radius=float(_required_text(elem, 'clad_outer_radius')),
            n_fuel_rings=int(_required_text(elem, 'n_fuel_rings')),
            n_clad_rings=int(_required_text(elem, 'n_clad_rings')),
            pin_centers=centers,
            z=z
        )

        for name in ('fluid_temperature', 'heat_transfer_coefficient',
                     'fuel_conductivity', 'clad_conductivity',
                     'gap_conductance', 'initial_temperature'):
            text = get_text(elem, name)
            if text is not None:
                setattr(settings, name, float(text))

        settings.check_geometry()
        return settings


class CouplingSettings:
    """Parameters of a coupled transport/heat calculation.

    Parameters
    ----------
    power : float
        Total power in [W]
    max_timesteps : int
        Number of timesteps
    max_picard_iter : int
        Number of Picard iterations per timestep

    Attributes
    ----------
    power : float
        Total power in [W]
    max_timesteps : int
        Number of timesteps
    max_picard_iter : int
        Number of Picard iterations per timestep
    output : bool
        Whether to display information about progress
    results : pathlib.Path or None
        Path of the HDF5 file that iteration results are written to. If
        None, no file is written.
    heat_surrogate : HeatSurrogateSettings or None
        Settings of the surrogate heat conduction solver

    """

    def __init__(self, power, max_timesteps=1, max_picard_iter=1):
        self.power = power
        self.max_timesteps = max_timesteps
        self.max_picard_iter = max_picard_iter
        self.output = True
        self.results = None
        self.heat_surrogate = None

    def __repr__(self):
        string = 'CouplingSettings\n'
        string += '{0: <24}{1}{2}\n'.format('\tpower', '=\t', self.power)
        string += '{0: <24}{1}{2}\n'.format('\tmax_timesteps', '=\t',
                                            self.max_timesteps)
        string += '{0: <24}{1}{2}\n'.format('\tmax_picard_iter', '=\t',
                                            self.max_picard_iter)
        string += '{0: <24}{1}{2}\n'.format('\tresults', '=\t', self.results)
        return string

    @property
    def power(self):
        return self._power

    @power.setter
    def power(self, power):
        cv.check_type('power', power, Real)
        cv.check_greater_than('power', power, 0.0)
        self._power = float(power)

    @property
    def max_timesteps(self):
        return self._max_timesteps

    @max_timesteps.setter
    def max_timesteps(self, n):
        cv.check_type('maximum number of timesteps', n, Integral)
        cv.check_greater_than('maximum number of timesteps', n, 0)
        self._max_timesteps = int(n)

    @property
    def max_picard_iter(self):
        return self._max_picard_iter

    @max_picard_iter.setter
    def max_picard_iter(self, n):
        cv.check_type('maximum number of Picard iterations', n, Integral)
        cv.check_greater_than('maximum number of Picard iterations', n, 0)
        self._max_picard_iter = int(n)

    @property
    def output(self):
        return self._output

    @output.setter
    def output(self, output):
        cv.check_type('output', output, bool)
        self._output = output

    @property
    def results(self):
        return self._results

    @results.setter
    def results(self, path):
        cv.check_type('results path', path, (str, Path), none_ok=True)
        self._results = None if path is None else Path(path)

    @property
    def heat_surrogate(self):
        return self._heat_surrogate

    @heat_surrogate.setter
    def heat_surrogate(self, settings):
        cv.check_type('heat surrogate settings', settings,
                      HeatSurrogateSettings, none_ok=True)
        self._heat_surrogate = settings

    def to_xml_element(self):
        """Create a 'coupling' element to be written to an XML file.

        Returns
        -------
        element : lxml.etree._Element
            XML element containing coupling settings

        """
        element = ET.Element("coupling")
        ET.SubElement(element, "power").text = str(self.power)
        ET.SubElement(element, "max_timesteps").text = str(self.max_timesteps)
        ET.SubElement(element, "max_picard_iter").text = \
            str(self.max_picard_iter)
        ET.SubElement(element, "output").text = str(self.output).lower()
        if self.results is not None:
            ET.SubElement(element, "results").text = str(self.results)
        if self.heat_surrogate is not None:
            element.append(self.heat_surrogate.to_xml_element())
        clean_indentation(element)
        return element

    def export_to_xml(self, path='coupling.xml'):
        """Export coupling settings to an XML file.

        Parameters
        ----------
        path : str or pathlib.Path
            Path to file to write. Defaults to 'coupling.xml'.

        """
        p = Path(path)
        if p.is_dir():
            p /= 'coupling.xml'

        tree = ET.ElementTree(self.to_xml_element())
        tree.write(str(p), xml_declaration=True, encoding='utf-8')

    @classmethod
    def from_xml_element(cls, elem):
        """Generate coupling settings from an XML element

        Parameters
        ----------
        elem : lxml.etree._Element
            'coupling' XML element

        Returns
        -------
        CouplingSettings
            Coupling settings

        """
        settings = cls(
            power=float(_required_text(elem, 'power')),
            max_timesteps=int(_required_text(elem, 'max_timesteps')),
            max_picard_iter=int(_required_text(elem, 'max_picard_iter'))
        )

        text = get_text(elem, 'output')
        if text is not None:
            settings.output = text.strip().lower() in ('true', '1')

        text = get_text(elem, 'results')
        if text is not None:
            settings.results = text.strip()

        surr_elem = elem.find('heat_surrogate')
        if surr_elem is not None:
            settings.heat_surrogate = \
                HeatSurrogateSettings.from_xml_element(surr_elem)

        return settings

    @classmethod
    def from_xml(cls, path='coupling.xml'):
        """Generate coupling settings from an XML file

        Parameters
        ----------
        path : str or pathlib.Path
            Path to coupling XML file

        Returns
        -------
        CouplingSettings
            Coupling settings

        """
        tree = ET.parse(str(path))
        return cls.from_xml_element(tree.getroot())
