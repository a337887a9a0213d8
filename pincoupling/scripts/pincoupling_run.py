#!/usr/bin/env python3

"""Run a coupled OpenMC / surrogate heat conduction calculation.

The coupling parameters and the surrogate heat solver geometry are read from
an XML file (coupling.xml by default). OpenMC reads its own model from the
working directory as usual; any arguments not recognized here are passed on
to OpenMC.

"""

import argparse
import sys

from pincoupling.driver import CoupledDriver
from pincoupling.exceptions import SetupError
from pincoupling.heat import SurrogateHeatDriver
from pincoupling.mpi import comm
from pincoupling.settings import CouplingSettings


def main(input_file, write_statepoints=False, openmc_args=None):
    settings = CouplingSettings.from_xml(input_file)
    if settings.heat_surrogate is None:
        raise SetupError(f"'{input_file}' does not contain a "
                         "<heat_surrogate> element.")

    # Loads the OpenMC shared library
    from pincoupling.openmc_driver import OpenMCDriver

    transport = OpenMCDriver(comm, args=openmc_args, output=settings.output,
                             write_statepoints=write_statepoints)
    try:
        heat = SurrogateHeatDriver(comm, settings.heat_surrogate)
        driver = CoupledDriver.from_settings(transport, heat, settings, comm)
        driver.solve()
    finally:
        transport.finalize()


def run(argv=None):
    parser = argparse.ArgumentParser(
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument('-i', '--input', default='coupling.xml',
                        help='Coupling XML input file')
    parser.add_argument('-s', '--statepoints', action='store_true',
                        help='Write an OpenMC statepoint after every '
                             'transport solve')
    args, openmc_args = parser.parse_known_args(argv)
    main(args.input, args.statepoints, openmc_args)


if __name__ == '__main__':
    sys.exit(run())
