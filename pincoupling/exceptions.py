class CouplingError(Exception):
    """Root exception class for pincoupling."""


class GeometryError(CouplingError):
    """Ring/cell-instance mapping is inconsistent"""


class AveragingError(CouplingError):
    """An average was requested over an empty or zero-weight set."""


class SetupError(CouplingError):
    """Error while setting up a coupled problem."""
