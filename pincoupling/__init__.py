import importlib.metadata

from pincoupling.exceptions import *
from pincoupling.abc import *
from pincoupling.mapping import *
from pincoupling.tallies import *
from pincoupling.projection import *
from pincoupling.settings import *
from pincoupling.heat import *
from pincoupling.results import *
from pincoupling.driver import *


try:
    __version__ = importlib.metadata.version("pincoupling")
except importlib.metadata.PackageNotFoundError:
    __version__ = "unknown"
