__version__ = "v0.1.0"


__all__ = ["__version__", "cli", "config", "constants", "corridor", "errors", "generator", "geojson", "models", "spatial"]

from . import constants
from . import errors
from . import models
from . import spatial
from . import geojson
from . import generator
from . import config
from . import corridor
from . import cli
