"""Three-dimensional arrow glyphs and quivers exported as glTF meshes."""

__version__ = "1.0.1"

import logging

from .arrow import ArrowGeometry, build_arrow
from .colors import to_rgb
from .config import ArrowStyle
from .errors import (
    DegenerateDirectionError,
    InvalidArgumentShapeError,
    InvalidGeometryError,
    InvalidRangeError,
    Quiver3DError,
    UnknownColorNameError
)
from .exporter import GLTFSurface, default_surface
from .mesh import RevolvedMesh, cone, cylinder, revolve
from .quiver import Quiver, build_quiver
from .rotation import rotation_between

logging.getLogger(__name__).addHandler(logging.NullHandler())
