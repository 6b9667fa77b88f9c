"""Default styling and tessellation constants."""

from dataclasses import dataclass

import numpy as np

DEFAULT_COLOR = "k"
DEFAULT_STEM_RATIO = 0.75
DEFAULT_STEM_RADIUS = 0.025

# stem radius is a fraction of the arrow length
STEM_RADIUS_RANGE = (0.01, 0.1)

CONE_RADIUS_RATIO = 1.5
CONE_STEPS = 4
DEFAULT_SEGMENTS = 20

# canonical meshes are revolved about local +z
CANONICAL_AXIS = np.array([0.0, 0.0, 1.0])


@dataclass(frozen=True)
class ArrowStyle:
    """
    Styling shared by one arrow or a whole quiver.

    Parameters:
        color: color name ('r', 'red', ...), one (r,g,b) triplet, or for quivers an Nx3 array
        stem_ratio: fraction of the arrow length taken by the stem, in (0, 1)
        stem_radius: stem radius as a fraction of the arrow length, in [0.01, 0.1]
    """
    color: object = DEFAULT_COLOR
    stem_ratio: object = DEFAULT_STEM_RATIO
    stem_radius: object = DEFAULT_STEM_RADIUS
