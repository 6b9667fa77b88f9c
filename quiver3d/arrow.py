"""A single 3D arrow: a cylindrical stem with a conical head."""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .colors import as_rgb
from .config import (
    CANONICAL_AXIS,
    CONE_RADIUS_RATIO,
    CONE_STEPS,
    DEFAULT_COLOR,
    DEFAULT_SEGMENTS,
    DEFAULT_STEM_RADIUS,
    DEFAULT_STEM_RATIO,
    STEM_RADIUS_RANGE,
)
from .errors import (
    DegenerateDirectionError,
    InvalidArgumentShapeError,
    InvalidGeometryError,
    InvalidRangeError,
)
from .exporter import default_surface
from .mesh import RevolvedMesh, cone, cylinder
from .rotation import rotation_between

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class ArrowGeometry:
    """
    World-space meshes of one arrow.

    stem and head are RevolvedMesh grids, rotation is the 3x3 matrix that took
    the canonical axis onto the arrow direction and tip is where the head is
    seated. handles stays None until draw() records the (stem, head) surface
    handles on it.
    """
    stem: RevolvedMesh
    head: RevolvedMesh
    color: np.ndarray
    rotation: np.ndarray
    origin: np.ndarray
    tip: np.ndarray
    handles: Optional[tuple] = None

    def meshes(self):
        return self.stem, self.head

    def vertices(self):
        """Stem vertices followed by head vertices, (N, 3)."""
        return np.vstack([self.stem.vertices, self.head.vertices])

    def faces(self):
        """Triangles of both meshes indexing into vertices()."""
        offset = len(self.stem.vertices)
        return np.vstack([self.stem.triangles(), self.head.triangles() + offset])

    def draw(self, surface):
        """
        Submit stem and head to a rendering surface and record the handles.

        Returns:
            tuple: (stem handle, head handle)
        """
        stem_handle = surface.add_surface(self.stem.vertices, self.stem.quads(), self.color, edges=False)
        head_handle = surface.add_surface(self.head.vertices, self.head.quads(), self.color, edges=False)
        self.handles = (stem_handle, head_handle)
        return self.handles


def as_float_array(value, name):
    """np.asarray as float64, raising InvalidArgumentShapeError for ragged or non-numeric input."""
    try:
        return np.asarray(value, dtype=np.float64)
    except (ValueError, TypeError) as err:
        raise InvalidArgumentShapeError(f"{name} is not a rectangular numeric array: {err}") from err


def as_scalar(value, name):
    scalar = as_float_array(value, name)
    if scalar.ndim != 0:
        raise InvalidArgumentShapeError(f"{name} must be a scalar, got shape {scalar.shape}")
    return float(scalar)


def as_vector3(value, name):
    vector = as_float_array(value, name)
    if vector.shape != (3,):
        raise InvalidArgumentShapeError(f"{name} must have three components, got shape {vector.shape}")
    if not np.all(np.isfinite(vector)):
        raise InvalidGeometryError(f"{name} contains NaN or infinite values: {vector}")
    return vector


def check_stem_ratio(stem_ratio):
    if not 0.0 < stem_ratio < 1.0:
        raise InvalidRangeError(f"stem_ratio must lie strictly between 0 and 1, got {stem_ratio}")


def check_stem_radius(stem_radius):
    low, high = STEM_RADIUS_RANGE
    if not low <= stem_radius <= high:
        raise InvalidRangeError(f"stem_radius must lie in [{low}, {high}], got {stem_radius}")


def arrow_geometry(origin, direction, color, stem_ratio, stem_radius, segments=DEFAULT_SEGMENTS):
    """
    Build the meshes of one arrow from already validated inputs.

    Parameters:
        origin: [x,y,z] start of the arrow
        direction: [dx,dy,dz] arrow vector; its length is the arrow length
        color: (r,g,b) array
        stem_ratio: fraction of the length taken by the stem
        stem_radius: stem radius as a fraction of the length
        segments: samples around each ring (default: 20)

    Returns:
        ArrowGeometry
    """
    magnitude = np.linalg.norm(direction)
    if not np.isfinite(magnitude):
        raise InvalidGeometryError(f"Direction {direction} has a non-finite length")
    if magnitude <= 0:
        raise DegenerateDirectionError("Direction has zero length, the arrow has no orientation")

    cylinder_radius = stem_radius * magnitude
    cone_radius = CONE_RADIUS_RATIO * cylinder_radius
    stem_height = magnitude * stem_ratio
    head_height = magnitude * (1 - stem_ratio)

    stem = cylinder(cylinder_radius, stem_height, segments)
    head = cone(cylinder_radius, cone_radius, head_height, CONE_STEPS, segments)

    R = rotation_between(CANONICAL_AXIS, direction)
    # seat the head on the rotated stem tip, not the canonical one
    tip = R @ (CANONICAL_AXIS * stem_height) + origin

    stem = stem.transformed(R, origin)
    head = head.transformed(R, tip)

    if not (np.all(np.isfinite(stem.vertices)) and np.all(np.isfinite(head.vertices))):
        raise InvalidGeometryError("Arrow produced non-finite vertices")

    logger.debug("Arrow at %s, length %.4g, stem ratio %.3g", origin, magnitude, stem_ratio)
    return ArrowGeometry(stem, head, color, R, origin, tip)


def build_arrow(origin, direction, color=DEFAULT_COLOR, stem_ratio=DEFAULT_STEM_RATIO,
                stem_radius=DEFAULT_STEM_RADIUS, *, style=None, surface=None):
    """
    Build a 3D arrow with a cylindrical stem and a cone head and draw it.

    Parameters:
        origin: [x,y,z] spatial location of the start of the arrow
        direction: [dx,dy,dz] arrow vector relative to origin
        color: color name ('r', 'red', ...) or (r,g,b) tuple (default: 'k')
        stem_ratio: stem length as a fraction of the arrow length, in (0, 1) (default: 0.75).
            A value of 0.82 gives a stem spanning 82% and a head spanning 18%.
        stem_radius: stem radius as a fraction of the arrow length, in [0.01, 0.1] (default: 0.025)
        style: optional ArrowStyle; when given it replaces color, stem_ratio and stem_radius
        surface: rendering surface to draw on; the default surface when None

    Returns:
        ArrowGeometry: with handles set to the (stem, head) surface handles

    Example:
        arrow = build_arrow([0, 0, 0], [4, 3, 7])
        arrow = build_arrow([0, 0, 0], [0, 0, 1], color='r', stem_ratio=0.9)
    """
    if style is not None:
        color, stem_ratio, stem_radius = style.color, style.stem_ratio, style.stem_radius

    origin = as_vector3(origin, "origin")
    direction = as_vector3(direction, "direction")
    rgb = as_rgb(color)
    stem_ratio = as_scalar(stem_ratio, "stem_ratio")
    stem_radius = as_scalar(stem_radius, "stem_radius")
    check_stem_ratio(stem_ratio)
    check_stem_radius(stem_radius)

    arrow = arrow_geometry(origin, direction, rgb, stem_ratio, stem_radius)
    arrow.draw(surface if surface is not None else default_surface())
    return arrow
