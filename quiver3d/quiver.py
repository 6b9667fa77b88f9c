"""Batches of 3D arrows representing a sampled vector field."""

import logging
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from .arrow import arrow_geometry, as_float_array, check_stem_radius, check_stem_ratio
from .colors import as_rgb, check_rgb_range, to_rgb
from .config import DEFAULT_COLOR, DEFAULT_STEM_RADIUS, DEFAULT_STEM_RATIO
from .errors import DegenerateDirectionError, InvalidArgumentShapeError, InvalidGeometryError
from .exporter import default_surface

logger = logging.getLogger(__name__)


class Quiver:
    """
    The arrows of one build_quiver call, in input order.

    Behaves as a read-only sequence of ArrowGeometry. After drawing, handles
    is an (N, 2) array of (stem, head) surface handles.
    """

    def __init__(self, arrows):
        self.arrows = list(arrows)
        self.handles = None

    def __len__(self):
        return len(self.arrows)

    def __getitem__(self, index):
        return self.arrows[index]

    def __iter__(self):
        return iter(self.arrows)

    def draw(self, surface):
        """Submit every arrow to surface in index order and return the handle table."""
        handles = [arrow.draw(surface) for arrow in self.arrows]
        self.handles = np.array(handles, dtype=object).reshape(len(self.arrows), 2)
        return self.handles


def as_point_array(values, name):
    """Validate an Nx3 array of finite coordinates."""
    array = as_float_array(values, name)
    if array.ndim != 2 or array.shape[1] != 3 or array.shape[0] == 0:
        raise InvalidArgumentShapeError(f"{name} must be a non-empty Nx3 array, got shape {array.shape}")
    if not np.all(np.isfinite(array)):
        raise InvalidGeometryError(f"{name} contains NaN or infinite values")
    return array


def broadcast_colors(colors, count):
    """
    Expand a color specification to an Nx3 RGB array.

    Parameters:
        colors: a color name, one (r,g,b) triplet, a list of N names or an Nx3 array
        count: number of arrows N

    Returns:
        array: (count, 3) RGB values
    """
    if isinstance(colors, str):
        return np.tile(to_rgb(colors), (count, 1))

    if isinstance(colors, (list, tuple)) and colors and all(isinstance(c, str) for c in colors):
        if len(colors) != count:
            raise InvalidArgumentShapeError(f"Expected {count} color names, got {len(colors)}")
        return np.array([to_rgb(c) for c in colors], dtype=np.float64)

    rgb = as_float_array(colors, "colors")
    if rgb.shape == (3,) or rgb.shape == (1, 3):
        return np.tile(as_rgb(rgb.ravel()), (count, 1))
    if rgb.shape != (count, 3):
        raise InvalidArgumentShapeError(
            f"Colors must be a name, 1x3 or {count}x3 RGB values, got shape {rgb.shape}"
        )
    check_rgb_range(rgb)
    return rgb


def broadcast_values(values, count, name):
    """Expand a scalar to count entries, or accept a vector of exactly count entries."""
    array = as_float_array(values, name)
    if array.size == 1:
        return np.full(count, array.item())
    if array.ndim != 1 or array.size != count:
        raise InvalidArgumentShapeError(
            f"{name} must be a scalar or have {count} entries, got shape {array.shape}"
        )
    return array


def build_quiver(positions, directions, colors=DEFAULT_COLOR, stem_ratios=DEFAULT_STEM_RATIO,
                 stem_radii=DEFAULT_STEM_RADIUS, *, style=None, surface=None, workers=None):
    """
    Build and draw a quiver of 3D arrows.

    Every input is validated before the first arrow is built, and a single bad
    element fails the whole batch.

    Parameters:
        positions: Nx3 array of arrow start points [[x1,y1,z1], [x2,y2,z2], ...]
        directions: Nx3 array of arrow vectors [[dx1,dy1,dz1], ...]
        colors: a color name ('r', 'red', ...), one (r,g,b) triplet, N names or an Nx3 array (default: 'k')
        stem_ratios: scalar or N stem ratios in (0, 1) (default: 0.75)
        stem_radii: scalar or N stem radius fractions in [0.01, 0.1] (default: 0.025)
        style: optional ArrowStyle; when given it replaces colors, stem_ratios and stem_radii
        surface: rendering surface to draw on; the default surface when None
        workers: build arrows on this many threads when greater than 1 (default: None)

    Returns:
        Quiver: the N arrows in input order, with an (N, 2) handles table

    Example:
        positions = [[0,0,0], [1,0,0], [2,0,0]]
        directions = [[0,0,1], [0,0,2], [0,0,3]]
        quiver = build_quiver(positions, directions, 'red', stem_ratios=0.6)
    """
    if style is not None:
        colors, stem_ratios, stem_radii = style.color, style.stem_ratio, style.stem_radius

    positions = as_point_array(positions, "positions")
    directions = as_point_array(directions, "directions")
    count = len(positions)
    if len(directions) != count:
        raise InvalidArgumentShapeError(
            f"Number of positions ({count}) and directions ({len(directions)}) do not agree"
        )

    rgb = broadcast_colors(colors, count)
    ratios = broadcast_values(stem_ratios, count, "stem_ratios")
    radii = broadcast_values(stem_radii, count, "stem_radii")
    for ratio in ratios:
        check_stem_ratio(ratio)
    for radius in radii:
        check_stem_radius(radius)

    zero = np.flatnonzero(np.linalg.norm(directions, axis=1) == 0)
    if zero.size:
        raise DegenerateDirectionError(f"Direction at row {zero[0]} has zero length")

    def build(i):
        return arrow_geometry(positions[i], directions[i], rgb[i], ratios[i], radii[i])

    if workers is not None and workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            arrows = list(executor.map(build, range(count)))
    else:
        arrows = [build(i) for i in range(count)]

    quiver = Quiver(arrows)
    quiver.draw(surface if surface is not None else default_surface())
    logger.info("Built quiver of %d arrows", count)
    return quiver
