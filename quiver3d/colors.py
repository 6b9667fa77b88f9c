"""Color name lookup and RGB validation."""

import numpy as np

from .errors import InvalidArgumentShapeError, InvalidRangeError, UnknownColorNameError

_NAMED_COLORS = {
    ("y", "yellow"): (1.0, 1.0, 0.0),
    ("m", "magenta"): (1.0, 0.0, 1.0),
    ("c", "cyan"): (0.0, 1.0, 1.0),
    ("r", "red"): (1.0, 0.0, 0.0),
    ("g", "green"): (0.0, 1.0, 0.0),
    ("b", "blue"): (0.0, 0.0, 1.0),
    ("w", "white"): (1.0, 1.0, 1.0),
    ("k", "black"): (0.0, 0.0, 0.0),
}

COLOR_NAMES = {name: rgb for names, rgb in _NAMED_COLORS.items() for name in names}


def to_rgb(name):
    """
    Convert a short or long color name to an (r,g,b) tuple.

    Parameters:
        name: one of y/yellow, m/magenta, c/cyan, r/red, g/green, b/blue, w/white, k/black

    Returns:
        tuple: (r,g,b) with components in [0, 1]

    Example:
        to_rgb('r')      # (1.0, 0.0, 0.0)
        to_rgb('Green')  # (0.0, 1.0, 0.0)
    """
    try:
        return COLOR_NAMES[name.lower()]
    except KeyError:
        raise UnknownColorNameError(
            f"Unrecognized color name: {name.lower()!r}. Valid names are: "
            "y, m, c, r, g, b, w, k / "
            "yellow, magenta, cyan, red, green, blue, white, black"
        ) from None


def as_rgb(color):
    """Resolve a single color (name or triplet) to a float array of shape (3,)."""
    if isinstance(color, str):
        return np.array(to_rgb(color), dtype=np.float64)

    try:
        rgb = np.asarray(color, dtype=np.float64)
    except (ValueError, TypeError) as err:
        raise InvalidArgumentShapeError(f"RGB color is not numeric: {color!r}") from err
    if rgb.shape != (3,):
        raise InvalidArgumentShapeError(
            f"RGB color must have 3 components, got shape {rgb.shape}"
        )
    check_rgb_range(rgb)
    return rgb


def check_rgb_range(rgb):
    if not np.all(np.isfinite(rgb)) or np.any(rgb < 0.0) or np.any(rgb > 1.0):
        raise InvalidRangeError("RGB components must lie in [0, 1]")
