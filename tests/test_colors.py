from __future__ import annotations

import numpy as np
import pytest

from quiver3d import InvalidArgumentShapeError, InvalidRangeError, UnknownColorNameError, to_rgb
from quiver3d.colors import as_rgb


@pytest.mark.parametrize(
    "short, long, rgb",
    [
        ("y", "yellow", (1, 1, 0)),
        ("m", "magenta", (1, 0, 1)),
        ("c", "cyan", (0, 1, 1)),
        ("r", "red", (1, 0, 0)),
        ("g", "green", (0, 1, 0)),
        ("b", "blue", (0, 0, 1)),
        ("w", "white", (1, 1, 1)),
        ("k", "black", (0, 0, 0)),
    ],
)
def test_named_colors(short: str, long: str, rgb: tuple[int, int, int]) -> None:
    assert to_rgb(short) == rgb
    assert to_rgb(long) == rgb
    assert to_rgb(long.upper()) == rgb


def test_unknown_name() -> None:
    with pytest.raises(UnknownColorNameError, match="purple"):
        to_rgb("Purple")


def test_as_rgb() -> None:
    np.testing.assert_array_equal(as_rgb("b"), [0, 0, 1])
    np.testing.assert_array_equal(as_rgb([0.25, 0.5, 1]), [0.25, 0.5, 1])

    with pytest.raises(InvalidArgumentShapeError):
        as_rgb([[1, 0, 0]])
    with pytest.raises(InvalidRangeError):
        as_rgb([1.5, 0, 0])
