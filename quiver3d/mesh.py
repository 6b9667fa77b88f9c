"""Surfaces of revolution used for arrow stems and heads."""

import numpy as np

from .config import CONE_STEPS, DEFAULT_SEGMENTS
from .errors import InvalidArgumentShapeError, InvalidRangeError


class RevolvedMesh:
    """
    A rectangular grid of vertices swept around an axis.

    X, Y and Z have shape (rows, cols). Row i is one latitude ring and the grid
    wraps around the circumference, so column cols-1 is joined to column 0.
    """

    def __init__(self, X, Y, Z):
        X = np.asarray(X, dtype=np.float64)
        Y = np.asarray(Y, dtype=np.float64)
        Z = np.asarray(Z, dtype=np.float64)
        if X.ndim != 2 or X.shape != Y.shape or X.shape != Z.shape:
            raise InvalidArgumentShapeError(
                f"Mesh grids must share one 2-D shape, got {X.shape}, {Y.shape}, {Z.shape}"
            )
        self.X = X
        self.Y = Y
        self.Z = Z

    @property
    def rows(self):
        return self.X.shape[0]

    @property
    def cols(self):
        return self.X.shape[1]

    @property
    def vertices(self):
        """(rows*cols, 3) vertex array in row-major order."""
        return np.column_stack([self.X.ravel(), self.Y.ravel(), self.Z.ravel()])

    def ring(self, i):
        """Vertices of row i as a (cols, 3) array."""
        return np.column_stack([self.X[i], self.Y[i], self.Z[i]])

    def quads(self):
        """
        Quad faces between adjacent rows and columns.

        Returns:
            array: (M, 4) vertex indices, M = (rows-1)*cols
        """
        quads = []
        for i in range(self.rows - 1):
            for j in range(self.cols):
                current = i * self.cols + j
                next_h = i * self.cols + (j + 1) % self.cols
                next_v = current + self.cols
                next_vh = next_h + self.cols
                quads.append([current, next_h, next_vh, next_v])
        return np.array(quads, dtype=np.uint32).reshape(-1, 4)

    def triangles(self):
        """Each quad split into two triangles, (2M, 3) vertex indices."""
        quads = self.quads()
        first = quads[:, [0, 1, 3]]
        second = quads[:, [1, 2, 3]]
        return np.stack([first, second], axis=1).reshape(-1, 3)

    def transformed(self, rotation, offset=(0.0, 0.0, 0.0)):
        """New mesh with every vertex v replaced by rotation @ v + offset."""
        moved = self.vertices @ np.asarray(rotation).T + np.asarray(offset, dtype=np.float64)
        shape = self.X.shape
        return RevolvedMesh(
            moved[:, 0].reshape(shape),
            moved[:, 1].reshape(shape),
            moved[:, 2].reshape(shape)
        )

    def __repr__(self):
        return f"RevolvedMesh(rows={self.rows}, cols={self.cols})"


def revolve(radii, height=1.0, segments=DEFAULT_SEGMENTS):
    """
    Sweep a radius profile around the local z axis.

    Parameters:
        radii: sequence of at least two non-negative radii, one per row
        height: z of the last row; the first row sits at z=0 (default: 1.0)
        segments: number of samples around the circumference (default: 20)

    Returns:
        RevolvedMesh: len(radii) rows by segments columns. Row k lies at
        z = height * k / (len(radii) - 1).

    Example:
        mesh = revolve([1.0, 0.5, 0.0], height=2.0)  # a cone made of 3 rings
    """
    radii = np.asarray(radii, dtype=np.float64).ravel()
    if radii.size < 2:
        raise InvalidArgumentShapeError("A revolved mesh needs at least two radii")
    if np.any(radii < 0):
        raise InvalidRangeError("Radii of a revolved mesh must be non-negative")
    if segments < 3:
        raise InvalidRangeError(f"At least 3 segments are required, got {segments}")

    angles = 2 * np.pi * np.arange(segments) / segments
    X = radii[:, None] * np.cos(angles)[None, :]
    Y = radii[:, None] * np.sin(angles)[None, :]
    z = height * np.linspace(0.0, 1.0, radii.size)
    Z = np.repeat(z[:, None], segments, axis=1)
    return RevolvedMesh(X, Y, Z)


def cylinder(radius, height=1.0, segments=DEFAULT_SEGMENTS):
    """Open cylinder: a bottom ring at z=0 and a top ring at z=height."""
    return revolve([radius, radius], height, segments)


def cone_radii(flare_radius, cone_radius, steps=CONE_STEPS):
    """
    Radius profile of an arrow head.

    Steps down from flare_radius in equal decrements of cone_radius/steps and
    always finishes with a zero radius so the tip closes to a point.
    """
    if flare_radius == 0 or cone_radius == 0:
        return np.zeros(2)

    decrement = cone_radius / steps
    radii = np.arange(flare_radius, 0.0, -decrement)
    return np.append(radii, 0.0)


def cone(cylinder_radius, cone_radius, height=1.0, steps=CONE_STEPS, segments=DEFAULT_SEGMENTS):
    """
    Cone for an arrow head, flaring to twice the stem radius at its base.

    Parameters:
        cylinder_radius: radius of the stem the cone sits on
        cone_radius: nominal head radius; sets the decrement between rows
        height: height of the apex above the base (default: 1.0)
        steps: divisor of cone_radius giving the row decrement (default: 4)
        segments: number of samples around the circumference (default: 20)

    Returns:
        RevolvedMesh: base ring at z=0, point ring at z=height
    """
    return revolve(cone_radii(2 * cylinder_radius, cone_radius, steps), height, segments)
