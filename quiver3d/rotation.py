"""Rotations that carry the canonical glyph axis onto an arbitrary direction."""

import numpy as np

# below this the cross product is treated as zero
_PARALLEL_EPS = 1e-12


def axis_angle_matrix(axis, angle):
    """
    Rotation matrix around an arbitrary unit axis (Rodrigues' formula).

    Parameters:
        axis: [x,y,z] unit vector
        angle: rotation angle in radians, right-handed about axis

    Returns:
        array: 3x3 rotation matrix
    """
    x, y, z = axis
    c = np.cos(angle)
    s = np.sin(angle)
    t = 1 - c

    return np.array([
        [t*x**2 + c, t*x*y - s*z, t*x*z + s*y],
        [t*x*y + s*z, t*y**2 + c, t*y*z - s*x],
        [t*x*z - s*y, t*y*z + s*x, t*z**2 + c]
    ])


def perpendicular_axis(axis):
    """Unit vector perpendicular to axis, built from its smallest component."""
    axis = np.asarray(axis, dtype=np.float64)
    helper = np.zeros(3)
    helper[np.argmin(np.abs(axis))] = 1.0
    perp = np.cross(axis, helper)
    return perp / np.linalg.norm(perp)


def rotation_axis_angle(axis, target):
    """
    Axis and angle of the minimal rotation taking axis onto target.

    Parameters:
        axis: [x,y,z] canonical unit vector
        target: [dx,dy,dz] non-zero vector, need not be normalized

    Returns:
        tuple: (unit rotation axis, angle in radians). The axis always has unit
        length, also when target is parallel or anti-parallel to axis.
    """
    axis = np.asarray(axis, dtype=np.float64)
    target = np.asarray(target, dtype=np.float64)
    direction = target / np.linalg.norm(target)

    angle = np.arccos(np.clip(np.dot(axis, direction), -1.0, 1.0))
    rotation_axis = np.cross(axis, direction)
    norm = np.linalg.norm(rotation_axis)

    if norm > _PARALLEL_EPS:
        return rotation_axis / norm, angle

    if np.dot(axis, direction) > 0:
        # parallel, any axis with a zero angle
        return perpendicular_axis(axis), 0.0

    return perpendicular_axis(axis), np.pi


def rotation_between(axis, target):
    """
    Rotation matrix R with R @ axis pointing along target.

    Parameters:
        axis: [x,y,z] canonical unit vector
        target: [dx,dy,dz] non-zero vector

    Returns:
        array: 3x3 rotation matrix. Identity when target is parallel to axis,
        a half turn about a perpendicular when it is anti-parallel.

    Example:
        R = rotation_between([0, 0, 1], [1, 0, 0])
        R @ [0, 0, 1]  # ~[1, 0, 0]
    """
    rotation_axis, angle = rotation_axis_angle(axis, target)
    if angle == 0.0:
        return np.eye(3)
    return axis_angle_matrix(rotation_axis, angle)
