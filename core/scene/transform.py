"""Parent-group transform: Euler XYZ rotation, uniform scale, translation."""

from __future__ import annotations

import numpy as np

from core.types import GroupTransform


def rotation_matrix(pitch: float, yaw: float, roll: float = 0.0) -> np.ndarray:
    """Rotation for intrinsic Euler angles in XYZ order (``Rx @ Ry @ Rz``)."""
    cx, sx = np.cos(pitch), np.sin(pitch)
    cy, sy = np.cos(yaw), np.sin(yaw)
    cz, sz = np.cos(roll), np.sin(roll)

    rx = np.array([[1, 0, 0], [0, cx, -sx], [0, sx, cx]], dtype=np.float64)
    ry = np.array([[cy, 0, sy], [0, 1, 0], [-sy, 0, cy]], dtype=np.float64)
    rz = np.array([[cz, -sz, 0], [sz, cz, 0], [0, 0, 1]], dtype=np.float64)
    return rx @ ry @ rz


def apply_group_transform(points: np.ndarray, transform: GroupTransform) -> np.ndarray:
    """Map local positions into world space.

    Args:
        points: (N, 3) or (3,) local positions.
        transform: Group transform to apply (scale, then rotate, then translate).

    Returns:
        World positions with the same shape as ``points``.
    """
    pts = np.asarray(points, dtype=np.float64)
    rot = rotation_matrix(transform.pitch, transform.yaw, transform.roll)
    world: np.ndarray = (rot @ (pts * transform.scale).T).T + np.asarray(transform.translation)
    return world
