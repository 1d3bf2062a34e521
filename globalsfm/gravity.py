"""Gravity alignment helpers."""

from __future__ import annotations

import numpy as np

from globalsfm.rigid3d import angle_axis_to_rotation, rotation_to_angle_axis


def get_align_rot(gravity) -> np.ndarray:
    """Rotation whose second column is the normalised gravity direction."""
    v = np.asarray(gravity, dtype=float).reshape(3)
    v = v / np.linalg.norm(v)
    q, _ = np.linalg.qr(v.reshape(3, 1), mode="complete")
    rot = np.empty((3, 3))
    rot[:, 1] = v
    rot[:, 0] = q[:, 1]
    rot[:, 2] = q[:, 2]
    if np.linalg.det(rot) < 0:
        rot[:, 2] = -rot[:, 2]
    return rot


def rot_up_to_angle(r_up) -> float:
    """Rotation angle of an upright (y-axis) rotation matrix."""
    return float(rotation_to_angle_axis(r_up)[1])


def angle_to_rot_up(angle: float) -> np.ndarray:
    """Upright rotation matrix about the y axis."""
    return angle_axis_to_rotation([0.0, angle, 0.0])