"""Rigid transforms and rotation helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np
from scipy.spatial.transform import Rotation

from globalsfm.types import EPS


def _as_vector(values) -> np.ndarray:
    vec = np.asarray(values, dtype=float).reshape(-1)
    if vec.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {vec.shape}")
    return vec


def _clamped_acos_deg(cos_r: float) -> float:
    cos_r = min(max(cos_r, -1.0), 1.0)
    return math.degrees(math.acos(cos_r))


@dataclass
class Rigid3d:
    """Rigid transform x -> rotation @ x + translation."""

    rotation: np.ndarray = field(default_factory=lambda: np.eye(3))
    translation: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self) -> None:
        self.rotation = np.array(self.rotation, dtype=float)
        if self.rotation.shape != (3, 3):
            raise ValueError(f"rotation must be 3x3, got {self.rotation.shape}")
        self.translation = _as_vector(self.translation).copy()

    @classmethod
    def identity(cls) -> "Rigid3d":
        """The identity transform."""
        return cls()

    def inverse(self) -> "Rigid3d":
        """The transform that undoes this one."""
        rot_t = self.rotation.T
        return Rigid3d(rot_t, -rot_t @ self.translation)

    def compose(self, other: "Rigid3d") -> "Rigid3d":
        """Transform applying ``other`` first and then ``self``."""
        return Rigid3d(
            self.rotation @ other.rotation,
            self.translation + self.rotation @ other.translation,
        )

    def transform(self, point) -> np.ndarray:
        """Apply the transform to a 3D point."""
        return self.rotation @ _as_vector(point) + self.translation


def calc_rotation_angle(rotation1, rotation2) -> float:
    """Angle in degrees between two rotation matrices."""
    r1 = np.asarray(rotation1, dtype=float)
    r2 = np.asarray(rotation2, dtype=float)
    product = r1.T @ r2
    diag_sum = float(product[0, 0] + product[1, 1] + product[2, 2])
    return _clamped_acos_deg((diag_sum - 1.0) / 2.0)


def calc_angle(pose1: Rigid3d, pose2: Rigid3d) -> float:
    """Rotation angle difference in degrees between two poses."""
    return calc_rotation_angle(pose1.rotation, pose2.rotation)


def calc_trans(pose1: Rigid3d, pose2: Rigid3d) -> float:
    """Distance between the centres of two poses."""
    return float(
        np.linalg.norm(pose1.inverse().translation - pose2.inverse().translation)
    )


def calc_trans_angle(pose1: Rigid3d, pose2: Rigid3d) -> float:
    """Angle in degrees between the translation directions of two poses."""
    t1, t2 = pose1.translation, pose2.translation
    cos_r = float(t1 @ t2) / (np.linalg.norm(t1) * np.linalg.norm(t2))
    return _clamped_acos_deg(cos_r)


def deg_to_rad(degree: float) -> float:
    """Convert degrees to radians."""
    return degree * math.pi / 180


def rad_to_deg(radian: float) -> float:
    """Convert radians to degrees."""
    return radian * 180 / math.pi


def rotation_to_angle_axis(rot) -> np.ndarray:
    """Angle-axis vector of a rotation matrix, with angle in [0, pi]."""
    return Rotation.from_matrix(np.asarray(rot, dtype=float)).as_rotvec()


def rigid3d_to_angle_axis(pose: Rigid3d) -> np.ndarray:
    """Angle-axis vector of a pose's rotation."""
    return rotation_to_angle_axis(pose.rotation)


def angle_axis_to_rotation(aa_vec) -> np.ndarray:
    """Rotation matrix of an angle-axis vector.

    Near zero, the first-order approximation I + [aa]x is used.
    """
    aa = _as_vector(aa_vec)
    if np.linalg.norm(aa) > EPS:
        return Rotation.from_rotvec(aa).as_matrix()
    return np.array(
        [
            [1.0, -aa[2], aa[1]],
            [aa[2], 1.0, -aa[0]],
            [-aa[1], aa[0], 1.0],
        ]
    )