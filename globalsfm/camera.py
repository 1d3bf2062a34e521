"""Camera models with intrinsics, distortion and undistortion."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np


class CameraModel(Enum):
    """Supported camera models and their parameter layouts."""

    SIMPLE_PINHOLE = "SIMPLE_PINHOLE"  # f, cx, cy
    PINHOLE = "PINHOLE"  # fx, fy, cx, cy
    SIMPLE_RADIAL = "SIMPLE_RADIAL"  # f, cx, cy, k
    RADIAL = "RADIAL"  # f, cx, cy, k1, k2
    OPENCV = "OPENCV"  # fx, fy, cx, cy, k1, k2, p1, p2


_NUM_PARAMS = {
    CameraModel.SIMPLE_PINHOLE: 3,
    CameraModel.PINHOLE: 4,
    CameraModel.SIMPLE_RADIAL: 4,
    CameraModel.RADIAL: 5,
    CameraModel.OPENCV: 8,
}

_TWO_FOCAL = {CameraModel.PINHOLE, CameraModel.OPENCV}

_MAX_UNDISTORT_ITERATIONS = 100
_UNDISTORT_TOLERANCE = 1e-12


@dataclass
class Camera:
    """A camera with a model, image size and intrinsic parameters."""

    model: CameraModel
    width: int
    height: int
    params: np.ndarray
    camera_id: int = 0
    has_prior_focal_length: bool = False
    has_refined_focal_length: bool = False
    _: None = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.model = CameraModel(self.model)
        self.params = np.array(self.params, dtype=float).reshape(-1)
        expected = _NUM_PARAMS[self.model]
        if self.params.size != expected:
            raise ValueError(
                f"{self.model.value} takes {expected} parameters, "
                f"got {self.params.size}"
            )

    @property
    def _fx(self) -> float:
        return float(self.params[0])

    @property
    def _fy(self) -> float:
        return float(self.params[1] if self.model in _TWO_FOCAL else self.params[0])

    @property
    def _cx(self) -> float:
        return float(self.params[2] if self.model in _TWO_FOCAL else self.params[1])

    @property
    def _cy(self) -> float:
        return float(self.params[3] if self.model in _TWO_FOCAL else self.params[2])

    @property
    def _extra(self) -> np.ndarray:
        return self.params[4:] if self.model in _TWO_FOCAL else self.params[3:]

    def focal(self) -> float:
        """Mean of the horizontal and vertical focal lengths."""
        return (self._fx + self._fy) / 2.0

    def principal_point(self) -> np.ndarray:
        """Principal point (cx, cy)."""
        return np.array([self._cx, self._cy])

    def get_k(self) -> np.ndarray:
        """The 3x3 calibration matrix."""
        return np.array(
            [
                [self._fx, 0.0, self._cx],
                [0.0, self._fy, self._cy],
                [0.0, 0.0, 1.0],
            ]
        )

    def _distortion(self, uv: np.ndarray) -> np.ndarray:
        u, v = uv
        extra = self._extra
        if self.model in (CameraModel.SIMPLE_PINHOLE, CameraModel.PINHOLE):
            return np.zeros(2)
        r2 = u * u + v * v
        if self.model is CameraModel.SIMPLE_RADIAL:
            radial = extra[0] * r2
            return np.array([u * radial, v * radial])
        if self.model is CameraModel.RADIAL:
            radial = extra[0] * r2 + extra[1] * r2 * r2
            return np.array([u * radial, v * radial])
        k1, k2, p1, p2 = extra
        uv_prod = u * v
        radial = k1 * r2 + k2 * r2 * r2
        du = u * radial + 2 * p1 * uv_prod + p2 * (r2 + 2 * u * u)
        dv = v * radial + 2 * p2 * uv_prod + p1 * (r2 + 2 * v * v)
        return np.array([du, dv])

    def _undistort(self, distorted: np.ndarray) -> np.ndarray:
        if self.model in (CameraModel.SIMPLE_PINHOLE, CameraModel.PINHOLE):
            return distorted
        x = distorted.copy()
        for _ in range(_MAX_UNDISTORT_ITERATIONS):
            residual = x + self._distortion(x) - distorted
            if np.linalg.norm(residual) < _UNDISTORT_TOLERANCE:
                break
            jac = np.eye(2)
            for axis in range(2):
                step = max(1e-10, 1e-6 * abs(x[axis]))
                delta = np.zeros(2)
                delta[axis] = step
                jac[:, axis] += (
                    self._distortion(x + delta) - self._distortion(x - delta)
                ) / (2 * step)
            x = x - np.linalg.solve(jac, residual)
        return x

    def cam_from_img(self, xy) -> np.ndarray:
        """Normalised, undistorted camera coordinates of an image point."""
        x, y = np.asarray(xy, dtype=float).reshape(2)
        distorted = np.array([(x - self._cx) / self._fx, (y - self._cy) / self._fy])
        return self._undistort(distorted)

    def img_from_cam(self, xy) -> np.ndarray:
        """Image point of normalised camera coordinates."""
        uv = np.asarray(xy, dtype=float).reshape(2)
        d = uv + self._distortion(uv)
        return np.array([self._fx * d[0] + self._cx, self._fy * d[1] + self._cy])