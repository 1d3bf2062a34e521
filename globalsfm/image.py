"""Images with poses, features and optional gravity priors."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from globalsfm.gravity import get_align_rot
from globalsfm.rigid3d import Rigid3d


@dataclass
class GravityInfo:
    """Gravity direction of an image and the rotation aligned with it."""

    has_gravity: bool = False
    gravity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    # Alignment matrix; its second column is the gravity direction.
    r_align: np.ndarray = field(default_factory=lambda: np.eye(3))

    def set_gravity(self, g) -> None:
        """Store a gravity vector and derive its alignment rotation."""
        self.gravity = np.asarray(g, dtype=float).reshape(3).copy()
        self.r_align = get_align_rot(self.gravity)
        self.has_gravity = True


@dataclass
class Image:
    """An image, its camera, pose and detected features."""

    image_id: int = -1
    camera_id: int = -1
    file_name: str = ""
    # Whether the image is within the largest connected component.
    is_registered: bool = False
    cluster_id: int = -1
    # Transformation from world to camera.
    cam_from_world: Rigid3d = field(default_factory=Rigid3d)
    gravity_info: GravityInfo = field(default_factory=GravityInfo)
    # Pixel coordinates of the features.
    features: list[np.ndarray] = field(default_factory=list)
    # Normalised rays of the features, filled in by undistortion.
    features_undist: list[np.ndarray] = field(default_factory=list)

    def center(self) -> np.ndarray:
        """Position of the camera centre in world coordinates."""
        pose = self.cam_from_world
        return pose.rotation.T @ -pose.translation