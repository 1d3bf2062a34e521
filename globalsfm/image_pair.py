"""Pairs of images with their two-view geometry and matches."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from globalsfm.rigid3d import Rigid3d
from globalsfm.types import MAX_NUM_IMAGES, ConfigurationType


def image_pair_to_pair_id(image_id1: int, image_id2: int) -> int:
    """Order-independent id of a pair of images."""
    low, high = sorted((image_id1, image_id2))
    return MAX_NUM_IMAGES * low + high


def pair_id_to_image_pair(pair_id: int) -> tuple[int, int]:
    """Split a pair id into two image ids, the larger id first."""
    image_id1 = pair_id % MAX_NUM_IMAGES
    image_id2 = (pair_id - image_id1) // MAX_NUM_IMAGES
    return image_id1, image_id2


def _zeros33() -> np.ndarray:
    return np.zeros((3, 3))


@dataclass
class ImagePair:
    """Relative geometry and feature matches between two images."""

    image_id1: int
    image_id2: int
    cam2_from_cam1: Rigid3d = field(default_factory=Rigid3d)
    pair_id: int = field(init=False)
    is_valid: bool = True
    # The initial inlier rate.
    weight: float = 0.0
    config: int = ConfigurationType.UNDEFINED
    E: np.ndarray = field(default_factory=_zeros33)
    F: np.ndarray = field(default_factory=_zeros33)
    H: np.ndarray = field(default_factory=_zeros33)
    # Rows of (feature index in image 1, feature index in image 2).
    matches: np.ndarray = field(
        default_factory=lambda: np.zeros((0, 2), dtype=np.int64)
    )
    # Row indices of inliers in ``matches``.
    inliers: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.pair_id = image_pair_to_pair_id(self.image_id1, self.image_id2)
        self.matches = np.asarray(self.matches, dtype=np.int64).reshape(-1, 2)