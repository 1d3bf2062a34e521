"""Computing normalised feature rays for images."""

from __future__ import annotations

import logging

import numpy as np

from globalsfm.camera import Camera
from globalsfm.image import Image

logger = logging.getLogger(__name__)


def undistort_images(
    cameras: dict[int, Camera],
    images: dict[int, Image],
    clean_points: bool = True,
) -> int:
    """Fill each image's ``features_undist`` with unit rays of its features.

    Unless ``clean_points`` is set, images whose rays already match their
    features in number are left alone. Returns the number of images processed.
    """
    logger.info("Undistorting images..")
    processed = 0
    for image in images.values():
        if len(image.features_undist) == len(image.features) and not clean_points:
            continue
        camera = cameras[image.camera_id]
        rays = []
        for feature in image.features:
            ray = np.append(camera.cam_from_img(feature), 1.0)
            rays.append(ray / np.linalg.norm(ray))
        image.features_undist = rays
        processed += 1
    logger.info("Image undistortion done")
    return processed