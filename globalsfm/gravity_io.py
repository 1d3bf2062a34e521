"""Reading per-image gravity directions from a text file."""

from __future__ import annotations

import logging
import os

from globalsfm.image import Image

logger = logging.getLogger(__name__)


def read_gravity(gravity_path: str | os.PathLike, images: dict[int, Image]) -> int:
    """Load gravity vectors into the matching images.

    Each line holds an image name followed by three numbers: the direction
    of [0, 1, 0] in the image frame. The image rotation is reset to agree
    with the gravity. Returns the number of images that received gravity.
    """
    name_idx = {image.file_name: image_id for image_id, image in images.items()}

    counter = 0
    with open(gravity_path, encoding="utf-8") as file:
        for line_number, line in enumerate(file, start=1):
            fields = line.split()
            if not fields:
                continue
            if len(fields) < 4:
                raise ValueError(
                    f"{gravity_path}:{line_number}: expected a name and 3 numbers"
                )
            name = fields[0]
            try:
                gravity = [float(item) for item in fields[1:4]]
            except ValueError as exc:
                raise ValueError(f"{gravity_path}:{line_number}: {exc}") from exc

            image_id = name_idx.get(name)
            if image_id is None:
                continue
            image = images[image_id]
            image.gravity_info.set_gravity(gravity)
            image.cam_from_world.rotation = image.gravity_info.r_align.T.copy()
            counter += 1

    logger.info("%d images are loaded with gravity", counter)
    return counter