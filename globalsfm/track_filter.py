"""Removing track observations that disagree with the current geometry."""

from __future__ import annotations

import logging
import math

import numpy as np

from globalsfm.camera import Camera
from globalsfm.image import Image
from globalsfm.rigid3d import deg_to_rad
from globalsfm.track import Observation, Track
from globalsfm.types import EPS
from globalsfm.view_graph import ViewGraph

logger = logging.getLogger(__name__)


def _replace_if_changed(track: Track, kept: list[Observation]) -> bool:
    if len(kept) != len(track.observations):
        track.observations = kept
        return True
    return False


def filter_tracks_by_reprojection(
    view_graph: ViewGraph,
    cameras: dict[int, Camera],
    images: dict[int, Image],
    tracks: dict[int, Track],
    max_reprojection_error: float = 1e-2,
    in_normalized_image: bool = True,
) -> int:
    """Drop observations whose reprojection error reaches the threshold.

    The error is measured on the normalised image plane, or in pixels when
    ``in_normalized_image`` is false. Observations behind the camera are
    dropped too. Returns the number of tracks that changed.
    """
    counter = 0
    for track in tracks.values():
        kept: list[Observation] = []
        for image_id, feature_id in track.observations:
            image = images[image_id]
            pt_calc = image.cam_from_world.transform(track.xyz)
            if pt_calc[2] < EPS:
                continue
            pt_reproj = pt_calc[:2] / pt_calc[2]
            if in_normalized_image:
                feature_undist = np.asarray(image.features_undist[feature_id])
                target = feature_undist[:2] / (feature_undist[2] + EPS)
                error = float(np.linalg.norm(pt_reproj - target))
            else:
                pt_dist = cameras[image.camera_id].img_from_cam(pt_reproj)
                error = float(
                    np.linalg.norm(pt_dist - np.asarray(image.features[feature_id]))
                )
            if error < max_reprojection_error:
                kept.append((image_id, feature_id))
        if _replace_if_changed(track, kept):
            counter += 1
    logger.info(
        "Filtered %d / %d tracks by reprojection error", counter, len(tracks)
    )
    return counter


def filter_tracks_by_angle(
    view_graph: ViewGraph,
    cameras: dict[int, Camera],
    images: dict[int, Image],
    tracks: dict[int, Track],
    max_angle_error: float = 1.0,
) -> int:
    """Drop observations whose ray deviates from the point by too large an angle.

    ``max_angle_error`` is in degrees; cameras without a prior focal length
    are allowed twice the angle. Returns the number of tracks that changed.
    """
    counter = 0
    thres = math.cos(deg_to_rad(max_angle_error))
    thres_uncalib = math.cos(deg_to_rad(max_angle_error * 2))
    for track in tracks.values():
        kept: list[Observation] = []
        for image_id, feature_id in track.observations:
            image = images[image_id]
            feature_undist = np.asarray(image.features_undist[feature_id])
            pt_calc = image.cam_from_world.transform(track.xyz)
            if pt_calc[2] < EPS:
                continue
            pt_calc = pt_calc / np.linalg.norm(pt_calc)
            thres_cam = (
                thres if cameras[image.camera_id].has_prior_focal_length else thres_uncalib
            )
            if float(pt_calc @ feature_undist) > thres_cam:
                kept.append((image_id, feature_id))
        if _replace_if_changed(track, kept):
            counter += 1
    logger.info("Filtered %d / %d tracks by angle error", counter, len(tracks))
    return counter


def filter_track_triangulation_angle(
    view_graph: ViewGraph,
    images: dict[int, Image],
    tracks: dict[int, Track],
    min_angle: float = 1.0,
) -> int:
    """Clear tracks whose viewing rays never span at least ``min_angle`` degrees.

    Returns the number of tracks cleared.
    """
    counter = 0
    thres = math.cos(deg_to_rad(min_angle))
    for track in tracks.values():
        directions = []
        for image_id, _ in track.observations:
            ray = track.xyz - images[image_id].center()
            directions.append(ray / np.linalg.norm(ray))
        wide_enough = any(
            float(first @ second) < thres
            for i, first in enumerate(directions)
            for second in directions[i + 1 :]
        )
        if not wide_enough:
            counter += 1
            track.observations = []
    logger.info(
        "Filtered %d / %d tracks by too small triangulation angle",
        counter,
        len(tracks),
    )
    return counter