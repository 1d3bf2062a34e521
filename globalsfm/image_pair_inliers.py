"""Scoring image pairs and collecting inlier matches."""

from __future__ import annotations

import math

import numpy as np

from globalsfm.camera import Camera
from globalsfm.image import Image
from globalsfm.image_pair import ImagePair
from globalsfm.rigid3d import deg_to_rad
from globalsfm.two_view_geometry import (
    check_cheirality,
    essential_from_motion,
    get_orientation_signum,
    homography_error,
    sampson_error,
)
from globalsfm.types import EPS, ConfigurationType, InlierThresholdOptions
from globalsfm.view_graph import ViewGraph

_HOMOGRAPHY_CONFIGS = {
    ConfigurationType.PLANAR,
    ConfigurationType.PANORAMIC,
    ConfigurationType.PLANAR_OR_PANORAMIC,
}


class ImagePairInliers:
    """Finds the inlier matches of one image pair under its geometry."""

    def __init__(
        self,
        image_pair: ImagePair,
        images: dict[int, Image],
        options: InlierThresholdOptions,
        cameras: dict[int, Camera] | None = None,
    ) -> None:
        self.image_pair = image_pair
        self.images = images
        self.options = options
        self.cameras = cameras

    def score_error(self) -> float:
        """Fill the pair's inliers and return the truncated error score."""
        config = self.image_pair.config
        if config in _HOMOGRAPHY_CONFIGS:
            return self._score_error_homography()
        if config == ConfigurationType.UNCALIBRATED:
            return self._score_error_fundamental()
        if config == ConfigurationType.CALIBRATED:
            return self._score_error_essential()
        return 0.0

    def _feature_pairs(self, undistorted: bool):
        pair = self.image_pair
        image1 = self.images[pair.image_id1]
        image2 = self.images[pair.image_id2]
        feats1 = image1.features_undist if undistorted else image1.features
        feats2 = image2.features_undist if undistorted else image2.features
        for k, (idx1, idx2) in enumerate(pair.matches):
            yield k, np.asarray(feats1[int(idx1)]), np.asarray(feats2[int(idx2)])

    def _score_error_essential(self) -> float:
        if self.cameras is None:
            raise ValueError("cameras are needed to score a calibrated pair")
        pair = self.image_pair
        pose = pair.cam2_from_cam1
        e = essential_from_motion(pose)

        # epipole_ij: camera i seen in image j
        epipole12 = pose.translation.copy()
        epipole21 = pose.inverse().translation
        if epipole12[2] < 0:
            epipole12 = -epipole12
        if epipole21[2] < 0:
            epipole21 = -epipole21

        pair.inliers.clear()

        focal1 = self.cameras[self.images[pair.image_id1].camera_id].focal()
        focal2 = self.cameras[self.images[pair.image_id2].camera_id].focal()
        # Threshold converted from pixels to normalised coordinates.
        thres = self.options.max_epipolar_error_E * 0.5 * (1.0 / focal1 + 1.0 / focal2)
        sq_threshold = thres * thres

        thres_epipole = math.cos(deg_to_rad(3.0)) + 1e-6
        thres_angle = 1.0 + 1e-6
        rot_inv = pose.rotation.T

        score = 0.0
        for k, pt1, pt2 in self._feature_pairs(undistorted=True):
            r2 = sampson_error(e, pt1, pt2)
            if r2 >= sq_threshold:
                score += sq_threshold
                continue
            cheirality = check_cheirality(pose, pt1, pt2, 1e-2, 100.0)
            # Reject rays that are nearly parallel or close to the epipoles.
            not_degenerate = (
                float(pt1 @ (rot_inv @ pt2)) < thres_angle
                and float(pt1 @ epipole21) < thres_epipole
                and float(pt2 @ epipole12) < thres_epipole
            )
            if cheirality and not_degenerate:
                score += r2
                pair.inliers.append(k)
            else:
                score += sq_threshold
        return score

    def _score_error_fundamental(self) -> float:
        pair = self.image_pair
        pair.inliers.clear()

        f = np.asarray(pair.F, dtype=float)
        epipole = np.cross(f[0], f[2])
        if not np.any(np.abs(epipole) > EPS):
            epipole = np.cross(f[1], f[2])

        sq_threshold = self.options.max_epipolar_error_F ** 2
        score = 0.0
        candidates: list[tuple[int, float, float]] = []
        positive_count = 0
        for k, pt1, pt2 in self._feature_pairs(undistorted=False):
            r2 = sampson_error(f, pt1, pt2)
            if r2 < sq_threshold:
                signum = get_orientation_signum(f, epipole, pt1, pt2)
                if signum > 0:
                    positive_count += 1
                candidates.append((k, signum, r2))
            else:
                score += sq_threshold

        negative_count = len(candidates) - positive_count
        # Without a dominant orientation the pair cannot be trusted.
        if positive_count == negative_count:
            return 0.0
        is_positive = positive_count > negative_count

        for k, signum, r2 in candidates:
            if (signum > 0) == is_positive:
                pair.inliers.append(k)
                score += r2
            else:
                score += sq_threshold
        return score

    def _score_error_homography(self) -> float:
        pair = self.image_pair
        pair.inliers.clear()
        sq_threshold = self.options.max_epipolar_error_H ** 2
        score = 0.0
        for k, pt1, pt2 in self._feature_pairs(undistorted=False):
            r2 = homography_error(pair.H, pt1, pt2)
            if r2 < sq_threshold:
                score += r2
                pair.inliers.append(k)
            else:
                score += sq_threshold
        return score


def image_pairs_inlier_count(
    view_graph: ViewGraph,
    cameras: dict[int, Camera],
    images: dict[int, Image],
    options: InlierThresholdOptions,
    clean_inliers: bool,
) -> None:
    """Recompute inliers of the pairs; existing inliers are kept unless cleaned."""
    for pair in view_graph.image_pairs.values():
        if not clean_inliers and pair.inliers:
            continue
        pair.inliers.clear()
        if not pair.is_valid:
            continue
        ImagePairInliers(pair, images, options, cameras).score_error()