"""Sparsifying, clustering and reconfiguring the view graph."""

from __future__ import annotations

import logging
import random
from enum import Enum

from globalsfm.camera import Camera
from globalsfm.image import Image
from globalsfm.image_pair import ImagePair
from globalsfm.two_view_geometry import fundamental_from_motion_and_cameras
from globalsfm.types import ConfigurationType
from globalsfm.union_find import UnionFind
from globalsfm.view_graph import ViewGraph

logger = logging.getLogger(__name__)

_MAX_CLUSTER_ITERATIONS = 10
_MIN_LINKING_PAIRS = 2
_WEAK_EDGE_FACTOR = 0.75


class StrongClusterCriteria(Enum):
    """Edge measure used to decide whether a pair is strong."""

    INLIER_NUM = 0
    WEIGHT = 1


def _is_registered(images: dict[int, Image], image_id: int) -> bool:
    image = images.get(image_id)
    return image is not None and image.is_registered


def sparsify_graph(
    view_graph: ViewGraph,
    images: dict[int, Image],
    expected_degree: int = 50,
    rng: random.Random | None = None,
) -> int:
    """Randomly thin out edges between highly connected images.

    An edge is always kept if either image has degree at most
    ``expected_degree``, otherwise with probability
    expected_degree * average_degree / (degree1 * degree2). Only the largest
    connected component remains registered. Returns the number of edges kept.
    """
    rng = rng if rng is not None else random.Random()
    num_img = view_graph.keep_largest_connected_components(images)
    adjacency = view_graph.adjacency_list

    total_degree = sum(
        len(neighbors)
        for image_id, neighbors in adjacency.items()
        if _is_registered(images, image_id)
    )
    average_degree = total_degree / num_img if num_img else 0.0

    chosen: set[int] = set()
    for pair_id, pair in view_graph.image_pairs.items():
        if not pair.is_valid:
            continue
        if not (
            _is_registered(images, pair.image_id1)
            and _is_registered(images, pair.image_id2)
        ):
            continue
        degree1 = len(adjacency[pair.image_id1])
        degree2 = len(adjacency[pair.image_id2])
        if degree1 <= expected_degree or degree2 <= expected_degree:
            chosen.add(pair_id)
            continue
        if rng.random() < (expected_degree * average_degree) / (degree1 * degree2):
            chosen.add(pair_id)

    for pair_id, pair in view_graph.image_pairs.items():
        if pair_id not in chosen:
            pair.is_valid = False

    view_graph.keep_largest_connected_components(images)
    return len(chosen)


def _edge_strength(pair: ImagePair, criteria: StrongClusterCriteria) -> float:
    if criteria is StrongClusterCriteria.INLIER_NUM:
        return float(len(pair.inliers))
    return float(pair.weight)


def establish_strong_clusters(
    view_graph: ViewGraph,
    images: dict[int, Image],
    criteria: StrongClusterCriteria = StrongClusterCriteria.INLIER_NUM,
    min_thres: float = 100,
    min_num_images: int = 2,
) -> int:
    """Split the graph into clusters held together by strong edges.

    Edges stronger than ``min_thres`` seed the clusters; two clusters are
    then merged when at least two edges of strength 0.75 * ``min_thres`` or
    more join them. Edges between clusters become invalid. Returns the
    number of clusters marked on the images.
    """
    view_graph.keep_largest_connected_components(images)

    uf: UnionFind[int] = UnionFind()
    for pair in view_graph.image_pairs.values():
        if pair.is_valid and _edge_strength(pair, criteria) > min_thres:
            uf.union(pair.image_id1, pair.image_id2)

    iteration = 0
    merged = True
    while merged:
        merged = False
        iteration += 1
        if iteration > _MAX_CLUSTER_ITERATIONS:
            break

        num_pairs: dict[int, dict[int, int]] = {}
        for pair in view_graph.image_pairs.values():
            if not pair.is_valid:
                continue
            if _edge_strength(pair, criteria) < _WEAK_EDGE_FACTOR * min_thres:
                continue
            root1 = uf.find(pair.image_id1)
            root2 = uf.find(pair.image_id2)
            if root1 == root2:
                continue
            links1 = num_pairs.setdefault(root1, {})
            links2 = num_pairs.setdefault(root2, {})
            links1[root2] = links1.get(root2, 0) + 1
            links2[root1] = links2.get(root1, 0) + 1

        for root1, counter in num_pairs.items():
            for root2, count in counter.items():
                if root1 <= root2:
                    continue
                if count >= _MIN_LINKING_PAIRS:
                    merged = True
                    uf.union(root1, root2)

    for pair in view_graph.image_pairs.values():
        if pair.is_valid and uf.find(pair.image_id1) != uf.find(pair.image_id2):
            pair.is_valid = False

    num_comp = view_graph.mark_connected_components(images, min_num_images)
    logger.info(
        "Clustering take %d iterations. Images are grouped into %d clusters "
        "after strong-clustering",
        iteration,
        num_comp,
    )
    return num_comp


def update_image_pairs_config(
    view_graph: ViewGraph,
    cameras: dict[int, Camera],
    images: dict[int, Image],
) -> None:
    """Promote uncalibrated pairs to calibrated where both cameras are trusted.

    A camera with a prior focal length is trusted when most of its valid
    pairs are calibrated. Promoted pairs get a fundamental matrix derived
    from their relative pose.
    """
    camera_counter: dict[int, list[int]] = {}
    for pair in view_graph.image_pairs.values():
        if not pair.is_valid:
            continue
        camera_id1 = images[pair.image_id1].camera_id
        camera_id2 = images[pair.image_id2].camera_id
        if not (
            cameras[camera_id1].has_prior_focal_length
            and cameras[camera_id2].has_prior_focal_length
        ):
            continue
        if pair.config == ConfigurationType.CALIBRATED:
            for camera_id in (camera_id1, camera_id2):
                counts = camera_counter.setdefault(camera_id, [0, 0])
                counts[0] += 1
                counts[1] += 1
        elif pair.config == ConfigurationType.UNCALIBRATED:
            for camera_id in (camera_id1, camera_id2):
                camera_counter.setdefault(camera_id, [0, 0])[0] += 1

    camera_validity = {
        camera_id: total > 0 and calibrated / total > 0.5
        for camera_id, (total, calibrated) in camera_counter.items()
    }

    for pair in view_graph.image_pairs.values():
        if not pair.is_valid or pair.config != ConfigurationType.UNCALIBRATED:
            continue
        camera_id1 = images[pair.image_id1].camera_id
        camera_id2 = images[pair.image_id2].camera_id
        if camera_validity.get(camera_id1, False) and camera_validity.get(
            camera_id2, False
        ):
            pair.config = ConfigurationType.CALIBRATED
            pair.F = fundamental_from_motion_and_cameras(
                cameras[camera_id1], cameras[camera_id2], pair.cam2_from_cam1
            )