import numpy as np
import pytest

from globalsfm.camera import Camera, CameraModel
from globalsfm.image import Image
from globalsfm.image_pair import ImagePair, image_pair_to_pair_id
from globalsfm.image_pair_inliers import ImagePairInliers, image_pairs_inlier_count
from globalsfm.rigid3d import Rigid3d, angle_axis_to_rotation
from globalsfm.two_view_geometry import fundamental_from_motion_and_cameras
from globalsfm.types import ConfigurationType, InlierThresholdOptions
from globalsfm.view_graph import ViewGraph

ROT = angle_axis_to_rotation([0.0, 0.1, 0.0])
TRANS = np.array([-1.0, 0.1, 0.05])
NUM_GOOD = 15
OUTLIER = NUM_GOOD
BEHIND = NUM_GOOD + 1


def _camera():
    return Camera(
        model=CameraModel.PINHOLE,
        width=640,
        height=480,
        params=[500.0, 500.0, 320.0, 240.0],
        camera_id=1,
        has_prior_focal_length=True,
    )


def _scene(config):
    rng = np.random.default_rng(3)
    points = np.column_stack(
        [
            rng.uniform(-1, 1, NUM_GOOD),
            rng.uniform(-1, 1, NUM_GOOD),
            rng.uniform(4, 8, NUM_GOOD),
        ]
    )
    camera = _camera()
    image1 = Image(image_id=1, camera_id=1, is_registered=True)
    image2 = Image(image_id=2, camera_id=1, is_registered=True)

    def add(p1, p2):
        for image, p in ((image1, p1), (image2, p2)):
            image.features.append(camera.img_from_cam(p[:2] / p[2]))
            image.features_undist.append(p / np.linalg.norm(p))

    for p in points:
        add(p, ROT @ p + TRANS)
    add(points[0], ROT @ points[0] + TRANS + np.array([0.0, 0.8, 0.0]))
    behind = -points[1]
    add(behind, ROT @ behind + TRANS)

    matches = [[k, k] for k in range(NUM_GOOD + 2)]
    pair = ImagePair(
        1, 2, cam2_from_cam1=Rigid3d(ROT, TRANS), config=config, matches=matches
    )
    return pair, {1: image1, 2: image2}, {1: camera}


def test_essential_inliers():
    pair, images, cameras = _scene(ConfigurationType.CALIBRATED)
    score = ImagePairInliers(pair, images, InlierThresholdOptions(), cameras).score_error()
    assert pair.inliers == list(range(NUM_GOOD))
    assert score > 0


def test_essential_needs_cameras():
    pair, images, _ = _scene(ConfigurationType.CALIBRATED)
    with pytest.raises(ValueError):
        ImagePairInliers(pair, images, InlierThresholdOptions()).score_error()


def test_fundamental_inliers():
    pair, images, cameras = _scene(ConfigurationType.UNCALIBRATED)
    pair.F = fundamental_from_motion_and_cameras(cameras[1], cameras[1], pair.cam2_from_cam1)
    ImagePairInliers(pair, images, InlierThresholdOptions()).score_error()
    assert set(range(NUM_GOOD)) <= set(pair.inliers)
    assert OUTLIER not in pair.inliers


def test_fundamental_without_matches_scores_zero():
    pair, images, cameras = _scene(ConfigurationType.UNCALIBRATED)
    pair.F = fundamental_from_motion_and_cameras(cameras[1], cameras[1], pair.cam2_from_cam1)
    pair.matches = np.zeros((0, 2), dtype=np.int64)
    pair.inliers = [3]
    score = ImagePairInliers(pair, images, InlierThresholdOptions()).score_error()
    assert score == 0.0
    assert pair.inliers == []


def test_homography_inliers_and_score():
    h = np.array([[1.1, 0.01, 5.0], [0.02, 0.95, -3.0], [1e-4, 0.0, 1.0]])
    rng = np.random.default_rng(7)
    image1 = Image(image_id=1, camera_id=1)
    image2 = Image(image_id=2, camera_id=1)
    for _ in range(10):
        pt = rng.uniform(0, 600, 2)
        mapped = h @ np.append(pt, 1.0)
        image1.features.append(pt)
        image2.features.append(mapped[:2] / mapped[2])
    image1.features.append(np.array([100.0, 100.0]))
    image2.features.append(np.array([400.0, 20.0]))
    pair = ImagePair(
        1, 2, config=ConfigurationType.PLANAR, H=h, matches=[[k, k] for k in range(11)]
    )
    options = InlierThresholdOptions()
    score = ImagePairInliers(pair, {1: image1, 2: image2}, options).score_error()
    assert pair.inliers == list(range(10))
    assert score == pytest.approx(options.max_epipolar_error_H ** 2, abs=1e-6)


def test_undefined_config_scores_zero():
    pair, images, cameras = _scene(ConfigurationType.UNDEFINED)
    score = ImagePairInliers(pair, images, InlierThresholdOptions(), cameras).score_error()
    assert score == 0.0
    assert pair.inliers == []


def test_image_pairs_inlier_count_respects_existing():
    pair, images, cameras = _scene(ConfigurationType.CALIBRATED)
    pair.inliers = [0]
    view_graph = ViewGraph()
    view_graph.image_pairs[pair.pair_id] = pair
    image_pairs_inlier_count(view_graph, cameras, images, InlierThresholdOptions(), False)
    assert pair.inliers == [0]
    image_pairs_inlier_count(view_graph, cameras, images, InlierThresholdOptions(), True)
    assert pair.inliers == list(range(NUM_GOOD))


def test_image_pairs_inlier_count_clears_invalid():
    pair, images, cameras = _scene(ConfigurationType.CALIBRATED)
    pair.inliers = [1, 2]
    pair.is_valid = False
    view_graph = ViewGraph()
    view_graph.image_pairs[image_pair_to_pair_id(1, 2)] = pair
    image_pairs_inlier_count(view_graph, cameras, images, InlierThresholdOptions(), True)
    assert pair.inliers == []