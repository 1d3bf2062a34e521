import numpy as np
import pytest

from globalsfm.camera import Camera, CameraModel
from globalsfm.image import Image
from globalsfm.image_undistorter import undistort_images


def _pinhole():
    return Camera(
        model=CameraModel.PINHOLE, width=640, height=480, params=[500.0, 520.0, 320.0, 240.0]
    )


def _image(camera_id=1):
    image = Image(image_id=1, camera_id=camera_id)
    image.features = [np.array([10.0, 20.0]), np.array([320.0, 240.0]), np.array([600.0, 400.0])]
    return image


def test_rays_are_unit_and_reproject():
    camera = _pinhole()
    image = _image()
    count = undistort_images({1: camera}, {1: image})
    assert count == 1
    assert len(image.features_undist) == len(image.features)
    for ray, feature in zip(image.features_undist, image.features):
        assert np.linalg.norm(ray) == pytest.approx(1.0)
        projected = camera.get_k() @ (ray / ray[2])
        np.testing.assert_allclose(projected[:2], feature, atol=1e-9)


def test_principal_point_maps_to_optical_axis():
    image = _image()
    undistort_images({1: _pinhole()}, {1: image})
    np.testing.assert_allclose(image.features_undist[1], [0.0, 0.0, 1.0], atol=1e-12)


def test_radial_camera_round_trip():
    camera = Camera(
        model=CameraModel.SIMPLE_RADIAL, width=640, height=480, params=[500.0, 320.0, 240.0, 0.05]
    )
    image = _image()
    undistort_images({1: camera}, {1: image})
    for ray, feature in zip(image.features_undist, image.features):
        np.testing.assert_allclose(camera.img_from_cam(ray[:2] / ray[2]), feature, atol=1e-6)


def test_skip_already_undistorted_without_clean():
    image = _image()
    sentinel = [np.zeros(3) for _ in image.features]
    image.features_undist = sentinel
    count = undistort_images({1: _pinhole()}, {1: image}, clean_points=False)
    assert count == 0
    assert image.features_undist is sentinel


def test_recompute_mismatched_without_clean():
    image = _image()
    image.features_undist = [np.zeros(3)]
    count = undistort_images({1: _pinhole()}, {1: image}, clean_points=False)
    assert count == 1
    assert len(image.features_undist) == len(image.features)


def test_unknown_camera_raises():
    with pytest.raises(KeyError):
        undistort_images({1: _pinhole()}, {1: _image(camera_id=9)})