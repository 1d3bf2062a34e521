import numpy as np
import pytest

from globalsfm.gravity_io import read_gravity
from globalsfm.image import Image


@pytest.fixture
def images():
    return {1: Image(1, 1, "a.jpg"), 2: Image(2, 1, "b.jpg"), 3: Image(3, 1, "c.jpg")}


def test_read_gravity(tmp_path, images):
    path = tmp_path / "gravity.txt"
    path.write_text("a.jpg 0 1 0\nb.jpg 1 2 3\nmissing.jpg 0 0 1\n\n")
    assert read_gravity(path, images) == 2
    assert images[1].gravity_info.has_gravity
    assert images[2].gravity_info.has_gravity
    assert not images[3].gravity_info.has_gravity
    assert np.allclose(images[2].gravity_info.gravity, [1.0, 2.0, 3.0])


def test_rotation_is_aligned_with_gravity(tmp_path, images):
    path = tmp_path / "gravity.txt"
    path.write_text("b.jpg 1 2 3\n")
    read_gravity(path, images)
    g = np.array([1.0, 2.0, 3.0]) / np.linalg.norm([1.0, 2.0, 3.0])
    rot = images[2].cam_from_world.rotation
    assert np.allclose(rot, images[2].gravity_info.r_align.T)
    assert np.allclose(rot @ g, [0.0, 1.0, 0.0])


def test_malformed_line_raises(tmp_path, images):
    path = tmp_path / "gravity.txt"
    path.write_text("a.jpg 0 x 0\n")
    with pytest.raises(ValueError):
        read_gravity(path, images)


def test_short_line_raises(tmp_path, images):
    path = tmp_path / "gravity.txt"
    path.write_text("a.jpg 0 1\n")
    with pytest.raises(ValueError):
        read_gravity(path, images)