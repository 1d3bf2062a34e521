import numpy as np
import pytest

from globalsfm.gravity import angle_to_rot_up, get_align_rot, rot_up_to_angle


@pytest.mark.parametrize(
    "gravity",
    [[0.0, 1.0, 0.0], [0.1, 0.9, -0.2], [0.0, 0.0, -3.0], [2.0, -1.0, 0.5]],
)
def test_align_rot_is_proper_rotation_with_gravity_column(gravity):
    rot = get_align_rot(gravity)
    g = np.asarray(gravity, dtype=float)
    np.testing.assert_allclose(rot[:, 1], g / np.linalg.norm(g), atol=1e-12)
    np.testing.assert_allclose(rot.T @ rot, np.eye(3), atol=1e-12)
    assert np.linalg.det(rot) == pytest.approx(1.0)


@pytest.mark.parametrize("angle", [0.3, -0.3, 1.2, 0.0])
def test_angle_round_trip(angle):
    assert rot_up_to_angle(angle_to_rot_up(angle)) == pytest.approx(angle, abs=1e-12)


def test_rot_up_keeps_y_axis():
    rot = angle_to_rot_up(0.7)
    axis = np.array([0.0, 1.0, 0.0])
    np.testing.assert_allclose(rot @ axis, axis, atol=1e-12)