import dataclasses

import pytest

from globalsfm.types import ConfigurationType, InlierThresholdOptions


def test_defaults_match_documented_thresholds():
    options = InlierThresholdOptions()
    assert options.max_epipolar_error_F == 4.0
    assert options.min_inlier_ratio == 0.25
    assert options.max_reprojection_error == 1e-2


def test_override_keeps_other_defaults():
    default = InlierThresholdOptions()
    custom = InlierThresholdOptions(max_angle_error=2.5)
    assert custom.max_angle_error == 2.5
    assert custom.max_rotation_error == default.max_rotation_error
    assert custom != default


def test_replace_produces_independent_copy():
    original = InlierThresholdOptions()
    changed = dataclasses.replace(original, min_inlier_num=50)
    assert changed.min_inlier_num == 50
    assert original.min_inlier_num == InlierThresholdOptions().min_inlier_num


@pytest.mark.parametrize("member", list(ConfigurationType))
def test_configuration_type_round_trips_through_int(member):
    assert ConfigurationType(int(member)) is member
    assert ConfigurationType[member.name] is member


def test_unknown_configuration_value_raises():
    with pytest.raises(ValueError):
        ConfigurationType(99)