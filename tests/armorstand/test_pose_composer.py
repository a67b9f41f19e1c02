"""
Tests for pose composition.
"""

import pytest

from src.armorstand.config import GeneratorConfig, WalkingProfile
from src.armorstand.models import JOINTS, Action, Override, Pose, Vec3
from src.armorstand.pose_composer import (
    PoseComposer,
    add_pose,
    base_idle,
    compose_pose,
    hold_down,
    hold_upright,
    override_pose,
    signed_degrees,
    sit,
    walking,
)
from src.armorstand.rng import Mulberry32


def _approx_vec(vec: Vec3, expected):
    assert vec.as_list() == pytest.approx(list(expected), abs=1e-9)


def _difference(a: Pose, b: Pose, joint: str) -> Vec3:
    return a.joint(joint) + -b.joint(joint)


# =============================================================================
# Reference poses
# =============================================================================


def test_idle_pose():
    pose = compose_pose(12345, 0.25, Action.NONE, Override.NONE)

    _approx_vec(pose.Head, (0, 0, 0))
    _approx_vec(pose.LeftArm, (4.7972826776094735, 0.3074329625815153, 2.175081097520888))
    _approx_vec(pose.RightArm, (-4.307570739183575, -3.2555233081802726, -4.111864543519914))
    _approx_vec(pose.LeftLeg, (3.148773673456162, -2.356410203501582, 3.1761694815941155))
    _approx_vec(pose.RightLeg, (-3.9607550809159875, -2.472670346032828, 2.580785087775439))


def test_walking_pose():
    pose = compose_pose(12345, 0.25, Action.WALKING, Override.NONE)

    _approx_vec(pose.Head, (0, 0, 0))
    _approx_vec(pose.LeftArm, (-41.131622529850276, 0.3074329625815153, -12.177701779810286))
    _approx_vec(pose.RightArm, (41.621334468276174, -3.2555233081802726, 10.24091833381126))
    _approx_vec(pose.LeftLeg, (43.33656572998345, -0.9035347528410247, 3.1761694815941155))
    _approx_vec(pose.RightLeg, (-44.14854713744327, -3.9255457966933855, 2.580785087775439))


def test_sit_with_stare_up():
    pose = compose_pose(12345, 0.5, Action.SIT, Override.STARE_UP)

    _approx_vec(pose.Head, (-26.98197570629418, 0, 0))
    _approx_vec(pose.LeftLeg, (-24.363184720277786, 5.643589796498418, 3.1761694815941155))
    _approx_vec(pose.RightLeg, (-31.472713474649936, -10.472670346032828, 2.580785087775439))


def test_sit_with_stare_down():
    pose = compose_pose(42, 0.0, Action.SIT, Override.STARE_DOWN)

    assert pose.Head.x == pytest.approx(5.307015809230506)
    assert pose.LeftLeg.x == pytest.approx(-66.01365597685799)


def test_wave_replaces_left_arm():
    pose = compose_pose(7, 0.75, Action.WALKING, Override.WAVE)
    assert pose.LeftArm == Vec3(0, 0, 210)


def test_walking_delta():
    delta = walking(0.3, Mulberry32(12345))

    _approx_vec(delta["LeftLeg"], (41.99215243257478, -1.6367171045891793, 0))
    _approx_vec(delta["LeftArm"], (-47.991031351514025, 0, -14.173581554282846))
    assert delta["RightLeg"] == -delta["LeftLeg"]
    assert delta["RightArm"] == -delta["LeftArm"]
    assert "Head" not in delta


# =============================================================================
# Layer laws
# =============================================================================


@pytest.mark.parametrize("seed", [0, 1, 99, 4242, 2**31])
@pytest.mark.parametrize("t", [0.0, 0.1, 0.5, 0.9, 1.0])
def test_walking_mirror_law(seed, t):
    delta = walking(t, Mulberry32(seed))
    left_leg = delta["LeftLeg"]
    right_leg = delta["RightLeg"]

    assert right_leg.x == -left_leg.x
    assert right_leg.y == -left_leg.y
    assert delta["RightArm"].x == -delta["LeftArm"].x
    assert delta["RightArm"].z == -delta["LeftArm"].z
    # each arm swings against its own-side leg
    assert delta["LeftArm"].x == pytest.approx(-left_leg.x * 48 / 42)


def test_walking_respects_amplitudes():
    profile = WalkingProfile()
    for seed in range(100):
        delta = walking(seed / 100, Mulberry32(seed), profile)
        assert abs(delta["LeftLeg"].x) <= profile.amp_leg + 1e-9
        assert abs(delta["LeftLeg"].y) <= profile.leg_sway_max + 1e-9
        assert abs(delta["LeftArm"].x) <= profile.amp_arm + 1e-9
        assert abs(delta["LeftArm"].z) <= profile.arm_sway_max + 1e-9


def test_walking_phase_independent_of_idle_draws():
    seed, t = 31337, 0.4
    walked = compose_pose(seed, t, Action.WALKING)
    idle = compose_pose(seed, t, Action.NONE)
    delta = walking(t, Mulberry32(seed))

    for joint, vec in delta.items():
        _approx_vec(_difference(walked, idle, joint), vec.as_list())


def test_sit_folds_both_legs_equally():
    for seed in range(50):
        delta = sit(0.3, Mulberry32(seed))
        left, right = delta["LeftLeg"], delta["RightLeg"]
        assert left.x == right.x
        assert -90 <= left.x < 0
        assert right.y == -left.y


def test_idle_jitter_bounds_and_head():
    for seed in range(50):
        pose = base_idle(Mulberry32(seed), 5.0)
        assert pose.Head == Vec3()
        for joint in ("LeftArm", "RightArm", "LeftLeg", "RightLeg"):
            for value in pose.joint(joint).as_list():
                assert -5.0 <= value < 5.0


def test_zero_jitter_config():
    composer = PoseComposer(GeneratorConfig(idle_jitter=0.0))
    pose = composer.compose(5, 0.5, Action.NONE, Override.NONE)
    for joint in JOINTS:
        assert pose.joint(joint) == Vec3()


@pytest.mark.parametrize("override,expected", [
    (Override.HOLD_UP, hold_upright()),
    (Override.HOLD_DOWN, hold_down()),
    (Override.POINT, {"RightArm": Vec3(270, 0, 0)}),
])
def test_gesture_overrides_are_absolute(override, expected):
    pose = compose_pose(12345, 0.6, Action.WALKING, override)
    for joint, vec in expected.items():
        assert pose.joint(joint) == vec


def test_stare_down_range():
    for seed in range(50):
        head = compose_pose(seed, 0.5, Action.NONE, Override.STARE_DOWN).Head
        assert 0 <= head.x < 12
        assert head.y == 0 and head.z == 0


def test_stare_up_range():
    for seed in range(50):
        head = compose_pose(seed, 0.5, Action.NONE, Override.STARE_UP).Head
        assert -90 <= head.x <= 0


def test_accepts_string_action_and_override():
    by_value = compose_pose(9, 0.2, "sit", "point")
    by_enum = compose_pose(9, 0.2, Action.SIT, Override.POINT)
    assert by_value == by_enum


def test_unknown_action_rejected():
    with pytest.raises(ValueError):
        compose_pose(9, 0.2, "dance")


def test_normalized_pose_is_total():
    for seed in range(30):
        for action in Action:
            for override in Override:
                pose = compose_pose(seed, seed / 30, action, override).normalized()
                for joint in JOINTS:
                    for value in pose.joint(joint).as_list():
                        assert 0 <= value < 360


def test_same_inputs_same_pose():
    assert compose_pose(77, 0.3, Action.SIT, Override.WAVE) == compose_pose(77, 0.3, Action.SIT, Override.WAVE)


# =============================================================================
# Helpers
# =============================================================================


def test_add_and_override_return_new_poses():
    base = Pose(LeftArm=Vec3(1, 2, 3))
    added = add_pose(base, {"LeftArm": Vec3(1, 1, 1)})
    replaced = override_pose(base, {"LeftArm": Vec3(9, 9, 9)})

    assert base.LeftArm == Vec3(1, 2, 3)
    assert added.LeftArm == Vec3(2, 3, 4)
    assert replaced.LeftArm == Vec3(9, 9, 9)
    assert added.RightLeg == Vec3()


def test_signed_degrees():
    assert signed_degrees(0) == 0
    assert signed_degrees(179.5) == 179.5
    assert signed_degrees(180) == -180
    assert signed_degrees(300) == -60
