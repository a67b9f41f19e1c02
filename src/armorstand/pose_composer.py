"""
PoseComposer: layer idle jitter, an action and a gesture override into a pose.

Layers are applied in order:

1. Idle - small independent jitter on every limb, Head at zero
2. Action - walking or sit, added onto the idle layer
3. Override - absolute joint assignments for the joints a gesture names

Angles stay signed while composing; `Pose.normalized()` maps them into
[0, 360) for read-out.
"""

import logging
import math
from typing import Optional

from .config import GeneratorConfig, SitProfile, WalkingProfile
from .models import JOINTS, Action, Override, Pose, PoseDelta, Vec3
from .rng import Mulberry32, uniform_between

logger = logging.getLogger(__name__)

LIMBS = ("LeftArm", "RightArm", "LeftLeg", "RightLeg")


def mirror(degrees: float) -> float:
    return -degrees


def signed_degrees(degrees: float) -> float:
    """Express an angle in [0, 360) as a signed angle in [-180, 180)."""
    return degrees - 360 if degrees >= 180 else degrees


def add_pose(base: Pose, delta: PoseDelta) -> Pose:
    """Add a partial pose onto `base`, returning a new pose."""
    return Pose(**{
        name: base.joint(name) + delta[name] if name in delta else base.joint(name)
        for name in JOINTS
    })


def override_pose(base: Pose, override: PoseDelta) -> Pose:
    """Replace the joints named by `override`, returning a new pose."""
    return Pose(**{name: override.get(name, base.joint(name)) for name in JOINTS})


def base_idle(rng: Mulberry32, jitter: float = 5.0) -> Pose:
    """Idle layer: limbs jittered on all axes, Head untouched."""
    joints = {}
    for name in LIMBS:
        x = uniform_between(rng, -jitter, jitter)
        y = uniform_between(rng, -jitter, jitter)
        z = uniform_between(rng, -jitter, jitter)
        joints[name] = Vec3(x, y, z)
    return Pose(**joints)


def walking(t: float, rng: Mulberry32, profile: Optional[WalkingProfile] = None) -> PoseDelta:
    """
    Walking gait at phase parameter `t`.

    The left leg drives everything: the right leg mirrors it on both axes,
    each arm swings against its same-side leg scaled by amp_arm / amp_leg,
    and arm sway runs at double frequency a quarter turn ahead.
    """
    p = profile or WalkingProfile()

    min_phase = (p.min_phase_degrees * math.pi) / 180
    base_phase = uniform_between(rng, min_phase, math.pi * 2 - min_phase)
    w = 2 * math.pi * p.speed

    left_leg_x = p.amp_leg * math.sin(w * t + base_phase)
    left_leg_y = p.leg_sway_max * math.sin(2 * w * t + base_phase)

    right_leg_x = mirror(left_leg_x)
    right_leg_y = mirror(left_leg_y)

    arm_factor = p.amp_arm / max(1, p.amp_leg)
    left_arm_x = mirror(left_leg_x) * arm_factor
    right_arm_x = mirror(right_leg_x) * arm_factor

    left_arm_z = p.arm_sway_max * math.sin(2 * w * t + base_phase + math.pi / 2)
    right_arm_z = mirror(left_arm_z)

    return {
        "LeftLeg": Vec3(left_leg_x, left_leg_y, 0),
        "RightLeg": Vec3(right_leg_x, right_leg_y, 0),
        "LeftArm": Vec3(left_arm_x, 0, left_arm_z),
        "RightArm": Vec3(right_arm_x, 0, right_arm_z),
    }


def sit(t: float, rng: Mulberry32, profile: Optional[SitProfile] = None) -> PoseDelta:
    """Both legs folded by one random angle, swaying sideways in opposition."""
    p = profile or SitProfile()

    leg_x = uniform_between(rng, p.leg_x_min, p.leg_x_max)
    signed = signed_degrees(leg_x)
    sway_left = p.sway_y * math.sin(2 * math.pi * p.speed * t)

    return {
        "LeftLeg": Vec3(signed, sway_left, 0),
        "RightLeg": Vec3(signed, mirror(sway_left), 0),
    }


def stare_down(rng: Mulberry32) -> PoseDelta:
    return {"Head": Vec3(uniform_between(rng, 0, 12), 0, 0)}


def stare_up(rng: Mulberry32) -> PoseDelta:
    return {"Head": Vec3(signed_degrees(uniform_between(rng, 270, 360)), 0, 0)}


def hold_upright() -> PoseDelta:
    return {
        "LeftArm": Vec3(274, 21, 0),
        "RightArm": Vec3(277, 334, 0),
    }


def hold_down() -> PoseDelta:
    return {
        "LeftArm": Vec3(305, 21, 0),
        "RightArm": Vec3(305, 334, 0),
    }


def wave() -> PoseDelta:
    return {"LeftArm": Vec3(0, 0, 210)}


def point() -> PoseDelta:
    return {"RightArm": Vec3(270, 0, 0)}


class PoseComposer:
    """
    Composes a pose from a seed.

    Idle, sit and override draws share one stream; walking draws its phase
    from a second stream seeded with the same value, so the gait phase does
    not depend on how many idle draws came before it.
    """

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()

    def compose(
        self,
        seed: int,
        t: float,
        action: Action = Action.WALKING,
        override: Override = Override.NONE,
    ) -> Pose:
        """Signed pose for (seed, t, action, override)."""
        rng = Mulberry32(seed)
        walk_rng = Mulberry32(seed)
        return self.compose_with(rng, walk_rng, t, action, override)

    def compose_with(
        self,
        rng: Mulberry32,
        walk_rng: Mulberry32,
        t: float,
        action: Action = Action.WALKING,
        override: Override = Override.NONE,
    ) -> Pose:
        """Signed pose drawing from explicitly supplied streams."""
        action = Action(action)
        override = Override(override)

        pose = base_idle(rng, self.config.idle_jitter)

        if action == Action.WALKING:
            pose = add_pose(pose, walking(t, walk_rng, self.config.walking))
        elif action == Action.SIT:
            pose = add_pose(pose, sit(t, rng, self.config.sit))

        if override == Override.STARE_DOWN:
            pose = override_pose(pose, stare_down(rng))
        elif override == Override.STARE_UP:
            pose = override_pose(pose, stare_up(rng))
        elif override == Override.HOLD_UP:
            pose = override_pose(pose, hold_upright())
        elif override == Override.HOLD_DOWN:
            pose = override_pose(pose, hold_down())
        elif override == Override.WAVE:
            pose = override_pose(pose, wave())
        elif override == Override.POINT:
            pose = override_pose(pose, point())

        logger.debug(f"Composed pose action={action.value} override={override.value} t={t}")
        return pose


def compose_pose(
    seed: int,
    t: float,
    action: Action = Action.WALKING,
    override: Override = Override.NONE,
    config: Optional[GeneratorConfig] = None,
) -> Pose:
    """Convenience wrapper around PoseComposer.compose."""
    return PoseComposer(config).compose(seed, t, action, override)
