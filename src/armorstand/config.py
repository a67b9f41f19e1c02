"""
Generator configuration: table-use gates, section names and motion profiles.

Defaults reproduce the reference behavior. A YAML file can override any
subset of them:

    outfit:
      chest_table_probability: 0.8
      legs_table_probability: 0.8
      sections: {chest: chestplate, legs: pants, feet: boots}
      extra_colors: [0x3366ff]
    walking: {amp_leg: 42, amp_arm: 48}
    sit: {sway_y: 8}
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

# Table-use gates. 1.0 means the table is always used and no draw is spent
# on the gate; the gated variant uses 0.8 for both.
CHEST_TABLE_PROBABILITY = 1.0
LEGS_TABLE_PROBABILITY = 1.0
GATED_TABLE_PROBABILITY = 0.8

DEFAULT_SECTIONS = {
    "chest": "chestplate",
    "legs": "pants",
    "feet": "boots",
}


@dataclass
class OutfitConfig:
    """How the matcher draws from the outfit table."""
    chest_table_probability: float = CHEST_TABLE_PROBABILITY
    legs_table_probability: float = LEGS_TABLE_PROBABILITY
    chest_section: str = DEFAULT_SECTIONS["chest"]
    legs_section: str = DEFAULT_SECTIONS["legs"]
    feet_section: str = DEFAULT_SECTIONS["feet"]
    extra_colors: List[int] = field(default_factory=list)


@dataclass
class WalkingProfile:
    """Gait amplitudes in degrees; speed in cycles per unit t."""
    amp_leg: float = 42.0
    amp_arm: float = 48.0
    speed: float = 1.0
    arm_sway_max: float = 15.0
    leg_sway_max: float = 5.0
    min_phase_degrees: float = 10.0


@dataclass
class SitProfile:
    """Folded-leg range in degrees and lateral sway."""
    leg_x_min: float = 270.0
    leg_x_max: float = 360.0
    sway_y: float = 8.0
    speed: float = 0.5


@dataclass
class GeneratorConfig:
    """Complete generator settings."""
    outfit: OutfitConfig = field(default_factory=OutfitConfig)
    walking: WalkingProfile = field(default_factory=WalkingProfile)
    sit: SitProfile = field(default_factory=SitProfile)
    idle_jitter: float = 5.0


def _check_probability(name: str, value: Any) -> float:
    value = float(value)
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be between 0 and 1, got {value}")
    return value


def _parse_outfit(data: Dict[str, Any]) -> OutfitConfig:
    sections = {**DEFAULT_SECTIONS, **(data.get("sections") or {})}
    return OutfitConfig(
        chest_table_probability=_check_probability(
            "chest_table_probability",
            data.get("chest_table_probability", CHEST_TABLE_PROBABILITY),
        ),
        legs_table_probability=_check_probability(
            "legs_table_probability",
            data.get("legs_table_probability", LEGS_TABLE_PROBABILITY),
        ),
        chest_section=str(sections["chest"]).lower(),
        legs_section=str(sections["legs"]).lower(),
        feet_section=str(sections["feet"]).lower(),
        extra_colors=[int(c) for c in data.get("extra_colors", [])],
    )


def _parse_walking(data: Dict[str, Any]) -> WalkingProfile:
    defaults = WalkingProfile()
    return WalkingProfile(
        amp_leg=float(data.get("amp_leg", defaults.amp_leg)),
        amp_arm=float(data.get("amp_arm", defaults.amp_arm)),
        speed=float(data.get("speed", defaults.speed)),
        arm_sway_max=float(data.get("arm_sway_max", defaults.arm_sway_max)),
        leg_sway_max=float(data.get("leg_sway_max", defaults.leg_sway_max)),
        min_phase_degrees=float(data.get("min_phase_degrees", defaults.min_phase_degrees)),
    )


def _parse_sit(data: Dict[str, Any]) -> SitProfile:
    defaults = SitProfile()
    sit = SitProfile(
        leg_x_min=float(data.get("leg_x_min", defaults.leg_x_min)),
        leg_x_max=float(data.get("leg_x_max", defaults.leg_x_max)),
        sway_y=float(data.get("sway_y", defaults.sway_y)),
        speed=float(data.get("speed", defaults.speed)),
    )
    if sit.leg_x_min > sit.leg_x_max:
        raise ValueError("sit.leg_x_min must not exceed sit.leg_x_max")
    return sit


def parse_config(data: Optional[Dict[str, Any]]) -> GeneratorConfig:
    """Build a config from already-parsed YAML data."""
    data = data or {}
    return GeneratorConfig(
        outfit=_parse_outfit(data.get("outfit") or {}),
        walking=_parse_walking(data.get("walking") or {}),
        sit=_parse_sit(data.get("sit") or {}),
        idle_jitter=float(data.get("idle_jitter", 5.0)),
    )


def load_config(config_path: Optional[Path] = None) -> GeneratorConfig:
    """Load generator settings from YAML, or the defaults when no path is given."""
    if config_path is None:
        return GeneratorConfig()

    with open(config_path, "r") as f:
        data = yaml.safe_load(f)

    return parse_config(data)
