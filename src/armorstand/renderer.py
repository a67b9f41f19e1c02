"""
Renderer: format equipment and pose into a summon command.
"""

import json
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List

from .models import JOINTS, Equipment, Pose

COMMAND_PREFIX = "/summon armor_stand ~ ~ ~ "
STAND_FLAGS = "ShowArms:1b,NoBasePlate:1b,Rotation:[0.0f,0.0f]"
STRIPPED_CHARS = str.maketrans("", "", '"=')


def format_angle(value: float) -> str:
    """One decimal, ties rounded away from zero, float suffix."""
    quantized = Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{quantized}f"


def format_rotation(values: List[float]) -> str:
    return "[" + ",".join(format_angle(v) for v in values) + "]"


def format_pose(pose: Pose) -> str:
    """Pose compound with every angle normalized to [0, 360)."""
    normalized = pose.normalized()
    parts = [f"{name}:{format_rotation(normalized.joint(name).as_list())}" for name in JOINTS]
    return "Pose:{" + ",".join(parts) + "}"


def equipment_json(equipment: Equipment) -> str:
    """Compact equipment JSON with quotes and '=' removed."""
    data: Dict[str, Any] = equipment.to_dict()
    encoded = json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    return encoded.translate(STRIPPED_CHARS)


def render_command(pose: Pose, equipment: Equipment, include_equipment: bool = True) -> str:
    """Full summon command for a signed pose and equipment."""
    equipment_part = equipment_json(equipment) if include_equipment else "{}"
    return (
        COMMAND_PREFIX
        + "{"
        + STAND_FLAGS
        + ","
        + format_pose(pose)
        + ",equipment:"
        + equipment_part
        + "}"
    )
