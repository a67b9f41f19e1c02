"""
Data models for armor stand generation.

Entries come from the parsed outfit table; wearables, equipment and poses are
the generated values handed to the command renderer.
"""

import math
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .catalog import PLACEHOLDER_ID


class Slot(Enum):
    """Equipment slot."""
    HEAD = "head"
    CHEST = "chest"
    LEGS = "legs"
    FEET = "feet"


class Action(Enum):
    """Base motion layered on top of idle jitter."""
    WALKING = "walking"
    SIT = "sit"
    NONE = "none"


class Override(Enum):
    """Fixed gesture replacing the joints it names."""
    NONE = "none"
    STARE_DOWN = "stare-down"
    STARE_UP = "stare-up"
    HOLD_UP = "hold-up"
    HOLD_DOWN = "hold-down"
    WAVE = "wave"
    POINT = "point"


_MATCH_KEY_RE = re.compile(r"^(\d+)")


@dataclass(frozen=True)
class Entry:
    """
    One line of an outfit table section.

    `options` always holds at least one string (possibly empty); `templates`
    maps a single letter to its candidate values. Both are frozen on
    construction.
    """
    key: str
    name: str
    raw: str
    options: Tuple[str, ...] = ("",)
    templates: Mapping[str, Tuple[str, ...]] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "options", tuple(self.options))
        object.__setattr__(
            self,
            "templates",
            MappingProxyType({letter: tuple(values) for letter, values in self.templates.items()}),
        )

    @property
    def match_key(self) -> Optional[int]:
        """Leading digit run of the key, if any."""
        match = _MATCH_KEY_RE.match(self.key)
        return int(match.group(1)) if match else None


# Read-only: section name -> entries in table order
Sections = Mapping[str, Tuple[Entry, ...]]


@dataclass(frozen=True)
class Trim:
    """Armor trim: both halves are namespaced ids."""
    pattern: str
    material: str


@dataclass(frozen=True)
class WearableComponents:
    """Closed component record of a wearable."""
    dyed_color: Optional[int] = None
    trim: Optional[Trim] = None
    profile: Optional[Dict[str, Any]] = None

    def is_empty(self) -> bool:
        return self.dyed_color is None and self.trim is None and self.profile is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the command component map, excluding unset values."""
        result: Dict[str, Any] = {}
        if self.dyed_color is not None:
            result["minecraft:dyed_color"] = self.dyed_color
        if self.trim is not None:
            result["minecraft:trim"] = {
                "pattern": self.trim.pattern,
                "material": self.trim.material,
            }
        if self.profile is not None:
            result["profile"] = self.profile
        return result


@dataclass(frozen=True)
class Wearable:
    """A resolved item for one equipment slot."""
    id: str
    count: int = 1
    components: Optional[WearableComponents] = None

    @classmethod
    def placeholder(cls) -> "Wearable":
        """The inert empty-slot item."""
        return cls(id=PLACEHOLDER_ID, count=0)

    @property
    def is_placeholder(self) -> bool:
        return self.id == PLACEHOLDER_ID

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"id": self.id, "count": self.count}
        if self.components is not None and not self.components.is_empty():
            result["components"] = self.components.to_dict()
        return result


@dataclass(frozen=True)
class Equipment:
    """Four-slot equipment record."""
    head: Wearable = field(default_factory=Wearable.placeholder)
    chest: Wearable = field(default_factory=Wearable.placeholder)
    legs: Wearable = field(default_factory=Wearable.placeholder)
    feet: Wearable = field(default_factory=Wearable.placeholder)

    def with_head(self, head: Wearable) -> "Equipment":
        return replace(self, head=head)

    def slots(self) -> Dict[Slot, Wearable]:
        return {
            Slot.HEAD: self.head,
            Slot.CHEST: self.chest,
            Slot.LEGS: self.legs,
            Slot.FEET: self.feet,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Command ordering: chest, legs, feet, head."""
        return {
            "chest": self.chest.to_dict(),
            "legs": self.legs.to_dict(),
            "feet": self.feet.to_dict(),
            "head": self.head.to_dict(),
        }


@dataclass(frozen=True)
class OutfitResult:
    """Equipment plus the shared template-override map used to build it."""
    equipment: Equipment
    match_vars: Dict[str, str] = field(default_factory=dict)


def norm360(degrees: float) -> float:
    """Map an angle into [0, 360) with truncating modulo."""
    return (math.fmod(degrees, 360.0) + 360.0) % 360.0


@dataclass(frozen=True)
class Vec3:
    """Joint rotation in degrees."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __neg__(self) -> "Vec3":
        return Vec3(-self.x, -self.y, -self.z)

    def normalized(self) -> "Vec3":
        return Vec3(norm360(self.x), norm360(self.y), norm360(self.z))

    def as_list(self) -> List[float]:
        return [self.x, self.y, self.z]


JOINTS: Tuple[str, ...] = ("Head", "LeftArm", "RightArm", "LeftLeg", "RightLeg")


@dataclass(frozen=True)
class Pose:
    """Five-joint armor stand pose."""
    Head: Vec3 = field(default_factory=Vec3)
    LeftArm: Vec3 = field(default_factory=Vec3)
    RightArm: Vec3 = field(default_factory=Vec3)
    LeftLeg: Vec3 = field(default_factory=Vec3)
    RightLeg: Vec3 = field(default_factory=Vec3)

    def joint(self, name: str) -> Vec3:
        return getattr(self, name)

    def normalized(self) -> "Pose":
        """Read-out form: every coordinate in [0, 360)."""
        return Pose(**{name: self.joint(name).normalized() for name in JOINTS})

    def to_dict(self) -> Dict[str, List[float]]:
        return {name: self.joint(name).as_list() for name in JOINTS}


# Partial pose: joint name -> rotation for only the joints a layer touches
PoseDelta = Dict[str, Vec3]
