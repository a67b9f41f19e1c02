"""
Keyword tables for armor resolution.

Built once at import and exposed read-only; the matcher and the parser look
tokens up here.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

# Material keyword -> item base name
MATERIAL_MAP: Mapping[str, str] = MappingProxyType({
    "netherite": "netherite",
    "diamond": "diamond",
    "iron": "iron",
    "gold": "gold",
    "leather": "leather",
    "chain": "chainmail",
})

# Color keyword -> packed RGB
COLOR_MAP: Mapping[str, int] = MappingProxyType({
    "white": 0xFFFFFF,
    "black": 0x1A1A1A,  # off-black so the dye stays visible
    "red": 0xFF0000,
    "cyan": 0x00FFFF,
    "purple": 0x800080,
    "lime": 0x00FF00,
})

TRIM_PATTERNS: Tuple[str, ...] = (
    "minecraft:bolt",
    "minecraft:rib",
    "minecraft:coast",
    "minecraft:wild",
    "minecraft:ward",
    "minecraft:vex",
    "minecraft:snout",
    "minecraft:eye",
)

TRIM_MATERIALS: Tuple[str, ...] = (
    "minecraft:iron",
    "minecraft:gold",
    "minecraft:diamond",
    "minecraft:netherite",
    "minecraft:redstone",
    "minecraft:copper",
    "minecraft:emerald",
    "minecraft:lapis",
    "minecraft:amethyst",
    "minecraft:quartz",
)

SLOT_SUFFIXES: Mapping[str, str] = MappingProxyType({
    "head": "helmet",
    "chest": "chestplate",
    "legs": "leggings",
    "feet": "boots",
})

NAMESPACE = "minecraft:"
PLACEHOLDER_ID = "minecraft:air"
PLAYER_HEAD_ID = "minecraft:player_head"
FALLBACK_BASE = "iron"


def bare_name(namespaced: str) -> str:
    """Strip the namespace prefix (minecraft:bolt -> bolt)."""
    return namespaced.replace(NAMESPACE, "", 1)


def item_id_for(slot: str, material: str) -> str:
    """Compose an armor item id from slot and material keyword."""
    base = MATERIAL_MAP.get(material) or FALLBACK_BASE
    suffix = SLOT_SUFFIXES.get(slot, SLOT_SUFFIXES["feet"])
    return f"{NAMESPACE}{base}_{suffix}"
