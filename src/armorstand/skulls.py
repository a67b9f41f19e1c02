"""
Player-head decoration for the head slot.
"""

import base64
import json
from typing import Any, Dict, Sequence

from .catalog import PLAYER_HEAD_ID
from .models import Wearable, WearableComponents
from .rng import Mulberry32, pick_one

TEXTURE_URL = "https://textures.minecraft.net/texture/{}"


def texture_payload(texture_hash: str) -> str:
    """Base64 textures blob for a skin texture hash."""
    textures = {"textures": {"SKIN": {"url": TEXTURE_URL.format(texture_hash)}}}
    encoded = json.dumps(textures, separators=(",", ":")).encode("utf-8")
    return base64.b64encode(encoded).decode("ascii")


def skull_profile(payload: str) -> Dict[str, Any]:
    return {"properties": [{"name": "textures", "value": payload}]}


def skull_wearable(payload: str) -> Wearable:
    """Player head carrying an already-encoded textures payload."""
    return Wearable(
        id=PLAYER_HEAD_ID,
        count=1,
        components=WearableComponents(profile=skull_profile(payload)),
    )


def pick_skull(rng: Mulberry32, payloads: Sequence[str]) -> Wearable:
    """One draw picks the head texture."""
    return skull_wearable(pick_one(rng, payloads))
