"""
OutfitMatcher: pick a coherent chest/legs/feet set from the outfit table.

Companion pieces are linked by match keys (the leading digits of an entry
key). When the chest entry carries a key, legs and feet entries with the same
key are preferred over independent picks. Slots without a usable entry fall
back to dyed leather, so every leather piece ends up with a color.
"""

import logging
from typing import Dict, Iterable, List, Optional

from .catalog import (
    COLOR_MAP,
    MATERIAL_MAP,
    TRIM_MATERIALS,
    TRIM_PATTERNS,
    bare_name,
    item_id_for,
)
from .config import OutfitConfig
from .models import (
    Entry,
    Equipment,
    OutfitResult,
    Sections,
    Slot,
    Trim,
    Wearable,
    WearableComponents,
)
from .rng import Mulberry32, pick_one
from .table_parser import detect_token

logger = logging.getLogger(__name__)

LEATHER = "leather"


def find_matching_entries(sections: Sections, match_key: int) -> Dict[str, List[Entry]]:
    """Entries of every section whose match key equals `match_key`."""
    return {
        section: [e for e in entries if e.match_key == match_key]
        for section, entries in sections.items()
    }


def unify_match_vars(entries: Iterable[Entry]) -> Dict[str, str]:
    """
    Build the shared template-override map from the chosen entries.

    Each entry with a match key contributes match_<key>; each template letter
    contributes its first candidate, later entries overwriting earlier ones.
    """
    result: Dict[str, str] = {}
    for entry in entries:
        match_key = entry.match_key
        if match_key is not None:
            result[f"match_{match_key}"] = str(match_key)

        for letter, values in entry.templates.items():
            if values:
                result[letter] = values[0]
    return result


def _is_template_token(token: str) -> bool:
    return len(token) >= 2 and token[0].isascii() and token[0].isalpha() and token[1] == ":"


class OutfitMatcher:
    """
    Resolves outfit table sections into equipment.

    The matcher owns no randomness of its own: every draw comes from the
    stream passed in, in a fixed order.
    """

    def __init__(
        self,
        sections: Sections,
        rng: Mulberry32,
        config: Optional[OutfitConfig] = None,
        extra_colors: Optional[Iterable[int]] = None,
    ):
        self.sections = sections
        self.rng = rng
        self.config = config or OutfitConfig()

        extra = list(self.config.extra_colors) + list(extra_colors or [])
        self.palette: List[int] = [v for v in COLOR_MAP.values() if v] + [c for c in extra if c]

    def _section(self, name: str) -> List[Entry]:
        return self.sections.get(name) or []

    def _passes_gate(self, probability: float) -> bool:
        """Table-use gate; a certain gate spends no draw."""
        if probability >= 1.0:
            return True
        return self.rng.random() < probability

    def pick_outfit(self) -> OutfitResult:
        """Pick entries for chest, legs and feet and resolve them into wearables."""
        cfg = self.config
        chest_entries = self._section(cfg.chest_section)
        legs_entries = self._section(cfg.legs_section)
        feet_entries = self._section(cfg.feet_section)

        for name in (cfg.chest_section, cfg.legs_section, cfg.feet_section):
            if name not in self.sections:
                logger.debug(f"Section '{name}' missing from table, slot degrades")

        chest_entry: Optional[Entry] = None
        if chest_entries and self._passes_gate(cfg.chest_table_probability):
            chest_entry = pick_one(self.rng, chest_entries)

        legs_entry: Optional[Entry] = None
        feet_entry: Optional[Entry] = None

        match_key = chest_entry.match_key if chest_entry else None
        if match_key is not None:
            matched = find_matching_entries(self.sections, match_key)
            if matched.get(cfg.legs_section):
                legs_entry = pick_one(self.rng, matched[cfg.legs_section])
            if matched.get(cfg.feet_section):
                feet_entry = pick_one(self.rng, matched[cfg.feet_section])

        if legs_entry is None and legs_entries and self._passes_gate(cfg.legs_table_probability):
            legs_entry = pick_one(self.rng, legs_entries)

        if feet_entry is None and feet_entries:
            feet_entry = pick_one(self.rng, feet_entries)

        chosen = [e for e in (chest_entry, legs_entry, feet_entry) if e is not None]
        match_vars = unify_match_vars(chosen)

        logger.debug(f"Chest: {chest_entry.raw if chest_entry else None}")
        logger.debug(f"Legs: {legs_entry.raw if legs_entry else None}")
        logger.debug(f"Feet: {feet_entry.raw if feet_entry else None}")

        chest = self.build_wearable(chest_entry, Slot.CHEST, match_vars)
        legs = self.build_wearable(legs_entry, Slot.LEGS, match_vars)
        if feet_entries:
            feet = self.build_wearable(feet_entry, Slot.FEET, match_vars)
        else:
            feet = Wearable.placeholder()

        equipment = Equipment(
            head=Wearable.placeholder(),
            chest=chest,
            legs=legs,
            feet=feet,
        )
        return OutfitResult(equipment=equipment, match_vars=match_vars)

    def _random_dye(self) -> int:
        return pick_one(self.rng, self.palette)

    def build_wearable(
        self,
        entry: Optional[Entry],
        slot: Slot,
        match_vars: Dict[str, str],
    ) -> Wearable:
        """Resolve one entry (or its absence) into a wearable."""
        if entry is None:
            return Wearable(
                id=item_id_for(slot.value, LEATHER),
                count=1,
                components=WearableComponents(dyed_color=self._random_dye()),
            )

        raw_option = pick_one(self.rng, entry.options) if entry.options else ""
        resolved = []
        for token in raw_option.split():
            if "," in token:
                token = pick_one(self.rng, token.split(",")).strip()
            resolved.append(token)

        material: Optional[str] = None
        color: Optional[str] = None
        trim_pattern: Optional[str] = None
        trim_material: Optional[str] = None

        for token in resolved:
            if _is_template_token(token):
                continue
            detected = detect_token(token)
            if material is None and "mat" in detected:
                material = detected["mat"]
            if color is None and "color" in detected:
                color = detected["color"]

            # Exact pattern names; a later token replaces an earlier one
            token_lower = token.lower()
            for pattern in TRIM_PATTERNS:
                if token_lower == bare_name(pattern):
                    trim_pattern = pattern
                    break

        if trim_pattern is None:
            name_lower = entry.name.lower()
            key_lower = entry.key.lower()
            for pattern in TRIM_PATTERNS:
                pattern_name = bare_name(pattern)
                if pattern_name in name_lower or pattern_name in key_lower:
                    trim_pattern = pattern
                    break

        for token in resolved:
            token_lower = token.lower()
            for candidate in TRIM_MATERIALS:
                if bare_name(candidate) in token_lower:
                    trim_material = candidate
                    break
            if trim_material:
                break

        for values in entry.templates.values():
            chosen = match_vars.get(entry.key)
            if chosen:
                pick = chosen
            elif values:
                pick = pick_one(self.rng, values)
            else:
                continue
            if material is None and MATERIAL_MAP.get(pick):
                material = pick
            if color is None and COLOR_MAP.get(pick):
                color = pick

        if material is None or not MATERIAL_MAP.get(material):
            material = LEATHER

        dyed_color: Optional[int] = None
        if material == LEATHER:
            if color is not None and color in COLOR_MAP:
                dyed_color = COLOR_MAP[color]
            else:
                dyed_color = self._random_dye()

        trim: Optional[Trim] = None
        if trim_pattern and trim_material:
            trim = Trim(pattern=trim_pattern, material=trim_material)

        components = WearableComponents(dyed_color=dyed_color, trim=trim)
        return Wearable(
            id=item_id_for(slot.value, material),
            count=1,
            components=None if components.is_empty() else components,
        )


def pick_outfit(
    sections: Sections,
    rng: Mulberry32,
    config: Optional[OutfitConfig] = None,
    extra_colors: Optional[Iterable[int]] = None,
) -> OutfitResult:
    """Convenience wrapper around OutfitMatcher.pick_outfit."""
    return OutfitMatcher(sections, rng, config=config, extra_colors=extra_colors).pick_outfit()
