"""
Armor stand generator.

Seeded outfit and pose generation for armor stand summon commands.
"""

from .models import (
    Action,
    Entry,
    Equipment,
    OutfitResult,
    Override,
    Pose,
    Slot,
    Trim,
    Vec3,
    Wearable,
    WearableComponents,
    norm360,
)
from .rng import EmptySelectionError, Mulberry32, pick_one, uniform_between
from .table_parser import parse_outfit_table, detect_token
from .config import GeneratorConfig, load_config
from .outfit_matcher import OutfitMatcher, pick_outfit
from .pose_composer import PoseComposer, compose_pose
from .asset_loader import AssetLoader
from .renderer import render_command
from .pipeline import GenerationResult, Pipeline, run_pipeline

__all__ = [
    # Models
    "Action",
    "Entry",
    "Equipment",
    "OutfitResult",
    "Override",
    "Pose",
    "Slot",
    "Trim",
    "Vec3",
    "Wearable",
    "WearableComponents",
    "norm360",
    # Randomness
    "EmptySelectionError",
    "Mulberry32",
    "pick_one",
    "uniform_between",
    # Parsing / config
    "parse_outfit_table",
    "detect_token",
    "GeneratorConfig",
    "load_config",
    "AssetLoader",
    # Generation
    "OutfitMatcher",
    "pick_outfit",
    "PoseComposer",
    "compose_pose",
    "render_command",
    "GenerationResult",
    "Pipeline",
    "run_pipeline",
]
