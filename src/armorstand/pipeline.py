"""
Pipeline: wire parser, matcher, skulls, composer and renderer per seed.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import numpy as np

from .asset_loader import AssetLoader
from .config import GeneratorConfig, load_config
from .models import Action, Equipment, OutfitResult, Override, Pose, Sections
from .outfit_matcher import OutfitMatcher
from .pose_composer import PoseComposer
from .renderer import render_command
from .rng import Mulberry32
from .skulls import pick_skull

logger = logging.getLogger(__name__)

DEFAULT_TABLE_PATH = Path("config/outfits.txt")
DEFAULT_SKULLS_PATH = Path("config/skulls.txt")
DEFAULT_CONFIG_PATH = Path("config/generator.yaml")
DEFAULT_T = 0.25


def random_seed(rng: Optional[np.random.Generator] = None) -> int:
    """Fresh unsigned 32-bit seed."""
    rng = rng or np.random.default_rng()
    return int(rng.integers(0, 2**32, dtype=np.uint64))


@dataclass(frozen=True)
class GenerationResult:
    """Everything produced for one seed."""
    seed: int
    t: float
    action: Action
    override: Override
    equipment: Equipment
    match_vars: Dict[str, str]
    pose: Pose
    command: str

    @property
    def normalized_pose(self) -> Pose:
        return self.pose.normalized()

    def to_record(self) -> Dict[str, Any]:
        """Flat record for export."""
        record: Dict[str, Any] = {
            "seed": self.seed,
            "t": self.t,
            "action": self.action.value,
            "override": self.override.value,
        }
        for slot, wearable in self.equipment.slots().items():
            components = wearable.components
            record[f"{slot.value}_id"] = wearable.id
            record[f"{slot.value}_dyed_color"] = components.dyed_color if components else None
            record[f"{slot.value}_trim_pattern"] = (
                components.trim.pattern if components and components.trim else None
            )
            record[f"{slot.value}_trim_material"] = (
                components.trim.material if components and components.trim else None
            )
        for joint, values in self.normalized_pose.to_dict().items():
            record[f"{joint}_x"], record[f"{joint}_y"], record[f"{joint}_z"] = values
        record["command"] = self.command
        return record


class Pipeline:
    """Generates outfits, poses and summon commands from seeds."""

    def __init__(
        self,
        sections: Optional[Sections] = None,
        skull_payloads: Optional[List[str]] = None,
        config: Optional[GeneratorConfig] = None,
        extra_colors: Optional[Iterable[int]] = None,
    ):
        self.sections: Sections = sections if sections is not None else {}
        self.skull_payloads: List[str] = list(skull_payloads or [])
        self.config = config or GeneratorConfig()
        self.extra_colors = list(extra_colors or [])
        self.composer = PoseComposer(self.config)

        expected = (
            self.config.outfit.chest_section,
            self.config.outfit.legs_section,
            self.config.outfit.feet_section,
        )
        missing = [name for name in expected if name not in self.sections]
        if self.sections and missing:
            logger.warning(f"Outfit table has no section(s) {missing}; those slots degrade")

    @classmethod
    def from_paths(
        cls,
        table_path: Optional[Path] = None,
        skulls_path: Optional[Path] = None,
        config_path: Optional[Path] = None,
    ) -> "Pipeline":
        """Build a pipeline from files on disk."""
        loader = AssetLoader(table_path=table_path, skulls_path=skulls_path)
        return cls(
            sections=loader.sections,
            skull_payloads=loader.skull_payloads,
            config=load_config(config_path),
        )

    def generate_outfit(self, seed: int, use_skulls: bool = True) -> OutfitResult:
        """Outfit for a seed; the head slot takes a skull when textures exist."""
        rng = Mulberry32(seed)
        matcher = OutfitMatcher(
            self.sections,
            rng,
            config=self.config.outfit,
            extra_colors=self.extra_colors,
        )
        result = matcher.pick_outfit()

        if use_skulls and self.skull_payloads:
            head = pick_skull(rng, self.skull_payloads)
            result = OutfitResult(
                equipment=result.equipment.with_head(head),
                match_vars=result.match_vars,
            )
        return result

    def generate_pose(
        self,
        seed: int,
        t: float = DEFAULT_T,
        action: Action = Action.WALKING,
        override: Override = Override.NONE,
    ) -> Pose:
        """Signed pose for a seed; draws from its own streams."""
        return self.composer.compose(seed, t, action, override)

    def generate(
        self,
        seed: int,
        t: float = DEFAULT_T,
        action: Action = Action.WALKING,
        override: Override = Override.NONE,
        include_equipment: bool = True,
        use_skulls: bool = True,
    ) -> GenerationResult:
        """Outfit, pose and command for one seed."""
        if not 0.0 <= t <= 1.0:
            raise ValueError(f"t must be between 0 and 1, got {t}")
        action = Action(action)
        override = Override(override)

        outfit = self.generate_outfit(seed, use_skulls=use_skulls)
        pose = self.generate_pose(seed, t, action, override)
        command = render_command(pose, outfit.equipment, include_equipment=include_equipment)

        return GenerationResult(
            seed=seed,
            t=t,
            action=action,
            override=override,
            equipment=outfit.equipment,
            match_vars=outfit.match_vars,
            pose=pose,
            command=command,
        )

    def generate_batch(
        self,
        count: int = 10,
        seeds: Optional[Iterable[int]] = None,
        t: float = DEFAULT_T,
        action: Action = Action.WALKING,
        override: Override = Override.NONE,
        random_state: Optional[int] = None,
        use_skulls: bool = True,
    ) -> List[GenerationResult]:
        """Generate one result per seed; seeds are drawn when not supplied."""
        if seeds is None:
            np_rng = np.random.default_rng(random_state)
            seeds = [random_seed(np_rng) for _ in range(count)]

        results = [
            self.generate(seed, t=t, action=action, override=override, use_skulls=use_skulls)
            for seed in seeds
        ]
        logger.info(f"Generated {len(results)} armor stands")
        return results

    def export(self, output_dir: Path, results: List[GenerationResult]) -> Path:
        """Write batch records to parquet (CSV when no parquet engine is installed)."""
        try:
            import pandas as pd
        except ImportError:
            raise ImportError("pandas is required for export")

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        parquet_available = True
        try:
            import pyarrow  # noqa: F401
        except ImportError:
            try:
                import fastparquet  # noqa: F401
            except ImportError:
                parquet_available = False
                logger.info("pyarrow not available, using CSV export")

        df = pd.DataFrame([r.to_record() for r in results])
        if parquet_available:
            path = output_dir / "armor_stands.parquet"
            df.to_parquet(path, index=False)
        else:
            path = output_dir / "armor_stands.csv"
            df.to_csv(path, index=False)
        logger.info(f"Wrote {len(df)} records to {path}")
        return path

    def get_stats(self, results: List[GenerationResult]) -> Dict[str, Any]:
        """Item and material counts over a batch."""
        item_counts: Dict[str, int] = {}
        leather_pieces = 0
        trimmed_pieces = 0
        for result in results:
            for wearable in result.equipment.slots().values():
                if wearable.is_placeholder:
                    continue
                item_counts[wearable.id] = item_counts.get(wearable.id, 0) + 1
                if "leather" in wearable.id:
                    leather_pieces += 1
                if wearable.components and wearable.components.trim:
                    trimmed_pieces += 1

        return {
            "total_stands": len(results),
            "unique_seeds": len({r.seed for r in results}),
            "leather_pieces": leather_pieces,
            "trimmed_pieces": trimmed_pieces,
            "item_counts": dict(sorted(item_counts.items(), key=lambda kv: -kv[1])),
        }


def run_pipeline(
    seed: Optional[int] = None,
    t: float = DEFAULT_T,
    action: Action = Action.WALKING,
    override: Override = Override.NONE,
    table_path: Optional[Path] = DEFAULT_TABLE_PATH,
    skulls_path: Optional[Path] = DEFAULT_SKULLS_PATH,
    config_path: Optional[Path] = DEFAULT_CONFIG_PATH,
    include_equipment: bool = True,
    use_skulls: bool = True,
) -> GenerationResult:
    """Convenience function to generate one armor stand from files on disk."""
    pipeline = Pipeline.from_paths(
        table_path=table_path if table_path and Path(table_path).exists() else None,
        skulls_path=skulls_path if skulls_path and Path(skulls_path).exists() else None,
        config_path=config_path if config_path and Path(config_path).exists() else None,
    )
    if seed is None:
        seed = random_seed()
    return pipeline.generate(
        seed,
        t=t,
        action=action,
        override=override,
        include_equipment=include_equipment,
        use_skulls=use_skulls,
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Command-line entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Generate an armor stand summon command")
    parser.add_argument("--seed", "-s", type=int, default=None, help="Seed (random when omitted)")
    parser.add_argument("--table", type=Path, default=DEFAULT_TABLE_PATH, help="Outfit table file")
    parser.add_argument("--skulls", type=Path, default=DEFAULT_SKULLS_PATH, help="Skull texture list")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Generator YAML")
    parser.add_argument("--t", type=float, default=DEFAULT_T, help="Intensity / phase in [0, 1]")
    parser.add_argument(
        "--action",
        choices=[a.value for a in Action],
        default=Action.WALKING.value,
    )
    parser.add_argument(
        "--override",
        choices=[o.value for o in Override],
        default=Override.NONE.value,
    )
    parser.add_argument(
        "--no-equipment",
        action="store_true",
        help="Emit an empty equipment compound",
    )
    parser.add_argument(
        "--no-skull",
        action="store_true",
        help="Leave the head slot empty even when skull textures are loaded",
    )
    parser.add_argument(
        "--batch", "-n",
        type=int,
        default=0,
        help="Generate N random stands and export them instead",
    )
    parser.add_argument(
        "--output-dir", "-o",
        type=Path,
        default=Path("data/armor_stands"),
        help="Output directory for batch export",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.batch > 0:
        pipeline = Pipeline.from_paths(
            table_path=args.table if args.table.exists() else None,
            skulls_path=args.skulls if args.skulls.exists() else None,
            config_path=args.config if args.config.exists() else None,
        )
        results = pipeline.generate_batch(
            count=args.batch,
            t=args.t,
            action=Action(args.action),
            override=Override(args.override),
            random_state=args.seed,
            use_skulls=not args.no_skull,
        )
        path = pipeline.export(args.output_dir, results)
        stats = pipeline.get_stats(results)

        print("\n=== Generation Complete ===")
        print(f"Total stands: {stats['total_stands']}")
        print(f"Leather pieces: {stats['leather_pieces']}")
        print(f"Trimmed pieces: {stats['trimmed_pieces']}")
        print(f"Output: {path}")
        return

    result = run_pipeline(
        seed=args.seed,
        t=args.t,
        action=Action(args.action),
        override=Override(args.override),
        table_path=args.table,
        skulls_path=args.skulls,
        config_path=args.config,
        include_equipment=not args.no_equipment,
        use_skulls=not args.no_skull,
    )
    print(f"Seed: {result.seed}")
    print(result.command)


if __name__ == "__main__":
    main()
