"""
Tests for generator configuration loading.
"""

from pathlib import Path

import pytest

from src.armorstand.config import (
    GATED_TABLE_PROBABILITY,
    GeneratorConfig,
    load_config,
    parse_config,
)


def _write_yaml(tmp_path, text: str):
    path = tmp_path / "generator.yaml"
    path.write_text(text)
    return path


def test_defaults_without_path():
    config = load_config(None)
    assert config == GeneratorConfig()
    assert config.outfit.chest_table_probability == 1.0
    assert config.outfit.chest_section == "chestplate"
    assert config.walking.amp_leg == 42
    assert config.walking.amp_arm == 48
    assert config.sit.sway_y == 8
    assert config.idle_jitter == 5.0


def test_partial_yaml_overrides(tmp_path):
    path = _write_yaml(
        tmp_path,
        """
outfit:
  chest_table_probability: 0.8
  legs_table_probability: 0.8
  sections:
    chest: Torso
  extra_colors: [0x3366ff]
walking:
  amp_leg: 30
sit:
  sway_y: 4
""",
    )
    config = load_config(path)

    assert config.outfit.chest_table_probability == GATED_TABLE_PROBABILITY
    assert config.outfit.legs_table_probability == GATED_TABLE_PROBABILITY
    assert config.outfit.chest_section == "torso"
    assert config.outfit.legs_section == "pants"
    assert config.outfit.extra_colors == [0x3366FF]
    assert config.walking.amp_leg == 30
    assert config.walking.amp_arm == 48
    assert config.sit.sway_y == 4
    assert config.sit.leg_x_min == 270


def test_empty_yaml_gives_defaults(tmp_path):
    assert load_config(_write_yaml(tmp_path, "")) == GeneratorConfig()


def test_shipped_config_matches_defaults():
    shipped = Path(__file__).resolve().parents[2] / "config" / "generator.yaml"
    assert load_config(shipped) == GeneratorConfig()


@pytest.mark.parametrize("value", [-0.1, 1.5])
def test_probability_out_of_range(value):
    with pytest.raises(ValueError, match="chest_table_probability"):
        parse_config({"outfit": {"chest_table_probability": value}})


def test_inverted_sit_range():
    with pytest.raises(ValueError):
        parse_config({"sit": {"leg_x_min": 350, "leg_x_max": 300}})
