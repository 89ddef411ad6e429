import json

import pytest

from duckherd.core.config import (
    SimulationConfig, DEFAULT_CONFIG, MOBILE_CONFIG, BENCHMARK_CONFIG, load_config, save_config,
    category_count,
)


def test_round_trip_through_dict():
    config = SimulationConfig(maxSpeed=123.0, dogControlMode="direct")
    assert SimulationConfig.from_dict(config.to_dict()) == config


def test_from_dict_ignores_unknown_keys():
    config = SimulationConfig.from_dict({"maxSpeed": 50.0, "notAField": 1})
    assert config.maxSpeed == 50.0


def test_presets_are_valid():
    for preset in (DEFAULT_CONFIG, MOBILE_CONFIG, BENCHMARK_CONFIG):
        assert preset.clusterRadiusThreshold > 0
    assert MOBILE_CONFIG.screenWidth < DEFAULT_CONFIG.screenWidth
    assert BENCHMARK_CONFIG.randomSeed is not None


@pytest.mark.parametrize("overrides", [
    {"duckRadius": 0},
    {"dogRadius": -1},
    {"screenWidth": 0},
    {"dogControlMode": "teleport"},
    {"damping": 0},
    {"damping": 1.5},
    {"spawnSpeedMin": 10, "spawnSpeedMax": 5},
    {"maxTimeStep": 0},
    {"duckColors": []},
])
def test_rejects_invalid_values(overrides):
    with pytest.raises(ValueError):
        SimulationConfig(**overrides)


def test_load_and_save(tmp_path):
    path = tmp_path / "config.json"
    save_config(SimulationConfig(targetRingRadius=99.0), str(path))
    assert load_config(str(path)).targetRingRadius == 99.0


def test_load_partial_file_keeps_defaults(tmp_path):
    path = tmp_path / "partial.json"
    path.write_text(json.dumps({"clusterRadiusThreshold": 55}))
    config = load_config(str(path))
    assert config.clusterRadiusThreshold == 55
    assert config.maxSpeed == DEFAULT_CONFIG.maxSpeed


def test_load_rejects_non_object(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("[1, 2, 3]")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_palette_survives_from_dict():
    palette = [[1, 2, 3], [4, 5, 6]]
    config = SimulationConfig.from_dict(SimulationConfig(duckColors=palette, dogColor=[9, 9, 9]).to_dict())
    assert config.duckColors == palette
    assert config.dogColor == [9, 9, 9]


def test_loaded_palette_caps_categories(tmp_path):
    path = tmp_path / "palette.json"
    path.write_text(json.dumps({"duckColors": [[1, 2, 3], [4, 5, 6]]}))
    config = load_config(str(path))
    assert config.duckColors == [[1, 2, 3], [4, 5, 6]]
    assert category_count(5, config.to_dict()) == 2
