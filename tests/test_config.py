import json
from pathlib import Path

import pytest

from sector_structure import config


def test_deep_merge_handles_nested_dicts_without_mutating_inputs() -> None:
    base = {"paths": {"min_length": 3}, "gap_fill": {"max_rounds": 100}}
    override = {
        "paths": {"min_length": 4},
        "gap_fill": {"path_threshold": 20},
        "connect": {"max_iterations": 10},
    }

    merged = config._deep_merge(base, override)

    assert merged["paths"]["min_length"] == 4
    assert merged["gap_fill"]["max_rounds"] == 100
    assert merged["gap_fill"]["path_threshold"] == 20
    assert merged["connect"]["max_iterations"] == 10

    assert base["paths"]["min_length"] == 3
    assert "path_threshold" not in base["gap_fill"]


def test_load_config_merges_known_sections_over_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps(
            {
                "gap_fill": {"max_rounds": 5},
                "new_option": {"enabled": True},
            }
        ),
        encoding="utf-8",
    )

    loaded, resolved_path = config.load_config(path=config_path)

    assert resolved_path == config_path
    assert loaded["gap_fill"]["max_rounds"] == 5
    assert loaded["gap_fill"]["path_threshold"] == 15
    assert "new_option" not in loaded
    assert loaded is not config.DEFAULT_CONFIG


def test_load_config_falls_back_to_defaults_on_invalid_json(
    tmp_path: Path,
) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text("not valid json", encoding="utf-8")

    loaded, resolved_path = config.load_config(path=config_path)

    assert resolved_path == config_path
    assert loaded == config.DEFAULT_CONFIG
    assert loaded["paths"] is not config.DEFAULT_CONFIG["paths"]


def test_save_config_persists_to_disk(tmp_path: Path) -> None:
    config_path = tmp_path / "nested" / "config.json"
    payload = {"stage_fill": {"max_attempts": 10}}

    config.save_config(payload, config_path)

    saved = json.loads(config_path.read_text(encoding="utf-8"))
    assert saved == payload


def test_load_config_ignores_sections_that_are_not_objects(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps({"paths": 7, "connect": {"max_iterations": 12}}), encoding="utf-8"
    )

    loaded, _ = config.load_config(path=config_path)

    assert loaded["paths"] == config.DEFAULT_CONFIG["paths"]
    assert loaded["connect"]["max_iterations"] == 12


def test_save_config_writes_only_overrides(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    payload = config._deep_merge(config.DEFAULT_CONFIG, {"gap_fill": {"max_rounds": 3}})

    resolved = config.save_config(payload, config_path)

    assert resolved == config_path
    assert json.loads(config_path.read_text(encoding="utf-8")) == {"gap_fill": {"max_rounds": 3}}
    assert config.load_settings(config_path).gap_fill_max_rounds == 3


def test_load_settings_without_file_uses_defaults(tmp_path: Path) -> None:
    assert config.load_settings(tmp_path / "missing.json") == config.GeneratorSettings()


def test_settings_from_config_defaults_match_constants() -> None:
    settings = config.settings_from_config()

    assert settings == config.GeneratorSettings()
    assert settings.path_length_min == 3
    assert settings.path_length_max == 12
    assert settings.stage_fill_max_attempts == 1000
    assert settings.gap_fill_path_threshold == 15


def test_settings_from_config_applies_partial_overrides() -> None:
    settings = config.settings_from_config({"gap_fill": {"max_rounds": 7}})

    assert settings.gap_fill_max_rounds == 7
    assert settings.gap_fill_path_threshold == 15


def test_settings_from_config_rejects_non_mapping() -> None:
    with pytest.raises(TypeError):
        config.settings_from_config(["paths"])  # type: ignore[arg-type]
