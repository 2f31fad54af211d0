import json
import logging
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

from platformdirs import user_config_dir

from .level_constants import (
    CONNECT_MAX_ITERATIONS,
    DIAGONAL_PATH_PROBABILITY,
    GAP_FILL_MAX_DISTANCE,
    GAP_FILL_MAX_ROUNDS,
    GAP_FILL_MIN_DISTANCE,
    GAP_FILL_PATH_THRESHOLD,
    SECTOR_PATH_LENGTH_MAX,
    SECTOR_PATH_LENGTH_MIN,
    STAGE_FILL_MAX_ATTEMPTS,
)

APP_NAME = "SectorStructure"

logger = logging.getLogger(__name__)

# Defaults for all configurable options; these reproduce the canonical layouts
DEFAULT_CONFIG: Dict[str, Any] = {
    "paths": {
        "min_length": SECTOR_PATH_LENGTH_MIN,
        "max_length": SECTOR_PATH_LENGTH_MAX,
        "diagonal_probability": DIAGONAL_PATH_PROBABILITY,
    },
    "stage_fill": {"max_attempts": STAGE_FILL_MAX_ATTEMPTS},
    "connect": {"max_iterations": CONNECT_MAX_ITERATIONS},
    "gap_fill": {
        "max_rounds": GAP_FILL_MAX_ROUNDS,
        "path_threshold": GAP_FILL_PATH_THRESHOLD,
        "min_distance": GAP_FILL_MIN_DISTANCE,
        "max_distance": GAP_FILL_MAX_DISTANCE,
    },
}


@dataclass(frozen=True)
class GeneratorSettings:
    """Tuning knobs read by the structure generators."""

    path_length_min: int = SECTOR_PATH_LENGTH_MIN
    path_length_max: int = SECTOR_PATH_LENGTH_MAX
    diagonal_path_probability: float = DIAGONAL_PATH_PROBABILITY
    stage_fill_max_attempts: int = STAGE_FILL_MAX_ATTEMPTS
    connect_max_iterations: int = CONNECT_MAX_ITERATIONS
    gap_fill_max_rounds: int = GAP_FILL_MAX_ROUNDS
    gap_fill_path_threshold: int = GAP_FILL_PATH_THRESHOLD
    gap_fill_min_distance: float = GAP_FILL_MIN_DISTANCE
    gap_fill_max_distance: float = GAP_FILL_MAX_DISTANCE


def user_config_path() -> Path:
    """Return the platform-specific config file path."""
    return Path(user_config_dir(APP_NAME, APP_NAME)) / "config.json"


def _deep_merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Deep-merge dictionaries, with override winning on conflicts."""
    merged: Dict[str, Any] = deepcopy(base)
    for key, val in override.items():
        if isinstance(val, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], val)
        else:
            merged[key] = val
    return merged


def settings_from_config(config: Mapping[str, Any] | None = None) -> GeneratorSettings:
    """Build generator settings from a (partial) config mapping."""
    if config is not None and not isinstance(config, Mapping):
        raise TypeError(f"config must be a mapping, got {type(config).__name__}")
    merged = _deep_merge(DEFAULT_CONFIG, config or {})
    paths = merged["paths"]
    gap_fill = merged["gap_fill"]
    return GeneratorSettings(
        path_length_min=int(paths["min_length"]),
        path_length_max=int(paths["max_length"]),
        diagonal_path_probability=float(paths["diagonal_probability"]),
        stage_fill_max_attempts=int(merged["stage_fill"]["max_attempts"]),
        connect_max_iterations=int(merged["connect"]["max_iterations"]),
        gap_fill_max_rounds=int(gap_fill["max_rounds"]),
        gap_fill_path_threshold=int(gap_fill["path_threshold"]),
        gap_fill_min_distance=float(gap_fill["min_distance"]),
        gap_fill_max_distance=float(gap_fill["max_distance"]),
    )


def _known_sections(loaded: Mapping[str, Any], config_path: Path) -> Dict[str, Any]:
    """Keep the sections the generators read; anything else is logged and dropped."""
    sections: Dict[str, Any] = {}
    for key, val in loaded.items():
        if key not in DEFAULT_CONFIG:
            logger.warning("Ignoring unknown config section %r in %s", key, config_path)
        elif not isinstance(val, Mapping):
            logger.warning("Ignoring config section %r in %s: not an object", key, config_path)
        else:
            sections[key] = val
    return sections


def _overrides(config: Mapping[str, Any], defaults: Mapping[str, Any]) -> Dict[str, Any]:
    """Values of ``config`` that differ from ``defaults``, nested sections included."""
    diff: Dict[str, Any] = {}
    for key, val in config.items():
        default = defaults.get(key)
        if isinstance(val, Mapping) and isinstance(default, Mapping):
            nested = _overrides(val, default)
            if nested:
                diff[key] = nested
        elif val != default:
            diff[key] = val
    return diff


def load_config(path: Path | None = None) -> Tuple[Dict[str, Any], Path]:
    """Load generator tuning from disk, falling back to defaults on errors."""
    config_path = path or user_config_path()
    config: Dict[str, Any] = deepcopy(DEFAULT_CONFIG)

    try:
        if config_path.exists():
            loaded = json.loads(config_path.read_text(encoding="utf-8"))
            if isinstance(loaded, dict):
                config = _deep_merge(config, _known_sections(loaded, config_path))
            else:
                logger.warning("Ignoring config %s: top level is not an object", config_path)
    except (OSError, ValueError) as exc:
        logger.warning("Failed to load config (%s): %s", config_path, exc)

    return config, config_path


def load_settings(path: Path | None = None) -> GeneratorSettings:
    config, _ = load_config(path)
    return settings_from_config(config)


def save_config(config: Mapping[str, Any], path: Path | None = None) -> Path:
    """Write the non-default part of ``config`` and return where it went."""
    config_path = path or user_config_path()
    payload = _overrides(config, DEFAULT_CONFIG)
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    except OSError as exc:
        logger.warning("Failed to save config (%s): %s", config_path, exc)
    return config_path
