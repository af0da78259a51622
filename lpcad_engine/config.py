"""Tunable constants for hit testing, snapping and length estimation.

Sample counts trade accuracy for speed: selection tolerances are a few screen
pixels, so the sampled-polyline approximations only need to be tight at that
scale. A JSON override file can adjust any numeric field.
"""
from __future__ import annotations

import copy
import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    hit_tolerance_px: float = 10.0          # per unit of annotation scale
    linear_tie_tolerance_px: float = 0.5
    arc_hit_samples: int = 72
    curve_hit_samples: int = 48
    snap_tolerance_px: float = 10.0
    snap_nearest_samples: int = 64
    snap_polyline_segments: int = 24
    curve_flatness_epsilon: float = 0.35    # document units
    curve_max_subdivision_depth: int = 9

    def asdict(self) -> Dict[str, Any]:
        return asdict(self)


_ENGINE_CONFIG = EngineConfig()


def get_engine_config() -> EngineConfig:
    return copy.deepcopy(_ENGINE_CONFIG)


def set_engine_config(config: EngineConfig) -> None:
    global _ENGINE_CONFIG
    _ENGINE_CONFIG = copy.deepcopy(config)


def config_from_mapping(data: Dict[str, Any], base: EngineConfig | None = None) -> EngineConfig:
    """Overlay the numeric entries of ``data`` on ``base`` (or the defaults).

    Unknown keys and values that do not convert to the field's type are
    skipped so a partially valid file still applies what it can.
    """
    config = copy.deepcopy(base) if base is not None else EngineConfig()
    for entry in fields(EngineConfig):
        if entry.name not in data:
            continue
        raw = data[entry.name]
        if isinstance(raw, bool):
            logger.debug("ignoring boolean value for %s", entry.name)
            continue
        caster = int if entry.type in (int, "int") else float
        try:
            value = caster(raw)
        except (ValueError, TypeError):
            logger.debug("ignoring invalid value %r for %s", raw, entry.name)
            continue
        if value <= 0:
            logger.debug("ignoring non-positive value %r for %s", raw, entry.name)
            continue
        setattr(config, entry.name, value)
    return config


def load_engine_config(path: str | Path) -> EngineConfig:
    config_path = Path(path)
    if not config_path.exists():
        return EngineConfig()
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("could not read engine config %s: %s", config_path, exc)
        return EngineConfig()
    if not isinstance(data, dict):
        logger.warning("engine config %s is not a JSON object", config_path)
        return EngineConfig()
    return config_from_mapping(data)


__all__ = [
    "EngineConfig",
    "config_from_mapping",
    "get_engine_config",
    "load_engine_config",
    "set_engine_config",
]
