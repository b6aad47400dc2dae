"""Configuration loading for likelihood evaluation settings.

A configuration is a mapping (or a YAML file holding one) of the form::

    pipeline:
      log_level: INFO
    likelihood:
      penalty:
        big: 1.0e+100
        jitter_mean: 10000.0
        jitter_sd: 20.0
      random_seed: 42

Every key is optional. :func:`load_config` validates the mapping,
:func:`apply_config` installs the penalty settings and seeds the shared
jitter generator, and :func:`setup_logging` configures the root logger.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from .constants import (
    jitter_mean_from_config,
    jitter_sd_from_config,
    penalty_big_from_config,
    random_seed_from_config,
)
from .penalty import PenaltySettings, seed_default_rng, set_penalty_settings

logger = logging.getLogger(__name__)

__all__ = ["CONFIG_SCHEMA", "load_config", "apply_config", "setup_logging"]


CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "pipeline": {
            "type": "object",
            "properties": {
                "log_level": {"type": "string"},
            },
        },
        "likelihood": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "penalty": {
                    "type": "object",
                    "additionalProperties": False,
                    "properties": {
                        "big": {"type": "number", "exclusiveMinimum": 0},
                        "jitter_mean": {"type": "number"},
                        "jitter_sd": {"type": "number", "minimum": 0},
                    },
                },
                "random_seed": {"type": ["integer", "null"], "minimum": 0},
            },
        },
    },
}


class _UniqueKeyLoader(yaml.SafeLoader):
    pass


def _construct_mapping(loader, node, deep=False):
    mapping = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise ValueError(f"Duplicate key '{key}' in configuration")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


_UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_mapping
)


def load_config(config_path) -> dict[str, Any]:
    """Load a configuration mapping or YAML file and validate it."""

    if isinstance(config_path, Mapping):
        cfg = dict(config_path)
    else:
        path = Path(config_path)
        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        if path.suffix not in {".yaml", ".yml"}:
            raise ValueError("Config file must be YAML")
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.load(f, Loader=_UniqueKeyLoader) or {}

    jsonschema.validate(cfg, CONFIG_SCHEMA)
    return cfg


def apply_config(cfg: Mapping[str, Any] | None) -> PenaltySettings:
    """Install the penalty settings of ``cfg`` and seed the jitter generator."""

    settings = set_penalty_settings(
        big=penalty_big_from_config(cfg),
        jitter_mean=jitter_mean_from_config(cfg),
        jitter_sd=jitter_sd_from_config(cfg),
    )
    seed = random_seed_from_config(cfg)
    if seed is not None:
        seed_default_rng(seed)
    logger.info(
        "Penalty big=%g jitter=N(%g, %g)^2 seed=%s",
        settings.big,
        settings.jitter_mean,
        settings.jitter_sd,
        seed,
    )
    return settings


def setup_logging(cfg: Mapping[str, Any] | None) -> None:
    """Configure logging based on ``pipeline.log_level``."""
    log_level = ((cfg or {}).get("pipeline") or {}).get("log_level", "INFO")
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level, format="%(levelname)s:%(name)s:%(message)s"
    )
