"""Centralized defaults and helpers for likelihood evaluation settings.

This module holds the single source of truth for the numeric tuning
constants used by the negative log-likelihood evaluators.

Constants
---------
NL_INF
    Penalty sentinel returned (plus jitter) for infeasible parameters or a
    non-finite likelihood.
JITTER_MEAN, JITTER_SD
    Mean and standard deviation of the normal draw that is squared to form
    the penalty jitter. The defaults give a jitter of order ``1e8``.
ANCHOR_OFFSET_DEX
    Half-width, in decades, of the window used to pick the rescaling anchor
    in :func:`countnll.math_utils.combine_two_log_terms`.
DOMINANCE_DEX
    Separation, in decades, beyond which the smaller of two mixture terms is
    dropped entirely.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping

NL_INF: float = 1e100
JITTER_MEAN: float = 10000.0
JITTER_SD: float = 20.0
ANCHOR_OFFSET_DEX: float = 300.0
DOMINANCE_DEX: float = 600.0
LN10: float = math.log(10.0)


def _penalty_section(cfg: Mapping[str, Any] | None) -> Dict[str, Any]:
    """Extract the penalty subsection from a configuration mapping.

    The configuration is expected to have a top-level ``"likelihood"``
    mapping with an optional ``"penalty"`` mapping inside it. Values are
    copied into a new dictionary so callers can mutate the result safely.
    """
    if cfg is None:
        return {}
    lik = cfg.get("likelihood")
    if isinstance(lik, Mapping):
        pen = lik.get("penalty")
        if isinstance(pen, Mapping):
            return dict(pen)
    return {}


def penalty_big_from_config(cfg: Mapping[str, Any] | None) -> float:
    """Return the penalty sentinel from ``likelihood.penalty.big``.

    Falls back to :data:`NL_INF` when absent.
    """
    section = _penalty_section(cfg)
    if "big" not in section:
        return NL_INF
    return float(section["big"])


def jitter_mean_from_config(cfg: Mapping[str, Any] | None) -> float:
    """Return the jitter mean from ``likelihood.penalty.jitter_mean``."""
    section = _penalty_section(cfg)
    return float(section.get("jitter_mean", JITTER_MEAN))


def jitter_sd_from_config(cfg: Mapping[str, Any] | None) -> float:
    """Return the jitter standard deviation from ``likelihood.penalty.jitter_sd``."""
    section = _penalty_section(cfg)
    return float(section.get("jitter_sd", JITTER_SD))


def random_seed_from_config(cfg: Mapping[str, Any] | None) -> int | None:
    """Return ``likelihood.random_seed`` or ``None`` when not configured."""
    if cfg is None:
        return None
    lik = cfg.get("likelihood")
    if not isinstance(lik, Mapping):
        return None
    seed = lik.get("random_seed")
    return None if seed is None else int(seed)


__all__ = [
    "NL_INF",
    "JITTER_MEAN",
    "JITTER_SD",
    "ANCHOR_OFFSET_DEX",
    "DOMINANCE_DEX",
    "LN10",
    "penalty_big_from_config",
    "jitter_mean_from_config",
    "jitter_sd_from_config",
    "random_seed_from_config",
]
