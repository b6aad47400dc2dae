"""Penalty sentinel and jitter used in place of invalid likelihoods.

Optimizers calling the NLL evaluators expect a continuous objective, so an
infeasible parameter point or a non-finite likelihood is reported as a large
value ``big + jitter`` instead of an exception, ``NaN`` or ``inf``. The
jitter is ``N(jitter_mean, jitter_sd)**2``; distinct calls draw distinct
jitter so repeated evaluations at an infeasible point are not flat.

The default generator is shared by the whole process and guarded by a lock.
Callers that evaluate from several threads can pass their own
:class:`numpy.random.Generator` through ``rng`` instead.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace

import numpy as np

from .constants import JITTER_MEAN, JITTER_SD, NL_INF

logger = logging.getLogger(__name__)

__all__ = [
    "PenaltySettings",
    "get_penalty_settings",
    "set_penalty_settings",
    "reset_penalty_settings",
    "seed_default_rng",
    "draw_jitter",
    "penalty",
    "penalty_count",
    "guard",
    "reject",
]


@dataclass(frozen=True)
class PenaltySettings:
    """Sentinel magnitude and jitter distribution."""

    big: float = NL_INF
    jitter_mean: float = JITTER_MEAN
    jitter_sd: float = JITTER_SD


_SETTINGS = PenaltySettings()
_DEFAULT_RNG = np.random.default_rng()
_RNG_LOCK = threading.Lock()
_CALLS = threading.local()


def get_penalty_settings() -> PenaltySettings:
    return _SETTINGS


def set_penalty_settings(
    *,
    big: float | None = None,
    jitter_mean: float | None = None,
    jitter_sd: float | None = None,
) -> PenaltySettings:
    """Override selected penalty settings and return the new settings."""

    global _SETTINGS
    changes = {}
    if big is not None:
        changes["big"] = float(big)
    if jitter_mean is not None:
        changes["jitter_mean"] = float(jitter_mean)
    if jitter_sd is not None:
        if jitter_sd < 0:
            raise ValueError(f"jitter_sd must be non-negative, got {jitter_sd!r}")
        changes["jitter_sd"] = float(jitter_sd)
    _SETTINGS = replace(_SETTINGS, **changes)
    return _SETTINGS


def reset_penalty_settings() -> PenaltySettings:
    global _SETTINGS
    _SETTINGS = PenaltySettings()
    return _SETTINGS


def seed_default_rng(seed: int | None) -> None:
    """Replace the shared jitter generator with one seeded by ``seed``."""

    global _DEFAULT_RNG
    with _RNG_LOCK:
        _DEFAULT_RNG = np.random.default_rng(seed)


def draw_jitter(rng: np.random.Generator | None = None) -> float:
    """Return one jitter value ``N(jitter_mean, jitter_sd)**2``."""

    settings = _SETTINGS
    if rng is not None:
        z = rng.normal(settings.jitter_mean, settings.jitter_sd)
    else:
        with _RNG_LOCK:
            z = _DEFAULT_RNG.normal(settings.jitter_mean, settings.jitter_sd)
    return float(z) ** 2


def penalty_count() -> int:
    """Number of penalties issued so far by the calling thread."""
    return getattr(_CALLS, "count", 0)


def penalty(rng: np.random.Generator | None = None) -> float:
    """Return the penalty value ``big + jitter``."""

    _CALLS.count = penalty_count() + 1
    return _SETTINGS.big + draw_jitter(rng)


def guard(nl, *, rng: np.random.Generator | None = None, label: str = "nlogl") -> float:
    """Return ``nl`` as a float, or the penalty when ``nl`` is not finite.

    ``NaN`` is treated like an infinite result so the caller always receives
    a usable objective value.
    """

    nl = float(nl)
    if np.isfinite(nl):
        return nl
    logger.debug("%s: non-finite likelihood (%r), returning penalty", label, nl)
    return penalty(rng)


def reject(params, *, rng: np.random.Generator | None = None, label: str = "nlogl") -> float:
    """Return the penalty for an infeasible parameter vector."""

    logger.debug("%s: infeasible parameters %s, returning penalty", label, list(params))
    return penalty(rng)
