"""Closed set of count distribution families.

Each :class:`Family` bundles the parameter layout, the log-mass function and
the feasibility check of one distribution so that the mixture and
zero-inflation builders can stay family-agnostic.

===========  ======================  ===============================
name         parameters              feasible when
===========  ======================  ===============================
``pois``     ``lambda``              ``lambda > 0``
``nb``       ``size, mu``            ``size > 0``, ``mu >= 0``
``pig``      ``mu, sigma``           ``mu > 0``, ``sigma >= 0``
``pb``       ``alpha, beta, c``      ``alpha >= 0``, ``beta >= 0``, ``c > 0``
===========  ======================  ===============================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Sequence

import numpy as np

from . import densities

__all__ = ["Family", "FAMILIES", "POIS", "NB", "PIG", "PB", "get_family"]


@dataclass(frozen=True)
class Family:
    """One count distribution: parameter names, log-mass and constraints."""

    name: str
    param_names: tuple[str, ...]
    _logpmf: Callable[..., np.ndarray]
    _feasible: Callable[..., bool]

    @property
    def nparams(self) -> int:
        return len(self.param_names)

    def logpmf(self, x, params: Sequence[float]):
        """Evaluate ``log P(X = x)`` for the parameter block ``params``."""
        return self._logpmf(x, *params)

    def feasible(self, params: Sequence[float]) -> bool:
        """Return ``True`` when ``params`` satisfies the family constraints."""
        if len(params) != self.nparams:
            return False
        if not all(np.isfinite(p) for p in params):
            return False
        return bool(self._feasible(*params))


POIS = Family(
    "pois",
    ("lambda",),
    densities.pois_logpmf,
    lambda lam: lam > 0,
)
NB = Family(
    "nb",
    ("size", "mu"),
    densities.nb_logpmf,
    lambda size, mu: size > 0 and mu >= 0,
)
PIG = Family(
    "pig",
    ("mu", "sigma"),
    densities.pig_logpmf,
    lambda mu, sigma: mu > 0 and sigma >= 0,
)
PB = Family(
    "pb",
    ("alpha", "beta", "c"),
    densities.pb_logpmf,
    lambda alpha, beta, c: alpha >= 0 and beta >= 0 and c > 0,
)

FAMILIES: Mapping[str, Family] = {f.name: f for f in (POIS, NB, PIG, PB)}


def get_family(name: str) -> Family:
    try:
        return FAMILIES[name]
    except KeyError:
        known = ", ".join(sorted(FAMILIES))
        raise KeyError(f"Unknown family {name!r}; expected one of: {known}") from None
