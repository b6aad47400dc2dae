"""Negative log-likelihood of single-population count distributions.

Each evaluator returns ``-sum(log P(x_i))`` for the given parameters, or the
penalty from :mod:`countnll.penalty` when the parameters are infeasible or
the sum is not finite.

Examples
--------
>>> import numpy as np
>>> x = np.random.default_rng(1).poisson(11, size=100)
>>> nlogl_pois(x, 11) < nlogl_pois(x, 13)
True
"""

import numpy as np

from .families import NB, PB, PIG, POIS, Family
from .penalty import guard, reject
from .validation import as_counts, as_params

__all__ = ["nlogl_pois", "nlogl_nb", "nlogl_pig", "nlogl_pb"]


def _nlogl_single(family: Family, data, params, rng, label: str) -> float:
    x = as_counts(data)
    par = as_params(params, family.nparams, label)
    if not family.feasible(par):
        return reject(par, rng=rng, label=label)
    with np.errstate(divide="ignore", invalid="ignore"):
        nl = -np.sum(family.logpmf(x, par))
    return guard(nl, rng=rng, label=label)


def nlogl_pois(data, par_pois, *, rng=None) -> float:
    """Poisson NLL, ``par_pois = [lambda]`` (a bare scalar is accepted)."""
    return _nlogl_single(POIS, data, par_pois, rng, "nlogl_pois")


def nlogl_nb(data, par_nb, *, rng=None) -> float:
    """Negative binomial NLL, ``par_nb = [size, mu]``."""
    return _nlogl_single(NB, data, par_nb, rng, "nlogl_nb")


def nlogl_pig(data, par_pig, *, rng=None) -> float:
    """Poisson-inverse Gaussian NLL, ``par_pig = [mu, sigma]``."""
    return _nlogl_single(PIG, data, par_pig, rng, "nlogl_pig")


def nlogl_pb(data, par_pb, *, rng=None) -> float:
    """Poisson-beta NLL, ``par_pb = [alpha, beta, c]``."""
    return _nlogl_single(PB, data, par_pb, rng, "nlogl_pb")
