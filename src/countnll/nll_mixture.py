"""Negative log-likelihood of two-population mixtures.

The parameter vector is ``[w, component 1..., component 2...]`` and the
mixture mass is ``w * f1(x) + (1 - w) * f2(x)``. Per-observation log terms
are built from the family log-mass functions and reduced with
:func:`countnll.math_utils.combine_two_log_terms`.

A vector with ``w == 0`` is rewritten once to ``[1, component 2,
component 1]`` so both representations of the same single population
evaluate identically.
"""

import numpy as np

from .families import NB, PB, PIG, POIS, Family
from .math_utils import combine_two_log_terms
from .penalty import guard, reject
from .validation import as_counts, as_params

__all__ = ["nlogl_pois2", "nlogl_nb2", "nlogl_pig2", "nlogl_pb2"]


def split_components(family: Family, par, nweights: int):
    """Split ``par`` into its leading weights and the two component blocks."""
    k = family.nparams
    weights = par[:nweights]
    comp1 = par[nweights:nweights + k]
    comp2 = par[nweights + k:nweights + 2 * k]
    return weights, comp1, comp2


def mixture_log_terms(family: Family, x, w1, w2, comp1, comp2):
    """Return ``log(w1) + log f1(x)`` and ``log(w2) + log f2(x)``.

    Zero weights give ``-inf`` terms, which the combinator handles.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        t1 = np.log(w1) + np.asarray(family.logpmf(x, comp1), dtype=float)
        t2 = np.log(w2) + np.asarray(family.logpmf(x, comp2), dtype=float)
    return t1, t2


def _canonical_two_pop(family: Family, par):
    (w,), comp1, comp2 = split_components(family, par, 1)
    if w == 0:
        return np.concatenate(([1.0], comp2, comp1))
    return par


def _nlogl_two_pop(family: Family, data, params, rng, label: str) -> float:
    x = as_counts(data)
    par = as_params(params, 1 + 2 * family.nparams, label)
    (w,), comp1, comp2 = split_components(family, par, 1)
    if not (
        np.isfinite(w)
        and 0 <= w <= 1
        and family.feasible(comp1)
        and family.feasible(comp2)
    ):
        return reject(par, rng=rng, label=label)

    par = _canonical_two_pop(family, par)
    (w,), comp1, comp2 = split_components(family, par, 1)
    t1, t2 = mixture_log_terms(family, x, w, 1.0 - w, comp1, comp2)
    return guard(combine_two_log_terms(t1, t2), rng=rng, label=label)


def nlogl_pois2(data, par_pois2, *, rng=None) -> float:
    """Two-population Poisson NLL, ``[w, lambda_1, lambda_2]``.

    Examples
    --------
    Swapping the components and complementing the weight leaves the value
    unchanged:

    >>> x = [3, 7, 12, 14, 6, 9]
    >>> a = nlogl_pois2(x, [0.7, 13, 7])
    >>> b = nlogl_pois2(x, [0.3, 7, 13])
    >>> abs(a - b) < 1e-9
    True
    """
    return _nlogl_two_pop(POIS, data, par_pois2, rng, "nlogl_pois2")


def nlogl_nb2(data, par_nb2, *, rng=None) -> float:
    """Two-population negative binomial NLL, ``[w, size_1, mu_1, size_2, mu_2]``."""
    return _nlogl_two_pop(NB, data, par_nb2, rng, "nlogl_nb2")


def nlogl_pig2(data, par_pig2, *, rng=None) -> float:
    """Two-population PIG NLL, ``[w, mu_1, sigma_1, mu_2, sigma_2]``."""
    return _nlogl_two_pop(PIG, data, par_pig2, rng, "nlogl_pig2")


def nlogl_pb2(data, par_pb2, *, rng=None) -> float:
    """Two-population Poisson-beta NLL.

    ``par_pb2 = [w, alpha_1, beta_1, c_1, alpha_2, beta_2, c_2]``.
    """
    return _nlogl_two_pop(PB, data, par_pb2, rng, "nlogl_pb2")
