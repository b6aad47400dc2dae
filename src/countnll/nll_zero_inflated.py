"""Negative log-likelihood of zero-inflated count distributions.

Zero inflation adds a point mass ``nu`` at zero and scales every other
probability by the remaining weight, so only the zero count needs special
treatment: the data are split into ``n0`` zeros and the non-zero
observations.

Single population, ``[nu, params...]``::

    log L = n0 * log(nu + (1 - nu) f(0)) + (n - n0) * log(1 - nu)
            + sum_{x != 0} log f(x)

Two populations, ``[nu, w, component 1..., component 2...]`` with absolute
weights ``nu``, ``w`` and ``1 - nu - w``::

    log L = n0 * log(nu + w f1(0) + (1 - nu - w) f2(0))
            + sum_{x != 0} log(w f1(x) + (1 - nu - w) f2(x))
"""

import numpy as np

from . import densities
from .families import NB, PB, PIG, POIS, Family
from .math_utils import combine_two_log_terms
from .nll_mixture import mixture_log_terms, split_components
from .penalty import guard, reject
from .validation import as_counts, as_params

__all__ = [
    "nlogl_zipois",
    "nlogl_zinb",
    "nlogl_zipig",
    "nlogl_zipb",
    "nlogl_zipois2",
    "nlogl_zinb2",
    "nlogl_zipig2",
    "nlogl_zipb2",
]


def _is_fraction(v) -> bool:
    return bool(np.isfinite(v) and 0 <= v <= 1)


def _split_zeros(x):
    zero = x == 0
    return int(np.count_nonzero(zero)), x[~zero]


def _log_zero_mass(family: Family, nu, comp):
    """``log(nu + (1 - nu) f(0))``.

    Evaluated as ``logaddexp(log nu, log1p(-nu) + log f(0))`` so a subnormal
    ``f(0)`` keeps full precision; at ``nu == 0`` the result is ``log f(0)``.
    """
    log_f0 = family.logpmf(0.0, comp)
    with np.errstate(divide="ignore", invalid="ignore"):
        out = np.logaddexp(np.log(nu), np.log1p(-nu) + log_f0)
    if not np.isfinite(out):
        out = log_f0
    return out


def _nlogl_zi(family: Family, data, params, rng, label: str) -> float:
    x = as_counts(data)
    par = as_params(params, 1 + family.nparams, label)
    nu, comp = par[0], par[1:]
    if not (_is_fraction(nu) and family.feasible(comp)):
        return reject(par, rng=rng, label=label)

    n0, non_zero = _split_zeros(x)
    with np.errstate(divide="ignore", invalid="ignore"):
        ll = np.sum(family.logpmf(non_zero, comp))
        if n0 > 0:
            ll += n0 * _log_zero_mass(family, nu, comp)
        if non_zero.size > 0:
            ll += non_zero.size * np.log1p(-nu)
    return guard(-ll, rng=rng, label=label)


def nlogl_zipois(data, par_zipois, *, rng=None) -> float:
    """Zero-inflated Poisson NLL, ``[nu, lambda]``."""
    return _nlogl_zi(POIS, data, par_zipois, rng, "nlogl_zipois")


def nlogl_zinb(data, par_zinb, *, rng=None) -> float:
    """Zero-inflated negative binomial NLL, ``[nu, size, mu]``."""
    return _nlogl_zi(NB, data, par_zinb, rng, "nlogl_zinb")


def nlogl_zipb(data, par_zipb, *, rng=None) -> float:
    """Zero-inflated Poisson-beta NLL, ``[nu, alpha, beta, c]``."""
    return _nlogl_zi(PB, data, par_zipb, rng, "nlogl_zipb")


def nlogl_zipig(data, par_zipig, *, rng=None) -> float:
    """Zero-inflated PIG NLL, ``[nu, mu, sigma]``.

    Evaluated directly with :func:`countnll.densities.zipig_logpmf` rather
    than by splitting zeros; ``nu == 0`` uses the plain PIG log-mass.
    """
    label = "nlogl_zipig"
    x = as_counts(data)
    par = as_params(par_zipig, 1 + PIG.nparams, label)
    nu, mu, sigma = par
    if not (_is_fraction(nu) and PIG.feasible(par[1:])):
        return reject(par, rng=rng, label=label)

    with np.errstate(divide="ignore", invalid="ignore"):
        if nu == 0:
            nl = -np.sum(densities.pig_logpmf(x, mu, sigma))
        else:
            nl = -np.sum(densities.zipig_logpmf(x, mu, sigma, nu))
    return guard(nl, rng=rng, label=label)


def _nlogl_zi_two_pop(family: Family, data, params, rng, label: str) -> float:
    x = as_counts(data)
    par = as_params(params, 2 + 2 * family.nparams, label)
    (nu, w), comp1, comp2 = split_components(family, par, 2)
    if not (
        _is_fraction(nu)
        and _is_fraction(w)
        and nu + w <= 1
        and family.feasible(comp1)
        and family.feasible(comp2)
    ):
        return reject(par, rng=rng, label=label)

    # w == 0: component 2 takes over the whole non-inflated mass
    if w == 0:
        w, comp1, comp2 = 1.0 - nu, comp2, comp1
    w2 = max(1.0 - (nu + w), 0.0)

    n0, non_zero = _split_zeros(x)
    t1, t2 = mixture_log_terms(family, np.zeros(1), w, w2, comp1, comp2)
    log_p0 = -combine_two_log_terms(t1, t2)
    t1, t2 = mixture_log_terms(family, non_zero, w, w2, comp1, comp2)
    ll = -combine_two_log_terms(t1, t2)

    if n0 > 0:
        if nu == 0:
            ll += n0 * log_p0
        else:
            ll += n0 * np.logaddexp(np.log(nu), log_p0)
    return guard(-ll, rng=rng, label=label)


def nlogl_zipois2(data, par_zipois2, *, rng=None) -> float:
    """Zero-inflated two-population Poisson NLL, ``[nu, w, lambda_1, lambda_2]``."""
    return _nlogl_zi_two_pop(POIS, data, par_zipois2, rng, "nlogl_zipois2")


def nlogl_zinb2(data, par_zinb2, *, rng=None) -> float:
    """Zero-inflated two-population negative binomial NLL.

    ``par_zinb2 = [nu, w, size_1, mu_1, size_2, mu_2]``.
    """
    return _nlogl_zi_two_pop(NB, data, par_zinb2, rng, "nlogl_zinb2")


def nlogl_zipig2(data, par_zipig2, *, rng=None) -> float:
    """Zero-inflated two-population PIG NLL.

    ``par_zipig2 = [nu, w, mu_1, sigma_1, mu_2, sigma_2]``.
    """
    return _nlogl_zi_two_pop(PIG, data, par_zipig2, rng, "nlogl_zipig2")


def nlogl_zipb2(data, par_zipb2, *, rng=None) -> float:
    """Zero-inflated two-population Poisson-beta NLL.

    ``par_zipb2 = [nu, w, alpha_1, beta_1, c_1, alpha_2, beta_2, c_2]``.
    """
    return _nlogl_zi_two_pop(PB, data, par_zipb2, rng, "nlogl_zipb2")
