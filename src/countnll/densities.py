"""Log probability mass functions for the supported count distributions.

Poisson and negative binomial delegate to :mod:`scipy.stats`. The
Poisson-inverse Gaussian (PIG) and Poisson-beta distributions have no SciPy
counterpart and are assembled here from :mod:`scipy.special` primitives, in
log space throughout so that large counts do not overflow.

All functions accept a scalar or array of counts and return a float for
scalar input, otherwise a ``float64`` array of the same shape. Parameters are
assumed feasible; see :mod:`countnll.families` for the checks.
"""

import functools

import numpy as np
from scipy import special
from scipy.stats import nbinom, poisson

__all__ = [
    "pois_logpmf",
    "nb_logpmf",
    "pig_logpmf",
    "zipig_logpmf",
    "pb_logpmf",
]


def _finish(out, x):
    if np.ndim(x) == 0:
        return float(np.asarray(out).reshape(()))
    return np.asarray(out, dtype=float)


def pois_logpmf(x, lam):
    """Poisson log-mass ``log P(X = x)`` with rate ``lam``."""
    x = np.asarray(x, dtype=float)
    return _finish(poisson.logpmf(x, lam), x)


def nb_logpmf(x, size, mu):
    """Negative binomial log-mass in the size/mean parameterisation.

    The variance is ``mu + mu**2 / size``. ``mu = 0`` is the point mass at
    zero.
    """
    x = np.asarray(x, dtype=float)
    p = size / (size + mu)
    with np.errstate(divide="ignore"):
        out = nbinom.logpmf(x, size, p)
    return _finish(out, x)


@functools.lru_cache(maxsize=32)
def _log_bessel_ratio_cumsum(kmax, inv_alpha):
    """Return ``S[k] = log K_{k-1/2}(alpha) - log K_{-1/2}(alpha)`` for ``k <= kmax``.

    Uses the upward recurrence of the ratio
    ``r_k = K_{k+1/2} / K_{k-1/2}``, ``r_0 = 1``,
    ``r_{k+1} = 1 / r_k + (2k + 1) / alpha``, which is stable for the
    modified Bessel function of the second kind and never overflows.
    With ``inv_alpha == 0`` every ratio is one. Tables are cached per
    ``(kmax, inv_alpha)`` and returned read-only.
    """
    out = np.zeros(kmax + 1, dtype=float)
    if inv_alpha > 0 and kmax > 0:
        ratios = []
        r = 1.0
        for k in range(kmax):
            ratios.append(r)
            r = 1.0 / r + (2 * k + 1) * inv_alpha
        np.cumsum(np.log(ratios), out=out[1:])
    out.setflags(write=False)
    return out


def pig_logpmf(x, mu, sigma):
    """Poisson-inverse Gaussian log-mass with mean ``mu`` and dispersion ``sigma``.

    Parameters
    ----------
    x : array-like
        Non-negative integer counts.
    mu : float
        Mean, ``mu > 0``.
    sigma : float
        Dispersion, ``sigma >= 0``. The variance is ``mu + sigma * mu**2``.

    Returns
    -------
    float or numpy.ndarray
        ``log P(X = x)``.

    Notes
    -----
    The mass function is

        P(y) = (2a/pi)^(1/2) mu^y exp(1/sigma) K_{y-1/2}(a) / ((a sigma)^y y!)

    with ``a**2 = 1/sigma**2 + 2 mu / sigma``. Writing ``s = a * sigma =
    sqrt(1 + 2 mu sigma)`` and using ``K_{-1/2}(a) = sqrt(pi/(2a)) exp(-a)``
    this becomes

        log P(y) = y log(mu / s) - log y! - 2 mu / (1 + s) + S_y

    where ``S_y`` is the accumulated Bessel ratio. ``1/sigma`` never appears
    explicitly, so ``sigma = 0`` reduces exactly to the Poisson log-mass.
    """
    x = np.asarray(x, dtype=float)
    s = np.sqrt(1.0 + 2.0 * mu * sigma)
    log_p0 = -2.0 * mu / (1.0 + s)
    kmax = int(np.max(x)) if x.size else 0
    ratio_sum = _log_bessel_ratio_cumsum(kmax, float(sigma / s))
    k = x.astype(np.int64)
    out = (
        special.xlogy(x, mu)
        - x * np.log(s)
        - special.gammaln(x + 1.0)
        + log_p0
        + ratio_sum[k]
    )
    return _finish(out, x)


def zipig_logpmf(x, mu, sigma, nu):
    """Zero-inflated PIG log-mass.

    ``P(0) = nu + (1 - nu) * PIG(0)`` and ``P(y) = (1 - nu) * PIG(y)`` for
    ``y > 0``. At ``nu = 0`` it equals :func:`pig_logpmf`.
    """
    x = np.asarray(x, dtype=float)
    base = np.asarray(pig_logpmf(x, mu, sigma), dtype=float)
    with np.errstate(divide="ignore"):
        log_keep = np.log1p(-nu)
        at_zero = np.logaddexp(np.log(nu), log_keep + base)
    out = np.where(x == 0, at_zero, log_keep + base)
    return _finish(out, x)


# Above this argument the log-space series is used instead of scipy's hyp1f1
_HYP1F1_DIRECT_MAX_Z = 100.0
# Upper bound on the number of series terms held in memory at once
_SERIES_BLOCK = 1 << 21


def _log_hyp1f1_series(a, b, z):
    """``log 1F1(a; b; z)`` for ``a >= 0``, ``b > a`` and ``z > 0`` by direct summation.

    Every term is positive, so the series is summed in log space. The terms
    decay faster than a Poisson(``z``) tail once ``k > z``.
    """
    b = np.asarray(b, dtype=float)
    if a == 0:
        return np.zeros_like(b)
    nterms = int(z + 10.0 * np.sqrt(z) + 50.0)
    k = np.arange(nterms, dtype=float)
    head = (
        special.gammaln(a + k)
        - special.gammaln(a)
        + k * np.log(z)
        - special.gammaln(k + 1.0)
    )
    out = np.empty_like(b)
    step = max(1, _SERIES_BLOCK // nterms)
    for start in range(0, b.size, step):
        bb = b[start:start + step, None]
        log_terms = head + special.gammaln(bb) - special.gammaln(bb + k)
        out[start:start + step] = special.logsumexp(log_terms, axis=1)
    return out


def _log_hyp1f1_positive(a, b, z):
    """``log 1F1(a; b; z)`` for the positive-term case of :func:`pb_logpmf`."""
    ub, inverse = np.unique(np.asarray(b, dtype=float), return_inverse=True)
    if z <= _HYP1F1_DIRECT_MAX_Z:
        with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
            out = np.log(special.hyp1f1(a, ub, z))
        bad = ~np.isfinite(out)
    else:
        out = np.empty_like(ub)
        bad = np.ones(ub.shape, dtype=bool)
    if np.any(bad):
        out[bad] = _log_hyp1f1_series(a, ub[bad], z)
    return out[inverse.ravel()].reshape(np.shape(b))


def pb_logpmf(x, alpha, beta, c):
    """Poisson-beta log-mass.

    ``X | p ~ Poisson(c * p)`` with ``p ~ Beta(alpha, beta)``:

        P(x) = c^x / x! * B(alpha + x, beta) / B(alpha, beta)
               * 1F1(alpha + x; alpha + beta + x; -c)

    The hypergeometric factor is evaluated through Kummer's transformation
    ``1F1(a; b; -c) = exp(-c) 1F1(b - a; b; c)``, whose series has only
    positive terms. ``alpha = 0`` is the point mass at zero and ``beta = 0``
    reduces to Poisson(``c``).
    """
    x = np.asarray(x, dtype=float)
    xa = np.atleast_1d(x)
    if alpha == 0:
        out = np.where(xa == 0, 0.0, -np.inf)
    else:
        b = alpha + beta + xa
        out = (
            special.xlogy(xa, c)
            - special.gammaln(xa + 1.0)
            + special.gammaln(alpha + xa)
            - special.gammaln(alpha)
            + special.gammaln(alpha + beta)
            - special.gammaln(b)
            - c
            + _log_hyp1f1_positive(beta, b, c)
        )
    return _finish(out.reshape(x.shape), x)
