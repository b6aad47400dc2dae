import numpy as np

from .constants import ANCHOR_OFFSET_DEX, DOMINANCE_DEX, LN10

__all__ = ["combine_two_log_terms"]


def combine_two_log_terms(t1, t2) -> float:
    """Compute ``-sum(log(exp(t1) + exp(t2)))`` without overflow or underflow.

    Parameters
    ----------
    t1, t2 : array-like
        Per-observation natural-log terms of the two mixture components,
        each already including the log of its mixing weight. Entries may be
        ``-inf`` (component has zero mass at that observation).

    Returns
    -------
    float
        The negated sum of the per-observation log-sum-exp.

    Notes
    -----
    Both terms are moved to base-10 exponents and shifted by a per-observation
    anchor ``b``, the mean of the finite candidates ``t/ln10 -/+ 300``. When
    both terms are finite this is the midpoint of the window
    ``[max(t/ln10) - 300, min(t/ln10) + 300]`` so both shifted exponents stay
    within ``10**+-300``. When the shifted exponents differ by more than 600
    decades the smaller term cannot affect the sum and the larger is used as
    is. An observation where both terms are ``-inf`` contributes ``-inf`` to
    the log-sum, so the result is ``+inf``.
    """
    t1 = np.asarray(t1, dtype=float).ravel()
    t2 = np.asarray(t2, dtype=float).ravel()
    if t1.shape != t2.shape:
        raise ValueError(
            f"t1 and t2 must have the same length, got {t1.size} and {t2.size}"
        )
    if t1.size == 0:
        return 0.0

    d1 = t1 / LN10
    d2 = t2 / LN10
    candidates = np.stack(
        [d1 - ANCHOR_OFFSET_DEX, d1 + ANCHOR_OFFSET_DEX,
         d2 - ANCHOR_OFFSET_DEX, d2 + ANCHOR_OFFSET_DEX],
        axis=1,
    )
    finite = np.isfinite(candidates)
    nfinite = finite.sum(axis=1)
    if np.any(nfinite == 0):
        return float(np.inf)
    b = np.where(finite, candidates, 0.0).sum(axis=1) / nfinite

    u1 = d1 - b
    u2 = d2 - b
    only_2 = u2 - u1 > DOMINANCE_DEX
    only_1 = u1 - u2 > DOMINANCE_DEX
    mixed = ~(only_1 | only_2)

    total = np.sum(t2[only_2]) + np.sum(t1[only_1])
    bm = b[mixed]
    total += np.sum(
        bm * LN10 + np.log(np.power(10.0, u1[mixed]) + np.power(10.0, u2[mixed]))
    )
    return float(-total)
