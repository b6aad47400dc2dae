"""Boundary checks for observation and parameter vectors.

These checks cover caller errors (wrong shapes, negative counts). They raise
``ValueError`` because such input is a bug in the caller, not a point the
optimizer can move away from; parameter *values* are never checked here.
"""

import numpy as np

__all__ = ["as_counts", "as_params"]


def as_counts(data) -> np.ndarray:
    """Return ``data`` as a one-dimensional float array of counts.

    Raises
    ------
    ValueError
        If ``data`` has more than one dimension or contains negative or
        non-finite values.
    """
    x = np.asarray(data, dtype=float)
    if x.ndim == 0:
        x = x.reshape(1)
    if x.ndim != 1:
        raise ValueError(f"data must be one-dimensional, got shape {x.shape}")
    if not np.isfinite(x).all():
        raise ValueError("data must contain only finite counts")
    if np.any(x < 0):
        raise ValueError("data must contain non-negative counts")
    return x


def as_params(params, expected: int, label: str) -> np.ndarray:
    """Return ``params`` as a float array of length ``expected``."""
    par = np.atleast_1d(np.asarray(params, dtype=float))
    if par.ndim != 1 or par.size != expected:
        raise ValueError(
            f"{label} expects {expected} parameters, got {par.size} "
            f"(shape {par.shape})"
        )
    return par
