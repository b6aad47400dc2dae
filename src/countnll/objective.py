"""Model registry and optimizer-facing objective wrapper.

Every evaluator in this package has the signature
``f(data, params, *, rng=None) -> float``. :data:`MODELS` maps short model
names (``"pois"``, ``"nb2"``, ``"zipig"``, ``"zipb2"``, ...) to those
evaluators together with the parameter names of their vector layout, and
:class:`NegLogLikelihood` binds one model to a data set so it can be handed
directly to an optimizer.

Examples
--------
>>> import numpy as np
>>> from scipy.optimize import minimize
>>> x = np.random.default_rng(0).poisson(4.0, size=200)
>>> nll = NegLogLikelihood("pois", x)
>>> res = minimize(nll, x0=[1.0], method="Nelder-Mead")
>>> bool(abs(res.x[0] - x.mean()) < 1e-2)
True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping

import numpy as np

from .families import FAMILIES, Family
from .nll_mixture import nlogl_nb2, nlogl_pb2, nlogl_pig2, nlogl_pois2
from .nll_single import nlogl_nb, nlogl_pb, nlogl_pig, nlogl_pois
from .nll_zero_inflated import (
    nlogl_zinb,
    nlogl_zinb2,
    nlogl_zipb,
    nlogl_zipb2,
    nlogl_zipig,
    nlogl_zipig2,
    nlogl_zipois,
    nlogl_zipois2,
)
from .penalty import penalty_count
from .validation import as_counts

__all__ = [
    "ModelSpec",
    "MODELS",
    "get_model",
    "get_nlogl",
    "parameter_names",
    "NegLogLikelihood",
]

# iminuit's Minuit.LIKELIHOOD: a change of 0.5 in -log L is one standard error
LIKELIHOOD_ERRORDEF = 0.5

_KIND_WEIGHTS = {
    "single": (),
    "mixture": ("w",),
    "zero_inflated": ("nu",),
    "zero_inflated_mixture": ("nu", "w"),
}


@dataclass(frozen=True)
class ModelSpec:
    """A registered model: its family, structure and NLL evaluator."""

    name: str
    family: Family
    kind: str
    nlogl: Callable[..., float]

    @property
    def two_population(self) -> bool:
        return self.kind in ("mixture", "zero_inflated_mixture")

    @property
    def parameter_names(self) -> tuple[str, ...]:
        names = _KIND_WEIGHTS[self.kind]
        if self.two_population:
            comp = self.family.param_names
            return names + tuple(f"{p}_1" for p in comp) + tuple(f"{p}_2" for p in comp)
        return names + self.family.param_names

    @property
    def nparams(self) -> int:
        return len(self.parameter_names)


def _spec(name, family, kind, fn):
    return ModelSpec(name, FAMILIES[family], kind, fn)


MODELS: Mapping[str, ModelSpec] = {
    spec.name: spec
    for spec in (
        _spec("pois", "pois", "single", nlogl_pois),
        _spec("nb", "nb", "single", nlogl_nb),
        _spec("pig", "pig", "single", nlogl_pig),
        _spec("pb", "pb", "single", nlogl_pb),
        _spec("pois2", "pois", "mixture", nlogl_pois2),
        _spec("nb2", "nb", "mixture", nlogl_nb2),
        _spec("pig2", "pig", "mixture", nlogl_pig2),
        _spec("pb2", "pb", "mixture", nlogl_pb2),
        _spec("zipois", "pois", "zero_inflated", nlogl_zipois),
        _spec("zinb", "nb", "zero_inflated", nlogl_zinb),
        _spec("zipig", "pig", "zero_inflated", nlogl_zipig),
        _spec("zipb", "pb", "zero_inflated", nlogl_zipb),
        _spec("zipois2", "pois", "zero_inflated_mixture", nlogl_zipois2),
        _spec("zinb2", "nb", "zero_inflated_mixture", nlogl_zinb2),
        _spec("zipig2", "pig", "zero_inflated_mixture", nlogl_zipig2),
        _spec("zipb2", "pb", "zero_inflated_mixture", nlogl_zipb2),
    )
}


def get_model(name: str) -> ModelSpec:
    try:
        return MODELS[name]
    except KeyError:
        known = ", ".join(sorted(MODELS))
        raise KeyError(f"Unknown model {name!r}; expected one of: {known}") from None


def get_nlogl(name: str) -> Callable[..., float]:
    """Return the NLL evaluator registered under ``name``."""
    return get_model(name).nlogl


def parameter_names(name: str) -> tuple[str, ...]:
    """Return the ordered parameter names of model ``name``."""
    return get_model(name).parameter_names


class NegLogLikelihood:
    """Objective ``params -> NLL`` for one model and one data set.

    The instance accepts either a single parameter sequence (the calling
    convention of :func:`scipy.optimize.minimize`) or the parameters as
    separate positional arguments (the convention of ``iminuit.Minuit``).
    ``errordef`` follows the likelihood convention so iminuit reports
    standard errors without further configuration. ``n_calls`` counts
    evaluations and ``n_penalized`` those answered with the penalty value.

    Parameters
    ----------
    model : str
        Registered model name, see :data:`MODELS`.
    data : array-like
        Observed non-negative counts.
    rng : numpy.random.Generator, optional
        Source of penalty jitter. The shared default generator is used when
        omitted.
    """

    errordef = LIKELIHOOD_ERRORDEF

    def __init__(self, model: str, data, rng: np.random.Generator | None = None):
        self.model = get_model(model)
        self.data = as_counts(data)
        self.rng = rng
        self.n_calls = 0
        self.n_penalized = 0

    @property
    def parameter_names(self) -> tuple[str, ...]:
        return self.model.parameter_names

    def __call__(self, *params) -> float:
        if len(params) == 1 and np.ndim(params[0]) == 1:
            params = params[0]
        issued = penalty_count()
        value = self.model.nlogl(self.data, params, rng=self.rng)
        self.n_calls += 1
        if penalty_count() > issued:
            self.n_penalized += 1
        return value

    def __repr__(self) -> str:
        return (
            f"NegLogLikelihood(model={self.model.name!r}, n={self.data.size}, "
            f"calls={self.n_calls}, penalized={self.n_penalized})"
        )
