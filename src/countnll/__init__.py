"""countnll package"""

from .constants import NL_INF
from .math_utils import combine_two_log_terms
from .nll_single import nlogl_pois, nlogl_nb, nlogl_pig, nlogl_pb
from .nll_mixture import nlogl_pois2, nlogl_nb2, nlogl_pig2, nlogl_pb2
from .nll_zero_inflated import (
    nlogl_zipois,
    nlogl_zinb,
    nlogl_zipig,
    nlogl_zipb,
    nlogl_zipois2,
    nlogl_zinb2,
    nlogl_zipig2,
    nlogl_zipb2,
)
from .objective import MODELS, NegLogLikelihood, get_nlogl, parameter_names

__version__ = "0.1.0"

__all__ = [
    "NL_INF",
    "combine_two_log_terms",
    "nlogl_pois",
    "nlogl_nb",
    "nlogl_pig",
    "nlogl_pb",
    "nlogl_pois2",
    "nlogl_nb2",
    "nlogl_pig2",
    "nlogl_pb2",
    "nlogl_zipois",
    "nlogl_zinb",
    "nlogl_zipig",
    "nlogl_zipb",
    "nlogl_zipois2",
    "nlogl_zinb2",
    "nlogl_zipig2",
    "nlogl_zipb2",
    "MODELS",
    "NegLogLikelihood",
    "get_nlogl",
    "parameter_names",
]
