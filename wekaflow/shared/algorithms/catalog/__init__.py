"""Built-in algorithm specifications"""

from .classifiers import CLASSIFIERS
from .meta import META_CLASSIFIERS
from .kernels import KERNELS
from .filters import FILTERS
from .neighbour_search import DISTANCES, NEIGHBOUR_SEARCH

ALGORITHM_SPECS = CLASSIFIERS + META_CLASSIFIERS + KERNELS + FILTERS + NEIGHBOUR_SEARCH + DISTANCES

__all__ = [
    "ALGORITHM_SPECS",
    "CLASSIFIERS",
    "META_CLASSIFIERS",
    "KERNELS",
    "FILTERS",
    "NEIGHBOUR_SEARCH",
    "DISTANCES",
]
