# src/plotprimer/stats/__init__.py
"""
Small numeric helpers the examples need before data reaches matplotlib.
"""

from importlib import import_module
from typing import TYPE_CHECKING

__all__ = [
	"coerce_vector", "coerce_pair", "coerce_matrix",
	"moving_average", "histogram_bins",
]


def __getattr__(name: str):
	mod_of = {
		"coerce_vector": "plotprimer.stats.coerce",
		"coerce_pair": "plotprimer.stats.coerce",
		"coerce_matrix": "plotprimer.stats.coerce",
		"moving_average": "plotprimer.stats.transforms",
		"histogram_bins": "plotprimer.stats.transforms",
	}
	if name in mod_of:
		mod = import_module(mod_of[name])
		return getattr(mod, name)
	raise AttributeError(f"module 'plotprimer.stats' has no attribute {name!r}")


if TYPE_CHECKING:
	from .coerce import coerce_vector, coerce_pair, coerce_matrix
	from .transforms import moving_average, histogram_bins
