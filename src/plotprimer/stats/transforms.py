# src/plotprimer/stats/transforms.py

from __future__ import annotations

from typing import Optional, Sequence, Tuple, Union

from ..logutil import get_logger
from .coerce import DataLike, coerce_vector

from ..imports import numpy as np  # type: ignore

LOG = get_logger(__name__)

__all__ = ["moving_average", "histogram_bins"]


def moving_average(
		data: DataLike,
		*,
		column: Optional[Union[int, str]] = None,
		window_size: int = 5,
		iterations: int = 1
) -> "np.ndarray":
	"""
	Smooth a numerical vector with a uniform moving window.

	A kernel of weights ``1/window_size`` is convolved with the data, which is
	padded in ``"reflect"`` mode so the output keeps the input length for any
	window size. Repeating the pass (``iterations``) approximates a Gaussian kernel.

	:param data: Input numerical data coercible to a vector.
	:param column: Optional column selector for DataFrame input.
	:param window_size: Width of the moving window; must not exceed the vector length.
	:param iterations: Number of smoothing passes.
	:return: The smoothed array.
	:raises ValueError: If ``window_size`` or ``iterations`` are not positive integers,
	    or if ``window_size`` exceeds the length of the vector.
	"""
	x = coerce_vector(data, column=column, dtype=float)
	if window_size < 1 or iterations < 1:
		raise ValueError("window_size and iterations must be positive integers.")
	if window_size > x.size:
		raise ValueError("window_size must not exceed the vector length.")

	out = x.astype(float, copy=True)
	kernel = np.ones(window_size, dtype=float) / window_size
	# uneven padding for even windows keeps the length unchanged
	pad = (window_size // 2, (window_size - 1) // 2)
	for _ in range(iterations):
		padded = np.pad(out, pad, mode="reflect")
		out = np.convolve(padded, kernel, mode="valid")
	LOG.debug("moving_average window=%d iterations=%d -> %d points", window_size, iterations, out.size)
	return out


def histogram_bins(
		data: DataLike,
		bins: Union[int, str, Sequence[float]] = "auto",
		*,
		value_range: Optional[Tuple[float, float]] = None
) -> "np.ndarray":
	"""
	Resolve a bin specification to explicit edges, ignoring NaN values.

	:param data: Samples to bin.
	:param bins: Bin count, a numpy rule name (``"auto"``, ``"fd"``, ``"sturges"``...)
		or explicit monotonically increasing edges.
	:param value_range: Optional ``(low, high)`` clipping range.
	:return: Bin edges.
	:raises ValueError: If an integer ``bins`` is not positive or explicit edges are not increasing.
	"""
	x = coerce_vector(data)
	x = x[~np.isnan(x)]
	if x.size == 0:
		raise ValueError("Histogram needs at least one non-NaN value.")
	if isinstance(bins, int):
		if bins < 1:
			raise ValueError(f"bins must be >= 1; got {bins}.")
	elif not isinstance(bins, str):
		edges = np.asarray(bins, dtype=float)
		if edges.ndim != 1 or edges.size < 2 or np.any(np.diff(edges) <= 0):
			raise ValueError("Explicit bin edges must be a strictly increasing sequence of >= 2 values.")
		return edges
	return np.histogram_bin_edges(x, bins=bins, range=value_range)
