# src/plotprimer/stats/coerce.py
"""
Turn whatever a student plots from into plain float arrays.

Lists, tuples, ranges, numpy arrays, pandas objects and ``{label: value}``
dicts are all fair game; the drawing helpers call these functions first so that
they only ever deal with numpy.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Optional, Tuple, Union

from ..logutil import get_logger
from ..imports import numpy as np  # type: ignore
from ..imports import pandas as pd  # type: ignore

LOG = get_logger(__name__)

__all__ = ["DataLike", "coerce_vector", "coerce_pair", "coerce_matrix"]

DataLike = Union[Sequence[float], Mapping[str, float], "np.ndarray", "pd.Series", "pd.DataFrame"]  # type: ignore[name-defined]
ColumnSelector = Optional[Union[int, str]]


def _pandas_kind(obj: Any) -> Optional[str]:
	if not pd.is_available():
		return None
	if isinstance(obj, pd.DataFrame):
		return "frame"
	if isinstance(obj, pd.Series):
		return "series"
	return None


def _pick_column(frame: "pd.DataFrame", column: ColumnSelector) -> "pd.Series":
	if column is None:
		if frame.shape[1] != 1:
			raise ValueError(f"Pick one of the {frame.shape[1]} DataFrame columns with column=<name or index>.")
		return frame.iloc[:, 0]
	try:
		return frame.iloc[:, column] if isinstance(column, int) else frame[column]
	except (KeyError, IndexError) as exc:
		LOG.debug("Column %r not in %s", column, list(frame.columns))
		raise ValueError(f"DataFrame has no column {column!r}") from exc


def _as_float(values: Any, dtype: Any) -> "np.ndarray":
	try:
		arr = np.asarray(values, dtype=dtype)
	except (TypeError, ValueError) as exc:
		raise ValueError(f"Values are not numeric: {exc}") from exc
	if not np.issubdtype(arr.dtype, np.number):
		raise ValueError(f"Values are not numeric (dtype {arr.dtype})")
	return arr


def coerce_vector(data: DataLike, *, column: ColumnSelector = None, dtype: Any = float) -> "np.ndarray":
	"""
	Return ``data`` as a non-empty 1D numeric array.

	A DataFrame needs ``column`` (name or position) unless it has exactly one
	column. Dict values are taken in insertion order; their keys are ignored.

	:param data: Values to plot.
	:param column: Column of a DataFrame to use.
	:param dtype: Result dtype.
	:raises ValueError: For empty, non-numeric, multi-dimensional or unsupported input.
	"""
	kind = _pandas_kind(data)
	if kind == "frame":
		values: Any = _pick_column(data, column).to_numpy()
	elif kind == "series":
		values = data.to_numpy()
	elif isinstance(data, np.ndarray):
		if data.ndim != 1:
			raise ValueError(f"Need a 1D array, got shape {data.shape}")
		values = data
	elif isinstance(data, Mapping):
		values = list(data.values())
	elif isinstance(data, (Sequence, range)) and not isinstance(data, (str, bytes, bytearray)):
		values = list(data)
	else:
		raise ValueError(f"Cannot plot a {type(data).__name__}; pass a list, array, Series or DataFrame")

	arr = _as_float(values, dtype)
	if arr.size == 0:
		raise ValueError("Nothing to plot: the input is empty.")
	return arr


def coerce_pair(x: DataLike, y: DataLike) -> Tuple["np.ndarray", "np.ndarray"]:
	"""
	Coerce ``x`` and ``y`` and check that they pair up point by point.

	:raises ValueError: If the lengths differ.
	"""
	xs, ys = coerce_vector(x), coerce_vector(y)
	if xs.size != ys.size:
		raise ValueError(f"x has {xs.size} values but y has {ys.size}")
	return xs, ys


def coerce_matrix(data: Any) -> "np.ndarray":
	"""2D float array for heatmaps; a DataFrame keeps its row/column layout."""
	arr = _as_float(data.to_numpy() if _pandas_kind(data) == "frame" else data, float)
	if arr.ndim != 2:
		raise ValueError(f"Need a 2D table of values, got shape {arr.shape}")
	if arr.size == 0:
		raise ValueError("Nothing to plot: the table is empty.")
	return arr
