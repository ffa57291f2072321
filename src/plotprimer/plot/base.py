# src/plotprimer/plot/base.py
"""Shared building blocks for :class:`~plotprimer.plot.Canvas`."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import TYPE_CHECKING, List, Literal, Optional, Sequence, Tuple, Type, Union

from ..imports import numpy as np  # type: ignore
from ..imports import pyplot as plt  # type: ignore
from ..logutil import get_logger
from . import export

if TYPE_CHECKING:  # pragma: no cover - only for static typing
	from matplotlib.axes import Axes

Axis = Literal["x", "y"]
AxisSelector = Literal["x", "y", "both"]
TickType = Literal["major", "minor", "both"]
LayoutEngine = Optional[Literal["constrained", "tight", "compressed"]]

LOG = get_logger(__name__)


@dataclass
class _DataLimits:
	"""Mutable holder for running min/max values along each axis."""

	x: List[Optional[float]]
	y: List[Optional[float]]

	@classmethod
	def empty(cls) -> "_DataLimits":
		return cls(x=[None, None], y=[None, None])

	def update(self, axis: str, values: Sequence[float]) -> None:
		arr = np.asarray(values, dtype=float).ravel()
		arr = arr[np.isfinite(arr)]
		if arr.size == 0:
			return
		minimum = float(arr.min())
		maximum = float(arr.max())
		limits = getattr(self, axis)
		limits[0] = minimum if limits[0] is None else min(limits[0], minimum)
		limits[1] = maximum if limits[1] is None else max(limits[1], maximum)


class BasePlot:
	"""
	Own one matplotlib figure (the canvas) and its grid of axes (plotting regions).

	Every drawing helper accepts ``ax=`` and falls back to the first axes, which is
	the object-oriented style the tutorial recommends over ``plt.*`` calls.
	"""

	def __init__(
			self,
			figsize: Tuple[float, float] = (9, 6),
			*,
			nrows: int = 1,
			ncols: int = 1,
			layout: LayoutEngine = "constrained",
			sharex: bool = False,
			sharey: bool = False
	) -> None:
		if nrows < 1 or ncols < 1:
			raise ValueError("Grid dimensions must be positive integers.")
		if min(figsize) <= 0:
			raise ValueError(f"figsize must be positive; got {figsize}.")

		self.figsize = figsize
		self.fig, axes = plt.subplots(
			nrows, ncols, figsize=figsize, layout=layout, sharex=sharex, sharey=sharey, squeeze=False
		)
		self.axes = axes
		self.ax: Optional["Axes"] = axes[0, 0]
		self._limits = _DataLimits.empty()
		LOG.debug("Initialized Canvas figsize=%s grid=%dx%d layout=%s", figsize, nrows, ncols, layout)

	def __enter__(self):
		return self

	def __exit__(
			self,
			exc_type: Optional[Type[BaseException]],
			exc_val: Optional[BaseException],
			exc_tb: Optional[TracebackType]
	) -> bool:
		self.close()
		return False

	# --- Helpers ---
	def _axes_or_default(self, ax: Optional["Axes"]) -> "Axes":
		"""Return ``ax`` when provided or fall back to the default axes."""
		if ax is not None:
			return ax
		if self.ax is None:
			raise RuntimeError("Default axes missing; the canvas was closed or never had a subplot.")
		return self.ax

	def _update_limits(self, x: Optional[Sequence[float]], y: Optional[Sequence[float]] = None) -> None:
		"""Store min/max boundaries for any axis that receives data."""
		for axis_name, values in (("x", x), ("y", y)):
			if values is None:
				continue
			self._limits.update(axis=axis_name, values=values)

	def _get_axis_limits(self, axis: Axis) -> Tuple[Optional[float], Optional[float]]:
		"""Return cached ``(min, max)`` values for ``axis``."""
		stored = getattr(self._limits, axis)
		return stored[0], stored[1]

	@staticmethod
	def _iter_axes(selector: AxisSelector) -> Sequence[Axis]:
		"""Return axis names that match ``selector``."""
		if selector == "both":
			return "x", "y"
		if selector not in {"x", "y"}:
			raise ValueError(f"axis must be 'x', 'y', or 'both'; got '{selector}'.")
		return (selector,)

	# --- Common utilities ---
	def axes_at(self, row: int, col: int = 0) -> "Axes":
		"""
		Return the axes at grid position ``(row, col)``.

		:raises IndexError: If the position is outside the grid.
		"""
		nrows, ncols = self.axes.shape
		if not (0 <= row < nrows and 0 <= col < ncols):
			raise IndexError(f"Grid position ({row}, {col}) outside a {nrows}x{ncols} grid.")
		return self.axes[row, col]

	def iter_axes(self) -> List["Axes"]:
		"""All axes of the grid in row-major order."""
		return list(self.axes.ravel())

	@staticmethod
	def add_inset(
			main_ax: "Axes",
			*,
			left: float,
			bottom: float,
			width: float,
			height: float
	) -> "Axes":
		"""
		Create inset axes anchored to ``main_ax``.

		:param main_ax: The parent axes that will host the inset axes.
		:param left: Relative coordinate in axes fraction.
		:param bottom: Relative coordinate in axes fraction.
		:param width: Relative size in axes fraction.
		:param height: Relative size in axes fraction.
		:return: Newly created inset axes.
		:raises ValueError: If any dimension is negative or exceeds the parent bounds.
		"""
		if min(left, bottom, width, height) < 0:
			raise ValueError("Inset coordinates must be non-negative.")
		if left + width > 1 or bottom + height > 1:
			raise ValueError("Inset extends beyond the parent axes area.")

		return main_ax.inset_axes((left, bottom, width, height))

	def show_plot(self) -> None:
		"""
		Display the figure.

		Under a non-interactive backend (Agg, used by tests and the snippet checker)
		:func:`matplotlib.pyplot.show` returns immediately.
		"""
		plt.show()

	def close(self) -> None:
		"""Release the figure from pyplot's figure manager."""
		if self.fig is not None:
			plt.close(self.fig)
			LOG.debug("Closed figure %s", id(self.fig))
		self.ax = None

	def save_plot(
			self,
			filename: Union[str, Path],
			*,
			dpi: int = 300,
			fig_format: Optional[str] = None,
			transparent: bool = False
	) -> Path:
		"""
		Persist the current figure to disk and return the resolved path.

		:param filename: Base filename or path; the extension is inferred from
			``fig_format`` when missing.
		:param dpi: Rendering resolution in dots per inch.
		:param fig_format: One of ``png``, ``pdf``, ``svg``, ``jpeg`` (``jpg``).
		:param transparent: Transparent background where the format allows it.
		:return: The written path.
		:raises ValueError: If ``dpi`` is not positive or the format is unsupported.
		"""
		return export.export_figure(
			self.fig, filename, dpi=dpi, fig_format=fig_format, transparent=transparent
		)

	def save_all(self, stem: Union[str, Path], formats: Sequence[str], *, dpi: int = 300) -> List[Path]:
		"""Save the figure once per format, e.g. a PNG for slides and a PDF for print."""
		return export.export_many(self.fig, stem, formats, dpi=dpi)
