# src/plotprimer/plot/drawing.py

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Literal, Optional, Sequence, Tuple, Union

from ..imports import numpy as np  # type: ignore
from ..stats.coerce import DataLike, coerce_matrix, coerce_pair, coerce_vector
from ..stats.transforms import histogram_bins, moving_average
from .base import BasePlot

if TYPE_CHECKING:  # pragma: no cover - import for typing only
	from matplotlib.axes import Axes
	from matplotlib.image import AxesImage


def _style_kwargs(**values: Any) -> Dict[str, Any]:
	"""Drop ``None`` entries so matplotlib keeps its own defaults (and the color cycle)."""
	return {key: value for key, value in values.items() if value is not None}


class Drawing(BasePlot):
	"""Collection of drawing primitives used by :class:`~plotprimer.plot.Canvas`."""

	def draw_horizontal_line(
			self,
			y: float,
			*,
			color: str = "black",
			linewidth: float = 1.5,
			linestyle: str = "--",
			label: Optional[str] = None,
			alpha: float = 1.0,
			ax: Optional["Axes"] = None
	) -> "Axes":
		"""Add a horizontal reference line spanning the axes."""

		axes = self._axes_or_default(ax)
		axes.axhline(y=y, color=color, linewidth=linewidth, linestyle=linestyle, label=label, alpha=alpha)
		return axes

	def draw_vertical_line(
			self,
			x: float,
			*,
			color: str = "black",
			linewidth: float = 1.5,
			linestyle: str = "--",
			label: Optional[str] = None,
			alpha: float = 1.0,
			ax: Optional["Axes"] = None
	) -> "Axes":
		"""Add a vertical reference line spanning the axes."""

		axes = self._axes_or_default(ax)
		axes.axvline(x=x, color=color, linewidth=linewidth, linestyle=linestyle, label=label, alpha=alpha)
		return axes

	def plot_line(
			self,
			x: DataLike,
			y: DataLike,
			*,
			color: Optional[str] = None,
			linewidth: float = 2.0,
			linestyle: str = "-",
			marker: Optional[str] = None,
			label: Optional[str] = None,
			alpha: float = 1.0,
			zorder: Optional[float] = None,
			ax: Optional["Axes"] = None
	) -> "Axes":
		"""
		Draw ``y`` against ``x`` as a connected line.

		:param x: X-coordinates.
		:param y: Y-coordinates, same length as ``x``.
		:param color: Line color; ``None`` takes the next color of the property cycle.
		:param linewidth: Line width in points.
		:param linestyle: Matplotlib line style such as ``"-"``, ``"--"`` or ``":"``.
		:param marker: Optional marker drawn at every point.
		:param label: Legend label.
		:param alpha: Opacity.
		:param zorder: Drawing order.
		:param ax: Axes to draw on. Defaults to the primary axes.
		:return: The axes that contain the line.
		:raises ValueError: If ``x`` and ``y`` differ in length.
		"""

		xs, ys = coerce_pair(x, y)
		axes = self._axes_or_default(ax)
		axes.plot(xs, ys, **_style_kwargs(
			color=color, linewidth=linewidth, linestyle=linestyle, marker=marker,
			label=label, alpha=alpha, zorder=zorder
		))
		self._update_limits(xs, ys)
		return axes

	def plot_scatter(
			self,
			x: DataLike,
			y: DataLike,
			*,
			color: Optional[str] = None,
			values: Optional[DataLike] = None,
			cmap: str = "viridis",
			sizes: Union[float, Sequence[float]] = 20.0,
			marker: str = "o",
			label: Optional[str] = None,
			alpha: float = 1.0,
			edgecolor: Optional[str] = None,
			colorbar: bool = False,
			ax: Optional["Axes"] = None
	) -> "Axes":
		"""
		Draw unconnected markers, optionally colored by a third variable.

		:param values: Per-point values mapped through ``cmap``; mutually exclusive with ``color``.
		:param sizes: Marker area in points^2, scalar or per point.
		:param colorbar: Attach a colorbar when ``values`` are given.
		:raises ValueError: If both ``color`` and ``values`` are set or lengths differ.
		"""

		if color is not None and values is not None:
			raise ValueError("Pass either color or values, not both.")
		xs, ys = coerce_pair(x, y)
		axes = self._axes_or_default(ax)
		kwargs = _style_kwargs(s=sizes, marker=marker, label=label, alpha=alpha, edgecolors=edgecolor)
		if values is not None:
			cs = coerce_vector(values)
			if cs.size != xs.size:
				raise ValueError(f"values must match the number of points: {cs.size} != {xs.size}")
			kwargs.update(c=cs, cmap=cmap)
		elif color is not None:
			kwargs["color"] = color
		collection = axes.scatter(xs, ys, **kwargs)
		if colorbar and values is not None:
			self.fig.colorbar(collection, ax=axes)
		self._update_limits(xs, ys)
		return axes

	def plot_bar(
			self,
			categories: Sequence[Any],
			heights: DataLike,
			*,
			horizontal: bool = False,
			width: float = 0.8,
			bottom: Optional[DataLike] = None,
			color: Optional[str] = None,
			edgecolor: Optional[str] = None,
			label: Optional[str] = None,
			value_labels: bool = False,
			fmt: str = "{:g}",
			ax: Optional["Axes"] = None
	) -> "Axes":
		"""
		Draw a bar chart of ``heights`` over ``categories``.

		:param categories: Category labels or numeric positions.
		:param heights: Bar lengths.
		:param horizontal: Use :meth:`~matplotlib.axes.Axes.barh` instead of ``bar``.
		:param width: Bar thickness in data units.
		:param bottom: Baseline per bar, used to stack one series on another.
		:param value_labels: Write each bar's value at its end via ``Axes.bar_label``.
		:param fmt: Format string for ``value_labels``.
		:raises ValueError: If ``width`` is not positive or lengths differ.
		"""

		if width <= 0:
			raise ValueError(f"width must be positive; got {width}.")
		values = coerce_vector(heights)
		if len(categories) != values.size:
			raise ValueError(f"categories and heights must share identical lengths: {len(categories)} != {values.size}")
		base = None if bottom is None else coerce_vector(bottom)

		axes = self._axes_or_default(ax)
		kwargs = _style_kwargs(color=color, edgecolor=edgecolor, label=label)
		if horizontal:
			bars = axes.barh(list(categories), values, height=width, left=base, **kwargs)
		else:
			bars = axes.bar(list(categories), values, width=width, bottom=base, **kwargs)
		if value_labels:
			axes.bar_label(bars, fmt=fmt)
		top = values if base is None else values + base
		if horizontal:
			self._update_limits(top)
		else:
			self._update_limits(None, top)
		return axes

	def plot_histogram(
			self,
			data: DataLike,
			*,
			bins: Union[int, str, Sequence[float]] = "auto",
			value_range: Optional[Tuple[float, float]] = None,
			density: bool = False,
			cumulative: bool = False,
			histtype: Literal["bar", "step", "stepfilled"] = "bar",
			color: Optional[str] = None,
			edgecolor: Optional[str] = "white",
			alpha: float = 1.0,
			label: Optional[str] = None,
			ax: Optional["Axes"] = None
	) -> Tuple["Axes", "np.ndarray", "np.ndarray"]:
		"""
		Bin ``data`` and draw the distribution.

		:param bins: Bin count, numpy rule name or explicit edges.
		:param value_range: Optional ``(low, high)`` range to bin over.
		:param density: Normalize so the bar areas sum to one.
		:param cumulative: Draw the cumulative distribution.
		:param histtype: Matplotlib histogram type.
		:return: ``(axes, counts, edges)``.
		:raises ValueError: On empty data or invalid bins.
		"""

		values = coerce_vector(data)
		edges = histogram_bins(values, bins, value_range=value_range)
		axes = self._axes_or_default(ax)
		counts, edges, _patches = axes.hist(
			values[~np.isnan(values)],
			bins=edges,
			density=density,
			cumulative=cumulative,
			histtype=histtype,
			alpha=alpha,
			**_style_kwargs(color=color, edgecolor=edgecolor if histtype != "step" else None, label=label)
		)
		self._update_limits(edges, counts)
		return axes, np.asarray(counts), np.asarray(edges)

	def plot_heatmap(
			self,
			matrix: Any,
			*,
			cmap: str = "viridis",
			vmin: Optional[float] = None,
			vmax: Optional[float] = None,
			row_labels: Optional[Sequence[str]] = None,
			col_labels: Optional[Sequence[str]] = None,
			annotate: bool = False,
			fmt: str = "{:.2f}",
			colorbar: bool = True,
			colorbar_label: Optional[str] = None,
			ax: Optional["Axes"] = None
	) -> Tuple["Axes", "AxesImage"]:
		"""
		Show a 2D array as colored cells with :meth:`~matplotlib.axes.Axes.imshow`.

		:param matrix: 2D array-like or DataFrame (its index/columns become labels
			unless explicit labels are passed).
		:param row_labels: Tick labels for the rows.
		:param col_labels: Tick labels for the columns.
		:param annotate: Write each cell value into the cell, choosing black or white
			text by the cell's luminance.
		:param fmt: Format string used for annotations.
		:param colorbar: Attach a colorbar to the axes.
		:param colorbar_label: Label of the colorbar.
		:return: ``(axes, image)``.
		:raises ValueError: If labels do not match the matrix shape.
		"""

		data = coerce_matrix(matrix)
		if row_labels is None and hasattr(matrix, "index"):
			row_labels = [str(v) for v in matrix.index]
		if col_labels is None and hasattr(matrix, "columns"):
			col_labels = [str(v) for v in matrix.columns]
		nrows, ncols = data.shape
		if row_labels is not None and len(row_labels) != nrows:
			raise ValueError(f"row_labels has {len(row_labels)} entries for {nrows} rows.")
		if col_labels is not None and len(col_labels) != ncols:
			raise ValueError(f"col_labels has {len(col_labels)} entries for {ncols} columns.")

		axes = self._axes_or_default(ax)
		image = axes.imshow(data, cmap=cmap, vmin=vmin, vmax=vmax, aspect="auto", interpolation="nearest")
		if row_labels is not None:
			axes.set_yticks(range(nrows), labels=list(row_labels))
		if col_labels is not None:
			axes.set_xticks(range(ncols), labels=list(col_labels))

		if annotate:
			norm = image.norm
			for i in range(nrows):
				for j in range(ncols):
					value = data[i, j]
					if not np.isfinite(value):
						continue
					r, g, b, _a = image.cmap(norm(value))
					luminance = 0.299 * r + 0.587 * g + 0.114 * b
					axes.text(
						j, i, fmt.format(value), ha="center", va="center",
						color="black" if luminance > 0.5 else "white", fontsize=8
					)
		if colorbar:
			cbar = self.fig.colorbar(image, ax=axes)
			if colorbar_label:
				cbar.set_label(colorbar_label)
		return axes, image

	def plot_errorbar(
			self,
			x: DataLike,
			y: DataLike,
			yerr: DataLike,
			*,
			color: Optional[str] = None,
			capsize: float = 4.0,
			marker: str = "o",
			linestyle: str = "none",
			label: Optional[str] = None,
			ax: Optional["Axes"] = None
	) -> "Axes":
		"""
		Plot points with symmetric vertical error bars.

		:raises ValueError: If the input sequences differ in length or ``yerr`` is negative.
		"""

		xs, ys = coerce_pair(x, y)
		errs = coerce_vector(yerr)
		if errs.size != xs.size:
			raise ValueError(f"x, y, and yerr must share identical lengths: "
			                 f"x={xs.size}, y={ys.size}, yerr={errs.size}")
		if np.any(errs < 0):
			raise ValueError("yerr must be non-negative.")

		axes = self._axes_or_default(ax)
		axes.errorbar(
			xs, ys, yerr=errs, capsize=capsize, marker=marker, linestyle=linestyle,
			**_style_kwargs(color=color, label=label)
		)
		self._update_limits(xs, np.concatenate([ys - errs, ys + errs]))
		return axes

	def fill_between(
			self,
			x: DataLike,
			lower: DataLike,
			upper: DataLike,
			*,
			color: Optional[str] = None,
			alpha: float = 0.3,
			label: Optional[str] = None,
			ax: Optional["Axes"] = None
	) -> "Axes":
		"""Shade the band between ``lower`` and ``upper``, e.g. a confidence interval."""

		xs, lo = coerce_pair(x, lower)
		_, hi = coerce_pair(x, upper)
		axes = self._axes_or_default(ax)
		axes.fill_between(xs, lo, hi, alpha=alpha, linewidth=0, **_style_kwargs(color=color, label=label))
		self._update_limits(xs, np.concatenate([lo, hi]))
		return axes

	def plot_moving_average(
			self,
			x: DataLike,
			y: DataLike,
			*,
			window: int = 5,
			iterations: int = 1,
			show_raw: bool = True,
			color: Optional[str] = None,
			label: Optional[str] = None,
			ax: Optional["Axes"] = None
	) -> "Axes":
		"""
		Draw a smoothed version of ``y`` (and, faintly, the raw data underneath).

		The raw series is drawn as light markers without a label so the legend only
		lists the smoothed curve.
		"""

		xs, ys = coerce_pair(x, y)
		smoothed = moving_average(ys, window_size=window, iterations=iterations)
		axes = self._axes_or_default(ax)
		if show_raw:
			axes.plot(xs, ys, linestyle="none", marker=".", alpha=0.3, **_style_kwargs(color=color))
		axes.plot(xs, smoothed, linewidth=2.0, **_style_kwargs(color=color, label=label))
		self._update_limits(xs, ys if show_raw else smoothed)
		return axes
