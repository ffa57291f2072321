# src/plotprimer/plot/layout.py
"""Axes labeling, limits and multi-panel layout helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Optional, Tuple, Union

from .base import Axis, AxisSelector, BasePlot

if TYPE_CHECKING:  # pragma: no cover - import for static analysis
	from matplotlib.axes import Axes


class Layout(BasePlot):
	"""Methods adjusting titles, axis labels, limits, and panel arrangement."""

	def set_plot_labels(
			self,
			*,
			ax: Optional["Axes"] = None,
			title: Optional[str] = None,
			xlabel: Optional[str] = None,
			ylabel: Optional[str] = None,
			title_loc: Literal["center", "left", "right"] = "center",
			labelpad: Optional[float] = None
	) -> "Axes":
		"""
		Assign a title and axis labels in one call.

		:param ax: Axes instance to modify.
			When ``None`` the default plot axes are used.
		:param title: The plot title.
		:param xlabel: X-label of the plot; include units, e.g. ``"time [s]"``.
		:param ylabel: Y-label of the plot.
		:param title_loc: Title alignment.
		:param labelpad: Spacing between the tick labels and the axis labels, in points.
		:return: The axes that received the updates.
		"""

		axes = self._axes_or_default(ax)

		if title:
			axes.set_title(title, loc=title_loc)
		if xlabel:
			axes.set_xlabel(xlabel, labelpad=labelpad)
		if ylabel:
			axes.set_ylabel(ylabel, labelpad=labelpad)
		return axes

	def suptitle(self, text: str, *, size: float = 14.0) -> None:
		"""Title for the whole canvas, above every panel."""
		self.fig.suptitle(text, fontsize=size)

	def _bound(self, axis: Axis, side: int, value: Optional[Union[float, str]], current: Tuple[float, float]) -> float:
		if value is None:
			return current[side]
		if value == "data":
			plotted = self._get_axis_limits(axis)[side]
			if plotted is None:
				raise ValueError(f"Nothing has been plotted along {axis}; cannot snap to 'data'.")
			return plotted
		if isinstance(value, str):
			raise ValueError(f"{axis}-limit must be a number, None or 'data'; got {value!r}.")
		return float(value)

	def set_axes_limits(
			self,
			*,
			ax: Optional["Axes"] = None,
			xmin: Optional[Union[float, str]] = None,
			xmax: Optional[Union[float, str]] = None,
			ymin: Optional[Union[float, str]] = None,
			ymax: Optional[Union[float, str]] = None
	) -> "Axes":
		"""
		Fix the visible range of both axes.

		Each bound accepts a number, ``None`` (keep the current value) or ``"data"``
		(snap to the smallest/largest value plotted through this canvas).

		:raises ValueError: When ``"data"`` is asked for an axis with nothing plotted,
			or a bound is neither numeric nor ``"data"``.
		"""

		axes = self._axes_or_default(ax)
		xlim, ylim = axes.get_xlim(), axes.get_ylim()
		axes.set_xlim(self._bound("x", 0, xmin, xlim), self._bound("x", 1, xmax, xlim))
		axes.set_ylim(self._bound("y", 0, ymin, ylim), self._bound("y", 1, ymax, ylim))
		return axes

	def set_title_size(self, size: float = 14.0, *, ax: Optional["Axes"] = None) -> "Axes":
		"""Resize the title font."""

		axes = self._axes_or_default(ax)
		axes.title.set_fontsize(size)
		return axes

	def set_axis_label_size(
			self,
			size: float = 12.0,
			*,
			axis: AxisSelector = "both",
			ax: Optional["Axes"] = None
	) -> "Axes":
		"""
		Change the font size for one or both axis labels.

		:param size: Font size to the selected labels.
		:param axis: ``"x"``, ``"y"`` or ``"both"``.
		:param ax: Axes to modify; defaults to the instance axes.
		:return: The axes with resized labels.
		"""

		axes = self._axes_or_default(ax)
		for target in self._iter_axes(axis):
			getattr(axes, f"{target}axis").label.set_size(size)
		return axes

	def twin_axis(
			self,
			*,
			ylabel: Optional[str] = None,
			color: Optional[str] = None,
			ax: Optional["Axes"] = None
	) -> "Axes":
		"""
		Create a second y-axis sharing the x-axis of ``ax``.

		:param ylabel: Label of the new right-hand axis.
		:param color: Color applied to the new axis label and ticks, matching its data.
		:return: The new axes.
		"""

		axes = self._axes_or_default(ax)
		twin = axes.twinx()
		if ylabel:
			twin.set_ylabel(ylabel, color=color)
		if color:
			twin.tick_params(axis="y", colors=color)
		return twin

	def hide_unused(self) -> int:
		"""
		Hide grid panels that received no artists (e.g. 5 plots on a 2x3 grid).

		:return: Number of panels hidden.
		"""
		hidden = 0
		for axes in self.iter_axes():
			if not axes.has_data() and not axes.texts:
				axes.set_axis_off()
				hidden += 1
		return hidden
