# src/plotprimer/plot/ticks.py
"""Tick placement, tick labels and axis scales."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from ..imports import matplotlib as mpl  # type: ignore

from .base import Axis, AxisSelector, BasePlot

if TYPE_CHECKING:  # pragma: no cover - import for static typing only
	from matplotlib.axes import Axes


class Ticks(BasePlot):
	"""Operations for tick placement, tick labels and axis scaling."""

	def set_minor_ticks(
			self,
			num_minor_ticks: int = 1,
			*,
			axis: AxisSelector = "both",
			ax: Optional["Axes"] = None
	) -> "Axes":
		"""Place ``num_minor_ticks`` minor ticks between major ticks (linear or log axes)."""

		if num_minor_ticks < 1:
			raise ValueError(f"Need at least one minor tick between majors, got {num_minor_ticks}.")

		axes = self._axes_or_default(ax)
		for name in self._iter_axes(axis):
			target = getattr(axes, f"{name}axis")
			log = target.get_scale() == "log"
			target.set_minor_locator(
				mpl.ticker.LogLocator(base=10, subs="auto") if log else mpl.ticker.AutoMinorLocator(num_minor_ticks + 1)
			)
		return axes

	def set_custom_ticks(
			self,
			tick_values: Sequence[float],
			*,
			labels: Optional[Sequence[str]] = None,
			axis: Axis = "x",
			ax: Optional["Axes"] = None
	) -> "Axes":
		"""
		Put major ticks exactly at ``tick_values``, optionally with text labels.

		:raises ValueError: If ``labels`` is given with a different length.
		"""

		if labels is not None and len(labels) != len(tick_values):
			raise ValueError(f"Got {len(labels)} labels for {len(tick_values)} ticks.")
		axes = self._axes_or_default(ax)
		getattr(axes, f"set_{axis}ticks")(list(tick_values), labels=None if labels is None else list(labels))
		return axes

	def set_custom_tick_labels(
			self,
			tick_labels: Sequence[str],
			*,
			axis: Axis = "x",
			ax: Optional["Axes"] = None
	) -> "Axes":
		"""
		Replace the text of the currently visible ticks.

		:raises ValueError: If the number of labels differs from the number of visible ticks.
		"""

		axes = self._axes_or_default(ax)
		low, high = sorted(getattr(axes, f"get_{axis}lim")())
		shown = [tick for tick in getattr(axes, f"get_{axis}ticks")() if low <= tick <= high]
		if len(tick_labels) != len(shown):
			raise ValueError(f"{len(tick_labels)} labels for {len(shown)} visible {axis}-ticks.")
		getattr(axes, f"set_{axis}ticks")(shown, labels=list(tick_labels))
		return axes

	def rotate_tick_labels(
			self,
			angle: float = 45.0,
			*,
			axis: Axis = "x",
			ax: Optional["Axes"] = None
	) -> "Axes":
		"""Rotate tick labels so long category names do not overlap; right-aligned for x."""

		axes = self._axes_or_default(ax)
		axes.tick_params(axis=axis, labelrotation=angle)
		if axis == "x" and angle:
			for label in axes.get_xticklabels():
				label.set_horizontalalignment("right")
				label.set_rotation_mode("anchor")
		return axes

	def set_log_scale(
			self,
			*,
			log_x: bool = False,
			log_y: bool = False,
			ax: Optional["Axes"] = None
	) -> "Axes":
		"""Log-scale the x and/or y axis; data must be positive on a log axis."""

		axes = self._axes_or_default(ax)
		if log_x:
			axes.set_xscale("log")
		if log_y:
			axes.set_yscale("log")
		return axes

	def set_tick_label_size(
			self,
			size: float = 10.0,
			*,
			axis: AxisSelector = "both",
			ax: Optional["Axes"] = None
	) -> "Axes":
		"""Resize tick label fonts."""

		axes = self._axes_or_default(ax)
		for target in self._iter_axes(axis):
			axes.tick_params(axis=target, which="both", labelsize=size)
		return axes
