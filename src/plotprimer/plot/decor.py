# src/plotprimer/plot/decor.py
"""Legend and annotation helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Sequence, Tuple, Union

from ..logutil import get_logger
from .base import AxisSelector, BasePlot, TickType

if TYPE_CHECKING:  # pragma: no cover - import for typing only
	from matplotlib.axes import Axes
	from matplotlib.colorbar import Colorbar
	from matplotlib.cm import ScalarMappable

LOG = get_logger(__name__)

_TEXT_POSITIONS = {
	"upper right": (0.95, 0.95),
	"upper left": (0.05, 0.95),
	"lower left": (0.05, 0.05),
	"lower right": (0.95, 0.05),
	"center": (0.5, 0.5),
	"center left": (0.05, 0.5),
	"center right": (0.95, 0.5),
	"lower center": (0.5, 0.05),
	"upper center": (0.5, 0.95),
}


class Decor(BasePlot):
	"""Helpers for grid lines, legends, colorbars and textual annotations."""

	def set_grid(
			self,
			*,
			color: str = "grey",
			alpha: float = 0.5,
			which: TickType = "major",
			linewidth: float = 0.8,
			linestyle: str = "--",
			axis: AxisSelector = "both",
			ax: Optional["Axes"] = None,
	) -> "Axes":
		"""
		Enable grid lines with custom styling, drawn beneath the data.

		:raises ValueError: If ``axis`` is not one of ``"x"``, ``"y"``, or ``"both"``.
		"""

		if axis not in {"x", "y", "both"}:
			raise ValueError(f"axis must be 'x', 'y', or 'both'; got '{axis}'.")

		axes = self._axes_or_default(ax)
		axes.set_axisbelow(True)
		axes.grid(True, which=which, axis=axis, color=color, alpha=alpha, linestyle=linestyle, linewidth=linewidth)
		return axes

	def set_legend(
			self,
			*,
			position: Union[str, Tuple[float, float]] = "best",
			outside: bool = False,
			alpha: float = 1.0,
			fontsize: float = 10.0,
			ncols: int = 1,
			title: Optional[str] = None,
			order: Optional[Sequence[int]] = None,
			exclude_labels: Optional[Sequence[str]] = None,
			ax: Optional["Axes"] = None,
	) -> Optional["Axes"]:
		"""
		Display a legend with additional formatting controls.

		:param position: Legend location key or explicit axes-relative coordinates.
		:param outside: Anchor the legend to the right of the axes so it can never
			cover data; the layout engine makes room for it.
		:param alpha: Transparency of the legend background.
		:param fontsize: Size of the legend text.
		:param ncols: Number of legend columns.
		:param title: Optional legend title.
		:param order: Optional reordering indices for legend entries; indices that
			match no entry are skipped with a warning.
		:param exclude_labels: Labels to omit from the legend.
		:param ax: Axes to query for handles. Defaults to the primary axes.
		:return: The axes when a legend is created, otherwise ``None`` if no
			handles are available or all entries were filtered out.
		"""

		axes = self._axes_or_default(ax)
		handles, labels = axes.get_legend_handles_labels()

		if order is not None:
			picked = [idx for idx in order if 0 <= idx < len(handles)]
			if len(picked) != len(order):
				LOG.warning(
					"Legend order %s skips indices outside 0..%d.", list(order), len(handles) - 1
				)
			handles = [handles[idx] for idx in picked]
			labels = [labels[idx] for idx in picked]
		if exclude_labels:
			pairs = [(h, lbl) for h, lbl in zip(handles, labels) if lbl not in exclude_labels]
			handles = [h for h, _ in pairs]
			labels = [lbl for _, lbl in pairs]
		if not handles:
			LOG.warning("Legend request ignored: no labeled artists present.")
			return None

		kwargs: dict = {"framealpha": alpha, "fontsize": fontsize, "ncols": ncols, "title": title}
		if outside:
			kwargs.update(loc="upper left", bbox_to_anchor=(1.02, 1.0), borderaxespad=0.0)
		else:
			kwargs["loc"] = position
		axes.legend(handles, labels, **kwargs)
		return axes

	def custom_text(
			self,
			text: str,
			*,
			position: Union[str, Tuple[float, float]] = "upper right",
			fontcolor: str = "black",
			fontsize: float = 10.0,
			style: Optional[str] = None,
			ha: Optional[str] = None,
			va: Optional[str] = None,
			boxed: bool = False,
			ax: Optional["Axes"] = None,
	) -> "Axes":
		"""
		Insert text in axes-relative coordinates (0..1), independent of the data.

		:param text: String rendered inside the axes.
		:param position: Named location or explicit ``(x, y)`` pair in axes coordinates.
		:param style: Case-insensitive keywords such as ``"bold"`` or ``"italic"``.
		:param ha: Horizontal alignment; derived from the named position when omitted.
		:param va: Vertical alignment; derived from the named position when omitted.
		:param boxed: Draw a rounded white box behind the text.
		:return: The axes containing the annotation.
		:raises ValueError: If a named ``position`` is unknown.
		"""

		axes = self._axes_or_default(ax)
		fontdict: dict = {"fontsize": fontsize, "color": fontcolor}
		if style:
			lowered = style.lower()
			if "bold" in lowered:
				fontdict["weight"] = "bold"
			if "italic" in lowered:
				fontdict["style"] = "italic"

		if isinstance(position, tuple):
			x, y = position
		else:
			if position not in _TEXT_POSITIONS:
				raise ValueError(f"Unknown text position {position!r}; choose from {sorted(_TEXT_POSITIONS)}.")
			x, y = _TEXT_POSITIONS[position]
		ha = ha or ("right" if x > 0.5 else "left" if x < 0.5 else "center")
		va = va or ("top" if y > 0.5 else "bottom" if y < 0.5 else "center")
		bbox = {"boxstyle": "round", "facecolor": "white", "alpha": 0.8} if boxed else None
		axes.text(x, y, text, transform=axes.transAxes, fontdict=fontdict, ha=ha, va=va, bbox=bbox)
		return axes

	def annotate_point(
			self,
			text: str,
			xy: Tuple[float, float],
			*,
			offset: Tuple[float, float] = (20.0, 20.0),
			arrow: bool = True,
			fontsize: float = 10.0,
			ax: Optional["Axes"] = None
	) -> "Axes":
		"""
		Label one data point, offsetting the text by ``offset`` points and drawing an arrow.
		"""

		axes = self._axes_or_default(ax)
		arrowprops: Optional[dict[str, Any]] = {"arrowstyle": "->"} if arrow else None
		axes.annotate(
			text, xy=xy, xytext=offset, textcoords="offset points",
			fontsize=fontsize, arrowprops=arrowprops
		)
		return axes

	def add_colorbar(
			self,
			mappable: "ScalarMappable",
			*,
			label: Optional[str] = None,
			orientation: str = "vertical",
			ax: Optional["Axes"] = None
	) -> "Colorbar":
		"""Attach a colorbar for ``mappable`` (an image or a scatter collection)."""

		axes = self._axes_or_default(ax)
		cbar = self.fig.colorbar(mappable, ax=axes, orientation=orientation)
		if label:
			cbar.set_label(label)
		return cbar
