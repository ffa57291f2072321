# src/plotprimer/plot/style.py
"""Color schemes, style sheets and rcParams overrides."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator, List, Optional, Sequence, Union

from ..imports import matplotlib as mpl  # type: ignore
from ..imports import pyplot as plt  # type: ignore
from ..logutil import get_logger
from .base import BasePlot

if TYPE_CHECKING:  # pragma: no cover - import for typing only
	from matplotlib.axes import Axes

LOG = get_logger(__name__)


def available_styles() -> List[str]:
	"""Style sheet names accepted by :func:`use_style`, sorted."""
	return sorted(plt.style.available) + ["default"]


def _check_styles(names: Sequence[str]) -> None:
	known = set(available_styles())
	unknown = [name for name in names if name not in known]
	if unknown:
		raise ValueError(f"Unknown style sheet(s) {unknown}; see available_styles().")


@contextmanager
def use_style(style: Union[str, Sequence[str]]) -> Iterator[None]:
	"""
	Apply one or more style sheets for the duration of a ``with`` block.

	Only figures *created* inside the block pick the style up.

	:raises ValueError: For names not in ``matplotlib.style.available``.
	"""
	names = [style] if isinstance(style, str) else list(style)
	_check_styles(names)
	with plt.style.context(names):
		LOG.debug("Using style sheet(s) %s", names)
		yield


@contextmanager
def rc_overrides(**overrides: Any) -> Iterator[None]:
	"""
	Temporarily set rcParams; dots in names are written as double underscores.

	Example: ``rc_overrides(font__size=12, axes__grid=True)``.

	:raises KeyError: For names matplotlib does not know.
	"""
	params = {key.replace("__", "."): value for key, value in overrides.items()}
	unknown = [key for key in params if key not in mpl.rcParams]
	if unknown:
		raise KeyError(f"Unknown rcParams: {unknown}")
	with mpl.rc_context(params):
		yield


def colors_from_cycle(n: int) -> List[str]:
	"""Return the first ``n`` colors of the active property cycle, wrapping around."""
	if n < 0:
		raise ValueError("n must be non-negative.")
	cycle = mpl.rcParams["axes.prop_cycle"].by_key().get("color", ["C0"])
	return [cycle[i % len(cycle)] for i in range(n)]


class Style(BasePlot):
	"""Per-canvas color scheme tweaks."""

	def toggle_dark_mode(self, dark_mode: bool = True, *, ax: Optional["Axes"] = None) -> "Axes":
		"""
		Switch between light and dark color schemes.

		:param dark_mode: When ``True`` enable a dark background with light foreground
			colors; otherwise revert to light mode.
		:param ax: Axes to update; defaults to the primary axes.
		:return: The axes after color adjustments.
		"""

		axes = self._axes_or_default(ax)
		background_color, element_color = ("black", "white") if dark_mode else ("white", "black")
		axes.set_facecolor(background_color)
		axes.figure.set_facecolor(background_color)
		axes.tick_params(colors=element_color, which="both")
		for spine in axes.spines.values():
			spine.set_edgecolor(element_color)
		axes.xaxis.label.set_color(element_color)
		axes.yaxis.label.set_color(element_color)
		axes.title.set_color(element_color)
		legend = axes.get_legend()
		if legend is not None:
			legend.get_frame().set_facecolor(background_color)
			for text in legend.get_texts():
				text.set_color(element_color)
		return axes

	def set_axes_linewidth(self, linewidth: float = 1.0, *, ax: Optional["Axes"] = None) -> "Axes":
		"""Update the thickness of the axes' spines."""

		axes = self._axes_or_default(ax)
		for spine in axes.spines.values():
			spine.set_linewidth(linewidth)
		return axes

	def despine(self, *, ax: Optional["Axes"] = None) -> "Axes":
		"""Hide the top and right spines, a common look for publication figures."""

		axes = self._axes_or_default(ax)
		axes.spines["top"].set_visible(False)
		axes.spines["right"].set_visible(False)
		return axes
