# src/plotprimer/tutorial/examples.py
"""
Runnable versions of the tutorial figures, built with :class:`~plotprimer.plot.Canvas`.

Each function returns the finished :class:`matplotlib.figure.Figure` without
showing it, so the gallery command and the tests can save or inspect it.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Sequence, Tuple, Union

from ..imports import numpy as np  # type: ignore
from ..imports import pandas as pd  # type: ignore
from ..imports import pyplot as plt  # type: ignore
from ..logutil import get_logger
from ..plot import Canvas, export_many, use_style

if TYPE_CHECKING:  # pragma: no cover - import for typing only
	from matplotlib.figure import Figure

LOG = get_logger(__name__)

PathLike = Union[str, Path]
FigSize = Tuple[float, float]

SEED = 42


def _rng(seed: int = SEED):
	return np.random.default_rng(seed)


def first_plot(figsize: FigSize = (6, 4)) -> "Figure":
	canvas = Canvas(figsize)
	canvas.plot_line([1, 2, 3, 4], [1, 4, 9, 16], marker="o")
	canvas.set_plot_labels(title="My first plot", xlabel="x", ylabel="x squared")
	return canvas.fig


def line_plot(figsize: FigSize = (7, 4)) -> "Figure":
	x = np.linspace(0, 2 * np.pi, 200)
	canvas = Canvas(figsize)
	canvas.plot_line(x, np.sin(x), label="sin(x)")
	canvas.plot_line(x, np.cos(x), linestyle="--", label="cos(x)")
	canvas.draw_horizontal_line(0.0, linewidth=0.8, color="grey")
	canvas.set_plot_labels(title="Trigonometric functions", xlabel="angle [rad]", ylabel="value")
	canvas.set_axes_limits(xmin="data", xmax="data")
	canvas.set_legend(outside=True)
	return canvas.fig


def scatter_plot(figsize: FigSize = (6, 4.5)) -> "Figure":
	rng = _rng()
	height = rng.normal(170, 8, 150)
	weight = 0.9 * height - 90 + rng.normal(0, 6, 150)
	age = rng.integers(18, 70, 150)
	canvas = Canvas(figsize)
	canvas.plot_scatter(height, weight, values=age, sizes=25, alpha=0.8, colorbar=True)
	canvas.set_plot_labels(title="Height vs. weight", xlabel="height [cm]", ylabel="weight [kg]")
	return canvas.fig


def bar_chart(figsize: FigSize = (6, 4)) -> "Figure":
	canvas = Canvas(figsize)
	canvas.plot_bar(["Python", "R", "Julia", "MATLAB"], [48, 21, 7, 12], color="tab:blue", value_labels=True)
	canvas.set_plot_labels(title="Course language preference", ylabel="students")
	canvas.set_grid(axis="y")
	return canvas.fig


def histogram(figsize: FigSize = (6, 4)) -> "Figure":
	scores = _rng().normal(65, 12, 500)
	canvas = Canvas(figsize)
	_, counts, _ = canvas.plot_histogram(scores, bins=20)
	canvas.draw_vertical_line(float(np.mean(scores)), color="tab:red", label="mean")
	canvas.set_plot_labels(title=f"{int(counts.sum())} exam scores", xlabel="exam score", ylabel="students")
	canvas.set_legend()
	return canvas.fig


def heatmap(figsize: FigSize = (7, 4)) -> "Figure":
	days = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
	frame = pd.DataFrame(
		_rng().random((5, 7)),
		index=[f"week {i + 1}" for i in range(5)],
		columns=days,
	)
	canvas = Canvas(figsize)
	canvas.plot_heatmap(frame, cmap="magma", annotate=True, fmt="{:.1f}", colorbar_label="activity")
	canvas.set_plot_labels(title="Weekly activity")
	return canvas.fig


def subplot_grid(figsize: FigSize = (8, 6)) -> "Figure":
	x = np.linspace(0, 10, 100)
	canvas = Canvas(figsize, nrows=2, ncols=2)
	panels = [
		("sine", lambda ax: canvas.plot_line(x, np.sin(x), ax=ax)),
		("decay", lambda ax: canvas.plot_line(x, np.exp(-x / 3), ax=ax)),
		("square root", lambda ax: canvas.plot_scatter(x, np.sqrt(x), sizes=8, ax=ax)),
		("noise", lambda ax: canvas.plot_histogram(_rng(0).normal(size=300), bins=15, ax=ax)),
	]
	for ax, (title, draw) in zip(canvas.iter_axes(), panels):
		draw(ax)
		canvas.set_plot_labels(title=title, ax=ax)
	canvas.suptitle("Four panels")
	return canvas.fig


def styled_plot(figsize: FigSize = (6, 4), style: str = "ggplot") -> "Figure":
	x = np.linspace(0, 1, 30)
	with use_style(style):
		canvas = Canvas(figsize)
		canvas.plot_line(x, x, label="linear")
		canvas.plot_line(x, x ** 2, linestyle="--", label="quadratic")
		canvas.plot_line(x, x ** 3, linestyle=":", marker="o", label="cubic")
		canvas.set_plot_labels(title=f"{style} style", xlabel="x", ylabel="y")
		canvas.set_legend(position="upper left")
	return canvas.fig


def dual_axis_plot(figsize: FigSize = (7, 4)) -> "Figure":
	months = np.arange(1, 13)
	temperature = [1, 3, 7, 12, 16, 20, 22, 21, 17, 11, 6, 2]
	rainfall = [50, 40, 45, 55, 70, 80, 75, 70, 60, 65, 60, 55]
	canvas = Canvas(figsize)
	canvas.plot_line(months, temperature, color="tab:red")
	canvas.set_plot_labels(xlabel="month", ylabel="temperature [°C]")
	canvas.ax.yaxis.label.set_color("tab:red")
	right = canvas.twin_axis(ylabel="rainfall [mm]", color="tab:blue")
	canvas.plot_bar(list(months), rainfall, color="tab:blue", ax=right)
	right.set_zorder(canvas.ax.get_zorder() - 1)
	canvas.ax.patch.set_visible(False)
	canvas.set_custom_ticks(list(months), axis="x")
	return canvas.fig


def smoothed_series(figsize: FigSize = (7, 4)) -> "Figure":
	rng = _rng()
	x = np.linspace(0, 10, 150)
	signal = np.sin(x) + rng.normal(0, 0.3, x.size)
	spread = np.full(x.size, 0.3)
	canvas = Canvas(figsize)
	canvas.fill_between(x, np.sin(x) - spread, np.sin(x) + spread, label="true ±0.3")
	canvas.plot_moving_average(x, signal, window=9, iterations=2, label="moving average")
	canvas.annotate_point("peak", (np.pi / 2, 1.0))
	canvas.set_plot_labels(title="Smoothing noisy data", xlabel="time [s]", ylabel="signal")
	canvas.set_legend(position="lower left")
	return canvas.fig


EXAMPLES: Dict[str, Callable[..., "Figure"]] = {
	"first_plot": first_plot,
	"line_plot": line_plot,
	"scatter_plot": scatter_plot,
	"bar_chart": bar_chart,
	"histogram": histogram,
	"heatmap": heatmap,
	"subplot_grid": subplot_grid,
	"styled_plot": styled_plot,
	"dual_axis_plot": dual_axis_plot,
	"smoothed_series": smoothed_series,
}


def render_gallery(
		outdir: PathLike,
		*,
		formats: Sequence[str] = ("png",),
		dpi: int = 100,
		transparent: bool = False,
		figsize: Optional[FigSize] = None,
		names: Optional[Sequence[str]] = None
) -> Dict[str, List[Path]]:
	"""
	Render examples to ``outdir`` in every requested format.

	:param outdir: Target directory, created when missing.
	:param formats: Export formats, e.g. ``("png", "svg")``.
	:param dpi: Raster resolution.
	:param transparent: Save with a transparent background (ignored by JPEG).
	:param figsize: Size for every figure; each example keeps its own size when omitted.
	:param names: Subset of :data:`EXAMPLES` to render; all by default.
	:return: ``name -> written paths``.
	:raises KeyError: For unknown example names.
	"""
	selected = list(names) if names is not None else list(EXAMPLES)
	unknown = [name for name in selected if name not in EXAMPLES]
	if unknown:
		raise KeyError(f"Unknown example(s) {unknown}; known: {', '.join(EXAMPLES)}")

	target = Path(outdir)
	written: Dict[str, List[Path]] = {}
	for name in selected:
		fig = EXAMPLES[name](figsize) if figsize is not None else EXAMPLES[name]()
		try:
			written[name] = export_many(fig, target / name, formats, dpi=dpi, transparent=transparent)
		finally:
			plt.close(fig)
	LOG.info("Rendered %d example(s) into %s", len(written), target)
	return written
