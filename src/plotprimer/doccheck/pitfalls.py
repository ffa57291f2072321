# src/plotprimer/doccheck/pitfalls.py
"""Detect the common plotting mistakes the tutorial warns about."""

from __future__ import annotations

import ast
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Set

from ..imports import matplotlib as mpl  # type: ignore
from ..imports import numpy as np  # type: ignore
from ..logutil import get_logger

if TYPE_CHECKING:  # pragma: no cover - import for typing only
	from matplotlib.axes import Axes
	from matplotlib.figure import Figure

LOG = get_logger(__name__)

__all__ = [
	"Finding",
	"find_mixed_styles",
	"find_clipped_labels",
	"find_legend_overlap",
	"lint_figure",
]

# pyplot functions that act on the implicit "current" axes
STATE_FUNCTIONS = frozenset({
	"plot", "scatter", "bar", "barh", "hist", "imshow", "errorbar", "fill_between",
	"axhline", "axvline", "text", "annotate", "title", "xlabel", "ylabel",
	"xlim", "ylim", "xticks", "yticks", "xscale", "yscale", "legend", "grid", "colorbar",
})

AXES_METHODS = frozenset({
	"plot", "scatter", "bar", "barh", "hist", "imshow", "errorbar", "fill_between",
	"axhline", "axvline", "text", "annotate", "set_title", "set_xlabel", "set_ylabel",
	"set_xlim", "set_ylim", "set_xticks", "set_yticks", "set_xscale", "set_yscale",
	"legend", "grid",
})

# pyplot calls whose result is (or contains) axes
_AXES_FACTORIES = frozenset({"subplots", "subplot", "axes", "gca", "subplot_mosaic"})

_TOLERANCE_PX = 1.0


@dataclass(frozen=True)
class Finding:
	"""A detected pitfall."""

	code: str
	message: str
	location: str = ""

	def __str__(self) -> str:
		where = f" [{self.location}]" if self.location else ""
		return f"{self.code}: {self.message}{where}"

	def to_dict(self) -> Dict[str, str]:
		return {"code": self.code, "message": self.message, "location": self.location}


# --- Source checks ---
def _pyplot_aliases(tree: ast.AST) -> Set[str]:
	aliases: Set[str] = set()
	for node in ast.walk(tree):
		if isinstance(node, ast.Import):
			for alias in node.names:
				if alias.name == "matplotlib.pyplot" and alias.asname:
					aliases.add(alias.asname)
		elif isinstance(node, ast.ImportFrom) and node.module == "matplotlib":
			for alias in node.names:
				if alias.name == "pyplot":
					aliases.add(alias.asname or "pyplot")
	return aliases


def _target_names(target: ast.AST) -> List[str]:
	if isinstance(target, ast.Name):
		return [target.id]
	if isinstance(target, (ast.Tuple, ast.List)):
		return [name for elt in target.elts for name in _target_names(elt)]
	return []


def _axes_names(tree: ast.AST, aliases: Set[str]) -> Set[str]:
	"""Names bound to axes: results of ``plt.subplots()`` and friends, ``fig.add_subplot()`` and ``ax.twinx()``."""
	names: Set[str] = set()
	for node in ast.walk(tree):
		if not isinstance(node, ast.Assign) or not isinstance(node.value, ast.Call):
			continue
		func = node.value.func
		if not isinstance(func, ast.Attribute):
			continue
		owner = func.value.id if isinstance(func.value, ast.Name) else None
		if owner in aliases and func.attr in _AXES_FACTORIES:
			for target in node.targets:
				bound = _target_names(target)
				# fig, ax = plt.subplots(): the first name is the figure
				if func.attr in {"subplots", "subplot_mosaic"} and isinstance(target, (ast.Tuple, ast.List)):
					bound = bound[1:]
				names.update(bound)
		elif func.attr in {"add_subplot", "add_axes", "twinx", "twiny", "inset_axes"}:
			for target in node.targets:
				names.update(_target_names(target))
	return names


def _receiver_name(node: ast.AST) -> Optional[str]:
	"""``ax`` for ``ax.plot``, ``axs`` for ``axs[0, 1].plot``."""
	while isinstance(node, ast.Subscript):
		node = node.value
	return node.id if isinstance(node, ast.Name) else None


def find_mixed_styles(source: str, *, location: str = "") -> List[Finding]:
	"""
	Flag code that draws through both pyplot's implicit current axes and explicit axes objects.

	Loop variables iterating over axes containers are not tracked, so the check
	errs on the side of silence.

	:param source: Python source code.
	:param location: Label stored on the finding.
	:return: At most one finding; empty when the code does not parse.
	"""
	try:
		tree = ast.parse(source)
	except SyntaxError:
		return []

	aliases = _pyplot_aliases(tree)
	if not aliases:
		return []
	axes_names = _axes_names(tree, aliases)

	state_calls: List[ast.Call] = []
	oo_calls: List[ast.Call] = []
	for node in ast.walk(tree):
		if not isinstance(node, ast.Call) or not isinstance(node.func, ast.Attribute):
			continue
		receiver = _receiver_name(node.func.value)
		if receiver in aliases and node.func.attr in STATE_FUNCTIONS:
			state_calls.append(node)
		elif receiver in axes_names and node.func.attr in AXES_METHODS:
			oo_calls.append(node)

	if not (state_calls and oo_calls):
		return []
	first_state = min(state_calls, key=lambda n: n.lineno)
	first_oo = min(oo_calls, key=lambda n: n.lineno)
	message = (
		f"pyplot call '{first_state.func.attr}' on line {first_state.lineno} mixed with "
		f"axes method '{first_oo.func.attr}' on line {first_oo.lineno}; "
		"use the axes methods (e.g. ax.set_title) throughout"
	)
	return [Finding("mixed-styles", message, location)]


# --- Figure checks ---
def _renderer(fig: "Figure") -> Any:
	fig.canvas.draw()
	return fig.canvas.get_renderer()


def _drawn_tick_labels(axis: Any, coord: int) -> List[Any]:
	"""Tick labels inside the view interval; matplotlib keeps text on the others but never draws them."""
	low, high = sorted(axis.get_view_interval())
	span = (high - low) * 1e-9
	return [
		label for label in axis.get_ticklabels()
		if low - span <= label.get_position()[coord] <= high + span
	]


def _text_artists(axes: "Axes") -> List[Any]:
	candidates = [axes.title, axes.xaxis.label, axes.yaxis.label]
	candidates.extend(_drawn_tick_labels(axes.xaxis, 0))
	candidates.extend(_drawn_tick_labels(axes.yaxis, 1))
	return [t for t in candidates if t.get_visible() and t.get_text()]


def find_clipped_labels(fig: "Figure") -> List[Finding]:
	"""
	Report titles, axis labels and tick labels that extend past the figure edge.

	The figure is drawn once to get final text positions.
	"""
	renderer = _renderer(fig)
	bounds = fig.bbox
	findings: List[Finding] = []
	for index, axes in enumerate(fig.axes):
		if not axes.get_visible() or not axes.axison:
			continue
		for text in _text_artists(axes):
			box = text.get_window_extent(renderer)
			if (
					box.x0 < bounds.x0 - _TOLERANCE_PX
					or box.y0 < bounds.y0 - _TOLERANCE_PX
					or box.x1 > bounds.x1 + _TOLERANCE_PX
					or box.y1 > bounds.y1 + _TOLERANCE_PX
			):
				findings.append(Finding(
					"clipped-label",
					f"text {text.get_text()!r} extends outside the figure",
					f"axes {index}",
				))
	return findings


def _display_points(axes: "Axes") -> "np.ndarray":
	chunks = []
	for line in axes.get_lines():
		xy = np.asarray(line.get_xydata(), dtype=float)
		if xy.size:
			chunks.append(line.get_transform().transform(xy))
	for collection in axes.collections:
		offsets = np.asarray(collection.get_offsets(), dtype=float)
		if offsets.ndim == 2 and offsets.shape[0] and offsets.shape[1] == 2:
			chunks.append(collection.get_offset_transform().transform(offsets))
	if not chunks:
		return np.empty((0, 2))
	points = np.vstack(chunks)
	points = points[np.all(np.isfinite(points), axis=1)]
	# data clipped away by the axes limits is not visible under an outside legend
	area = axes.bbox
	visible = (
		(points[:, 0] >= area.x0) & (points[:, 0] <= area.x1)
		& (points[:, 1] >= area.y0) & (points[:, 1] <= area.y1)
	)
	return points[visible]


def _visible_patch_extents(axes: "Axes", renderer: Any) -> List[Any]:
	# bars cut away by the axes limits are not drawn, so they cannot sit under the legend
	extents = []
	for patch in axes.patches:
		shown = mpl.transforms.Bbox.intersection(patch.get_window_extent(renderer), axes.bbox)
		if shown is not None and shown.width > 0 and shown.height > 0:
			extents.append(shown)
	return extents


def find_legend_overlap(axes: "Axes", *, location: str = "") -> List[Finding]:
	"""
	Report a legend that covers plotted data points or bars of ``axes``.

	:return: One finding naming how many points/bars lie under the legend, or nothing.
	"""
	legend = axes.get_legend()
	if legend is None or not legend.get_visible():
		return []
	renderer = _renderer(axes.figure)
	box = legend.get_window_extent(renderer)

	points = _display_points(axes)
	inside = int(np.count_nonzero(
		(points[:, 0] >= box.x0) & (points[:, 0] <= box.x1)
		& (points[:, 1] >= box.y0) & (points[:, 1] <= box.y1)
	)) if points.size else 0
	bars = sum(1 for shown in _visible_patch_extents(axes, renderer) if box.overlaps(shown))

	if not inside and not bars:
		return []
	parts = []
	if inside:
		parts.append(f"{inside} data point(s)")
	if bars:
		parts.append(f"{bars} bar(s)")
	return [Finding(
		"legend-overlap",
		f"legend covers {' and '.join(parts)}; try loc='upper left' with bbox_to_anchor=(1.02, 1)",
		location,
	)]


def lint_figure(fig: "Figure") -> List[Finding]:
	"""Run every figure check on ``fig``."""
	findings = find_clipped_labels(fig)
	for index, axes in enumerate(fig.axes):
		findings.extend(find_legend_overlap(axes, location=f"axes {index}"))
	LOG.debug("lint_figure: %d finding(s)", len(findings))
	return findings
