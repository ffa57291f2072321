# src/plotprimer/plot/canvas.py

from __future__ import annotations

from .decor import Decor
from .drawing import Drawing
from .layout import Layout
from .style import Style
from .ticks import Ticks


class Canvas(Decor, Drawing, Layout, Style, Ticks):
	"""
	Figure manager bundling the drawing, labeling, styling and export helpers.

	>>> with Canvas(figsize=(6, 4)) as canvas:
	...     canvas.plot_line([0, 1, 2], [0, 1, 4], label="x^2")
	...     canvas.set_plot_labels(title="Squares", xlabel="x", ylabel="y")
	...     canvas.set_legend()
	...     canvas.save_plot("squares.png", dpi=150)
	"""

	__slots__ = ()
