"""
plotprimer: a student primer on plotting with matplotlib.

Top-level API keeps imports lazy:

    from plotprimer import build_document
    print(build_document())

    from plotprimer import Canvas  # imports matplotlib on first use
    with Canvas((6, 4)) as canvas:
        canvas.plot_line([1, 2, 3], [1, 4, 9])
        canvas.save_plot("squares.png")

    from plotprimer import check_document
    report = check_document(lint=True)

    # imports toolbox stays under its own namespace
    from plotprimer import imports
    imports.stack_versions()
"""

from importlib import import_module
from importlib.metadata import version, PackageNotFoundError as _PNF
from typing import TYPE_CHECKING

try:
	__version__ = version("plotprimer")
except _PNF:
	__version__ = "0.0.0+local"

__all__ = [
	"__version__",
	# main facades
	"Canvas", "PrimerConfig", "configure_logging",
	# namespaces
	"imports", "config", "logutil", "stats", "plot", "tutorial", "doccheck",
	# tutorial convenience (lazy)
	"Section", "load_sections", "get_section", "build_document", "write_document",
	"EXAMPLES", "render_gallery",
	# doccheck convenience (lazy)
	"check_document", "extract_snippets", "lint_figure",
	# plotting convenience (lazy)
	"export_figure", "use_style",
	# stats convenience (lazy)
	"moving_average",
]

# --- lazy maps ---------------------------------------------------------------
_NAMESPACES = {"imports", "config", "logutil", "stats", "plot", "tutorial", "doccheck"}

_TUTORIAL_EXPORTS = {"Section", "load_sections", "get_section", "build_document", "write_document"}
_EXAMPLE_EXPORTS = {"EXAMPLES", "render_gallery"}
_DOCCHECK_EXPORTS = {"check_document", "extract_snippets", "lint_figure"}
_PLOT_EXPORTS = {"Canvas", "export_figure", "use_style"}
_STATS_EXPORTS = {"moving_average"}


def __getattr__(name: str):
	# --- main facades ---
	if name == "PrimerConfig":
		return import_module("plotprimer.config").PrimerConfig
	if name == "configure_logging":
		return import_module("plotprimer.logutil").configure_logging

	# --- namespaces (lazy) ---
	if name in _NAMESPACES:
		return import_module(f"plotprimer.{name}")

	# --- lazy re-exports ---
	if name in _TUTORIAL_EXPORTS:
		return getattr(import_module("plotprimer.tutorial"), name)
	if name in _EXAMPLE_EXPORTS:
		return getattr(import_module("plotprimer.tutorial.examples"), name)
	if name in _DOCCHECK_EXPORTS:
		return getattr(import_module("plotprimer.doccheck"), name)
	if name in _PLOT_EXPORTS:
		return getattr(import_module("plotprimer.plot"), name)
	if name in _STATS_EXPORTS:
		return getattr(import_module("plotprimer.stats"), name)

	raise AttributeError(f"module 'plotprimer' has no attribute {name!r}")


# Help type-checkers without eager imports
if TYPE_CHECKING:
	from . import imports, config, logutil, stats, plot, tutorial, doccheck  # noqa: F401
	from .logutil import configure_logging  # noqa: F401
	from .config import PrimerConfig  # noqa: F401
	from .tutorial import Section, load_sections, get_section, build_document, write_document  # noqa: F401
	from .tutorial.examples import EXAMPLES, render_gallery  # noqa: F401
	from .doccheck import check_document, extract_snippets, lint_figure  # noqa: F401
	from .plot import Canvas, export_figure, use_style  # noqa: F401
	from .stats import moving_average  # noqa: F401
