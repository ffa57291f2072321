# src/plotprimer/plot/__init__.py
"""Object-oriented helpers over matplotlib figures and axes."""

from .canvas import Canvas
from .export import (
	SUPPORTED_FORMATS,
	ExportInfo,
	export_figure,
	export_many,
	inspect_export,
	normalize_format,
	resolve_export_path,
)
from .style import available_styles, colors_from_cycle, rc_overrides, use_style

__all__ = [
	"Canvas",
	"SUPPORTED_FORMATS",
	"ExportInfo",
	"export_figure",
	"export_many",
	"inspect_export",
	"normalize_format",
	"resolve_export_path",
	"available_styles",
	"colors_from_cycle",
	"rc_overrides",
	"use_style",
]
