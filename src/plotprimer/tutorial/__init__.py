# src/plotprimer/tutorial/__init__.py
"""The tutorial text (packaged Markdown sections) and its runnable examples."""

from .sections import (
	DEFAULT_TITLE,
	Section,
	build_document,
	get_section,
	load_sections,
	slugify_heading,
	write_document,
)

__all__ = [
	"DEFAULT_TITLE",
	"Section",
	"build_document",
	"get_section",
	"load_sections",
	"slugify_heading",
	"write_document",
]
