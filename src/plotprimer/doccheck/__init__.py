# src/plotprimer/doccheck/__init__.py
"""
Documentation maintenance: run the tutorial's snippets and lint their figures.

    from plotprimer.doccheck import check_document
    report = check_document(lint=True)
    print(report.summary())
"""

from .pitfalls import Finding, find_clipped_labels, find_legend_overlap, find_mixed_styles, lint_figure
from .report import CheckReport, SnippetResult
from .runner import check_document, check_markdown, run_snippets
from .snippets import Snippet, SnippetError, extract_snippets

__all__ = [
	"Finding",
	"find_clipped_labels",
	"find_legend_overlap",
	"find_mixed_styles",
	"lint_figure",
	"CheckReport",
	"SnippetResult",
	"check_document",
	"check_markdown",
	"run_snippets",
	"Snippet",
	"SnippetError",
	"extract_snippets",
]
