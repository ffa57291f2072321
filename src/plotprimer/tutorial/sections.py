# src/plotprimer/tutorial/sections.py
"""Load the tutorial sections and assemble them into one Markdown document."""

from __future__ import annotations

import re
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..logutil import get_logger

LOG = get_logger(__name__)

PathLike = Union[str, Path]

DEFAULT_TITLE = "Plotting with Matplotlib: A Student Primer"

_CONTENT_PACKAGE = "plotprimer.tutorial.content"
_FILENAME_RE = re.compile(r"^(?P<order>\d+)_(?P<name>[a-z0-9_]+)\.md$")
_HEADING_RE = re.compile(r"^##\s+(?P<title>.+?)\s*#*\s*$", re.MULTILINE)


@dataclass(frozen=True)
class Section:
	"""One chapter of the tutorial, backed by a packaged Markdown file."""

	slug: str
	title: str
	order: int
	body: str
	filename: str

	@property
	def anchor(self) -> str:
		return slugify_heading(self.title)


def slugify_heading(text: str) -> str:
	"""
	Return the anchor GitHub generates for a heading.

	Lowercase, punctuation other than ``-``/``_`` removed, spaces turned into hyphens.

	>>> slugify_heading("Layout: several plots in one figure")
	'layout-several-plots-in-one-figure'
	"""
	lowered = text.strip().lower()
	cleaned = re.sub(r"[^\w\- ]", "", lowered)
	return cleaned.replace(" ", "-")


def _parse_section(filename: str, body: str) -> Section:
	match = _FILENAME_RE.match(filename)
	if match is None:
		raise ValueError(f"Section file {filename!r} must be named NN_name.md")
	heading = _HEADING_RE.search(body)
	if heading is None:
		raise ValueError(f"Section file {filename!r} has no '## ' heading.")
	return Section(
		slug=match.group("name").replace("_", "-"),
		title=heading.group("title"),
		order=int(match.group("order")),
		body=body.strip() + "\n",
		filename=filename,
	)


def load_sections(directory: Optional[PathLike] = None) -> List[Section]:
	"""
	Read every ``NN_name.md`` file and return the sections in reading order.

	:param directory: Alternative content directory; defaults to the packaged content.
	:return: Sections sorted by their numeric prefix.
	:raises ValueError: On badly named files, missing headings or duplicate order numbers.
	"""
	if directory is None:
		root = resources.files(_CONTENT_PACKAGE)
		entries = [(entry.name, entry.read_text(encoding="utf-8")) for entry in root.iterdir() if entry.name.endswith(".md")]
	else:
		path = Path(directory)
		if not path.is_dir():
			raise FileNotFoundError(f"Content directory not found: {path}")
		entries = [(p.name, p.read_text(encoding="utf-8")) for p in path.glob("*.md")]

	sections = sorted((_parse_section(name, text) for name, text in entries), key=lambda s: s.order)
	orders = [s.order for s in sections]
	if len(set(orders)) != len(orders):
		raise ValueError(f"Duplicate section numbers in {sorted(orders)}")
	LOG.debug("Loaded %d tutorial section(s)", len(sections))
	return sections


def get_section(slug: str, sections: Optional[Sequence[Section]] = None) -> Section:
	"""
	Return the section called ``slug``.

	:raises KeyError: Listing the known slugs when ``slug`` is unknown.
	"""
	pool = list(sections) if sections is not None else load_sections()
	for section in pool:
		if section.slug == slug:
			return section
	raise KeyError(f"Unknown section {slug!r}; known: {', '.join(s.slug for s in pool)}")


def build_document(
		sections: Optional[Sequence[Section]] = None,
		*,
		title: str = DEFAULT_TITLE,
		toc: bool = True
) -> str:
	"""
	Assemble the tutorial into one Markdown string.

	The output is deterministic: a level-1 title, an optional table of contents
	linking to each section heading, then the section bodies in order.
	"""
	chosen = list(sections) if sections is not None else load_sections()
	parts = [f"# {title}\n"]
	if toc:
		lines = [f"{i}. [{s.title}](#{s.anchor})" for i, s in enumerate(chosen, start=1)]
		parts.append("## Contents\n\n" + "\n".join(lines) + "\n")
	parts.extend(s.body for s in chosen)
	return "\n".join(parts)


def write_document(
		path: PathLike,
		sections: Optional[Sequence[Section]] = None,
		*,
		title: str = DEFAULT_TITLE,
		toc: bool = True
) -> Path:
	"""Write :func:`build_document` output to ``path`` (UTF-8) and return the resolved path."""
	target = Path(path)
	target.parent.mkdir(parents=True, exist_ok=True)
	target.write_text(build_document(sections, title=title, toc=toc), encoding="utf-8")
	resolved = target.resolve()
	LOG.info("Wrote tutorial to %s", resolved)
	return resolved
