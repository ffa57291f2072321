# src/plotprimer/doccheck/snippets.py
"""Extract fenced code blocks from Markdown."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

__all__ = ["Snippet", "SnippetError", "extract_snippets"]

_OPEN_FENCE = re.compile(r"^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})\s*(?P<info>[^`]*?)\s*$")
_DIRECTIVE = re.compile(
	r"^\s*<!--\s*doccheck:\s*(?P<command>skip|nolint|raises\s+(?P<error>[A-Za-z_][\w.]*))\s*-->\s*$"
)


class SnippetError(ValueError):
	"""Raised for Markdown that cannot be split into code blocks (e.g. an unclosed fence)."""


@dataclass(frozen=True)
class Snippet:
	"""One fenced code block and the directives attached to it."""

	source: str
	lang: str
	line: int
	section: Optional[str] = None
	index: int = 0
	skip: bool = False
	nolint: bool = False
	expect_error: Optional[str] = None

	@property
	def name(self) -> str:
		return f"{self.section or 'document'}#{self.index}"


def _directives(lines: Sequence[str], fence_idx: int) -> List[re.Match]:
	"""Collect directive comments directly above the fence (blank lines allowed in between)."""
	found: List[re.Match] = []
	idx = fence_idx - 1
	while idx >= 0:
		text = lines[idx]
		if not text.strip():
			idx -= 1
			continue
		match = _DIRECTIVE.match(text)
		if match is None:
			break
		found.append(match)
		idx -= 1
	return found


def extract_snippets(
		markdown: str,
		*,
		section: Optional[str] = None,
		languages: Sequence[str] = ("python", "py"),
) -> List[Snippet]:
	"""
	Return the code blocks of ``markdown`` written in one of ``languages``.

	Both backtick and tilde fences are recognized; a closing fence must use the
	same character and be at least as long as the opening one. The language is
	the first word of the info string. Comments placed right above a fence tune
	how the block is checked:

	* ``<!-- doccheck: skip -->`` - do not run the block;
	* ``<!-- doccheck: nolint -->`` - run it but skip the pitfall checks;
	* ``<!-- doccheck: raises ValueError -->`` - the block must raise that exception.

	:param markdown: Markdown text.
	:param section: Section slug stored on each snippet.
	:param languages: Accepted language names (case-insensitive).
	:return: Snippets in document order; ``index`` counts only accepted blocks.
	:raises SnippetError: If a fence is never closed.
	"""
	wanted = {lang.lower() for lang in languages}
	lines = markdown.splitlines()
	snippets: List[Snippet] = []
	i = 0
	while i < len(lines):
		match = _OPEN_FENCE.match(lines[i])
		if match is None:
			i += 1
			continue

		fence = match.group("fence")
		indent = len(match.group("indent"))
		info = match.group("info")
		lang = info.split()[0].lower() if info else ""
		start = i
		body: List[str] = []
		i += 1
		closed = False
		while i < len(lines):
			stripped = lines[i].strip()
			if stripped.startswith(fence[0] * len(fence)) and set(stripped) == {fence[0]}:
				closed = True
				break
			body.append(lines[i][indent:] if lines[i][:indent].strip() == "" else lines[i])
			i += 1
		if not closed:
			raise SnippetError(f"Code fence opened on line {start + 1} is never closed.")
		i += 1

		if lang not in wanted:
			continue
		skip = nolint = False
		expect_error: Optional[str] = None
		for directive in _directives(lines, start):
			command = directive.group("command")
			if command == "skip":
				skip = True
			elif command == "nolint":
				nolint = True
			else:
				expect_error = directive.group("error")
		snippets.append(Snippet(
			source="\n".join(body) + "\n",
			lang=lang,
			line=start + 1,
			section=section,
			index=len(snippets),
			skip=skip,
			nolint=nolint,
			expect_error=expect_error,
		))
	return snippets
