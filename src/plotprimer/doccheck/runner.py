# src/plotprimer/doccheck/runner.py
"""Execute tutorial snippets against the installed matplotlib."""

from __future__ import annotations

import contextlib
import io
import os
import tempfile
import time
import warnings
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Set, Union

from ..imports import matplotlib as mpl  # type: ignore
from ..imports import pyplot as plt  # type: ignore
from ..logutil import get_logger
from ..tutorial.sections import Section, load_sections
from . import pitfalls
from .report import CheckReport, SnippetResult
from .snippets import Snippet, extract_snippets

LOG = get_logger(__name__)

PathLike = Union[str, Path]

__all__ = ["run_snippets", "check_markdown", "check_document"]


@contextlib.contextmanager
def _working_directory(path: Path) -> Iterator[Path]:
	previous = os.getcwd()
	os.chdir(path)
	try:
		yield path
	finally:
		os.chdir(previous)


@contextlib.contextmanager
def _scratch_directory(workdir: Optional[PathLike]) -> Iterator[Path]:
	if workdir is not None:
		path = Path(workdir)
		path.mkdir(parents=True, exist_ok=True)
		yield path.resolve()
		return
	with tempfile.TemporaryDirectory(prefix="plotprimer-") as tmp:
		yield Path(tmp)


def _list_files(root: Path) -> Set[str]:
	return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()}


def _error_matches(exc: BaseException, expected: str) -> bool:
	wanted = expected.rsplit(".", 1)[-1]
	return any(cls.__name__ == wanted for cls in type(exc).__mro__)


def _run_one(snippet: Snippet, namespace: Dict[str, Any], root: Path, *, lint: bool, close_figures: bool) -> SnippetResult:
	if snippet.skip:
		LOG.debug("%s skipped", snippet.name)
		return SnippetResult(snippet=snippet, ok=True, skipped=True)

	files_before = _list_files(root)
	figures_before = set(plt.get_fignums())
	stdout = io.StringIO()
	error: Optional[BaseException] = None

	started = time.perf_counter()
	with warnings.catch_warnings(record=True) as caught, contextlib.redirect_stdout(stdout):
		warnings.simplefilter("always")
		try:
			code = compile(snippet.source, f"<{snippet.name}>", "exec")
			exec(code, namespace)
		except Exception as exc:  # the snippet's failure is the result, not ours
			error = exc
	duration = time.perf_counter() - started

	new_figures = [num for num in plt.get_fignums() if num not in figures_before]
	result = SnippetResult(
		snippet=snippet,
		ok=True,
		duration=duration,
		figures=len(new_figures),
		files=sorted(_list_files(root) - files_before),
		output=stdout.getvalue(),
		warnings=[f"{w.category.__name__}: {w.message}" for w in caught],
	)

	if snippet.expect_error is not None:
		if error is None:
			result.ok = False
			result.error = "MissingError"
			result.message = f"expected {snippet.expect_error} to be raised"
		elif not _error_matches(error, snippet.expect_error):
			result.ok = False
			result.error = type(error).__name__
			result.message = f"{error} (expected {snippet.expect_error})"
	elif error is not None:
		result.ok = False
		result.error = type(error).__name__
		result.message = str(error)

	if lint and result.ok and not snippet.nolint:
		result.findings.extend(pitfalls.find_mixed_styles(snippet.source, location=snippet.name))
		for num in new_figures:
			result.findings.extend(pitfalls.lint_figure(plt.figure(num)))

	if close_figures:
		for num in new_figures:
			plt.close(num)

	LOG.debug("%s %s in %.3fs (%d figure(s))", snippet.name, result.status, duration, result.figures)
	return result


def run_snippets(
		snippets: Sequence[Snippet],
		*,
		workdir: Optional[PathLike] = None,
		shared_namespace: bool = True,
		backend: str = "Agg",
		close_figures: bool = True,
		fail_fast: bool = False,
		lint: bool = False
) -> CheckReport:
	"""
	Run ``snippets`` in order and collect one :class:`SnippetResult` per snippet.

	Snippets from the same section share a namespace when ``shared_namespace`` is
	set, because a reader types them one after another. Exceptions raised by a
	snippet are recorded and never propagated.

	:param snippets: Snippets to run, usually from :func:`extract_snippets`.
	:param workdir: Directory the snippets run in (files they save land here);
		a temporary directory is used and removed when omitted.
	:param shared_namespace: Share globals between snippets of one section.
	:param backend: Matplotlib backend to run under; switching closes open figures.
	:param close_figures: Close figures each snippet created after it ran.
	:param fail_fast: Stop after the first failing snippet.
	:param lint: Run the pitfall checks on passing snippets and their figures.
	:return: The aggregated report.
	"""
	if mpl.get_backend().lower() != backend.lower():
		plt.switch_backend(backend)
	report = CheckReport()
	namespaces: Dict[Optional[str], Dict[str, Any]] = {}

	with _scratch_directory(workdir) as root, _working_directory(root):
		for snippet in snippets:
			key = snippet.section if shared_namespace else f"{snippet.section}#{snippet.index}"
			namespace = namespaces.setdefault(key, {"__name__": "__doccheck__"})
			result = _run_one(snippet, namespace, root, lint=lint, close_figures=close_figures)
			report.results.append(result)
			if fail_fast and not result.ok:
				LOG.warning("Stopping after first failure: %s", snippet.name)
				break

	LOG.info("Checked %d snippet(s): %d passed, %d failed, %d skipped",
	         len(report.results), report.passed, report.failed, report.skipped)
	return report


def check_markdown(markdown: str, *, section: Optional[str] = None, **options: Any) -> CheckReport:
	"""Extract and run the Python snippets of one Markdown text."""
	return run_snippets(extract_snippets(markdown, section=section), **options)


def check_document(sections: Optional[Sequence[Section]] = None, **options: Any) -> CheckReport:
	"""
	Check every Python snippet of the tutorial.

	:param sections: Sections to check; all packaged sections by default.
	:param options: Forwarded to :func:`run_snippets`.
	"""
	chosen = list(sections) if sections is not None else load_sections()
	snippets: List[Snippet] = []
	for section in chosen:
		snippets.extend(extract_snippets(section.body, section=section.slug))
	return run_snippets(snippets, **options)
