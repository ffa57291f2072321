# src/plotprimer/doccheck/report.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .pitfalls import Finding
from .snippets import Snippet


@dataclass
class SnippetResult:
	"""Outcome of running one snippet."""

	snippet: Snippet
	ok: bool
	skipped: bool = False
	error: Optional[str] = None
	message: Optional[str] = None
	duration: float = 0.0
	figures: int = 0
	files: List[str] = field(default_factory=list)
	output: str = ""
	warnings: List[str] = field(default_factory=list)
	findings: List[Finding] = field(default_factory=list)

	@property
	def status(self) -> str:
		if self.skipped:
			return "skip"
		return "ok" if self.ok else "FAIL"

	def to_dict(self) -> Dict[str, Any]:
		return {
			"snippet": self.snippet.name,
			"line": self.snippet.line,
			"status": self.status,
			"error": self.error,
			"message": self.message,
			"duration": round(self.duration, 4),
			"figures": self.figures,
			"files": list(self.files),
			"warnings": list(self.warnings),
			"findings": [f.to_dict() for f in self.findings],
		}


@dataclass
class CheckReport:
	"""Aggregated results of a documentation check."""

	results: List[SnippetResult] = field(default_factory=list)

	@property
	def passed(self) -> int:
		return sum(1 for r in self.results if r.ok and not r.skipped)

	@property
	def failed(self) -> int:
		return sum(1 for r in self.results if not r.ok)

	@property
	def skipped(self) -> int:
		return sum(1 for r in self.results if r.skipped)

	@property
	def findings(self) -> List[Finding]:
		return [f for r in self.results for f in r.findings]

	@property
	def ok(self) -> bool:
		return self.failed == 0

	def failures(self) -> List[SnippetResult]:
		return [r for r in self.results if not r.ok]

	def extend(self, other: "CheckReport") -> None:
		self.results.extend(other.results)

	def summary(self) -> str:
		"""One line per failing snippet or finding, then a totals line."""
		lines = []
		for r in self.results:
			if not r.ok:
				lines.append(f"FAIL {r.snippet.name} (line {r.snippet.line}): {r.error}: {r.message}")
			for finding in r.findings:
				lines.append(f"WARN {r.snippet.name} (line {r.snippet.line}): {finding}")
		lines.append(
			f"{self.passed} passed, {self.failed} failed, {self.skipped} skipped, "
			f"{len(self.findings)} finding(s)"
		)
		return "\n".join(lines)

	def to_dict(self) -> Dict[str, Any]:
		return {
			"ok": self.ok,
			"passed": self.passed,
			"failed": self.failed,
			"skipped": self.skipped,
			"results": [r.to_dict() for r in self.results],
		}
