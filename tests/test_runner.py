# tests/test_runner.py

from pathlib import Path
import sys

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg", force=True)

from plotprimer.doccheck import Snippet, check_markdown, run_snippets  # noqa: E402
from plotprimer.imports import pyplot as plt  # type: ignore  # noqa: E402


@pytest.fixture(autouse=True)
def close_all():
	yield
	plt.close("all")


def _snippet(source: str, index: int = 0, section: str = "demo", **flags) -> Snippet:
	return Snippet(source=source, lang="python", line=index + 1, section=section, index=index, **flags)


def test_section_snippets_share_a_namespace(tmp_path):
	report = run_snippets(
		[_snippet("value = 21\n"), _snippet("print(value * 2)\n", 1)],
		workdir=tmp_path,
	)

	assert report.ok
	assert report.passed == 2
	assert report.results[1].output == "42\n"


def test_isolated_namespaces_fail_on_missing_names(tmp_path):
	report = run_snippets(
		[_snippet("value = 21\n"), _snippet("print(value)\n", 1)],
		workdir=tmp_path,
		shared_namespace=False,
	)

	assert not report.ok
	(failure,) = report.failures()
	assert failure.error == "NameError"
	assert failure.status == "FAIL"


def test_sections_do_not_leak_into_each_other(tmp_path):
	report = run_snippets(
		[_snippet("secret = 1\n", section="a"), _snippet("secret\n", section="b")],
		workdir=tmp_path,
	)
	assert report.failed == 1


def test_expected_errors(tmp_path):
	report = run_snippets(
		[
			_snippet("int('x')\n", 0, expect_error="ValueError"),
			_snippet("pass\n", 1, expect_error="ValueError"),
			_snippet("{}['k']\n", 2, expect_error="LookupError"),
			_snippet("1 / 0\n", 3, expect_error="builtins.TypeError"),
		],
		workdir=tmp_path,
	)

	ok, missing, parent_class, wrong = report.results
	assert ok.ok
	assert not missing.ok and missing.error == "MissingError"
	assert parent_class.ok
	assert not wrong.ok and wrong.error == "ZeroDivisionError"


def test_skipped_snippets_are_not_run(tmp_path):
	report = run_snippets([_snippet("raise SystemError\n", skip=True)], workdir=tmp_path)

	assert report.ok
	assert report.skipped == 1
	assert report.results[0].status == "skip"


def test_figures_and_files_are_tracked_and_closed(tmp_path):
	source = (
		"import matplotlib.pyplot as plt\n"
		"fig, ax = plt.subplots()\n"
		"ax.plot([1, 2, 3])\n"
		"fig.savefig('out/line.png')\n"
	)
	(tmp_path / "out").mkdir()

	report = run_snippets([_snippet(source)], workdir=tmp_path)

	(result,) = report.results
	assert result.ok, result.message
	assert result.figures == 1
	assert result.files == ["out/line.png"]
	assert (tmp_path / "out" / "line.png").is_file()
	assert plt.get_fignums() == []


def test_fail_fast_stops_after_first_failure(tmp_path):
	report = run_snippets(
		[_snippet("raise RuntimeError('first')\n"), _snippet("x = 1\n", 1)],
		workdir=tmp_path,
		fail_fast=True,
	)

	assert len(report.results) == 1
	assert report.results[0].message == "first"


def test_warnings_are_captured(tmp_path):
	source = "import warnings\nwarnings.warn('careful', UserWarning)\n"
	report = run_snippets([_snippet(source)], workdir=tmp_path)

	assert report.ok
	assert report.results[0].warnings == ["UserWarning: careful"]


def test_lint_reports_mixed_interfaces(tmp_path):
	source = (
		"import matplotlib.pyplot as plt\n"
		"fig, ax = plt.subplots()\n"
		"ax.plot([1, 2, 3])\n"
		"plt.title('mixed')\n"
	)
	report = run_snippets([_snippet(source), _snippet(source, 1, nolint=True)], workdir=tmp_path, lint=True)

	assert report.ok
	codes = [f.code for f in report.findings]
	assert codes == ["mixed-styles"]
	assert report.results[1].findings == []


def test_check_markdown_summary_and_dict(tmp_path):
	markdown = "```python\nx = 1\n```\n\n```python\nx.missing\n```\n"

	report = check_markdown(markdown, section="md", workdir=tmp_path)
	summary = report.summary()
	data = report.to_dict()

	assert "FAIL md#1 (line 5): AttributeError" in summary
	assert summary.splitlines()[-1] == "1 passed, 1 failed, 0 skipped, 0 finding(s)"
	assert data["ok"] is False
	assert [r["status"] for r in data["results"]] == ["ok", "FAIL"]


def test_temporary_workdir_is_removed():
	report = run_snippets([_snippet("import os\nprint(os.getcwd())\n")])

	cwd = Path(report.results[0].output.strip())
	assert cwd.name.startswith("plotprimer-")
	assert not cwd.exists()
