# tests/test_tutorial.py

from pathlib import Path
import re
import sys

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from plotprimer.doccheck import extract_snippets  # noqa: E402
from plotprimer.tutorial import (  # noqa: E402
	DEFAULT_TITLE,
	build_document,
	get_section,
	load_sections,
	slugify_heading,
	write_document,
)

EXPECTED_SLUGS = [
	"installation",
	"plot-types",
	"layout",
	"styling",
	"export",
	"pitfalls",
	"reference",
]


def test_sections_load_in_reading_order():
	sections = load_sections()

	assert [s.slug for s in sections] == EXPECTED_SLUGS
	assert [s.order for s in sections] == sorted(s.order for s in sections)
	for section in sections:
		assert section.body.startswith(f"## {section.title}\n")
		assert section.filename.endswith(".md")


def test_every_section_has_runnable_python():
	for section in load_sections():
		snippets = extract_snippets(section.body, section=section.slug)
		assert snippets, section.slug
		assert all(s.section == section.slug for s in snippets)


def test_get_section():
	assert get_section("export").title == "Saving figures"
	with pytest.raises(KeyError) as info:
		get_section("animation")
	assert "plot-types" in str(info.value)


@pytest.mark.parametrize("heading, anchor", [
	("Layout: several plots in one figure", "layout-several-plots-in-one-figure"),
	("Quick reference and FAQ", "quick-reference-and-faq"),
	("Saving figures", "saving-figures"),
])
def test_slugify_heading(heading, anchor):
	assert slugify_heading(heading) == anchor


def test_document_is_deterministic_and_linked():
	first = build_document()
	second = build_document()

	assert first == second
	assert first.startswith(f"# {DEFAULT_TITLE}\n")

	headings = [m.group(1) for m in re.finditer(r"^## (.+)$", first, re.MULTILINE)]
	assert headings[0] == "Contents"
	anchors = re.findall(r"\]\(#([\w-]+)\)", first)
	assert anchors == [slugify_heading(h) for h in headings[1:]]


def test_document_follows_section_order():
	text = build_document(toc=False, title="Primer")

	positions = [text.index(f"## {s.title}") for s in load_sections()]
	assert positions == sorted(positions)
	assert "## Contents" not in text


def test_write_document(tmp_path):
	path = write_document(tmp_path / "docs" / "TUTORIAL.md", title="Course notes")

	assert path.is_file()
	assert path.read_text(encoding="utf-8") == build_document(title="Course notes")


def test_load_sections_from_directory(tmp_path):
	(tmp_path / "02_second.md").write_text("## Second\n\ntext\n", encoding="utf-8")
	(tmp_path / "01_first_part.md").write_text("intro\n\n## First part\n", encoding="utf-8")

	sections = load_sections(tmp_path)

	assert [(s.slug, s.title) for s in sections] == [("first-part", "First part"), ("second", "Second")]


@pytest.mark.parametrize("files", [
	{"notes.md": "## Notes\n"},
	{"01_a.md": "no heading here\n"},
	{"01_a.md": "## A\n", "01_b.md": "## B\n"},
])
def test_load_sections_rejects_bad_content(tmp_path, files):
	for name, text in files.items():
		(tmp_path / name).write_text(text, encoding="utf-8")
	with pytest.raises(ValueError):
		load_sections(tmp_path)


def test_load_sections_missing_directory(tmp_path):
	with pytest.raises(FileNotFoundError):
		load_sections(tmp_path / "absent")


# --- the tutorial code runs against the installed matplotlib ---
@pytest.fixture()
def agg():
	matplotlib = pytest.importorskip("matplotlib")
	pytest.importorskip("numpy")
	pytest.importorskip("pandas")
	pytest.importorskip("PIL")
	matplotlib.use("Agg", force=True)
	yield
	matplotlib.pyplot.close("all")


@pytest.mark.parametrize("slug", EXPECTED_SLUGS)
def test_section_snippets_run(agg, slug, tmp_path):
	from plotprimer.doccheck import check_document

	report = check_document([get_section(slug)], workdir=tmp_path, lint=True)

	assert report.ok, report.summary()
	assert report.passed >= 1


def test_export_section_writes_every_format(agg, tmp_path):
	from plotprimer.doccheck import check_document
	from plotprimer.plot import inspect_export

	report = check_document([get_section("export")], workdir=tmp_path)

	assert report.ok, report.summary()
	for name, fmt in [("damped.png", "png"), ("damped.pdf", "pdf"), ("damped.svg", "svg"), ("damped.jpg", "jpeg")]:
		assert inspect_export(tmp_path / name).format == fmt
	assert inspect_export(tmp_path / "damped.png").pixel_size == (1000, 600)
	# the unknown-format snippet is expected to fail
	assert not (tmp_path / "damped.xyz").exists()


def test_pitfall_demo_is_excluded_from_lint(agg, tmp_path):
	from plotprimer.doccheck import check_document

	report = check_document([get_section("pitfalls")], workdir=tmp_path, lint=True)

	assert "mixed-styles" not in {f.code for f in report.findings}
	assert "which panel gets this title?" in "".join(r.output for r in report.results)
