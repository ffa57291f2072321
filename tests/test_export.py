# tests/test_export.py

from pathlib import Path
import sys

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg", force=True)
pytest.importorskip("PIL")

from plotprimer.imports import pyplot as plt  # type: ignore  # noqa: E402
from plotprimer.plot.export import (  # noqa: E402
	SUPPORTED_FORMATS,
	export_figure,
	export_many,
	inspect_export,
	normalize_format,
	resolve_export_path,
)


@pytest.fixture()
def figure():
	fig, ax = plt.subplots(figsize=(5, 3))
	ax.plot([0, 1, 2], [0, 1, 4])
	ax.set_xlabel("x")
	try:
		yield fig
	finally:
		plt.close(fig)


@pytest.mark.parametrize("raw, expected", [
	("png", "png"),
	("PNG", "png"),
	(".pdf", "pdf"),
	("jpg", "jpeg"),
	("svg", "svg"),
])
def test_normalize_format(raw, expected):
	assert normalize_format(raw) == expected
	assert expected in SUPPORTED_FORMATS


def test_normalize_format_rejects_unknown():
	with pytest.raises(ValueError):
		normalize_format("xyz")
	with pytest.raises(ValueError):
		normalize_format("  ")


def test_resolve_export_path(tmp_path):
	assert resolve_export_path(tmp_path / "plot") == (tmp_path / "plot.png", "png")
	assert resolve_export_path(tmp_path / "plot", "jpg") == (tmp_path / "plot.jpg", "jpeg")
	assert resolve_export_path(tmp_path / "plot.svg") == (tmp_path / "plot.svg", "svg")
	assert resolve_export_path(tmp_path / "plot.pdf", "pdf") == (tmp_path / "plot.pdf", "pdf")
	# an unknown suffix is kept as part of the name
	assert resolve_export_path(tmp_path / "run.v2", "pdf") == (tmp_path / "run.v2.pdf", "pdf")

	with pytest.raises(ValueError):
		resolve_export_path(tmp_path / "plot.png", "pdf")


def test_png_size_follows_dpi(figure, tmp_path):
	path = export_figure(figure, tmp_path / "sized", dpi=100, tight=False)
	info = inspect_export(path)

	assert info.format == "png"
	assert info.is_raster
	assert info.pixel_size == (500, 300)
	assert info.size_bytes > 0


def test_vector_exports_have_no_pixel_size(figure, tmp_path):
	pdf = inspect_export(export_figure(figure, tmp_path / "vec.pdf"))
	svg = inspect_export(export_figure(figure, tmp_path / "vec", fig_format="svg"))

	assert (pdf.format, pdf.pixel_size) == ("pdf", None)
	assert (svg.format, svg.pixel_size) == ("svg", None)
	assert not svg.is_raster


def test_jpeg_ignores_transparency(figure, tmp_path):
	path = export_figure(figure, tmp_path / "photo", fig_format="jpeg", dpi=50, transparent=True)

	assert path.suffix == ".jpg"
	assert inspect_export(path).format == "jpeg"


def test_export_creates_parent_directories(figure, tmp_path):
	path = export_figure(figure, tmp_path / "a" / "b" / "nested.png", dpi=20)
	assert path.is_file()


def test_export_rejects_bad_dpi(figure, tmp_path):
	with pytest.raises(ValueError):
		export_figure(figure, tmp_path / "x.png", dpi=0)
	assert not (tmp_path / "x.png").exists()


def test_export_many_deduplicates_aliases(figure, tmp_path):
	written = export_many(figure, tmp_path / "multi", ["png", "jpg", "jpeg", "svg"], dpi=30)

	assert [p.name for p in written] == ["multi.png", "multi.jpg", "multi.svg"]
	assert all(p.is_file() for p in written)


def test_inspect_export_detects_mismatch(tmp_path):
	fake = tmp_path / "fake.png"
	fake.write_bytes(b"%PDF-1.4 not a png")

	with pytest.raises(ValueError):
		inspect_export(fake)
	with pytest.raises(FileNotFoundError):
		inspect_export(tmp_path / "missing.png")
