# tests/test_examples.py

from pathlib import Path
import sys

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

np = pytest.importorskip("numpy")
pytest.importorskip("pandas")
pytest.importorskip("PIL")
matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg", force=True)

from plotprimer.doccheck import lint_figure  # noqa: E402
from plotprimer.imports import pyplot as plt  # type: ignore  # noqa: E402
from plotprimer.plot import inspect_export  # noqa: E402
from plotprimer.tutorial.examples import EXAMPLES, render_gallery  # noqa: E402


@pytest.fixture(autouse=True)
def close_all():
	yield
	plt.close("all")


@pytest.mark.parametrize("name", sorted(EXAMPLES))
def test_example_builds_a_clean_figure(name):
	fig = EXAMPLES[name]()

	assert fig.axes
	assert any(ax.has_data() for ax in fig.axes)
	assert [f for f in lint_figure(fig) if f.code == "clipped-label"] == []


def test_examples_are_reproducible():
	first = EXAMPLES["scatter_plot"]()
	second = EXAMPLES["scatter_plot"]()

	np.testing.assert_allclose(
		first.axes[0].collections[0].get_offsets(),
		second.axes[0].collections[0].get_offsets(),
	)


def test_example_figsize_can_be_overridden():
	fig = EXAMPLES["bar_chart"]((3, 2))
	assert tuple(fig.get_size_inches()) == (3.0, 2.0)


def test_subplot_grid_has_four_titled_panels():
	fig = EXAMPLES["subplot_grid"]()

	titles = [ax.get_title() for ax in fig.axes]
	assert titles == ["sine", "decay", "square root", "noise"]
	assert fig.get_suptitle() == "Four panels"


def test_render_gallery(tmp_path):
	written = render_gallery(tmp_path / "gallery", formats=["png", "svg"], dpi=40, names=["first_plot", "histogram"])

	assert sorted(written) == ["first_plot", "histogram"]
	for paths in written.values():
		assert [p.suffix for p in paths] == [".png", ".svg"]
		assert [inspect_export(p).format for p in paths] == ["png", "svg"]
	assert plt.get_fignums() == []


def test_render_gallery_with_shared_figsize(tmp_path):
	written = render_gallery(tmp_path, dpi=50, figsize=(4, 2), names=["line_plot"], transparent=True)

	info = inspect_export(written["line_plot"][0])
	width, height = info.pixel_size
	assert width > height


def test_render_gallery_unknown_name(tmp_path):
	with pytest.raises(KeyError):
		render_gallery(tmp_path, names=["pie_chart"])
	assert list(tmp_path.iterdir()) == []
