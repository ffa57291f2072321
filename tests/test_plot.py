# tests/test_plot.py

from pathlib import Path
import logging
import sys

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

np = pytest.importorskip("numpy")
matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg", force=True)

from plotprimer import Canvas  # noqa: E402
from plotprimer.imports import matplotlib as mpl  # type: ignore  # noqa: E402
from plotprimer.plot import colors_from_cycle, rc_overrides, use_style  # noqa: E402
from plotprimer.stats import moving_average  # noqa: E402


@pytest.fixture()
def canvas():
	plot = Canvas(figsize=(4, 3))
	try:
		yield plot
	finally:
		mpl.pyplot.close(plot.fig)


def test_plot_line_and_moving_average(canvas):
	x = np.arange(0, 10)
	y = np.linspace(0.0, 1.0, num=10)

	ax = canvas.plot_line(x, y, label="line")
	canvas.plot_moving_average(x, y, window=3, label="avg", ax=ax)

	lines = ax.get_lines()
	assert len(lines) == 3  # line, raw markers, smoothed
	np.testing.assert_allclose(lines[0].get_ydata(), y)
	np.testing.assert_allclose(lines[2].get_ydata(), moving_average(y, window_size=3))

	smoothed = canvas.plot_moving_average(x, y, window=4, iterations=2).get_lines()[-1]
	np.testing.assert_allclose(smoothed.get_ydata(), moving_average(y, window_size=4, iterations=2))
	assert smoothed.get_xdata().size == x.size

	legend_axes = canvas.set_legend(ax=ax)
	assert legend_axes is ax
	labels = [t.get_text() for t in ax.get_legend().get_texts()]
	assert labels == ["line", "avg"]


def test_plot_line_rejects_mismatched_lengths(canvas):
	with pytest.raises(ValueError):
		canvas.plot_line([1, 2, 3], [1, 2])


def test_plot_axes_limits_with_data_keyword(canvas):
	x = np.array([0, 1, 5, 10])
	y = np.array([2.0, 4.0, 1.0, 3.0])

	ax = canvas.plot_line(x, y)
	canvas.set_axes_limits(ax=ax, xmin="data", xmax="data", ymin="data", ymax="data")

	assert ax.get_xlim() == (0.0, 10.0)
	assert ax.get_ylim() == (1.0, 4.0)

	with pytest.raises(ValueError):
		canvas.set_axes_limits(xmin="auto")


def test_axes_limits_without_data_raise():
	with Canvas((3, 2)) as empty:
		with pytest.raises(ValueError):
			empty.set_axes_limits(ymax="data")


def test_custom_tick_labels_validation(canvas):
	ax = canvas.plot_line(np.arange(0, 3), np.array([1.0, 2.0, 3.0]))
	with pytest.raises(ValueError):
		canvas.set_custom_tick_labels(["one"], axis="x", ax=ax)


def test_custom_ticks_place_labels(canvas):
	ax = canvas.plot_line([0, 1, 2], [3, 1, 2])
	canvas.set_custom_ticks([0, 1, 2], labels=["a", "b", "c"])

	assert list(ax.get_xticks()) == [0, 1, 2]
	assert [t.get_text() for t in ax.get_xticklabels()] == ["a", "b", "c"]
	with pytest.raises(ValueError):
		canvas.set_custom_ticks([0, 1], labels=["only one"])


def test_scatter_with_values_and_colorbar(canvas):
	ax = canvas.plot_scatter([1, 2, 3], [3, 2, 1], values=[0.1, 0.5, 0.9], colorbar=True)

	assert len(ax.collections) == 1
	assert len(canvas.fig.axes) == 2  # plotting axes + colorbar axes
	with pytest.raises(ValueError):
		canvas.plot_scatter([1, 2], [1, 2], color="red", values=[1, 2])
	with pytest.raises(ValueError):
		canvas.plot_scatter([1, 2], [1, 2], values=[1, 2, 3])


def test_bar_chart_with_value_labels(canvas):
	ax = canvas.plot_bar(["a", "b", "c"], [1, 2, 3], value_labels=True)

	assert len(ax.patches) == 3
	assert [t.get_text() for t in ax.texts] == ["1", "2", "3"]
	with pytest.raises(ValueError):
		canvas.plot_bar(["a"], [1, 2])
	with pytest.raises(ValueError):
		canvas.plot_bar(["a"], [1], width=0)


def test_horizontal_stacked_bars(canvas):
	ax = canvas.plot_bar(["x", "y"], [1, 2], horizontal=True, label="first")
	canvas.plot_bar(["x", "y"], [3, 4], horizontal=True, bottom=[1, 2], label="second")

	widths = [patch.get_width() for patch in ax.patches]
	lefts = [patch.get_x() for patch in ax.patches]
	assert widths == [1, 2, 3, 4]
	assert lefts == [0, 0, 1, 2]


def test_histogram_returns_counts_and_edges(canvas):
	ax, counts, edges = canvas.plot_histogram([1, 2, 2, 3, 3, 3], bins=3)

	assert ax is canvas.ax
	np.testing.assert_allclose(counts, [1, 2, 3])
	assert edges.size == 4
	with pytest.raises(ValueError):
		canvas.plot_histogram([1, 2, 3], bins=0)


def test_heatmap_takes_labels_from_dataframe(canvas):
	pd = pytest.importorskip("pandas")
	frame = pd.DataFrame([[0.0, 0.5, 1.0], [1.0, 0.5, 0.0]], index=["r1", "r2"], columns=["a", "b", "c"])

	ax, image = canvas.plot_heatmap(frame, annotate=True, fmt="{:.1f}", colorbar_label="level")

	assert image.get_array().shape == (2, 3)
	assert [t.get_text() for t in ax.get_xticklabels()] == ["a", "b", "c"]
	assert [t.get_text() for t in ax.get_yticklabels()] == ["r1", "r2"]
	assert len(ax.texts) == 6
	assert ax.texts[0].get_text() == "0.0"

	with pytest.raises(ValueError):
		canvas.plot_heatmap([[1, 2], [3, 4]], row_labels=["only"])


def test_errorbar_and_band(canvas):
	ax = canvas.plot_errorbar([1, 2, 3], [1.0, 2.0, 3.0], [0.1, 0.2, 0.1], label="measured")
	canvas.fill_between([1, 2, 3], [0.5, 1.5, 2.5], [1.5, 2.5, 3.5], label="band")

	assert len(ax.containers) == 1
	assert len(ax.collections) >= 1
	with pytest.raises(ValueError):
		canvas.plot_errorbar([1, 2], [1, 2], [0.1, -0.1])
	with pytest.raises(ValueError):
		canvas.plot_errorbar([1, 2], [1, 2], [0.1])


def test_reference_lines(canvas):
	canvas.draw_horizontal_line(0.5)
	ax = canvas.draw_vertical_line(2.0, color="tab:red")

	assert len(ax.get_lines()) == 2


def test_grid_of_axes_and_hide_unused():
	with Canvas((6, 4), nrows=2, ncols=3) as grid:
		assert len(grid.iter_axes()) == 6
		grid.plot_line([0, 1], [0, 1], ax=grid.axes_at(0, 0))
		grid.plot_histogram([1, 2, 2, 3], bins=2, ax=grid.axes_at(1, 2))

		assert grid.hide_unused() == 4
		assert not grid.axes_at(0, 1).axison
		assert grid.axes_at(1, 2).axison
		with pytest.raises(IndexError):
			grid.axes_at(2, 0)


def test_invalid_canvas_arguments():
	with pytest.raises(ValueError):
		Canvas(nrows=0)
	with pytest.raises(ValueError):
		Canvas(figsize=(0, 3))


def test_context_manager_closes_figure():
	with Canvas((3, 2)) as plot:
		number = plot.fig.number
		assert mpl.pyplot.fignum_exists(number)

	assert not mpl.pyplot.fignum_exists(number)
	with pytest.raises(RuntimeError):
		plot.plot_line([1, 2], [1, 2])


def test_labels_and_twin_axis(canvas):
	ax = canvas.set_plot_labels(title="Title", xlabel="time [s]", ylabel="value")
	twin = canvas.twin_axis(ylabel="other", color="tab:blue")

	assert ax.get_title() == "Title"
	assert ax.get_xlabel() == "time [s]"
	assert twin.get_ylabel() == "other"
	assert len(canvas.fig.axes) == 2


def test_legend_without_labels_returns_none(canvas):
	canvas.plot_line([0, 1], [0, 1])
	assert canvas.set_legend() is None
	assert canvas.ax.get_legend() is None


def test_legend_outside_and_filtered(canvas):
	canvas.plot_line([0, 1], [0, 1], label="keep")
	canvas.plot_line([0, 1], [1, 0], label="drop")
	canvas.set_legend(outside=True, exclude_labels=["drop"])

	legend = canvas.ax.get_legend()
	assert [t.get_text() for t in legend.get_texts()] == ["keep"]


def test_legend_order_warns_about_unknown_indices(canvas, caplog, monkeypatch):
	monkeypatch.setattr(logging.getLogger("plotprimer"), "propagate", True)
	canvas.plot_line([0, 1], [0, 1], label="first")
	canvas.plot_line([0, 1], [1, 0], label="second")

	with caplog.at_level(logging.WARNING, logger="plotprimer"):
		canvas.set_legend(order=[1, 5, 0])

	legend = canvas.ax.get_legend()
	assert [t.get_text() for t in legend.get_texts()] == ["second", "first"]
	assert "skips indices" in caplog.text


def test_custom_text_positions(canvas):
	canvas.custom_text("note", position=(0.2, 0.3), style="bold italic", boxed=True)

	text = canvas.ax.texts[-1]
	assert text.get_position() == (0.2, 0.3)
	assert text.get_fontweight() == "bold"
	with pytest.raises(ValueError):
		canvas.custom_text("x", position="somewhere")


def test_ticks_and_scales(canvas):
	canvas.plot_line([1, 10, 100], [1, 2, 3])
	ax = canvas.set_log_scale(log_x=True)
	canvas.set_minor_ticks(axis="x")
	canvas.rotate_tick_labels(30)

	assert ax.get_xscale() == "log"
	assert ax.get_xticklabels()[0].get_rotation() == 30
	with pytest.raises(ValueError):
		canvas.set_minor_ticks(0)
	with pytest.raises(ValueError):
		canvas.set_tick_label_size(8, axis="z")


def test_dark_mode_and_despine(canvas):
	ax = canvas.toggle_dark_mode()
	canvas.despine()

	assert ax.get_facecolor() == mpl.colors.to_rgba("black")
	assert not ax.spines["top"].get_visible()
	canvas.toggle_dark_mode(False)
	assert ax.get_facecolor() == mpl.colors.to_rgba("white")


def test_use_style_is_scoped():
	before = mpl.rcParams["axes.facecolor"]
	with use_style("ggplot"):
		assert mpl.colors.to_hex(mpl.rcParams["axes.facecolor"]) == "#e5e5e5"
	assert mpl.rcParams["axes.facecolor"] == before

	with pytest.raises(ValueError):
		with use_style("no-such-style"):
			pass


def test_rc_overrides_and_color_cycle():
	with rc_overrides(font__size=17):
		assert mpl.rcParams["font.size"] == 17
	with pytest.raises(KeyError):
		with rc_overrides(not_a_param=1):
			pass

	colors = colors_from_cycle(12)
	assert len(colors) == 12
	cycle_length = len(mpl.rcParams["axes.prop_cycle"].by_key()["color"])
	assert colors[cycle_length] == colors[0]


def test_save_plot_and_save_all(canvas, tmp_path):
	canvas.plot_line([0, 1, 2], [0, 1, 4])

	png = canvas.save_plot(tmp_path / "figure", dpi=50)
	written = canvas.save_all(tmp_path / "both", ["pdf", "svg"], dpi=50)

	assert png == tmp_path / "figure.png"
	assert png.read_bytes().startswith(b"\x89PNG")
	assert [p.suffix for p in written] == [".pdf", ".svg"]
	with pytest.raises(ValueError):
		canvas.save_plot(tmp_path / "bad", dpi=0)
