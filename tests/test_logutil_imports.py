# tests/test_logutil_imports.py

from pathlib import Path
import logging
import sys

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

import plotprimer  # noqa: E402
from plotprimer import imports  # noqa: E402
from plotprimer.imports import LazyModule, lazy_module  # noqa: E402
from plotprimer.logutil import ROOT_LOGGER, configure_logging, get_logger  # noqa: E402


def test_module_loggers_live_under_the_package_root():
	log = get_logger("plotprimer.plot.export")
	other = get_logger("custom")

	assert log.name == "plotprimer.plot.export"
	assert other.name == "plotprimer.custom"
	assert get_logger() is logging.getLogger(ROOT_LOGGER)
	assert len(logging.getLogger(ROOT_LOGGER).handlers) >= 1


def test_configure_logging_adds_file_handler(tmp_path):
	path = tmp_path / "logs" / "primer.log"
	root = configure_logging(console_level="WARNING", file_path=path, file_level="DEBUG")
	try:
		get_logger("tests").debug("written to file only")
		for handler in root.handlers:
			handler.flush()

		assert root.level == logging.DEBUG
		assert "written to file only" in path.read_text(encoding="utf-8")

		# configuring the same file twice keeps a single handler
		configure_logging(console_level="WARNING", file_path=path)
		assert sum(getattr(h, "baseFilename", None) == str(path.resolve()) for h in root.handlers) == 1
	finally:
		for handler in [h for h in root.handlers if isinstance(h, logging.FileHandler)]:
			root.removeHandler(handler)
			handler.close()
		configure_logging(console_level="INFO")


def test_configure_logging_rejects_unknown_level():
	with pytest.raises(ValueError):
		configure_logging(console_level="LOUD")


def test_lazy_module_reports_missing_dependency():
	proxy = lazy_module("plotprimer_no_such_module", install="pip install nothing", reason="testing")

	assert isinstance(proxy, LazyModule)
	assert not proxy.is_available()
	assert proxy.installed_version() is None
	with pytest.raises(ImportError) as info:
		proxy.anything
	assert "pip install nothing" in str(info.value)
	assert "testing" in str(info.value)


def test_lazy_module_loads_on_first_use():
	proxy = lazy_module("json")

	assert "not loaded" in repr(proxy)
	assert proxy.dumps({"a": 1}) == '{"a": 1}'
	assert "loaded=" in repr(proxy)
	with pytest.raises(AttributeError):
		proxy.__wrapped__


def test_stack_helpers_report_every_library(monkeypatch):
	versions = imports.stack_versions()
	assert set(versions) == {"numpy", "matplotlib", "pandas", "Pillow"}

	monkeypatch.setitem(imports._STACK, "ghost", lazy_module("plotprimer_ghost", install="pip install ghost"))
	assert imports.missing_dependencies()["ghost"] == "pip install ghost"


def test_top_level_attributes_are_lazy():
	assert plotprimer.__version__
	assert plotprimer.build_document is plotprimer.tutorial.build_document
	assert plotprimer.PrimerConfig.__name__ == "PrimerConfig"
	with pytest.raises(AttributeError):
		plotprimer.not_exported
