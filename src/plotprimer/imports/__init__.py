# src/plotprimer/imports/__init__.py

from __future__ import annotations

from typing import Dict, Optional

from .lazyproxy import LazyModule, lazy_module

# Convenience lazy proxies for the plotting stack
np = numpy = lazy_module("numpy", install="pip install numpy", reason="numerical arrays")
mpl = matplotlib = lazy_module("matplotlib", install="pip install matplotlib", reason="plotting")
plt = pyplot = lazy_module("matplotlib.pyplot", install="pip install matplotlib", reason="plotting")
pd = pandas = lazy_module("pandas", install="pip install pandas", reason="tabular sample data")
PIL = lazy_module("PIL", install="pip install Pillow", reason="JPEG export and image inspection")
Image = lazy_module("PIL.Image", install="pip install Pillow", reason="JPEG export and image inspection")

_STACK: Dict[str, LazyModule] = {
	"numpy": numpy,
	"matplotlib": matplotlib,
	"pandas": pandas,
	"Pillow": PIL,
}


def stack_versions() -> Dict[str, Optional[str]]:
	"""
	Report installed versions of the tutorial's plotting stack.

	:return: Mapping of distribution name to version, ``None`` when missing.
	"""
	return {name: proxy.installed_version() for name, proxy in _STACK.items()}


def missing_dependencies() -> Dict[str, str]:
	"""Return ``name -> install hint`` for every stack module that cannot be imported."""
	return {
		name: proxy.install_hint or f"pip install {name}"
		for name, proxy in _STACK.items()
		if not proxy.is_available()
	}


__all__ = [
	"LazyModule", "lazy_module",
	"np", "numpy", "mpl", "matplotlib", "plt", "pyplot",
	"pd", "pandas", "PIL", "Image",
	"stack_versions", "missing_dependencies",
]
