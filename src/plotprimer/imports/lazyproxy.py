# src/plotprimer/imports/lazyproxy.py

from __future__ import annotations

import importlib
import importlib.util
from types import ModuleType
from typing import Any, Optional

__all__ = ["LazyModule", "lazy_module"]


class LazyModule:
	"""
	Stand-in for a third-party module that is imported when first used.

	Importing :mod:`plotprimer` stays cheap and works without the plotting stack;
	only the code paths that draw or export pay for ``matplotlib`` and friends.
	A missing module surfaces as :class:`ImportError` naming the pip command.
	"""
	def __init__(self, name: str, *, install: Optional[str] = None, reason: Optional[str] = None) -> None:
		self._name = name
		self._install = install
		self._reason = reason
		self._module: Optional[ModuleType] = None

	@property
	def install_hint(self) -> Optional[str]:
		return self._install

	def is_available(self) -> bool:
		"""``True`` when the module is importable; nothing is imported to find out."""
		if self._module is not None:
			return True
		try:
			return importlib.util.find_spec(self._name) is not None
		except (ImportError, ValueError):
			# find_spec imports parent packages of dotted names
			return False

	def installed_version(self) -> Optional[str]:
		if not self.is_available():
			return None
		return getattr(self._resolve(), "__version__", None)

	def _missing(self, exc: Exception) -> ImportError:
		message = f"{self._name} could not be imported"
		if self._reason:
			message += f" (used for {self._reason})"
		if self._install:
			message += f"; run '{self._install}'"
		return ImportError(message + ".")

	def _resolve(self) -> ModuleType:
		if self._module is None:
			try:
				self._module = importlib.import_module(self._name)
			except ImportError as exc:
				raise self._missing(exc) from exc
		return self._module

	def __getattr__(self, attr: str) -> Any:
		if attr.startswith("__") and attr.endswith("__"):
			raise AttributeError(attr)
		module = self._resolve()
		if hasattr(module, attr):
			return getattr(module, attr)

		# matplotlib.ticker, matplotlib.transforms and PIL.Image are not
		# attributes until somebody imports them
		dotted = f"{self._name}.{attr}"
		try:
			child = importlib.import_module(dotted)
		except ImportError as exc:
			raise AttributeError(f"{self._name} has neither an attribute nor a submodule {attr!r}") from exc
		setattr(module, attr, child)
		return child

	def __repr__(self) -> str:
		if self._module is None:
			return f"<LazyModule {self._name} (not loaded)>"
		return f"<LazyModule {self._name} loaded={self._module!r}>"


def lazy_module(name: str, *, install: Optional[str] = None, reason: Optional[str] = None) -> LazyModule:
	"""
	Build a :class:`LazyModule`.

	:param name: Dotted module name, e.g. ``"matplotlib.pyplot"``.
	:param install: Command shown when the import fails.
	:param reason: What plotprimer needs the module for; shown in the same message.
	"""
	return LazyModule(name, install=install, reason=reason)
