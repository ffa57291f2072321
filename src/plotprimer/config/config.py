from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from types import TracebackType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Type, Union

from ..logutil import get_logger
from . import loader
from .loader import ConfigError
from .schema import KeySpec, SchemaMap, apply_defaults, make_choices_validator, make_positive_validator, validate_data

LOG = get_logger(__name__)
PathLike = Union[str, Path]

EXPORT_FORMATS = ("png", "pdf", "svg", "jpeg", "jpg")

DEFAULT_SCHEMA: Dict[str, Dict[str, KeySpec]] = {
	"render": {
		"dpi": KeySpec(int, default=150, validator=make_positive_validator()),
		"formats": KeySpec(list, default=["png"], validator=make_choices_validator(EXPORT_FORMATS)),
		"style": KeySpec(str, default="default"),
		"figsize": KeySpec(list, default=[8.0, 5.0], validator=make_positive_validator()),
		"transparent": KeySpec(bool, default=False),
	},
	"check": {
		"backend": KeySpec(str, default="Agg"),
		"shared_namespace": KeySpec(bool, default=True),
		"fail_fast": KeySpec(bool, default=False),
		"lint": KeySpec(bool, default=False),
	},
	"tutorial": {
		"title": KeySpec(str, default="Plotting with Matplotlib: A Student Primer"),
		"toc": KeySpec(bool, default=True),
	},
}

# keys whose scalar INI values are promoted to one-item lists
_LIST_KEYS = {("render", "formats")}


class PrimerConfig:
	"""
	Layered INI/JSON configuration for rendering and checking the tutorial.

	Typical flow:
		cfg = PrimerConfig()
		cfg.load_files(["plotprimer.ini"]).apply_overrides(["render.dpi=200"]).validate()
		cfg.get("render", "dpi")

	Built-in defaults are always present, so ``PrimerConfig().validate()`` succeeds
	without any file.
	"""

	def __init__(self, schema: Optional[SchemaMap] = None) -> None:
		self._schema: SchemaMap = schema if schema is not None else DEFAULT_SCHEMA
		self._data: Dict[str, Dict[str, Any]] = {}
		apply_defaults(self._data, self._schema)

	def __repr__(self) -> str:
		return f"{self.__class__.__name__}(sections={self.sections()})"

	def __str__(self) -> str:
		lines = [f"[{sec}] ({len(keys)} keys)" for sec, keys in sorted(self._data.items())]
		return f"{self.__class__.__name__} with {len(self._data)} section(s):\n" + "\n".join(lines)

	def __enter__(self) -> "PrimerConfig":
		return self

	def __exit__(
			self,
			exc_type: Optional[Type[BaseException]],
			exc_val: Optional[BaseException],
			exc_tb: Optional[TracebackType]
	) -> bool:
		if exc_type is not None:
			LOG.error("Exception inside PrimerConfig context: %s", exc_type, exc_info=(exc_type, exc_val, exc_tb))
		return False

	# --- Load ---
	def load_files(self, files: Iterable[PathLike]) -> "PrimerConfig":
		"""
		Merge INI and/or JSON files into the current values (later files win).

		:param files: Config paths; the type is chosen by suffix.
		:return: self.
		:raises ConfigError: On missing, unreadable or malformed files.
		"""
		paths = list(files)
		loader.merge_layer(self._data, loader.load_config_files(paths))
		self._normalize()
		LOG.info("Loaded %d config file(s).", len(paths))
		return self

	def load_mapping(self, mapping: Mapping[str, Mapping[str, Any]]) -> "PrimerConfig":
		"""Merge an in-memory ``section -> key -> value`` mapping."""
		loader.merge_layer(self._data, mapping)
		self._normalize()
		return self

	def apply_overrides(self, overrides: Optional[Sequence[str]]) -> "PrimerConfig":
		"""
		Apply ``section.key=value`` overrides (from ``-o/--override`` on the command line).

		:return: self.
		:raises ConfigError: If an item has an invalid format.
		"""
		items = list(overrides or [])
		for item in items:
			try:
				left, right = item.split("=", 1)
				section_part, key_part = left.split(".", 1)
			except ValueError as exc:
				raise ConfigError(f"Invalid override '{item}'. Use format section.key=value.") from exc
			section_name = section_part.strip().lower()
			key_name = key_part.strip().lower()
			self._data.setdefault(section_name, {})[key_name] = loader.parse_value(right)
			LOG.debug("override: %s.%s=%r", section_name, key_name, self._data[section_name][key_name])
		if items:
			self._normalize()
			LOG.info("Applied %d override(s).", len(items))
		return self

	def _normalize(self) -> None:
		for section, key in _LIST_KEYS:
			value = self._data.get(section, {}).get(key)
			if isinstance(value, str):
				self._data[section][key] = [value]
		figsize = self._data.get("render", {}).get("figsize")
		if isinstance(figsize, list) and all(isinstance(v, int) and not isinstance(v, bool) for v in figsize):
			self._data["render"]["figsize"] = [float(v) for v in figsize]

	# --- Validate / access ---
	def validate(self) -> "PrimerConfig":
		"""
		Validate all values against the schema.

		:return: self.
		:raises ConfigError: Listing every problem found.
		"""
		validate_data(self._data, self._schema)
		return self

	def sections(self) -> List[str]:
		return sorted(self._data.keys())

	def get(self, section: str, key: str, default: Any = None) -> Any:
		return self._data.get(section.lower(), {}).get(key.lower(), default)

	def section(self, section: str) -> Dict[str, Any]:
		"""Return a copy of one section; unknown sections raise ``KeyError``."""
		try:
			return deepcopy(self._data[section.lower()])
		except KeyError:
			raise KeyError(f"Unknown config section {section!r}; known: {self.sections()}") from None

	def figsize(self) -> Tuple[float, float]:
		width, height = self.get("render", "figsize")
		return float(width), float(height)

	def to_dict(self) -> Dict[str, Dict[str, Any]]:
		return deepcopy(self._data)
