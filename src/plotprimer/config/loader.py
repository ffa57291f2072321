# src/plotprimer/config/loader.py
"""
Reading ``plotprimer`` settings from INI and JSON files.

Both formats produce the same shape, ``{section: {key: value}}`` with
lower-cased names, so files of either kind can be layered. INI values are
strings on disk and go through :func:`parse_value`; JSON values are kept as
they are. A section may name one or more ``extends`` parents whose keys it
inherits.
"""

from __future__ import annotations

import ast
import configparser
import json
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, MutableMapping, Optional, Tuple, Union

from ..logutil import get_logger

LOG = get_logger(__name__)

PathLike = Union[str, Path]
Sections = Dict[str, Dict[str, Any]]

_TRUE = frozenset({"true", "yes", "on"})
_FALSE = frozenset({"false", "no", "off"})
_NONE = frozenset({"none", "null"})


class ConfigError(Exception):
	"""A settings file is missing, unreadable or holds invalid values."""


def parse_value(raw: str, *, list_delimiter: Optional[str] = ",") -> Any:
	"""
	Type a setting written as text (INI value or ``section.key=value`` override).

	Python literals win (``150``, ``2.5``, ``'text'``, ``[8, 5]``; tuples become
	lists). Then ``yes/no/on/off/true/false`` and ``none/null`` are recognized,
	then ``a, b`` splits on ``list_delimiter``. Anything else stays a string, so
	``ggplot`` needs no quotes.

	:param raw: The text as written.
	:param list_delimiter: Separator for bare lists; ``None`` turns splitting off.
	"""
	text = raw.strip()
	try:
		literal = ast.literal_eval(text)
	except (ValueError, TypeError, SyntaxError):
		pass
	else:
		return list(literal) if isinstance(literal, tuple) else literal

	word = text.lower()
	if word in _TRUE:
		return True
	if word in _FALSE:
		return False
	if word in _NONE:
		return None
	if list_delimiter and list_delimiter in text:
		return [parse_value(item, list_delimiter=None) for item in text.split(list_delimiter) if item.strip()]
	return text


def merge_layer(base: MutableMapping[str, Dict[str, Any]], layer: Mapping[str, Mapping[str, Any]]) -> None:
	"""
	Copy every key of ``layer`` into ``base``; ``layer`` wins on conflicts.

	:raises ConfigError: When a section of ``layer`` is not a mapping.
	"""
	for section, values in layer.items():
		if not isinstance(values, Mapping):
			raise ConfigError(f"[{section}] should hold key/value pairs, not {type(values).__name__}")
		target = base.setdefault(str(section).lower(), {})
		target.update((str(key).lower(), value) for key, value in values.items())


def _parents(section: Mapping[str, Any]) -> List[str]:
	declared = section.get("extends")
	if not declared:
		return []
	names = declared if isinstance(declared, list) else [declared]
	return [str(name).lower() for name in names]


def resolve_extends(data: MutableMapping[str, Dict[str, Any]]) -> None:
	"""
	Replace each section by its ``extends`` parents' keys overlaid with its own.

	``[render.print]`` with ``extends = render`` and ``dpi = 600`` ends up
	with every ``[render]`` key plus its own ``dpi``. Several parents are
	applied left to right.

	:raises ConfigError: For unknown parents and for cycles.
	"""
	flattened: Sections = {}

	def flatten(name: str, trail: Tuple[str, ...]) -> Dict[str, Any]:
		if name in flattened:
			return flattened[name]
		if name in trail:
			raise ConfigError("'extends' loops back on itself: " + " -> ".join(trail + (name,)))
		own = data[name]
		result: Dict[str, Any] = {}
		for parent in _parents(own):
			if parent not in data:
				raise ConfigError(f"[{name}] extends '{parent}', which is not defined")
			result.update(flatten(parent, trail + (name,)))
		result.update((key, value) for key, value in own.items() if key != "extends")
		flattened[name] = result
		return result

	for name in list(data):
		data[name] = flatten(name, ())


def _require(paths: Iterable[Path]) -> None:
	absent = [str(p) for p in paths if not p.is_file()]
	if absent:
		raise ConfigError("Config file(s) not found: " + ", ".join(absent))


def load_ini_files(files: Iterable[PathLike]) -> Tuple[Sections, List[Path]]:
	"""
	Read INI files in order; a later file overrides an earlier one key by key.

	Interpolation is off, so ``%`` in matplotlib format strings is literal.

	:return: ``(sections, files_read)``.
	:raises ConfigError: When a file is missing or not valid INI.
	"""
	paths = [Path(p) for p in files]
	_require(paths)

	parser = configparser.ConfigParser(interpolation=None)
	for path in paths:
		try:
			parser.read_string(path.read_text(encoding="utf-8"), source=str(path))
		except (OSError, configparser.Error) as exc:
			raise ConfigError(f"{path}: {exc}") from exc
		LOG.debug("Read INI settings from %s", path)

	data: Sections = {
		name.lower(): {key.lower(): parse_value(text) for key, text in parser.items(name)}
		for name in parser.sections()
	}
	resolve_extends(data)
	return data, paths


def load_json_files(files: Iterable[PathLike]) -> Sections:
	"""
	Read JSON files shaped ``{"render": {"dpi": 300}}`` and layer them in order.

	:raises ConfigError: When a file is missing, not JSON, or not an object of objects.
	"""
	paths = [Path(p) for p in files]
	_require(paths)

	data: Sections = {}
	for path in paths:
		try:
			document = json.loads(path.read_text(encoding="utf-8"))
		except (OSError, ValueError) as exc:
			raise ConfigError(f"{path}: not valid JSON ({exc})") from exc
		if not isinstance(document, dict):
			raise ConfigError(f"{path}: expected a JSON object at the top level")
		merge_layer(data, document)
		LOG.debug("Read JSON settings from %s", path)
	resolve_extends(data)
	return data


def _ini_sections(path: Path) -> Sections:
	return load_ini_files([path])[0]


_READERS: Dict[str, Callable[[Path], Sections]] = {
	".ini": _ini_sections,
	".cfg": _ini_sections,
	".conf": _ini_sections,
	".json": lambda path: load_json_files([path]),
}


def load_config_files(files: Iterable[PathLike]) -> Sections:
	"""
	Layer INI and JSON files in the given order, picking the reader by suffix.

	:raises ConfigError: For a suffix other than ``.ini``, ``.cfg``, ``.conf`` or ``.json``.
	"""
	data: Sections = {}
	for path in map(Path, files):
		reader = _READERS.get(path.suffix.lower())
		if reader is None:
			raise ConfigError(f"{path}: unsupported settings format {path.suffix or '(no suffix)'!r}")
		merge_layer(data, reader(path))
	return data


__all__ = [
	"ConfigError",
	"parse_value",
	"merge_layer",
	"resolve_extends",
	"load_ini_files",
	"load_json_files",
	"load_config_files",
]
