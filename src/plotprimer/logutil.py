# src/plotprimer/logutil.py
"""Logging for the ``plotprimer`` logger tree (console by default, optional log file)."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER = "plotprimer"

CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
DETAILED_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

Level = Union[int, str]


def resolve_level(level: Level, *, what: str = "level") -> int:
	"""
	Turn ``"debug"``, ``"WARNING"`` or ``logging.INFO`` into a numeric level.

	:raises ValueError: For names the :mod:`logging` module does not know.
	"""
	if isinstance(level, int):
		return level
	number = logging.getLevelName(str(level).strip().upper())
	if not isinstance(number, int):
		raise ValueError(f"{what} must be a logging level name, got {level!r}")
	return number


def _package_logger() -> logging.Logger:
	log = logging.getLogger(ROOT_LOGGER)
	if not log.handlers:
		console = logging.StreamHandler()
		console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
		log.addHandler(console)
		log.setLevel(logging.INFO)
		log.propagate = False
	return log


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
	"""
	Logger for ``name`` placed under the ``plotprimer`` root.

	Module loggers have no handlers; the root owns the console handler.
	"""
	log = _package_logger()
	if name == ROOT_LOGGER:
		return log
	if not name.startswith(ROOT_LOGGER + "."):
		name = f"{ROOT_LOGGER}.{name}"
	return logging.getLogger(name)


def _has_file(log: logging.Logger, path: Path) -> bool:
	target = str(path.resolve())
	return any(getattr(h, "baseFilename", None) == target for h in log.handlers)


def _open_file_handler(path: Path, *, append: bool, rotate: bool, max_bytes: int, backups: int) -> logging.Handler:
	mode = "a" if append else "w"
	if rotate:
		return RotatingFileHandler(path, mode=mode, maxBytes=max_bytes, backupCount=backups, encoding="utf-8")
	return logging.FileHandler(path, mode=mode, encoding="utf-8")


def configure_logging(
		*,
		console_level: Level = "INFO",
		file_path: Optional[Union[str, Path]] = None,
		file_level: Optional[Level] = None,
		append: bool = False,
		rotate: bool = False,
		max_bytes: int = 1_000_000,
		backups: int = 2,
		formatter: Optional[logging.Formatter] = None
) -> logging.Logger:
	"""
	Set the console verbosity and optionally mirror records into a file.

	The CLI calls this once per invocation with ``WARNING`` (or ``DEBUG`` under
	``--verbose``). Calling it again with the same ``file_path`` does not add
	a second file handler.

	:param console_level: Level for the console handler.
	:param file_path: Log file to write; parent directories are created.
	:param file_level: Level for the file handler; the console level when omitted.
	:param append: Append to an existing log file instead of truncating it.
	:param rotate: Roll the file over at ``max_bytes`` keeping ``backups`` old files.
	:param formatter: Formatter for every handler touched here.
	:return: The ``plotprimer`` root logger.
	"""
	console = resolve_level(console_level, what="console_level")
	to_file = console if file_level is None else resolve_level(file_level, what="file_level")

	log = _package_logger()
	log.setLevel(min(console, to_file) if file_path else console)
	fmt = formatter or logging.Formatter(DETAILED_FORMAT)

	for handler in log.handlers:
		if type(handler) is logging.StreamHandler:
			handler.setLevel(console)
			handler.setFormatter(fmt)

	if file_path is None:
		return log

	path = Path(file_path)
	if _has_file(log, path):
		return log
	path.parent.mkdir(parents=True, exist_ok=True)
	handler = _open_file_handler(path, append=append, rotate=rotate, max_bytes=max_bytes, backups=backups)
	handler.setLevel(to_file)
	handler.setFormatter(fmt)
	log.addHandler(handler)
	log.debug("Logging to %s", path)
	return log
