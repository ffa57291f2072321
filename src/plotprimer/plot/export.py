# src/plotprimer/plot/export.py
"""Save-to-file helpers: format resolution, export and read-back inspection."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple, Union

from ..imports import Image  # type: ignore
from ..logutil import get_logger

if TYPE_CHECKING:  # pragma: no cover - only for static typing
	from matplotlib.figure import Figure

LOG = get_logger(__name__)

PathLike = Union[str, Path]

SUPPORTED_FORMATS = ("png", "pdf", "svg", "jpeg")
RASTER_FORMATS = frozenset({"png", "jpeg"})

_ALIASES = {"jpg": "jpeg"}
_EXTENSIONS = {"png": ".png", "pdf": ".pdf", "svg": ".svg", "jpeg": ".jpg"}
_MAGIC = {
	"png": b"\x89PNG\r\n\x1a\n",
	"pdf": b"%PDF",
	"jpeg": b"\xff\xd8\xff",
}


@dataclass(frozen=True)
class ExportInfo:
	"""What ended up on disk after an export."""

	path: Path
	format: str
	size_bytes: int
	pixel_size: Optional[Tuple[int, int]]

	@property
	def is_raster(self) -> bool:
		return self.format in RASTER_FORMATS


def normalize_format(fig_format: str) -> str:
	"""
	Return the canonical format name for ``fig_format``.

	:param fig_format: Format name or extension, e.g. ``"PNG"``, ``".jpg"``.
	:return: One of :data:`SUPPORTED_FORMATS`.
	:raises ValueError: If the format is empty or unsupported.
	"""
	name = str(fig_format).strip().lower().lstrip(".")
	if not name:
		raise ValueError("fig_format must be a non-empty string.")
	name = _ALIASES.get(name, name)
	if name not in SUPPORTED_FORMATS:
		raise ValueError(f"Unsupported export format {fig_format!r}; choose from {', '.join(SUPPORTED_FORMATS)}.")
	return name


def _format_of_suffix(path: Path) -> Optional[str]:
	try:
		return normalize_format(path.suffix) if path.suffix else None
	except ValueError:
		return None


def resolve_export_path(filename: PathLike, fig_format: Optional[str] = None) -> Tuple[Path, str]:
	"""
	Work out the final path and format for an export.

	* ``fig_format`` given and the name has no known suffix: the extension is appended.
	* ``fig_format`` given and the suffix names a different format: ``ValueError``.
	* no ``fig_format``: the suffix decides, falling back to PNG.

	:param filename: Target file name or path.
	:param fig_format: Optional explicit format.
	:return: ``(path, format)``.
	:raises ValueError: On unsupported or conflicting formats.
	"""
	path = Path(filename)
	if not path.name:
		raise ValueError("filename must name a file.")
	suffix_format = _format_of_suffix(path)

	if fig_format is not None:
		fmt = normalize_format(fig_format)
		if suffix_format is None:
			return path.with_name(path.name + _EXTENSIONS[fmt]), fmt
		if suffix_format != fmt:
			raise ValueError(
				f"File suffix {path.suffix!r} conflicts with requested format {fmt!r}."
			)
		return path, fmt

	if suffix_format is not None:
		return path, suffix_format
	return path.with_name(path.name + _EXTENSIONS["png"]), "png"


def export_figure(
		fig: "Figure",
		filename: PathLike,
		*,
		dpi: int = 300,
		fig_format: Optional[str] = None,
		transparent: bool = False,
		tight: bool = True
) -> Path:
	"""
	Save ``fig`` to disk via :meth:`matplotlib.figure.Figure.savefig`.

	:param fig: Figure to save.
	:param filename: Target path; see :func:`resolve_export_path`.
	:param dpi: Rendering resolution in dots per inch (raster formats and embedded images).
	:param fig_format: Optional explicit format.
	:param transparent: Transparent background; not available for JPEG.
	:param tight: Crop to the drawn content (``bbox_inches="tight"``), which also
		keeps labels from being clipped at the figure edge.
	:return: The written path.
	:raises ValueError: If ``dpi`` is not positive or the format is invalid.
	"""
	if dpi <= 0:
		raise ValueError("dpi must be a positive integer.")

	path, fmt = resolve_export_path(filename, fig_format)
	if fmt == "jpeg" and transparent:
		LOG.warning("JPEG has no alpha channel; ignoring transparent=True for %s", path)
		transparent = False

	path.parent.mkdir(parents=True, exist_ok=True)
	kwargs = {"dpi": dpi, "format": fmt, "transparent": transparent}
	if tight:
		kwargs["bbox_inches"] = "tight"
	if fmt == "jpeg":
		kwargs["pil_kwargs"] = {"quality": 90}
	fig.savefig(path, **kwargs)
	LOG.info("Saved figure to %s", path)
	return path


def export_many(
		fig: "Figure",
		stem: PathLike,
		formats: Iterable[str],
		*,
		dpi: int = 300,
		transparent: bool = False,
		tight: bool = True
) -> List[Path]:
	"""
	Save one figure in several formats next to each other (``stem.png``, ``stem.svg``...).

	Duplicate formats (``jpg`` and ``jpeg``) are written once.
	"""
	written: List[Path] = []
	seen = set()
	base = Path(stem)
	for fmt in formats:
		canonical = normalize_format(fmt)
		if canonical in seen:
			continue
		seen.add(canonical)
		written.append(export_figure(
			fig, base, dpi=dpi, fig_format=canonical, transparent=transparent, tight=tight
		))
	return written


def _sniff_format(head: bytes) -> Optional[str]:
	for fmt, magic in _MAGIC.items():
		if head.startswith(magic):
			return fmt
	if b"<svg" in head:
		return "svg"
	return None


def inspect_export(path: PathLike) -> ExportInfo:
	"""
	Read an exported file back and report its format and dimensions.

	:param path: File written by :func:`export_figure`.
	:return: :class:`ExportInfo`; ``pixel_size`` is ``None`` for vector formats.
	:raises FileNotFoundError: If the file does not exist.
	:raises ValueError: If the content does not match the file suffix.
	"""
	p = Path(path)
	if not p.is_file():
		raise FileNotFoundError(p)
	declared = _format_of_suffix(p)
	with p.open("rb") as fh:
		head = fh.read(1024)
	actual = _sniff_format(head)
	if actual is None or (declared is not None and declared != actual):
		raise ValueError(f"{p} does not contain {declared or 'a supported format'} data (detected {actual}).")

	pixel_size: Optional[Tuple[int, int]] = None
	if actual in RASTER_FORMATS:
		with Image.open(p) as im:
			pixel_size = (int(im.size[0]), int(im.size[1]))
	return ExportInfo(path=p, format=actual, size_bytes=p.stat().st_size, pixel_size=pixel_size)
