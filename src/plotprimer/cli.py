# src/plotprimer/cli.py
"""
Command-line entry point.

    plotprimer build -o TUTORIAL.md
    plotprimer check --lint
    plotprimer gallery out/ --format png --format svg
    plotprimer versions
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional, Sequence

from . import imports
from .config import ConfigError, PrimerConfig
from .logutil import configure_logging, get_logger

LOG = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="plotprimer",
		description="Build, check and illustrate the matplotlib student primer.",
	)
	parser.add_argument("-c", "--config", action="append", default=[], metavar="FILE",
	                    help="INI or JSON config file (repeatable, later files win).")
	parser.add_argument("-o", "--override", action="append", default=[], metavar="SECTION.KEY=VALUE",
	                    help="Override one config value, e.g. render.dpi=200 (repeatable).")
	parser.add_argument("-v", "--verbose", action="store_true", help="Log debug messages.")
	sub = parser.add_subparsers(dest="command", required=True)

	build = sub.add_parser("build", help="Assemble the tutorial into one Markdown file.")
	build.add_argument("--output", default="TUTORIAL.md", help="Target path (default: %(default)s).")
	build.add_argument("--no-toc", action="store_true", help="Leave out the table of contents.")

	check = sub.add_parser("check", help="Run every Python snippet of the tutorial.")
	check.add_argument("--section", action="append", default=[], metavar="SLUG",
	                   help="Only check these sections (repeatable).")
	check.add_argument("--lint", action="store_true", default=None, help="Also look for plotting pitfalls.")
	check.add_argument("--strict", action="store_true", help="Treat pitfall findings as failures.")
	check.add_argument("--workdir", help="Keep files written by snippets in this directory.")
	check.add_argument("--json", action="store_true", help="Print the report as JSON.")

	gallery = sub.add_parser("gallery", help="Render the example figures to files.")
	gallery.add_argument("outdir", help="Directory for the images.")
	gallery.add_argument("--format", dest="formats", action="append", metavar="FMT",
	                     help="Export format (repeatable); defaults to render.formats.")
	gallery.add_argument("--dpi", type=int, help="Resolution; defaults to render.dpi.")
	gallery.add_argument("--example", dest="names", action="append", metavar="NAME",
	                     help="Only render these examples (repeatable).")

	sub.add_parser("versions", help="Show the installed plotting stack.")
	return parser


def _load_config(args: argparse.Namespace) -> PrimerConfig:
	cfg = PrimerConfig()
	if args.config:
		cfg.load_files(args.config)
	return cfg.apply_overrides(args.override).validate()


def _cmd_build(args: argparse.Namespace, cfg: PrimerConfig) -> int:
	from .tutorial import write_document

	toc = cfg.get("tutorial", "toc") and not args.no_toc
	path = write_document(args.output, title=cfg.get("tutorial", "title"), toc=toc)
	print(path)
	return 0


def _cmd_check(args: argparse.Namespace, cfg: PrimerConfig) -> int:
	from .doccheck import check_document
	from .tutorial import get_section, load_sections

	sections = load_sections()
	if args.section:
		sections = [get_section(slug, sections) for slug in args.section]
	lint = cfg.get("check", "lint") if args.lint is None else args.lint
	report = check_document(
		sections,
		workdir=args.workdir,
		backend=cfg.get("check", "backend"),
		shared_namespace=cfg.get("check", "shared_namespace"),
		fail_fast=cfg.get("check", "fail_fast"),
		lint=lint or args.strict,
	)
	if args.json:
		print(json.dumps(report.to_dict(), indent=2))
	else:
		print(report.summary())
	if not report.ok or (args.strict and report.findings):
		return 1
	return 0


def _cmd_gallery(args: argparse.Namespace, cfg: PrimerConfig) -> int:
	from .plot import use_style
	from .tutorial.examples import render_gallery

	formats = args.formats or cfg.get("render", "formats")
	dpi = args.dpi if args.dpi is not None else cfg.get("render", "dpi")
	with use_style(cfg.get("render", "style")):
		written = render_gallery(
			args.outdir,
			formats=formats,
			dpi=dpi,
			transparent=cfg.get("render", "transparent"),
			figsize=cfg.figsize(),
			names=args.names,
		)
	for name, paths in written.items():
		print(f"{name}: {', '.join(str(p) for p in paths)}")
	return 0


def _cmd_versions(args: argparse.Namespace, cfg: PrimerConfig) -> int:
	for name, version in imports.stack_versions().items():
		print(f"{name:<12} {version or 'not installed'}")
	missing = imports.missing_dependencies()
	for name, hint in missing.items():
		print(f"install {name} with: {hint}")
	return 1 if missing else 0


_COMMANDS = {
	"build": _cmd_build,
	"check": _cmd_check,
	"gallery": _cmd_gallery,
	"versions": _cmd_versions,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)
	configure_logging(console_level="DEBUG" if args.verbose else "WARNING")

	try:
		cfg = _load_config(args)
		return _COMMANDS[args.command](args, cfg)
	except (ConfigError, KeyError, ValueError) as exc:
		LOG.error("%s", exc)
		print(f"plotprimer: error: {exc}", file=sys.stderr)
		return 2


def run(argv: Optional[List[str]] = None) -> None:
	sys.exit(main(argv))


if __name__ == "__main__":
	run()
