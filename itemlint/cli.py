# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Command-line entry point: `itemlint [options] SOURCE...`.

Human-readable diagnostics go to stderr as `file:line:col: severity: message`;
with --json a single `{"exit_code": ..., "diagnostics": [...]}` object is
printed to stdout instead.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List

from itemlint import __version__
from itemlint.config import resolve_config
from itemlint.core.diagnostics import Diagnostic
from itemlint.core.span import Span
from itemlint.driver import lint_paths
from itemlint.lints import Level, builtin_lints


def _diag_to_json(diag: Diagnostic) -> dict:
	"""Render a Diagnostic to a structured JSON-friendly dict."""
	span = diag.span
	return {
		"phase": diag.phase,
		"code": diag.code,
		"message": diag.message,
		"severity": diag.severity,
		"file": span.file,
		"line": span.line,
		"column": span.column,
		"notes": list(diag.notes),
	}


def _format_human(diag: Diagnostic) -> str:
	text = f"{diag.span.describe()}: {diag.severity}: {diag.message}"
	if diag.code:
		text += f" [{diag.code}]"
	for note in diag.notes:
		text += "\n  = note: " + note.replace("\n", "\n          ")
	return text


def _lint_flag(level: Level):
	def _convert(name: str) -> tuple[Level, str]:
		return level, name

	return _convert


def _build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(prog="itemlint", description="Warn about items declared after statements in a block")
	p.add_argument("sources", nargs="*", type=Path, help="Source files or directories (searched for *.rs)")
	p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
	p.add_argument(
		"-A",
		"--allow",
		dest="lint_flags",
		action="append",
		type=_lint_flag(Level.ALLOW),
		metavar="LINT",
		help="Allow LINT (repeatable; `warnings` silences every warning)",
	)
	p.add_argument(
		"-W",
		"--warn",
		dest="lint_flags",
		action="append",
		type=_lint_flag(Level.WARN),
		metavar="LINT",
		help="Warn on LINT (repeatable)",
	)
	p.add_argument(
		"-D",
		"--deny",
		dest="lint_flags",
		action="append",
		type=_lint_flag(Level.DENY),
		metavar="LINT",
		help="Deny LINT (repeatable; `warnings` turns every warning into an error)",
	)
	p.add_argument("--config", type=Path, default=None, help="Path to config JSON (default: ./itemlint.json if present)")
	p.add_argument("--json", action="store_true", help="Emit diagnostics as JSON (phase/code/message/severity/file/line/column)")
	p.add_argument("--list-lints", action="store_true", help="List the available lints and exit")
	return p


def _print_lints() -> None:
	for lint in builtin_lints():
		print(f"{lint.name:<28} {lint.default_level.value:<6} {lint.description}")


def main(argv: List[str] | None = None) -> int:
	p = _build_parser()
	args = p.parse_args(argv)

	if args.list_lints:
		_print_lints()
		return 0
	if not args.sources:
		print("itemlint: error: no input sources", file=sys.stderr)
		return 2

	try:
		config = resolve_config(args.config).apply_flags(args.lint_flags or [])
	except ValueError as err:
		where = str(args.config) if args.config is not None else "itemlint"
		if args.json:
			print(json.dumps({"exit_code": 2, "diagnostics": [{"phase": "config", "code": None, "message": str(err), "severity": "error", "file": where, "line": None, "column": None, "notes": []}]}))
		else:
			print(f"{Span(file=where).describe()}: error: {err}", file=sys.stderr)
		return 2

	result = lint_paths(args.sources, config)

	if args.json:
		payload = {
			"exit_code": result.exit_code,
			"diagnostics": [_diag_to_json(d) for d in result.diagnostics],
		}
		print(json.dumps(payload))
		return result.exit_code

	for diag in result.diagnostics:
		print(_format_human(diag), file=sys.stderr)
	if result.diagnostics:
		print(
			f"itemlint: {result.files_checked} file(s) checked, "
			f"{result.error_count} error(s), {result.warning_count} warning(s)",
			file=sys.stderr,
		)
	return result.exit_code


__all__ = ["main"]
