# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Driver: parse sources, run every built-in pass over every block, collect results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from itemlint.config import LintConfig
from itemlint.core.diagnostics import Diagnostic
from itemlint.core.expansion import MacroOriginOracle
from itemlint.core.span import Span
from itemlint.lints import builtin_passes
from itemlint.lints.walk import walk_program
from itemlint.parser import ast, parse_file, parse_source

SOURCE_SUFFIX = ".rs"


@dataclass
class LintResult:
	diagnostics: List[Diagnostic] = field(default_factory=list)
	files_checked: int = 0

	@property
	def error_count(self) -> int:
		return sum(1 for d in self.diagnostics if d.is_error)

	@property
	def warning_count(self) -> int:
		return sum(1 for d in self.diagnostics if d.severity == "warning")

	@property
	def exit_code(self) -> int:
		return 1 if self.error_count else 0


def lint_program(
	program: ast.Program,
	config: Optional[LintConfig] = None,
	oracle: Optional[MacroOriginOracle] = None,
) -> List[Diagnostic]:
	cx = (config or LintConfig()).context(oracle)
	try:
		walk_program(program, builtin_passes(), cx)
	except RecursionError:
		cx.collector.add(
			Diagnostic(
				message="expression nesting too deep to lint",
				phase="lint",
				severity="error",
				span=Span(file=program.span.file),
			)
		)
	return cx.diagnostics


def lint_source(source: str, file: Optional[str] = None, config: Optional[LintConfig] = None) -> LintResult:
	program, diags = parse_source(source, file=file)
	if program is None:
		return LintResult(diagnostics=diags, files_checked=1)
	return LintResult(diagnostics=diags + lint_program(program, config), files_checked=1)


def discover_sources(paths: Iterable[Path]) -> tuple[List[Path], List[Diagnostic]]:
	"""
	Expand directories into the `*.rs` files beneath them (sorted).

	Missing paths are reported as diagnostics rather than raised.
	"""
	files: List[Path] = []
	diags: List[Diagnostic] = []
	for path in paths:
		if path.is_dir():
			files.extend(sorted(p for p in path.rglob(f"*{SOURCE_SUFFIX}") if p.is_file()))
		elif path.exists():
			files.append(path)
		else:
			diags.append(
				Diagnostic(
					message=f"no such file or directory: {path}",
					phase="driver",
					severity="error",
					span=Span(file=str(path)),
				)
			)
	return files, diags


def lint_paths(paths: Iterable[Path], config: Optional[LintConfig] = None) -> LintResult:
	files, diags = discover_sources(paths)
	result = LintResult(diagnostics=list(diags))
	for path in files:
		program, parse_diags = parse_file(path)
		result.diagnostics.extend(parse_diags)
		result.files_checked += 1
		if program is not None:
			result.diagnostics.extend(lint_program(program, config))
	return result


__all__ = ["LintResult", "discover_sources", "lint_paths", "lint_program", "lint_source"]
