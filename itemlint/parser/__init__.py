# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Front-end entry points: source text or files -> itemlint AST + diagnostics.

Syntax errors never escape as exceptions; they are returned as parser-phase
diagnostics so the driver can report them alongside lint results.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from itemlint.core.diagnostics import Diagnostic
from itemlint.core.span import Span
from . import ast
from .parser import ParamTypeError, parse_program


def _describe_unexpected(err: UnexpectedInput) -> str:
	if isinstance(err, UnexpectedToken):
		if err.token.type == "$END":
			return "unexpected end of input"
		return f"unexpected token `{err.token}`"
	if isinstance(err, UnexpectedCharacters):
		return f"unexpected character `{err.char}`"
	if isinstance(err, UnexpectedEOF):
		return "unexpected end of input"
	return "syntax error"


def _unexpected_to_diagnostic(err: UnexpectedInput, source: str, file: Optional[str]) -> Diagnostic:
	span = Span.from_loc(err).with_file(file)
	notes: List[str] = []
	expected = sorted(getattr(err, "expected", None) or getattr(err, "allowed", None) or [])
	if expected:
		notes.append("expected one of: " + ", ".join(expected))
	if isinstance(span.line, int) and span.line > 0:
		context = err.get_context(source).rstrip()
		if context:
			notes.append(context)
	return Diagnostic(message=_describe_unexpected(err), phase="parser", severity="error", span=span, notes=notes)


def parse_source(source: str, file: Optional[str] = None) -> Tuple[Optional[ast.Program], List[Diagnostic]]:
	"""
	Parse `source` into a Program.

	Returns `(program, [])` on success and `(None, diagnostics)` when the text
	does not parse or nests too deeply to build.
	"""
	try:
		return parse_program(source, file=file), []
	except UnexpectedInput as err:
		return None, [_unexpected_to_diagnostic(err, source, file)]
	except ParamTypeError as err:
		return None, [Diagnostic(message=str(err), phase="parser", severity="error", span=err.loc)]
	except RecursionError:
		return None, [
			Diagnostic(
				message="expression nesting too deep to parse",
				phase="parser",
				severity="error",
				span=Span(file=file),
			)
		]


def parse_file(path: Path) -> Tuple[Optional[ast.Program], List[Diagnostic]]:
	"""Read and parse one source file; unreadable files produce a diagnostic."""
	try:
		source = path.read_text(encoding="utf-8")
	except (OSError, UnicodeDecodeError) as err:
		return None, [
			Diagnostic(
				message=f"failed to read source: {err}",
				phase="parser",
				severity="error",
				span=Span(file=str(path)),
			)
		]
	return parse_source(source, file=str(path))


__all__ = ["ParamTypeError", "ast", "parse_file", "parse_program", "parse_source"]
