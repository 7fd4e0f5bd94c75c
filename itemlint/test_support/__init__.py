# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Shared helpers for tests that drive lint passes without the parser.

These build synthetic blocks whose statements sit on distinct lines, so tests
can name statements by line number, plus fake collaborators for the scanner.
"""

from __future__ import annotations

from typing import Iterable, List, Set, Tuple

from itemlint.core.span import ExpnInfo, Span
from itemlint.parser import ast

TEST_FILE = "test.rs"


def span_at(line: int, *, macro: str | None = None) -> Span:
	"""Span on `line`; with `macro`, the span is marked as expanded from that macro."""
	expansion = None
	if macro is not None:
		expansion = ExpnInfo(macro_name=macro, call_site=Span(file=TEST_FILE, line=line, column=1))
	return Span(file=TEST_FILE, line=line, column=1, expansion=expansion)


def fn_item(name: str, line: int, *, macro: str | None = None) -> ast.ItemStmt:
	span = span_at(line, macro=macro)
	body = ast.Block(statements=[], span=span_at(line, macro=macro))
	item = ast.FnDef(name=name, params=[], return_type=None, body=body, span=span)
	return ast.ItemStmt(span=span, item=item)


def struct_item(name: str, line: int, *, macro: str | None = None) -> ast.ItemStmt:
	span = span_at(line, macro=macro)
	return ast.ItemStmt(span=span, item=ast.StructDef(name=name, fields=[], span=span))


def let_stmt(name: str, line: int, value: int = 1) -> ast.LetStmt:
	span = span_at(line)
	return ast.LetStmt(span=span, pattern=ast.Pattern(span=span, name=name), init=ast.Literal(span=span, value=value))


def expr_stmt(line: int, func: str = "work") -> ast.ExprStmt:
	span = span_at(line)
	call = ast.Call(span=span, func=ast.PathExpr(span=span, segments=[func]), args=[])
	return ast.ExprStmt(span=span, expr=call)


def macro_rules_stmt(name: str, line: int) -> ast.MacroRulesStmt:
	span = span_at(line)
	return ast.MacroRulesStmt(span=span, macro=ast.MacroRulesDef(name=name, span=span))


def block_of(*statements: ast.Stmt, macro: str | None = None) -> ast.Block:
	return ast.Block(statements=list(statements), span=span_at(0, macro=macro))


class RecordingSink:
	"""DiagnosticSink fake that keeps every emission in order."""

	def __init__(self) -> None:
		self.emitted: List[Tuple[Span, str]] = []

	def emit_warning(self, span: Span, message: str) -> None:
		self.emitted.append((span, message))

	@property
	def lines(self) -> List[int | None]:
		return [span.line for span, _msg in self.emitted]


class LineOracle:
	"""MacroOriginOracle fake: spans on the given lines count as macro-generated."""

	def __init__(self, macro_lines: Iterable[int] = ()) -> None:
		self.macro_lines: Set[int] = set(macro_lines)
		self.queries: List[Span] = []

	def is_macro_generated(self, span: Span) -> bool:
		self.queries.append(span)
		return span.line in self.macro_lines


__all__ = [
	"LineOracle",
	"RecordingSink",
	"TEST_FILE",
	"block_of",
	"expr_stmt",
	"fn_item",
	"let_stmt",
	"macro_rules_stmt",
	"span_at",
	"struct_item",
]
