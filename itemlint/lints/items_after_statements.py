# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
items_after_statements: warn on items declared after statements in a block.

Items are visible from the start of the enclosing scope, but statements run
in order, so an item written below a statement reads as if it only became
available there:

	fn main() {
		foo(); // calls the inner `foo`, not a module-level one
		fn foo() { println!("foo"); }
	}

Items that lead the block, before any local binding, are a common style and
are not reported.
"""

from __future__ import annotations

from typing import Iterator, List, Sequence, cast

from itemlint.core.diagnostics import DiagnosticSink
from itemlint.core.expansion import MacroOriginOracle
from itemlint.parser import ast
from . import Level, Lint, LintContext

ITEMS_AFTER_STATEMENTS = Lint(
	name="items_after_statements",
	default_level=Level.WARN,
	description="finds blocks where an item comes after a statement",
	explanation=__doc__ or "",
)

MESSAGE = "adding items after statements is confusing, since items exist from the start of the scope"


def check_block(block: ast.Block, oracle: MacroOriginOracle, sink: DiagnosticSink) -> None:
	"""
	Scan one block and emit a warning for every item that follows a statement.

	- Blocks whose own span comes from a macro expansion are skipped entirely.
	- Leading phase: item and other non-local declarations are skipped; the
	  first `let` ends the phase, and so does a bare expression statement,
	  which is consumed without being looked at again.
	- Flagging phase: every remaining item is reported, unless it was produced
	  by a macro, in which case the rest of the block is not scanned.
	"""
	if oracle.is_macro_generated(block.span):
		return
	stmts: Iterator[ast.Stmt] = iter(block.statements)
	for stmt in stmts:
		if stmt.kind is ast.StmtKind.LOCAL or not stmt.is_decl:
			break
	for stmt in stmts:
		if stmt.kind is not ast.StmtKind.ITEM:
			continue
		item_span = cast(ast.ItemStmt, stmt).item.span
		if oracle.is_macro_generated(item_span):
			return
		sink.emit_warning(item_span, MESSAGE)


class ItemsAfterStatements:
	"""Lint pass wrapper that runs `check_block` with the context's collaborators."""

	def get_lints(self) -> Sequence[Lint]:
		return [ITEMS_AFTER_STATEMENTS]

	def check_block(self, cx: LintContext, block: ast.Block) -> None:
		check_block(block, cx.oracle, cx.sink_for(ITEMS_AFTER_STATEMENTS))


__all__: List[str] = ["ITEMS_AFTER_STATEMENTS", "MESSAGE", "ItemsAfterStatements", "check_block"]
