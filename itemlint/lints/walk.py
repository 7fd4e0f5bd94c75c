# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Block discovery: visit every block of a program and run the lint passes on it.

Blocks are visited in source order, each block before the blocks nested in it
(function bodies, trait/impl method bodies, `mod` contents, and every block
reachable through statements, tail expressions and item initialisers).
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import Iterator, Sequence

from itemlint.parser import ast
from . import LintContext, LintPass


def _iter_expr_children(e: ast.Expr) -> Iterator[ast.Expr | ast.Block]:
	if not is_dataclass(e):
		return
	for f in fields(e):
		val = getattr(e, f.name, None)
		if isinstance(val, (ast.Expr, ast.Block)):
			yield val
		elif isinstance(val, list):
			for elem in val:
				if isinstance(elem, (ast.Expr, ast.Block)):
					yield elem


class BlockWalker:
	def __init__(self, passes: Sequence[LintPass], cx: LintContext) -> None:
		self._passes = list(passes)
		self._cx = cx

	def walk_program(self, program: ast.Program) -> None:
		for entry in program.items:
			self._walk_entry(entry)

	def _walk_entry(self, entry: ast.ModuleEntry) -> None:
		if isinstance(entry, ast.MacroRulesDef):
			return
		self._walk_item(entry)

	def _walk_item(self, item: ast.Item) -> None:
		if isinstance(item, ast.FnDef):
			if item.body is not None:
				self.walk_block(item.body)
		elif isinstance(item, (ast.TraitDef, ast.ImplDef)):
			for method in item.methods:
				self._walk_item(method)
		elif isinstance(item, ast.ModDef):
			for entry in item.items or []:
				self._walk_entry(entry)
		elif isinstance(item, (ast.ConstDef, ast.StaticDef)):
			self._walk_expr(item.value)
		# Structs, enums, type aliases and `use` declarations hold no blocks.

	def walk_block(self, block: ast.Block) -> None:
		for lint_pass in self._passes:
			lint_pass.check_block(self._cx, block)
		for stmt in block.statements:
			self._walk_stmt(stmt)
		if block.tail is not None:
			self._walk_expr(block.tail)

	def _walk_stmt(self, stmt: ast.Stmt) -> None:
		if isinstance(stmt, ast.LetStmt):
			if stmt.init is not None:
				self._walk_expr(stmt.init)
		elif isinstance(stmt, ast.ItemStmt):
			self._walk_item(stmt.item)
		elif isinstance(stmt, ast.ExprStmt):
			self._walk_expr(stmt.expr)
		# MacroRulesStmt (macro_rules!) bodies are not parsed into blocks.

	def _walk_expr(self, expr: ast.Expr) -> None:
		for child in _iter_expr_children(expr):
			if isinstance(child, ast.Block):
				self.walk_block(child)
			else:
				self._walk_expr(child)


def walk_program(program: ast.Program, passes: Sequence[LintPass], cx: LintContext) -> None:
	"""Run `passes` over every block in `program`, filing diagnostics into `cx`."""
	BlockWalker(passes, cx).walk_program(program)


__all__ = ["BlockWalker", "walk_program"]
