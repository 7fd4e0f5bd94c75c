# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lark-based parser that builds the itemlint AST.

Block-bodied macro invocations (`name! { ... }`) are expanded while building:
the invocation is replaced by its body, and every node built from the body
gets a span whose `expansion` names the macro and the call site.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from lark import Lark, Token, Tree

from itemlint.core.span import ExpnInfo, Span
from .ast import (
	ArrayLiteral,
	Assign,
	Binary,
	Block,
	BlockExpr,
	Break,
	Call,
	ConstDef,
	Continue,
	EnumDef,
	Expr,
	ExprStmt,
	Field,
	FnDef,
	ForExpr,
	IfExpr,
	ImplDef,
	Index,
	Item,
	ItemStmt,
	LetStmt,
	Literal,
	LoopExpr,
	MacroCall,
	MacroRulesDef,
	MacroRulesStmt,
	MethodCall,
	ModDef,
	ModuleEntry,
	Param,
	PathExpr,
	Pattern,
	Program,
	Return,
	StaticDef,
	Stmt,
	StructDef,
	StructField,
	TraitDef,
	TryOp,
	Tuple,
	TypeAlias,
	TypeExpr,
	Unary,
	UseDecl,
	Variant,
	WhileExpr,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="program",
	propagate_positions=True,
	maybe_placeholders=False,
)

_ITEM_RULES = {
	"fn_def",
	"struct_def",
	"enum_def",
	"const_def",
	"static_def",
	"type_alias",
	"mod_def",
	"use_decl",
	"trait_def",
	"impl_def",
}


class ParamTypeError(ValueError):
	"""
	A non-receiver parameter was written without a type.

	The grammar accepts a bare pattern so `self` parses; the builder rejects
	every other bare parameter and carries its location for the diagnostic.
	"""

	def __init__(self, message: str, *, loc: Span) -> None:
		super().__init__(message)
		self.loc = loc


def parse_program(source: str, file: Optional[str] = None) -> Program:
	"""Parse `source` into a Program. Raises lark `UnexpectedInput` on syntax errors."""
	tree = _PARSER.parse(source)
	return _AstBuilder(file).build_program(tree)


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)


def _subtrees(tree: Tree) -> List[Tree]:
	return [c for c in tree.children if isinstance(c, Tree)]


def _names(tree: Tree) -> List[str]:
	return [str(c) for c in tree.children if isinstance(c, Token) and c.type == "NAME"]


def _find(tree: Tree, rule: str) -> Optional[Tree]:
	return next((c for c in tree.children if isinstance(c, Tree) and _name(c) == rule), None)


def _has(tree: Tree, rule: str) -> bool:
	return _find(tree, rule) is not None


def _op_text(tree: Tree) -> str:
	return " ".join(str(c) for c in tree.children if isinstance(c, Token)).replace("& mut", "&mut")


class _AstBuilder:
	"""Builds AST nodes from lark trees, tracking the active macro expansion."""

	def __init__(self, file: Optional[str]) -> None:
		self._file = file
		self._expansion: Optional[ExpnInfo] = None

	# --- spans ---------------------------------------------------------------

	def _span(self, node: Tree | Token) -> Span:
		loc = node if isinstance(node, Token) else node.meta
		return Span.from_loc(loc).with_file(self._file).with_expansion(self._expansion)

	def _enter_expansion(self, macro_tree: Tree) -> Optional[ExpnInfo]:
		"""Push an expansion for `macro_tree`; returns the previous one for restoring."""
		previous = self._expansion
		call_site = self._span(macro_tree)
		self._expansion = ExpnInfo(macro_name=_names(macro_tree)[0], call_site=call_site)
		return previous

	# --- module level --------------------------------------------------------

	def build_program(self, tree: Tree) -> Program:
		items = self._build_module_entries(tree)
		span = Span(file=self._file, line=1, column=1)
		return Program(items=items, span=span)

	def _build_module_entries(self, tree: Tree) -> List[ModuleEntry]:
		entries: List[ModuleEntry] = []
		for child in _subtrees(tree):
			kind = _name(child)
			if kind == "item_macro":
				previous = self._enter_expansion(child)
				try:
					entries.extend(self._build_module_entries(child))
				finally:
					self._expansion = previous
			elif kind == "macro_rules_def":
				entries.append(self._build_macro_rules(child))
			elif kind in _ITEM_RULES:
				entries.append(self._build_item(child))
		return entries

	def _build_macro_rules(self, tree: Tree) -> MacroRulesDef:
		return MacroRulesDef(name=_names(tree)[0], span=self._span(tree))

	# --- items ---------------------------------------------------------------

	def _build_item(self, tree: Tree) -> Item:
		kind = _name(tree)
		if kind == "fn_def" or kind == "fn_sig":
			return self._build_fn(tree)
		if kind == "struct_def":
			return self._build_struct(tree)
		if kind == "enum_def":
			return self._build_enum(tree)
		if kind == "const_def":
			subs = _subtrees(tree)
			type_tree, value_tree = [s for s in subs if _name(s) != "vis"]
			return ConstDef(
				name=_names(tree)[0],
				type_expr=self._build_type(type_tree),
				value=self._build_expr(value_tree),
				span=self._span(tree),
				public=_has(tree, "vis"),
			)
		if kind == "static_def":
			subs = [s for s in _subtrees(tree) if _name(s) not in {"vis", "mutability"}]
			type_tree, value_tree = subs
			return StaticDef(
				name=_names(tree)[0],
				type_expr=self._build_type(type_tree),
				value=self._build_expr(value_tree),
				span=self._span(tree),
				mutable=_has(tree, "mutability"),
				public=_has(tree, "vis"),
			)
		if kind == "type_alias":
			target = next(s for s in _subtrees(tree) if _name(s) != "vis")
			return TypeAlias(
				name=_names(tree)[0],
				target=self._build_type(target),
				span=self._span(tree),
				public=_has(tree, "vis"),
			)
		if kind == "mod_def":
			body = _find(tree, "mod_body")
			return ModDef(
				name=_names(tree)[0],
				items=self._build_module_entries(body) if body is not None else None,
				span=self._span(tree),
				public=_has(tree, "vis"),
			)
		if kind == "use_decl":
			return self._build_use(tree)
		if kind == "trait_def":
			return TraitDef(
				name=_names(tree)[0],
				methods=[self._build_fn(s) for s in _subtrees(tree) if _name(s) in {"fn_def", "fn_sig"}],
				span=self._span(tree),
				public=_has(tree, "vis"),
			)
		if kind == "impl_def":
			return self._build_impl(tree)
		raise ValueError(f"unknown item rule: {kind}")

	def _build_fn(self, tree: Tree) -> FnDef:
		params_tree = _find(tree, "param_list")
		ret_tree = _find(tree, "ret_type")
		body_tree = _find(tree, "block")
		return FnDef(
			name=_names(tree)[0],
			params=[self._build_param(p) for p in _subtrees(params_tree)] if params_tree is not None else [],
			return_type=self._build_type(_subtrees(ret_tree)[0]) if ret_tree is not None else None,
			body=self._build_block(body_tree) if body_tree is not None else None,
			span=self._span(tree),
			public=_has(tree, "vis"),
		)

	def _build_param(self, tree: Tree) -> Param:
		kind = _name(tree)
		span = self._span(tree)
		if kind == "ref_self_param":
			return Param(span=span, name=_names(tree)[0], type_expr=None, is_self=True, by_ref=True, mutable=_has(tree, "mutability"))
		pattern = self._build_pattern(_subtrees(tree)[0])
		if kind == "typed_param":
			return Param(
				span=span,
				name=pattern.name or "_",
				type_expr=self._build_type(_subtrees(tree)[1]),
				mutable=pattern.mutable,
			)
		if pattern.name != "self":
			raise ParamTypeError(f"parameter `{pattern.name or '(..)'}` is missing a type", loc=span)
		return Param(span=span, name="self", type_expr=None, is_self=True, mutable=pattern.mutable)

	def _build_struct(self, tree: Tree) -> StructDef:
		body = next(s for s in _subtrees(tree) if _name(s) in {"named_fields", "tuple_fields", "unit_fields"})
		fields: List[StructField] = []
		for field_tree in _subtrees(body):
			type_tree = next(s for s in _subtrees(field_tree) if _name(s) != "vis")
			names = _names(field_tree)
			fields.append(
				StructField(
					span=self._span(field_tree),
					name=names[0] if _name(field_tree) == "named_field" else None,
					type_expr=self._build_type(type_tree),
				)
			)
		return StructDef(name=_names(tree)[0], fields=fields, span=self._span(tree), public=_has(tree, "vis"))

	def _build_enum(self, tree: Tree) -> EnumDef:
		variants: List[Variant] = []
		for variant_tree in _subtrees(tree):
			if _name(variant_tree) != "variant":
				continue
			variants.append(
				Variant(
					span=self._span(variant_tree),
					name=_names(variant_tree)[0],
					fields=[self._build_type(t) for t in _subtrees(variant_tree)],
				)
			)
		return EnumDef(name=_names(tree)[0], variants=variants, span=self._span(tree), public=_has(tree, "vis"))

	def _build_use(self, tree: Tree) -> UseDecl:
		path_tree = _find(tree, "use_path")
		if path_tree is None:
			raise ValueError("use declaration without a path")
		alias_tree = _find(path_tree, "use_alias")
		return UseDecl(
			path=_names(path_tree),
			span=self._span(tree),
			glob=_has(path_tree, "use_glob"),
			alias=_names(alias_tree)[0] if alias_tree is not None else None,
			public=_has(tree, "vis"),
		)

	def _build_impl(self, tree: Tree) -> ImplDef:
		subs = _subtrees(tree)
		for_tree = _find(tree, "impl_for")
		first_type = self._build_type(subs[0])
		if for_tree is not None:
			trait: Optional[TypeExpr] = first_type
			self_type = self._build_type(_subtrees(for_tree)[0])
		else:
			trait = None
			self_type = first_type
		return ImplDef(
			self_type=self_type,
			trait=trait,
			methods=[self._build_fn(s) for s in subs if _name(s) == "fn_def"],
			span=self._span(tree),
		)

	# --- types and patterns --------------------------------------------------

	def _build_type(self, tree: Tree) -> TypeExpr:
		kind = _name(tree)
		span = self._span(tree)
		if kind == "ref_type":
			inner = self._build_type(_subtrees(tree)[-1])
			return TypeExpr(name=inner.name, args=inner.args, ref=True, mutable=_has(tree, "mutability"), span=span)
		if kind == "path_type":
			path_tree = _find(tree, "type_path")
			args_tree = _find(tree, "generic_args")
			if path_tree is None:
				raise ValueError("path type without a path")
			args = [self._build_type(t) for t in _subtrees(args_tree)] if args_tree is not None else []
			return TypeExpr(name="::".join(_names(path_tree)), args=args, span=span)
		if kind == "unit_type":
			return TypeExpr(name="()", span=span)
		if kind == "tuple_type":
			return TypeExpr(name="(..)", args=[self._build_type(t) for t in _subtrees(tree)], span=span)
		if kind == "slice_type":
			return TypeExpr(name="[]", args=[self._build_type(_subtrees(tree)[0])], span=span)
		raise ValueError(f"unknown type rule: {kind}")

	def _build_pattern(self, tree: Tree) -> Pattern:
		span = self._span(tree)
		if _name(tree) == "tuple_pattern":
			return Pattern(span=span, elements=[self._build_pattern(p) for p in _subtrees(tree)])
		return Pattern(span=span, name=_names(tree)[0], mutable=_has(tree, "mutability"))

	# --- blocks and statements -----------------------------------------------

	def _build_block(self, tree: Tree) -> Block:
		span = self._span(tree)
		statements = self._build_stmts(tree)
		tail_tree = _find(tree, "tail")
		tail = self._build_expr(_subtrees(tail_tree)[0]) if tail_tree is not None else None
		return Block(statements=statements, span=span, tail=tail)

	def _build_stmts(self, tree: Tree) -> List[Stmt]:
		statements: List[Stmt] = []
		for child in _subtrees(tree):
			kind = _name(child)
			if kind == "macro_stmt":
				previous = self._enter_expansion(child)
				try:
					statements.extend(self._build_stmts(child))
				finally:
					self._expansion = previous
				continue
			stmt = self._build_stmt(child)
			if stmt is not None:
				statements.append(stmt)
		return statements

	def _build_stmt(self, tree: Tree) -> Optional[Stmt]:
		kind = _name(tree)
		if kind == "let_stmt":
			return self._build_let(tree)
		if kind == "item_stmt":
			item = self._build_item(_subtrees(tree)[0])
			return ItemStmt(span=self._span(tree), item=item)
		if kind == "macro_rules_def":
			return MacroRulesStmt(span=self._span(tree), macro=self._build_macro_rules(tree))
		if kind == "expr_stmt":
			return ExprStmt(span=self._span(tree), expr=self._build_expr(_subtrees(tree)[0]), has_semi=True)
		if kind == "block_like_stmt":
			return ExprStmt(span=self._span(tree), expr=self._build_expr(_subtrees(tree)[0]), has_semi=False)
		# `tail` is handled by the block; `empty_stmt` carries nothing.
		return None

	def _build_let(self, tree: Tree) -> LetStmt:
		pattern_tree = next(s for s in _subtrees(tree) if _name(s) in {"ident_pattern", "tuple_pattern"})
		type_tree = _find(tree, "let_type")
		init_tree = _find(tree, "let_init")
		return LetStmt(
			span=self._span(tree),
			pattern=self._build_pattern(pattern_tree),
			type_expr=self._build_type(_subtrees(type_tree)[0]) if type_tree is not None else None,
			init=self._build_expr(_subtrees(init_tree)[0]) if init_tree is not None else None,
		)

	# --- expressions ---------------------------------------------------------

	def _build_expr(self, node: Tree | Token) -> Expr:
		if isinstance(node, Token):
			return self._build_token_expr(node)
		kind = _name(node)
		span = self._span(node)
		subs = _subtrees(node)
		if kind == "int_lit":
			return Literal(span=span, value=int(str(node.children[0]).replace("_", "")))
		if kind == "float_lit":
			return Literal(span=span, value=float(str(node.children[0]).replace("_", "")))
		if kind == "string_lit":
			return Literal(span=span, value=str(node.children[0])[1:-1])
		if kind == "bool_lit":
			return Literal(span=span, value=str(node.children[0]) == "true")
		if kind == "path_expr":
			return PathExpr(span=span, segments=_names(node))
		if kind == "unit":
			return Tuple(span=span, elements=[])
		if kind == "tuple":
			return Tuple(span=span, elements=[self._build_expr(e) for e in subs])
		if kind == "array":
			return ArrayLiteral(span=span, elements=self._build_args(_find(node, "arg_list")))
		if kind == "macro_call":
			return MacroCall(span=span, name=_names(node)[0], args=self._build_args(_find(node, "arg_list")))
		if kind == "return_expr":
			return Return(span=span, value=self._build_expr(subs[0]) if subs else None)
		if kind == "break_expr":
			return Break(span=span, value=self._build_expr(subs[0]) if subs else None)
		if kind == "continue_expr":
			return Continue(span=span)
		if kind == "field":
			return Field(span=span, value=self._build_expr(node.children[0]), name=_names(node)[-1])
		if kind == "call":
			func = self._build_expr(node.children[0])
			args = self._build_args(_find(node, "arg_list"))
			if isinstance(func, Field):
				return MethodCall(span=span, receiver=func.value, method=func.name, args=args)
			return Call(span=span, func=func, args=args)
		if kind == "index":
			return Index(span=span, value=self._build_expr(subs[0]), index=self._build_expr(subs[1]))
		if kind == "try_op":
			return TryOp(span=span, value=self._build_expr(node.children[0]))
		if kind == "unary":
			return Unary(span=span, op=_op_text(subs[0]), operand=self._build_expr(subs[1]))
		if kind == "binary":
			return Binary(span=span, op=_op_text(subs[1]), left=self._build_expr(subs[0]), right=self._build_expr(subs[2]))
		if kind == "assign":
			return Assign(span=span, op=_op_text(subs[1]), target=self._build_expr(subs[0]), value=self._build_expr(subs[2]))
		if kind == "block_expr":
			return BlockExpr(span=span, block=self._build_block(subs[0]))
		if kind == "unsafe_block":
			return BlockExpr(span=span, block=self._build_block(subs[0]), unsafe=True)
		if kind == "if_expr":
			else_branch = self._build_expr(subs[2]) if len(subs) > 2 else None
			return IfExpr(span=span, cond=self._build_expr(subs[0]), then_block=self._build_block(subs[1]), else_branch=else_branch)
		if kind == "while_expr":
			return WhileExpr(span=span, cond=self._build_expr(subs[0]), body=self._build_block(subs[1]))
		if kind == "loop_expr":
			return LoopExpr(span=span, body=self._build_block(subs[0]))
		if kind == "for_expr":
			return ForExpr(
				span=span,
				pattern=self._build_pattern(subs[0]),
				iterable=self._build_expr(subs[1]),
				body=self._build_block(subs[2]),
			)
		raise ValueError(f"unknown expression rule: {kind}")

	def _build_token_expr(self, tok: Token) -> Expr:
		span = self._span(tok)
		if tok.type == "NAME":
			return PathExpr(span=span, segments=[str(tok)])
		raise ValueError(f"unexpected token in expression position: {tok.type}")

	def _build_args(self, tree: Optional[Tree]) -> List[Expr]:
		if tree is None:
			return []
		return [self._build_expr(c) for c in tree.children if isinstance(c, (Tree, Token))]


__all__ = ["ParamTypeError", "parse_program"]
