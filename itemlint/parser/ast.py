# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
AST for the Rust-like surface language linted by itemlint.

Statements form a closed set of variants, each tagged with a `StmtKind` so
passes can dispatch on the tag instead of probing classes. Every node carries
a `Span`; nodes parsed from a macro invocation body carry an expanded span.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Union

from itemlint.core.span import Span


@dataclass
class TypeExpr:
	name: str
	args: List["TypeExpr"] = field(default_factory=list)
	ref: bool = False
	mutable: bool = False
	span: Span = field(default_factory=Span)


# --- Expressions -------------------------------------------------------------


class Expr:
	span: Span


@dataclass
class Literal(Expr):
	span: Span
	value: object


@dataclass
class PathExpr(Expr):
	span: Span
	segments: List[str]


@dataclass
class Call(Expr):
	span: Span
	func: Expr
	args: List[Expr]


@dataclass
class MethodCall(Expr):
	span: Span
	receiver: Expr
	method: str
	args: List[Expr]


@dataclass
class Field(Expr):
	span: Span
	value: Expr
	name: str


@dataclass
class Index(Expr):
	span: Span
	value: Expr
	index: Expr


@dataclass
class TryOp(Expr):
	span: Span
	value: Expr


@dataclass
class Unary(Expr):
	span: Span
	op: str
	operand: Expr


@dataclass
class Binary(Expr):
	span: Span
	op: str
	left: Expr
	right: Expr


@dataclass
class Assign(Expr):
	span: Span
	op: str  # "=", "+=", ...
	target: Expr
	value: Expr


@dataclass
class ArrayLiteral(Expr):
	span: Span
	elements: List[Expr]


@dataclass
class Tuple(Expr):
	span: Span
	elements: List[Expr]


@dataclass
class MacroCall(Expr):
	"""Expression macro invocation: `name!(...)` or `name![...]`."""

	span: Span
	name: str
	args: List[Expr]


@dataclass
class Return(Expr):
	span: Span
	value: Optional[Expr]


@dataclass
class Break(Expr):
	span: Span
	value: Optional[Expr]


@dataclass
class Continue(Expr):
	span: Span


@dataclass
class BlockExpr(Expr):
	span: Span
	block: "Block"
	unsafe: bool = False


@dataclass
class IfExpr(Expr):
	span: Span
	cond: Expr
	then_block: "Block"
	else_branch: Optional[Expr] = None  # BlockExpr or IfExpr


@dataclass
class WhileExpr(Expr):
	span: Span
	cond: Expr
	body: "Block"


@dataclass
class LoopExpr(Expr):
	span: Span
	body: "Block"


@dataclass
class ForExpr(Expr):
	span: Span
	pattern: "Pattern"
	iterable: Expr
	body: "Block"


# --- Patterns ----------------------------------------------------------------


@dataclass
class Pattern:
	span: Span
	name: Optional[str] = None  # None for tuple patterns
	mutable: bool = False
	elements: List["Pattern"] = field(default_factory=list)


# --- Items -------------------------------------------------------------------


class Item:
	"""Named, scope-wide declaration."""

	keyword: ClassVar[str] = ""
	name: str
	span: Span


@dataclass
class Param:
	span: Span
	name: str
	type_expr: Optional[TypeExpr]  # None for `self` receivers
	is_self: bool = False
	by_ref: bool = False
	mutable: bool = False


@dataclass
class FnDef(Item):
	keyword: ClassVar[str] = "fn"
	name: str
	params: List[Param]
	return_type: Optional[TypeExpr]
	body: Optional["Block"]  # None for trait method signatures
	span: Span
	public: bool = False


@dataclass
class StructField:
	span: Span
	name: Optional[str]  # None for tuple-struct fields
	type_expr: TypeExpr


@dataclass
class StructDef(Item):
	keyword: ClassVar[str] = "struct"
	name: str
	fields: List[StructField]
	span: Span
	public: bool = False


@dataclass
class Variant:
	span: Span
	name: str
	fields: List[TypeExpr] = field(default_factory=list)


@dataclass
class EnumDef(Item):
	keyword: ClassVar[str] = "enum"
	name: str
	variants: List[Variant]
	span: Span
	public: bool = False


@dataclass
class ConstDef(Item):
	keyword: ClassVar[str] = "const"
	name: str
	type_expr: TypeExpr
	value: Expr
	span: Span
	public: bool = False


@dataclass
class StaticDef(Item):
	keyword: ClassVar[str] = "static"
	name: str
	type_expr: TypeExpr
	value: Expr
	span: Span
	mutable: bool = False
	public: bool = False


@dataclass
class TypeAlias(Item):
	keyword: ClassVar[str] = "type"
	name: str
	target: TypeExpr
	span: Span
	public: bool = False


@dataclass
class ModDef(Item):
	keyword: ClassVar[str] = "mod"
	name: str
	items: Optional[List["ModuleEntry"]]  # None for `mod name;`
	span: Span
	public: bool = False


@dataclass
class UseDecl(Item):
	keyword: ClassVar[str] = "use"
	path: List[str]
	span: Span
	glob: bool = False
	alias: Optional[str] = None
	public: bool = False

	@property
	def name(self) -> str:  # type: ignore[override]
		if self.alias:
			return self.alias
		return "*" if self.glob else self.path[-1]


@dataclass
class TraitDef(Item):
	keyword: ClassVar[str] = "trait"
	name: str
	methods: List[FnDef]
	span: Span
	public: bool = False


@dataclass
class ImplDef(Item):
	keyword: ClassVar[str] = "impl"
	self_type: TypeExpr
	trait: Optional[TypeExpr]
	methods: List[FnDef]
	span: Span

	@property
	def name(self) -> str:  # type: ignore[override]
		if self.trait is not None:
			return f"{self.trait.name} for {self.self_type.name}"
		return self.self_type.name


@dataclass
class MacroRulesDef:
	"""`macro_rules! name { ... }`; the rule bodies are not interpreted."""

	name: str
	span: Span


ModuleEntry = Union[Item, MacroRulesDef]


# --- Statements --------------------------------------------------------------


class StmtKind(Enum):
	EXPR = "expr"
	LOCAL = "local"
	ITEM = "item"
	OTHER = "other"


class Stmt:
	kind: ClassVar[StmtKind]
	span: Span

	@property
	def is_decl(self) -> bool:
		return self.kind is not StmtKind.EXPR


@dataclass
class ExprStmt(Stmt):
	kind: ClassVar[StmtKind] = StmtKind.EXPR
	span: Span
	expr: Expr
	has_semi: bool = True


@dataclass
class LetStmt(Stmt):
	kind: ClassVar[StmtKind] = StmtKind.LOCAL
	span: Span
	pattern: Pattern
	type_expr: Optional[TypeExpr] = None
	init: Optional[Expr] = None


@dataclass
class ItemStmt(Stmt):
	kind: ClassVar[StmtKind] = StmtKind.ITEM
	span: Span
	item: Item


@dataclass
class MacroRulesStmt(Stmt):
	kind: ClassVar[StmtKind] = StmtKind.OTHER
	span: Span
	macro: MacroRulesDef


@dataclass
class Block:
	statements: List[Stmt]
	span: Span
	tail: Optional[Expr] = None


@dataclass
class Program:
	items: List[ModuleEntry]
	span: Span = field(default_factory=Span)


__all__ = [
	"ArrayLiteral",
	"Assign",
	"Binary",
	"Block",
	"BlockExpr",
	"Break",
	"Call",
	"ConstDef",
	"Continue",
	"EnumDef",
	"Expr",
	"ExprStmt",
	"Field",
	"FnDef",
	"ForExpr",
	"IfExpr",
	"ImplDef",
	"Index",
	"Item",
	"ItemStmt",
	"LetStmt",
	"Literal",
	"LoopExpr",
	"MacroCall",
	"MacroRulesDef",
	"MacroRulesStmt",
	"MethodCall",
	"ModDef",
	"ModuleEntry",
	"Param",
	"PathExpr",
	"Pattern",
	"Program",
	"Return",
	"StaticDef",
	"Stmt",
	"StmtKind",
	"StructDef",
	"StructField",
	"TraitDef",
	"TryOp",
	"Tuple",
	"TypeAlias",
	"TypeExpr",
	"Unary",
	"UseDecl",
	"Variant",
	"WhileExpr",
]
