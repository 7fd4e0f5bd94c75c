# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lint framework: declarations, levels, pass protocol and the per-run context.

A lint pass never sees levels or builds Diagnostics. It asks the context for a
`DiagnosticSink` bound to one of its lints and emits `(span, message)`; the
context turns that into a Diagnostic according to the configured level.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Protocol, Sequence

from itemlint.core.diagnostics import Diagnostic, DiagnosticCollector, DiagnosticSink
from itemlint.core.expansion import MacroOriginOracle
from itemlint.core.span import Span
from itemlint.parser import ast


class Level(str, Enum):
	ALLOW = "allow"
	WARN = "warn"
	DENY = "deny"

	@classmethod
	def parse(cls, text: str) -> "Level":
		try:
			return cls(text.lower())
		except ValueError:
			raise ValueError(f"unknown lint level `{text}` (expected allow, warn or deny)") from None


@dataclass(frozen=True)
class Lint:
	"""Static declaration of a lint: its name, default level and documentation."""

	name: str
	default_level: Level
	description: str
	explanation: str = ""


class LintPass(Protocol):
	"""Early lint pass: invoked once per block, in source order."""

	def get_lints(self) -> Sequence[Lint]:
		...

	def check_block(self, cx: "LintContext", block: ast.Block) -> None:
		...


class _LevelSink:
	"""DiagnosticSink that files emissions for one lint at its effective level."""

	def __init__(self, lint: Lint, level: Level, collector: DiagnosticCollector, *, overridden: bool) -> None:
		self._lint = lint
		self._level = level
		self._collector = collector
		self._overridden = overridden

	def emit_warning(self, span: Span, message: str) -> None:
		if self._level is Level.ALLOW:
			return
		origin = "set on the command line or in the config" if self._overridden else "on by default"
		self._collector.add(
			Diagnostic(
				message=message,
				code=self._lint.name,
				phase="lint",
				severity="error" if self._level is Level.DENY else "warning",
				span=span,
				notes=[f"`{self._level.value}({self._lint.name})` {origin}"],
			)
		)


@dataclass
class LintContext:
	"""
	Per-run state handed to every pass.

	`levels` holds explicit overrides; lints without an entry use their default
	level. `deny_warnings` promotes every effective `warn` to `deny`.
	"""

	oracle: MacroOriginOracle
	levels: Dict[str, Level] = field(default_factory=dict)
	deny_warnings: bool = False
	collector: DiagnosticCollector = field(default_factory=DiagnosticCollector)

	def level_of(self, lint: Lint) -> Level:
		level = self.levels.get(lint.name, lint.default_level)
		if level is Level.WARN and self.deny_warnings:
			return Level.DENY
		return level

	def sink_for(self, lint: Lint) -> DiagnosticSink:
		overridden = lint.name in self.levels or (self.deny_warnings and self.level_of(lint) is Level.DENY)
		return _LevelSink(lint, self.level_of(lint), self.collector, overridden=overridden)

	@property
	def diagnostics(self) -> List[Diagnostic]:
		return self.collector.diagnostics


def builtin_passes() -> List[LintPass]:
	"""Fresh instances of every built-in pass."""
	from .items_after_statements import ItemsAfterStatements

	return [ItemsAfterStatements()]


def builtin_lints() -> List[Lint]:
	lints: List[Lint] = []
	for lint_pass in builtin_passes():
		lints.extend(lint_pass.get_lints())
	return lints


def find_lint(name: str) -> Lint:
	"""Look up a built-in lint by name (dashes and underscores are equivalent)."""
	wanted = name.replace("-", "_")
	for lint in builtin_lints():
		if lint.name == wanted:
			return lint
	raise ValueError(f"unknown lint `{name}`")


__all__ = [
	"Level",
	"Lint",
	"LintContext",
	"LintPass",
	"builtin_lints",
	"builtin_passes",
	"find_lint",
]
