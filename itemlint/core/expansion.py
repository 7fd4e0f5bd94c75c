# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Macro-origin queries over spans.

Lints that must not fire on expanded code take a `MacroOriginOracle` instead of
inspecting spans themselves, so tests can substitute a fake.
"""

from __future__ import annotations

from typing import Protocol

from .span import Span


class MacroOriginOracle(Protocol):
	"""Answers whether a span was produced by macro expansion."""

	def is_macro_generated(self, span: Span) -> bool:
		"""Return True if `span` comes from a macro expansion rather than user source."""
		...


class ExpansionOracle:
	"""Oracle backed by the `expansion` record the parser attaches to spans."""

	def is_macro_generated(self, span: Span) -> bool:
		return span.expansion is not None


__all__ = ["ExpansionOracle", "MacroOriginOracle"]
