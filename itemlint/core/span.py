# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source span representation shared by the parser, the lints and diagnostics.

A Span carries best-effort file/line/column info plus an optional `expansion`
record. Spans produced while parsing the body of a macro invocation carry the
invocation that produced them; user-written source has `expansion=None`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional


@dataclass(frozen=True)
class ExpnInfo:
	"""Records which macro invocation a span was expanded from."""

	macro_name: str
	call_site: "Span"


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column plus raw parser loc)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_line: Optional[int] = None
	end_column: Optional[int] = None
	expansion: Optional[ExpnInfo] = None
	raw: Any = None

	@classmethod
	def from_loc(cls, loc: Any) -> "Span":
		"""
		Construct a Span from an existing parser/location object.

		If `loc` is already a Span, it is returned unchanged; otherwise the
		parser-specific object (e.g. a lark `Meta` or `Token`) is stored in `raw`.
		"""
		if loc is None:
			return cls()
		if isinstance(loc, cls):
			return loc
		return cls(
			file=getattr(loc, "file", None) or getattr(loc, "filename", None) or None,
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
			end_line=getattr(loc, "end_line", None),
			end_column=getattr(loc, "end_column", None),
			raw=loc,
		)

	def with_expansion(self, expansion: Optional[ExpnInfo]) -> "Span":
		return replace(self, expansion=expansion)

	def with_file(self, file: Optional[str]) -> "Span":
		return replace(self, file=file)

	def describe(self) -> str:
		"""Render as `file:line:col`, using `?` for unknown parts."""
		file = self.file or "<unknown>"
		line = self.line if self.line is not None else "?"
		column = self.column if self.column is not None else "?"
		return f"{file}:{line}:{column}"


__all__ = ["ExpnInfo", "Span"]
