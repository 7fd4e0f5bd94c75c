# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for the parser and lint passes.

A Diagnostic is a message plus span/metadata. Lints never build Diagnostics
directly: they emit `(span, message)` pairs into a `DiagnosticSink`, and the
lint context decides severity and code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from .span import Span


@dataclass
class Diagnostic:
	"""Represents a diagnostic (error/warning)."""

	message: str
	# Lint name for lint diagnostics; None for parser/driver errors.
	code: str | None = None
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:
			self.span = Span()

	@property
	def is_error(self) -> bool:
		return self.severity == "error"


class DiagnosticSink(Protocol):
	"""Write-only destination for warnings raised by a lint."""

	def emit_warning(self, span: Span, message: str) -> None:
		...


class DiagnosticCollector:
	"""Ordered store for the diagnostics filed by the per-lint sinks of one run."""

	def __init__(self) -> None:
		self.diagnostics: list[Diagnostic] = []

	def add(self, diag: Diagnostic) -> None:
		self.diagnostics.append(diag)


__all__ = ["Diagnostic", "DiagnosticCollector", "DiagnosticSink"]
