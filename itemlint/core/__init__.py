# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
itemlint.core: spans, diagnostics and macro-origin queries shared by every stage.

Modules:
  - span: Span + ExpnInfo (macro expansion record)
  - diagnostics: Diagnostic, DiagnosticSink protocol, DiagnosticCollector
  - expansion: MacroOriginOracle protocol + span-backed oracle
"""

__all__ = [
	"diagnostics",
	"expansion",
	"span",
]
