#!/usr/bin/env python3
# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Span construction, macro-origin queries and the diagnostic store."""

from itemlint.core.diagnostics import Diagnostic, DiagnosticCollector
from itemlint.core.expansion import ExpansionOracle
from itemlint.core.span import ExpnInfo, Span


class _Loc:
	line = 3
	column = 7
	end_line = 3
	end_column = 12


def test_span_from_loc_copies_positions_and_keeps_raw():
	loc = _Loc()
	span = Span.from_loc(loc)
	assert (span.line, span.column, span.end_line, span.end_column) == (3, 7, 3, 12)
	assert span.raw is loc
	assert span.expansion is None


def test_span_from_loc_passes_spans_and_none_through():
	existing = Span(file="a.rs", line=1, column=1)
	assert Span.from_loc(existing) is existing
	assert Span.from_loc(None) == Span()


def test_with_file_keeps_positions():
	span = Span.from_loc(_Loc()).with_file("a.rs")
	assert span.describe() == "a.rs:3:7"


def test_span_describe_uses_question_marks_for_unknown_parts():
	assert Span(file="a.rs", line=2, column=5).describe() == "a.rs:2:5"
	assert Span().describe() == "<unknown>:?:?"


def test_with_expansion_marks_span_as_macro_generated():
	oracle = ExpansionOracle()
	plain = Span(file="a.rs", line=4, column=1)
	expn = ExpnInfo(macro_name="gen", call_site=Span(file="a.rs", line=2, column=1))
	expanded = plain.with_expansion(expn)
	assert not oracle.is_macro_generated(plain)
	assert oracle.is_macro_generated(expanded)
	assert expanded.line == plain.line
	assert not oracle.is_macro_generated(expn.call_site)


def test_collector_keeps_diagnostics_in_order():
	collector = DiagnosticCollector()
	collector.add(Diagnostic(message="first", severity="warning"))
	collector.add(Diagnostic(message="boom", phase="parser"))
	assert [d.message for d in collector.diagnostics] == ["first", "boom"]
	assert [d.is_error for d in collector.diagnostics] == [False, True]


def test_diagnostic_defaults_to_unknown_span():
	diag = Diagnostic(message="x", span=None)  # type: ignore[arg-type]
	assert diag.span == Span()
	assert diag.is_error
