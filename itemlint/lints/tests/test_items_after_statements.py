# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Block scanner behaviour on synthetic blocks with fake oracle and sink."""

from __future__ import annotations

from itemlint.core.expansion import ExpansionOracle
from itemlint.lints.items_after_statements import MESSAGE, check_block
from itemlint.parser import ast
from itemlint.test_support import (
	LineOracle,
	RecordingSink,
	block_of,
	expr_stmt,
	fn_item,
	let_stmt,
	macro_rules_stmt,
	struct_item,
)


def _scan(block: ast.Block, oracle=None) -> RecordingSink:
	sink = RecordingSink()
	check_block(block, oracle if oracle is not None else ExpansionOracle(), sink)
	return sink


def test_item_after_let_is_reported_once():
	block = block_of(fn_item("foo", 1), fn_item("bar", 2), let_stmt("x", 3), fn_item("baz", 4))
	sink = _scan(block)
	assert sink.lines == [4]
	assert sink.emitted[0][1] == MESSAGE


def test_diagnostic_uses_item_span():
	baz = fn_item("baz", 4)
	block = block_of(let_stmt("x", 3), baz)
	sink = _scan(block)
	assert [span for span, _ in sink.emitted] == [baz.item.span]


def test_items_without_let_are_not_reported():
	block = block_of(fn_item("foo", 1), fn_item("bar", 2))
	assert _scan(block).emitted == []


def test_leading_expression_statement_is_dropped():
	# The expression ends the leading phase; only what follows it is scanned.
	block = block_of(expr_stmt(1), fn_item("foo", 2))
	assert _scan(block).lines == [2]


def test_macro_generated_item_stops_the_scan():
	block = block_of(let_stmt("x", 1), fn_item("foo", 2, macro="gen"), fn_item("bar", 3))
	assert _scan(block).emitted == []


def test_items_before_macro_generated_item_are_still_reported():
	block = block_of(
		let_stmt("x", 1),
		fn_item("a", 2),
		fn_item("b", 3, macro="gen"),
		fn_item("c", 4),
	)
	assert _scan(block).lines == [2]


def test_macro_generated_block_is_skipped():
	block = block_of(let_stmt("x", 1), fn_item("foo", 2), macro="wrap")
	assert _scan(block).emitted == []


def test_macro_generated_block_is_skipped_before_looking_at_statements():
	oracle = LineOracle(macro_lines=[0])
	block = block_of(let_stmt("x", 1), fn_item("foo", 2))
	sink = _scan(block, oracle)
	assert sink.emitted == []
	assert [s.line for s in oracle.queries] == [0]


def test_expression_between_let_and_item_is_ignored():
	block = block_of(let_stmt("x", 1), expr_stmt(2), fn_item("foo", 3))
	assert _scan(block).lines == [3]


def test_block_without_declarations_is_not_reported():
	block = block_of(expr_stmt(1), expr_stmt(2), expr_stmt(3))
	assert _scan(block).emitted == []


def test_empty_block_is_not_reported():
	assert _scan(block_of()).emitted == []


def test_every_item_after_let_is_reported_in_order():
	block = block_of(
		let_stmt("x", 1),
		fn_item("a", 2),
		struct_item("S", 3),
		expr_stmt(4),
		fn_item("b", 5),
	)
	assert _scan(block).lines == [2, 3, 5]


def test_macro_rules_is_part_of_leading_prefix_and_never_reported():
	block = block_of(macro_rules_stmt("m", 1), fn_item("foo", 2), let_stmt("x", 3), macro_rules_stmt("n", 4), fn_item("bar", 5))
	assert _scan(block).lines == [5]


def test_only_first_leading_expression_is_dropped():
	block = block_of(expr_stmt(1), expr_stmt(2), fn_item("foo", 3))
	assert _scan(block).lines == [3]


def test_item_right_after_dropped_expression_in_long_prefix():
	block = block_of(fn_item("a", 1), expr_stmt(2), fn_item("b", 3), let_stmt("x", 4), fn_item("c", 5))
	assert _scan(block).lines == [3, 5]


def test_let_as_last_statement_reports_nothing():
	block = block_of(fn_item("a", 1), let_stmt("x", 2))
	assert _scan(block).emitted == []


def test_oracle_is_consulted_per_item_in_flagging_phase():
	oracle = LineOracle(macro_lines=[3])
	block = block_of(let_stmt("x", 1), fn_item("a", 2), fn_item("b", 3), fn_item("c", 4))
	sink = _scan(block, oracle)
	assert sink.lines == [2]
	# block span, then items at lines 2 and 3; line 4 is never reached.
	assert [s.line for s in oracle.queries] == [0, 2, 3]
