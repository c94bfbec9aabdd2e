import os
import sys

import pytest

# Add the repository root to path
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

from huffman_core import CodeTable, HuffmanLogic, SymbolFrequency
from huffman_errors import StructuralPreconditionError


SAMPLE_TEXT = (
	b"It was the best of times, it was the worst of times, it was the age of "
	b"wisdom, it was the age of foolishness, it was the epoch of belief.\n"
)


def _codes(data):
	logic = HuffmanLogic()
	return logic.generate_codes(logic.build_tree(logic.build_frequency_table(data)))


def _shape(node):
	if node.is_leaf():
		return node.symbol
	return (_shape(node.left), _shape(node.right))


def test_frequency_table_sorted_by_probability():
	table = HuffmanLogic().build_frequency_table(b"aaab")
	assert table == [SymbolFrequency(ord('b'), 0.25), SymbolFrequency(ord('a'), 0.75)]


def test_frequency_table_equal_probability_ordered_by_symbol():
	table = HuffmanLogic().build_frequency_table(b"dcbaabcd")
	assert [entry.symbol for entry in table] == [ord(c) for c in "abcd"]
	assert all(entry.probability == 0.25 for entry in table)


def test_frequency_table_probabilities_sum_to_one():
	table = HuffmanLogic().build_frequency_table(SAMPLE_TEXT)
	assert sum(entry.probability for entry in table) == pytest.approx(1.0)
	assert all(entry.probability > 0 for entry in table)


def test_frequency_table_single_symbol_gets_synthetic_neighbour():
	table = HuffmanLogic().build_frequency_table(b"aaaa")
	assert table == [SymbolFrequency(ord('b'), 0.0), SymbolFrequency(ord('a'), 1.0)]


def test_frequency_table_synthetic_neighbour_wraps_at_255():
	table = HuffmanLogic().build_frequency_table(bytes([255, 255]))
	assert table == [SymbolFrequency(0, 0.0), SymbolFrequency(255, 1.0)]


def test_frequency_table_empty_input():
	assert HuffmanLogic().build_frequency_table(b"") == []


def test_frequency_table_rejects_non_byte_symbols():
	with pytest.raises(ValueError):
		HuffmanLogic().build_frequency_table([1, 300])


def test_frequency_table_does_not_mutate_input():
	data = bytearray(b"hello")
	HuffmanLogic().build_frequency_table(data)
	assert data == bytearray(b"hello")


def test_tree_for_aaab():
	logic = HuffmanLogic()
	root = logic.build_tree(logic.build_frequency_table(b"aaab"))
	assert root.left.symbol == ord('b')
	assert root.right.symbol == ord('a')
	assert root.probability == pytest.approx(1.0)
	assert root.symbol is None


def test_tree_source_queue_wins_ties():
	# a, b merge into 0.5 which ties with c: c is taken first and goes left
	logic = HuffmanLogic()
	root = logic.build_tree(logic.build_frequency_table(b"abcc"))
	assert _shape(root) == (ord('c'), (ord('a'), ord('b')))


def test_tree_uniform_four_symbols():
	codes = _codes(b"abcd")
	assert dict(codes) == {ord('a'): "00", ord('b'): "01", ord('c'): "10", ord('d'): "11"}


def test_tree_is_deterministic():
	logic = HuffmanLogic()
	shapes = {
		repr(_shape(logic.build_tree(logic.build_frequency_table(SAMPLE_TEXT))))
		for _ in range(5)
	}
	assert len(shapes) == 1


def test_build_tree_needs_two_entries():
	logic = HuffmanLogic()
	with pytest.raises(StructuralPreconditionError):
		logic.build_tree([])
	with pytest.raises(StructuralPreconditionError):
		logic.build_tree([SymbolFrequency(97, 1.0)])


def test_codes_for_aaab():
	codes = _codes(b"aaab")
	assert codes[ord('b')] == "0"
	assert codes[ord('a')] == "1"


def test_codes_are_prefix_free():
	codes = list(_codes(SAMPLE_TEXT).values())
	for i, a in enumerate(codes):
		assert a
		for j, b in enumerate(codes):
			if i != j:
				assert not b.startswith(a)


def test_codes_cover_exactly_the_input_symbols():
	codes = _codes(SAMPLE_TEXT)
	assert set(codes) == set(SAMPLE_TEXT)


def test_code_table_signals_absent_symbols():
	codes = _codes(b"aaab")
	assert ord('z') not in codes
	assert codes.get(ord('z')) is None
	with pytest.raises(KeyError):
		codes[ord('z')]


def test_code_table_list_view():
	view = _codes(b"aaab").as_list()
	assert len(view) == 256
	assert view[ord('a')] == "1"
	assert view[ord('b')] == "0"
	assert sum(1 for code in view if code is not None) == 2


def test_generate_codes_without_tree_is_empty():
	codes = HuffmanLogic().generate_codes(None)
	assert isinstance(codes, CodeTable)
	assert len(codes) == 0
	assert codes.as_list() == [None] * 256
