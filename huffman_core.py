# filename: huffman_core.py

from collections import Counter, deque
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from huffman_errors import StructuralPreconditionError

ALPHABET_SIZE = 256


@dataclass(frozen=True)
class SymbolFrequency:
    symbol: Optional[int]
    probability: float

    def sort_key(self):
        return (self.probability, self.symbol)


class HuffmanNode:
    def __init__(self, data, left=None, right=None):
        self.data = data
        self.left = left
        self.right = right

    @property
    def symbol(self):
        return self.data.symbol

    @property
    def probability(self):
        return self.data.probability

    def is_leaf(self):
        return self.left is None and self.right is None

    def __repr__(self):
        if self.is_leaf():
            return f"HuffmanNode(symbol={self.symbol!r}, p={self.probability:.4f})"
        return f"HuffmanNode(p={self.probability:.4f}, left={self.left!r}, right={self.right!r})"


class CodeTable(Mapping):
    """Read-only symbol -> bit string mapping derived from a Huffman tree.

    Symbols that are not leaves of the tree have no entry, so lookups of them
    raise KeyError (or return None through ``get``).
    """

    def __init__(self, codes=None):
        self._codes = dict(codes or {})

    def __getitem__(self, symbol):
        return self._codes[symbol]

    def __iter__(self):
        return iter(sorted(self._codes))

    def __len__(self):
        return len(self._codes)

    def as_list(self):
        return [self._codes.get(symbol) for symbol in range(ALPHABET_SIZE)]

    def __repr__(self):
        return f"CodeTable({dict(sorted(self._codes.items()))!r})"


class HuffmanLogic:
    def build_frequency_table(self, data):
        """Return the (symbol, probability) list ordered for tree building.

        Entries are sorted by probability and then by symbol value. When the
        input holds a single distinct symbol, a zero-probability neighbour
        ``(symbol + 1) % 256`` is added so the tree always has two leaves.
        """
        freqs = Counter(data)
        total = sum(freqs.values())
        if total == 0:
            return []

        for symbol in freqs:
            if not 0 <= symbol < ALPHABET_SIZE:
                raise ValueError(f"symbol {symbol!r} is not a single byte")

        sorted_list = [SymbolFrequency(symbol, count / total) for symbol, count in freqs.items()]
        if len(sorted_list) == 1:
            only = sorted_list[0].symbol
            sorted_list.append(SymbolFrequency((only + 1) % ALPHABET_SIZE, 0.0))

        sorted_list.sort(key=SymbolFrequency.sort_key)
        return sorted_list

    def build_tree(self, sorted_list):
        if len(sorted_list) < 2:
            raise StructuralPreconditionError(
                f"a Huffman tree needs at least 2 symbols, got {len(sorted_list)}"
            )

        source = deque(HuffmanNode(entry) for entry in sorted_list)
        target = deque()

        # Both queues stay ordered by probability, so each merge only looks at the fronts
        while source or len(target) > 1:
            left = self._take_smallest(source, target)
            right = self._take_smallest(source, target)
            merged = SymbolFrequency(None, left.probability + right.probability)
            target.append(HuffmanNode(merged, left, right))

        return target.popleft()

    @staticmethod
    def _take_smallest(source, target):
        source_p = source[0].probability if source else float("inf")
        target_p = target[0].probability if target else float("inf")
        # ties go to the source queue
        if source_p <= target_p:
            return source.popleft()
        return target.popleft()

    def generate_codes(self, node):
        codes = {}
        if node is not None:
            self._assign_codes(node, "", codes)
        return CodeTable(codes)

    def _assign_codes(self, node, current_code, codes):
        if node.is_leaf():
            codes[node.symbol] = current_code
            return
        self._assign_codes(node.left, current_code + "0", codes)
        self._assign_codes(node.right, current_code + "1", codes)
