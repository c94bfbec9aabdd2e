# filename: huffman_service.py

import logging

from bit_packing import pack_bits, unpack_bits, write_bit_string
from huffman_core import CodeTable, HuffmanLogic
from huffman_errors import StructuralPreconditionError

logger = logging.getLogger(__name__)


def read_symbols(filename):
    """Read a whole file as single-byte symbols, or return None if it can't be read."""
    try:
        with open(filename, "rb") as f:
            return f.read()
    except OSError as e:
        logger.error("Error while reading file %s: %s", filename, e)
        return None


def encode_symbols(data, encodings):
    return "".join([encodings[symbol] for symbol in data])


def decode_bits(bit_string, root):
    if root is None:
        raise StructuralPreconditionError("cannot decode without a Huffman tree")

    out = bytearray()
    curr = root
    for bit in bit_string:
        curr = curr.left if bit == "0" else curr.right
        if curr.is_leaf():
            out.append(curr.symbol)
            curr = root

    if curr is not root:
        logger.warning("Ignoring trailing bits that do not form a complete code")
    return bytes(out)


def encode_file(source, encodings, sink):
    data = read_symbols(source)
    if data is None:
        return False
    return write_bit_string(sink, encode_symbols(data, encodings))


def decode_file(packed_source, root, sink):
    if root is None:
        raise StructuralPreconditionError("cannot decode without a Huffman tree")

    packed = read_symbols(packed_source)
    if packed is None:
        return False
    decoded = decode_bits(unpack_bits(packed), root)

    try:
        with open(sink, "wb") as out:
            out.write(decoded)
    except OSError as e:
        logger.error("Error when writing to file %s: %s", sink, e)
        return False
    return True


class HuffmanService:
    """Huffman coder for one text file, or for in-memory data.

    The file workflow runs ``make_sorted_list``, ``make_tree`` and
    ``make_encodings`` in order, then ``encode``/``decode``. The tree is not
    stored in the encoded output, so decoding needs a service that built its
    tree from the same text.
    """

    def __init__(self, file_name=None):
        self.logic = HuffmanLogic()
        self.file_name = file_name
        self.sorted_list = []
        self.root = None
        self.encodings = CodeTable()

    def make_sorted_list(self):
        data = read_symbols(self.file_name)
        self.sorted_list = self.logic.build_frequency_table(data or b"")
        return self.sorted_list

    def make_tree(self):
        self.root = self.logic.build_tree(self.sorted_list)
        return self.root

    def make_encodings(self):
        self.encodings = self.logic.generate_codes(self.root)
        return self.encodings

    def encode(self, encoded_file):
        return encode_file(self.file_name, self.encodings, encoded_file)

    def decode(self, encoded_file, decoded_file):
        return decode_file(encoded_file, self.root, decoded_file)

    def build(self, data):
        self.sorted_list = self.logic.build_frequency_table(data)
        self.make_tree()
        return self.make_encodings()

    def compress(self, data):
        if not data:
            return b""
        codes = self.build(data)
        encoded_str = encode_symbols(data, codes)
        logger.debug("encoded %d symbols into %d bits", len(data), len(encoded_str))
        return pack_bits(encoded_str)

    def decompress(self, data):
        if not data:
            return b""
        return decode_bits(unpack_bits(data), self.root)
