# filename: bit_packing.py

"""
Bit string <-> byte packing for the encoded file format.

The payload bits are preceded by a padding header of (padding - 1) zero bits
and a single one bit, where padding = 8 - (len(bits) % 8) and is always in
1..8. The whole thing is then packed MSB-first, so the packed length is always
a whole number of bytes and the reader finds the payload right after the first
set bit of the first byte.
"""

import logging

from huffman_errors import InvalidBitstringError

logger = logging.getLogger(__name__)


def padding_for(length: int) -> int:
    return 8 - (length % 8)


def pack_bits(bit_string: str) -> bytes:
    if bit_string.strip("01"):
        raise InvalidBitstringError("Invalid characters in bitstring")

    padding = padding_for(len(bit_string))
    padded = "0" * (padding - 1) + "1" + bit_string
    return int(padded, 2).to_bytes(len(padded) // 8, "big")


def unpack_bits(data: bytes) -> str:
    if not data:
        logger.error("Cannot unpack an empty byte string: padding header is missing")
        return ""

    bit_string = "".join(f"{b:08b}" for b in data)

    # The first 1 in the leading byte ends the padding
    marker = bit_string.find("1", 0, 8)
    if marker == -1:
        logger.warning("No padding marker in the first byte, dropping it")
        return bit_string[8:]
    return bit_string[marker + 1:]


def write_bit_string(filename, bit_string: str) -> bool:
    """Pack ``bit_string`` and write it to ``filename``.

    Returns False, without creating the file, when the bit string is invalid;
    returns False as well when the file cannot be written.
    """
    try:
        packed = pack_bits(bit_string)
    except InvalidBitstringError as e:
        logger.error("%s", e)
        return False

    try:
        with open(filename, "wb") as out:
            out.write(packed)
    except OSError as e:
        logger.error("Error when writing to file %s: %s", filename, e)
        return False

    logger.debug("wrote %d payload bits as %d bytes to %s", len(bit_string), len(packed), filename)
    return True


def read_bit_string(filename) -> str:
    try:
        with open(filename, "rb") as f:
            data = f.read()
    except OSError as e:
        logger.error("Error while reading file %s: %s", filename, e)
        return ""
    return unpack_bits(data)
