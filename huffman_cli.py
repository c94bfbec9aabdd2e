#!/usr/bin/env python3
"""
huffman_cli.py : encode and decode single-byte text files with Huffman codes

The encoded file does not carry the code table, so decoding rebuilds the tree
from the original text file.

Usage:
    huffman-text encode input.txt input.huff
    huffman-text decode input.txt input.huff decoded.txt
    huffman-text codes input.txt
"""

import argparse
import logging
import sys

from huffman_errors import StructuralPreconditionError
from huffman_service import HuffmanService

logger = logging.getLogger("huffman_cli")


def _prepare(source):
    service = HuffmanService(source)
    service.make_sorted_list()
    service.make_tree()
    service.make_encodings()
    return service


def _show_symbol(symbol):
    ch = chr(symbol)
    return repr(ch) if ch.isprintable() else f"0x{symbol:02x}"


def cmd_encode(args):
    service = _prepare(args.source)
    return service.encode(args.encoded)


def cmd_decode(args):
    service = _prepare(args.source)
    return service.decode(args.encoded, args.decoded)


def cmd_codes(args):
    service = _prepare(args.source)
    print(f"{'symbol':>8}  {'probability':>11}  code")
    for entry in service.sorted_list:
        code = service.encodings.get(entry.symbol)
        print(f"{_show_symbol(entry.symbol):>8}  {entry.probability:>11.6f}  {code}")
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(description="Huffman coding for single-byte text files.")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug details")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("encode", help="encode SOURCE into ENCODED")
    p.add_argument("source")
    p.add_argument("encoded")
    p.set_defaults(func=cmd_encode)

    p = sub.add_parser("decode", help="decode ENCODED into DECODED using the tree built from SOURCE")
    p.add_argument("source", help="the original text the file was encoded from")
    p.add_argument("encoded")
    p.add_argument("decoded")
    p.set_defaults(func=cmd_decode)

    p = sub.add_parser("codes", help="print the frequency list and code table of SOURCE")
    p.add_argument("source")
    p.set_defaults(func=cmd_codes)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        ok = args.func(args)
    except StructuralPreconditionError as e:
        # empty or unreadable source leaves nothing to build a tree from
        logger.error("%s", e)
        return 1
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
