# filename: huffman_errors.py


class HuffmanError(Exception):
    """Base class for errors raised by the Huffman text codec."""


class InvalidBitstringError(HuffmanError, ValueError):
    """A bit string contained something other than '0' and '1'."""


class StructuralPreconditionError(HuffmanError, ValueError):
    """The tree could not be built or used (fewer than two leaves, no tree)."""
