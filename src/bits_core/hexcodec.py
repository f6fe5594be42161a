"""Hex text to byte buffer."""
from __future__ import annotations

from .errors import HexDecodeError

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def decode_hex(text: str) -> bytes:
    """Decode hex digits (any case, surrounding whitespace allowed) into bytes.

    Two digits per byte, most-significant nibble first. Nothing is returned
    unless the whole text is valid.
    """
    digits = text.strip()

    # bytes.fromhex would also accept inner whitespace, which we reject.
    for i, ch in enumerate(digits):
        if ch not in _HEX_DIGITS:
            raise HexDecodeError("E_HEX_DIGIT", i, char=ch)

    if len(digits) % 2:
        raise HexDecodeError("E_HEX_ODD_LENGTH", None, length=len(digits))

    return bytes.fromhex(digits)
