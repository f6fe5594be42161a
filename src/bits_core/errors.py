"""Typed decoder errors.

Every failure carries a stable code from ``ERRORS`` plus the offset at which
it was detected, so a single line is enough for diagnosis.
"""
from __future__ import annotations

ERRORS = {
    "E_HEX_ODD_LENGTH": "Hex text has an odd number of digits",
    "E_HEX_DIGIT": "Hex text contains a non-hex character",
    "E_BIT_UNDERFLOW": "Read past the end of the transmission",
    "E_LENGTH_BOUNDARY": "Sub-packet crosses the declared group length",
    "E_EMPTY_OPERATOR": "Operator packet has no sub-packets",
    "E_COMPARE_ARITY": "Comparison operator needs exactly two sub-packets",
    "E_LITERAL_OVERFLOW": "Literal value does not fit in 64 bits",
    "E_TYPE_ID": "Unknown packet type id",
    "E_MAX_DEPTH": "Packet nesting exceeds the depth limit",
}


class BitsError(ValueError):
    """Base class for all transmission decoding failures."""

    offset_unit = "bit"

    def __init__(self, code: str, offset: int | None = None, **context):
        self.code = code
        self.message = ERRORS[code]
        self.offset = offset
        self.context = context
        super().__init__(self._render())

    def _render(self) -> str:
        parts = []
        if self.offset is not None:
            parts.append(f"{self.offset_unit} {self.offset}")
        parts.extend(f"{k}={v!r}" for k, v in self.context.items())
        text = f"{self.code}: {self.message}"
        return f"{text} ({', '.join(parts)})" if parts else text


class HexDecodeError(BitsError):
    offset_unit = "char"


class BitUnderflowError(BitsError):
    pass


class StructuralError(BitsError):
    pass
