"""BITS Core - Shared protocol primitives."""
from .cursor import BitCursor
from .errors import ERRORS, BitsError, BitUnderflowError, HexDecodeError, StructuralError
from .hexcodec import decode_hex
from .packet import Literal, Operator, OperatorKind, Packet, operator_kind

__all__ = [
    "BitCursor",
    "ERRORS",
    "BitsError",
    "BitUnderflowError",
    "HexDecodeError",
    "StructuralError",
    "decode_hex",
    "Literal",
    "Operator",
    "OperatorKind",
    "Packet",
    "operator_kind",
]
