"""BITS transmission packet parser.

Recursive descent over a BitCursor. The 3-bit type id selects the production,
so there is no backtracking.
"""
from __future__ import annotations

from warnings import warn

from bits_core.cursor import BitCursor
from bits_core.errors import StructuralError
from bits_core.hexcodec import decode_hex
from bits_core.packet import Literal, Operator, Packet, operator_kind
from bits_core.protocol import (
    DEFAULT_MAX_DEPTH,
    LENGTH_TYPE_BITS,
    LENGTH_TYPE_TOTAL_BITS,
    LITERAL_CONTINUE_MASK,
    LITERAL_GROUP_BITS,
    LITERAL_MAX_BITS,
    LITERAL_NIBBLE_BITS,
    LITERAL_NIBBLE_MASK,
    LITERAL_TYPE_ID,
    SUB_PACKET_COUNT_BITS,
    TOTAL_LENGTH_BITS,
    TYPE_ID_BITS,
    VERSION_BITS,
)

# Largest accumulator that can still take one more nibble.
_LITERAL_SHIFT_LIMIT = (1 << (LITERAL_MAX_BITS - LITERAL_NIBBLE_BITS)) - 1


def _read_literal(cursor: BitCursor) -> int:
    start = cursor.offset
    value = 0
    while True:
        group = cursor.read_bits(LITERAL_GROUP_BITS)
        if value > _LITERAL_SHIFT_LIMIT:
            raise StructuralError("E_LITERAL_OVERFLOW", start, width=LITERAL_MAX_BITS)
        value = (value << LITERAL_NIBBLE_BITS) | (group & LITERAL_NIBBLE_MASK)
        if not group & LITERAL_CONTINUE_MASK:
            return value


def _read_sub_packets(cursor: BitCursor, depth: int, max_depth: int) -> list[Packet]:
    children: list[Packet] = []
    length_type = cursor.read_bits(LENGTH_TYPE_BITS)

    if length_type == LENGTH_TYPE_TOTAL_BITS:
        total_bits = cursor.read_bits(TOTAL_LENGTH_BITS)
        mark = cursor.offset
        with cursor.bounded(total_bits):
            while cursor.consumed_bits(mark) < total_bits:
                child, cursor = _parse(cursor, depth + 1, max_depth)
                children.append(child)
    else:
        count = cursor.read_bits(SUB_PACKET_COUNT_BITS)
        for _ in range(count):
            child, cursor = _parse(cursor, depth + 1, max_depth)
            children.append(child)

    return children


def _parse(cursor: BitCursor, depth: int, max_depth: int) -> tuple[Packet, BitCursor]:
    start = cursor.offset
    if depth > max_depth:
        raise StructuralError("E_MAX_DEPTH", start, max_depth=max_depth)

    version = cursor.read_bits(VERSION_BITS)
    type_id = cursor.read_bits(TYPE_ID_BITS)

    if type_id == LITERAL_TYPE_ID:
        return Literal(version, _read_literal(cursor)), cursor

    kind = operator_kind(type_id, start)
    children = _read_sub_packets(cursor, depth, max_depth)
    if not children:
        raise StructuralError("E_EMPTY_OPERATOR", start, kind=kind.name)

    return Operator(version, kind, tuple(children)), cursor


def parse_packet(cursor: BitCursor, max_depth: int = DEFAULT_MAX_DEPTH) -> tuple[Packet, BitCursor]:
    """Parse one packet (and everything nested in it) starting at the cursor.

    Returns the packet and the cursor positioned just past it.
    """
    return _parse(cursor, 0, max_depth)


def _check_padding(cursor: BitCursor) -> None:
    remaining = cursor.remaining_bits()
    if not remaining:
        return

    if remaining >= 8:
        warn(f"{remaining} trailing bits after outer packet at bit {cursor.offset}")

    # Check the tail in word-sized pieces; only report, never reject.
    pos = cursor.offset
    while cursor.remaining_bits():
        tail = cursor.read_bits(min(cursor.remaining_bits(), 64))
        if tail:
            warn(f"Non-zero padding after outer packet at bit {pos}")
            return


def decode(hex_text: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Packet:
    """Decode a hex-encoded transmission into its outer packet."""
    cursor = BitCursor(decode_hex(hex_text))
    packet, cursor = parse_packet(cursor, max_depth)
    _check_padding(cursor)
    return packet
