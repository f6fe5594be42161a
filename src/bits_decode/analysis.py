"""Read-only folds over a decoded packet tree."""
from __future__ import annotations

import math

from bits_core.errors import StructuralError
from bits_core.packet import Literal, OperatorKind, Packet
from bits_core.protocol import DEFAULT_MAX_DEPTH

from .parser import decode


def sum_versions(packet: Packet) -> int:
    """Sum of the version field over every packet in the tree."""
    if isinstance(packet, Literal):
        return packet.version
    return packet.version + sum(sum_versions(c) for c in packet.children)


def _reduce(kind: OperatorKind, values: list[int]) -> int:
    if kind is OperatorKind.SUM:
        return sum(values)
    if kind is OperatorKind.PRODUCT:
        return math.prod(values)
    if kind is OperatorKind.MINIMUM:
        return min(values)
    if kind is OperatorKind.MAXIMUM:
        return max(values)

    # Comparisons: operand order matters, and there must be exactly two.
    if len(values) != 2:
        raise StructuralError("E_COMPARE_ARITY", None, kind=kind.name, expected=2, actual=len(values))
    a, b = values
    if kind is OperatorKind.GREATER_THAN:
        return int(a > b)
    if kind is OperatorKind.LESS_THAN:
        return int(a < b)
    return int(a == b)


def evaluate(packet: Packet) -> int:
    """Value of the tree read as an expression.

    Children are evaluated first, in order, then reduced by the operator.
    Sums and products are not truncated to 64 bits.
    """
    if isinstance(packet, Literal):
        return packet.value
    if not packet.children:
        raise StructuralError("E_EMPTY_OPERATOR", None, kind=packet.kind.name)
    return _reduce(packet.kind, [evaluate(c) for c in packet.children])


def version_sum(hex_text: str, max_depth: int = DEFAULT_MAX_DEPTH) -> int:
    return sum_versions(decode(hex_text, max_depth))


def evaluate_transmission(hex_text: str, max_depth: int = DEFAULT_MAX_DEPTH) -> int:
    return evaluate(decode(hex_text, max_depth))
