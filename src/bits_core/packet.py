"""Decoded packet tree.

A transmission decodes to a tree of immutable packets. Children are owned by
their parent and kept in wire order.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from .errors import StructuralError
from .protocol import (
    OP_EQUAL_TO,
    OP_GREATER_THAN,
    OP_LESS_THAN,
    OP_MAXIMUM,
    OP_MINIMUM,
    OP_PRODUCT,
    OP_SUM,
)


class OperatorKind(IntEnum):
    SUM = OP_SUM
    PRODUCT = OP_PRODUCT
    MINIMUM = OP_MINIMUM
    MAXIMUM = OP_MAXIMUM
    GREATER_THAN = OP_GREATER_THAN
    LESS_THAN = OP_LESS_THAN
    EQUAL_TO = OP_EQUAL_TO


def operator_kind(type_id: int, offset: int | None = None) -> OperatorKind:
    """Resolve an operator type id, rejecting anything outside the table."""
    try:
        return OperatorKind(type_id)
    except ValueError:
        raise StructuralError("E_TYPE_ID", offset, type_id=type_id) from None


@dataclass(frozen=True)
class Literal:
    version: int
    value: int

    def to_dict(self) -> dict:
        return {"version": self.version, "type": "literal", "value": self.value}


@dataclass(frozen=True)
class Operator:
    version: int
    kind: OperatorKind
    children: tuple[Packet, ...]

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "type": self.kind.name.lower(),
            "children": [c.to_dict() for c in self.children],
        }


Packet = Union[Literal, Operator]
