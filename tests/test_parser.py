import warnings

import pytest

from bits_core.cursor import BitCursor
from bits_core.errors import BitUnderflowError, HexDecodeError, StructuralError
from bits_core.hexcodec import decode_hex
from bits_core.packet import Literal, Operator, OperatorKind, operator_kind
from bits_decode.parser import decode, parse_packet

from packet_bits import by_count, by_length, literal, to_hex

# Trailing zeros so framing errors are hit before the buffer runs out.
SLACK = "0" * 32


def test_single_literal():
    assert decode("D2FE28") == Literal(version=6, value=2021)


@pytest.mark.parametrize("value", [0, 1, 15, 16, 255, 2021, 1 << 32, (1 << 60) - 1, (1 << 64) - 1])
def test_literal_round_trip(value):
    assert decode(to_hex(literal(3, value))) == Literal(3, value)


def test_literal_leading_zero_groups_do_not_count_against_width():
    bits = "000100" + "10000" + "".join("1" + "1111" for _ in range(15)) + "01111"
    assert decode(to_hex(bits)).value == (1 << 64) - 1


def test_literal_overflow_rejected():
    with pytest.raises(StructuralError) as exc:
        decode(to_hex(literal(0, 1 << 64)))
    assert exc.value.code == "E_LITERAL_OVERFLOW"
    assert exc.value.offset == 6


def test_operator_examples():
    # Length-bounded, two literals.
    p = decode("38006F45291200")
    assert isinstance(p, Operator)
    assert p.version == 1
    assert p.kind is OperatorKind.LESS_THAN
    assert [c.value for c in p.children] == [10, 20]

    # Count-bounded, three literals.
    p = decode("EE00D40C823060")
    assert p.version == 7
    assert p.kind is OperatorKind.MAXIMUM
    assert [c.value for c in p.children] == [1, 2, 3]


def test_length_bounded_group_stops_at_declared_total():
    inner = by_length(1, 0, literal(2, 7))
    bits = by_count(0, 1, inner, literal(3, 9))
    p = decode(to_hex(bits))

    assert p.kind is OperatorKind.PRODUCT
    assert len(p.children) == 2
    first, second = p.children
    assert first == Operator(1, OperatorKind.SUM, (Literal(2, 7),))
    assert second == Literal(3, 9)


def test_length_bounded_group_overrun_rejected():
    bits = by_length(0, 0, literal(0, 1), total=10) + SLACK
    with pytest.raises(StructuralError) as exc:
        decode(to_hex(bits))
    assert exc.value.code == "E_LENGTH_BOUNDARY"


def test_length_bounded_group_with_leftover_bits_rejected():
    bits = by_length(0, 0, literal(0, 1), total=14) + SLACK
    with pytest.raises(StructuralError) as exc:
        decode(to_hex(bits))
    assert exc.value.code == "E_LENGTH_BOUNDARY"


def test_nested_length_group_cannot_exceed_parent():
    inner = by_length(0, 0, literal(0, 1), total=40)
    bits = by_length(0, 0, inner, total=len(inner)) + SLACK
    with pytest.raises(StructuralError):
        decode(to_hex(bits))


def test_count_bounded_group_parses_exactly_count():
    head = by_count(2, 0, literal(1, 5), literal(1, 6))
    bits = head + literal(4, 7)
    cursor = BitCursor(decode_hex(to_hex(bits)))

    packet, cursor = parse_packet(cursor)
    assert [c.value for c in packet.children] == [5, 6]
    assert cursor.offset == len(head)

    nxt, cursor = parse_packet(cursor)
    assert nxt == Literal(4, 7)


def test_count_bounded_group_short_of_packets_is_truncated():
    bits = by_count(0, 0, literal(0, 1), count=3)
    with pytest.raises(BitUnderflowError):
        decode(to_hex(bits))


@pytest.mark.parametrize("bits", [by_length(0, 0, total=0) + SLACK, by_count(0, 0, count=0)])
def test_operator_without_children_rejected(bits):
    with pytest.raises(StructuralError) as exc:
        decode(to_hex(bits))
    assert exc.value.code == "E_EMPTY_OPERATOR"


def test_comparison_arity_is_not_a_parse_error():
    p = decode(to_hex(by_count(0, 5, literal(0, 1), literal(0, 2), literal(0, 3))))
    assert p.kind is OperatorKind.GREATER_THAN
    assert len(p.children) == 3


def _chain(levels: int) -> str:
    bits = literal(0, 1)
    for _ in range(levels):
        bits = by_count(0, 0, bits)
    return bits


def test_depth_limit():
    hex_text = to_hex(_chain(4))
    assert isinstance(decode(hex_text, max_depth=4), Operator)
    with pytest.raises(StructuralError) as exc:
        decode(hex_text, max_depth=3)
    assert exc.value.code == "E_MAX_DEPTH"


def test_truncated_literal():
    with pytest.raises(BitUnderflowError):
        decode("D2FE")


def test_bad_hex_produces_no_tree():
    with pytest.raises(HexDecodeError):
        decode("D2FE2")


def test_zero_padding_is_silent():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        decode("D2FE28")


def test_nonzero_padding_warns_but_decodes():
    with pytest.warns(UserWarning, match="Non-zero padding"):
        p = decode("D2FE2F")
    assert p == Literal(6, 2021)


def test_trailing_bytes_warn_but_decode():
    with pytest.warns(UserWarning, match="trailing bits"):
        p = decode("D2FE2800")
    assert p == Literal(6, 2021)


def test_literal_type_id_is_not_an_operator():
    with pytest.raises(StructuralError) as exc:
        operator_kind(4, offset=12)
    assert exc.value.code == "E_TYPE_ID"
    assert "bit 12" in str(exc.value)
    assert [operator_kind(t) for t in (0, 7)] == [OperatorKind.SUM, OperatorKind.EQUAL_TO]
