import json
import math
import random
import uuid
from pathlib import Path

from bits_core.protocol import (
    LENGTH_TYPE_COUNT,
    LENGTH_TYPE_TOTAL_BITS,
    LITERAL_TYPE_ID,
    OP_EQUAL_TO,
    OP_GREATER_THAN,
    OP_LESS_THAN,
    OP_MAXIMUM,
    OP_MINIMUM,
    OP_PRODUCT,
    OP_SUM,
    SUB_PACKET_COUNT_BITS,
    TOTAL_LENGTH_BITS,
    TYPE_ID_BITS,
    VERSION_BITS,
)

# --- CONFIGURATION ---
MAX_DEPTH = 4
MAX_CHILDREN = 4
MAX_LITERAL_BITS = 36

REDUCERS = [OP_SUM, OP_PRODUCT, OP_MINIMUM, OP_MAXIMUM]
COMPARISONS = [OP_GREATER_THAN, OP_LESS_THAN, OP_EQUAL_TO]


def field(value: int, width: int) -> str:
    return format(value, f"0{width}b")


def encode_literal(version: int, value: int) -> str:
    """Greedy 4-bit groups, continuation set on all but the last."""
    nibbles = format(value, "x")
    groups = [("1" if i < len(nibbles) - 1 else "0") + field(int(n, 16), 4) for i, n in enumerate(nibbles)]
    return field(version, VERSION_BITS) + field(LITERAL_TYPE_ID, TYPE_ID_BITS) + "".join(groups)


def encode_operator(version: int, type_id: int, children: list[str], length_mode: int) -> str:
    head = field(version, VERSION_BITS) + field(type_id, TYPE_ID_BITS)
    body = "".join(children)
    if length_mode == LENGTH_TYPE_TOTAL_BITS:
        return head + "0" + field(len(body), TOTAL_LENGTH_BITS) + body
    return head + "1" + field(len(children), SUB_PACKET_COUNT_BITS) + body


def to_hex(bits: str) -> str:
    bits += "0" * (-len(bits) % 8)
    return "".join(format(int(bits[i:i + 4], 2), "X") for i in range(0, len(bits), 4))


def generate_tree(rng: random.Random, depth: int, length_mode: str) -> tuple[str, int, int]:
    """Return (bits, version_sum, value) for a random expression."""
    version = rng.randrange(8)

    if depth >= MAX_DEPTH or rng.random() < 0.3:
        value = rng.getrandbits(rng.randint(1, MAX_LITERAL_BITS))
        return encode_literal(version, value), version, value

    type_id = rng.choice(REDUCERS + COMPARISONS)
    n = 2 if type_id in COMPARISONS else rng.randint(1, MAX_CHILDREN)
    subs = [generate_tree(rng, depth + 1, length_mode) for _ in range(n)]
    values = [s[2] for s in subs]

    if type_id == OP_SUM:
        value = sum(values)
    elif type_id == OP_PRODUCT:
        value = math.prod(values)
    elif type_id == OP_MINIMUM:
        value = min(values)
    elif type_id == OP_MAXIMUM:
        value = max(values)
    elif type_id == OP_GREATER_THAN:
        value = int(values[0] > values[1])
    elif type_id == OP_LESS_THAN:
        value = int(values[0] < values[1])
    else:
        value = int(values[0] == values[1])

    if length_mode == "mixed":
        mode = rng.choice([LENGTH_TYPE_TOTAL_BITS, LENGTH_TYPE_COUNT])
    else:
        mode = int(length_mode)

    bits = encode_operator(version, type_id, [s[0] for s in subs], mode)
    return bits, version + sum(s[1] for s in subs), value


def generate_transmission(output_dir: str, rng: random.Random, length_mode: str = "mixed") -> Path:
    bits, vsum, value = generate_tree(rng, 0, length_mode)

    # --- WRITE TRANSMISSION ---
    out = Path(output_dir) / f"transmission-{uuid.UUID(int=rng.getrandbits(128)).hex[:8]}"
    out.mkdir(parents=True, exist_ok=True)

    (out / "transmission.txt").write_text(to_hex(bits) + "\n", encoding="utf-8")
    expected = {"version_sum": vsum, "value": value, "bits": len(bits)}
    (out / "expected.json").write_text(json.dumps(expected, indent=2) + "\n", encoding="utf-8")

    print(f"GENERATED: {out}")
    return out


if __name__ == "__main__":
    import sys

    # Usage:
    #   python tools/sim_transmission.py OUT_DIR [--runs N] [--seed S] [--length-mode {0,1,mixed}]

    args = [a for a in sys.argv[1:] if a]

    def pop_option(arg_list: list[str], name: str, default: str) -> tuple[str, list[str]]:
        """Remove ``name VALUE`` from an argv-style list."""
        if name not in arg_list:
            return default, arg_list
        i = arg_list.index(name)
        if i + 1 >= len(arg_list):
            raise SystemExit(f"{name} requires a value")
        return arg_list[i + 1], arg_list[:i] + arg_list[i + 2:]

    runs, args = pop_option(args, "--runs", "1")
    seed, args = pop_option(args, "--seed", "")
    length_mode, args = pop_option(args, "--length-mode", "mixed")
    if length_mode not in {"0", "1", "mixed"}:
        raise SystemExit("--length-mode must be 0, 1 or mixed")

    out = args[0] if len(args) > 0 else "simulated_transmissions"
    rng = random.Random(int(seed)) if seed else random.Random()

    for _ in range(int(runs)):
        generate_transmission(out, rng, length_mode)
