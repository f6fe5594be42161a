"""BITS Decode - Transmission parser and tree analyses."""
from .analysis import evaluate, evaluate_transmission, sum_versions, version_sum
from .parser import decode, parse_packet

__all__ = [
    "decode",
    "parse_packet",
    "sum_versions",
    "evaluate",
    "version_sum",
    "evaluate_transmission",
]
