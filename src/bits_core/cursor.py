"""Big-endian bit cursor over a byte buffer.

Bits are numbered 0..8*len(buf) across the whole buffer, most significant bit
of byte 0 first. Reads never align to bytes.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from .errors import BitUnderflowError, StructuralError
from .protocol import MAX_READ_BITS


class BitCursor:
    """Forward-only reader. The offset only ever grows."""

    __slots__ = ("_buf", "_bit_len", "_offset", "_limit")

    def __init__(self, buf: bytes):
        self._buf = bytes(buf)
        self._bit_len = len(self._buf) * 8
        self._offset = 0
        # End of the innermost length-bounded group, if any.
        self._limit: int | None = None

    @property
    def offset(self) -> int:
        return self._offset

    def consumed_bits(self, mark: int = 0) -> int:
        """Bits consumed since ``mark`` (an earlier ``offset``), or since creation."""
        return self._offset - mark

    def remaining_bits(self) -> int:
        return self._bit_len - self._offset

    def read_bits(self, nbits: int) -> int:
        """Read ``nbits`` (1..64) as an unsigned big-endian integer and advance."""
        if not 1 <= nbits <= MAX_READ_BITS:
            raise ValueError(f"nbits must be in 1..{MAX_READ_BITS}, got {nbits}")

        start = self._offset
        end = start + nbits

        # A group boundary inside the buffer is a framing violation; one past
        # the buffer end just means the data is truncated.
        if self._limit is not None and self._limit <= self._bit_len and end > self._limit:
            raise StructuralError("E_LENGTH_BOUNDARY", start, requested=nbits, boundary=self._limit)
        if end > self._bit_len:
            raise BitUnderflowError("E_BIT_UNDERFLOW", start, requested=nbits, remaining=self._bit_len - start)

        first = start // 8
        last = (end + 7) // 8
        chunk = int.from_bytes(self._buf[first:last], "big")
        chunk >>= last * 8 - end
        self._offset = end
        return chunk & ((1 << nbits) - 1)

    @contextmanager
    def bounded(self, nbits: int) -> Iterator[int]:
        """Confine reads to the next ``nbits`` bits; yields the absolute end offset."""
        if nbits < 0:
            raise ValueError(f"bound must be >= 0, got {nbits}")

        end = self._offset + nbits
        if self._limit is not None and end > self._limit:
            raise StructuralError("E_LENGTH_BOUNDARY", self._offset, declared=nbits, boundary=self._limit)

        outer = self._limit
        self._limit = end
        try:
            yield end
        finally:
            self._limit = outer
