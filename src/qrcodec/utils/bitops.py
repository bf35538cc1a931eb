from __future__ import annotations

from typing import List, Sequence

from qrcodec.errors import MalformedSegment


def bytes_to_bits(data: bytes) -> List[int]:
    bits = []
    for b in data:
        for i in range(7, -1, -1):
            bits.append((b >> i) & 1)
    return bits


def bits_to_bytes(bits: Sequence[int]) -> bytes:
    if len(bits) % 8 != 0:
        raise ValueError(f"Bit length must be multiple of 8, got {len(bits)}")
    out = bytearray(len(bits) // 8)
    for bi in range(0, len(bits), 8):
        v = 0
        for i in range(8):
            v = (v << 1) | (bits[bi + i] & 1)
        out[bi // 8] = v
    return bytes(out)


class BitWriter:
    """MSB-first bit accumulator."""

    def __init__(self) -> None:
        self.bits: List[int] = []

    def __len__(self) -> int:
        return len(self.bits)

    def write(self, value: int, nbits: int) -> None:
        if nbits < 0 or value < 0 or value >> nbits:
            raise ValueError(f"value {value} does not fit in {nbits} bits")
        for i in range(nbits - 1, -1, -1):
            self.bits.append((value >> i) & 1)

    def extend(self, bits: Sequence[int]) -> None:
        self.bits.extend(b & 1 for b in bits)

    def to_bytes(self) -> bytes:
        return bits_to_bytes(self.bits)


class BitReader:
    """MSB-first reader over a bounded bit sequence."""

    def __init__(self, bits: Sequence[int]) -> None:
        self.bits = list(bits)
        self.pos = 0

    @property
    def remaining(self) -> int:
        return len(self.bits) - self.pos

    def peek(self, nbits: int) -> int:
        if nbits > self.remaining:
            raise MalformedSegment(f"needed {nbits} bits, only {self.remaining} left")
        v = 0
        for b in self.bits[self.pos:self.pos + nbits]:
            v = (v << 1) | b
        return v

    def read(self, nbits: int) -> int:
        v = self.peek(nbits)
        self.pos += nbits
        return v
