from __future__ import annotations

from qrcodec.types import Mode
from qrcodec.utils.bitops import BitReader, BitWriter

MODE = Mode.BYTE


def accepts(data: bytes) -> bool:
    return True


def char_count(data: bytes) -> int:
    return len(data)


def bit_length(count: int) -> int:
    return 8 * count


def tx(data: bytes, *, out: BitWriter) -> None:
    for b in data:
        out.write(b, 8)


def rx(reader: BitReader, *, count: int) -> bytes:
    return bytes(reader.read(8) for _ in range(count))
