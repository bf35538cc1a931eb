from __future__ import annotations

from qrcodec.errors import MalformedSegment
from qrcodec.types import Mode
from qrcodec.utils.bitops import BitReader, BitWriter

MODE = Mode.NUMERIC

# digits per group -> bits per group
_GROUP_BITS = {3: 10, 2: 7, 1: 4}


def accepts(data: bytes) -> bool:
    return all(0x30 <= b <= 0x39 for b in data)


def char_count(data: bytes) -> int:
    return len(data)


def bit_length(count: int) -> int:
    rem = count % 3
    return 10 * (count // 3) + (_GROUP_BITS[rem] if rem else 0)


def tx(data: bytes, *, out: BitWriter) -> None:
    for i in range(0, len(data), 3):
        group = data[i:i + 3]
        out.write(int(group.decode("ascii")), _GROUP_BITS[len(group)])


def rx(reader: BitReader, *, count: int) -> bytes:
    out = bytearray()
    left = count
    while left > 0:
        digits = min(3, left)
        value = reader.read(_GROUP_BITS[digits])
        if value >= 10 ** digits:
            raise MalformedSegment(f"numeric group value {value} exceeds {digits} digits")
        out += str(value).zfill(digits).encode("ascii")
        left -= digits
    return bytes(out)
