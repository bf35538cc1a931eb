from __future__ import annotations

from qrcodec.errors import MalformedSegment
from qrcodec.types import Mode
from qrcodec.utils.bitops import BitReader, BitWriter

MODE = Mode.ALPHANUMERIC

CHARSET = b"0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"
_VALUES = {c: i for i, c in enumerate(CHARSET)}


def accepts(data: bytes) -> bool:
    return all(b in _VALUES for b in data)


def char_count(data: bytes) -> int:
    return len(data)


def bit_length(count: int) -> int:
    return 11 * (count // 2) + 6 * (count % 2)


def tx(data: bytes, *, out: BitWriter) -> None:
    for i in range(0, len(data) - 1, 2):
        out.write(_VALUES[data[i]] * 45 + _VALUES[data[i + 1]], 11)
    if len(data) % 2:
        out.write(_VALUES[data[-1]], 6)


def rx(reader: BitReader, *, count: int) -> bytes:
    out = bytearray()
    for _ in range(count // 2):
        value = reader.read(11)
        if value >= 45 * 45:
            raise MalformedSegment(f"alphanumeric pair value {value} out of range")
        hi, lo = divmod(value, 45)
        out.append(CHARSET[hi])
        out.append(CHARSET[lo])
    if count % 2:
        value = reader.read(6)
        if value >= 45:
            raise MalformedSegment(f"alphanumeric value {value} out of range")
        out.append(CHARSET[value])
    return bytes(out)
