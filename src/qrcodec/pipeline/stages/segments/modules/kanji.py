from __future__ import annotations

from qrcodec.types import Mode
from qrcodec.utils.bitops import BitReader, BitWriter

MODE = Mode.KANJI

# Shift JIS double-byte ranges representable in 13 bits
_RANGES = ((0x8140, 0x9FFC, 0x8140), (0xE040, 0xEBBF, 0xC140))


def _code_points(data: bytes):
    for i in range(0, len(data), 2):
        yield (data[i] << 8) | data[i + 1]


def accepts(data: bytes) -> bool:
    if len(data) % 2:
        return False
    for code in _code_points(data):
        if not any(lo <= code <= hi for lo, hi, _ in _RANGES):
            return False
        if (code & 0xFF) < 0x40:
            return False
    return True


def char_count(data: bytes) -> int:
    return len(data) // 2


def bit_length(count: int) -> int:
    return 13 * count


def tx(data: bytes, *, out: BitWriter) -> None:
    for code in _code_points(data):
        for lo, hi, base in _RANGES:
            if lo <= code <= hi:
                code -= base
                break
        out.write((code >> 8) * 0xC0 + (code & 0xFF), 13)


def rx(reader: BitReader, *, count: int) -> bytes:
    out = bytearray()
    for _ in range(count):
        value = reader.read(13)
        code = ((value // 0xC0) << 8) | (value % 0xC0)
        code += 0x8140 if code < 0x1F00 else 0xC140
        out.append(code >> 8)
        out.append(code & 0xFF)
    return bytes(out)
