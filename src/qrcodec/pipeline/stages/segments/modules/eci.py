from __future__ import annotations

import codecs
from typing import Optional

from qrcodec.errors import MalformedSegment, UnsupportedEncoding
from qrcodec.types import Mode
from qrcodec.utils.bitops import BitReader, BitWriter

MODE = Mode.ECI

# ECI assignment number -> Python codec label
ASSIGNMENTS = {
    0: "cp437",
    1: "iso8859-1",
    2: "cp437",
    3: "iso8859-1",
    4: "iso8859-2",
    5: "iso8859-3",
    6: "iso8859-4",
    7: "iso8859-5",
    8: "iso8859-6",
    9: "iso8859-7",
    10: "iso8859-8",
    11: "iso8859-9",
    12: "iso8859-10",
    13: "iso8859-11",
    15: "iso8859-13",
    16: "iso8859-14",
    17: "iso8859-15",
    18: "iso8859-16",
    20: "shift_jis",
    21: "cp1250",
    22: "cp1251",
    23: "cp1252",
    24: "cp1256",
    25: "utf-16-be",
    26: "utf-8",
    27: "ascii",
    28: "big5",
    29: "gb18030",
    30: "euc_kr",
    170: "ascii",
}

# Byte segments are interpreted as ISO-8859-1 unless an ECI says otherwise.
DEFAULT_ENCODING = "iso8859-1"

_BY_CODEC: dict[str, int] = {}
for _number, _label in sorted(ASSIGNMENTS.items(), reverse=True):
    # lowest current (non-legacy) number wins for each codec
    if _number in (0, 1, 170):
        continue
    _BY_CODEC[codecs.lookup(_label).name] = _number


def normalize(encoding: str) -> str:
    try:
        return codecs.lookup(encoding).name
    except LookupError:
        raise UnsupportedEncoding(f"unknown encoding: {encoding}") from None


def needs_eci(encoding: Optional[str]) -> bool:
    return encoding is not None and normalize(encoding) != DEFAULT_ENCODING


def assignment_for(encoding: str) -> int:
    number = _BY_CODEC.get(normalize(encoding))
    if number is None:
        raise UnsupportedEncoding(f"encoding {encoding!r} has no ECI assignment number")
    return number


def encoding_for(assignment: int) -> Optional[str]:
    return ASSIGNMENTS.get(assignment)


def bit_length(assignment: int) -> int:
    if assignment < 1 << 7:
        return 8
    if assignment < 1 << 14:
        return 16
    return 24


def tx(assignment: int, *, out: BitWriter) -> None:
    if not (0 <= assignment <= 999999):
        raise ValueError(f"ECI assignment {assignment} out of range")
    if assignment < 1 << 7:
        out.write(assignment, 8)
    elif assignment < 1 << 14:
        out.write(0b10, 2)
        out.write(assignment, 14)
    else:
        out.write(0b110, 3)
        out.write(assignment, 21)


def rx(reader: BitReader) -> int:
    if reader.read(1) == 0:
        return reader.read(7)
    if reader.read(1) == 0:
        return reader.read(14)
    if reader.read(1) == 0:
        value = reader.read(21)
        if value > 999999:
            raise MalformedSegment(f"ECI assignment {value} out of range")
        return value
    raise MalformedSegment("invalid ECI designator")
