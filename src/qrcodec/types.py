from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from qrcodec.errors import InvalidDimension, InvalidVersion


@dataclass(frozen=True)
class Version:
    """
    Symbol version.

    number: 1..40 for standard QR, 1..4 for Micro QR (M1..M4).
    micro:  True for Micro QR.
    """
    number: int
    micro: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.number, int) or isinstance(self.number, bool):
            raise TypeError("version number must be int")
        limit = 4 if self.micro else 40
        if not (1 <= self.number <= limit):
            kind = "Micro QR" if self.micro else "QR"
            raise InvalidVersion(f"{kind} version must be in [1,{limit}], got {self.number}")

    @property
    def width(self) -> int:
        if self.micro:
            return 9 + 2 * self.number
        return 17 + 4 * self.number

    @property
    def name(self) -> str:
        return f"M{self.number}" if self.micro else str(self.number)

    @classmethod
    def from_width(cls, width: int) -> "Version":
        if not isinstance(width, int) or width < 11:
            raise InvalidDimension(f"no QR or Micro QR symbol is {width} modules wide")
        if width <= 17:
            if width % 2 == 0:
                raise InvalidDimension(f"no Micro QR symbol is {width} modules wide")
            return cls((width - 9) // 2, micro=True)
        if (width - 17) % 4 != 0 or width > 177:
            raise InvalidDimension(f"no QR symbol is {width} modules wide")
        return cls((width - 17) // 4)

    def __str__(self) -> str:
        return self.name


class EcLevel(Enum):
    L = "L"
    M = "M"
    Q = "Q"
    H = "H"

    @property
    def format_bits(self) -> int:
        # 2-bit indicator carried in standard format information
        return _LEVEL_FORMAT_BITS[self]

    @classmethod
    def from_format_bits(cls, bits: int) -> "EcLevel":
        for level, value in _LEVEL_FORMAT_BITS.items():
            if value == bits:
                return level
        raise ValueError(f"invalid level indicator {bits}")

    @classmethod
    def coerce(cls, value) -> "EcLevel":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.upper())
            except ValueError:
                raise ValueError(f"unknown error correction level {value!r}") from None
        raise TypeError("level must be EcLevel or str")


_LEVEL_FORMAT_BITS = {
    EcLevel.L: 0b01,
    EcLevel.M: 0b00,
    EcLevel.Q: 0b11,
    EcLevel.H: 0b10,
}


class Mode(Enum):
    """Segment modes, valued by their 4-bit standard indicator."""
    TERMINATOR = 0b0000
    NUMERIC = 0b0001
    ALPHANUMERIC = 0b0010
    BYTE = 0b0100
    ECI = 0b0111
    KANJI = 0b1000


@dataclass(frozen=True)
class Segment:
    """
    One run of data encoded under a single mode.

    data:     raw payload bytes (ASCII digits/characters for numeric and
              alphanumeric, Shift JIS byte pairs for kanji)
    encoding: declared character encoding of byte segments, if known
    eci:      assignment number, only for Mode.ECI segments
    """
    mode: Mode
    char_count: int
    data: bytes = b""
    encoding: Optional[str] = None
    eci: Optional[int] = None
