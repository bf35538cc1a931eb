from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from qrcodec.errors import UnsupportedLevelForVersion, UnsupportedMode
from qrcodec.types import EcLevel, Mode, Version

# ---- Alignment pattern centre coordinates (rows and columns alike) ----

ALIGNMENT_POSITIONS: Dict[int, Tuple[int, ...]] = {
    1: (),
    2: (6, 18), 3: (6, 22), 4: (6, 26), 5: (6, 30), 6: (6, 34),
    7: (6, 22, 38), 8: (6, 24, 42), 9: (6, 26, 46), 10: (6, 28, 50),
    11: (6, 30, 54), 12: (6, 32, 58), 13: (6, 34, 62),
    14: (6, 26, 46, 66), 15: (6, 26, 48, 70), 16: (6, 26, 50, 74),
    17: (6, 30, 54, 78), 18: (6, 30, 56, 82), 19: (6, 30, 58, 86),
    20: (6, 34, 62, 90),
    21: (6, 28, 50, 72, 94), 22: (6, 26, 50, 74, 98), 23: (6, 30, 54, 78, 102),
    24: (6, 28, 54, 80, 106), 25: (6, 32, 58, 84, 110), 26: (6, 30, 58, 86, 114),
    27: (6, 34, 62, 90, 118),
    28: (6, 26, 50, 74, 98, 122), 29: (6, 30, 54, 78, 102, 126),
    30: (6, 26, 52, 78, 104, 130), 31: (6, 30, 56, 82, 108, 134),
    32: (6, 34, 60, 86, 112, 138), 33: (6, 30, 58, 86, 114, 142),
    34: (6, 34, 62, 90, 118, 146),
    35: (6, 30, 54, 78, 102, 126, 150), 36: (6, 24, 50, 76, 102, 128, 154),
    37: (6, 28, 54, 80, 106, 132, 158), 38: (6, 32, 58, 84, 110, 136, 162),
    39: (6, 26, 54, 82, 110, 138, 166), 40: (6, 30, 58, 86, 114, 142, 170),
}

# ---- Error correction block structure ----

_LEVELS = (EcLevel.L, EcLevel.M, EcLevel.Q, EcLevel.H)

# version: (L, M, Q, H), each (ec codewords per block, ((block count, data codewords per block), ...))
_STANDARD_BLOCKS = {
     1: ((7, ((1, 19),)), (10, ((1, 16),)), (13, ((1, 13),)), (17, ((1, 9),))),
     2: ((10, ((1, 34),)), (16, ((1, 28),)), (22, ((1, 22),)), (28, ((1, 16),))),
     3: ((15, ((1, 55),)), (26, ((1, 44),)), (18, ((2, 17),)), (22, ((2, 13),))),
     4: ((20, ((1, 80),)), (18, ((2, 32),)), (26, ((2, 24),)), (16, ((4, 9),))),
     5: ((26, ((1, 108),)), (24, ((2, 43),)), (18, ((2, 15), (2, 16))), (22, ((2, 11), (2, 12)))),
     6: ((18, ((2, 68),)), (16, ((4, 27),)), (24, ((4, 19),)), (28, ((4, 15),))),
     7: ((20, ((2, 78),)), (18, ((4, 31),)), (18, ((2, 14), (4, 15))), (26, ((4, 13), (1, 14)))),
     8: ((24, ((2, 97),)), (22, ((2, 38), (2, 39))), (22, ((4, 18), (2, 19))), (26, ((4, 14), (2, 15)))),
     9: ((30, ((2, 116),)), (22, ((3, 36), (2, 37))), (20, ((4, 16), (4, 17))), (24, ((4, 12), (4, 13)))),
    10: ((18, ((2, 68), (2, 69))), (26, ((4, 43), (1, 44))), (24, ((6, 19), (2, 20))), (28, ((6, 15), (2, 16)))),
    11: ((20, ((4, 81),)), (30, ((1, 50), (4, 51))), (28, ((4, 22), (4, 23))), (24, ((3, 12), (8, 13)))),
    12: ((24, ((2, 92), (2, 93))), (22, ((6, 36), (2, 37))), (26, ((4, 20), (6, 21))), (28, ((7, 14), (4, 15)))),
    13: ((26, ((4, 107),)), (22, ((8, 37), (1, 38))), (24, ((8, 20), (4, 21))), (22, ((12, 11), (4, 12)))),
    14: ((30, ((3, 115), (1, 116))), (24, ((4, 40), (5, 41))), (20, ((11, 16), (5, 17))), (24, ((11, 12), (5, 13)))),
    15: ((22, ((5, 87), (1, 88))), (24, ((5, 41), (5, 42))), (30, ((5, 24), (7, 25))), (24, ((11, 12), (7, 13)))),
    16: ((24, ((5, 98), (1, 99))), (28, ((7, 45), (3, 46))), (24, ((15, 19), (2, 20))), (30, ((3, 15), (13, 16)))),
    17: ((28, ((1, 107), (5, 108))), (28, ((10, 46), (1, 47))), (28, ((1, 22), (15, 23))), (28, ((2, 14), (17, 15)))),
    18: ((30, ((5, 120), (1, 121))), (26, ((9, 43), (4, 44))), (28, ((17, 22), (1, 23))), (28, ((2, 14), (19, 15)))),
    19: ((28, ((3, 113), (4, 114))), (26, ((3, 44), (11, 45))), (26, ((17, 21), (4, 22))), (26, ((9, 13), (16, 14)))),
    20: ((28, ((3, 107), (5, 108))), (26, ((3, 41), (13, 42))), (30, ((15, 24), (5, 25))), (28, ((15, 15), (10, 16)))),
    21: ((28, ((4, 116), (4, 117))), (26, ((17, 42),)), (28, ((17, 22), (6, 23))), (30, ((19, 16), (6, 17)))),
    22: ((28, ((2, 111), (7, 112))), (28, ((17, 46),)), (30, ((7, 24), (16, 25))), (24, ((34, 13),))),
    23: ((30, ((4, 121), (5, 122))), (28, ((4, 47), (14, 48))), (30, ((11, 24), (14, 25))), (30, ((16, 15), (14, 16)))),
    24: ((30, ((6, 117), (4, 118))), (28, ((6, 45), (14, 46))), (30, ((11, 24), (16, 25))), (30, ((30, 16), (2, 17)))),
    25: ((26, ((8, 106), (4, 107))), (28, ((8, 47), (13, 48))), (30, ((7, 24), (22, 25))), (30, ((22, 15), (13, 16)))),
    26: ((28, ((10, 114), (2, 115))), (28, ((19, 46), (4, 47))), (28, ((28, 22), (6, 23))), (30, ((33, 16), (4, 17)))),
    27: ((30, ((8, 122), (4, 123))), (28, ((22, 45), (3, 46))), (30, ((8, 23), (26, 24))), (30, ((12, 15), (28, 16)))),
    28: ((30, ((3, 117), (10, 118))), (28, ((3, 45), (23, 46))), (30, ((4, 24), (31, 25))), (30, ((11, 15), (31, 16)))),
    29: ((30, ((7, 116), (7, 117))), (28, ((21, 45), (7, 46))), (30, ((1, 23), (37, 24))), (30, ((19, 15), (26, 16)))),
    30: ((30, ((5, 115), (10, 116))), (28, ((19, 47), (10, 48))), (30, ((15, 24), (25, 25))), (30, ((23, 15), (25, 16)))),
    31: ((30, ((13, 115), (3, 116))), (28, ((2, 46), (29, 47))), (30, ((42, 24), (1, 25))), (30, ((23, 15), (28, 16)))),
    32: ((30, ((17, 115),)), (28, ((10, 46), (23, 47))), (30, ((10, 24), (35, 25))), (30, ((19, 15), (35, 16)))),
    33: ((30, ((17, 115), (1, 116))), (28, ((14, 46), (21, 47))), (30, ((29, 24), (19, 25))), (30, ((11, 15), (46, 16)))),
    34: ((30, ((13, 115), (6, 116))), (28, ((14, 46), (23, 47))), (30, ((44, 24), (7, 25))), (30, ((59, 16), (1, 17)))),
    35: ((30, ((12, 121), (7, 122))), (28, ((12, 47), (26, 48))), (30, ((39, 24), (14, 25))), (30, ((22, 15), (41, 16)))),
    36: ((30, ((6, 121), (14, 122))), (28, ((6, 47), (34, 48))), (30, ((46, 24), (10, 25))), (30, ((2, 15), (64, 16)))),
    37: ((30, ((17, 122), (4, 123))), (28, ((29, 46), (14, 47))), (30, ((49, 24), (10, 25))), (30, ((24, 15), (46, 16)))),
    38: ((30, ((4, 122), (18, 123))), (28, ((13, 46), (32, 47))), (30, ((48, 24), (14, 25))), (30, ((42, 15), (32, 16)))),
    39: ((30, ((20, 117), (4, 118))), (28, ((40, 47), (7, 48))), (30, ((43, 24), (22, 25))), (30, ((10, 15), (67, 16)))),
    40: ((30, ((19, 118), (6, 119))), (28, ((18, 47), (31, 48))), (30, ((34, 24), (34, 25))), (30, ((20, 15), (61, 16)))),
}

_MICRO_BLOCKS = {
    1: {EcLevel.L: (2, ((1, 3),))},
    2: {EcLevel.L: (5, ((1, 5),)), EcLevel.M: (6, ((1, 4),))},
    3: {EcLevel.L: (6, ((1, 11),)), EcLevel.M: (8, ((1, 9),))},
    4: {EcLevel.L: (8, ((1, 16),)), EcLevel.M: (10, ((1, 14),)), EcLevel.Q: (14, ((1, 10),))},
}


@dataclass(frozen=True)
class BlockSpec:
    """
    Reed-Solomon block structure of one (version, level) pair.

    ec_per_block: EC codewords appended to every block
    groups:       ((block count, data codewords per block), ...) in symbol order
    """
    ec_per_block: int
    groups: Tuple[Tuple[int, int], ...]

    @property
    def num_blocks(self) -> int:
        return sum(count for count, _ in self.groups)

    @property
    def data_codewords(self) -> int:
        return sum(count * size for count, size in self.groups)

    @property
    def total_codewords(self) -> int:
        return self.data_codewords + self.num_blocks * self.ec_per_block

    def data_block_sizes(self) -> list[int]:
        sizes: list[int] = []
        for count, size in self.groups:
            sizes.extend([size] * count)
        return sizes


def supported_levels(version: Version) -> Tuple[EcLevel, ...]:
    if version.micro:
        return tuple(_MICRO_BLOCKS[version.number])
    return _LEVELS


def ec_blocks(version: Version, level: EcLevel) -> BlockSpec:
    if version.micro:
        entry = _MICRO_BLOCKS[version.number].get(level)
        if entry is None:
            raise UnsupportedLevelForVersion(f"level {level.value} is not available in version {version}")
        ec, groups = entry
    else:
        ec, groups = _STANDARD_BLOCKS[version.number][_LEVELS.index(level)]
    return BlockSpec(ec_per_block=ec, groups=groups)


def raw_data_modules(version: Version) -> int:
    """Modules left for codewords and remainder bits once function patterns are placed."""
    if version.micro:
        return (36, 80, 132, 192)[version.number - 1]
    v = version.number
    result = (16 * v + 128) * v + 64
    if v >= 2:
        num_align = v // 7 + 2
        result -= (25 * num_align - 10) * num_align - 55
        if v >= 7:
            result -= 36
    return result


def total_codewords(version: Version) -> int:
    if version.micro:
        return (5, 10, 17, 24)[version.number - 1]
    return raw_data_modules(version) // 8


def remainder_bits(version: Version) -> int:
    if version.micro:
        return 0
    return raw_data_modules(version) % 8


def has_half_codeword(version: Version) -> bool:
    """M1 and M3 end their data codewords with a 4-bit codeword."""
    return version.micro and version.number in (1, 3)


def data_bit_capacity(version: Version, level: EcLevel) -> int:
    bits = ec_blocks(version, level).data_codewords * 8
    if has_half_codeword(version):
        bits -= 4
    return bits


def max_correctable(version: Version, level: EcLevel) -> int:
    """Codeword errors correctable per block; M1 only detects."""
    if version.micro and version.number == 1:
        return 0
    return ec_blocks(version, level).ec_per_block // 2


# ---- Bit stream layout ----

_CHAR_COUNT_BITS = {
    Mode.NUMERIC: (10, 12, 14),
    Mode.ALPHANUMERIC: (9, 11, 13),
    Mode.BYTE: (8, 16, 16),
    Mode.KANJI: (8, 10, 12),
}

# indexed by Micro version number - 1; None where the mode is unavailable
_MICRO_CHAR_COUNT_BITS = {
    Mode.NUMERIC: (3, 4, 5, 6),
    Mode.ALPHANUMERIC: (None, 3, 4, 5),
    Mode.BYTE: (None, None, 4, 5),
    Mode.KANJI: (None, None, 3, 4),
}

MICRO_MODE_INDICATORS = {
    Mode.NUMERIC: 0,
    Mode.ALPHANUMERIC: 1,
    Mode.BYTE: 2,
    Mode.KANJI: 3,
}


def supported_modes(version: Version) -> Tuple[Mode, ...]:
    if not version.micro:
        return (Mode.NUMERIC, Mode.ALPHANUMERIC, Mode.BYTE, Mode.KANJI, Mode.ECI)
    return tuple(
        mode for mode, widths in _MICRO_CHAR_COUNT_BITS.items()
        if widths[version.number - 1] is not None
    )


def char_count_bits(mode: Mode, version: Version) -> int:
    if version.micro:
        widths = _MICRO_CHAR_COUNT_BITS.get(mode)
        width = widths[version.number - 1] if widths is not None else None
        if width is None:
            raise UnsupportedMode(f"{mode.name} mode is not available in version {version}")
        return width
    if mode not in _CHAR_COUNT_BITS:
        raise UnsupportedMode(f"{mode.name} mode carries no character count")
    v = version.number
    return _CHAR_COUNT_BITS[mode][0 if v <= 9 else (1 if v <= 26 else 2)]


def mode_indicator_bits(version: Version) -> int:
    return version.number - 1 if version.micro else 4


def terminator_bits(version: Version) -> int:
    return 2 * version.number + 1 if version.micro else 4


PAD_CODEWORDS = (0xEC, 0x11)

# ---- Format information ----

FORMAT_GENERATOR = 0x537
FORMAT_MASK = 0x5412
MICRO_FORMAT_MASK = 0x4445
VERSION_GENERATOR = 0x1F25

# (Micro version, level) -> 3-bit symbol number carried in Micro format information
MICRO_SYMBOL_NUMBERS = {
    (1, EcLevel.L): 0,
    (2, EcLevel.L): 1,
    (2, EcLevel.M): 2,
    (3, EcLevel.L): 3,
    (3, EcLevel.M): 4,
    (4, EcLevel.L): 5,
    (4, EcLevel.M): 6,
    (4, EcLevel.Q): 7,
}

# Micro mask index -> standard mask function
MICRO_MASK_PATTERNS = (1, 4, 6, 7)
