from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from qrcodec.errors import FormatInfoUnreadable, VersionMismatch
from qrcodec.tables import MICRO_SYMBOL_NUMBERS
from qrcodec.types import EcLevel, Version
from qrcodec.pipeline.stages.info import bch
from qrcodec.pipeline.stages.matrix.grid import ModuleGrid

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


@dataclass(frozen=True)
class FormatInfo:
    version: Version
    level: EcLevel
    mask: int
    distance: int


# ---- Positions (index = bit number, bit 0 least significant) ----

def format_positions(version: Version) -> List[List[Coord]]:
    """One list of 15 coordinates per format information copy."""
    w = version.width
    if version.micro:
        return [[(i + 1, 8) for i in range(8)] + [(8, 15 - i) for i in range(8, 15)]]

    first: List[Coord] = [(i, 8) for i in range(6)]
    first += [(7, 8), (8, 8), (8, 7)]
    first += [(8, 14 - i) for i in range(9, 15)]
    second: List[Coord] = [(8, w - 1 - i) for i in range(8)]
    second += [(w - 15 + i, 8) for i in range(8, 15)]
    return [first, second]


def version_positions(version: Version) -> List[List[Coord]]:
    """Top-right and bottom-left version information blocks, 18 coordinates each."""
    w = version.width
    top_right = [(i // 3, w - 11 + i % 3) for i in range(18)]
    bottom_left = [(c, r) for r, c in top_right]
    return [top_right, bottom_left]


def _write_word(dark: np.ndarray, positions: Sequence[Coord], word: int) -> None:
    for i, (r, c) in enumerate(positions):
        dark[r, c] = bool((word >> i) & 1)


def _read_word(dark: np.ndarray, positions: Sequence[Coord]) -> int:
    word = 0
    for i, (r, c) in enumerate(positions):
        if dark[r, c]:
            word |= 1 << i
    return word


# ---- Encode side ----

def format_data(version: Version, level: EcLevel, mask: int) -> int:
    if version.micro:
        return (MICRO_SYMBOL_NUMBERS[(version.number, level)] << 2) | mask
    return (level.format_bits << 3) | mask


def write_format(grid: ModuleGrid, level: EcLevel, mask: int) -> None:
    word = bch.format_word(format_data(grid.version, level, mask), micro=grid.version.micro)
    for positions in format_positions(grid.version):
        _write_word(grid.dark, positions, word)


def write_version(grid: ModuleGrid) -> None:
    if grid.version.micro or grid.version.number < 7:
        return
    word = bch.version_word(grid.version.number)
    for positions in version_positions(grid.version):
        _write_word(grid.dark, positions, word)


# ---- Decode side ----

def _micro_symbol(number: int) -> Tuple[int, EcLevel]:
    for key, value in MICRO_SYMBOL_NUMBERS.items():
        if value == number:
            return key
    raise FormatInfoUnreadable(f"invalid Micro QR symbol number {number}")


def read_format(dark: np.ndarray, version: Version) -> FormatInfo:
    """
    Recover level and mask from the best format information copy.
    Raises FormatInfoUnreadable when no copy is within correction distance.
    """
    best_data, best_dist = None, None
    for positions in format_positions(version):
        data, dist = bch.decode_format_word(_read_word(dark, positions), micro=version.micro)
        if best_dist is None or dist < best_dist:
            best_data, best_dist = data, dist

    if best_dist > bch.FORMAT_CORRECTION_RADIUS:
        raise FormatInfoUnreadable(f"format information off by {best_dist} bits")

    if version.micro:
        number, level = _micro_symbol(best_data >> 2)
        if number != version.number:
            raise VersionMismatch(f"format information says M{number}, grid is {version}")
        info = FormatInfo(version=version, level=level, mask=best_data & 0b11, distance=best_dist)
    else:
        level = EcLevel.from_format_bits(best_data >> 3)
        info = FormatInfo(version=version, level=level, mask=best_data & 0b111, distance=best_dist)
    logger.debug("format information: level %s mask %d (%d bits off)", info.level.value, info.mask, best_dist)
    return info


def read_version(dark: np.ndarray, version: Version) -> int:
    """
    Check the version information blocks of a version 7+ symbol against its dimension.
    Raises VersionMismatch if both copies are unreadable or disagree with the dimension.
    """
    if version.micro or version.number < 7:
        return version.number
    best_version, best_dist = None, None
    for positions in version_positions(version):
        number, dist = bch.decode_version_word(_read_word(dark, positions))
        if best_dist is None or dist < best_dist:
            best_version, best_dist = number, dist
    if best_dist > bch.VERSION_CORRECTION_RADIUS:
        raise VersionMismatch(f"version information off by {best_dist} bits")
    if best_version != version.number:
        raise VersionMismatch(f"version information says {best_version}, grid is {version}")
    return best_version
