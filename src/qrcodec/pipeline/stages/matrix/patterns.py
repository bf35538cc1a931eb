from __future__ import annotations

from functools import lru_cache

import numpy as np

from qrcodec.tables import ALIGNMENT_POSITIONS
from qrcodec.types import Version
from qrcodec.pipeline.stages.matrix.grid import ModuleGrid, Role


def _finder(grid: ModuleGrid, top: int, left: int) -> None:
    # 7x7 finder plus its one-module light separator, clipped to the symbol
    w = grid.width
    for dr in range(-1, 8):
        for dc in range(-1, 8):
            r, c = top + dr, left + dc
            if not (0 <= r < w and 0 <= c < w):
                continue
            ring = max(abs(dr - 3), abs(dc - 3))
            grid.dark[r, c] = ring != 2 and ring != 4
            grid.role[r, c] = Role.FUNCTION


def _alignment(grid: ModuleGrid, row: int, col: int) -> None:
    for dr in range(-2, 3):
        for dc in range(-2, 3):
            grid.dark[row + dr, col + dc] = max(abs(dr), abs(dc)) != 1
            grid.role[row + dr, col + dc] = Role.FUNCTION


def _standard_layout(version: Version) -> ModuleGrid:
    grid = ModuleGrid.blank(version)
    w = grid.width

    _finder(grid, 0, 0)
    _finder(grid, 0, w - 7)
    _finder(grid, w - 7, 0)

    for i in range(8, w - 8):
        grid.dark[6, i] = grid.dark[i, 6] = i % 2 == 0
        grid.role[6, i] = grid.role[i, 6] = Role.FUNCTION

    centres = ALIGNMENT_POSITIONS[version.number]
    last = len(centres) - 1
    for a, row in enumerate(centres):
        for b, col in enumerate(centres):
            # skip the three corners occupied by finder patterns
            if (a, b) in ((0, 0), (0, last), (last, 0)):
                continue
            _alignment(grid, row, col)

    # format information, both copies
    for i in range(9):
        if i != 6:
            grid.role[8, i] = grid.role[i, 8] = Role.FORMAT
    for i in range(8):
        grid.role[8, w - 1 - i] = Role.FORMAT
    for i in range(7):
        grid.role[w - 1 - i, 8] = Role.FORMAT

    # dark module
    grid.dark[w - 8, 8] = True
    grid.role[w - 8, 8] = Role.FUNCTION

    if version.number >= 7:
        grid.role[0:6, w - 11:w - 8] = Role.VERSION
        grid.role[w - 11:w - 8, 0:6] = Role.VERSION

    return grid


def _micro_layout(version: Version) -> ModuleGrid:
    grid = ModuleGrid.blank(version)
    w = grid.width

    _finder(grid, 0, 0)

    for i in range(8, w):
        grid.dark[0, i] = grid.dark[i, 0] = i % 2 == 0
        grid.role[0, i] = grid.role[i, 0] = Role.FUNCTION

    for i in range(1, 9):
        grid.role[8, i] = grid.role[i, 8] = Role.FORMAT

    return grid


@lru_cache(maxsize=None)
def _cached_layout(version: Version) -> ModuleGrid:
    grid = _micro_layout(version) if version.micro else _standard_layout(version)
    grid.dark.setflags(write=False)
    grid.role.setflags(write=False)
    return grid


def function_layout(version: Version) -> ModuleGrid:
    """
    Read-only grid holding every function pattern of version; format and
    version areas are reserved (light) and all other modules are DATA.
    """
    return _cached_layout(version)


def function_grid(version: Version) -> ModuleGrid:
    """Writable copy of function_layout(version), ready for data placement."""
    return function_layout(version).copy()


def data_module_count(version: Version) -> int:
    return int(np.count_nonzero(function_layout(version).role == Role.DATA))
