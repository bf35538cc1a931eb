from __future__ import annotations

from functools import lru_cache
from typing import List, Sequence, Tuple

import numpy as np

from qrcodec.types import Version
from qrcodec.pipeline.stages.matrix.grid import ModuleGrid, Role
from qrcodec.pipeline.stages.matrix.patterns import function_layout


@lru_cache(maxsize=None)
def placement_order(version: Version) -> Tuple[Tuple[int, int], ...]:
    """
    Data module coordinates (row, col) in codeword bit order.

    Two-column strips are walked from the right edge leftward, the first one
    upward and then alternating direction, skipping function modules. Standard
    symbols skip the vertical timing column 6; Micro symbols stop before column 0.
    """
    reserved = function_layout(version).role != Role.DATA
    w = version.width
    order: List[Tuple[int, int]] = []
    upward = True
    right = w - 1
    while right >= 1:
        if not version.micro and right == 6:
            right -= 1
        rows = range(w - 1, -1, -1) if upward else range(w)
        for r in rows:
            for c in (right, right - 1):
                if not reserved[r, c]:
                    order.append((r, c))
        upward = not upward
        right -= 2
    return tuple(order)


def place_bits(grid: ModuleGrid, bits: Sequence[int]) -> None:
    """
    Write bits into the data modules in placement order; modules left over
    (remainder bits) stay light.
    """
    order = placement_order(grid.version)
    if len(bits) > len(order):
        raise ValueError(f"{len(bits)} bits exceed {len(order)} data modules")
    for (r, c), bit in zip(order, bits):
        grid.dark[r, c] = bool(bit)


def read_bits(dark: np.ndarray, version: Version) -> List[int]:
    return [int(dark[r, c]) for r, c in placement_order(version)]
