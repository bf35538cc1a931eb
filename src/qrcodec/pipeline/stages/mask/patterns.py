from __future__ import annotations

from functools import lru_cache

import numpy as np

from qrcodec.tables import MICRO_MASK_PATTERNS
from qrcodec.types import Version
from qrcodec.pipeline.stages.matrix.grid import ModuleGrid, Role
from qrcodec.pipeline.stages.matrix.patterns import function_layout

# Module (i=row, j=col) is inverted where the condition holds.
# Written with // and % only so they work on ints and numpy index arrays alike.
MASK_FUNCTIONS = (
    lambda i, j: (i + j) % 2 == 0,
    lambda i, j: i % 2 == 0,
    lambda i, j: j % 3 == 0,
    lambda i, j: (i + j) % 3 == 0,
    lambda i, j: (i // 2 + j // 3) % 2 == 0,
    lambda i, j: (i * j) % 2 + (i * j) % 3 == 0,
    lambda i, j: ((i * j) % 2 + (i * j) % 3) % 2 == 0,
    lambda i, j: ((i + j) % 2 + (i * j) % 3) % 2 == 0,
)


def mask_count(version: Version) -> int:
    return len(MICRO_MASK_PATTERNS) if version.micro else len(MASK_FUNCTIONS)


def mask_function(index: int, *, micro: bool = False):
    limit = len(MICRO_MASK_PATTERNS) if micro else len(MASK_FUNCTIONS)
    if not isinstance(index, int) or not (0 <= index < limit):
        raise ValueError(f"mask index must be in [0,{limit - 1}], got {index!r}")
    return MASK_FUNCTIONS[MICRO_MASK_PATTERNS[index] if micro else index]


@lru_cache(maxsize=None)
def _mask_matrix(version: Version, index: int) -> np.ndarray:
    i, j = np.indices((version.width, version.width))
    flip = mask_function(index, micro=version.micro)(i, j)
    flip &= function_layout(version).role == Role.DATA
    flip.setflags(write=False)
    return flip


def mask_matrix(version: Version, index: int) -> np.ndarray:
    """Bool array of the data modules inverted by mask index."""
    return _mask_matrix(version, index)


def apply_mask(grid: ModuleGrid, index: int) -> None:
    """XOR mask index into the data modules of grid; applying twice restores it."""
    grid.dark ^= mask_matrix(grid.version, index)
