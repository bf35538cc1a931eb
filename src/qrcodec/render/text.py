from __future__ import annotations

from typing import Optional

import numpy as np

from qrcodec.pipeline.stages.matrix.grid import ModuleGrid

# (upper half inked, lower half inked) -> character
_DENSE1X2 = {
    (False, False): " ",
    (True, False): "▀",
    (False, True): "▄",
    (True, True): "█",
}


def default_quiet_zone(grid: ModuleGrid) -> int:
    return 2 if grid.version.micro else 4


def render_dense(grid: ModuleGrid, *, quiet_zone: Optional[int] = None, invert: bool = False) -> str:
    """
    Render two module rows per text line with half-block characters.

    invert: ink the light modules instead of the dark ones, which reads
            correctly as a symbol on a dark terminal background
    """
    qz = default_quiet_zone(grid) if quiet_zone is None else quiet_zone
    if qz < 0:
        raise ValueError("quiet_zone must be >= 0")

    ink = np.pad(np.asarray(grid.dark, dtype=bool), qz, constant_values=False)
    if invert:
        ink = ~ink
    if ink.shape[0] % 2:
        # odd height: the missing lower half takes the light module colour
        ink = np.vstack([ink, np.full((1, ink.shape[1]), invert)])

    lines = []
    for r in range(0, ink.shape[0], 2):
        lines.append("".join(_DENSE1X2[(bool(a), bool(b))] for a, b in zip(ink[r], ink[r + 1])))
    return "\n".join(lines)
