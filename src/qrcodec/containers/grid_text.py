from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np

from qrcodec.pipeline.stages.matrix.grid import ModuleGrid

PathLike = Union[str, Path]

DARK_CHARS = frozenset("1#X█")
LIGHT_CHARS = frozenset("0._")


def parse_grid_text(text: str) -> np.ndarray:
    """
    Parse one text row per module row: 1 # X or a full block for dark,
    0 . _ for light. Blank lines are skipped.
    """
    rows = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        row = []
        for ch in line:
            if ch in DARK_CHARS:
                row.append(True)
            elif ch in LIGHT_CHARS:
                row.append(False)
            else:
                raise ValueError(f"line {lineno}: unexpected module character {ch!r}")
        rows.append(row)
    if not rows:
        raise ValueError("grid text contains no modules")
    if any(len(r) != len(rows[0]) for r in rows):
        raise ValueError("grid rows differ in length")
    return np.array(rows, dtype=bool)


def parse_pgm(text: str) -> np.ndarray:
    """
    Parse a plain (P2) PGM with one pixel per module; pixels darker than
    half of maxval are dark modules.
    """
    tokens = []
    for line in text.splitlines():
        line = line.split("#", 1)[0]
        tokens.extend(line.split())
    if not tokens or tokens[0] != "P2":
        raise ValueError("invalid pgm: expected P2 header")
    try:
        w, h, maxval = (int(t) for t in tokens[1:4])
        values = [int(t) for t in tokens[4:]]
    except ValueError:
        raise ValueError("invalid pgm: non-integer token") from None
    if len(values) != w * h:
        raise ValueError(f"invalid pgm: expected {w * h} pixels, got {len(values)}")
    pixels = np.array(values, dtype=np.int64).reshape(h, w)
    return pixels * 2 < maxval


def trim_quiet_zone(modules: np.ndarray) -> np.ndarray:
    """Crop to the bounding box of the dark modules (finders and timing touch every edge)."""
    m = np.asarray(modules, dtype=bool)
    rows = np.flatnonzero(m.any(axis=1))
    cols = np.flatnonzero(m.any(axis=0))
    if rows.size == 0:
        raise ValueError("grid contains no dark modules")
    return m[rows[0]:rows[-1] + 1, cols[0]:cols[-1] + 1]


def read_grid(path: PathLike) -> np.ndarray:
    """
    Read a module grid file (PGM P2 or text grid) and strip any quiet zone.
    """
    text = Path(path).read_text(encoding="utf-8")
    if text.lstrip().startswith("P2"):
        modules = parse_pgm(text)
    else:
        modules = parse_grid_text(text)
    return trim_quiet_zone(modules)


def format_grid_text(grid: ModuleGrid, *, quiet_zone: int = 0, dark: str = "#", light: str = ".") -> str:
    m = np.pad(np.asarray(grid.dark, dtype=bool), quiet_zone, constant_values=False)
    return "\n".join("".join(dark if v else light for v in row) for row in m)


def format_pgm(grid: ModuleGrid, *, quiet_zone: int = 0) -> str:
    m = np.pad(np.asarray(grid.dark, dtype=bool), quiet_zone, constant_values=False)
    h, w = m.shape
    lines = ["P2", f"{w} {h}", "255"]
    lines += [" ".join("0" if v else "255" for v in row) for row in m]
    return "\n".join(lines) + "\n"
