from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import numpy as np

from qrcodec.errors import InvalidDimension
from qrcodec.types import Version


class Role(IntEnum):
    """What a module is reserved for; colour lives in ModuleGrid.dark."""
    DATA = 0
    FUNCTION = 1
    FORMAT = 2
    VERSION = 3


@dataclass(eq=False)
class ModuleGrid:
    """
    Square module matrix of one symbol.

    dark: bool array (width x width), True for dark modules
    role: uint8 array of Role values, same shape
    """
    version: Version
    dark: np.ndarray
    role: np.ndarray

    @classmethod
    def blank(cls, version: Version) -> "ModuleGrid":
        w = version.width
        return cls(
            version=version,
            dark=np.zeros((w, w), dtype=bool),
            role=np.full((w, w), Role.DATA, dtype=np.uint8),
        )

    @classmethod
    def from_modules(cls, modules) -> "ModuleGrid":
        """
        Wrap any square 2-D array-like of truthy (dark) / falsy (light) values.
        Roles are rebuilt from the function pattern layout of the implied version.
        """
        from qrcodec.pipeline.stages.matrix.patterns import function_layout

        dark = np.asarray(modules).astype(bool)
        if dark.ndim != 2 or dark.shape[0] != dark.shape[1]:
            raise InvalidDimension(f"module grid must be square, got shape {dark.shape}")
        version = Version.from_width(int(dark.shape[0]))
        layout = function_layout(version)
        return cls(version=version, dark=dark.copy(), role=layout.role.copy())

    @property
    def width(self) -> int:
        return int(self.dark.shape[0])

    def copy(self) -> "ModuleGrid":
        return ModuleGrid(version=self.version, dark=self.dark.copy(), role=self.role.copy())

    def is_function(self) -> np.ndarray:
        return self.role != Role.DATA

    def to_rows(self) -> list[list[bool]]:
        return self.dark.tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModuleGrid):
            return NotImplemented
        return self.version == other.version and np.array_equal(self.dark, other.dark)

    __hash__ = None
