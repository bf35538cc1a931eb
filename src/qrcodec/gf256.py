from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from qrcodec.errors import DivisionByZero

# GF(256) with primitive polynomial 0x11D (x^8 + x^4 + x^3 + x^2 + 1), generator alpha = 2
PRIMITIVE_POLY = 0x11D


@dataclass(frozen=True)
class GaloisField:
    """
    Immutable GF(256) arithmetic tables.

    exp: alpha^i for i in [0, 510] (doubled so log sums need no reduction)
    log: discrete log of every nonzero element; log[0] is unused
    """
    prim: int
    exp: Tuple[int, ...]
    log: Tuple[int, ...]

    @classmethod
    def build(cls, prim: int = PRIMITIVE_POLY) -> "GaloisField":
        exp = [0] * 512
        log = [0] * 256
        x = 1
        for i in range(255):
            exp[i] = x
            log[x] = i
            x <<= 1
            if x & 0x100:
                x ^= prim
        for i in range(255, 512):
            exp[i] = exp[i - 255]
        return cls(prim=prim, exp=tuple(exp), log=tuple(log))

    def mul(self, a: int, b: int) -> int:
        if a == 0 or b == 0:
            return 0
        return self.exp[self.log[a] + self.log[b]]

    def div(self, a: int, b: int) -> int:
        if b == 0:
            raise DivisionByZero("GF division by zero")
        if a == 0:
            return 0
        return self.exp[(self.log[a] - self.log[b]) % 255]

    def pow(self, a: int, p: int) -> int:
        if p == 0:
            return 1
        if a == 0:
            return 0
        return self.exp[(self.log[a] * p) % 255]

    def inverse(self, a: int) -> int:
        if a == 0:
            raise DivisionByZero("GF inverse of zero")
        return self.exp[255 - self.log[a]]

    # ---- polynomials, highest degree first ----

    def poly_mul(self, p: Sequence[int], q: Sequence[int]) -> List[int]:
        r = [0] * (len(p) + len(q) - 1)
        for i, a in enumerate(p):
            if a == 0:
                continue
            for j, b in enumerate(q):
                if b == 0:
                    continue
                r[i + j] ^= self.mul(a, b)
        return r

    def poly_eval(self, poly: Sequence[int], x: int) -> int:
        y = 0
        for c in poly:
            y = self.mul(y, x) ^ c
        return y

    # ---- polynomials, lowest degree first ----

    def poly_eval_asc(self, poly: Sequence[int], x: int) -> int:
        y = 0
        for c in reversed(poly):
            y = self.mul(y, x) ^ c
        return y


GF256 = GaloisField.build()
