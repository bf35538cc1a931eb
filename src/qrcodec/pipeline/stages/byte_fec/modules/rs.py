from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, List, Optional, Tuple

from qrcodec.errors import UncorrectableSymbol
from qrcodec.gf256 import GF256, GaloisField

# Systematic Reed-Solomon over GF(256) as used by QR symbols:
# generator roots alpha^0 .. alpha^(nsym-1) (first consecutive root 0).


def _build_generator_poly(nsym: int, gf: GaloisField) -> Tuple[int, ...]:
    g = [1]
    for i in range(nsym):
        g = gf.poly_mul(g, [1, gf.pow(2, i)])
    return tuple(g)


@lru_cache(maxsize=None)
def _cached_generator_poly(nsym: int) -> Tuple[int, ...]:
    return _build_generator_poly(nsym, GF256)


def _rs_generator_poly(nsym: int, gf: GaloisField = GF256) -> Tuple[int, ...]:
    # cached per nsym for the shared field only
    if gf is GF256:
        return _cached_generator_poly(nsym)
    return _build_generator_poly(nsym, gf)


def rs_encode(msg: bytes, *, nsym: int, gf: GaloisField = GF256) -> bytes:
    """
    Return the nsym EC codewords for msg (remainder of msg * x^nsym by the generator).
    """
    if nsym <= 0:
        raise ValueError("nsym must be > 0")
    if len(msg) + nsym > 255:
        raise ValueError("len(msg) + nsym must be <= 255")

    gen = _rs_generator_poly(nsym, gf)
    res = list(msg) + [0] * nsym

    for i in range(len(msg)):
        coef = res[i]
        if coef != 0:
            for j in range(1, len(gen)):
                res[i + j] ^= gf.mul(gen[j], coef)

    return bytes(res[-nsym:])


def _syndromes(cw: List[int], nsym: int, gf: GaloisField) -> List[int]:
    return [gf.poly_eval(cw, gf.exp[i]) for i in range(nsym)]


def _berlekamp_massey(synd: List[int], gf: GaloisField) -> Tuple[List[int], int]:
    # Ascending error locator Lambda(x) with Lambda(0) = 1, and its register length L.
    lam: List[int] = [1]
    B: List[int] = [1]
    L = 0
    m = 1
    b = 1

    for r in range(len(synd)):
        d = synd[r]
        for i in range(1, min(L, len(lam) - 1) + 1):
            d ^= gf.mul(lam[i], synd[r - i])

        if d == 0:
            m += 1
            continue

        T = lam[:]
        coef = gf.div(d, b)
        xmb = ([0] * m) + B
        size = max(len(lam), len(xmb))
        lam = [
            (lam[k] if k < len(lam) else 0) ^ (gf.mul(coef, xmb[k]) if k < len(xmb) else 0)
            for k in range(size)
        ]

        if 2 * L <= r:
            L = r + 1 - L
            B = T
            b = d
            m = 1
        else:
            m += 1

    while len(lam) > 1 and lam[-1] == 0:
        lam.pop()
    return lam, L


def rs_decode(
    codeword: bytes,
    *,
    nsym: int,
    max_errors: Optional[int] = None,
    gf: GaloisField = GF256,
) -> Tuple[bytes, int]:
    """
    Correct codeword in place of up to max_errors symbol errors.

    Returns (data codewords, number of corrected errors).
    Raises UncorrectableSymbol when the errors exceed what can be corrected,
    including any error at all when max_errors is 0 (detection only).
    """
    if nsym <= 0:
        raise ValueError("nsym must be > 0")
    if len(codeword) > 255:
        raise ValueError("codeword length must be <= 255")
    if len(codeword) <= nsym:
        raise ValueError("codeword too short for nsym")
    if max_errors is None:
        max_errors = nsym // 2
    if not (0 <= max_errors <= nsym // 2):
        raise ValueError("max_errors must be in [0, nsym//2]")

    cw = list(codeword)
    n = len(cw)

    synd = _syndromes(cw, nsym, gf)
    if not any(synd):
        return bytes(cw[:-nsym]), 0

    if max_errors == 0:
        raise UncorrectableSymbol("errors detected in a detection-only block")

    lam, L = _berlekamp_massey(synd, gf)
    nerr = len(lam) - 1
    if nerr == 0 or nerr != L or nerr > max_errors:
        raise UncorrectableSymbol(f"uncorrectable RS block ({L} errors, limit {max_errors})")

    # Chien search: Lambda(X^-1) == 0 for every error locator X = alpha^j,
    # where j counts positions from the end of the codeword.
    err_exp: List[int] = []
    for i in range(255):
        if gf.poly_eval_asc(lam, gf.exp[i]) == 0:
            j = (255 - i) % 255
            if j >= n:
                raise UncorrectableSymbol("error located outside the codeword")
            err_exp.append(j)

    if len(err_exp) != nerr:
        raise UncorrectableSymbol("could not locate all errors")

    # Forney: e = X * Omega(X^-1) / Lambda'(X^-1), Omega = S * Lambda mod x^nsym
    omega = [0] * nsym
    for i, s in enumerate(synd):
        if s == 0:
            continue
        for k, c in enumerate(lam):
            if i + k < nsym:
                omega[i + k] ^= gf.mul(s, c)
    lam_deriv = [lam[k] if k % 2 == 1 else 0 for k in range(1, len(lam))]

    for j in err_exp:
        x = gf.exp[j]
        x_inv = gf.exp[(255 - j) % 255]
        den = gf.poly_eval_asc(lam_deriv, x_inv)
        if den == 0:
            raise UncorrectableSymbol("singular error evaluator")
        mag = gf.mul(x, gf.div(gf.poly_eval_asc(omega, x_inv), den))
        cw[n - 1 - j] ^= mag

    if any(_syndromes(cw, nsym, gf)):
        raise UncorrectableSymbol("uncorrectable RS block")

    return bytes(cw[:-nsym]), nerr


# ---- Normalized module surface ----

@dataclass(frozen=True)
class Config:
    """
    One RS(n, n-nsym) block.

    nsym:       EC codewords in the block
    max_errors: correction limit (None -> nsym//2, 0 -> detection only)
    """
    nsym: int = 10
    max_errors: Optional[int] = None


def tx(data: bytes, *, cfg: Any) -> bytes:
    """
    Encode one block: data followed by its EC codewords.
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("tx: data must be bytes-like")
    nsym = _get_nsym(cfg)
    return bytes(data) + rs_encode(bytes(data), nsym=nsym)


def rx(data: bytes, *, cfg: Any) -> Tuple[bytes, int]:
    """
    Decode one block and return (corrected data codewords, corrected errors).
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("rx: data must be bytes-like")
    nsym = _get_nsym(cfg)
    return rs_decode(bytes(data), nsym=nsym, max_errors=getattr(cfg, "max_errors", None))


def _get_nsym(cfg: Any) -> int:
    nsym = getattr(cfg, "nsym", None)
    if nsym is None:
        raise AttributeError("cfg missing required int attribute: nsym")
    if not isinstance(nsym, int):
        raise TypeError("cfg.nsym must be int")
    if not (0 < nsym < 255):
        raise ValueError("cfg.nsym must be in [1,254]")
    return nsym
