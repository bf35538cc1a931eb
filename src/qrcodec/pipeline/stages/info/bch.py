from __future__ import annotations

from typing import Dict, Mapping, Tuple, TypeVar

from qrcodec.tables import FORMAT_GENERATOR, FORMAT_MASK, MICRO_FORMAT_MASK, VERSION_GENERATOR

T = TypeVar("T")


def bch_encode(data: int, *, generator: int) -> int:
    """Systematic BCH codeword: data followed by the remainder of data * x^deg(g) mod g."""
    deg = generator.bit_length() - 1
    rem = data << deg
    while rem.bit_length() > deg:
        rem ^= generator << (rem.bit_length() - 1 - deg)
    return (data << deg) | rem


def hamming_distance(a: int, b: int) -> int:
    return bin(a ^ b).count("1")


def nearest(word: int, codebook: Mapping[int, T]) -> Tuple[T, int]:
    """
    Return (value, distance) of the codeword closest to word.
    Ties resolve to the first entry of codebook.
    """
    best = None
    best_dist = None
    for code, value in codebook.items():
        dist = hamming_distance(word, code)
        if best_dist is None or dist < best_dist:
            best, best_dist = value, dist
    return best, best_dist


# 5-bit format data -> masked 15-bit format word
FORMAT_CODES: Tuple[int, ...] = tuple(
    bch_encode(d, generator=FORMAT_GENERATOR) ^ FORMAT_MASK for d in range(32)
)
MICRO_FORMAT_CODES: Tuple[int, ...] = tuple(
    bch_encode(d, generator=FORMAT_GENERATOR) ^ MICRO_FORMAT_MASK for d in range(32)
)
# version number -> 18-bit version word (versions 7..40 only)
VERSION_CODES: Dict[int, int] = {
    v: bch_encode(v, generator=VERSION_GENERATOR) for v in range(7, 41)
}

_FORMAT_LOOKUP = {code: d for d, code in enumerate(FORMAT_CODES)}
_MICRO_FORMAT_LOOKUP = {code: d for d, code in enumerate(MICRO_FORMAT_CODES)}
_VERSION_LOOKUP = {code: v for v, code in VERSION_CODES.items()}

FORMAT_CORRECTION_RADIUS = 3
VERSION_CORRECTION_RADIUS = 3


def format_word(data: int, *, micro: bool = False) -> int:
    if not (0 <= data < 32):
        raise ValueError(f"format data must be 5 bits, got {data}")
    return (MICRO_FORMAT_CODES if micro else FORMAT_CODES)[data]


def decode_format_word(word: int, *, micro: bool = False) -> Tuple[int, int]:
    """Return (5-bit format data, Hamming distance) of the closest valid format word."""
    return nearest(word, _MICRO_FORMAT_LOOKUP if micro else _FORMAT_LOOKUP)


def version_word(version: int) -> int:
    if version not in VERSION_CODES:
        raise ValueError(f"version information exists only for versions 7..40, got {version}")
    return VERSION_CODES[version]


def decode_version_word(word: int) -> Tuple[int, int]:
    """Return (version, Hamming distance) of the closest valid version word."""
    return nearest(word, _VERSION_LOOKUP)
