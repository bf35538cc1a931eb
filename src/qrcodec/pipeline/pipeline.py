from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import cycle
from typing import Any, List, Optional, Sequence, Tuple, Union

from qrcodec import tables
from qrcodec.errors import (
    DataTooLong,
    UnsupportedEncoding,
    UnsupportedLevelForVersion,
    UnsupportedMode,
)
from qrcodec.types import EcLevel, Mode, Segment, Version
from qrcodec.utils.bitops import BitWriter, bits_to_bytes, bytes_to_bits
from qrcodec.pipeline.config import DecodeConfig, EncodeConfig

from qrcodec.pipeline.stages.segments import stage as segments_stage
from qrcodec.pipeline.stages.byte_fec import stage as byte_fec_stage
from qrcodec.pipeline.stages.interleave import stage as interleave_stage
from qrcodec.pipeline.stages.info import stage as info_stage
from qrcodec.pipeline.stages.matrix.grid import ModuleGrid
from qrcodec.pipeline.stages.matrix.patterns import function_grid
from qrcodec.pipeline.stages.matrix.placement import place_bits, read_bits
from qrcodec.pipeline.stages.mask.patterns import apply_mask, mask_count, mask_matrix
from qrcodec.pipeline.stages.mask.penalty import micro_score, penalty_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncodedSymbol:
    grid: ModuleGrid
    version: Version
    level: EcLevel
    mask: int
    segments: Tuple[Segment, ...]


@dataclass(frozen=True)
class DecodedSymbol:
    """
    Everything recovered from one symbol.

    data:             concatenated segment payloads (raw bytes)
    encoding:         ECI-declared (or configured) text encoding, if any
    corrected_errors: codewords repaired by Reed-Solomon across all blocks
    """
    version: Version
    level: EcLevel
    mask: int
    data: bytes
    segments: Tuple[Segment, ...]
    encoding: Optional[str]
    corrected_errors: int

    def text(self, encoding: Optional[str] = None, errors: str = "strict") -> str:
        return self.data.decode(encoding or self.encoding or "utf-8", errors=errors)


# ---- cfg validation ----

def _get_level(cfg: Any) -> EcLevel:
    level = getattr(cfg, "level", None)
    if level is None:
        raise AttributeError("cfg missing required attribute: level")
    return EcLevel.coerce(level)


def _get_version(cfg: Any) -> Optional[Version]:
    number = getattr(cfg, "version", None)
    if number is None:
        return None
    if not isinstance(number, int) or isinstance(number, bool):
        raise TypeError("cfg.version must be int or None")
    return Version(number, micro=bool(getattr(cfg, "micro", False)))


def _get_mode(cfg: Any) -> Optional[Mode]:
    mode = getattr(cfg, "mode", None)
    if mode is not None and not isinstance(mode, Mode):
        raise TypeError("cfg.mode must be Mode or None")
    return mode


def _get_mask(cfg: Any, version: Version) -> Optional[int]:
    mask = getattr(cfg, "mask", None)
    if mask is None:
        return None
    if not isinstance(mask, int) or isinstance(mask, bool):
        raise TypeError("cfg.mask must be int or None")
    if not (0 <= mask < mask_count(version)):
        raise ValueError(f"cfg.mask must be in [0,{mask_count(version) - 1}] for version {version}")
    return mask


def _payload(data: Union[str, bytes], cfg: Any) -> bytes:
    encoding = getattr(cfg, "encoding", None)
    if isinstance(data, str):
        if encoding is None:
            encoding = "shift_jis" if _get_mode(cfg) is Mode.KANJI else "utf-8"
        try:
            return data.encode(encoding)
        except UnicodeEncodeError as e:
            raise UnsupportedEncoding(f"text cannot be encoded as {encoding}") from e
        except LookupError:
            raise UnsupportedEncoding(f"unknown encoding: {encoding}") from None
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    raise TypeError("data must be str or bytes-like")


# ---- Encode ----

def _counts_fit(segments: Sequence[Segment], version: Version) -> bool:
    for seg in segments:
        if seg.mode is not Mode.ECI and seg.char_count >> tables.char_count_bits(seg.mode, version):
            return False
    return True


def select_version(
    segments: Sequence[Segment],
    level: EcLevel,
    *,
    version: Optional[Version] = None,
    micro: bool = False,
) -> Version:
    """
    Return version if given and large enough, else the smallest version of
    the requested family that carries segments at level.
    """
    if version is not None:
        candidates = [version]
    else:
        candidates = [Version(n, micro=micro) for n in range(1, 5 if micro else 41)]

    candidates = [v for v in candidates if level in tables.supported_levels(v)]
    if not candidates:
        target = version if version is not None else ("Micro QR" if micro else "QR")
        raise UnsupportedLevelForVersion(f"level {level.value} is not available in {target}")

    usable: List[Version] = []
    mode_error: Optional[UnsupportedMode] = None
    for v in candidates:
        try:
            segments_stage.check_modes(segments, v)
        except UnsupportedMode as e:
            mode_error = e
            continue
        usable.append(v)
    if not usable:
        raise mode_error

    needed = 0
    for v in usable:
        needed = segments_stage.bit_length(segments, v)
        if needed <= tables.data_bit_capacity(v, level) and _counts_fit(segments, v):
            return v
    raise DataTooLong(
        f"data needs {needed} bits, more than version {usable[-1]}-{level.value} holds "
        f"({tables.data_bit_capacity(usable[-1], level)} bits)"
    )


def data_codewords(segments: Sequence[Segment], version: Version, level: EcLevel) -> bytes:
    """
    Segment bits, terminator, zero fill and pad codewords for the symbol's data capacity.
    M1 and M3 symbols end on a 4-bit codeword, returned in the high nibble of the last byte.
    """
    capacity = tables.data_bit_capacity(version, level)
    out = BitWriter()
    segments_stage.tx(segments, version=version, out=out)
    if len(out) > capacity:
        raise DataTooLong(f"data needs {len(out)} bits, version {version}-{level.value} holds {capacity}")

    out.write(0, min(tables.terminator_bits(version), capacity - len(out)))
    if len(out) % 8:
        out.write(0, min(8 - len(out) % 8, capacity - len(out)))
    pads = cycle(tables.PAD_CODEWORDS)
    while capacity - len(out) >= 8:
        out.write(next(pads), 8)
    out.write(0, capacity - len(out))

    if tables.has_half_codeword(version):
        out.write(0, 4)
    return out.to_bytes()


def _codeword_bits(stream: bytes, version: Version, level: EcLevel) -> List[int]:
    bits = bytes_to_bits(stream)
    if tables.has_half_codeword(version):
        capacity = tables.data_bit_capacity(version, level)
        del bits[capacity:capacity + 4]
    return bits + [0] * tables.remainder_bits(version)


def _select_mask(base: ModuleGrid, level: EcLevel, fixed: Optional[int]) -> Tuple[ModuleGrid, int]:
    version = base.version
    candidates = [fixed] if fixed is not None else list(range(mask_count(version)))
    best_grid, best_mask, best_score = None, None, None
    for mask in candidates:
        grid = base.copy()
        apply_mask(grid, mask)
        info_stage.write_format(grid, level, mask)
        if fixed is not None:
            return grid, mask
        if version.micro:
            score = micro_score(grid.dark)
            better = best_score is None or score > best_score
        else:
            score = penalty_score(grid.dark)
            better = best_score is None or score < best_score
        logger.debug("mask %d scores %d", mask, score)
        if better:
            best_grid, best_mask, best_score = grid, mask, score
    return best_grid, best_mask


def encode_symbol(data: Union[str, bytes], *, cfg: Optional[EncodeConfig] = None) -> EncodedSymbol:
    """
    Encode data into a complete symbol, returning the grid and the chosen parameters.
    """
    cfg = cfg if cfg is not None else EncodeConfig()
    level = _get_level(cfg)
    mode = _get_mode(cfg)
    payload = _payload(data, cfg)
    encoding = getattr(cfg, "encoding", None)

    segments = segments_stage.make_segments(payload, mode=mode, encoding=encoding)
    version = select_version(
        segments, level, version=_get_version(cfg), micro=bool(getattr(cfg, "micro", False))
    )
    mask = _get_mask(cfg, version)
    logger.debug("encoding %d bytes as version %s-%s", len(payload), version, level.value)

    spec = tables.ec_blocks(version, level)
    codewords = data_codewords(segments, version, level)
    blocks = byte_fec_stage.tx(codewords, cfg=byte_fec_stage.Config(blocks=spec))
    stream = interleave_stage.tx(blocks, cfg=interleave_stage.Config(blocks=spec))

    base = function_grid(version)
    place_bits(base, _codeword_bits(stream, version, level))
    info_stage.write_version(base)
    grid, mask = _select_mask(base, level, mask)
    logger.debug("selected mask %d", mask)

    return EncodedSymbol(grid=grid, version=version, level=level, mask=mask, segments=tuple(segments))


def encode(
    data: Union[str, bytes],
    *,
    level: Union[EcLevel, str] = EcLevel.L,
    version: Optional[int] = None,
    micro: bool = False,
    mode: Optional[Mode] = None,
    encoding: Optional[str] = None,
    mask: Optional[int] = None,
) -> ModuleGrid:
    cfg = EncodeConfig(level=level, version=version, micro=micro, mode=mode, encoding=encoding, mask=mask)
    return encode_symbol(data, cfg=cfg).grid


# ---- Decode ----

def _get_encoding(cfg: Any) -> Optional[str]:
    encoding = getattr(cfg, "encoding", None)
    if encoding is None:
        return None
    if not isinstance(encoding, str):
        raise TypeError("cfg.encoding must be str or None")
    return segments_stage.module_for(Mode.ECI).normalize(encoding)


def _as_grid(grid: Any) -> ModuleGrid:
    if isinstance(grid, ModuleGrid):
        # roles of the caller's grid are not trusted
        return ModuleGrid.from_modules(grid.dark)
    return ModuleGrid.from_modules(grid)


def decode_symbol(grid: Any, *, cfg: Optional[DecodeConfig] = None) -> DecodedSymbol:
    """
    Decode a module grid (ModuleGrid or square 2-D array-like, dark = truthy).
    """
    cfg = cfg if cfg is not None else DecodeConfig()
    encoding = _get_encoding(cfg)
    grid = _as_grid(grid)
    version = grid.version
    dark = grid.dark

    fmt = info_stage.read_format(dark, version)
    info_stage.read_version(dark, version)
    level = fmt.level

    bits = read_bits(dark ^ mask_matrix(version, fmt.mask), version)
    capacity = tables.data_bit_capacity(version, level)
    if tables.has_half_codeword(version):
        bits = bits[:capacity] + [0] * 4 + bits[capacity:]
    spec = tables.ec_blocks(version, level)
    stream = bits_to_bytes(bits[:spec.total_codewords * 8])

    blocks = interleave_stage.rx(stream, cfg=interleave_stage.Config(blocks=spec))
    data, corrected = byte_fec_stage.rx(
        blocks,
        cfg=byte_fec_stage.Config(blocks=spec, max_errors=tables.max_correctable(version, level)),
    )

    segments = segments_stage.rx(bytes_to_bits(data)[:capacity], version=version)
    payload = b"".join(seg.data for seg in segments)
    eci_encoding = None
    for seg in segments:
        if seg.mode is Mode.ECI:
            eci_encoding = segments_stage.module_for(Mode.ECI).encoding_for(seg.eci)
    logger.debug(
        "decoded version %s-%s mask %d: %d segments, %d corrected codewords",
        version, level.value, fmt.mask, len(segments), corrected,
    )

    return DecodedSymbol(
        version=version,
        level=level,
        mask=fmt.mask,
        data=payload,
        segments=tuple(segments),
        encoding=encoding or eci_encoding,
        corrected_errors=corrected,
    )


def decode(grid: Any, *, encoding: Optional[str] = None) -> bytes:
    """
    Decode a module grid to its raw payload bytes.

    encoding: text encoding override, checked here and applied by callers
              that render the bytes (see DecodedSymbol.text)
    """
    return decode_symbol(grid, cfg=DecodeConfig(encoding=encoding)).data
