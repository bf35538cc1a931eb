from __future__ import annotations

import importlib
import pkgutil
from typing import List, Optional, Sequence

from qrcodec import tables
from qrcodec.errors import DataTooLong, MalformedSegment, UnsupportedMode
from qrcodec.types import Mode, Segment, Version
from qrcodec.utils.bitops import BitReader, BitWriter

# Mode -> module name under pipeline/stages/segments/modules
_MODE_MODULES = {
    Mode.NUMERIC: "numeric",
    Mode.ALPHANUMERIC: "alphanumeric",
    Mode.BYTE: "byte",
    Mode.KANJI: "kanji",
    Mode.ECI: "eci",
}

# Automatic selection prefers the densest mode that can carry the data.
_AUTO_ORDER = (Mode.NUMERIC, Mode.ALPHANUMERIC, Mode.BYTE)


def available_modules() -> list[str]:
    """
    Enumerate available mode modules under pipeline/stages/segments/modules.
    """
    pkg = importlib.import_module(f"{__package__}.modules")
    names = [m.name for m in pkgutil.iter_modules(pkg.__path__)]
    return sorted([n for n in names if not n.startswith("_")])


def _import_mode_module(name: str):
    if not isinstance(name, str) or not name:
        raise ValueError("mode module name must be a non-empty string")
    return importlib.import_module(f"{__package__}.modules.{name}")


def module_for(mode: Mode):
    name = _MODE_MODULES.get(mode)
    if name is None:
        raise UnsupportedMode(f"no codec for {mode.name} mode")
    mod = _import_mode_module(name)
    if not hasattr(mod, "tx") or not hasattr(mod, "rx"):
        raise AttributeError(f"mode module '{name}' missing tx/rx")
    return mod


def select_mode(data: bytes) -> Mode:
    for mode in _AUTO_ORDER:
        if module_for(mode).accepts(data):
            return mode
    return Mode.BYTE


def make_segments(
    data: bytes,
    *,
    mode: Optional[Mode] = None,
    encoding: Optional[str] = None,
) -> List[Segment]:
    """
    Build the segment list for one payload: an optional ECI header followed by
    a single data segment in the requested (or automatically selected) mode.
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("make_segments: data must be bytes-like")
    data = bytes(data)
    if mode is None:
        mode = select_mode(data)
    if mode in (Mode.ECI, Mode.TERMINATOR):
        raise UnsupportedMode(f"{mode.name} is not a data mode")

    mod = module_for(mode)
    if not mod.accepts(data):
        raise UnsupportedMode(f"data cannot be represented in {mode.name} mode")

    segments: List[Segment] = []
    eci = module_for(Mode.ECI)
    if mode is Mode.BYTE and eci.needs_eci(encoding):
        segments.append(Segment(Mode.ECI, 0, eci=eci.assignment_for(encoding)))
    segments.append(Segment(
        mode,
        mod.char_count(data),
        data,
        encoding=eci.normalize(encoding) if (mode is Mode.BYTE and encoding) else None,
    ))
    return segments


def check_modes(segments: Sequence[Segment], version: Version) -> None:
    allowed = tables.supported_modes(version)
    for seg in segments:
        if seg.mode not in allowed:
            raise UnsupportedMode(f"{seg.mode.name} mode is not available in version {version}")


def segment_bit_length(seg: Segment, version: Version) -> int:
    header = tables.mode_indicator_bits(version)
    if seg.mode is Mode.ECI:
        if version.micro:
            raise UnsupportedMode("ECI is not available in Micro QR symbols")
        return header + module_for(Mode.ECI).bit_length(seg.eci)
    cci = tables.char_count_bits(seg.mode, version)
    return header + cci + module_for(seg.mode).bit_length(seg.char_count)


def bit_length(segments: Sequence[Segment], version: Version) -> int:
    return sum(segment_bit_length(seg, version) for seg in segments)


def _write_mode(mode: Mode, version: Version, out: BitWriter) -> None:
    if version.micro:
        if mode is Mode.ECI:
            raise UnsupportedMode("ECI is not available in Micro QR symbols")
        out.write(tables.MICRO_MODE_INDICATORS[mode], tables.mode_indicator_bits(version))
    else:
        out.write(mode.value, 4)


def _read_mode(reader: BitReader, version: Version) -> Mode:
    if version.micro:
        value = reader.read(tables.mode_indicator_bits(version))
        for mode, indicator in tables.MICRO_MODE_INDICATORS.items():
            if indicator == value:
                return mode
        raise MalformedSegment(f"unknown Micro QR mode indicator {value}")
    value = reader.read(4)
    try:
        mode = Mode(value)
    except ValueError:
        raise MalformedSegment(f"unknown mode indicator {value:04b}") from None
    if mode is Mode.TERMINATOR:
        raise MalformedSegment("unexpected terminator")
    return mode


def tx(segments: Sequence[Segment], *, version: Version, out: BitWriter) -> None:
    """
    Stage TX: append every segment (mode indicator, count indicator, payload) to out.
    """
    check_modes(segments, version)
    for seg in segments:
        _write_mode(seg.mode, version, out)
        mod = module_for(seg.mode)
        if seg.mode is Mode.ECI:
            mod.tx(seg.eci, out=out)
            continue
        cci = tables.char_count_bits(seg.mode, version)
        if seg.char_count >> cci:
            raise DataTooLong(f"{seg.char_count} characters overflow the {cci}-bit count indicator")
        out.write(seg.char_count, cci)
        mod.tx(seg.data, out=out)


def rx(bits: Sequence[int], *, version: Version) -> List[Segment]:
    """
    Stage RX: split the data bit stream into segments, stopping at the terminator
    or the end of the data. Raises MalformedSegment on invalid content.
    """
    reader = BitReader(bits)
    term = tables.terminator_bits(version)
    encoding: Optional[str] = None
    segments: List[Segment] = []

    while reader.remaining > 0:
        if reader.peek(min(term, reader.remaining)) == 0:
            break
        if reader.remaining < tables.mode_indicator_bits(version):
            break
        mode = _read_mode(reader, version)
        if mode not in tables.supported_modes(version):
            raise MalformedSegment(f"{mode.name} mode is not available in version {version}")
        mod = module_for(mode)

        if mode is Mode.ECI:
            assignment = mod.rx(reader)
            encoding = mod.encoding_for(assignment)
            segments.append(Segment(Mode.ECI, 0, eci=assignment))
            continue

        count = reader.read(tables.char_count_bits(mode, version))
        if mod.bit_length(count) > reader.remaining:
            raise MalformedSegment(f"{mode.name} count {count} runs past the end of the data")
        data = mod.rx(reader, count=count)
        segments.append(Segment(mode, count, data, encoding=encoding if mode is Mode.BYTE else None))

    return segments
