from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from qrcodec.types import EcLevel, Mode


@dataclass(frozen=True)
class EncodeConfig:
    """
    Encoder configuration.

    level:    error correction level (EcLevel or "L"/"M"/"Q"/"H")
    version:  fixed version number, or None to pick the smallest that fits
    micro:    produce a Micro QR symbol (version then means M1..M4)
    mode:     force a data mode, or None for automatic selection
              (numeric, then alphanumeric, then byte)
    encoding: character encoding for str payloads; byte payloads with an
              encoding other than ISO-8859-1 get an ECI header
    mask:     fixed mask index, or None for automatic selection
    """
    level: Union[EcLevel, str] = EcLevel.L
    version: Optional[int] = None
    micro: bool = False
    mode: Optional[Mode] = None
    encoding: Optional[str] = None
    mask: Optional[int] = None


@dataclass(frozen=True)
class DecodeConfig:
    """
    Decoder configuration.

    encoding: text encoding override for DecodedSymbol.text(); when None the
              ECI-declared encoding is used, falling back to UTF-8
    """
    encoding: Optional[str] = None
