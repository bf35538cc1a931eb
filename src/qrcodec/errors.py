from __future__ import annotations


class QRCodecError(ValueError):
    """
    Base class for every failure raised by the encoder and decoder.

    Subclasses ValueError so callers that only know "bad input" keep working.
    """


class DataTooLong(QRCodecError):
    """Payload does not fit in any permitted version at the requested level."""


class InvalidVersion(QRCodecError):
    """Requested version outside 1..40 (or M1..M4)."""


class UnsupportedLevelForVersion(QRCodecError):
    """Error-correction level not offered by the (Micro) version."""


class UnsupportedMode(QRCodecError):
    """Data mode (or ECI) not representable in the selected symbol."""


class UnsupportedEncoding(QRCodecError):
    """Character encoding has no ECI assignment number."""


class InvalidDimension(QRCodecError):
    """Grid side length does not correspond to any version."""


class FormatInfoUnreadable(QRCodecError):
    """No format information copy lies within correction distance."""


class VersionMismatch(QRCodecError):
    """Version information is unreadable or disagrees with the grid dimension."""


class UncorrectableSymbol(QRCodecError):
    """At least one Reed-Solomon block could not be corrected."""


class MalformedSegment(QRCodecError):
    """The corrected data bit stream is not a valid sequence of segments."""


class DivisionByZero(ZeroDivisionError):
    """Division or inversion by zero in GF(256)."""
