from __future__ import annotations

import argparse
import codecs
import logging
import sys
from typing import Optional, Sequence

from qrcodec.errors import QRCodecError
from qrcodec.types import EcLevel
from qrcodec.containers.grid_text import format_grid_text, read_grid
from qrcodec.pipeline.config import DecodeConfig, EncodeConfig
from qrcodec.pipeline.pipeline import decode_symbol, encode_symbol
from qrcodec.render.text import render_dense

logger = logging.getLogger(__name__)


class CliError(Exception):
    exit_code = 1


class UsageError(CliError):
    exit_code = 1


class InputError(CliError):
    exit_code = 2


class SymbolError(CliError):
    exit_code = 3


def _check_encoding(label: str) -> str:
    try:
        return codecs.lookup(label).name
    except LookupError:
        raise UsageError(f"unsupported encoding: {label}") from None


def cmd_encode(args: argparse.Namespace) -> None:
    if args.micro and args.version is None:
        raise UsageError("--micro requires --version")
    limit = 4 if args.micro else 40
    if args.version is not None and not (1 <= args.version <= limit):
        raise UsageError(f"unsupported version: {args.version}")
    try:
        level = EcLevel.coerce(args.level)
    except ValueError:
        raise UsageError(f"illegal level: {args.level}") from None
    encoding = _check_encoding(args.encoding) if args.encoding else None

    cfg = EncodeConfig(level=level, version=args.version, micro=args.micro, encoding=encoding)
    try:
        symbol = encode_symbol(args.data, cfg=cfg)
    except QRCodecError as e:
        raise SymbolError(str(e)) from e
    logger.info("encoded version %s-%s with mask %d", symbol.version, symbol.level.value, symbol.mask)

    if args.grid:
        print(format_grid_text(symbol.grid))
    else:
        print(render_dense(symbol.grid, invert=True))


def cmd_decode(args: argparse.Namespace) -> None:
    encoding = _check_encoding(args.encoding) if args.encoding else None
    try:
        modules = read_grid(args.path)
    except (OSError, ValueError) as e:
        raise InputError(str(e)) from e
    try:
        symbol = decode_symbol(modules, cfg=DecodeConfig(encoding=encoding))
    except QRCodecError as e:
        raise SymbolError(str(e)) from e

    try:
        content = symbol.text()
    except (UnicodeDecodeError, LookupError):
        print("warning: failed to decode content", file=sys.stderr)
        content = symbol.text(errors="replace")

    print(f"# Version: {symbol.version}")
    print(f"# ECC Level: {symbol.level.value}")
    print(f"# Mask: {symbol.mask}")
    print(content)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="qrcodec", description="Encode and decode QR Code and Micro QR symbols")
    p.add_argument("--verbose", action="store_true", help="log pipeline decisions")
    sub = p.add_subparsers(dest="command", required=True)

    d = sub.add_parser("decode", help="decode a symbol from a module grid file")
    d.add_argument("-e", "--encoding", default=None,
                   help="character encoding of the content (default: ECI declaration, else UTF-8)")
    d.add_argument("path", help="text grid or PGM (P2) file, one sample per module")
    d.set_defaults(func=cmd_decode)

    e = sub.add_parser("encode", help="encode a string into a symbol")
    e.add_argument("-m", "--micro", action="store_true", help="generate Micro QR Code (requires --version)")
    e.add_argument("-v", "--version", type=int, default=None,
                   help="symbol version (1 to 40 for normal, 1 to 4 for micro)")
    e.add_argument("-l", "--level", default="L", help="error correction level (L/M/Q/H)")
    e.add_argument("-e", "--encoding", default=None, help="character encoding (adds an ECI header)")
    e.add_argument("-g", "--grid", action="store_true", help="print a plain module grid instead of half blocks")
    e.add_argument("data", help="data to be encoded")
    e.set_defaults(func=cmd_encode)
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        args.func(args)
    except CliError as e:
        print(f"error: {e}", file=sys.stderr)
        return e.exit_code
    return 0


if __name__ == "__main__":
    sys.exit(main())
