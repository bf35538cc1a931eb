from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from qrcodec.errors import UncorrectableSymbol
from qrcodec.tables import BlockSpec
from qrcodec.pipeline.stages.byte_fec.modules import rs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    """
    Byte FEC stage config.

    blocks:     block structure of the symbol (see qrcodec.tables.ec_blocks)
    max_errors: per-block correction limit (None -> ec_per_block // 2, 0 -> detect only)
    """
    blocks: BlockSpec
    max_errors: Optional[int] = None


def split_data(data: bytes, *, cfg: Any) -> List[bytes]:
    """
    Cut the data codeword sequence into the per-block data runs, in symbol order.
    """
    spec = _get_blocks(cfg)
    if len(data) != spec.data_codewords:
        raise ValueError(f"expected {spec.data_codewords} data codewords, got {len(data)}")
    out: List[bytes] = []
    pos = 0
    for size in spec.data_block_sizes():
        out.append(bytes(data[pos:pos + size]))
        pos += size
    return out


def tx(data: bytes, *, cfg: Any) -> List[bytes]:
    """
    Stage TX: split data codewords into blocks and append EC codewords to each.
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("tx: data must be bytes-like")
    spec = _get_blocks(cfg)
    module_cfg = rs.Config(nsym=spec.ec_per_block)
    return [rs.tx(block, cfg=module_cfg) for block in split_data(bytes(data), cfg=cfg)]


def rx(blocks: Sequence[bytes], *, cfg: Any) -> Tuple[bytes, int]:
    """
    Stage RX: correct every block and return (data codewords, total corrected errors).
    Raises UncorrectableSymbol if any block fails.
    """
    spec = _get_blocks(cfg)
    sizes = spec.data_block_sizes()
    if len(blocks) != len(sizes):
        raise ValueError(f"expected {len(sizes)} blocks, got {len(blocks)}")

    module_cfg = rs.Config(nsym=spec.ec_per_block, max_errors=getattr(cfg, "max_errors", None))
    out = bytearray()
    corrected = 0
    for index, (block, size) in enumerate(zip(blocks, sizes)):
        if len(block) != size + spec.ec_per_block:
            raise ValueError(f"block {index}: expected {size + spec.ec_per_block} codewords, got {len(block)}")
        try:
            data, nerr = rs.rx(bytes(block), cfg=module_cfg)
        except UncorrectableSymbol as e:
            raise UncorrectableSymbol(f"block {index}: {e}") from e
        if nerr:
            logger.debug("corrected %d codeword errors in block %d", nerr, index)
        out += data
        corrected += nerr
    return bytes(out), corrected


def _get_blocks(cfg: Any) -> BlockSpec:
    spec = getattr(cfg, "blocks", None)
    if spec is None:
        raise AttributeError("cfg missing required attribute: blocks")
    if not isinstance(spec, BlockSpec):
        raise TypeError("cfg.blocks must be BlockSpec")
    return spec
