from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Sequence

from qrcodec.tables import BlockSpec


@dataclass(frozen=True)
class Config:
    """
    Codeword interleaver.

    blocks: block structure of the symbol

    Behavior:
    - tx takes the i-th data codeword of every block in turn (shorter blocks
      drop out once exhausted), then the i-th EC codeword of every block
    - rx inverts this, returning each block as data followed by EC codewords
    """
    blocks: BlockSpec


def tx(blocks: Sequence[bytes], *, cfg: Any) -> bytes:
    spec = _get_blocks(cfg)
    sizes = spec.data_block_sizes()
    ec = spec.ec_per_block
    if len(blocks) != len(sizes):
        raise ValueError(f"tx: expected {len(sizes)} blocks, got {len(blocks)}")
    for block, size in zip(blocks, sizes):
        if len(block) != size + ec:
            raise ValueError(f"tx: block length {len(block)} does not match {size}+{ec}")

    out = bytearray()
    for i in range(max(sizes)):
        for block, size in zip(blocks, sizes):
            if i < size:
                out.append(block[i])
    for i in range(ec):
        for block, size in zip(blocks, sizes):
            out.append(block[size + i])
    return bytes(out)


def rx(data: bytes, *, cfg: Any) -> List[bytes]:
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("rx: data must be bytes-like")
    spec = _get_blocks(cfg)
    sizes = spec.data_block_sizes()
    ec = spec.ec_per_block
    if len(data) != spec.total_codewords:
        raise ValueError(f"rx: expected {spec.total_codewords} codewords, got {len(data)}")

    blocks = [bytearray() for _ in sizes]
    k = 0
    for i in range(max(sizes)):
        for block, size in zip(blocks, sizes):
            if i < size:
                block.append(data[k])
                k += 1
    for _ in range(ec):
        for block in blocks:
            block.append(data[k])
            k += 1
    return [bytes(b) for b in blocks]


def _get_blocks(cfg: Any) -> BlockSpec:
    spec = getattr(cfg, "blocks", None)
    if spec is None:
        raise AttributeError("cfg missing required attribute: blocks")
    if not isinstance(spec, BlockSpec):
        raise TypeError("cfg.blocks must be BlockSpec")
    return spec
