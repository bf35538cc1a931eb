import pytest

from qrcodec import tables
from qrcodec.errors import UncorrectableSymbol
from qrcodec.types import EcLevel, Version
from qrcodec.pipeline.stages.byte_fec import stage as byte_fec_stage


def _cfg(version: Version, level: EcLevel, **kw) -> byte_fec_stage.Config:
    return byte_fec_stage.Config(blocks=tables.ec_blocks(version, level), **kw)


def test_split_data_follows_group_sizes():
    cfg = _cfg(Version(5), EcLevel.Q)
    data = bytes(range(62))
    parts = byte_fec_stage.split_data(data, cfg=cfg)
    assert [len(p) for p in parts] == [15, 15, 16, 16]
    assert b"".join(parts) == data


def test_tx_appends_ec_to_every_block():
    cfg = _cfg(Version(5), EcLevel.Q)
    blocks = byte_fec_stage.tx(bytes(62), cfg=cfg)
    assert [len(b) for b in blocks] == [33, 33, 34, 34]


def test_stage_roundtrip_with_errors_in_each_block():
    cfg = _cfg(Version(5), EcLevel.Q)
    data = bytes((i * 7) & 0xFF for i in range(62))
    blocks = [bytearray(b) for b in byte_fec_stage.tx(data, cfg=cfg)]
    for i, block in enumerate(blocks):
        for p in range(i + 1):
            block[p * 3] ^= 0x5A
    out, corrected = byte_fec_stage.rx([bytes(b) for b in blocks], cfg=cfg)
    assert out == data
    assert corrected == 1 + 2 + 3 + 4


def test_stage_reports_failing_block():
    cfg = _cfg(Version(1), EcLevel.L)
    blocks = [bytearray(b) for b in byte_fec_stage.tx(bytes(19), cfg=cfg)]
    for p in range(4):
        blocks[0][p] ^= 0xFF
    with pytest.raises(UncorrectableSymbol, match="block 0"):
        byte_fec_stage.rx([bytes(b) for b in blocks], cfg=cfg)


def test_split_data_rejects_wrong_length():
    cfg = _cfg(Version(1), EcLevel.M)
    with pytest.raises(ValueError):
        byte_fec_stage.split_data(bytes(15), cfg=cfg)


def test_stage_requires_block_spec():
    with pytest.raises(TypeError):
        byte_fec_stage.tx(bytes(19), cfg=byte_fec_stage.Config(blocks="1-L"))


def test_stage_max_errors_limits_every_block():
    blocks_spec = tables.ec_blocks(Version(1, micro=True), EcLevel.L)
    cfg = byte_fec_stage.Config(blocks=blocks_spec, max_errors=0)
    blocks = [bytearray(b) for b in byte_fec_stage.tx(bytes([0x12, 0x34, 0x50]), cfg=cfg)]
    assert byte_fec_stage.rx([bytes(b) for b in blocks], cfg=cfg) == (bytes([0x12, 0x34, 0x50]), 0)
    blocks[0][1] ^= 0x01
    with pytest.raises(UncorrectableSymbol, match="block 0"):
        byte_fec_stage.rx([bytes(b) for b in blocks], cfg=cfg)
