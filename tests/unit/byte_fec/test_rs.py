import random

import pytest

from qrcodec.errors import UncorrectableSymbol
from qrcodec.gf256 import GF256, GaloisField
from qrcodec.pipeline.stages.byte_fec.modules.rs import (
    Config,
    _cached_generator_poly,
    _rs_generator_poly,
    rs_decode,
    rs_encode,
    rx,
    tx,
)


def _corrupt_bytes(buf: bytearray, positions: list[int], rng: random.Random) -> None:
    for p in positions:
        # ensure change
        old = buf[p]
        new = rng.randrange(256)
        while new == old:
            new = rng.randrange(256)
        buf[p] = new


def test_rs_encode_hello_world_1m():
    data = bytes([32, 91, 11, 120, 209, 114, 220, 77, 67, 64, 236, 17, 236, 17, 236, 17])
    assert rs_encode(data, nsym=10) == bytes([196, 35, 39, 119, 235, 215, 231, 226, 93, 23])


def test_rs_roundtrip_no_errors_reports_zero_corrections():
    cfg = Config(nsym=18)
    payload = bytes(range(40))
    enc = tx(payload, cfg=cfg)
    assert len(enc) == 58
    out, nerr = rs_decode(enc, nsym=18)
    assert out == payload
    assert nerr == 0
    assert rx(enc, cfg=cfg) == (payload, 0)


def test_rs_corrects_up_to_t_errors_in_one_block():
    rng = random.Random(1234)
    nsym = 21
    t = nsym // 2
    payload = bytes(rng.randrange(256) for _ in range(100))
    enc = bytearray(payload + rs_encode(payload, nsym=nsym))

    positions = rng.sample(range(len(enc)), t)
    _corrupt_bytes(enc, positions, rng)

    out, nerr = rs_decode(bytes(enc), nsym=nsym)
    assert out == payload
    assert nerr == t


def test_rs_fails_when_exceeding_t_errors_in_one_block():
    # odd nsym: t+1 errors can never land within t of another codeword
    rng = random.Random(2025)
    nsym = 21
    t = nsym // 2
    payload = bytes(rng.randrange(256) for _ in range(100))
    enc = bytearray(payload + rs_encode(payload, nsym=nsym))

    positions = rng.sample(range(len(enc)), t + 1)
    _corrupt_bytes(enc, positions, rng)

    with pytest.raises(UncorrectableSymbol):
        rs_decode(bytes(enc), nsym=nsym)


def test_rs_errors_in_parity_are_corrected():
    payload = b"parity only"
    enc = bytearray(payload + rs_encode(payload, nsym=8))
    enc[-1] ^= 0xFF
    enc[-5] ^= 0x01
    out, nerr = rs_decode(bytes(enc), nsym=8)
    assert out == payload
    assert nerr == 2


def test_rs_detection_only_rejects_any_error():
    payload = bytes([1, 2, 3])
    enc = bytearray(payload + rs_encode(payload, nsym=2))
    assert rs_decode(bytes(enc), nsym=2, max_errors=0) == (payload, 0)
    enc[0] ^= 0x10
    with pytest.raises(UncorrectableSymbol):
        rs_decode(bytes(enc), nsym=2, max_errors=0)


def test_rs_respects_reduced_error_limit():
    payload = bytes(range(20))
    enc = bytearray(payload + rs_encode(payload, nsym=10))
    enc[3] ^= 1
    enc[7] ^= 2
    enc[11] ^= 4
    with pytest.raises(UncorrectableSymbol):
        rs_decode(bytes(enc), nsym=10, max_errors=2)
    assert rs_decode(bytes(enc), nsym=10, max_errors=3) == (payload, 3)


@pytest.mark.parametrize("nsym", [0, -1])
def test_rs_rejects_bad_nsym(nsym):
    with pytest.raises(ValueError):
        rs_encode(b"abc", nsym=nsym)


def test_rs_rejects_overlong_block():
    with pytest.raises(ValueError):
        rs_encode(bytes(250), nsym=10)
    with pytest.raises(ValueError):
        rs_decode(bytes(256), nsym=10)


def test_rs_tx_requires_bytes():
    with pytest.raises(TypeError):
        tx("text", cfg=Config(nsym=4))


def test_rs_rx_reports_corrections_and_honours_max_errors():
    payload = b"block payload"
    enc = bytearray(tx(payload, cfg=Config(nsym=10)))
    enc[0] ^= 0x5A
    enc[7] ^= 0x01
    assert rx(bytes(enc), cfg=Config(nsym=10)) == (payload, 2)
    assert rx(bytes(enc), cfg=Config(nsym=10, max_errors=2)) == (payload, 2)
    with pytest.raises(UncorrectableSymbol):
        rx(bytes(enc), cfg=Config(nsym=10, max_errors=1))
    with pytest.raises(UncorrectableSymbol):
        rx(bytes(enc), cfg=Config(nsym=10, max_errors=0))


def test_generator_poly_cached_per_nsym_for_shared_field():
    _cached_generator_poly.cache_clear()
    first = _rs_generator_poly(10)
    assert _rs_generator_poly(10) is first
    assert _cached_generator_poly.cache_info().hits == 1

    # a separately built field gives the same generator without using the cache
    other = GaloisField.build()
    assert other is not GF256
    assert _rs_generator_poly(10, other) == first
    assert _cached_generator_poly.cache_info().currsize == 1
