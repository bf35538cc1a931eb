import random

import pytest

from qrcodec.errors import UncorrectableSymbol
from qrcodec.pipeline.stages.byte_fec.modules.rs import rs_decode, rs_encode


def _corrupt_bytes(rng: random.Random, cw: bytes, positions) -> bytes:
    """Return a new codeword with non-zero byte errors applied at given positions."""
    out = bytearray(cw)
    for p in positions:
        out[p] ^= rng.randrange(1, 256)
    return bytes(out)


# (ec codewords, data codewords) pairs that occur in real symbols
QR_BLOCKS = [(2, 3), (5, 5), (7, 19), (10, 16), (13, 13), (17, 9), (22, 13), (26, 44), (28, 16), (30, 118)]


@pytest.mark.parametrize("nsym,msg_len", QR_BLOCKS)
def test_rs_corrects_up_to_t_errors_random_trials(nsym, msg_len):
    t = nsym // 2
    base_seed = 0xBADC0DE + nsym * 100 + msg_len
    for k in range(30):
        rng = random.Random(base_seed + k)
        msg = bytes(rng.randrange(256) for _ in range(msg_len))
        cw = msg + rs_encode(msg, nsym=nsym)

        nerr = rng.randrange(0, t + 1)
        positions = rng.sample(range(len(cw)), nerr)
        out, corrected = rs_decode(_corrupt_bytes(rng, cw, positions), nsym=nsym)
        assert out == msg, f"failed nsym={nsym} msg_len={msg_len} positions={sorted(positions)}"
        assert corrected == nerr


@pytest.mark.parametrize("nsym,msg_len", [(7, 19), (13, 13), (17, 9)])
def test_rs_never_miscorrects_t_plus_one_errors_odd_nsym(nsym, msg_len):
    t = nsym // 2
    for k in range(30):
        rng = random.Random(0x5EED + k)
        msg = bytes(rng.randrange(256) for _ in range(msg_len))
        cw = msg + rs_encode(msg, nsym=nsym)
        positions = rng.sample(range(len(cw)), t + 1)
        with pytest.raises(UncorrectableSymbol):
            rs_decode(_corrupt_bytes(rng, cw, positions), nsym=nsym)
