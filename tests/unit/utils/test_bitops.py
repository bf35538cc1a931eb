import pytest

from qrcodec.errors import MalformedSegment
from qrcodec.utils.bitops import BitReader, BitWriter, bits_to_bytes, bytes_to_bits


def test_bytes_bits_msb_first():
    assert bytes_to_bits(b"\x80\x01") == [1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1]
    data = bytes(range(256))
    assert bits_to_bytes(bytes_to_bits(data)) == data


def test_bits_to_bytes_rejects_partial_byte():
    with pytest.raises(ValueError):
        bits_to_bytes([1, 0, 1])


def test_writer_packs_fields():
    out = BitWriter()
    out.write(0b0010, 4)
    out.write(11, 9)
    out.extend([1, 1, 0])
    assert len(out) == 16
    assert out.to_bytes() == bytes([0b00100000, 0b01011110])


@pytest.mark.parametrize("value,nbits", [(4, 2), (-1, 3), (0, -1)])
def test_writer_rejects_values_that_do_not_fit(value, nbits):
    with pytest.raises(ValueError):
        BitWriter().write(value, nbits)


def test_reader_peek_read_and_underflow():
    r = BitReader(bytes_to_bits(b"\xa5"))
    assert r.peek(4) == 0xA
    assert r.read(4) == 0xA
    assert r.remaining == 4
    assert r.read(4) == 0x5
    assert r.read(0) == 0
    with pytest.raises(MalformedSegment):
        r.read(1)
