import pytest

from qrcodec.pipeline.stages.info import bch


def test_known_format_words():
    # (level bits << 3 | mask): M/0, L/0, H/7
    assert bch.format_word(0b00000) == 0x5412
    assert bch.format_word(0b01000) == 0x77C4
    assert bch.format_word(0b10111) == 0x083B


def test_known_micro_format_word():
    assert bch.format_word(0, micro=True) == 0x4445


def test_known_version_words():
    assert bch.version_word(7) == 0x07C94
    assert bch.version_word(40) == 0x28C69
    with pytest.raises(ValueError):
        bch.version_word(6)


def test_format_codes_are_distinct_and_far_apart():
    codes = bch.FORMAT_CODES
    assert len(set(codes)) == 32
    assert min(bch.hamming_distance(a, b) for a in codes for b in codes if a != b) >= 7


@pytest.mark.parametrize("data", [0, 5, 13, 31])
def test_format_decode_corrects_three_bits(data):
    word = bch.format_word(data)
    assert bch.decode_format_word(word) == (data, 0)
    assert bch.decode_format_word(word ^ 0b100000010000001) == (data, 3)


def test_version_decode_corrects_three_bits():
    word = bch.version_word(23)
    assert bch.decode_version_word(word ^ 0b100000000100000001) == (23, 3)


def test_some_words_are_beyond_format_radius():
    far = [w for w in range(1 << 15) if bch.decode_format_word(w)[1] > bch.FORMAT_CORRECTION_RADIUS]
    assert far
