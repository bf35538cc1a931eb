import pytest

from qrcodec.errors import DataTooLong, UncorrectableSymbol, UnsupportedLevelForVersion, UnsupportedMode
from qrcodec.types import EcLevel, Mode, Version
from qrcodec.pipeline.config import EncodeConfig
from qrcodec.pipeline.pipeline import decode, decode_symbol, encode, encode_symbol
from qrcodec.pipeline.stages.mask.penalty import micro_score, penalty_score
from qrcodec.pipeline.stages.matrix.placement import placement_order


def test_m1_full_roundtrip(micro_m1_symbol):
    sym = micro_m1_symbol
    assert sym.version == Version(1, micro=True)
    assert sym.grid.width == 11
    out = decode_symbol(sym.grid)
    assert out.data == b"12345"
    assert out.version.name == "M1"
    assert out.level is EcLevel.L


def test_m1_is_detection_only(micro_m1_symbol):
    grid = micro_m1_symbol.grid.copy()
    r, c = placement_order(grid.version)[7]
    grid.dark[r, c] = not grid.dark[r, c]
    with pytest.raises(UncorrectableSymbol):
        decode(grid)


def test_m1_capacity():
    with pytest.raises(DataTooLong):
        encode("123456", micro=True, version=1)


@pytest.mark.parametrize("number,level,payload", [
    (1, EcLevel.L, "1"),
    (2, EcLevel.L, "0123456789"),
    (2, EcLevel.M, "AB-12"),
    (3, EcLevel.L, "micro bit"),
    (3, EcLevel.M, "42"),
    (4, EcLevel.L, "fifteen bytes!!"),
    (4, EcLevel.M, "HELLO MICRO"),
    (4, EcLevel.Q, "M4Q"),
])
def test_micro_roundtrip(number, level, payload):
    sym = encode_symbol(payload, cfg=EncodeConfig(version=number, micro=True, level=level))
    out = decode_symbol(sym.grid)
    assert out.data == payload.encode("ascii")
    assert (out.version, out.level, out.mask) == (Version(number, micro=True), level, sym.mask)


def test_micro_corrects_errors():
    # M4-Q: 14 EC codewords, t = 7
    sym = encode_symbol("FIX ME", cfg=EncodeConfig(version=4, micro=True, level="Q"))
    grid = sym.grid.copy()
    order = placement_order(grid.version)
    for k in (0, 3, 8, 15, 22):
        r, c = order[8 * k + 1]
        grid.dark[r, c] = not grid.dark[r, c]
    out = decode_symbol(grid)
    assert out.data == b"FIX ME"
    assert out.corrected_errors == 5


def test_micro_auto_version():
    assert encode("12345", micro=True).version == Version(1, micro=True)
    assert encode("HELLO", micro=True).version == Version(2, micro=True)
    assert encode("hello", micro=True).version == Version(3, micro=True)


def test_micro_level_restrictions():
    with pytest.raises(UnsupportedLevelForVersion):
        encode("1", micro=True, version=1, level="M")
    with pytest.raises(UnsupportedLevelForVersion):
        encode("1", micro=True, version=3, level="Q")
    with pytest.raises(UnsupportedLevelForVersion):
        encode("1", micro=True, level="H")


def test_micro_mode_restrictions():
    with pytest.raises(UnsupportedMode):
        encode("ABC", micro=True, version=1)
    with pytest.raises(UnsupportedMode):
        encode("点", micro=True, version=2, mode=Mode.KANJI)
    with pytest.raises(UnsupportedMode):
        encode("abc", micro=True, encoding="utf-8")


def test_micro_mask_choice_maximises_score():
    scores = []
    for mask in range(4):
        grid = encode("MICRO", micro=True, version=3, mask=mask)
        scores.append(micro_score(grid.dark))
    expected = max(range(4), key=lambda m: (scores[m], -m))
    assert encode_symbol("MICRO", cfg=EncodeConfig(micro=True, version=3)).mask == expected


def test_standard_mask_choice_minimises_penalty():
    scores = []
    for mask in range(8):
        grid = encode("PENALTY", version=2, level="M", mask=mask)
        scores.append(penalty_score(grid.dark))
    expected = min(range(8), key=lambda m: (scores[m], m))
    assert encode_symbol("PENALTY", cfg=EncodeConfig(version=2, level="M")).mask == expected
