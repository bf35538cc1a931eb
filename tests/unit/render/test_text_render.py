import pytest

from qrcodec.render.text import default_quiet_zone, render_dense


def test_default_quiet_zone(hello_world_symbol, micro_m1_symbol):
    assert default_quiet_zone(hello_world_symbol.grid) == 4
    assert default_quiet_zone(micro_m1_symbol.grid) == 2


def test_dense_rows_without_quiet_zone(micro_m1_symbol):
    lines = render_dense(micro_m1_symbol.grid, quiet_zone=0).splitlines()
    # 11 module rows pad to 12, two per line
    assert len(lines) == 6
    assert all(len(line) == 11 for line in lines)
    assert lines[0][0] == "█"
    # the padded half of the last line is light
    assert set(lines[-1]) <= {" ", "▀"}


def test_dense_characters_follow_module_pairs(hello_world_symbol):
    dark = hello_world_symbol.grid.dark
    lines = render_dense(hello_world_symbol.grid, quiet_zone=0).splitlines()
    chars = {(False, False): " ", (True, False): "▀", (False, True): "▄", (True, True): "█"}
    for r in range(0, 20, 2):
        expected = "".join(chars[(bool(dark[r, c]), bool(dark[r + 1, c]))] for c in range(21))
        assert lines[r // 2] == expected


def test_quiet_zone_and_inversion(hello_world_symbol):
    plain = render_dense(hello_world_symbol.grid).splitlines()
    inverted = render_dense(hello_world_symbol.grid, invert=True).splitlines()
    assert len(plain) == len(inverted) == 15
    assert plain[0] == " " * 29
    assert inverted[0] == "█" * 29


def test_negative_quiet_zone(hello_world_symbol):
    with pytest.raises(ValueError):
        render_dense(hello_world_symbol.grid, quiet_zone=-1)
