import numpy as np
import pytest

from qrcodec.types import Version
from qrcodec.pipeline.stages.matrix.grid import Role
from qrcodec.pipeline.stages.matrix.patterns import function_grid
from qrcodec.pipeline.stages.mask.patterns import MASK_FUNCTIONS, apply_mask, mask_count, mask_function, mask_matrix


def test_mask_functions_at_origin_all_flip():
    for fn in MASK_FUNCTIONS:
        assert fn(0, 0)


def test_mask_function_samples():
    assert not MASK_FUNCTIONS[0](0, 1)
    assert MASK_FUNCTIONS[1](2, 5)
    assert not MASK_FUNCTIONS[2](4, 4)
    assert MASK_FUNCTIONS[3](1, 2)
    assert MASK_FUNCTIONS[4](1, 2)
    assert not MASK_FUNCTIONS[4](2, 0)
    assert MASK_FUNCTIONS[5](3, 0)
    assert not MASK_FUNCTIONS[5](1, 1)
    assert MASK_FUNCTIONS[6](1, 1)
    assert not MASK_FUNCTIONS[6](1, 3)
    assert not MASK_FUNCTIONS[7](0, 1)


def test_micro_masks_map_to_standard_functions():
    for micro_index, std_index in enumerate((1, 4, 6, 7)):
        assert mask_function(micro_index, micro=True) is MASK_FUNCTIONS[std_index]
    with pytest.raises(ValueError):
        mask_function(4, micro=True)
    with pytest.raises(ValueError):
        mask_function(8)


def test_mask_counts():
    assert mask_count(Version(3)) == 8
    assert mask_count(Version(3, micro=True)) == 4


@pytest.mark.parametrize("version", [Version(1), Version(7), Version(4, micro=True)], ids=str)
def test_mask_only_touches_data_modules_and_is_self_inverse(version):
    g = function_grid(version)
    before = g.dark.copy()
    for index in range(mask_count(version)):
        apply_mask(g, index)
        changed = g.dark != before
        assert (g.role[changed] == Role.DATA).all()
        apply_mask(g, index)
        assert np.array_equal(g.dark, before)


def test_mask_matrix_matches_predicate():
    version = Version(2)
    m = mask_matrix(version, 3)
    g = function_grid(version)
    for r in range(version.width):
        for c in range(version.width):
            expected = g.role[r, c] == Role.DATA and (r + c) % 3 == 0
            assert m[r, c] == expected
