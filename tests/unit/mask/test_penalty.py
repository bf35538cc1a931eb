import numpy as np

from qrcodec.pipeline.stages.mask.penalty import _finder_like_penalty, _run_penalty, micro_score, penalty_score


def test_all_light_symbol_penalty():
    m = np.zeros((21, 21), dtype=bool)
    # N1: 42 lines of 21 -> 19 each; N2: 400 blocks; N4: 50% off -> 10 steps
    assert penalty_score(m) == 42 * 19 + 400 * 3 + 100


def test_checkerboard_scores_zero():
    i, j = np.indices((21, 21))
    m = (i + j) % 2 == 0
    # 221 dark of 441: |4420 - 4410| // 441 == 0
    assert penalty_score(m) == 0


def test_run_penalty_counts_run_minus_two():
    m = np.indices((21, 21)).sum(axis=0) % 2 == 0
    base = penalty_score(m)
    # a light run of 6 in row 0 breaks the checkerboard
    m2 = m.copy()
    m2[0, 1:7] = False
    assert penalty_score(m2) > base


def test_finder_like_pattern_scores_40():
    row = np.array([0, 0, 0, 0, 1, 0, 1, 1, 1, 0, 1, 0, 0, 0, 0], dtype=bool)
    assert _finder_like_penalty(row) == 40
    # symbol edge counts as light
    assert _finder_like_penalty(row[4:11]) == 40
    assert _finder_like_penalty(np.array([1, 1, 0, 1, 1, 1, 0, 1, 1, 1, 1, 1], dtype=bool)) == 0


def test_micro_score_prefers_dark_edges():
    m = np.zeros((11, 11), dtype=bool)
    assert micro_score(m) == 0
    m[1:, -1] = True
    # sum1 = 10, sum2 = 1 (the shared corner)
    assert micro_score(m) == 1 * 16 + 10
    m[-1, 1:] = True
    assert micro_score(m) == 10 * 16 + 10


def test_run_penalty_per_line():
    assert _run_penalty(np.array([1, 1, 1, 1, 1, 0], dtype=bool)) == 3
    assert _run_penalty(np.array([0] * 7 + [1, 1, 1, 1], dtype=bool)) == 5
    assert _run_penalty(np.array([1, 1, 1, 1, 0, 0, 0, 0], dtype=bool)) == 0
