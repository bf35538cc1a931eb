from __future__ import annotations

import numpy as np

# N3 finder-like pattern, dark-light-dark-dark-dark-light-dark
_FINDER_LIKE = bytes([1, 0, 1, 1, 1, 0, 1])

N1, N2, N3, N4 = 3, 3, 40, 10


def _run_penalty(line: np.ndarray) -> int:
    change = np.flatnonzero(line[1:] != line[:-1])
    bounds = np.concatenate(([-1], change, [line.size - 1]))
    runs = np.diff(bounds)
    long_runs = runs[runs >= 5]
    return int((long_runs - 5 + N1).sum())


def _finder_like_penalty(line: np.ndarray) -> int:
    seq = line.astype(np.uint8).tobytes()
    count = 0
    idx = seq.find(_FINDER_LIKE)
    while idx != -1:
        # modules beyond the symbol edge count as light
        before = seq[max(idx - 4, 0):idx]
        after = seq[idx + 7:idx + 11]
        if not any(before) or not any(after):
            count += 1
        idx = seq.find(_FINDER_LIKE, idx + 1)
    return N3 * count


def penalty_score(dark: np.ndarray) -> int:
    """
    Sum of the four standard mask penalties for a complete symbol.

    N1: runs of >= 5 same-colour modules in a row/column score run - 2
    N2: every 2x2 block of one colour scores 3
    N3: 1:1:3:1:1 finder-like pattern with 4 light modules on a side scores 40
    N4: 10 per full 5% step the dark proportion deviates from 50%
    """
    m = np.asarray(dark, dtype=bool)
    score = 0
    for k in range(m.shape[0]):
        score += _run_penalty(m[k, :]) + _run_penalty(m[:, k])

    tl = m[:-1, :-1]
    same = (tl == m[1:, :-1]) & (tl == m[:-1, 1:]) & (tl == m[1:, 1:])
    score += N2 * int(np.count_nonzero(same))

    for k in range(m.shape[0]):
        score += _finder_like_penalty(m[k, :]) + _finder_like_penalty(m[:, k])

    total = m.size
    darks = int(np.count_nonzero(m))
    score += N4 * (abs(20 * darks - 10 * total) // total)
    return score


def micro_score(dark: np.ndarray) -> int:
    """
    Micro QR mask score (higher is better): dark modules along the right
    column (SUM1) and bottom row (SUM2), excluding the timing modules.
    """
    m = np.asarray(dark, dtype=bool)
    sum1 = int(np.count_nonzero(m[1:, -1]))
    sum2 = int(np.count_nonzero(m[-1, 1:]))
    if sum1 <= sum2:
        return sum1 * 16 + sum2
    return sum2 * 16 + sum1
