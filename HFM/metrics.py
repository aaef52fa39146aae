import numpy as np
from typing import List, Tuple


def compression_ratio(raw_len: int, packed_len: int) -> float:
    if packed_len == 0:
        return float("inf") if raw_len else 1.0
    return float(raw_len) / float(packed_len)


def block_entropy(freqs: List[Tuple[bytes, int]]) -> float:
    """Empirical entropy of the block distribution, in bits per block."""
    if not freqs:
        return 0.0
    f = np.array([c for _, c in freqs], dtype=np.float64)
    p = f / f.sum()
    return float(-(p * np.log2(p)).sum())


def mean_code_length(freqs: List[Tuple[bytes, int]], codes) -> float:
    """
    Average bits per block actually spent by the code table.
    codes: mapping value -> (code, len)
    """
    if not freqs:
        return 0.0
    f = np.array([c for _, c in freqs], dtype=np.float64)
    L = np.array([codes[v][1] for v, _ in freqs], dtype=np.float64)
    return float(np.average(L, weights=f))
