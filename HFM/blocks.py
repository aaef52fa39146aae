import operator
import numpy as np
from typing import List, Tuple


def check_block_size(block_size) -> int:
    """Normalize block_size to a plain int (numpy integers included)."""
    if isinstance(block_size, bool):
        raise ValueError(f"block size must be a positive integer, got {block_size!r}")
    try:
        n = operator.index(block_size)
    except TypeError:
        raise ValueError(f"block size must be a positive integer, got {block_size!r}") from None
    if n < 1:
        raise ValueError(f"block size must be a positive integer, got {block_size!r}")
    return n


def pad_to_block(data: bytes, N: int) -> Tuple[np.ndarray, int]:
    """
    Zero-pad a byte buffer so its length is a multiple of N.
    Returns (uint8 array, number of pad bytes).
    """
    N = check_block_size(N)
    x = np.frombuffer(bytes(data), dtype=np.uint8)
    pad = (N - (x.size % N)) % N
    if pad == 0:
        return x, 0
    return np.pad(x, (0, pad), mode="constant", constant_values=0), pad


def split_blocks(data: bytes, N: int) -> np.ndarray:
    """Padded input viewed as (num_blocks, N) uint8."""
    N = check_block_size(N)
    x, _ = pad_to_block(data, N)
    return x.reshape(-1, N)


def block_frequencies(blocks: np.ndarray) -> List[Tuple[bytes, int]]:
    """
    Count every distinct block value.
    Output is ordered by first appearance in the input, i.e. the order a
    front-to-back scan would discover them.
    """
    if blocks.shape[0] == 0:
        return []
    uniq, first, counts = np.unique(blocks, axis=0, return_index=True, return_counts=True)
    order = np.argsort(first, kind="stable")
    return [(uniq[k].tobytes(), int(counts[k])) for k in order]


def block_key(value: bytes) -> bytes:
    # blocks compare from the last byte down to the first
    return value[::-1]
