import random

import pytest

from blocks import split_blocks, block_frequencies
from huffman import Node, build_tree, build_codebook, count_nodes, CodeTable, InternalConsistencyError


def _codes(data, block_size=1):
    freqs = block_frequencies(split_blocks(data, block_size))
    root = build_tree(freqs)
    table, body_bits = CodeTable.from_tree(root)
    return freqs, root, table, body_bits


def _as_bits(code):
    c, L = code
    return format(c, "b").zfill(L) if L else ""


def _check_internal_sums(node):
    if node.is_leaf():
        assert node.value is not None
        return
    assert node.value is None
    assert node.left is not None and node.right is not None
    assert node.freq == node.left.freq + node.right.freq
    _check_internal_sums(node.left)
    _check_internal_sums(node.right)


def test_aaabbc_codes():
    freqs, root, table, body_bits = _codes(b"AAABBC")
    assert freqs == [(b"A", 3), (b"B", 2), (b"C", 1)]
    codes = {v: _as_bits(c) for v, c in table.entries}
    # C and B merge first (C removed first -> left), then A ties with the merged node
    assert codes == {b"A": "0", b"C": "10", b"B": "11"}
    assert len(codes[b"A"]) <= len(codes[b"B"]) <= len(codes[b"C"])
    assert body_bits == 3 * 1 + 2 * 2 + 1 * 2
    assert root.freq == 6


def test_empty_tree():
    root = build_tree([])
    assert root.is_empty()
    assert root.freq == 0
    entries, bits = build_codebook(root)
    assert entries == [] and bits == 0
    assert count_nodes(root) == 0


def test_single_leaf_has_empty_code():
    freqs, root, table, body_bits = _codes(b"zzzz")
    assert root.is_leaf() and root.value == b"z"
    assert table.lookup(b"z") == (0, 0)
    assert body_bits == 0


def test_internal_sum_invariant():
    rng = random.Random(7)
    data = bytes(rng.choice(b"abcdefghij") for _ in range(500))
    _, root, _, _ = _codes(data)
    _check_internal_sums(root)
    assert root.freq == 500


def test_prefix_free():
    rng = random.Random(1)
    data = bytes(rng.getrandbits(8) for _ in range(2000))
    _, _, table, _ = _codes(data)
    bits = [_as_bits(c) for _, c in table.entries]
    for i, a in enumerate(bits):
        for j, b in enumerate(bits):
            if i != j:
                assert not b.startswith(a)


def test_table_is_sorted_and_searchable():
    data = bytes(range(256)) * 2 + b"\x00" * 10
    _, _, table, _ = _codes(data, block_size=2)
    keys = [v[::-1] for v, _ in table.entries]
    assert keys == sorted(keys)
    for v, c in table.entries:
        assert table.lookup(v) == c


def test_lookup_miss_is_internal_error():
    _, _, table, _ = _codes(b"abc")
    with pytest.raises(InternalConsistencyError):
        table.lookup(b"q")
    # not a recoverable input error
    assert not issubclass(InternalConsistencyError, ValueError)


def test_more_frequent_never_longer():
    data = b"a" * 50 + b"b" * 20 + b"c" * 10 + b"d" * 5 + b"e" * 2 + b"f"
    freqs, _, table, _ = _codes(data)
    codes = table.as_dict()
    for v1, f1 in freqs:
        for v2, f2 in freqs:
            if f1 > f2:
                assert codes[v1][1] <= codes[v2][1]


def test_manual_tree_codebook():
    root = Node(freq=3, left=Node(freq=1, value=b"x"),
                right=Node(freq=2, left=Node(freq=1, value=b"y"), right=Node(freq=1, value=b"z")))
    entries, bits = build_codebook(root)
    assert entries == [(b"x", (0, 1)), (b"y", (0b10, 2)), (b"z", (0b11, 2))]
    assert bits == 1 + 2 + 2
    assert count_nodes(root) == 5
